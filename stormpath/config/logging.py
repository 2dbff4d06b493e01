"""
Logging setup for applications and tools built on the SDK.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .settings import LogLevel

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: Union[LogLevel, str] = LogLevel.INFO,
    log_file: Optional[str] = None,
) -> None:
    """Configure root logging to stdout and, optionally, a file.

    Args:
        level: Log level (enum or level name)
        log_file: Optional log file path; skipped if it can't be created
    """
    if isinstance(level, LogLevel):
        level = level.value

    log_handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            log_handlers.append(logging.FileHandler(str(log_path)))
        except OSError:
            # File logging not available, use stdout only
            pass

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=log_handlers,
        force=True,
    )
