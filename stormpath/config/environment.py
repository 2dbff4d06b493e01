"""
Environment variable handling for Stormpath SDK configuration.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from ..exceptions import ValidationError
from .settings import (
    ApiKeyConfig, WebConfig, SdkConfig, LogLevel,
    DEFAULT_API_KEY_ID_PROPERTY_NAME, DEFAULT_API_KEY_SECRET_PROPERTY_NAME,
    DEFAULT_LOGIN_URL, DEFAULT_UNAUTHENTICATED_STATUS,
)
from .validation import ConfigValidator

logger = logging.getLogger(__name__)


class EnvironmentLoader:
    """Loads configuration from environment variables."""

    @staticmethod
    def load_config(dotenv_path: Optional[str] = None) -> SdkConfig:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Explicit .env file; the current directory's .env is used if omitted
        """
        # Values in .env win over the shell environment
        load_dotenv(dotenv_path=dotenv_path, override=True)

        api_key_config = ApiKeyConfig(
            file_location=os.getenv('STORMPATH_API_KEY_FILE') or None,
            id_property_name=os.getenv(
                'STORMPATH_API_KEY_ID_PROPERTY_NAME', DEFAULT_API_KEY_ID_PROPERTY_NAME
            ),
            secret_property_name=os.getenv(
                'STORMPATH_API_KEY_SECRET_PROPERTY_NAME', DEFAULT_API_KEY_SECRET_PROPERTY_NAME
            ),
        )

        web_config = WebConfig(
            login_url=os.getenv('STORMPATH_WEB_LOGIN_URL', DEFAULT_LOGIN_URL),
            unauthenticated_status=os.getenv(
                'STORMPATH_WEB_UNAUTHENTICATED_STATUS', DEFAULT_UNAUTHENTICATED_STATUS
            ),
        )

        log_level_str = os.getenv('STORMPATH_LOG_LEVEL', 'INFO').upper()
        log_level = LogLevel.INFO  # default
        try:
            log_level = LogLevel(log_level_str)
        except ValueError:
            logger.warning(f"Unknown STORMPATH_LOG_LEVEL '{log_level_str}', using INFO")

        return SdkConfig(
            api_key=api_key_config,
            web=web_config,
            log_level=log_level,
        )

    @staticmethod
    def load_validated_config(dotenv_path: Optional[str] = None) -> SdkConfig:
        """Load configuration and raise ValidationError if it is invalid."""
        config = EnvironmentLoader.load_config(dotenv_path)
        errors = ConfigValidator.validate_config(config)
        if errors:
            raise ValidationError(
                f"Invalid configuration: {'; '.join(errors)}", errors
            )
        return config
