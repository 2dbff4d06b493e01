"""
Command line entry point: resolve the API key and print its id and masked secret.

Usage::

    python -m stormpath [--file LOCATION] [--id-property NAME]
                        [--secret-property NAME] [--env-file PATH]
                        [--log-level LEVEL] [-D name=value ...]
"""

import argparse
import logging
import sys
from typing import List, Optional

from .api_keys import ApiKeyBuilder
from .config import EnvironmentLoader, LogLevel, setup_logging, system_properties
from .exceptions import StormpathError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stormpath",
        description="Resolve the Stormpath API key from the configured locations.",
    )
    parser.add_argument("--file", dest="file_location",
                        help="API key file location (classpath:, url:, file: or a path)")
    parser.add_argument("--id-property", help="Property name holding the API key id")
    parser.add_argument("--secret-property", help="Property name holding the API key secret")
    parser.add_argument("--env-file", help=".env file to load before reading the environment")
    parser.add_argument("--log-level", choices=[level.value for level in LogLevel],
                        help="Log level (overrides STORMPATH_LOG_LEVEL)")
    parser.add_argument("-D", dest="properties", action="append", default=[],
                        metavar="NAME=VALUE", help="Set a system property")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = EnvironmentLoader.load_validated_config(args.env_file)
    except StormpathError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.log_level or config.log_level)

    for prop in args.properties:
        name, sep, value = prop.partition("=")
        if not sep:
            print(f"Error: system property must be NAME=VALUE: {prop}", file=sys.stderr)
            return 2
        system_properties.set_property(name, value)

    builder = ApiKeyBuilder.from_config(config)
    if args.file_location:
        builder.set_file_location(args.file_location)
    if args.id_property:
        builder.set_id_property_name(args.id_property)
    if args.secret_property:
        builder.set_secret_property_name(args.secret_property)

    try:
        api_key = builder.build()
    except StormpathError as e:
        logger.debug("API key resolution failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"API key id:     {api_key.id}")
    print(f"API key secret: {api_key.masked_secret}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
