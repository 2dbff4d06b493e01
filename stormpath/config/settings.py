"""
Configuration settings for the Stormpath SDK.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

DEFAULT_API_KEY_ID_PROPERTY_NAME = "apiKey.id"
DEFAULT_API_KEY_SECRET_PROPERTY_NAME = "apiKey.secret"
DEFAULT_LOGIN_URL = "/login"
DEFAULT_UNAUTHENTICATED_STATUS = "unauthenticated"


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ApiKeyConfig:
    """Where and how to read the API key."""
    file_location: Optional[str] = None
    id_property_name: str = DEFAULT_API_KEY_ID_PROPERTY_NAME
    secret_property_name: str = DEFAULT_API_KEY_SECRET_PROPERTY_NAME


@dataclass
class WebConfig:
    """Access control settings for web applications."""
    login_url: str = DEFAULT_LOGIN_URL
    unauthenticated_status: str = DEFAULT_UNAUTHENTICATED_STATUS


@dataclass
class SdkConfig:
    """Top-level SDK configuration."""
    api_key: ApiKeyConfig = field(default_factory=ApiKeyConfig)
    web: WebConfig = field(default_factory=WebConfig)
    log_level: LogLevel = LogLevel.INFO
