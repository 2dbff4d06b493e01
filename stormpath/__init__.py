"""
Stormpath SDK.

Client-side building blocks for the Stormpath identity service: API key
resolution, access control middleware for web applications, and resource
contracts for accounts and multi-factor authentication.
"""

from .api_keys import ApiKey, ApiKeyBuilder
from .exceptions import (
    StormpathError,
    ConfigurationError,
    ResourceLoadError,
    ResourceNotFoundError,
    MissingCredentialError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    "ApiKey",
    "ApiKeyBuilder",
    "StormpathError",
    "ConfigurationError",
    "ResourceLoadError",
    "ResourceNotFoundError",
    "MissingCredentialError",
    "ValidationError",
]
