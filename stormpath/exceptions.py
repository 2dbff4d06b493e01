"""
Exception hierarchy for the Stormpath SDK.
"""

from typing import List, Optional, Sequence


class StormpathError(Exception):
    """Base exception for all SDK errors."""
    pass


class ConfigurationError(StormpathError):
    """Raised when the SDK is misconfigured or a configured source can't be read."""
    pass


class ResourceLoadError(StormpathError, OSError):
    """Raised when a resource path can't be read."""

    def __init__(self, message: str, resource_path: Optional[str] = None):
        super().__init__(message)
        self.resource_path = resource_path


class ResourceNotFoundError(ResourceLoadError):
    """Raised when a resource path produced no readable stream."""

    def __init__(self, resource_path: str):
        super().__init__(f"Resource [{resource_path}] could not be found.", resource_path)


class MissingCredentialError(ConfigurationError):
    """Raised when an API key id or secret could not be found in any location."""

    def __init__(self, field: str, locations: Sequence[str]):
        self.field = field
        self.locations: List[str] = list(locations)
        checked = ", ".join(f"{i}) {loc}" for i, loc in enumerate(self.locations, start=1))
        super().__init__(
            f"Unable to find an API Key '{field}' in any of the checked locations: {checked}. "
            f"Please configure an API Key {field} explicitly or ensure that it exists "
            f"in one of these locations."
        )


class ValidationError(ConfigurationError):
    """Exception raised for configuration validation errors."""

    def __init__(self, message: str, errors: List[str]):
        super().__init__(message)
        self.errors = errors
