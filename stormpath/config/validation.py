"""
Configuration validation for the Stormpath SDK.
"""

import re
from typing import List

from .settings import SdkConfig, ApiKeyConfig, WebConfig


class ConfigValidator:
    """Validates configuration settings."""

    @staticmethod
    def validate_config(config: SdkConfig) -> List[str]:
        """Validate the entire SDK configuration."""
        errors = []

        errors.extend(ConfigValidator._validate_api_key_config(config.api_key))
        errors.extend(ConfigValidator._validate_web_config(config.web))

        return errors

    @staticmethod
    def _validate_api_key_config(api_key_config: ApiKeyConfig) -> List[str]:
        """Validate API key property names."""
        errors = []

        id_name = api_key_config.id_property_name
        secret_name = api_key_config.secret_property_name

        if not id_name or not id_name.strip():
            errors.append("API key id property name cannot be blank")
        if not secret_name or not secret_name.strip():
            errors.append("API key secret property name cannot be blank")
        if id_name and id_name == secret_name:
            errors.append(
                f"API key id and secret property names must differ (both are '{id_name}')"
            )

        if api_key_config.file_location is not None and not api_key_config.file_location.strip():
            errors.append("API key file location cannot be blank")

        return errors

    @staticmethod
    def _validate_web_config(web_config: WebConfig) -> List[str]:
        """Validate access control settings."""
        errors = []

        login_url = web_config.login_url
        if not login_url:
            errors.append("Login URL cannot be empty")
        elif not ConfigValidator._is_valid_login_url(login_url):
            errors.append(f"Login URL must be a path or http(s) URL: {login_url}")

        status = web_config.unauthenticated_status
        if not status or not status.strip():
            errors.append("Unauthenticated status cannot be blank")
        elif not re.match(r'^[A-Za-z0-9._~-]+$', status):
            errors.append(f"Unauthenticated status contains invalid characters: {status}")

        return errors

    @staticmethod
    def _is_valid_login_url(url: str) -> bool:
        """Check if a login URL is an absolute path or an http(s) URL."""
        if url.startswith('/'):
            return True

        url_pattern = r'^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$'
        return bool(re.match(url_pattern, url))
