"""
Shared fixtures for the Stormpath SDK tests.
"""

import pytest

from stormpath.api_keys import ApiKeyBuilder, ApiKeySettings
from stormpath.config import system_properties


@pytest.fixture(autouse=True)
def clean_system_properties():
    system_properties.clear()
    yield
    system_properties.clear()


@pytest.fixture
def missing_default_file(tmp_path):
    return str(tmp_path / "home" / ".stormpath" / "apiKey.properties")


@pytest.fixture
def isolated_builder(missing_default_file):
    """Builder factory that ignores the real environment, system properties and home dir."""

    def make(environ=None, system=None, default_file=None, **settings):
        return ApiKeyBuilder(ApiKeySettings(
            environ=environ or {},
            system_properties=system or {},
            default_file_location=default_file or missing_default_file,
            **settings,
        ))

    return make
