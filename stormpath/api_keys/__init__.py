"""
API key resolution.

Builds an API key id/secret pair from explicit configuration, property files,
environment variables and system properties.
"""

from .models import ApiKey, ApiKeySettings
from .builder import (
    ApiKeyBuilder,
    resolve_api_key,
    write_api_key_file,
    DEFAULT_API_KEY_PROPERTIES_FILE_LOCATION,
    API_KEY_ID_ENV_VAR,
    API_KEY_SECRET_ENV_VAR,
    API_KEY_ID_SYSTEM_PROPERTY,
    API_KEY_SECRET_SYSTEM_PROPERTY,
)
from .properties import load_properties, dump_properties, dumps_properties
from .resources import (
    ResourceLoader,
    FileResourceLoader,
    ClasspathResourceLoader,
    UrlResourceLoader,
    get_input_stream_for_path,
)

__all__ = [
    "ApiKey",
    "ApiKeySettings",
    "ApiKeyBuilder",
    "resolve_api_key",
    "write_api_key_file",
    "DEFAULT_API_KEY_PROPERTIES_FILE_LOCATION",
    "API_KEY_ID_ENV_VAR",
    "API_KEY_SECRET_ENV_VAR",
    "API_KEY_ID_SYSTEM_PROPERTY",
    "API_KEY_SECRET_SYSTEM_PROPERTY",
    "load_properties",
    "dump_properties",
    "dumps_properties",
    "ResourceLoader",
    "FileResourceLoader",
    "ClasspathResourceLoader",
    "UrlResourceLoader",
    "get_input_stream_for_path",
]
