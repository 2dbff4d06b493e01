"""
API key builder.

Resolves an API key id and secret from several locations. Sources are consulted
from lowest to highest precedence; a later source only replaces a value when it
actually has one, so the id and secret may come from different places:

1. The default ``~/.stormpath/apiKey.properties`` file (optional)
2. Environment variables ``STORMPATH_API_KEY_ID`` / ``STORMPATH_API_KEY_SECRET``
3. System properties ``stormpath.apiKey.id`` / ``stormpath.apiKey.secret``
4. A configured file location
5. A configured binary input stream
6. A configured text reader
7. A configured properties mapping
8. Explicitly set id / secret
"""

import io
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from ..config import system_properties as process_properties
from ..config.settings import SdkConfig
from ..exceptions import ConfigurationError, MissingCredentialError
from .models import ApiKey, ApiKeySettings, has_text
from .properties import load_properties, write_properties_file
from .resources import get_input_stream_for_path

logger = logging.getLogger(__name__)

DEFAULT_API_KEY_PROPERTIES_FILE_LOCATION = str(
    Path.home() / ".stormpath" / "apiKey.properties"
)

API_KEY_ID_ENV_VAR = "STORMPATH_API_KEY_ID"
API_KEY_SECRET_ENV_VAR = "STORMPATH_API_KEY_SECRET"
API_KEY_ID_SYSTEM_PROPERTY = "stormpath.apiKey.id"
API_KEY_SECRET_SYSTEM_PROPERTY = "stormpath.apiKey.secret"


class ApiKeyBuilder:
    """
    Collects API key configuration and resolves it into an ApiKey.

    Setters return the builder so calls can be chained::

        api_key = ApiKeyBuilder().set_file_location("~/keys/apiKey.properties").build()

    Every ``build()`` resolves against an immutable ApiKeySettings snapshot.
    """

    def __init__(self, settings: Optional[ApiKeySettings] = None):
        self._settings = settings or ApiKeySettings()

    @classmethod
    def from_config(cls, config: SdkConfig) -> "ApiKeyBuilder":
        """Create a builder seeded with the file location and property names from config."""
        return cls(ApiKeySettings(
            file_location=config.api_key.file_location,
            id_property_name=config.api_key.id_property_name,
            secret_property_name=config.api_key.secret_property_name,
        ))

    @property
    def settings(self) -> ApiKeySettings:
        return self._settings

    def _set(self, **changes) -> "ApiKeyBuilder":
        self._settings = replace(self._settings, **changes)
        return self

    def set_id(self, id: str) -> "ApiKeyBuilder":
        return self._set(id=id)

    def set_secret(self, secret: str) -> "ApiKeyBuilder":
        return self._set(secret=secret)

    def set_properties(self, properties: Optional[Mapping[str, str]]) -> "ApiKeyBuilder":
        return self._set(properties=dict(properties) if properties is not None else None)

    def set_reader(self, reader: Any) -> "ApiKeyBuilder":
        return self._set(reader=reader)

    def set_input_stream(self, input_stream: Any) -> "ApiKeyBuilder":
        return self._set(input_stream=input_stream)

    def set_file_location(self, location: str) -> "ApiKeyBuilder":
        return self._set(file_location=location)

    def set_id_property_name(self, id_property_name: str) -> "ApiKeyBuilder":
        return self._set(id_property_name=id_property_name)

    def set_secret_property_name(self, secret_property_name: str) -> "ApiKeyBuilder":
        return self._set(secret_property_name=secret_property_name)

    def build(self) -> ApiKey:
        """
        Resolve the API key.

        Raises:
            ConfigurationError: If a configured file, stream or reader can't be read
            MissingCredentialError: If no id or no secret was found anywhere
        """
        return resolve_api_key(self._settings)


def resolve_api_key(settings: ApiKeySettings) -> ApiKey:
    """Resolve an API key from the given settings. See the module docstring for precedence."""
    id_name = settings.id_property_name
    secret_name = settings.secret_property_name
    default_location = settings.default_file_location or DEFAULT_API_KEY_PROPERTIES_FILE_LOCATION

    # 1. Default file; every other location has higher priority
    props = _default_file_properties(default_location)
    id_value = _get_property_value(props, id_name)
    secret = _get_property_value(props, secret_name)
    _log_tier("default file", props, id_name, secret_name)

    # 2. Environment variables
    environ = settings.environ if settings.environ is not None else os.environ
    props = _fixed_name_properties(
        environ, API_KEY_ID_ENV_VAR, API_KEY_SECRET_ENV_VAR, id_name, secret_name
    )
    id_value, secret = _merge(props, id_name, secret_name, id_value, secret)
    _log_tier("environment variables", props, id_name, secret_name)

    # 3. System properties
    system = (
        settings.system_properties
        if settings.system_properties is not None
        else process_properties.snapshot()
    )
    props = _fixed_name_properties(
        system, API_KEY_ID_SYSTEM_PROPERTY, API_KEY_SECRET_SYSTEM_PROPERTY, id_name, secret_name
    )
    id_value, secret = _merge(props, id_name, secret_name, id_value, secret)
    _log_tier("system properties", props, id_name, secret_name)

    # 4. Configured file location
    if has_text(settings.file_location):
        try:
            props = _read_location(settings.file_location)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                f"Unable to read properties from specified file location "
                f"[{settings.file_location}]."
            ) from e
        id_value, secret = _merge(props, id_name, secret_name, id_value, secret)
        _log_tier(f"file location {settings.file_location}", props, id_name, secret_name)

    # 5. Configured input stream
    if settings.input_stream is not None:
        try:
            props = _read_stream(settings.input_stream)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                "Unable to read properties from specified input stream."
            ) from e
        id_value, secret = _merge(props, id_name, secret_name, id_value, secret)
        _log_tier("input stream", props, id_name, secret_name)

    # 6. Configured reader
    if settings.reader is not None:
        try:
            props = load_properties(settings.reader)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                "Unable to read properties from specified reader."
            ) from e
        id_value, secret = _merge(props, id_name, secret_name, id_value, secret)
        _log_tier("reader", props, id_name, secret_name)

    # 7. Configured properties mapping
    if settings.properties:
        id_value, secret = _merge(settings.properties, id_name, secret_name, id_value, secret)
        _log_tier("properties", settings.properties, id_name, secret_name)

    # 8. Explicit values always take precedence
    id_value = _value_of(settings.id, id_value)
    secret = _value_of(settings.secret, secret)

    if not has_text(id_value):
        locations = [
            "explicit configuration (ApiKeyBuilder.set_id)",
            f"the system property '{API_KEY_ID_SYSTEM_PROPERTY}'",
            f"the environment variable '{API_KEY_ID_ENV_VAR}'",
        ]
        if not has_text(secret):
            locations += [
                f"the system property '{API_KEY_SECRET_SYSTEM_PROPERTY}'",
                f"the environment variable '{API_KEY_SECRET_ENV_VAR}'",
            ]
        locations.append(f"the default apiKey.properties file location {default_location}")
        raise MissingCredentialError("id", locations)

    if not has_text(secret):
        raise MissingCredentialError("secret", [
            "explicit configuration (ApiKeyBuilder.set_secret)",
            f"the system property '{API_KEY_SECRET_SYSTEM_PROPERTY}'",
            f"the environment variable '{API_KEY_SECRET_ENV_VAR}'",
            f"the default apiKey.properties file location {default_location}",
        ])

    return ApiKey(id=id_value, secret=secret)


def write_api_key_file(
    api_key: ApiKey,
    location: Optional[str] = None,
    id_property_name: Optional[str] = None,
    secret_property_name: Optional[str] = None,
) -> Path:
    """
    Write an API key to a property file the builder can read back.

    Args:
        api_key: Key to write
        location: File path; defaults to the default apiKey.properties location
        id_property_name: Property name for the id
        secret_property_name: Property name for the secret

    Returns:
        Path of the written file
    """
    names: Dict[str, str] = {}
    if id_property_name:
        names["id_property_name"] = id_property_name
    if secret_property_name:
        names["secret_property_name"] = secret_property_name

    path = write_properties_file(
        api_key.to_properties(**names),
        location or DEFAULT_API_KEY_PROPERTIES_FILE_LOCATION,
    )
    try:
        path.chmod(0o600)
    except OSError as e:
        logger.warning(f"Could not restrict permissions on {path}: {e}")
    logger.info(f"Wrote API key {api_key.id} to {path}")
    return path


def _default_file_properties(location: str) -> Dict[str, str]:
    try:
        return _read_location(location)
    except (OSError, ValueError) as e:
        logger.debug(
            f"Unable to find or load default api key properties file [{location}]. "
            f"This can be safely ignored as this is a fallback location - other more "
            f"specific locations will be checked. ({e})"
        )
        return {}


def _fixed_name_properties(
    source: Mapping[str, str],
    id_key: str,
    secret_key: str,
    id_name: str,
    secret_name: str,
) -> Dict[str, str]:
    """Map fixed-name lookups onto the configured property names."""
    props: Dict[str, str] = {}

    value = source.get(id_key)
    if has_text(value):
        props[id_name] = value

    value = source.get(secret_key)
    if has_text(value):
        props[secret_name] = value

    return props


def _read_location(location: str) -> Dict[str, str]:
    stream = get_input_stream_for_path(location)
    with stream:
        return load_properties(stream)


def _read_stream(stream: Any) -> Dict[str, str]:
    data = stream.read()
    if isinstance(data, str):
        return load_properties(data)
    return load_properties(io.BytesIO(data))


def _get_property_value(properties: Mapping[str, str], name: str) -> Optional[str]:
    value = properties.get(name)
    if value is not None:
        value = value.strip()
        if value == "":
            value = None
    return value


def _value_of(discovered: Optional[str], default: Optional[str]) -> Optional[str]:
    if not has_text(discovered):
        return default
    return discovered


def _merge(
    properties: Mapping[str, str],
    id_name: str,
    secret_name: str,
    id_value: Optional[str],
    secret: Optional[str],
) -> Tuple[Optional[str], Optional[str]]:
    return (
        _value_of(_get_property_value(properties, id_name), id_value),
        _value_of(_get_property_value(properties, secret_name), secret),
    )


def _log_tier(name: str, properties: Mapping[str, str], id_name: str, secret_name: str) -> None:
    found = [
        label for label, key in (("id", id_name), ("secret", secret_name))
        if _get_property_value(properties, key)
    ]
    if found:
        logger.debug(f"API key {' and '.join(found)} found in {name}")
