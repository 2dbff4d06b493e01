"""
API key data models.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..config.settings import (
    DEFAULT_API_KEY_ID_PROPERTY_NAME,
    DEFAULT_API_KEY_SECRET_PROPERTY_NAME,
)


def has_text(value: Optional[str]) -> bool:
    """Check that a value is non-None and not blank."""
    return value is not None and value.strip() != ""


@dataclass(frozen=True)
class ApiKey:
    """A resolved API key id/secret pair."""
    id: str
    secret: str

    def __post_init__(self):
        if not has_text(self.id):
            raise ValueError("API key id cannot be blank")
        if not has_text(self.secret):
            raise ValueError("API key secret cannot be blank")

    @property
    def masked_secret(self) -> str:
        """Secret with all but the last four characters hidden."""
        visible = self.secret[-4:] if len(self.secret) > 8 else ""
        return "*" * 8 + visible

    def to_properties(
        self,
        id_property_name: str = DEFAULT_API_KEY_ID_PROPERTY_NAME,
        secret_property_name: str = DEFAULT_API_KEY_SECRET_PROPERTY_NAME,
    ) -> Dict[str, str]:
        return {id_property_name: self.id, secret_property_name: self.secret}

    def __repr__(self) -> str:
        return f"ApiKey(id={self.id!r}, secret={self.masked_secret!r})"


@dataclass(frozen=True)
class ApiKeySettings:
    """
    Immutable snapshot of everything an ApiKeyBuilder was configured with.

    ``input_stream`` and ``reader`` are file-like objects; they are consumed by
    the resolution that reads them.
    """
    id: Optional[str] = None
    secret: Optional[str] = None
    file_location: Optional[str] = None
    input_stream: Optional[Any] = None
    reader: Optional[Any] = None
    properties: Optional[Mapping[str, str]] = None
    id_property_name: str = DEFAULT_API_KEY_ID_PROPERTY_NAME
    secret_property_name: str = DEFAULT_API_KEY_SECRET_PROPERTY_NAME
    environ: Optional[Mapping[str, str]] = field(default=None, repr=False)
    system_properties: Optional[Mapping[str, str]] = field(default=None, repr=False)
    default_file_location: Optional[str] = None

    def __repr__(self) -> str:
        secret = "********" if self.secret else None
        return (
            f"ApiKeySettings(id={self.id!r}, secret={secret!r}, "
            f"file_location={self.file_location!r}, "
            f"id_property_name={self.id_property_name!r}, "
            f"secret_property_name={self.secret_property_name!r})"
        )
