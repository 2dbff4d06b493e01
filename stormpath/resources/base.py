"""
Resource capabilities.

Each capability is a small independent protocol; a resource type implements
just the ones it supports instead of inheriting one large base class.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Protocol, runtime_checkable

from ..exceptions import ConfigurationError


@runtime_checkable
class DataStore(Protocol):
    """Persists resources on behalf of the SDK client."""

    def save(self, resource: Any) -> Any:
        ...

    def delete(self, resource: Any) -> None:
        ...


@runtime_checkable
class Saveable(Protocol):
    def save(self) -> Any:
        ...


@runtime_checkable
class Deletable(Protocol):
    def delete(self) -> None:
        ...


@runtime_checkable
class Auditable(Protocol):
    @property
    def created_at(self) -> Optional[datetime]:
        ...

    @property
    def modified_at(self) -> Optional[datetime]:
        ...


@dataclass
class Resource:
    """A remote entity identified by its href."""
    href: Optional[str] = None
    data_store: Optional[DataStore] = field(default=None, repr=False, compare=False)

    def _require_data_store(self) -> DataStore:
        if self.data_store is None:
            raise ConfigurationError(
                f"{type(self).__name__} is not attached to a data store"
            )
        return self.data_store


class SaveableMixin:
    """Implements Saveable by handing the resource to its data store."""

    def save(self):
        return self._require_data_store().save(self)


class DeletableMixin:
    """Implements Deletable by handing the resource to its data store."""

    def delete(self) -> None:
        self._require_data_store().delete(self)
