"""
Process-wide system properties.

A flat string mapping shared by everything in the process, consulted by the
API key resolver after environment variables. Applications populate it at
startup (e.g. from command line flags) with ``set_property``.
"""

from typing import Dict, Mapping, Optional

_properties: Dict[str, str] = {}


def get_property(name: str, default: Optional[str] = None) -> Optional[str]:
    return _properties.get(name, default)


def set_property(name: str, value: str) -> None:
    _properties[name] = value


def remove_property(name: str) -> Optional[str]:
    return _properties.pop(name, None)


def update(values: Mapping[str, str]) -> None:
    _properties.update(values)


def clear() -> None:
    _properties.clear()


def snapshot() -> Dict[str, str]:
    """Return a copy of the current properties."""
    return dict(_properties)
