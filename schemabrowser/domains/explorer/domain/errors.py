"""Errors and signals raised by the object browser core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .object_types import ObjectType
    from .scope import BrowseScope


class SchemaBrowserError(Exception):
    """Base class for object browser errors."""


class ScopeNotReady(SchemaBrowserError):
    """A trigger or fetch arrived before the browse scope was usable."""

    def __init__(self, scope: BrowseScope | None) -> None:
        self.scope = scope
        super().__init__(f"Browse scope is not ready: {scope!r}")


class FetchFailed(SchemaBrowserError):
    """The remote listing call rejected or raised."""

    def __init__(self, object_type: ObjectType, message: str) -> None:
        self.object_type = object_type
        self.message = message
        super().__init__(f"Error loading {object_type.label.lower()}: {message}")


class _Stale:
    """Marker for a fetch outcome superseded by a later fetch.

    Not an error: callers drop it without touching state.
    """

    _instance: _Stale | None = None

    def __new__(cls) -> _Stale:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "STALE"

    def __bool__(self) -> bool:
        return False


STALE = _Stale()


def is_stale(outcome: Any) -> bool:
    return outcome is STALE
