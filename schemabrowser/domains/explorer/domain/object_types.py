"""Object types, nodes and fetch payloads for the object browser."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .scope import BrowseScope

PAGE_SIZE_OPTIONS: tuple[int, ...] = (50, 100, 200)
DEFAULT_PAGE_SIZE = 100


class ObjectType(str, Enum):
    """Category of schema object listed by the browser."""

    TABLES = "tables"
    VIEWS = "views"
    FUNCTIONS = "functions"
    PROCEDURES = "procedures"
    TRIGGERS = "triggers"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_paged(self) -> bool:
        """Tables are fetched a page at a time; everything else in full."""
        return self is ObjectType.TABLES


_LABELS = {
    ObjectType.TABLES: "Tables",
    ObjectType.VIEWS: "Views",
    ObjectType.FUNCTIONS: "Functions",
    ObjectType.PROCEDURES: "Procedures",
    ObjectType.TRIGGERS: "Triggers",
}


@dataclass(frozen=True)
class Node:
    """A single schema object as shown in the browser tree."""

    identifier: str
    display_name: str
    object_type: ObjectType
    metadata: Mapping[str, Any] = field(default_factory=dict)
    has_children: bool = False


@dataclass(frozen=True)
class PageState:
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_count: int = 0


@dataclass(frozen=True)
class SearchState:
    """Search box state.

    ``committed_key`` is the last key accepted by the debounce; ``raw_input``
    is whatever is currently typed.
    """

    raw_input: str = ""
    is_search_mode_active: bool = False
    committed_key: str = ""


@dataclass(frozen=True)
class ResultSet:
    """Immutable listing returned by a fetch.

    ``total_count`` is only set for paged fetches.
    """

    items: tuple[Node, ...] = ()
    total_count: int | None = None

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class FetchRequest:
    """Explicit parameters handed to a fetch function."""

    scope: BrowseScope
    object_type: ObjectType
    search_key: str = ""
    refresh: bool = False
    page_number: int | None = None
    page_size: int | None = None


@dataclass(frozen=True)
class PagedResponse:
    items: tuple[Node, ...]
    total_count: int


@dataclass(frozen=True)
class FetchToken:
    """Identity of one issued fetch on the listing stream."""

    sequence_number: int
    scope: BrowseScope | None = None
    object_type: ObjectType | None = None
