"""Owned state of the object browser controller."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto

from .object_types import DEFAULT_PAGE_SIZE, Node, ObjectType, PageState, SearchState
from .scope import EMPTY_SCOPE, BrowseScope


class BrowserStatus(Enum):
    IDLE = auto()
    LOADING = auto()
    LOADED_EMPTY = auto()
    LOADED_NON_EMPTY = auto()
    ERROR = auto()


@dataclass(frozen=True)
class BrowserState:
    """Single snapshot of everything the browser shows.

    Instances are never mutated; the controller swaps in a new snapshot on
    every trigger and every accepted fetch.
    """

    scope: BrowseScope = EMPTY_SCOPE
    status: BrowserStatus = BrowserStatus.IDLE
    object_type: ObjectType = ObjectType.TABLES
    page: PageState = field(default_factory=PageState)
    search: SearchState = field(default_factory=SearchState)
    items: tuple[Node, ...] = ()
    filtered_items: tuple[Node, ...] | None = None
    error: str | None = None

    @classmethod
    def initial(cls, scope: BrowseScope = EMPTY_SCOPE, page_size: int = DEFAULT_PAGE_SIZE) -> BrowserState:
        return cls(scope=scope, page=PageState(page_size=page_size))

    @property
    def scope_ready(self) -> bool:
        return self.scope.is_ready

    @property
    def is_loading(self) -> bool:
        return self.status is BrowserStatus.LOADING

    def evolve(self, **changes: object) -> BrowserState:
        return replace(self, **changes)  # type: ignore[arg-type]
