"""Trigger messages handled by ``BrowserController.dispatch``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .object_types import ObjectType
from .scope import BrowseScope


@dataclass(frozen=True)
class ScopeChanged:
    scope: BrowseScope


@dataclass(frozen=True)
class TypeSwitched:
    object_type: ObjectType


@dataclass(frozen=True)
class PageChanged:
    page_number: int


@dataclass(frozen=True)
class PageSizeChanged:
    page_size: int


@dataclass(frozen=True)
class SearchInputChanged:
    value: str


@dataclass(frozen=True)
class SearchOpened:
    pass


@dataclass(frozen=True)
class SearchBlurred:
    pass


@dataclass(frozen=True)
class SearchCommitted:
    """Fired by the debounce once typing has gone quiet."""


@dataclass(frozen=True)
class RefreshRequested:
    pass


BrowserMessage = Union[
    ScopeChanged,
    TypeSwitched,
    PageChanged,
    PageSizeChanged,
    SearchInputChanged,
    SearchOpened,
    SearchBlurred,
    SearchCommitted,
    RefreshRequested,
]
