"""Read-only projection of controller state into what the UI renders."""

from __future__ import annotations

import math
from dataclasses import dataclass

from schemabrowser.config import BrowserSettings

from ..domain.object_types import PAGE_SIZE_OPTIONS, Node, ObjectType
from ..domain.state import BrowserState, BrowserStatus


@dataclass(frozen=True)
class BrowserView:
    items: tuple[Node, ...]
    is_loading: bool
    status: BrowserStatus
    object_type: ObjectType
    search_active: bool
    search_text: str
    show_pagination: bool
    page_number: int
    page_size: int
    page_count: int
    total_count: int
    show_actions_menu: bool
    error: str | None = None
    page_size_options: tuple[int, ...] = PAGE_SIZE_OPTIONS

    @property
    def is_filtered(self) -> bool:
        return self.search_active and bool(self.search_text)


def visible_items(state: BrowserState) -> tuple[Node, ...]:
    """Filtered list while searching, otherwise the fetched result set."""
    if state.search.is_search_mode_active and state.filtered_items is not None:
        return state.filtered_items
    return state.items


def project(state: BrowserState, settings: BrowserSettings | None = None) -> BrowserView:
    settings = settings or BrowserSettings()
    page = state.page
    is_tables = state.object_type is ObjectType.TABLES
    return BrowserView(
        items=visible_items(state),
        is_loading=state.is_loading,
        status=state.status,
        object_type=state.object_type,
        search_active=state.search.is_search_mode_active,
        search_text=state.search.raw_input,
        show_pagination=is_tables and page.total_count > settings.pagination_threshold,
        page_number=page.page_number,
        page_size=page.page_size,
        page_count=max(1, math.ceil(page.total_count / page.page_size)),
        total_count=page.total_count,
        show_actions_menu=is_tables,
        error=state.error,
    )
