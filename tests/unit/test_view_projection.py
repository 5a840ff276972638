"""Tests for projecting controller state into the rendered view."""

from __future__ import annotations

from schemabrowser.config import BrowserSettings
from schemabrowser.domains.explorer.app.projection import project
from schemabrowser.domains.explorer.domain.object_types import ObjectType, PageState, SearchState
from schemabrowser.domains.explorer.domain.state import BrowserState, BrowserStatus
from tests.helpers import READY_SCOPE, nodes


def tables_state(total: int, page_size: int = 100) -> BrowserState:
    return BrowserState(
        scope=READY_SCOPE,
        status=BrowserStatus.LOADED_NON_EMPTY,
        page=PageState(page_number=1, page_size=page_size, total_count=total),
        items=nodes(ObjectType.TABLES, "users"),
    )


class TestPagination:
    def test_hidden_at_or_below_threshold(self):
        assert not project(tables_state(150)).show_pagination
        assert not project(tables_state(200)).show_pagination

    def test_shown_above_threshold(self):
        view = project(tables_state(250))

        assert view.show_pagination
        assert view.page_count == 3
        assert view.total_count == 250

    def test_threshold_comes_from_settings(self):
        view = project(tables_state(150), BrowserSettings(pagination_threshold=100))
        assert view.show_pagination

    def test_never_shown_for_other_types(self):
        state = tables_state(1000).evolve(object_type=ObjectType.VIEWS)
        view = project(state)

        assert not view.show_pagination
        assert not view.show_actions_menu

    def test_empty_listing_has_one_page(self):
        assert project(tables_state(0)).page_count == 1


class TestVisibleItems:
    def test_filtered_list_while_searching(self):
        items = nodes(ObjectType.VIEWS, "UserView", "OrderView")
        state = BrowserState(
            scope=READY_SCOPE,
            object_type=ObjectType.VIEWS,
            search=SearchState(raw_input="user", is_search_mode_active=True, committed_key="user"),
            items=items,
            filtered_items=items[:1],
        )

        view = project(state)

        assert view.items == items[:1]
        assert view.is_filtered
        assert view.search_text == "user"

    def test_full_list_when_search_closed(self):
        items = nodes(ObjectType.VIEWS, "UserView", "OrderView")
        state = BrowserState(
            scope=READY_SCOPE,
            object_type=ObjectType.VIEWS,
            items=items,
            filtered_items=items[:1],
        )

        assert project(state).items == items

    def test_loading_flag(self):
        state = BrowserState(scope=READY_SCOPE, status=BrowserStatus.LOADING)
        assert project(state).is_loading
