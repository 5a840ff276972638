"""Object browser widget: type picker, search box, object tree and pager."""

from __future__ import annotations

from typing import Any

from rich.markup import escape as escape_markup
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Input, Label, Select, Tree

from ..app.actions import ExportFormat, MenuAction, WorkspaceActions
from ..app.controller import BrowserController
from ..app.projection import BrowserView, project
from ..domain.errors import ScopeNotReady
from ..domain.object_types import PAGE_SIZE_OPTIONS, Node, ObjectType
from ..domain.state import BrowserState
from .tree_render import populate_tree


class SearchInput(Input):
    """Input that reports when focus leaves it."""

    class Left(Message):
        pass

    def on_blur(self, event: events.Blur) -> None:
        self.post_message(self.Left())


def _action_options() -> list[tuple[str, str]]:
    options = [
        ("New console", MenuAction.CREATE_CONSOLE.value),
        ("Create table", MenuAction.CREATE_TABLE.value),
    ]
    options.extend((fmt.label, f"{MenuAction.EXPORT.value}:{fmt.value}") for fmt in ExportFormat)
    return options


class ObjectBrowser(Vertical):
    """Renders ``BrowserController`` state and forwards user input to it."""

    BINDINGS = [
        Binding("r", "refresh", "Refresh"),
        Binding("slash", "open_search", "Search"),
        Binding("escape", "close_search", "Close search", show=False),
        Binding("left_square_bracket", "prev_page", "Prev page", show=False),
        Binding("right_square_bracket", "next_page", "Next page", show=False),
    ]

    DEFAULT_CSS = """
    ObjectBrowser {
        height: 1fr;
    }

    ObjectBrowser #browser-header {
        height: auto;
    }

    ObjectBrowser #object-type {
        width: 1fr;
    }

    ObjectBrowser #actions {
        width: 20;
    }

    ObjectBrowser #search {
        display: none;
    }

    ObjectBrowser #search.-active {
        display: block;
    }

    ObjectBrowser #object-tree {
        height: 1fr;
    }

    ObjectBrowser #pagination {
        height: auto;
        display: none;
    }

    ObjectBrowser #pagination.-visible {
        display: block;
    }

    ObjectBrowser #page-label {
        padding: 1 1;
    }

    ObjectBrowser #page-size {
        width: 12;
    }
    """

    def __init__(
        self,
        controller: BrowserController,
        actions: WorkspaceActions | None = None,
        *,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self.controller = controller
        self.actions = actions
        self._unsubscribe: Any = None
        self._rendered_items: tuple[Node, ...] | None = None
        self._rendered_highlight: str | None = None
        self._rendered_error: str | None = None
        self._rendered_loading = False
        self._view: BrowserView | None = None

    def compose(self) -> ComposeResult:
        state = self.controller.state
        with Horizontal(id="browser-header"):
            yield Select(
                [(t.label, t) for t in ObjectType],
                value=state.object_type,
                allow_blank=False,
                id="object-type",
            )
            yield Button("Refresh", id="refresh")
            yield Button("Search", id="open-search")
            if self.actions is not None:
                yield Select(_action_options(), prompt="More", id="actions")
        yield SearchInput(placeholder="Search", id="search")
        yield Tree("objects", id="object-tree")
        with Horizontal(id="pagination"):
            yield Button("<", id="page-prev")
            yield Label("", id="page-label")
            yield Button(">", id="page-next")
            yield Select(
                [(str(size), size) for size in PAGE_SIZE_OPTIONS],
                value=state.page.page_size,
                allow_blank=False,
                id="page-size",
            )

    def on_mount(self) -> None:
        self.query_one("#object-tree", Tree).show_root = False
        self._unsubscribe = self.controller.subscribe(self._on_state)
        self._render_view(project(self.controller.state, self.controller.settings))

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def view(self) -> BrowserView | None:
        return self._view

    # -- input -> controller ------------------------------------------------

    def on_select_changed(self, event: Select.Changed) -> None:
        select_id = event.select.id
        if select_id == "object-type" and isinstance(event.value, ObjectType):
            self.controller.switch_type(event.value)
        elif select_id == "page-size" and isinstance(event.value, int):
            self.controller.change_page_size(event.value)
        elif select_id == "actions" and isinstance(event.value, str):
            self._run_menu_action(event.value)
            with self.prevent(Select.Changed):
                event.select.clear()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "refresh":
            self.action_refresh()
        elif button_id == "open-search":
            self.action_open_search()
        elif button_id == "page-prev":
            self.action_prev_page()
        elif button_id == "page-next":
            self.action_next_page()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search":
            self.controller.type_search(event.value)

    def on_search_input_left(self, event: SearchInput.Left) -> None:
        self.controller.blur_search()

    def action_refresh(self) -> None:
        self.controller.refresh()

    def action_open_search(self) -> None:
        self.controller.open_search()
        search = self.query_one("#search", SearchInput)
        if search.has_class("-active"):
            search.focus()

    def action_close_search(self) -> None:
        search = self.query_one("#search", SearchInput)
        if not search.has_class("-active"):
            return
        search.value = ""
        self.query_one("#object-tree", Tree).focus()

    def action_prev_page(self) -> None:
        view = self._view
        if view is None or not view.show_pagination or view.page_number <= 1:
            return
        self.controller.change_page(view.page_number - 1)

    def action_next_page(self) -> None:
        view = self._view
        if view is None or not view.show_pagination or view.page_number >= view.page_count:
            return
        self.controller.change_page(view.page_number + 1)

    def _run_menu_action(self, value: str) -> None:
        if self.actions is None:
            return
        action, _, argument = value.partition(":")
        if action == MenuAction.CREATE_CONSOLE.value:
            self.run_worker(self._create_console(), name="create-console", exclusive=False)
        elif action == MenuAction.CREATE_TABLE.value:
            self.actions.create_table()
        elif action == MenuAction.EXPORT.value:
            self.actions.export(ExportFormat(argument))

    async def _create_console(self) -> None:
        if self.actions is None:
            return
        try:
            await self.actions.create_console(self.controller.state.scope)
        except ScopeNotReady:
            self.notify("Select a data source first", severity="warning")

    # -- controller -> widgets ----------------------------------------------

    def _on_state(self, state: BrowserState) -> None:
        self._render_view(project(state, self.controller.settings))

    def _render_view(self, view: BrowserView) -> None:
        self._view = view

        type_select = self.query_one("#object-type", Select)
        if type_select.value != view.object_type:
            with self.prevent(Select.Changed):
                type_select.value = view.object_type

        search = self.query_one("#search", SearchInput)
        search.set_class(view.search_active, "-active")
        if search.value != view.search_text:
            with self.prevent(Input.Changed):
                search.value = view.search_text

        tree = self.query_one("#object-tree", Tree)
        highlight = view.search_text if view.is_filtered else ""
        if (
            view.items is not self._rendered_items
            or highlight != self._rendered_highlight
            or view.error != self._rendered_error
            or (not view.items and view.is_loading != self._rendered_loading)
        ):
            populate_tree(tree, view)
            self._rendered_items = view.items
            self._rendered_highlight = highlight
            self._rendered_loading = view.is_loading
        tree.loading = view.is_loading

        if view.error and view.error != self._rendered_error:
            self.notify(escape_markup(view.error), severity="error")
        self._rendered_error = view.error

        if self.actions is not None:
            self.query_one("#actions", Select).display = view.show_actions_menu

        self.query_one("#pagination", Horizontal).set_class(view.show_pagination, "-visible")
        self.query_one("#page-label", Label).update(
            f"{view.page_number} / {view.page_count}  ({view.total_count})"
        )
        page_size = self.query_one("#page-size", Select)
        if page_size.value != view.page_size:
            with self.prevent(Select.Changed):
                page_size.value = view.page_size
