"""Textual application hosting the object browser."""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from .config import BrowserSettings
from .domains.explorer.app.actions import WorkspaceActions, WorkspaceTab
from .domains.explorer.app.controller import BrowserController
from .domains.explorer.app.registry import ObjectTypeRegistry
from .domains.explorer.domain.object_types import Node
from .domains.explorer.domain.scope import BrowseScope
from .domains.explorer.ui.object_browser import ObjectBrowser
from .mocks import MockConsoleService, MockExporter
from .shared.core.logging import configure_logging
from .shared.core.protocols import ConsoleServiceProtocol, ExporterProtocol, SchemaServiceProtocol


class BrowserApp(App[None]):
    """Single-panel app: browse one scope's schema objects.

    Logging goes to the default log file unless structlog was configured
    before the app is built.
    """

    TITLE = "schemabrowser"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+r", "clear_scope", "Disconnect", show=False),
    ]

    def __init__(
        self,
        service: SchemaServiceProtocol,
        scope: BrowseScope,
        *,
        settings: BrowserSettings | None = None,
        console_service: ConsoleServiceProtocol | None = None,
        exporter: ExporterProtocol | None = None,
    ) -> None:
        super().__init__()
        if not structlog.is_configured():
            configure_logging()
        self.settings = settings or BrowserSettings()
        self.controller = BrowserController(
            ObjectTypeRegistry.from_service(service),
            settings=self.settings,
            table_list_sink=self._on_tables_loaded,
        )
        self.actions = WorkspaceActions(
            console_service or MockConsoleService(),
            exporter or MockExporter(),
            self._open_tab,
        )
        self._initial_scope = scope
        self.opened_tabs: list[WorkspaceTab] = []
        self.current_table_list: tuple[Node, ...] = ()

    def compose(self) -> ComposeResult:
        yield Header()
        yield ObjectBrowser(self.controller, self.actions, id="object-browser")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self._initial_scope.describe()
        self.controller.set_scope(self._initial_scope)
        self.query_one("#object-tree").focus()

    async def on_unmount(self) -> None:
        await self.controller.aclose()

    @property
    def object_browser(self) -> ObjectBrowser:
        return self.query_one("#object-browser", ObjectBrowser)

    def set_scope(self, scope: BrowseScope) -> None:
        """Point the browser at another connection/database/schema."""
        self.sub_title = scope.describe()
        self.controller.set_scope(scope)

    def action_clear_scope(self) -> None:
        self.set_scope(BrowseScope())

    def _on_tables_loaded(self, tables: Sequence[Node]) -> None:
        self.current_table_list = tuple(tables)

    def _open_tab(self, tab: WorkspaceTab) -> None:
        self.opened_tabs.append(tab)
        self.notify(f"Opened {tab.title} ({tab.tab_type.value})")
