"""Workspace side actions offered from the object browser menu.

These are not part of the browsing state machine: they read the current
scope, call out to a collaborator and ask the host to open a tab.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

from ..domain.errors import ScopeNotReady
from ..domain.object_types import ObjectType

if TYPE_CHECKING:
    from schemabrowser.shared.core.protocols import ConsoleServiceProtocol, ExporterProtocol

    from ..domain.scope import BrowseScope

logger = structlog.get_logger()

NEW_CONSOLE_NAME = "new console"
CREATE_TABLE_TITLE = "create-table"


class ExportFormat(str, Enum):
    WORD = "word"
    EXCEL = "excel"
    HTML = "html"
    MARKDOWN = "markdown"
    PDF = "pdf"

    @property
    def label(self) -> str:
        return {
            ExportFormat.WORD: "Export Word",
            ExportFormat.EXCEL: "Export Excel",
            ExportFormat.HTML: "Export HTML",
            ExportFormat.MARKDOWN: "Export Markdown",
            ExportFormat.PDF: "Export PDF",
        }[self]


class ConsoleStatus(str, Enum):
    DRAFT = "DRAFT"
    RELEASE = "RELEASE"


class TabType(str, Enum):
    CONSOLE = "console"
    CREATE_TABLE = "create_table"


class MenuAction(str, Enum):
    CREATE_CONSOLE = "create_console"
    CREATE_TABLE = "create_table"
    EXPORT = "export"


@dataclass(frozen=True)
class ConsoleDraft:
    """Unsaved console handed to the console collaborator."""

    name: str
    ddl: str
    data_source_id: Any
    database_name: str | None
    schema_name: str | None
    database_type: str | None
    status: ConsoleStatus = ConsoleStatus.DRAFT
    opened: bool = True

    @classmethod
    def for_scope(cls, scope: BrowseScope, name: str = NEW_CONSOLE_NAME) -> ConsoleDraft:
        return cls(
            name=name,
            ddl="",
            data_source_id=scope.data_source_id,
            database_name=scope.database_name,
            schema_name=scope.schema_name,
            database_type=scope.database_type,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass(frozen=True)
class WorkspaceTab:
    """Request for the host to open a workspace tab."""

    id: str
    tab_type: TabType
    title: str
    unique_data: dict[str, Any] = field(default_factory=dict)


def available_actions(object_type: ObjectType) -> tuple[MenuAction, ...]:
    """The menu only exists for tables."""
    if object_type is not ObjectType.TABLES:
        return ()
    return (MenuAction.CREATE_CONSOLE, MenuAction.CREATE_TABLE, MenuAction.EXPORT)


class WorkspaceActions:
    """Console creation, table creation and export triggers."""

    def __init__(
        self,
        console_service: ConsoleServiceProtocol,
        exporter: ExporterProtocol,
        open_tab: Callable[[WorkspaceTab], None],
    ) -> None:
        self._console_service = console_service
        self._exporter = exporter
        self._open_tab = open_tab

    async def create_console(self, scope: BrowseScope) -> WorkspaceTab:
        """Save a draft console for ``scope`` and open it in a new tab.

        Raises:
            ScopeNotReady: If there is no data source to attach the console to.
        """
        if not scope.is_ready:
            raise ScopeNotReady(scope)
        draft = ConsoleDraft.for_scope(scope)
        console_id = await asyncio.to_thread(self._console_service.save_console, draft)
        tab = WorkspaceTab(
            id=str(console_id),
            tab_type=TabType.CONSOLE,
            title=draft.name,
            unique_data=draft.to_dict(),
        )
        logger.info("console_created", console_id=tab.id, scope=scope.describe())
        self._open_tab(tab)
        return tab

    def create_table(self) -> WorkspaceTab:
        tab = WorkspaceTab(id=str(uuid4()), tab_type=TabType.CREATE_TABLE, title=CREATE_TABLE_TITLE)
        self._open_tab(tab)
        return tab

    def export(self, export_format: ExportFormat) -> None:
        logger.info("export_requested", export_format=export_format.value)
        self._exporter.export(export_format)
