"""Protocols for the collaborators the object browser talks to.

These keep the browser core independent of any concrete backend and make
it easy to substitute mocks in tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from schemabrowser.domains.explorer.app.actions import ConsoleDraft, ExportFormat
    from schemabrowser.domains.explorer.domain.object_types import Node, ObjectType
    from schemabrowser.domains.explorer.domain.scope import BrowseScope


@runtime_checkable
class SchemaServiceProtocol(Protocol):
    """Blocking schema listing service.

    Calls run off the event loop in a worker thread, so implementations are
    free to do network or driver I/O directly.
    """

    def list_tables(
        self,
        scope: BrowseScope,
        *,
        page_number: int,
        page_size: int,
        search_key: str = "",
        refresh: bool = False,
    ) -> tuple[Sequence[Node], int]:
        """List one page of tables.

        Args:
            scope: Connection/database/schema to list.
            page_number: 1-based page number.
            page_size: Number of tables per page.
            search_key: Optional server-side name filter.
            refresh: Hint to bypass any server-side cache.

        Returns:
            Tuple of (tables on this page, total table count).
        """
        ...

    def list_objects(
        self,
        object_type: ObjectType,
        scope: BrowseScope,
        *,
        search_key: str = "",
        refresh: bool = False,
    ) -> Sequence[Node]:
        """List every object of a non-paged type (views, functions, ...)."""
        ...


@runtime_checkable
class ConsoleServiceProtocol(Protocol):
    def save_console(self, draft: ConsoleDraft) -> Any:
        """Persist a draft console and return its identifier."""
        ...


@runtime_checkable
class ExporterProtocol(Protocol):
    def export(self, export_format: ExportFormat) -> None:
        """Start exporting the current schema; completion is not awaited."""
        ...

