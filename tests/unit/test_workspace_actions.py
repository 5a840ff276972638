"""Tests for the table menu actions."""

from __future__ import annotations

import pytest

from schemabrowser.domains.explorer.app.actions import (
    ConsoleStatus,
    ExportFormat,
    MenuAction,
    TabType,
    WorkspaceActions,
    available_actions,
)
from schemabrowser.domains.explorer.domain.errors import ScopeNotReady
from schemabrowser.domains.explorer.domain.object_types import ObjectType
from schemabrowser.domains.explorer.domain.scope import BrowseScope
from schemabrowser.mocks import MockConsoleService, MockExporter


@pytest.fixture
def workspace():
    consoles = MockConsoleService()
    exporter = MockExporter()
    opened = []
    actions = WorkspaceActions(consoles, exporter, opened.append)
    return actions, consoles, exporter, opened


class TestWorkspaceActions:
    @pytest.mark.asyncio
    async def test_create_console_saves_draft_and_opens_tab(self, workspace):
        actions, consoles, _, opened = workspace
        scope = BrowseScope(data_source_id=7, database_name="app", schema_name="public", database_type="MYSQL")

        tab = await actions.create_console(scope)

        draft = consoles.drafts[0]
        assert draft.name == "new console"
        assert draft.ddl == ""
        assert draft.status is ConsoleStatus.DRAFT
        assert (draft.data_source_id, draft.database_name, draft.schema_name) == (7, "app", "public")
        assert draft.database_type == "MYSQL"
        assert opened == [tab]
        assert tab.tab_type is TabType.CONSOLE
        assert tab.title == "new console"
        assert tab.unique_data["status"] == "DRAFT"

    @pytest.mark.asyncio
    async def test_create_console_needs_a_data_source(self, workspace):
        actions, consoles, _, opened = workspace

        with pytest.raises(ScopeNotReady):
            await actions.create_console(BrowseScope())

        assert consoles.drafts == []
        assert opened == []

    def test_create_table_opens_fresh_tab(self, workspace):
        actions, _, _, opened = workspace

        first = actions.create_table()
        second = actions.create_table()

        assert first.tab_type is TabType.CREATE_TABLE
        assert first.title == "create-table"
        assert first.id != second.id
        assert opened == [first, second]

    def test_export_forwards_format(self, workspace):
        actions, _, exporter, _ = workspace

        actions.export(ExportFormat.MARKDOWN)

        assert exporter.exports == [ExportFormat.MARKDOWN]


class TestAvailableActions:
    def test_tables_only(self):
        assert MenuAction.EXPORT in available_actions(ObjectType.TABLES)
        assert available_actions(ObjectType.VIEWS) == ()
        assert available_actions(ObjectType.TRIGGERS) == ()
