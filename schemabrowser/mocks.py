"""Mock profiles for demo recordings and testing.

Usage:
    schemabrowser --mock=demo                      # Hundreds of tables plus a few views/functions
    schemabrowser --mock=demo --mock-tables=5000   # Stress pagination
    schemabrowser --mock=empty                     # Every listing comes back empty
    schemabrowser --mock=flaky                     # Views/functions fail to load
    schemabrowser --mock=demo --mock-latency=1.5   # Slow backend, to watch stale fetches get dropped
"""

from __future__ import annotations

import os
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from uuid import uuid4

from .domains.explorer.app.actions import ConsoleDraft, ExportFormat
from .domains.explorer.domain.object_types import Node, ObjectType
from .domains.explorer.domain.scope import BrowseScope

_TABLE_STEMS = [
    "users",
    "orders",
    "order_items",
    "products",
    "invoices",
    "payments",
    "audit_log",
    "sessions",
    "addresses",
    "inventory",
]


def _env_latency() -> float:
    env_delay = os.environ.get("SCHEMABROWSER_MOCK_QUERY_DELAY", "")
    try:
        return float(env_delay) if env_delay else 0.0
    except ValueError:
        return 0.0


def make_table_nodes(count: int) -> list[Node]:
    """Generate ``count`` predictable table nodes (users, orders, ..., users_1, ...)."""
    nodes = []
    for i in range(count):
        stem = _TABLE_STEMS[i % len(_TABLE_STEMS)]
        suffix = i // len(_TABLE_STEMS)
        name = stem if suffix == 0 else f"{stem}_{suffix}"
        nodes.append(
            Node(
                identifier=f"table:{name}",
                display_name=name,
                object_type=ObjectType.TABLES,
                metadata={"comment": f"{stem.replace('_', ' ')} data"},
                has_children=True,
            )
        )
    return nodes


def make_object_nodes(object_type: ObjectType, names: Sequence[str], **metadata: str) -> list[Node]:
    return [
        Node(
            identifier=f"{object_type.value}:{name}",
            display_name=name,
            object_type=object_type,
            metadata=dict(metadata),
        )
        for name in names
    ]


def _default_objects() -> dict[ObjectType, list[Node]]:
    return {
        ObjectType.VIEWS: make_object_nodes(ObjectType.VIEWS, ["UserView", "OrderView", "ActiveSessions"]),
        ObjectType.FUNCTIONS: make_object_nodes(ObjectType.FUNCTIONS, ["calc_tax", "order_total", "slugify"]),
        ObjectType.PROCEDURES: make_object_nodes(ObjectType.PROCEDURES, ["archive_orders", "rebuild_stats"]),
        ObjectType.TRIGGERS: make_object_nodes(
            ObjectType.TRIGGERS, ["trg_orders_audit", "trg_users_touch"], table_name="orders"
        ),
    }


@dataclass
class MockSchemaService:
    """In-memory schema service with optional latency and failure injection."""

    tables: list[Node] = field(default_factory=lambda: make_table_nodes(450))
    objects: dict[ObjectType, list[Node]] = field(default_factory=_default_objects)
    latency: float = field(default_factory=_env_latency)
    failing_types: set[ObjectType] = field(default_factory=set)
    failure_message: str = "connection reset by peer"
    calls: list[dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._lock = threading.Lock()

    def _record(self, **call: object) -> None:
        with self._lock:
            self.calls.append(dict(call))
        if self.latency > 0:
            time.sleep(self.latency)

    def list_tables(
        self,
        scope: BrowseScope,
        *,
        page_number: int,
        page_size: int,
        search_key: str = "",
        refresh: bool = False,
    ) -> tuple[list[Node], int]:
        self._record(
            object_type=ObjectType.TABLES,
            scope=scope,
            page_number=page_number,
            page_size=page_size,
            search_key=search_key,
            refresh=refresh,
        )
        if ObjectType.TABLES in self.failing_types:
            raise ConnectionError(self.failure_message)
        matching = _server_filter(self.tables, search_key)
        start = (page_number - 1) * page_size
        return matching[start : start + page_size], len(matching)

    def list_objects(
        self,
        object_type: ObjectType,
        scope: BrowseScope,
        *,
        search_key: str = "",
        refresh: bool = False,
    ) -> list[Node]:
        self._record(object_type=object_type, scope=scope, search_key=search_key, refresh=refresh)
        if object_type in self.failing_types:
            raise ConnectionError(self.failure_message)
        return _server_filter(self.objects.get(object_type, []), search_key)


def _server_filter(nodes: Sequence[Node], search_key: str) -> list[Node]:
    if not search_key:
        return list(nodes)
    key = search_key.lower()
    return [node for node in nodes if key in node.display_name.lower()]


@dataclass
class MockConsoleService:
    drafts: list[ConsoleDraft] = field(default_factory=list)

    def save_console(self, draft: ConsoleDraft) -> str:
        self.drafts.append(draft)
        return uuid4().hex


@dataclass
class MockExporter:
    exports: list[ExportFormat] = field(default_factory=list)

    def export(self, export_format: ExportFormat) -> None:
        self.exports.append(export_format)


MOCK_PROFILES: dict[str, Callable[[], MockSchemaService]] = {
    "demo": MockSchemaService,
    "empty": lambda: MockSchemaService(tables=[], objects={}),
    "flaky": lambda: MockSchemaService(failing_types={ObjectType.VIEWS, ObjectType.FUNCTIONS}),
}


def get_mock_profile(name: str) -> MockSchemaService:
    try:
        factory = MOCK_PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown mock profile {name!r} (choose from: {', '.join(MOCK_PROFILES)})") from None
    return factory()
