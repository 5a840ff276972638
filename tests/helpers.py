"""Test helpers: controllable fetchers and node builders."""

from __future__ import annotations

import asyncio

from schemabrowser.domains.explorer.app.registry import FullFetch, ObjectTypeRegistry, PagedFetch
from schemabrowser.domains.explorer.domain.object_types import FetchRequest, Node, ObjectType, PagedResponse
from schemabrowser.domains.explorer.domain.scope import BrowseScope

READY_SCOPE = BrowseScope(data_source_id="1", database_name="app", schema_name="public")


class GatedFetcher:
    """Fetch function whose calls stay pending until the test resolves them.

    Lets a test complete requests in any order it likes.
    """

    def __init__(self) -> None:
        self.requests: list[FetchRequest] = []
        self._futures: list[asyncio.Future] = []

    async def __call__(self, request: FetchRequest):
        future = asyncio.get_running_loop().create_future()
        self.requests.append(request)
        self._futures.append(future)
        return await future

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def resolve(self, index: int, value) -> None:
        self._futures[index].set_result(value)

    def fail(self, index: int, error: Exception) -> None:
        self._futures[index].set_exception(error)


class GatedRegistry:
    """An ``ObjectTypeRegistry`` with one ``GatedFetcher`` per object type."""

    def __init__(self) -> None:
        self.gates = {object_type: GatedFetcher() for object_type in ObjectType}
        strategies = {
            object_type: PagedFetch(gate) if object_type.is_paged else FullFetch(gate)
            for object_type, gate in self.gates.items()
        }
        self.registry = ObjectTypeRegistry(strategies)

    def __getitem__(self, object_type: ObjectType) -> GatedFetcher:
        return self.gates[object_type]


def nodes(object_type: ObjectType, *names: str) -> tuple[Node, ...]:
    return tuple(
        Node(identifier=f"{object_type.value}:{name}", display_name=name, object_type=object_type)
        for name in names
    )


def table_page(*names: str, total: int | None = None) -> PagedResponse:
    items = nodes(ObjectType.TABLES, *names)
    return PagedResponse(items=items, total_count=len(items) if total is None else total)


async def settle(rounds: int = 5) -> None:
    """Let freshly created fetch tasks run up to their first real await."""
    for _ in range(rounds):
        await asyncio.sleep(0)
