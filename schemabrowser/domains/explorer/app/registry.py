"""Fetch strategies for each object type."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from ..domain.errors import FetchFailed, ScopeNotReady
from ..domain.object_types import (
    FetchRequest,
    Node,
    ObjectType,
    PagedResponse,
    PageState,
    ResultSet,
)

if TYPE_CHECKING:
    from schemabrowser.shared.core.protocols import SchemaServiceProtocol

    from ..domain.scope import BrowseScope

PagedFetchFn = Callable[[FetchRequest], Awaitable[PagedResponse]]
FullFetchFn = Callable[[FetchRequest], Awaitable[Sequence[Node]]]


@dataclass(frozen=True)
class PagedFetch:
    """Listing fetched one bounded page at a time."""

    fetch: PagedFetchFn


@dataclass(frozen=True)
class FullFetch:
    """Listing fetched in full on every request."""

    fetch: FullFetchFn


FetchStrategy = Union[PagedFetch, FullFetch]


class ObjectTypeRegistry:
    """Maps every object type to its fetch strategy.

    The registry only sees the parameters it is handed; it never reads
    controller state and never retries.
    """

    def __init__(self, strategies: Mapping[ObjectType, FetchStrategy]) -> None:
        missing = [t.value for t in ObjectType if t not in strategies]
        if missing:
            raise ValueError(f"No fetch strategy registered for: {', '.join(missing)}")
        for object_type, strategy in strategies.items():
            expected = PagedFetch if object_type.is_paged else FullFetch
            if not isinstance(strategy, expected):
                raise TypeError(
                    f"{object_type.value} needs a {expected.__name__} strategy, got {type(strategy).__name__}"
                )
        self._strategies = dict(strategies)

    @classmethod
    def from_service(cls, service: SchemaServiceProtocol) -> ObjectTypeRegistry:
        """Build a registry over a blocking schema service.

        Each call runs in a worker thread so the event loop stays responsive.
        """

        async def fetch_tables(request: FetchRequest) -> PagedResponse:
            items, total = await asyncio.to_thread(
                service.list_tables,
                request.scope,
                page_number=request.page_number,
                page_size=request.page_size,
                search_key=request.search_key,
                refresh=request.refresh,
            )
            return PagedResponse(items=tuple(items), total_count=total)

        def full_fetch(object_type: ObjectType) -> FullFetch:
            async def fetch(request: FetchRequest) -> Sequence[Node]:
                return await asyncio.to_thread(
                    service.list_objects,
                    object_type,
                    request.scope,
                    search_key=request.search_key,
                    refresh=request.refresh,
                )

            return FullFetch(fetch)

        strategies: dict[ObjectType, FetchStrategy] = {ObjectType.TABLES: PagedFetch(fetch_tables)}
        for object_type in ObjectType:
            if not object_type.is_paged:
                strategies[object_type] = full_fetch(object_type)
        return cls(strategies)

    def strategy_for(self, object_type: ObjectType) -> FetchStrategy:
        return self._strategies[object_type]

    async def fetch_for(
        self,
        object_type: ObjectType,
        scope: BrowseScope,
        page: PageState | None = None,
        search_key: str = "",
        refresh: bool = False,
    ) -> ResultSet:
        """Fetch the listing for one object type.

        Raises:
            ScopeNotReady: If ``scope`` cannot be browsed yet.
            ValueError: If a paged type is fetched without a page.
            FetchFailed: If the collaborator rejected or raised.
        """
        if not scope.is_ready:
            raise ScopeNotReady(scope)

        strategy = self.strategy_for(object_type)
        if isinstance(strategy, PagedFetch):
            if page is None:
                raise ValueError(f"{object_type.value} is paged; a page state is required")
            request = FetchRequest(
                scope=scope,
                object_type=object_type,
                search_key=search_key,
                refresh=refresh,
                page_number=page.page_number,
                page_size=page.page_size,
            )
            try:
                response = await strategy.fetch(request)
            except Exception as error:
                raise FetchFailed(object_type, str(error) or type(error).__name__) from error
            return ResultSet(items=tuple(response.items), total_count=response.total_count)

        request = FetchRequest(
            scope=scope,
            object_type=object_type,
            search_key=search_key,
            refresh=refresh,
        )
        try:
            items = await strategy.fetch(request)
        except Exception as error:
            raise FetchFailed(object_type, str(error) or type(error).__name__) from error
        return ResultSet(items=tuple(items))
