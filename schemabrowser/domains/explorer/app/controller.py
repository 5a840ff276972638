"""Object browser controller.

Owns the single ``BrowserState`` snapshot and turns user triggers into
fetches. All triggers run synchronously on the event loop; fetches run as
tasks whose outcomes pass through the ``RequestSequencer`` before they are
allowed to touch state.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import replace

import structlog

from schemabrowser.config import BrowserSettings

from ..domain.errors import FetchFailed, ScopeNotReady, is_stale
from ..domain.messages import (
    BrowserMessage,
    PageChanged,
    PageSizeChanged,
    RefreshRequested,
    ScopeChanged,
    SearchBlurred,
    SearchCommitted,
    SearchInputChanged,
    SearchOpened,
    TypeSwitched,
)
from ..domain.object_types import (
    PAGE_SIZE_OPTIONS,
    Node,
    ObjectType,
    PageState,
    ResultSet,
    SearchState,
)
from ..domain.scope import BrowseScope
from ..domain.state import BrowserState, BrowserStatus
from . import debounce
from .debounce import DebouncedFilter
from .registry import ObjectTypeRegistry
from .sequencer import RequestSequencer

logger = structlog.get_logger()

StateListener = Callable[[BrowserState], None]
TableListSink = Callable[[Sequence[Node]], None]


class BrowserController:
    """State machine behind the object browser.

    Usage:
        controller = BrowserController(ObjectTypeRegistry.from_service(service))
        controller.subscribe(render)
        controller.set_scope(BrowseScope(data_source_id=1, database_name="app"))
        controller.switch_type(ObjectType.VIEWS)
        controller.type_search("user")

    Every trigger method returns the fetch task it started, or None when the
    trigger was handled locally or ignored.
    """

    def __init__(
        self,
        registry: ObjectTypeRegistry,
        *,
        settings: BrowserSettings | None = None,
        sequencer: RequestSequencer | None = None,
        table_list_sink: TableListSink | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings or BrowserSettings()
        self._sequencer = sequencer or RequestSequencer()
        self._table_list_sink = table_list_sink
        self._debounce = DebouncedFilter(
            lambda: self.dispatch(SearchCommitted()),
            delay_s=self._settings.debounce_seconds,
        )
        self._state = BrowserState.initial(page_size=self._settings.default_page_size)
        self._listeners: list[StateListener] = []
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> BrowserState:
        return self._state

    @property
    def settings(self) -> BrowserSettings:
        return self._settings

    @property
    def search_pending(self) -> bool:
        """Whether a debounced search commit is waiting to fire."""
        return self._debounce.pending

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- triggers -----------------------------------------------------------

    def set_scope(self, scope: BrowseScope) -> asyncio.Task[None] | None:
        return self.dispatch(ScopeChanged(scope))

    def switch_type(self, object_type: ObjectType) -> asyncio.Task[None] | None:
        return self.dispatch(TypeSwitched(object_type))

    def change_page(self, page_number: int) -> asyncio.Task[None] | None:
        return self.dispatch(PageChanged(page_number))

    def change_page_size(self, page_size: int) -> asyncio.Task[None] | None:
        return self.dispatch(PageSizeChanged(page_size))

    def type_search(self, value: str) -> None:
        self.dispatch(SearchInputChanged(value))

    def open_search(self) -> None:
        self.dispatch(SearchOpened())

    def blur_search(self) -> None:
        self.dispatch(SearchBlurred())

    def refresh(self) -> asyncio.Task[None] | None:
        return self.dispatch(RefreshRequested())

    def dispatch(self, message: BrowserMessage) -> asyncio.Task[None] | None:
        """Apply one trigger to the state.

        Triggers other than a scope change are ignored while the scope is
        not ready.
        """
        if isinstance(message, ScopeChanged):
            return self._on_scope_changed(message.scope)
        try:
            self._require_ready()
        except ScopeNotReady:
            logger.debug("trigger_ignored", trigger=type(message).__name__, reason="scope_not_ready")
            return None

        if isinstance(message, TypeSwitched):
            return self._on_type_switched(message.object_type)
        if isinstance(message, PageChanged):
            return self._on_page_changed(message.page_number)
        if isinstance(message, PageSizeChanged):
            return self._on_page_size_changed(message.page_size)
        if isinstance(message, SearchInputChanged):
            self._on_search_input(message.value)
            return None
        if isinstance(message, SearchOpened):
            self._set_state(self._state.evolve(search=replace(self._state.search, is_search_mode_active=True)))
            return None
        if isinstance(message, SearchBlurred):
            self._on_search_blurred()
            return None
        if isinstance(message, SearchCommitted):
            return self._on_search_committed()
        if isinstance(message, RefreshRequested):
            return self._on_refresh()
        raise TypeError(f"Unknown browser message: {message!r}")

    async def wait_for_pending(self) -> None:
        """Wait until every fetch task started so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Drop pending search commits and in-flight fetches."""
        self._debounce.cancel()
        self._sequencer.invalidate()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._listeners.clear()

    # -- trigger handlers ---------------------------------------------------

    def _require_ready(self) -> None:
        if not self._state.scope_ready:
            raise ScopeNotReady(self._state.scope)

    def _on_scope_changed(self, scope: BrowseScope) -> asyncio.Task[None] | None:
        self._debounce.cancel()
        self._sequencer.invalidate()
        reset = BrowserState.initial(scope=scope, page_size=self._state.page.page_size)
        logger.info("scope_changed", scope=scope.describe(), ready=scope.is_ready)
        if not scope.is_ready:
            self._set_state(reset)
            return None
        return self._issue_fetch(reset)

    def _on_type_switched(self, object_type: ObjectType) -> asyncio.Task[None] | None:
        if object_type is self._state.object_type:
            return None
        self._debounce.cancel()
        state = self._state.evolve(
            object_type=object_type,
            page=PageState(page_size=self._state.page.page_size),
            search=SearchState(),
            items=(),
            filtered_items=None,
        )
        return self._issue_fetch(state)

    def _on_page_changed(self, page_number: int) -> asyncio.Task[None] | None:
        if page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {page_number}")
        if not self._state.object_type.is_paged:
            logger.debug("trigger_ignored", trigger="PageChanged", reason="not_paged")
            return None
        if page_number == self._state.page.page_number:
            return None
        page = replace(self._state.page, page_number=page_number)
        return self._issue_fetch(self._state.evolve(page=page))

    def _on_page_size_changed(self, page_size: int) -> asyncio.Task[None] | None:
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {PAGE_SIZE_OPTIONS}, got {page_size}")
        if page_size == self._state.page.page_size:
            return None
        page = replace(self._state.page, page_number=1, page_size=page_size)
        return self._issue_fetch(self._state.evolve(page=page))

    def _on_search_input(self, value: str) -> None:
        search = self._state.search
        if value == search.raw_input and (value or not search.is_search_mode_active):
            return
        if value:
            search = replace(search, raw_input=value, is_search_mode_active=True)
            self._set_state(self._state.evolve(search=search))
        else:
            search = replace(search, raw_input="", is_search_mode_active=False)
            self._set_state(self._state.evolve(search=search, filtered_items=None))
        self._debounce.on_key_change(value)

    def _on_search_blurred(self) -> None:
        if self._state.search.raw_input:
            return
        search = replace(self._state.search, is_search_mode_active=False)
        self._set_state(self._state.evolve(search=search, filtered_items=None))

    def _on_search_committed(self) -> asyncio.Task[None] | None:
        state = self._state
        key = state.search.raw_input
        search = replace(state.search, committed_key=key)
        if state.object_type.is_paged:
            logger.debug("search_committed", object_type=state.object_type.value, key=key, remote=True)
            page = replace(state.page, page_number=1)
            return self._issue_fetch(state.evolve(search=search, page=page))

        filtered = debounce.filter_nodes(state.items, key)
        logger.debug(
            "search_committed",
            object_type=state.object_type.value,
            key=key,
            remote=False,
            matches=None if filtered is None else len(filtered),
        )
        self._set_state(state.evolve(search=search, filtered_items=filtered))
        return None

    def _on_refresh(self) -> asyncio.Task[None] | None:
        return self._issue_fetch(self._state.evolve(items=(), filtered_items=None), refresh=True)

    # -- fetching -----------------------------------------------------------

    def _issue_fetch(self, state: BrowserState, *, refresh: bool = False) -> asyncio.Task[None]:
        """Move to Loading and start a fetch for ``state``'s intent.

        The token is taken here, synchronously, so sequence numbers follow
        trigger order even if tasks start later.
        """
        state = state.evolve(status=BrowserStatus.LOADING, error=None)
        self._set_state(state)

        object_type = state.object_type
        token = self._sequencer.next_token(scope=state.scope, object_type=object_type)
        page = state.page if object_type.is_paged else None
        search_key = state.search.raw_input
        log = logger.bind(seq=token.sequence_number, object_type=object_type.value)
        log.debug(
            "fetch_issued",
            scope=state.scope.describe(),
            page=None if page is None else page.page_number,
            page_size=None if page is None else page.page_size,
            search_key=search_key,
            refresh=refresh,
        )

        async def run() -> None:
            try:
                outcome = await self._sequencer.run(
                    token,
                    lambda: self._registry.fetch_for(
                        object_type,
                        state.scope,
                        page=page,
                        search_key=search_key,
                        refresh=refresh,
                    ),
                )
            except FetchFailed as error:
                log.warning("fetch_failed", error=error.message)
                self._apply_failure(error)
                return
            if is_stale(outcome):
                log.debug("fetch_discarded_stale", latest=self._sequencer.latest)
                return
            log.debug("fetch_applied", count=len(outcome), total=outcome.total_count)
            self._apply_result(outcome)

        task = asyncio.get_running_loop().create_task(run(), name=f"browse-{object_type.value}-{token.sequence_number}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _apply_result(self, result: ResultSet) -> None:
        state = self._state
        page = state.page
        if state.object_type.is_paged:
            page = replace(page, total_count=result.total_count or 0)
        filtered = None
        if not state.object_type.is_paged and state.search.committed_key:
            filtered = debounce.filter_nodes(result.items, state.search.committed_key)
        status = BrowserStatus.LOADED_EMPTY if result.is_empty else BrowserStatus.LOADED_NON_EMPTY
        self._set_state(
            state.evolve(
                status=status,
                page=page,
                items=result.items,
                filtered_items=filtered,
                error=None,
            )
        )
        if state.object_type.is_paged and self._table_list_sink is not None:
            self._table_list_sink(result.items)

    def _apply_failure(self, error: FetchFailed) -> None:
        self._set_state(
            self._state.evolve(
                status=BrowserStatus.ERROR,
                items=(),
                filtered_items=None,
                error=str(error),
            )
        )

    def _set_state(self, state: BrowserState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

