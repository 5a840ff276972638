"""Trailing-edge debounce for search input, plus local name filtering."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

from schemabrowser.shared.core.utils import substring_match

from ..domain.object_types import Node

DEFAULT_DELAY_S = 0.5


def filter_nodes(items: Sequence[Node], key: str) -> tuple[Node, ...] | None:
    """Case-insensitive substring filter on display names.

    Returns None for an empty key, meaning "no filter" rather than "no match".
    """
    if not key:
        return None
    return tuple(node for node in items if substring_match(key, node.display_name)[0])


class DebouncedFilter:
    """Coalesces rapid key changes into one commit after a quiet period.

    Each ``on_key_change`` restarts the window. The commit callback takes no
    arguments: it is expected to read whatever the latest input is at commit
    time, so nothing typed in between can be lost to an early capture.
    """

    def __init__(self, on_commit: Callable[[], Any], delay_s: float = DEFAULT_DELAY_S) -> None:
        self._on_commit = on_commit
        self._delay_s = delay_s
        self._generation = 0
        self._handle: asyncio.TimerHandle | None = None

    @property
    def delay_s(self) -> float:
        return self._delay_s

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def on_key_change(self, value: str = "") -> None:
        """Restart the quiet window.

        ``value`` is accepted for symmetry with input callbacks but is not
        stored; the commit reads current state instead.
        """
        self.cancel()
        generation = self._generation
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay_s, self._fire, generation)

    def cancel(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, generation: int) -> None:
        # Any restart or cancel since scheduling bumps the generation.
        if generation != self._generation:
            return
        self._handle = None
        self._on_commit()
