"""Request sequencing: only the most recently issued fetch may be applied."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar, Union

import structlog

from ..domain.errors import STALE, _Stale
from ..domain.object_types import FetchToken, ObjectType
from ..domain.scope import BrowseScope

logger = structlog.get_logger()

R = TypeVar("R")


class RequestSequencer:
    """Tags fetches with increasing sequence numbers and drops superseded ones.

    There is no real cancellation: an in-flight producer always runs to
    completion, and its outcome is swapped for ``STALE`` if any later token
    was handed out in the meantime. Issue order therefore beats completion
    order, whatever the network does.

    Usage:
        token = sequencer.next_token(scope=scope, object_type=ObjectType.TABLES)
        outcome = await sequencer.run(token, lambda: registry.fetch_for(...))
        if outcome is STALE:
            return

    or, when the token does not need to be taken ahead of time:
        outcome = await sequencer.issue(producer)
    """

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        """Sequence number of the most recently issued token."""
        return self._latest

    def next_token(
        self,
        *,
        scope: BrowseScope | None = None,
        object_type: ObjectType | None = None,
    ) -> FetchToken:
        self._latest += 1
        return FetchToken(sequence_number=self._latest, scope=scope, object_type=object_type)

    def invalidate(self) -> None:
        """Make every outstanding token stale."""
        self._latest += 1

    def is_current(self, token: FetchToken) -> bool:
        return token.sequence_number == self._latest

    async def run(self, token: FetchToken, producer: Callable[[], Awaitable[R]]) -> Union[R, _Stale]:
        """Await ``producer`` and return its result, or ``STALE`` if superseded.

        A failure from a superseded producer is discarded too; only the
        current token's exception propagates.
        """
        try:
            result = await producer()
        except Exception as error:
            if not self.is_current(token):
                logger.debug(
                    "stale_failure_discarded",
                    seq=token.sequence_number,
                    latest=self._latest,
                    error=str(error),
                )
                return STALE
            raise
        if not self.is_current(token):
            return STALE
        return result

    async def issue(
        self,
        producer: Callable[[], Awaitable[R]],
        *,
        scope: BrowseScope | None = None,
        object_type: ObjectType | None = None,
    ) -> Union[R, _Stale]:
        token = self.next_token(scope=scope, object_type=object_type)
        return await self.run(token, producer)
