"""Tests for request sequencing."""

from __future__ import annotations

import asyncio

import pytest

from schemabrowser.domains.explorer.app.sequencer import RequestSequencer
from schemabrowser.domains.explorer.domain.errors import STALE, is_stale
from schemabrowser.domains.explorer.domain.object_types import ObjectType


class TestRequestSequencer:
    def test_tokens_increase(self):
        sequencer = RequestSequencer()
        first = sequencer.next_token(object_type=ObjectType.TABLES)
        second = sequencer.next_token(object_type=ObjectType.VIEWS)

        assert second.sequence_number > first.sequence_number
        assert sequencer.latest == second.sequence_number
        assert not sequencer.is_current(first)
        assert sequencer.is_current(second)

    def test_invalidate_makes_every_token_stale(self):
        sequencer = RequestSequencer()
        token = sequencer.next_token()

        sequencer.invalidate()

        assert not sequencer.is_current(token)

    @pytest.mark.asyncio
    async def test_current_result_is_returned(self):
        sequencer = RequestSequencer()

        async def produce():
            return "rows"

        assert await sequencer.issue(produce) == "rows"

    @pytest.mark.asyncio
    async def test_completion_order_does_not_matter(self):
        sequencer = RequestSequencer()
        loop = asyncio.get_running_loop()
        slow, fast = loop.create_future(), loop.create_future()

        first = asyncio.ensure_future(sequencer.run(sequencer.next_token(), lambda: slow))
        second = asyncio.ensure_future(sequencer.run(sequencer.next_token(), lambda: fast))

        fast.set_result("second")
        assert await second == "second"
        slow.set_result("first")
        assert await first is STALE

    @pytest.mark.asyncio
    async def test_superseded_failure_becomes_stale(self):
        sequencer = RequestSequencer()
        token = sequencer.next_token()
        sequencer.next_token()

        async def explode():
            raise ConnectionError("reset")

        outcome = await sequencer.run(token, explode)
        assert is_stale(outcome)

    @pytest.mark.asyncio
    async def test_current_failure_propagates(self):
        sequencer = RequestSequencer()

        async def explode():
            raise ConnectionError("reset")

        with pytest.raises(ConnectionError):
            await sequencer.issue(explode)

    def test_stale_marker_is_falsy_singleton(self):
        assert not STALE
        assert repr(STALE) == "STALE"
        assert type(STALE)() is STALE
