"""Tests for murmur.testing: CountingWaker, poll_once, ScriptedSource."""

import pytest

from murmur.pending import PendingSet
from murmur.poll import COMPLETED, EMPTY, EXHAUSTED, PENDING, Item
from murmur.select import SelectAll
from murmur.task import Context
from murmur.testing import CountingWaker, ScriptedSource, poll_once


class TestCountingWaker:
    def test_counts(self) -> None:
        waker = CountingWaker()
        assert not waker.woken

        waker.wake()
        waker.wake()
        assert waker.count == 2
        assert waker.woken


class TestPollOnce:
    def test_polls_select_all(self) -> None:
        result, waker = poll_once(SelectAll())
        assert result is COMPLETED
        assert isinstance(waker, CountingWaker)

    def test_polls_pending_set(self) -> None:
        result, _ = poll_once(PendingSet())
        assert result is EMPTY


class TestScriptedSource:
    def test_replays_script(self) -> None:
        source = ScriptedSource(["a", PENDING, "b"])
        waker = CountingWaker()
        cx = Context(waker)

        assert source.poll_next(cx) == Item("a")
        assert source.poll_next(cx) is PENDING
        assert waker.count == 1
        assert source.poll_next(cx) == Item("b")
        assert source.poll_next(cx) is EXHAUSTED
        assert source.polls == 4

    def test_held_wake(self) -> None:
        source = ScriptedSource([PENDING], auto_wake=False)
        waker = CountingWaker()

        assert source.poll_next(Context(waker)) is PENDING
        assert source.waiting
        assert not waker.woken

        source.release()
        assert waker.count == 1
        assert not source.waiting

        source.release()
        assert waker.count == 1

    def test_raises_scripted_error(self) -> None:
        source = ScriptedSource([KeyError("k")])
        with pytest.raises(KeyError):
            source.poll_next(Context())
