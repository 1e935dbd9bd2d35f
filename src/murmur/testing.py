"""Test utilities for murmur.

Helpers for driving a multiplexer by hand and for building sources whose
readiness a test controls step by step::

    from murmur.testing import ScriptedSource, poll_once

    source = ScriptedSource(["a", PENDING, "b"], auto_wake=False)
    mux = select_all([source])
    result, waker = poll_once(mux)      # ItemReady("a")
"""

from collections import deque
from collections.abc import Iterable
from typing import Any

from murmur.poll import EXHAUSTED, PENDING, Item, Pending, SourcePoll
from murmur.task import Context, Waker


class CountingWaker(Waker):
    """A waker that records how many times it fired."""

    __slots__ = ("count",)

    def __init__(self) -> None:
        self.count = 0
        super().__init__(self._record)

    @property
    def woken(self) -> bool:
        return self.count > 0

    def _record(self) -> None:
        self.count += 1


def poll_once(target: Any) -> tuple[Any, CountingWaker]:
    """Poll a ``SelectAll`` (``poll_next``) or ``PendingSet`` (``poll_any``) once.

    Returns the poll result and the waker that was passed in, so a test can
    check whether a wake was requested.
    """
    waker = CountingWaker()
    cx = Context(waker)
    if hasattr(target, "poll_any"):
        return target.poll_any(cx), waker
    return target.poll_next(cx), waker


class ScriptedSource:
    """Source that replays a fixed script, one step per poll.

    Steps:
        - ``PENDING``: answer not-ready. With ``auto_wake`` the waker fires
          immediately; otherwise it is held until ``release()``.
        - an ``Exception`` instance: raised from ``poll_next``
        - anything else: yielded as an ``Item``
        - end of script: ``EXHAUSTED``
    """

    __slots__ = ("_steps", "_waker", "auto_wake", "polls")

    def __init__(self, steps: Iterable[Any], *, auto_wake: bool = True) -> None:
        self._steps: deque[Any] = deque(steps)
        self._waker: Waker | None = None
        self.auto_wake = auto_wake
        self.polls = 0

    @property
    def waiting(self) -> bool:
        """True while a not-ready answer is waiting on ``release()``."""
        return self._waker is not None

    def poll_next(self, cx: Context) -> SourcePoll[Any]:
        self.polls += 1
        if not self._steps:
            return EXHAUSTED
        step = self._steps.popleft()
        if isinstance(step, Pending):
            if self.auto_wake:
                cx.waker.wake()
            else:
                self._waker = cx.waker
            return PENDING
        if isinstance(step, Exception):
            raise step
        return Item(step)

    def release(self) -> None:
        """Fire the held waker, if any."""
        waker, self._waker = self._waker, None
        if waker is not None:
            waker.wake()

    def __repr__(self) -> str:
        return f"ScriptedSource(remaining={len(self._steps)})"
