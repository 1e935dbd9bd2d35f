"""Wake-capable execution context.

Every poll call receives a ``Context``. A member that cannot make progress
keeps a reference to ``cx.waker`` and calls ``wake()`` once it can; the
poller is then expected to poll again. Wakers may fire more often than
necessary (a spurious poll just answers ``PENDING`` again) but must never
stay silent when progress is possible.

Usage::

    def poll_next(self, cx: Context) -> SourcePoll[str]:
        if not self._buffer:
            self._waker = cx.waker
            return PENDING
        return Item(self._buffer.popleft())
"""

from collections.abc import Callable
from dataclasses import dataclass


class Waker:
    """Handle a suspended member uses to request another poll."""

    __slots__ = ("_callback",)

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback

    def wake(self) -> None:
        self._callback()

    def will_wake(self, other: "Waker") -> bool:
        """Whether waking ``other`` would reach the same target as this waker."""
        return self._callback == other._callback

    def __repr__(self) -> str:
        return f"Waker({self._callback!r})"


def _noop() -> None:
    pass


NOOP_WAKER = Waker(_noop)


@dataclass(frozen=True, slots=True)
class Context:
    """Execution context passed into every poll call."""

    waker: Waker = NOOP_WAKER
