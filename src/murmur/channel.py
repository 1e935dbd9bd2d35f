"""Channel: a source fed by hand.

Producers call ``send`` / ``fail`` / ``close``; the multiplexer drains the
channel through ``poll_next``. Every state change wakes the last waker
that found the channel empty, so a parked multiplexer resumes as soon as
there is something to deliver.

Usage::

    updates = Channel()
    mux = select_all([updates])

    updates.send("hello")
    updates.close()
"""

from collections import deque

from murmur.errors import ChannelClosedError
from murmur.poll import EXHAUSTED, PENDING, Item, SourcePoll
from murmur.task import Context, Waker


class Channel[T]:
    """Unbounded single-consumer channel usable as a source.

    Failures queued with ``fail`` are delivered in order with the items:
    the poll that reaches one raises it. Items queued before ``close``
    are still delivered; exhaustion follows the last of them.
    """

    __slots__ = ("_buffer", "_closed", "_waker")

    def __init__(self) -> None:
        self._buffer: deque[Item[T] | Exception] = deque()
        self._closed = False
        self._waker: Waker | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._buffer)

    def send(self, item: T) -> None:
        self._ensure_open()
        self._buffer.append(Item(item))
        self._wake()

    def fail(self, error: Exception) -> None:
        self._ensure_open()
        self._buffer.append(error)
        self._wake()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._wake()

    def poll_next(self, cx: Context) -> SourcePoll[T]:
        if self._buffer:
            entry = self._buffer.popleft()
            if isinstance(entry, Exception):
                raise entry
            return entry
        if self._closed:
            return EXHAUSTED
        if self._waker is None or not self._waker.will_wake(cx.waker):
            self._waker = cx.waker
        return PENDING

    def _ensure_open(self) -> None:
        if self._closed:
            msg = "Cannot send on a closed channel."
            raise ChannelClosedError(msg)

    def _wake(self) -> None:
        waker, self._waker = self._waker, None
        if waker is not None:
            waker.wake()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"Channel({state}, buffered={len(self._buffer)})"
