"""Source protocol and adapters.

A *source* is anything that can be asked for its next item and may answer
"not yet". murmur never looks inside a source; it only calls
``poll_next`` and reacts to the answer:

- ``Item(value)``: one item, the source stays live
- ``EXHAUSTED``: no more items
- ``PENDING``: not ready; the source will wake ``cx.waker`` later
- raising an ``Exception``: the source failed and is dropped
- ``Failed(error)``: report a failure but stay live (a nested ``SelectAll``
  answers this way when one of its own members fails)

A source's final item and its exhaustion are never reported together:
the last item comes back as ``Item`` and the *next* poll answers
``EXHAUSTED``.

Plain iterables and async iterators are adapted with ``as_source``, so
``SelectAll.push`` accepts them directly.
"""

import asyncio
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from typing import Any, Protocol, runtime_checkable

from murmur.poll import EXHAUSTED, PENDING, Item, SourcePoll
from murmur.task import Context, Waker


@runtime_checkable
class Source[T](Protocol):
    """Produces items one poll at a time."""

    def poll_next(self, cx: Context) -> SourcePoll[T]: ...


class IterSource[T]:
    """A synchronous iterable as a source. Always ready."""

    __slots__ = ("_iterator",)

    def __init__(self, iterable: Iterable[T]) -> None:
        self._iterator: Iterator[T] = iter(iterable)

    def poll_next(self, cx: Context) -> SourcePoll[T]:
        try:
            return Item(next(self._iterator))
        except StopIteration:
            return EXHAUSTED

    def __repr__(self) -> str:
        return f"IterSource({self._iterator!r})"


class AsyncIterSource[T]:
    """An async iterator as a source.

    Each pull runs ``__anext__()`` as a task on the running event loop.
    While that task is in flight the source answers ``PENDING``; the task's
    done callback wakes whichever waker polled last. The in-flight task
    survives across polls, so nothing is lost between wakes.

    Must be polled from inside a running asyncio event loop; anyio's trio
    backend is not supported for async-iterable sources.
    """

    __slots__ = ("_done", "_iterator", "_task", "_waker")

    def __init__(self, aiterable: AsyncIterable[T]) -> None:
        self._iterator: AsyncIterator[T] = aiterable.__aiter__()
        self._task: asyncio.Task[T] | None = None
        self._waker: Waker | None = None
        self._done = False

    def poll_next(self, cx: Context) -> SourcePoll[T]:
        if self._done:
            return EXHAUSTED

        if self._waker is None or not self._waker.will_wake(cx.waker):
            self._waker = cx.waker
        if self._task is None:
            iterator = self._iterator

            async def _next() -> T:
                return await iterator.__anext__()

            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                msg = "AsyncIterSource must be polled from a running asyncio event loop."
                raise RuntimeError(msg) from None
            self._task = loop.create_task(_next())
            self._task.add_done_callback(self._on_done)

        if not self._task.done():
            return PENDING

        task, self._task = self._task, None
        self._waker = None
        try:
            value = task.result()
        except StopAsyncIteration:
            self._done = True
            return EXHAUSTED
        return Item(value)

    def close(self) -> None:
        """Stop pulling. Cancels an in-flight ``__anext__()`` task."""
        self._done = True
        self._waker = None
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            task.cancel()
        elif not task.cancelled():
            # Retrieve it so asyncio does not report it as never retrieved
            task.exception()

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        if self._waker is not None:
            self._waker.wake()

    def __repr__(self) -> str:
        state = "done" if self._done else "in-flight" if self._task else "idle"
        return f"AsyncIterSource({self._iterator!r}, {state})"


def as_source(obj: Any) -> Source[Any]:
    """Coerce ``obj`` into a source.

    Dispatch:
        - ``SelectAll``     -> ``NestedSource``
        - has ``poll_next`` -> returned as-is
        - async iterable    -> ``AsyncIterSource``
        - iterable          -> ``IterSource``
    """
    from murmur.select import NestedSource, SelectAll

    if isinstance(obj, SelectAll):
        return NestedSource(obj)
    if isinstance(obj, Source):
        return obj
    if isinstance(obj, AsyncIterable):
        return AsyncIterSource(obj)
    if isinstance(obj, Iterable):
        return IterSource(obj)
    msg = (
        f"Cannot use {type(obj).__name__} as a source. "
        "Expected an object with poll_next(), an async iterable, or an iterable."
    )
    raise TypeError(msg)
