"""Drivers: repeatedly poll a multiplexer and wait for wakes.

``MergedStream`` is the async driver behind ``async for item in mux``.
Each poll gets a waker that sets an ``anyio.Event``; on ``PENDING`` the
driver awaits that event, so it sleeps until some member reports progress
and never busy-polls.

``collect`` is the synchronous driver for sources that never need an
event loop (iterables, pre-filled channels). It polls to completion and
raises ``StalledError`` instead of spinning when a poll comes back
``PENDING`` with no wake scheduled.
"""

import logging
from typing import Any

import anyio

from murmur.errors import StalledError
from murmur.poll import Completed, Failed, ItemReady
from murmur.select import SelectAll
from murmur.task import Context, Waker

logger = logging.getLogger("murmur.drive")


class MergedStream[T]:
    """Async iterator over the items of a ``SelectAll``.

    Member failures follow ``config.failure_policy``:

    - ``"raise"``: the member's exception is raised from ``__anext__``.
      The multiplexer keeps its other members, so iterating again resumes.
    - ``"return"``: the exception object is yielded in place of an item.
    - ``"skip"``: the failure is logged and iteration continues.

    Waiting goes through anyio, but async-iterable members are pulled with
    asyncio tasks (``AsyncIterSource``), so run it on the asyncio backend.
    """

    __slots__ = ("_event", "_mux", "_waker")

    def __init__(self, mux: SelectAll[T]) -> None:
        self._mux = mux
        # Created per poll, inside the running loop
        self._event: anyio.Event | None = None
        self._waker = Waker(self._wake)

    def __aiter__(self) -> "MergedStream[T]":
        return self

    async def __anext__(self) -> T:
        config = self._mux.config
        while True:
            self._event = anyio.Event()
            result = self._mux.poll_next(Context(self._waker))

            if isinstance(result, ItemReady):
                return result.item

            if isinstance(result, Completed):
                raise StopAsyncIteration

            if isinstance(result, Failed):
                if config.failure_policy == "raise":
                    raise result.error
                if config.failure_policy == "return":
                    return result.error  # type: ignore[return-value]
                logger.warning("skipping failed source: %s", result.error, exc_info=result.error)
                continue

            with anyio.fail_after(config.idle_timeout):
                await self._event.wait()

    async def aclose(self) -> None:
        """Drop every member of the underlying multiplexer."""
        self._mux.clear()

    def _wake(self) -> None:
        if self._event is not None:
            self._event.set()


def collect(mux: SelectAll[Any], *, return_exceptions: bool = False) -> list[Any]:
    """Poll ``mux`` to completion without an event loop.

    Returns every item in emission order. A member failure is raised, or
    appended to the result when ``return_exceptions`` is true.
    """
    woken = False

    def _wake() -> None:
        nonlocal woken
        woken = True

    cx = Context(Waker(_wake))
    items: list[Any] = []
    while True:
        woken = False
        result = mux.poll_next(cx)

        if isinstance(result, ItemReady):
            items.append(result.item)
        elif isinstance(result, Failed):
            if not return_exceptions:
                raise result.error
            items.append(result.error)
        elif isinstance(result, Completed):
            return items
        elif not woken:
            raise StalledError(len(mux))
