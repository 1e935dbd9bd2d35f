"""SelectAll: merge a dynamic set of sources into one stream.

Each tracked source is wrapped in a ``PullNext`` unit ("pull one item and
hand the source back") held by a ``PendingSet``. On every poll the
multiplexer asks the set for whichever unit finished first:

- an item: the source is pushed back as a fresh ``PullNext`` *before* the
  item is reported, so ``len()`` never drops a live member
- exhaustion: the source is dropped and polling continues, so one call can
  still surface an item from another member
- a failure: reported once as ``Failed``; the other members keep going
- the set is empty: ``COMPLETED``

Items come out in readiness order. No ordering across sources is
promised, only that every item is surfaced exactly once.

Usage::

    mux = select_all([feed_a(), feed_b()])
    mux.push(feed_c())          # at any time, even mid-iteration
    async for item in mux:
        ...
"""

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from murmur.config import MuxConfig
from murmur.pending import PendingSet, UnitState
from murmur.poll import (
    COMPLETED,
    EXHAUSTED,
    PENDING,
    Completed,
    Empty,
    Exhausted,
    Failed,
    Item,
    ItemReady,
    Pending,
    Pulled,
    Ready,
    SourcePoll,
    StreamPoll,
    UnitPoll,
)
from murmur.sources import Source, as_source
from murmur.task import Context

if TYPE_CHECKING:
    from murmur.drive import MergedStream

logger = logging.getLogger("murmur.select")


class PullNext[T]:
    """Pending unit: pull the next item from one source.

    Finishes with ``Pulled(outcome, source)`` so ownership of the source
    goes back to whoever holds the unit.
    """

    __slots__ = ("source", "state")

    def __init__(self, source: Source[T]) -> None:
        self.source = source
        self.state = UnitState.NOT_STARTED

    def poll(self, cx: Context) -> UnitPoll[Pulled[T]]:
        if self.state is UnitState.FINISHED:
            msg = "PullNext polled after it finished."
            raise RuntimeError(msg)

        outcome = self.source.poll_next(cx)
        if isinstance(outcome, Pending):
            self.state = UnitState.SUSPENDED
            return PENDING
        if not isinstance(outcome, Item | Exhausted | Failed):
            self.state = UnitState.FINISHED
            msg = (
                f"{type(self.source).__name__}.poll_next() returned {outcome!r}; "
                "expected Item, Failed, EXHAUSTED or PENDING."
            )
            raise TypeError(msg)

        self.state = UnitState.FINISHED
        return Ready(Pulled(outcome, self.source))

    def __repr__(self) -> str:
        return f"PullNext({self.source!r}, {self.state.value})"


class NestedSource[T]:
    """A ``SelectAll`` tracked as one member of another ``SelectAll``.

    Translates the inner multiplexer's answers into source answers:
    ``ItemReady`` becomes ``Item``, ``COMPLETED`` becomes ``EXHAUSTED`` and
    ``Failed`` is passed through, so one inner failure does not drop the
    other inner members.
    """

    __slots__ = ("inner",)

    def __init__(self, inner: "SelectAll[T]") -> None:
        self.inner = inner

    def poll_next(self, cx: Context) -> SourcePoll[T]:
        result = self.inner.poll_next(cx)
        if isinstance(result, ItemReady):
            return Item(result.item)
        if isinstance(result, Completed):
            return EXHAUSTED
        # Failed passes through so the inner members stay tracked
        return result

    def close(self) -> None:
        self.inner.clear()

    def __repr__(self) -> str:
        return f"NestedSource({self.inner!r})"


class SelectAll[T]:
    """An unbounded, growable set of sources polled as one stream.

    Sources are only polled once they have signalled progress, which keeps
    large sets cheap. Start empty with ``SelectAll()`` or from a collection
    with ``select_all()``.
    """

    __slots__ = ("_config", "_pending", "_terminated")

    def __init__(self, config: MuxConfig | None = None) -> None:
        self._config = config or MuxConfig()
        self._pending: PendingSet[Pulled[T]] = PendingSet(poll_budget=self._config.poll_budget)
        self._terminated = False

    @property
    def config(self) -> MuxConfig:
        return self._config

    @property
    def is_terminated(self) -> bool:
        """True after ``COMPLETED`` was reported and nothing was pushed since."""
        return self._terminated

    def __len__(self) -> int:
        return len(self._pending)

    def is_empty(self) -> bool:
        return self._pending.is_empty()

    def push(self, source: Any) -> None:
        """Start tracking ``source``.

        Accepts a ``Source``, another ``SelectAll``, an async iterable, or an
        iterable. The source is not polled here; the first pull happens on the next
        ``poll_next``, which the caller must arrange.
        """
        self._pending.push(PullNext(as_source(source)))
        self._terminated = False
        logger.debug("tracking %r (len=%d)", source, len(self._pending))

    def extend(self, sources: Iterable[Any]) -> None:
        for source in sources:
            self.push(source)

    def sources(self) -> Iterator[Source[T]]:
        """Iterate the sources currently tracked."""
        for unit in self._pending:
            yield unit.source

    def poll_next(self, cx: Context) -> StreamPoll[T]:
        while True:
            result = self._pending.poll_any(cx)

            if isinstance(result, Pending):
                return PENDING

            if isinstance(result, Empty):
                if not self._terminated:
                    logger.debug("all sources finished")
                self._terminated = True
                return COMPLETED

            if result.failed:
                return Failed(result.error)

            pulled: Pulled[T] = result.value
            if isinstance(pulled.outcome, Item):
                self._pending.push(PullNext(pulled.source))
                return ItemReady(pulled.outcome.value)

            if isinstance(pulled.outcome, Failed):
                # Reported failure from a source that stays live
                self._pending.push(PullNext(pulled.source))
                return pulled.outcome

            logger.debug("source exhausted: %r (len=%d)", pulled.source, len(self._pending))

    def clear(self) -> None:
        """Stop tracking every source.

        With ``config.close_sources`` set, sources exposing ``close()`` are
        closed as they are dropped.
        """
        dropped = self._pending.clear()
        if not self._config.close_sources:
            return
        for unit in dropped:
            close = getattr(unit.source, "close", None)
            if callable(close):
                close()

    def __aiter__(self) -> "MergedStream[T]":
        from murmur.drive import MergedStream

        return MergedStream(self)

    def __repr__(self) -> str:
        return f"SelectAll(len={len(self)})"


def select_all[T](sources: Iterable[Any], config: MuxConfig | None = None) -> SelectAll[T]:
    """Bundle ``sources`` into one ``SelectAll``, pushed in iteration order.

    Items are yielded as they become available on any source. More sources
    can be pushed into the returned set at any time.
    """
    mux: SelectAll[T] = SelectAll(config)
    mux.extend(sources)
    return mux
