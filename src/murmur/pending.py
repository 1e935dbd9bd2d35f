"""PendingSet: an unbounded set of suspended units, resumed on wake.

Units live in an arena of slots addressed by integer index. Each slot owns
its own ``Waker``; waking it appends the slot's ``(index, generation)``
token to a ready queue and then wakes whoever last polled the set.
``poll_any`` drains that queue and resumes exactly the woken slots, so one
external wake never costs a scan over every member.

Freed indices go on a free list and are reused by later pushes. Every push
gets a fresh generation number; a token whose generation no longer matches
its slot belongs to a unit that already finished and is skipped.

Lifecycle of one slot::

    push()        -> allocated, queued for its first poll
    unit PENDING  -> parked until its waker fires
    waker fires   -> queued again
    unit Ready    -> released, index back on the free list
    unit raises   -> released, error surfaced once as Ready(error=...)
"""

import functools
import logging
from collections import deque
from collections.abc import Iterator
from enum import Enum
from typing import Protocol, runtime_checkable

from murmur.poll import EMPTY, PENDING, Ready, SetPoll, UnitPoll
from murmur.task import NOOP_WAKER, Context, Waker

logger = logging.getLogger("murmur.pending")


class UnitState(Enum):
    """Where a pending unit is in its life."""

    NOT_STARTED = "not_started"
    SUSPENDED = "suspended"
    FINISHED = "finished"


@runtime_checkable
class PendingUnit[T](Protocol):
    """Anything a PendingSet can hold.

    ``poll`` answers ``PENDING`` (after registering ``cx.waker``) or a
    terminal ``Ready``. Raising an ``Exception`` also ends the unit.
    """

    def poll(self, cx: Context) -> UnitPoll[T]: ...


class _Slot:
    """One arena entry. Mutable, owned by the set."""

    __slots__ = ("generation", "queued", "unit", "waker")

    def __init__(self, unit: PendingUnit, generation: int, waker: Waker) -> None:
        self.unit = unit
        self.generation = generation
        self.waker = waker
        # True while a token for this slot sits in the ready queue
        self.queued = False


class PendingSet[T]:
    """Unordered collection of pending units, resumed only when woken.

    Usage::

        pending = PendingSet()
        pending.push(unit)
        match pending.poll_any(cx):
            case Ready(value=value): ...
    """

    __slots__ = ("_budget", "_free", "_generation", "_len", "_parent", "_ready", "_slots")

    def __init__(self, *, poll_budget: int = 32) -> None:
        self._slots: list[_Slot | None] = []
        self._free: list[int] = []
        self._ready: deque[tuple[int, int]] = deque()
        self._len = 0
        self._generation = 0
        self._budget = poll_budget
        # Waker of the most recent poll_any caller
        self._parent: Waker = NOOP_WAKER

    def __len__(self) -> int:
        return self._len

    def is_empty(self) -> bool:
        return self._len == 0

    def __iter__(self) -> Iterator[PendingUnit[T]]:
        for slot in self._slots:
            if slot is not None:
                yield slot.unit

    def __repr__(self) -> str:
        return f"PendingSet(len={self._len}, ready={len(self._ready)})"

    def push(self, unit: PendingUnit[T]) -> None:
        """Add a unit. It is not polled until the next ``poll_any``.

        Safe to call from inside the owner's own poll handling. Wakes the
        last registered poller so a waiting driver notices the newcomer.
        """
        self._generation += 1
        generation = self._generation
        if self._free:
            index = self._free.pop()
        else:
            index = len(self._slots)
            self._slots.append(None)

        waker = Waker(functools.partial(self._wake_slot, index, generation))
        slot = _Slot(unit, generation, waker)
        self._slots[index] = slot
        self._len += 1

        slot.queued = True
        self._ready.append((index, generation))
        logger.debug("pushed unit into slot %d (len=%d)", index, self._len)
        self._parent.wake()

    def poll_any(self, cx: Context) -> SetPoll[T]:
        """Resume woken units until one finishes or none are left to try.

        Returns ``EMPTY`` when the set holds nothing, ``Ready`` for the first
        unit that finished (it is removed), or ``PENDING`` once every woken
        unit has parked again. ``cx.waker`` is woken whenever any member
        becomes ready later.
        """
        self._parent = cx.waker
        if self._len == 0:
            return EMPTY

        parked = 0
        while self._ready:
            index, generation = self._ready.popleft()
            slot = self._slots[index]
            if slot is None or slot.generation != generation:
                continue  # stale token
            slot.queued = False

            try:
                result = slot.unit.poll(Context(slot.waker))
            except Exception as exc:
                self._release(index)
                logger.debug("unit in slot %d failed: %r", index, exc)
                return Ready(error=exc)

            if isinstance(result, Ready):
                self._release(index)
                return result

            parked += 1
            if parked >= self._budget:
                # Hand control back but ask to be polled again right away
                logger.debug("poll budget of %d spent, yielding", self._budget)
                cx.waker.wake()
                return PENDING

        return PENDING

    def clear(self) -> list[PendingUnit[T]]:
        """Drop every unit and return them, in slot order."""
        dropped = list(self)
        self._slots.clear()
        self._free.clear()
        self._ready.clear()
        self._len = 0
        return dropped

    def _wake_slot(self, index: int, generation: int) -> None:
        if index >= len(self._slots):
            return
        slot = self._slots[index]
        if slot is None or slot.generation != generation or slot.queued:
            return
        slot.queued = True
        self._ready.append((index, generation))
        self._parent.wake()

    def _release(self, index: int) -> None:
        self._slots[index] = None
        self._free.append(index)
        self._len -= 1
