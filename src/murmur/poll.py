"""Poll result vocabulary.

Every poll in murmur answers with one of these frozen values. Producers
and consumers dispatch on them with ``isinstance`` (or ``is`` for the
singletons) instead of sentinels like ``None``, so an item that happens
to be ``None`` is never mistaken for "nothing yet".

Layers and what each may return::

    Source.poll_next      -> Item | Failed | EXHAUSTED | PENDING  (or raise)
    PendingUnit.poll      -> Ready | PENDING                 (or raise)
    PendingSet.poll_any   -> Ready | PENDING | EMPTY
    SelectAll.poll_next   -> ItemReady | Failed | PENDING | COMPLETED
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Pending:
    """Not ready yet. The poller's waker has been registered."""

    def __repr__(self) -> str:
        return "PENDING"


@dataclass(frozen=True, slots=True)
class Empty:
    """A pending set holds no units at all; there is nothing to wait on."""

    def __repr__(self) -> str:
        return "EMPTY"


@dataclass(frozen=True, slots=True)
class Exhausted:
    """A source has no further items."""

    def __repr__(self) -> str:
        return "EXHAUSTED"


@dataclass(frozen=True, slots=True)
class Completed:
    """A multiplexer has no members left. Terminal."""

    def __repr__(self) -> str:
        return "COMPLETED"


PENDING = Pending()
EMPTY = Empty()
EXHAUSTED = Exhausted()
COMPLETED = Completed()


@dataclass(frozen=True, slots=True)
class Item[T]:
    """One item produced by a source."""

    value: T


@dataclass(frozen=True, slots=True)
class Ready[T]:
    """A pending unit finished.

    Exactly one of ``value`` / ``error`` is meaningful: ``error`` is set
    when the unit raised, and then ``value`` is ``None``.
    """

    value: T | None = None
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True, slots=True)
class Pulled[T]:
    """Terminal value of a pull-next unit: the outcome plus the source.

    The source is handed back so the multiplexer can re-arm it.
    """

    outcome: "Item[T] | Exhausted | Failed"
    source: Any


@dataclass(frozen=True, slots=True)
class ItemReady[T]:
    """The multiplexer surfaced an item."""

    item: T


@dataclass(frozen=True, slots=True)
class Failed:
    """The multiplexer surfaced a member failure.

    ``error`` is the member's own exception. The failing member has already
    been removed; the others are still tracked.
    """

    error: Exception


type SourcePoll[T] = Item[T] | Failed | Exhausted | Pending
type UnitPoll[T] = Ready[T] | Pending
type SetPoll[T] = Ready[T] | Pending | Empty
type StreamPoll[T] = ItemReady[T] | Failed | Completed | Pending
