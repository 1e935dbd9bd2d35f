"""Murmur exception hierarchy.

Shared across the pending set, the multiplexer, the sources and the
drivers so every module raises and catches the same types.

Member failures are *not* wrapped: when a source raises, the exact
exception object it raised travels through ``Ready.error`` and
``Failed.error`` to the caller.
"""


class MurmurError(Exception):
    """Base for all murmur-specific errors."""


class ConfigurationError(MurmurError):
    """Raised when a ``MuxConfig`` field is invalid.

    Checked once, at construction, so a bad value never reaches a poll loop.
    """


class StalledError(MurmurError):
    """Raised by the synchronous driver when no progress is possible.

    A poll reported ``PENDING`` but nothing woke the driver while it ran,
    and there is no event loop that could deliver a wake later.
    """

    def __init__(self, pending: int) -> None:
        self.pending = pending
        super().__init__(
            f"{pending} member(s) pending with no wake scheduled; "
            "drive this multiplexer from an event loop instead"
        )


class ChannelClosedError(MurmurError):
    """Raised when sending on a ``Channel`` that was already closed."""
