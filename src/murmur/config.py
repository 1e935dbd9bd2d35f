"""Multiplexer configuration.

MuxConfig is a frozen dataclass: immutable after creation, validated once,
no string-key dict lookups.
"""

from dataclasses import dataclass

from murmur.errors import ConfigurationError

FAILURE_POLICIES = frozenset({"raise", "return", "skip"})


@dataclass(frozen=True, slots=True)
class MuxConfig:
    """Multiplexer configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = MuxConfig(failure_policy="skip", idle_timeout=30.0)
        mux = SelectAll(config)
    """

    # Max members that may answer PENDING inside one poll before the set
    # yields back to the scheduler (it wakes itself first).
    poll_budget: int = 32

    # Async driver behaviour on a member failure: "raise", "return" or "skip"
    failure_policy: str = "raise"

    # Seconds the async driver waits for any wake before TimeoutError
    idle_timeout: float | None = None

    # clear() calls close() on members that expose one
    close_sources: bool = True

    def __post_init__(self) -> None:
        if self.poll_budget < 1:
            msg = f"poll_budget must be >= 1, got {self.poll_budget}"
            raise ConfigurationError(msg)
        if self.failure_policy not in FAILURE_POLICIES:
            allowed = ", ".join(sorted(FAILURE_POLICIES))
            msg = f"failure_policy must be one of {allowed}, got {self.failure_policy!r}"
            raise ConfigurationError(msg)
        if self.idle_timeout is not None and self.idle_timeout <= 0:
            msg = f"idle_timeout must be positive, got {self.idle_timeout}"
            raise ConfigurationError(msg)
