"""Tests for murmur.config: MuxConfig frozen dataclass."""

import pytest

from murmur.config import FAILURE_POLICIES, MuxConfig
from murmur.errors import ConfigurationError


class TestMuxConfig:
    def test_defaults(self) -> None:
        cfg = MuxConfig()

        assert cfg.poll_budget == 32
        assert cfg.failure_policy == "raise"
        assert cfg.idle_timeout is None
        assert cfg.close_sources is True

    def test_override(self) -> None:
        cfg = MuxConfig(poll_budget=4, failure_policy="skip", idle_timeout=2.5, close_sources=False)

        assert cfg.poll_budget == 4
        assert cfg.failure_policy == "skip"
        assert cfg.idle_timeout == 2.5
        assert cfg.close_sources is False

    def test_frozen(self) -> None:
        cfg = MuxConfig()

        with pytest.raises(AttributeError):
            cfg.poll_budget = 1  # type: ignore[misc]

    def test_policies(self) -> None:
        assert frozenset({"raise", "return", "skip"}) == FAILURE_POLICIES
        for policy in FAILURE_POLICIES:
            assert MuxConfig(failure_policy=policy).failure_policy == policy


class TestValidation:
    @pytest.mark.parametrize("budget", [0, -1])
    def test_budget_must_be_positive(self, budget: int) -> None:
        with pytest.raises(ConfigurationError, match="poll_budget must be >= 1"):
            MuxConfig(poll_budget=budget)

    def test_unknown_policy(self) -> None:
        with pytest.raises(ConfigurationError, match="failure_policy must be one of"):
            MuxConfig(failure_policy="ignore")

    @pytest.mark.parametrize("timeout", [0, -0.5])
    def test_idle_timeout_must_be_positive(self, timeout: float) -> None:
        with pytest.raises(ConfigurationError, match="idle_timeout must be positive"):
            MuxConfig(idle_timeout=timeout)
