"""Tests for murmur.poll: poll result values."""

import pytest

from murmur.poll import (
    COMPLETED,
    EMPTY,
    EXHAUSTED,
    PENDING,
    Completed,
    Failed,
    Item,
    ItemReady,
    Pending,
    Ready,
)


class TestSingletons:
    def test_reprs(self) -> None:
        assert repr(PENDING) == "PENDING"
        assert repr(EMPTY) == "EMPTY"
        assert repr(EXHAUSTED) == "EXHAUSTED"
        assert repr(COMPLETED) == "COMPLETED"

    def test_equal_to_fresh_instances(self) -> None:
        assert Pending() == PENDING
        assert Completed() == COMPLETED

    def test_distinct(self) -> None:
        assert len({PENDING, EMPTY, EXHAUSTED, COMPLETED}) == 4


class TestReady:
    def test_value(self) -> None:
        ready = Ready("x")
        assert ready.value == "x"
        assert ready.error is None
        assert not ready.failed

    def test_error(self) -> None:
        error = ValueError("boom")
        ready = Ready(error=error)
        assert ready.failed
        assert ready.value is None

    def test_none_value_is_not_failure(self) -> None:
        assert not Ready(None).failed


class TestValues:
    def test_item_equality(self) -> None:
        assert Item(1) == Item(1)
        assert Item(1) != Item(2)

    def test_item_ready_and_failed(self) -> None:
        error = RuntimeError("x")
        assert ItemReady("a").item == "a"
        assert Failed(error).error is error

    def test_frozen(self) -> None:
        item = Item("a")
        with pytest.raises(AttributeError):
            item.value = "b"  # type: ignore[misc]
