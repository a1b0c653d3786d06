"""Tests for the in-flight activity counter."""

import pytest

from signin_router.activity import ActivityCounter


def test_starts_idle() -> None:
    counter = ActivityCounter()
    assert counter.count == 0
    assert not counter.busy


def test_listeners_see_every_change() -> None:
    counter = ActivityCounter()
    seen: list[int] = []
    counter.add_listener(seen.append)

    counter.increment()
    counter.increment()
    counter.decrement()
    counter.decrement()

    assert seen == [1, 2, 1, 0]


def test_decrement_below_zero_raises() -> None:
    with pytest.raises(RuntimeError, match="below zero"):
        ActivityCounter().decrement()


def test_track_releases_on_error() -> None:
    counter = ActivityCounter()
    with pytest.raises(ValueError):
        with counter.track():
            assert counter.busy
            raise ValueError("boom")
    assert counter.count == 0


def test_failing_listener_does_not_break_counting() -> None:
    counter = ActivityCounter()
    seen: list[int] = []

    def broken(count: int) -> None:
        raise RuntimeError("listener bug")

    counter.add_listener(broken)
    counter.add_listener(seen.append)
    with counter.track():
        pass

    assert seen == [1, 0]
    assert counter.count == 0
