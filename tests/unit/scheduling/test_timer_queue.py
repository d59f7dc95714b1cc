"""Tests for the tick-driven TimerQueue."""

from __future__ import annotations

import logging

import pytest

from scenecue.core.scheduling.timer_queue import TimerQueue


@pytest.fixture
def fired() -> list[str]:
    return []


def test_nothing_fires_on_schedule(queue: TimerQueue, fired: list[str]) -> None:
    queue.schedule(0, lambda: fired.append("a"))
    assert fired == []
    assert len(queue) == 1


def test_fires_when_deadline_reached(queue: TimerQueue, fired: list[str]) -> None:
    queue.schedule(500, lambda: fired.append("a"))

    assert queue.advance(499) == 0
    assert fired == []
    assert queue.advance(1) == 1
    assert fired == ["a"]
    assert queue.now_ms == 500.0


def test_fires_in_deadline_order(queue: TimerQueue, fired: list[str]) -> None:
    queue.schedule(300, lambda: fired.append("c"))
    queue.schedule(100, lambda: fired.append("a"))
    queue.schedule(200, lambda: fired.append("b"))

    queue.advance(1000)
    assert fired == ["a", "b", "c"]


def test_ties_fire_in_registration_order(queue: TimerQueue, fired: list[str]) -> None:
    for name in "abcde":
        queue.schedule(100, lambda name=name: fired.append(name))

    queue.advance(100)
    assert fired == list("abcde")


def test_actions_see_their_deadline(queue: TimerQueue) -> None:
    seen: list[float] = []
    queue.schedule(250, lambda: seen.append(queue.now_ms))
    queue.schedule(750, lambda: seen.append(queue.now_ms))

    queue.advance(1000)
    assert seen == [250.0, 750.0]
    assert queue.now_ms == 1000.0


def test_delay_is_relative_to_now(queue: TimerQueue, fired: list[str]) -> None:
    queue.advance(1000)
    queue.schedule(100, lambda: fired.append("a"))

    queue.advance(99)
    assert fired == []
    queue.advance(1)
    assert fired == ["a"]


def test_negative_delay_fires_on_next_drain(queue: TimerQueue, fired: list[str]) -> None:
    queue.schedule(-50, lambda: fired.append("a"))
    queue.advance(0)
    assert fired == ["a"]


def test_cancelled_action_skipped(queue: TimerQueue, fired: list[str]) -> None:
    handle = queue.schedule(100, lambda: fired.append("a"))
    queue.schedule(100, lambda: fired.append("b"))
    handle.cancel()

    assert handle.cancelled
    assert len(queue) == 1
    assert queue.advance(100) == 1
    assert fired == ["b"]


def test_actions_scheduled_while_draining(queue: TimerQueue, fired: list[str]) -> None:
    def chain() -> None:
        fired.append("first")
        queue.schedule(50, lambda: fired.append("second"))

    queue.schedule(100, chain)
    queue.advance(200)
    assert fired == ["first", "second"]


def test_failing_action_does_not_stop_others(
    queue: TimerQueue, fired: list[str], caplog: pytest.LogCaptureFixture
) -> None:
    def boom() -> None:
        raise RuntimeError("setter exploded")

    queue.schedule(10, boom)
    queue.schedule(10, lambda: fired.append("after"))

    with caplog.at_level(logging.ERROR):
        assert queue.advance(10) == 2

    assert fired == ["after"]
    assert "setter exploded" in caplog.text


def test_negative_advance_rejected(queue: TimerQueue) -> None:
    with pytest.raises(ValueError):
        queue.advance(-1)


def test_advance_to_never_moves_backwards(queue: TimerQueue) -> None:
    queue.advance(500)
    queue.advance_to(100)
    assert queue.now_ms == 500.0


def test_next_deadline(queue: TimerQueue) -> None:
    assert queue.next_deadline() is None
    handle = queue.schedule(100, lambda: None)
    queue.schedule(300, lambda: None)
    assert queue.next_deadline() == 100.0

    handle.cancel()
    assert queue.next_deadline() == 300.0


def test_run_until_idle(queue: TimerQueue, fired: list[str]) -> None:
    queue.schedule(100, lambda: fired.append("a"))
    queue.schedule(5000, lambda: fired.append("b"))

    assert queue.run_until_idle(max_ms=1000) == 1
    assert fired == ["a"]
    assert queue.run_until_idle() == 1
    assert queue.now_ms == 5000.0
