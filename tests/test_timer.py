from __future__ import annotations

import datetime

import pytest

from pomotray.timer import FOCUS, LONG_BREAK, SHORT_BREAK, PomodoroTimer


class Clock:
    def __init__(self):
        self.now = datetime.datetime(2026, 10, 16, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += datetime.timedelta(**kwargs)


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def timer(clock):
    t = PomodoroTimer(focus_minutes=25, short_break_minutes=5, long_break_minutes=15,
                      long_break_interval=2, clock=clock)
    t.events = []
    t.add_listener(lambda timer, event: timer.events.append(event))
    return t


def test_starts_idle(timer):
    assert not timer.is_running and not timer.is_paused
    assert timer.has_long_break
    assert timer.remaining == datetime.timedelta(0)


def test_pause_freezes_and_resume_continues(timer, clock):
    timer.start_focus()
    clock.advance(minutes=10)
    timer.pause()
    assert timer.is_paused and not timer.is_running
    clock.advance(minutes=30)
    assert timer.remaining == datetime.timedelta(minutes=15)

    timer.resume()
    assert timer.is_running
    clock.advance(minutes=14)
    assert timer.tick() is None
    clock.advance(minutes=1)
    assert timer.tick() == FOCUS
    assert timer.events == ["start", "pause", "resume", "expire"]
    assert not timer.is_running


def test_invalid_transitions_are_ignored(timer):
    timer.pause()
    timer.resume()
    timer.stop()
    assert timer.events == []


def test_stop_clears_state(timer):
    timer.start_short_break()
    assert timer.phase == SHORT_BREAK
    timer.stop()
    assert timer.phase is None and not timer.is_running
    assert timer.events == ["start", "stop"]


def test_long_break_follows_interval(timer, clock):
    for expected in (SHORT_BREAK, LONG_BREAK):
        timer.start_focus()
        clock.advance(minutes=25)
        timer.tick()
        assert timer.next_break() == expected

    timer.start_cycle()
    assert timer.completed_focus == 0
    assert timer.phase == FOCUS


def test_no_long_break_when_interval_is_zero(clock):
    t = PomodoroTimer(long_break_interval=0, clock=clock)
    assert not t.has_long_break
    t.start_focus()
    clock.advance(minutes=25)
    t.tick()
    assert t.next_break() == SHORT_BREAK
