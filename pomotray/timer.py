"""Pomodoro timer: focus / short break / long break phases with pause support."""
from __future__ import annotations
import datetime
from typing import Any, Callable, Optional

FOCUS = "focus"
SHORT_BREAK = "short_break"
LONG_BREAK = "long_break"
PHASES = (FOCUS, SHORT_BREAK, LONG_BREAK)

# Listener events
START, STOP, PAUSE, RESUME, EXPIRE = "start", "stop", "pause", "resume", "expire"


class PomodoroTimer:

    def __init__(self, focus_minutes: float = 25, short_break_minutes: float = 5,
                 long_break_minutes: float = 15, long_break_interval: int = 4,
                 clock: Callable[[], datetime.datetime] = datetime.datetime.now):
        self.durations = {
            FOCUS: datetime.timedelta(minutes=focus_minutes),
            SHORT_BREAK: datetime.timedelta(minutes=short_break_minutes),
            LONG_BREAK: datetime.timedelta(minutes=long_break_minutes),
        }
        self.long_break_interval = long_break_interval
        self.clock = clock

        self.phase: Optional[str] = None
        self.ends_at: Optional[datetime.datetime] = None
        self.paused_remaining: Optional[datetime.timedelta] = None
        self.completed_focus = 0  # Focus phases finished since the cycle began
        self._listeners: list[Callable[[PomodoroTimer, str], Any]] = []

    # ─── State ─────────────────────────────────────────────────
    @property
    def is_running(self) -> bool:
        return self.ends_at is not None

    @property
    def is_paused(self) -> bool:
        return self.paused_remaining is not None

    @property
    def has_long_break(self) -> bool:
        return self.long_break_interval > 0

    @property
    def remaining(self) -> datetime.timedelta:
        if self.is_running:
            return max(self.ends_at - self.clock(), datetime.timedelta(0))
        if self.is_paused:
            return self.paused_remaining
        return datetime.timedelta(0)

    def next_break(self) -> str:
        """Break that should follow the focus phase currently counted."""
        if self.has_long_break and self.completed_focus and \
                self.completed_focus % self.long_break_interval == 0:
            return LONG_BREAK
        return SHORT_BREAK

    # ─── Listeners ─────────────────────────────────────────────
    def add_listener(self, listener: Callable[[PomodoroTimer, str], Any]) -> None:
        self._listeners.append(listener)

    def _emit(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(self, event)

    # ─── Transitions ───────────────────────────────────────────
    def _start(self, phase: str) -> None:
        self.phase = phase
        self.paused_remaining = None
        self.ends_at = self.clock() + self.durations[phase]
        self._emit(START)

    def start_focus(self) -> None:
        self._start(FOCUS)

    def start_short_break(self) -> None:
        self._start(SHORT_BREAK)

    def start_long_break(self) -> None:
        self._start(LONG_BREAK)

    def start_cycle(self) -> None:
        self.completed_focus = 0
        self._start(FOCUS)

    def stop(self) -> None:
        if not (self.is_running or self.is_paused):
            return
        self.ends_at = None
        self.paused_remaining = None
        self.phase = None
        self._emit(STOP)

    def pause(self) -> None:
        if not self.is_running:
            return
        self.paused_remaining = self.remaining
        self.ends_at = None
        self._emit(PAUSE)

    def resume(self) -> None:
        if not self.is_paused:
            return
        self.ends_at = self.clock() + self.paused_remaining
        self.paused_remaining = None
        self._emit(RESUME)

    def tick(self) -> Optional[str]:
        """Expire the current phase if its time is up. Returns the expired phase."""
        if not self.is_running or self.clock() < self.ends_at:
            return None
        expired = self.phase
        self.ends_at = None
        if expired == FOCUS:
            self.completed_focus += 1
        self._emit(EXPIRE)
        return expired
