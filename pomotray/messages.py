"""User-facing strings. Override any of them with ``custom_messages`` in the config."""
from __future__ import annotations
from typing import Optional

MESSAGES = {
    "app_name":               "Pomotray",
    "start_focusing":         "Start Focusing",
    "start_short_break":      "Start Short Break",
    "start_break":            "Start Break",
    "start_long_break":       "Start Long Break",
    "stop_timer":             "Stop Timer",
    "pause_timer":            "Pause Timer",
    "resume_timer":           "Resume Timer",
    "restart_timer":          "Restart Timer",
    "pomodoro_history":       "View History",
    "start_pomodoro_cycle":   "Start Pomodoro Cycle",
    "restart_pomodoro_cycle": "Restart Pomodoro Cycle",
    "quit":                   "Quit",
    "focus":                  "Focus",
    "short_break":            "Short Break",
    "long_break":             "Long Break",
    "paused":                 "Paused",
    "idle":                   "Idle",
    "focus_complete":         "Focus complete. Time for a break!",
    "break_complete":         "Break's over. Ready to focus?",
    "history_title":          "Pomodoro History",
    "history_today":          "Today",
    "history_total":          "All time",
    "history_week":           "Last 7 Days",
}


class Messages:

    def __init__(self, overrides: Optional[dict[str, str]] = None):
        self._table = dict(MESSAGES)
        if overrides:
            self.update(overrides)

    def update(self, overrides: dict[str, str]) -> None:
        """Apply custom strings; keys that aren't known messages are ignored."""
        for key, text in overrides.items():
            if key in self._table and isinstance(text, str) and text.strip():
                self._table[key] = text

    def get(self, key: str) -> str:
        return self._table[key]

    def __getattr__(self, key: str) -> str:
        if key.startswith("_"):
            raise AttributeError(key)
        try:
            return self._table[key]
        except KeyError:
            raise AttributeError(f"No message named {key!r}") from None


M = Messages()
