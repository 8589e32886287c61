"""Completed focus sessions, kept in ~/pomotray_history.json."""
from __future__ import annotations
import datetime
import json
import os
from typing import Any, Optional

HISTORY_FILE = os.path.join(os.path.expanduser("~"), "pomotray_history.json")

DEFAULT_HISTORY = {
    "total": 0,
    "daily": {},  # {"YYYY-MM-DD": count}
}


def load_history(path: str = HISTORY_FILE) -> dict[str, Any]:
    history = json.loads(json.dumps(DEFAULT_HISTORY))
    if os.path.exists(path):
        try:
            with open(path, encoding="utf-8") as f:
                saved = json.load(f)
            if isinstance(saved, dict):
                if isinstance(saved.get("total"), int):
                    history["total"] = saved["total"]
                if isinstance(saved.get("daily"), dict):
                    history["daily"].update(
                        {k: v for k, v in saved["daily"].items() if isinstance(v, int)})
        except (json.JSONDecodeError, IOError, OSError) as e:
            print(f"  [!] History load error: {e}")
    return history


def save_history(history: dict[str, Any], path: str = HISTORY_FILE) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(history, f, indent=2)
    except (IOError, OSError) as e:
        print(f"  [!] History save error: {e}")


def record_pomodoro(history: dict[str, Any], when: Optional[datetime.date] = None) -> int:
    """Count one finished focus session. Returns today's new total."""
    day = (when or datetime.date.today()).isoformat()
    history["total"] = history.get("total", 0) + 1
    daily = history.setdefault("daily", {})
    daily[day] = daily.get(day, 0) + 1
    return daily[day]


def daily_counts(history: dict[str, Any], days: int = 7,
                 today: Optional[datetime.date] = None) -> list[tuple[str, int]]:
    """(date, count) for the last ``days`` days, oldest first, zero-filled."""
    today = today or datetime.date.today()
    daily = history.get("daily", {})
    out = []
    for offset in range(days - 1, -1, -1):
        day = (today - datetime.timedelta(days=offset)).isoformat()
        out.append((day, daily.get(day, 0)))
    return out
