from __future__ import annotations

import datetime

from pomotray.history import daily_counts, load_history, record_pomodoro, save_history


def test_record_and_persist(tmp_path):
    path = str(tmp_path / "history.json")
    history = load_history(path)
    day = datetime.date(2026, 10, 16)

    assert record_pomodoro(history, day) == 1
    assert record_pomodoro(history, day) == 2
    save_history(history, path)

    loaded = load_history(path)
    assert loaded["total"] == 2
    assert loaded["daily"] == {"2026-10-16": 2}


def test_daily_counts_zero_fills_oldest_first():
    history = {"total": 3, "daily": {"2026-10-16": 2, "2026-10-14": 1, "2026-09-01": 9}}
    counts = daily_counts(history, 3, today=datetime.date(2026, 10, 16))
    assert counts == [("2026-10-14", 1), ("2026-10-15", 0), ("2026-10-16", 2)]


def test_corrupt_history_starts_empty(tmp_path, capsys):
    path = tmp_path / "history.json"
    path.write_text("[1, 2", encoding="utf-8")
    assert load_history(str(path)) == {"total": 0, "daily": {}}
    assert "[!] History load error" in capsys.readouterr().out
