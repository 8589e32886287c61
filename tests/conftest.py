from __future__ import annotations

import pytest

from pomotray.host import NativeMenu


class FakeTimer:
    def __init__(self, running=False, paused=False, long_break=True):
        self.is_running = running
        self.is_paused = paused
        self.has_long_break = long_break
        self.calls: list[str] = []

    def __getattr__(self, name):
        if name.startswith(("start_", "stop", "pause", "resume")):
            return lambda: self.calls.append(name)
        raise AttributeError(name)


class FakePages:
    def __init__(self):
        self.shown = 0

    def show_history_page(self):
        self.shown += 1


@pytest.fixture
def native() -> NativeMenu:
    return NativeMenu()


@pytest.fixture
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def pages() -> FakePages:
    return FakePages()
