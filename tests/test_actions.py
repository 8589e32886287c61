from __future__ import annotations

from pomotray.actions import create_pomodoro_menu
from pomotray.host import MenuBinding
from pomotray.messages import Messages

from conftest import FakeTimer


def _layout(native, context="tray"):
    out = []
    for entry, children in native.tree(context):
        if entry.separator:
            out.append("---")
        elif children:
            out.append((entry.title, [c.title for c, _ in children]))
        else:
            out.append(entry.title)
    return out


def test_idle_menu(native, timer, pages):
    create_pomodoro_menu(timer, pages).apply(native)
    assert _layout(native) == [
        "Start Pomodoro Cycle",
        "Start Focusing",
        "Start Short Break",
        "Start Long Break",
        "---",
        "View History",
    ]


def test_idle_menu_without_long_breaks(native, pages):
    timer = FakeTimer(long_break=False)
    create_pomodoro_menu(timer, pages).apply(native)
    assert _layout(native) == ["Start Focusing", "Start Break", "---", "View History"]


def test_running_menu(native, pages):
    timer = FakeTimer(running=True)
    create_pomodoro_menu(timer, pages).apply(native)
    assert _layout(native) == [
        "Pause Timer",
        "Stop Timer",
        ("Restart Timer", ["Start Focusing", "Start Short Break", "Start Long Break"]),
        "Restart Pomodoro Cycle",
        "---",
        "View History",
    ]


def test_paused_menu(native, pages):
    timer = FakeTimer(paused=True, long_break=False)
    create_pomodoro_menu(timer, pages).apply(native)
    assert _layout(native) == [
        "Resume Timer",
        "Stop Timer",
        ("Restart Timer", ["Start Focusing", "Start Break"]),
        "---",
        "View History",
    ]


def test_menu_is_bound_to_every_context(native, timer, pages):
    create_pomodoro_menu(timer, pages, contexts=("tray", "widget")).apply(native)
    assert _layout(native, "tray") == _layout(native, "widget")


def test_selecting_entries_drives_timer_and_pages(native, timer, pages):
    binding = MenuBinding(native, create_pomodoro_menu(timer, pages))
    binding.refresh()
    by_title = {e.title: e.id for e in native.entries()}

    native.select(by_title["Start Focusing"])
    native.select(by_title["Start Pomodoro Cycle"])
    native.select(by_title["View History"])
    assert timer.calls == ["start_focus", "start_cycle"]
    assert pages.shown == 1


def test_restart_submenu_children_dispatch(native, pages):
    timer = FakeTimer(running=True)
    binding = MenuBinding(native, create_pomodoro_menu(timer, pages))
    binding.refresh()
    long_break = next(e for e in native.entries()
                      if e.parent_id is not None and e.title == "Start Long Break")

    native.select(long_break.id)
    assert timer.calls == ["start_long_break"]


def test_custom_messages_flow_into_titles(native, timer, pages):
    messages = Messages({"start_focusing": "Focus!"})
    create_pomodoro_menu(timer, pages, messages=messages).apply(native)
    assert "Focus!" in _layout(native)
