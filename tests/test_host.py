from __future__ import annotations

import threading

import pytest

from pomotray.host import MenuBinding, MenuError
from pomotray.menu import Menu, MenuGroup, MenuSelector, SimpleAction, Submenu

from conftest import FakeTimer


def test_create_and_clear(native):
    native.create("a", "A", ["tray"])
    native.create("s", contexts=["tray"], separator=True)
    assert [e.id for e in native.entries()] == ["a", "s"]
    assert native.get("s").separator

    native.clear_all()
    assert len(native) == 0


def test_duplicate_id_and_unknown_parent_are_errors(native):
    native.create("a", "A", ["tray"])
    with pytest.raises(MenuError):
        native.create("a", "again", ["tray"])
    with pytest.raises(ValueError):
        native.create("c", "child", ["tray"], parent_id="missing")


def test_entries_and_tree_filter_by_context(native):
    native.create("p", "Parent", ["tray", "widget"])
    native.create("c1", "One", ["tray", "widget"], parent_id="p")
    native.create("c2", "Two", ["tray"], parent_id="p")
    native.create("w", "Widget only", ["widget"])

    assert [e.id for e in native.entries("tray")] == ["p", "c1", "c2"]

    tree = native.tree("widget")
    assert [entry.id for entry, _ in tree] == ["p", "w"]
    parent, children = tree[0]
    assert [child.id for child, _ in children] == ["c1"]


def test_select_reaches_every_handler(native):
    seen = []
    native.on_selected(lambda eid, ctx: seen.append((eid, ctx)))
    native.on_selected(lambda eid, ctx: seen.append(("again", ctx)))
    native.select("x", "widget")
    assert seen == [("x", "widget"), ("again", "widget")]


def _big_menu(groups=10, items=20):
    return Menu(["tray"], *[
        MenuGroup(*[SimpleAction(f"{g}-{i}", lambda: None) for i in range(items - 1)],
                  Submenu(f"sub-{g}", SimpleAction("child", lambda: None)))
        for g in range(groups)])


def test_reading_while_rebuilding_from_another_thread(native):
    menu = _big_menu()
    errors = []
    done = threading.Event()

    def read():
        while not done.is_set():
            try:
                native.tree("tray")
                native.published_tree("tray")
                native.entries()
            except Exception as e:
                errors.append(e)
                return

    reader = threading.Thread(target=read)
    reader.start()
    try:
        for _ in range(50):
            menu.apply(native)
            native.publish()
    finally:
        done.set()
        reader.join(timeout=10)
    assert errors == []


def test_published_tree_holds_until_next_publish(native):
    native.create("a", "A", ["tray"])
    native.publish()
    native.clear_all()
    native.create("b", "B", ["tray"])

    assert [e.id for e, _ in native.published_tree("tray")] == ["a"]
    assert [e.id for e, _ in native.tree("tray")] == ["b"]
    native.publish()
    assert [e.id for e, _ in native.published_tree("tray")] == ["b"]


def test_refresh_notifies_renderers_once_per_pass(native):
    changes = []
    native.on_changed(lambda: changes.append(len(native.published_tree())))
    binding = MenuBinding(native, MenuSelector(FakeTimer(), _big_menu(2, 3), _big_menu(1, 1)))

    binding.refresh()
    assert changes == [7]
    binding.refresh()
    assert changes == [7, 7]


def test_binding_numbers_passes_across_menus(native):
    timer = FakeTimer()
    binding = MenuBinding(native, MenuSelector(timer, _big_menu(1, 2), _big_menu(1, 2)))
    seen = set()
    for running in (False, True, False, True):
        timer.is_running = running
        binding.refresh()
        ids = {e.id for e in native.entries()}
        assert seen.isdisjoint(ids)
        seen |= ids
