"""Flat, id-addressed menu registry shared by the tray and widget renderers."""
from __future__ import annotations
import itertools
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .menu import DispatchRegistry


class MenuError(ValueError):
    """Raised for malformed create() calls (duplicate id, unknown parent)."""


@dataclass(frozen=True)
class MenuEntry:
    id: str
    title: str = ""
    contexts: tuple[str, ...] = ()
    parent_id: Optional[str] = None
    separator: bool = False


def build_tree(entries, context: Optional[str] = None) -> list[tuple[MenuEntry, list]]:
    """Top-level entries for a context, each paired with its child nodes."""
    nodes: dict[str, tuple[MenuEntry, list]] = {}
    roots = []
    for entry in entries:
        if context is not None and context not in entry.contexts:
            continue
        node = (entry, [])
        nodes[entry.id] = node
        if entry.parent_id is None:
            roots.append(node)
        elif entry.parent_id in nodes:
            nodes[entry.parent_id][1].append(node)
    return roots


class NativeMenu:
    """Create-only menu store. The only way to change it is clear_all() and rebuild.

    The tkinter thread rebuilds it while the tray thread reads it, so all
    access goes through a lock. Renderers read the snapshot frozen by
    publish() and never see a half-built menu.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: dict[str, MenuEntry] = {}
        self._published: tuple[MenuEntry, ...] = ()
        self._changed: list[Callable[[], None]] = []
        self._selected: list[Callable[[str, Optional[str]], Any]] = []

    # ─── Mutation ──────────────────────────────────────────────
    def clear_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def create(self, entry_id: str, title: str = "", contexts=(),
               parent_id: Optional[str] = None, separator: bool = False) -> MenuEntry:
        with self._lock:
            if entry_id in self._entries:
                raise MenuError(f"Duplicate menu entry id: {entry_id}")
            if parent_id is not None and parent_id not in self._entries:
                raise MenuError(f"Unknown parent menu entry: {parent_id}")
            entry = MenuEntry(entry_id, title, tuple(contexts), parent_id, separator)
            self._entries[entry_id] = entry
        return entry

    def publish(self) -> None:
        """Freeze the current entries for renderers and notify them once."""
        with self._lock:
            self._published = tuple(self._entries.values())
        for listener in list(self._changed):
            listener()

    # ─── Queries ───────────────────────────────────────────────
    def entries(self, context: Optional[str] = None) -> list[MenuEntry]:
        with self._lock:
            current = list(self._entries.values())
        return [e for e in current if context is None or context in e.contexts]

    def get(self, entry_id: str) -> Optional[MenuEntry]:
        with self._lock:
            return self._entries.get(entry_id)

    def tree(self, context: Optional[str] = None) -> list[tuple[MenuEntry, list]]:
        return build_tree(self.entries(), context)

    def published_tree(self, context: Optional[str] = None) -> list[tuple[MenuEntry, list]]:
        """Like tree(), but from the last published snapshot."""
        return build_tree(self._published, context)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ─── Events ────────────────────────────────────────────────
    def on_changed(self, listener: Callable[[], None]) -> None:
        self._changed.append(listener)

    def on_selected(self, handler: Callable[[str, Optional[str]], Any]) -> None:
        self._selected.append(handler)

    def select(self, entry_id: str, context: Optional[str] = None) -> None:
        """Report that the user picked entry_id from the menu shown in context."""
        for handler in list(self._selected):
            handler(entry_id, context)


class MenuBinding:
    """Keeps a NativeMenu showing the selector's current menu and routes clicks."""

    def __init__(self, host: NativeMenu, selector):
        self.host = host
        self.selector = selector
        self.registry = DispatchRegistry()
        self._passes = itertools.count(1)
        host.on_selected(self._on_selected)

    def refresh(self) -> DispatchRegistry:
        # Ids from the previous pass stop resolving before the rebuild starts
        self.registry.clear()
        self.registry = self.selector.apply(self.host, next(self._passes))
        self.host.publish()
        return self.registry

    def _on_selected(self, entry_id: str, context: Optional[str] = None) -> None:
        self.registry.dispatch(entry_id)
