"""
Singleton app pages (history, ...) shown as tkinter windows.

A page is identified by its canonical URL, so asking for
``pomotray://history#week`` while ``pomotray://history/`` is open reuses
that window instead of opening a second one.
"""
from __future__ import annotations
import enum
import tkinter as tk
from typing import Any, Callable, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit


class PageHost(enum.Enum):
    TAB = 0
    WINDOW = 1


def canonical(url: str) -> str:
    """Origin, path and sorted query, lowercased, without fragment or trailing slash."""
    parts = urlsplit(url)
    query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)))
    path = parts.path[:-1] if parts.path.endswith("/") else parts.path
    return f"{parts.scheme}://{parts.netloc}{path}{query}".lower()


class SingletonPage:
    """Handle for one open page window. Methods are no-ops once it's closed."""

    def __init__(self, url: str, window: Any):
        self.url = url
        self.window = window

    @property
    def is_open(self) -> bool:
        if self.window is None:
            return False
        try:
            if self.window.winfo_exists():
                return True
        except tk.TclError:
            pass
        self.window = None
        return False

    def focus(self) -> None:
        if not self.is_open:
            return
        win = self.window
        win.deiconify()
        try:
            # Bring to front over other apps' windows
            win.attributes("-topmost", True)
            win.attributes("-topmost", False)
        except tk.TclError:
            # Some window managers don't support -topmost
            win.lift()
        win.focus_force()

    def close(self) -> None:
        if not self.is_open:
            return
        try:
            self.window.destroy()
        except tk.TclError:
            pass
        self.window = None


class PageLocator:
    """Finds an open page by canonical URL or creates it."""

    def __init__(self):
        self._pages: dict[str, SingletonPage] = {}

    def show(self, url: str, host: PageHost,
             factory: Callable[[str, bool], Any],
             navigate: Optional[Callable[[Any, str], None]] = None) -> SingletonPage:
        """Return the page for url, creating its window with factory(url, popup)."""
        key = canonical(url)
        page = self._pages.get(key)
        if page is not None and page.is_open:
            page.url = url
            if navigate is not None:
                navigate(page.window, url)
            return page

        if host is PageHost.TAB:
            window = factory(url, False)
        elif host is PageHost.WINDOW:
            window = factory(url, True)
        else:
            raise ValueError("Invalid page host.")

        page = SingletonPage(url, window)
        self._pages[key] = page
        return page

    def open_pages(self) -> list[SingletonPage]:
        return [p for p in self._pages.values() if p.is_open]

    def close_all(self) -> None:
        for page in list(self._pages.values()):
            page.close()
        self._pages.clear()
