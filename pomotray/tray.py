"""System tray icon and menu (pystray), drawn with Pillow."""
from __future__ import annotations
from typing import Any, Callable, Optional

import pystray
from PIL import Image, ImageDraw

from .host import MenuEntry, NativeMenu

TOMATO = (220, 53, 34, 255)
DARK_TOMATO = (150, 30, 20, 255)
PAUSED = (200, 140, 40, 255)
IDLE = (120, 120, 120, 255)
LEAF = (60, 160, 70, 255)
WHITE = (255, 255, 255, 255)


def create_tray_image(running: bool = False, paused: bool = False, size: int = 64) -> Image.Image:
    """Tomato icon: red while running, amber when paused, gray when idle."""
    body = TOMATO if running else PAUSED if paused else IDLE
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    s = size / 64

    draw.ellipse([6*s, 14*s, 58*s, 60*s], fill=DARK_TOMATO if running else body)
    draw.ellipse([8*s, 14*s, 56*s, 57*s], fill=body)
    # Highlight
    draw.ellipse([16*s, 22*s, 26*s, 30*s], fill=(255, 255, 255, 90))
    # Leaves + stem
    draw.polygon([(32*s, 18*s), (20*s, 10*s), (28*s, 20*s)], fill=LEAF)
    draw.polygon([(32*s, 18*s), (44*s, 10*s), (36*s, 20*s)], fill=LEAF)
    draw.rectangle([30*s, 6*s, 34*s, 18*s], fill=LEAF)

    if paused:
        draw.rectangle([24*s, 30*s, 29*s, 46*s], fill=WHITE)
        draw.rectangle([35*s, 30*s, 40*s, 46*s], fill=WHITE)
    return img


class TrayMenuRenderer:
    """Shows the entries of one NativeMenu context as a pystray menu.

    Clicks are posted back through ``schedule`` so selection handling runs on
    the tkinter thread, never the tray thread.
    """

    def __init__(self, native: NativeMenu, context: str = "tray",
                 schedule: Callable[[Callable[[], Any]], Any] = lambda fn: fn(),
                 footer: Optional[list] = None):
        self.native = native
        self.context = context
        self.schedule = schedule
        self.footer = footer or []  # Fixed items (e.g. Quit) after the rendered entries
        self.icon = None
        native.on_changed(self._changed)

    def menu(self) -> pystray.Menu:
        return pystray.Menu(self._all_items)

    def _all_items(self) -> list:
        items = self._items(self.native.published_tree(self.context))
        if items and self.footer:
            items.append(pystray.Menu.SEPARATOR)
        return items + list(self.footer)

    def attach(self, icon: pystray.Icon) -> None:
        self.icon = icon

    def _changed(self) -> None:
        if self.icon is not None:
            self.icon.update_menu()

    def _items(self, nodes) -> list:
        items = []
        for entry, children in nodes:
            if entry.separator:
                items.append(pystray.Menu.SEPARATOR)
            elif children:
                items.append(pystray.MenuItem(entry.title, pystray.Menu(*self._items(children))))
            else:
                # A parent with no children is a plain entry with no handler
                items.append(pystray.MenuItem(entry.title, self._selector(entry)))
        return items

    def _selector(self, entry: MenuEntry):
        def select(icon, item):
            self.schedule(lambda: self.native.select(entry.id, self.context))
        return select
