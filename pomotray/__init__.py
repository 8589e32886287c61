"""Pomodoro timer that lives in the system tray."""
from .menu import (Action, DispatchRegistry, IdAllocator, Menu, MenuGroup, MenuSelector,
                   MenuSwitch, ParentMenu, SimpleAction, Submenu)
from .host import MenuBinding, MenuEntry, MenuError, NativeMenu

__version__ = "1.0.0"
