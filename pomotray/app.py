"""
Pomotray — Pomodoro Timer in the System Tray
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

Usage:
    python -m pomotray
    python -m pomotray --test          (1 minute phases for testing)
    python -m pomotray --config PATH
"""
from __future__ import annotations
import argparse
import datetime
import platform
import sys
import threading
import tkinter as tk
from typing import Any, Callable, Optional

from .actions import create_pomodoro_menu
from .config import CONFIG_FILE, load_config, save_config
from .history import daily_counts, load_history, record_pomodoro, save_history
from .host import MenuBinding, NativeMenu
from .messages import Messages
from .pages import PageHost, PageLocator
from .sound import AudioPlayer
from .timer import EXPIRE, FOCUS, LONG_BREAK, SHORT_BREAK, PomodoroTimer

try:
    import pystray
    from .tray import TrayMenuRenderer, create_tray_image
    HAS_TRAY = True
except ImportError:
    HAS_TRAY = False

IS_MAC = platform.system() == "Darwin"
IS_WIN = platform.system() == "Windows"
FONT = "Helvetica Neue" if IS_MAC else "Segoe UI" if IS_WIN else "DejaVu Sans"

TICK_MS = 1000
HISTORY_URL = "pomotray://history/"

C_BG       = "#111827";  C_CARD     = "#1e293b"
C_ACCENT   = "#f43f5e";  C_ACCENT2  = "#0ea5e9"
C_TEXT     = "#f1f5f9";  C_TEXT_DIM = "#94a3b8";  C_TEXT_MUT = "#64748b"
C_PAUSED   = "#d97706";  C_IDLE     = "#475569"


def format_remaining(delta: datetime.timedelta) -> str:
    sec = max(0, int(delta.total_seconds()))
    return f"{sec // 60:02d}:{sec % 60:02d}"


class PomotrayApp:

    def __init__(self, config_path: str = CONFIG_FILE, test_mode: bool = False):
        self.root = tk.Tk()
        self.root.withdraw()

        self.config_path = config_path
        self.config = load_config(config_path, test_mode=test_mode)
        self.messages = Messages(self.config.get("custom_messages"))
        self.history = load_history()
        self.player = AudioPlayer()

        self.timer = PomodoroTimer(
            focus_minutes=self.config["focus_minutes"],
            short_break_minutes=self.config["short_break_minutes"],
            long_break_minutes=self.config["long_break_minutes"],
            long_break_interval=self.config["long_break_interval"],
        )
        self.pages = PageLocator()
        self.native = NativeMenu()
        self.binding = MenuBinding(
            self.native,
            create_pomodoro_menu(self.timer, self, self.config["menu_contexts"], self.messages))
        self.timer.add_listener(self._on_timer_event)

        self._widget_win = None;  self._widget_label = None
        self._widget_dragged = False;  self._widget_drag_x = 0;  self._widget_drag_y = 0
        self.tray = None

        if HAS_TRAY and "tray" in self.config["menu_contexts"]:
            self.tray_menu = TrayMenuRenderer(
                self.native, "tray", schedule=self._on_main_thread,
                footer=[pystray.MenuItem(self.messages.quit, self._quit)])
            threading.Thread(target=self._run_tray, daemon=True).start()

        self.binding.refresh()
        self._print_banner()
        if self.config.get("show_floating_widget", True):
            self.root.after(500, self._create_floating_widget)
        self._tick()
        self.root.mainloop()

    def _on_main_thread(self, fn: Callable[[], Any]) -> None:
        self.root.after(0, fn)

    # ━━━ Timer ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _tick(self) -> None:
        self.timer.tick()
        self._update_floating_widget()
        self.root.after(TICK_MS, self._tick)

    def _on_timer_event(self, timer: PomodoroTimer, event: str) -> None:
        if event == EXPIRE:
            self._phase_finished(timer.phase)
        self.binding.refresh()
        self._update_tray_icon()
        self._update_floating_widget()

    def _phase_finished(self, phase: Optional[str]) -> None:
        if phase == FOCUS:
            record_pomodoro(self.history)
            save_history(self.history)
            text = self.messages.focus_complete
        else:
            text = self.messages.break_complete
        if self.config.get("sound_enabled", True):
            self.player.play(self.config.get("custom_sound") or None)
        if self.tray is not None:
            try:
                self.tray.notify(text, self.messages.app_name)
            except NotImplementedError:
                pass

    def _status_text(self) -> str:
        t = self.timer
        names = {FOCUS: self.messages.focus, SHORT_BREAK: self.messages.short_break,
                 LONG_BREAK: self.messages.long_break}
        if t.is_running:
            return f"{names[t.phase]} {format_remaining(t.remaining)}"
        if t.is_paused:
            return f"{self.messages.paused} {format_remaining(t.remaining)}"
        return self.messages.idle

    # ━━━ Pages ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def show_history_page(self, url: str = HISTORY_URL) -> None:
        page = self.pages.show(url, PageHost.WINDOW, self._create_history_window,
                               self._fill_history_window)
        page.focus()

    def _create_history_window(self, url: str, popup: bool) -> tk.Toplevel:
        win = tk.Toplevel(self.root)
        win.title(f"{self.messages.app_name} — {self.messages.history_title}")
        win.geometry("400x320")
        win.configure(bg=C_BG)
        if popup:
            win.resizable(False, False)
        self._fill_history_window(win, url)
        return win

    def _fill_history_window(self, win: tk.Toplevel, url: str) -> None:
        for child in win.winfo_children():
            child.destroy()
        self.history = load_history()

        tk.Label(win, text=self.messages.history_title, font=(FONT, 15, "bold"),
                 fg=C_ACCENT2, bg=C_BG).pack(pady=(14, 12))

        week = daily_counts(self.history, 7)
        tf = tk.Frame(win, bg=C_CARD, padx=16, pady=12)
        tf.pack(fill="x", padx=14, pady=(0, 8))
        tk.Label(tf, text=f"{self.messages.history_today}: {week[-1][1]}    "
                          f"{self.messages.history_total}: {self.history.get('total', 0)}",
                 font=(FONT, 11, "bold"), fg=C_TEXT, bg=C_CARD).pack(anchor="w")

        cf = tk.Frame(win, bg=C_CARD, padx=16, pady=12)
        cf.pack(fill="x", padx=14, pady=(0, 8))
        tk.Label(cf, text=self.messages.history_week, font=(FONT, 11, "bold"),
                 fg=C_TEXT, bg=C_CARD).pack(anchor="w")
        canvas = tk.Canvas(cf, width=340, height=120, bg=C_CARD, highlightthickness=0)
        canvas.pack(pady=(8, 4))

        bar_width, gap = 35, 12
        scale = 80 / max(1, max(count for _, count in week))
        for i, (day, count) in enumerate(week):
            x = 15 + i * (bar_width + gap)
            if count:
                canvas.create_rectangle(x, 95 - count * scale, x + bar_width, 95,
                                        fill=C_ACCENT, outline="")
                canvas.create_text(x + bar_width / 2, 88 - count * scale, text=str(count),
                                   fill=C_TEXT_DIM, font=(FONT, 8))
            canvas.create_text(x + bar_width / 2, 108, text=day[5:],
                               fill=C_TEXT_MUT, font=(FONT, 8))

    # ━━━ Floating Widget ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _create_floating_widget(self) -> None:
        """Small always-on-top countdown with the menu on right-click."""
        if self._widget_win:
            return
        win = tk.Toplevel(self.root)
        win.overrideredirect(True)
        win.attributes("-topmost", True)
        try:
            win.attributes("-alpha", 0.9)
        except tk.TclError:
            pass

        pos = self.config.get("widget_position")
        sw = win.winfo_screenwidth()
        sh = win.winfo_screenheight()
        w, h = 150, 32
        if pos and isinstance(pos, list) and len(pos) == 2:
            x = max(0, min(int(pos[0]), sw - w))
            y = max(0, min(int(pos[1]), sh - h))
        else:
            x, y = sw - w - 20, sh - h - 60
        win.geometry(f"{w}x{h}+{x}+{y}")

        lbl = tk.Label(win, text=self.messages.app_name, font=(FONT, 9, "bold"),
                       fg="#ffffff", bg=C_IDLE, cursor="hand2", padx=8)
        lbl.pack(fill="both", expand=True)
        self._widget_win = win
        self._widget_label = lbl

        for widget in (win, lbl):
            widget.bind("<Button-1>", self._widget_press)
            widget.bind("<B1-Motion>", self._widget_drag)
            widget.bind("<ButtonRelease-1>", self._widget_release)
            widget.bind("<Button-3>", self._widget_menu)
        self._update_floating_widget()

    def _widget_press(self, event) -> None:
        self._widget_drag_x = event.x_root - self._widget_win.winfo_x()
        self._widget_drag_y = event.y_root - self._widget_win.winfo_y()
        self._widget_dragged = False

    def _widget_drag(self, event) -> None:
        x = event.x_root - self._widget_drag_x
        y = event.y_root - self._widget_drag_y
        self._widget_win.geometry(f"+{x}+{y}")
        self._widget_dragged = True

    def _widget_release(self, event) -> None:
        if self._widget_dragged:
            self.config["widget_position"] = [self._widget_win.winfo_x(), self._widget_win.winfo_y()]
            save_config(self.config, self.config_path)

    def _widget_menu(self, event) -> None:
        """Right-click menu built from the 'widget' context entries."""
        menu = tk.Menu(self._widget_win, tearoff=0)
        self._fill_tk_menu(menu, self.native.published_tree("widget"))
        if menu.index("end") is not None:
            menu.add_separator()
        menu.add_command(label=self.messages.quit, command=lambda: self.root.after(0, self._quit))
        try:
            menu.tk_popup(event.x_root, event.y_root)
        finally:
            menu.grab_release()

    def _fill_tk_menu(self, menu: tk.Menu, nodes) -> None:
        for entry, children in nodes:
            if entry.separator:
                menu.add_separator()
            elif children:
                sub = tk.Menu(menu, tearoff=0)
                self._fill_tk_menu(sub, children)
                menu.add_cascade(label=entry.title, menu=sub)
            else:
                menu.add_command(
                    label=entry.title,
                    command=lambda eid=entry.id: self.root.after(0, self.native.select, eid, "widget"))

    def _update_floating_widget(self) -> None:
        if not self._widget_label:
            return
        bg = C_ACCENT if self.timer.is_running else C_PAUSED if self.timer.is_paused else C_IDLE
        try:
            self._widget_label.config(text=self._status_text(), bg=bg)
        except tk.TclError:
            self._widget_label = None

    # ━━━ System Tray ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _update_tray_icon(self) -> None:
        if self.tray is None:
            return
        self.tray.icon = create_tray_image(self.timer.is_running, self.timer.is_paused)
        self.tray.title = f"{self.messages.app_name} — {self._status_text()}"

    def _run_tray(self) -> None:
        img = create_tray_image(self.timer.is_running, self.timer.is_paused)
        self.tray = pystray.Icon("pomotray", img, self.messages.app_name, self.tray_menu.menu())
        self.tray_menu.attach(self.tray)
        self.tray.run()

    def _print_banner(self) -> None:
        cfg = self.config
        print()
        print("  +-----------------------------------------------+")
        print("  |              Pomotray -- Settings             |")
        print("  +-----------------------------------------------+")
        print(f"  |  Focus          {cfg['focus_minutes']:>4} min                     |")
        print(f"  |  Short break    {cfg['short_break_minutes']:>4} min                     |")
        print(f"  |  Long break     {cfg['long_break_minutes']:>4} min                     |")
        interval = cfg["long_break_interval"]
        every = f"every {interval} focus" if interval else "disabled"
        print(f"  |  Long breaks    {every:<30s}|")
        print("  +-----------------------------------------------+")
        if not HAS_TRAY:
            print("\n  [!] No tray icon (pystray not available).")
            print("      pip install pystray pillow")
        print()

    def _quit(self, icon: Optional[Any] = None, item: Optional[Any] = None) -> None:
        save_history(self.history)
        self.player.stop_all()
        if self.tray is not None:
            self.tray.stop()
        self.root.after(0, self.root.quit)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="pomotray", description="Pomodoro timer in the system tray")
    parser.add_argument("--test", action="store_true", help="Use 1 minute phases for testing")
    parser.add_argument("--config", default=CONFIG_FILE, help="Path to the JSON config file")
    args = parser.parse_args(argv)
    if args.test:
        print("\n  [!] TEST MODE: Using 1 minute phases\n")
    PomotrayApp(config_path=args.config, test_mode=args.test)
    return 0


if __name__ == "__main__":
    sys.exit(main())
