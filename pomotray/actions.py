"""The pomodoro tray menu: timer actions and the two menu layouts."""
from __future__ import annotations

from .menu import Action, Menu, MenuGroup, MenuSelector, ParentMenu
from .messages import M

DEFAULT_CONTEXTS = ("tray", "widget")


class TimerAction(Action):

    def __init__(self, timer, messages=M):
        self.timer = timer
        self.messages = messages


class StartFocusingAction(TimerAction):

    @property
    def title(self) -> str:
        return self.messages.start_focusing

    @property
    def visible(self) -> bool:
        return True

    def run(self):
        self.timer.start_focus()


class StartShortBreakAction(TimerAction):

    @property
    def title(self) -> str:
        # Without long breaks there's only one kind of break
        return self.messages.start_short_break if self.timer.has_long_break else self.messages.start_break

    @property
    def visible(self) -> bool:
        return True

    def run(self):
        self.timer.start_short_break()


class StartLongBreakAction(TimerAction):

    @property
    def title(self) -> str:
        return self.messages.start_long_break

    @property
    def visible(self) -> bool:
        return self.timer.has_long_break

    def run(self):
        self.timer.start_long_break()


class StopTimerAction(TimerAction):

    @property
    def title(self) -> str:
        return self.messages.stop_timer

    @property
    def visible(self) -> bool:
        return self.timer.is_running or self.timer.is_paused

    def run(self):
        self.timer.stop()


class PauseTimerAction(TimerAction):

    @property
    def title(self) -> str:
        return self.messages.pause_timer

    @property
    def visible(self) -> bool:
        return self.timer.is_running

    def run(self):
        self.timer.pause()


class ResumeTimerAction(TimerAction):

    @property
    def title(self) -> str:
        return self.messages.resume_timer

    @property
    def visible(self) -> bool:
        return self.timer.is_paused

    def run(self):
        self.timer.resume()


class StartPomodoroCycleAction(TimerAction):

    @property
    def title(self) -> str:
        if self.timer.is_running or self.timer.is_paused:
            return self.messages.restart_pomodoro_cycle
        return self.messages.start_pomodoro_cycle

    @property
    def visible(self) -> bool:
        return self.timer.has_long_break

    def run(self):
        self.timer.start_cycle()


class PomodoroHistoryAction(Action):
    """Opens the history page. ``pages`` needs a show_history_page() method."""

    def __init__(self, pages, messages=M):
        self.pages = pages
        self.messages = messages

    @property
    def title(self) -> str:
        return self.messages.pomodoro_history

    @property
    def visible(self) -> bool:
        return True

    def run(self):
        return self.pages.show_history_page()


class RestartTimerParentMenu(ParentMenu):

    def __init__(self, *children, messages=M):
        super().__init__(*children)
        self.messages = messages

    @property
    def title(self) -> str:
        return self.messages.restart_timer

    @property
    def visible(self) -> bool:
        return True


def create_pomodoro_menu(timer, pages, contexts=DEFAULT_CONTEXTS, messages=M) -> MenuSelector:
    """Build the idle and running menus around one set of shared actions."""
    pause = PauseTimerAction(timer, messages)
    resume = ResumeTimerAction(timer, messages)
    stop = StopTimerAction(timer, messages)

    start_cycle = StartPomodoroCycleAction(timer, messages)
    start_focus = StartFocusingAction(timer, messages)
    start_short_break = StartShortBreakAction(timer, messages)
    start_long_break = StartLongBreakAction(timer, messages)
    view_history = PomodoroHistoryAction(pages, messages)

    inactive = Menu(contexts,
        MenuGroup(
            start_cycle,
            start_focus,
            start_short_break,
            start_long_break,
        ),
        MenuGroup(
            view_history,
        ),
    )

    active = Menu(contexts,
        MenuGroup(
            pause,
            resume,
            stop,
            RestartTimerParentMenu(
                start_focus,
                start_short_break,
                start_long_break,
                messages=messages,
            ),
            start_cycle,
        ),
        MenuGroup(
            view_history,
        ),
    )

    return MenuSelector(timer, inactive, active)
