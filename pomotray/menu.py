"""
Declarative tray menus.

A Menu is a list of MenuGroups holding Actions and ParentMenus. Titles and
visibility are properties read fresh on every apply(), so the same tree can be
re-rendered whenever the timer changes state.

apply() tears the host menu down and recreates it entry by entry. It is not
reentrant: callers must keep at most one apply() in flight at a time.
"""
from __future__ import annotations
import itertools
from typing import Any, Callable, Iterable, Optional

# ─── Ids ──────────────────────────────────────────────────────
SEPARATOR = "separator"
PARENT = "parent"
ITEM = "item"
CHILD = "child"
KINDS = (SEPARATOR, PARENT, ITEM, CHILD)


class IdAllocator:
    """Hands out ids like ``pomotray-3-item-0`` for a single apply() pass."""

    def __init__(self, pass_no: int = 0, prefix: str = "pomotray"):
        self.pass_no = pass_no
        self.prefix = prefix
        self._counter = itertools.count()

    def next_id(self, kind: str) -> str:
        if kind not in KINDS:
            raise ValueError(f"Unknown menu entry kind: {kind!r}")
        return f"{self.prefix}-{self.pass_no}-{kind}-{next(self._counter)}"


# ─── Dispatch ─────────────────────────────────────────────────
class DispatchRegistry:
    """Maps rendered entry ids to zero-argument callbacks."""

    def __init__(self):
        self._handlers: dict[str, Callable[[], Any]] = {}

    def clear(self) -> None:
        self._handlers.clear()

    def set(self, entry_id: str, callback: Callable[[], Any]) -> None:
        self._handlers[entry_id] = callback

    def get(self, entry_id: str) -> Optional[Callable[[], Any]]:
        return self._handlers.get(entry_id)

    def dispatch(self, entry_id: str) -> bool:
        """Run the callback for entry_id. Unknown ids are ignored.

        The callback's return value is not waited on. Exceptions propagate.
        """
        callback = self.get(entry_id)
        if callback is None:
            return False
        callback()
        return True

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self):
        return iter(self._handlers)


# ─── Nodes ────────────────────────────────────────────────────
class Action:
    """A leaf menu entry. Subclasses override title, visible and run()."""

    @property
    def title(self) -> str:
        return ""

    @property
    def visible(self) -> bool:
        return False

    def run(self) -> Any:
        pass


def _resolve(value):
    return value() if callable(value) else value


class SimpleAction(Action):
    """Action built from a callback. title and visible may be callables."""

    def __init__(self, title, callback: Callable[[], Any], visible=True):
        self._title = title
        self._callback = callback
        self._visible = visible

    @property
    def title(self) -> str:
        return _resolve(self._title)

    @property
    def visible(self) -> bool:
        return bool(_resolve(self._visible))

    def run(self) -> Any:
        return self._callback()

    def __repr__(self) -> str:
        return f"SimpleAction({self.title!r})"


class ParentMenu:
    """A submenu. Children are Actions filtered for visibility when rendered."""

    def __init__(self, *children: Action):
        self.children = list(children)

    def add_child(self, child: Action) -> None:
        self.children.append(child)

    @property
    def title(self) -> str:
        return ""

    @property
    def visible(self) -> bool:
        return False


class Submenu(ParentMenu):
    def __init__(self, title, *children: Action, visible=True):
        super().__init__(*children)
        self._title = title
        self._visible = visible

    @property
    def title(self) -> str:
        return _resolve(self._title)

    @property
    def visible(self) -> bool:
        return bool(_resolve(self._visible))


class MenuGroup:
    """Siblings rendered together, set apart from other groups by a separator."""

    def __init__(self, *items):
        self.items = list(items)

    def add_item(self, item) -> None:
        self.items.append(item)


# ─── Reconciler ───────────────────────────────────────────────
class Menu:

    def __init__(self, contexts: Iterable[str], *groups: MenuGroup):
        self.contexts = tuple(contexts)
        self.groups = list(groups)
        self._passes = itertools.count(1)

    def add_group(self, group: MenuGroup) -> None:
        self.groups.append(group)

    def apply(self, host, pass_no: Optional[int] = None) -> DispatchRegistry:
        """Rebuild host from scratch and return the new dispatch registry.

        host needs clear_all() and create(entry_id, title, contexts,
        parent_id=None, separator=False). pass_no goes into every id; when
        several menus share a host the caller numbers the passes so ids never
        repeat across menus.
        """
        host.clear_all()
        registry = DispatchRegistry()
        ids = IdAllocator(next(self._passes) if pass_no is None else pass_no)

        first_group = True
        for group in self.groups:
            first_item = True
            for node in group.items:
                if not node.visible:
                    continue

                if first_item and not first_group:
                    host.create(ids.next_id(SEPARATOR), "", self.contexts, separator=True)

                first_group = False
                first_item = False

                if isinstance(node, ParentMenu):
                    parent_id = ids.next_id(PARENT)
                    host.create(parent_id, node.title, self.contexts)
                    for child in node.children:
                        if not child.visible:
                            continue
                        child_id = ids.next_id(CHILD)
                        host.create(child_id, child.title, self.contexts, parent_id=parent_id)
                        registry.set(child_id, child.run)
                elif isinstance(node, Action):
                    item_id = ids.next_id(ITEM)
                    host.create(item_id, node.title, self.contexts)
                    registry.set(item_id, node.run)
                else:
                    raise TypeError(f"Menu groups hold Actions and ParentMenus, not {type(node).__name__}")
        return registry


# ─── Selection ────────────────────────────────────────────────
class MenuSwitch:
    """Picks the first Menu whose predicate accepts the current state."""

    def __init__(self, state, alternatives: Iterable[tuple[Callable[[Any], bool], Menu]],
                 default: Optional[Menu] = None):
        self.state = state
        self.alternatives = list(alternatives)
        self.default = default

    def select(self) -> Menu:
        for predicate, menu in self.alternatives:
            if predicate(self.state):
                return menu
        if self.default is None:
            raise LookupError("No menu matches the current state")
        return self.default

    def apply(self, host, pass_no: Optional[int] = None) -> DispatchRegistry:
        return self.select().apply(host, pass_no)


def is_active(timer) -> bool:
    return timer.is_running or timer.is_paused


class MenuSelector(MenuSwitch):
    """Renders ``active`` while the timer runs or is paused, else ``inactive``."""

    def __init__(self, timer, inactive: Menu, active: Menu,
                 predicate: Callable[[Any], bool] = is_active):
        super().__init__(timer, [(predicate, active)], default=inactive)
        self.timer = timer
        self.inactive = inactive
        self.active = active
