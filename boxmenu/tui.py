"""Curses navigation loop over a stack of menus."""

from __future__ import annotations

import curses
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from .errors import MenuError
from .executor import ActionExecutor
from .menu import MenuModel
from .render import draw
from .session import TerminalSession
from .utils import logbook

ESCAPE_KEY = 27
ENTER_KEYS = {curses.KEY_ENTER, ord("\n"), ord("\r")}
UP_KEYS = {curses.KEY_UP}
DOWN_KEYS = {curses.KEY_DOWN}

BREADCRUMB_SEPARATOR = " › "


class MenuLevel(NamedTuple):
    title: str
    model: MenuModel


@dataclass
class MenuContext:
    """Runtime context shared between nested menus."""

    session: TerminalSession
    executor: ActionExecutor
    stack: List[MenuLevel] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def current(self) -> Optional[MenuLevel]:
        return self.stack[-1] if self.stack else None

    @property
    def current_menu(self) -> str:
        return BREADCRUMB_SEPARATOR.join(level.title for level in self.stack)

    def push(self, title: str, model: MenuModel) -> None:
        self.stack.append(MenuLevel(title, model))
        logbook.event("enter", menu=self.current_menu, items=len(model.items))

    def pop(self) -> MenuLevel:
        logbook.event("exit", menu=self.current_menu)
        return self.stack.pop()


def _handle_key(ctx: MenuContext, key: int) -> None:
    """Apply ``key`` to the menu on top of the stack."""

    level = ctx.current
    assert level is not None
    model = level.model

    if key == ESCAPE_KEY:
        ctx.pop()
        return
    if key in UP_KEYS:
        model.move_up()
        return
    if key in DOWN_KEYS:
        model.move_down()
        return
    if key not in ENTER_KEYS:
        return

    item = model.selected_item
    if item is None:
        return
    logbook.event("select", menu=ctx.current_menu, selection=item.name)
    try:
        submenu = ctx.executor.execute(item)
    except MenuError as exc:
        logbook.event("action_error", menu=ctx.current_menu, selection=item.name, error=str(exc))
        ctx.session.show_error(str(exc))
        return
    if submenu is not None:
        ctx.push(item.name, submenu)


def run_menu(ctx: MenuContext, title: str, model: MenuModel) -> None:
    """Run the render/input loop until the menu pushed here is left with Escape.

    Submenus are pushed on ``ctx.stack`` and drawn in place of their parent;
    leaving one resumes the parent with its focus unchanged.
    """

    base_depth = ctx.depth
    ctx.push(title, model)
    while ctx.depth > base_depth:
        level = ctx.current
        assert level is not None
        draw(ctx.session.window, level.model)
        key = ctx.session.read_key()
        if key == curses.KEY_RESIZE:
            continue
        _handle_key(ctx, key)


__all__ = [
    "DOWN_KEYS",
    "ENTER_KEYS",
    "ESCAPE_KEY",
    "MenuContext",
    "MenuLevel",
    "UP_KEYS",
    "run_menu",
]
