"""Draw the bordered menu box."""

from __future__ import annotations

import curses
from typing import List, NamedTuple

from .menu import BORDER_WIDTH, MenuModel

TOP_LEFT, TOP_RIGHT = "┌", "┐"
BOTTOM_LEFT, BOTTOM_RIGHT = "└", "┘"
HORIZONTAL = "─"
VERTICAL = "│"
VERTICAL_SELECTED = "║"


class DrawOp(NamedTuple):
    """Text to place at ``(row, column)``."""

    row: int
    column: int
    text: str


def start_column(layout_width: int, terminal_width: int) -> int:
    """Column where the box starts so it sits centred.

    A box wider than the terminal starts at column 0 and is clipped on the
    right when drawn.
    """

    return max(0, (terminal_width - layout_width) // 2)


def _border(left: str, right: str, layout_width: int) -> str:
    return f"{left}{HORIZONTAL * max(0, layout_width - BORDER_WIDTH)}{right}"


def _item_row(name: str, layout_width: int, selected: bool) -> str:
    interior = max(0, layout_width - BORDER_WIDTH)
    left_pad = max(0, (interior - len(name)) // 2)
    right_pad = max(0, interior - left_pad - len(name))
    bar = VERTICAL_SELECTED if selected else VERTICAL
    return f"{bar}{' ' * left_pad}{name}{' ' * right_pad}{bar}"


def render(model: MenuModel, terminal_width: int) -> List[DrawOp]:
    """Return the draw operations for ``model`` on a terminal ``terminal_width`` wide.

    The result only depends on its arguments: the top border on row 0, one
    row per entry, then the bottom border.
    """

    column = start_column(model.layout_width, terminal_width)
    ops = [DrawOp(0, column, _border(TOP_LEFT, TOP_RIGHT, model.layout_width))]
    for index, item in enumerate(model.items):
        row = _item_row(item.name, model.layout_width, index == model.selected_index)
        ops.append(DrawOp(index + 1, column, row))
    ops.append(DrawOp(len(model.items) + 1, column, _border(BOTTOM_LEFT, BOTTOM_RIGHT, model.layout_width)))
    return ops


def put_clipped(win: "curses._CursesWindow", op: DrawOp) -> int:
    """Paint ``op`` on ``win``, dropping whatever falls outside the window.

    Returns the number of characters kept. A box wider or taller than the
    terminal loses its right-hand columns and bottom rows.
    """

    rows, columns = win.getmaxyx()
    if not (0 <= op.row < rows and 0 <= op.column < columns):
        return 0
    visible = op.text[: columns - op.column]
    try:
        win.addstr(op.row, op.column, visible)
    except curses.error:
        # addstr returns ERR after filling the last cell of the last row;
        # the text is on screen by then.
        pass
    return len(visible)


def draw(win: "curses._CursesWindow", model: MenuModel) -> None:
    """Clear ``win`` and paint ``model`` centred on it."""

    win.erase()
    _, width = win.getmaxyx()
    for op in render(model, width):
        put_clipped(win, op)
    win.refresh()


__all__ = ["DrawOp", "draw", "put_clipped", "render", "start_column"]
