"""Terminal ownership: menu mode, handoff to children and guaranteed restore."""

from __future__ import annotations

import curses
import os
import sys
import termios
import tty
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional, TextIO, Tuple

from rich.console import Console
from rich.text import Text

from .utils import logbook

ESCAPE_DELAY_MS = 25
CONTINUE_PROMPT = "Press any key to continue..."
KEY_READ_SIZE = 32

Acknowledge = Callable[[str], object]


class TerminalMode(str, Enum):
    NORMAL = "normal"
    MENU = "menu"
    MIXED = "mixed"


@dataclass
class TerminalState:
    """Recorded terminal flags; the defaults describe a normal shell terminal."""

    raw: bool = False
    cursor_visible: bool = True
    line_wrap: bool = True

    @property
    def mode(self) -> TerminalMode:
        if not self.raw and self.cursor_visible and self.line_wrap:
            return TerminalMode.NORMAL
        if self.raw and not self.cursor_visible and not self.line_wrap:
            return TerminalMode.MENU
        return TerminalMode.MIXED


def _set_cursor(visibility: int) -> None:
    try:
        curses.curs_set(visibility)
    except curses.error:
        pass


def _put_capability(name: str) -> None:
    """Emit terminfo capability ``name`` when the terminal defines it."""

    try:
        capability = curses.tigetstr(name)
    except curses.error:
        return
    if capability:
        curses.putp(capability)


def wait_for_key(stream: TextIO) -> str:
    """Block until a single key arrives on ``stream`` and return it.

    A terminal is read in raw mode, so any keystroke answers without Enter
    (Ctrl-C included) and an arrow key's escape sequence is consumed whole.
    Other streams give up one character. End of input counts as a key.
    """

    try:
        fd = stream.fileno() if stream.isatty() else None
    except (AttributeError, OSError, ValueError):
        fd = None
    if fd is None:
        try:
            return stream.read(1)
        except (OSError, ValueError):
            return ""

    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd, termios.TCSANOW)
        data = os.read(fd, KEY_READ_SIZE)
    except OSError:
        data = b""
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
    return data.decode("utf-8", errors="ignore")


class CursesDriver:
    """Thin wrapper over the process-wide curses calls used by the session."""

    def __init__(self) -> None:
        self.menu_active = False

    def start(self) -> "curses._CursesWindow":
        window = curses.initscr()
        if hasattr(curses, "set_escdelay"):
            curses.set_escdelay(ESCAPE_DELAY_MS)
        window.nodelay(False)
        return window

    def enter_menu_mode(self, window: "curses._CursesWindow") -> None:
        curses.reset_prog_mode()
        curses.noecho()
        curses.raw()
        window.keypad(True)
        _set_cursor(0)
        # rmam: no automatic margins, long rows are clipped instead of wrapped.
        _put_capability("rmam")
        window.clear()
        # endwin() stays in effect until the next refresh.
        window.refresh()
        self.menu_active = True

    def enter_normal_mode(self, window: "curses._CursesWindow") -> None:
        curses.def_prog_mode()
        _put_capability("smam")
        _set_cursor(1)
        curses.endwin()
        self.menu_active = False

    def stop(self, window: Optional["curses._CursesWindow"]) -> None:
        """Put the terminal back into shell mode whatever state it was left in."""

        if window is None:
            return
        self.menu_active = False
        window.keypad(False)
        curses.noraw()
        curses.echo()
        _put_capability("smam")
        _set_cursor(1)
        for restore in (curses.reset_shell_mode, curses.endwin):
            try:
                restore()
            except curses.error:
                # ERR when curses already considers itself ended.
                pass


class TerminalSession:
    """Own the terminal for the lifetime of the launcher.

    Use it as a context manager: entering switches to menu mode (raw input,
    hidden cursor, no line wrap) and leaving restores the normal terminal
    exactly once, whether the body returned or raised. Child processes and
    blocking prompts run inside :meth:`normal_mode`.
    """

    def __init__(
        self,
        driver: Optional[CursesDriver] = None,
        *,
        console: Optional[Console] = None,
        acknowledge: Optional[Acknowledge] = None,
        stdin: Optional[TextIO] = None,
    ) -> None:
        self.driver = driver or CursesDriver()
        self.console = console or Console(highlight=False)
        self.stdin = stdin if stdin is not None else sys.stdin
        self._acknowledge = acknowledge or self._read_acknowledgement
        self.state = TerminalState()
        self.window: Optional["curses._CursesWindow"] = None
        self._closed = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def open(self) -> "TerminalSession":
        try:
            self.window = self.driver.start()
            self._enter_menu_mode()
        except BaseException:
            self.close()
            raise
        logbook.event("session_open")
        return self

    def close(self) -> None:
        """Restore cursor, line wrap and cooked input; later calls do nothing."""

        if self._closed:
            return
        self._closed = True
        try:
            self.driver.stop(self.window)
        finally:
            self.state = TerminalState()
            logbook.event("session_restore")

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "TerminalSession":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is not None and not isinstance(exc, KeyboardInterrupt):
            logbook.error("session_fault", kind=exc_type.__name__, error=str(exc))
        self.close()
        return False

    # ------------------------------------------------------------------
    # Mode handoff
    # ------------------------------------------------------------------
    def _enter_menu_mode(self) -> None:
        assert self.window is not None
        self.driver.enter_menu_mode(self.window)
        self.state = TerminalState(raw=True, cursor_visible=False, line_wrap=False)

    def _enter_normal_mode(self) -> None:
        assert self.window is not None
        self.driver.enter_normal_mode(self.window)
        self.state = TerminalState()

    @contextmanager
    def normal_mode(self) -> Iterator["TerminalSession"]:
        """Hand the terminal back in normal mode for the duration of the block.

        Menu mode is re-entered afterwards even when the block raises. Nested
        use inside an outer ``normal_mode`` block leaves the mode alone.
        """

        if self._closed or self.state.mode is TerminalMode.NORMAL:
            yield self
            return
        self._enter_normal_mode()
        try:
            yield self
        finally:
            self._enter_menu_mode()

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------
    def _read_acknowledgement(self, prompt: str) -> None:
        self.console.print(prompt, end="", markup=False, highlight=False)
        try:
            wait_for_key(self.stdin)
        finally:
            self.console.print()

    def clear(self) -> None:
        self.console.clear()

    def pause(self, prompt: str = CONTINUE_PROMPT) -> None:
        """Wait for the operator in normal mode."""

        with self.normal_mode():
            self._acknowledge(prompt)

    def show_error(self, message: str) -> None:
        """Show ``message`` on a cleared normal-mode screen and wait for acknowledgement."""

        logbook.event("error_prompt", message=message)
        with self.normal_mode():
            self.clear()
            self.console.print(Text(f"Error: {message}", style="bold red"))
            self._acknowledge(CONTINUE_PROMPT)

    # ------------------------------------------------------------------
    # Input and geometry
    # ------------------------------------------------------------------
    def read_key(self) -> int:
        assert self.window is not None
        return self.window.getch()

    def size(self) -> Tuple[int, int]:
        assert self.window is not None
        return self.window.getmaxyx()


__all__ = [
    "CONTINUE_PROMPT",
    "CursesDriver",
    "ESCAPE_DELAY_MS",
    "TerminalMode",
    "TerminalSession",
    "TerminalState",
    "wait_for_key",
]
