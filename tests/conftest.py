from __future__ import annotations

import sys
from io import StringIO
from pathlib import Path
from typing import Iterable, List, Optional

import pytest
from rich.console import Console

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from boxmenu.session import TerminalSession  # noqa: E402

ESC = 27


class FakeWindow:
    """Minimal curses window stub capturing drawn content for assertions."""

    def __init__(self, *, height: int = 24, width: int = 80, inputs: Iterable[int] | None = None) -> None:
        self.height = height
        self.width = width
        self._inputs: List[int] = list(inputs or [])
        self.buffer: List[List[str]] = [[" "] * width for _ in range(height)]
        self.frames: List[List[str]] = []

    # Curses window interface -------------------------------------------------
    def getmaxyx(self) -> tuple[int, int]:
        return self.height, self.width

    def erase(self) -> None:
        for row in range(self.height):
            self.buffer[row] = [" "] * self.width

    def addstr(self, y: int, x: int, text: str, _attr: int = 0) -> None:
        if y < 0 or y >= self.height:
            return
        if x < 0 or x >= self.width:
            return
        limit = min(self.width - x, len(text))
        for idx in range(limit):
            self.buffer[y][x + idx] = text[idx]

    def refresh(self) -> None:
        self.frames.append([self.line(row) for row in range(self.height)])

    def getch(self) -> int:
        if self._inputs:
            return self._inputs.pop(0)
        return ESC

    def feed(self, *keys: int) -> None:
        self._inputs.extend(keys)

    # Helpers ----------------------------------------------------------------
    def line(self, y: int) -> str:
        return "".join(self.buffer[y])


class FakeDriver:
    """Records the mode transitions a :class:`TerminalSession` asks for."""

    def __init__(self, window: Optional[FakeWindow] = None) -> None:
        self.window = window or FakeWindow()
        self.calls: List[str] = []

    def start(self) -> FakeWindow:
        self.calls.append("start")
        return self.window

    def enter_menu_mode(self, window: FakeWindow) -> None:
        self.calls.append("menu")

    def enter_normal_mode(self, window: FakeWindow) -> None:
        self.calls.append("normal")

    def stop(self, window: Optional[FakeWindow]) -> None:
        self.calls.append("stop")


class Acknowledger:
    """Stands in for the operator pressing a key at every prompt."""

    def __init__(self, session_ref: List[TerminalSession]) -> None:
        self.prompts: List[str] = []
        self.modes: List[str] = []
        self._session_ref = session_ref

    def __call__(self, prompt: str) -> None:
        self.prompts.append(prompt)
        if self._session_ref:
            self.modes.append(self._session_ref[0].state.mode.value)


@pytest.fixture()
def window() -> FakeWindow:
    return FakeWindow()


@pytest.fixture()
def driver(window: FakeWindow) -> FakeDriver:
    return FakeDriver(window)


@pytest.fixture()
def output() -> StringIO:
    return StringIO()


@pytest.fixture()
def acknowledge() -> Acknowledger:
    return Acknowledger([])


@pytest.fixture()
def session(driver: FakeDriver, output: StringIO, acknowledge: Acknowledger) -> Iterable[TerminalSession]:
    console = Console(file=output, width=200, force_terminal=False, color_system=None)
    term = TerminalSession(driver, console=console, acknowledge=acknowledge)
    acknowledge._session_ref.append(term)
    with term:
        yield term


@pytest.fixture()
def write_menu(tmp_path: Path):
    def _write(text: str, directory: Optional[Path] = None) -> Path:
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / "menu.csv"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
