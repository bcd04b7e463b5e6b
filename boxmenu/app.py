"""Application entry point launching the menu."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__
from .errors import MenuError
from .executor import ActionExecutor
from .menu import load_entry_file
from .records import ActionDescriptor
from .session import TerminalSession
from .tui import MenuContext, run_menu
from .utils import logbook
from .utils.paths import MENU_FILE, entry_file_for

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="boxmenu", description="Keyboard-driven launcher for menu.csv entries")
    parser.add_argument(
        "entry_file",
        nargs="?",
        default=MENU_FILE,
        help=f"Entry file to open (default: {MENU_FILE})",
    )
    parser.add_argument("--check", action="store_true", help="Print the parsed entries and exit")
    parser.add_argument("--log-file", default=None, help="Append JSON event records to this file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Minimum level written to --log-file",
    )
    parser.add_argument("--version", action="store_true", help="Display version information and exit")
    return parser


def _describe_action(item: ActionDescriptor) -> Text:
    if not item.is_submenu:
        return Text(" ".join(item.command))
    try:
        nested = entry_file_for(item.working_dir)
    except MenuError as exc:
        return Text(f"submenu ({exc})", style="red")
    if nested.is_file():
        return Text(f"submenu → {nested}", style="cyan")
    return Text(f"submenu → {nested} (missing)", style="red")


def check(path: str, console: Optional[Console] = None) -> int:
    """Render the entries of ``path`` as a table; non-zero when unusable."""

    console = console or Console(highlight=False)
    try:
        model = load_entry_file(path)
    except MenuError as exc:
        console.print(Text(str(exc), style="bold red"))
        return EXIT_FAILURE

    table = Table(title=str(model.source or path), show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Working dir")
    table.add_column("Action")
    for index, item in enumerate(model.items):
        table.add_row(str(index + 1), item.name, item.working_dir, _describe_action(item))
    console.print(table)
    return EXIT_OK


def launch(session: TerminalSession, path: str, executor: Optional[ActionExecutor] = None) -> None:
    """Load ``path`` and run the menu inside an already open ``session``.

    A configuration error is shown with the blocking prompt and re-raised so
    the caller can report it once the terminal is restored.
    """

    try:
        model = load_entry_file(path)
    except MenuError as exc:
        logbook.event("load_failed", path=path, error=str(exc))
        session.show_error(f"Failed to load {path}")
        raise

    ctx = MenuContext(session=session, executor=executor or ActionExecutor(session))
    run_menu(ctx, Path(path).name, model)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the launcher and return the process exit code."""

    options = _build_parser().parse_args(list(argv) if argv is not None else None)
    if options.version:
        print(f"boxmenu {__version__}")
        return EXIT_OK

    logbook.configure(options.log_file, options.log_level)
    if options.check:
        return check(options.entry_file)

    errors = Console(stderr=True, highlight=False)
    try:
        with TerminalSession() as session:
            launch(session, options.entry_file)
    except MenuError as exc:
        errors.print(Text(str(exc), style="bold red"))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except Exception as exc:
        errors.print(Text(f"Internal error: {type(exc).__name__}: {exc}", style="bold red"))
        return EXIT_FAILURE
    finally:
        logging.shutdown()
    return EXIT_OK


__all__ = ["check", "launch", "main"]
