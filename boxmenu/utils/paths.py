"""Filesystem path helpers for entry files."""

from __future__ import annotations

from pathlib import Path

from ..errors import HomeNotFoundError

MENU_FILE = "menu.csv"


def home_dir(raw_path: str = "~") -> Path:
    """Return the current user's home directory.

    ``raw_path`` is only used to annotate the :class:`HomeNotFoundError`
    raised when the home directory cannot be determined.
    """

    try:
        return Path.home()
    except (KeyError, RuntimeError) as exc:
        raise HomeNotFoundError(raw_path) from exc


def expand_home(raw_path: str) -> Path:
    """Expand a leading ``~`` or ``~/`` in ``raw_path``.

    Other forms such as ``~user`` are left untouched and, like every other
    path, used literally (absolute or relative to the process directory).
    """

    if raw_path == "~":
        return home_dir(raw_path)
    if raw_path.startswith("~/"):
        return home_dir(raw_path) / raw_path[2:]
    return Path(raw_path)


def entry_file_for(working_dir: str) -> Path:
    """Return the nested entry file living in ``working_dir``."""

    return expand_home(working_dir) / MENU_FILE
