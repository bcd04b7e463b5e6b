"""Error taxonomy for configuration problems surfaced by the launcher."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class MenuError(Exception):
    """Base class for configuration-class errors.

    These are shown to the operator through the blocking error prompt and,
    for the entry file loaded at startup, decide the process exit code.
    """


class HomeNotFoundError(MenuError):
    """Raised when a ``~`` prefixed path needs a home directory that cannot be resolved."""

    def __init__(self, raw_path: str) -> None:
        super().__init__(f"Cannot expand '{raw_path}': home directory not found")
        self.raw_path = raw_path


class MenuLoadError(MenuError):
    """An entry file could not be opened or read."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        message = f"Failed to open {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = Path(path)


class EmptyMenuError(MenuError):
    """An entry file was read but none of its lines is a valid record."""

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__(f"No menu entries found in {path}")
        self.path = Path(path)


__all__ = ["EmptyMenuError", "HomeNotFoundError", "MenuError", "MenuLoadError"]
