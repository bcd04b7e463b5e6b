"""Menu model: parsed entries, cursor and layout metrics."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .errors import EmptyMenuError, MenuLoadError
from .records import ActionDescriptor, parse_line
from .utils.paths import expand_home

# Border glyphs on each side of the longest name.
BORDER_WIDTH = 2


@dataclass
class MenuModel:
    """Ordered entries of one menu level plus the focused row."""

    items: List[ActionDescriptor] = field(default_factory=list)
    selected_index: int = 0
    layout_width: int = 0
    source: Optional[Path] = None

    @classmethod
    def from_items(cls, items: Iterable[ActionDescriptor], source: Optional[Path] = None) -> "MenuModel":
        model = cls(source=source)
        for item in items:
            model.append(item)
        return model

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: Optional[Path] = None) -> "MenuModel":
        """Build a model from raw entry-file lines, skipping malformed ones."""

        model = cls(source=source)
        for line in lines:
            item = parse_line(line)
            if item is not None:
                model.append(item)
        return model

    @classmethod
    def load(cls, path: Union[str, Path]) -> "MenuModel":
        """Read the entry file at ``path``.

        A leading ``~`` is expanded first. I/O and decoding failures raise
        :class:`MenuLoadError` naming the path; malformed lines are skipped so
        a partly broken file still yields a usable menu.
        """

        resolved = expand_home(str(path))
        try:
            with resolved.open("r", encoding="utf-8") as handle:
                return cls.from_lines(handle, source=resolved)
        except OSError as exc:
            raise MenuLoadError(resolved, exc.strerror or str(exc)) from exc
        except UnicodeDecodeError as exc:
            raise MenuLoadError(resolved, f"not valid UTF-8 ({exc.reason})") from exc

    def append(self, item: ActionDescriptor) -> None:
        self.items.append(item)
        self.layout_width = max(self.layout_width, len(item.name) + BORDER_WIDTH)

    @property
    def selected_item(self) -> Optional[ActionDescriptor]:
        if not self.items:
            return None
        return self.items[self.selected_index]

    def move_up(self) -> None:
        """Focus the previous row; stays put on the first row."""

        if self.selected_index > 0:
            self.selected_index -= 1

    def move_down(self) -> None:
        """Focus the next row; stays put on the last row."""

        if self.selected_index < len(self.items) - 1:
            self.selected_index += 1


def load_entry_file(path: Union[str, Path]) -> MenuModel:
    """Load ``path`` and insist on at least one usable entry."""

    model = MenuModel.load(path)
    if not model.items:
        raise EmptyMenuError(model.source or path)
    return model


__all__ = ["BORDER_WIDTH", "MenuModel", "load_entry_file"]
