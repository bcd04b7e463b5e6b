"""Entry-file record parsing."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Optional, Tuple

FIELD_DELIMITER = ","


@dataclass(frozen=True)
class ActionDescriptor:
    """One parsed entry-file row."""

    name: str
    working_dir: str
    command: Tuple[str, ...] = ()

    @property
    def is_submenu(self) -> bool:
        """An empty command links to the nested menu in ``working_dir``."""

        return not self.command

    @property
    def program(self) -> Optional[str]:
        return self.command[0] if self.command else None

    @property
    def arguments(self) -> Tuple[str, ...]:
        return self.command[1:]


def parse_line(line: str) -> Optional[ActionDescriptor]:
    """Parse ``line`` as ``name,working dir,command``.

    Returns ``None`` for lines that are not records: fewer than three fields,
    an empty name, or a command with unbalanced quotes. Fields after the third
    are dropped, so a comma always ends the command.
    """

    parts = line.rstrip("\r\n").split(FIELD_DELIMITER)
    if len(parts) < 3:
        return None

    name, working_dir, raw_command = parts[0], parts[1], parts[2].strip()
    if not name:
        return None

    if not raw_command:
        return ActionDescriptor(name=name, working_dir=working_dir)

    try:
        tokens = shlex.split(raw_command)
    except ValueError:
        return None
    return ActionDescriptor(name=name, working_dir=working_dir, command=tuple(tokens))


__all__ = ["ActionDescriptor", "FIELD_DELIMITER", "parse_line"]
