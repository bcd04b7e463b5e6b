"""Run the action behind a selected menu row."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Optional, Sequence

from .errors import MenuError
from .menu import MenuModel, load_entry_file
from .records import ActionDescriptor
from .session import TerminalSession
from .utils import logbook
from .utils.paths import entry_file_for, expand_home

SUBMENU_FAILURE = "Failed to load submenu"

Spawn = Callable[[Sequence[str], Path], int]


def run_process(command: Sequence[str], cwd: Path) -> int:
    """Run ``command`` in ``cwd`` with inherited stdio and return its exit status.

    Ctrl-C reaches the child as well; the launcher keeps waiting until the
    child has actually gone away.
    """

    process = subprocess.Popen(list(command), cwd=cwd)
    while True:
        try:
            return process.wait()
        except KeyboardInterrupt:
            continue


def exit_code(returncode: Optional[int]) -> int:
    """Map a child's return code to the reported status (``-1`` when signalled or unknown)."""

    if returncode is None or returncode < 0:
        return -1
    return returncode


class ActionExecutor:
    """Resolve a descriptor to a submenu or a child process."""

    def __init__(self, session: TerminalSession, *, spawn: Optional[Spawn] = None) -> None:
        self.session = session
        self.spawn = spawn or run_process

    def execute(self, item: ActionDescriptor) -> Optional[MenuModel]:
        """Run ``item``.

        Returns the nested model to descend into for submenu markers, and
        ``None`` when there is nothing to descend into (a command ran or the
        submenu could not be loaded). :class:`~boxmenu.errors.HomeNotFoundError`
        from resolving a command's working directory propagates.
        """

        if item.is_submenu:
            return self._load_submenu(item)
        self._run_command(item)
        return None

    def _load_submenu(self, item: ActionDescriptor) -> Optional[MenuModel]:
        try:
            path = entry_file_for(item.working_dir)
            model = load_entry_file(path)
        except MenuError as exc:
            logbook.event("submenu_failed", selection=item.name, working_dir=item.working_dir, error=str(exc))
            self.session.show_error(SUBMENU_FAILURE)
            return None
        logbook.event("submenu_loaded", selection=item.name, path=path, items=len(model.items))
        return model

    def _run_command(self, item: ActionDescriptor) -> None:
        cwd = expand_home(item.working_dir)
        program = item.program
        assert program is not None

        logbook.event("command_start", selection=item.name, command=item.command, cwd=cwd)
        failure: Optional[str] = None
        with self.session.normal_mode():
            self.session.clear()
            try:
                status = exit_code(self.spawn(item.command, cwd))
            except OSError as exc:
                failure = f"Failed to execute '{program}': {exc.strerror or exc}"
                logbook.event("spawn_failed", selection=item.name, program=program, error=str(exc))
            else:
                logbook.event("command_finish", selection=item.name, status=status)
                self.session.pause()
                if status != 0:
                    failure = f"Command failed with status: {status}"

        if failure is not None:
            self.session.show_error(failure)


__all__ = ["ActionExecutor", "SUBMENU_FAILURE", "exit_code", "run_process"]
