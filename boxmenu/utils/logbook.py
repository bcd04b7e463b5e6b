"""Structured JSON event log for launcher activity.

Every menu interaction and child process run can leave a JSON line behind.
Nothing is written unless :func:`configure` attaches a rotating file; until
then records go to a :class:`logging.NullHandler`.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path, PurePath
from typing import Dict, Mapping, Optional, Union

LOGGER_NAME = "boxmenu"
CHANNEL = "boxmenu.Menu"


def _get_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


def configure(path: Optional[Union[str, Path]], level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach a rotating JSON-lines file at ``path`` to the launcher logger.

    Passing ``None`` leaves the logger silent. Calling this again replaces any
    previously attached file handler.
    """

    logger = _get_logger()
    for handler in list(logger.handlers):
        if isinstance(handler, RotatingFileHandler):
            logger.removeHandler(handler)
            handler.close()

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    if path is None:
        return logger

    log_path = Path(path).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def _field_value(value: object) -> object:
    """Flatten a launcher field (paths, argv tuples, modes) into plain JSON."""

    if isinstance(value, Enum):
        return _field_value(value.value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, Mapping):
        return {str(key): _field_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_field_value(item) for item in value]
    return repr(value)


def _utc_stamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_record(action: str, **fields: object) -> Dict[str, object]:
    """Return the JSON record logged for ``action``.

    ``fields`` are stored as top-level keys next to ``timestamp``,
    ``channel`` and ``action``. ``message`` repeats them as ``key=value``
    pairs in name order so the log reads well with ``grep``.
    """

    record: Dict[str, object] = {"timestamp": _utc_stamp(), "channel": CHANNEL, "action": action}
    pairs = []
    for key in sorted(fields):
        record[key] = _field_value(fields[key])
        pairs.append(f"{key}={record[key]}")
    record["message"] = " ".join([f"[{CHANNEL}] {action}", *pairs])
    return record


def info(record: Dict[str, object]) -> None:
    """Write a JSON record to the launcher log."""

    _get_logger().info(json.dumps(record))


def event(action: str, **fields: object) -> None:
    """Emit a menu log entry with ``action`` and ``fields``."""

    info(build_record(action, **fields))


def error(action: str, **fields: object) -> None:
    """Emit an entry at ``ERROR`` level."""

    _get_logger().error(json.dumps(build_record(action, **fields)))


__all__ = ["build_record", "configure", "error", "event", "info"]
