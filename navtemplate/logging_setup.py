# navtemplate/logging_setup.py
"""
Logging for the app and its companion processes (CLI, preview window).

Every process tags its lines with a target name and appends them to the
shared defaults, so the maintenance screen can show one merged history.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional

from .defaults import DefaultsStore

LOGS_KEY = "AppLogs"
MAX_LOG_LINES = 1000

_LEVEL_TAGS = {
    logging.DEBUG: "【Debug】",
    logging.INFO: "【Info】",
    logging.WARNING: "【Warning】",
    logging.ERROR: "【Error】",
    logging.CRITICAL: "【Error】",
}


class TargetFormatter(logging.Formatter):
    """Formats records as ``2025-01-31#09:15:00 NavTemplate: 【Info】 message``."""

    def __init__(self, target: str):
        super().__init__(datefmt="%Y-%m-%d#%H:%M:%S")
        self.target = target

    def format(self, record: logging.LogRecord) -> str:
        tag = _LEVEL_TAGS.get(record.levelno, f"【{record.levelname.title()}】")
        message = record.getMessage()
        if record.exc_info:
            exc = record.exc_info[1]
            message = f"{message} - Error: {exc}"
        return f"{self.formatTime(record, self.datefmt)} {self.target}: {tag} {message}"


class DefaultsLogHandler(logging.Handler):
    """
    Appends formatted lines to the ``AppLogs`` list in the shared defaults,
    keeping only the most recent ``max_lines``.
    """

    def __init__(self, store: DefaultsStore, max_lines: int = MAX_LOG_LINES, level=logging.NOTSET):
        super().__init__(level)
        self.store = store
        self.max_lines = max_lines

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
            logs = self.store.get_string_list(LOGS_KEY) or []
            logs.append(line)
            if len(logs) > self.max_lines:
                logs = logs[-self.max_lines:]
            self.store.set_string_list(LOGS_KEY, logs)
        except Exception:
            self.handleError(record)


def setup_logging(
    target: str,
    store: Optional[DefaultsStore] = None,
    *,
    level: int | str = logging.INFO,
    max_lines: int = MAX_LOG_LINES,
    console: bool = True,
) -> logging.Logger:
    """
    Configure the ``navtemplate`` logger with:
    - Console handler: the same line format, to stderr
    - Defaults handler: persisted history shared between targets

    Call this once per process, early. Calling it again replaces the handlers.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger("navtemplate")
    root.setLevel(level)
    root.propagate = False

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = TargetFormatter(target)

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(fmt)
        root.addHandler(ch)

    if store is not None:
        dh = DefaultsLogHandler(store, max_lines=max_lines)
        dh.setFormatter(fmt)
        root.addHandler(dh)

    return root


@dataclass
class LogListEntry:
    """A run of consecutive log lines written by the same target."""
    target: str
    logs: List[str] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.target


def _target_of(line: str) -> Optional[str]:
    # "<timestamp> <target>: ..." with no spaces inside the timestamp
    space = line.find(" ")
    if space < 0:
        return None
    colon = line.find(":", space)
    if colon < 0:
        return None
    return line[space:colon].strip()


class LogBook:
    """Read side of the persisted log history."""

    def __init__(self, store: DefaultsStore):
        self.store = store

    def get_logs(self) -> List[str]:
        self.store.reload()
        return self.store.get_string_list(LOGS_KEY) or []

    def clear_logs(self) -> None:
        self.store.remove(LOGS_KEY)

    def get_log_list(self) -> List[LogListEntry]:
        """
        Group the history, newest first, into runs of lines from the same target.

        Lines that do not follow the log format are skipped.
        """
        entries: List[LogListEntry] = []
        current: Optional[LogListEntry] = None
        for line in reversed(self.get_logs()):
            target = _target_of(line)
            if target is None:
                continue
            if current is None or current.target != target:
                current = LogListEntry(target=target)
                entries.append(current)
            current.logs.append(line)
        return entries
