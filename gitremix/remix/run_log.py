"""
Run log accumulator.

The run log is the ordered list of LogEntry values returned to the caller.
It is passed explicitly through the pipeline and accepts appends from the
blob worker threads.
"""

import logging
import threading
from typing import Iterator, List

from ..models.results import LogEntry, LogType

# Operator logging level for each entry type
_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class RunLog:
    """Append-only, thread-safe sequence of LogEntry values."""

    def __init__(self) -> None:
        self._entries: List[LogEntry] = []
        self._lock = threading.Lock()

    def add(self, message: str, entry_type: LogType = "info") -> LogEntry:
        """
        Append one entry and mirror it to operator logging.

        Args:
            message: Text of the entry
            entry_type: info, success, warning or error

        Returns:
            The appended entry
        """
        entry = LogEntry(message=message, type=entry_type)
        with self._lock:
            self._entries.append(entry)
        logging.log(_LEVELS[entry_type], "%s", message)
        return entry

    def info(self, message: str) -> LogEntry:
        return self.add(message, "info")

    def success(self, message: str) -> LogEntry:
        return self.add(message, "success")

    def warning(self, message: str) -> LogEntry:
        return self.add(message, "warning")

    def error(self, message: str) -> LogEntry:
        return self.add(message, "error")

    @property
    def entries(self) -> List[LogEntry]:
        """Snapshot of the entries in append order."""
        with self._lock:
            return list(self._entries)

    def of_type(self, entry_type: LogType) -> List[LogEntry]:
        return [entry for entry in self.entries if entry.type == entry_type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)


__all__ = ["RunLog"]
