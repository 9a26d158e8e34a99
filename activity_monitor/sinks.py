"""
Persistence sinks — the two CSV files the monitor writes.

SummarySink  — monitoring_sessions.csv, one row per completed session,
               appended for the lifetime of the process.
DetailedSink — latest_session_details.csv, one row per action of the
               current (or most recent) session; truncated at each start.

Every write is flushed and fsync'd so an abrupt exit loses at most the
record being written.
"""

from __future__ import annotations

import csv
import logging
import os
from dataclasses import astuple, dataclass
from pathlib import Path

from activity_monitor.session import SUMMARY_COLUMNS

logger = logging.getLogger("activity_monitor.sinks")

SESSIONS_FILE = "monitoring_sessions.csv"
DETAILS_FILE = "latest_session_details.csv"

DETAIL_COLUMNS = ("timestamp", "task_name", "event_type", "details", "mouse_x", "mouse_y")


class SinkError(Exception):
    """A sink could not be opened or written."""


@dataclass(frozen=True)
class DetailedEvent:
    """One row of the detailed file."""

    timestamp: str
    task_name: str
    event_type: str
    details: str
    mouse_x: int
    mouse_y: int

    def to_row(self) -> list:
        return list(astuple(self))


class _CsvSink:
    """A CSV file kept open for writing, flushed to disk after every row."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)
        self._file = None
        self._writer = None

    def _open(self, mode: str) -> None:
        self.close()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, mode, newline="", encoding="utf-8")
        except OSError as exc:
            raise SinkError(f"Cannot open {self.path}: {exc}") from exc
        self._writer = csv.writer(self._file, lineterminator="\n")

    def _write_row(self, row) -> None:
        if self._file is None:
            raise SinkError(f"{self.path} is closed")
        try:
            self._writer.writerow(row)
            self._file.flush()
            os.fsync(self._file.fileno())
        except (OSError, csv.Error) as exc:
            raise SinkError(f"Cannot write {self.path}: {exc}") from exc

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            self._writer = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class SummarySink(_CsvSink):
    """Session summary file; header written once when opened."""

    def __init__(self, path: str | os.PathLike) -> None:
        super().__init__(path)
        self._open("w")
        self._write_row(SUMMARY_COLUMNS)
        logger.info("Created %s for storing sessions.", self.path)

    def append(self, record: list[str]) -> None:
        self._write_row(record)


class DetailedSink(_CsvSink):
    """Per-event file holding only the latest session."""

    def __init__(self, path: str | os.PathLike) -> None:
        super().__init__(path)
        self._header_written = False
        self._open("w")
        logger.info("Created %s for detailed events.", self.path)

    def reset(self) -> None:
        """Discard everything written so far."""
        self._header_written = False
        self._open("w")

    def write(self, event: DetailedEvent) -> None:
        if not self._header_written:
            self._write_row(DETAIL_COLUMNS)
            self._header_written = True
        self._write_row(event.to_row())
