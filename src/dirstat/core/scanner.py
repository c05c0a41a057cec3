"""Listing of a single directory."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Protocol

import structlog
from structlog.stdlib import BoundLogger

from .channel import WorkChannel
from .models import FileMeasurement, FileSize, SkippedEntry, Stats


class ErrorReporter(Protocol):
    """Receives recoverable errors met during a traversal."""

    def report(self, path: Path, error: OSError, *, kind: str) -> None:
        """Records that ``path`` was skipped because of ``error``."""

    @property
    def count(self) -> int:
        """Number of reports received so far."""


class LoggingErrorReporter:
    """Reports skipped entries as structlog warnings and counts them."""

    def __init__(self, logger: BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger(__name__)
        self._lock = threading.Lock()
        self._count = 0

    def report(self, path: Path, error: OSError, *, kind: str) -> None:
        with self._lock:
            self._count += 1
        self._logger.warning(f"{kind}-failed", path=str(path), error=str(error))

    @property
    def count(self) -> int:
        with self._lock:
            return self._count


def measure_file(entry: os.DirEntry) -> FileMeasurement:
    """Reads the size of a regular file without letting a race abort the scan."""

    try:
        return FileSize(entry.stat(follow_symlinks=False).st_size)
    except OSError as exc:
        return SkippedEntry(path=Path(entry.path), reason=exc)


class EntryScanner:
    """Counts the files of one directory and hands its subdirectories to the channel."""

    def __init__(self, channel: WorkChannel, error_reporter: ErrorReporter | None = None) -> None:
        self._channel = channel
        self._errors = error_reporter or LoggingErrorReporter()
        self._logger = structlog.get_logger(__name__)

    def scan(self, path: Path) -> Stats:
        """Returns stats of the files directly inside ``path``.

        Subdirectories are not descended into; each one is sent to the work
        channel instead. A directory that cannot be listed yields ``Stats()``.
        """

        stats = Stats()
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    stats = stats.merge(self._scan_entry(entry))
        except OSError as exc:
            self._errors.report(path, exc, kind="directory-list")
            return Stats()

        self._logger.debug("directory-scanned", path=str(path), items=stats.item_count, bytes=stats.total_bytes)
        return stats

    def _scan_entry(self, entry: os.DirEntry) -> Stats:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file(follow_symlinks=False)
        except OSError as exc:
            self._errors.report(Path(entry.path), exc, kind="entry-classify")
            return Stats()

        if is_dir:
            # WorkChannelClosed is fatal and must reach the pool.
            self._channel.send(Path(entry.path))
            return Stats()
        if not is_file:
            return Stats()

        measurement = measure_file(entry)
        if isinstance(measurement, SkippedEntry):
            self._errors.report(measurement.path, measurement.reason, kind="file-stat")
            return Stats()
        return Stats.for_file(measurement.size)


__all__ = ["EntryScanner", "ErrorReporter", "LoggingErrorReporter", "measure_file"]
