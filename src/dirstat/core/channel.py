"""Shared queue of directories waiting to be scanned."""

from __future__ import annotations

import queue
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


class WorkChannelClosed(RuntimeError):
    """Raised when work is sent to a channel that has been closed."""


class WorkChannel:
    """Unbounded multi-producer multi-consumer queue of pending directories.

    Besides the queue itself the channel keeps an in-flight counter: every
    ``send`` increments it and every ``task_done`` decrements it once the
    receiver has finished scanning the item. The counter reaching zero means
    no directory is queued or being scanned, so no new work can appear.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[Path] = queue.Queue()
        self._lock = threading.Lock()
        self._in_flight = 0
        self._closed = False

    def send(self, path: Path) -> None:
        """Enqueue ``path``; never blocks."""

        with self._lock:
            if self._closed:
                raise WorkChannelClosed(f"Cannot enqueue {path}: work channel is closed")
            self._in_flight += 1
        self._queue.put_nowait(path)

    def receive(self, timeout: float) -> Path | None:
        """Return the next pending directory, or ``None`` if none arrived within ``timeout`` seconds."""

        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def task_done(self) -> None:
        """Mark one previously received item as fully processed."""

        with self._lock:
            if self._in_flight <= 0:
                raise ValueError("task_done() called more times than items were sent")
            self._in_flight -= 1

    @contextmanager
    def hold(self) -> Iterator[None]:
        """Count work done outside the queue (the root scan) as in flight."""

        with self._lock:
            self._in_flight += 1
        try:
            yield
        finally:
            self.task_done()

    def is_quiescent(self) -> bool:
        with self._lock:
            return self._in_flight == 0

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    def close(self) -> None:
        with self._lock:
            self._closed = True

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed
