"""Test doubles and tree builders shared by the test modules."""

from __future__ import annotations

import threading
from pathlib import Path
from types import SimpleNamespace
from typing import Iterable, List, Tuple


TREE_FILES = {
    "a.txt": 10,
    "level1/b.txt": 20,
    "level1/level2/c.txt": 30,
    "level1/level2/d.txt": 40,
    "level1/level2/level3/e.txt": 50,
}


def build_tree(root: Path, files: dict[str, int]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for relative, size in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
    return root


class RecordingErrorReporter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.reports: List[Tuple[Path, str, OSError]] = []

    def report(self, path: Path, error: OSError, *, kind: str) -> None:
        with self._lock:
            self.reports.append((Path(path), kind, error))

    @property
    def count(self) -> int:
        with self._lock:
            return len(self.reports)

    def kinds(self) -> List[str]:
        with self._lock:
            return [kind for _, kind, _ in self.reports]

    def paths(self) -> List[Path]:
        with self._lock:
            return [path for path, _, _ in self.reports]


class FakeDirEntry:
    """Stand-in for ``os.DirEntry`` with scripted classification and stat results."""

    def __init__(
        self,
        path: str,
        *,
        is_dir: bool = False,
        is_file: bool = True,
        size: int = 0,
        stat_error: OSError | None = None,
        classify_error: OSError | None = None,
    ) -> None:
        self.path = path
        self.name = Path(path).name
        self._is_dir = is_dir
        self._is_file = is_file
        self._size = size
        self._stat_error = stat_error
        self._classify_error = classify_error

    def is_dir(self, *, follow_symlinks: bool = True) -> bool:
        if self._classify_error is not None:
            raise self._classify_error
        return self._is_dir

    def is_file(self, *, follow_symlinks: bool = True) -> bool:
        if self._classify_error is not None:
            raise self._classify_error
        return self._is_file

    def stat(self, *, follow_symlinks: bool = True) -> SimpleNamespace:
        if self._stat_error is not None:
            raise self._stat_error
        return SimpleNamespace(st_size=self._size)


class FakeScandir:
    def __init__(self, entries: Iterable[FakeDirEntry]) -> None:
        self._entries = list(entries)

    def __enter__(self) -> "FakeScandir":
        return self

    def __exit__(self, *_exc) -> None:
        return None

    def __iter__(self):
        return iter(self._entries)
