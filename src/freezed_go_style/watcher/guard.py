"""
Single-flight guard for format-on-save.

At most one formatting pass may run per file at a time; a save that arrives
while a pass is in flight for the same path is dropped rather than queued.
"""

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Set


class PathLockRegistry:
    """
    Per-path non-blocking locks, keyed by resolved path.

    Only paths with a pass in flight are held, so the registry does not
    grow with the number of files ever saved.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._running: Set[Path] = set()

    def _key(self, path: Path) -> Path:
        return Path(path).resolve()

    def __len__(self) -> int:
        with self._lock:
            return len(self._running)

    def try_acquire(self, path: Path) -> bool:
        key = self._key(path)
        with self._lock:
            if key in self._running:
                return False
            self._running.add(key)
            return True

    def release(self, path: Path) -> None:
        key = self._key(path)
        with self._lock:
            if key not in self._running:
                raise RuntimeError(f"No formatting pass in flight for {key}")
            self._running.remove(key)

    def is_running(self, path: Path) -> bool:
        key = self._key(path)
        with self._lock:
            return key in self._running

    @contextmanager
    def single_flight(self, path: Path) -> Iterator[bool]:
        """
        Yield True if this caller owns the pass for path, False if one is already running.
        """
        acquired = self.try_acquire(path)
        try:
            yield acquired
        finally:
            if acquired:
                self.release(path)
