from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterator, Optional


class LockTimeout(Exception):
    """Raised when a keyed lock cannot be acquired in time."""

    def __init__(self, key: Hashable, timeout: float):
        super().__init__(f"Timed out after {timeout}s waiting for lock {key!r}")
        self.key = key
        self.timeout = timeout


@dataclass
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class KeyedLock:
    """One mutex per key, created on demand and dropped once nobody holds or waits for it.

    Different keys never contend with each other.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: Dict[Hashable, _Entry] = {}

    @contextmanager
    def hold(self, key: Hashable, *, timeout: Optional[float] = None) -> Iterator[None]:
        with self._guard:
            entry = self._entries.setdefault(key, _Entry())
            entry.users += 1

        try:
            if not entry.lock.acquire(timeout=-1 if timeout is None else timeout):
                raise LockTimeout(key, timeout)
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
