from __future__ import annotations

from itertools import count
from threading import Lock


class IdGenerator:
    """Monotonic, session-scoped identifiers (``chart-1``, ``msg-2``, ...).

    A single counter is shared by every prefix, so two ids minted by the same
    generator never collide even when created within the same instant.
    """

    def __init__(self, start: int = 1):
        self._lock = Lock()
        self._counter = count(start)

    def next(self, prefix: str) -> str:
        with self._lock:
            return f"{prefix}-{next(self._counter)}"


__all__ = ["IdGenerator"]
