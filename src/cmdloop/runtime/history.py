"""In-memory command history."""

from __future__ import annotations

import threading

NON_HISTORY_COMMANDS = ("history", "redo", "flush", "help")


def should_record(line: str) -> bool:
    """Return False for session meta commands that must never be replayed."""

    stripped = line.strip()
    return not any(command in stripped for command in NON_HISTORY_COMMANDS)


class History:
    """Ordered list of raw input lines, oldest first."""

    def __init__(self, max_size: int = 0) -> None:
        self._entries: list[str] = []
        self._max_size = max_size
        self._lock = threading.Lock()

    def append(self, raw: str) -> None:
        with self._lock:
            self._entries.append(raw.strip())
            if self._max_size > 0 and len(self._entries) > self._max_size:
                del self._entries[: len(self._entries) - self._max_size]

    def all(self) -> list[tuple[int, str]]:
        with self._lock:
            return list(enumerate(self._entries))

    def get(self, index: int) -> str:
        with self._lock:
            if index < 0 or index >= len(self._entries):
                raise IndexError(f"invalid command index: {index}")
            return self._entries[index]

    def length(self) -> int:
        with self._lock:
            return len(self._entries)

    def flush(self) -> None:
        with self._lock:
            self._entries.clear()
