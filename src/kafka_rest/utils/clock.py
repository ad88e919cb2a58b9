"""Injectable time sources for timeout and eviction logic."""

from __future__ import annotations

import threading
import time
from typing import Protocol


class Time(Protocol):
    """Time source: wall-clock millis, monotonic nanos, and sleeping."""

    def milliseconds(self) -> int: ...

    def nanoseconds(self) -> int: ...

    def sleep(self, ms: int) -> None: ...


class SystemTime:
    """Real clock backed by the ``time`` module."""

    __slots__ = ()

    def milliseconds(self) -> int:
        return time.time_ns() // 1_000_000

    def nanoseconds(self) -> int:
        return time.monotonic_ns()

    def sleep(self, ms: int) -> None:
        if ms > 0:
            time.sleep(ms / 1000)

    def __repr__(self) -> str:
        return "SystemTime()"


class MockTime:
    """Deterministic clock; ``sleep`` advances time instead of blocking."""

    def __init__(self, *, start_ms: int = 0) -> None:
        if start_ms < 0:
            raise ValueError("start_ms must be >= 0")
        self._lock = threading.Lock()
        self._nanos = start_ms * 1_000_000

    def milliseconds(self) -> int:
        with self._lock:
            return self._nanos // 1_000_000

    def nanoseconds(self) -> int:
        with self._lock:
            return self._nanos

    def sleep(self, ms: int) -> None:
        self.advance(ms)

    def advance(self, ms: int) -> None:
        if ms < 0:
            raise ValueError("cannot move a clock backwards")
        with self._lock:
            self._nanos += ms * 1_000_000

    def __repr__(self) -> str:
        return f"MockTime(ms={self.milliseconds()})"


__all__ = ["MockTime", "SystemTime", "Time"]
