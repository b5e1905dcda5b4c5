"""A thread-safe, append-only server log with writer priority."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ServerLog:
    """Shared log allowing many concurrent readers or a single writer.

    A waiting writer blocks new readers until it has finished.
    """

    def __init__(self):
        self._entries: list[str] = []
        self._cond = threading.Condition()
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def _reading(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()

    def append(self, data) -> None:
        """Append ``data`` (text or bytes) to the log."""
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("utf-8", errors="replace")
        with self._exclusive():
            self._entries.append(data)

    def get(self) -> str:
        """Return the full contents of the log."""
        with self._reading():
            return "".join(self._entries)