"""A fixed-size circular queue of display lines shared between threads."""

from __future__ import annotations

import threading
from typing import Optional

_ALIGNMENT = 16


class LineQueueEmpty(Exception):
    """Raised when reading from a queue that holds no committed lines."""


class LineQueue:
    """Circular queue of equally sized line buffers.

    A producer fills the slot returned by :meth:`current` and publishes it with
    :meth:`commit`; a consumer takes lines out with :meth:`read`. One slot is
    always kept free, so the queue holds at most ``size - 1`` lines.
    """

    def __init__(self, size: int = 150, element_size: int = 400) -> None:
        if size < 1:
            raise ValueError("queue size must be at least 1")
        if element_size < 1:
            raise ValueError("element size must be at least 1")
        self.size = size
        self.element_size = element_size
        padded = -(-element_size // _ALIGNMENT) * _ALIGNMENT
        self._bufs = [bytearray(padded) for _ in range(size)]
        self._current = 0
        self._last = 0
        self._lock = threading.Lock()

    def current(self) -> Optional[memoryview]:
        """Writable view of the next free slot, or None if the queue is full."""
        with self._lock:
            if (self._current + 1) % self.size == self._last:
                return None
            return memoryview(self._bufs[self._current])[: self.element_size]

    def commit(self) -> None:
        """Publish the slot last returned by :meth:`current`."""
        with self._lock:
            self._current = (self._current + 1) % self.size

    def read(self) -> bytes:
        """Remove and return the oldest committed line."""
        with self._lock:
            if self._current == self._last:
                raise LineQueueEmpty("line queue is empty")
            data = bytes(self._bufs[self._last][: self.element_size])
            self._last = (self._last + 1) % self.size
            return data

    def reset(self) -> None:
        """Drop all queued lines."""
        with self._lock:
            self._current = 0
            self._last = 0

    def __len__(self) -> int:
        with self._lock:
            return (self._current - self._last) % self.size