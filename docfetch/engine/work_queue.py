"""Bounded FIFO queue with explicit closure, shared by producer and workers."""

from __future__ import annotations

from collections import deque
from threading import Condition
from typing import Deque, Generic, TypeVar

from ..errors import QueueClosedError

T = TypeVar("T")


class WorkQueue(Generic[T]):
    """Fixed-capacity FIFO; ``put`` blocks while full, ``get`` blocks while empty.

    Closure is a flag beside the buffer, so ``close`` never waits for space.
    Readers keep draining pending items after closure and only then see
    :class:`QueueClosedError`.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._items: Deque[T] = deque()
        self._cond = Condition()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        with self._cond:
            return len(self._items)

    def put(self, item: T) -> None:
        with self._cond:
            while len(self._items) >= self.capacity and not self._closed:
                self._cond.wait()
            if self._closed:
                raise QueueClosedError("Cannot put into a closed queue")
            self._items.append(item)
            self._cond.notify_all()

    def get(self) -> T:
        with self._cond:
            while not self._items and not self._closed:
                self._cond.wait()
            if not self._items:
                raise QueueClosedError("Queue is closed and drained")
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def cancel(self) -> int:
        """Drop pending items and close; returns how many items were dropped."""

        with self._cond:
            dropped = len(self._items)
            self._items.clear()
            self._closed = True
            self._cond.notify_all()
            return dropped


__all__ = ["WorkQueue"]
