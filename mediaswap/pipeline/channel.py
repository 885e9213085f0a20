"""Closable FIFO channel shared between pipeline threads.

Consumers detect end-of-work when the channel is closed and drained, so no
sentinel values travel through the queue. Any number of threads may put and
get concurrently.
"""

import threading
from collections import deque
from typing import Deque, Generic, Iterator, TypeVar

T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised by put/close on a closed channel, and by get once it is closed and empty."""


class Channel(Generic[T]):
    """Thread-safe FIFO with explicit close.

    Args:
        maxsize: Capacity before put() blocks; 0 means unbounded.
    """

    def __init__(self, maxsize: int = 0):
        if maxsize < 0:
            raise ValueError("maxsize must be >= 0")
        self._maxsize = maxsize
        self._items: Deque[T] = deque()
        self._closed = False
        self._cond = threading.Condition()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def put(self, item: T) -> None:
        with self._cond:
            while (
                not self._closed
                and self._maxsize > 0
                and len(self._items) >= self._maxsize
            ):
                self._cond.wait()
            if self._closed:
                raise ChannelClosed("put on closed channel")
            self._items.append(item)
            self._cond.notify_all()

    def get(self) -> T:
        """Blocks until an item is available; raises ChannelClosed once closed and drained."""
        with self._cond:
            while not self._items and not self._closed:
                self._cond.wait()
            if not self._items:
                raise ChannelClosed("get on closed and empty channel")
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def close(self) -> None:
        with self._cond:
            if self._closed:
                raise ChannelClosed("close of closed channel")
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return
