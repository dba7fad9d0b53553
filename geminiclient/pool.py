"""A bounded pool of reusable objects."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Deque, Generic, TypeVar

T = TypeVar("T")


class CachePool(Generic[T]):
    """Keeps at most ``max_size`` returned objects for reuse.

    ``get`` hands out a pooled object when one is available and otherwise
    creates a new one with ``new_func``; ``put`` discards the object when
    the pool is already full.
    """

    def __init__(self, new_func: Callable[[], T], max_size: int) -> None:
        self._new_func = new_func
        self._max_size = max_size
        self._items: Deque[T] = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self) -> T:
        with self._lock:
            if self._items:
                return self._items.pop()
        return self._new_func()

    def put(self, item: T) -> None:
        with self._lock:
            if len(self._items) < self._max_size:
                self._items.append(item)