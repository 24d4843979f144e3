from __future__ import annotations
import threading
from queue import Queue, Empty
from typing import Generic, Optional, TypeVar
import structlog

from core.utils.queueing import flush_put

log = structlog.get_logger()

T = TypeVar("T")

class EventStream(Generic[T]):
    """
    Bounded FIFO that never blocks.
    When full, every pending item is discarded and the new one is kept (full flush).
    The stream lock is re-entrant so owners can wrap push/pop with their own bookkeeping.
    """
    def __init__(self, name: str, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.name = name
        self.capacity = capacity
        self.lock = threading.RLock()
        self.overflows = 0
        self._q: Queue = Queue(maxsize=capacity)

    def push(self, item: T) -> bool:
        with self.lock:
            q, _dropped = flush_put(self._q, item)
            flushed = q is not self._q
            if flushed:
                self._q = q
                self.overflows += 1
        if flushed:
            log.warning("events.stream.overflow", stream=self.name, capacity=self.capacity,
                        msg="stream buffer overflow, all pending events flushed")
        return flushed

    def pop(self) -> Optional[T]:
        with self.lock:
            try:
                return self._q.get_nowait()
            except Empty:
                return None

    def clear(self) -> None:
        with self.lock:
            self._q = Queue(maxsize=self.capacity)

    def __len__(self) -> int:
        return self._q.qsize()

    def __repr__(self) -> str:
        return f"EventStream({self.name!r}, {len(self)}/{self.capacity})"
