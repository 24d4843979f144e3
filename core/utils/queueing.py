from __future__ import annotations
from queue import Queue, Full, Empty
from typing import Any, Callable, List, Optional, Tuple

def flush_put(q: Queue, item, keep: Optional[Callable[[Any], bool]] = None) -> Tuple[Queue, List]:
    """
    Put without blocking; if `q` is full, put into a fresh queue of the same size instead.
    Pending items matching `keep` are carried over (oldest first, leaving room for `item`).
    Returns the queue now holding `item` and the items that were discarded.
    Callers serialize access and must swap in the returned queue.
    """
    try:
        q.put_nowait(item)
        return q, []
    except Full:
        pass

    fresh: Queue = Queue(maxsize=q.maxsize)
    dropped = []
    while True:
        try:
            old = q.get_nowait()
        except Empty:
            break
        if keep is not None and keep(old) and fresh.qsize() < q.maxsize - 1:
            fresh.put_nowait(old)
        else:
            dropped.append(old)
    fresh.put_nowait(item)
    return fresh, dropped
