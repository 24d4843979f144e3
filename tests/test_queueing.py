# tests/test_queueing.py
# How to run:
#   pytest -q
#
# What this covers:
#   - flush_put swaps in a fresh queue of the same size when full
#   - items matching `keep` are carried over ahead of the new item

from queue import Queue

from core.utils.queueing import flush_put

def test_put_with_room_keeps_queue():
    q = Queue(maxsize=2)
    same, dropped = flush_put(q, "a")
    assert same is q and dropped == []
    assert q.get_nowait() == "a"

def test_full_queue_is_replaced():
    q = Queue(maxsize=2)
    q.put_nowait("a")
    q.put_nowait("b")
    fresh, dropped = flush_put(q, "c")
    assert fresh is not q
    assert fresh.maxsize == 2
    assert dropped == ["a", "b"]
    assert fresh.get_nowait() == "c"
    assert fresh.empty()

def test_keep_carries_items_over_in_order():
    q = Queue(maxsize=3)
    for item in ("quit", "k1", "k2"):
        q.put_nowait(item)
    fresh, dropped = flush_put(q, "k3", keep=lambda x: x == "quit")
    assert dropped == ["k1", "k2"]
    assert [fresh.get_nowait(), fresh.get_nowait()] == ["quit", "k3"]

def test_keep_never_takes_the_last_slot():
    q = Queue(maxsize=2)
    q.put_nowait("quit")
    q.put_nowait("quit")
    fresh, dropped = flush_put(q, "k", keep=lambda x: x == "quit")
    assert dropped == ["quit"]
    assert [fresh.get_nowait(), fresh.get_nowait()] == ["quit", "k"]
