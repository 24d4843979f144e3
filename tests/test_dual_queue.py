# tests/test_dual_queue.py
# How to run:
#   pytest -q
#
# What this covers:
#   - FIFO order per stream, each event popped exactly once
#   - UPDATE_UI dedup by message key, and the window closing on pop
#   - internal/external routing (custom kinds always external)
#   - full-flush overflow: triggering event survives, one warning logged
#   - clear_* only touches its own stream

import threading

from structlog.testing import capture_logs

from core.events.dual_queue import DualEventQueue
from core.events.event import Event, new_event
from core.events.kinds import BuiltinKind

def drain_external(q: DualEventQueue):
    out = []
    ev = q.pop_external()
    while ev is not None:
        out.append(ev)
        ev = q.pop_external()
    return out

def overflow_warnings(logs):
    return [e for e in logs if e["event"] == "events.stream.overflow" and e["log_level"] == "warning"]

def test_fifo_capacity_three():
    q = DualEventQueue(capacity=3)
    a, b, c = (new_event(BuiltinKind.BUTTON_PRESS, m) for m in "ABC")
    for ev in (a, b, c):
        q.push(ev)
    assert q.pop_external() is a
    assert q.pop_external() is b
    assert q.pop_external() is c
    assert q.pop_external() is None

def test_refresh_dedup_same_key():
    q = DualEventQueue()
    q.push(new_event(BuiltinKind.UPDATE_UI, "hp_bar"))
    q.push(new_event(BuiltinKind.UPDATE_UI, "hp_bar"))
    assert q.len_external() == 1
    ev = q.pop_external()
    assert ev.message == "hp_bar"
    assert q.pop_external() is None

def test_refresh_distinct_keys_both_kept():
    q = DualEventQueue()
    q.push(new_event(BuiltinKind.UPDATE_UI, "hp_bar"))
    q.push(new_event(BuiltinKind.UPDATE_UI, "mp_bar"))
    assert [e.message for e in drain_external(q)] == ["hp_bar", "mp_bar"]

def test_refresh_window_closes_on_pop():
    q = DualEventQueue()
    q.push(new_event(BuiltinKind.UPDATE_UI, "hp_bar"))
    assert q.pending_refresh("hp_bar")
    q.pop_external()
    assert not q.pending_refresh("hp_bar")
    q.push(new_event(BuiltinKind.UPDATE_UI, "hp_bar"))
    ev = q.pop_external()
    assert ev is not None and ev.message == "hp_bar"

def test_dedup_only_applies_to_refresh_kind():
    q = DualEventQueue()
    for _ in range(3):
        q.push(new_event(BuiltinKind.BUTTON_PRESS, "ok"))
    assert q.len_external() == 3

def test_internal_and_external_never_cross():
    q = DualEventQueue()
    custom = q.registry.register_custom_kind()
    q.push(new_event(BuiltinKind.QUIT))
    q.push(new_event(custom, "custom"))
    q.push(new_event(BuiltinKind.CHANGE_STATE, "menu"))
    q.push(new_event(BuiltinKind.ANIMATION_DONE, "fade"))

    external = drain_external(q)
    assert [e.kind for e in external] == [custom, BuiltinKind.ANIMATION_DONE]

    internal = []
    ev = q.pop_internal()
    while ev is not None:
        internal.append(ev)
        ev = q.pop_internal()
    assert [e.kind for e in internal] == [BuiltinKind.QUIT, BuiltinKind.CHANGE_STATE]

def test_overflow_flushes_and_keeps_trigger():
    q = DualEventQueue(capacity=2)
    x, y, z = (new_event(BuiltinKind.BUTTON_PRESS, m) for m in "XYZ")
    with capture_logs() as logs:
        q.push(x)
        q.push(y)
        q.push(z)
    assert q.len_external() == 1
    assert q.pop_external() is z
    assert len(overflow_warnings(logs)) == 1
    assert q.overflows == 1

def test_capacity_plus_one_leaves_one_event():
    q = DualEventQueue(capacity=10)
    with capture_logs() as logs:
        for i in range(11):
            q.push(new_event(BuiltinKind.ANIMATION_DONE, str(i)))
    assert q.len_external() == 1
    assert q.pop_external().message == "10"
    assert len(overflow_warnings(logs)) == 1

def test_overflow_resets_refresh_tracking():
    q = DualEventQueue(capacity=2)
    q.push(new_event(BuiltinKind.UPDATE_UI, "map"))
    q.push(new_event(BuiltinKind.BUTTON_PRESS, "a"))
    q.push(new_event(BuiltinKind.BUTTON_PRESS, "b"))  # flush drops the pending refresh
    assert not q.pending_refresh("map")
    q.push(new_event(BuiltinKind.UPDATE_UI, "map"))
    assert [e.message for e in drain_external(q)] == ["b", "map"]

def test_refresh_that_triggers_overflow_stays_pending():
    q = DualEventQueue(capacity=1)
    q.push(new_event(BuiltinKind.BUTTON_PRESS, "a"))
    q.push(new_event(BuiltinKind.UPDATE_UI, "map"))
    assert q.pending_refresh("map")
    q.push(new_event(BuiltinKind.UPDATE_UI, "map"))
    assert q.len_external() == 1

def test_internal_overflow_is_independent():
    q = DualEventQueue(capacity=2)
    q.push(new_event(BuiltinKind.BUTTON_PRESS, "keep"))
    for _ in range(3):
        q.push(new_event(BuiltinKind.QUIT))
    assert q.len_internal() == 1
    assert q.len_external() == 1

def test_clear_only_touches_own_stream():
    q = DualEventQueue()
    q.push(new_event(BuiltinKind.UPDATE_UI, "hud"))
    q.push(new_event(BuiltinKind.QUIT))
    q.clear_external()
    assert q.pop_external() is None
    assert not q.pending_refresh("hud")
    assert q.pop_internal().kind == BuiltinKind.QUIT

    q.push(new_event(BuiltinKind.BUTTON_PRESS, "x"))
    q.push(new_event(BuiltinKind.CHANGE_STATE, "menu"))
    q.clear_internal()
    assert q.pop_internal() is None
    assert q.pop_external().message == "x"

def test_concurrent_pushers_lose_nothing_below_capacity():
    q = DualEventQueue(capacity=10_000)
    custom = q.registry.register_custom_kind()

    def producer(tag: int):
        for i in range(500):
            q.push(Event(custom, f"{tag}:{i}"))

    threads = [threading.Thread(target=producer, args=(t,)) for t in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    seen = drain_external(q)
    assert len(seen) == 4000
    # FIFO holds per producer
    for tag in range(8):
        mine = [int(e.message.split(":")[1]) for e in seen if e.message.startswith(f"{tag}:")]
        assert mine == list(range(500))

def test_concurrent_refresh_pushes_dedup_to_one():
    q = DualEventQueue()

    def producer():
        for _ in range(200):
            q.push(new_event(BuiltinKind.UPDATE_UI, "minimap"))

    threads = [threading.Thread(target=producer) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert q.len_external() == 1
