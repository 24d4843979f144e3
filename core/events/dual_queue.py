from __future__ import annotations
from typing import Dict, Optional
import structlog

from .event import Event
from .kinds import BuiltinKind, EventTypeRegistry
from .stream import EventStream

log = structlog.get_logger()

DEFAULT_CAPACITY = 1000

class DualEventQueue:
    """
    Engine event queue split in two streams.

    Internal kinds (quit, change-state) go to a stream the frame loop drains once per
    frame; everything else goes to the external stream, which the host drains at its
    own pace. UPDATE_UI events are deduplicated by message key: while one is pending
    for a key, further pushes for that key are dropped.
    """
    def __init__(self, registry: Optional[EventTypeRegistry] = None, capacity: int = DEFAULT_CAPACITY):
        self.registry = registry or EventTypeRegistry()
        self._external: EventStream[Event] = EventStream("external", capacity)
        self._internal: EventStream[Event] = EventStream("internal", capacity)
        self._pending_refresh: Dict[str, bool] = {}

    def push(self, ev: Event) -> None:
        if self.registry.is_internal(ev.kind):
            self._internal.push(ev)
            return

        with self._external.lock:
            is_refresh = ev.kind == BuiltinKind.UPDATE_UI
            if is_refresh:
                if self._pending_refresh.get(ev.message):
                    return
                self._pending_refresh[ev.message] = True
            if self._external.push(ev):
                # the refresh events we were tracking are gone with the flush
                self._pending_refresh.clear()
                if is_refresh:
                    self._pending_refresh[ev.message] = True

    def pop_external(self) -> Optional[Event]:
        with self._external.lock:
            ev = self._external.pop()
            if ev is not None and ev.kind == BuiltinKind.UPDATE_UI:
                self._pending_refresh[ev.message] = False
            return ev

    def pop_internal(self) -> Optional[Event]:
        return self._internal.pop()

    def clear_external(self) -> None:
        with self._external.lock:
            self._external.clear()
            self._pending_refresh.clear()

    def clear_internal(self) -> None:
        self._internal.clear()

    def pending_refresh(self, key: str) -> bool:
        return self._pending_refresh.get(key, False)

    def len_external(self) -> int:
        return len(self._external)

    def len_internal(self) -> int:
        return len(self._internal)

    @property
    def overflows(self) -> int:
        return self._external.overflows + self._internal.overflows
