from __future__ import annotations
import threading
from enum import IntEnum
from typing import Dict

# An event kind is a plain int: built-ins below, host kinds above MAX_EVENTS.
EventKind = int

class BuiltinKind(IntEnum):
    """Event kinds reserved by the engine."""
    UPDATE_UI = 0        # some UI region needs repainting; deduplicated by message
    CHANGE_STATE = 1     # internal
    QUIT = 2             # internal
    TAB_FIELD = 3
    ANIMATION_DONE = 4
    BUTTON_PRESS = 5
    LIST_CYCLE = 6
    MAX_EVENTS = 7       # sentinel, never emitted

class InteractionKind(IntEnum):
    """Widget interaction kinds carried by the interaction stream."""
    NONE = 0
    ACTIVATE = 1
    CHANGE = 2

ENGINE_INTERNAL = (BuiltinKind.QUIT, BuiltinKind.CHANGE_STATE)

class EventTypeRegistry:
    """
    Hands out host-defined event kinds and knows which kinds the engine consumes itself.
    Custom kinds start right above MAX_EVENTS and are always external.
    """
    def __init__(self):
        self._lock = threading.Lock()
        self._custom_count = 0
        self._internal: Dict[EventKind, bool] = {}
        for kind in ENGINE_INTERNAL:
            self.mark_internal(kind)

    def register_custom_kind(self) -> EventKind:
        with self._lock:
            self._custom_count += 1
            return int(BuiltinKind.MAX_EVENTS) + self._custom_count

    def mark_internal(self, kind: EventKind) -> None:
        if not self.is_builtin(kind):
            raise ValueError(f"only built-in kinds can be internal, got {kind}")
        if kind == BuiltinKind.UPDATE_UI:
            # refresh dedup is tracked alongside the external stream
            raise ValueError("UPDATE_UI events are always external")
        self._internal[int(kind)] = True

    def is_internal(self, kind: EventKind) -> bool:
        return self._internal.get(int(kind), False)

    @staticmethod
    def is_builtin(kind: EventKind) -> bool:
        return 0 <= int(kind) < BuiltinKind.MAX_EVENTS

    def is_custom(self, kind: EventKind) -> bool:
        k = int(kind)
        return BuiltinKind.MAX_EVENTS < k <= BuiltinKind.MAX_EVENTS + self._custom_count

    @property
    def custom_count(self) -> int:
        return self._custom_count
