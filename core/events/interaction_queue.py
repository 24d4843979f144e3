from __future__ import annotations
from typing import Any, Optional

from .event import InteractionEvent
from .kinds import InteractionKind
from .stream import EventStream

DEFAULT_CAPACITY = 100

class InteractionQueue:
    """Widget interaction events, consumed only by the host. Same overflow policy as the engine streams."""
    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self._stream: EventStream[InteractionEvent] = EventStream("interaction", capacity)

    def push(self, origin: Any, kind: int = InteractionKind.NONE, message: str = "") -> None:
        if origin is None:
            raise ValueError("interaction events need an origin")
        self._stream.push(InteractionEvent(origin, kind, message))

    def pop(self) -> Optional[InteractionEvent]:
        return self._stream.pop()

    def clear(self) -> None:
        self._stream.clear()

    def __len__(self) -> int:
        return len(self._stream)

    @property
    def capacity(self) -> int:
        return self._stream.capacity

    @property
    def overflows(self) -> int:
        return self._stream.overflows
