from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .kinds import EventKind, BuiltinKind, InteractionKind

def _kind_name(kind: int, enum_cls) -> str:
    try:
        return enum_cls(kind).name
    except ValueError:
        return f"CUSTOM_{kind}"

@dataclass(frozen=True)
class Event:
    """Basic unit of the engine streams. `origin` records the UI element that emitted it, if any."""
    kind: EventKind
    message: str = ""
    origin: Optional[Any] = None

    @property
    def is_ui_event(self) -> bool:
        return self.origin is not None

    def to_record(self) -> Dict[str, Any]:
        return {
            "kind": _kind_name(self.kind, BuiltinKind),
            "message": self.message,
            "origin": None if self.origin is None else repr(self.origin),
        }

@dataclass(frozen=True)
class InteractionEvent:
    """Widget interaction (activation, value change). Origin is mandatory."""
    origin: Any
    kind: int = InteractionKind.NONE
    message: str = ""

    def to_record(self) -> Dict[str, Any]:
        return {
            "kind": _kind_name(self.kind, InteractionKind),
            "message": self.message,
            "origin": repr(self.origin),
        }

def new_event(kind: EventKind, message: str = "") -> Event:
    """Generic event with no UI origin."""
    return Event(kind, message)

def new_ui_event(kind: EventKind, message: str, origin: Any) -> Event:
    """Event raised by a UI element; consumed by the host."""
    return Event(kind, message, origin)
