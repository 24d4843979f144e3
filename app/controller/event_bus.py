from __future__ import annotations
from typing import Any, Optional
import structlog

from app.config import EngineConfig
from core.events.dual_queue import DualEventQueue
from core.events.event import Event, InteractionEvent, new_event, new_ui_event
from core.events.interaction_queue import InteractionQueue
from core.events.kinds import BuiltinKind, EventKind, EventTypeRegistry

log = structlog.get_logger()

class EventBus:
    """
    Owned event context: kind registry, engine streams and the interaction stream.
    Build one per engine (or per test); nothing here is process-global.
    """
    def __init__(self, config: Optional[EngineConfig] = None):
        cfg = config or EngineConfig()
        self.registry = EventTypeRegistry()
        self.events = DualEventQueue(self.registry, capacity=cfg.engine_capacity)
        self.interactions = InteractionQueue(capacity=cfg.interaction_capacity)

    # --- host surface ---
    def register_custom_kind(self) -> EventKind:
        kind = self.registry.register_custom_kind()
        log.debug("events.kind.registered", kind=kind)
        return kind

    def push_event(self, kind: EventKind, message: str = "") -> None:
        self.events.push(new_event(kind, message))

    def push_ui_event(self, kind: EventKind, message: str, origin: Any) -> None:
        self.events.push(new_ui_event(kind, message, origin))

    def pop_external_event(self) -> Optional[Event]:
        return self.events.pop_external()

    def clear_external_events(self) -> None:
        self.events.clear_external()

    def push_interaction_event(self, origin: Any, kind: int, message: str = "") -> None:
        self.interactions.push(origin, kind, message)

    def pop_interaction_event(self) -> Optional[InteractionEvent]:
        return self.interactions.pop()

    def clear_interaction_events(self) -> None:
        self.interactions.clear()

    # --- engine surface ---
    def pop_internal_event(self) -> Optional[Event]:
        return self.events.pop_internal()

    def clear_internal_events(self) -> None:
        self.events.clear_internal()

    # --- convenience emitters ---
    def request_quit(self) -> None:
        self.push_event(BuiltinKind.QUIT)

    def request_state_change(self, state_name: str) -> None:
        self.push_event(BuiltinKind.CHANGE_STATE, state_name)

    def request_ui_update(self, key: str, origin: Any = None) -> None:
        self.events.push(Event(BuiltinKind.UPDATE_UI, key, origin))

    def close(self) -> None:
        self.events.clear_external()
        self.events.clear_internal()
        self.interactions.clear()
