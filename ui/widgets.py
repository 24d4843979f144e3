from __future__ import annotations
from typing import List, Sequence

from app.controller.event_bus import EventBus
from core.events.kinds import BuiltinKind, InteractionKind

class Widget:
    """Minimal UI element. The event core only uses it as an opaque origin tag."""
    def __init__(self, bus: EventBus, name: str, x: int = 0, y: int = 0):
        self.bus = bus
        self.name = name
        self.x = x
        self.y = y
        self.focused = False

    def set_focus(self, focused: bool) -> None:
        if focused != self.focused:
            self.focused = focused
            self.bus.request_ui_update(self.name, origin=self)

    def label(self) -> str:
        return self.name

    def draw(self, console) -> None:
        marker = ">" if self.focused else " "
        console.draw_text(self.x, self.y, f"{marker} {self.label()}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

class Button(Widget):
    def press(self) -> None:
        self.bus.push_interaction_event(self, InteractionKind.ACTIVATE, self.name)
        self.bus.push_ui_event(BuiltinKind.BUTTON_PRESS, self.name, self)

    def label(self) -> str:
        return f"[ {self.name} ]"

class ChoiceList(Widget):
    """Cycles through a fixed list of choices."""
    def __init__(self, bus: EventBus, name: str, choices: Sequence[str], x: int = 0, y: int = 0):
        super().__init__(bus, name, x, y)
        if not choices:
            raise ValueError("ChoiceList needs at least one choice")
        self.choices: List[str] = list(choices)
        self.index = 0

    @property
    def value(self) -> str:
        return self.choices[self.index]

    def cycle(self, step: int = 1) -> None:
        self.index = (self.index + step) % len(self.choices)
        self.bus.push_interaction_event(self, InteractionKind.CHANGE, self.value)
        self.bus.push_ui_event(BuiltinKind.LIST_CYCLE, self.value, self)
        self.bus.request_ui_update(self.name, origin=self)

    def label(self) -> str:
        return f"{self.name}: < {self.value} >"
