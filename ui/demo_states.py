from __future__ import annotations
from typing import List
import structlog

from app.controller.event_bus import EventBus
from app.controller.state import BaseState
from core.events.kinds import BuiltinKind, InteractionKind
from ui.widgets import Button, ChoiceList, Widget

log = structlog.get_logger()

class MenuState(BaseState):
    """Title menu: tab moves focus, return activates, left/right cycles the difficulty list."""
    def __init__(self, bus: EventBus, console):
        super().__init__()
        self.bus = bus
        self.console = console
        self.difficulty = ChoiceList(bus, "Difficulty", ["easy", "normal", "hard"], x=2, y=3)
        self.widgets: List[Widget] = [
            Button(bus, "Play", x=2, y=5),
            self.difficulty,
            Button(bus, "Quit", x=2, y=7),
        ]
        self.focus = 0
        self.widgets[0].set_focus(True)

    def handle_key(self, key: str) -> None:
        w = self.widgets[self.focus]
        if key == "tab":
            self._move_focus(1)
        elif key == "return" and isinstance(w, Button):
            w.press()
        elif key in ("left", "right") and isinstance(w, ChoiceList):
            w.cycle(1 if key == "right" else -1)
        elif key == "escape":
            self.bus.request_quit()

    def _move_focus(self, step: int) -> None:
        self.widgets[self.focus].set_focus(False)
        self.focus = (self.focus + step) % len(self.widgets)
        self.widgets[self.focus].set_focus(True)
        self.bus.push_ui_event(BuiltinKind.TAB_FIELD, self.widgets[self.focus].name, self.widgets[self.focus])

    def update(self) -> None:
        super().update()
        ev = self.bus.pop_external_event()
        while ev is not None:
            if ev.kind == BuiltinKind.UPDATE_UI:
                log.debug("menu.refresh", widget=ev.message)
            ev = self.bus.pop_external_event()

        iev = self.bus.pop_interaction_event()
        while iev is not None:
            if iev.kind == InteractionKind.ACTIVATE and iev.message == "Play":
                self.bus.request_state_change("play")
            elif iev.kind == InteractionKind.ACTIVATE and iev.message == "Quit":
                self.bus.request_quit()
            elif iev.kind == InteractionKind.CHANGE:
                log.info("menu.difficulty", value=iev.message)
            iev = self.bus.pop_interaction_event()

    def render(self) -> None:
        self.console.clear()
        self.console.draw_text(2, 1, "TICKBUS DEMO")
        for w in self.widgets:
            w.draw(self.console)
        self.console.draw_text(2, 10, "tab: focus  return: press  esc: quit")

class PlayState(BaseState):
    """Counts frames; space scores through a host-defined event kind, escape goes back to the menu."""
    def __init__(self, bus: EventBus, console):
        super().__init__()
        self.bus = bus
        self.console = console
        self.score_kind = bus.register_custom_kind()
        self.score = 0

    def handle_key(self, key: str) -> None:
        if key == "space":
            self.bus.push_event(self.score_kind, "+1")
        elif key == "escape":
            self.bus.clear_external_events()
            self.bus.request_state_change("menu")

    def update(self) -> None:
        super().update()
        ev = self.bus.pop_external_event()
        while ev is not None:
            if ev.kind == self.score_kind:
                self.score += 1
            ev = self.bus.pop_external_event()

    def render(self) -> None:
        self.console.clear()
        self.console.draw_text(2, 1, f"tick {self.tick:>8}")
        self.console.draw_text(2, 3, f"score {self.score:>7}")
        self.console.draw_text(2, 10, "space: score  esc: menu")
