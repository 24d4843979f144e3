from __future__ import annotations
import time
from enum import Enum, auto
from typing import Dict, Optional, Protocol
import structlog

from app.controller.event_bus import EventBus
from app.controller.state import State
from core.events.kinds import BuiltinKind
from core.hooks.signals import InputSource, KeyUpSignal, SignalType

log = structlog.get_logger()

class ConfigurationError(RuntimeError):
    """The loop cannot start: console not set up or no state installed."""

class RenderSink(Protocol):
    ready: bool
    def render(self) -> None: ...
    def force_redraw(self) -> None: ...

class LoopStatus(Enum):
    NOT_READY = auto()
    RUNNING = auto()
    STOPPED = auto()

class FrameLoop:
    """
    Runs everything, one frame at a time:
      input signals -> state.update() -> state.render() -> console.render() -> internal events.
    Internal events (quit, change-state) are only handled once the frame is complete.
    """
    def __init__(
        self,
        bus: EventBus,
        console: RenderSink,
        input_source: InputSource,
        frame_delay_s: float = 0.0,
    ):
        self.bus = bus
        self.console = console
        self.input = input_source
        self.frame_delay_s = frame_delay_s
        self.state: Optional[State] = None
        self.states: Dict[str, State] = {}
        self.status = LoopStatus.NOT_READY
        self.frames = 0
        self._stop_requested = False

    def install_state(self, state: State) -> None:
        """Set the active state. Call before run()."""
        self.state = state

    def add_state(self, name: str, state: State) -> None:
        """Make a state reachable through CHANGE_STATE events carrying `name`."""
        self.states[name] = state

    def stop(self) -> None:
        """Stop once the current frame is done."""
        self._stop_requested = True

    def run(self, max_frames: Optional[int] = None) -> int:
        if not getattr(self.console, "ready", False):
            raise ConfigurationError("Console not set up. Call console.setup() before starting the frame loop!")
        if self.state is None:
            raise ConfigurationError("No state installed. Call install_state() before starting the frame loop!")

        self.status = LoopStatus.RUNNING
        self._stop_requested = False
        ran = 0
        log.info("loop.start", state=type(self.state).__name__, max_frames=max_frames)

        while self.status is LoopStatus.RUNNING:
            self.step()
            ran += 1
            if max_frames is not None and ran >= max_frames:
                break
            if self.frame_delay_s and self.status is LoopStatus.RUNNING:
                time.sleep(self.frame_delay_s)

        log.info("loop.stop", frames=ran, status=self.status.name)
        return ran

    def step(self) -> None:
        """Run exactly one frame."""
        if self.status is not LoopStatus.RUNNING:
            raise ConfigurationError(f"step() needs a running loop, status is {self.status.name}")

        self._poll_input()
        self.state.update()
        self.state.render()
        self.console.render()
        self._drain_internal()

        self.frames += 1
        if self._stop_requested:
            self.status = LoopStatus.STOPPED

    def _poll_input(self) -> None:
        sig = self.input.poll()
        while sig is not None:
            if sig.stype is SignalType.QUIT:
                self._stop_requested = True
            elif sig.stype is SignalType.WINDOW_RESTORED:
                self.console.force_redraw()
            elif sig.stype is SignalType.KEY_UP and isinstance(sig, KeyUpSignal):
                self.state.handle_key(sig.key)
            sig = self.input.poll()

    def _drain_internal(self) -> None:
        ev = self.bus.pop_internal_event()
        while ev is not None:
            if ev.kind == BuiltinKind.QUIT:
                self._stop_requested = True
            elif ev.kind == BuiltinKind.CHANGE_STATE:
                self._change_state(ev.message)
            ev = self.bus.pop_internal_event()

    def _change_state(self, name: str) -> None:
        nxt = self.states.get(name)
        if nxt is None:
            log.warning("loop.state.unknown", state=name)
            return
        prev = type(self.state).__name__
        self.state = nxt
        log.info("loop.state.change", prev=prev, state=name)
