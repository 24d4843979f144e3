from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from queue import Queue, Empty
from typing import Any, Dict, Optional, Protocol
import threading
import time
import structlog

from core.utils.queueing import flush_put

log = structlog.get_logger()

# --- timing helpers ---
def mono_ts() -> float:
    return time.perf_counter()

class SignalType(Enum):
    """Native input signals the frame loop understands."""
    QUIT = auto()
    WINDOW_RESTORED = auto()
    KEY_UP = auto()

# --- base signal ---
@dataclass(frozen=True)
class BaseSignal:
    """Common shape for all native input signals."""
    stype: SignalType = field(init=False)        # auto-set by subclasses
    t_mono: float = field(default_factory=mono_ts)

    def to_record(self) -> Dict[str, Any]:
        return {"stype": self.stype.name, "t_mono": self.t_mono}

@dataclass(frozen=True)
class QuitSignal(BaseSignal):
    """Window closed or quit requested by the platform."""
    def __post_init__(self):
        object.__setattr__(self, "stype", SignalType.QUIT)

@dataclass(frozen=True)
class WindowRestoredSignal(BaseSignal):
    """Window came back from minimized; cached output is stale."""
    def __post_init__(self):
        object.__setattr__(self, "stype", SignalType.WINDOW_RESTORED)

@dataclass(frozen=True)
class KeyUpSignal(BaseSignal):
    """Key released. `key` is a normalized key name ("a", "space", "escape")."""
    key: str = ""

    def __post_init__(self):
        object.__setattr__(self, "stype", SignalType.KEY_UP)

    def to_record(self) -> Dict[str, Any]:
        base = super().to_record()
        base["key"] = self.key
        return base

def _is_quit(sig: BaseSignal) -> bool:
    return sig.stype is SignalType.QUIT

class InputSource(Protocol):
    def poll(self) -> Optional[BaseSignal]:
        """Next pending signal, or None when exhausted. Never blocks."""
        ...

class QueueInputSource:
    """
    Input source fed from any thread through a bounded queue.
    On overflow pending signals are flushed, except a pending quit request, which is kept.
    """
    def __init__(self, maxsize: int = 256):
        if maxsize < 2:
            raise ValueError(f"maxsize must leave room for a pending quit, got {maxsize}")
        self.maxsize = maxsize
        self.overflows = 0
        self.in_q: Queue = Queue(maxsize=maxsize)
        self._lock = threading.Lock()

    def feed(self, sig: BaseSignal) -> None:
        with self._lock:
            q, dropped = flush_put(self.in_q, sig, keep=_is_quit)
            flushed = q is not self.in_q
            if flushed:
                self.in_q = q
                self.overflows += 1
        if flushed:
            log.warning("input.overflow", maxsize=self.maxsize, dropped=len(dropped),
                        msg="input signal buffer overflow, pending signals flushed")

    def poll(self) -> Optional[BaseSignal]:
        with self._lock:
            try:
                return self.in_q.get_nowait()
            except Empty:
                return None
