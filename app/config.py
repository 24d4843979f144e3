from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class EngineConfig:
    # stream capacities (events)
    engine_capacity: int = 1000       # internal + external streams, each
    interaction_capacity: int = 100

    # frame pacing
    frame_delay_s: float = 0.0        # sleep between frames; 0 runs flat out

    # console surface (cells)
    console_width: int = 80
    console_height: int = 24

    debug: bool = False
