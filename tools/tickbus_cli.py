from __future__ import annotations
import argparse, sys

from app.config import EngineConfig
from app.controller.event_bus import EventBus
from core.events.kinds import BuiltinKind

def stress(events: int, keys: int, capacity: int) -> dict:
    """Push `events` external events, cycling UPDATE_UI over `keys` keys and a custom kind."""
    bus = EventBus(EngineConfig(engine_capacity=capacity))
    custom = bus.register_custom_kind()
    for i in range(events):
        if i % 2 == 0:
            bus.request_ui_update(f"region_{i % keys}")
        else:
            bus.push_event(custom, str(i))
    popped = 0
    while bus.pop_external_event() is not None:
        popped += 1
    return {
        "pushed": events,
        "popped": popped,
        "overflows": bus.events.overflows,
        "capacity": capacity,
    }

def main(argv=None):
    ap = argparse.ArgumentParser(prog="tickbus", description="tickbus event core")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Launch the demo")
    p_run.add_argument("--terminal", action="store_true", help="render to stdout and read keys with pynput")
    p_run.add_argument("--debug", action="store_true")

    p_stress = sub.add_parser("stress", help="Push events through a fresh bus and report")
    p_stress.add_argument("--events", type=int, default=5000)
    p_stress.add_argument("--keys", type=int, default=10, help="distinct UI refresh keys")
    p_stress.add_argument("--capacity", type=int, default=EngineConfig.engine_capacity)

    args = ap.parse_args(argv)
    if args.cmd == "run":
        from main import main as run_demo
        run_demo(EngineConfig(frame_delay_s=1 / 60, debug=args.debug), terminal=args.terminal)
        return 0

    if args.cmd == "stress":
        if args.keys <= 0:
            ap.error("--keys must be positive")
        stats = stress(args.events, args.keys, args.capacity)
        print("=== Stress Summary ===")
        print(f"Events pushed : {stats['pushed']}")
        print(f"Events popped : {stats['popped']}")
        print(f"Overflows     : {stats['overflows']} (capacity {stats['capacity']})")
        return 0
    return 1

if __name__ == "__main__":
    sys.exit(main())
