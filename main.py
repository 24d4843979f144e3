# main.py
from __future__ import annotations
import structlog
from app.config import EngineConfig
from app.logging_config import configure_logging
from app.controller.event_bus import EventBus
from app.controller.frame_loop import FrameLoop

def main(cfg: EngineConfig | None = None, terminal: bool = False) -> None:
    cfg = cfg or EngineConfig(frame_delay_s=1 / 60)
    configure_logging(debug=cfg.debug)
    log = structlog.get_logger()

    log.info("app.start", msg="Launching tickbus demo", terminal=terminal)
    bus = EventBus(cfg)
    hook = None
    win = None
    if terminal:
        # plain stdout surface, global key releases through pynput
        from core.console.buffer import ConsoleBuffer
        from core.hooks.keyboard_listener import KeyboardHook
        console = ConsoleBuffer(cfg.console_width, cfg.console_height)
        hook = KeyboardHook()
        hook.start()
        source = hook
    else:
        from ui.console_window import ConsoleWindow
        win = ConsoleWindow(cfg.console_width, cfg.console_height)
        console = source = win
    console.setup()

    from ui.demo_states import MenuState, PlayState
    loop = FrameLoop(bus, console=console, input_source=source, frame_delay_s=cfg.frame_delay_s)
    menu = MenuState(bus, console)
    loop.add_state("menu", menu)
    loop.add_state("play", PlayState(bus, console))
    loop.install_state(menu)

    try:
        frames = loop.run()
    finally:
        bus.close()
        if hook:
            hook.stop()
        if win is not None and not win.closed:
            win.destroy()
    log.info("app.stop", msg="Exited cleanly", frames=frames)

if __name__ == "__main__":
    main()
