# core/hooks/keyboard_listener.py
from __future__ import annotations
from typing import Optional
from pynput import keyboard
import structlog

from .signals import KeyUpSignal, QueueInputSource

log = structlog.get_logger()

# pynput names -> the Tk keysym names states match on
KEY_ALIASES = {"esc": "escape", "enter": "return"}

def _key_to_str(k: keyboard.Key | keyboard.KeyCode) -> str:
    try:
        if isinstance(k, keyboard.KeyCode):
            return k.char if k.char else f"keycode_{k.vk or 'unknown'}"
        name = str(k).split(".")[-1]
        return KEY_ALIASES.get(name, name)
    except Exception:
        return "unknown"

class KeyboardHook(QueueInputSource):
    """Background pynput keyboard listener; every key release becomes a KeyUpSignal."""
    def __init__(self, maxsize: int = 256):
        super().__init__(maxsize=maxsize)
        self._listener: Optional[keyboard.Listener] = None

    def start(self) -> None:
        if self._listener and self._listener.running:
            return
        self._listener = keyboard.Listener(on_release=self._on_release, suppress=False)
        self._listener.daemon = True
        self._listener.start()
        log.info("kbd.start")

    def stop(self) -> None:
        if self._listener:
            self._listener.stop()
            self._listener = None
        log.info("kbd.stop")

    def _on_release(self, key):
        self.feed(KeyUpSignal(key=_key_to_str(key)))
