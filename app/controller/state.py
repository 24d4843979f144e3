from __future__ import annotations
from typing import Protocol

class State(Protocol):
    """Anything that can take input, update itself and render (level, menu, ...)."""
    def handle_key(self, key: str) -> None: ...
    def update(self) -> None: ...
    def render(self) -> None: ...

class BaseState:
    """Do-nothing state counting update ticks. Compose real states around it."""
    def __init__(self):
        self.tick = 0  # update ticks since init

    def handle_key(self, key: str) -> None:
        pass

    def update(self) -> None:
        self.tick += 1

    def render(self) -> None:
        pass
