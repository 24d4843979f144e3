from __future__ import annotations
import tkinter as tk
from tkinter import ttk
from typing import List, Optional
import structlog

from core.console.buffer import ConsoleBuffer
from core.hooks.signals import (
    BaseSignal, KeyUpSignal, QueueInputSource, QuitSignal, WindowRestoredSignal
)

log = structlog.get_logger()

class ConsoleWindow(tk.Tk):
    """
    Tkinter window acting both as render surface and native input source.
    Key releases, window close and restore are queued as signals; poll() pumps Tk
    before handing them out, so the frame loop owns the event loop (no mainloop()).
    """
    def __init__(self, width: int = 80, height: int = 24, title: str = "tickbus"):
        super().__init__()
        self.title(title)
        self.buffer = ConsoleBuffer(width, height)
        self.buffer.paint = self._paint
        self.signals = QueueInputSource()
        self.closed = False

        self._content = ttk.Frame(self, padding=4)
        self._content.pack(fill="both", expand=True)
        self._text = tk.Text(self._content, width=width, height=height, font=("Courier", 12),
                             bg="black", fg="white", insertwidth=0, takefocus=1)
        self._text.pack(fill="both", expand=True)
        self._text.configure(state="disabled")

        self.bind("<KeyRelease>", self._on_key_release)
        self.bind("<Map>", self._on_map)
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self._text.focus_set()

    # --- render sink ---
    @property
    def ready(self) -> bool:
        return self.buffer.ready and not self.closed

    def setup(self) -> None:
        self.buffer.setup()

    def draw_text(self, x: int, y: int, text: str) -> None:
        self.buffer.draw_text(x, y, text)

    def clear(self) -> None:
        self.buffer.clear()

    def render(self) -> None:
        if not self.closed:
            self.buffer.render()

    def force_redraw(self) -> None:
        self.buffer.force_redraw()

    def _paint(self, lines: List[str]) -> None:
        self._text.configure(state="normal")
        self._text.delete("1.0", "end")
        self._text.insert("1.0", "\n".join(lines))
        self._text.configure(state="disabled")

    # --- input source ---
    def poll(self) -> Optional[BaseSignal]:
        if not self.closed:
            self.update()
        return self.signals.poll()

    def _on_key_release(self, event: tk.Event) -> None:
        self.signals.feed(KeyUpSignal(key=(event.keysym or "unknown").lower()))

    def _on_map(self, event: tk.Event) -> None:
        # <Map> on the root also fires for every child through the toplevel bindtag
        if event.widget is not self:
            return
        self.signals.feed(WindowRestoredSignal())

    def _on_close(self) -> None:
        log.info("console.window.close")
        self.signals.feed(QuitSignal())
        self.closed = True
        self.destroy()
