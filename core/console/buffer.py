from __future__ import annotations
import sys
from typing import List, TextIO
import structlog

log = structlog.get_logger()

class ConsoleBuffer:
    """
    Character-grid render surface.
    States draw into the grid every frame; render() paints it to `out` only when it differs
    from the last painted frame, or after force_redraw().
    """
    def __init__(self, width: int = 80, height: int = 24, out: TextIO | None = None):
        self.width = width
        self.height = height
        self.out = out if out is not None else sys.stdout
        self.ready = False
        self.frames_painted = 0
        self._grid: List[List[str]] = []
        self._painted: List[str] = []
        self._forced = False

    def setup(self) -> None:
        self._grid = [[" "] * self.width for _ in range(self.height)]
        self._painted = []
        self.ready = True
        log.info("console.setup", width=self.width, height=self.height)

    def draw_text(self, x: int, y: int, text: str) -> None:
        if not self.ready or not 0 <= y < self.height:
            return
        row = self._grid[y]
        for i, ch in enumerate(text):
            if 0 <= x + i < self.width:
                row[x + i] = ch

    def clear(self) -> None:
        for row in self._grid:
            row[:] = [" "] * self.width

    def lines(self) -> List[str]:
        return ["".join(row) for row in self._grid]

    def force_redraw(self) -> None:
        """Drop the cached frame so the next render() repaints everything."""
        self._forced = True

    def render(self) -> None:
        frame = self.lines()
        if frame == self._painted and not self._forced:
            return
        self.paint(frame)
        self._painted = frame
        self._forced = False
        self.frames_painted += 1

    def paint(self, lines: List[str]) -> None:
        # home cursor, then overwrite the whole frame
        self.out.write("\x1b[H" + "\n".join(lines) + "\n")
        self.out.flush()
