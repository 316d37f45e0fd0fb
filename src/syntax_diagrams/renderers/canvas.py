"""Canvas: 2D character grid for rendering."""

from __future__ import annotations

from dataclasses import dataclass

from syntax_diagrams.renderers.charset import Arms, BoxChars, CharSet


@dataclass
class Rect:
    x: int
    y: int
    width: int
    height: int

    def right(self) -> int:
        return self.x + self.width

    def bottom(self) -> int:
        return self.y + self.height


class Canvas:
    """A 2D character grid onto which diagram items are painted."""

    def __init__(self, width: int, height: int, charset: CharSet) -> None:
        self.width = width
        self.height = height
        self.charset = charset
        self.cells: list[list[str]] = [[" "] * width for _ in range(height)]

    def _inside(self, col: int, row: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, col: int, row: int) -> str:
        if self._inside(col, row):
            return self.cells[row][col]
        return " "

    def set(self, col: int, row: int, c: str) -> None:
        if self._inside(col, row):
            self.cells[row][col] = c

    def join(self, col: int, row: int, arms: Arms) -> None:
        """Add track arms to a cell, merging with any line already there."""
        if not self._inside(col, row):
            return
        existing = Arms.from_char(self.cells[row][col]) or Arms()
        self.cells[row][col] = existing.merge(arms).to_char(self.charset)

    def hline(self, y: int, x1: int, x2: int) -> None:
        lo, hi = (x1, x2) if x1 <= x2 else (x2, x1)
        for col in range(lo, hi + 1):
            self.join(col, y, Arms(left=True, right=True))

    def vline(self, x: int, y1: int, y2: int) -> None:
        """Vertical track strictly between y1 and y2; the caller joins the end cells."""
        lo, hi = (y1, y2) if y1 <= y2 else (y2, y1)
        for row in range(lo + 1, hi):
            self.join(x, row, Arms(up=True, down=True))

    def draw_box(self, rect: Rect, bc: BoxChars) -> None:
        if rect.width < 2 or rect.height < 2:
            return
        x0 = rect.x
        y0 = rect.y
        x1 = rect.right() - 1
        y1 = rect.bottom() - 1
        self.set(x0, y0, bc.top_left)
        self.set(x1, y0, bc.top_right)
        self.set(x0, y1, bc.bottom_left)
        self.set(x1, y1, bc.bottom_right)
        for col in range(x0 + 1, x1):
            self.set(col, y0, bc.horizontal)
            self.set(col, y1, bc.horizontal)
        for row in range(y0 + 1, y1):
            self.set(x0, row, bc.vertical)
            self.set(x1, row, bc.vertical)

    def write_str(self, col: int, row: int, s: str) -> None:
        for i, ch in enumerate(s):
            self.set(col + i, row, ch)

    def to_string(self) -> str:
        out = "\n".join("".join(row).rstrip() for row in self.cells)
        return out.rstrip("\n") + "\n"
