"""Text renderer: railroad diagrams drawn on a character canvas.

Layout is two-pass: every item is measured (width, height, and the row its
track runs along), then painted at a position chosen by its parent.

  - terminals are rounded boxes, rule references square boxes
  - a choice stacks its paths below the default path, which runs straight through
  - an optional item is a choice between the item and a bare track
  - a loop returns along a track below the item, marked with a left arrow,
    with the separator (if any) sitting on that track
  - annotations are text above the track
"""

from __future__ import annotations

from dataclasses import dataclass

from syntax_diagrams.config import RenderConfig
from syntax_diagrams.diagram.types import (
    Branch,
    Bypass,
    Concat,
    Diagram,
    DiagramItem,
    Loop,
    NonTerminalBox,
    SideLabel,
    TerminalBox,
)
from syntax_diagrams.renderers.canvas import Canvas, Rect
from syntax_diagrams.renderers.charset import Arms, BoxChars, CharSet

GAP = 2  # track cells between consecutive items
RAIL = 3  # entry cell, rail, connector on each side of a branch

_EMPTY = Concat(())


@dataclass
class _Size:
    width: int
    height: int
    baseline: int  # row of the track, relative to the item's top


def _normalize(item: DiagramItem) -> DiagramItem:
    """Rewrite items the painter has no dedicated layout for."""
    while True:
        match item:
            case Loop(item=inner, separator=separator, min_one=False):
                item = Bypass(Loop(inner, separator, min_one=True))
            case Bypass(item=inner):
                item = Branch((inner, _EMPTY), 0)
            case _:
                return item


def _tracks(item: Branch | Loop) -> list[DiagramItem]:
    """Paths of a branch or loop, top to bottom."""
    if isinstance(item, Loop):
        return [item.item, item.separator if item.separator is not None else _EMPTY]
    rest = [p for i, p in enumerate(item.paths) if i != item.default]
    return [item.paths[item.default], *rest]


class TextRenderer:
    """Unicode/ASCII railroad diagram renderer."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()
        self.charset = CharSet.Unicode if self.config.unicode else CharSet.Ascii
        self._sizes: dict[DiagramItem, _Size] = {}

    # ─── Public API ──────────────────────────────────────────────────────────

    def render(self, diagram: Diagram) -> str:
        self._sizes.clear()
        title = f"{diagram.rule}:" if self.config.title and diagram.rule else None

        if diagram.placeholder:
            text = diagram.root.text if isinstance(diagram.root, SideLabel) else "no definition"
            lines = [title] if title else []
            lines.append(f"  {text}")
            return "\n".join(lines) + "\n"

        size = self._measure(diagram.root)
        top = 1 if title else 0
        width = size.width + 4
        canvas = Canvas(max(width, len(title or "")), top + size.height, self.charset)
        if title:
            canvas.write_str(0, 0, title)

        track = top + size.baseline
        bc = BoxChars.for_charset(self.charset)
        canvas.set(0, track, bc.tee_right)
        canvas.hline(track, 1, 1)
        self._paint(canvas, diagram.root, 2, top)
        canvas.hline(track, width - 2, width - 2)
        canvas.set(width - 1, track, bc.tee_left)
        return canvas.to_string()

    # ─── Measuring ───────────────────────────────────────────────────────────

    def _label(self, item: TerminalBox | NonTerminalBox) -> str:
        if isinstance(item, TerminalBox):
            return item.text
        return item.name if item.resolved else f"{item.name} (undefined)"

    def _measure(self, item: DiagramItem) -> _Size:
        cached = self._sizes.get(item)
        if cached is not None:
            return cached
        size = self._compute_size(_normalize(item))
        self._sizes[item] = size
        return size

    def _compute_size(self, item: DiagramItem) -> _Size:
        match item:
            case TerminalBox() | NonTerminalBox():
                return _Size(len(self._label(item)) + 2 * self.config.padding + 2, 3, 1)
            case SideLabel(text=text):
                return _Size(len(text) + 2, 2, 1)
            case Concat(items=()):
                return _Size(GAP, 1, 0)
            case Concat(items=items):
                sizes = [self._measure(i) for i in items]
                above = max(s.baseline for s in sizes)
                below = max(s.height - s.baseline - 1 for s in sizes)
                width = sum(s.width for s in sizes) + GAP * (len(sizes) - 1)
                return _Size(width, above + below + 1, above)
            case Branch() | Loop():
                sizes = [self._measure(p) for p in _tracks(item)]
                inner = max(s.width for s in sizes)
                height = sum(s.height for s in sizes) + len(sizes) - 1
                return _Size(inner + 2 * RAIL, height, sizes[0].baseline)
            case _:
                raise TypeError(f"cannot lay out {item!r}")

    # ─── Painting ────────────────────────────────────────────────────────────

    def _paint(self, canvas: Canvas, item: DiagramItem, x: int, y: int) -> None:
        size = self._measure(item)
        item = _normalize(item)
        match item:
            case TerminalBox() | NonTerminalBox():
                self._paint_box(canvas, item, x, y, size)
            case SideLabel(text=text):
                canvas.write_str(x + 1, y, text)
                canvas.hline(y + 1, x, x + size.width - 1)
            case Concat(items=()):
                canvas.hline(y, x, x + size.width - 1)
            case Concat(items=items):
                track = y + size.baseline
                col = x
                for i, child in enumerate(items):
                    child_size = self._measure(child)
                    self._paint(canvas, child, col, track - child_size.baseline)
                    col += child_size.width
                    if i < len(items) - 1:
                        canvas.hline(track, col, col + GAP - 1)
                        col += GAP
            case Branch() | Loop():
                self._paint_rails(canvas, item, x, y, size)

    def _paint_box(self, canvas: Canvas, item: TerminalBox | NonTerminalBox, x: int, y: int, size: _Size) -> None:
        if isinstance(item, TerminalBox):
            bc = BoxChars.rounded(self.charset)
        else:
            bc = BoxChars.for_charset(self.charset)
        canvas.draw_box(Rect(x, y, size.width, size.height), bc)
        canvas.write_str(x + 1 + self.config.padding, y + 1, self._label(item))
        canvas.join(x, y + 1, Arms(left=True))
        canvas.join(x + size.width - 1, y + 1, Arms(right=True))

    def _paint_rails(self, canvas: Canvas, item: Branch | Loop, x: int, y: int, size: _Size) -> None:
        paths = _tracks(item)
        left_rail = x + 1
        right_rail = x + size.width - 2
        content = x + RAIL

        rows: list[int] = []
        top = y
        for path in paths:
            path_size = self._measure(path)
            self._paint(canvas, path, content, top)
            track = top + path_size.baseline
            rows.append(track)
            canvas.hline(track, left_rail + 1, content - 1)
            canvas.hline(track, content + path_size.width, right_rail - 1)
            top += path_size.height + 1

        main, last = rows[0], rows[-1]
        canvas.vline(left_rail, main, last)
        canvas.vline(right_rail, main, last)
        # Each rail cell gets its complete arm set in one join.
        for track in rows:
            up, down = track != main, track != last
            canvas.join(left_rail, track, Arms(up=up, down=down, right=True))
            canvas.join(right_rail, track, Arms(up=up, down=down, left=True))
        canvas.hline(main, x, left_rail)
        canvas.hline(main, right_rail, x + size.width - 1)

        if isinstance(item, Loop):
            canvas.set(left_rail + 1, rows[1], BoxChars.for_charset(self.charset).arrow_left)


def render_text(diagram: Diagram, config: RenderConfig | None = None) -> str:
    """Render one diagram with a throwaway TextRenderer."""
    return TextRenderer(config).render(diagram)
