"""SVG renderer: hands diagram geometry to the railroad-diagrams library."""

from __future__ import annotations

import io

import railroad

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
from syntax_diagrams.types import TerminalKind

_TERMINAL_CLASSES = {
    TerminalKind.Token: "token",
    TerminalKind.Keyword: "keyword",
    TerminalKind.SoftKeyword: "soft-keyword",
}


def to_railroad(item: DiagramItem) -> railroad.DiagramItem:
    """Convert one diagram item to the equivalent railroad item."""
    match item:
        case TerminalBox(text=text, kind=kind):
            return railroad.Terminal(text, cls=_TERMINAL_CLASSES[kind])
        case NonTerminalBox(name=name, resolved=True):
            return railroad.NonTerminal(name, href=f"#{name}")
        case NonTerminalBox(name=name):
            return railroad.NonTerminal(name, title="undefined rule", cls="undefined")
        case Concat(items=()):
            return railroad.Skip()
        case Concat(items=items):
            return railroad.Sequence(*(to_railroad(i) for i in items))
        case Branch(paths=paths, default=default):
            return railroad.Choice(default, *(to_railroad(p) for p in paths))
        case Bypass(item=inner):
            return railroad.Optional(to_railroad(inner))
        case Loop(item=inner, separator=separator, min_one=min_one):
            repeat = None if separator is None else to_railroad(separator)
            if min_one:
                return railroad.OneOrMore(to_railroad(inner), repeat)
            return railroad.ZeroOrMore(to_railroad(inner), repeat)
        case SideLabel(text=text):
            return railroad.Comment(text)
        case _:
            raise TypeError(f"cannot convert {item!r}")


class SvgRenderer:
    """Standalone SVG documents, one per diagram."""

    def __init__(self, standalone: bool = True) -> None:
        self.standalone = standalone

    def render(self, diagram: Diagram) -> str:
        rr = railroad.Diagram(to_railroad(diagram.root), type="simple")
        buf = io.StringIO()
        if self.standalone:
            rr.writeStandalone(buf.write)
        else:
            rr.writeSvg(buf.write)
        return buf.getvalue()


def render_svg(diagram: Diagram) -> str:
    return SvgRenderer().render(diagram)
