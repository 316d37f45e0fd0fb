"""Diagram types: the compiler's output, consumed by renderers.

A Diagram is a tree of track constructs with no geometry attached. Renderers
decide how boxes, rails, and loops are laid out.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from syntax_diagrams.types import TerminalKind


@dataclass(frozen=True)
class DiagramItem:
    def children(self) -> tuple[DiagramItem, ...]:
        return ()


@dataclass(frozen=True)
class TerminalBox(DiagramItem):
    """A box showing literal text."""

    text: str
    kind: TerminalKind = field(default_factory=TerminalKind.default)


@dataclass(frozen=True)
class NonTerminalBox(DiagramItem):
    """A box labelled with a rule name; a link in UI terms, never expanded.

    ``resolved`` is False when the compiling registry has no such rule.
    """

    name: str
    resolved: bool = True


@dataclass(frozen=True)
class Concat(DiagramItem):
    """Items laid end to end along one track. Empty means a bare track."""

    items: tuple[DiagramItem, ...] = ()

    def children(self) -> tuple[DiagramItem, ...]:
        return self.items


@dataclass(frozen=True)
class Branch(DiagramItem):
    """One path per alternative; ``paths[default]`` is drawn straight through."""

    paths: tuple[DiagramItem, ...]
    default: int = 0

    def children(self) -> tuple[DiagramItem, ...]:
        return self.paths


@dataclass(frozen=True)
class Bypass(DiagramItem):
    """The item with a track that skips around it."""

    item: DiagramItem

    def children(self) -> tuple[DiagramItem, ...]:
        return (self.item,)


@dataclass(frozen=True)
class Loop(DiagramItem):
    """The item with a loop-back track; ``separator`` sits on the loop-back edge.

    With ``min_one`` False the loop may also be passed without entering it.
    """

    item: DiagramItem
    separator: DiagramItem | None = None
    min_one: bool = True

    def children(self) -> tuple[DiagramItem, ...]:
        if self.separator is None:
            return (self.item,)
        return (self.item, self.separator)


@dataclass(frozen=True)
class SideLabel(DiagramItem):
    """A note beside the track; not part of any path."""

    text: str


@dataclass(frozen=True)
class Diagram:
    """A compiled rule, ready to hand to a renderer."""

    root: DiagramItem
    rule: str | None = None
    placeholder: bool = False

    def walk(self) -> Iterator[DiagramItem]:
        """Yield every item in pre-order."""
        stack: list[DiagramItem] = [self.root]
        while stack:
            item = stack.pop()
            yield item
            stack.extend(reversed(item.children()))

    def terminals(self) -> list[TerminalBox]:
        return [i for i in self.walk() if isinstance(i, TerminalBox)]

    def nonterminals(self) -> list[NonTerminalBox]:
        return [i for i in self.walk() if isinstance(i, NonTerminalBox)]
