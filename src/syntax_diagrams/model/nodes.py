"""Grammar expression model: immutable node types and combinators.

Every rule of the grammar is a finite tree of these nodes. Rules refer to
one another only through NonTerminalRef, which holds a rule name rather than
a node, so a recursive grammar never needs a cyclic object graph.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from syntax_diagrams.errors import InvalidGrammarError
from syntax_diagrams.types import TerminalKind


@dataclass(frozen=True)
class ExpressionNode:
    """Base class of all expression nodes."""

    def children(self) -> tuple[ExpressionNode, ...]:
        return ()


def _check_text(owner: str, text: object) -> None:
    if not isinstance(text, str) or not text:
        raise InvalidGrammarError(f"{owner} needs a non-empty string, got {text!r}")


def _check_node(owner: str, node: object) -> None:
    if not isinstance(node, ExpressionNode):
        raise InvalidGrammarError(f"{owner} expects an expression node, got {node!r}")


def _freeze_nodes(owner: str, nodes: object) -> tuple[ExpressionNode, ...]:
    if isinstance(nodes, (str, ExpressionNode)) or nodes is None:
        raise InvalidGrammarError(f"{owner} expects a list of expression nodes, got {nodes!r}")
    frozen = tuple(nodes)  # type: ignore[arg-type]
    for node in frozen:
        _check_node(owner, node)
    return frozen


@dataclass(frozen=True)
class Terminal(ExpressionNode):
    text: str
    kind: TerminalKind = field(default_factory=TerminalKind.default)

    def __post_init__(self) -> None:
        _check_text("Terminal", self.text)


@dataclass(frozen=True)
class NonTerminalRef(ExpressionNode):
    name: str

    def __post_init__(self) -> None:
        _check_text("NonTerminalRef", self.name)


@dataclass(frozen=True)
class Sequence(ExpressionNode):
    items: tuple[ExpressionNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", _freeze_nodes("Sequence", self.items))

    def children(self) -> tuple[ExpressionNode, ...]:
        return self.items


@dataclass(frozen=True)
class Choice(ExpressionNode):
    options: tuple[ExpressionNode, ...]
    default: int = 0

    def __post_init__(self) -> None:
        options = _freeze_nodes("Choice", self.options)
        if not options:
            raise InvalidGrammarError("Choice needs at least one option")
        if not isinstance(self.default, int) or not 0 <= self.default < len(options):
            raise InvalidGrammarError(
                f"Choice default index {self.default!r} out of range for {len(options)} option(s)"
            )
        object.__setattr__(self, "options", options)

    def children(self) -> tuple[ExpressionNode, ...]:
        return self.options


@dataclass(frozen=True)
class Optional(ExpressionNode):
    inner: ExpressionNode

    def __post_init__(self) -> None:
        _check_node("Optional", self.inner)

    def children(self) -> tuple[ExpressionNode, ...]:
        return (self.inner,)


@dataclass(frozen=True)
class _Repetition(ExpressionNode):
    inner: ExpressionNode
    separator: ExpressionNode | None = None

    def __post_init__(self) -> None:
        owner = type(self).__name__
        _check_node(owner, self.inner)
        if self.separator is not None:
            _check_node(f"{owner} separator", self.separator)

    def children(self) -> tuple[ExpressionNode, ...]:
        if self.separator is None:
            return (self.inner,)
        return (self.inner, self.separator)


@dataclass(frozen=True)
class ZeroOrMore(_Repetition):
    """Zero or more repetitions of inner, separator between consecutive ones."""


@dataclass(frozen=True)
class OneOrMore(_Repetition):
    """One or more repetitions of inner, separator between consecutive ones."""


@dataclass(frozen=True)
class Annotation(ExpressionNode):
    """A documentation note, e.g. a lookahead constraint. Never matches input."""

    text: str

    def __post_init__(self) -> None:
        _check_text("Annotation", self.text)


# ─── Combinators ─────────────────────────────────────────────────────────────


def _coerce(item: ExpressionNode | str) -> ExpressionNode:
    if isinstance(item, str):
        return Terminal(item)
    return item


def T(text: str) -> Terminal:
    """A token or punctuation terminal (NAME, NEWLINE, '(')."""
    return Terminal(text, TerminalKind.Token)


def K(text: str) -> Terminal:
    """A hard keyword terminal."""
    return Terminal(text, TerminalKind.Keyword)


def SK(text: str) -> Terminal:
    """A soft keyword terminal (match, case, type)."""
    return Terminal(text, TerminalKind.SoftKeyword)


def NT(name: str) -> NonTerminalRef:
    return NonTerminalRef(name)


def seq(*items: ExpressionNode | str) -> Sequence:
    return Sequence(tuple(_coerce(i) for i in items))


def choice(*options: ExpressionNode | str, default: int = 0) -> Choice:
    return Choice(tuple(_coerce(o) for o in options), default)


def opt(inner: ExpressionNode | str) -> Optional:
    return Optional(_coerce(inner))


def zero_or_more(inner: ExpressionNode | str, separator: ExpressionNode | str | None = None) -> ZeroOrMore:
    return ZeroOrMore(_coerce(inner), None if separator is None else _coerce(separator))


def one_or_more(inner: ExpressionNode | str, separator: ExpressionNode | str | None = None) -> OneOrMore:
    return OneOrMore(_coerce(inner), None if separator is None else _coerce(separator))


def note(text: str) -> Annotation:
    return Annotation(text)


# ─── Traversal ───────────────────────────────────────────────────────────────


def walk(tree: ExpressionNode) -> Iterator[ExpressionNode]:
    """Yield every node of the tree in pre-order."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children()))


def references(tree: ExpressionNode) -> list[str]:
    """Rule names referenced by the tree, in order of first occurrence."""
    seen: dict[str, None] = {}
    for node in walk(tree):
        if isinstance(node, NonTerminalRef):
            seen.setdefault(node.name)
    return list(seen)
