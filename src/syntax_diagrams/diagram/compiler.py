"""Diagram compiler: expression trees to Diagram values.

Compilation is structural recursion over the tree. A NonTerminalRef becomes
a labelled box and is never replaced by the referenced rule's diagram, so
every rule compiles to a bounded diagram even in a self-referential grammar.
"""

from __future__ import annotations

import logging

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
from syntax_diagrams.errors import InvalidGrammarError, UnknownRuleError
from syntax_diagrams.model.nodes import (
    Annotation,
    Choice,
    ExpressionNode,
    NonTerminalRef,
    OneOrMore,
    Optional,
    Sequence,
    Terminal,
    ZeroOrMore,
)
from syntax_diagrams.model.registry import RuleRegistry

logger = logging.getLogger(__name__)


def placeholder_diagram(name: str) -> Diagram:
    """The diagram shown in place of a rule that has no definition."""
    return Diagram(root=SideLabel(f"no definition for {name}"), rule=name, placeholder=True)


class DiagramCompiler:
    """Compiles expression trees, optionally against a registry.

    The registry is consulted only to tell whether a referenced name is
    defined; it is never used to expand a reference.
    """

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self.registry = registry

    def compile(self, tree: ExpressionNode, rule: str | None = None) -> Diagram:
        return Diagram(root=self._compile(tree), rule=rule)

    def compile_rule(self, name: str) -> Diagram:
        """Look up and compile one rule; unknown names give a placeholder."""
        if self.registry is None:
            raise ValueError("compile_rule needs a compiler constructed with a registry")
        try:
            tree = self.registry.lookup(name)
        except UnknownRuleError:
            logger.warning("no definition for rule '%s'; rendering placeholder", name)
            return placeholder_diagram(name)
        return self.compile(tree, rule=name)

    def compile_all(self, names: list[str] | None = None) -> dict[str, Diagram]:
        """Compile ``names`` (default: every registered rule) in order."""
        if names is None:
            if self.registry is None:
                return {}
            names = self.registry.names()
        return {name: self.compile_rule(name) for name in names}

    def _compile(self, node: ExpressionNode) -> DiagramItem:
        match node:
            case Terminal(text=text, kind=kind):
                return TerminalBox(text, kind)
            case NonTerminalRef(name=name):
                resolved = self.registry is None or self.registry.has(name)
                return NonTerminalBox(name, resolved)
            case Sequence(items=items):
                return Concat(tuple(self._compile(i) for i in items))
            case Choice(options=options, default=default):
                return Branch(tuple(self._compile(o) for o in options), default)
            case Optional(inner=inner):
                return Bypass(self._compile(inner))
            case OneOrMore(inner=inner, separator=separator):
                return Loop(self._compile(inner), self._compile_separator(separator), min_one=True)
            case ZeroOrMore(inner=inner, separator=separator):
                return Loop(self._compile(inner), self._compile_separator(separator), min_one=False)
            case Annotation(text=text):
                return SideLabel(text)
            case _:
                raise InvalidGrammarError(f"cannot compile {node!r}")

    def _compile_separator(self, separator: ExpressionNode | None) -> DiagramItem | None:
        if separator is None:
            return None
        return self._compile(separator)


def compile_tree(tree: ExpressionNode) -> Diagram:
    """Compile a tree without a registry (every reference counts as resolved)."""
    return DiagramCompiler().compile(tree)
