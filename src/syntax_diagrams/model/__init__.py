"""Grammar expression model: node types, rule registry, and rule graph."""

from syntax_diagrams.model.graph import GrammarReport, RuleGraph, check_grammar
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
    references,
    walk,
)
from syntax_diagrams.model.registry import RuleProducer, RuleRegistry

__all__ = [
    "Annotation",
    "Choice",
    "ExpressionNode",
    "GrammarReport",
    "NonTerminalRef",
    "OneOrMore",
    "Optional",
    "RuleGraph",
    "RuleProducer",
    "RuleRegistry",
    "Sequence",
    "Terminal",
    "ZeroOrMore",
    "check_grammar",
    "references",
    "walk",
]
