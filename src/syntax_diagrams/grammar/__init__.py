"""The transcribed Python grammar and its section index."""

from syntax_diagrams.grammar.python import START_RULES, default_registry, init, rule_names
from syntax_diagrams.grammar.sections import PYTHON_SECTIONS, Section, SectionIndex, filter_names

__all__ = [
    "PYTHON_SECTIONS",
    "START_RULES",
    "Section",
    "SectionIndex",
    "default_registry",
    "filter_names",
    "init",
    "rule_names",
]
