"""Exceptions and warnings for syntax-diagrams."""

from __future__ import annotations


class GrammarError(Exception):
    """Base exception for grammar model operations."""


class InvalidGrammarError(GrammarError, ValueError):
    """An expression node or rule definition violates a structural invariant."""


class UnknownRuleError(GrammarError, KeyError):
    """A rule name was looked up that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"no definition for rule '{self.name}'"


class UnknownSectionError(GrammarError, KeyError):
    """A section id was looked up that the index does not contain."""

    def __init__(self, section: str) -> None:
        super().__init__(section)
        self.section = section

    def __str__(self) -> str:
        return f"unknown section '{self.section}'"


class DuplicateRuleWarning(UserWarning):
    """A rule name was registered more than once; the latest definition wins."""
