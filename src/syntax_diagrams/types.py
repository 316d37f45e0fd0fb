"""Shared type definitions for syntax-diagrams.

Small enums used across the expression model, the diagram compiler, and renderers.
"""

from __future__ import annotations

from enum import Enum, auto


class TerminalKind(Enum):
    Token = auto()  # NAME, NEWLINE, punctuation
    Keyword = auto()  # 'if' in the PEG grammar
    SoftKeyword = auto()  # "match" in the PEG grammar

    @classmethod
    def default(cls) -> TerminalKind:
        return cls.Token
