"""Diagram values and the compiler that produces them."""

from syntax_diagrams.diagram.compiler import DiagramCompiler, compile_tree, placeholder_diagram
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

__all__ = [
    "Branch",
    "Bypass",
    "Concat",
    "Diagram",
    "DiagramCompiler",
    "DiagramItem",
    "Loop",
    "NonTerminalBox",
    "SideLabel",
    "TerminalBox",
    "compile_tree",
    "placeholder_diagram",
]
