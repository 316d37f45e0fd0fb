"""Renderer protocol shared by the text and SVG renderers."""

from __future__ import annotations

from typing import Protocol

from syntax_diagrams.diagram.types import Diagram


class Renderer(Protocol):
    def render(self, diagram: Diagram) -> str:
        """Return the whole rendered document for one diagram."""
        ...
