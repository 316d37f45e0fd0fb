"""Presentation collaborators: text (canvas) and SVG renderers."""

from syntax_diagrams.renderers.base import Renderer
from syntax_diagrams.renderers.svg import SvgRenderer, render_svg
from syntax_diagrams.renderers.text import TextRenderer, render_text

__all__ = ["Renderer", "SvgRenderer", "TextRenderer", "render_svg", "render_text"]
