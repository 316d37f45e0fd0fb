"""syntax-diagrams: railroad (syntax) diagrams for the Python PEG grammar."""

from syntax_diagrams.config import RenderConfig
from syntax_diagrams.diagram import Diagram, DiagramCompiler
from syntax_diagrams.errors import (
    DuplicateRuleWarning,
    GrammarError,
    InvalidGrammarError,
    UnknownRuleError,
    UnknownSectionError,
)
from syntax_diagrams.grammar import PYTHON_SECTIONS, default_registry, filter_names
from syntax_diagrams.model import RuleRegistry
from syntax_diagrams.renderers import Renderer, SvgRenderer, TextRenderer

__all__ = [
    "PYTHON_SECTIONS",
    "Diagram",
    "DiagramCompiler",
    "DuplicateRuleWarning",
    "GrammarError",
    "InvalidGrammarError",
    "RenderConfig",
    "RuleRegistry",
    "UnknownRuleError",
    "UnknownSectionError",
    "default_registry",
    "filter_names",
    "render_rule",
    "render_rule_svg",
]


def render_rule(
    name: str, unicode: bool = True, padding: int = 1, title: bool = True, registry: RuleRegistry | None = None
) -> str:
    """Compile one grammar rule and render it as a text railroad diagram.

    Args:
        name: Rule name, e.g. 'if_stmt'.
        unicode: True for Unicode box-drawing characters; False for ASCII fallback.
        padding: Spaces inside box borders on each side (default 1).
        title: Prefix the diagram with a 'name:' line.
        registry: Registry to read the rule from; the Python grammar by default.

    Returns:
        The rendered diagram. An unknown name renders a placeholder, never raises.
    """
    config = RenderConfig(unicode=unicode, padding=padding, title=title)
    return _render(name, TextRenderer(config), registry)


def render_rule_svg(name: str, registry: RuleRegistry | None = None) -> str:
    """Compile one grammar rule and render it as a standalone SVG document."""
    return _render(name, SvgRenderer(), registry)


def _render(name: str, renderer: Renderer, registry: RuleRegistry | None) -> str:
    compiler = DiagramCompiler(registry if registry is not None else default_registry())
    return renderer.render(compiler.compile_rule(name))
