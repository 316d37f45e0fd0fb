"""CLI entry point for syntax-diagrams."""

import logging
import sys
from pathlib import Path

import click

from syntax_diagrams.config import RenderConfig
from syntax_diagrams.diagram.compiler import DiagramCompiler
from syntax_diagrams.errors import GrammarError
from syntax_diagrams.grammar.python import default_registry
from syntax_diagrams.grammar.sections import PYTHON_SECTIONS, filter_names
from syntax_diagrams.model.graph import check_grammar
from syntax_diagrams.renderers.svg import SvgRenderer
from syntax_diagrams.renderers.text import TextRenderer


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def main(verbose: bool) -> None:
    """Python grammar railroad diagrams, grouped into sections."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@main.command()
@click.option("--filter", "-f", "query", type=str, default="", help="Only count rules whose name contains this text")
def sections(query: str) -> None:
    """List sections with their titles and rule counts."""
    filtered = PYTHON_SECTIONS.filtered(query)
    for section_id in PYTHON_SECTIONS.sections_in_order():
        title = PYTHON_SECTIONS.title_of(section_id)
        click.echo(f"{section_id:<16} {title} ({len(filtered[section_id])})")


@main.command()
@click.option("--section", "-s", "section_id", type=str, default=None, help="Only list rules of this section")
@click.option("--filter", "-f", "query", type=str, default="", help="Only list rules whose name contains this text")
def rules(section_id: str | None, query: str) -> None:
    """List rule names, one per line."""
    try:
        names = PYTHON_SECTIONS.rules_of(section_id) if section_id else PYTHON_SECTIONS.all_rules()
    except GrammarError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)
    for name in filter_names(names, query):
        click.echo(name)


@main.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--ascii", "-a", "use_ascii", is_flag=True, help="Use plain ASCII instead of Unicode")
@click.option("--padding", "-p", "padding", type=int, default=1, help="Box padding (spaces inside border)")
@click.option("--no-title", "no_title", is_flag=True, help="Omit the 'name:' line above each diagram")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
def show(names: tuple[str, ...], use_ascii: bool, padding: int, no_title: bool, output: str | None) -> None:
    """Render rules as text railroad diagrams."""
    compiler = DiagramCompiler(default_registry())
    renderer = TextRenderer(RenderConfig(unicode=not use_ascii, padding=padding, title=not no_title))
    rendered = "\n".join(renderer.render(compiler.compile_rule(name)) for name in names)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


@main.command()
@click.argument("names", nargs=-1)
@click.option("--all", "all_rules", is_flag=True, help="Export every registered rule")
@click.option("--output-dir", "-o", "output_dir", type=click.Path(file_okay=False), required=True)
def svg(names: tuple[str, ...], all_rules: bool, output_dir: str) -> None:
    """Write one <name>.svg file per rule."""
    registry = default_registry()
    selected = registry.names() if all_rules else list(names)
    if not selected:
        click.echo("error: give rule names or --all", err=True)
        sys.exit(1)
    # File names come from rule names, so only registered names are written.
    unknown = [name for name in selected if name not in registry]
    if unknown:
        click.echo(f"error: unknown rule(s): {', '.join(unknown)}", err=True)
        sys.exit(1)

    compiler = DiagramCompiler(registry)
    renderer = SvgRenderer()
    out = Path(output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
        for name in selected:
            (out / f"{name}.svg").write_text(renderer.render(compiler.compile_rule(name)), encoding="utf-8")
    except OSError as e:
        click.echo(f"error: cannot write to '{output_dir}': {e}", err=True)
        sys.exit(1)
    click.echo(f"wrote {len(selected)} diagram(s) to {out}")


@main.command()
def check() -> None:
    """Check the grammar data for undefined references and section gaps."""
    report = check_grammar(default_registry(), PYTHON_SECTIONS)
    for line in report.lines():
        click.echo(line)
    if not report.ok:
        sys.exit(1)
    click.echo("ok")


if __name__ == "__main__":
    main()
