"""Tests for syntax_diagrams.diagram.compiler: trees to diagrams."""

import logging

import pytest

from syntax_diagrams.diagram.compiler import DiagramCompiler, compile_tree, placeholder_diagram
from syntax_diagrams.diagram.types import (
    Branch,
    Bypass,
    Concat,
    Diagram,
    Loop,
    NonTerminalBox,
    SideLabel,
    TerminalBox,
)
from syntax_diagrams.model.nodes import (
    NT,
    Choice,
    K,
    T,
    Terminal,
    choice,
    note,
    one_or_more,
    opt,
    seq,
    zero_or_more,
)
from syntax_diagrams.model.registry import RuleRegistry
from syntax_diagrams.types import TerminalKind


def _registry(**producers) -> RuleRegistry:
    registry = RuleRegistry()
    for name, producer in producers.items():
        registry.register(name, producer)
    return registry


class TestScenarios:
    def test_pass_stmt(self):
        registry = _registry(pass_stmt=lambda: Terminal("pass"))
        diagram = DiagramCompiler(registry).compile_rule("pass_stmt")
        assert diagram.rule == "pass_stmt"
        assert not diagram.placeholder
        assert [t.text for t in diagram.terminals()] == ["pass"]

    def test_augassign_three_paths(self):
        registry = _registry(augassign=lambda: Choice((Terminal("+="), Terminal("-="), Terminal("*="))))
        diagram = DiagramCompiler(registry).compile_rule("augassign")
        assert isinstance(diagram.root, Branch)
        assert len(diagram.root.paths) == 3
        assert all(isinstance(p, TerminalBox) for p in diagram.root.paths)
        assert [p.text for p in diagram.root.paths] == ["+=", "-=", "*="]


class TestMapping:
    def test_terminal_keeps_kind(self):
        assert compile_tree(K("if")).root == TerminalBox("if", TerminalKind.Keyword)

    def test_sequence_to_concat(self):
        root = compile_tree(seq("(", ")")).root
        assert root == Concat((TerminalBox("("), TerminalBox(")")))

    def test_empty_sequence_is_bare_track(self):
        assert compile_tree(seq()).root == Concat(())

    def test_choice_default_preserved(self):
        root = compile_tree(choice("a", "b", default=1)).root
        assert isinstance(root, Branch)
        assert root.default == 1

    def test_optional_to_bypass(self):
        assert compile_tree(opt("x")).root == Bypass(TerminalBox("x"))

    def test_loops(self):
        assert compile_tree(one_or_more("x", ",")).root == Loop(TerminalBox("x"), TerminalBox(","), min_one=True)
        assert compile_tree(zero_or_more("x")).root == Loop(TerminalBox("x"), None, min_one=False)

    def test_annotation_to_side_label(self):
        assert compile_tree(note("&'('")).root == SideLabel("&'('")


class TestReferences:
    def test_reference_is_not_expanded(self):
        registry = _registry(
            expression=lambda: choice(NT("disjunction"), NT("lambdef")),
            disjunction=lambda: one_or_more(NT("conjunction"), K("or")),
        )
        diagram = DiagramCompiler(registry).compile_rule("expression")
        assert [n.name for n in diagram.nonterminals()] == ["disjunction", "lambdef"]
        assert diagram.terminals() == []

    def test_resolved_flag(self):
        registry = _registry(a=lambda: seq(NT("a"), NT("b")))
        boxes = DiagramCompiler(registry).compile_rule("a").nonterminals()
        assert boxes == [NonTerminalBox("a", resolved=True), NonTerminalBox("b", resolved=False)]

    def test_self_reference_is_bounded(self):
        registry = _registry(primary=lambda: choice(seq(NT("primary"), ".", T("NAME")), NT("atom")))
        diagram = DiagramCompiler(registry).compile_rule("primary")
        assert len(list(diagram.walk())) == 6

    def test_without_registry_every_reference_resolves(self):
        assert compile_tree(NT("anything")).root == NonTerminalBox("anything", resolved=True)


class TestPlaceholder:
    def test_unknown_rule_gives_placeholder(self):
        diagram = DiagramCompiler(RuleRegistry()).compile_rule("nope")
        assert diagram == placeholder_diagram("nope")
        assert diagram.placeholder
        assert diagram.rule == "nope"
        assert diagram.root == SideLabel("no definition for nope")

    def test_placeholder_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="syntax_diagrams.diagram.compiler"):
            DiagramCompiler(RuleRegistry()).compile_rule("nope")
        assert "no definition for rule 'nope'" in caplog.text

    def test_compile_rule_needs_registry(self):
        with pytest.raises(ValueError):
            DiagramCompiler().compile_rule("x")


class TestCompileAll:
    def test_registered_order(self):
        registry = _registry(b=lambda: T("b"), a=lambda: T("a"))
        diagrams = DiagramCompiler(registry).compile_all()
        assert list(diagrams) == ["b", "a"]
        assert all(isinstance(d, Diagram) for d in diagrams.values())

    def test_named_subset_with_unknown(self):
        registry = _registry(a=lambda: T("a"))
        diagrams = DiagramCompiler(registry).compile_all(["missing", "a"])
        assert diagrams["missing"].placeholder
        assert not diagrams["a"].placeholder

    def test_no_registry_compiles_nothing(self):
        assert DiagramCompiler().compile_all() == {}


def test_compile_is_deterministic():
    tree = seq(K("with"), one_or_more(NT("with_item"), ","), ":", NT("block"), note("lookahead"))
    compiler = DiagramCompiler()
    assert compiler.compile(tree) == compiler.compile(tree)
