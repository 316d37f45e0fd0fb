"""Tests for syntax_diagrams.model.graph: reference graph and integrity report."""

import pytest

from syntax_diagrams.errors import DuplicateRuleWarning
from syntax_diagrams.grammar.sections import Section, SectionIndex
from syntax_diagrams.model.graph import GrammarReport, RuleGraph, check_grammar
from syntax_diagrams.model.nodes import NT, T, choice, seq
from syntax_diagrams.model.registry import RuleRegistry


def _registry() -> RuleRegistry:
    registry = RuleRegistry()
    registry.register("start", lambda: seq(NT("a"), NT("b")))
    registry.register("a", lambda: choice(seq(NT("a"), "+", NT("atom")), NT("atom")))
    registry.register("atom", lambda: T("NAME"))
    registry.register("b", lambda: NT("c"))
    registry.register("c", lambda: choice(NT("b"), NT("missing")))
    registry.register("orphan", lambda: NT("missing"))
    return registry


class TestRuleGraph:
    def test_counts(self):
        graph = RuleGraph.from_registry(_registry())
        assert graph.rule_count() == 6
        assert graph.reference_count() == 8

    def test_unresolved(self):
        graph = RuleGraph.from_registry(_registry())
        assert graph.unresolved() == {"missing": ["c", "orphan"]}

    def test_recursive_rules(self):
        graph = RuleGraph.from_registry(_registry())
        assert graph.recursive_rules() == {"a", "b", "c"}
        assert not graph.is_acyclic()

    def test_acyclic(self):
        registry = RuleRegistry()
        registry.register("x", lambda: NT("y"))
        registry.register("y", lambda: T("y"))
        graph = RuleGraph.from_registry(registry)
        assert graph.is_acyclic()
        assert graph.recursive_rules() == set()

    def test_reachable_from(self):
        graph = RuleGraph.from_registry(_registry())
        assert graph.reachable_from("start") == {"start", "a", "atom", "b", "c"}
        assert graph.reachable_from("atom") == {"atom"}
        assert graph.reachable_from("nowhere") == set()

    def test_unreachable_from(self):
        graph = RuleGraph.from_registry(_registry())
        assert graph.unreachable_from(["start"]) == ["orphan"]

    def test_undefined_nodes_flagged(self):
        graph = RuleGraph.from_registry(_registry())
        assert graph.digraph.nodes["missing"]["defined"] is False
        assert graph.digraph.nodes["a"]["defined"] is True


class TestCheckGrammar:
    def test_report_without_sections(self):
        report = check_grammar(_registry())
        assert report.unresolved == {"missing": ["c", "orphan"]}
        assert report.missing_from_registry == {}
        assert not report.ok

    def test_report_with_sections(self):
        registry = RuleRegistry()
        registry.register("x", lambda: T("x"))
        registry.register("y", lambda: T("y"))
        sections = SectionIndex([Section("s", "S", ("x", "ghost"))])
        report = check_grammar(registry, sections)
        assert report.missing_from_registry == {"s": ["ghost"]}
        assert report.uncovered == ["y"]
        assert not report.ok

    def test_duplicates_reported_but_not_failing(self):
        registry = RuleRegistry()
        registry.register("x", lambda: T("x"))
        with pytest.warns(DuplicateRuleWarning):
            registry.register("x", lambda: T("x2"))
        report = check_grammar(registry)
        assert report.duplicates == ["x"]
        assert report.ok

    def test_lines(self):
        report = GrammarReport(
            unresolved={"missing": ["c"]},
            duplicates=["x"],
            missing_from_registry={"s": ["ghost"]},
            uncovered=["y", "z"],
        )
        assert report.lines() == [
            "unresolved reference 'missing' used by c",
            "duplicate definition of 'x'",
            "section 's' lists undefined rules: ghost",
            "rules in no section: y, z",
        ]

    def test_empty_report_ok(self):
        report = GrammarReport()
        assert report.ok
        assert report.lines() == []
