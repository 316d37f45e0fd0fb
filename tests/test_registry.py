"""Tests for syntax_diagrams.model.registry: registration, lookup, duplicates."""

import logging
import warnings

import pytest

from syntax_diagrams.errors import DuplicateRuleWarning, GrammarError, InvalidGrammarError, UnknownRuleError
from syntax_diagrams.model.nodes import K, NT, Terminal, choice
from syntax_diagrams.model.registry import RuleRegistry


def _registry(**producers) -> RuleRegistry:
    registry = RuleRegistry()
    for name, producer in producers.items():
        registry.register(name, producer)
    return registry


class TestLookup:
    def test_pass_stmt_round_trip(self):
        registry = _registry(pass_stmt=lambda: Terminal("pass"))
        tree = registry.lookup("pass_stmt")
        assert isinstance(tree, Terminal)
        assert tree.text == "pass"

    def test_unknown_rule_raises(self):
        registry = RuleRegistry()
        with pytest.raises(UnknownRuleError) as exc_info:
            registry.lookup("nope")
        assert exc_info.value.name == "nope"
        assert "no definition for rule 'nope'" in str(exc_info.value)

    def test_unknown_rule_error_hierarchy(self):
        registry = RuleRegistry()
        with pytest.raises(KeyError):
            registry.lookup("nope")
        with pytest.raises(GrammarError):
            registry.lookup("nope")

    def test_each_lookup_builds_fresh_tree(self):
        calls = []

        def producer():
            calls.append(1)
            return choice(K("break"), NT("x"))

        registry = _registry(rule=producer)
        assert registry.lookup("rule") == registry.lookup("rule")
        assert len(calls) == 2

    def test_producer_must_return_node(self):
        registry = _registry(bad=lambda: "pass")
        with pytest.raises(InvalidGrammarError):
            registry.lookup("bad")


class TestRegister:
    def test_names_in_registration_order(self):
        registry = _registry(b=lambda: Terminal("b"), a=lambda: Terminal("a"))
        assert registry.names() == ["b", "a"]
        assert list(registry) == ["b", "a"]
        assert len(registry) == 2

    def test_has_and_contains(self):
        registry = _registry(a=lambda: Terminal("a"))
        assert registry.has("a")
        assert "a" in registry
        assert not registry.has("b")
        assert "b" not in registry

    def test_empty_name_rejected(self):
        with pytest.raises(InvalidGrammarError):
            RuleRegistry().register("", lambda: Terminal("x"))

    def test_non_callable_producer_rejected(self):
        with pytest.raises(InvalidGrammarError):
            RuleRegistry().register("x", Terminal("x"))  # type: ignore[arg-type]

    def test_decorator(self):
        registry = RuleRegistry()

        @registry.rule("del_stmt")
        def del_stmt():
            return K("del")

        assert registry.lookup("del_stmt") == K("del")
        assert del_stmt() == K("del")

    def test_no_warning_for_distinct_names(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            _registry(a=lambda: Terminal("a"), b=lambda: Terminal("b"))


class TestDuplicates:
    def test_last_write_wins_with_one_warning(self):
        registry = RuleRegistry()
        registry.register("x", lambda: Terminal("first"))
        with pytest.warns(DuplicateRuleWarning) as record:
            registry.register("x", lambda: Terminal("second"))
        assert len(record) == 1
        assert registry.lookup("x") == Terminal("second")

    def test_overwrite_keeps_position(self):
        registry = _registry(x=lambda: Terminal("1"), y=lambda: Terminal("2"))
        with pytest.warns(DuplicateRuleWarning):
            registry.register("x", lambda: Terminal("3"))
        assert registry.names() == ["x", "y"]
        assert len(registry) == 2

    def test_duplicates_recorded(self):
        registry = RuleRegistry()
        registry.register("x", lambda: Terminal("1"))
        with pytest.warns(DuplicateRuleWarning):
            registry.register("x", lambda: Terminal("2"))
            registry.register("x", lambda: Terminal("3"))
        assert registry.duplicates() == ["x", "x"]

    def test_duplicate_logged(self, caplog):
        registry = RuleRegistry()
        registry.register("x", lambda: Terminal("1"))
        with caplog.at_level(logging.WARNING, logger="syntax_diagrams.model.registry"):
            with pytest.warns(DuplicateRuleWarning):
                registry.register("x", lambda: Terminal("2"))
        assert "rule 'x' registered more than once" in caplog.text

    def test_old_table_unchanged_by_overwrite(self):
        registry = _registry(x=lambda: Terminal("1"))
        before = registry._producers
        with pytest.warns(DuplicateRuleWarning):
            registry.register("x", lambda: Terminal("2"))
        assert before["x"]() == Terminal("1")
        assert registry.lookup("x") == Terminal("2")
