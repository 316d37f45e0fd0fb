"""Rule graph: the registry's name -> name references as a networkx DiGraph.

Individual rule trees are acyclic, but the graph of references between rules
is not: left-recursive and mutually recursive rules show up here as cycles.
This module owns the integrity checks that need the whole graph at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import networkx as nx

from syntax_diagrams.model.nodes import references
from syntax_diagrams.model.registry import RuleRegistry

if TYPE_CHECKING:
    from syntax_diagrams.grammar.sections import SectionIndex


class RuleGraph:
    """Reference graph of a registry.

    Every registered rule is a node. An edge ``a -> b`` means rule ``a``
    contains ``NonTerminalRef(b)``. References to unregistered names are kept
    as nodes flagged ``defined=False``.
    """

    def __init__(self, digraph: nx.DiGraph) -> None:
        self.digraph = digraph

    @classmethod
    def from_registry(cls, registry: RuleRegistry) -> RuleGraph:
        digraph: nx.DiGraph = nx.DiGraph()
        for name in registry.names():
            digraph.add_node(name, defined=True)

        for name in registry.names():
            for target in references(registry.lookup(name)):
                if target not in digraph:
                    digraph.add_node(target, defined=False)
                digraph.add_edge(name, target)

        return cls(digraph)

    def rule_count(self) -> int:
        return sum(1 for _, defined in self.digraph.nodes(data="defined") if defined)

    def reference_count(self) -> int:
        return self.digraph.number_of_edges()

    def is_acyclic(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def unresolved(self) -> dict[str, list[str]]:
        """Undefined rule name -> sorted names of the rules referring to it."""
        result: dict[str, list[str]] = {}
        for name, defined in self.digraph.nodes(data="defined"):
            if not defined:
                result[name] = sorted(self.digraph.predecessors(name))
        return dict(sorted(result.items()))

    def recursive_rules(self) -> set[str]:
        """Rules that can reach themselves, directly or through other rules."""
        result: set[str] = set()
        for component in nx.strongly_connected_components(self.digraph):
            if len(component) > 1:
                result.update(component)
            else:
                (name,) = component
                if self.digraph.has_edge(name, name):
                    result.add(name)
        return result

    def reachable_from(self, name: str) -> set[str]:
        """Defined rules reachable from ``name``, ``name`` itself included."""
        if name not in self.digraph:
            return set()
        reached = nx.descendants(self.digraph, name) | {name}
        return {n for n in reached if self.digraph.nodes[n]["defined"]}

    def unreachable_from(self, starts: list[str]) -> list[str]:
        """Defined rules not reachable from any of ``starts``, in graph order."""
        reached: set[str] = set()
        for start in starts:
            reached |= self.reachable_from(start)
        return [n for n, defined in self.digraph.nodes(data="defined") if defined and n not in reached]


@dataclass
class GrammarReport:
    """Result of :func:`check_grammar`."""

    unresolved: dict[str, list[str]] = field(default_factory=dict)
    duplicates: list[str] = field(default_factory=list)
    missing_from_registry: dict[str, list[str]] = field(default_factory=dict)
    uncovered: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.unresolved and not self.missing_from_registry

    def lines(self) -> list[str]:
        out: list[str] = []
        for name, users in self.unresolved.items():
            out.append(f"unresolved reference '{name}' used by {', '.join(users)}")
        for name in self.duplicates:
            out.append(f"duplicate definition of '{name}'")
        for section, names in self.missing_from_registry.items():
            out.append(f"section '{section}' lists undefined rules: {', '.join(names)}")
        if self.uncovered:
            out.append(f"rules in no section: {', '.join(self.uncovered)}")
        return out


def check_grammar(registry: RuleRegistry, sections: SectionIndex | None = None) -> GrammarReport:
    """Run every data-integrity check over a populated registry."""
    graph = RuleGraph.from_registry(registry)
    report = GrammarReport(unresolved=graph.unresolved(), duplicates=registry.duplicates())
    if sections is not None:
        report.missing_from_registry = sections.missing_rules(registry)
        report.uncovered = sections.uncovered_rules(registry)
    return report
