"""Rule registry: rule name -> zero-argument producer of an expression tree.

Producers are invoked on every lookup so each caller gets a fresh tree.
The registry is populated once (see ``syntax_diagrams.grammar.python.init``)
and only read afterwards.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable, Iterator

from syntax_diagrams.errors import DuplicateRuleWarning, InvalidGrammarError, UnknownRuleError
from syntax_diagrams.model.nodes import ExpressionNode

logger = logging.getLogger(__name__)

RuleProducer = Callable[[], ExpressionNode]


class RuleRegistry:
    """Mapping from rule name to producer, iterated in registration order."""

    def __init__(self) -> None:
        self._producers: dict[str, RuleProducer] = {}
        self._duplicates: list[str] = []

    def register(self, name: str, producer: RuleProducer) -> None:
        """Insert or overwrite the producer for ``name``.

        Overwriting keeps the rule's original position in ``names()`` and
        emits a DuplicateRuleWarning, since a second definition is almost
        always a transcription mistake.
        """
        if not isinstance(name, str) or not name:
            raise InvalidGrammarError(f"rule name must be a non-empty string, got {name!r}")
        if not callable(producer):
            raise InvalidGrammarError(f"producer for rule '{name}' is not callable")

        if name in self._producers:
            self._duplicates.append(name)
            logger.warning("rule '%s' registered more than once; latest definition wins", name)
            warnings.warn(
                f"rule '{name}' registered more than once; latest definition wins",
                DuplicateRuleWarning,
                stacklevel=2,
            )
        else:
            logger.debug("registered rule '%s'", name)

        # Replace rather than mutate so concurrent readers see a whole table.
        producers = dict(self._producers)
        producers[name] = producer
        self._producers = producers

    def rule(self, name: str) -> Callable[[RuleProducer], RuleProducer]:
        """Decorator form of :meth:`register`."""

        def decorator(producer: RuleProducer) -> RuleProducer:
            self.register(name, producer)
            return producer

        return decorator

    def lookup(self, name: str) -> ExpressionNode:
        """Build and return a fresh tree for ``name``.

        Raises:
            UnknownRuleError: If ``name`` is not registered.
            InvalidGrammarError: If the producer does not return an expression node.
        """
        producer = self._producers.get(name)
        if producer is None:
            raise UnknownRuleError(name)
        tree = producer()
        if not isinstance(tree, ExpressionNode):
            raise InvalidGrammarError(f"producer for rule '{name}' returned {tree!r}")
        return tree

    def names(self) -> list[str]:
        return list(self._producers)

    def has(self, name: str) -> bool:
        return name in self._producers

    def duplicates(self) -> list[str]:
        """Names that were registered more than once, one entry per extra registration."""
        return list(self._duplicates)

    def __contains__(self, name: object) -> bool:
        return name in self._producers

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._producers)
