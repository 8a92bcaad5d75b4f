"""Rule evaluator registry.

Maps each :class:`RuleKind` to the evaluator that implements it.  The
:class:`RuleEngine` resolves every rule of a contract through this
registry, so adding a rule kind means adding a variant to the contract
schema and registering one evaluator here.
"""

from __future__ import annotations

import logging

from contract_engine.models.contract import RuleKind
from contract_engine.rules.base import BaseRuleEvaluator

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Registry of rule evaluators keyed by rule kind."""

    def __init__(self) -> None:
        self._evaluators: dict[RuleKind, BaseRuleEvaluator] = {}

    def register(self, evaluator: BaseRuleEvaluator) -> None:
        """Register an evaluator under its ``rule_kind``.

        Raises
        ------
        ValueError
            If an evaluator for the same kind is already registered.
        """
        if evaluator.rule_kind in self._evaluators:
            raise ValueError(
                f"Rule kind {evaluator.rule_kind.value} is already registered. "
                f"Unregister the existing evaluator first."
            )
        self._evaluators[evaluator.rule_kind] = evaluator
        logger.debug("Registered rule evaluator: %s", evaluator.rule_kind.value)

    def unregister(self, rule_kind: RuleKind) -> None:
        """Remove the evaluator for *rule_kind*.

        Raises
        ------
        KeyError
            If the kind is not registered.
        """
        if rule_kind not in self._evaluators:
            raise KeyError(f"Rule kind {rule_kind.value} is not registered.")
        del self._evaluators[rule_kind]
        logger.debug("Unregistered rule evaluator: %s", rule_kind.value)

    def get(self, rule_kind: RuleKind) -> BaseRuleEvaluator | None:
        """Look up an evaluator; ``None`` when the kind is not registered."""
        return self._evaluators.get(rule_kind)

    def get_kinds(self) -> list[RuleKind]:
        """Return all registered rule kinds, sorted."""
        return sorted(self._evaluators.keys(), key=lambda kind: kind.value)

    def missing_kinds(self) -> list[RuleKind]:
        """Return the rule kinds that have no evaluator, sorted."""
        return sorted((k for k in RuleKind if k not in self._evaluators), key=lambda kind: kind.value)

    def __len__(self) -> int:
        return len(self._evaluators)

    def __contains__(self, rule_kind: RuleKind) -> bool:
        return rule_kind in self._evaluators
