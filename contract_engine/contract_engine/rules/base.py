"""Abstract base class for rule evaluators.

Each rule kind in a contract is evaluated by exactly one subclass of
:class:`BaseRuleEvaluator`, registered with the
:class:`~contract_engine.rules.registry.RuleRegistry`.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any

from contract_engine.models.contract import Rule, RuleKind
from contract_engine.models.verdict import Violation
from contract_engine.validation.contract_validator import CompiledContract


@dataclass(frozen=True)
class EvaluationContext:
    """Where a rule sits in the contract being evaluated."""

    compiled: CompiledContract
    position: int


class BaseRuleEvaluator(abc.ABC):
    """Abstract base for all rule evaluators.

    Evaluators are stateless; everything a rule needs arrives through its
    arguments.  They never raise for well-formed input: every problem in
    the output is reported as a :class:`Violation`.
    """

    @property
    @abc.abstractmethod
    def rule_kind(self) -> RuleKind:
        """The rule tag this evaluator handles."""

    @abc.abstractmethod
    def evaluate(self, rule: Rule, output: Any, context: EvaluationContext) -> list[Violation]:
        """Evaluate *rule* against the whole *output* value.

        Parameters
        ----------
        rule:
            The rule to evaluate; always of this evaluator's kind.
        output:
            The complete top-level output value, whatever its shape.
        context:
            The compiled contract and the rule's position within it.

        Returns
        -------
        list[Violation]
            Violations in row order; empty when the rule is satisfied.
        """
