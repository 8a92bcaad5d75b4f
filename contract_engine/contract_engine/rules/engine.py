"""Rule Engine -- evaluates a compiled contract against an output value.

The :class:`RuleEngine` checks the top-level shape, then dispatches every
rule, in declaration order, to its registered evaluator against the whole
output value, and assembles the violations into a :class:`Verdict`.
Evaluation is a pure function of its inputs: no I/O, no shared mutable
state, identical inputs give identical verdicts.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from contract_engine.models.contract import Contract, OutputType, RuleKind
from contract_engine.models.verdict import Verdict, Violation
from contract_engine.rules.base import BaseRuleEvaluator, EvaluationContext
from contract_engine.rules.registry import RuleRegistry
from contract_engine.validation.contract_validator import CompiledContract, validate_contract

logger = logging.getLogger(__name__)

_OUTPUT_TYPE_RULE_NAME = "OutputType"


def check_output_type(output_type: OutputType, output: Any) -> list[Violation]:
    """Return one ``OutputType`` violation when the top-level shape is wrong."""
    if output_type == OutputType.OBJECT and not isinstance(output, dict):
        return [Violation(rule_name=_OUTPUT_TYPE_RULE_NAME, detail="Expected top-level JSON object.")]
    if output_type == OutputType.ARRAY and not isinstance(output, list):
        return [Violation(rule_name=_OUTPUT_TYPE_RULE_NAME, detail="Expected top-level JSON array.")]
    return []


class RuleEngine:
    """Orchestrator that evaluates contracts through a :class:`RuleRegistry`.

    Parameters
    ----------
    registry:
        Optional pre-configured registry.  When ``None``, a new empty
        registry is created.
    """

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self._registry = registry or RuleRegistry()

    @property
    def registry(self) -> RuleRegistry:
        """The evaluator registry backing this engine."""
        return self._registry

    def register(self, evaluator: BaseRuleEvaluator) -> None:
        """Register an evaluator with the engine."""
        self._registry.register(evaluator)

    def verify(self, contract: Contract | CompiledContract, output: Any) -> Verdict:
        """Evaluate *contract* against *output* and return the verdict.

        Parameters
        ----------
        contract:
            A compiled contract, or a parsed contract which is validated
            (and its patterns compiled) first.
        output:
            The generic JSON value to check.

        Raises
        ------
        InvalidContractRegex
            Only when given an uncompiled contract with a bad pattern.
        LookupError
            If a rule kind has no registered evaluator.
        """
        compiled = contract if isinstance(contract, CompiledContract) else validate_contract(contract)
        parsed = compiled.contract

        violations = check_output_type(parsed.output_type, output)

        for position, rule in enumerate(parsed.rules):
            kind = RuleKind(rule.rule)
            evaluator = self._registry.get(kind)
            if evaluator is None:
                raise LookupError(f"No evaluator registered for rule kind {kind.value}.")

            found = evaluator.evaluate(rule, output, EvaluationContext(compiled=compiled, position=position))
            logger.debug("Rule %d (%s) produced %d violation(s)", position, kind.value, len(found))
            violations.extend(found)

        verdict = Verdict.from_violations(violations)
        logger.debug(
            "Contract %s verdict: %s (%d violation(s))",
            parsed.label,
            verdict.status.value,
            len(verdict.violations),
        )
        return verdict


def create_default_engine() -> RuleEngine:
    """Create a :class:`RuleEngine` with every built-in evaluator registered."""
    from contract_engine.rules.builtin import (
        AllowedValuesEvaluator,
        FieldTypeEvaluator,
        MinItemsEvaluator,
        NoEmptyRowsEvaluator,
        RegexEvaluator,
        RequiredFieldEvaluator,
    )

    engine = RuleEngine()
    engine.register(RequiredFieldEvaluator())
    engine.register(FieldTypeEvaluator())
    engine.register(AllowedValuesEvaluator())
    engine.register(RegexEvaluator())
    engine.register(MinItemsEvaluator())
    engine.register(NoEmptyRowsEvaluator())
    return engine


@lru_cache(maxsize=1)
def _default_engine() -> RuleEngine:
    return create_default_engine()


def verify(contract: Contract | CompiledContract, output: Any) -> Verdict:
    """Evaluate *contract* against *output* with the default engine."""
    return _default_engine().verify(contract, output)
