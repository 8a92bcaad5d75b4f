"""Evaluators for rules that apply only to a top-level array.

When the output is not an array each rule reports a single violation
stating the array requirement; rows are never iterated in that case.
"""

from __future__ import annotations

from typing import Any

from contract_engine.models.contract import MinItems, NoEmptyRows, RuleKind
from contract_engine.models.verdict import Violation
from contract_engine.rules.base import BaseRuleEvaluator, EvaluationContext
from contract_engine.values import detect_value_type, is_empty_row

# MinItems violations address the document root.
_ROOT_FIELD = "$"


class MinItemsEvaluator(BaseRuleEvaluator):
    """``min_items``: the array length must be at least ``value``."""

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.MIN_ITEMS

    def evaluate(self, rule: MinItems, output: Any, context: EvaluationContext) -> list[Violation]:
        if not isinstance(output, list):
            return [
                self._violation(
                    rule,
                    "MinItems requires top-level array output.",
                    actual=detect_value_type(output).value,
                )
            ]

        found = len(output)
        if found >= rule.value:
            return []
        return [
            self._violation(
                rule,
                f"Top-level array must contain at least {rule.value} items, found {found}.",
                actual=found,
            )
        ]

    @staticmethod
    def _violation(rule: MinItems, detail: str, *, actual: Any) -> Violation:
        return Violation(
            rule_name=rule.rule_name,
            detail=detail,
            field=_ROOT_FIELD,
            rule=rule.rule,
            expected=rule.value,
            actual=actual,
        )


class NoEmptyRowsEvaluator(BaseRuleEvaluator):
    """``no_empty_rows``: every row must be an object with some content."""

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.NO_EMPTY_ROWS

    def evaluate(self, rule: NoEmptyRows, output: Any, context: EvaluationContext) -> list[Violation]:
        if not isinstance(output, list):
            return [Violation(rule_name=rule.rule_name, detail="NoEmptyRows requires top-level array output.")]

        violations: list[Violation] = []
        for idx, row in enumerate(output):
            if not isinstance(row, dict):
                detail = f"Row {idx} is not an object."
            elif is_empty_row(row):
                detail = f"Row {idx} is empty."
            else:
                continue
            violations.append(Violation(rule_name=rule.rule_name, detail=detail, row_index=idx))
        return violations
