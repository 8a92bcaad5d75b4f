"""Evaluators for rules that address a named field.

All four share one row/object dispatch policy:

* a top-level object is checked once, with no row index;
* a top-level array is checked row by row, and a row that is not an
  object yields a single "not an object" violation for that rule;
* any other top-level value yields one violation saying the output must
  be an object or an array of objects.

Field presence is handled differently per rule:

* ``required_field`` -- absence is the violation.
* ``field_type`` -- absence is its own "missing field for type check"
  violation.
* ``allowed_values`` and ``regex`` -- absence is not a violation; these
  rules only constrain a value that is present.
"""

from __future__ import annotations

import abc
from typing import Any

from contract_engine.models.contract import (
    AllowedValues,
    FieldType,
    Regex,
    RequiredField,
    RuleKind,
)
from contract_engine.models.verdict import Violation
from contract_engine.rules.base import BaseRuleEvaluator, EvaluationContext
from contract_engine.values import detect_value_type, json_equal


def _field_location(field: str, row_index: int | None) -> str:
    if row_index is None:
        return f"Field '{field}'"
    return f"Row {row_index} field '{field}'"


class FieldRuleEvaluator(BaseRuleEvaluator):
    """Shared dispatch for rules evaluated against objects or rows."""

    def evaluate(self, rule: Any, output: Any, context: EvaluationContext) -> list[Violation]:
        if isinstance(output, dict):
            return self.check_object(rule, output, None, context)

        if isinstance(output, list):
            violations: list[Violation] = []
            for idx, row in enumerate(output):
                if isinstance(row, dict):
                    violations.extend(self.check_object(rule, row, idx, context))
                else:
                    violations.append(self.violation(rule, f"Row {idx} is not an object.", row_index=idx))
            return violations

        return [self.violation(rule, "Output must be an object or an array of objects.")]

    @abc.abstractmethod
    def check_object(
        self,
        rule: Any,
        obj: dict[str, Any],
        row_index: int | None,
        context: EvaluationContext,
    ) -> list[Violation]:
        """Check one object; *row_index* is ``None`` for a top-level object."""

    @staticmethod
    def violation(rule: Any, detail: str, **extra: Any) -> Violation:
        """Build a field-scoped violation.

        ``expected``/``actual`` are only set when passed in *extra*, so an
        explicit ``None`` still marks them as populated.
        """
        return Violation(
            rule_name=rule.rule_name,
            detail=detail,
            field=rule.field,
            rule=rule.rule,
            **extra,
        )


class RequiredFieldEvaluator(FieldRuleEvaluator):
    """``required_field``: the key must exist."""

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.REQUIRED_FIELD

    def check_object(
        self,
        rule: RequiredField,
        obj: dict[str, Any],
        row_index: int | None,
        context: EvaluationContext,
    ) -> list[Violation]:
        if rule.field in obj:
            return []
        if row_index is None:
            detail = f"Missing required field '{rule.field}'."
        else:
            detail = f"Row {row_index} is missing required field '{rule.field}'."
        return [self.violation(rule, detail, row_index=row_index)]


class FieldTypeEvaluator(FieldRuleEvaluator):
    """``field_type``: the key must exist and hold the expected JSON kind."""

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.FIELD_TYPE

    def check_object(
        self,
        rule: FieldType,
        obj: dict[str, Any],
        row_index: int | None,
        context: EvaluationContext,
    ) -> list[Violation]:
        expected = rule.expected.value

        if rule.field not in obj:
            location = "Object" if row_index is None else f"Row {row_index}"
            return [
                self.violation(
                    rule,
                    f"{location} is missing field '{rule.field}' for type check.",
                    expected=expected,
                    row_index=row_index,
                )
            ]

        detected = detect_value_type(obj[rule.field])
        if detected == rule.expected:
            return []

        return [
            self.violation(
                rule,
                f"{_field_location(rule.field, row_index)} expected type '{expected}', got '{detected.value}'.",
                expected=expected,
                actual=detected.value,
                row_index=row_index,
            )
        ]


class AllowedValuesEvaluator(FieldRuleEvaluator):
    """``allowed_values``: a present value must deep-equal one entry."""

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.ALLOWED_VALUES

    def check_object(
        self,
        rule: AllowedValues,
        obj: dict[str, Any],
        row_index: int | None,
        context: EvaluationContext,
    ) -> list[Violation]:
        if rule.field not in obj:
            return []

        actual = obj[rule.field]
        if any(json_equal(allowed, actual) for allowed in rule.values):
            return []

        return [
            self.violation(
                rule,
                f"{_field_location(rule.field, row_index)} has a disallowed value.",
                expected=list(rule.values),
                actual=actual,
                row_index=row_index,
            )
        ]


class RegexEvaluator(FieldRuleEvaluator):
    """``regex``: a present value must be a string the pattern matches.

    Uses the pattern compiled during contract validation; matching is a
    search, so the pattern is not anchored implicitly.
    """

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.REGEX

    def check_object(
        self,
        rule: Regex,
        obj: dict[str, Any],
        row_index: int | None,
        context: EvaluationContext,
    ) -> list[Violation]:
        if rule.field not in obj:
            return []

        actual = obj[rule.field]
        location = _field_location(rule.field, row_index)

        if not isinstance(actual, str):
            detail = f"{location} must be a string for regex rule."
        elif context.compiled.pattern_for(context.position).search(actual) is None:
            detail = f"{location} does not match regex pattern."
        else:
            return []

        return [
            self.violation(
                rule,
                detail,
                expected=rule.pattern,
                actual=actual,
                row_index=row_index,
            )
        ]
