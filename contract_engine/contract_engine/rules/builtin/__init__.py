"""Built-in evaluators, one per rule kind."""

from contract_engine.rules.builtin.array_rules import MinItemsEvaluator, NoEmptyRowsEvaluator
from contract_engine.rules.builtin.field_rules import (
    AllowedValuesEvaluator,
    FieldRuleEvaluator,
    FieldTypeEvaluator,
    RegexEvaluator,
    RequiredFieldEvaluator,
)

__all__ = [
    "AllowedValuesEvaluator",
    "FieldRuleEvaluator",
    "FieldTypeEvaluator",
    "MinItemsEvaluator",
    "NoEmptyRowsEvaluator",
    "RegexEvaluator",
    "RequiredFieldEvaluator",
]
