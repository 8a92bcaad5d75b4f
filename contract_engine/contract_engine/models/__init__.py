"""Domain models for contracts and verdicts."""

from contract_engine.models.contract import (
    AllowedValues,
    Contract,
    FieldType,
    MinItems,
    NoEmptyRows,
    OutputType,
    Regex,
    RequiredField,
    Rule,
    RuleKind,
    ValueType,
    parse_contract,
)
from contract_engine.models.verdict import (
    Verdict,
    VerdictStatus,
    Violation,
    failure_verdict,
)

__all__ = [
    "AllowedValues",
    "Contract",
    "FieldType",
    "MinItems",
    "NoEmptyRows",
    "OutputType",
    "Regex",
    "RequiredField",
    "Rule",
    "RuleKind",
    "ValueType",
    "Verdict",
    "VerdictStatus",
    "Violation",
    "failure_verdict",
    "parse_contract",
]
