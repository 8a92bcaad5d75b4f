"""Rule Engine -- evaluation of contract rules against generated output.

Quick start::

    from contract_engine.models import parse_contract
    from contract_engine.rules import verify
    from contract_engine.validation import validate_contract

    compiled = validate_contract(parse_contract(contract_text))
    verdict = verify(compiled, json.loads(output_text))
    print(verdict.status, len(verdict.violations))
"""

from contract_engine.rules.base import BaseRuleEvaluator, EvaluationContext
from contract_engine.rules.engine import (
    RuleEngine,
    check_output_type,
    create_default_engine,
    verify,
)
from contract_engine.rules.registry import RuleRegistry

__all__ = [
    "BaseRuleEvaluator",
    "EvaluationContext",
    "RuleEngine",
    "RuleRegistry",
    "check_output_type",
    "create_default_engine",
    "verify",
]
