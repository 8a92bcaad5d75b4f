"""Semantic validation of parsed contracts.

Runs after parsing and before any output is examined.  Structural
problems are caught by the contract schema; this pass rejects contracts
that are well-typed but unusable.  Currently that means regex patterns
that do not compile, which are reported with their own error kind so
that operators can tell a malformed pattern from malformed contract JSON.

Every pattern is compiled exactly once here and the compiled form is
kept on the :class:`CompiledContract`, keyed by rule position, for reuse
during evaluation.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from contract_engine.errors import InvalidContractRegex
from contract_engine.models.contract import Contract

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledContract:
    """A contract that passed semantic validation.

    Immutable and safe to share between threads: compiled patterns are
    never modified after compilation.
    """

    contract: Contract
    patterns: Mapping[int, re.Pattern[str]] = field(default_factory=lambda: MappingProxyType({}))

    def pattern_for(self, position: int) -> re.Pattern[str]:
        """Return the compiled pattern of the regex rule at *position*."""
        try:
            return self.patterns[position]
        except KeyError:
            raise LookupError(f"Rule {position} is not a compiled regex rule.") from None


def validate_contract(contract: Contract) -> CompiledContract:
    """Validate *contract* and compile its regex patterns.

    Raises
    ------
    InvalidContractRegex
        If any ``regex`` rule's pattern fails to compile, whether or not
        an output would ever reach that rule.
    """
    compiled: dict[int, re.Pattern[str]] = {}
    for position, rule in contract.regex_rules():
        try:
            compiled[position] = re.compile(rule.pattern)
        except re.error as exc:
            logger.debug("Rule %d pattern %r failed to compile: %s", position, rule.pattern, exc)
            raise InvalidContractRegex(rule.pattern, position, str(exc)) from exc

    return CompiledContract(contract=contract, patterns=MappingProxyType(compiled))
