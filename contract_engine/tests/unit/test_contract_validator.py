"""Unit tests for contract_engine.validation.contract_validator."""

from __future__ import annotations

import json
import re

import pytest

from contract_engine.errors import ContractError, InvalidContractRegex
from contract_engine.models.contract import Contract, parse_contract
from contract_engine.validation import CompiledContract, validate_contract


def _contract(rules: list[dict]) -> Contract:
    return parse_contract(json.dumps({"inputs": [], "output_type": "array", "rules": rules}))


class TestValidateContract:
    def test_no_regex_rules(self):
        compiled = validate_contract(_contract([{"rule": "required_field", "field": "id"}]))
        assert isinstance(compiled, CompiledContract)
        assert dict(compiled.patterns) == {}

    def test_patterns_keyed_by_position(self):
        compiled = validate_contract(
            _contract(
                [
                    {"rule": "required_field", "field": "id"},
                    {"rule": "regex", "field": "email", "pattern": "@"},
                    {"rule": "regex", "field": "code", "pattern": "^[A-Z]{3}$"},
                ]
            )
        )
        assert sorted(compiled.patterns) == [1, 2]
        assert compiled.pattern_for(1).pattern == "@"
        assert isinstance(compiled.pattern_for(2), re.Pattern)

    def test_patterns_are_read_only(self):
        compiled = validate_contract(_contract([{"rule": "regex", "field": "a", "pattern": "x"}]))
        with pytest.raises(TypeError):
            compiled.patterns[5] = re.compile("y")  # type: ignore[index]

    def test_pattern_for_non_regex_position(self):
        compiled = validate_contract(_contract([{"rule": "no_empty_rows"}]))
        with pytest.raises(LookupError):
            compiled.pattern_for(0)

    def test_keeps_contract(self):
        contract = _contract([])
        assert validate_contract(contract).contract is contract


class TestInvalidRegex:
    def test_uncompilable_pattern(self):
        with pytest.raises(InvalidContractRegex) as excinfo:
            validate_contract(_contract([{"rule": "regex", "field": "a", "pattern": "(unclosed"}]))
        err = excinfo.value
        assert err.pattern == "(unclosed"
        assert err.position == 0
        assert "Invalid contract regex" in str(err)
        assert "(unclosed" in str(err)

    def test_reports_first_bad_pattern_position(self):
        with pytest.raises(InvalidContractRegex) as excinfo:
            validate_contract(
                _contract(
                    [
                        {"rule": "regex", "field": "a", "pattern": "ok"},
                        {"rule": "no_empty_rows"},
                        {"rule": "regex", "field": "b", "pattern": "[z-a]"},
                    ]
                )
            )
        assert excinfo.value.position == 2

    def test_is_a_contract_error(self):
        with pytest.raises(ContractError):
            validate_contract(_contract([{"rule": "regex", "field": "a", "pattern": "*"}]))
