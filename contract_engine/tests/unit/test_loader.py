"""Unit tests for contract_engine.loader."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from contract_engine.errors import (
    ContractIOError,
    InvalidContract,
    InvalidContractRegex,
    InvalidOutput,
    RunInputError,
)
from contract_engine.loader import load_contract, load_output, parse_output, run
from contract_engine.models.verdict import VerdictStatus

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _write_json(path: Path, value: Any) -> Path:
    path.write_text(json.dumps(value, indent=2), encoding="utf-8")
    return path


@pytest.fixture()
def contract_path(tmp_path: Path) -> Path:
    return _write_json(
        tmp_path / "contract.json",
        {
            "inputs": ["prompt"],
            "output_type": "array",
            "rules": [
                {"rule": "required_field", "field": "id"},
                {"rule": "field_type", "field": "id", "expected": "number"},
                {"rule": "no_empty_rows"},
            ],
        },
    )


# ---------------------------------------------------------------------------
# parse_output
# ---------------------------------------------------------------------------


class TestParseOutput:
    def test_valid_json(self):
        assert parse_output('[{"id": 1, "x": 1.5}]') == [{"id": 1, "x": 1.5}]

    def test_scalar_document(self):
        assert parse_output("null") is None

    def test_malformed_json(self):
        with pytest.raises(InvalidOutput, match="Invalid output JSON"):
            parse_output("{not valid json")

    @pytest.mark.parametrize("text", ["NaN", "[Infinity]", '{"a": -Infinity}'])
    def test_non_standard_constants_rejected(self, text):
        with pytest.raises(InvalidOutput, match="non-standard"):
            parse_output(text)

    def test_out_of_range_number_rejected(self):
        with pytest.raises(InvalidOutput, match="out of range"):
            parse_output("[1e999]")

    @pytest.mark.parametrize("text", [r'[{"s": "\ud800"}]', r'{"\udfff": 1}', r'["a\ude00b"]'])
    def test_unpaired_surrogate_rejected(self, text):
        with pytest.raises(InvalidOutput, match="unpaired surrogate"):
            parse_output(text)

    def test_surrogate_pair_decoded(self):
        assert parse_output(r'["\ud83d\ude00"]') == ["\U0001f600"]

    def test_large_integer_kept_exact(self):
        assert parse_output("12345678901234567890") == 12345678901234567890


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------


class TestLoadFiles:
    def test_load_contract(self, contract_path: Path):
        assert len(load_contract(contract_path).rules) == 3

    def test_load_output(self, tmp_path: Path):
        assert load_output(_write_json(tmp_path / "out.json", {"a": 1})) == {"a": 1}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ContractIOError, match="I/O error"):
            load_output(tmp_path / "missing.json")

    def test_directory_is_io_error(self, tmp_path: Path):
        with pytest.raises(ContractIOError):
            load_contract(tmp_path)

    def test_non_utf8_is_io_error(self, tmp_path: Path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"name": "\xe9"}')
        with pytest.raises(ContractIOError):
            load_output(path)


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


class TestRun:
    def test_pass(self, tmp_path: Path, contract_path: Path):
        output = _write_json(tmp_path / "output.json", [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}])
        verdict = run(contract_path, output)
        assert verdict.status == VerdictStatus.PASS

    def test_violations(self, tmp_path: Path, contract_path: Path):
        output = _write_json(tmp_path / "output.json", [{"name": "Alice"}])
        verdict = run(contract_path, output)
        assert verdict.status == VerdictStatus.FAIL
        assert any(v.rule_name == "RequiredField" for v in verdict.violations)

    def test_contract_missing_rules(self, tmp_path: Path):
        contract = _write_json(tmp_path / "contract.json", {"inputs": ["prompt"], "output_type": "array"})
        output = _write_json(tmp_path / "output.json", [])
        with pytest.raises(InvalidContract):
            run(contract, output)

    def test_malformed_output(self, tmp_path: Path, contract_path: Path):
        output = tmp_path / "output.json"
        output.write_text("{not valid json", encoding="utf-8")
        with pytest.raises(InvalidOutput):
            run(contract_path, output)

    def test_missing_output_file(self, tmp_path: Path, contract_path: Path):
        with pytest.raises(RunInputError):
            run(contract_path, tmp_path / "missing_output.json")

    def test_bad_regex_even_when_never_reached(self, tmp_path: Path):
        contract = _write_json(
            tmp_path / "contract.json",
            {"inputs": [], "output_type": "array", "rules": [{"rule": "regex", "field": "a", "pattern": "[unclosed"}]},
        )
        output = _write_json(tmp_path / "output.json", [])
        with pytest.raises(InvalidContractRegex):
            run(contract, output)

    def test_contract_parsed_before_output(self, tmp_path: Path):
        contract = tmp_path / "contract.json"
        contract.write_text("{", encoding="utf-8")
        output = tmp_path / "output.json"
        output.write_text("{", encoding="utf-8")
        with pytest.raises(InvalidContract):
            run(contract, output)

    def test_output_parsed_before_regex_compilation(self, tmp_path: Path):
        contract = _write_json(
            tmp_path / "contract.json",
            {"inputs": [], "output_type": "array", "rules": [{"rule": "regex", "field": "a", "pattern": "("}]},
        )
        output = tmp_path / "output.json"
        output.write_text("nope", encoding="utf-8")
        with pytest.raises(InvalidOutput):
            run(contract, output)

    def test_files_read_before_parsing(self, tmp_path: Path):
        contract = tmp_path / "contract.json"
        contract.write_text("{", encoding="utf-8")
        with pytest.raises(ContractIOError):
            run(contract, tmp_path / "missing.json")
