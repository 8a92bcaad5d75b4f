"""Load contract and output documents from disk and verify them.

:func:`run` performs the whole pipeline in a fixed order so that the
first failing stage determines the error kind:

1. read both files (:class:`ContractIOError`);
2. parse the contract (:class:`InvalidContract`);
3. parse the output (:class:`InvalidOutput`);
4. compile regex patterns (:class:`InvalidContractRegex`);
5. evaluate the rules.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from contract_engine.errors import ContractIOError, InvalidOutput
from contract_engine.jsonio import loads_strict
from contract_engine.models.contract import Contract, parse_contract
from contract_engine.models.verdict import Verdict
from contract_engine.rules.engine import verify
from contract_engine.validation.contract_validator import validate_contract

logger = logging.getLogger(__name__)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContractIOError(f"{path}: {exc}") from exc


def parse_output(text: str) -> Any:
    """Parse output JSON text into a generic JSON value.

    ``NaN``, ``Infinity`` and ``-Infinity`` are not JSON and are rejected,
    as are numbers too large to represent as a finite float and strings
    holding an unpaired surrogate escape.

    Raises
    ------
    InvalidOutput
        If *text* is not well-formed JSON.
    """
    try:
        return loads_strict(text)
    except ValueError as exc:
        raise InvalidOutput(str(exc)) from exc


def load_contract(path: Path) -> Contract:
    """Read and parse the contract at *path*."""
    return parse_contract(_read_text(path))


def load_output(path: Path) -> Any:
    """Read and parse the output document at *path*."""
    return parse_output(_read_text(path))


def run(contract_path: Path, output_path: Path) -> Verdict:
    """Verify the output document at *output_path* against a contract file.

    Raises
    ------
    ContractIOError
        If either file cannot be read.
    InvalidContract
        If the contract is malformed.
    InvalidOutput
        If the output is not well-formed JSON.
    InvalidContractRegex
        If a regex rule pattern does not compile.
    """
    contract_text = _read_text(contract_path)
    output_text = _read_text(output_path)

    contract = parse_contract(contract_text)
    output = parse_output(output_text)
    compiled = validate_contract(contract)

    logger.info(
        "Verifying %s against contract %s (%d rule(s))",
        output_path,
        contract.label,
        len(contract.rules),
    )
    return verify(compiled, output)
