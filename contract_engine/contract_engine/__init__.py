"""Contract engine -- verify generated JSON output against declared contracts."""

from contract_engine.errors import (
    ContractEngineError,
    ContractError,
    ContractIOError,
    InvalidContract,
    InvalidContractRegex,
    InvalidOutput,
    RunInputError,
)
from contract_engine.loader import load_contract, load_output, parse_output, run
from contract_engine.models import Contract, Verdict, VerdictStatus, Violation, parse_contract
from contract_engine.rules import verify
from contract_engine.validation import CompiledContract, validate_contract

__version__ = "0.4.0"

__all__ = [
    "CompiledContract",
    "Contract",
    "ContractEngineError",
    "ContractError",
    "ContractIOError",
    "InvalidContract",
    "InvalidContractRegex",
    "InvalidOutput",
    "RunInputError",
    "Verdict",
    "VerdictStatus",
    "Violation",
    "load_contract",
    "load_output",
    "parse_contract",
    "parse_output",
    "run",
    "validate_contract",
    "verify",
]
