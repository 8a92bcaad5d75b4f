"""Exception hierarchy for contract loading and verification.

Every fatal condition is detected before rule evaluation starts, so these
exceptions never carry a partial verdict.  The CLI maps the two families
onto process exit codes:

* :class:`ContractError` -- the contract itself is unusable (exit 2).
* :class:`RunInputError` -- the output document or a file is unusable (exit 3).
"""

from __future__ import annotations


class ContractEngineError(Exception):
    """Base class for all contract engine failures."""


class ContractError(ContractEngineError):
    """The contract document cannot be used for verification."""


class InvalidContract(ContractError):
    """The contract text is malformed or does not match the contract schema."""

    def __str__(self) -> str:
        return f"Invalid contract JSON: {self.args[0] if self.args else ''}"


class InvalidContractRegex(ContractError):
    """A ``regex`` rule carries a pattern that does not compile."""

    def __init__(self, pattern: str, position: int, reason: str) -> None:
        super().__init__(pattern, position, reason)
        self.pattern = pattern
        self.position = position
        self.reason = reason

    def __str__(self) -> str:
        return f"Invalid contract regex: rule {self.position} pattern '{self.pattern}': {self.reason}"


class RunInputError(ContractEngineError):
    """A verification input other than the contract could not be used."""


class InvalidOutput(RunInputError):
    """The output document is not well-formed JSON."""

    def __str__(self) -> str:
        return f"Invalid output JSON: {self.args[0] if self.args else ''}"


class ContractIOError(RunInputError):
    """Reading the contract or output source failed."""

    def __str__(self) -> str:
        return f"I/O error: {self.args[0] if self.args else ''}"
