"""Contract pre-validation.

Rejects contracts whose content cannot be expressed in the schema types
(currently: regex patterns that fail to compile) before verification.
"""

from contract_engine.validation.contract_validator import (
    CompiledContract,
    validate_contract,
)

__all__ = [
    "CompiledContract",
    "validate_contract",
]
