"""Contract document schema.

A contract declares the expected top-level shape of a generated JSON
document and an ordered list of rules evaluated against it.  Parsing is
closed-world: unknown keys at any level, unknown rule tags, missing keys
and values of the wrong JSON kind all reject the whole document.

Example::

    {
      "name": "people",
      "version": 2,
      "inputs": ["prompt"],
      "output_type": "array",
      "rules": [
        {"rule": "required_field", "field": "id"},
        {"rule": "field_type", "field": "id", "expected": "number"},
        {"rule": "regex", "field": "email", "pattern": "@"},
        {"rule": "min_items", "value": 1},
        {"rule": "no_empty_rows"}
      ]
    }
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from contract_engine.errors import InvalidContract
from contract_engine.jsonio import loads_strict

logger = logging.getLogger(__name__)


class OutputType(str, Enum):
    """Required shape of the top-level output value."""

    OBJECT = "object"
    ARRAY = "array"


class ValueType(str, Enum):
    """The six JSON value kinds."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"


class RuleKind(str, Enum):
    """Machine tags used in the ``rule`` discriminator."""

    REQUIRED_FIELD = "required_field"
    FIELD_TYPE = "field_type"
    ALLOWED_VALUES = "allowed_values"
    REGEX = "regex"
    MIN_ITEMS = "min_items"
    NO_EMPTY_ROWS = "no_empty_rows"


class _StrictModel(BaseModel):
    """Base for contract models: no extra keys, no type coercion, immutable."""

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)


# ---------------------------------------------------------------------------
# Rule variants
# ---------------------------------------------------------------------------


class RequiredField(_StrictModel):
    """The object (or every row) must contain ``field``."""

    rule_name: ClassVar[str] = "RequiredField"

    rule: Literal["required_field"] = "required_field"
    field: str


class FieldType(_StrictModel):
    """``field`` must be present and hold a value of kind ``expected``."""

    rule_name: ClassVar[str] = "FieldType"

    rule: Literal["field_type"] = "field_type"
    field: str
    expected: ValueType


class AllowedValues(_StrictModel):
    """When present, ``field`` must deep-equal one of ``values``."""

    rule_name: ClassVar[str] = "AllowedValues"

    rule: Literal["allowed_values"] = "allowed_values"
    field: str
    values: list[Any]


class Regex(_StrictModel):
    """When present, ``field`` must be a string matched by ``pattern``.

    The pattern is searched for anywhere in the string; anchors must be
    written explicitly.
    """

    rule_name: ClassVar[str] = "Regex"

    rule: Literal["regex"] = "regex"
    field: str
    pattern: str


class MinItems(_StrictModel):
    """The top-level array must hold at least ``value`` items."""

    rule_name: ClassVar[str] = "MinItems"

    rule: Literal["min_items"] = "min_items"
    value: int = Field(..., ge=0)


class NoEmptyRows(_StrictModel):
    """No row of the top-level array may be empty."""

    rule_name: ClassVar[str] = "NoEmptyRows"

    rule: Literal["no_empty_rows"] = "no_empty_rows"


Rule = Annotated[
    Union[RequiredField, FieldType, AllowedValues, Regex, MinItems, NoEmptyRows],
    Field(discriminator="rule"),
]


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class Contract(_StrictModel):
    """A parsed contract document."""

    name: str | None = Field(default=None, description="Optional human-readable contract name.")
    version: int | None = Field(default=None, description="Optional contract revision number.")
    inputs: list[str] = Field(..., description="Declared generation inputs (informational only).")
    output_type: OutputType = Field(..., description="Required shape of the top-level output.")
    rules: list[Rule] = Field(..., description="Rules evaluated in declaration order.")

    def regex_rules(self) -> Iterator[tuple[int, Regex]]:
        """Yield ``(position, rule)`` for every regex rule, in order."""
        for position, rule in enumerate(self.rules):
            if isinstance(rule, Regex):
                yield position, rule

    @property
    def label(self) -> str:
        """Short identifier used in log messages."""
        if self.name is None:
            return "<unnamed>"
        if self.version is None:
            return self.name
        return f"{self.name}@v{self.version}"


def _format_validation_error(exc: ValidationError) -> str:
    """Collapse a pydantic error list into one line naming each location."""
    parts: list[str] = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def parse_contract(text: str | bytes) -> Contract:
    """Parse contract JSON text into a :class:`Contract`.

    Raises
    ------
    InvalidContract
        If the text is not well-formed JSON or does not match the schema.
    """
    try:
        loads_strict(text)
    except ValueError as exc:
        raise InvalidContract(str(exc)) from exc

    try:
        contract = Contract.model_validate_json(text)
    except ValidationError as exc:
        raise InvalidContract(_format_validation_error(exc)) from exc

    logger.debug("Parsed contract %s with %d rule(s)", contract.label, len(contract.rules))
    return contract
