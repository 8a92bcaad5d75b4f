"""Verdict and violation models.

A :class:`Verdict` is the aggregate outcome of one verification: its
status is a pure function of the accumulated violations, which keep the
order in which they were produced (output-type check, then rules in
declaration order, then rows in index order).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class VerdictStatus(str, Enum):
    """Outcome of a verification."""

    PASS = "pass"
    FAIL = "fail"


class Violation(BaseModel):
    """One concrete failure of a rule against a location in the output.

    ``expected`` and ``actual`` count as populated whenever they were
    passed explicitly, including an explicit ``None`` (JSON ``null``).
    """

    rule_name: str = Field(..., description="Display name of the failed check, e.g. RequiredField.")
    detail: str = Field(..., description="Human-readable description of the failure.")
    field: str | None = Field(default=None, description="Field the rule addresses, when field-scoped.")
    rule: str | None = Field(default=None, description="Machine tag of the rule, when field-scoped.")
    expected: Any = Field(default=None, description="Value the rule required, when one exists.")
    actual: Any = Field(default=None, description="Value found in the output, when one exists.")
    row_index: int | None = Field(default=None, description="Row of a top-level array, when row-scoped.")

    @property
    def has_expected(self) -> bool:
        return "expected" in self.model_fields_set

    @property
    def has_actual(self) -> bool:
        return "actual" in self.model_fields_set

    def to_public(self) -> dict[str, Any]:
        """Return the wire representation of this violation."""
        public: dict[str, Any] = {
            "rule": self.rule if self.rule is not None else self.rule_name,
            "field": self.field or "",
            "message": self.detail,
        }
        if self.has_expected:
            public["expected"] = self.expected
        if self.has_actual:
            public["actual"] = self.actual
        return public


class Verdict(BaseModel):
    """Pass/fail result plus the ordered violations of one verification."""

    status: VerdictStatus = Field(..., description="PASS iff there are no violations.")
    violations: list[Violation] = Field(default_factory=list, description="Violations in evaluation order.")

    @property
    def passed(self) -> bool:
        return self.status == VerdictStatus.PASS

    @staticmethod
    def from_violations(violations: list[Violation]) -> Verdict:
        """Build a verdict; the order of *violations* is kept as-is."""
        status = VerdictStatus.FAIL if violations else VerdictStatus.PASS
        return Verdict(status=status, violations=list(violations))

    def to_public(self) -> dict[str, Any]:
        """Return the wire document emitted to callers."""
        return {
            "status": self.status.value,
            "violations": [v.to_public() for v in self.violations],
        }


def failure_verdict(rule_name: str, detail: str) -> Verdict:
    """Build a forced-fail verdict carrying one synthetic violation.

    Used on error paths where no rule evaluation took place.
    """
    return Verdict(
        status=VerdictStatus.FAIL,
        violations=[Violation(rule_name=rule_name, detail=detail)],
    )
