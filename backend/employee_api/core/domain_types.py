"""Domain Types — rich types that replace bare primitives in the request pipeline.

Invariants:
    - MISSING means "key not supplied"; None means "supplied but empty/null"
    - Unparseable wraps raw input that could not be coerced; it never raises
    - ValidationResult.is_valid is True iff errors is empty
    - to_money() is the single rounding rule for salaries: validation, storage
      and rendering all see the same two-place amount
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EmployeeId = NewType("EmployeeId", int)


# ─── Money ───────────────────────────────────────────────────────

CENTS = Decimal("0.01")


def to_money(amount: Decimal) -> Decimal:
    """Round to whole cents (ROUND_HALF_UP), the precision salaries are stored at."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


# ─── Markers ─────────────────────────────────────────────────────

class Missing(Enum):
    """Sentinel type for a field that was not present in the input."""
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = Missing.MISSING


@dataclass(frozen=True)
class Unparseable:
    """Raw input value that could not be coerced to the field's type."""
    raw: object


# ─── Verdicts ────────────────────────────────────────────────────

@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a request DTO; errors keep check order."""
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
