"""Employee Request DTOs — sanitization and field-level validation of raw input.

Invariants:
    - Construction never raises: bad values become None or Unparseable
    - CreateEmployeeRequest.validate() checks every field, in the order
      name, email, position, department, salary, hireDate, and collects all errors
    - UpdateEmployeeRequest only sanitizes and validates keys present in the input;
      absent keys stay MISSING
    - Pure functions, no IO
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from employee_api.core.domain_types import (
    MISSING, Missing, Unparseable, ValidationResult, to_money,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

Salary = Decimal | Unparseable | None
HireDate = datetime | Unparseable | None


# ─── Sanitizers ──────────────────────────────────────────────────

def clean_text(value: Any) -> str | None:
    """Trim strings; anything that is not a string counts as absent."""
    if isinstance(value, str):
        return value.strip()
    return None


def clean_email(value: Any) -> str | None:
    text = clean_text(value)
    return text.lower() if text is not None else None


def coerce_salary(value: Any) -> Salary:
    """Coerce numbers and numeric text to Decimal."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    if isinstance(value, bool):
        return Unparseable(value)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return Unparseable(value)
    else:
        return Unparseable(value)
    return amount if amount.is_finite() else Unparseable(value)


def coerce_hire_date(value: Any) -> HireDate:
    """Coerce dates and ISO-8601 text to an aware datetime (naive means UTC)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return _as_utc(datetime.fromisoformat(text))
        except ValueError:
            return Unparseable(value)
    return Unparseable(value)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_positive_amount(value: object) -> bool:
    """Positive once rounded to cents; 0.004 would be stored as 0.00."""
    if not isinstance(value, Decimal):
        return False
    try:
        return to_money(value) > 0
    except InvalidOperation:
        # too many digits to carry cents
        return False


def is_valid_date(value: object) -> bool:
    return isinstance(value, datetime)


def _as_mapping(data: Any) -> Mapping[str, Any]:
    return data if isinstance(data, Mapping) else {}


# ─── Create ──────────────────────────────────────────────────────

@dataclass
class CreateEmployeeRequest:
    """Input for creating an employee. Every field is required."""
    name: str | None = None
    email: str | None = None
    position: str | None = None
    department: str | None = None
    salary: Salary = None
    hire_date: HireDate = None

    @classmethod
    def from_raw(cls, data: Any) -> "CreateEmployeeRequest":
        data = _as_mapping(data)
        return cls(
            name=clean_text(data.get("name")),
            email=clean_email(data.get("email")),
            position=clean_text(data.get("position")),
            department=clean_text(data.get("department")),
            salary=coerce_salary(data.get("salary")),
            hire_date=coerce_hire_date(data.get("hireDate")),
        )

    def validate(self) -> ValidationResult:
        errors: list[str] = []

        if not self.name:
            errors.append("Name is required")

        if not self.email:
            errors.append("Email is required")
        elif not is_valid_email(self.email):
            errors.append("Invalid email format")

        if not self.position:
            errors.append("Position is required")

        if not self.department:
            errors.append("Department is required")

        if self.salary is None:
            errors.append("Salary is required")
        elif not is_positive_amount(self.salary):
            errors.append("Salary must be a positive number")

        if self.hire_date is None:
            errors.append("Hire date is required")
        elif not is_valid_date(self.hire_date):
            errors.append("Invalid hire date format")

        return ValidationResult(errors)


# ─── Update ──────────────────────────────────────────────────────

@dataclass
class UpdateEmployeeRequest:
    """Partial input for updating an employee.

    Each attribute is MISSING when its key was absent from the input, so
    "not mentioned" stays distinguishable from "sent as null or blank".
    """
    name: str | None | Missing = MISSING
    email: str | None | Missing = MISSING
    position: str | None | Missing = MISSING
    department: str | None | Missing = MISSING
    salary: Salary | Missing = MISSING
    hire_date: HireDate | Missing = MISSING

    @classmethod
    def from_raw(cls, data: Any) -> "UpdateEmployeeRequest":
        data = _as_mapping(data)
        return cls(
            name=_sanitize_present(data, "name", clean_text),
            email=_sanitize_present(data, "email", clean_email),
            position=_sanitize_present(data, "position", clean_text),
            department=_sanitize_present(data, "department", clean_text),
            salary=_sanitize_present(data, "salary", coerce_salary),
            hire_date=_sanitize_present(data, "hireDate", coerce_hire_date),
        )

    def validate(self) -> ValidationResult:
        errors: list[str] = []

        if self.email is not MISSING and self.email and not is_valid_email(self.email):
            errors.append("Invalid email format")

        if self.salary is not MISSING and not is_positive_amount(self.salary):
            errors.append("Salary must be a positive number")

        if self.hire_date is not MISSING and not is_valid_date(self.hire_date):
            errors.append("Invalid hire date format")

        return ValidationResult(errors)

    def present_fields(self) -> dict[str, Any]:
        """Attributes that were present in the input, with sanitized values."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not MISSING
        }

    def is_empty(self) -> bool:
        return not self.present_fields()


def _sanitize_present(
    data: Mapping[str, Any], key: str, sanitize: Callable[[Any], Any],
) -> Any:
    if key not in data:
        return MISSING
    return sanitize(data[key])
