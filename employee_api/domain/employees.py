"""Employee entity and the business rules every record must satisfy."""
from __future__ import annotations

import math
import re
from dataclasses import InitVar, asdict, dataclass, fields, replace
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
MIN_SALARY = 0.0
MAX_SALARY = 1_000_000.0
MIN_AGE = 18

ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
_CENT = Decimal("0.01")


class BusinessValidationError(Exception):
    """Raised when a value violates an employee business rule."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def shift_years(day: date, years: int) -> date:
    """Move ``day`` by whole years; 29 February falls back to the 28th."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def parse_date(value: Any) -> date:
    """Accept a ``date`` or an ISO ``yyyy-MM-dd`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip() if isinstance(value, str) else ""
    if not ISO_DATE_PATTERN.fullmatch(text):
        raise BusinessValidationError("Invalid date format (expected yyyy-MM-dd)")
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise BusinessValidationError("Invalid date format (expected yyyy-MM-dd)") from exc


def parse_salary(value: Any) -> float:
    """Accept a number or a numeric string."""
    if isinstance(value, bool) or value is None:
        raise BusinessValidationError("Invalid salary format")
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        try:
            result = float(Decimal(str(value).strip()))
        except (InvalidOperation, ValueError) as exc:
            raise BusinessValidationError("Invalid salary format") from exc
    if not math.isfinite(result):
        raise BusinessValidationError("Invalid salary format")
    return result


def parse_id(value: Any) -> int:
    if isinstance(value, bool):
        raise BusinessValidationError("Invalid ID format")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise BusinessValidationError("Invalid ID format")


def round_salary(value: float) -> float:
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def _check_name(value: Any, label: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise BusinessValidationError(f"{label} is required")
    if not MIN_NAME_LENGTH <= len(value.strip()) <= MAX_NAME_LENGTH:
        raise BusinessValidationError(
            f"{label} must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters"
        )


def validate_employee(employee: "Employee", today: Optional[date] = None) -> None:
    """Check every rule against the employee as a whole.

    Raises :class:`BusinessValidationError` for the first violation found.
    An employee born exactly ``MIN_AGE`` years before ``today`` is accepted.
    """
    today = today or date.today()

    if isinstance(employee.id, bool) or not isinstance(employee.id, int) or employee.id <= 0:
        raise BusinessValidationError("ID must be a positive number")

    _check_name(employee.first_name, "First name")
    _check_name(employee.last_name, "Last name")

    dob = employee.date_of_birth
    if not isinstance(dob, date):
        raise BusinessValidationError("Date of birth is required")
    if dob > shift_years(today, -MIN_AGE):
        raise BusinessValidationError(f"Employee must be at least {MIN_AGE} years old")

    salary = employee.salary
    if isinstance(salary, bool) or not isinstance(salary, (int, float)) or not math.isfinite(salary):
        raise BusinessValidationError("Invalid salary format")
    if salary < MIN_SALARY:
        raise BusinessValidationError(f"Salary cannot be negative (min: {MIN_SALARY:.2f})")
    if salary > MAX_SALARY:
        raise BusinessValidationError(f"Salary exceeds maximum limit of {MAX_SALARY:.2f}")

    joined = employee.join_date
    if not isinstance(joined, date):
        raise BusinessValidationError("Join date is required")
    if joined > today:
        raise BusinessValidationError("Join date cannot be in the future")
    if joined < shift_years(dob, MIN_AGE):
        raise BusinessValidationError(f"Employee must be at least {MIN_AGE} years old at join date")

    if not isinstance(employee.department, str) or not employee.department.strip():
        raise BusinessValidationError("Department is required")


@dataclass(frozen=True)
class Employee:
    """A validated employee record.

    Instances are immutable; construction normalizes the input (trimmed
    strings, salary rounded to cents) and validates the whole record, so an
    ``Employee`` that exists is always valid. Use :meth:`apply` to derive an
    updated copy.
    """

    id: int
    first_name: str
    last_name: str
    date_of_birth: date
    salary: float
    join_date: date
    department: str
    today: InitVar[Optional[date]] = None

    def __post_init__(self, today: Optional[date]) -> None:
        for name in ("first_name", "last_name", "department"):
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, value.strip())
        for name in ("date_of_birth", "join_date"):
            value = getattr(self, name)
            if isinstance(value, datetime):
                object.__setattr__(self, name, value.date())
        # bounds apply to the raw value; out-of-range salaries stay unrounded
        # so validate_employee rejects them
        salary = self.salary
        if (
            isinstance(salary, (int, float))
            and not isinstance(salary, bool)
            and math.isfinite(salary)
            and MIN_SALARY <= salary <= MAX_SALARY
        ):
            object.__setattr__(self, "salary", round_salary(salary))
        validate_employee(self, today)

    def validate(self, today: Optional[date] = None) -> None:
        validate_employee(self, today)

    def apply(self, changes: "EmployeeChanges", today: Optional[date] = None) -> "Employee":
        """Return a copy with every supplied field of ``changes`` overlaid."""
        return replace(self, today=today, **changes.supplied())

    @classmethod
    def from_strings(
        cls,
        id: Any,
        first_name: Optional[str],
        last_name: Optional[str],
        date_of_birth: Any,
        salary: Any,
        join_date: Any,
        department: Optional[str],
        today: Optional[date] = None,
    ) -> "Employee":
        """Build an employee from raw API input (ISO dates, numeric salary)."""
        return cls(
            id=parse_id(id),
            first_name=first_name,
            last_name=last_name,
            date_of_birth=parse_date(date_of_birth),
            salary=parse_salary(salary),
            join_date=parse_date(join_date),
            department=department,
            today=today,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], today: Optional[date] = None) -> "Employee":
        if not isinstance(data, Mapping):
            raise BusinessValidationError("Employee record must be an object")
        try:
            return cls.from_strings(
                data["id"],
                data["firstName"],
                data["lastName"],
                data["dateOfBirth"],
                data["salary"],
                data["joinDate"],
                data["department"],
                today=today,
            )
        except KeyError as exc:
            raise BusinessValidationError(f"Missing field: {exc.args[0]}") from exc

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "dateOfBirth": self.date_of_birth.isoformat(),
            "salary": self.salary,
            "joinDate": self.join_date.isoformat(),
            "department": self.department,
        }


@dataclass
class EmployeeChanges:
    """Partial update payload. ``None`` means the field was not supplied."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    salary: Optional[float] = None
    join_date: Optional[date] = None
    department: Optional[str] = None

    @classmethod
    def from_strings(cls, **raw: Any) -> "EmployeeChanges":
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise BusinessValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")
        values = dict(raw)
        for name in ("date_of_birth", "join_date"):
            if values.get(name) is not None:
                values[name] = parse_date(values[name])
        if values.get("salary") is not None:
            values["salary"] = parse_salary(values["salary"])
        return cls(**values)

    def supplied(self) -> dict:
        return {name: value for name, value in asdict(self).items() if value is not None}

    def is_empty(self) -> bool:
        return not self.supplied()
