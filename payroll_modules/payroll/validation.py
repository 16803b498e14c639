"""
Payroll Submission Validation (``payroll_modules.payroll.validation``).

Responsibility
--------------
The business rules the payroll engine deliberately does not enforce:

* an employee must be selected,
* a period must be named,
* days of work must be a positive whole number no larger than the period,
* an employee may have only one payroll record per period.

Violations are returned as data so the form can show all of them at
once; ``ensure_valid_submission`` turns a non-empty result into a
``PayrollInputRejectedError``.  Validation never runs inside the engine,
so a half-filled form still previews.

Duplicate detection goes through ``PayrollPeriodIndex``, a dict keyed by
``(employee_id, period)``, instead of scanning every stored record.
"""

from __future__ import annotations

import calendar
import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from payroll_engines.payroll import PayrollInput
from payroll_kernel.domain.values import MAX_INPUT_MAGNITUDE
from payroll_kernel.exceptions import PayrollInputRejectedError
from payroll_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.validation")

EMPLOYEE_NOT_SELECTED = "EMPLOYEE_NOT_SELECTED"
PERIOD_REQUIRED = "PERIOD_REQUIRED"
INVALID_DAYS_OF_WORK = "INVALID_DAYS_OF_WORK"
DAYS_OF_WORK_EXCEEDS_PERIOD = "DAYS_OF_WORK_EXCEEDS_PERIOD"
DUPLICATE_PAYROLL_PERIOD = "DUPLICATE_PAYROLL_PERIOD"

_MONTH_PERIOD = re.compile(r"^(\d{4})-(\d{2})$")
_RANGE_PERIOD = re.compile(
    r"^(\d{4}-\d{2}-\d{2})\s*(?:/|to)\s*(\d{4}-\d{2}-\d{2})$"
)


@dataclass(frozen=True)
class ValidationViolation:
    """One failed business rule."""
    code: str
    field: str
    message: str


def normalize_employee_id(employee_id: Any) -> str:
    """Trimmed employee id as text ("" when missing).  Forms may send numbers."""
    return str(employee_id).strip() if employee_id is not None else ""


def normalize_period(period: Any) -> str:
    """Trimmed period label ("" when missing)."""
    return str(period).strip() if period is not None else ""


def period_length_days(period: str) -> int | None:
    """
    Calendar days covered by a period label.

    Understands ``YYYY-MM`` (a calendar month) and ``YYYY-MM-DD/YYYY-MM-DD``
    (inclusive range; ``to`` also works as the separator).  Returns ``None``
    for any other label, leaving the period length to the caller.
    """
    text = normalize_period(period)
    month = _MONTH_PERIOD.match(text)
    if month:
        year, month_number = int(month.group(1)), int(month.group(2))
        if not 1 <= month_number <= 12:
            return None
        return calendar.monthrange(year, month_number)[1]

    span = _RANGE_PERIOD.match(text)
    if span:
        try:
            start = date.fromisoformat(span.group(1))
            end = date.fromisoformat(span.group(2))
        except ValueError:
            return None
        if end < start:
            return None
        return (end - start).days + 1
    return None


def parse_days_of_work(value: Any) -> int | None:
    """Whole positive day count, or ``None`` if the value is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        days = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not days.is_finite() or days <= 0 or days >= MAX_INPUT_MAGNITUDE:
        return None
    if days != days.to_integral_value():
        return None
    return int(days)


class PayrollPeriodIndex:
    """
    Constant-time lookup of existing payroll records by employee and period.

    Maps ``(employee_id, period)`` to the id of the record holding it.
    """

    def __init__(self, entries: Iterable[tuple[str, str, str]] = ()):
        self._index: dict[tuple[str, str], str] = {}
        for employee_id, period, record_id in entries:
            self.add(employee_id, period, record_id)

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "PayrollPeriodIndex":
        """Build from objects exposing ``employee_id``, ``period`` and ``id``."""
        return cls((r.employee_id, r.period, r.id) for r in records)

    @staticmethod
    def _key(employee_id: Any, period: Any) -> tuple[str, str]:
        return (normalize_employee_id(employee_id), normalize_period(period))

    def add(self, employee_id: str, period: str, record_id: str) -> None:
        self._index[self._key(employee_id, period)] = record_id

    def remove(self, employee_id: str, period: str) -> None:
        self._index.pop(self._key(employee_id, period), None)

    def get(self, employee_id: str, period: str) -> str | None:
        return self._index.get(self._key(employee_id, period))

    def is_taken(
        self,
        employee_id: str,
        period: str,
        exclude_record_id: str | None = None,
    ) -> bool:
        """True if another record already holds this employee and period."""
        holder = self.get(employee_id, period)
        return holder is not None and holder != exclude_record_id

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        return self._key(*key) in self._index


def validate_payroll_submission(
    payroll_input: PayrollInput,
    existing: PayrollPeriodIndex | None = None,
    period_days: int | None = None,
    record_id: str | None = None,
) -> tuple[ValidationViolation, ...]:
    """
    Check a payroll submission against the business rules.

    Args:
        payroll_input: The form snapshot being saved.
        existing: Index of stored records, for duplicate detection.
        period_days: Days in the period.  Derived from the period label
            when omitted and the label is a recognised format.
        record_id: Id of the record being edited, so it does not collide
            with itself.

    Returns:
        Tuple of violations; empty when the submission is valid.
    """
    violations: list[ValidationViolation] = []

    employee_id = normalize_employee_id(payroll_input.employee_id)
    if not employee_id:
        violations.append(ValidationViolation(
            EMPLOYEE_NOT_SELECTED, "employee_id", "Please select an employee",
        ))

    period = normalize_period(payroll_input.period)
    if not period:
        violations.append(ValidationViolation(
            PERIOD_REQUIRED, "period", "Please enter a payroll period",
        ))

    days = parse_days_of_work(payroll_input.days_of_work)
    if days is None:
        violations.append(ValidationViolation(
            INVALID_DAYS_OF_WORK,
            "days_of_work",
            "Days of work must be a positive whole number",
        ))
    else:
        limit = period_days if period_days is not None else period_length_days(period)
        if limit is not None and days > limit:
            violations.append(ValidationViolation(
                DAYS_OF_WORK_EXCEEDS_PERIOD,
                "days_of_work",
                f"Days of work ({days}) cannot exceed the {limit} days in the period",
            ))

    if (
        existing is not None
        and employee_id
        and period
        and existing.is_taken(employee_id, period, exclude_record_id=record_id)
    ):
        violations.append(ValidationViolation(
            DUPLICATE_PAYROLL_PERIOD,
            "period",
            f"A payroll record for this employee already exists for period {period}",
        ))

    return tuple(violations)


def ensure_valid_submission(
    payroll_input: PayrollInput,
    existing: PayrollPeriodIndex | None = None,
    period_days: int | None = None,
    record_id: str | None = None,
) -> None:
    """
    Raise if the submission breaks any business rule.

    Raises:
        PayrollInputRejectedError: carrying every violation found.
    """
    violations = validate_payroll_submission(
        payroll_input, existing, period_days=period_days, record_id=record_id,
    )
    if violations:
        logger.warning(
            "payroll_submission_rejected",
            extra={
                "employee_id": payroll_input.employee_id,
                "period": payroll_input.period,
                "violation_codes": [v.code for v in violations],
            },
        )
        raise PayrollInputRejectedError(
            payroll_input.employee_id, payroll_input.period, violations,
        )
