"""
Payroll Domain Models (``payroll_modules.payroll.models``).

Responsibility
--------------
Frozen dataclass value objects exchanged with the form and persistence
layers: the employee as seen by payroll, and the ``PayrollRecord`` that
pins an input snapshot to the breakdown computed from it.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal``.
* A record's breakdown is never recomputed in place; edits produce a new
  record via ``PayrollService.revise``.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

from payroll_engines.payroll import PayrollBreakdown, PayrollInput, PayrollStatus
from payroll_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.models")


@dataclass(frozen=True)
class Employee:
    """An employee for payroll purposes (read from the directory)."""
    id: str
    daily_rate: Decimal
    first_name: str = ""
    last_name: str = ""
    department: str = ""
    position: str = ""

    def __post_init__(self):
        if self.daily_rate < 0:
            logger.warning(
                "employee_negative_daily_rate",
                extra={"employee_id": self.id, "daily_rate": str(self.daily_rate)},
            )
            raise ValueError("daily_rate cannot be negative")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class PayrollRecord:
    """A payroll input snapshot with its computed breakdown and status."""
    id: str
    employee_id: str
    period: str
    payroll_input: PayrollInput
    breakdown: PayrollBreakdown
    status: PayrollStatus = PayrollStatus.PENDING

    @property
    def net_pay(self) -> Decimal:
        return self.breakdown.net_pay

    @property
    def key(self) -> tuple[str, str]:
        """Uniqueness key: one record per employee per period."""
        return (self.employee_id, self.period)

    def with_status(self, status: PayrollStatus) -> "PayrollRecord":
        """Copy with a new status label; the breakdown is shared, not recomputed."""
        return replace(self, status=status, breakdown=replace(self.breakdown, status=status))

    def to_form(self) -> dict[str, Any]:
        """Flat camelCase payload for the persistence layer."""
        payload = {
            "id": self.id,
            "employeeId": self.employee_id,
            "period": self.period,
            "notes": self.payroll_input.notes,
        }
        payload.update(self.breakdown.to_form())
        payload["status"] = self.status.value
        return payload
