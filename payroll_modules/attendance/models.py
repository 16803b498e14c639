"""
Attendance Domain Models (``payroll_modules.attendance.models``).

Responsibility
--------------
Frozen dataclass value objects for the attendance ledger: one
``AttendanceRecord`` per employee per day, and the ``AttendanceSummary``
that aggregates a period's records for payroll.

Invariants enforced
-------------------
* All models are ``frozen=True``.  A correction is a full overwrite that
  produces a new record, never a partial patch.
* An absent record carries zero figures and status ``Absent``.
* Overtime and undertime are never both non-zero on one record.

Failure modes
-------------
* Constructing a record that breaks the absence or overtime/undertime
  invariant raises ``ValueError``.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from payroll_engines.attendance import AttendanceMetrics, AttendanceStatus
from payroll_kernel.logging_config import get_logger

logger = get_logger("modules.attendance.models")

_ZERO = Decimal("0")


@dataclass(frozen=True)
class AttendanceRecord:
    """One employee's attendance for one day."""
    employee_id: str
    work_date: date
    time_in: str | None
    time_out: str | None
    is_absent: bool
    hours_worked: Decimal
    late_hours: Decimal
    overtime_hours: Decimal
    undertime_hours: Decimal
    status: AttendanceStatus
    is_complete: bool = True
    notes: str = ""

    def __post_init__(self):
        figures = (
            self.hours_worked,
            self.late_hours,
            self.overtime_hours,
            self.undertime_hours,
        )
        if any(value < 0 for value in figures):
            raise ValueError("attendance figures cannot be negative")
        if self.is_absent and (
            any(value != 0 for value in figures)
            or self.status is not AttendanceStatus.ABSENT
        ):
            logger.warning(
                "attendance_absence_invariant_violated",
                extra={
                    "employee_id": self.employee_id,
                    "work_date": self.work_date.isoformat(),
                    "status": self.status.value,
                },
            )
            raise ValueError("an absent record must have zero figures and status Absent")
        if self.overtime_hours > 0 and self.undertime_hours > 0:
            raise ValueError("overtime and undertime cannot both be non-zero")

    @classmethod
    def from_metrics(
        cls,
        employee_id: str,
        work_date: date,
        time_in: str | None,
        time_out: str | None,
        metrics: AttendanceMetrics,
        is_absent: bool = False,
        notes: str = "",
    ) -> "AttendanceRecord":
        """Assemble a record from engine output."""
        return cls(
            employee_id=employee_id,
            work_date=work_date,
            time_in=None if is_absent else (time_in or None),
            time_out=None if is_absent else (time_out or None),
            is_absent=is_absent,
            hours_worked=metrics.hours_worked,
            late_hours=metrics.late,
            overtime_hours=metrics.overtime,
            undertime_hours=metrics.undertime,
            status=metrics.status,
            is_complete=metrics.is_complete,
            notes=notes,
        )

    @property
    def is_pending_checkout(self) -> bool:
        """Clocked in but not yet clocked out."""
        return not self.is_absent and self.time_in is not None and self.time_out is None

    def to_form(self) -> dict[str, Any]:
        """camelCase keys for the attendance form and persistence layer."""
        return {
            "employeeId": self.employee_id,
            "date": self.work_date.isoformat(),
            "timeIn": self.time_in or "",
            "timeOut": self.time_out or "",
            "isAbsent": self.is_absent,
            "hoursWorked": self.hours_worked,
            "lateHours": self.late_hours,
            "overtimeHours": self.overtime_hours,
            "undertimeHours": self.undertime_hours,
            "status": self.status.value,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AttendanceSummary:
    """Aggregated attendance for one employee over a period."""
    employee_id: str | None
    record_count: int = 0
    present_days: int = 0
    late_days: int = 0
    half_days: int = 0
    absent_days: int = 0
    incomplete_days: int = 0
    total_hours: Decimal = _ZERO
    total_late_hours: Decimal = _ZERO
    total_overtime_hours: Decimal = _ZERO
    total_undertime_hours: Decimal = _ZERO

    @property
    def days_worked(self) -> int:
        """Days with a complete punch, half days included."""
        return self.present_days + self.late_days + self.half_days

    def as_payroll_fields(self) -> dict[str, Any]:
        """
        Prefill values for the matching ``PayrollInput`` fields.

        Absences are already excluded from ``days_of_work``, so
        ``absence_days`` is left for the user to fill in; prefilling it as
        well would deduct each absence twice.
        """
        return {
            "employee_id": self.employee_id,
            "days_of_work": self.days_worked,
            "regular_ot_hours": self.total_overtime_hours,
            "late_hours": self.total_late_hours,
        }
