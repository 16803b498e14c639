"""
Attendance Helpers (``payroll_modules.attendance.helpers``).

Pure aggregation over attendance records: per-employee period summaries
for prefilling payroll, and status counts for the reports page.  No I/O.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from decimal import Decimal

from payroll_engines.attendance import AttendanceStatus
from payroll_modules.attendance.models import AttendanceRecord, AttendanceSummary


def summarize_attendance(
    records: Iterable[AttendanceRecord],
    employee_id: str | None = None,
) -> AttendanceSummary:
    """
    Aggregate one employee's records for a period.

    When ``employee_id`` is given, records for other employees are ignored.
    Otherwise all records must belong to the same employee.

    Raises:
        ValueError: if records for several employees are passed without an
            ``employee_id`` filter.
    """
    selected = [
        r for r in records if employee_id is None or r.employee_id == employee_id
    ]
    employees = {r.employee_id for r in selected}
    if len(employees) > 1:
        raise ValueError(
            f"records span {len(employees)} employees; pass employee_id to summarize one"
        )

    counts = Counter(r.status for r in selected if r.is_complete or r.is_absent)
    zero = Decimal("0")
    return AttendanceSummary(
        employee_id=employee_id if employee_id is not None else next(iter(employees), None),
        record_count=len(selected),
        present_days=counts[AttendanceStatus.PRESENT],
        late_days=counts[AttendanceStatus.LATE],
        half_days=counts[AttendanceStatus.HALF_DAY],
        absent_days=counts[AttendanceStatus.ABSENT],
        incomplete_days=sum(1 for r in selected if not r.is_complete and not r.is_absent),
        total_hours=sum((r.hours_worked for r in selected), zero),
        total_late_hours=sum((r.late_hours for r in selected), zero),
        total_overtime_hours=sum((r.overtime_hours for r in selected), zero),
        total_undertime_hours=sum((r.undertime_hours for r in selected), zero),
    )


def count_by_status(records: Iterable[AttendanceRecord]) -> dict[str, int]:
    """Records per status label, every label present (zero if unused)."""
    counts = Counter(r.status for r in records)
    return {status.value: counts[status] for status in AttendanceStatus}
