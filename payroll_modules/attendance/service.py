"""
Attendance Service (``payroll_modules.attendance.service``).

Responsibility
--------------
Builds attendance records from punch events and applies checkout
corrections.  Each call runs the attendance engine on a complete punch
snapshot and returns a new immutable record for the caller to persist.

Failure modes
-------------
* ``CheckoutCorrectionError`` -- correcting an absent record, or one that
  has no time-in to recompute from.
* Malformed dates raise ``ValueError`` from ``date.fromisoformat``.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from payroll_config import AttendanceStandard, JurisdictionConfig
from payroll_engines.attendance import calculate_attendance_metrics
from payroll_kernel.exceptions import CheckoutCorrectionError
from payroll_kernel.logging_config import get_logger
from payroll_modules.attendance.models import AttendanceRecord

logger = get_logger("modules.attendance.service")


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def record_attendance(
    employee_id: str,
    work_date: date | str,
    time_in: str | None,
    time_out: str | None = None,
    is_absent: bool = False,
    notes: str = "",
    standard: AttendanceStandard | Mapping[str, Any] | None = None,
    config: JurisdictionConfig | None = None,
) -> AttendanceRecord:
    """
    Create the attendance record for one punch event.

    A blank ``time_out`` is a pending checkout: the record is stored as
    incomplete and later finished with ``correct_checkout``.
    """
    metrics = calculate_attendance_metrics(
        time_in, time_out, is_absent=is_absent, standard=standard, config=config,
    )
    record = AttendanceRecord.from_metrics(
        employee_id=employee_id,
        work_date=_as_date(work_date),
        time_in=time_in,
        time_out=time_out,
        metrics=metrics,
        is_absent=is_absent,
        notes=notes,
    )
    logger.info(
        "attendance_recorded",
        extra={
            "employee_id": employee_id,
            "work_date": record.work_date.isoformat(),
            "status": record.status.value,
            "hours_worked": str(record.hours_worked),
            "is_complete": record.is_complete,
        },
    )
    return record


def correct_checkout(
    record: AttendanceRecord,
    time_out: str,
    notes: str | None = None,
    standard: AttendanceStandard | Mapping[str, Any] | None = None,
    config: JurisdictionConfig | None = None,
) -> AttendanceRecord:
    """
    Set or replace the time-out and recompute from the original time-in.

    Returns a full replacement record; the original is left untouched.
    """
    if record.is_absent:
        raise CheckoutCorrectionError(
            record.employee_id, record.work_date, "record is marked absent",
        )
    if not record.time_in:
        raise CheckoutCorrectionError(
            record.employee_id, record.work_date, "record has no time-in",
        )

    corrected = record_attendance(
        employee_id=record.employee_id,
        work_date=record.work_date,
        time_in=record.time_in,
        time_out=time_out,
        notes=record.notes if notes is None else notes,
        standard=standard,
        config=config,
    )
    logger.info(
        "attendance_checkout_corrected",
        extra={
            "employee_id": record.employee_id,
            "work_date": record.work_date.isoformat(),
            "previous_time_out": record.time_out,
            "time_out": time_out,
            "previous_status": record.status.value,
            "status": corrected.status.value,
        },
    )
    return corrected
