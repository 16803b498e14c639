"""
Attendance Metrics Calculator (``payroll_engines.attendance``).

Responsibility
--------------
Turns one day's time-in/time-out pair into worked hours, lateness,
overtime, undertime and a status classification.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO clock reads.
Sibling of the payroll engine: it feeds the attendance ledger, and period
totals reach payroll only through caller-side aggregation.

Invariants enforced
-------------------
* An explicit absence overrides every time-based computation: all
  figures zero, status ``Absent``.
* Overtime and undertime are never both non-zero.
* Half-day classification is decided before lateness and is never
  reverted by it.
* All figures are ``Decimal`` rounded to one decimal place.

Failure modes
-------------
* None.  A missing or malformed time-in or time-out (a pending checkout)
  returns metrics with ``is_complete=False`` instead of raising.  Zero
  hours are reported and the half-day/undertime rules are skipped until a
  checkout correction supplies the time-out.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from payroll_config import AttendancePolicy, AttendanceStandard, JurisdictionConfig, get_active_config
from payroll_engines.tracer import traced_engine
from payroll_kernel.domain.values import (
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    ClockTime,
    coerce_decimal,
    quantize_hours,
)
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.attendance")

_ZERO_HOURS = Decimal("0.0")


class AttendanceStatus(str, Enum):
    """Daily attendance classification."""

    PRESENT = "Present"
    LATE = "Late"
    HALF_DAY = "Half Day"
    ABSENT = "Absent"


@dataclass(frozen=True)
class AttendanceMetrics:
    """Derived figures for one attendance day."""

    hours_worked: Decimal
    late: Decimal
    overtime: Decimal
    undertime: Decimal
    status: AttendanceStatus
    is_complete: bool = True

    def to_form(self) -> dict[str, Any]:
        """Keys as the attendance form expects them."""
        return {
            "hoursWorked": self.hours_worked,
            "late": self.late,
            "overtime": self.overtime,
            "undertime": self.undertime,
            "status": self.status.value,
        }


ABSENT_METRICS = AttendanceMetrics(
    hours_worked=_ZERO_HOURS,
    late=_ZERO_HOURS,
    overtime=_ZERO_HOURS,
    undertime=_ZERO_HOURS,
    status=AttendanceStatus.ABSENT,
)


def _elapsed_minutes(start: ClockTime, end: ClockTime) -> int:
    diff = end.minutes - start.minutes
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


def calculate_hours(time_in: Any, time_out: Any) -> Decimal:
    """
    Hours between two wall-clock times, rounded to one decimal.

    A time-out earlier than the time-in is an overnight shift and wraps
    past midnight.  Returns ``Decimal("0.0")`` if either side is missing.
    """
    start = ClockTime.parse(time_in)
    end = ClockTime.parse(time_out)
    if start is None or end is None:
        return _ZERO_HOURS
    return quantize_hours(Decimal(_elapsed_minutes(start, end)) / MINUTES_PER_HOUR)


def _coerce_standard(
    standard: AttendanceStandard | Mapping[str, Any] | None,
    policy: AttendancePolicy,
) -> AttendanceStandard:
    if standard is None:
        return policy.standard
    if isinstance(standard, AttendanceStandard):
        return standard
    time_in = standard.get("time_in", standard.get("timeIn", policy.standard.time_in))
    hours = standard.get("hours_per_day", standard.get("hoursPerDay"))
    return AttendanceStandard(
        time_in=str(time_in),
        hours_per_day=coerce_decimal(hours) if hours is not None else policy.standard.hours_per_day,
    )


@traced_engine("attendance", "1.0", fingerprint_fields=("time_in", "time_out", "is_absent"))
def calculate_attendance_metrics(
    time_in: Any,
    time_out: Any,
    is_absent: bool = False,
    standard: AttendanceStandard | Mapping[str, Any] | None = None,
    config: JurisdictionConfig | None = None,
) -> AttendanceMetrics:
    """
    Classify one day's attendance.

    Args:
        time_in: ``"HH:MM"`` clock-in time (may be blank).
        time_out: ``"HH:MM"`` clock-out time (blank while checkout is pending).
        is_absent: Explicit absence flag; overrides everything else.
        standard: Expected shift start and length.  Accepts an
            ``AttendanceStandard`` or a mapping with ``timeIn`` and
            ``hoursPerDay`` keys.  Defaults to the configured standard.
        config: Jurisdiction config; defaults to the active one.

    Returns:
        AttendanceMetrics with hours worked, late, overtime, undertime
        and status.
    """
    if is_absent:
        return ABSENT_METRICS

    policy = (config or get_active_config()).attendance
    shift = _coerce_standard(standard, policy)
    standard_in = ClockTime.parse(shift.time_in)

    actual_in = ClockTime.parse(time_in)
    actual_out = ClockTime.parse(time_out)

    late_minutes = 0
    if actual_in is not None and standard_in is not None:
        late_minutes = max(0, actual_in.minutes - standard_in.minutes)
    late = quantize_hours(Decimal(late_minutes) / MINUTES_PER_HOUR)
    is_late = late_minutes > policy.late_grace_minutes

    if actual_in is None or actual_out is None:
        logger.debug(
            "attendance_incomplete_punch",
            extra={"time_in": str(time_in), "time_out": str(time_out)},
        )
        return AttendanceMetrics(
            hours_worked=_ZERO_HOURS,
            late=late,
            overtime=_ZERO_HOURS,
            undertime=_ZERO_HOURS,
            status=AttendanceStatus.LATE if is_late else AttendanceStatus.PRESENT,
            is_complete=False,
        )

    hours_worked = calculate_hours(actual_in, actual_out)
    overtime = _ZERO_HOURS
    undertime = _ZERO_HOURS
    if hours_worked > shift.hours_per_day:
        overtime = quantize_hours(hours_worked - shift.hours_per_day)
    elif hours_worked < shift.hours_per_day:
        undertime = quantize_hours(shift.hours_per_day - hours_worked)

    status = AttendanceStatus.PRESENT
    if hours_worked <= policy.half_day_max_hours:
        status = AttendanceStatus.HALF_DAY
    if is_late and status is AttendanceStatus.PRESENT:
        status = AttendanceStatus.LATE

    metrics = AttendanceMetrics(
        hours_worked=hours_worked,
        late=late,
        overtime=overtime,
        undertime=undertime,
        status=status,
    )
    logger.debug(
        "attendance_metrics_calculated",
        extra={
            "hours_worked": str(hours_worked),
            "late_minutes": late_minutes,
            "overtime": str(overtime),
            "undertime": str(undertime),
            "status": status.value,
        },
    )
    return metrics
