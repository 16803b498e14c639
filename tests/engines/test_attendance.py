"""
Tests for the attendance engine.

Covers hours calculation (including overnight shifts), lateness with the
grace period, half-day classification, overtime/undertime, explicit
absence, incomplete punches and custom shift standards.
"""

from decimal import Decimal

import pytest

from payroll_config import AttendancePolicy, AttendanceStandard, JurisdictionConfig
from payroll_engines.attendance import (
    ABSENT_METRICS,
    AttendanceStatus,
    calculate_attendance_metrics,
    calculate_hours,
)


class TestCalculateHours:

    def test_standard_day(self):
        assert calculate_hours("08:00", "16:00") == Decimal("8.0")

    def test_overnight_shift_wraps_past_midnight(self):
        assert calculate_hours("22:00", "06:00") == Decimal("8.0")

    def test_rounds_to_one_decimal(self):
        # 8h40m = 8.666...
        assert calculate_hours("08:20", "17:00") == Decimal("8.7")

    def test_half_up_rounding(self):
        # 3 minutes = 0.05 hours
        assert calculate_hours("08:00", "08:03") == Decimal("0.1")

    def test_seconds_are_ignored(self):
        assert calculate_hours("08:00:59", "12:00:01") == Decimal("4.0")

    @pytest.mark.parametrize(
        "time_in, time_out",
        [
            ("", "17:00"),
            ("08:00", ""),
            (None, "17:00"),
            ("08:00", None),
            ("not a time", "17:00"),
            ("25:00", "17:00"),
        ],
    )
    def test_missing_or_malformed_side_gives_zero(self, time_in, time_out):
        assert calculate_hours(time_in, time_out) == Decimal("0.0")

    def test_same_time_is_zero(self):
        assert calculate_hours("08:00", "08:00") == Decimal("0.0")


class TestAttendanceMetrics:

    def test_full_day_on_time(self):
        metrics = calculate_attendance_metrics("08:00", "16:00")
        assert metrics.hours_worked == Decimal("8.0")
        assert metrics.late == Decimal("0.0")
        assert metrics.overtime == Decimal("0.0")
        assert metrics.undertime == Decimal("0.0")
        assert metrics.status is AttendanceStatus.PRESENT
        assert metrics.is_complete

    def test_overtime(self):
        metrics = calculate_attendance_metrics("08:00", "17:00")
        assert metrics.hours_worked == Decimal("9.0")
        assert metrics.overtime == Decimal("1.0")
        assert metrics.undertime == Decimal("0.0")

    def test_late_beyond_grace(self):
        metrics = calculate_attendance_metrics("08:20", "17:00")
        assert metrics.late == Decimal("0.3")
        assert metrics.status is AttendanceStatus.LATE
        assert metrics.overtime == Decimal("0.7")

    def test_late_within_grace_is_present(self):
        metrics = calculate_attendance_metrics("08:10", "17:00")
        assert metrics.late == Decimal("0.2")
        assert metrics.status is AttendanceStatus.PRESENT

    def test_exactly_at_grace_is_present(self):
        metrics = calculate_attendance_metrics("08:15", "17:00")
        assert metrics.status is AttendanceStatus.PRESENT

    def test_one_minute_past_grace_is_late(self):
        metrics = calculate_attendance_metrics("08:16", "17:00")
        assert metrics.status is AttendanceStatus.LATE

    def test_early_arrival_is_not_negative_late(self):
        metrics = calculate_attendance_metrics("07:30", "16:00")
        assert metrics.late == Decimal("0.0")
        assert metrics.hours_worked == Decimal("8.5")

    def test_four_hours_is_half_day(self):
        metrics = calculate_attendance_metrics("08:00", "12:00")
        assert metrics.status is AttendanceStatus.HALF_DAY
        assert metrics.undertime == Decimal("4.0")

    def test_half_day_takes_precedence_over_late(self):
        metrics = calculate_attendance_metrics("09:00", "13:00")
        assert metrics.late == Decimal("1.0")
        assert metrics.status is AttendanceStatus.HALF_DAY

    def test_undertime_above_half_day(self):
        metrics = calculate_attendance_metrics("08:00", "14:00")
        assert metrics.status is AttendanceStatus.PRESENT
        assert metrics.undertime == Decimal("2.0")

    def test_absent_overrides_times(self):
        metrics = calculate_attendance_metrics("08:00", "17:00", is_absent=True)
        assert metrics == ABSENT_METRICS
        assert metrics.status is AttendanceStatus.ABSENT
        assert metrics.hours_worked == Decimal("0.0")

    def test_incomplete_punch(self):
        metrics = calculate_attendance_metrics("08:30", "")
        assert not metrics.is_complete
        assert metrics.hours_worked == Decimal("0.0")
        assert metrics.undertime == Decimal("0.0")
        assert metrics.late == Decimal("0.5")
        assert metrics.status is AttendanceStatus.LATE

    def test_no_punch_at_all(self):
        metrics = calculate_attendance_metrics(None, None)
        assert not metrics.is_complete
        assert metrics.status is AttendanceStatus.PRESENT
        assert metrics.late == Decimal("0.0")


class TestShiftStandard:

    def test_mapping_standard(self):
        metrics = calculate_attendance_metrics(
            "09:00", "15:00", standard={"timeIn": "09:00", "hoursPerDay": 6},
        )
        assert metrics.late == Decimal("0.0")
        assert metrics.overtime == Decimal("0.0")
        assert metrics.undertime == Decimal("0.0")
        assert metrics.status is AttendanceStatus.PRESENT

    def test_dataclass_standard(self):
        standard = AttendanceStandard(time_in="07:00", hours_per_day=Decimal("10"))
        metrics = calculate_attendance_metrics("07:45", "17:00", standard=standard)
        assert metrics.late == Decimal("0.8")
        assert metrics.status is AttendanceStatus.LATE
        assert metrics.undertime == Decimal("0.7")

    def test_policy_grace_from_config(self):
        config = JurisdictionConfig(attendance=AttendancePolicy(late_grace_minutes=30))
        metrics = calculate_attendance_metrics("08:20", "17:00", config=config)
        assert metrics.status is AttendanceStatus.PRESENT

    def test_to_form_keys(self):
        form = calculate_attendance_metrics("08:00", "16:00").to_form()
        assert form == {
            "hoursWorked": Decimal("8.0"),
            "late": Decimal("0.0"),
            "overtime": Decimal("0.0"),
            "undertime": Decimal("0.0"),
            "status": "Present",
        }
