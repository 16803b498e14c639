"""
Attendance Module (``payroll_modules.attendance``).

Responsibility
--------------
Daily attendance records built from time punches, the checkout-correction
flow for pending punches, and period aggregation feeding payroll inputs.

Architecture position
---------------------
**Modules layer** -- calls ``payroll_engines.attendance`` for every
computation and returns frozen records; persistence is the caller's.

Failure modes
-------------
* ``CheckoutCorrectionError`` when a correction targets an absent record
  or a record without a time-in.
"""

from payroll_modules.attendance.helpers import count_by_status, summarize_attendance
from payroll_modules.attendance.models import AttendanceRecord, AttendanceSummary
from payroll_modules.attendance.service import correct_checkout, record_attendance

__all__ = [
    "AttendanceRecord",
    "AttendanceSummary",
    "correct_checkout",
    "count_by_status",
    "record_attendance",
    "summarize_attendance",
]
