"""
Module: payroll_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the canonical import surface for the
    form layer and for ``payroll_modules``.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May import ``payroll_kernel`` and ``payroll_config`` only.
    MUST NOT import ``payroll_modules``.

Invariants enforced:
    - Purity: engines never read the clock, files or the environment;
      configuration arrives through ``payroll_config.get_active_config()``
      or an explicit ``config`` argument.
    - Decimal-only arithmetic: floats are converted on the way in.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from payroll_engines import calculate_attendance_metrics, compute_payroll
"""

from payroll_engines.attendance import (
    ABSENT_METRICS,
    AttendanceMetrics,
    AttendanceStatus,
    calculate_attendance_metrics,
    calculate_hours,
)
from payroll_engines.payroll import (
    FORM_FIELD_MAP,
    LOAN_FIELDS,
    PayrollBreakdown,
    PayrollInput,
    PayrollStatus,
    compute_payroll,
)
from payroll_engines.rates import ResolvedRates, read_daily_rate, resolve_rates
from payroll_engines.statutory import (
    find_bracket,
    is_below_minimum_wage,
    pagibig,
    pagibig_cap,
    philhealth,
    sss,
    withholding_tax,
)
from payroll_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "ABSENT_METRICS",
    "AttendanceMetrics",
    "AttendanceStatus",
    "FORM_FIELD_MAP",
    "LOAN_FIELDS",
    "PayrollBreakdown",
    "PayrollInput",
    "PayrollStatus",
    "ResolvedRates",
    "calculate_attendance_metrics",
    "calculate_hours",
    "compute_input_fingerprint",
    "compute_payroll",
    "find_bracket",
    "is_below_minimum_wage",
    "pagibig",
    "pagibig_cap",
    "philhealth",
    "read_daily_rate",
    "resolve_rates",
    "sss",
    "traced_engine",
    "withholding_tax",
]
