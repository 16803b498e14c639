"""
Jurisdiction configuration schema.

Every rate, cap, bracket boundary and base amount the payroll engines use
is declared here as a named constant and gathered into frozen dataclasses.
A jurisdiction change edits this module (or a YAML file parsed into these
types by the loader) and nothing else.

The defaults are the Philippine schedules: SSS, PhilHealth and Pag-IBIG
employee shares, and the six-bracket monthly withholding table.
"""

from __future__ import annotations

import decimal
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any, Self

from payroll_kernel.domain.values import ClockTime
from payroll_kernel.logging_config import get_logger

logger = get_logger("config.schema")

# ---------------------------------------------------------------------------
# Statutory contributions
# ---------------------------------------------------------------------------

SSS_RATE = Decimal("0.05")
SSS_CAP = Decimal("1350")

PHILHEALTH_RATE = Decimal("0.025")
PHILHEALTH_CAP = Decimal("2500")

PAGIBIG_RATE = Decimal("0.02")
PAGIBIG_LOW_BASE_CEILING = Decimal("5000")
PAGIBIG_LOW_BASE_CAP = Decimal("100")
PAGIBIG_HIGH_BASE_CAP = Decimal("200")

# Earners at or below this daily rate are exempt from withholding tax.
MINIMUM_DAILY_WAGE = Decimal("685")

# ---------------------------------------------------------------------------
# Withholding tax brackets (monthly taxable income)
# ---------------------------------------------------------------------------

TAX_BRACKET_1_CEILING = Decimal("20833")
TAX_BRACKET_2_CEILING = Decimal("33332")
TAX_BRACKET_3_CEILING = Decimal("66666")
TAX_BRACKET_4_CEILING = Decimal("166666")
TAX_BRACKET_5_CEILING = Decimal("666666")

TAX_BRACKET_2_EXCESS_OVER = Decimal("20833")
TAX_BRACKET_3_EXCESS_OVER = Decimal("33333")
TAX_BRACKET_4_EXCESS_OVER = Decimal("66667")
TAX_BRACKET_5_EXCESS_OVER = Decimal("166667")
TAX_BRACKET_6_EXCESS_OVER = Decimal("666667")

TAX_BRACKET_3_BASE = Decimal("2500")
TAX_BRACKET_4_BASE = Decimal("10833.33")
TAX_BRACKET_5_BASE = Decimal("40833.33")
TAX_BRACKET_6_BASE = Decimal("200833.33")

TAX_BRACKET_2_RATE = Decimal("0.20")
TAX_BRACKET_3_RATE = Decimal("0.25")
TAX_BRACKET_4_RATE = Decimal("0.30")
TAX_BRACKET_5_RATE = Decimal("0.32")
TAX_BRACKET_6_RATE = Decimal("0.35")

# ---------------------------------------------------------------------------
# Premiums and rate basis
# ---------------------------------------------------------------------------

HOURS_PER_DAY = Decimal("8")
NIGHT_DIFF_RATE = Decimal("0.10")
REGULAR_OT_MULTIPLIER = Decimal("1.25")
REST_DAY_OT_MULTIPLIER = Decimal("1.30")
HOLIDAY_OT_MULTIPLIER = Decimal("2.0")
HOLIDAY_WORKED_DAY_MULTIPLIER = Decimal("2.0")

# ---------------------------------------------------------------------------
# Attendance policy
# ---------------------------------------------------------------------------

STANDARD_TIME_IN = "08:00"
STANDARD_HOURS_PER_DAY = Decimal("8")
LATE_GRACE_MINUTES = 15
HALF_DAY_MAX_HOURS = Decimal("4")

DEFAULT_ROUNDING_MODE = decimal.ROUND_HALF_UP

VALID_ROUNDING_MODES = {
    decimal.ROUND_HALF_UP,
    decimal.ROUND_HALF_EVEN,
    decimal.ROUND_HALF_DOWN,
}


@dataclass(frozen=True)
class TaxBracket:
    """
    One row of a progressive withholding schedule.

    Applies to taxable income above ``lower_bound`` and up to and including
    ``upper_bound`` (``None`` means unbounded).  Tax is
    ``base_tax + rate * (taxable - excess_over)``.
    """

    lower_bound: Decimal
    upper_bound: Decimal | None
    base_tax: Decimal = Decimal("0")
    rate: Decimal = Decimal("0")
    excess_over: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if self.rate < 0 or self.rate > 1:
            raise ValueError(f"bracket rate must be between 0 and 1, got {self.rate}")
        if self.base_tax < 0:
            raise ValueError("bracket base_tax cannot be negative")
        if self.upper_bound is not None and self.upper_bound <= self.lower_bound:
            raise ValueError(
                f"bracket upper_bound {self.upper_bound} must exceed "
                f"lower_bound {self.lower_bound}"
            )

    def contains(self, taxable: Decimal) -> bool:
        """True if ``taxable`` falls within this bracket."""
        return self.upper_bound is None or taxable <= self.upper_bound


WITHHOLDING_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(
        lower_bound=Decimal("0"),
        upper_bound=TAX_BRACKET_1_CEILING,
    ),
    TaxBracket(
        lower_bound=TAX_BRACKET_1_CEILING,
        upper_bound=TAX_BRACKET_2_CEILING,
        rate=TAX_BRACKET_2_RATE,
        excess_over=TAX_BRACKET_2_EXCESS_OVER,
    ),
    TaxBracket(
        lower_bound=TAX_BRACKET_2_CEILING,
        upper_bound=TAX_BRACKET_3_CEILING,
        base_tax=TAX_BRACKET_3_BASE,
        rate=TAX_BRACKET_3_RATE,
        excess_over=TAX_BRACKET_3_EXCESS_OVER,
    ),
    TaxBracket(
        lower_bound=TAX_BRACKET_3_CEILING,
        upper_bound=TAX_BRACKET_4_CEILING,
        base_tax=TAX_BRACKET_4_BASE,
        rate=TAX_BRACKET_4_RATE,
        excess_over=TAX_BRACKET_4_EXCESS_OVER,
    ),
    TaxBracket(
        lower_bound=TAX_BRACKET_4_CEILING,
        upper_bound=TAX_BRACKET_5_CEILING,
        base_tax=TAX_BRACKET_5_BASE,
        rate=TAX_BRACKET_5_RATE,
        excess_over=TAX_BRACKET_5_EXCESS_OVER,
    ),
    TaxBracket(
        lower_bound=TAX_BRACKET_5_CEILING,
        upper_bound=None,
        base_tax=TAX_BRACKET_6_BASE,
        rate=TAX_BRACKET_6_RATE,
        excess_over=TAX_BRACKET_6_EXCESS_OVER,
    ),
)


@dataclass(frozen=True)
class StatutoryRates:
    """Government contribution rates, caps and the withholding schedule."""

    sss_rate: Decimal = SSS_RATE
    sss_cap: Decimal = SSS_CAP
    philhealth_rate: Decimal = PHILHEALTH_RATE
    philhealth_cap: Decimal = PHILHEALTH_CAP
    pagibig_rate: Decimal = PAGIBIG_RATE
    pagibig_low_base_ceiling: Decimal = PAGIBIG_LOW_BASE_CEILING
    pagibig_low_base_cap: Decimal = PAGIBIG_LOW_BASE_CAP
    pagibig_high_base_cap: Decimal = PAGIBIG_HIGH_BASE_CAP
    minimum_daily_wage: Decimal = MINIMUM_DAILY_WAGE
    withholding_brackets: tuple[TaxBracket, ...] = WITHHOLDING_BRACKETS

    def __post_init__(self) -> None:
        for name in ("sss_rate", "philhealth_rate", "pagibig_rate"):
            value = getattr(self, name)
            if value < 0 or value > 1:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        for name in (
            "sss_cap",
            "philhealth_cap",
            "pagibig_low_base_cap",
            "pagibig_high_base_cap",
            "pagibig_low_base_ceiling",
            "minimum_daily_wage",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")
        if not self.withholding_brackets:
            raise ValueError("withholding_brackets cannot be empty")


@dataclass(frozen=True)
class PremiumRates:
    """Multipliers for premium pay and the hourly-rate divisor."""

    hours_per_day: Decimal = HOURS_PER_DAY
    night_diff_rate: Decimal = NIGHT_DIFF_RATE
    regular_ot_multiplier: Decimal = REGULAR_OT_MULTIPLIER
    rest_day_ot_multiplier: Decimal = REST_DAY_OT_MULTIPLIER
    holiday_ot_multiplier: Decimal = HOLIDAY_OT_MULTIPLIER
    holiday_worked_day_multiplier: Decimal = HOLIDAY_WORKED_DAY_MULTIPLIER

    def __post_init__(self) -> None:
        if self.hours_per_day <= 0:
            raise ValueError("hours_per_day must be positive")
        for name in (
            "night_diff_rate",
            "regular_ot_multiplier",
            "rest_day_ot_multiplier",
            "holiday_ot_multiplier",
            "holiday_worked_day_multiplier",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")


@dataclass(frozen=True)
class AttendanceStandard:
    """The expected shift: start time and length."""

    time_in: str = STANDARD_TIME_IN
    hours_per_day: Decimal = STANDARD_HOURS_PER_DAY

    def __post_init__(self) -> None:
        if ClockTime.parse(self.time_in) is None:
            raise ValueError(f"time_in must be 'HH:MM', got {self.time_in!r}")
        if self.hours_per_day <= 0:
            raise ValueError("hours_per_day must be positive")


@dataclass(frozen=True)
class AttendancePolicy:
    """Classification thresholds for daily attendance."""

    standard: AttendanceStandard = field(default_factory=AttendanceStandard)
    late_grace_minutes: int = LATE_GRACE_MINUTES
    half_day_max_hours: Decimal = HALF_DAY_MAX_HOURS

    def __post_init__(self) -> None:
        if self.late_grace_minutes < 0:
            raise ValueError("late_grace_minutes cannot be negative")
        if self.half_day_max_hours < 0:
            raise ValueError("half_day_max_hours cannot be negative")


@dataclass(frozen=True)
class WorkflowPolicy:
    """How payroll record status labels may change."""

    # False keeps status changes free-form; True allows only
    # Pending -> Processing -> Paid.
    forward_only: bool = False


@dataclass(frozen=True)
class JurisdictionConfig:
    """
    Root configuration object consumed by the engines.

    Build with defaults (``JurisdictionConfig()``), or from a dict or YAML
    file via ``payroll_config.loader``.
    """

    code: str = "PH"
    name: str = "Philippines"
    currency: str = "PHP"
    rounding_mode: str = DEFAULT_ROUNDING_MODE
    statutory: StatutoryRates = field(default_factory=StatutoryRates)
    premiums: PremiumRates = field(default_factory=PremiumRates)
    attendance: AttendancePolicy = field(default_factory=AttendancePolicy)
    workflow: WorkflowPolicy = field(default_factory=WorkflowPolicy)

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("code cannot be empty")
        if self.rounding_mode not in VALID_ROUNDING_MODES:
            raise ValueError(
                f"rounding_mode must be one of {sorted(VALID_ROUNDING_MODES)}, "
                f"got '{self.rounding_mode}'"
            )
        logger.debug(
            "jurisdiction_config_initialized",
            extra={
                "jurisdiction": self.code,
                "rounding_mode": self.rounding_mode,
                "bracket_count": len(self.statutory.withholding_brackets),
                "forward_only_workflow": self.workflow.forward_only,
            },
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with the built-in Philippine schedules."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form, used for checksums and YAML round trips."""
        return asdict(self)
