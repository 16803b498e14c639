"""
Payroll Engine (``payroll_engines.payroll``).

Responsibility
--------------
Turns one ``PayrollInput`` snapshot plus the employee's daily rate into a
complete, itemized ``PayrollBreakdown``: basic salary, premiums, gross
pay, attendance deductions, statutory contributions, withholding tax,
loans, total deductions and net pay.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O.  Composes
``payroll_engines.rates`` and ``payroll_engines.statutory``.  It consumes
attendance-derived totals (days worked, overtime and late hours) as plain
input fields and never calls the attendance engine itself.

Invariants enforced
-------------------
* The twelve steps run in a fixed order with a 2-decimal rounding after
  every intermediate amount.  Reordering changes results in the last
  cent, so the order is part of the contract.
* ``total_deductions`` is exactly the sum of ``itemized_deductions()``.
* ``net_pay == gross_pay + bonus - total_deductions``.
* Deterministic and side-effect free: the same input snapshot always
  yields an equal breakdown, and arguments are never mutated.

Failure modes
-------------
* None.  Missing, blank or non-numeric input fields are coerced to zero.
  Business validation (employee selected, days of work in range, no
  duplicate period) belongs to the caller; see
  ``payroll_modules.payroll.validation``.

Usage:
    from payroll_engines.payroll import PayrollInput, compute_payroll

    breakdown = compute_payroll(
        PayrollInput(employee_id="EMP-001", period="2024-06", days_of_work=22),
        {"dailyRate": 800},
    )
    print(breakdown.net_pay)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from decimal import Decimal
from enum import Enum
from typing import Any, Self

from payroll_config import JurisdictionConfig, get_active_config
from payroll_engines import statutory
from payroll_engines.rates import resolve_rates
from payroll_engines.tracer import traced_engine
from payroll_kernel.domain.values import coerce_decimal, quantize_money
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.payroll")


class PayrollStatus(str, Enum):
    """Payroll record status label."""

    PENDING = "Pending"
    PROCESSING = "Processing"
    PAID = "Paid"

    @classmethod
    def coerce(cls, value: Any, default: PayrollStatus | None = None) -> PayrollStatus:
        """Map a label (any case) to a status, falling back to ``default``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return default or cls.PENDING


LOAN_FIELDS: tuple[str, ...] = (
    "sss_loan",
    "pagibig_loan",
    "calamity_loan",
    "company_loan",
    "cash_advance",
    "other_deductions",
)

# Form-layer key -> PayrollInput attribute.
FORM_FIELD_MAP: dict[str, str] = {
    "employeeId": "employee_id",
    "period": "period",
    "daysOfWork": "days_of_work",
    "nightDiffHours": "night_diff_hours",
    "regularOtHours": "regular_ot_hours",
    "restDayOtHours": "rest_day_ot_hours",
    "holidayOtHours": "holiday_ot_hours",
    "holidayWorkedDays": "holiday_worked_days",
    "allowances": "allowances",
    "bonus": "bonus",
    "lateHours": "late_hours",
    "absenceDays": "absence_days",
    "sssLoan": "sss_loan",
    "pagibigLoan": "pagibig_loan",
    "calamityLoan": "calamity_loan",
    "companyLoan": "company_loan",
    "cashAdvance": "cash_advance",
    "otherDeductions": "other_deductions",
    "notes": "notes",
    "status": "status",
}


@dataclass(frozen=True)
class PayrollInput:
    """
    One payroll form snapshot for an employee and period.

    Values are stored as given (strings from the form are fine); the
    engine coerces them.  Frozen: an edit produces a new snapshot.
    """

    employee_id: str | None = None
    period: str | None = None
    days_of_work: Any = 0

    # Premiums
    night_diff_hours: Any = 0
    regular_ot_hours: Any = 0
    rest_day_ot_hours: Any = 0
    holiday_ot_hours: Any = 0
    holiday_worked_days: Any = 0
    allowances: Any = 0
    bonus: Any = 0

    # Attendance deductions
    late_hours: Any = 0
    absence_days: Any = 0

    # Loans and other deductions
    sss_loan: Any = 0
    pagibig_loan: Any = 0
    calamity_loan: Any = 0
    company_loan: Any = 0
    cash_advance: Any = 0
    other_deductions: Any = 0

    notes: str = ""
    status: Any = "Pending"

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> Self:
        """Build from a form payload keyed in camelCase or snake_case."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = FORM_FIELD_MAP.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class PayrollBreakdown:
    """
    Complete pay computation for one input snapshot.

    Immutable.  Becomes the audit artifact once the caller attaches it to
    a persisted payroll record.
    """

    daily_rate: Decimal
    hourly_rate: Decimal
    basic_salary: Decimal
    night_diff_amt: Decimal
    overtime_hrs: Decimal
    overtime_amt: Decimal
    rest_day_premiums: Decimal
    allowances: Decimal
    gross_pay: Decimal
    bonus: Decimal
    late_deduction: Decimal
    absence_deduction: Decimal
    adjusted_gross: Decimal
    sss: Decimal
    philhealth: Decimal
    pagibig: Decimal
    taxable_salary: Decimal
    withholding_tax: Decimal
    is_below_minimum: bool
    sss_loan: Decimal
    pagibig_loan: Decimal
    calamity_loan: Decimal
    company_loan: Decimal
    cash_advance: Decimal
    other_deductions: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    status: PayrollStatus = PayrollStatus.PENDING

    def itemized_deductions(self) -> dict[str, Decimal]:
        """Every term that makes up ``total_deductions``, in payslip order."""
        items = {
            "sss": self.sss,
            "philhealth": self.philhealth,
            "pagibig": self.pagibig,
            "withholding_tax": self.withholding_tax,
            "late_deduction": self.late_deduction,
            "absence_deduction": self.absence_deduction,
        }
        for name in LOAN_FIELDS:
            items[name] = getattr(self, name)
        return items

    @property
    def government_contributions(self) -> Decimal:
        return self.sss + self.philhealth + self.pagibig

    @property
    def loan_deductions(self) -> Decimal:
        return sum((getattr(self, name) for name in LOAN_FIELDS), Decimal("0.00"))

    def to_form(self) -> dict[str, Any]:
        """camelCase keys for the payroll form and the persistence layer."""
        return {
            "dailyRate": self.daily_rate,
            "hourlyRate": self.hourly_rate,
            "basicSalary": self.basic_salary,
            "nightDiffAmt": self.night_diff_amt,
            "overtimeHrs": self.overtime_hrs,
            "overtimeAmt": self.overtime_amt,
            "restDayPremiums": self.rest_day_premiums,
            "allowances": self.allowances,
            "grossPay": self.gross_pay,
            "bonus": self.bonus,
            "lateDeduction": self.late_deduction,
            "absenceDeduction": self.absence_deduction,
            "sss": self.sss,
            "philhealth": self.philhealth,
            "pagibig": self.pagibig,
            "taxableSalary": self.taxable_salary,
            "withholdingTax": self.withholding_tax,
            "isBelowMinimum": self.is_below_minimum,
            "sssLoan": self.sss_loan,
            "pagibigLoan": self.pagibig_loan,
            "calamityLoan": self.calamity_loan,
            "companyLoan": self.company_loan,
            "cashAdvance": self.cash_advance,
            "otherDeductions": self.other_deductions,
            "totalDeductions": self.total_deductions,
            "netPay": self.net_pay,
            "status": self.status.value,
        }


@traced_engine("payroll", "1.0", fingerprint_fields=("payroll_input", "employee"))
def compute_payroll(
    payroll_input: PayrollInput,
    employee: Any,
    config: JurisdictionConfig | None = None,
) -> PayrollBreakdown:
    """
    Compute a full pay breakdown.

    Args:
        payroll_input: The form snapshot.
        employee: Anything ``resolve_rates`` accepts (``Employee``, mapping
            with ``dailyRate``, or ``None``).
        config: Jurisdiction config; defaults to the active one.

    Returns:
        PayrollBreakdown.  Never raises for bad data.
    """
    config = config or get_active_config()
    rounding = config.rounding_mode
    premiums = config.premiums

    def money(value: Decimal) -> Decimal:
        return quantize_money(value, rounding)

    num = coerce_decimal
    p = payroll_input

    # 1. Rates
    rates = resolve_rates(employee, p.days_of_work, config)
    daily_rate = rates.daily_rate
    hourly_rate = rates.hourly_rate
    basic_salary = rates.basic_salary

    # 2. Night differential
    night_diff_amt = money(num(p.night_diff_hours) * hourly_rate * premiums.night_diff_rate)

    # 3. Overtime (hours kept unrounded)
    regular_ot = num(p.regular_ot_hours)
    rest_day_ot = num(p.rest_day_ot_hours)
    holiday_ot = num(p.holiday_ot_hours)
    overtime_hrs = regular_ot + rest_day_ot + holiday_ot
    overtime_amt = money(
        regular_ot * hourly_rate * premiums.regular_ot_multiplier
        + rest_day_ot * hourly_rate * premiums.rest_day_ot_multiplier
        + holiday_ot * hourly_rate * premiums.holiday_ot_multiplier
    )

    # 4. Holiday-worked days
    rest_day_premiums = money(
        num(p.holiday_worked_days) * daily_rate * premiums.holiday_worked_day_multiplier
    )

    # 5. Gross
    allowances = money(num(p.allowances))
    gross_pay = money(
        basic_salary + night_diff_amt + overtime_amt + rest_day_premiums + allowances
    )

    # 6. Attendance deductions
    late_deduction = money(num(p.late_hours) * hourly_rate)
    absence_deduction = money(num(p.absence_days) * daily_rate)

    # 7. Contribution base
    adjusted_gross = money(gross_pay - late_deduction - absence_deduction)

    # 8. Statutory contributions
    sss = statutory.sss(adjusted_gross, config)
    philhealth = statutory.philhealth(adjusted_gross, config)
    pagibig = statutory.pagibig(adjusted_gross, config)

    # 9. Taxable
    taxable_salary = money(adjusted_gross - sss - philhealth - pagibig)

    # 10. Withholding
    is_below_minimum = statutory.is_below_minimum_wage(daily_rate, config)
    withholding_tax = statutory.withholding_tax(taxable_salary, is_below_minimum, config)

    # 11. Total deductions
    loans = {name: money(num(getattr(p, name))) for name in LOAN_FIELDS}
    total_deductions = money(
        sss
        + philhealth
        + pagibig
        + withholding_tax
        + late_deduction
        + absence_deduction
        + sum(loans.values(), Decimal("0"))
    )

    # 12. Net
    bonus = money(num(p.bonus))
    net_pay = money(gross_pay + bonus - total_deductions)

    breakdown = PayrollBreakdown(
        daily_rate=daily_rate,
        hourly_rate=hourly_rate,
        basic_salary=basic_salary,
        night_diff_amt=night_diff_amt,
        overtime_hrs=overtime_hrs,
        overtime_amt=overtime_amt,
        rest_day_premiums=rest_day_premiums,
        allowances=allowances,
        gross_pay=gross_pay,
        bonus=bonus,
        late_deduction=late_deduction,
        absence_deduction=absence_deduction,
        adjusted_gross=adjusted_gross,
        sss=sss,
        philhealth=philhealth,
        pagibig=pagibig,
        taxable_salary=taxable_salary,
        withholding_tax=withholding_tax,
        is_below_minimum=is_below_minimum,
        total_deductions=total_deductions,
        net_pay=net_pay,
        status=PayrollStatus.coerce(p.status),
        **loans,
    )

    logger.debug(
        "payroll_computed",
        extra={
            "employee_id": p.employee_id,
            "period": p.period,
            "gross_pay": str(gross_pay),
            "total_deductions": str(total_deductions),
            "net_pay": str(net_pay),
            "is_below_minimum": is_below_minimum,
        },
    )
    return breakdown
