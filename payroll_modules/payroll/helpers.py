"""
Payroll Helpers (``payroll_modules.payroll.helpers``).

Pure aggregation over payroll records for the dashboard and reports
pages.  No I/O.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

from payroll_engines.payroll import LOAN_FIELDS, PayrollStatus
from payroll_modules.payroll.models import PayrollRecord

_ZERO = Decimal("0.00")

DEDUCTION_ITEMS: tuple[str, ...] = (
    "sss",
    "philhealth",
    "pagibig",
    "withholding_tax",
    "late_deduction",
    "absence_deduction",
) + LOAN_FIELDS


@dataclass(frozen=True)
class PayrollSummary:
    """
    Totals across a set of payroll records.

    The two mappings are read-only views and take no part in ``hash()``;
    equality still compares them.
    """
    record_count: int = 0
    employee_count: int = 0
    total_gross_pay: Decimal = _ZERO
    total_bonus: Decimal = _ZERO
    total_deductions: Decimal = _ZERO
    total_net_pay: Decimal = _ZERO
    status_counts: Mapping[str, int] = field(default_factory=dict, hash=False)
    deduction_totals: Mapping[str, Decimal] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "status_counts", MappingProxyType(dict(self.status_counts)))
        object.__setattr__(self, "deduction_totals", MappingProxyType(dict(self.deduction_totals)))

    @property
    def total_government_contributions(self) -> Decimal:
        return sum(
            (self.deduction_totals.get(name, _ZERO) for name in ("sss", "philhealth", "pagibig")),
            _ZERO,
        )


def summarize_payroll(
    records: Iterable[PayrollRecord],
    period: str | None = None,
) -> PayrollSummary:
    """
    Aggregate records, optionally restricted to one period.

    Every status label and deduction item appears in the result, with zero
    where no record contributes.
    """
    selected = [r for r in records if period is None or r.period == period]

    statuses = Counter(r.status for r in selected)
    deduction_totals = {
        name: sum((getattr(r.breakdown, name) for r in selected), _ZERO)
        for name in DEDUCTION_ITEMS
    }
    return PayrollSummary(
        record_count=len(selected),
        employee_count=len({r.employee_id for r in selected}),
        total_gross_pay=sum((r.breakdown.gross_pay for r in selected), _ZERO),
        total_bonus=sum((r.breakdown.bonus for r in selected), _ZERO),
        total_deductions=sum((r.breakdown.total_deductions for r in selected), _ZERO),
        total_net_pay=sum((r.net_pay for r in selected), _ZERO),
        status_counts={status.value: statuses[status] for status in PayrollStatus},
        deduction_totals=deduction_totals,
    )
