"""
Rate Resolver (``payroll_engines.rates``).

Derives an employee's daily rate, hourly rate and period basic salary.

The employee directory is an external collaborator, so the resolver is
deliberately liberal in what it accepts as an "employee": an object with a
``daily_rate`` attribute, a mapping keyed ``daily_rate`` or ``dailyRate``
(the form layer's spelling), or ``None``.  Anything missing or non-numeric
degrades to a zero rate; validating the selection is the caller's job.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from payroll_config import JurisdictionConfig, get_active_config
from payroll_kernel.domain.values import coerce_decimal, quantize_money


@dataclass(frozen=True)
class ResolvedRates:
    """Rates derived for one employee and one period."""

    daily_rate: Decimal
    hourly_rate: Decimal
    basic_salary: Decimal


def read_daily_rate(employee: Any) -> Decimal:
    """Read the daily rate verbatim from an employee-like value (0 if absent)."""
    if employee is None:
        return coerce_decimal(None)
    if isinstance(employee, Mapping):
        raw = employee.get("daily_rate", employee.get("dailyRate"))
    else:
        raw = getattr(employee, "daily_rate", None)
    return coerce_decimal(raw)


def resolve_rates(
    employee: Any,
    days_of_work: Any,
    config: JurisdictionConfig | None = None,
) -> ResolvedRates:
    """
    Resolve daily/hourly rates and basic salary.

    ``hourly_rate = daily_rate / hours_per_day`` and
    ``basic_salary = daily_rate * days_of_work``, each rounded to 2 places.
    The daily rate itself is not rounded.
    """
    config = config or get_active_config()
    rounding = config.rounding_mode

    daily_rate = read_daily_rate(employee)
    days = coerce_decimal(days_of_work)

    return ResolvedRates(
        daily_rate=daily_rate,
        hourly_rate=quantize_money(daily_rate / config.premiums.hours_per_day, rounding),
        basic_salary=quantize_money(daily_rate * days, rounding),
    )
