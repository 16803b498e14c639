"""
Statutory Contribution Tables (``payroll_engines.statutory``).

Responsibility
--------------
Pure lookup and bracket functions for the government contributions
(SSS, PhilHealth, Pag-IBIG) and the progressive withholding tax.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O.  Every rate, cap and
bracket comes from a ``JurisdictionConfig``; none is written inline here.

Invariants enforced
-------------------
* Each result is quantized to 2 decimal places with the config's
  rounding mode.
* Contributions are never negative: a base at or below zero yields zero.
* Withholding tax is zero for minimum-wage earners regardless of the
  taxable amount.

Failure modes
-------------
* None.  Non-numeric bases are coerced to zero.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from payroll_config import JurisdictionConfig, TaxBracket, get_active_config
from payroll_kernel.domain.values import MAX_AMOUNT_MAGNITUDE, coerce_decimal, quantize_money
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.statutory")

_ZERO = Decimal("0")


def _amount(value: Any) -> Decimal:
    return coerce_decimal(value, limit=MAX_AMOUNT_MAGNITUDE)


def _contribution_base(base: Any) -> Decimal:
    return max(_amount(base), _ZERO)


def sss(base: Any, config: JurisdictionConfig | None = None) -> Decimal:
    """SSS employee share: ``min(base * rate, cap)``."""
    config = config or get_active_config()
    rates = config.statutory
    amount = min(_contribution_base(base) * rates.sss_rate, rates.sss_cap)
    return quantize_money(amount, config.rounding_mode)


def philhealth(base: Any, config: JurisdictionConfig | None = None) -> Decimal:
    """PhilHealth employee share: ``min(base * rate, cap)``."""
    config = config or get_active_config()
    rates = config.statutory
    amount = min(_contribution_base(base) * rates.philhealth_rate, rates.philhealth_cap)
    return quantize_money(amount, config.rounding_mode)


def pagibig_cap(base: Any, config: JurisdictionConfig | None = None) -> Decimal:
    """The Pag-IBIG cap that applies to ``base`` (low cap up to the ceiling)."""
    rates = (config or get_active_config()).statutory
    if _amount(base) <= rates.pagibig_low_base_ceiling:
        return rates.pagibig_low_base_cap
    return rates.pagibig_high_base_cap


def pagibig(base: Any, config: JurisdictionConfig | None = None) -> Decimal:
    """Pag-IBIG (HDMF) employee share: ``min(base * rate, cap(base))``."""
    config = config or get_active_config()
    amount = min(
        _contribution_base(base) * config.statutory.pagibig_rate,
        pagibig_cap(base, config),
    )
    return quantize_money(amount, config.rounding_mode)


def is_below_minimum_wage(daily_rate: Any, config: JurisdictionConfig | None = None) -> bool:
    """True when the daily rate is at or below the statutory minimum."""
    rates = (config or get_active_config()).statutory
    return coerce_decimal(daily_rate) <= rates.minimum_daily_wage


def find_bracket(taxable: Decimal, brackets: tuple[TaxBracket, ...]) -> TaxBracket:
    """Return the bracket whose range contains ``taxable``."""
    for bracket in brackets:
        if bracket.contains(taxable):
            return bracket
    return brackets[-1]


def withholding_tax(
    taxable: Any,
    is_below_minimum: bool,
    config: JurisdictionConfig | None = None,
) -> Decimal:
    """
    Progressive withholding tax on monthly-equivalent taxable income.

    ``base_tax + rate * (taxable - excess_over)`` for the bracket containing
    ``taxable``.  The excess is floored at zero, which only matters in the
    one-peso gaps between a bracket's ceiling and the next bracket's
    ``excess_over`` point.
    """
    config = config or get_active_config()
    if is_below_minimum:
        return quantize_money(_ZERO, config.rounding_mode)

    amount = _amount(taxable)
    if amount <= 0:
        return quantize_money(_ZERO, config.rounding_mode)

    bracket = find_bracket(amount, config.statutory.withholding_brackets)
    excess = max(amount - bracket.excess_over, _ZERO)
    tax = bracket.base_tax + bracket.rate * excess

    logger.debug(
        "withholding_bracket_applied",
        extra={
            "taxable": str(amount),
            "bracket_lower": str(bracket.lower_bound),
            "bracket_upper": str(bracket.upper_bound) if bracket.upper_bound is not None else None,
            "tax": str(tax),
        },
    )
    return quantize_money(tax, config.rounding_mode)
