"""
Core value helpers (``payroll_kernel.domain.values``).

Responsibility
--------------
The numeric and clock primitives every engine shares: tolerant conversion
of raw form values into ``Decimal``, the two quantization steps used by
payroll (money to 0.01, hours to 0.1), and a wall-clock ``ClockTime``
parsed from ``"HH:MM"`` strings.

Architecture position
---------------------
**Kernel domain layer** -- pure functions and value objects.  ZERO I/O.
Imported by engines, config and modules; imports nothing from them.

Invariants enforced
-------------------
* Arithmetic is ``Decimal`` only -- floats are converted through ``str``
  so that ``0.1`` becomes ``Decimal("0.1")`` and not its binary expansion.
* ``coerce_decimal`` is total: blank, non-numeric, NaN and infinite
  values all become ``Decimal("0")``, and so does anything whose magnitude
  reaches ``MAX_INPUT_MAGNITUDE``.  A product of two coerced inputs then
  still quantizes inside the default 28-digit context.
* Rounding is explicit.  Nothing here rounds unless a ``quantize_*``
  helper is called.

Failure modes
-------------
* None.  ``ClockTime.parse`` returns ``None`` for malformed input rather
  than raising, because a half-filled punch form is a normal state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

MONEY_QUANTUM = Decimal("0.01")
HOURS_QUANTUM = Decimal("0.1")

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

_ZERO = Decimal("0")

# 100 billion.  Larger form values are typos, not amounts.
MAX_INPUT_MAGNITUDE = Decimal("1e11")
# Ceiling for amounts the engines derive from bounded inputs.
MAX_AMOUNT_MAGNITUDE = Decimal("1e24")


def coerce_decimal(value: Any, limit: Decimal = MAX_INPUT_MAGNITUDE) -> Decimal:
    """
    Convert a raw input value to ``Decimal``, falling back to zero.

    Accepts ``Decimal``, ``int``, ``float`` and numeric strings (surrounding
    whitespace ignored).  ``None``, ``bool``, empty strings, unparsable
    strings, NaN, infinities and values with ``abs(value) >= limit`` all
    coerce to ``Decimal("0")``.  Raw form fields keep the default
    ``MAX_INPUT_MAGNITUDE``; the statutory tables pass
    ``MAX_AMOUNT_MAGNITUDE`` because they receive computed amounts.

    Postconditions:
        - Always returns a finite ``Decimal`` whose magnitude is below ``limit``.
    """
    if value is None or isinstance(value, bool):
        return _ZERO

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return _ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            return _ZERO
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return _ZERO

    # copy_abs ignores the context, so an exponent past Emax cannot overflow
    if not result.is_finite() or result.copy_abs() >= limit:
        return _ZERO
    return result


def quantize_money(amount: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Round a monetary amount to 2 decimal places."""
    return amount.quantize(MONEY_QUANTUM, rounding=rounding)


def quantize_hours(hours: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Round an hour figure to 1 decimal place."""
    return hours.quantize(HOURS_QUANTUM, rounding=rounding)


@dataclass(frozen=True, slots=True)
class ClockTime:
    """
    A wall-clock time of day with minute precision.

    Contract:
        ``hour`` in 0..23 and ``minute`` in 0..59.  Carries no date and no
        timezone; overnight handling is the caller's job.
    """

    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour out of range: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute out of range: {self.minute}")

    @classmethod
    def parse(cls, value: str | time | ClockTime | None) -> ClockTime | None:
        """
        Parse ``"HH:MM"`` (or ``"HH:MM:SS"``, seconds ignored).

        Returns ``None`` for ``None``, blank strings and anything that is
        not a valid time of day.
        """
        if value is None:
            return None
        if isinstance(value, ClockTime):
            return value
        if isinstance(value, time):
            return cls(value.hour, value.minute)
        if not isinstance(value, str):
            return None

        parts = value.strip().split(":")
        if len(parts) not in (2, 3):
            return None
        try:
            hour, minute = int(parts[0]), int(parts[1])
        except ValueError:
            return None
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            return None
        return cls(hour, minute)

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * MINUTES_PER_HOUR + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"
