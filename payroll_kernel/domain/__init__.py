"""
Pure domain layer.

Value helpers and workflow types with NO dependencies on:
- Persistence
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from payroll_kernel.domain.values import (
    HOURS_QUANTUM,
    MAX_AMOUNT_MAGNITUDE,
    MAX_INPUT_MAGNITUDE,
    MONEY_QUANTUM,
    ClockTime,
    coerce_decimal,
    quantize_hours,
    quantize_money,
)
from payroll_kernel.domain.workflow import Transition, Workflow

__all__ = [
    "HOURS_QUANTUM",
    "MAX_AMOUNT_MAGNITUDE",
    "MAX_INPUT_MAGNITUDE",
    "MONEY_QUANTUM",
    "ClockTime",
    "Transition",
    "Workflow",
    "coerce_decimal",
    "quantize_hours",
    "quantize_money",
]
