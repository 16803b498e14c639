"""
Configuration Validator (``payroll_config.validator``).

Responsibility
--------------
Cross-field checks on a ``JurisdictionConfig`` that single-dataclass
``__post_init__`` checks cannot see: the withholding schedule must be a
contiguous, ordered, progressive table, and the attendance thresholds
must make sense against the standard shift.

Failure modes
-------------
* Validation errors  -> the loader refuses the configuration.
* Validation warnings  -> the configuration loads but should be reviewed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from payroll_config.schema import JurisdictionConfig, TaxBracket

# Largest jump in tax allowed where one bracket hands over to the next
# before a warning is raised.
BRACKET_CONTINUITY_TOLERANCE = Decimal("1.00")


@dataclass
class ConfigValidationResult:
    """
    Result of configuration validation.

    ``is_valid`` is ``True`` only when ``errors`` is empty.  Warnings do
    not block loading.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_jurisdiction_config(config: JurisdictionConfig) -> ConfigValidationResult:
    """Run every structural check and collect the findings."""
    result = ConfigValidationResult()
    _validate_brackets(config.statutory.withholding_brackets, result)
    _validate_pagibig(config, result)
    _validate_attendance(config, result)
    return result


def _validate_brackets(
    brackets: tuple[TaxBracket, ...],
    result: ConfigValidationResult,
) -> None:
    if not brackets:
        result.errors.append("withholding schedule has no brackets")
        return

    if brackets[0].lower_bound != 0:
        result.errors.append(
            f"first bracket must start at 0, starts at {brackets[0].lower_bound}"
        )

    for index, bracket in enumerate(brackets):
        is_last = index == len(brackets) - 1
        if bracket.upper_bound is None and not is_last:
            result.errors.append(f"bracket {index + 1} is unbounded but is not the last bracket")
        if is_last and bracket.upper_bound is not None:
            result.errors.append("last bracket must be unbounded (upper_bound: null)")

        if index == 0:
            continue

        previous = brackets[index - 1]
        if previous.upper_bound is not None and bracket.lower_bound != previous.upper_bound:
            result.errors.append(
                f"bracket {index + 1} starts at {bracket.lower_bound} but bracket "
                f"{index} ends at {previous.upper_bound}"
            )
        if bracket.rate < previous.rate:
            result.errors.append(
                f"bracket {index + 1} rate {bracket.rate} is lower than "
                f"bracket {index} rate {previous.rate}"
            )
        if bracket.base_tax < previous.base_tax:
            result.errors.append(
                f"bracket {index + 1} base tax {bracket.base_tax} is lower than "
                f"bracket {index} base tax {previous.base_tax}"
            )

        if previous.upper_bound is not None:
            tax_at_ceiling = previous.base_tax + previous.rate * max(
                Decimal("0"), previous.upper_bound - previous.excess_over
            )
            jump = abs(bracket.base_tax - tax_at_ceiling)
            if bracket.base_tax and jump > BRACKET_CONTINUITY_TOLERANCE:
                result.warnings.append(
                    f"tax jumps by {jump} between bracket {index} and bracket {index + 1}"
                )


def _validate_pagibig(config: JurisdictionConfig, result: ConfigValidationResult) -> None:
    statutory = config.statutory
    if statutory.pagibig_low_base_cap > statutory.pagibig_high_base_cap:
        result.errors.append(
            f"pagibig_low_base_cap {statutory.pagibig_low_base_cap} exceeds "
            f"pagibig_high_base_cap {statutory.pagibig_high_base_cap}"
        )


def _validate_attendance(config: JurisdictionConfig, result: ConfigValidationResult) -> None:
    policy = config.attendance
    if policy.half_day_max_hours >= policy.standard.hours_per_day:
        result.warnings.append(
            f"half_day_max_hours {policy.half_day_max_hours} is not below the "
            f"standard shift of {policy.standard.hours_per_day} hours; every "
            f"complete shift would be a half day"
        )
