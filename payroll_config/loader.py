"""
Configuration Loader (``payroll_config.loader``).

Responsibility
--------------
Loads a jurisdiction YAML file and parses it into the frozen
``payroll_config.schema`` dataclasses.  Runtime callers go through
``payroll_config.get_active_config()``; this module is the parsing layer
underneath it and is also used directly by tests.

Invariants enforced
-------------------
* Every numeric value is parsed through ``str`` into ``Decimal`` so YAML
  floats never leak binary rounding into the schedules.
* Every parsed config passes ``validate_jurisdiction_config`` before it is
  returned.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Bad values or structure  -> ``InvalidJurisdictionConfigError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from payroll_config.schema import (
    AttendancePolicy,
    AttendanceStandard,
    JurisdictionConfig,
    PremiumRates,
    StatutoryRates,
    TaxBracket,
    WorkflowPolicy,
)
from payroll_config.validator import validate_jurisdiction_config
from payroll_kernel.exceptions import InvalidJurisdictionConfigError
from payroll_kernel.logging_config import get_logger

logger = get_logger("config.loader")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        data = yaml.safe_load(f)
    return data or {}


def _decimal(value: Any, field_name: str) -> Decimal:
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"{field_name}: not a number: {value!r}") from e


def _decimal_fields(data: dict[str, Any], names: tuple[str, ...]) -> dict[str, Decimal]:
    return {name: _decimal(data[name], name) for name in names if name in data}


def _flag(value: Any, field_name: str) -> bool:
    # YAML already turns true/false into bool; a quoted "false" must not
    # become True.
    if not isinstance(value, bool):
        raise ValueError(f"{field_name}: expected true or false, got {value!r}")
    return value


def _parse_workflow(data: dict[str, Any]) -> WorkflowPolicy:
    if "forward_only" not in data:
        return WorkflowPolicy()
    return WorkflowPolicy(forward_only=_flag(data["forward_only"], "forward_only"))


def _parse_bracket(data: dict[str, Any]) -> TaxBracket:
    upper = data.get("upper_bound")
    return TaxBracket(
        lower_bound=_decimal(data["lower_bound"], "lower_bound"),
        upper_bound=None if upper is None else _decimal(upper, "upper_bound"),
        base_tax=_decimal(data.get("base_tax", "0"), "base_tax"),
        rate=_decimal(data.get("rate", "0"), "rate"),
        excess_over=_decimal(data.get("excess_over", "0"), "excess_over"),
    )


def _parse_statutory(data: dict[str, Any]) -> StatutoryRates:
    kwargs: dict[str, Any] = _decimal_fields(
        data,
        (
            "sss_rate",
            "sss_cap",
            "philhealth_rate",
            "philhealth_cap",
            "pagibig_rate",
            "pagibig_low_base_ceiling",
            "pagibig_low_base_cap",
            "pagibig_high_base_cap",
            "minimum_daily_wage",
        ),
    )
    if "withholding_brackets" in data:
        kwargs["withholding_brackets"] = tuple(
            _parse_bracket(b) for b in data["withholding_brackets"]
        )
    return StatutoryRates(**kwargs)


def _parse_premiums(data: dict[str, Any]) -> PremiumRates:
    return PremiumRates(
        **_decimal_fields(
            data,
            (
                "hours_per_day",
                "night_diff_rate",
                "regular_ot_multiplier",
                "rest_day_ot_multiplier",
                "holiday_ot_multiplier",
                "holiday_worked_day_multiplier",
            ),
        )
    )


def _parse_attendance(data: dict[str, Any]) -> AttendancePolicy:
    kwargs: dict[str, Any] = {}
    if "standard" in data:
        standard = data["standard"]
        standard_kwargs: dict[str, Any] = {}
        if "time_in" in standard:
            standard_kwargs["time_in"] = str(standard["time_in"])
        if "hours_per_day" in standard:
            standard_kwargs["hours_per_day"] = _decimal(
                standard["hours_per_day"], "hours_per_day"
            )
        kwargs["standard"] = AttendanceStandard(**standard_kwargs)
    if "late_grace_minutes" in data:
        kwargs["late_grace_minutes"] = int(data["late_grace_minutes"])
    if "half_day_max_hours" in data:
        kwargs["half_day_max_hours"] = _decimal(
            data["half_day_max_hours"], "half_day_max_hours"
        )
    return AttendancePolicy(**kwargs)


def parse_jurisdiction_config(
    data: dict[str, Any],
    source: str = "<dict>",
) -> JurisdictionConfig:
    """
    Parse a raw dict into a validated ``JurisdictionConfig``.

    Sections that are absent fall back to the built-in defaults, so a
    jurisdiction file only needs to state what differs.

    Raises:
        InvalidJurisdictionConfigError: if values are malformed or the
            assembled config fails validation.
    """
    try:
        config = JurisdictionConfig(
            code=str(data.get("code", "PH")),
            name=str(data.get("name", "Philippines")),
            currency=str(data.get("currency", "PHP")),
            rounding_mode=str(data.get("rounding_mode", "ROUND_HALF_UP")),
            statutory=_parse_statutory(data.get("statutory") or {}),
            premiums=_parse_premiums(data.get("premiums") or {}),
            attendance=_parse_attendance(data.get("attendance") or {}),
            workflow=_parse_workflow(data.get("workflow") or {}),
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.error(
            "jurisdiction_config_parse_failed",
            extra={"source": source, "error": str(e)},
        )
        raise InvalidJurisdictionConfigError(source, [str(e)]) from e

    validation = validate_jurisdiction_config(config)
    for warning in validation.warnings:
        logger.warning(
            "jurisdiction_config_warning",
            extra={"source": source, "warning": warning},
        )
    if not validation.is_valid:
        logger.error(
            "jurisdiction_config_invalid",
            extra={"source": source, "errors": validation.errors},
        )
        raise InvalidJurisdictionConfigError(source, validation.errors)

    return config


def load_jurisdiction_config(path: Path) -> JurisdictionConfig:
    """Load and validate a jurisdiction YAML file."""
    data = load_yaml_file(path)
    config = parse_jurisdiction_config(data, source=str(path))
    logger.info(
        "jurisdiction_config_loaded",
        extra={
            "path": str(path),
            "jurisdiction": config.code,
            "checksum": compute_checksum(config.to_dict()),
        },
    )
    return config


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
