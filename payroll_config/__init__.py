"""
payroll_config -- single public entrypoint for jurisdiction configuration.

Responsibility:
    Provides the one way to obtain the rates, caps, brackets and attendance
    thresholds at runtime through ``get_active_config()``.  No engine reads
    files or environment variables directly; engines take a
    ``JurisdictionConfig`` argument and default to this function's result.

Resolution order:
    1. An explicit ``path`` argument.
    2. The ``PAYROLL_JURISDICTION_CONFIG`` environment variable.
    3. The built-in Philippine defaults from ``payroll_config.schema``.

Failure modes:
    - ``FileNotFoundError`` -- a configured path does not exist.
    - ``InvalidJurisdictionConfigError`` -- the file fails validation.

Audit relevance:
    Every call emits a DEBUG ``PAYROLL_CONFIG_TRACE`` log entry with the
    jurisdiction code, source and checksum, tying computed payslips back to
    the exact schedule that produced them.
"""

from __future__ import annotations

import functools
import logging
import os
from pathlib import Path

from payroll_config.loader import compute_checksum, load_jurisdiction_config
from payroll_config.schema import (
    AttendancePolicy,
    AttendanceStandard,
    JurisdictionConfig,
    PremiumRates,
    StatutoryRates,
    TaxBracket,
    WorkflowPolicy,
)

_logger = logging.getLogger("payroll_kernel.config")

CONFIG_PATH_ENV = "PAYROLL_JURISDICTION_CONFIG"

JURISDICTIONS_DIR = Path(__file__).parent / "jurisdictions"

_DEFAULT_CONFIG = JurisdictionConfig()


def get_active_config(path: Path | str | None = None) -> JurisdictionConfig:
    """Return the jurisdiction configuration the engines should use."""
    source = path or os.environ.get(CONFIG_PATH_ENV)
    if source:
        config = _load_cached(str(source))
        source_label = str(source)
    else:
        config = _DEFAULT_CONFIG
        source_label = "builtin"

    if _logger.isEnabledFor(logging.DEBUG):
        _logger.debug(
            "PAYROLL_CONFIG_TRACE",
            extra={
                "trace_type": "PAYROLL_CONFIG_TRACE",
                "jurisdiction": config.code,
                "source": source_label,
                "checksum": compute_checksum(config.to_dict()),
            },
        )
    return config


@functools.lru_cache(maxsize=8)
def _load_cached(path: str) -> JurisdictionConfig:
    return load_jurisdiction_config(Path(path))


def reset_config_cache() -> None:
    """Forget loaded YAML files. FOR TESTING ONLY."""
    _load_cached.cache_clear()


__all__ = [
    "AttendancePolicy",
    "AttendanceStandard",
    "CONFIG_PATH_ENV",
    "JURISDICTIONS_DIR",
    "JurisdictionConfig",
    "PremiumRates",
    "StatutoryRates",
    "TaxBracket",
    "WorkflowPolicy",
    "get_active_config",
    "reset_config_cache",
]
