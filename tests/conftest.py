"""
Pytest fixtures for the payroll kernel test suite.

Provides:
- Clean logging and config-cache state for every test
- Jurisdiction configs (built-in defaults and the forward-only variant)
- Employee and payroll input builders
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from payroll_config import JurisdictionConfig, WorkflowPolicy, reset_config_cache
from payroll_config import CONFIG_PATH_ENV
from payroll_engines.payroll import PayrollInput
from payroll_kernel.logging_config import LogContext, reset_logging
from payroll_modules.payroll import Employee


@pytest.fixture(autouse=True)
def _isolate_state(monkeypatch):
    """Every test starts from default config, no log handlers, empty context."""
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    reset_config_cache()
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()
    reset_config_cache()


@pytest.fixture
def ph_config() -> JurisdictionConfig:
    return JurisdictionConfig()


@pytest.fixture
def forward_only_config(ph_config) -> JurisdictionConfig:
    return replace(ph_config, workflow=WorkflowPolicy(forward_only=True))


@pytest.fixture
def employee() -> Employee:
    return Employee(
        id="EMP-001",
        daily_rate=Decimal("800"),
        first_name="Maria",
        last_name="Santos",
        department="Operations",
        position="Clerk",
    )


@pytest.fixture
def make_input():
    """Builder for payroll form snapshots with sensible defaults."""

    def _make(**overrides) -> PayrollInput:
        fields = {"employee_id": "EMP-001", "period": "2024-06", "days_of_work": 22}
        fields.update(overrides)
        return PayrollInput(**fields)

    return _make
