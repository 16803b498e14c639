"""Payroll module: records, submission validation, status workflow and reports."""

from payroll_engines.payroll import PayrollStatus
from payroll_modules.payroll.helpers import PayrollSummary, summarize_payroll
from payroll_modules.payroll.models import Employee, PayrollRecord
from payroll_modules.payroll.service import PayrollService
from payroll_modules.payroll.validation import (
    PayrollPeriodIndex,
    ValidationViolation,
    ensure_valid_submission,
    period_length_days,
    validate_payroll_submission,
)
from payroll_modules.payroll.workflows import (
    PAYROLL_STATUS_FREE_FORM_WORKFLOW,
    PAYROLL_STATUS_WORKFLOW,
    transition_status,
    workflow_for,
)

__all__ = [
    "Employee",
    "PAYROLL_STATUS_FREE_FORM_WORKFLOW",
    "PAYROLL_STATUS_WORKFLOW",
    "PayrollPeriodIndex",
    "PayrollRecord",
    "PayrollService",
    "PayrollStatus",
    "PayrollSummary",
    "ValidationViolation",
    "ensure_valid_submission",
    "period_length_days",
    "summarize_payroll",
    "transition_status",
    "validate_payroll_submission",
    "workflow_for",
]
