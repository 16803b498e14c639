"""
Typed exception hierarchy for the payroll kernel.

Every error has a typed class (catch by type, not by message), a ``code``
class attribute (machine-readable, safe to hand to the form layer), and
its context stored as attributes rather than folded into the message.

    PayrollKernelError (base)
    |
    +-- InputValidationError
    |   +-- PayrollInputRejectedError
    |
    +-- AttendanceError
    |   +-- CheckoutCorrectionError
    |
    +-- WorkflowError
    |   +-- InvalidStatusError
    |   +-- InvalidStatusTransitionError
    |
    +-- ConfigurationError
        +-- InvalidJurisdictionConfigError

The calculation engines never raise any of these for bad data; blank or
non-numeric fields are coerced to zero.  Input validation happens in the
caller before the engine runs, and a rejected submission is reported with
``PayrollInputRejectedError``.

Handling pattern:

    try:
        record = service.submit(payroll_input, employee)
    except PayrollInputRejectedError as e:
        return {
            "error": e.code,
            "violations": [v.code for v in e.violations],
        }
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Input validation


class InputValidationError(PayrollKernelError):
    """Base exception for caller-side input validation errors."""

    code: str = "INPUT_VALIDATION_ERROR"


class PayrollInputRejectedError(InputValidationError):
    """
    A payroll submission failed business-rule validation.

    Carries every violation found, not just the first, so the form can
    show all problems at once.
    """

    code: str = "PAYROLL_INPUT_REJECTED"

    def __init__(self, employee_id: str | None, period: str | None, violations: Sequence[Any]):
        self.employee_id = employee_id
        self.period = period
        self.violations = tuple(violations)
        messages = "; ".join(v.message for v in self.violations)
        super().__init__(
            f"Payroll submission rejected for employee {employee_id!r}, "
            f"period {period!r}: {messages}"
        )


# Attendance


class AttendanceError(PayrollKernelError):
    """Base exception for attendance record errors."""

    code: str = "ATTENDANCE_ERROR"


class CheckoutCorrectionError(AttendanceError):
    """A checkout correction cannot be applied to this record."""

    code: str = "CHECKOUT_CORRECTION_INVALID"

    def __init__(self, employee_id: str, work_date: Any, reason: str):
        self.employee_id = employee_id
        self.work_date = work_date
        self.reason = reason
        super().__init__(
            f"Cannot correct checkout for employee {employee_id} on {work_date}: {reason}"
        )


# Workflow


class WorkflowError(PayrollKernelError):
    """Base exception for status workflow errors."""

    code: str = "WORKFLOW_ERROR"


class InvalidStatusError(WorkflowError):
    """Status label is not a member of the workflow."""

    code: str = "INVALID_PAYROLL_STATUS"

    def __init__(self, status: Any, allowed: Sequence[str]):
        self.status = status
        self.allowed = tuple(allowed)
        super().__init__(
            f"Invalid payroll status {status!r}; expected one of {', '.join(self.allowed)}"
        )


class InvalidStatusTransitionError(WorkflowError):
    """Status change is not permitted by the active workflow policy."""

    code: str = "INVALID_STATUS_TRANSITION"

    def __init__(self, workflow: str, from_status: str, to_status: str):
        self.workflow = workflow
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Workflow '{workflow}' does not allow {from_status} -> {to_status}"
        )


# Configuration


class ConfigurationError(PayrollKernelError):
    """Base exception for jurisdiction configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class InvalidJurisdictionConfigError(ConfigurationError):
    """A jurisdiction configuration failed structural validation."""

    code: str = "INVALID_JURISDICTION_CONFIG"

    def __init__(self, source: str, errors: Sequence[str]):
        self.source = source
        self.errors = tuple(errors)
        super().__init__(
            f"Invalid jurisdiction configuration ({source}): "
            f"{len(self.errors)} error(s): " + "; ".join(self.errors)
        )
