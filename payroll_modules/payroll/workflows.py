"""Payroll Workflows.

Status label lifecycle for payroll records.  Two policies:

* free-form (default): any status may be set from any other, matching how
  the payroll list is edited by hand.
* forward-only: Pending -> Processing -> Paid, nothing backwards.
"""

from __future__ import annotations

from itertools import permutations
from typing import Any

from payroll_config import JurisdictionConfig, get_active_config
from payroll_engines.payroll import PayrollStatus
from payroll_kernel.domain.workflow import Transition, Workflow
from payroll_kernel.exceptions import InvalidStatusError, InvalidStatusTransitionError
from payroll_kernel.logging_config import get_logger
from payroll_modules.payroll.models import PayrollRecord

logger = get_logger("modules.payroll.workflows")

_STATES = tuple(status.value for status in PayrollStatus)

_ACTIONS = {
    PayrollStatus.PENDING.value: "reopen",
    PayrollStatus.PROCESSING.value: "process",
    PayrollStatus.PAID.value: "pay",
}


PAYROLL_STATUS_WORKFLOW = Workflow(
    name="payroll_status",
    description="Forward-only payroll record lifecycle",
    initial_state=PayrollStatus.PENDING.value,
    states=_STATES,
    transitions=(
        Transition(PayrollStatus.PENDING.value, PayrollStatus.PROCESSING.value, action="process"),
        Transition(PayrollStatus.PROCESSING.value, PayrollStatus.PAID.value, action="pay"),
    ),
)

PAYROLL_STATUS_FREE_FORM_WORKFLOW = Workflow(
    name="payroll_status_free_form",
    description="Payroll record status set freely by the user",
    initial_state=PayrollStatus.PENDING.value,
    states=_STATES,
    transitions=tuple(
        Transition(source, target, action=_ACTIONS[target])
        for source, target in permutations(_STATES, 2)
    ),
)


def workflow_for(config: JurisdictionConfig | None = None) -> Workflow:
    """The status workflow selected by the jurisdiction's workflow policy."""
    config = config or get_active_config()
    if config.workflow.forward_only:
        return PAYROLL_STATUS_WORKFLOW
    return PAYROLL_STATUS_FREE_FORM_WORKFLOW


def parse_status(value: Any) -> PayrollStatus:
    """
    Strict status lookup (case-insensitive).

    Raises:
        InvalidStatusError: for anything that is not a known status label.
    """
    if isinstance(value, PayrollStatus):
        return value
    if isinstance(value, str):
        for status in PayrollStatus:
            if status.value.lower() == value.strip().lower():
                return status
    raise InvalidStatusError(value, _STATES)


def transition_status(
    record: PayrollRecord,
    new_status: Any,
    config: JurisdictionConfig | None = None,
) -> PayrollRecord:
    """
    Move a record to ``new_status`` under the active workflow policy.

    Setting the current status again is a no-op and returns the record
    unchanged.  The breakdown is never recomputed.

    Raises:
        InvalidStatusError: unknown status label.
        InvalidStatusTransitionError: move not allowed by the policy.
    """
    target = parse_status(new_status)
    if target is record.status:
        return record

    workflow = workflow_for(config)
    transition = workflow.find_transition(record.status.value, target.value)
    if transition is None:
        logger.warning(
            "payroll_status_transition_rejected",
            extra={
                "record_id": record.id,
                "employee_id": record.employee_id,
                "period": record.period,
                "workflow": workflow.name,
                "from_status": record.status.value,
                "to_status": target.value,
            },
        )
        raise InvalidStatusTransitionError(
            workflow.name, record.status.value, target.value,
        )

    logger.info(
        "payroll_status_changed",
        extra={
            "record_id": record.id,
            "employee_id": record.employee_id,
            "period": record.period,
            "action": transition.action,
            "from_status": record.status.value,
            "to_status": target.value,
        },
    )
    return record.with_status(target)
