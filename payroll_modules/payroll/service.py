"""
Payroll Module Service (``payroll_modules.payroll.service``).

Responsibility
--------------
Orchestrates the payroll form lifecycle: live preview while the user
types, validated submission into a ``PayrollRecord``, revision of an
existing record, and status changes.  Pure computation is delegated to
``payroll_engines.payroll`` and business rules to ``validation.py``.

Architecture position
---------------------
**Modules layer** -- thin glue.  ``PayrollService`` is the sole public
entry point for payroll record operations.  It holds no records itself,
only the ``PayrollPeriodIndex`` used for duplicate-period detection; the
caller persists the records it returns.

Invariants enforced
-------------------
* ``preview`` never validates; a half-filled form always previews.
* ``submit`` and ``revise`` validate before computing, so a rejected
  submission leaves the index untouched.
* At most one record per ``(employee_id, period)`` in the index.
* Every log line an operation emits, including the engine trace and a
  rejection warning, carries the record id, the acting user and the
  employee and period it concerns.

Failure modes
-------------
* ``PayrollInputRejectedError`` -- submission breaks a business rule.
* ``InvalidStatusError`` / ``InvalidStatusTransitionError`` -- from
  ``change_status``.

Usage::

    service = PayrollService(existing=PayrollPeriodIndex.from_records(stored))
    breakdown = service.preview(form_input, employee)
    record = service.submit(form_input, employee)
    record = service.change_status(record, "Processing")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from uuid import uuid4

from payroll_config import JurisdictionConfig, get_active_config
from payroll_engines.payroll import PayrollBreakdown, PayrollInput, compute_payroll
from payroll_kernel.logging_config import LogContext, get_logger
from payroll_modules.payroll.models import PayrollRecord
from payroll_modules.payroll.validation import (
    PayrollPeriodIndex,
    ensure_valid_submission,
    normalize_employee_id,
    normalize_period,
)
from payroll_modules.payroll.workflows import transition_status

logger = get_logger("modules.payroll.service")


class PayrollService:
    """
    Facade for payroll record operations.

    Args:
        config: Jurisdiction config; defaults to the active one.
        existing: Index of records already stored.  A fresh empty index is
            used when omitted.
        id_factory: Produces ids for new records (``uuid4`` strings by
            default).
        actor_id: The user operating the form, bound into every log line.
    """

    def __init__(
        self,
        config: JurisdictionConfig | None = None,
        existing: PayrollPeriodIndex | None = None,
        id_factory: Callable[[], str] | None = None,
        actor_id: str | None = None,
    ):
        self._config = config or get_active_config()
        self._index = existing if existing is not None else PayrollPeriodIndex()
        self._id_factory = id_factory or (lambda: str(uuid4()))
        self._actor_id = actor_id

    @property
    def index(self) -> PayrollPeriodIndex:
        return self._index

    @property
    def config(self) -> JurisdictionConfig:
        return self._config

    def preview(self, payroll_input: PayrollInput, employee: Any) -> PayrollBreakdown:
        """Compute the breakdown for display only; nothing is validated or indexed."""
        return compute_payroll(payroll_input, employee, self._config)

    def submit(
        self,
        payroll_input: PayrollInput,
        employee: Any,
        period_days: int | None = None,
    ) -> PayrollRecord:
        """
        Validate and compute a new payroll record.

        The record id is drawn before validation so that a rejection is
        logged under the id the record would have had.

        Raises:
            PayrollInputRejectedError: on any business-rule violation.
        """
        record_id = self._id_factory()
        with self._bind(record_id, payroll_input.employee_id, payroll_input.period):
            ensure_valid_submission(payroll_input, self._index, period_days=period_days)
            record = self._build_record(record_id, payroll_input, employee)
            self._index.add(record.employee_id, record.period, record.id)
            logger.info(
                "payroll_record_submitted",
                extra={
                    "record_id": record.id,
                    "gross_pay": str(record.breakdown.gross_pay),
                    "total_deductions": str(record.breakdown.total_deductions),
                    "net_pay": str(record.net_pay),
                    "status": record.status.value,
                },
            )
            return record

    def revise(
        self,
        record: PayrollRecord,
        payroll_input: PayrollInput,
        employee: Any,
        period_days: int | None = None,
    ) -> PayrollRecord:
        """
        Replace a record's input snapshot and recompute it in full.

        The record keeps its id.  Moving it to another period frees the old
        ``(employee_id, period)`` slot.

        Raises:
            PayrollInputRejectedError: on any business-rule violation.
        """
        with self._bind(record.id, payroll_input.employee_id, payroll_input.period):
            ensure_valid_submission(
                payroll_input, self._index, period_days=period_days, record_id=record.id,
            )
            revised = self._build_record(record.id, payroll_input, employee)
            if self._index.get(record.employee_id, record.period) == record.id:
                self._index.remove(record.employee_id, record.period)
            self._index.add(revised.employee_id, revised.period, revised.id)
            logger.info(
                "payroll_record_revised",
                extra={
                    "record_id": record.id,
                    "previous_net_pay": str(record.net_pay),
                    "net_pay": str(revised.net_pay),
                    "status": revised.status.value,
                },
            )
            return revised

    def change_status(self, record: PayrollRecord, new_status: Any) -> PayrollRecord:
        """Apply a status change under the configured workflow policy."""
        with self._bind(record.id, record.employee_id, record.period):
            return transition_status(record, new_status, self._config)

    def discard(self, record: PayrollRecord) -> None:
        """Free the record's period slot after the caller deletes it."""
        if self._index.get(record.employee_id, record.period) != record.id:
            return
        self._index.remove(record.employee_id, record.period)
        with self._bind(record.id, record.employee_id, record.period):
            logger.info("payroll_record_discarded")

    def _bind(self, record_id: str, employee_id: Any, period: Any):
        return LogContext.bind(
            record_id=record_id,
            actor_id=self._actor_id,
            employee_id=normalize_employee_id(employee_id) or None,
            period=normalize_period(period) or None,
        )

    def _build_record(
        self,
        record_id: str,
        payroll_input: PayrollInput,
        employee: Any,
    ) -> PayrollRecord:
        breakdown = compute_payroll(payroll_input, employee, self._config)
        return PayrollRecord(
            id=record_id,
            employee_id=normalize_employee_id(payroll_input.employee_id),
            period=normalize_period(payroll_input.period),
            payroll_input=payroll_input,
            breakdown=breakdown,
            status=breakdown.status,
        )
