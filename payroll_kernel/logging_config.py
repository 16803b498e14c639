"""
Structured JSON logging for the payroll kernel.

Every logger lives under the ``payroll_kernel`` namespace and, once
``configure_logging`` has run, writes one JSON object per line.  Each line
carries whatever payroll context is bound at the time:

    record_id    the payroll record the operation touches
    actor_id     who asked for it (``PayrollService(actor_id=...)``)
    employee_id  whose pay it is
    period       which pay period

so a rejected submission, the engine trace and the final
``payroll_record_submitted`` event can be joined on ``record_id``.
"""

__all__ = [
    "CONTEXT_FIELDS",
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import dataclasses
import json
import logging
import sys
import threading
from contextvars import ContextVar, Token
from datetime import UTC, date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

# ---------------------------------------------------------------------------
# Context propagation
# ---------------------------------------------------------------------------

CONTEXT_FIELDS: tuple[str, ...] = ("record_id", "actor_id", "employee_id", "period")

_CONTEXT: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"payroll_log_{name}", default=None) for name in CONTEXT_FIELDS
}


def _check_fields(fields: dict[str, Any]) -> None:
    unknown = sorted(set(fields) - set(CONTEXT_FIELDS))
    if unknown:
        raise TypeError(
            f"Unknown log context field(s): {', '.join(unknown)}; "
            f"expected one of {', '.join(CONTEXT_FIELDS)}"
        )


class LogContext:
    """Payroll context attached to every log line in the current task."""

    @staticmethod
    def set(**fields: Any) -> None:
        """Set context fields.  ``None`` values leave the field unchanged."""
        _check_fields(fields)
        for name, value in fields.items():
            if value is not None:
                _CONTEXT[name].set(str(value))

    @staticmethod
    def get_all() -> dict[str, str]:
        """Return the bound fields, in ``CONTEXT_FIELDS`` order."""
        return {
            name: value
            for name in CONTEXT_FIELDS
            if (value := _CONTEXT[name].get()) is not None
        }

    @staticmethod
    def clear() -> None:
        for var in _CONTEXT.values():
            var.set(None)

    @staticmethod
    def bind(**fields: Any) -> "_BoundContext":
        """
        Context manager: set fields on entry, restore the previous values
        on exit.  ``None`` values are skipped, so an optional id can be
        passed through unconditionally.
        """
        _check_fields(fields)
        return _BoundContext(fields)


class _BoundContext:

    def __init__(self, fields: dict[str, Any]):
        self._fields = fields
        self._tokens: list[tuple[str, Token]] = []

    def __enter__(self) -> type[LogContext]:
        for name, value in self._fields.items():
            if value is not None:
                self._tokens.append((name, _CONTEXT[name].set(str(value))))
        return LogContext

    def __exit__(self, *exc: Any) -> None:
        for name, token in reversed(self._tokens):
            _CONTEXT[name].reset(token)
        self._tokens.clear()


# ---------------------------------------------------------------------------
# JSON Formatter
# ---------------------------------------------------------------------------

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


def _to_json(obj: Any) -> Any:
    """Money as strings, statuses by label, violations as objects."""
    if isinstance(obj, (UUID, Decimal)):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    return str(obj)


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(LogContext.get_all())

        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(self._exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_to_json)

    @staticmethod
    def _exception_fields(exc: BaseException) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "exc_type": type(exc).__name__,
            "exc_message": str(exc),
        }
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        # PayrollKernelError subclasses keep their context as attributes
        for key, val in vars(exc).items():
            if not key.startswith("_"):
                fields[f"exc_{key}"] = val
        return fields


# ---------------------------------------------------------------------------
# Logger factory
# ---------------------------------------------------------------------------

_LOGGER_PREFIX = "payroll_kernel"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the payroll_kernel namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Configure the payroll_kernel logger hierarchy (idempotent).

    ``level`` may be a number or a level name such as ``"DEBUG"``; at
    INFO and above the engine traces are emitted, at DEBUG the per-step
    computation events as well.
    """
    global _configured
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    with _lock:
        if _configured:
            return
        _configured = True

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(StructuredFormatter())
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Reset logging configuration. FOR TESTING ONLY."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
