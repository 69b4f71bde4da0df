"""Logging setup with request-scoped correlation ids."""

from __future__ import annotations

import logging
from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("log_request_id", default=None)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


def set_request_id(request_id: str | None) -> None:
    """Bind a request id to the current context."""
    _request_id.set(request_id)


def get_request_id() -> str | None:
    """Get the request id bound to the current context."""
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Inject the current request id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the package logger."""
    package_logger = logging.getLogger("payslip_engine")
    package_logger.setLevel(level)

    for handler in package_logger.handlers:
        if getattr(handler, "_payslip_engine", False):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    handler._payslip_engine = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)
