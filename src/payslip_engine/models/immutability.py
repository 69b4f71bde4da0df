"""ORM-level guards keeping payslips and audit entries append-only.

Payslips are written once by a payroll run; audit entries are written once by
the audit recorder. Any later UPDATE or DELETE issued through the ORM raises
``ImmutableRecordError`` during flush, before SQL reaches the database.
"""

from __future__ import annotations

from sqlalchemy import event

from payslip_engine.exceptions import ImmutableRecordError
from payslip_engine.models.audit import AuditEntry
from payslip_engine.models.payslip import Payslip

IMMUTABLE_MODELS = (Payslip, AuditEntry)


def _reject_update(mapper, connection, target) -> None:
    raise ImmutableRecordError(type(target).__name__, "update")


def _reject_delete(mapper, connection, target) -> None:
    raise ImmutableRecordError(type(target).__name__, "delete")


def register_immutability_listeners() -> None:
    """Attach the guards. Safe to call more than once."""
    for model in IMMUTABLE_MODELS:
        if not event.contains(model, "before_update", _reject_update):
            event.listen(model, "before_update", _reject_update)
        if not event.contains(model, "before_delete", _reject_delete):
            event.listen(model, "before_delete", _reject_delete)


def unregister_immutability_listeners() -> None:
    """Detach the guards (tests only)."""
    for model in IMMUTABLE_MODELS:
        if event.contains(model, "before_update", _reject_update):
            event.remove(model, "before_update", _reject_update)
        if event.contains(model, "before_delete", _reject_delete):
            event.remove(model, "before_delete", _reject_delete)
