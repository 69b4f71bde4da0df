"""Append-only audit recording."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from payslip_engine.models import AuditEntry


@dataclass(frozen=True)
class ActorContext:
    """Who is acting, from where, under which correlation id."""

    actor_id: UUID | None
    actor_type: str = "admin"
    ip_address: str | None = None
    correlation_id: str | None = None


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_json_safe(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (UUID, Decimal, date, datetime)):
        return str(value)
    return value


class AuditRecorder:
    """Adds audit entries to the caller's session.

    The entry is committed or rolled back together with whatever else the
    session holds, so an audit entry for a run exists if and only if the run
    committed. Entries are never updated or deleted here.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def record(
        self,
        actor: ActorContext,
        action: str,
        target_type: str | None = None,
        target_id: UUID | None = None,
        payload: dict[str, Any] | None = None,
    ) -> AuditEntry:
        entry = AuditEntry(
            actor_id=actor.actor_id,
            actor_type=actor.actor_type,
            action=action,
            target_type=target_type,
            target_id=target_id,
            payload=_json_safe(payload) if payload is not None else None,
            ip_address=actor.ip_address,
            correlation_id=actor.correlation_id,
        )
        self.session.add(entry)
        return entry
