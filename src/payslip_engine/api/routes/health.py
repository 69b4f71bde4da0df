"""Health and readiness probes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from payslip_engine import __version__
from payslip_engine.api.dependencies import DbSession
from payslip_engine.models import AttendancePeriod

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    checked_at: datetime
    database: str
    open_periods: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DbSession) -> HealthResponse:
    """Report whether the payroll tables are reachable.

    ``open_periods`` counts attendance periods still awaiting a payroll run.
    """
    open_periods: int | None = None
    try:
        result = await db.execute(
            select(func.count())
            .select_from(AttendancePeriod)
            .where(AttendancePeriod.processed_at.is_(None))
        )
        open_periods = result.scalar_one()
    except SQLAlchemyError:
        logger.warning("Health probe could not query attendance periods", exc_info=True)

    reachable = open_periods is not None
    return HealthResponse(
        status="healthy" if reachable else "degraded",
        version=__version__,
        checked_at=datetime.now(timezone.utc),
        database="reachable" if reachable else "unreachable",
        open_periods=open_periods,
    )


@router.get("/ready")
async def readiness_check(db: DbSession, response: Response) -> dict[str, str]:
    """503 until the database answers."""
    try:
        await db.execute(select(1))
    except SQLAlchemyError:
        logger.warning("Readiness probe failed", exc_info=True)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "not_ready"}
    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}
