"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from payslip_engine.database import init_db
from payslip_engine.services.audit_service import ActorContext


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    _, factory = init_db()
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def get_actor(
    request: Request,
    x_actor_id: Annotated[str | None, Header()] = None,
    x_actor_type: Annotated[str | None, Header()] = None,
) -> ActorContext:
    """Build the acting identity from headers set by the auth gateway."""
    if not x_actor_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Actor-ID header is required",
        )
    try:
        actor_id = UUID(x_actor_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid X-Actor-ID format",
        )

    return ActorContext(
        actor_id=actor_id,
        actor_type=(x_actor_type or "employee").lower(),
        ip_address=request.client.host if request.client else None,
        correlation_id=getattr(request.state, "request_id", None),
    )


async def get_admin(actor: Annotated[ActorContext, Depends(get_actor)]) -> ActorContext:
    """Require an admin actor."""
    if actor.actor_type != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return actor


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Actor = Annotated[ActorContext, Depends(get_actor)]
Admin = Annotated[ActorContext, Depends(get_admin)]
