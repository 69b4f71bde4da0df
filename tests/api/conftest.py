"""API test fixtures: the app wired to the per-test SQLite database."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from payslip_engine.api.app import create_app
from payslip_engine.api.dependencies import get_db_session

from tests.conftest import ADMIN_ID

ADMIN_HEADERS = {"X-Actor-ID": str(ADMIN_ID), "X-Actor-Type": "admin"}


def employee_headers(employee) -> dict[str, str]:
    return {"X-Actor-ID": str(employee.id), "X-Actor-Type": "employee"}


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client; lifespan is not run, so the global engine stays untouched."""
    app = create_app()

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def broken_db_client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose database dependency always fails unexpectedly."""
    app = create_app()

    async def failing_db_session() -> AsyncSession:
        raise RuntimeError("connection pool exhausted")

    app.dependency_overrides[get_db_session] = failing_db_session

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
