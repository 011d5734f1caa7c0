"""Pytest configuration and fixtures for hrms-core.

HTTP tests run against hrms.main:app through ASGITransport. Endpoints that
need storage get their service dependencies overridden with in-memory
fakes from tests.fakes, so no database is required. Tests that do need
Postgres use the db_session fixture and the requires_db marker.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only-0123456789")
os.environ.setdefault("DATABASE_URL", "postgresql+asyncpg://localhost:5432/hrms_test")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.core.limiter import limiter
from hrms.domain.enums import Role
from hrms.infrastructure.persistence import database
from hrms.infrastructure.security.jwt import create_access_token
from hrms.main import app


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    limiter.reset()


@pytest.fixture
def auth_headers():
    """Build Authorization headers for a token with the given role and employee link."""

    def make(
        role: Role | str = Role.ADMIN,
        employee_id: str | None = None,
        sub: str = "user-1",
    ) -> dict[str, str]:
        claims = {"sub": sub, "role": role.value if isinstance(role, Role) else role}
        if employee_id:
            claims["employee_id"] = employee_id
        return {"Authorization": f"Bearer {create_access_token(claims)}"}

    return make


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository tests. Rolls back after the test.

    Skips unless DATABASE_URL points at a reachable Postgres with the schema
    applied (alembic upgrade head). Run without a database via
    pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip("Postgres not configured: set DATABASE_URL, then run: alembic upgrade head")
    async with database.AsyncSessionLocal() as session:
        try:
            await session.execute(text("SELECT 1"))
        except (OSError, SQLAlchemyError) as e:
            pytest.skip(f"Postgres unreachable: {e}")
        yield session
        await session.rollback()
