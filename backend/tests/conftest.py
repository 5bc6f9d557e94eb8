"""Shared test fixtures."""

import os
import tempfile
import uuid
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

_TEST_DB_PATH = Path(tempfile.gettempdir()) / f"pages-test-{uuid.uuid4().hex[:8]}.db"

# Ensure mock mode is on for tests
os.environ.setdefault("COGNITO_MOCK", "true")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DB_PATH}")

import app.models  # noqa: E402,F401  (register tables on Base.metadata)
from app.db.base import Base  # noqa: E402
from app.db.session import async_session_factory  # noqa: E402
from app.db.session import engine as app_engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402


@pytest.fixture(autouse=True)
async def schema() -> AsyncGenerator[None, None]:
    """Fresh tables for every test; disposes the app pool afterwards."""
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await app_engine.dispose()


def pytest_sessionfinish(session, exitstatus):
    _TEST_DB_PATH.unlink(missing_ok=True)


@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """Async DB session with transaction rollback after each test."""
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client for the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def seed_user(db: AsyncSession) -> User:
    """Seed a page owner."""
    user = User(
        cognito_sub=f"test-sub-{uuid.uuid4().hex[:8]}",
        email=f"test-{uuid.uuid4().hex[:8]}@example.com",
        full_name="Test User",
    )
    db.add(user)
    await db.flush()
    return user
