"""Shared pytest fixtures for all test suites."""

import uuid
from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from backend.app.db.context import RequestContext
from backend.app.db.models import Base
from backend.app.roadmap.clock import FixedClock
from backend.app.roadmap.generator import FirstReplyPicker, KeywordResponseGenerator

TEST_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")
OTHER_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000003")


@pytest.fixture
def clock() -> FixedClock:
    """Deterministic clock starting 2025-04-15 09:00 UTC."""
    return FixedClock(datetime(2025, 4, 15, 9, 0, tzinfo=UTC))


@pytest.fixture
def keyword_generator(clock: FixedClock) -> KeywordResponseGenerator:
    """Keyword generator with deterministic replies and dates."""
    return KeywordResponseGenerator(reply_picker=FirstReplyPicker(), clock=clock)


@pytest.fixture
def ctx() -> RequestContext:
    """Request context for the default test user."""
    return RequestContext(user_id=TEST_USER_ID)


@pytest.fixture
def other_ctx() -> RequestContext:
    """Request context for a second user."""
    return RequestContext(user_id=OTHER_USER_ID)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Dev bearer header for the default test user."""
    return {"Authorization": f"Bearer {TEST_USER_ID}"}


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory sqlite engine shared across connections, with tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Async session bound to the sqlite engine."""
    async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
        yield session
