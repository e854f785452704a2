"""Shared FastAPI dependencies for generators, sessions and repositories."""

from collections.abc import AsyncGenerator, AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import get_settings
from backend.app.db.engine import get_async_engine, get_session
from backend.app.db.repositories import TripRepository
from backend.app.db.sql_repositories import SqlTripRepository
from backend.app.llm.client import get_response_generator
from backend.app.roadmap.clock import simulated_delay
from backend.app.roadmap.generator import ResponseGenerator
from backend.app.roadmap.session import RoadmapSession, SessionRegistry
from backend.app.utils.metrics import PrometheusGenerationMetrics


@lru_cache
def get_generator() -> ResponseGenerator:
    """Process-wide response generator chosen from settings."""
    return get_response_generator(get_settings())


@lru_cache
def get_session_registry() -> SessionRegistry:
    """Process-wide registry of in-memory roadmap sessions."""
    settings = get_settings()
    generator = get_generator()
    metrics = PrometheusGenerationMetrics()

    def factory(session_id: str) -> RoadmapSession:
        return RoadmapSession(
            generator,
            session_id=session_id,
            delay=(
                simulated_delay(settings.simulated_latency_ms)
                if settings.simulated_latency_ms > 0
                else None
            ),
            timeout_s=settings.generation_timeout_s,
            metrics=metrics,
        )

    return SessionRegistry(factory)


async def get_trip_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AsyncGenerator[TripRepository, None]:
    """SQL-backed trip repository bound to the request's DB session."""
    yield SqlTripRepository(session)


TripRepositoryOpener = Callable[[], AbstractAsyncContextManager[TripRepository]]


@asynccontextmanager
async def open_sql_trip_repository() -> AsyncIterator[TripRepository]:
    """Open a DB session on demand and yield a repository bound to it."""
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        yield SqlTripRepository(session)


def get_trip_repository_opener() -> TripRepositoryOpener:
    """Opener for routes that only touch the database on some requests."""
    return open_sql_trip_repository
