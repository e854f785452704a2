"""Integration tests for trip repositories (sqlite and in-memory)."""

import uuid
from datetime import date
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from backend.app.api.deps import open_sql_trip_repository
from backend.app.db import engine as engine_module
from backend.app.db.context import RequestContext
from backend.app.db.inmemory import InMemoryTripRepository
from backend.app.db.repositories import TripNotFound
from backend.app.db.sql_repositories import SqlTripRepository
from backend.app.models.common import Role
from backend.app.roadmap.generator import KeywordResponseGenerator


@pytest.mark.asyncio
async def test_create_and_get_trip(db_session: AsyncSession, ctx: RequestContext) -> None:
    """Test a created trip is readable by its owner."""
    repo = SqlTripRepository(db_session)

    created = await repo.create_trip(
        ctx, title="Paris", start_date=date(2025, 6, 1), end_date=date(2025, 6, 5)
    )
    fetched = await repo.get_trip(created.trip_id, ctx)

    assert fetched is not None
    assert fetched.title == "Paris"
    assert fetched.start_date == date(2025, 6, 1)
    assert fetched.roadmap is None


@pytest.mark.asyncio
async def test_trips_are_scoped_to_owner(
    db_session: AsyncSession, ctx: RequestContext, other_ctx: RequestContext
) -> None:
    """Test another user's trips are invisible."""
    repo = SqlTripRepository(db_session)
    mine = await repo.create_trip(ctx, title="Mine")
    await repo.create_trip(other_ctx, title="Theirs")

    assert await repo.get_trip(mine.trip_id, other_ctx) is None
    assert [t.title for t in await repo.list_trips(ctx)] == ["Mine"]
    assert [t.title for t in await repo.list_trips(other_ctx)] == ["Theirs"]


@pytest.mark.asyncio
async def test_list_trips_respects_limit(db_session: AsyncSession, ctx: RequestContext) -> None:
    """Test list_trips caps the result size."""
    repo = SqlTripRepository(db_session)
    for i in range(3):
        await repo.create_trip(ctx, title=f"Trip {i}")

    assert len(await repo.list_trips(ctx, limit=2)) == 2


@pytest.mark.asyncio
async def test_record_exchange_persists_messages_and_roadmap(
    sqlite_engine: AsyncEngine,
    ctx: RequestContext,
    keyword_generator: KeywordResponseGenerator,
) -> None:
    """Test both messages and the roadmap snapshot survive a new session."""
    result = await keyword_generator.generate("Paris", None)

    async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
        repo = SqlTripRepository(session)
        trip = await repo.create_trip(ctx, title="Paris")
        await repo.record_exchange(
            trip.trip_id,
            ctx,
            user_message="Paris",
            assistant_message=result.reply_text,
            roadmap=result.itinerary,
        )
        follow = await keyword_generator.generate("hotel", result.itinerary)
        await repo.record_exchange(
            trip.trip_id,
            ctx,
            user_message="hotel",
            assistant_message=follow.reply_text,
            roadmap=follow.itinerary,
        )

    async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
        repo = SqlTripRepository(session)
        messages = await repo.list_messages(trip.trip_id, ctx)
        stored = await repo.get_trip(trip.trip_id, ctx)

    assert [m.sequence for m in messages] == [1, 2, 3, 4]
    assert [m.role for m in messages] == [Role.user, Role.assistant] * 2
    assert [m.content for m in messages][::2] == ["Paris", "hotel"]
    assert stored is not None
    assert stored.roadmap == follow.itinerary


@pytest.mark.asyncio
async def test_record_exchange_unknown_trip_raises(
    db_session: AsyncSession, ctx: RequestContext, other_ctx: RequestContext,
    keyword_generator: KeywordResponseGenerator,
) -> None:
    """Test writes to a missing or foreign trip raise TripNotFound."""
    repo = SqlTripRepository(db_session)
    theirs = await repo.create_trip(other_ctx, title="Theirs")
    roadmap = (await keyword_generator.generate("Paris", None)).itinerary

    for trip_id in (uuid.uuid4(), theirs.trip_id):
        with pytest.raises(TripNotFound):
            await repo.record_exchange(
                trip_id, ctx, user_message="hi", assistant_message="hello", roadmap=roadmap
            )

    assert await repo.list_messages(theirs.trip_id, other_ctx) == []


@pytest.mark.asyncio
async def test_record_exchange_rolls_back_on_commit_failure(
    db_session: AsyncSession, ctx: RequestContext,
    keyword_generator: KeywordResponseGenerator,
) -> None:
    """Test a failed commit leaves neither messages nor roadmap behind."""
    repo = SqlTripRepository(db_session)
    trip = await repo.create_trip(ctx, title="Paris")
    roadmap = (await keyword_generator.generate("Paris", None)).itinerary

    with patch.object(db_session, "commit", AsyncMock(side_effect=RuntimeError("boom"))):
        with pytest.raises(RuntimeError):
            await repo.record_exchange(
                trip.trip_id, ctx, user_message="hi", assistant_message="hello", roadmap=roadmap
            )

    assert await repo.list_messages(trip.trip_id, ctx) == []
    stored = await repo.get_trip(trip.trip_id, ctx)
    assert stored is not None
    assert stored.roadmap is None


@pytest.mark.asyncio
async def test_inmemory_repository_matches_sql_semantics(
    ctx: RequestContext, other_ctx: RequestContext,
    keyword_generator: KeywordResponseGenerator,
) -> None:
    """Test the in-memory repository enforces the same tenancy and ordering."""
    repo = InMemoryTripRepository()
    trip = await repo.create_trip(ctx, title="Paris")
    roadmap = (await keyword_generator.generate("Paris", None)).itinerary

    user, assistant = await repo.record_exchange(
        trip.trip_id, ctx, user_message="Paris", assistant_message="ok", roadmap=roadmap
    )

    assert (user.sequence, assistant.sequence) == (1, 2)
    assert await repo.get_trip(trip.trip_id, other_ctx) is None
    assert await repo.list_messages(trip.trip_id, other_ctx) == []
    with pytest.raises(TripNotFound):
        await repo.record_exchange(
            trip.trip_id, other_ctx, user_message="x", assistant_message="y", roadmap=roadmap
        )
    stored = await repo.get_trip(trip.trip_id, ctx)
    assert stored is not None and stored.roadmap == roadmap


@pytest.mark.asyncio
async def test_open_sql_trip_repository_uses_global_engine(
    sqlite_engine: AsyncEngine, ctx: RequestContext, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test the on-demand opener binds a SQL repository to the shared engine."""
    monkeypatch.setattr(engine_module, "_async_engine", sqlite_engine)

    async with open_sql_trip_repository() as repo:
        assert isinstance(repo, SqlTripRepository)
        created = await repo.create_trip(ctx, title="Paris")

    async with open_sql_trip_repository() as repo:
        fetched = await repo.get_trip(created.trip_id, ctx)

    assert fetched is not None
    assert fetched.title == "Paris"
