"""SQL implementations of repository interfaces."""

import uuid
from datetime import UTC, date, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.context import RequestContext
from backend.app.db.models import ChatMessage, Trip
from backend.app.db.queries import select_trips
from backend.app.db.repositories import MessageRecord, TripNotFound, TripRecord
from backend.app.models.common import Role
from backend.app.models.itinerary import ItineraryDocument


def _trip_record(trip: Trip) -> TripRecord:
    return TripRecord(
        trip_id=trip.trip_id,
        user_id=trip.user_id,
        title=trip.title,
        description=trip.description,
        start_date=trip.start_date,
        end_date=trip.end_date,
        roadmap=ItineraryDocument.model_validate(trip.roadmap) if trip.roadmap else None,
        created_at=trip.created_at,
        updated_at=trip.updated_at,
    )


def _message_record(message: ChatMessage) -> MessageRecord:
    return MessageRecord(
        message_id=message.message_id,
        trip_id=message.trip_id,
        sequence=message.sequence,
        role=Role(message.role),
        content=message.content,
        created_at=message.created_at,
    )


class SqlTripRepository:
    """SQL implementation of TripRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_trip(
        self,
        ctx: RequestContext,
        *,
        title: str,
        description: str = "",
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> TripRecord:
        """Create a new trip."""
        now = datetime.now(UTC)
        trip = Trip(
            trip_id=uuid.uuid4(),
            user_id=ctx.user_id,
            title=title,
            description=description,
            start_date=start_date,
            end_date=end_date,
            roadmap=None,
            created_at=now,
            updated_at=now,
        )
        record = _trip_record(trip)
        self._session.add(trip)
        await self._session.commit()
        return record

    async def get_trip(self, trip_id: uuid.UUID, ctx: RequestContext) -> TripRecord | None:
        """Get trip by ID."""
        trip = await self._get_trip_row(trip_id, ctx)
        return _trip_record(trip) if trip else None

    async def list_trips(self, ctx: RequestContext, limit: int = 20) -> list[TripRecord]:
        """List trips, newest first."""
        result = await self._session.execute(
            select_trips(ctx).order_by(Trip.created_at.desc()).limit(limit)
        )
        return [_trip_record(trip) for trip in result.scalars().all()]

    async def list_messages(
        self, trip_id: uuid.UUID, ctx: RequestContext
    ) -> list[MessageRecord]:
        """List a trip's transcript."""
        result = await self._session.execute(
            select(ChatMessage)
            .join(Trip, Trip.trip_id == ChatMessage.trip_id)
            .where(ChatMessage.trip_id == trip_id, Trip.user_id == ctx.user_id)
            .order_by(ChatMessage.sequence)
        )
        return [_message_record(m) for m in result.scalars().all()]

    async def record_exchange(
        self,
        trip_id: uuid.UUID,
        ctx: RequestContext,
        *,
        user_message: str,
        assistant_message: str,
        roadmap: ItineraryDocument,
    ) -> tuple[MessageRecord, MessageRecord]:
        """Persist user + assistant messages and roadmap in one transaction."""
        try:
            trip = await self._get_trip_row(trip_id, ctx)
            if trip is None:
                raise TripNotFound(f"Trip {trip_id} not found")

            result = await self._session.execute(
                select(func.coalesce(func.max(ChatMessage.sequence), 0)).where(
                    ChatMessage.trip_id == trip_id
                )
            )
            last_seq = result.scalar_one()

            now = datetime.now(UTC)
            user_row = ChatMessage(
                message_id=uuid.uuid4(),
                trip_id=trip_id,
                sequence=last_seq + 1,
                role=Role.user.value,
                content=user_message,
                created_at=now,
            )
            assistant_row = ChatMessage(
                message_id=uuid.uuid4(),
                trip_id=trip_id,
                sequence=last_seq + 2,
                role=Role.assistant.value,
                content=assistant_message,
                created_at=now,
            )
            self._session.add_all([user_row, assistant_row])
            trip.roadmap = roadmap.model_dump(mode="json", by_alias=True)
            trip.updated_at = now
            records = (_message_record(user_row), _message_record(assistant_row))

            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

        return records

    async def _get_trip_row(self, trip_id: uuid.UUID, ctx: RequestContext) -> Trip | None:
        result = await self._session.execute(select_trips(ctx).where(Trip.trip_id == trip_id))
        return result.scalar_one_or_none()
