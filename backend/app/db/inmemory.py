"""In-memory implementations of repository interfaces."""

import uuid
from dataclasses import replace
from datetime import UTC, date, datetime

from backend.app.db.context import RequestContext
from backend.app.db.repositories import MessageRecord, TripNotFound, TripRecord
from backend.app.models.common import Role
from backend.app.models.itinerary import ItineraryDocument


class InMemoryTripRepository:
    """In-memory implementation of TripRepository."""

    def __init__(self) -> None:
        self._trips: dict[uuid.UUID, TripRecord] = {}
        self._messages: dict[uuid.UUID, list[MessageRecord]] = {}

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
        record = TripRecord(
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
        self._trips[record.trip_id] = record
        self._messages[record.trip_id] = []
        return record

    async def get_trip(self, trip_id: uuid.UUID, ctx: RequestContext) -> TripRecord | None:
        """Get trip by ID."""
        record = self._trips.get(trip_id)

        # Enforce tenancy
        if record is None or record.user_id != ctx.user_id:
            return None

        return record

    async def list_trips(self, ctx: RequestContext, limit: int = 20) -> list[TripRecord]:
        """List trips, newest first."""
        owned = [t for t in self._trips.values() if t.user_id == ctx.user_id]
        owned.sort(key=lambda t: t.created_at, reverse=True)
        return owned[:limit]

    async def list_messages(
        self, trip_id: uuid.UUID, ctx: RequestContext
    ) -> list[MessageRecord]:
        """List a trip's transcript."""
        if await self.get_trip(trip_id, ctx) is None:
            return []
        return list(self._messages[trip_id])

    async def record_exchange(
        self,
        trip_id: uuid.UUID,
        ctx: RequestContext,
        *,
        user_message: str,
        assistant_message: str,
        roadmap: ItineraryDocument,
    ) -> tuple[MessageRecord, MessageRecord]:
        """Persist user + assistant messages and roadmap together."""
        trip = await self.get_trip(trip_id, ctx)
        if trip is None:
            raise TripNotFound(f"Trip {trip_id} not found")

        messages = self._messages[trip_id]
        now = datetime.now(UTC)
        user_record = MessageRecord(
            message_id=uuid.uuid4(),
            trip_id=trip_id,
            sequence=len(messages) + 1,
            role=Role.user,
            content=user_message,
            created_at=now,
        )
        assistant_record = MessageRecord(
            message_id=uuid.uuid4(),
            trip_id=trip_id,
            sequence=len(messages) + 2,
            role=Role.assistant,
            content=assistant_message,
            created_at=now,
        )
        messages.extend([user_record, assistant_record])
        self._trips[trip_id] = replace(
            trip, roadmap=roadmap.model_copy(deep=True), updated_at=now
        )
        return user_record, assistant_record
