"""Repository protocol interfaces for data access."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from backend.app.db.context import RequestContext
from backend.app.models.common import Role
from backend.app.models.itinerary import ItineraryDocument


@dataclass
class TripRecord:
    """Trip data record."""

    trip_id: UUID
    user_id: UUID
    title: str
    description: str
    start_date: date | None
    end_date: date | None
    roadmap: ItineraryDocument | None
    created_at: datetime
    updated_at: datetime


@dataclass
class MessageRecord:
    """Persisted transcript entry."""

    message_id: UUID
    trip_id: UUID
    sequence: int
    role: Role
    content: str
    created_at: datetime


class TripNotFound(Exception):
    """Trip does not exist or belongs to another user."""

    pass


class TripRepository(Protocol):
    """Repository for trips and their transcripts."""

    async def create_trip(
        self,
        ctx: RequestContext,
        *,
        title: str,
        description: str = "",
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> TripRecord:
        """Create a new trip owned by the caller."""
        ...

    async def get_trip(self, trip_id: UUID, ctx: RequestContext) -> TripRecord | None:
        """Get trip by ID.

        Args:
            trip_id: Trip ID
            ctx: Request context (enforces tenancy)

        Returns:
            Trip record or None if not found
        """
        ...

    async def list_trips(self, ctx: RequestContext, limit: int = 20) -> list[TripRecord]:
        """List the caller's trips, newest first."""
        ...

    async def list_messages(self, trip_id: UUID, ctx: RequestContext) -> list[MessageRecord]:
        """List a trip's transcript in sequence order (empty if not owned)."""
        ...

    async def record_exchange(
        self,
        trip_id: UUID,
        ctx: RequestContext,
        *,
        user_message: str,
        assistant_message: str,
        roadmap: ItineraryDocument,
    ) -> tuple[MessageRecord, MessageRecord]:
        """Persist one user/assistant exchange and the roadmap snapshot atomically.

        Either both messages and the roadmap are written, or nothing is.

        Raises:
            TripNotFound: If the trip does not exist or is not owned by the caller
        """
        ...
