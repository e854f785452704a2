"""Transcript entries and remote agent request/response bodies."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.common import Role
from backend.app.models.itinerary import ItineraryDocument


class Message(BaseModel):
    """Transcript entry; immutable once appended."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    content: str
    role: Role
    created_at: datetime = Field(..., alias="createdAt")


class AgentRequest(BaseModel):
    """Request body for the remote travel agent.

    ``message`` is optional at the schema level so a missing message maps to a
    400 validation error rather than FastAPI's generic 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    trip_id: str | None = Field(None, alias="tripId")
    trip_context: ItineraryDocument | None = Field(None, alias="tripContext")


class AgentResponse(BaseModel):
    """Response body for the remote travel agent."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    updated_roadmap: ItineraryDocument = Field(..., alias="updatedRoadmap")
