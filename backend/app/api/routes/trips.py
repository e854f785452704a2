"""Trip endpoints - dashboard listing and trip detail."""

import uuid
from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from backend.app.api.auth import get_current_context
from backend.app.api.deps import get_trip_repository
from backend.app.db.context import RequestContext
from backend.app.db.repositories import MessageRecord, TripRecord, TripRepository
from backend.app.models.common import Role
from backend.app.models.itinerary import ItineraryDocument

router = APIRouter(prefix="/trips", tags=["trips"])


class CreateTripRequest(BaseModel):
    """Request body for POST /trips."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    description: str = ""
    start_date: date | None = Field(None, alias="startDate")
    end_date: date | None = Field(None, alias="endDate")


class TripResponse(BaseModel):
    """Trip summary."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    start_date: date | None = Field(None, alias="startDate")
    end_date: date | None = Field(None, alias="endDate")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class TripMessageResponse(BaseModel):
    """Persisted transcript entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    content: str
    role: Role
    created_at: datetime = Field(..., alias="createdAt")


class TripDetailResponse(TripResponse):
    """Trip with transcript and latest roadmap."""

    messages: list[TripMessageResponse]
    roadmap: ItineraryDocument | None


def _trip_response(trip: TripRecord) -> TripResponse:
    return TripResponse(
        id=str(trip.trip_id),
        title=trip.title,
        description=trip.description,
        start_date=trip.start_date,
        end_date=trip.end_date,
        created_at=trip.created_at,
        updated_at=trip.updated_at,
    )


def _message_response(message: MessageRecord) -> TripMessageResponse:
    return TripMessageResponse(
        id=str(message.message_id),
        content=message.content,
        role=message.role,
        created_at=message.created_at,
    )


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    request: CreateTripRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> TripResponse:
    """Create a trip for the caller."""
    if request.start_date and request.end_date and request.end_date < request.start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="endDate must not be before startDate",
        )
    trip = await repo.create_trip(
        ctx,
        title=request.title,
        description=request.description,
        start_date=request.start_date,
        end_date=request.end_date,
    )
    return _trip_response(trip)


@router.get("", response_model=list[TripResponse])
async def list_trips(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> list[TripResponse]:
    """List the caller's trips, newest first."""
    return [_trip_response(t) for t in await repo.list_trips(ctx, limit=limit)]


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> TripDetailResponse:
    """Trip detail with transcript and roadmap."""
    trip = await repo.get_trip(trip_id, ctx)
    if trip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")

    messages = await repo.list_messages(trip_id, ctx)
    return TripDetailResponse(
        **_trip_response(trip).model_dump(),
        messages=[_message_response(m) for m in messages],
        roadmap=trip.roadmap,
    )
