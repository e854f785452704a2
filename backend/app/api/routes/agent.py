"""Remote travel agent endpoint - POST /ai-travel-agent.

Generates the next roadmap for a message and, when ``tripId`` is given,
persists the user and assistant messages plus the roadmap snapshot in one
transaction.
"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from backend.app.api.auth import get_current_context
from backend.app.api.deps import TripRepositoryOpener, get_generator, get_trip_repository_opener
from backend.app.db.context import RequestContext
from backend.app.db.repositories import TripNotFound
from backend.app.models.messages import AgentRequest, AgentResponse
from backend.app.roadmap.generator import ResponseGenerator
from backend.app.utils.metrics import agent_requests_total

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ai-travel-agent", response_model=AgentResponse, response_model_exclude_none=True)
async def travel_agent(
    request: AgentRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    generator: Annotated[ResponseGenerator, Depends(get_generator)],
    open_repo: Annotated[TripRepositoryOpener, Depends(get_trip_repository_opener)],
) -> AgentResponse:
    """Generate an assistant reply and updated roadmap.

    Args:
        request: Message, optional trip id and current roadmap
        ctx: Request context (authenticated user)
        generator: Response generator
        open_repo: Opens a trip repository, only used when tripId is given

    Returns:
        Reply message and updated roadmap

    Raises:
        HTTPException: 400 on missing message or malformed tripId,
            404 when the trip is not the caller's, 500 on internal failure
    """
    if not request.message or not request.message.strip():
        agent_requests_total.labels(status="400").inc()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message is required")

    trip_uuid: uuid.UUID | None = None
    if request.trip_id:
        try:
            trip_uuid = uuid.UUID(request.trip_id)
        except ValueError as e:
            agent_requests_total.labels(status="400").inc()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid tripId"
            ) from e

    try:
        result = await generator.generate(request.message, request.trip_context)
    except Exception as e:
        logger.exception("Travel agent generation failed")
        agent_requests_total.labels(status="500").inc()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate a response",
        ) from e

    if trip_uuid is not None:
        try:
            async with open_repo() as repo:
                await repo.record_exchange(
                    trip_uuid,
                    ctx,
                    user_message=request.message,
                    assistant_message=result.reply_text,
                    roadmap=result.itinerary,
                )
        except TripNotFound as e:
            agent_requests_total.labels(status="404").inc()
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found"
            ) from e
        except Exception as e:
            logger.exception(f"Failed to persist exchange for trip {trip_uuid}")
            agent_requests_total.labels(status="500").inc()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to save conversation",
            ) from e

    agent_requests_total.labels(status="200").inc()
    return AgentResponse(message=result.reply_text, updated_roadmap=result.itinerary)
