"""Roadmap session endpoints - HTTP facade over in-process RoadmapSessions."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict, Field

from backend.app.api.auth import get_current_context
from backend.app.api.deps import get_session_registry
from backend.app.db.context import RequestContext
from backend.app.models.itinerary import ItineraryDocument
from backend.app.models.messages import Message
from backend.app.roadmap.errors import InvalidInput, SessionBusy
from backend.app.roadmap.session import RoadmapSession, SessionRegistry, SessionState

router = APIRouter(prefix="/sessions", tags=["sessions"])


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    model_config = ConfigDict(populate_by_name=True)

    initial_prompt: str | None = Field(None, alias="initialPrompt")


class SubmitMessageRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/messages."""

    message: str


class SessionView(BaseModel):
    """Read model of one session."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    state: SessionState
    transcript: list[Message]
    itinerary: ItineraryDocument | None


def _view(session: RoadmapSession) -> SessionView:
    return SessionView(
        session_id=session.session_id,
        state=session.state,
        transcript=session.current_transcript(),
        itinerary=session.current_itinerary(),
    )


def _get_or_404(
    registry: SessionRegistry, session_id: str, ctx: RequestContext
) -> RoadmapSession:
    session = registry.get(session_id, owner_id=ctx.user_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return session


@router.post("", response_model=SessionView, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: CreateSessionRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> SessionView:
    """Start a session, generating the first roadmap when a prompt is given."""
    session = registry.create(owner_id=ctx.user_id)
    await session.start(request.initial_prompt)
    return _view(session)


@router.post("/{session_id}/messages", response_model=SessionView)
async def submit_message(
    session_id: str,
    request: SubmitMessageRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> SessionView:
    """Submit a message and return the session after the reply.

    Raises:
        HTTPException: 400 for empty text, 404 unknown session,
            409 while another reply is being generated
    """
    session = _get_or_404(registry, session_id, ctx)
    try:
        await session.submit(request.message)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except SessionBusy as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return _view(session)


@router.get("/{session_id}", response_model=SessionView)
async def get_session_view(
    session_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> SessionView:
    """Current transcript and itinerary of a session."""
    return _view(_get_or_404(registry, session_id, ctx))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_session(
    session_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> Response:
    """End a session and drop it from the registry.

    Raises:
        HTTPException: 404 for unknown sessions or sessions owned by someone else
    """
    _get_or_404(registry, session_id, ctx)
    registry.remove(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
