"""Models package - re-exports for convenience."""

from backend.app.models.common import Coordinates, MapViewport, Role
from backend.app.models.itinerary import Activity, Day, ItineraryDocument
from backend.app.models.messages import AgentRequest, AgentResponse, Message

__all__ = [
    # Common
    "Coordinates",
    "MapViewport",
    "Role",
    # Itinerary
    "ItineraryDocument",
    "Day",
    "Activity",
    # Messages
    "Message",
    "AgentRequest",
    "AgentResponse",
]
