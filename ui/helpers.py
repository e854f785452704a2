"""Helper functions for UI - roadmap formatting and session wiring."""

from datetime import date

from backend.app.models.itinerary import Day, ItineraryDocument
from backend.app.models.messages import Message
from backend.app.roadmap.remote import RemoteResponseGenerator
from backend.app.roadmap.session import Listener, RoadmapSession

EXAMPLE_PROMPTS = [
    "5 day trip to Paris",
    "Weekend getaway in the mountains",
    "Family vacation to California",
    "Cultural tour of Tokyo",
    "Adventure in Costa Rica",
]


def get_dev_token() -> str:
    """Dev bearer token accepted by the stub verifier.

    Replaced by the identity service's access token when identity_url is set.
    """
    return "00000000-0000-0000-0000-000000000002"


def create_session(
    backend_url: str,
    token: str,
    trip_id: str | None = None,
    on_generation_start: Listener | None = None,
    on_generation_complete: Listener | None = None,
) -> RoadmapSession:
    """Build a session whose generator is the remote travel agent."""
    generator = RemoteResponseGenerator(backend_url, token, trip_id=trip_id)
    return RoadmapSession(
        generator,
        timeout_s=60.0,
        on_generation_start=on_generation_start,
        on_generation_complete=on_generation_complete,
    )


def format_day_heading(day: Day) -> str:
    """Heading like "Day 2 · Wednesday, April 16: Temples and Traditional Tokyo"."""
    heading = f"Day {day.day}"
    if day.date is not None:
        heading += f" · {format_date(day.date)}"
    if day.summary:
        heading += f": {day.summary}"
    return heading


def format_date(value: date) -> str:
    return value.strftime("%A, %B %d")


def build_activity_lines(day: Day) -> list[str]:
    """Markdown bullet lines for a day's activities."""
    lines = []
    for activity in day.activities:
        line = f"**{activity.time}** {activity.title}" if activity.time else activity.title
        if activity.location:
            line += f" @ _{activity.location}_"
        if activity.description:
            line += f"\n  - {activity.description}"
        lines.append(f"- {line}")
    return lines


def build_map_points(itinerary: ItineraryDocument | None) -> list[dict[str, float]]:
    """Points for st.map (lat/lon keys), one per located activity."""
    if itinerary is None:
        return []
    points = []
    for day in itinerary.days:
        for activity in day.activities:
            if activity.coordinates is not None:
                lon, lat = activity.coordinates
                points.append({"lat": lat, "lon": lon})
    return points


def build_chat_rows(transcript: list[Message]) -> list[tuple[str, str]]:
    """(role, content) pairs for st.chat_message rendering."""
    return [(m.role.value, m.content) for m in transcript]
