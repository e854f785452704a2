"""Unit tests for itinerary and transcript models."""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from backend.app.models.common import MapViewport, Role
from backend.app.models.itinerary import Activity, Day, ItineraryDocument
from backend.app.models.messages import AgentRequest, AgentResponse, Message


def _doc(*day_numbers: int) -> ItineraryDocument:
    return ItineraryDocument(
        title="Paris Adventure",
        days=[Day(day=n, summary=f"Day {n}") for n in day_numbers],
        map_viewport=MapViewport(center=(2.3522, 48.8566), zoom=12),
    )


def test_activity_accepts_valid_coordinates() -> None:
    """Test [lon, lat] within range is accepted."""
    activity = Activity(title="Louvre", coordinates=(2.3376, 48.8606))

    assert activity.coordinates == (2.3376, 48.8606)


@pytest.mark.parametrize("coords", [(181.0, 10.0), (-181.0, 10.0), (10.0, 91.0), (10.0, -91.0)])
def test_activity_rejects_out_of_range_coordinates(coords: tuple[float, float]) -> None:
    """Test longitude outside ±180 or latitude outside ±90 is rejected."""
    with pytest.raises(ValidationError):
        Activity(title="Nowhere", coordinates=coords)


def test_day_numbers_must_be_unique() -> None:
    """Test duplicate day numbers are rejected."""
    with pytest.raises(ValidationError) as exc_info:
        _doc(1, 2, 2)

    assert "duplicate day number 2" in str(exc_info.value)


def test_day_number_must_be_positive() -> None:
    """Test day 0 is rejected."""
    with pytest.raises(ValidationError):
        Day(day=0)


def test_day_accepts_day_number_alias() -> None:
    """Test payloads using day_number are accepted."""
    day = Day.model_validate({"day_number": 3, "summary": "Beach"})

    assert day.day == 3


def test_next_day_number_is_max_plus_one() -> None:
    """Test next index uses max, not length, when numbers have gaps."""
    assert _doc().next_day_number() == 1
    assert _doc(1, 2).next_day_number() == 3
    assert _doc(1, 5).next_day_number() == 6


def test_last_date_ignores_undated_days() -> None:
    """Test last_date skips days without a date."""
    doc = ItineraryDocument(
        title="Trip",
        days=[Day(day=1, date=date(2025, 4, 15)), Day(day=2)],
    )

    assert doc.last_date() == date(2025, 4, 15)
    assert ItineraryDocument(title="Empty").last_date() is None


def test_with_day_returns_copy() -> None:
    """Test with_day leaves the original document untouched."""
    doc = _doc(1)

    extended = doc.with_day(Day(day=2, summary="More"))

    assert [d.day for d in doc.days] == [1]
    assert [d.day for d in extended.days] == [1, 2]


def test_itinerary_serializes_map_viewport_in_camel_case() -> None:
    """Test wire format uses mapViewport."""
    data = _doc(1).model_dump(mode="json", by_alias=True)

    assert data["mapViewport"] == {"center": [2.3522, 48.8566], "zoom": 12.0}
    assert "map_viewport" not in data


def test_itinerary_accepts_legacy_map_key() -> None:
    """Test documents using the older "map" key are accepted."""
    doc = ItineraryDocument.model_validate(
        {"title": "Tokyo Adventure", "days": [], "map": {"center": [139.7525, 35.6846], "zoom": 12}}
    )

    assert doc.map_viewport is not None
    assert doc.map_viewport.center == (139.7525, 35.6846)


def test_message_is_frozen() -> None:
    """Test transcript entries cannot be mutated."""
    message = Message(id=1, content="hi", role=Role.user, created_at=datetime.now(UTC))

    with pytest.raises(ValidationError):
        message.content = "changed"  # type: ignore[misc]


def test_agent_request_reads_camel_case_fields() -> None:
    """Test tripId and tripContext aliases."""
    request = AgentRequest.model_validate(
        {"message": "hotel please", "tripId": "abc", "tripContext": {"title": "T", "days": []}}
    )

    assert request.trip_id == "abc"
    assert request.trip_context is not None
    assert request.trip_context.title == "T"


def test_agent_response_round_trips_through_aliases() -> None:
    """Test response dumps by alias and validates back."""
    response = AgentResponse(message="ok", updated_roadmap=_doc(1))

    data = response.model_dump(mode="json", by_alias=True)
    restored = AgentResponse.model_validate(data)

    assert "updatedRoadmap" in data
    assert restored.updated_roadmap.days[0].day == 1
