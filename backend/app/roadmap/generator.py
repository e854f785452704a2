"""Response generators - map (message, itinerary) to (reply, next itinerary).

The keyword generator is the default implementation. It has two modes:

- bootstrap: the session has no itinerary (or one with no days); a seed
  template is chosen by destination keyword and the whole document is built.
- follow-up: one new day is appended, chosen by category keyword
  (lodging, food, otherwise highlights). The viewport is left unchanged.

Dates are stamped as ``today + len(existing days)``, bumped past the last
dated day when needed so dates always strictly increase.
"""

import random
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal, Protocol

from backend.app.models.common import Coordinates, MapViewport
from backend.app.models.itinerary import Activity, Day, ItineraryDocument
from backend.app.roadmap.clock import Clock, SystemClock
from backend.app.roadmap.templates import (
    BOOTSTRAP_REPLY,
    DESTINATIONS,
    FOOD_DAY,
    FOOD_KEYWORDS,
    FOOD_REPLIES,
    GENERAL_REPLIES,
    GENERIC,
    HIGHLIGHTS_DAY,
    LODGING_DAY,
    LODGING_KEYWORDS,
    LODGING_REPLIES,
    DayTemplate,
    DestinationTemplate,
)

GenerationMode = Literal["bootstrap", "follow_up"]
FollowUpCategory = Literal["lodging", "food", "highlights"]


@dataclass(frozen=True)
class GenerationResult:
    """Output of one generation."""

    reply_text: str
    itinerary: ItineraryDocument
    mode: GenerationMode


class ResponseGenerator(Protocol):
    """Protocol for response generator implementations."""

    async def generate(
        self, text: str, itinerary: ItineraryDocument | None
    ) -> GenerationResult:
        """Produce a reply and the next itinerary.

        Args:
            text: Latest user message (never empty)
            itinerary: Current itinerary, or None at session start

        Returns:
            GenerationResult whose itinerary keeps every existing day in order
        """
        ...


class ReplyPicker(Protocol):
    """Selects one reply from a pool."""

    def pick(self, pool: Sequence[str]) -> str:
        ...


class RandomReplyPicker:
    """Uniform random choice; seedable for reproducibility."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def pick(self, pool: Sequence[str]) -> str:
        return self._rng.choice(list(pool))


class FirstReplyPicker:
    """Always returns the first entry. Deterministic stub for tests."""

    def pick(self, pool: Sequence[str]) -> str:
        return pool[0]


def is_bootstrap(itinerary: ItineraryDocument | None) -> bool:
    """True when the next generation must build the itinerary from scratch."""
    return itinerary is None or not itinerary.days


def _contains_keyword(text: str, keywords: Sequence[str]) -> bool:
    # Case-insensitive substring match
    lowered = text.lower()
    return any(kw in lowered for kw in keywords)


def match_destination(text: str) -> DestinationTemplate:
    """Pick the seed template for a prompt (case-insensitive, first match wins)."""
    for destination in DESTINATIONS:
        if _contains_keyword(text, destination.keywords):
            return destination
    return GENERIC


def classify_follow_up(text: str) -> FollowUpCategory:
    """Classify a follow-up message into a day category."""
    if _contains_keyword(text, LODGING_KEYWORDS):
        return "lodging"
    if _contains_keyword(text, FOOD_KEYWORDS):
        return "food"
    return "highlights"


def next_day_date(itinerary: ItineraryDocument, today: date) -> date:
    """Date for a newly appended day: today + len(days), after the last dated day."""
    candidate = today + timedelta(days=len(itinerary.days))
    last = itinerary.last_date()
    if last is not None and candidate <= last:
        candidate = last + timedelta(days=1)
    return candidate


def build_day(
    template: DayTemplate, number: int, day_date: date, fallback: Coordinates | None
) -> Day:
    """Materialize a day template."""
    return Day(
        day=number,
        date=day_date,
        summary=template.summary,
        activities=[
            Activity(
                title=a.title,
                time=a.time,
                location=a.location,
                description=a.description,
                coordinates=a.coordinates if a.coordinates is not None else fallback,
            )
            for a in template.activities
        ],
    )


def build_seed_itinerary(destination: DestinationTemplate, today: date) -> ItineraryDocument:
    """Build the initial multi-day itinerary for a destination."""
    center = destination.center
    # Generic placeholder has no meaningful location for activities
    fallback = center if destination is not GENERIC else None
    days = [
        build_day(template, i + 1, today + timedelta(days=i), fallback)
        for i, template in enumerate(destination.days)
    ]
    viewport = (
        MapViewport(center=center, zoom=destination.zoom)
        if center is not None
        else None
    )
    return ItineraryDocument(
        title=f"{destination.name} Adventure",
        description=f"A personalized {destination.name.lower()} experience",
        days=days,
        map_viewport=viewport,
    )


_FOLLOW_UP_TEMPLATES: dict[FollowUpCategory, tuple[DayTemplate, Sequence[str]]] = {
    "lodging": (LODGING_DAY, LODGING_REPLIES),
    "food": (FOOD_DAY, FOOD_REPLIES),
    "highlights": (HIGHLIGHTS_DAY, GENERAL_REPLIES),
}


class KeywordResponseGenerator:
    """Rule-based generator driven by keyword matches."""

    def __init__(
        self,
        reply_picker: ReplyPicker | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._picker = reply_picker or RandomReplyPicker()
        self._clock = clock or SystemClock()

    async def generate(
        self, text: str, itinerary: ItineraryDocument | None
    ) -> GenerationResult:
        """Generate reply and next itinerary."""
        if itinerary is None or is_bootstrap(itinerary):
            return self.bootstrap(text)
        return self.follow_up(text, itinerary)

    def bootstrap(self, text: str) -> GenerationResult:
        """Replace mode: build the itinerary from a destination template."""
        destination = match_destination(text)
        itinerary = build_seed_itinerary(destination, self._clock.today())
        return GenerationResult(
            reply_text=BOOTSTRAP_REPLY.format(prompt=text.strip()),
            itinerary=itinerary,
            mode="bootstrap",
        )

    def follow_up(self, text: str, itinerary: ItineraryDocument) -> GenerationResult:
        """Extend mode: append exactly one templated day."""
        template, replies = _FOLLOW_UP_TEMPLATES[classify_follow_up(text)]
        center = itinerary.map_viewport.center if itinerary.map_viewport else None
        day = build_day(
            template,
            itinerary.next_day_number(),
            next_day_date(itinerary, self._clock.today()),
            center,
        )
        return GenerationResult(
            reply_text=self._picker.pick(replies),
            itinerary=itinerary.with_day(day),
            mode="follow_up",
        )
