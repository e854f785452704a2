"""Model-backed response generator with OpenAI integration.

Security: Reads API key from settings only, never hardcoded.
Bootstrap always uses the keyword templates; follow-ups ask the model for
one new day as JSON and fall back to the keyword generator on any failure.
"""

import json
import logging

from openai import AsyncOpenAI
from pydantic import BaseModel, Field, ValidationError

from backend.app.config import Settings
from backend.app.models.itinerary import Activity, Day, ItineraryDocument
from backend.app.roadmap.clock import Clock, SystemClock
from backend.app.roadmap.generator import (
    GenerationResult,
    KeywordResponseGenerator,
    ReplyPicker,
    ResponseGenerator,
    is_bootstrap,
    next_day_date,
)

logger = logging.getLogger(__name__)


class ProposedDay(BaseModel):
    """Shape the model is asked to return."""

    reply: str = Field(..., min_length=1)
    summary: str
    activities: list[Activity] = Field(..., min_length=1)


class OpenAIResponseGenerator:
    """OpenAI-backed generator for follow-up messages."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        *,
        fallback: KeywordResponseGenerator | None = None,
        clock: Clock | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize OpenAI generator.

        Args:
            api_key: OpenAI API key (read from settings)
            model: Model name to use (default: gpt-4o-mini for cost efficiency)
            fallback: Keyword generator used for bootstrap and on failure
            clock: Clock for date stamping
            client: Optional preconfigured client (for testing)
        """
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model
        self._clock = clock or SystemClock()
        self._fallback = fallback or KeywordResponseGenerator(clock=self._clock)

    async def generate(
        self, text: str, itinerary: ItineraryDocument | None
    ) -> GenerationResult:
        """Generate reply and next itinerary."""
        if itinerary is None or is_bootstrap(itinerary):
            return self._fallback.bootstrap(text)

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": self._build_system_prompt()},
                    {"role": "user", "content": self._build_context(text, itinerary)},
                ],
                response_format={"type": "json_object"},
                temperature=0.7,
                max_tokens=1200,
            )
            content = response.choices[0].message.content or ""
            proposed = ProposedDay.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"OpenAI returned an unusable day ({e}), using keyword fallback")
            return self._fallback.follow_up(text, itinerary)
        except Exception as e:
            logger.error(f"OpenAI API call failed: {e}")
            logger.warning("Falling back to keyword generator for follow-up")
            return self._fallback.follow_up(text, itinerary)

        day = Day(
            day=itinerary.next_day_number(),
            date=next_day_date(itinerary, self._clock.today()),
            summary=proposed.summary,
            activities=proposed.activities,
        )
        return GenerationResult(
            reply_text=proposed.reply,
            itinerary=itinerary.with_day(day),
            mode="follow_up",
        )

    def _build_system_prompt(self) -> str:
        """Build system prompt for day proposals."""
        return """You are a travel planning assistant extending an existing day-by-day itinerary.
Given the current itinerary and the traveler's latest message, propose exactly ONE new day.

Respond with a JSON object:
{"reply": "<short friendly message to the traveler>",
 "summary": "<one-line summary of the new day>",
 "activities": [{"title": "...", "time": "HH:MM", "location": "...",
                 "description": "...", "coordinates": [longitude, latitude]}]}

CRITICAL CONSTRAINTS:
- Do NOT modify, remove or repeat existing days.
- Coordinates are [longitude, latitude] near the trip's map center; omit them if unsure.
- Keep 1 to 4 activities, in chronological order."""

    def _build_context(self, text: str, itinerary: ItineraryDocument) -> str:
        """Build context string for the model."""
        lines = [f"## Trip: {itinerary.title}"]
        if itinerary.description:
            lines.append(itinerary.description)
        if itinerary.map_viewport:
            lon, lat = itinerary.map_viewport.center
            lines.append(f"Map center: [{lon}, {lat}]")
        lines.append("")

        lines.append("## Existing Days")
        for day in itinerary.days[-10:]:  # Limit for context size
            titles = ", ".join(a.title for a in day.activities) or "no activities"
            lines.append(f"- Day {day.day} ({day.date or 'undated'}): {day.summary} - {titles}")
        lines.append("")

        lines.append("## Traveler Message")
        lines.append(text)
        return "\n".join(lines)


def get_response_generator(
    settings: Settings,
    reply_picker: ReplyPicker | None = None,
    clock: Clock | None = None,
) -> ResponseGenerator:
    """Factory function to get appropriate generator based on config.

    Returns:
        OpenAIResponseGenerator if API key is configured, KeywordResponseGenerator otherwise
    """
    keyword = KeywordResponseGenerator(reply_picker=reply_picker, clock=clock)
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI generator for follow-ups")
        return OpenAIResponseGenerator(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            fallback=keyword,
            clock=clock,
        )
    logger.info("No OpenAI API key configured, using keyword generator")
    return keyword
