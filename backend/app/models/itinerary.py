"""Itinerary models - the roadmap document revised by each generation."""

import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from backend.app.models.common import Coordinates, MapViewport


class Activity(BaseModel):
    """Single activity in a day."""

    title: str
    time: str = ""  # free text ("14:00", "Morning")
    location: str = ""
    description: str | None = None
    coordinates: Coordinates | None = None


class Day(BaseModel):
    """One day of the roadmap."""

    model_config = ConfigDict(populate_by_name=True)

    day: int = Field(..., ge=1, validation_alias=AliasChoices("day", "day_number"))
    date: datetime.date | None = None
    summary: str = ""
    activities: list[Activity] = Field(default_factory=list)


class ItineraryDocument(BaseModel):
    """Complete roadmap for one planning conversation."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str | None = None
    days: list[Day] = Field(default_factory=list)
    map_viewport: MapViewport | None = Field(
        None,
        validation_alias=AliasChoices("mapViewport", "map_viewport", "map"),
        serialization_alias="mapViewport",
    )

    @model_validator(mode="after")
    def _check_unique_day_numbers(self) -> "ItineraryDocument":
        seen: set[int] = set()
        for day in self.days:
            if day.day in seen:
                raise ValueError(f"duplicate day number {day.day}")
            seen.add(day.day)
        return self

    def next_day_number(self) -> int:
        """Next unused day index: max(existing) + 1, or 1 when empty."""
        return max((d.day for d in self.days), default=0) + 1

    def last_date(self) -> datetime.date | None:
        """Latest date among dated days, if any."""
        dates = [d.date for d in self.days if d.date is not None]
        return max(dates) if dates else None

    def with_day(self, day: Day) -> "ItineraryDocument":
        """Return a copy with ``day`` appended; existing days are untouched."""
        return self.model_copy(update={"days": [*self.days, day]}, deep=True)
