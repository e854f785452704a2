"""Common types shared across all models."""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field

Longitude = Annotated[float, Field(ge=-180, le=180)]
Latitude = Annotated[float, Field(ge=-90, le=90)]

# [longitude, latitude], matching the map widget's GeoJSON ordering
Coordinates = tuple[Longitude, Latitude]


class Role(str, Enum):
    """Author of a transcript entry."""

    user = "user"
    assistant = "assistant"


class MapViewport(BaseModel):
    """Map viewport hint for rendering the roadmap."""

    center: Coordinates
    zoom: float = Field(12.0, ge=0, le=22)
