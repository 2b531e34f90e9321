"""Place lookup models backing the destination autocomplete."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class PlaceSuggestion(BaseModel):
    """Autocomplete prediction shown while the user types a destination."""

    place_id: str = Field(..., description="Provider identifier for the place")
    description: str = Field(..., description="Human-readable place description")


class Place(BaseModel):
    """Resolved destination with coordinates."""

    place_id: Optional[str] = Field(default=None, description="Provider identifier")
    name: str = Field(..., description="Display name of the place")
    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")


__all__ = ["Place", "PlaceSuggestion"]
