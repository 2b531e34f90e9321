"""Recommendation request and response models."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Numbers may arrive as strings from the web form and are parsed by the service
Numeric = Union[float, int, str]


class RecommendationRequest(BaseModel):
    """Raw recommendation payload; validated by the recommendation service."""

    model_config = ConfigDict(populate_by_name=True)

    location: Optional[str] = Field(default=None, description="Venue or place name")
    time: Optional[str] = Field(default=None, description="Arrival time display string")
    duration: Optional[Numeric] = Field(default=None, description="Stay length in hours")
    temperature: Optional[Numeric] = Field(default=None, description="Temperature in F")
    wind: Optional[Numeric] = Field(default=None, description="Wind speed in mph")
    precipitation: Optional[str] = Field(default=None, description="Precipitation descriptor")
    venue_type: Optional[str] = Field(
        default=None, alias="venueType", description="Indoor or Outdoor",
    )
    gender: Optional[str] = Field(default=None, description="Optional gender")


class RecommendationResponse(BaseModel):
    """Free-text jacket advice from the language model."""

    recommendation: str = Field(..., description="Trimmed model response")


__all__ = ["RecommendationRequest", "RecommendationResponse"]
