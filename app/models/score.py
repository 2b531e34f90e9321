"""Jacket score request and response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain import VenueType


class JacketScoreRequest(BaseModel):
    """Weather and venue inputs for the score engine."""

    model_config = ConfigDict(populate_by_name=True)

    temperature: float = Field(..., description="Temperature in Fahrenheit")
    wind_speed: float = Field(..., alias="windSpeed", description="Wind speed in mph")
    precipitation: str = Field(..., description="Precipitation descriptor")
    venue_type: VenueType = Field(..., alias="venueType", description="Indoor or Outdoor")

    @field_validator("venue_type", mode="before")
    @classmethod
    def _coerce_venue_type(cls, value):
        if isinstance(value, str):
            return VenueType(value)
        return value


class JacketScoreResponse(BaseModel):
    """Bounded jacket score."""

    score: int = Field(..., ge=0, le=10, description="0 means no jacket, 10 means bundle up")


__all__ = ["JacketScoreRequest", "JacketScoreResponse"]
