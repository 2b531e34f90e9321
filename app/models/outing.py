"""Outing submission and result models for the form endpoint."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.weather import WeatherSnapshot


class OutingSubmission(BaseModel):
    """Form inputs as sent by the client.

    Every field is optional here so the form controller can report missing
    inputs with the same prompt the form shows.
    """

    model_config = ConfigDict(populate_by_name=True)

    place_id: Optional[str] = Field(default=None, alias="placeId")
    place_name: Optional[str] = Field(default=None, alias="placeName")
    latitude: Optional[float] = Field(default=None)
    longitude: Optional[float] = Field(default=None)
    venue_type: Optional[str] = Field(default=None, alias="venueType")
    arrival_time: Optional[str] = Field(
        default=None, alias="arrivalTime", description="Label such as '07:00 PM'",
    )
    duration: Optional[int] = Field(default=None, description="Stay length in hours")
    gender: Optional[str] = Field(default=None)
    timezone: Optional[str] = Field(
        default=None, description="IANA timezone used to read the arrival label",
    )


class OutingSummary(BaseModel):
    """Echo of the submitted outing."""

    place_name: str
    latitude: float
    longitude: float
    arrival_time: str
    forecast_time: datetime
    duration_hours: int
    venue_type: str
    gender: Optional[str] = None


class OutingResponse(BaseModel):
    """Results view: weather plus independently optional score and advice."""

    status: Literal["complete", "partial", "weather_only"]
    outing: OutingSummary
    weather: WeatherSnapshot
    score: Optional[int] = None
    score_error: Optional[str] = None
    recommendation: Optional[str] = None
    recommendation_error: Optional[str] = None


class ArrivalTimesResponse(BaseModel):
    """Hourly choices for the arrival time slider."""

    timezone: str
    choices: list[str]


__all__ = [
    "ArrivalTimesResponse",
    "OutingResponse",
    "OutingSubmission",
    "OutingSummary",
]
