"""Forecast weather models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class WeatherSnapshot(BaseModel):
    """Forecast conditions for one location and 3-hour forecast slot."""

    latitude: float = Field(..., description="Latitude of the forecast point")
    longitude: float = Field(..., description="Longitude of the forecast point")
    as_of: datetime = Field(..., description="Start of the forecast slot (UTC)")
    temperature_f: float = Field(..., description="Air temperature in Fahrenheit")
    wind_speed_mph: float = Field(..., description="Wind speed in miles per hour")
    precipitation: str = Field(
        ..., description="Short textual summary of precipitation or sky conditions",
    )
    icon_code: Optional[str] = Field(
        default=None, description="OpenWeatherMap icon code for display",
    )


__all__ = ["WeatherSnapshot"]
