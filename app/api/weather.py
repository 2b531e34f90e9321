"""Forecast lookup endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_forecast_ingestor, http_error_from
from app.domain import ServiceError
from app.ingestors import ForecastIngestor
from app.models.weather import WeatherSnapshot

router = APIRouter(prefix="/api/v1", tags=["weather"])

logger = logging.getLogger("jacketscore.api.weather")


@router.get(
    "/weather",
    response_model=WeatherSnapshot,
    summary="Forecast for a location at the nearest 3-hour slot",
)
async def get_weather(
    lat: float = Query(..., ge=-90, le=90, description="Latitude"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude"),
    timestamp: int = Query(..., description="Unix seconds; rounded to a 3-hour slot"),
    ingestor: ForecastIngestor = Depends(get_forecast_ingestor),
) -> WeatherSnapshot:
    try:
        return await ingestor.get_forecast(lat, lon, timestamp)
    except ServiceError as exc:
        raise http_error_from(exc) from exc
