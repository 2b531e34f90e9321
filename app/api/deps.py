"""Shared FastAPI dependencies and error translation."""

from __future__ import annotations

from fastapi import HTTPException

from app.domain import ServiceError
from app.ingestors import ForecastIngestor, PlacesIngestor


def get_forecast_ingestor() -> ForecastIngestor:
    return ForecastIngestor()


def get_places_ingestor() -> PlacesIngestor:
    return PlacesIngestor()


def http_error_from(exc: ServiceError) -> HTTPException:
    """Surface a service error with its status and message."""

    status_code = exc.status_code if 400 <= exc.status_code <= 599 else 502
    return HTTPException(status_code=status_code, detail=exc.message)


__all__ = ["get_forecast_ingestor", "get_places_ingestor", "http_error_from"]
