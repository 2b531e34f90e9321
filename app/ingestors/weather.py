"""Forecast lookup using the OpenWeatherMap 5 day / 3 hour forecast."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any

import httpx

from app.config import settings
from app.domain import ConfigurationError, UpstreamServiceError
from app.domain.timeslots import forecast_timestamp
from app.models.weather import WeatherSnapshot

logger = logging.getLogger("jacketscore.ingestors.weather")

DEFAULT_ERROR_MESSAGE = "Failed to fetch weather data"
FORMAT_ERROR_MESSAGE = "Weather response format invalid"


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return DEFAULT_ERROR_MESSAGE
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return DEFAULT_ERROR_MESSAGE


def _nearest_entry(entries: list[Any], target: int) -> dict[str, Any] | None:
    timed = [entry for entry in entries if isinstance(entry, dict) and entry.get("dt") is not None]
    if not timed:
        return None
    return min(timed, key=lambda entry: abs(int(entry["dt"]) - target))


class ForecastIngestor:
    """Fetch the forecast slot nearest to an arrival time."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.openweather_base_url
        self.api_key = api_key if api_key is not None else settings.openweather_api_key
        self.timeout = timeout or settings.weather_timeout
        self.transport = transport

    async def get_forecast(
        self, lat: float, lon: float, timestamp: datetime | int | float
    ) -> WeatherSnapshot:
        if not self.api_key:
            raise ConfigurationError("OpenWeatherMap API key not configured")

        target = forecast_timestamp(timestamp)
        params = {
            "lat": lat,
            "lon": lon,
            "units": "imperial",
            "appid": self.api_key,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.TimeoutException as exc:
            logger.error("Weather request timed out: %s", exc)
            raise UpstreamServiceError("Weather service timeout", status_code=504) from exc
        except httpx.RequestError as exc:
            logger.error("Weather request failed: %s", exc)
            raise UpstreamServiceError("Weather request failed") from exc

        if response.is_error:
            logger.error(
                "Weather service returned error: status=%s body=%s",
                response.status_code,
                response.text,
            )
            raise UpstreamServiceError(
                _error_message(response), status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Failed to parse weather JSON response: %s", exc)
            raise UpstreamServiceError(FORMAT_ERROR_MESSAGE) from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("list", []), list):
            logger.error("Unexpected weather payload shape: %s", type(payload).__name__)
            raise UpstreamServiceError(FORMAT_ERROR_MESSAGE)

        try:
            entry = _nearest_entry(payload.get("list") or [], target)
            if entry is None:
                logger.error("No forecast entries for %s, %s", lat, lon)
                raise UpstreamServiceError("Forecast data unavailable")
            snapshot = self._normalize_entry(lat, lon, entry)
        except (TypeError, ValueError, OverflowError) as exc:
            logger.error("Malformed forecast entry: %s", exc)
            raise UpstreamServiceError(FORMAT_ERROR_MESSAGE) from exc

        logger.debug("Forecast snapshot resolved: %s", snapshot)
        return snapshot

    def _normalize_entry(
        self, lat: float, lon: float, entry: dict[str, Any]
    ) -> WeatherSnapshot:
        main = entry.get("main") or {}
        wind = entry.get("wind") or {}
        conditions = entry.get("weather") or []
        if not isinstance(main, dict) or not isinstance(wind, dict):
            raise TypeError("forecast entry main/wind must be objects")
        if not isinstance(conditions, list):
            raise TypeError("forecast entry weather must be a list")
        condition = conditions[0] if conditions else {}
        if not isinstance(condition, dict):
            raise TypeError("forecast condition must be an object")

        temperature = main.get("temp")
        if temperature is None:
            raise UpstreamServiceError("Forecast entry missing temperature")

        return WeatherSnapshot(
            latitude=lat,
            longitude=lon,
            as_of=datetime.fromtimestamp(int(entry["dt"]), tz=timezone.utc),
            temperature_f=float(temperature),
            wind_speed_mph=float(wind.get("speed") or 0.0),
            precipitation=condition.get("description") or condition.get("main") or "clear",
            icon_code=condition.get("icon"),
        )


__all__ = ["ForecastIngestor"]
