"""Destination autocomplete using the Google Places web service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.config import settings
from app.domain import ConfigurationError, UpstreamServiceError
from app.models.places import Place, PlaceSuggestion

logger = logging.getLogger("jacketscore.ingestors.places")

_EMPTY_STATUSES = {"ZERO_RESULTS"}


class PlacesIngestor:
    """Proxy autocomplete predictions and place coordinates."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.places_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.places_api_key
        self.timeout = timeout or settings.places_timeout
        self.transport = transport

    async def autocomplete(self, text: str) -> list[PlaceSuggestion]:
        if not text.strip():
            return []

        payload = await self._get("autocomplete/json", {"input": text.strip()})
        if payload.get("status") in _EMPTY_STATUSES:
            return []

        suggestions: list[PlaceSuggestion] = []
        for prediction in payload.get("predictions") or []:
            place_id = prediction.get("place_id")
            description = prediction.get("description")
            if place_id and description:
                suggestions.append(
                    PlaceSuggestion(place_id=place_id, description=description)
                )
        logger.debug("Autocomplete returned %s suggestions", len(suggestions))
        return suggestions

    async def get_place(self, place_id: str) -> Place:
        payload = await self._get(
            "details/json", {"place_id": place_id, "fields": "name,geometry"}
        )
        if payload.get("status") in _EMPTY_STATUSES:
            raise UpstreamServiceError("Place not found", status_code=404)

        result = payload.get("result") or {}
        location = (result.get("geometry") or {}).get("location") or {}
        if location.get("lat") is None or location.get("lng") is None:
            raise UpstreamServiceError("Place has no coordinates")

        return Place(
            place_id=place_id,
            name=result.get("name") or place_id,
            latitude=float(location["lat"]),
            longitude=float(location["lng"]),
        )

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise ConfigurationError("Google Places API key not configured")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(
                    f"{self.base_url}/{path}", params={**params, "key": self.api_key}
                )
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("Places request timed out: %s", exc)
            raise UpstreamServiceError("Places service timeout", status_code=504) from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Places service returned error: status=%s body=%s",
                exc.response.status_code,
                exc.response.text,
            )
            raise UpstreamServiceError(
                "Places service error", status_code=exc.response.status_code
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Places request failed: %s", exc)
            raise UpstreamServiceError("Places request failed") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Failed to parse places JSON response: %s", exc)
            raise UpstreamServiceError("Places response format invalid") from exc

        status = payload.get("status", "OK")
        if status != "OK" and status not in _EMPTY_STATUSES:
            message = payload.get("error_message") or f"Places lookup failed: {status}"
            logger.error("Places service rejected request: %s", message)
            raise UpstreamServiceError(message)
        return payload


__all__ = ["PlacesIngestor"]
