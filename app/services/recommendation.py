"""Build jacket recommendation prompts and fetch the model's advice."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Any, Optional

from app.domain import Gender, VenueType
from app.models.recommendation import RecommendationRequest
from app.services import openai_client

logger = logging.getLogger("jacketscore.recommendation")

MISSING_DATA_MESSAGE = "Missing or invalid data in request body."
INVALID_NUMBER_MESSAGE = "Invalid number format for temperature, wind, or duration."


@dataclass(frozen=True)
class RecommendationInput:
    """Validated prompt inputs."""

    location: str
    time: str
    duration_hours: int
    temperature_f: float
    wind_mph: float
    precipitation: str
    venue_type: VenueType
    gender: Optional[str] = None


def _parse_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(INVALID_NUMBER_MESSAGE)
    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(INVALID_NUMBER_MESSAGE) from exc
    if not math.isfinite(parsed):
        raise ValueError(INVALID_NUMBER_MESSAGE)
    return parsed


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def parse_recommendation_request(request: RecommendationRequest) -> RecommendationInput:
    """Validate a raw request; raises ValueError with a client-facing message."""

    if (
        not request.location
        or not request.time
        or request.duration in (None, "", 0)
        or request.temperature is None
        or request.wind is None
        or not request.precipitation
        or not request.venue_type
    ):
        logger.error("Invalid request body: %s", request.model_dump())
        raise ValueError(MISSING_DATA_MESSAGE)

    try:
        venue_type = VenueType(request.venue_type)
    except ValueError as exc:
        raise ValueError(MISSING_DATA_MESSAGE) from exc

    temperature = _parse_float(request.temperature)
    wind = _parse_float(request.wind)
    duration = int(_parse_float(request.duration))

    gender = request.gender.strip() if request.gender else None
    if gender == Gender.PREFER_NOT_TO_SAY.value:
        gender = None

    return RecommendationInput(
        location=request.location,
        time=request.time,
        duration_hours=duration,
        temperature_f=temperature,
        wind_mph=wind,
        precipitation=request.precipitation,
        venue_type=venue_type,
        gender=gender or None,
    )


def build_prompt(data: RecommendationInput) -> str:
    """Natural-language prompt embedding the outing and its weather."""

    prompt = (
        f"I'm going to an {data.venue_type.value.lower()} venue called {data.location} "
        f"at {data.time} for {data.duration_hours} hours. "
        f"The weather is {_format_number(data.temperature_f)} degrees F with "
        f"{_format_number(data.wind_mph)} mph wind and {data.precipitation}."
    )
    if data.gender:
        prompt += f" The person is {data.gender}."
    prompt += " Do I need a jacket? Provide a brief recommendation."
    return prompt


async def get_recommendation(data: RecommendationInput) -> str:
    """Ask the language model for advice; upstream errors propagate."""

    prompt = build_prompt(data)
    recommendation = (await openai_client.complete_prompt(prompt)).strip()
    logger.info(
        "Recommendation generated: location=%s venue=%s chars=%s",
        data.location,
        data.venue_type.value,
        len(recommendation),
    )
    return recommendation


__all__ = [
    "INVALID_NUMBER_MESSAGE",
    "MISSING_DATA_MESSAGE",
    "RecommendationInput",
    "build_prompt",
    "get_recommendation",
    "parse_recommendation_request",
]
