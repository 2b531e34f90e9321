"""Heuristic jacket score: how much a jacket is needed, from 0 to 10."""

from __future__ import annotations

from dataclasses import dataclass
import math

from app.domain import VenueType

MIN_SCORE = 0
MAX_SCORE = 10

PRECIPITATION_KEYWORDS = (
    "rain",
    "snow",
    "drizzle",
    "sleet",
    "shower",
    "thunderstorm",
    "hail",
)


@dataclass(frozen=True)
class ScoreTable:
    """Tunable thresholds for the jacket score.

    ``temperature_bands`` maps an inclusive upper bound in Fahrenheit to a base
    score and must be ordered from coldest to warmest with non-increasing
    scores; temperatures above the last bound score ``warm_base``.
    """

    temperature_bands: tuple[tuple[float, float], ...] = (
        (32.0, 6.0),
        (45.0, 5.0),
        (55.0, 4.0),
        (65.0, 2.0),
        (75.0, 1.0),
    )
    warm_base: float = 0.0
    wind_points_per_mph: float = 0.1
    precipitation_bonus: float = 2.0
    indoor_factor: float = 0.5


DEFAULT_SCORE_TABLE = ScoreTable()


def has_precipitation(descriptor: str | None) -> bool:
    """True when the forecast descriptor names a form of precipitation."""

    if not descriptor:
        return False
    text = descriptor.lower()
    return any(keyword in text for keyword in PRECIPITATION_KEYWORDS)


def _temperature_base(temperature: float, table: ScoreTable) -> float:
    for upper_bound, base in table.temperature_bands:
        if temperature <= upper_bound:
            return base
    return table.warm_base


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_jacket_score(
    temperature: float,
    wind_speed: float,
    precipitation: str | None,
    venue_type: VenueType,
    *,
    table: ScoreTable = DEFAULT_SCORE_TABLE,
) -> int:
    """Score the need for a jacket; always returns a value in [0, 10]."""

    raw = _temperature_base(temperature, table)
    raw += max(0.0, wind_speed) * table.wind_points_per_mph
    if has_precipitation(precipitation):
        raw += table.precipitation_bonus
    if venue_type == VenueType.INDOOR:
        raw *= table.indoor_factor

    if math.isnan(raw):
        raw = MIN_SCORE
    clamped = min(max(raw, MIN_SCORE), MAX_SCORE)
    return _round_half_up(clamped)


__all__ = [
    "DEFAULT_SCORE_TABLE",
    "MAX_SCORE",
    "MIN_SCORE",
    "ScoreTable",
    "calculate_jacket_score",
    "has_precipitation",
]
