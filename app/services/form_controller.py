"""Outing form state machine: collect inputs, fetch weather, score, advise.

The form moves through ``idle -> validating -> loading -> results | error``.
All state lives in one immutable :class:`FormState`; every transition
replaces it, so combinations such as "loading with results" cannot exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone, tzinfo
from enum import Enum
import logging
import math
from typing import Awaitable, Callable, Optional, Protocol

from app.domain import Gender, ServiceError, VenueType
from app.domain.timeslots import arrival_choices, resolve_arrival, round_to_forecast_slot
from app.models.places import Place
from app.models.weather import WeatherSnapshot
from app.services import recommendation as recommendation_service
from app.services.jacket_score import calculate_jacket_score
from app.services.recommendation import RecommendationInput

logger = logging.getLogger("jacketscore.form")

REQUIRED_FIELDS_MESSAGE = "Please fill in all the required fields."
INVALID_TIME_MESSAGE = "Invalid time selected."
RECOMMENDATION_ERROR_MESSAGE = "Failed to fetch recommendation"
MIN_DURATION_HOURS = 1
MAX_DURATION_HOURS = 12


class FormPhase(str, Enum):
    """Phases of the outing form."""

    IDLE = "idle"
    VALIDATING = "validating"
    LOADING = "loading"
    RESULTS = "results"
    ERROR = "error"


class ResultStatus(str, Enum):
    """How much of the results view could be filled."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    WEATHER_ONLY = "weather_only"


class FormStateError(RuntimeError):
    """Raised when an operation is not allowed in the current phase."""


class ForecastSource(Protocol):
    async def get_forecast(
        self, lat: float, lon: float, timestamp: datetime | int | float
    ) -> WeatherSnapshot:
        ...


Scorer = Callable[[float, float, str, VenueType], int]
Recommender = Callable[[RecommendationInput], Awaitable[str]]


@dataclass(frozen=True)
class OutingSelections:
    """Inputs collected by the form so far."""

    place: Optional[Place] = None
    venue_type: Optional[VenueType] = None
    arrival_time: Optional[str] = None
    duration_hours: Optional[int] = MIN_DURATION_HOURS
    gender: Optional[Gender] = None

    def missing_fields(self) -> list[str]:
        missing = []
        if self.place is None:
            missing.append("place")
        if self.venue_type is None:
            missing.append("venue_type")
        if not self.arrival_time:
            missing.append("arrival_time")
        if not self.duration_hours:
            missing.append("duration")
        if self.gender is None:
            missing.append("gender")
        return missing


@dataclass(frozen=True)
class OutingRequest:
    """A submitted outing; the forecast key is the rounded arrival time."""

    place_name: str
    latitude: float
    longitude: float
    arrival_time: str
    arrival_at: datetime
    forecast_time: datetime
    duration_hours: int
    venue_type: VenueType
    gender: Optional[Gender] = None

    @property
    def prompt_gender(self) -> Optional[str]:
        if self.gender is None or self.gender == Gender.PREFER_NOT_TO_SAY:
            return None
        return self.gender.value


@dataclass(frozen=True)
class OutingResult:
    """Weather plus independently optional score and recommendation."""

    outing: OutingRequest
    weather: WeatherSnapshot
    score: Optional[int] = None
    score_error: Optional[str] = None
    recommendation: Optional[str] = None
    recommendation_error: Optional[str] = None

    @property
    def status(self) -> ResultStatus:
        if self.score is None and self.recommendation is None:
            return ResultStatus.WEATHER_ONLY
        if self.score is None or self.recommendation is None:
            return ResultStatus.PARTIAL
        return ResultStatus.COMPLETE


@dataclass(frozen=True)
class FormState:
    """Single source of truth for the form."""

    phase: FormPhase = FormPhase.IDLE
    selections: OutingSelections = field(default_factory=OutingSelections)
    error_message: Optional[str] = None
    error_status: Optional[int] = None
    result: Optional[OutingResult] = None


def _round_half_up(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


class FormController:
    """Drive one outing form; at most one submission is in flight."""

    def __init__(
        self,
        forecast_source: ForecastSource,
        *,
        scorer: Scorer | None = None,
        recommender: Recommender | None = None,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.forecast_source = forecast_source
        self.scorer = scorer or calculate_jacket_score
        self.recommender = recommender
        self.tz = tz
        self.clock = clock or (lambda: datetime.now(self.tz))
        self.state = FormState()

    # ----- input collection -----

    def arrival_choices(self) -> list[str]:
        return arrival_choices(self.clock())

    def select_place(self, place: Place) -> FormState:
        # A new destination clears any previous error
        return self._select(clear_error=True, place=place)

    def select_venue_type(self, venue_type: VenueType | str) -> FormState:
        return self._select(venue_type=VenueType(venue_type))

    def select_arrival_time(self, label: str) -> FormState:
        return self._select(arrival_time=label)

    def select_duration(self, hours: int) -> FormState:
        if not MIN_DURATION_HOURS <= hours <= MAX_DURATION_HOURS:
            raise ValueError(
                f"Duration must be between {MIN_DURATION_HOURS} and {MAX_DURATION_HOURS} hours"
            )
        return self._select(duration_hours=hours)

    def select_gender(self, gender: Gender | str) -> FormState:
        return self._select(gender=Gender(gender))

    def _select(self, *, clear_error: bool = False, **changes) -> FormState:
        if self.state.phase != FormPhase.IDLE:
            raise FormStateError(f"Cannot change inputs while {self.state.phase.value}")
        self.state = replace(self.state, selections=replace(self.state.selections, **changes))
        if clear_error:
            self.state = replace(self.state, error_message=None, error_status=None)
        return self.state

    # ----- transitions -----

    def edit(self) -> FormState:
        """Return to input collection, keeping selections."""

        if self.state.phase not in {FormPhase.RESULTS, FormPhase.ERROR}:
            raise FormStateError(f"Nothing to edit while {self.state.phase.value}")
        self.state = FormState(selections=self.state.selections)
        return self.state

    async def submit(self) -> FormState:
        """Validate, fetch the forecast, then score and advise."""

        if self.state.phase == FormPhase.LOADING:
            logger.warning("Submission ignored; a request is already in flight")
            return self.state
        if self.state.phase != FormPhase.IDLE:
            raise FormStateError(f"Cannot submit while {self.state.phase.value}")

        selections = self.state.selections
        self.state = FormState(phase=FormPhase.VALIDATING, selections=selections)

        missing = selections.missing_fields()
        if missing:
            logger.info("Submission blocked; missing fields: %s", ", ".join(missing))
            return self._back_to_idle(REQUIRED_FIELDS_MESSAGE)

        try:
            arrival_at = resolve_arrival(selections.arrival_time, self.clock())
        except ValueError as exc:
            logger.info("Submission blocked; %s", exc)
            return self._back_to_idle(INVALID_TIME_MESSAGE)

        place = selections.place
        outing = OutingRequest(
            place_name=place.name,
            latitude=place.latitude,
            longitude=place.longitude,
            arrival_time=selections.arrival_time,
            arrival_at=arrival_at,
            forecast_time=round_to_forecast_slot(arrival_at),
            duration_hours=selections.duration_hours,
            venue_type=selections.venue_type,
            gender=selections.gender,
        )

        self.state = FormState(phase=FormPhase.LOADING, selections=selections)
        try:
            self.state = await self._run(outing)
        except Exception:
            logger.exception("Outing submission failed unexpectedly")
            self.state = FormState(
                phase=FormPhase.ERROR,
                selections=selections,
                error_message="Something went wrong. Please try again.",
                error_status=500,
            )
            raise
        return self.state

    def _back_to_idle(self, message: str) -> FormState:
        self.state = FormState(
            selections=self.state.selections, error_message=message, error_status=400
        )
        return self.state

    async def _run(self, outing: OutingRequest) -> FormState:
        selections = self.state.selections
        try:
            weather = await self.forecast_source.get_forecast(
                outing.latitude, outing.longitude, outing.forecast_time
            )
        except ServiceError as exc:
            logger.error("Forecast lookup failed: %s", exc.message)
            return FormState(
                phase=FormPhase.ERROR,
                selections=selections,
                error_message=exc.message,
                error_status=exc.status_code,
            )

        weather = weather.model_copy(
            update={
                "temperature_f": _round_half_up(weather.temperature_f),
                "wind_speed_mph": _round_half_up(weather.wind_speed_mph),
            }
        )

        score, score_error = self._score(outing, weather)
        recommendation, recommendation_error = await self._recommend(outing, weather)

        result = OutingResult(
            outing=outing,
            weather=weather,
            score=score,
            score_error=score_error,
            recommendation=recommendation,
            recommendation_error=recommendation_error,
        )
        logger.info(
            "Outing resolved: place=%s forecast=%s score=%s status=%s",
            outing.place_name,
            outing.forecast_time.isoformat(),
            score,
            result.status.value,
        )
        return FormState(phase=FormPhase.RESULTS, selections=selections, result=result)

    def _score(
        self, outing: OutingRequest, weather: WeatherSnapshot
    ) -> tuple[Optional[int], Optional[str]]:
        try:
            return (
                self.scorer(
                    weather.temperature_f,
                    weather.wind_speed_mph,
                    weather.precipitation,
                    outing.venue_type,
                ),
                None,
            )
        except Exception as exc:
            logger.exception("Jacket score calculation failed")
            return None, str(exc) or "Failed to calculate jacket score"

    async def _recommend(
        self, outing: OutingRequest, weather: WeatherSnapshot
    ) -> tuple[Optional[str], Optional[str]]:
        data = RecommendationInput(
            location=outing.place_name,
            time=outing.arrival_time,
            duration_hours=outing.duration_hours,
            temperature_f=weather.temperature_f,
            wind_mph=weather.wind_speed_mph,
            precipitation=weather.precipitation,
            venue_type=outing.venue_type,
            gender=outing.prompt_gender,
        )
        recommender = self.recommender or recommendation_service.get_recommendation
        try:
            return await recommender(data), None
        except ServiceError as exc:
            logger.error("Recommendation failed: %s", exc.message)
            return None, exc.message or RECOMMENDATION_ERROR_MESSAGE
        except Exception:
            logger.exception("Unexpected recommendation failure")
            return None, RECOMMENDATION_ERROR_MESSAGE


__all__ = [
    "FormController",
    "FormPhase",
    "FormState",
    "FormStateError",
    "INVALID_TIME_MESSAGE",
    "OutingRequest",
    "OutingResult",
    "OutingSelections",
    "RECOMMENDATION_ERROR_MESSAGE",
    "REQUIRED_FIELDS_MESSAGE",
    "ResultStatus",
]
