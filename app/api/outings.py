"""Outing form endpoints: arrival choices and full submission."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
import logging
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_forecast_ingestor, get_places_ingestor, http_error_from
from app.config import settings
from app.domain import ServiceError
from app.domain.timeslots import arrival_choices
from app.ingestors import ForecastIngestor, PlacesIngestor
from app.models.outing import (
    ArrivalTimesResponse,
    OutingResponse,
    OutingSubmission,
    OutingSummary,
)
from app.models.places import Place
from app.services import FormController, FormPhase, FormState

router = APIRouter(prefix="/api/v1", tags=["outings"])

logger = logging.getLogger("jacketscore.api.outings")


def _resolve_timezone(name: Optional[str]) -> tzinfo:
    name = name or settings.default_timezone
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown timezone: {name}"
        ) from exc


async def _resolve_place(
    submission: OutingSubmission, places: PlacesIngestor
) -> Optional[Place]:
    if (
        submission.place_name
        and submission.latitude is not None
        and submission.longitude is not None
    ):
        return Place(
            place_id=submission.place_id,
            name=submission.place_name,
            latitude=submission.latitude,
            longitude=submission.longitude,
        )
    if submission.place_id:
        try:
            return await places.get_place(submission.place_id)
        except ServiceError as exc:
            raise http_error_from(exc) from exc
    return None


def _apply_selections(
    controller: FormController, submission: OutingSubmission, place: Optional[Place]
) -> None:
    if place is not None:
        controller.select_place(place)
    if submission.venue_type:
        controller.select_venue_type(submission.venue_type)
    if submission.arrival_time:
        controller.select_arrival_time(submission.arrival_time)
    if submission.duration is not None:
        controller.select_duration(submission.duration)
    if submission.gender:
        controller.select_gender(submission.gender)


def _to_response(state: FormState) -> OutingResponse:
    result = state.result
    outing = result.outing
    return OutingResponse(
        status=result.status.value,
        outing=OutingSummary(
            place_name=outing.place_name,
            latitude=outing.latitude,
            longitude=outing.longitude,
            arrival_time=outing.arrival_time,
            forecast_time=outing.forecast_time,
            duration_hours=outing.duration_hours,
            venue_type=outing.venue_type.value,
            gender=outing.gender.value if outing.gender else None,
        ),
        weather=result.weather,
        score=result.score,
        score_error=result.score_error,
        recommendation=result.recommendation,
        recommendation_error=result.recommendation_error,
    )


@router.get(
    "/arrival-times",
    response_model=ArrivalTimesResponse,
    summary="Hourly arrival choices for the next twelve hours",
)
def get_arrival_times(
    tz: Optional[str] = Query(default=None, description="IANA timezone name"),
) -> ArrivalTimesResponse:
    zone = _resolve_timezone(tz)
    return ArrivalTimesResponse(
        timezone=tz or settings.default_timezone,
        choices=arrival_choices(datetime.now(zone)),
    )


@router.post(
    "/outings",
    response_model=OutingResponse,
    summary="Submit the outing form and get weather, score, and advice",
)
async def submit_outing(
    submission: OutingSubmission,
    forecast: ForecastIngestor = Depends(get_forecast_ingestor),
    places: PlacesIngestor = Depends(get_places_ingestor),
) -> OutingResponse:
    controller = FormController(forecast, tz=_resolve_timezone(submission.timezone))
    place = await _resolve_place(submission, places)

    try:
        _apply_selections(controller, submission, place)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc

    state = await controller.submit()

    if state.phase == FormPhase.RESULTS:
        return _to_response(state)
    if state.phase == FormPhase.ERROR:
        raise HTTPException(
            status_code=state.error_status or status.HTTP_502_BAD_GATEWAY,
            detail=state.error_message,
        )
    raise HTTPException(
        status_code=state.error_status or status.HTTP_400_BAD_REQUEST,
        detail=state.error_message,
    )
