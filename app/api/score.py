"""Jacket score endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from app.models.score import JacketScoreRequest, JacketScoreResponse
from app.services import calculate_jacket_score

router = APIRouter(prefix="/api/v1", tags=["score"])

logger = logging.getLogger("jacketscore.api.score")


@router.post(
    "/jacket-score",
    response_model=JacketScoreResponse,
    summary="Compute the jacket score for weather and venue",
)
async def compute_jacket_score(request: JacketScoreRequest) -> JacketScoreResponse:
    score = calculate_jacket_score(
        request.temperature,
        request.wind_speed,
        request.precipitation,
        request.venue_type,
    )
    logger.info(
        "Jacket score computed: temp=%s wind=%s precip=%s venue=%s score=%s",
        request.temperature,
        request.wind_speed,
        request.precipitation,
        request.venue_type.value,
        score,
    )
    return JacketScoreResponse(score=score)
