"""Language-model recommendation endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from app.api.deps import http_error_from
from app.domain import ServiceError
from app.models.recommendation import RecommendationRequest, RecommendationResponse
from app.services import recommendation as recommendation_service

router = APIRouter(prefix="/api/v1", tags=["recommendation"])

logger = logging.getLogger("jacketscore.api.recommendation")


@router.post(
    "/recommendation",
    response_model=RecommendationResponse,
    summary="Ask the language model whether a jacket is needed",
)
async def get_recommendation(request: RecommendationRequest) -> RecommendationResponse:
    try:
        data = recommendation_service.parse_recommendation_request(request)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc

    try:
        text = await recommendation_service.get_recommendation(data)
    except ServiceError as exc:
        logger.error("Recommendation request failed: %s", exc.message)
        raise http_error_from(exc) from exc

    return RecommendationResponse(recommendation=text)
