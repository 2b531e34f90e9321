"""Destination autocomplete endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_places_ingestor, http_error_from
from app.domain import ServiceError
from app.ingestors import PlacesIngestor
from app.models.places import Place, PlaceSuggestion

router = APIRouter(prefix="/api/v1/places", tags=["places"])


@router.get(
    "/autocomplete",
    response_model=list[PlaceSuggestion],
    summary="Suggest destinations for partial input",
)
async def autocomplete_places(
    input: str = Query(..., min_length=1, description="Text typed so far"),
    ingestor: PlacesIngestor = Depends(get_places_ingestor),
) -> list[PlaceSuggestion]:
    try:
        return await ingestor.autocomplete(input)
    except ServiceError as exc:
        raise http_error_from(exc) from exc


@router.get("/{place_id}", response_model=Place, summary="Resolve a place to coordinates")
async def get_place(
    place_id: str,
    ingestor: PlacesIngestor = Depends(get_places_ingestor),
) -> Place:
    try:
        return await ingestor.get_place(place_id)
    except ServiceError as exc:
        raise http_error_from(exc) from exc
