"""Pydantic models for the JacketScore backend."""

from .outing import ArrivalTimesResponse, OutingResponse, OutingSubmission, OutingSummary
from .places import Place, PlaceSuggestion
from .recommendation import RecommendationRequest, RecommendationResponse
from .score import JacketScoreRequest, JacketScoreResponse
from .weather import WeatherSnapshot

__all__ = [
    "ArrivalTimesResponse",
    "JacketScoreRequest",
    "JacketScoreResponse",
    "OutingResponse",
    "OutingSubmission",
    "OutingSummary",
    "Place",
    "PlaceSuggestion",
    "RecommendationRequest",
    "RecommendationResponse",
    "WeatherSnapshot",
]
