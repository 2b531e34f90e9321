"""API routers for the JacketScore backend."""

from fastapi import APIRouter

from .health import router as health_router
from .outings import router as outings_router
from .places import router as places_router
from .recommendation import router as recommendation_router
from .score import router as score_router
from .weather import router as weather_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(places_router)
api_router.include_router(weather_router)
api_router.include_router(score_router)
api_router.include_router(recommendation_router)
api_router.include_router(outings_router)

__all__ = ["api_router"]
