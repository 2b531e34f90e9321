"""Service-layer helpers for the JacketScore backend."""

from .jacket_score import (
    DEFAULT_SCORE_TABLE,
    ScoreTable,
    calculate_jacket_score,
    has_precipitation,
)
from .openai_client import complete_prompt
from .recommendation import (
    RecommendationInput,
    build_prompt,
    get_recommendation,
    parse_recommendation_request,
)
from .form_controller import (
    FormController,
    FormPhase,
    FormState,
    FormStateError,
    OutingRequest,
    OutingResult,
    OutingSelections,
    ResultStatus,
)

__all__ = [
    "DEFAULT_SCORE_TABLE",
    "FormController",
    "FormPhase",
    "FormState",
    "FormStateError",
    "OutingRequest",
    "OutingResult",
    "OutingSelections",
    "RecommendationInput",
    "ResultStatus",
    "ScoreTable",
    "build_prompt",
    "calculate_jacket_score",
    "complete_prompt",
    "get_recommendation",
    "has_precipitation",
    "parse_recommendation_request",
]
