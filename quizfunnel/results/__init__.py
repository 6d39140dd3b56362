"""
Quiz Funnel Result Layer

Weighted scoring of a session's answers into a normalized score, a segment
and a recommended offer.

PRINCIPLE: one session, one result. Recomputing replaces, never duplicates.

Version: weighted_v2
"""

from .models import (
    RESULT_VERSION,
    Segment,
    ResultConfig,
    ProductOffer,
    ScoringQuestion,
    ScoredAnswer,
    CalculationDetails,
    QuizResult,
)
from .aggregate import (
    MAX_POINTS_PER_OPTION,
    build_weight_map,
    aggregate_answers,
    max_possible_score,
    normalize_score,
    nearest_boundary_segment,
    match_segment,
    default_offer,
    resolve_offer,
    build_result,
    compute_result,
    get_existing_result,
)
from .stages import STRESS_STAGE_CONFIG, get_stress_stage, to_display_score

__all__ = [
    "RESULT_VERSION",
    "Segment",
    "ResultConfig",
    "ProductOffer",
    "ScoringQuestion",
    "ScoredAnswer",
    "CalculationDetails",
    "QuizResult",
    "MAX_POINTS_PER_OPTION",
    "build_weight_map",
    "aggregate_answers",
    "max_possible_score",
    "normalize_score",
    "nearest_boundary_segment",
    "match_segment",
    "default_offer",
    "resolve_offer",
    "build_result",
    "compute_result",
    "get_existing_result",
    "STRESS_STAGE_CONFIG",
    "get_stress_stage",
    "to_display_score",
]

__version__ = RESULT_VERSION
