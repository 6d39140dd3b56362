"""
Quiz Funnel Projection

Target score after the program for a daily time commitment.
"""

from .models import Projection, ProjectionRequest
from .projection import (
    PROGRAM_DURATION_DAYS,
    MIN_TARGET_SCORE,
    REDUCTION_FACTORS,
    get_reduction_factor,
    calculate_projection,
)

__all__ = [
    "Projection",
    "ProjectionRequest",
    "PROGRAM_DURATION_DAYS",
    "MIN_TARGET_SCORE",
    "REDUCTION_FACTORS",
    "get_reduction_factor",
    "calculate_projection",
]
