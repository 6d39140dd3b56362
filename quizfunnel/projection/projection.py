"""
Projection Calculator

Estimates the stress score after the program from the current normalized
score and the daily time the user commits to. Pure; no persistence.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from quizfunnel.shared import rounding_half_up
from .models import Projection

PROGRAM_DURATION_DAYS = 90

MIN_TARGET_SCORE = 10

# The projection graph uses a 0-50 scale
PROJECTION_DISPLAY_MAX = 50

# minutes per day -> share of the score removed by the end of the program
REDUCTION_FACTORS: Dict[int, float] = {
    5: 0.25,
    10: 0.40,
    15: 0.55,
    20: 0.70,
}


def get_reduction_factor(time_commitment_minutes: int) -> float:
    try:
        return REDUCTION_FACTORS[time_commitment_minutes]
    except KeyError:
        raise ValueError(
            f"Unsupported time commitment: {time_commitment_minutes} "
            f"(expected one of {sorted(REDUCTION_FACTORS)})"
        ) from None


def calculate_projection(
    normalized_score: float,
    time_commitment_minutes: int,
    now: Optional[datetime] = None,
) -> Projection:
    """
    Project the target score for a time commitment.

    target = max(MIN_TARGET_SCORE, score * (1 - factor))

    The reduction percent is 0 when the current score is 0, and never
    negative when the floor lifts the target above a low current score.

    Raises:
        ValueError: time_commitment_minutes is not 5, 10, 15 or 20
    """
    factor = get_reduction_factor(time_commitment_minutes)
    target = max(float(MIN_TARGET_SCORE), normalized_score * (1 - factor))

    if normalized_score > 0:
        reduction_percent = max(0, rounding_half_up((normalized_score - target) / normalized_score * 100))
    else:
        reduction_percent = 0

    now = now or datetime.now(timezone.utc)

    return Projection(
        current_score=normalized_score,
        target_score=rounding_half_up(target),
        display_current_score=rounding_half_up(normalized_score / 100 * PROJECTION_DISPLAY_MAX),
        display_target_score=rounding_half_up(target / 100 * PROJECTION_DISPLAY_MAX),
        reduction_percent=reduction_percent,
        target_date=now + timedelta(days=PROGRAM_DURATION_DAYS),
        time_commitment_minutes=time_commitment_minutes,
    )
