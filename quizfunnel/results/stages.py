"""
Stress stage mapping.

The normalized score (0-100) falls into one of four quartile stages; each
stage has its own image, title and copy on the result screen.
"""

from typing import Dict

from quizfunnel.shared import rounding_half_up

# Inclusive upper bound of stages 1-3; stage 4 takes everything above
STAGE_THRESHOLDS = (25, 50, 75)

MAX_DISPLAY_SCORE = 60

_STAGE_DESCRIPTION = (
    "V praxi to znamená, že se můžeš častěji cítit pod tlakem a mít větší "
    "starosti, které ti berou energii a narušují tvůj klidný spánek."
)

STRESS_STAGE_CONFIG: Dict[str, Dict[int, str]] = {
    "images": {
        1: "/images/stress_calc/stres1.png",
        2: "/images/stress_calc/stres2.png",
        3: "/images/stress_calc/stres3.png",
        4: "/images/stress_calc/stres4.png",
    },
    "titles": {
        1: "Nízká úroveň",
        2: "Mírná úroveň",
        3: "Střední úroveň",
        4: "Vysoká úroveň",
    },
    "descriptions": {
        1: _STAGE_DESCRIPTION,
        2: _STAGE_DESCRIPTION,
        3: _STAGE_DESCRIPTION,
        4: _STAGE_DESCRIPTION,
    },
    "segment_labels": {
        1: "Nízká",
        2: "Mírná",
        3: "Střední",
        4: "Vysoká",
    },
}


def get_stress_stage(normalized_score: float) -> int:
    for stage, upper in enumerate(STAGE_THRESHOLDS, start=1):
        if normalized_score <= upper:
            return stage
    return len(STAGE_THRESHOLDS) + 1


def to_display_score(normalized_score: float) -> int:
    """0-100 -> 0-60 gauge value."""
    return rounding_half_up(normalized_score / 100 * MAX_DISPLAY_SCORE)
