"""Quiz Funnel shared utilities"""

from .hashing import canonical_json, stable_hash, rounding_half_up

__all__ = [
    "canonical_json",
    "stable_hash",
    "rounding_half_up",
]
