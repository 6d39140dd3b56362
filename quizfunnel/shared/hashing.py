"""
Deterministic serialization helpers.

Result rows carry an input fingerprint so a recomputation can be compared
against the stored row without diffing every column.
"""

import hashlib
import json
import math
from typing import Any

# Keys that change between otherwise identical computations
VOLATILE_KEYS = frozenset([
    "created_at",
    "updated_at",
    "computed_at",
    "time_spent_seconds",
])


def canonical_json(obj: Any) -> str:
    """
    Sorted, whitespace-free JSON with volatile keys dropped.
    Floats are rounded to 6 places so 0.1 + 0.2 and 0.3 hash the same.
    """
    def _strip(value: Any) -> Any:
        if isinstance(value, dict):
            return {
                str(k): _strip(v)
                for k, v in sorted(value.items(), key=lambda kv: str(kv[0]))
                if k not in VOLATILE_KEYS
            }
        if isinstance(value, (list, tuple)):
            return [_strip(v) for v in value]
        if isinstance(value, float):
            return round(value, 6)
        return value

    return json.dumps(_strip(obj), sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def stable_hash(obj: Any, length: int = 16) -> str:
    """Returns "sha256:<hex prefix>" for any JSON-able object."""
    digest = hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()
    return f"sha256:{digest[:length]}"


def rounding_half_up(value: float) -> int:
    """
    Round .5 away from zero for positive values.

    Python's round() is banker's rounding (round(2.5) == 2); scores shown to
    shoppers use the schoolbook rule.
    """
    return int(math.floor(value + 0.5))
