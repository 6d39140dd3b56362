"""
Funnel Metadata

The per-session key/value bag stored in quiz_sessions.user_metadata.
It is only ever merged, never replaced. Keys are stored camelCase, as the
quiz frontend reads them directly.

Merge rule: shallow merge, except microCommitments, which is merged
key-by-key so answering C2 does not erase the C1 answer.
"""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, EmailStr, Field

from .sequence import FUNNEL_SCREEN_ORDER, FunnelScreen

MicroCommitmentKey = Literal["completer", "prioritizeSelf", "learnStress"]

MICRO_COMMITMENTS_KEY = "microCommitments"

TIME_COMMITMENT_VALUES = (5, 10, 15, 20)


class MicroCommitments(BaseModel):
    completer: Optional[bool] = None
    prioritize_self: Optional[bool] = Field(default=None, alias="prioritizeSelf")
    learn_stress: Optional[bool] = Field(default=None, alias="learnStress")

    class Config:
        populate_by_name = True


class FunnelMetadata(BaseModel):
    """Typed view of the funnel keys in user_metadata."""
    time_commitment_minutes: Optional[Literal[5, 10, 15, 20]] = Field(
        default=None, alias="timeCommitmentMinutes"
    )
    micro_commitments: Optional[MicroCommitments] = Field(default=None, alias="microCommitments")
    email: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    funnel_step: Optional[FunnelScreen] = Field(default=None, alias="funnelStep")
    funnel_started_at: Optional[str] = Field(default=None, alias="funnelStartedAt")
    funnel_completed_at: Optional[str] = Field(default=None, alias="funnelCompletedAt")

    class Config:
        populate_by_name = True

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class MicroCommitmentAnswer(BaseModel):
    key: MicroCommitmentKey
    value: bool


class FunnelUpdateRequest(BaseModel):
    """Body of a funnel step update. Only the current step's field is sent."""
    step: FunnelScreen
    time_commitment_minutes: Optional[Literal[5, 10, 15, 20]] = Field(
        default=None, alias="timeCommitmentMinutes"
    )
    micro_commitment: Optional[MicroCommitmentAnswer] = Field(default=None, alias="microCommitment")
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, alias="firstName", min_length=2, max_length=50)

    class Config:
        populate_by_name = True
        extra = "forbid"
        str_strip_whitespace = True


class FunnelUpdateResponse(BaseModel):
    success: bool = True
    funnel_state: Dict[str, Any] = Field(default_factory=dict)
    next_screen: Optional[str] = None


def merge_funnel_metadata(existing: Optional[Mapping[str, Any]], update: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge a partial update into stored metadata without mutating either.

    Every key in update replaces the stored value, except microCommitments,
    whose booleans are merged into the stored ones.
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(existing or {}))

    for key, value in update.items():
        if key == MICRO_COMMITMENTS_KEY and isinstance(value, Mapping):
            current = merged.get(MICRO_COMMITMENTS_KEY)
            combined = dict(current) if isinstance(current, Mapping) else {}
            combined.update(value)
            merged[MICRO_COMMITMENTS_KEY] = combined
        else:
            merged[key] = copy.deepcopy(value)

    return merged


def extract_funnel_state(user_metadata: Optional[Mapping[str, Any]]) -> Optional[FunnelMetadata]:
    """
    Pull the funnel keys out of user_metadata.

    Values of the wrong type are ignored. Returns None when no funnel key
    is present.
    """
    if not user_metadata:
        return None

    state: Dict[str, Any] = {}

    minutes = user_metadata.get("timeCommitmentMinutes")
    if isinstance(minutes, int) and not isinstance(minutes, bool) and minutes in TIME_COMMITMENT_VALUES:
        state["timeCommitmentMinutes"] = minutes

    commitments = user_metadata.get(MICRO_COMMITMENTS_KEY)
    if isinstance(commitments, Mapping):
        state[MICRO_COMMITMENTS_KEY] = {
            k: v for k, v in commitments.items()
            if k in ("completer", "prioritizeSelf", "learnStress") and isinstance(v, bool)
        }

    for key in ("email", "firstName", "funnelStartedAt", "funnelCompletedAt"):
        if isinstance(user_metadata.get(key), str):
            state[key] = user_metadata[key]

    step = user_metadata.get("funnelStep")
    if isinstance(step, str) and step in FUNNEL_SCREEN_ORDER:
        state["funnelStep"] = step

    if not state:
        return None

    return FunnelMetadata(**state)


def build_metadata_update(request: FunnelUpdateRequest, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Partial metadata for one funnel step."""
    now = now or datetime.now(timezone.utc)
    update: Dict[str, Any] = {"funnelStep": request.step}

    if request.time_commitment_minutes is not None:
        update["timeCommitmentMinutes"] = request.time_commitment_minutes

    if request.micro_commitment is not None:
        update[MICRO_COMMITMENTS_KEY] = {
            request.micro_commitment.key: request.micro_commitment.value,
        }

    if request.email:
        update["email"] = request.email

    if request.first_name:
        update["firstName"] = request.first_name

    if request.step == "A":
        update["funnelStartedAt"] = now.isoformat()

    if request.step == "complete":
        update["funnelCompletedAt"] = now.isoformat()

    return update
