"""
Projection Models
"""

from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field

TimeCommitmentMinutes = Literal[5, 10, 15, 20]


class ProjectionRequest(BaseModel):
    normalized_score: float = Field(ge=0, le=100)
    time_commitment_minutes: TimeCommitmentMinutes

    class Config:
        extra = "forbid"


class Projection(BaseModel):
    """Where the score is expected to be after the program."""
    current_score: float
    target_score: int
    display_current_score: int
    display_target_score: int
    reduction_percent: int
    target_date: datetime
    time_commitment_minutes: int
