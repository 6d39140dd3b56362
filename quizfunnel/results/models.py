"""
Result Layer Models

Segments, offers, results and the calculation audit blob.

Version: weighted_v2
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

RESULT_VERSION = "weighted_v2"
CALCULATION_METHOD = "weighted_sum"

# Result types whose value is a score segment
SEGMENT_RESULT_TYPES = frozenset(["score", "segment"])


class Segment(BaseModel):
    """
    A named score range. Both ends are inclusive.

    Configured per quiz under result_config.segments using the stored
    camelCase keys (minScore / maxScore).
    """
    id: str
    label: str = ""
    description: str = ""
    min_score: float = Field(alias="minScore")
    max_score: float = Field(alias="maxScore")
    color: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "ignore"

    def contains(self, score: float) -> bool:
        return self.min_score <= score <= self.max_score


class ResultConfig(BaseModel):
    """Per-quiz result configuration. A null segment list means none configured."""
    type: Optional[str] = None
    segments: List[Segment] = Field(default_factory=list)

    class Config:
        extra = "ignore"

    @field_validator("segments", mode="before")
    @classmethod
    def null_segments_as_empty(cls, v):
        return [] if v is None else v


class ProductOffer(BaseModel):
    """Recommended product for a segment (quizzes.offer_mapping values)."""
    product_id: Optional[str] = Field(default=None, alias="productId")
    product_name: Optional[str] = Field(default=None, alias="productName")
    description: Optional[str] = None
    price_cents: Optional[int] = Field(default=None, alias="priceCents")
    currency: Optional[str] = None
    stripe_price_id: Optional[str] = Field(default=None, alias="stripePriceId")

    class Config:
        populate_by_name = True
        extra = "allow"


class ScoringQuestion(BaseModel):
    """Scoring question id and its weight."""
    id: str
    weight: float = 1.0
    question_type: Optional[str] = None


class ScoredAnswer(BaseModel):
    """Stored answer as the aggregator sees it."""
    question_id: str
    answer_score: float = 0.0


class CalculationDetails(BaseModel):
    """Audit blob persisted as quiz_results.calculation_details."""
    raw_score: float = Field(serialization_alias="rawScore")
    weighted_score: float = Field(serialization_alias="weightedScore")
    answers_count: int = Field(serialization_alias="answersCount")
    scoring_questions_count: int = Field(serialization_alias="scoringQuestionsCount")
    total_weight: float = Field(serialization_alias="totalWeight")
    max_possible_score: float = Field(serialization_alias="maxPossibleScore")
    normalized_score: int = Field(serialization_alias="normalizedScore")
    input_hash: str = Field(serialization_alias="inputHash")
    version: str = Field(default=RESULT_VERSION)

    class Config:
        populate_by_name = True


class ScoreAggregate(BaseModel):
    """Intermediate sums from one pass over the answers."""
    raw_score: float = 0.0
    weighted_score: float = 0.0
    answers_count: int = 0


class QuizResult(BaseModel):
    """One result per session; recomputation replaces it."""
    session_id: str
    quiz_id: str
    result_type: str
    result_value: str = ""
    result_score: float = 0.0
    result_label: str = ""
    result_description: str = ""
    recommended_product_id: Optional[str] = None
    recommended_product_name: Optional[str] = None
    recommended_price_cents: Optional[int] = None
    calculation_method: str = CALCULATION_METHOD
    calculation_details: Dict[str, Any] = Field(default_factory=dict)
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"

    @property
    def normalized_score(self) -> int:
        return int(self.calculation_details.get("normalizedScore", 0) or 0)

    def to_row(self) -> Dict[str, Any]:
        """Columns written to quiz_results."""
        return self.model_dump(exclude={"id", "created_at"})
