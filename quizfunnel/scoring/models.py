"""
Scoring Layer Models

Pydantic models for questions, options and stored answers.

Version: scoring_v2
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class QuestionType(str, Enum):
    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    SCALE = "scale"
    LIKERT_4 = "likert_4"
    ANCHOR_TEXT = "anchor_text"
    VALIDATION_INFO = "validation_info"
    INSERT = "insert"


# Only these contribute to the score; anchors and info screens never do
SCORING_QUESTION_TYPES = frozenset([
    QuestionType.SINGLE_CHOICE.value,
    QuestionType.MULTIPLE_CHOICE.value,
    QuestionType.SCALE.value,
    QuestionType.LIKERT_4.value,
])


class Question(BaseModel):
    """A published quiz question. Immutable once the quiz is live."""
    id: str
    quiz_id: Optional[str] = None
    question_key: Optional[str] = None
    question_type: str = QuestionType.SINGLE_CHOICE.value
    weight: float = Field(default=1.0, ge=0.0)

    class Config:
        frozen = True

    @property
    def is_scoring(self) -> bool:
        return self.question_type in SCORING_QUESTION_TYPES


class Option(BaseModel):
    """Answer option with the points it contributes."""
    id: str
    question_id: Optional[str] = None
    option_text: str = ""
    score_value: float = 0.0

    class Config:
        frozen = True


class Answer(BaseModel):
    """One answer per (session, question); re-answering replaces it."""
    session_id: str
    question_id: str
    selected_option_ids: List[str] = Field(default_factory=list)
    answer_score: float = 0.0
    time_spent_seconds: Optional[int] = Field(default=None, ge=0)


class AnswerInput(BaseModel):
    """One answer as sent by the quiz client."""
    question_id: str = Field(min_length=1)
    selected_option_ids: List[str] = Field(
        description="Option ids selected by the user; several for multiple_choice"
    )
    time_spent_seconds: Optional[int] = Field(default=None, ge=0)

    class Config:
        extra = "forbid"


class SaveAnswerRequest(AnswerInput):
    """Request body for saving an answer."""


class SaveAnswerResponse(BaseModel):
    success: bool = True
    answer: Answer


class BatchSaveAnswersRequest(BaseModel):
    """Answers buffered on the client and synced in one request."""
    answers: List[AnswerInput]

    class Config:
        extra = "forbid"


class BatchSaveAnswersResponse(BaseModel):
    success: bool = True
    synced: int = 0
