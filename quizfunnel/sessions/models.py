"""
Session Models

The quiz definition sent to the client and the quiz start request.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class QuizOptionOut(BaseModel):
    """Option as shown to the user. Score values stay on the server."""
    id: str
    option_text: str = ""
    order_index: int = 0


class QuizQuestionOut(BaseModel):
    id: str
    question_key: Optional[str] = None
    question_type: str
    question_text: Optional[str] = None
    order_index: int = 0
    options: List[QuizOptionOut] = Field(default_factory=list)


class QuizDefinition(BaseModel):
    id: str
    slug: str
    version: int = 1
    result_type: str = "segment"
    result_config: Dict[str, Any] = Field(default_factory=dict)
    questions: List[QuizQuestionOut] = Field(default_factory=list)


class StartQuizRequest(BaseModel):
    slug: str = Field(min_length=1)
    session_id: Optional[str] = Field(
        default=None,
        description="Session the client already holds; reused when still valid"
    )

    class Config:
        extra = "forbid"


class StartQuizResponse(BaseModel):
    session_id: str
    resumed: bool
    quiz: QuizDefinition
