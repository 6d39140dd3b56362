"""
Insight Models

Anchor answers and the cards shown on the result screen.
"""

from typing import List, Literal
from pydantic import BaseModel, Field

InsightCardType = Literal["main_challenge", "trigger", "tough_period", "energy_level"]


class AnchorCardConfig(BaseModel):
    """One configured anchor question and how its card is rendered."""
    type: InsightCardType
    question_key: str
    label: str
    icon: str
    fallback: str

    class Config:
        frozen = True


class AnchorAnswer(BaseModel):
    question_key: str
    answer_text: str = ""


class InsightCard(BaseModel):
    card_type: InsightCardType
    label: str
    value: str
    icon: str


class QuizInsights(BaseModel):
    """Everything the stress-state screen needs."""
    stress_stage: int = Field(ge=1, le=4)
    stage_image_path: str
    stage_title: str
    stage_description: str
    insight_cards: List[InsightCard] = Field(default_factory=list)
    normalized_score: int
    display_score: int
    max_display_score: int = 60
