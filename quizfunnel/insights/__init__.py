"""
Quiz Funnel Insights

Anchor-question answers rendered as insight cards.
"""

from .models import AnchorAnswer, AnchorCardConfig, InsightCard, QuizInsights
from .config import INSIGHT_CARD_CONFIG, MAX_OPTIONS_PER_CARD
from .extract import (
    get_anchor_question_answers,
    build_insight_cards,
    get_quiz_insights,
)

__all__ = [
    "AnchorAnswer",
    "AnchorCardConfig",
    "InsightCard",
    "QuizInsights",
    "INSIGHT_CARD_CONFIG",
    "MAX_OPTIONS_PER_CARD",
    "get_anchor_question_answers",
    "build_insight_cards",
    "get_quiz_insights",
]
