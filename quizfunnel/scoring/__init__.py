"""
Quiz Funnel Scoring Layer

Question weights and option scores.

Version: scoring_v2
"""

from .models import (
    QuestionType,
    SCORING_QUESTION_TYPES,
    Question,
    Option,
    Answer,
    AnswerInput,
)
from .score import (
    unknown_option_score,
    score_selected_options,
    save_answer,
    save_answers,
    validate_question_ids,
    InvalidAnswerError,
)

__all__ = [
    "QuestionType",
    "SCORING_QUESTION_TYPES",
    "Question",
    "Option",
    "Answer",
    "AnswerInput",
    "unknown_option_score",
    "score_selected_options",
    "save_answer",
    "save_answers",
    "validate_question_ids",
    "InvalidAnswerError",
]

__version__ = "scoring_v2"
