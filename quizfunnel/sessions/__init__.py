"""
Quiz Funnel Sessions

Quiz loading by slug and session start / resume.
"""

from .models import QuizDefinition, StartQuizRequest, StartQuizResponse
from .start import needs_new_session, start_session, to_quiz_definition

__all__ = [
    "QuizDefinition",
    "StartQuizRequest",
    "StartQuizResponse",
    "needs_new_session",
    "start_session",
    "to_quiz_definition",
]
