"""
Quiz start.

A session is reused only while it is active, belongs to the quiz being
started and is not yet completed. Anything else (no session, another quiz,
a retake after completion) starts a fresh session with empty metadata.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from .models import QuizDefinition

logger = logging.getLogger(__name__)


def needs_new_session(session: Optional[Mapping[str, Any]], quiz_id: str) -> bool:
    if not session:
        return True
    if str(session["quiz_id"]) != str(quiz_id):
        return True
    return bool(session.get("completed_at"))


def to_quiz_definition(quiz: Mapping[str, Any]) -> QuizDefinition:
    return QuizDefinition(
        id=str(quiz["id"]),
        slug=quiz["slug"],
        version=quiz.get("version") or 1,
        result_type=quiz.get("result_type") or "segment",
        result_config=quiz.get("result_config") or {},
        questions=[
            {
                **q,
                "id": str(q["id"]),
                "options": [dict(o, id=str(o["id"])) for o in q.get("options") or []],
            }
            for q in quiz.get("questions") or []
        ],
    )


def start_session(
    store,
    slug: str,
    session_id: Optional[str] = None,
) -> Optional[Tuple[Dict[str, Any], Dict[str, Any], bool]]:
    """
    Load the quiz by slug and resolve the session to answer it in.

    Returns:
        (session, quiz, resumed), or None when no active quiz has this slug

    Raises:
        QuizDataError: the quiz or session could not be loaded or created
    """
    quiz = store.get_quiz_by_slug(slug)
    if quiz is None:
        return None

    session = store.get_session(session_id) if session_id else None
    if not needs_new_session(session, quiz["id"]):
        return session, quiz, True

    session = store.create_session(str(quiz["id"]), quiz.get("version") or 1)
    logger.info(f"Started session {session['id']} for quiz {slug}")
    return session, quiz, False
