"""
Shared request helpers for the quiz routers.
"""

import logging
from typing import Any, Dict

from fastapi import HTTPException

from quizfunnel.store import QuizDataError, QuizStore

logger = logging.getLogger(__name__)


def require_session(store: QuizStore, session_id: str) -> Dict[str, Any]:
    """Load an active session or raise 404."""
    try:
        session = store.get_session(session_id)
    except QuizDataError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not session:
        raise HTTPException(status_code=404, detail="No active session")
    return session
