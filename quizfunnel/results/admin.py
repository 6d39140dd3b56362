"""
Result Layer Endpoints

POST /api/v1/quiz/sessions/{session_id}/complete - Compute (or reuse) the session's result

Version: weighted_v2
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from quizfunnel.deps import require_session
from quizfunnel.funnel.metadata import extract_funnel_state
from quizfunnel.insights import QuizInsights, get_quiz_insights
from quizfunnel.store import QuizDataError, QuizStore, get_store
from .aggregate import compute_result, get_existing_result, resolve_offer
from .models import QuizResult

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/quiz",
    tags=["quiz"],
)


class QuizCompleteResponse(BaseModel):
    result: QuizResult
    offer: Optional[Dict[str, Any]] = None
    cached: bool = False
    insights: QuizInsights
    funnel_state: Optional[Dict[str, Any]] = Field(default=None)


@router.post("/sessions/{session_id}/complete", response_model=QuizCompleteResponse)
def complete_quiz(session_id: str, store: QuizStore = Depends(get_store)):
    """
    Finish the quiz for a session.

    An already computed result is returned as-is (cached=true); otherwise
    the result is calculated, saved, and the session marked completed.
    Insights and any saved funnel progress are returned alongside so the
    funnel can resume where the user left it.
    """
    session = require_session(store, session_id)
    quiz_id = str(session["quiz_id"])

    try:
        quiz = store.get_quiz(quiz_id)
        if not quiz:
            raise HTTPException(status_code=404, detail="Quiz not found")

        result = get_existing_result(store, session_id)
        cached = result is not None

        if cached:
            logger.info(f"Returning cached result for session {session_id}")
        else:
            result = compute_result(
                store,
                session_id=session_id,
                quiz_id=quiz_id,
                result_type=quiz.get("result_type") or "segment",
                result_config=quiz.get("result_config") or {},
                offer_mapping=quiz.get("offer_mapping") or {},
            )
            store.mark_session_completed(session_id)
    except QuizDataError as e:
        raise HTTPException(status_code=500, detail=str(e))

    insights = get_quiz_insights(store, session_id, quiz_id, result.normalized_score)
    funnel_state = extract_funnel_state(session.get("user_metadata"))
    offer = resolve_offer(result.result_value, quiz.get("offer_mapping"))

    return QuizCompleteResponse(
        result=result,
        offer=offer.model_dump(by_alias=True, exclude_none=True) if offer else None,
        cached=cached,
        insights=insights,
        funnel_state=funnel_state.to_storage() if funnel_state else None,
    )
