"""
Scoring Layer Endpoints

POST /api/v1/quiz/sessions/{session_id}/answers       - Save (upsert) one answer
POST /api/v1/quiz/sessions/{session_id}/answers/batch - Save buffered answers in one write

Version: scoring_v2
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from quizfunnel.deps import require_session
from quizfunnel.store import QuizDataError, QuizStore, get_store
from .models import (
    BatchSaveAnswersRequest,
    BatchSaveAnswersResponse,
    SaveAnswerRequest,
    SaveAnswerResponse,
)
from .score import InvalidAnswerError, save_answer, save_answers, validate_question_ids

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/quiz",
    tags=["quiz"],
)


@router.post("/sessions/{session_id}/answers", response_model=SaveAnswerResponse)
def save_answer_endpoint(
    session_id: str,
    request: SaveAnswerRequest,
    store: QuizStore = Depends(get_store),
):
    """
    Save the user's answer to one question.

    Re-answering a question replaces the previous answer; the answer score
    is recomputed from the current option scores. The question must belong
    to the session's quiz.
    """
    session = require_session(store, session_id)

    try:
        validate_question_ids(store, str(session["quiz_id"]), [request.question_id])
        answer = save_answer(
            store,
            session_id=session_id,
            question_id=request.question_id,
            selected_option_ids=request.selected_option_ids,
            time_spent_seconds=request.time_spent_seconds,
        )
    except InvalidAnswerError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except QuizDataError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return SaveAnswerResponse(success=True, answer=answer)


@router.post("/sessions/{session_id}/answers/batch", response_model=BatchSaveAnswersResponse)
def save_answers_batch_endpoint(
    session_id: str,
    request: BatchSaveAnswersRequest,
    store: QuizStore = Depends(get_store),
):
    """
    Sync answers buffered on the client.

    All answers are scored with one option lookup and written with one
    upsert. An empty list is a no-op.
    """
    session = require_session(store, session_id)
    if not request.answers:
        return BatchSaveAnswersResponse(success=True, synced=0)

    try:
        validate_question_ids(store, str(session["quiz_id"]), [a.question_id for a in request.answers])
        synced = save_answers(store, session_id, request.answers)
    except InvalidAnswerError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except QuizDataError as e:
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Session {session_id}: synced {synced} answers")
    return BatchSaveAnswersResponse(success=True, synced=synced)
