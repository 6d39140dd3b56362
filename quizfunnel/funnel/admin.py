"""
Funnel Endpoints

POST /api/v1/quiz/sessions/{session_id}/funnel - Merge one funnel step into the session
GET  /api/v1/funnel/screens/{screen}           - Next / previous screen lookup
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from quizfunnel.deps import require_session
from quizfunnel.store import QuizDataError, QuizStore, get_store
from .metadata import (
    FunnelUpdateRequest,
    FunnelUpdateResponse,
    build_metadata_update,
    extract_funnel_state,
    merge_funnel_metadata,
)
from .sequence import FUNNEL_SCREEN_ORDER, get_next_screen, get_previous_screen

logger = logging.getLogger(__name__)

router = APIRouter(tags=["funnel"])


@router.post("/api/v1/quiz/sessions/{session_id}/funnel", response_model=FunnelUpdateResponse)
def update_funnel(
    session_id: str,
    request: FunnelUpdateRequest,
    store: QuizStore = Depends(get_store),
):
    """
    Record the outcome of one post-quiz screen.

    Only completed quizzes have a funnel. Stored metadata is merged, never
    overwritten. The email is written to the session's email column in
    the same transaction as the metadata.
    """
    session = require_session(store, session_id)
    if not session.get("completed_at"):
        raise HTTPException(status_code=400, detail="Quiz not completed")

    update = build_metadata_update(request)

    try:
        merged = store.merge_session_metadata(
            session_id, update, merge_funnel_metadata, email=request.email
        )
    except QuizDataError as e:
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Session {session_id} funnel step {request.step}")

    state = extract_funnel_state(merged)
    return FunnelUpdateResponse(
        success=True,
        funnel_state=state.to_storage() if state else {},
        next_screen=get_next_screen(request.step),
    )


@router.get("/api/v1/funnel/screens/{screen}")
def screen_neighbours(screen: str):
    """Adjacent screens in the fixed funnel order."""
    if screen not in FUNNEL_SCREEN_ORDER:
        raise HTTPException(status_code=404, detail=f"Unknown funnel screen: {screen}")
    return {
        "screen": screen,
        "next": get_next_screen(screen),
        "previous": get_previous_screen(screen),
        "order": list(FUNNEL_SCREEN_ORDER),
    }
