"""
Session Endpoints

POST /api/v1/quiz/start  - Start or resume a session for a quiz
GET  /api/v1/quiz/{slug} - Active quiz definition
"""

from fastapi import APIRouter, Depends, HTTPException

from quizfunnel.store import QuizDataError, QuizStore, get_store
from .models import QuizDefinition, StartQuizRequest, StartQuizResponse
from .start import start_session, to_quiz_definition

router = APIRouter(
    prefix="/api/v1/quiz",
    tags=["quiz"],
)


@router.post("/start", response_model=StartQuizResponse)
def start_quiz(request: StartQuizRequest, store: QuizStore = Depends(get_store)):
    try:
        started = start_session(store, request.slug, request.session_id)
    except QuizDataError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if started is None:
        raise HTTPException(status_code=404, detail="Quiz not found")

    session, quiz, resumed = started
    return StartQuizResponse(
        session_id=str(session["id"]),
        resumed=resumed,
        quiz=to_quiz_definition(quiz),
    )


@router.get("/{slug}", response_model=QuizDefinition)
def get_quiz(slug: str, store: QuizStore = Depends(get_store)):
    try:
        quiz = store.get_quiz_by_slug(slug)
    except QuizDataError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if quiz is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return to_quiz_definition(quiz)
