"""
Option scoring.

An answer's score is the sum of its selected options' score values.
Unknown option ids are scored through unknown_option_score() rather than
rejected.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .models import Answer, AnswerInput

logger = logging.getLogger(__name__)


class InvalidAnswerError(ValueError):
    """Raised when an answer references a question outside the session's quiz."""


def unknown_option_score(option_id: str) -> float:
    """Score for an option id that has no score on record."""
    return 0.0


def score_selected_options(
    selected_option_ids: Iterable[str],
    option_scores: Dict[str, float],
) -> float:
    """
    Sum the score values of the selected options.

    Args:
        selected_option_ids: Ids picked by the user (order irrelevant)
        option_scores: Known option id -> score_value

    Returns:
        answer_score for the answer
    """
    total = 0.0
    for option_id in selected_option_ids:
        if option_id in option_scores:
            total += float(option_scores[option_id] or 0)
        else:
            total += unknown_option_score(option_id)
    return total


def save_answer(
    store,
    session_id: str,
    question_id: str,
    selected_option_ids: List[str],
    time_spent_seconds: Optional[int] = None,
) -> Answer:
    """Score the selection and upsert it as the session's answer to question_id."""
    option_scores = store.get_option_scores(list(selected_option_ids))
    answer_score = score_selected_options(selected_option_ids, option_scores)

    unknown = [oid for oid in selected_option_ids if oid not in option_scores]
    if unknown:
        logger.warning(f"Unknown option ids scored as 0 for question {question_id}: {unknown}")

    row = store.upsert_answer(
        session_id=session_id,
        question_id=question_id,
        selected_option_ids=list(selected_option_ids),
        answer_score=answer_score,
        time_spent_seconds=time_spent_seconds,
    )
    return Answer(
        session_id=str(row["session_id"]),
        question_id=str(row["question_id"]),
        selected_option_ids=[str(o) for o in row.get("selected_option_ids") or []],
        answer_score=float(row.get("answer_score") or 0),
        time_spent_seconds=row.get("time_spent_seconds"),
    )


def validate_question_ids(store, quiz_id: str, question_ids: Iterable[str]) -> None:
    """
    Raises:
        InvalidAnswerError: a question id does not belong to quiz_id
    """
    known = store.get_quiz_question_ids(quiz_id)
    unknown = sorted({qid for qid in question_ids if qid not in known})
    if unknown:
        raise InvalidAnswerError(f"Unknown question ids for quiz {quiz_id}: {unknown}")


def save_answers(store, session_id: str, answers: Sequence[AnswerInput]) -> int:
    """
    Score and upsert a batch of answers with one option lookup and one write.

    A question answered more than once in the batch keeps its last answer.
    Returns the number of answers written.
    """
    latest: Dict[str, AnswerInput] = {}
    for answer in answers:
        latest.pop(answer.question_id, None)
        latest[answer.question_id] = answer

    if not latest:
        return 0

    option_ids = sorted({oid for a in latest.values() for oid in a.selected_option_ids})
    option_scores = store.get_option_scores(option_ids)

    unknown = [oid for oid in option_ids if oid not in option_scores]
    if unknown:
        logger.warning(f"Unknown option ids scored as 0 in batch for session {session_id}: {unknown}")

    rows = [
        {
            "question_id": a.question_id,
            "selected_option_ids": list(a.selected_option_ids),
            "answer_score": score_selected_options(a.selected_option_ids, option_scores),
            "time_spent_seconds": a.time_spent_seconds,
        }
        for a in latest.values()
    ]
    return store.upsert_answers(session_id, rows)
