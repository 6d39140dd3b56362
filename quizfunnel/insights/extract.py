"""
Insight Extractor

Surfaces the user's own answers to the anchor questions as insight cards.
No scoring happens here. Missing data of any kind falls back to the
configured card text; this module never raises to its caller.
"""

import logging
from typing import Dict, List, Optional, Sequence

from quizfunnel.results.stages import (
    MAX_DISPLAY_SCORE,
    STRESS_STAGE_CONFIG,
    get_stress_stage,
    to_display_score,
)
from quizfunnel.store import QuizDataError
from .config import INSIGHT_CARD_CONFIG, MAX_OPTIONS_PER_CARD, anchor_question_keys
from .models import AnchorAnswer, AnchorCardConfig, InsightCard, QuizInsights

logger = logging.getLogger(__name__)


def get_anchor_question_answers(store, session_id: str, quiz_id: str) -> List[AnchorAnswer]:
    """
    Answer text for each anchor question the session answered.

    Multi-select answers keep at most two option texts, joined with ", ".
    Option ids without a known text are dropped.
    """
    keys = anchor_question_keys()

    try:
        questions = store.get_questions_by_keys(quiz_id, keys)
        if not questions:
            logger.warning(f"No anchor questions found for quiz {quiz_id}, expected keys {keys}")
            return []

        key_by_question_id = {
            str(q["id"]): q["question_key"]
            for q in questions
            if q.get("question_key")
        }

        answers = store.get_answers_for_questions(session_id, list(key_by_question_id))
        if not answers:
            logger.warning(f"No anchor answers for session {session_id}")
            return []

        option_ids = [
            str(oid)
            for a in answers
            for oid in (a.get("selected_option_ids") or [])
        ]
        if not option_ids:
            return []

        option_texts = store.get_option_texts(option_ids)
    except QuizDataError as e:
        logger.warning(f"Anchor answers unavailable for session {session_id}: {e}")
        return []

    if not option_texts:
        logger.warning(f"No option texts found for session {session_id}")
        return []

    result: List[AnchorAnswer] = []
    for answer in answers:
        question_key = key_by_question_id.get(str(answer["question_id"]))
        if not question_key:
            continue

        selected = (answer.get("selected_option_ids") or [])[:MAX_OPTIONS_PER_CARD]
        texts = [option_texts[str(oid)] for oid in selected if option_texts.get(str(oid))]

        result.append(AnchorAnswer(question_key=question_key, answer_text=", ".join(texts)))

    return result


def build_insight_cards(
    anchor_answers: Sequence[AnchorAnswer],
    card_config: Optional[Sequence[AnchorCardConfig]] = None,
) -> List[InsightCard]:
    """One card per configured anchor, in configuration order."""
    card_config = INSIGHT_CARD_CONFIG if card_config is None else card_config
    answer_by_key: Dict[str, str] = {a.question_key: a.answer_text for a in anchor_answers}

    return [
        InsightCard(
            card_type=card.type,
            label=card.label,
            value=answer_by_key.get(card.question_key) or card.fallback,
            icon=card.icon,
        )
        for card in card_config
    ]


def get_quiz_insights(store, session_id: str, quiz_id: str, normalized_score: int) -> QuizInsights:
    """Stage content plus insight cards for the stress-state screen."""
    stage = get_stress_stage(normalized_score)
    anchor_answers = get_anchor_question_answers(store, session_id, quiz_id)

    return QuizInsights(
        stress_stage=stage,
        stage_image_path=STRESS_STAGE_CONFIG["images"][stage],
        stage_title=STRESS_STAGE_CONFIG["titles"][stage],
        stage_description=STRESS_STAGE_CONFIG["descriptions"][stage],
        insight_cards=build_insight_cards(anchor_answers),
        normalized_score=normalized_score,
        display_score=to_display_score(normalized_score),
        max_display_score=MAX_DISPLAY_SCORE,
    )
