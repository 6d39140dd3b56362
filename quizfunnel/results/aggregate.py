"""
Result Aggregator Core Logic

Turns a session's answers into one Result row:
1. Build the weight map for scoring questions
2. Sum raw and weighted answer scores
3. Normalize the weighted score to 0-100
4. Match the weighted score to a configured segment
5. Pick the recommended offer for that segment
6. Upsert the result keyed by session id

Fallbacks are named policy functions so each one can be tested alone:
- nearest_boundary_segment: score outside every range
- default_offer: segment with no mapped offer

Version: weighted_v2
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from quizfunnel.scoring.models import SCORING_QUESTION_TYPES
from quizfunnel.shared import rounding_half_up, stable_hash
from .models import (
    CALCULATION_METHOD,
    RESULT_VERSION,
    SEGMENT_RESULT_TYPES,
    CalculationDetails,
    ProductOffer,
    QuizResult,
    ResultConfig,
    ScoreAggregate,
    ScoredAnswer,
    ScoringQuestion,
    Segment,
)

logger = logging.getLogger(__name__)

# Assumed ceiling per answered question; not derived from option data
MAX_POINTS_PER_OPTION = 3


def build_weight_map(questions: Iterable[ScoringQuestion]) -> Dict[str, float]:
    """
    Map scoring question id -> weight.

    Questions whose type is outside the scoring allow-list are skipped.
    A question without a type is assumed to be a scoring question.
    """
    weights: Dict[str, float] = {}
    for q in questions:
        if q.question_type is not None and q.question_type not in SCORING_QUESTION_TYPES:
            continue
        weights[q.id] = float(q.weight if q.weight is not None else 1.0)
    return weights


def aggregate_answers(
    answers: Iterable[ScoredAnswer],
    weight_map: Mapping[str, float],
) -> ScoreAggregate:
    """Sum raw and weighted scores over answers to scoring questions."""
    agg = ScoreAggregate()
    for answer in answers:
        weight = weight_map.get(answer.question_id)
        if weight is None:
            continue
        agg.raw_score += answer.answer_score
        agg.weighted_score += answer.answer_score * weight
        agg.answers_count += 1
    return agg


def max_possible_score(weight_map: Mapping[str, float]) -> float:
    return sum(w * MAX_POINTS_PER_OPTION for w in weight_map.values())


def normalize_score(weighted_score: float, max_score: float) -> int:
    """Weighted score on a 0-100 scale; 0 when nothing can be scored."""
    if max_score <= 0:
        return 0
    return rounding_half_up(weighted_score / max_score * 100)


def nearest_boundary_segment(score: float, segments: List[Segment]) -> Optional[Segment]:
    """
    Segment for a score outside every configured range.

    Below the lowest minimum -> lowest segment, anything else -> highest.
    """
    if not segments:
        return None
    ordered = sorted(segments, key=lambda s: s.min_score)
    if score < ordered[0].min_score:
        return ordered[0]
    return ordered[-1]


def match_segment(score: float, segments: List[Segment]) -> Optional[Segment]:
    """
    Segment whose inclusive [min, max] contains score.

    Always returns a segment when at least one is configured.
    """
    for segment in segments:
        if segment.contains(score):
            return segment
    return nearest_boundary_segment(score, segments)


def default_offer(offer_mapping: Mapping[str, Any]) -> Optional[ProductOffer]:
    """Offer used when the matched segment has none: lowest-sorted key."""
    if not offer_mapping:
        return None
    first_key = sorted(offer_mapping.keys())[0]
    return _as_offer(offer_mapping[first_key])


def resolve_offer(segment_id: str, offer_mapping: Optional[Mapping[str, Any]]) -> Optional[ProductOffer]:
    offer_mapping = offer_mapping if isinstance(offer_mapping, Mapping) else {}
    offer = _as_offer(offer_mapping.get(segment_id)) if segment_id else None
    return offer or default_offer(offer_mapping)


def _as_offer(raw: Any) -> Optional[ProductOffer]:
    """Offer from a stored mapping value; malformed values count as no offer."""
    if not raw:
        return None
    if isinstance(raw, ProductOffer):
        return raw
    if not isinstance(raw, Mapping):
        logger.warning(f"Ignoring malformed offer: {raw!r}")
        return None
    try:
        return ProductOffer.model_validate(dict(raw))
    except ValidationError as e:
        logger.warning(f"Ignoring malformed offer {raw!r}: {e}")
        return None


def build_result(
    session_id: str,
    quiz_id: str,
    result_type: str,
    questions: List[ScoringQuestion],
    answers: List[ScoredAnswer],
    result_config: Optional[Mapping[str, Any]],
    offer_mapping: Optional[Mapping[str, Any]],
) -> QuizResult:
    """
    Pure computation of a QuizResult; no I/O.

    Same inputs always yield the same result, including the input hash.
    """
    config = ResultConfig(**result_config) if isinstance(result_config, Mapping) else ResultConfig()
    weight_map = build_weight_map(questions)
    agg = aggregate_answers(answers, weight_map)
    max_score = max_possible_score(weight_map)
    normalized = normalize_score(agg.weighted_score, max_score)

    segment = None
    if result_type in SEGMENT_RESULT_TYPES:
        segment = match_segment(agg.weighted_score, config.segments)

    result_value = segment.id if segment else ""
    offer = resolve_offer(result_value, offer_mapping)

    input_hash = stable_hash({
        "weights": weight_map,
        "answers": sorted(
            (a.question_id, a.answer_score) for a in answers if a.question_id in weight_map
        ),
        "segments": [s.model_dump() for s in config.segments],
        "result_type": result_type,
    })

    details = CalculationDetails(
        raw_score=agg.raw_score,
        weighted_score=agg.weighted_score,
        answers_count=agg.answers_count,
        scoring_questions_count=len(weight_map),
        total_weight=sum(weight_map.values()),
        max_possible_score=max_score,
        normalized_score=normalized,
        input_hash=input_hash,
        version=RESULT_VERSION,
    )

    return QuizResult(
        session_id=session_id,
        quiz_id=quiz_id,
        result_type=result_type,
        result_value=result_value,
        result_score=agg.weighted_score,
        result_label=segment.label if segment else "",
        result_description=segment.description if segment else "",
        recommended_product_id=offer.product_id if offer else None,
        recommended_product_name=offer.product_name if offer else None,
        recommended_price_cents=offer.price_cents if offer else None,
        calculation_method=CALCULATION_METHOD,
        calculation_details=details.model_dump(by_alias=True),
    )


def compute_result(
    store,
    session_id: str,
    quiz_id: str,
    result_type: str,
    result_config: Optional[Mapping[str, Any]],
    offer_mapping: Optional[Mapping[str, Any]],
) -> QuizResult:
    """
    Load answers and scoring questions, compute the result and upsert it.

    Raises:
        QuizDataError: answers or questions could not be loaded, or the
            result could not be saved. There is no partial mode.
    """
    answer_rows = store.get_session_answers(session_id)
    question_rows = store.get_scoring_questions(quiz_id, sorted(SCORING_QUESTION_TYPES))

    questions = [
        ScoringQuestion(
            id=str(q["id"]),
            weight=float(q["weight"]) if q.get("weight") is not None else 1.0,
            question_type=q.get("question_type"),
        )
        for q in question_rows
    ]
    answers = [
        ScoredAnswer(
            question_id=str(a["question_id"]),
            answer_score=float(a.get("answer_score") or 0),
        )
        for a in answer_rows
    ]

    result = build_result(
        session_id=session_id,
        quiz_id=quiz_id,
        result_type=result_type,
        questions=questions,
        answers=answers,
        result_config=result_config,
        offer_mapping=offer_mapping,
    )

    saved = store.upsert_result(result.to_row())
    logger.info(
        f"Result for session {session_id}: segment={result.result_value!r} "
        f"weighted={result.result_score} normalized={result.normalized_score}"
    )
    return QuizResult(**_stringify_ids(saved))


def get_existing_result(store, session_id: str) -> Optional[QuizResult]:
    """Stored result for the session, if one was already computed."""
    row = store.get_result(session_id)
    if not row:
        return None
    return QuizResult(**_stringify_ids(row))


def _stringify_ids(row: Mapping[str, Any]) -> Dict[str, Any]:
    data = dict(row)
    for key in ("id", "session_id", "quiz_id"):
        if data.get(key) is not None:
            data[key] = str(data[key])
    return data
