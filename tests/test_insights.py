"""
Insight Extractor and Stress Stage Tests

Anchor answers become insight cards; anything missing falls back to the
configured card text and never raises.
"""

import pytest

from quizfunnel.insights import (
    INSIGHT_CARD_CONFIG,
    AnchorAnswer,
    build_insight_cards,
    get_anchor_question_answers,
    get_quiz_insights,
)
from quizfunnel.results.stages import (
    MAX_DISPLAY_SCORE,
    STRESS_STAGE_CONFIG,
    get_stress_stage,
    to_display_score,
)


@pytest.fixture
def anchored_store(store):
    store.add_quiz()
    store.add_session()
    store.add_question("qa", question_type="anchor_text", question_key="q26")
    store.add_question("qb", question_type="anchor_text", question_key="q02")
    store.add_option("a1", "qa", option_text="Spánek")
    store.add_option("a2", "qa", option_text="Práce")
    store.add_option("a3", "qa", option_text="Vztahy")
    store.add_option("b1", "qb", option_text="Šéf")
    return store


class TestStressStage:
    @pytest.mark.parametrize("score,stage", [
        (0, 1), (25, 1), (26, 2), (50, 2), (51, 3), (75, 3), (76, 4), (100, 4),
    ])
    def test_quartile_thresholds(self, score, stage):
        assert get_stress_stage(score) == stage

    def test_every_stage_has_content(self):
        for stage in (1, 2, 3, 4):
            assert STRESS_STAGE_CONFIG["images"][stage]
            assert STRESS_STAGE_CONFIG["titles"][stage]
            assert STRESS_STAGE_CONFIG["descriptions"][stage]

    @pytest.mark.parametrize("score,display", [(0, 0), (50, 30), (100, MAX_DISPLAY_SCORE), (67, 40)])
    def test_display_score(self, score, display):
        assert to_display_score(score) == display


class TestBuildInsightCards:
    def test_cards_follow_config_order(self):
        cards = build_insight_cards([])
        assert [c.card_type for c in cards] == [c.type for c in INSIGHT_CARD_CONFIG]

    def test_missing_answers_use_fallback(self):
        cards = build_insight_cards([])
        assert all(card.value == cfg.fallback for card, cfg in zip(cards, INSIGHT_CARD_CONFIG))

    def test_answer_text_replaces_fallback(self):
        cards = build_insight_cards([AnchorAnswer(question_key="q02", answer_text="Šéf")])
        by_type = {c.card_type: c for c in cards}
        assert by_type["trigger"].value == "Šéf"
        assert by_type["main_challenge"].value == "Vnitřní klid"

    def test_empty_answer_text_uses_fallback(self):
        cards = build_insight_cards([AnchorAnswer(question_key="q26", answer_text="")])
        assert cards[0].value == "Vnitřní klid"


class TestAnchorAnswers:
    def test_multi_select_keeps_two_texts(self, anchored_store):
        anchored_store.upsert_answer("sess-1", "qa", ["a1", "a2", "a3"], 0)

        answers = get_anchor_question_answers(anchored_store, "sess-1", "quiz-1")

        assert answers == [AnchorAnswer(question_key="q26", answer_text="Spánek, Práce")]

    def test_unknown_option_text_is_dropped(self, anchored_store):
        anchored_store.upsert_answer("sess-1", "qb", ["ghost", "b1"], 0)

        answers = get_anchor_question_answers(anchored_store, "sess-1", "quiz-1")

        assert answers[0].answer_text == "Šéf"

    def test_no_anchor_questions(self, store):
        store.add_quiz()
        store.add_session()
        assert get_anchor_question_answers(store, "sess-1", "quiz-1") == []

    def test_no_answers(self, anchored_store):
        assert get_anchor_question_answers(anchored_store, "sess-1", "quiz-1") == []

    def test_store_failure_returns_empty(self, anchored_store):
        anchored_store.fail = True
        assert get_anchor_question_answers(anchored_store, "sess-1", "quiz-1") == []


class TestQuizInsights:
    def test_full_insights(self, anchored_store):
        anchored_store.upsert_answer("sess-1", "qb", ["b1"], 0)

        insights = get_quiz_insights(anchored_store, "sess-1", "quiz-1", 67)

        assert insights.stress_stage == 3
        assert insights.stage_image_path == STRESS_STAGE_CONFIG["images"][3]
        assert insights.display_score == 40
        assert insights.max_display_score == MAX_DISPLAY_SCORE
        assert len(insights.insight_cards) == 4
        assert insights.insight_cards[1].value == "Šéf"

    def test_insights_survive_store_failure(self, anchored_store):
        anchored_store.fail = True

        insights = get_quiz_insights(anchored_store, "sess-1", "quiz-1", 10)

        assert insights.stress_stage == 1
        assert [c.value for c in insights.insight_cards] == [c.fallback for c in INSIGHT_CARD_CONFIG]
