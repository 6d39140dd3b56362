"""
Quiz Start Tests

A session is resumed only while it belongs to the quiz being started and
is not completed; otherwise a fresh session is created.
"""

import pytest

from quizfunnel.sessions import needs_new_session, start_session, to_quiz_definition
from quizfunnel.store import QuizDataError


@pytest.fixture
def quiz_store(store):
    store.add_quiz()
    store.add_quiz("quiz-2", slug="sleep")
    store.add_quiz("quiz-old", slug="retired", status="archived")
    store.add_question("q1")
    store.add_option("o1", "q1", 2.0, option_text="Často")
    store.add_session("sess-1")
    store.add_session("sess-done", completed=True)
    store.add_session("sess-other", quiz_id="quiz-2")
    return store


class TestNeedsNewSession:
    def test_no_session(self):
        assert needs_new_session(None, "quiz-1")

    def test_same_quiz_in_progress(self):
        assert not needs_new_session({"quiz_id": "quiz-1", "completed_at": None}, "quiz-1")

    def test_other_quiz(self):
        assert needs_new_session({"quiz_id": "quiz-2", "completed_at": None}, "quiz-1")

    def test_retake_after_completion(self):
        assert needs_new_session({"quiz_id": "quiz-1", "completed_at": "2026-01-01T00:00:00Z"}, "quiz-1")


class TestStartSession:
    def test_fresh_start(self, quiz_store):
        session, quiz, resumed = start_session(quiz_store, "stress")

        assert not resumed
        assert session["quiz_id"] == "quiz-1"
        assert session["user_metadata"] == {}
        assert session["id"] in quiz_store.sessions
        assert quiz["questions"][0]["id"] == "q1"

    def test_resume_in_progress(self, quiz_store):
        session, _, resumed = start_session(quiz_store, "stress", "sess-1")
        assert resumed
        assert session["id"] == "sess-1"

    @pytest.mark.parametrize("session_id", ["sess-done", "sess-other", "sess-expired"])
    def test_new_session_when_not_resumable(self, quiz_store, session_id):
        session, _, resumed = start_session(quiz_store, "stress", session_id)
        assert not resumed
        assert session["id"] != session_id

    def test_unknown_slug(self, quiz_store):
        assert start_session(quiz_store, "nope") is None

    def test_inactive_quiz(self, quiz_store):
        assert start_session(quiz_store, "retired") is None

    def test_store_failure_propagates(self, quiz_store):
        quiz_store.fail = True
        with pytest.raises(QuizDataError):
            start_session(quiz_store, "stress")


class TestQuizDefinition:
    def test_scores_are_not_exposed(self, quiz_store):
        definition = to_quiz_definition(quiz_store.get_quiz_by_slug("stress"))

        option = definition.questions[0].options[0]
        assert option.option_text == "Často"
        assert "score_value" not in option.model_dump()
        assert definition.slug == "stress"
