"""
QuizStore Tests

Transaction handling against a mocked psycopg2 connection.
"""

from unittest.mock import MagicMock

import psycopg2
from psycopg2.extras import Json
import pytest

from quizfunnel.funnel import merge_funnel_metadata
from quizfunnel.store import QuizDataError, QuizStore


@pytest.fixture
def conn():
    conn = MagicMock()
    conn.cursor.return_value = MagicMock()
    return conn


@pytest.fixture
def quiz_store(conn):
    return QuizStore(connect=lambda: conn)


class TestTransactions:
    def test_commit_and_close_on_success(self, quiz_store, conn):
        conn.cursor.return_value.fetchone.return_value = {"ok": 1}

        assert quiz_store.ping() is True
        conn.commit.assert_called_once()
        conn.close.assert_called_once()

    def test_rollback_and_wrap_on_error(self, quiz_store, conn):
        conn.cursor.return_value.execute.side_effect = psycopg2.OperationalError("server closed")

        with pytest.raises(QuizDataError, match="load session"):
            quiz_store.get_session("sess-1")

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        conn.close.assert_called_once()


class TestQueries:
    def test_missing_session(self, quiz_store, conn):
        conn.cursor.return_value.fetchone.return_value = None
        assert quiz_store.get_session("sess-1") is None

    def test_option_scores_keyed_by_string_id(self, quiz_store, conn):
        conn.cursor.return_value.fetchall.return_value = [
            {"id": "o1", "score_value": 2},
            {"id": "o2", "score_value": None},
        ]
        assert quiz_store.get_option_scores(["o1", "o2"]) == {"o1": 2.0, "o2": 0.0}

    def test_empty_option_ids_skip_query(self, quiz_store, conn):
        assert quiz_store.get_option_scores([]) == {}
        assert quiz_store.get_option_texts([]) == {}
        conn.cursor.assert_not_called()

    def test_merge_session_metadata(self, quiz_store, conn):
        cur = conn.cursor.return_value
        cur.fetchone.return_value = {"user_metadata": {"microCommitments": {"completer": True}}}

        merged = quiz_store.merge_session_metadata(
            "sess-1",
            {"microCommitments": {"learnStress": False}},
            merge_funnel_metadata,
        )

        assert merged == {"microCommitments": {"completer": True, "learnStress": False}}
        assert cur.execute.call_count == 2
        assert "FOR UPDATE" in cur.execute.call_args_list[0][0][0]

    def test_merge_unknown_session(self, quiz_store, conn):
        conn.cursor.return_value.fetchone.return_value = None
        with pytest.raises(QuizDataError):
            quiz_store.merge_session_metadata("nope", {}, merge_funnel_metadata)

    def test_upsert_result_wraps_json(self, quiz_store, conn):
        cur = conn.cursor.return_value
        cur.fetchone.return_value = {"session_id": "sess-1"}

        quiz_store.upsert_result({"session_id": "sess-1", "calculation_details": {"rawScore": 4}})

        sql, values = cur.execute.call_args[0]
        assert "ON CONFLICT (session_id)" in sql
        assert isinstance(values[1], Json)

    def test_metadata_and_email_written_in_one_statement(self, quiz_store, conn):
        cur = conn.cursor.return_value
        cur.fetchone.return_value = {"user_metadata": {}}

        quiz_store.merge_session_metadata(
            "sess-1", {"funnelStep": "D"}, merge_funnel_metadata, email="jana@seznam.cz",
        )

        update_sql, params = cur.execute.call_args_list[1][0]
        assert "email = COALESCE(%s, email)" in update_sql
        assert params[1] == "jana@seznam.cz"
        conn.commit.assert_called_once()

    def test_failed_metadata_write_leaves_email_untouched(self, quiz_store, conn):
        cur = conn.cursor.return_value
        cur.fetchone.return_value = {"user_metadata": {}}
        cur.execute.side_effect = [None, psycopg2.OperationalError("server closed")]

        with pytest.raises(QuizDataError):
            quiz_store.merge_session_metadata(
                "sess-1", {"funnelStep": "D"}, merge_funnel_metadata, email="jana@seznam.cz",
            )

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()


class TestSessionsAndBatches:
    def test_create_session(self, quiz_store, conn):
        cur = conn.cursor.return_value
        cur.fetchone.return_value = {"id": "sess-9", "quiz_id": "quiz-1", "user_metadata": {}}

        session = quiz_store.create_session("quiz-1", 2)

        sql, params = cur.execute.call_args[0]
        assert "INSERT INTO quiz_sessions" in sql
        assert params[:2] == ("quiz-1", 2)
        assert session["id"] == "sess-9"

    def test_quiz_by_slug_groups_options(self, quiz_store, conn):
        cur = conn.cursor.return_value
        cur.fetchone.return_value = {"id": "quiz-1", "slug": "stress"}
        cur.fetchall.side_effect = [
            [{"id": "q1", "question_type": "likert_4"}, {"id": "q2", "question_type": "scale"}],
            [{"id": "o1", "question_id": "q2"}, {"id": "o2", "question_id": "q1"}],
        ]

        quiz = quiz_store.get_quiz_by_slug("stress")

        assert [q["id"] for q in quiz["questions"]] == ["q1", "q2"]
        assert [o["id"] for o in quiz["questions"][0]["options"]] == ["o2"]
        assert [o["id"] for o in quiz["questions"][1]["options"]] == ["o1"]

    def test_unknown_slug(self, quiz_store, conn):
        conn.cursor.return_value.fetchone.return_value = None
        assert quiz_store.get_quiz_by_slug("nope") is None

    def test_upsert_answers_single_statement(self, quiz_store, conn, monkeypatch):
        execute_values = MagicMock()
        monkeypatch.setattr("quizfunnel.store.execute_values", execute_values)

        written = quiz_store.upsert_answers("sess-1", [
            {"question_id": "q1", "selected_option_ids": ["o1"], "answer_score": 1.0},
            {"question_id": "q2", "selected_option_ids": [], "answer_score": 0.0, "time_spent_seconds": 4},
        ])

        assert written == 2
        execute_values.assert_called_once()
        _, sql, rows = execute_values.call_args[0]
        assert "ON CONFLICT (session_id, question_id)" in sql
        assert rows == [("sess-1", "q1", ["o1"], 1.0, None), ("sess-1", "q2", [], 0.0, 4)]
        conn.commit.assert_called_once()

    def test_empty_batch_skips_connection(self, quiz_store, conn):
        assert quiz_store.upsert_answers("sess-1", []) == 0
        conn.cursor.assert_not_called()
