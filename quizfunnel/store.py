"""
Quiz Funnel Store

psycopg2 gateway to the quiz tables. The core logic never issues SQL itself;
it calls these methods and receives plain dicts.

Tables (see migrations/001_quiz_funnel_schema.sql):
- quizzes, quiz_questions, quiz_options
- quiz_sessions  (user_metadata JSONB, merge-only)
- quiz_answers   (UNIQUE session_id, question_id)
- quiz_results   (UNIQUE session_id)

Every failure to reach or query the database is raised as QuizDataError.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

import psycopg2
from psycopg2.extras import Json, RealDictCursor, execute_values

from quizfunnel import config

logger = logging.getLogger(__name__)


class QuizDataError(RuntimeError):
    """Raised when quiz data cannot be loaded or saved."""


def get_db():
    """Open a new database connection."""
    try:
        if config.DATABASE_URL:
            return psycopg2.connect(config.DATABASE_URL, cursor_factory=RealDictCursor)
        return psycopg2.connect(
            host=config.PGHOST,
            port=config.PGPORT,
            database=config.PGDATABASE,
            user=config.PGUSER,
            password=config.PGPASSWORD,
            cursor_factory=RealDictCursor,
        )
    except psycopg2.Error as e:
        logger.error(f"Database connection error: {e}")
        raise QuizDataError(f"Database connection failed: {e}") from e


class QuizStore:
    """Thin data access layer over the quiz tables."""

    def __init__(self, connect: Callable = get_db):
        self._connect = connect

    @contextmanager
    def _cursor(self, action: str):
        conn = self._connect()
        try:
            cur = conn.cursor()
            yield cur
            conn.commit()
            cur.close()
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise QuizDataError(f"Failed to {action}: {e}") from e
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Quizzes and sessions
    # ------------------------------------------------------------------

    def ping(self) -> bool:
        with self._cursor("ping database") as cur:
            cur.execute("SELECT 1 AS ok")
            return cur.fetchone() is not None

    def get_quiz(self, quiz_id: str) -> Optional[Dict[str, Any]]:
        with self._cursor("load quiz") as cur:
            cur.execute("""
                SELECT id, slug, version, result_type, result_config, offer_mapping
                FROM quizzes
                WHERE id = %s
            """, (quiz_id,))
            row = cur.fetchone()
            return dict(row) if row else None

    def get_quiz_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        """Active quiz with its questions and their options, both in display order."""
        with self._cursor("load quiz") as cur:
            cur.execute("""
                SELECT id, slug, status, version, result_type, result_config, offer_mapping
                FROM quizzes
                WHERE slug = %s
                  AND status = 'active'
            """, (slug,))
            quiz = cur.fetchone()
            if quiz is None:
                return None

            cur.execute("""
                SELECT id, question_key, question_type, question_text, weight, order_index
                FROM quiz_questions
                WHERE quiz_id = %s
                ORDER BY order_index
            """, (quiz["id"],))
            questions = [dict(q, options=[]) for q in cur.fetchall()]

            cur.execute("""
                SELECT o.id, o.question_id, o.option_text, o.score_value, o.order_index
                FROM quiz_options o
                JOIN quiz_questions q ON q.id = o.question_id
                WHERE q.quiz_id = %s
                ORDER BY o.order_index
            """, (quiz["id"],))
            by_question = {q["id"]: q for q in questions}
            for option in cur.fetchall():
                question = by_question.get(option["question_id"])
                if question is not None:
                    question["options"].append(dict(option))

            return dict(quiz, questions=questions)

    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Active (non-expired) session, or None."""
        with self._cursor("load session") as cur:
            cur.execute("""
                SELECT id, quiz_id, email, completed_at, expires_at, user_metadata
                FROM quiz_sessions
                WHERE id = %s
                  AND (expires_at IS NULL OR expires_at > NOW())
            """, (session_id,))
            row = cur.fetchone()
            return dict(row) if row else None

    def create_session(self, quiz_id: str, quiz_version: int = 1) -> Dict[str, Any]:
        """New session with empty user_metadata and the default expiry."""
        with self._cursor("create session") as cur:
            cur.execute("""
                INSERT INTO quiz_sessions (quiz_id, quiz_version, session_token, current_question_index)
                VALUES (%s, %s, %s, 0)
                RETURNING id, quiz_id, email, completed_at, expires_at, user_metadata
            """, (quiz_id, quiz_version, str(uuid.uuid4())))
            return dict(cur.fetchone())

    def mark_session_completed(self, session_id: str, completed_at: Optional[datetime] = None) -> None:
        completed_at = completed_at or datetime.now(timezone.utc)
        with self._cursor("update session") as cur:
            cur.execute("""
                UPDATE quiz_sessions
                SET completed_at = COALESCE(completed_at, %s), updated_at = NOW()
                WHERE id = %s
            """, (completed_at, session_id))

    def merge_session_metadata(
        self,
        session_id: str,
        update: Dict[str, Any],
        merge: Callable[[Dict[str, Any], Dict[str, Any]], Dict[str, Any]],
        email: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Read-merge-write of quiz_sessions.user_metadata in one transaction.
        The row is locked so concurrent funnel calls do not drop keys. When
        email is given the session's email column is set in the same write.
        """
        with self._cursor("merge session metadata") as cur:
            cur.execute("""
                SELECT user_metadata
                FROM quiz_sessions
                WHERE id = %s
                FOR UPDATE
            """, (session_id,))
            row = cur.fetchone()
            if row is None:
                raise QuizDataError(f"Session not found: {session_id}")

            merged = merge(row.get("user_metadata") or {}, update)
            cur.execute("""
                UPDATE quiz_sessions
                SET user_metadata = %s,
                    email = COALESCE(%s, email),
                    updated_at = NOW()
                WHERE id = %s
            """, (Json(merged), email, session_id))
            return merged

    # ------------------------------------------------------------------
    # Questions, options, answers
    # ------------------------------------------------------------------

    def get_scoring_questions(self, quiz_id: str, question_types: Iterable[str]) -> List[Dict[str, Any]]:
        with self._cursor("load questions") as cur:
            cur.execute("""
                SELECT id, question_key, question_type, weight
                FROM quiz_questions
                WHERE quiz_id = %s
                  AND question_type = ANY(%s)
                ORDER BY order_index
            """, (quiz_id, list(question_types)))
            return [dict(r) for r in cur.fetchall()]

    def get_questions_by_keys(self, quiz_id: str, question_keys: List[str]) -> List[Dict[str, Any]]:
        with self._cursor("load anchor questions") as cur:
            cur.execute("""
                SELECT id, question_key
                FROM quiz_questions
                WHERE quiz_id = %s
                  AND question_key = ANY(%s)
            """, (quiz_id, question_keys))
            return [dict(r) for r in cur.fetchall()]

    def get_option_scores(self, option_ids: List[str]) -> Dict[str, float]:
        if not option_ids:
            return {}
        with self._cursor("load option scores") as cur:
            cur.execute("""
                SELECT id, score_value
                FROM quiz_options
                WHERE id = ANY(%s)
            """, (option_ids,))
            return {
                str(r["id"]): float(r["score_value"] or 0)
                for r in cur.fetchall()
            }

    def get_option_texts(self, option_ids: List[str]) -> Dict[str, str]:
        if not option_ids:
            return {}
        with self._cursor("load option texts") as cur:
            cur.execute("""
                SELECT id, option_text
                FROM quiz_options
                WHERE id = ANY(%s)
            """, (option_ids,))
            return {str(r["id"]): r["option_text"] for r in cur.fetchall()}

    def get_session_answers(self, session_id: str) -> List[Dict[str, Any]]:
        with self._cursor("load answers") as cur:
            cur.execute("""
                SELECT question_id, selected_option_ids, answer_score, time_spent_seconds
                FROM quiz_answers
                WHERE session_id = %s
            """, (session_id,))
            return [dict(r) for r in cur.fetchall()]

    def get_answers_for_questions(self, session_id: str, question_ids: List[str]) -> List[Dict[str, Any]]:
        if not question_ids:
            return []
        with self._cursor("load anchor answers") as cur:
            cur.execute("""
                SELECT question_id, selected_option_ids
                FROM quiz_answers
                WHERE session_id = %s
                  AND question_id = ANY(%s)
            """, (session_id, question_ids))
            return [dict(r) for r in cur.fetchall()]

    def upsert_answer(
        self,
        session_id: str,
        question_id: str,
        selected_option_ids: List[str],
        answer_score: float,
        time_spent_seconds: Optional[int] = None,
    ) -> Dict[str, Any]:
        with self._cursor("save answer") as cur:
            cur.execute("""
                INSERT INTO quiz_answers (
                    session_id, question_id, selected_option_ids,
                    answer_score, time_spent_seconds
                )
                VALUES (%s, %s, %s, %s, %s)
                ON CONFLICT (session_id, question_id) DO UPDATE SET
                    selected_option_ids = EXCLUDED.selected_option_ids,
                    answer_score = EXCLUDED.answer_score,
                    time_spent_seconds = EXCLUDED.time_spent_seconds,
                    updated_at = NOW()
                RETURNING session_id, question_id, selected_option_ids,
                          answer_score, time_spent_seconds
            """, (session_id, question_id, selected_option_ids, answer_score, time_spent_seconds))
            return dict(cur.fetchone())

    def get_quiz_question_ids(self, quiz_id: str) -> set:
        with self._cursor("load questions") as cur:
            cur.execute("""
                SELECT id
                FROM quiz_questions
                WHERE quiz_id = %s
            """, (quiz_id,))
            return {str(r["id"]) for r in cur.fetchall()}

    def upsert_answers(self, session_id: str, answers: List[Dict[str, Any]]) -> int:
        """
        Multi-row upsert of scored answers in one statement.

        Each answer dict carries question_id, selected_option_ids,
        answer_score and time_spent_seconds.
        """
        if not answers:
            return 0
        rows = [
            (
                session_id,
                a["question_id"],
                list(a["selected_option_ids"]),
                a["answer_score"],
                a.get("time_spent_seconds"),
            )
            for a in answers
        ]
        with self._cursor("save answers") as cur:
            execute_values(cur, """
                INSERT INTO quiz_answers (
                    session_id, question_id, selected_option_ids,
                    answer_score, time_spent_seconds
                )
                VALUES %s
                ON CONFLICT (session_id, question_id) DO UPDATE SET
                    selected_option_ids = EXCLUDED.selected_option_ids,
                    answer_score = EXCLUDED.answer_score,
                    time_spent_seconds = EXCLUDED.time_spent_seconds,
                    updated_at = NOW()
            """, rows)
            return len(rows)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def get_result(self, session_id: str) -> Optional[Dict[str, Any]]:
        with self._cursor("load result") as cur:
            cur.execute("""
                SELECT *
                FROM quiz_results
                WHERE session_id = %s
            """, (session_id,))
            row = cur.fetchone()
            return dict(row) if row else None

    def upsert_result(self, row: Dict[str, Any]) -> Dict[str, Any]:
        columns = list(row.keys())
        values = [Json(v) if isinstance(v, dict) else v for v in row.values()]
        updates = ", ".join(
            f"{c} = EXCLUDED.{c}" for c in columns if c != "session_id"
        )
        with self._cursor("save result") as cur:
            cur.execute(f"""
                INSERT INTO quiz_results ({", ".join(columns)})
                VALUES ({", ".join(["%s"] * len(columns))})
                ON CONFLICT (session_id) DO UPDATE SET
                    {updates},
                    updated_at = NOW()
                RETURNING *
            """, values)
            return dict(cur.fetchone())


def get_store() -> QuizStore:
    """FastAPI dependency; overridden in tests."""
    return QuizStore()
