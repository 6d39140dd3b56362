"""
Shared fixtures: an in-memory stand-in for QuizStore.

FakeQuizStore mirrors the QuizStore method surface with plain dicts so the
core logic and routers can be tested without PostgreSQL.
"""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List

import pytest

from quizfunnel.store import QuizDataError


class FakeQuizStore:
    def __init__(self):
        self.quizzes: Dict[str, Dict[str, Any]] = {}
        self.sessions: Dict[str, Dict[str, Any]] = {}
        self.questions: List[Dict[str, Any]] = []
        self.options: Dict[str, Dict[str, Any]] = {}
        self.answers: Dict[tuple, Dict[str, Any]] = {}
        self.results: Dict[str, Dict[str, Any]] = {}
        self.fail = False
        self.upsert_result_calls = 0
        self.upsert_answers_calls = 0
        self.option_score_lookups = 0

    def _check(self):
        if self.fail:
            raise QuizDataError("Failed to reach database: connection refused")

    # seeding helpers

    def add_quiz(self, quiz_id="quiz-1", result_type="segment", segments=None, offer_mapping=None,
                 slug="stress", status="active"):
        self.quizzes[quiz_id] = {
            "id": quiz_id,
            "slug": slug,
            "status": status,
            "version": 1,
            "result_type": result_type,
            "result_config": {"type": result_type, "segments": segments or []},
            "offer_mapping": offer_mapping or {},
        }

    def add_session(self, session_id="sess-1", quiz_id="quiz-1", completed=False, user_metadata=None):
        self.sessions[session_id] = {
            "id": session_id,
            "quiz_id": quiz_id,
            "email": None,
            "completed_at": datetime(2026, 1, 1, tzinfo=timezone.utc) if completed else None,
            "expires_at": None,
            "user_metadata": user_metadata or {},
        }

    def add_question(self, question_id, quiz_id="quiz-1", question_type="single_choice", weight=1.0, question_key=None):
        self.questions.append({
            "id": question_id,
            "quiz_id": quiz_id,
            "question_key": question_key,
            "question_type": question_type,
            "weight": weight,
            "order_index": len(self.questions),
        })

    def add_option(self, option_id, question_id, score_value=0.0, option_text=""):
        self.options[option_id] = {
            "id": option_id,
            "question_id": question_id,
            "score_value": score_value,
            "option_text": option_text,
            "order_index": len(self.options),
        }

    # QuizStore surface

    def ping(self):
        self._check()
        return True

    def get_quiz(self, quiz_id):
        self._check()
        quiz = self.quizzes.get(quiz_id)
        return copy.deepcopy(quiz) if quiz else None

    def get_quiz_by_slug(self, slug):
        self._check()
        for quiz in self.quizzes.values():
            if quiz["slug"] == slug and quiz["status"] == "active":
                questions = [
                    dict(q, options=[o for o in self.options.values() if o["question_id"] == q["id"]])
                    for q in self.questions if q["quiz_id"] == quiz["id"]
                ]
                return copy.deepcopy(dict(quiz, questions=questions))
        return None

    def get_session(self, session_id):
        self._check()
        session = self.sessions.get(session_id)
        return copy.deepcopy(session) if session else None

    def create_session(self, quiz_id, quiz_version=1):
        self._check()
        session_id = f"sess-new-{len(self.sessions) + 1}"
        self.add_session(session_id, quiz_id)
        return copy.deepcopy(self.sessions[session_id])

    def mark_session_completed(self, session_id, completed_at=None):
        self._check()
        session = self.sessions[session_id]
        if session["completed_at"] is None:
            session["completed_at"] = completed_at or datetime.now(timezone.utc)

    def merge_session_metadata(self, session_id, update, merge, email=None):
        self._check()
        session = self.sessions[session_id]
        session["user_metadata"] = merge(session["user_metadata"] or {}, update)
        if email is not None:
            session["email"] = email
        return copy.deepcopy(session["user_metadata"])

    def get_scoring_questions(self, quiz_id, question_types):
        self._check()
        types = set(question_types)
        return [
            dict(q) for q in self.questions
            if q["quiz_id"] == quiz_id and q["question_type"] in types
        ]

    def get_questions_by_keys(self, quiz_id, question_keys):
        self._check()
        return [
            {"id": q["id"], "question_key": q["question_key"]}
            for q in self.questions
            if q["quiz_id"] == quiz_id and q["question_key"] in question_keys
        ]

    def get_option_scores(self, option_ids):
        self._check()
        self.option_score_lookups += 1
        return {
            oid: float(self.options[oid]["score_value"])
            for oid in option_ids if oid in self.options
        }

    def get_option_texts(self, option_ids):
        self._check()
        return {
            oid: self.options[oid]["option_text"]
            for oid in option_ids if oid in self.options
        }

    def get_session_answers(self, session_id):
        self._check()
        return [dict(a) for (sid, _), a in self.answers.items() if sid == session_id]

    def get_answers_for_questions(self, session_id, question_ids):
        self._check()
        return [
            {"question_id": a["question_id"], "selected_option_ids": list(a["selected_option_ids"])}
            for (sid, qid), a in self.answers.items()
            if sid == session_id and qid in question_ids
        ]

    def upsert_answer(self, session_id, question_id, selected_option_ids, answer_score, time_spent_seconds=None):
        self._check()
        row = {
            "session_id": session_id,
            "question_id": question_id,
            "selected_option_ids": list(selected_option_ids),
            "answer_score": answer_score,
            "time_spent_seconds": time_spent_seconds,
        }
        self.answers[(session_id, question_id)] = row
        return dict(row)

    def get_quiz_question_ids(self, quiz_id):
        self._check()
        return {q["id"] for q in self.questions if q["quiz_id"] == quiz_id}

    def upsert_answers(self, session_id, answers):
        self._check()
        self.upsert_answers_calls += 1
        for a in answers:
            self.answers[(session_id, a["question_id"])] = dict(a, session_id=session_id)
        return len(answers)

    def get_result(self, session_id):
        self._check()
        row = self.results.get(session_id)
        return copy.deepcopy(row) if row else None

    def upsert_result(self, row):
        self._check()
        self.upsert_result_calls += 1
        stored = copy.deepcopy(row)
        stored["id"] = f"result-{row['session_id']}"
        stored["created_at"] = datetime(2026, 1, 1, tzinfo=timezone.utc)
        self.results[row["session_id"]] = stored
        return copy.deepcopy(stored)


@pytest.fixture
def store() -> FakeQuizStore:
    return FakeQuizStore()


@pytest.fixture
def stress_segments() -> List[Dict[str, Any]]:
    """low / medium / high over a 0-60 weighted score."""
    return [
        {"id": "low", "label": "Nízká", "minScore": 0, "maxScore": 20},
        {"id": "medium", "label": "Střední", "minScore": 21, "maxScore": 40},
        {"id": "high", "label": "Vysoká", "minScore": 41, "maxScore": 60},
    ]


@pytest.fixture
def offer_mapping() -> Dict[str, Any]:
    return {
        "low": {"productId": "prod-basic", "productName": "Základ", "priceCents": 49500},
        "medium": {"productId": "prod-plus", "productName": "Plus", "priceCents": 99500},
        "high": {"productId": "prod-max", "productName": "Max", "priceCents": 239500},
    }
