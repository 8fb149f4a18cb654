from datetime import datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

import main
from studyaid.apis import deps
from studyaid.modules.auth import current_active_user
from studyaid.modules.quiz import DashboardStats
from tests.fakes import QUIZ_JSON

USER = SimpleNamespace(id=3, is_active=True)


class FakeQuizStore:
    """Backs both the quiz and the dashboard services."""

    def __init__(self):
        self.quizzes = {}
        self.results = []
        self.stored_stats = None

    async def save_quiz(self, *, user_id, title, subject, difficulty, time_limit, num_questions, questions):
        quiz_id = len(self.quizzes) + 1
        quiz = SimpleNamespace(
            id=quiz_id,
            user_id=user_id,
            title=title,
            subject=subject,
            difficulty=difficulty,
            time_limit=time_limit,
            num_questions=num_questions,
            status="not-started",
            created_at=datetime(2024, 5, 1, 14, 5, 9),
            questions=[
                SimpleNamespace(question=q.question, options=q.options, correct_answer=q.correct_answer)
                for q in questions
            ],
        )
        self.quizzes[quiz_id] = quiz
        return quiz

    async def list_quizzes(self, user_id):
        return [q for q in self.quizzes.values() if q.user_id == user_id]

    async def get_quiz(self, quiz_id, *, user_id):
        q = self.quizzes.get(quiz_id)
        return q if q and q.user_id == user_id else None

    async def delete_quiz(self, quiz_id, *, user_id):
        if await self.get_quiz(quiz_id, user_id=user_id) is None:
            return False
        del self.quizzes[quiz_id]
        self.results = [r for r in self.results if r.quiz_id != quiz_id]
        return True

    async def save_result(self, *, user_id, quiz_id, score, answers, time_spent):
        result = SimpleNamespace(
            id=len(self.results) + 1,
            user_id=user_id,
            quiz_id=quiz_id,
            score=score,
            answers=answers,
            time_spent=time_spent,
            created_at=datetime(2024, 5, 3, 10, 0),
            quiz=self.quizzes[quiz_id],
        )
        self.results.append(result)
        return result

    async def latest_scores(self, user_id):
        return {r.quiz_id: r.score for r in self.results if r.user_id == user_id}

    async def get_result(self, quiz_id, *, user_id):
        matches = [r for r in self.results if r.quiz_id == quiz_id and r.user_id == user_id]
        return matches[-1] if matches else None

    async def recent_results(self, user_id, limit=5):
        return list(reversed([r for r in self.results if r.user_id == user_id]))[:limit]

    async def upcoming_quizzes(self, user_id, limit=5):
        return [q for q in self.quizzes.values() if q.status == "not-started"][:limit]

    async def store_stats(self, user_id, stats: DashboardStats):
        self.stored_stats = stats


@pytest.fixture
def store():
    return FakeQuizStore()


@pytest.fixture
def client(store, make_orchestrator, monkeypatch):
    orchestrator, _ = make_orchestrator({"keyA": [QUIZ_JSON]})
    monkeypatch.setattr(deps, "require_text", lambda data: "Arithmetic and planets.")
    app = main.app
    app.dependency_overrides[current_active_user] = lambda: USER
    app.dependency_overrides[deps.get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[deps.get_quiz_service] = lambda: store
    app.dependency_overrides[deps.get_dashboard_service] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def _generate(client, num_questions=2):
    return client.post(
        "/v1/quizzes/generate-quiz",
        data={
            "title": "Mixed",
            "subject": "Science",
            "num_questions": str(num_questions),
            "difficulty": "easy",
            "time_limit": "15",
        },
        files={"pdf_file": ("quiz.pdf", b"%PDF-1.4 fake", "application/pdf")},
    )


def test_generate_quiz_persists_questions(client, store):
    r = _generate(client)
    assert r.status_code == 200
    quiz = store.quizzes[r.json()["id"]]
    assert quiz.difficulty == "easy"
    assert quiz.time_limit == 15
    assert [q.correct_answer for q in quiz.questions] == [3, 1]


def test_extra_questions_truncated(client, store):
    r = _generate(client, num_questions=1)
    assert len(store.quizzes[r.json()["id"]].questions) == 1


def test_get_quiz_and_missing_quiz(client):
    quiz_id = _generate(client).json()["id"]
    body = client.get(f"/v1/quizzes/{quiz_id}").json()
    assert body["quiz"]["questions"][0]["options"] == ["1", "2", "3", "4"]
    assert client.get("/v1/quizzes/999").status_code == 404


def test_results_mark_quiz_completed(client):
    quiz_id = _generate(client).json()["id"]
    assert client.get("/v1/quizzes/sets").json()["quizzes"][0]["status"] == "pending"

    r = client.post(
        "/v1/quizzes/quiz-results",
        json={"quiz_id": quiz_id, "score": 80, "answers": [3, 0], "time_spent": 120},
    )
    assert r.status_code == 200

    item = client.get("/v1/quizzes/sets").json()["quizzes"][0]
    assert item["status"] == "completed"
    assert item["score"] == 80
    result = client.get(f"/v1/quizzes/quiz-results/{quiz_id}").json()["result"]
    assert result["answers"] == [3, 0]


def test_result_for_foreign_quiz_rejected(client):
    r = client.post(
        "/v1/quizzes/quiz-results",
        json={"quiz_id": 42, "score": 10, "answers": [], "time_spent": 1},
    )
    assert r.status_code == 404


def test_delete_quiz_removes_results(client, store):
    quiz_id = _generate(client).json()["id"]
    client.post(
        "/v1/quizzes/quiz-results",
        json={"quiz_id": quiz_id, "score": 50, "answers": [], "time_spent": 30},
    )
    assert client.delete(f"/v1/quizzes/sets/{quiz_id}").status_code == 200
    assert store.results == []
    assert client.get(f"/v1/quizzes/quiz-results/{quiz_id}").status_code == 404


def test_dashboard_summarizes_recent_results(client, store):
    first = _generate(client).json()["id"]
    _generate(client)
    for score in (70, 85, 90):
        client.post(
            "/v1/quizzes/quiz-results",
            json={"quiz_id": first, "score": score, "answers": [], "time_spent": 1800},
        )

    body = client.get("/v1/dashboard").json()
    assert body["quizzes_taken"] == 3
    assert body["average_score"] == 82
    assert body["hours_practiced"] == 1.5
    assert body["recent_results"][0] == {"subject": "Science", "score": 90, "date": "2024-05-03"}
    assert body["upcoming_quizzes"][0] == {"subject": "Science", "date": "2024-05-01", "time": "14:05:09"}
    assert store.stored_stats.total_score == 245
