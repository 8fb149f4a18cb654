from datetime import datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

import main
from studyaid.apis import deps
from studyaid.modules.auth import current_active_user
from studyaid.modules.flashcards import apply_study_result, set_mastery
from tests.fakes import FLASHCARDS_JSON, quota_error

USER = SimpleNamespace(id=7, is_active=True)


class FakeFlashcardService:
    def __init__(self):
        self.sets = {}

    async def save_flashcard_set(self, *, user_id, title, subject, cards):
        set_id = len(self.sets) + 1
        db_set = SimpleNamespace(
            id=set_id,
            user_id=user_id,
            title=title,
            subject=subject,
            mastery_level=0,
            last_studied=None,
            created_at=datetime(2024, 5, 1, 9, 30),
            flashcards=[
                SimpleNamespace(
                    id=set_id * 100 + i,
                    question=c.question,
                    answer=c.answer,
                    mastery_level=0,
                    order_index=i,
                )
                for i, c in enumerate(cards)
            ],
        )
        self.sets[set_id] = db_set
        return db_set

    async def list_sets(self, user_id):
        return [s for s in self.sets.values() if s.user_id == user_id]

    async def get_set(self, set_id, *, user_id):
        s = self.sets.get(set_id)
        return s if s and s.user_id == user_id else None

    async def delete_set(self, set_id, *, user_id):
        if await self.get_set(set_id, user_id=user_id) is None:
            return False
        del self.sets[set_id]
        return True

    async def record_study(self, set_id, *, user_id, card_id, known):
        s = await self.get_set(set_id, user_id=user_id)
        if s is None:
            return None
        card = next((c for c in s.flashcards if c.id == card_id), None)
        if card is None:
            raise LookupError("card_not_found")
        card.mastery_level = apply_study_result(card.mastery_level, known)
        s.last_studied = datetime(2024, 5, 2)
        s.mastery_level = set_mastery(c.mastery_level for c in s.flashcards)
        return card, s


@pytest.fixture
def service():
    return FakeFlashcardService()


@pytest.fixture
def client(service, make_orchestrator, monkeypatch):
    orchestrator, resolver = make_orchestrator(
        {"keyA": [quota_error()], "keyB": [FLASHCARDS_JSON]}
    )
    monkeypatch.setattr(deps, "require_text", lambda data: "ATP powers the cell.")
    app = main.app
    app.dependency_overrides[current_active_user] = lambda: USER
    app.dependency_overrides[deps.get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[deps.get_flashcard_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _upload(client, content_type="application/pdf", data=b"%PDF-1.4 fake"):
    return client.post(
        "/v1/flashcards/generate-flashcards",
        data={"title": "Cells", "subject": "Biology"},
        files={"pdf_file": ("notes.pdf", data, content_type)},
    )


def test_generate_flashcards_after_key_rotation(client, service):
    r = _upload(client)
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    saved = service.sets[body["id"]]
    assert [c.question for c in saved.flashcards] == [
        "What is ATP?",
        "Where does photosynthesis happen?",
    ]
    assert all(c.mastery_level == 0 for c in saved.flashcards)


def test_generate_requires_pdf(client):
    r = client.post(
        "/v1/flashcards/generate-flashcards", data={"title": "t", "subject": "s"}
    )
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "PDF file is required"


def test_generate_rejects_non_pdf(client):
    r = _upload(client, content_type="text/plain")
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "File must be a PDF"


def test_generate_rejects_large_upload(client):
    r = _upload(client, data=b"0" * (5 * 1024 * 1024 + 1))
    assert r.status_code == 400
    assert "5MB" in r.json()["detail"]["error"]


def test_invalid_model_output_maps_to_500(client, make_orchestrator):
    orchestrator, _ = make_orchestrator({"keyA": ["not json at all"]})
    main.app.dependency_overrides[deps.get_orchestrator] = lambda: orchestrator
    r = _upload(client)
    assert r.status_code == 500
    detail = r.json()["detail"]
    assert "invalid flashcard format" in detail["error"]
    assert detail["debug"] == "not json at all"


def test_manual_create_trims_cards(client, service):
    r = client.post(
        "/v1/flashcards/create-flashcards-manual",
        json={
            "title": "Capitals",
            "subject": "Geography",
            "cards": [{"question": " Capital of France? ", "answer": " Paris "}],
        },
    )
    assert r.status_code == 200
    card = service.sets[r.json()["id"]].flashcards[0]
    assert (card.question, card.answer) == ("Capital of France?", "Paris")


def test_manual_create_rejects_blank_answer(client):
    r = client.post(
        "/v1/flashcards/create-flashcards-manual",
        json={"title": "t", "subject": "s", "cards": [{"question": "q", "answer": "  "}]},
    )
    assert r.status_code == 400


def test_study_flow_updates_progress(client):
    set_id = _upload(client).json()["id"]
    cards = client.get(f"/v1/flashcards/sets/{set_id}").json()["set"]["cards"]

    r = client.post(
        f"/v1/flashcards/sets/{set_id}/study",
        json={"card_id": cards[0]["id"], "known": True},
    )
    assert r.status_code == 200
    assert r.json()["mastery_level"] == 15
    assert r.json()["set_mastery_level"] == 8

    listing = client.get("/v1/flashcards/sets").json()["sets"][0]
    assert listing["card_count"] == 2
    assert listing["known"] == 0
    assert listing["status"] == "in-progress"


def test_study_unknown_card(client):
    set_id = _upload(client).json()["id"]
    r = client.post(
        f"/v1/flashcards/sets/{set_id}/study", json={"card_id": 999999, "known": False}
    )
    assert r.status_code == 404


def test_delete_set(client):
    set_id = _upload(client).json()["id"]
    assert client.delete(f"/v1/flashcards/sets/{set_id}").status_code == 200
    assert client.get(f"/v1/flashcards/sets/{set_id}").status_code == 404
