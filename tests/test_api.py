"""
HTTP tests for the FastAPI app against a temporary SQLite database.
Run with: python -m pytest tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from campus_assist.engine import FALLBACK_MESSAGE
from campus_assist.main import app

ADMIN = {"X-Admin-Key": "test-admin-key"}

SEED = {
    "entries": [
        {
            "question_en": "What are the fees for BCA?",
            "answer_en": "BCA fees are 45,000 per year.",
            "category": "Fees",
            "keywords": ["BCA Fee Structure", "  "],
        },
        {
            "question_en": "What are the fees for MCA?",
            "answer_en": "MCA fees are 60,000 per year.",
            "category": "fees",
        },
        {
            "question_en": "Library timings on weekends",
            "answer_en": "The library is open 10am to 4pm on weekends.",
            "category": "library",
        },
    ]
}


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        resp = c.post("/api/knowledge/ingest", json=SEED, headers=ADMIN)
        assert resp.status_code == 200
        yield c


class TestHealth:

    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert "X-Process-Time-Ms" in resp.headers
        assert resp.headers["X-Request-ID"]

    def test_request_id_echoed(self, client):
        resp = client.get("/api/health", headers={"X-Request-ID": "abc123"})
        assert resp.headers["X-Request-ID"] == "abc123"


class TestKnowledge:

    def test_ingest_requires_admin_key(self, client):
        assert client.post("/api/knowledge/ingest", json=SEED).status_code == 403
        resp = client.post("/api/knowledge/ingest", json=SEED, headers={"X-Admin-Key": "wrong"})
        assert resp.status_code == 403

    def test_ingest_rejects_empty_batch(self, client):
        resp = client.post("/api/knowledge/ingest", json={"entries": []}, headers=ADMIN)
        assert resp.status_code == 422

    def test_list_normalizes_category_and_keywords(self, client):
        resp = client.get("/api/knowledge/", headers=ADMIN)
        assert resp.status_code == 200
        rows = {r["question_en"]: r for r in resp.json()}
        bca = rows["What are the fees for BCA?"]
        assert bca["category"] == "fees"
        assert bca["keywords"] == ["bca fee structure"]
        assert rows["Library timings on weekends"]["keywords"] == []

    def test_list_requires_admin_key(self, client):
        assert client.get("/api/knowledge/").status_code == 403


class TestAsk:

    def test_database_answer(self, client):
        resp = client.post("/api/chat/ask", json={"message": "BCA fees"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["source"] == "database"
        assert body["outcome"] == "confident"
        assert body["message"] == "BCA fees are 45,000 per year."
        assert body["matched_question_id"]

    def test_keyword_phrase_answer(self, client):
        body = client.post("/api/chat/ask", json={"message": "bca fee structure"}).json()
        assert body["source"] == "database"
        assert body["score"] == 98

    def test_vague_question_falls_back(self, client):
        body = client.post("/api/chat/ask", json={"message": "fees"}).json()
        assert body["source"] == "ai"
        assert body["reason"] == "vague"
        assert body["message"] == FALLBACK_MESSAGE

    def test_image_goes_to_ai(self, client):
        body = client.post(
            "/api/chat/ask",
            json={"message": "", "image_url": "https://college.example.edu/notice.jpg"},
        ).json()
        assert body["source"] == "ai"
        assert body["reason"] == "image"

    def test_blank_message_rejected(self, client):
        assert client.post("/api/chat/ask", json={"message": "   "}).status_code == 400

    def test_knowledge_base_failure_is_503(self, client, monkeypatch):
        from sqlalchemy.exc import OperationalError

        async def broken_snapshot(db):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr("campus_assist.routes.chat.load_snapshot", broken_snapshot)
        resp = client.post("/api/chat/ask", json={"message": "BCA fees"}, headers={"X-Request-ID": "req-1"})

        assert resp.status_code == 503
        assert resp.json() == {
            "detail": "Knowledge base unavailable",
            "type": "OperationalError",
            "request_id": "req-1",
        }
