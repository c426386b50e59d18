"""
Shared test setup: point the app at a throwaway SQLite file and disable the
OpenAI client before anything from campus_assist is imported.
"""

import asyncio
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="campus_assist_test_")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["OPENAI_API_KEY"] = ""
os.environ["RATE_LIMIT_PER_MINUTE"] = "1000"

import pytest  # noqa: E402

from campus_assist.engine import KnowledgeEntry  # noqa: E402


def make_entry(id, question, answer="answer", category=None, keywords=(), image_url=None):
    return KnowledgeEntry(
        id=id,
        question_text=question,
        answer_text=answer,
        category=category,
        image_url=image_url,
        keywords=tuple(keywords),
    )


@pytest.fixture
def entry_factory():
    return make_entry


class FakeFallback:
    """Records every call and replies with a canned string (or raises)."""

    def __init__(self, reply=None, error=None, delay=0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls = []

    async def complete(self, history, language, needs_image):
        self.calls.append({"history": list(history), "language": language, "needs_image": needs_image})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeImages:
    def __init__(self, url="https://img.example.edu/diagram.png", error=None, delay=0.0):
        self.url = url
        self.error = error
        self.delay = delay
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.url


@pytest.fixture
def fake_fallback():
    return FakeFallback


@pytest.fixture
def fake_images():
    return FakeImages
