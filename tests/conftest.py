"""
Shared pytest fixtures for the test suite.
Applies to all subdirectories: unit/, api/
"""

from typing import Optional, Union

import pytest
from fastapi.testclient import TestClient

from app.core.config import DatabaseSettings, GenerationSettings, Settings


VALID_COMPLETION = (
    '{"flashcards": ['
    '{"question": "What is mitosis?", "answer": "Cell division producing two identical cells."},'
    '{"question": "What is a chromosome?", "answer": "A DNA molecule carrying genetic information."}'
    "]}"
)


class FakeCompletionClient:
    """Stands in for the completion API; records every prompt it receives."""

    def __init__(self, reply: Union[str, Exception] = VALID_COMPLETION) -> None:
        self.reply = reply
        self.prompts: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


# ── Completion client fixture ────────────────────────────────────────────────

@pytest.fixture
def fake_completion():
    return FakeCompletionClient()


# ── Application fixtures ─────────────────────────────────────────────────────

def _make_settings(tmp_path, persist_degraded: bool = True) -> Settings:
    return Settings(
        database=DatabaseSettings(
            DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
            DB_AUTO_CREATE=True,
        ),
        generation=GenerationSettings(GENERATION_PERSIST_DEGRADED=persist_degraded),
    )


@pytest.fixture
def make_client(tmp_path):
    """Build a TestClient over a fresh SQLite database with a given completion client."""
    opened: list[TestClient] = []

    def _make(
        completion: Optional[FakeCompletionClient] = None,
        *,
        persist_degraded: bool = True,
    ) -> TestClient:
        from main import create_app

        app = create_app(
            settings=_make_settings(tmp_path, persist_degraded),
            completion_client=completion or FakeCompletionClient(),
        )
        client = TestClient(app)
        client.__enter__()
        opened.append(client)
        return client

    yield _make

    for client in opened:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, fake_completion):
    return make_client(fake_completion)


@pytest.fixture
def note_id(client):
    """Create a note through the API and return its id."""
    r = client.post(
        "/api/notes",
        json={"title": "Biology", "content": "Mitosis is how a cell divides into two."},
    )
    assert r.status_code == 201
    return r.json()["note"]["id"]
