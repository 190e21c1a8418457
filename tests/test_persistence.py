from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from agents.persistence import (
    EnvCredentialProvider,
    InMemoryDeckRepository,
    SupabaseCredentialProvider,
    SupabaseDeckRepository,
)

ENV_KEYS = ["ANTHROPIC_API_KEY", "LEONARDO_API_KEY", "ICONKIT_API_KEY", "OPENAI_API_KEY", "CLAUDE_SYSTEM_PROMPT"]


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.filters: Dict[str, Any] = {}

    def select(self, columns: str) -> "FakeQuery":
        return self

    def in_(self, column: str, values: List[str]) -> "FakeQuery":
        self.filters[column] = values
        return self

    def insert(self, record: Dict[str, Any]) -> "FakeQuery":
        self.client.inserted.append((self.table, record))
        self.client.rows = [{**record, "id": "deck-1"}]
        return self

    def execute(self) -> Any:
        if self.client.error:
            raise self.client.error
        rows = self.client.rows
        if "key" in self.filters:
            rows = [r for r in rows if r["key"] in self.filters["key"]]
        return SimpleNamespace(data=rows)


class FakeSupabase:
    def __init__(self, rows=None, error: Exception = None) -> None:
        self.rows = rows or []
        self.error = error
        self.inserted: List[Any] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_env_provider_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
    monkeypatch.setenv("LEONARDO_API_KEY", "leo-env")

    credentials = asyncio.run(EnvCredentialProvider().get_credentials())

    assert credentials.anthropic_api_key == "sk-env"
    assert credentials.leonardo_api_key == "leo-env"
    assert credentials.iconkit_api_key is None


def test_admin_settings_win_and_env_fills_gaps(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
    monkeypatch.setenv("ICONKIT_API_KEY", "icon-env")
    client = FakeSupabase(rows=[
        {"key": "claude_api_key", "value": "sk-admin"},
        {"key": "claude_system_prompt", "value": "Be bold."},
        {"key": "leonardo_api_key", "value": ""},
    ])

    credentials = asyncio.run(SupabaseCredentialProvider(client).get_credentials())

    assert credentials.anthropic_api_key == "sk-admin"
    assert credentials.system_prompt_override == "Be bold."
    assert credentials.iconkit_api_key == "icon-env"
    assert credentials.leonardo_api_key is None


def test_unreadable_admin_settings_fall_back_to_env(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
    client = FakeSupabase(error=RuntimeError("permission denied"))

    credentials = asyncio.run(SupabaseCredentialProvider(client).get_credentials())

    assert credentials.anthropic_api_key == "sk-env"


def test_in_memory_repository_round_trip() -> None:
    repository = InMemoryDeckRepository()
    deck = {"name": "Acme", "description": "d", "slides": [{"id": "slide-1", "type": "title"}], "theme": {}}

    async def scenario():
        stored = await repository.save_deck(deck, "user-1")
        await repository.save_deck(deck, "user-2")
        return stored, await repository.get_deck(stored["id"]), await repository.list_decks("user-1")

    stored, fetched, listed = asyncio.run(scenario())

    assert stored["user_id"] == "user-1"
    assert stored["created_at"]
    assert fetched == stored
    assert [d["id"] for d in listed] == [stored["id"]]


def test_supabase_repository_inserts_deck_row() -> None:
    client = FakeSupabase()
    deck = {"name": "Acme", "description": "d", "slides": [], "theme": {"colors": {}}, "logo": "x"}

    stored = asyncio.run(SupabaseDeckRepository(client).save_deck(deck, "user-1"))

    table, row = client.inserted[0]
    assert table == "pitch_decks"
    assert row == {"user_id": "user-1", "name": "Acme", "description": "d", "slides": [], "theme": {"colors": {}}}
    assert stored["id"] == "deck-1"


def test_supabase_repository_insert_failure_propagates() -> None:
    client = FakeSupabase(error=RuntimeError("insert failed"))
    with pytest.raises(RuntimeError, match="insert failed"):
        asyncio.run(SupabaseDeckRepository(client).save_deck({"name": "Acme"}, "user-1"))
