"""
Deck repositories - the hand-off point for finished decks.
"""
import asyncio
import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from agents.core.interfaces import IDeckRepository
from setup_logging_optimized import get_logger
from utils.supabase import get_supabase_client, insert_pitch_deck, is_supabase_configured

logger = get_logger(__name__)


def _row(deck: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    return {
        "user_id": user_id,
        "name": deck.get("name"),
        "description": deck.get("description"),
        "slides": deck.get("slides", []),
        "theme": deck.get("theme"),
    }


class InMemoryDeckRepository(IDeckRepository):
    """Process-local store used when Supabase is not configured, and in tests."""

    def __init__(self):
        self._decks: Dict[str, Dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def save_deck(self, deck: Dict[str, Any], user_id: str) -> Dict[str, Any]:
        record = _row(deck, user_id)
        if deck.get("logo"):
            record["logo"] = deck["logo"]
        record["id"] = str(uuid.uuid4())
        record["created_at"] = datetime.now(timezone.utc).isoformat()
        async with self._lock:
            self._decks[record["id"]] = copy.deepcopy(record)
        logger.info(f"[REPOSITORY] Stored deck {record['id']} in memory for user {user_id}")
        return record

    async def get_deck(self, deck_id: str) -> Optional[Dict[str, Any]]:
        async with self._lock:
            deck = self._decks.get(deck_id)
            return copy.deepcopy(deck) if deck else None

    async def list_decks(self, user_id: str) -> List[Dict[str, Any]]:
        async with self._lock:
            return [copy.deepcopy(d) for d in self._decks.values() if d["user_id"] == user_id]


class SupabaseDeckRepository(IDeckRepository):
    """Inserts into the pitch_decks table. The SDK is blocking, so calls run in the default executor."""

    def __init__(self, client: Any = None):
        self._client = client

    async def save_deck(self, deck: Dict[str, Any], user_id: str) -> Dict[str, Any]:
        client = self._client or get_supabase_client()
        loop = asyncio.get_running_loop()
        stored = await loop.run_in_executor(None, insert_pitch_deck, _row(deck, user_id), client)
        logger.info(f"[REPOSITORY] Stored deck {stored.get('id')} in pitch_decks for user {user_id}")
        return stored


def get_default_deck_repository() -> IDeckRepository:
    if is_supabase_configured():
        return SupabaseDeckRepository()
    logger.warning("[REPOSITORY] Supabase not configured, decks are kept in memory only")
    return InMemoryDeckRepository()
