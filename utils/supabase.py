import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from supabase import Client, create_client

from setup_logging_optimized import get_logger

# Load environment variables
load_dotenv()

logger = get_logger(__name__)

SUPABASE_URL = os.getenv("SUPABASE_URL")
# Use service key if available, otherwise fall back to anon key
SUPABASE_KEY = os.getenv("SUPABASE_SERVICE_KEY") or os.getenv("SUPABASE_KEY")

DECKS_TABLE = "pitch_decks"
ADMIN_SETTINGS_TABLE = "admin_settings"

_service_client = None


def is_supabase_configured() -> bool:
    return bool(SUPABASE_URL and SUPABASE_KEY)


def get_supabase_client() -> Client:
    """
    Create and return a cached Supabase client instance.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_KEY environment variables are not set
    """
    global _service_client

    if not is_supabase_configured():
        raise ValueError("SUPABASE_URL and SUPABASE_KEY environment variables must be set")

    if _service_client is None:
        _service_client = create_client(SUPABASE_URL, SUPABASE_KEY)

    return _service_client


def reset_supabase_client() -> None:
    """Drop the cached client so the next call builds a fresh connection pool."""
    global _service_client
    _service_client = None
    logger.info("Supabase client has been reset")


def insert_pitch_deck(record: Dict[str, Any], client: Optional[Client] = None) -> Dict[str, Any]:
    """Insert one deck row and return the stored row (blocking)."""
    client = client or get_supabase_client()
    response = client.table(DECKS_TABLE).insert(record).execute()
    rows = response.data or []
    if not rows:
        raise RuntimeError("Insert into pitch_decks returned no row")
    return rows[0]


def fetch_admin_settings(keys: List[str], client: Optional[Client] = None) -> Dict[str, str]:
    """Return {key: value} for the requested admin_settings keys that exist (blocking)."""
    client = client or get_supabase_client()
    response = client.table(ADMIN_SETTINGS_TABLE).select("key, value").in_("key", keys).execute()
    return {row["key"]: row.get("value") for row in (response.data or []) if row.get("key")}
