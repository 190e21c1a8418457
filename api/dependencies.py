"""
Shared FastAPI dependencies.

Tests replace these through app.dependency_overrides.
"""
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

from fastapi import Header, HTTPException

from agents.ai.clients import TextGenerationClient
from agents.core.interfaces import ICredentialProvider, IDeckRepository
from agents.persistence import get_default_credential_provider, get_default_deck_repository


@lru_cache(maxsize=1)
def get_credential_provider() -> ICredentialProvider:
    return get_default_credential_provider()


@lru_cache(maxsize=1)
def get_deck_repository() -> IDeckRepository:
    return get_default_deck_repository()


def get_http_session() -> Optional[Any]:
    """None means every service opens its own aiohttp session."""
    return None


def get_image_options() -> Dict[str, Any]:
    """Extra keyword options for the image provider (poll interval, delays)."""
    return {}


def get_text_client_factory() -> Callable[[Optional[str]], TextGenerationClient]:
    return TextGenerationClient


async def get_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Identity is verified upstream; we only need the caller's id."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id
