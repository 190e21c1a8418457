"""Storage and credential collaborators for deck generation."""

from .credentials import (
    EnvCredentialProvider,
    StaticCredentialProvider,
    SupabaseCredentialProvider,
    get_default_credential_provider,
)
from .deck_repository import InMemoryDeckRepository, SupabaseDeckRepository, get_default_deck_repository

__all__ = [
    "EnvCredentialProvider",
    "SupabaseCredentialProvider",
    "StaticCredentialProvider",
    "get_default_credential_provider",
    "InMemoryDeckRepository",
    "SupabaseDeckRepository",
    "get_default_deck_repository",
]
