"""
Credential providers.

Keys come from admin_settings when Supabase is configured, else (or per
missing key) from the environment.
"""
import asyncio
import os
from typing import Any, Dict, Optional

from agents.core.interfaces import ICredentialProvider
from agents.domain.models import GenerationCredentials
from setup_logging_optimized import get_logger
from utils.supabase import fetch_admin_settings, get_supabase_client, is_supabase_configured

logger = get_logger(__name__)

# admin_settings key -> (GenerationCredentials field, env var)
SETTINGS_KEYS = {
    "claude_api_key": ("anthropic_api_key", "ANTHROPIC_API_KEY"),
    "leonardo_api_key": ("leonardo_api_key", "LEONARDO_API_KEY"),
    "iconkit_api_key": ("iconkit_api_key", "ICONKIT_API_KEY"),
    "openai_api_key": ("openai_api_key", "OPENAI_API_KEY"),
    "claude_system_prompt": ("system_prompt_override", "CLAUDE_SYSTEM_PROMPT"),
}


def _mask(value: Optional[str]) -> str:
    return f"{value[:6]}..." if value else "missing"


class StaticCredentialProvider(ICredentialProvider):
    """Fixed credentials, for tests and scripts."""

    def __init__(self, credentials: GenerationCredentials):
        self.credentials = credentials

    async def get_credentials(self) -> GenerationCredentials:
        return self.credentials


class EnvCredentialProvider(ICredentialProvider):

    async def get_credentials(self) -> GenerationCredentials:
        values = {field: os.getenv(env) or None for field, env in SETTINGS_KEYS.values()}
        return GenerationCredentials(**values)


class SupabaseCredentialProvider(ICredentialProvider):
    """Reads admin_settings; any key not stored there falls back to the environment."""

    def __init__(self, client: Any = None):
        self._client = client

    async def get_credentials(self) -> GenerationCredentials:
        settings: Dict[str, Optional[str]] = {}
        try:
            client = self._client or get_supabase_client()
            loop = asyncio.get_running_loop()
            settings = await loop.run_in_executor(None, fetch_admin_settings, list(SETTINGS_KEYS), client)
        except Exception as e:
            logger.warning(f"[CREDENTIALS] Could not read admin_settings, using environment: {e}")

        values = {}
        for key, (field, env) in SETTINGS_KEYS.items():
            values[field] = settings.get(key) or os.getenv(env) or None
        credentials = GenerationCredentials(**values)
        logger.debug(f"[CREDENTIALS] claude={_mask(credentials.anthropic_api_key)}, "
                     f"leonardo={_mask(credentials.leonardo_api_key)}, iconkit={_mask(credentials.iconkit_api_key)}")
        return credentials


def get_default_credential_provider() -> ICredentialProvider:
    if is_supabase_configured():
        return SupabaseCredentialProvider()
    return EnvCredentialProvider()
