"""IconKit.ai icon generation (single-step request/response)."""

import asyncio
from typing import Any, Dict, List, Optional

from agents.config import (
    ICONKIT_API_URL,
    ICONKIT_DEFAULT_COLOR,
    ICONKIT_DEFAULT_FORMAT,
    ICONKIT_DEFAULT_STYLE,
)
from agents.core.interfaces import IIconProvider
from agents.domain.models import ImageJobResult, ImageJobState
from setup_logging_optimized import get_logger
from utils.http_session import session_scope

logger = get_logger(__name__)

# Fixed concept list for the generic pitch-deck icon set
PITCH_DECK_ICON_CONCEPTS = {
    "growth": "growth chart trending up",
    "target": "target bullseye goal",
    "team": "team people group",
    "innovation": "lightbulb idea innovation",
    "money": "money dollar coin",
    "rocket": "rocket launch startup",
    "graph": "line graph analytics",
    "globe": "globe world global",
    "shield": "shield security protection",
    "check": "checkmark success complete",
}


class IconKitService(IIconProvider):
    """Best-effort IconKit client; failures come back as FAILED results."""

    def __init__(self, api_key: Optional[str] = None, session: Optional[Any] = None, request_timeout: float = 60.0):
        self.api_key = api_key
        self._session = session
        self.request_timeout = request_timeout

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    async def generate_icon(
        self,
        prompt: str,
        style: Optional[str] = None,
        color: Optional[str] = None,
        format: Optional[str] = None,
    ) -> ImageJobResult:
        if not self.is_available:
            return ImageJobResult.skipped("IconKit API key not configured")
        if not prompt or not prompt.strip():
            return ImageJobResult.skipped("Empty prompt")
        async with session_scope(self._session, self.request_timeout) as session:
            return await self._request(session, prompt, style, color, format)

    async def _request(
        self,
        session: Any,
        prompt: str,
        style: Optional[str],
        color: Optional[str],
        format: Optional[str],
    ) -> ImageJobResult:
        payload = {
            "prompt": prompt,
            "style": style or ICONKIT_DEFAULT_STYLE,
            "color": color or ICONKIT_DEFAULT_COLOR,
            "format": format or ICONKIT_DEFAULT_FORMAT,
        }
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        logger.info(f"[ICONKIT] Generating icon: {prompt[:80]}")
        try:
            async with session.post(f"{ICONKIT_API_URL}/generate", headers=headers, json=payload) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    logger.warning(f"[ICONKIT] HTTP {resp.status}: {body[:200]}")
                    return ImageJobResult.failed(f"HTTP {resp.status}", attempts=1)
                data = await resp.json()
        except Exception as e:
            logger.warning(f"[ICONKIT] Request failed: {e}")
            return ImageJobResult.failed(str(e), attempts=1)

        url = (data or {}).get("url")
        if not url:
            logger.warning("[ICONKIT] No icon URL returned")
            return ImageJobResult.failed("No icon URL returned", attempts=1)
        return ImageJobResult(state=ImageJobState.COMPLETE, url=url, id=data.get("id"), attempts=1)

    async def generate_icons(
        self,
        prompts: List[str],
        style: Optional[str] = None,
        color: Optional[str] = None,
        format: Optional[str] = None,
    ) -> List[ImageJobResult]:
        """Parallel; one result per prompt in input order, failures independent."""
        if not self.is_available:
            logger.warning(f"[ICONKIT] API key not configured, skipping {len(prompts)} icon(s)")
            return [ImageJobResult.skipped("IconKit API key not configured") for _ in prompts]

        async with session_scope(self._session, self.request_timeout) as session:
            async def one(prompt: str) -> ImageJobResult:
                if not prompt or not prompt.strip():
                    return ImageJobResult.skipped("Empty prompt")
                return await self._request(session, prompt, style, color, format)

            results = await asyncio.gather(*(one(p) for p in prompts))
        logger.info(f"[ICONKIT] Generated {sum(1 for r in results if r.succeeded)}/{len(prompts)} icon(s)")
        return list(results)

    async def generate_icon_set(self, color: Optional[str] = None, style: Optional[str] = None) -> Dict[str, ImageJobResult]:
        """The fixed pitch-deck set, one concept at a time; failed concepts are left out."""
        icons: Dict[str, ImageJobResult] = {}
        if not self.is_available:
            logger.warning("[ICONKIT] API key not configured, skipping icon set")
            return icons
        async with session_scope(self._session, self.request_timeout) as session:
            for key, concept in PITCH_DECK_ICON_CONCEPTS.items():
                result = await self._request(session, concept, style, color, None)
                if result.succeeded:
                    icons[key] = result
                else:
                    logger.warning(f"[ICONKIT] Failed to generate {key} icon: {result.error}")
        return icons
