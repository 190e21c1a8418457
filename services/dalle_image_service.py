"""DALL-E 3 slide images via the OpenAI images endpoint (single request, no polling)."""

import asyncio
from typing import Any, Dict, List, Optional

from agents.config import (
    DALLE_API_URL,
    DALLE_MODEL,
    DALLE_QUALITY,
    DALLE_SIZE,
    DALLE_STYLE,
    IMAGE_INTER_REQUEST_DELAY_SECONDS,
)
from agents.core.interfaces import IImageProvider
from agents.domain.models import ImageJobResult, ImageJobState
from setup_logging_optimized import get_logger
from utils.http_session import session_scope

logger = get_logger(__name__)


class DalleImageService(IImageProvider):
    """Alternate image provider. Same best-effort contract as Leonardo."""

    name = "dalle"

    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[Any] = None,
        inter_request_delay: float = IMAGE_INTER_REQUEST_DELAY_SECONDS,
        request_timeout: float = 120.0,
        quality: str = DALLE_QUALITY,
        size: str = DALLE_SIZE,
        style: str = DALLE_STYLE,
    ):
        self.api_key = api_key
        self._session = session
        self.inter_request_delay = inter_request_delay
        self.request_timeout = request_timeout
        self.quality = quality
        self.size = size
        self.style = style

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": DALLE_MODEL,
            "prompt": prompt,
            "n": 1,
            "quality": self.quality,
            "size": self.size,
            "style": self.style,
        }

    async def generate_image(self, prompt: str, **options) -> ImageJobResult:
        if not self.is_available:
            return ImageJobResult.skipped("OpenAI API key not configured")
        if not prompt or not prompt.strip():
            return ImageJobResult.skipped("Empty prompt")
        async with session_scope(self._session, self.request_timeout) as session:
            return await self._request(session, prompt)

    async def generate_images(self, prompts: List[str], **options) -> List[ImageJobResult]:
        if not self.is_available:
            logger.warning(f"[DALLE] API key not configured, skipping {len(prompts)} image(s)")
            return [ImageJobResult.skipped("OpenAI API key not configured") for _ in prompts]

        results: List[ImageJobResult] = []
        async with session_scope(self._session, self.request_timeout) as session:
            for i, prompt in enumerate(prompts):
                if i > 0 and self.inter_request_delay > 0:
                    await asyncio.sleep(self.inter_request_delay)
                if not prompt or not prompt.strip():
                    results.append(ImageJobResult.skipped("Empty prompt"))
                    continue
                logger.info(f"[DALLE] Generating image {i + 1}/{len(prompts)}")
                results.append(await self._request(session, prompt))
        return results

    async def _request(self, session: Any, prompt: str) -> ImageJobResult:
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        try:
            async with session.post(DALLE_API_URL, headers=headers, json=self.build_payload(prompt)) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    logger.warning(f"[DALLE] HTTP {resp.status}: {body[:200]}")
                    return ImageJobResult.failed(f"HTTP {resp.status}", attempts=1)
                data = await resp.json()
        except Exception as e:
            logger.warning(f"[DALLE] Request failed: {e}")
            return ImageJobResult.failed(str(e), attempts=1)

        items = (data or {}).get("data") or []
        if not items or not items[0].get("url"):
            logger.warning("[DALLE] No image URL in response")
            return ImageJobResult.failed("No image URL in response", attempts=1)

        return ImageJobResult(
            state=ImageJobState.COMPLETE,
            url=items[0]["url"],
            attempts=1,
            revised_prompt=items[0].get("revised_prompt"),
        )
