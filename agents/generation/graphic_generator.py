"""
Graphic Generator
-----------------
Turns per-slide prompts into image/icon URLs, best-effort.

- Image prompts run sequentially through the configured image provider
  (Leonardo or DALL-E) to stay inside provider rate limits.
- Icon prompts run in parallel through IconKit.
- A missing credential skips that enrichment; nothing here raises for a
  provider failure. Every request gets exactly one result back.
"""

from typing import Any, List, Optional, Sequence

from agents.config import IMAGE_PROVIDER
from agents.core.interfaces import IIconProvider, IImageProvider
from agents.domain.models import (
    GenerationCredentials,
    GraphicKind,
    GraphicRequest,
    GraphicResult,
    ImageJobResult,
)
from models.phases import DesignSlide, ImageSlide, Phase2DesignOutput, Phase3ImageOutput
from services.dalle_image_service import DalleImageService
from services.iconkit_service import IconKitService
from services.leonardo_image_service import LeonardoImageService
from setup_logging_optimized import get_logger

logger = get_logger(__name__)


def build_image_provider(
    credentials: GenerationCredentials,
    provider: str = IMAGE_PROVIDER,
    session: Optional[Any] = None,
    **options,
) -> IImageProvider:
    if provider == "dalle":
        return DalleImageService(api_key=credentials.openai_api_key, session=session, **options)
    return LeonardoImageService(api_key=credentials.leonardo_api_key, session=session, **options)


def _one_per_request(results: List[ImageJobResult], requests: List[GraphicRequest], provider: str) -> List[ImageJobResult]:
    """Pad or cut a provider's results so each request has exactly one."""
    if len(results) == len(requests):
        return results
    logger.warning(f"[GRAPHICS] {provider} returned {len(results)} result(s) for {len(requests)} prompt(s)")
    missing = max(len(requests) - len(results), 0)
    return list(results[: len(requests)]) + [ImageJobResult.failed("No result returned") for _ in range(missing)]


class GraphicGenerator:
    """Best-effort image/icon generation for a list of slide prompts."""

    def __init__(self, image_provider: Optional[IImageProvider] = None, icon_provider: Optional[IIconProvider] = None):
        self.image_provider = image_provider
        self.icon_provider = icon_provider

    @classmethod
    def from_credentials(
        cls,
        credentials: GenerationCredentials,
        provider: str = IMAGE_PROVIDER,
        session: Optional[Any] = None,
        **image_options,
    ) -> "GraphicGenerator":
        return cls(
            image_provider=build_image_provider(credentials, provider, session=session, **image_options),
            icon_provider=IconKitService(api_key=credentials.iconkit_api_key, session=session),
        )

    @property
    def can_render_icons(self) -> bool:
        return bool(self.icon_provider and self.icon_provider.is_available)

    async def generate(self, requests: Sequence[GraphicRequest]) -> List[GraphicResult]:
        """Render every request. Results come back in request order."""
        image_requests = [r for r in requests if r.kind == GraphicKind.IMAGE]
        icon_requests = [r for r in requests if r.kind == GraphicKind.ICON]

        by_request = {}
        for req, result in zip(image_requests, await self._render_images(image_requests)):
            by_request[id(req)] = GraphicResult(slide_index=req.slide_index, kind=req.kind, result=result)
        for req, result in zip(icon_requests, await self._render_icons(icon_requests)):
            by_request[id(req)] = GraphicResult(slide_index=req.slide_index, kind=req.kind, result=result)

        results = [by_request[id(r)] for r in requests]
        produced = sum(1 for r in results if r.url)
        if requests:
            logger.info(f"[GRAPHICS] {produced}/{len(requests)} graphic(s) produced "
                        f"({len(image_requests)} image, {len(icon_requests)} icon)")
        return results

    async def _render_images(self, requests: List[GraphicRequest]) -> List[ImageJobResult]:
        if not requests:
            return []
        if self.image_provider is None or not self.image_provider.is_available:
            name = getattr(self.image_provider, "name", "image")
            logger.warning(f"[GRAPHICS] No {name} credential, {len(requests)} slide(s) will have no image")
            return [ImageJobResult.skipped("Image provider not configured") for _ in requests]
        results = await self.image_provider.generate_images([r.prompt for r in requests])
        return _one_per_request(results, requests, self.image_provider.name)

    async def _render_icons(self, requests: List[GraphicRequest]) -> List[ImageJobResult]:
        if not requests:
            return []
        if not self.can_render_icons:
            logger.warning(f"[GRAPHICS] No IconKit credential, {len(requests)} slide(s) will have no icon")
            return [ImageJobResult.skipped("Icon provider not configured") for _ in requests]
        results = await self.icon_provider.generate_icons([r.prompt for r in requests])
        return _one_per_request(results, requests, "IconKit")

    def requests_for_designs(self, slides: Sequence[DesignSlide]) -> List[GraphicRequest]:
        """One request per slide carrying a detailed prompt.

        icon-set visuals go to the icon service when it is usable, otherwise
        they are rendered as images like everything else.
        """
        requests = []
        for index, slide in enumerate(slides):
            strategy = slide.visualStrategy
            if strategy is None or not strategy.detailedPrompt.strip():
                continue
            kind = GraphicKind.ICON if strategy.type == "icon-set" and self.can_render_icons else GraphicKind.IMAGE
            requests.append(GraphicRequest(slide_index=index, prompt=strategy.detailedPrompt, kind=kind))
        return requests

    async def generate_for_designs(self, design: Phase2DesignOutput) -> Phase3ImageOutput:
        """Phase 3: one entry per design slide, imageUrl absent where nothing was produced."""
        requests = self.requests_for_designs(design.slides)
        logger.info(f"[PHASE3] Rendering {len(requests)} graphic(s) for {len(design.slides)} slide(s)")
        urls = {r.slide_index: r.url for r in await self.generate(requests)}
        return Phase3ImageOutput(slides=[
            ImageSlide(slideNumber=slide.slideNumber, imageUrl=urls.get(index))
            for index, slide in enumerate(design.slides)
        ])
