"""
Reference aggregation: URLs + uploaded files + brand assets -> one context string.

Every source is best-effort. A URL that cannot be fetched becomes a labeled
placeholder line; nothing here raises for an individual source.
"""
import asyncio
from typing import Any, List, Optional, Sequence

from bs4 import BeautifulSoup

from agents.config import (
    BROWSER_USER_AGENT,
    REFERENCE_FETCH_TIMEOUT_SECONDS,
    REFERENCE_FILE_CHAR_BUDGET,
    REFERENCE_URL_CHAR_BUDGET,
)
from agents.domain.models import ReferenceFile
from models.deck import BrandAssets
from setup_logging_optimized import get_logger
from utils.http_session import session_scope

logger = get_logger(__name__)


def html_to_text(html: str) -> str:
    """Drop script/style/noscript and all markup, collapse whitespace."""
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return " ".join(soup.get_text(" ").split())


def format_brand_assets(brand: BrandAssets) -> str:
    lines = []
    if brand.companyName:
        lines.append(f"Company: {brand.companyName}")
    if brand.description:
        lines.append(f"Description: {brand.description}")
    colors = brand.colors
    lines.append(
        f"Brand colors: primary {colors.primary}, secondary {colors.secondary}, accent {colors.accent}, "
        f"background {colors.background}, text {colors.text}"
    )
    if brand.logo:
        lines.append(f"Logo: {brand.logo}")
    if brand.images:
        lines.append("Brand images:")
        lines.extend(f"- {url}" for url in brand.images)
    return "\n".join(lines)


class ReferenceAggregator:
    """Fetches and normalizes reference material into a single context blob."""

    def __init__(
        self,
        session: Optional[Any] = None,
        url_char_budget: int = REFERENCE_URL_CHAR_BUDGET,
        file_char_budget: int = REFERENCE_FILE_CHAR_BUDGET,
        timeout_seconds: float = REFERENCE_FETCH_TIMEOUT_SECONDS,
    ):
        self._session = session
        self.url_char_budget = url_char_budget
        self.file_char_budget = file_char_budget
        self.timeout_seconds = timeout_seconds

    async def fetch_text(self, session: Any, url: str) -> str:
        """GET `url` and return its visible text, truncated. Raises on failure."""
        async with session.get(url, headers={"User-Agent": BROWSER_USER_AGENT}) as resp:
            if resp.status != 200:
                raise RuntimeError(f"HTTP {resp.status}")
            html = await resp.text(errors="ignore")
        return html_to_text(html)[: self.url_char_budget]

    async def _url_section(self, session: Any, url: str) -> str:
        try:
            text = await self.fetch_text(session, url)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.warning(f"[REFERENCES] Failed to fetch {url}: {message}")
            return f"\nFrom {url}: (Error: {message})\n"
        logger.info(f"[REFERENCES] Fetched {url} ({len(text)} chars)")
        return f"\nFrom {url}:\n{text}\n"

    def _file_section(self, file: ReferenceFile) -> str:
        text = (file.content or "")[: self.file_char_budget]
        return f"\nFrom {file.name}:\n{text}\n"

    async def _fetch_all(self, urls: Sequence[str]) -> List[str]:
        async with session_scope(self._session, self.timeout_seconds) as session:
            return list(await asyncio.gather(*(self._url_section(session, u) for u in urls)))

    async def aggregate(
        self,
        urls: Optional[Sequence[str]] = None,
        files: Optional[Sequence[ReferenceFile]] = None,
        brand_assets: Optional[BrandAssets] = None,
    ) -> str:
        """Build the reference blob.

        Sections come out in a stable order: websites in input order, then
        documents in input order, then brand assets.
        """
        urls = [u for u in (urls or []) if u and u.strip()]
        files = list(files or [])
        parts: List[str] = []

        if urls:
            # Fetched concurrently; gather keeps input order
            sections = await self._fetch_all(urls)
            parts.append("\n\n## Reference Websites:\n")
            parts.extend(sections)

        if files:
            parts.append("\n\n## Reference Documents:\n")
            parts.extend(self._file_section(f) for f in files)

        if brand_assets is not None:
            parts.append("\n\n## Brand Assets:\n")
            parts.append(format_brand_assets(brand_assets) + "\n")

        blob = "".join(parts)
        logger.info(
            f"[REFERENCES] Aggregated {len(urls)} url(s), {len(files)} file(s), "
            f"brand={'yes' if brand_assets else 'no'} -> {len(blob)} chars"
        )
        return blob
