"""Heuristic brand asset extraction (colors, logo, name, images) from a website."""

import re
from typing import Any, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from agents.config import (
    BRAND_FETCH_TIMEOUT_SECONDS,
    BRAND_MAX_COLORS,
    BRAND_MAX_IMAGES,
    BROWSER_USER_AGENT,
    DEFAULT_BRAND_COLORS,
)
from models.deck import BrandAssets, BrandColors
from setup_logging_optimized import get_logger
from utils.colors import is_near_white_or_black, normalize_color
from utils.http_session import session_scope

logger = get_logger(__name__)

_CSS_VAR_COLOR_RE = re.compile(r"--[\w-]+\s*:\s*(#[0-9a-fA-F]{6}\b|#[0-9a-fA-F]{3}\b|rgba?\([^)]+\))")
_LITERAL_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}\b|rgba?\(\s*\d+\s*,\s*\d+\s*,\s*\d+[^)]*\)")
_NON_CONTENT_IMAGE_MARKERS = ("logo", "icon", "avatar", "pixel", "1x1", "data:image")


def normalize_url(url: str) -> str:
    """Prefix https:// when the URL carries no scheme."""
    url = (url or "").strip()
    if url.startswith("http://") or url.startswith("https://"):
        return url
    return f"https://{url.lstrip('/')}"


def _origin(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def _resolve(page_url: str, src: str) -> str:
    """Resolve an asset reference against the page origin, not its path."""
    return urljoin(_origin(page_url) + "/", src)


class BrandAssetExtractor:
    """Fetches a page and pulls out plausible brand assets.

    extract() never raises: any network or parse failure yields the default
    palette with no logo, name or images.
    """

    def __init__(self, session: Optional[Any] = None, timeout_seconds: float = BRAND_FETCH_TIMEOUT_SECONDS):
        self._session = session
        self.timeout_seconds = timeout_seconds

    async def extract(self, url: str) -> BrandAssets:
        page_url = normalize_url(url)
        try:
            html = await self._fetch_html(page_url)
            assets = self.parse(html, page_url)
        except Exception as e:
            logger.warning(f"[BRAND] Extraction failed for {page_url}, using default palette: {e}")
            return BrandAssets.default()

        logger.info(
            f"[BRAND] Extracted from {page_url}: primary={assets.colors.primary}, "
            f"logo={'yes' if assets.logo else 'no'}, images={len(assets.images)}, "
            f"company={assets.companyName!r}"
        )
        return assets

    async def _fetch_html(self, url: str) -> str:
        async with session_scope(self._session, self.timeout_seconds) as session:
            return await self._get(session, url)

    async def _get(self, session: Any, url: str) -> str:
        async with session.get(url, headers={"User-Agent": BROWSER_USER_AGENT}) as resp:
            if resp.status != 200:
                raise RuntimeError(f"HTTP {resp.status}")
            return await resp.text(errors="ignore")

    def parse(self, html: str, page_url: str) -> BrandAssets:
        """Pure extraction from already-fetched HTML."""
        soup = BeautifulSoup(html, "html.parser")
        logo = self.extract_logo(soup, page_url)
        return BrandAssets(
            colors=self.extract_colors(html),
            logo=logo,
            favicon=self.extract_favicon(soup, page_url),
            images=self.extract_images(soup, page_url, exclude=logo),
            companyName=self.extract_company_name(soup),
            description=self.extract_description(soup),
        )

    def extract_colors(self, html: str) -> BrandColors:
        candidates = [m.group(1) for m in _CSS_VAR_COLOR_RE.finditer(html)]
        candidates.extend(m.group(0) for m in _LITERAL_COLOR_RE.finditer(html))

        colors: List[str] = []
        for raw in candidates:
            color = normalize_color(raw)
            if not color or color in colors or is_near_white_or_black(color):
                continue
            colors.append(color)
            if len(colors) >= BRAND_MAX_COLORS:
                break

        if not colors:
            return BrandColors.default()
        return BrandColors(
            primary=colors[0],
            secondary=colors[1] if len(colors) > 1 else DEFAULT_BRAND_COLORS["secondary"],
            accent=colors[2] if len(colors) > 2 else DEFAULT_BRAND_COLORS["accent"],
        )

    def extract_logo(self, soup: BeautifulSoup, page_url: str) -> Optional[str]:
        # 1. <img> whose class, id or alt mentions "logo"
        for img in soup.find_all("img"):
            src = img.get("src")
            if not src:
                continue
            classes = img.get("class") or []
            if isinstance(classes, str):
                classes = [classes]
            markers = " ".join(classes + [img.get("id") or "", img.get("alt") or ""]).lower()
            if "logo" in markers:
                return _resolve(page_url, src)

        # 2. <img> whose src mentions "logo"
        for img in soup.find_all("img", src=True):
            if "logo" in img["src"].lower():
                return _resolve(page_url, img["src"])

        # 3. Social card images
        for attrs in ({"property": "og:image"}, {"name": "twitter:image"}):
            meta = soup.find("meta", attrs=attrs)
            if meta and meta.get("content"):
                return _resolve(page_url, meta["content"])
        return None

    def extract_favicon(self, soup: BeautifulSoup, page_url: str) -> str:
        for link in soup.find_all("link", href=True):
            rel = link.get("rel") or []
            rel = " ".join(rel).lower() if isinstance(rel, list) else str(rel).lower()
            if rel in ("icon", "shortcut icon"):
                return _resolve(page_url, link["href"])
        return f"{_origin(page_url)}/favicon.ico"

    def extract_company_name(self, soup: BeautifulSoup) -> Optional[str]:
        meta = soup.find("meta", attrs={"property": "og:site_name"})
        if meta and meta.get("content"):
            return meta["content"].strip()
        if soup.title and soup.title.string:
            name = re.split(r"[|\-]", soup.title.string, maxsplit=1)[0].strip()
            return name or None
        return None

    def extract_description(self, soup: BeautifulSoup) -> Optional[str]:
        for attrs in ({"property": "og:description"}, {"name": "description"}):
            meta = soup.find("meta", attrs=attrs)
            if meta and meta.get("content"):
                return meta["content"].strip()
        return None

    def extract_images(self, soup: BeautifulSoup, page_url: str, exclude: Optional[str] = None) -> List[str]:
        images: List[str] = []
        for img in soup.find_all("img", src=True):
            url = _resolve(page_url, img["src"].strip())
            lowered = url.lower()
            if url == exclude or url in images or lowered.endswith(".svg"):
                continue
            if any(marker in lowered for marker in _NON_CONTENT_IMAGE_MARKERS):
                continue
            images.append(url)
            if len(images) >= BRAND_MAX_IMAGES:
                break
        return images
