"""Theme-specific tools for brand research."""

from .brand_asset_extractor import BrandAssetExtractor, normalize_url

__all__ = [
    "BrandAssetExtractor",
    "normalize_url",
]
