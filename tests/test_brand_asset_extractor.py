from __future__ import annotations

import asyncio

from agents.tools.theme.brand_asset_extractor import BrandAssetExtractor, normalize_url
from fakes import FakeResponse, FakeSession

DEFAULT_PALETTE = {
    "primary": "#2563eb",
    "secondary": "#7c3aed",
    "accent": "#f59e0b",
    "background": "#ffffff",
    "text": "#1f2937",
}

ACME_HTML = """
<html><head>
<title>Acme Rockets | Launch faster</title>
<meta property="og:description" content="Rockets for everyone">
<link rel="icon" href="/static/favicon.png">
<style>:root { --brand-primary: #FF5500; --brand-bg: #ffffff; --accent: rgb(0, 128, 255); }</style>
</head>
<body style="color: #333333">
<img class="site-logo" src="/img/brand.png" alt="Acme">
<img src="/img/hero.jpg">
<img src="//cdn.acme.com/product.jpg">
<img src="/img/icon-star.png">
<img src="/img/hero.jpg">
<img src="/img/diagram.svg">
</body></html>
"""


def test_normalize_url_adds_https() -> None:
    assert normalize_url("acme.com") == "https://acme.com"
    assert normalize_url("http://acme.com") == "http://acme.com"
    assert normalize_url(" https://acme.com/about ") == "https://acme.com/about"


def test_extracts_assets_from_page() -> None:
    session = FakeSession({("GET", "https://acme.com"): FakeResponse(200, text=ACME_HTML)})

    assets = asyncio.run(BrandAssetExtractor(session=session).extract("acme.com"))

    assert assets.colors.primary == "#ff5500"
    assert assets.colors.secondary == "#0080ff"
    assert assets.colors.accent == "#333333"
    assert assets.colors.background == "#ffffff"
    assert assets.colors.text == "#1f2937"
    assert assets.logo == "https://acme.com/img/brand.png"
    assert assets.favicon == "https://acme.com/static/favicon.png"
    assert assets.companyName == "Acme Rockets"
    assert assets.description == "Rockets for everyone"
    assert assets.images == ["https://acme.com/img/hero.jpg", "https://cdn.acme.com/product.jpg"]


def test_unreachable_url_returns_exact_default_palette() -> None:
    assets = asyncio.run(BrandAssetExtractor(session=FakeSession()).extract("https://nowhere.example"))

    assert assets.colors.model_dump() == DEFAULT_PALETTE
    assert assets.images == []
    assert assets.logo is None
    assert assets.companyName is None


def test_http_error_returns_default_palette() -> None:
    session = FakeSession({("GET", "https://acme.com"): FakeResponse(500, text="oops")})
    assets = asyncio.run(BrandAssetExtractor(session=session).extract("https://acme.com"))
    assert assets.colors.model_dump() == DEFAULT_PALETTE
    assert assets.images == []


def test_page_without_colors_keeps_default_palette() -> None:
    html = "<html><head><title>Plain</title></head><body><p>#fff text only</p></body></html>"
    assets = BrandAssetExtractor().parse(html, "https://plain.example")
    assert assets.colors.model_dump() == DEFAULT_PALETTE
    assert assets.companyName == "Plain"
    assert assets.favicon == "https://plain.example/favicon.ico"


def test_site_name_and_og_image_fallbacks() -> None:
    html = """
    <html><head>
    <title>Ignored - Title</title>
    <meta property="og:site_name" content="AcmeCo">
    <meta property="og:image" content="/social/card.png">
    </head><body></body></html>
    """
    assets = BrandAssetExtractor().parse(html, "https://acme.co/about")
    assert assets.companyName == "AcmeCo"
    assert assets.logo == "https://acme.co/social/card.png"


def test_title_is_cut_at_dash() -> None:
    html = "<html><head><title>Globex - Home</title></head></html>"
    assert BrandAssetExtractor().parse(html, "https://globex.example").companyName == "Globex"


def test_at_most_three_colors_and_ten_images() -> None:
    styles = " ".join(f"--c{i}: #{i:02x}5599;" for i in range(10, 20))
    images = "".join(f'<img src="/photos/{i}.jpg">' for i in range(15))
    html = f"<html><head><style>:root {{ {styles} }}</style></head><body>{images}</body></html>"

    assets = BrandAssetExtractor().parse(html, "https://many.example")

    assert [assets.colors.primary, assets.colors.secondary, assets.colors.accent] == ["#0a5599", "#0b5599", "#0c5599"]
    assert len(assets.images) == 10


def test_relative_asset_paths_resolve_against_origin() -> None:
    html = """
    <html><head><link rel="icon" href="favicon.png"></head>
    <body><img class="logo" src="img/logo.png"><img src="photos/launch.jpg"></body></html>
    """
    assets = BrandAssetExtractor().parse(html, "https://acme.com/products/rockets")
    assert assets.logo == "https://acme.com/img/logo.png"
    assert assets.favicon == "https://acme.com/favicon.png"
    assert assets.images == ["https://acme.com/photos/launch.jpg"]
