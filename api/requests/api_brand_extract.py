"""POST /api/brand-extract"""
from typing import Any

from fastapi import APIRouter, Depends

from agents.tools.theme.brand_asset_extractor import BrandAssetExtractor
from api.dependencies import get_http_session
from api.errors import error_response
from models.deck import BrandAssets
from models.requests import BrandExtractRequest

router = APIRouter(prefix="/api", tags=["Brand"])


@router.post("/brand-extract", response_model=BrandAssets, response_model_exclude_none=True)
async def brand_extract(request: BrandExtractRequest, session: Any = Depends(get_http_session)):
    if not request.url or not request.url.strip():
        return error_response(400, "URL is required")
    return await BrandAssetExtractor(session=session).extract(request.url)
