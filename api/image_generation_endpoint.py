"""
Ad-hoc image and icon generation for the slide editor.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from agents.core.interfaces import ICredentialProvider
from api.dependencies import get_credential_provider, get_http_session, get_image_options
from api.errors import error_response
from models.requests import IconKitGenerateRequest, LeonardoGenerateRequest, LeonardoGenerateResponse
from services.iconkit_service import IconKitService
from services.leonardo_image_service import LeonardoImageService
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Image Generation"])


def _icon_payload(result) -> Dict[str, Any]:
    return {"id": result.id or result.url, "url": result.url}


@router.post("/leonardo/generate", response_model=LeonardoGenerateResponse)
async def leonardo_generate(
    request: LeonardoGenerateRequest,
    credential_provider: ICredentialProvider = Depends(get_credential_provider),
    session: Any = Depends(get_http_session),
    image_options: Dict[str, Any] = Depends(get_image_options),
):
    credentials = await credential_provider.get_credentials()
    if not credentials.leonardo_api_key:
        return error_response(500, "Leonardo API key not configured")
    if not request.prompt:
        return error_response(400, "Prompt is required")

    leonardo = LeonardoImageService(credentials.leonardo_api_key, session=session, **image_options)
    if request.type == "background":
        result = await leonardo.generate_slide_background(request.prompt, request.brandColors)
    elif request.type == "illustration":
        result = await leonardo.generate_illustration(request.prompt, request.style or "flat")
    else:
        result = await leonardo.generate_image(request.prompt, width=1920, height=1080)

    if not result.succeeded:
        logger.warning(f"[LEONARDO] Ad-hoc generation produced no image: {result.state.value} {result.error}")
        return error_response(502, "Failed to generate image", details=result.error)
    return {"imageUrl": result.url}


@router.post("/iconkit/generate")
async def iconkit_generate(
    request: IconKitGenerateRequest,
    credential_provider: ICredentialProvider = Depends(get_credential_provider),
    session: Any = Depends(get_http_session),
):
    credentials = await credential_provider.get_credentials()
    if not credentials.iconkit_api_key:
        return error_response(500, "IconKit API key not configured")
    if not request.prompt:
        return error_response(400, "Prompt is required")

    iconkit = IconKitService(credentials.iconkit_api_key, session=session)
    if request.type == "set":
        icons = await iconkit.generate_icon_set(color=request.color, style=request.style)
        return {key: _icon_payload(result) for key, result in icons.items()}

    if request.type == "theme" and isinstance(request.prompt, list):
        results = await iconkit.generate_icons(request.prompt, style=request.style, color=request.color)
        return [_icon_payload(r) if r.succeeded else None for r in results]

    prompt = request.prompt if isinstance(request.prompt, str) else ", ".join(request.prompt)
    result = await iconkit.generate_icon(prompt, style=request.style, color=request.color)
    if not result.succeeded:
        return error_response(502, "Failed to generate icon", details=result.error)
    return _icon_payload(result)
