"""
POST /api/ai/generate-deck

Multipart form in, stored deck record out.
"""
import json
from typing import Any, Callable, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from agents.config import MULTI_PHASE_DEFAULT
from agents.core.interfaces import ICredentialProvider, IDeckRepository
from agents.domain.models import DeckRequest, ReferenceFile
from agents.generation.deck_orchestrator import DeckOrchestrator
from agents.generation.exceptions import GenerationError
from api.dependencies import (
    get_credential_provider,
    get_deck_repository,
    get_http_session,
    get_image_options,
    get_text_client_factory,
    get_user_id,
)
from api.errors import error_response, generation_error_response
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/ai", tags=["Deck Generation"])


def _flag(value: Optional[str], default: bool = False) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() == "true"


def _parse_urls(raw: Optional[str]) -> List[str]:
    """`urls` arrives as a JSON array string."""
    if not raw:
        return []
    urls = json.loads(raw)
    if not isinstance(urls, list):
        raise ValueError("urls must be a JSON array")
    return [str(u) for u in urls if u]


async def _read_files(files: List[UploadFile]) -> List[ReferenceFile]:
    references = []
    for upload in files:
        try:
            raw = await upload.read()
        except Exception as e:
            logger.warning(f"[API] Failed to read {upload.filename}: {e}")
            continue
        references.append(ReferenceFile(
            name=upload.filename or "document",
            content=raw.decode("utf-8", errors="ignore"),
        ))
    return references


@router.post("/generate-deck")
async def generate_deck(
    name: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    instructions: Optional[str] = Form(None),
    buildOnly: Optional[str] = Form(None),
    fillMissingGraphics: Optional[str] = Form(None),
    multiPhase: Optional[str] = Form(None),
    brandUrl: Optional[str] = Form(None),
    urls: Optional[str] = Form(None),
    files: List[UploadFile] = File(default=[]),
    user_id: str = Depends(get_user_id),
    credential_provider: ICredentialProvider = Depends(get_credential_provider),
    repository: IDeckRepository = Depends(get_deck_repository),
    session: Any = Depends(get_http_session),
    image_options: Dict[str, Any] = Depends(get_image_options),
    text_client_factory: Callable = Depends(get_text_client_factory),
):
    if not content or not content.strip():
        return error_response(400, "Content is required")
    try:
        url_list = _parse_urls(urls)
    except ValueError as e:
        return error_response(400, f"Invalid urls field: {e}")

    request = DeckRequest(
        content=content,
        instructions=instructions or None,
        name=name or None,
        urls=url_list,
        files=await _read_files(files),
        brand_url=brandUrl or None,
        build_only=_flag(buildOnly),
        fill_missing_graphics=_flag(fillMissingGraphics),
        multi_phase=_flag(multiPhase, default=MULTI_PHASE_DEFAULT),
    )

    orchestrator = DeckOrchestrator(
        credential_provider,
        repository,
        session=session,
        text_client_factory=text_client_factory,
        image_options=image_options,
    )
    try:
        deck = await orchestrator.generate(request, user_id)
    except GenerationError as e:
        logger.error(f"[API] Deck generation failed for {user_id}: {e}")
        return generation_error_response(e)
    except Exception as e:
        logger.error(f"[API] Failed to save deck for {user_id}: {e}", exc_info=True)
        return error_response(500, "Failed to save deck")

    return JSONResponse(content=deck)
