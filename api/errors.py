"""Mapping of generation errors onto HTTP responses."""
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse

from agents.generation.exceptions import (
    AlignmentError,
    GenerationError,
    MissingCredentialError,
    PhaseError,
    ResponseParseError,
    UpstreamCallError,
)
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

PARSE_ERROR_MESSAGE = "Failed to parse AI response"


def error_response(status_code: int, error: str, details: Optional[Any] = None) -> JSONResponse:
    body: Dict[str, Any] = {"error": error}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def generation_error_response(exc: GenerationError) -> JSONResponse:
    """Status and body for a failed generation request."""
    root = exc.cause if isinstance(exc, PhaseError) and isinstance(exc.cause, GenerationError) else exc
    prefix = f"Phase {exc.phase} failed: " if isinstance(exc, PhaseError) else ""

    if isinstance(root, MissingCredentialError):
        return error_response(500, root.user_message)
    if isinstance(root, UpstreamCallError):
        status = root.status_code if root.status_code and root.status_code >= 400 else 502
        return error_response(status, prefix + root.user_message, details=root.body or None)
    if isinstance(root, ResponseParseError):
        return error_response(500, prefix + PARSE_ERROR_MESSAGE, details=root.user_message)
    if isinstance(root, AlignmentError):
        return error_response(502, root.user_message, details=root.context)
    return error_response(500, exc.user_message or "Failed to generate deck")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Keep the {error: ...} body shape for HTTPException too."""
    return error_response(exc.status_code, str(exc.detail))


async def generation_exception_handler(request: Request, exc: GenerationError) -> JSONResponse:
    logger.error(f"[API] {request.url.path} failed: {exc}")
    return generation_error_response(exc)
