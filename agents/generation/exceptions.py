"""
Exception hierarchy for deck generation.

Phase 1/2 and single-phase failures are raised and abort the request.
Image/icon enrichment never raises; its outcomes are values (see
agents.domain.models.ImageJobResult).
"""

import json
from enum import Enum
from typing import Optional, Dict, Any, List, Tuple


class GenerationError(Exception):
    """Base exception for all generation errors"""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self):
        parts = [super().__str__()]
        if self.cause:
            parts.append(f" (caused by: {type(self.cause).__name__}: {str(self.cause)})")
        if self.context:
            parts.append(f" Context: {self.context}")
        return "".join(parts)

    @property
    def user_message(self) -> str:
        return self.args[0] if self.args else "Failed to generate deck"


# === Configuration exceptions ===

class ConfigurationError(GenerationError):
    """Configuration error"""
    pass


class MissingCredentialError(ConfigurationError):
    """A credential required for the requested operation is absent"""

    def __init__(self, credential_name: str, message: Optional[str] = None, **kwargs):
        super().__init__(message or f"{credential_name} not configured", **kwargs)
        self.credential_name = credential_name


# === Upstream call exceptions ===

class UpstreamErrorCategory(str, Enum):
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    OVERLOADED = "overloaded"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    MALFORMED_REQUEST = "malformed_request"
    CONNECTION = "connection"
    GENERIC = "generic"


INVALID_KEY_MESSAGE = "Invalid Claude API key. Please update your API key in Admin Settings."
RATE_LIMIT_MESSAGE = "Rate limit reached. Please wait a moment and try again."
OVERLOADED_MESSAGE = "Claude API is currently experiencing high traffic. Please try again in a few moments."
PAYLOAD_TOO_LARGE_MESSAGE = "Content is too large. Please reduce the amount of text, URLs, or uploaded files."


def classify_upstream_error(status_code: Optional[int], body_text: str) -> Tuple[UpstreamErrorCategory, str]:
    """Map a failed text-generation response to a category and a user-facing message.

    The body is parsed as JSON when possible so the provider's error type and
    message can be surfaced; otherwise the first 200 characters are used.
    """
    body_text = body_text or ""
    try:
        error_data = json.loads(body_text)
    except (TypeError, ValueError):
        error_data = None

    if isinstance(error_data, dict):
        error_obj = error_data.get("error") if isinstance(error_data.get("error"), dict) else {}
        error_type = error_obj.get("type")
        api_error = error_obj.get("message") or error_data.get("message") or error_type

        if status_code == 401:
            return UpstreamErrorCategory.AUTH, INVALID_KEY_MESSAGE
        if status_code == 429:
            return UpstreamErrorCategory.RATE_LIMIT, RATE_LIMIT_MESSAGE
        if status_code == 529:
            return UpstreamErrorCategory.OVERLOADED, OVERLOADED_MESSAGE
        if status_code == 413:
            return UpstreamErrorCategory.PAYLOAD_TOO_LARGE, PAYLOAD_TOO_LARGE_MESSAGE
        if status_code == 400:
            message = f"Bad request to Claude API: {api_error or 'Invalid request format'}"
            if error_type:
                message += f" ({error_type})"
            return UpstreamErrorCategory.MALFORMED_REQUEST, message
        if error_type == "overloaded_error":
            return UpstreamErrorCategory.OVERLOADED, OVERLOADED_MESSAGE
        if api_error:
            return UpstreamErrorCategory.GENERIC, f"Claude API Error: {api_error}"
        return UpstreamErrorCategory.GENERIC, "Failed to generate deck with AI"

    if status_code == 401:
        return UpstreamErrorCategory.AUTH, INVALID_KEY_MESSAGE
    if status_code == 429:
        return UpstreamErrorCategory.RATE_LIMIT, RATE_LIMIT_MESSAGE
    if status_code == 529:
        return UpstreamErrorCategory.OVERLOADED, OVERLOADED_MESSAGE
    if status_code == 413:
        return UpstreamErrorCategory.PAYLOAD_TOO_LARGE, PAYLOAD_TOO_LARGE_MESSAGE
    if status_code == 400:
        return (
            UpstreamErrorCategory.MALFORMED_REQUEST,
            f"Bad request to Claude API. Status: {status_code}. Response: {body_text[:200]}",
        )
    return UpstreamErrorCategory.GENERIC, f"API Error ({status_code}): {body_text[:200]}"


class UpstreamCallError(GenerationError):
    """An external service returned a non-success status or could not be reached"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        category: UpstreamErrorCategory = UpstreamErrorCategory.GENERIC,
        body: str = "",
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.category = category
        self.body = body

    @classmethod
    def from_response(cls, status_code: Optional[int], body_text: str, **kwargs) -> "UpstreamCallError":
        category, message = classify_upstream_error(status_code, body_text)
        return cls(message, status_code=status_code, category=category, body=body_text, **kwargs)


# === Response parsing exceptions ===

class ResponseParseError(GenerationError):
    """Model output could not be coerced into the expected JSON shape"""

    def __init__(self, message: str, raw_response: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.raw_response = raw_response


# === Orchestration exceptions ===

class PhaseError(GenerationError):
    """A multi-phase pipeline phase failed; wraps the underlying error"""

    def __init__(self, phase: int, cause: Exception, **kwargs):
        detail = getattr(cause, "user_message", None) or str(cause)
        super().__init__(f"Phase {phase} failed: {detail}", cause=cause, **kwargs)
        self.phase = phase
        self.context.setdefault("phase", phase)


class AlignmentError(GenerationError):
    """Phase outputs do not describe the same set of slides"""

    def __init__(
        self,
        message: str,
        missing: Optional[List[int]] = None,
        unexpected: Optional[List[int]] = None,
        duplicates: Optional[List[int]] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.missing = missing or []
        self.unexpected = unexpected or []
        self.duplicates = duplicates or []
        self.context.update({
            "missing": self.missing,
            "unexpected": self.unexpected,
            "duplicates": self.duplicates,
        })
