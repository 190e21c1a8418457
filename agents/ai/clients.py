"""
Text-generation client for deck generation.

One AsyncAnthropic client is built per request from the caller's credential;
nothing is shared between requests.
"""
import json
from typing import Any, Dict, Optional

import anthropic
from anthropic import AsyncAnthropic

from agents.config import DECK_GENERATION_MODEL, MODELS, TEXT_GENERATION_TIMEOUT_SECONDS
from agents.generation.exceptions import (
    MissingCredentialError,
    ResponseParseError,
    UpstreamCallError,
    UpstreamErrorCategory,
)
from setup_logging_optimized import get_logger
from utils.json_extract import JSONExtractionError, extract_json_object

logger = get_logger(__name__)

MISSING_KEY_MESSAGE = "Claude API key not configured. Please add it in Admin Settings."


def resolve_model(model: str) -> str:
    """Map a configured alias to the provider model id."""
    if model in MODELS:
        _, model_name = MODELS[model]
        return model_name
    return model


def _error_body_text(error: "anthropic.APIStatusError") -> str:
    body = getattr(error, "body", None)
    if isinstance(body, (dict, list)):
        return json.dumps(body)
    if isinstance(body, str):
        return body
    try:
        return error.response.text
    except Exception:
        return str(error)


class TextGenerationClient:
    """Single-call wrapper: system instruction + one user message -> text."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DECK_GENERATION_MODEL,
        sdk_client: Any = None,
    ):
        if not api_key and sdk_client is None:
            raise MissingCredentialError("claude_api_key", MISSING_KEY_MESSAGE)
        self.model = resolve_model(model)
        self._client = sdk_client or AsyncAnthropic(api_key=api_key, timeout=TEXT_GENERATION_TIMEOUT_SECONDS)

    async def complete(self, system: str, user_message: str, max_tokens: int, label: str = "") -> str:
        """Issue one request and return the concatenated text blocks.

        Raises UpstreamCallError for non-2xx or connection failures and
        ResponseParseError when the response carries no text.
        """
        context = {"model": self.model, "label": label} if label else {"model": self.model}
        prompt_chars = len(system) + len(user_message)
        logger.info(f"[TEXTGEN]{' [' + label + ']' if label else ''} Calling {self.model} "
                    f"(~{prompt_chars // 4} prompt tokens, max_tokens={max_tokens})")

        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                system=system,
                messages=[{"role": "user", "content": user_message}],
            )
        except anthropic.APIStatusError as e:
            body_text = _error_body_text(e)
            logger.error(f"[TEXTGEN] {label or 'request'} failed with HTTP {e.status_code}: {body_text[:300]}")
            raise UpstreamCallError.from_response(e.status_code, body_text, cause=e, context=context) from e
        except anthropic.APIConnectionError as e:
            logger.error(f"[TEXTGEN] {label or 'request'} could not reach the AI service: {e}")
            raise UpstreamCallError(
                "Failed to connect to AI service. Please check your internet connection and try again. "
                f"Error: {e}",
                category=UpstreamErrorCategory.CONNECTION,
                cause=e,
                context=context,
            ) from e

        blocks = getattr(response, "content", None) or []
        text = "".join(
            getattr(block, "text", "") or ""
            for block in blocks
            if getattr(block, "type", "text") == "text"
        )
        if not text:
            raise ResponseParseError(
                "Unexpected response from AI service. Please try again.",
                raw_response=repr(response),
                context=context,
            )
        return text

    async def complete_json(self, system: str, user_message: str, max_tokens: int, label: str = "") -> Dict[str, Any]:
        """complete() followed by extraction of the first JSON object in the text."""
        text = await self.complete(system, user_message, max_tokens, label=label)
        try:
            return extract_json_object(text)
        except JSONExtractionError as e:
            prefix = f"{label}: " if label else ""
            logger.error(f"[TEXTGEN] {prefix}{e} (response head: {text[:200]!r})")
            raise ResponseParseError(f"{prefix}{e}", raw_response=text, cause=e) from e
