"""Phase 1: raw content + references -> one message per slide."""

from typing import Optional

from pydantic import ValidationError

from agents.ai.clients import TextGenerationClient
from agents.config import PHASE1_MAX_TOKENS
from agents.generation.exceptions import ResponseParseError
from agents.prompts.generation.multi_phase_prompts import (
    CONTENT_STRATEGIST_SYSTEM_PROMPT,
    build_content_strategist_prompt,
)
from models.phases import Phase1ContentOutput
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

MIN_SLIDES = 8
MAX_SLIDES = 12


class ContentStrategist:
    """Decides what each slide says. Makes no design decisions."""

    def __init__(self, client: TextGenerationClient, max_tokens: int = PHASE1_MAX_TOKENS):
        self.client = client
        self.max_tokens = max_tokens

    async def run(
        self,
        user_content: str,
        reference_materials: str = "",
        instructions: Optional[str] = None,
    ) -> Phase1ContentOutput:
        """One text-generation call, no retry. Raises GenerationError subclasses."""
        logger.info("[PHASE1] Content strategy: extracting key messages")
        user_prompt = build_content_strategist_prompt(user_content, reference_materials, instructions)
        data = await self.client.complete_json(
            CONTENT_STRATEGIST_SYSTEM_PROMPT,
            user_prompt,
            self.max_tokens,
            label="phase1",
        )

        try:
            output = Phase1ContentOutput.model_validate(data)
        except ValidationError as e:
            raise ResponseParseError(
                f"Content strategy response has the wrong shape: {e.error_count()} error(s)",
                raw_response=str(data),
                cause=e,
            ) from e

        count = len(output.slides)
        if not MIN_SLIDES <= count <= MAX_SLIDES:
            logger.warning(f"[PHASE1] Got {count} slides, outside the {MIN_SLIDES}-{MAX_SLIDES} target")
        logger.info(f"[PHASE1] '{output.deckTitle}' with {count} slide message(s)")
        return output
