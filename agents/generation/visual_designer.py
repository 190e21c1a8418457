"""Phase 2: slide messages -> layout, background, typography and image prompts."""

from typing import Optional

from pydantic import ValidationError

from agents.ai.clients import TextGenerationClient
from agents.config import PHASE2_MAX_TOKENS
from agents.generation.exceptions import ResponseParseError
from agents.prompts.generation.multi_phase_prompts import (
    VISUAL_DESIGNER_SYSTEM_PROMPT,
    build_visual_designer_prompt,
)
from models.deck import BrandColors
from models.phases import Phase1ContentOutput, Phase2DesignOutput
from setup_logging_optimized import get_logger

logger = get_logger(__name__)


class VisualDesigner:
    """Designs one record per Phase 1 slide, in the same order."""

    def __init__(self, client: TextGenerationClient, max_tokens: int = PHASE2_MAX_TOKENS):
        self.client = client
        self.max_tokens = max_tokens

    async def run(self, content: Phase1ContentOutput, brand_colors: Optional[BrandColors] = None) -> Phase2DesignOutput:
        logger.info("[PHASE2] Visual design: creating layouts and image prompts")
        slides = [s.model_dump(exclude_none=True) for s in content.slides]
        palette = None
        if brand_colors is not None:
            palette = {
                "primary": brand_colors.primary,
                "secondary": brand_colors.secondary,
                "accent": brand_colors.accent,
            }

        data = await self.client.complete_json(
            VISUAL_DESIGNER_SYSTEM_PROMPT,
            build_visual_designer_prompt(slides, palette),
            self.max_tokens,
            label="phase2",
        )

        try:
            output = Phase2DesignOutput.model_validate(data)
        except ValidationError as e:
            raise ResponseParseError(
                f"Visual design response has the wrong shape: {e.error_count()} error(s)",
                raw_response=str(data),
                cause=e,
            ) from e

        if len(output.slides) != len(content.slides):
            raise ResponseParseError(
                f"Visual design returned {len(output.slides)} slide(s) for {len(content.slides)} message(s)",
                raw_response=str(data),
                context={"expected": len(content.slides), "received": len(output.slides)},
            )

        with_prompts = sum(1 for s in output.slides if s.visualStrategy and s.visualStrategy.detailedPrompt)
        logger.info(f"[PHASE2] Designed {len(output.slides)} slide(s), {with_prompts} with image prompts")
        return output
