"""
Multi-phase deck generation.

Phase 1 (content) -> Phase 2 (design) -> Phase 3 (graphics) -> Phase 4 (assembly),
strictly in sequence. Phase 1/2 failures abort the run; Phase 3 never does.
"""

from typing import Optional

from agents.ai.clients import TextGenerationClient
from agents.generation.content_strategist import ContentStrategist
from agents.generation.deck_assembler import assemble_deck
from agents.generation.exceptions import GenerationError, PhaseError
from agents.generation.graphic_generator import GraphicGenerator
from agents.generation.visual_designer import VisualDesigner
from models.deck import BrandColors, FinalDeck
from models.phases import Phase3ImageOutput
from setup_logging_optimized import get_logger

logger = get_logger(__name__)


class MultiPhaseDeckGenerator:

    def __init__(self, client: TextGenerationClient, graphics: Optional[GraphicGenerator] = None):
        self.content_strategist = ContentStrategist(client)
        self.visual_designer = VisualDesigner(client)
        self.graphics = graphics or GraphicGenerator()

    async def generate(
        self,
        user_content: str,
        reference_materials: str = "",
        instructions: Optional[str] = None,
        brand_colors: Optional[BrandColors] = None,
    ) -> FinalDeck:
        logger.info("[MULTIPHASE] Starting multi-phase deck generation")

        try:
            content = await self.content_strategist.run(user_content, reference_materials, instructions)
        except GenerationError as e:
            logger.error(f"[MULTIPHASE] Phase 1 failed: {e}")
            raise PhaseError(1, e) from e

        try:
            design = await self.visual_designer.run(content, brand_colors)
        except GenerationError as e:
            logger.error(f"[MULTIPHASE] Phase 2 failed: {e}")
            raise PhaseError(2, e) from e

        try:
            images = await self.graphics.generate_for_designs(design)
        except Exception as e:
            # Enrichment only: assemble without images
            logger.error(f"[PHASE3] Graphic generation crashed, continuing without images: {e}", exc_info=True)
            images = Phase3ImageOutput()

        deck = assemble_deck(content, design, images, brand_colors)
        logger.info(f"[MULTIPHASE] Complete: '{deck.name}' with {len(deck.slides)} slide(s)")
        return deck
