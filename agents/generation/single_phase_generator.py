"""
Single-phase deck generation: one large prompt, one text-generation call,
then the shared graphic step on whatever graphics the model proposed.
"""

import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from agents.ai.clients import TextGenerationClient
from agents.config import DEFAULT_BRAND_COLORS, SINGLE_PHASE_MAX_TOKENS
from agents.domain.models import GenerationMode, GraphicKind, GraphicRequest
from agents.generation.deck_assembler import fix_text_contrast
from agents.generation.exceptions import ResponseParseError
from agents.generation.graphic_generator import GraphicGenerator
from agents.prompts.generation.single_phase_prompts import build_single_phase_prompts
from models.deck import BrandAssets, BrandColors, DeckTheme, FinalDeck, GraphicDescriptor, Slide
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

UNTITLED_DECK = "Untitled Deck"
DEFAULT_THEME_FONT = "Inter"
TEXT_FIELDS = ("title", "subtitle", "mainStat", "statLabel", "supportingStats", "leftContent", "content")


def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip().lower()


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _coerce_text(value: Any) -> Any:
    """Flatten bullet lists and bare numbers into slide text; anything else is left for validation."""
    if _is_scalar(value) and not isinstance(value, str):
        return str(value)
    if isinstance(value, list) and all(_is_scalar(item) for item in value):
        return "\n".join(f"• {item}" for item in value)
    return value


def _coerce_graphic(raw: Any) -> Optional[GraphicDescriptor]:
    if not isinstance(raw, dict):
        return None
    prompt = raw.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        return None
    kind = "icon" if str(raw.get("type", "")).lower() == "icon" else "image"
    position = raw.get("position") if isinstance(raw.get("position"), str) else None
    return GraphicDescriptor(type=kind, prompt=prompt.strip(), position=position)


def _coerce_theme(raw: Any) -> DeckTheme:
    if not isinstance(raw, dict):
        return DeckTheme(colors=BrandColors.default(), fontFamily=DEFAULT_THEME_FONT)
    colors = raw.get("colors") if isinstance(raw.get("colors"), dict) else {}
    merged = {key: colors.get(key) or default for key, default in DEFAULT_BRAND_COLORS.items()}
    font = raw.get("fontFamily") if isinstance(raw.get("fontFamily"), str) else DEFAULT_THEME_FONT
    return DeckTheme(colors=BrandColors(**merged), fontFamily=font)


class SinglePhaseDeckGenerator:
    """Prompt template chosen by GenerationMode; graphics filled best-effort."""

    def __init__(self, client: TextGenerationClient, graphics: Optional[GraphicGenerator] = None,
                 max_tokens: int = SINGLE_PHASE_MAX_TOKENS):
        self.client = client
        self.graphics = graphics or GraphicGenerator()
        self.max_tokens = max_tokens

    async def generate(
        self,
        content: str,
        mode: GenerationMode,
        reference_materials: str = "",
        instructions: Optional[str] = None,
        brand_assets: Optional[BrandAssets] = None,
        system_prompt_override: Optional[str] = None,
    ) -> FinalDeck:
        logger.info(f"[SINGLEPHASE] Generating deck in {mode.value} mode")
        system, user = build_single_phase_prompts(
            mode,
            content,
            instructions=instructions,
            reference_materials=reference_materials,
            system_prompt_override=system_prompt_override,
        )
        data = await self.client.complete_json(system, user, self.max_tokens, label="single-phase")
        deck = self.parse_deck(data)

        if mode == GenerationMode.STRICT:
            self.drop_invented_graphics(deck.slides, content, instructions)

        await self.fill_graphics(deck.slides)

        if brand_assets is not None:
            deck.theme.colors = brand_assets.colors.model_copy()
            if brand_assets.logo:
                deck.logo = brand_assets.logo

        fix_text_contrast(deck.slides)
        logger.info(f"[SINGLEPHASE] Complete: '{deck.name}' with {len(deck.slides)} slide(s)")
        return deck

    def parse_deck(self, data: Dict[str, Any]) -> FinalDeck:
        raw_slides = data.get("slides")
        if not isinstance(raw_slides, list) or not raw_slides:
            raise ResponseParseError("Failed to parse AI response: no slides", raw_response=str(data))

        slides: List[Slide] = []
        for index, raw in enumerate(raw_slides):
            if not isinstance(raw, dict):
                raise ResponseParseError(f"Failed to parse AI response: slide {index + 1} is not an object",
                                         raw_response=str(data))
            fields = dict(raw)
            fields["id"] = f"slide-{index + 1}"
            fields["type"] = fields.get("type") or "content"
            for name in TEXT_FIELDS:
                if name in fields:
                    fields[name] = _coerce_text(fields[name])
            fields["graphic"] = _coerce_graphic(raw.get("graphic"))
            try:
                slides.append(Slide(**fields))
            except ValidationError as e:
                raise ResponseParseError(f"Failed to parse AI response: slide {index + 1} is malformed",
                                         raw_response=str(data), cause=e) from e

        return FinalDeck(
            name=data.get("name") or UNTITLED_DECK,
            description=data.get("description") or "",
            slides=slides,
            theme=_coerce_theme(data.get("theme")),
        )

    def drop_invented_graphics(self, slides: List[Slide], content: str, instructions: Optional[str]) -> None:
        """Build-only mode keeps only graphics the user actually described."""
        source = _squash(f"{content}\n{instructions or ''}")
        for slide in slides:
            if slide.graphic and slide.graphic.prompt and _squash(slide.graphic.prompt) not in source:
                logger.warning(f"[SINGLEPHASE] Dropping graphic on {slide.id} not present in user content")
                slide.graphic = None

    async def fill_graphics(self, slides: List[Slide]) -> None:
        requests = [
            GraphicRequest(
                slide_index=index,
                prompt=slide.graphic.prompt,
                kind=GraphicKind.ICON if slide.graphic.type == "icon" else GraphicKind.IMAGE,
            )
            for index, slide in enumerate(slides)
            if slide.graphic and slide.graphic.prompt
        ]
        if not requests:
            return
        try:
            results = await self.graphics.generate(requests)
        except Exception as e:
            logger.error(f"[SINGLEPHASE] Graphic generation crashed, continuing without graphics: {e}", exc_info=True)
            return
        for result in results:
            if result.url:
                slides[result.slide_index].imageUrl = result.url
