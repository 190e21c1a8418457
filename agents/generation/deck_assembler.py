"""
Deck Assembler (Phase 4)
------------------------
Pure merge of Phase 1/2/3 outputs into the final deck record. No I/O, no
clocks, no randomness: the same inputs always produce the same deck.

Phase outputs are matched by slideNumber, not by array position.
"""

from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from agents.generation.exceptions import AlignmentError
from models.deck import BrandColors, DeckTheme, FinalDeck, GraphicDescriptor, Slide
from models.phases import (
    ContentSlide,
    DesignSlide,
    ImageSlide,
    Phase1ContentOutput,
    Phase2DesignOutput,
    Phase3ImageOutput,
)
from setup_logging_optimized import get_logger
from utils.colors import contrast_ratio, is_light_color, normalize_color

logger = get_logger(__name__)

MIN_TEXT_CONTRAST = 4.5
DARK_TEXT = "#1f2937"
LIGHT_TEXT = "#ffffff"
FALLBACK_SECONDARY = "#7c3aed"

AlignedSlide = Tuple[ContentSlide, DesignSlide, Optional[ImageSlide]]


def _duplicates(numbers: Sequence[int]) -> List[int]:
    return sorted(n for n, count in Counter(numbers).items() if count > 1)


def reconcile_phase_outputs(
    content: Phase1ContentOutput,
    design: Phase2DesignOutput,
    images: Optional[Phase3ImageOutput] = None,
) -> List[AlignedSlide]:
    """Pair every Phase 1 slide with its Phase 2 design and Phase 3 image.

    Raises AlignmentError when the designs do not cover exactly the Phase 1
    slide numbers, or when any phase repeats a number. A Phase 3 entry may be
    missing (image enrichment is optional) and is then treated as absent.
    """
    content_numbers = [s.slideNumber for s in content.slides]
    design_numbers = [s.slideNumber for s in design.slides]
    image_numbers = [s.slideNumber for s in (images.slides if images else [])]

    duplicates = sorted(set(_duplicates(content_numbers) + _duplicates(design_numbers) + _duplicates(image_numbers)))
    expected = set(content_numbers)
    missing = sorted(expected - set(design_numbers))
    unexpected = sorted((set(design_numbers) | set(image_numbers)) - expected)

    if duplicates or missing or unexpected:
        logger.error(f"[ASSEMBLY] Phase outputs misaligned: missing={missing}, "
                     f"unexpected={unexpected}, duplicates={duplicates}")
        raise AlignmentError(
            "Phase outputs do not describe the same slides",
            missing=missing,
            unexpected=unexpected,
            duplicates=duplicates,
        )

    designs: Dict[int, DesignSlide] = {s.slideNumber: s for s in design.slides}
    image_slides: Dict[int, ImageSlide] = {s.slideNumber: s for s in (images.slides if images else [])}
    return [(c, designs[c.slideNumber], image_slides.get(c.slideNumber)) for c in content.slides]


def build_slide(index: int, content: ContentSlide, design: DesignSlide, image: Optional[ImageSlide]) -> Slide:
    typography = design.typography
    fields = {
        "id": f"slide-{index + 1}",
        "type": design.layout,
        "background": design.background,
        "title": typography.headline,
    }

    if design.layout == "title":
        fields["subtitle"] = typography.subtext
    elif design.layout == "stats" and typography.emphasizedNumbers:
        fields["mainStat"] = typography.emphasizedNumbers[0]
        fields["statLabel"] = typography.headline
        fields["supportingStats"] = " • ".join(typography.emphasizedNumbers[1:]) or None
    elif design.layout == "split":
        fields["leftContent"] = content.supportingText or content.message
        fields["layout"] = "50-50"
    elif design.layout == "content":
        if content.dataPoints:
            fields["content"] = "\n".join(f"• {point}" for point in content.dataPoints)
        else:
            fields["content"] = content.supportingText

    if image is not None and image.imageUrl:
        fields["imageUrl"] = image.imageUrl

    strategy = design.visualStrategy
    if strategy is not None:
        fields["graphic"] = GraphicDescriptor(
            type="icon" if strategy.type == "icon-set" else "image",
            prompt=strategy.detailedPrompt or None,
            position=strategy.position,
        )
    return Slide(**fields)


def theme_colors(design: Phase2DesignOutput, brand_colors: Optional[BrandColors] = None) -> BrandColors:
    """Brand colors win; otherwise the first designed slide's scheme."""
    if brand_colors is not None:
        return brand_colors.model_copy()
    scheme = design.slides[0].colorScheme if design.slides else None
    if scheme is None:
        return BrandColors.default()
    return BrandColors(
        primary=scheme.primary,
        secondary=FALLBACK_SECONDARY,
        accent=scheme.accent,
        background="#ffffff",
        text=DARK_TEXT,
    )


def fix_text_contrast(slides: Sequence[Slide]) -> int:
    """Swap unreadable text colors for dark or light text. Returns how many changed."""
    fixed = 0
    for slide in slides:
        text = normalize_color(slide.textColor or "")
        background = normalize_color(slide.backgroundColor or "")
        if not text or not background:
            continue
        if contrast_ratio(text, background) < MIN_TEXT_CONTRAST:
            slide.textColor = DARK_TEXT if is_light_color(background) else LIGHT_TEXT
            fixed += 1
    return fixed


def assemble_deck(
    content: Phase1ContentOutput,
    design: Phase2DesignOutput,
    images: Optional[Phase3ImageOutput] = None,
    brand_colors: Optional[BrandColors] = None,
) -> FinalDeck:
    aligned = reconcile_phase_outputs(content, design, images)
    slides = [build_slide(i, c, d, img) for i, (c, d, img) in enumerate(aligned)]

    fixed = fix_text_contrast(slides)
    if fixed:
        logger.info(f"[ASSEMBLY] Corrected text contrast on {fixed} slide(s)")

    deck = FinalDeck(
        name=content.deckTitle,
        description=content.deckDescription,
        slides=slides,
        theme=DeckTheme(colors=theme_colors(design, brand_colors)),
    )
    logger.info(f"[ASSEMBLY] Assembled '{deck.name}': {len(slides)} slide(s), "
                f"{sum(1 for s in slides if s.imageUrl)} with images")
    return deck
