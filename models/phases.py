"""
Intermediate outputs of the multi-phase deck pipeline.

Field names mirror the JSON the text-generation service is asked to return,
so model output can be validated directly with model_validate().
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

SlideIntent = Literal["title", "problem", "solution", "stats", "process", "comparison", "case-study", "cta"]
SlideLayout = Literal["title", "image-focus", "split", "stats", "content"]
BackgroundKind = Literal["gradient", "solid", "pattern"]
VisualType = Literal["illustration", "diagram", "chart", "infographic", "photo", "icon-set"]
VisualPosition = Literal["background", "center", "right", "left", "split"]
HeadlineSize = Literal["huge", "large", "medium"]


def _lower(value):
    return value.strip().lower() if isinstance(value, str) else value


class ContentSlide(BaseModel):
    """One slide's message as decided by the content strategist (Phase 1)."""
    slideNumber: int = Field(..., ge=1, description="1-based position in the deck")
    message: str = Field(..., description="The ONE core idea of the slide")
    supportingText: Optional[str] = Field(None, description="Optional 1-2 sentences of context")
    dataPoints: Optional[List[str]] = Field(None, description="Stats or numbers backing the message")
    slideIntent: SlideIntent = Field(..., description="Rhetorical purpose of the slide")

    @field_validator("slideIntent", mode="before")
    @classmethod
    def normalize_intent(cls, value):
        return _lower(value)


class Phase1ContentOutput(BaseModel):
    deckTitle: str
    deckDescription: str = ""
    slides: List[ContentSlide] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_numbering(self) -> "Phase1ContentOutput":
        numbers = [s.slideNumber for s in self.slides]
        if len(set(numbers)) != len(numbers):
            raise ValueError(f"slideNumber values must be unique, got {numbers}")
        if numbers != sorted(numbers):
            raise ValueError(f"slideNumber values must be increasing, got {numbers}")
        return self


class VisualStrategy(BaseModel):
    type: VisualType = "illustration"
    description: str = ""
    detailedPrompt: str = Field("", description="Very detailed image-generation prompt")
    position: VisualPosition = "center"
    style: str = ""

    @field_validator("type", "position", mode="before")
    @classmethod
    def normalize_enums(cls, value):
        return _lower(value)


class Typography(BaseModel):
    headline: str
    headlineSize: HeadlineSize = "large"
    subtext: Optional[str] = None
    emphasizedNumbers: Optional[List[str]] = None

    @field_validator("headlineSize", mode="before")
    @classmethod
    def normalize_enums(cls, value):
        return _lower(value)


class ColorScheme(BaseModel):
    primary: str
    accent: str
    background: str


class DesignSlide(BaseModel):
    """Layout and visual decisions for one slide (Phase 2)."""
    slideNumber: int = Field(..., ge=1)
    layout: SlideLayout
    background: BackgroundKind = "gradient"
    visualStrategy: Optional[VisualStrategy] = None
    typography: Typography
    colorScheme: Optional[ColorScheme] = None

    @field_validator("layout", "background", mode="before")
    @classmethod
    def normalize_enums(cls, value):
        return _lower(value)


class Phase2DesignOutput(BaseModel):
    slides: List[DesignSlide] = Field(..., min_length=1)


class ImageSlide(BaseModel):
    slideNumber: int
    imageUrl: Optional[str] = None
    fallbackUrl: Optional[str] = None


class Phase3ImageOutput(BaseModel):
    slides: List[ImageSlide] = Field(default_factory=list)
