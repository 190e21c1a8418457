from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from agents.config import DEFAULT_BRAND_COLORS, DEFAULT_FONT_FAMILY


class BrandColors(BaseModel):
    """The five-color brand palette."""
    primary: str = DEFAULT_BRAND_COLORS["primary"]
    secondary: str = DEFAULT_BRAND_COLORS["secondary"]
    accent: str = DEFAULT_BRAND_COLORS["accent"]
    background: str = DEFAULT_BRAND_COLORS["background"]
    text: str = DEFAULT_BRAND_COLORS["text"]

    @classmethod
    def default(cls) -> "BrandColors":
        return cls()


class BrandAssets(BaseModel):
    """Brand material extracted from a website. Always fully populated."""
    colors: BrandColors = Field(default_factory=BrandColors.default)
    logo: Optional[str] = Field(None, description="Absolute logo URL")
    favicon: Optional[str] = Field(None, description="Absolute favicon URL")
    images: List[str] = Field(default_factory=list, description="Representative non-icon image URLs")
    companyName: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def default(cls) -> "BrandAssets":
        return cls()


class GraphicDescriptor(BaseModel):
    """What visual was requested for a slide, kept for traceability and regeneration."""
    type: Literal["image", "icon"] = "image"
    prompt: Optional[str] = None
    position: Optional[str] = None


class Slide(BaseModel):
    """
    An assembled slide.

    Single-phase output may carry extra keys proposed by the model
    (e.g. rightContent); they are preserved.
    """
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Stable slide identifier")
    type: str = Field(..., description="Slide layout type")
    background: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    mainStat: Optional[str] = None
    statLabel: Optional[str] = None
    supportingStats: Optional[str] = None
    leftContent: Optional[str] = None
    layout: Optional[str] = None
    content: Optional[str] = None
    imageUrl: Optional[str] = None
    graphic: Optional[GraphicDescriptor] = None
    textColor: Optional[str] = None
    backgroundColor: Optional[str] = None


class DeckTheme(BaseModel):
    colors: BrandColors = Field(default_factory=BrandColors.default)
    fontFamily: str = DEFAULT_FONT_FAMILY


class FinalDeck(BaseModel):
    """The deck record handed to the persistence collaborator."""
    name: str
    description: str = ""
    slides: List[Slide] = Field(default_factory=list)
    theme: DeckTheme = Field(default_factory=DeckTheme)
    logo: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
