"""
Domain models representing core generation concepts.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List


class GenerationMode(str, Enum):
    """Which single-phase prompt template pair drives a request."""
    STRICT = "strict"                              # build only: pure format conversion
    STRICT_WITH_GRAPHICS = "strict_with_graphics"  # build only + suggest graphics for unlabeled slides
    CREATIVE = "creative"                          # full creative generation

    @classmethod
    def from_flags(cls, build_only: bool, fill_missing_graphics: bool) -> "GenerationMode":
        if build_only and fill_missing_graphics:
            return cls.STRICT_WITH_GRAPHICS
        if build_only:
            return cls.STRICT
        # fill_missing_graphics alone has no effect: creative mode already adds graphics
        return cls.CREATIVE


class GraphicKind(str, Enum):
    IMAGE = "image"
    ICON = "icon"


class ImageJobState(str, Enum):
    """Lifecycle of one image-generation job."""
    SUBMITTED = "submitted"
    POLLING = "polling"
    COMPLETE = "complete"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"  # never submitted (no credential / empty prompt)

    @property
    def is_terminal(self) -> bool:
        return self not in (ImageJobState.SUBMITTED, ImageJobState.POLLING)


@dataclass
class ImageJobResult:
    """Outcome of one image or icon request. A missing url is a normal outcome."""
    state: ImageJobState
    url: Optional[str] = None
    id: Optional[str] = None
    job_id: Optional[str] = None
    attempts: int = 0
    error: Optional[str] = None
    revised_prompt: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == ImageJobState.COMPLETE and bool(self.url)

    @classmethod
    def skipped(cls, reason: str) -> "ImageJobResult":
        return cls(state=ImageJobState.SKIPPED, error=reason)

    @classmethod
    def failed(cls, reason: str, **kwargs) -> "ImageJobResult":
        return cls(state=ImageJobState.FAILED, error=reason, **kwargs)


@dataclass
class GraphicRequest:
    """A prompt to render for the slide at `slide_index`."""
    slide_index: int
    prompt: str
    kind: GraphicKind = GraphicKind.IMAGE


@dataclass
class GraphicResult:
    slide_index: int
    kind: GraphicKind
    result: ImageJobResult

    @property
    def url(self) -> Optional[str]:
        return self.result.url if self.result.succeeded else None


@dataclass
class ReferenceFile:
    """An uploaded reference document, already decoded to text."""
    name: str
    content: str


@dataclass
class GenerationCredentials:
    """Per-request credentials supplied by the credential provider."""
    anthropic_api_key: Optional[str] = None
    leonardo_api_key: Optional[str] = None
    iconkit_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    system_prompt_override: Optional[str] = None


@dataclass
class DeckRequest:
    """Everything one deck-generation request carries into the pipeline."""
    content: str
    instructions: Optional[str] = None
    name: Optional[str] = None
    urls: List[str] = field(default_factory=list)
    files: List[ReferenceFile] = field(default_factory=list)
    brand_url: Optional[str] = None
    build_only: bool = False
    fill_missing_graphics: bool = False
    multi_phase: bool = False

    @property
    def mode(self) -> GenerationMode:
        return GenerationMode.from_flags(self.build_only, self.fill_missing_graphics)
