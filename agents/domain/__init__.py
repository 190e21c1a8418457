"""
Domain models and value objects.
"""

from agents.domain.models import (
    GenerationMode,
    GraphicKind,
    ImageJobState,
    ImageJobResult,
    GraphicRequest,
    GraphicResult,
    ReferenceFile,
    GenerationCredentials,
    DeckRequest,
)

__all__ = [
    "GenerationMode",
    "GraphicKind",
    "ImageJobState",
    "ImageJobResult",
    "GraphicRequest",
    "GraphicResult",
    "ReferenceFile",
    "GenerationCredentials",
    "DeckRequest",
]
