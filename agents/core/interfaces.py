"""
Interfaces for the collaborators the generation core depends on.

Design principles:
- Small, focused interfaces
- The core never reaches for storage, identity or provider SDKs directly
- Every collaborator can be swapped for a fake in tests
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from agents.domain.models import GenerationCredentials, ImageJobResult


class ICredentialProvider(ABC):
    """Supplies the API keys a generation request needs"""

    @abstractmethod
    async def get_credentials(self) -> GenerationCredentials:
        pass


class IDeckRepository(ABC):
    """Persists a finished deck record"""

    @abstractmethod
    async def save_deck(self, deck: Dict[str, Any], user_id: str) -> Dict[str, Any]:
        """Store the deck and return the stored record (with its id)"""
        pass


class IImageProvider(ABC):
    """Renders one prompt into one image URL, best-effort"""

    name: str = "image"

    @property
    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    async def generate_image(self, prompt: str, **options) -> ImageJobResult:
        """Never raises for provider failures; returns a non-COMPLETE result instead"""
        pass

    async def generate_images(self, prompts: List[str], **options) -> List[ImageJobResult]:
        """One result per prompt, same order"""
        results = []
        for prompt in prompts:
            results.append(await self.generate_image(prompt, **options))
        return results


class IIconProvider(ABC):
    """Renders one prompt into one icon URL, best-effort"""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    async def generate_icon(
        self,
        prompt: str,
        style: Optional[str] = None,
        color: Optional[str] = None,
        format: Optional[str] = None,
    ) -> ImageJobResult:
        pass

    async def generate_icons(self, prompts: List[str], **options) -> List[ImageJobResult]:
        """One result per prompt, same order; requests are independent"""
        return list(await asyncio.gather(*(self.generate_icon(p, **options) for p in prompts)))
