"""
Deck orchestrator.

Handles one generation request end to end:
- credentials (the text-generation key is a hard precondition)
- brand extraction and reference aggregation
- multi-phase or single-phase generation
- hand-off of the finished record to the deck repository
"""

from typing import Any, Callable, Dict, Optional

from agents.ai.clients import TextGenerationClient
from agents.config import IMAGE_PROVIDER
from agents.core.interfaces import ICredentialProvider, IDeckRepository
from agents.domain.models import DeckRequest, GenerationCredentials
from agents.generation.graphic_generator import GraphicGenerator
from agents.generation.multi_phase_generator import MultiPhaseDeckGenerator
from agents.generation.single_phase_generator import SinglePhaseDeckGenerator
from agents.research.reference_aggregator import ReferenceAggregator
from agents.tools.theme.brand_asset_extractor import BrandAssetExtractor
from models.deck import FinalDeck
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

DEFAULT_DESCRIPTION = "Generated with AI"


class DeckOrchestrator:
    """
    Runs a DeckRequest through the pipeline and stores the result.

    Every collaborator is injectable: the credential provider, the repository,
    the outbound HTTP session, the text client factory and the image options.
    """

    def __init__(
        self,
        credential_provider: ICredentialProvider,
        repository: IDeckRepository,
        session: Optional[Any] = None,
        image_provider: str = IMAGE_PROVIDER,
        text_client_factory: Callable[[Optional[str]], TextGenerationClient] = TextGenerationClient,
        image_options: Optional[Dict[str, Any]] = None,
    ):
        self.credential_provider = credential_provider
        self.repository = repository
        self.session = session
        self.image_provider = image_provider
        self.text_client_factory = text_client_factory
        self.image_options = image_options or {}

    def _graphics(self, credentials: GenerationCredentials) -> GraphicGenerator:
        return GraphicGenerator.from_credentials(
            credentials,
            provider=self.image_provider,
            session=self.session,
            **self.image_options,
        )

    async def build_deck(self, request: DeckRequest) -> FinalDeck:
        """Generate the deck without storing it. Raises GenerationError subclasses."""
        credentials = await self.credential_provider.get_credentials()
        # Fails fast on a missing key, before any network work
        client = self.text_client_factory(credentials.anthropic_api_key)

        brand_assets = None
        if request.brand_url:
            brand_assets = await BrandAssetExtractor(session=self.session).extract(request.brand_url)

        references = await ReferenceAggregator(session=self.session).aggregate(
            request.urls, request.files, brand_assets
        )
        graphics = self._graphics(credentials)

        if request.multi_phase:
            generator = MultiPhaseDeckGenerator(client, graphics)
            deck = await generator.generate(
                request.content,
                reference_materials=references,
                instructions=request.instructions,
                brand_colors=brand_assets.colors if brand_assets else None,
            )
            if brand_assets and brand_assets.logo:
                deck.logo = brand_assets.logo
        else:
            generator = SinglePhaseDeckGenerator(client, graphics)
            deck = await generator.generate(
                request.content,
                request.mode,
                reference_materials=references,
                instructions=request.instructions,
                brand_assets=brand_assets,
                system_prompt_override=credentials.system_prompt_override,
            )

        if request.name:
            deck.name = request.name
        if not deck.description:
            deck.description = DEFAULT_DESCRIPTION
        return deck

    async def generate(self, request: DeckRequest, user_id: str) -> Dict[str, Any]:
        """Generate and store a deck; returns the stored record."""
        logger.info(f"[ORCHESTRATOR] Deck request from {user_id}: multi_phase={request.multi_phase}, "
                    f"mode={request.mode.value}, urls={len(request.urls)}, files={len(request.files)}, "
                    f"brand={'yes' if request.brand_url else 'no'}")
        deck = await self.build_deck(request)
        stored = await self.repository.save_deck(deck.to_record(), user_id)
        logger.info(f"[ORCHESTRATOR] Stored deck '{deck.name}' ({len(deck.slides)} slides)")
        return stored
