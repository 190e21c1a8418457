from __future__ import annotations

import asyncio

from agents.domain.models import GenerationCredentials, GraphicKind, GraphicRequest, ImageJobState
from agents.generation.graphic_generator import GraphicGenerator, build_image_provider
from fakes import FakeIconProvider, FakeImageProvider, failing, phase2_payload
from models.phases import Phase2DesignOutput
from services.dalle_image_service import DalleImageService
from services.leonardo_image_service import LeonardoImageService


def design(count: int = 4, prompts: bool = True) -> Phase2DesignOutput:
    return Phase2DesignOutput.model_validate(phase2_payload(count, prompts=prompts))


def test_every_prompted_slide_gets_its_image() -> None:
    images = FakeImageProvider()
    output = asyncio.run(GraphicGenerator(images, FakeIconProvider()).generate_for_designs(design(4)))

    assert [s.slideNumber for s in output.slides] == [1, 2, 3, 4]
    assert [s.imageUrl for s in output.slides] == [
        f"https://img/detailed-prompt-{i}.png" for i in range(1, 5)
    ]
    assert images.prompts == [f"Detailed prompt {i}" for i in range(1, 5)]


def test_slides_without_prompts_get_no_request() -> None:
    payload = phase2_payload(3)
    payload["slides"][1]["visualStrategy"]["detailedPrompt"] = "  "
    del payload["slides"][2]["visualStrategy"]
    images = FakeImageProvider()

    output = asyncio.run(GraphicGenerator(images).generate_for_designs(Phase2DesignOutput.model_validate(payload)))

    assert images.prompts == ["Detailed prompt 1"]
    assert [s.imageUrl is not None for s in output.slides] == [True, False, False]


def test_failed_images_leave_every_slide_without_url() -> None:
    output = asyncio.run(GraphicGenerator(FakeImageProvider(outcome=failing)).generate_for_designs(design(3)))
    assert len(output.slides) == 3
    assert all(s.imageUrl is None for s in output.slides)


def test_missing_image_credential_skips_without_calling_provider() -> None:
    images = FakeImageProvider(available=False)
    results = asyncio.run(GraphicGenerator(images).generate([GraphicRequest(0, "a rocket")]))

    assert images.prompts == []
    assert results[0].result.state == ImageJobState.SKIPPED
    assert results[0].url is None


def test_icon_set_visuals_use_icon_provider_when_available() -> None:
    payload = phase2_payload(2)
    payload["slides"][1]["visualStrategy"]["type"] = "icon-set"
    images, icons = FakeImageProvider(), FakeIconProvider()

    output = asyncio.run(GraphicGenerator(images, icons).generate_for_designs(Phase2DesignOutput.model_validate(payload)))

    assert images.prompts == ["Detailed prompt 1"]
    assert icons.prompts == ["Detailed prompt 2"]
    assert output.slides[1].imageUrl == "https://icon/detailed-prompt-2.png"


def test_icon_set_visuals_fall_back_to_images_without_icon_credential() -> None:
    payload = phase2_payload(1)
    payload["slides"][0]["visualStrategy"]["type"] = "icon-set"
    generator = GraphicGenerator(FakeImageProvider(), FakeIconProvider(available=False))

    requests = generator.requests_for_designs(Phase2DesignOutput.model_validate(payload).slides)

    assert [r.kind for r in requests] == [GraphicKind.IMAGE]


def test_results_follow_request_order_across_kinds() -> None:
    requests = [
        GraphicRequest(2, "chart", GraphicKind.ICON),
        GraphicRequest(0, "hero shot"),
        GraphicRequest(5, "team", GraphicKind.ICON),
    ]
    results = asyncio.run(GraphicGenerator(FakeImageProvider(), FakeIconProvider()).generate(requests))

    assert [(r.slide_index, r.kind) for r in results] == [
        (2, GraphicKind.ICON),
        (0, GraphicKind.IMAGE),
        (5, GraphicKind.ICON),
    ]
    assert results[1].url == "https://img/hero-shot.png"


class ShortImageProvider(FakeImageProvider):
    """Drops the last result of every batch."""

    async def generate_images(self, prompts, **options):
        results = await super().generate_images(prompts, **options)
        return results[:-1]


def test_short_provider_batch_marks_missing_slides_failed() -> None:
    output = asyncio.run(GraphicGenerator(ShortImageProvider()).generate_for_designs(design(3)))

    assert [s.imageUrl for s in output.slides] == [
        "https://img/detailed-prompt-1.png",
        "https://img/detailed-prompt-2.png",
        None,
    ]


def test_short_provider_batch_reports_no_result_returned() -> None:
    requests = [GraphicRequest(0, "hero shot"), GraphicRequest(1, "team photo")]
    results = asyncio.run(GraphicGenerator(ShortImageProvider()).generate(requests))

    assert results[0].url == "https://img/hero-shot.png"
    assert results[1].result.state == ImageJobState.FAILED
    assert results[1].result.error == "No result returned"
    assert results[1].url is None


def test_provider_switch_picks_the_keyed_service() -> None:
    credentials = GenerationCredentials(leonardo_api_key="leo", openai_api_key="oai")

    leonardo = build_image_provider(credentials, "leonardo")
    dalle = build_image_provider(credentials, "dalle")

    assert isinstance(leonardo, LeonardoImageService) and leonardo.api_key == "leo"
    assert isinstance(dalle, DalleImageService) and dalle.api_key == "oai"


def test_from_credentials_without_iconkit_key_cannot_render_icons() -> None:
    generator = GraphicGenerator.from_credentials(GenerationCredentials(leonardo_api_key="leo"))
    assert generator.image_provider.is_available
    assert not generator.can_render_icons


def test_from_credentials_with_every_key(all_credentials: GenerationCredentials) -> None:
    generator = GraphicGenerator.from_credentials(all_credentials, provider="dalle")
    assert isinstance(generator.image_provider, DalleImageService)
    assert generator.can_render_icons
