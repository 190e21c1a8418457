from __future__ import annotations

import asyncio

import pytest

from agents.generation.exceptions import PhaseError, ResponseParseError, UpstreamCallError
from agents.generation.graphic_generator import GraphicGenerator
from agents.generation.multi_phase_generator import MultiPhaseDeckGenerator
from fakes import (
    FakeImageProvider,
    as_json_reply,
    client_with,
    failing,
    make_status_error,
    phase1_payload,
    phase2_payload,
)
from models.deck import BrandColors

ACME = "Acme Corp sells rockets. We cut launch costs by 95% and ship 10x faster."


class CrashingGraphics(GraphicGenerator):
    async def generate_for_designs(self, design):
        raise RuntimeError("provider exploded")


def test_acme_deck_end_to_end() -> None:
    client, fake = client_with(as_json_reply(phase1_payload(10)), as_json_reply(phase2_payload(10)))
    images = FakeImageProvider()

    deck = asyncio.run(MultiPhaseDeckGenerator(client, GraphicGenerator(images)).generate(ACME))

    assert 8 <= len(deck.slides) <= 12
    assert all(s.title for s in deck.slides)
    assert deck.theme.colors.primary == "#112233"
    assert all(s.imageUrl for s in deck.slides)
    assert len(fake.messages.calls) == 2
    assert ACME in fake.messages.calls[0]["messages"][0]["content"]
    # Phase 2 sees the Phase 1 messages
    assert "Message 10" in fake.messages.calls[1]["messages"][0]["content"]


def test_brand_colors_reach_phase2_prompt_and_theme() -> None:
    client, fake = client_with(as_json_reply(phase1_payload()), as_json_reply(phase2_payload()))
    brand = BrandColors(primary="#ff5500", secondary="#0080ff", accent="#333333")

    deck = asyncio.run(MultiPhaseDeckGenerator(client, GraphicGenerator(FakeImageProvider())).generate(
        ACME, brand_colors=brand,
    ))

    assert "Primary: #ff5500" in fake.messages.calls[1]["messages"][0]["content"]
    assert deck.theme.colors == brand


def test_phase1_upstream_error_is_wrapped() -> None:
    client, fake = client_with(make_status_error(429, {"error": {"type": "rate_limit_error", "message": "slow"}}))

    with pytest.raises(PhaseError) as info:
        asyncio.run(MultiPhaseDeckGenerator(client, GraphicGenerator()).generate(ACME))

    assert info.value.phase == 1
    assert isinstance(info.value.cause, UpstreamCallError)
    assert info.value.cause.status_code == 429
    assert len(fake.messages.calls) == 1


def test_phase1_unparseable_reply_is_wrapped() -> None:
    client, _ = client_with("I could not do it")
    with pytest.raises(PhaseError) as info:
        asyncio.run(MultiPhaseDeckGenerator(client, GraphicGenerator()).generate(ACME))
    assert info.value.phase == 1
    assert isinstance(info.value.cause, ResponseParseError)


def test_phase2_length_mismatch_fails_phase2() -> None:
    client, _ = client_with(as_json_reply(phase1_payload(8)), as_json_reply(phase2_payload(7)))
    images = FakeImageProvider()

    with pytest.raises(PhaseError) as info:
        asyncio.run(MultiPhaseDeckGenerator(client, GraphicGenerator(images)).generate(ACME))

    assert info.value.phase == 2
    assert images.prompts == []


def test_failed_images_still_produce_the_deck() -> None:
    client, _ = client_with(as_json_reply(phase1_payload()), as_json_reply(phase2_payload()))
    deck = asyncio.run(MultiPhaseDeckGenerator(client, GraphicGenerator(FakeImageProvider(outcome=failing))).generate(ACME))

    assert len(deck.slides) == 8
    assert all(s.imageUrl is None for s in deck.slides)


def test_crashing_graphic_step_is_not_fatal() -> None:
    client, _ = client_with(as_json_reply(phase1_payload()), as_json_reply(phase2_payload()))
    deck = asyncio.run(MultiPhaseDeckGenerator(client, CrashingGraphics()).generate(ACME))
    assert len(deck.slides) == 8
    assert all(s.imageUrl is None for s in deck.slides)
