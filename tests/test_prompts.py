from __future__ import annotations

import json

from agents.domain.models import GenerationMode
from agents.prompts.generation.multi_phase_prompts import (
    build_content_strategist_prompt,
    build_visual_designer_prompt,
)
from agents.prompts.generation.single_phase_prompts import (
    CREATIVE_SYSTEM_PROMPT,
    PROMPT_TEMPLATES,
    STRICT_SYSTEM_PROMPT,
    build_single_phase_prompts,
)


def test_mode_resolution_from_flags() -> None:
    assert GenerationMode.from_flags(True, True) == GenerationMode.STRICT_WITH_GRAPHICS
    assert GenerationMode.from_flags(True, False) == GenerationMode.STRICT
    assert GenerationMode.from_flags(False, False) == GenerationMode.CREATIVE
    assert GenerationMode.from_flags(False, True) == GenerationMode.CREATIVE


def test_every_mode_has_a_distinct_template() -> None:
    assert set(PROMPT_TEMPLATES) == set(GenerationMode)
    systems = {template.system for template in PROMPT_TEMPLATES.values()}
    assert len(systems) == len(GenerationMode)


def test_user_prompt_embeds_content_instructions_references_and_schema() -> None:
    system, user = build_single_phase_prompts(
        GenerationMode.CREATIVE,
        "Acme Corp sells rockets",
        instructions="Keep it to 8 slides",
        reference_materials="\n\n## Reference Websites:\nFrom https://acme.com:\nWe launch",
    )
    assert system == CREATIVE_SYSTEM_PROMPT
    assert "Acme Corp sells rockets" in user
    assert "## Custom Instructions:\nKeep it to 8 slides" in user
    assert "From https://acme.com:\nWe launch" in user
    assert '"graphic"' in user
    assert "8-12 slides" in user


def test_content_with_braces_is_inserted_verbatim() -> None:
    _, user = build_single_phase_prompts(GenerationMode.STRICT, "Slide 1: {title} and {{x}}")
    assert "Slide 1: {title} and {{x}}" in user


def test_strict_modes_use_exact_instructions_heading() -> None:
    _, user = build_single_phase_prompts(GenerationMode.STRICT, "content", instructions="two columns")
    assert "## User's Exact Instructions & Layout:\ntwo columns" in user
    assert "BUILD ONLY MODE" in user


def test_override_replaces_only_the_creative_system_prompt() -> None:
    system, _ = build_single_phase_prompts(GenerationMode.CREATIVE, "c", system_prompt_override="Be terse.")
    assert system == "Be terse."

    system, _ = build_single_phase_prompts(GenerationMode.STRICT, "c", system_prompt_override="Be terse.")
    assert system == STRICT_SYSTEM_PROMPT

    system, _ = build_single_phase_prompts(GenerationMode.CREATIVE, "c", system_prompt_override="   ")
    assert system == CREATIVE_SYSTEM_PROMPT


def test_content_strategist_prompt_sections() -> None:
    prompt = build_content_strategist_prompt("raw notes", "REFS", "be bold")
    assert prompt.index("CUSTOM INSTRUCTIONS:\nbe bold") < prompt.index("REFERENCE MATERIALS:\nREFS")
    assert prompt.index("REFERENCE MATERIALS:") < prompt.index("USER CONTENT:\nraw notes")
    assert '"slideIntent"' in prompt


def test_visual_designer_prompt_carries_slides_and_brand_colors() -> None:
    slides = [{"slideNumber": 1, "message": "Hello", "slideIntent": "title"}]
    prompt = build_visual_designer_prompt(slides, {"primary": "#ff5500", "secondary": "#0080ff", "accent": "#333333"})
    assert json.dumps(slides, indent=2) in prompt
    assert "Primary: #ff5500" in prompt
    assert "brand colors" in prompt

    without_brand = build_visual_designer_prompt(slides)
    assert "Primary:" not in without_brand
