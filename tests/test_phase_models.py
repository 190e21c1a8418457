from __future__ import annotations

import pytest
from pydantic import ValidationError

from fakes import phase1_payload, phase2_payload
from models.phases import Phase1ContentOutput, Phase2DesignOutput


def test_phase1_payload_validates() -> None:
    output = Phase1ContentOutput.model_validate(phase1_payload(10))
    assert len(output.slides) == 10
    assert output.slides[3].slideIntent == "stats"
    assert output.slides[3].dataPoints == ["95%", "10x"]


def test_phase1_intent_is_normalized() -> None:
    payload = phase1_payload()
    payload["slides"][0]["slideIntent"] = "  Title "
    assert Phase1ContentOutput.model_validate(payload).slides[0].slideIntent == "title"


def test_phase1_rejects_unknown_intent() -> None:
    payload = phase1_payload()
    payload["slides"][0]["slideIntent"] = "appendix"
    with pytest.raises(ValidationError):
        Phase1ContentOutput.model_validate(payload)


def test_phase1_rejects_duplicate_slide_numbers() -> None:
    payload = phase1_payload()
    payload["slides"][1]["slideNumber"] = 1
    with pytest.raises(ValidationError, match="unique"):
        Phase1ContentOutput.model_validate(payload)


def test_phase1_rejects_decreasing_slide_numbers() -> None:
    payload = phase1_payload()
    payload["slides"][0]["slideNumber"], payload["slides"][1]["slideNumber"] = 2, 1
    with pytest.raises(ValidationError, match="increasing"):
        Phase1ContentOutput.model_validate(payload)


def test_phase2_enums_are_normalized_and_visual_defaults_apply() -> None:
    payload = phase2_payload(1)
    payload["slides"][0]["layout"] = "Image-Focus"
    payload["slides"][0]["visualStrategy"] = {"type": "CHART", "detailedPrompt": "bar chart of revenue"}

    slide = Phase2DesignOutput.model_validate(payload).slides[0]

    assert slide.layout == "image-focus"
    assert slide.visualStrategy.type == "chart"
    assert slide.visualStrategy.position == "center"


def test_phase2_rejects_unknown_layout() -> None:
    payload = phase2_payload(1)
    payload["slides"][0]["layout"] = "carousel"
    with pytest.raises(ValidationError):
        Phase2DesignOutput.model_validate(payload)
