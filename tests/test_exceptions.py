from __future__ import annotations

import json

import pytest

from agents.generation.exceptions import (
    INVALID_KEY_MESSAGE,
    OVERLOADED_MESSAGE,
    PAYLOAD_TOO_LARGE_MESSAGE,
    RATE_LIMIT_MESSAGE,
    AlignmentError,
    PhaseError,
    ResponseParseError,
    UpstreamCallError,
    UpstreamErrorCategory,
    classify_upstream_error,
)


def _body(error_type: str, message: str) -> str:
    return json.dumps({"type": "error", "error": {"type": error_type, "message": message}})


@pytest.mark.parametrize(
    "status, body, category, message",
    [
        (401, _body("authentication_error", "invalid x-api-key"), UpstreamErrorCategory.AUTH, INVALID_KEY_MESSAGE),
        (401, "unauthorized", UpstreamErrorCategory.AUTH, INVALID_KEY_MESSAGE),
        (429, _body("rate_limit_error", "slow down"), UpstreamErrorCategory.RATE_LIMIT, RATE_LIMIT_MESSAGE),
        (429, "", UpstreamErrorCategory.RATE_LIMIT, RATE_LIMIT_MESSAGE),
        (529, "Overloaded", UpstreamErrorCategory.OVERLOADED, OVERLOADED_MESSAGE),
        (413, _body("request_too_large", "too big"), UpstreamErrorCategory.PAYLOAD_TOO_LARGE, PAYLOAD_TOO_LARGE_MESSAGE),
    ],
)
def test_status_specific_categories(status: int, body: str, category: UpstreamErrorCategory, message: str) -> None:
    assert classify_upstream_error(status, body) == (category, message)


def test_overloaded_error_type_wins_for_other_statuses() -> None:
    category, message = classify_upstream_error(500, _body("overloaded_error", "Overloaded"))
    assert category == UpstreamErrorCategory.OVERLOADED
    assert message == OVERLOADED_MESSAGE


def test_bad_request_with_json_body_names_the_provider_error() -> None:
    category, message = classify_upstream_error(400, _body("invalid_request_error", "max_tokens too large"))
    assert category == UpstreamErrorCategory.MALFORMED_REQUEST
    assert message == "Bad request to Claude API: max_tokens too large (invalid_request_error)"


def test_bad_request_with_text_body_includes_the_response_head() -> None:
    category, message = classify_upstream_error(400, "x" * 500)
    assert category == UpstreamErrorCategory.MALFORMED_REQUEST
    assert message == f"Bad request to Claude API. Status: 400. Response: {'x' * 200}"


def test_other_json_errors_pass_the_provider_message_through() -> None:
    category, message = classify_upstream_error(500, _body("api_error", "Internal server error"))
    assert category == UpstreamErrorCategory.GENERIC
    assert message == "Claude API Error: Internal server error"


def test_other_text_errors_are_generic_passthroughs() -> None:
    category, message = classify_upstream_error(503, "<html>Service Unavailable</html>")
    assert category == UpstreamErrorCategory.GENERIC
    assert message == "API Error (503): <html>Service Unavailable</html>"


def test_upstream_call_error_from_response_keeps_status_and_body() -> None:
    body = _body("rate_limit_error", "slow down")
    error = UpstreamCallError.from_response(429, body)
    assert error.status_code == 429
    assert error.category == UpstreamErrorCategory.RATE_LIMIT
    assert error.user_message == RATE_LIMIT_MESSAGE
    assert error.body == body


def test_phase_error_names_the_phase_and_keeps_the_cause() -> None:
    cause = ResponseParseError("No JSON found in response", raw_response="nope")
    error = PhaseError(2, cause)
    assert error.phase == 2
    assert error.cause is cause
    assert error.user_message == "Phase 2 failed: No JSON found in response"
    assert error.context["phase"] == 2


def test_alignment_error_records_the_mismatch() -> None:
    error = AlignmentError("misaligned", missing=[3], unexpected=[9], duplicates=[1])
    assert error.context == {"missing": [3], "unexpected": [9], "duplicates": [1]}
