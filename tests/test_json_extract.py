from __future__ import annotations

import pytest

from utils.json_extract import JSONExtractionError, extract_json_object


def test_extracts_object_from_json_fence() -> None:
    text = 'Sure, here it is:\n```json\n{"deckTitle": "Acme", "slides": [{"n": 1}]}\n```\nAnything else?'
    assert extract_json_object(text) == {"deckTitle": "Acme", "slides": [{"n": 1}]}


def test_extracts_object_from_bare_fence() -> None:
    text = '```\n{"a": 1}\n```'
    assert extract_json_object(text) == {"a": 1}


def test_extracts_object_after_leading_prose() -> None:
    text = 'I created the outline below. {"title": "Deck", "count": 3} Let me know.'
    assert extract_json_object(text) == {"title": "Deck", "count": 3}


def test_nested_braces_and_braces_inside_strings() -> None:
    text = 'x {"outer": {"inner": {"deep": true}}, "note": "a } and a { in text", "q": "say \\"hi\\""} y'
    result = extract_json_object(text)
    assert result["outer"] == {"inner": {"deep": True}}
    assert result["note"] == "a } and a { in text"
    assert result["q"] == 'say "hi"'


def test_skips_non_json_brace_group_before_real_object() -> None:
    text = 'Replace {placeholder} with your value: {"ok": true}'
    assert extract_json_object(text) == {"ok": True}


def test_first_of_several_objects_wins() -> None:
    assert extract_json_object('{"first": 1} and {"second": 2}') == {"first": 1}


def test_no_json_raises_not_found() -> None:
    with pytest.raises(JSONExtractionError) as excinfo:
        extract_json_object("I'm sorry, I can't do that.")
    assert excinfo.value.reason == "not_found"


def test_empty_text_raises_not_found() -> None:
    with pytest.raises(JSONExtractionError) as excinfo:
        extract_json_object("   ")
    assert excinfo.value.reason == "not_found"


def test_truncated_object_raises_incomplete() -> None:
    with pytest.raises(JSONExtractionError) as excinfo:
        extract_json_object('{"slides": [{"slideNumber": 1, "message": "cut off')
    assert excinfo.value.reason == "incomplete"


def test_invalid_json_raises_invalid() -> None:
    with pytest.raises(JSONExtractionError) as excinfo:
        extract_json_object("{slides: [1, 2]}")
    assert excinfo.value.reason == "invalid"


def test_unclosed_prose_brace_before_real_object() -> None:
    text = 'Note: I kept the { placeholder from your outline.\n{"slides": [1]}'
    assert extract_json_object(text) == {"slides": [1]}


def test_unclosed_prose_brace_before_truncated_object_is_incomplete() -> None:
    with pytest.raises(JSONExtractionError) as excinfo:
        extract_json_object('Kept the { marker.\n{"slides": [{"slideNumber": 1}, {"slideNumber": 2')
    assert excinfo.value.reason == "incomplete"
