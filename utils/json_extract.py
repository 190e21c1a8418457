"""
Extract the first JSON object embedded in free-form model output.

Models are asked for "JSON only" but routinely wrap it in ```json fences or
lead with a sentence of prose. This is the one place that copes with that.
"""
import json
import re
from typing import Any, Dict, Iterator, Optional, Tuple

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)```", re.DOTALL)
_OBJECT_OPEN_RE = re.compile(r"\{\s*[\"}]")


class JSONExtractionError(ValueError):
    """No usable JSON object in the text"""

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason  # "not_found" | "incomplete" | "invalid"


def _balanced_spans(text: str) -> Iterator[Tuple[int, Optional[int]]]:
    """Yield (start, end) for each top-level {...} candidate in order.

    end is None when the object starting at `start` never closes.
    Braces inside JSON strings (including escaped quotes) are ignored.
    """
    i = text.find("{")
    while i != -1:
        depth = 0
        in_string = False
        escaped = False
        end = None
        for j in range(i, len(text)):
            ch = text[j]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    end = j + 1
                    break
        yield i, end
        # An unclosed brace that does not open a JSON object is prose; keep looking.
        if end is None and _OBJECT_OPEN_RE.match(text, i):
            return
        i = text.find("{", i + 1)


def _first_object(text: str) -> Dict[str, Any]:
    saw_candidate = False
    saw_unclosed = False
    last_error = None
    for start, end in _balanced_spans(text):
        saw_candidate = True
        if end is None:
            saw_unclosed = True
            continue
        try:
            value = json.loads(text[start:end])
        except ValueError as e:
            last_error = e
            continue
        if isinstance(value, dict):
            return value
    if not saw_candidate:
        raise JSONExtractionError("No JSON found in response", reason="not_found")
    if saw_unclosed and last_error is None:
        raise JSONExtractionError(
            "JSON object in response is incomplete (output may have been truncated)",
            reason="incomplete",
        )
    raise JSONExtractionError(f"Response contained invalid JSON: {last_error}", reason="invalid")


def extract_json_object(text: str) -> Dict[str, Any]:
    """Return the first balanced top-level JSON object found in `text`.

    A fenced code block is tried first; if it holds no usable object the
    whole text is scanned.
    """
    if not text or not text.strip():
        raise JSONExtractionError("Empty response", reason="not_found")

    for match in _FENCE_RE.finditer(text):
        try:
            return _first_object(match.group(1))
        except JSONExtractionError:
            continue

    return _first_object(text)
