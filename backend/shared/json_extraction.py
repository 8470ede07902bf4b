"""
Extraction of JSON objects embedded in free-text model replies.

Model output frequently wraps the requested JSON in prose or markdown fences.
The scanner below walks the reply once, tracking brace depth and JSON string
literals, and records every balanced top-level ``{...}`` region. Exactly one
such region must exist; anything else (no object, an object that never
closes, several candidate objects) is reported as "no object" so callers can
take their fallback path. Stray braces outside a complete object are prose:
a ``}`` before the object and an unclosed ``{`` after it are both ignored.
"""

import json
from typing import Any


def find_object_spans(text: str) -> list[tuple[int, int]] | None:
    """
    Locate balanced top-level ``{...}`` regions in text.

    Braces inside string literals of an open object are ignored, as is any
    text (including stray ``}`` and quotes) outside an object. A region still
    open at the end of the text is dropped once an earlier object has closed.

    Args:
        text: Free text possibly containing JSON

    Returns:
        List of (start, end) slices, or None when the first object is left unclosed
    """
    spans: list[tuple[int, int]] = []
    depth = 0
    start = 0
    in_string = False
    escaped = False

    for index, char in enumerate(text):
        if depth == 0:
            if char == "{":
                start = index
                depth = 1
            continue

        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                spans.append((start, index + 1))

    if depth != 0 and not spans:
        return None
    return spans


def extract_json_object(text: Any) -> dict[str, Any] | None:
    """
    Parse the single JSON object embedded in text.

    Args:
        text: Model reply

    Returns:
        The parsed object, or None if there is not exactly one parseable object
    """
    if not isinstance(text, str) or "{" not in text:
        return None

    spans = find_object_spans(text)
    if not spans or len(spans) != 1:
        return None

    start, end = spans[0]
    try:
        parsed = json.loads(text[start:end])
    except ValueError:
        return None

    if not isinstance(parsed, dict):
        return None
    return parsed
