"""
JSON extraction from raw model output.

Models are told to answer with bare JSON but often wrap it in markdown fences
or surround it with commentary. ``extract_json_object`` pulls out the most
plausible JSON object and never raises; parsing the result may still fail.
"""
from __future__ import annotations

import json
import re
from typing import Iterator, Optional


_LEADING_FENCE = re.compile(r"^```[\w+-]*")
_TRAILING_FENCE = re.compile(r"```$")


def _match_brace(text: str, start: int) -> Optional[int]:
    """
    Find the index of the brace closing the object opened at ``start``.

    Braces inside JSON string literals are ignored. Returns None when the
    object is never closed (e.g. a truncated reply).
    """
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def iter_object_candidates(text: str) -> Iterator[str]:
    """
    Yield top-level balanced ``{...}`` spans, ordered by start position.

    Spans never overlap: scanning resumes after the closing brace of the last
    span, so each character is visited once. Stops at the first brace that is
    never closed: everything after it belongs to a truncated object, and its
    inner fragments are not answers.
    """
    start = text.find("{")
    while start != -1:
        end = _match_brace(text, start)
        if end is None:
            return
        yield text[start:end + 1]
        start = text.find("{", end + 1)


def _is_json_object(candidate: str) -> bool:
    try:
        return isinstance(json.loads(candidate), dict)
    except (ValueError, RecursionError):
        return False


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang fence and a trailing ``` fence."""
    text = text.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def extract_json_object(raw: str) -> str:
    """
    Extract the substring most likely to be a single JSON object.

    The first balanced candidate that decodes to an object wins. When no
    candidate decodes, the first balanced one is returned anyway. When nothing
    is balanced, markdown fences are stripped and the remainder returned,
    which for a truncated reply will not parse.

    Args:
        raw: Raw model output

    Returns:
        Best-effort JSON text
    """
    if not raw:
        return ""

    first_balanced: Optional[str] = None
    for candidate in iter_object_candidates(raw):
        if _is_json_object(candidate):
            return candidate
        if first_balanced is None:
            first_balanced = candidate

    if first_balanced is not None:
        return first_balanced

    return strip_code_fences(raw)
