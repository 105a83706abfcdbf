"""
Coercion of parsed model output into result records.

Two levels of fallback:

- field level: a JSON object with missing or wrong-typed fields still yields a
  result, each gap filled with that field's default;
- document level: text that does not parse to a JSON object yields a fixed
  fallback record.

Neither ``coerce_analysis`` nor ``coerce_debug`` raises.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .growth import generate_growth_curve
from .models import AnalysisResult, CodeIssue, DebugResult


logger = logging.getLogger(__name__)

DEFAULT_TIME_COMPLEXITY = "O(n)"
DEFAULT_SPACE_COMPLEXITY = "O(1)"
DEFAULT_PATTERN = "Unknown"
DEFAULT_ISSUE_TYPE = "info"
DEFAULT_ISSUE_SEVERITY = "medium"

VALID_ISSUE_TYPES = ("error", "warning", "info")
VALID_SEVERITIES = ("high", "medium", "low")


class ResponseParseError(ValueError):
    """Raised when model output is not a JSON object."""


# ---------------------------------------------------------------------------
# Tree queries
# ---------------------------------------------------------------------------


def parse_tree(json_text: str) -> dict[str, Any]:
    """
    Parse JSON text into a generic tree.

    Raises:
        ResponseParseError: If the text is not JSON or not an object
    """
    try:
        tree = json.loads(json_text)
    except (TypeError, ValueError, RecursionError) as exc:
        raise ResponseParseError(f"Invalid JSON: {exc}") from exc
    if not isinstance(tree, dict):
        raise ResponseParseError(f"Expected a JSON object, got {type(tree).__name__}")
    return tree


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def get_str(node: dict[str, Any], key: str, default: str = "") -> str:
    """String field, ``default`` when absent or not a string."""
    value = node.get(key)
    return value if isinstance(value, str) else default


def get_list(node: dict[str, Any], key: str) -> list[Any]:
    """Array field, empty when absent or not an array."""
    value = node.get(key)
    return value if isinstance(value, list) else []


def get_str_list(node: dict[str, Any], key: str) -> list[str]:
    """Array of strings; numbers are stringified, other items dropped."""
    items = (_as_text(item) for item in get_list(node, key))
    return [item for item in items if item is not None]


def get_int(node: dict[str, Any], key: str, default: int = 0) -> int:
    """Integer field. Accepts integral floats and numeric strings."""
    value = node.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _get_choice(node: dict[str, Any], key: str, choices: tuple[str, ...], default: str) -> str:
    value = get_str(node, key).strip().lower()
    return value if value in choices else default


# ---------------------------------------------------------------------------
# Fallback records
# ---------------------------------------------------------------------------


def fallback_analysis() -> AnalysisResult:
    """Fixed result returned when the model reply cannot be used at all."""
    return AnalysisResult(
        timeComplexity=DEFAULT_TIME_COMPLEXITY,
        spaceComplexity=DEFAULT_SPACE_COMPLEXITY,
        pattern=DEFAULT_PATTERN,
        summary="Unable to analyze the code. Please try again.",
        intuition=[
            "Review the problem statement carefully",
            "Identify the core data structures needed",
            "Consider edge cases",
        ],
        suggestions=[
            "Ensure code is syntactically correct",
            "Add comments for clarity",
        ],
        timeGraph=[10, 20, 40, 80, 160],
        spaceGraph=[5, 5, 5, 5, 5],
    )


def fallback_debug(code: str) -> DebugResult:
    """Fixed debug result; ``code`` is still echoed."""
    return DebugResult(
        code=code,
        issues=[
            CodeIssue(
                line=0,
                type="info",
                message="Unable to analyze code. Please check syntax.",
                severity="low",
            )
        ],
        explanation="Unable to perform detailed debugging analysis.",
        fixSuggestions=[
            "Verify code syntax",
            "Check for common errors",
            "Review documentation",
        ],
    )


# ---------------------------------------------------------------------------
# Field-level coercion
# ---------------------------------------------------------------------------


def analysis_from_tree(node: dict[str, Any]) -> AnalysisResult:
    """Build an AnalysisResult from a parsed object, defaulting every gap."""
    time_complexity = get_str(node, "timeComplexity", DEFAULT_TIME_COMPLEXITY)
    space_complexity = get_str(node, "spaceComplexity", DEFAULT_SPACE_COMPLEXITY)

    return AnalysisResult(
        timeComplexity=time_complexity,
        spaceComplexity=space_complexity,
        pattern=get_str(node, "pattern", DEFAULT_PATTERN),
        summary=get_str(node, "summary"),
        intuition=get_str_list(node, "intuition"),
        suggestions=get_str_list(node, "suggestions"),
        timeGraph=generate_growth_curve(time_complexity),
        spaceGraph=generate_growth_curve(space_complexity),
    )


def issue_from_tree(node: dict[str, Any]) -> CodeIssue:
    return CodeIssue(
        line=max(0, get_int(node, "line", 0)),
        type=_get_choice(node, "type", VALID_ISSUE_TYPES, DEFAULT_ISSUE_TYPE),
        message=_as_text(node.get("message")) or "",
        severity=_get_choice(node, "severity", VALID_SEVERITIES, DEFAULT_ISSUE_SEVERITY),
    )


def debug_from_tree(node: dict[str, Any], original_code: str) -> DebugResult:
    """Build a DebugResult from a parsed object, defaulting every gap."""
    issues = [
        issue_from_tree(item)
        for item in get_list(node, "issues")
        if isinstance(item, dict)
    ]
    return DebugResult(
        code=original_code,
        issues=issues,
        explanation=get_str(node, "explanation"),
        fixSuggestions=get_str_list(node, "fixSuggestions"),
    )


# ---------------------------------------------------------------------------
# Document-level entry points
# ---------------------------------------------------------------------------


def coerce_analysis(json_text: str) -> AnalysisResult:
    """
    Coerce JSON text into an AnalysisResult.

    Args:
        json_text: Extracted JSON text

    Returns:
        Coerced result, or the fixed fallback if the text is not a JSON object
    """
    try:
        tree = parse_tree(json_text)
    except ResponseParseError as exc:
        logger.warning("Error parsing analysis response: %s", exc)
        return fallback_analysis()
    return analysis_from_tree(tree)


def coerce_debug(json_text: str, original_code: str) -> DebugResult:
    """
    Coerce JSON text into a DebugResult.

    Args:
        json_text: Extracted JSON text
        original_code: Code from the request, echoed into the result

    Returns:
        Coerced result, or the fixed fallback if the text is not a JSON object
    """
    try:
        tree = parse_tree(json_text)
    except ResponseParseError as exc:
        logger.warning("Error parsing debug response: %s", exc)
        return fallback_debug(original_code)
    return debug_from_tree(tree, original_code)
