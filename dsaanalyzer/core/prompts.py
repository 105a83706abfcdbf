"""
Prompt templates for DSA analysis and debugging.

Each prompt pins the output schema and embeds one worked example so the model
can copy the shape even when the instructions are ambiguous.
"""
from __future__ import annotations

from .models import AnalysisRequest, DebugRequest


ANALYSIS_EXAMPLE_JSON = """{
  "timeComplexity": "O(n log n)",
  "spaceComplexity": "O(n)",
  "pattern": "Divide & Conquer",
  "summary": "Implements merge sort by dividing and merging arrays.",
  "intuition": [
    "Divide array recursively",
    "Merge halves efficiently",
    "Base case: single element",
    "Extra space for faster sorting"
  ],
  "suggestions": [
    "Use in-place Quick Sort for lower space use",
    "Validate input for null/empty arrays",
    "Implement iterative version to avoid recursion overhead"
  ]
}"""

DEBUG_EXAMPLE_JSON = """{
  "issues": [
    {"line": 6, "type": "error", "message": "Function 'merge' not defined", "severity": "high"},
    {"line": 2, "type": "warning", "message": "No null/undefined input check", "severity": "medium"}
  ],
  "explanation": "Code calls undefined 'merge' function causing runtime error; lacks input validation.",
  "fixSuggestions": [
    "Define 'merge' before use.",
    "Validate input array for null or undefined.",
    "Handle edge cases like empty arrays.",
    "Use try-catch for safe error handling."
  ]
}"""

ANALYSIS_FIELDS = (
    ("timeComplexity", "Big O time complexity"),
    ("spaceComplexity", "Big O space complexity"),
    ("pattern", "Main algorithmic pattern"),
    ("summary", "1-2 sentence description"),
    ("intuition", "4-6 key reasoning points"),
    ("suggestions", "3-5 specific optimization ideas"),
)

DEBUG_PREAMBLE = """You are an expert Code Debugger and Error Analysis AI. Your role is to identify bugs, errors, warnings, and potential issues in code, and provide actionable solutions.

TASK: Debug and thoroughly analyze the following code for all issues."""

DEBUG_REQUIREMENTS = f"""ANALYSIS REQUIREMENTS:
1. Identify all issues:
   - Syntax, runtime, logic, performance, and code quality problems
2. Explain briefly what's wrong and why
3. Give 4-6 concise, actionable fixes

OUTPUT FORMAT (JSON only, no markdown or extra text):
{DEBUG_EXAMPLE_JSON}

GUIDELINES:
- Use accurate line numbers.
- Keep explanations under 3 sentences.
- Use 'error' (high), 'warning' (medium), 'info' (low).
- Avoid verbose or repetitive text.
- Focus on clarity, correctness, and brevity.
- Do not wrap the JSON in markdown code fences."""


def _language_slots(language: str | None, fence_fallback: str) -> tuple[str, str]:
    """Return (spoken name, code fence tag) for an optional language hint."""
    if language:
        return language, language
    return "code", fence_fallback


def build_analysis_prompt(request: AnalysisRequest) -> str:
    """
    Build the analysis prompt for the LLM.

    Args:
        request: Analysis request with code and optional language

    Returns:
        Formatted prompt string
    """
    spoken, fence = _language_slots(request.language, "")
    requirements = "\n".join(
        f"{index}. {name}: {description}"
        for index, (name, description) in enumerate(ANALYSIS_FIELDS, start=1)
    )
    return f"""You are an expert DSA Analyzer AI. Analyze the following {spoken} code and provide a concise DSA analysis.

CODE:
```{fence}
{request.code}
```

REQUIREMENTS:
{requirements}

OUTPUT (JSON only, no markdown or extra text):
{ANALYSIS_EXAMPLE_JSON}

GUIDELINES:
- Keep it accurate, concise, and code-specific
- Focus on efficiency, optimization, and DSA principles
- Mention only the dominant pattern
- Avoid repetition or generic advice
- Do not wrap the JSON in markdown code fences
"""


def build_debug_prompt(request: DebugRequest) -> str:
    """
    Build the debug prompt for the LLM.

    The reported-error section is included only when the request carries a
    non-empty error message.
    """
    _, fence = _language_slots(request.language, "code")
    parts = [
        DEBUG_PREAMBLE,
        f"CODE TO DEBUG:\n```{fence}\n{request.code}\n```",
    ]
    if request.errorMessage:
        parts.append(f"REPORTED ERROR:\n{request.errorMessage}")
    parts.append(DEBUG_REQUIREMENTS)
    return "\n\n".join(parts) + "\n"
