"""
Data models for DSA analysis and debugging.

Request and result records exchanged with the HTTP layer. Field names are
camelCase because they are serialized as-is to the frontend.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


IssueType = Literal["error", "warning", "info"]
IssueSeverity = Literal["high", "medium", "low"]


class AnalysisRequest(BaseModel):
    """Request payload for complexity analysis."""
    code: str = Field(..., min_length=1, description="Source code to analyze")
    language: Optional[str] = Field(default=None, description="Language hint, e.g. python")

    @field_validator("code")
    @classmethod
    def code_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Code cannot be empty")
        return value


class DebugRequest(BaseModel):
    """Request payload for debugging."""
    code: str = Field(..., min_length=1, description="Source code to debug")
    language: Optional[str] = Field(default=None, description="Language hint")
    errorMessage: Optional[str] = Field(default=None, description="Error reported by the user")

    @field_validator("code")
    @classmethod
    def code_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Code cannot be empty")
        return value


class AnalysisResult(BaseModel):
    """
    Complexity analysis result.

    Every field is always populated; the coercer fills gaps with defaults.
    """
    timeComplexity: str = Field(default="O(n)", description="Big-O time complexity")
    spaceComplexity: str = Field(default="O(1)", description="Big-O space complexity")
    pattern: str = Field(default="Unknown", description="Dominant algorithmic pattern")
    summary: str = Field(default="", description="Short description of the code")
    intuition: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    timeGraph: list[int] = Field(..., min_length=5, max_length=5)
    spaceGraph: list[int] = Field(..., min_length=5, max_length=5)


class CodeIssue(BaseModel):
    """A single problem found while debugging."""
    line: int = Field(default=0, ge=0, description="Line number, 0 when unattributed")
    type: IssueType = Field(default="info")
    message: str = Field(default="")
    severity: IssueSeverity = Field(default="medium")


class DebugResult(BaseModel):
    """Debugging result. ``code`` echoes the request code verbatim."""
    code: str
    issues: list[CodeIssue] = Field(default_factory=list)
    explanation: str = Field(default="")
    fixSuggestions: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body returned by the HTTP layer."""
    status: str = Field(default="failed")
    error: str = Field(..., description="Error message")
