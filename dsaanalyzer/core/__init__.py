"""Core module for DSA analysis and debugging."""

from .models import (
    AnalysisRequest,
    AnalysisResult,
    CodeIssue,
    DebugRequest,
    DebugResult,
)
from .pipeline import AnalysisPipeline, DebugPipeline

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "CodeIssue",
    "DebugRequest",
    "DebugResult",
    "AnalysisPipeline",
    "DebugPipeline",
]
