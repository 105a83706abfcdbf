"""
Analysis and debug pipelines.

prompt -> model -> extract -> parse -> coerce. Every failure along the way
ends in a fallback result; nothing raises past ``run``.
"""
from __future__ import annotations

import logging

from ..providers.base import ContentGenerator
from .coercion import coerce_analysis, coerce_debug, fallback_analysis, fallback_debug
from .extraction import extract_json_object
from .models import AnalysisRequest, AnalysisResult, DebugRequest, DebugResult
from .prompts import build_analysis_prompt, build_debug_prompt


logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """
    Complexity analysis through an LLM.

    Takes an AnalysisRequest, returns an always-populated AnalysisResult.
    """

    def __init__(self, generator: ContentGenerator):
        self._generator = generator

    async def run(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Analyze code complexity.

        Args:
            request: Code and optional language hint

        Returns:
            Coerced AnalysisResult, or the fallback result on any failure
        """
        logger.info("Starting code analysis for language: %s", request.language)
        try:
            prompt = build_analysis_prompt(request)
            reply = await self._generator.generate_content(prompt)
            if not reply:
                logger.warning("Model returned no text, using fallback analysis")
                return fallback_analysis()
            return coerce_analysis(extract_json_object(reply))
        except Exception as exc:
            logger.error("Analysis failed, using fallback: %s: %s", type(exc).__name__, exc)
            return fallback_analysis()


class DebugPipeline:
    """
    Code debugging through an LLM.

    The returned ``code`` is always the request's code, whatever the model said.
    """

    def __init__(self, generator: ContentGenerator):
        self._generator = generator

    async def run(self, request: DebugRequest) -> DebugResult:
        logger.info("Starting code debugging for language: %s", request.language)
        try:
            prompt = build_debug_prompt(request)
            reply = await self._generator.generate_content(prompt)
            if not reply:
                logger.warning("Model returned no text, using fallback debug result")
                return fallback_debug(request.code)
            return coerce_debug(extract_json_object(reply), request.code)
        except Exception as exc:
            logger.error("Debugging failed, using fallback: %s: %s", type(exc).__name__, exc)
            return fallback_debug(request.code)
