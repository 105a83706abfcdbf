import json

import pytest
from unittest.mock import AsyncMock, patch

from dsaanalyzer.core.coercion import fallback_analysis, fallback_debug
from dsaanalyzer.core.growth import generate_growth_curve
from dsaanalyzer.core.pipeline import AnalysisPipeline, DebugPipeline
from dsaanalyzer.core.prompts import ANALYSIS_EXAMPLE_JSON
from dsaanalyzer.providers import ProviderError
from tests.fixtures.mock_responses import (
    ANALYSIS_REPLY_CHATTY,
    ANALYSIS_REPLY_FENCED,
    ANALYSIS_REPLY_TRUNCATED,
    ANALYSIS_REPLY_VERBATIM,
    DEBUG_REPLY_MESSY_ISSUES,
    DEBUG_REPLY_VERBATIM,
)


@pytest.mark.unit
class TestAnalysisPipeline:

    @pytest.mark.asyncio
    async def test_end_to_end_with_worked_example(self, mock_generator, analysis_request):
        mock_generator.generate_content = AsyncMock(return_value=ANALYSIS_REPLY_VERBATIM)

        result = await AnalysisPipeline(mock_generator).run(analysis_request)

        example = json.loads(ANALYSIS_EXAMPLE_JSON)
        assert result.timeComplexity == example["timeComplexity"]
        assert result.spaceComplexity == example["spaceComplexity"]
        assert result.pattern == example["pattern"]
        assert result.summary == example["summary"]
        assert result.intuition == example["intuition"]
        assert result.suggestions == example["suggestions"]
        assert result.timeGraph == generate_growth_curve(example["timeComplexity"])
        assert result.spaceGraph == generate_growth_curve(example["spaceComplexity"])

    @pytest.mark.asyncio
    async def test_sends_built_prompt(self, mock_generator, analysis_request):
        await AnalysisPipeline(mock_generator).run(analysis_request)

        mock_generator.generate_content.assert_awaited_once()
        prompt = mock_generator.generate_content.call_args.args[0]
        assert "```javascript\nfunction f(n){return n}\n```" in prompt

    @pytest.mark.asyncio
    async def test_fenced_reply(self, mock_generator, analysis_request):
        mock_generator.generate_content = AsyncMock(return_value=ANALYSIS_REPLY_FENCED)
        result = await AnalysisPipeline(mock_generator).run(analysis_request)
        assert result.pattern == "Divide & Conquer"

    @pytest.mark.asyncio
    async def test_chatty_reply(self, mock_generator, analysis_request):
        mock_generator.generate_content = AsyncMock(return_value=ANALYSIS_REPLY_CHATTY)
        result = await AnalysisPipeline(mock_generator).run(analysis_request)
        assert result.timeComplexity == "O(n^2)"
        assert result.timeGraph == [10, 40, 160, 640, 2560]
        assert result.pattern == "Nested Loops"

    @pytest.mark.asyncio
    async def test_truncated_reply_falls_back(self, mock_generator, analysis_request):
        mock_generator.generate_content = AsyncMock(return_value=ANALYSIS_REPLY_TRUNCATED)
        result = await AnalysisPipeline(mock_generator).run(analysis_request)
        assert result == fallback_analysis()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [None, ""])
    async def test_empty_reply_skips_extraction(self, mock_generator, analysis_request, reply):
        mock_generator.generate_content = AsyncMock(return_value=reply)
        with patch("dsaanalyzer.core.pipeline.extract_json_object") as extract:
            result = await AnalysisPipeline(mock_generator).run(analysis_request)
        extract.assert_not_called()
        assert result == fallback_analysis()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ProviderError("API error (500): boom", status_code=500),
        TimeoutError("timed out"),
        ConnectionError("refused"),
        RuntimeError("unexpected"),
    ])
    async def test_transport_failure_falls_back(self, mock_generator, analysis_request, error):
        mock_generator.generate_content = AsyncMock(side_effect=error)
        result = await AnalysisPipeline(mock_generator).run(analysis_request)
        assert result == fallback_analysis()

    @pytest.mark.asyncio
    async def test_extraction_error_falls_back(self, mock_generator, analysis_request):
        mock_generator.generate_content = AsyncMock(return_value="{}")
        with patch("dsaanalyzer.core.pipeline.extract_json_object", side_effect=RuntimeError("bad")):
            result = await AnalysisPipeline(mock_generator).run(analysis_request)
        assert result == fallback_analysis()

    @pytest.mark.asyncio
    async def test_transport_failure_is_logged(self, mock_generator, analysis_request, caplog):
        mock_generator.generate_content = AsyncMock(side_effect=ProviderError("down"))
        with caplog.at_level("ERROR", logger="dsaanalyzer.core.pipeline"):
            await AnalysisPipeline(mock_generator).run(analysis_request)
        assert "ProviderError" in caplog.text


@pytest.mark.unit
class TestDebugPipeline:

    @pytest.mark.asyncio
    async def test_worked_example(self, mock_generator, debug_request):
        mock_generator.generate_content = AsyncMock(return_value=DEBUG_REPLY_VERBATIM)

        result = await DebugPipeline(mock_generator).run(debug_request)

        assert result.code == debug_request.code
        assert len(result.issues) == 2
        assert result.explanation.startswith("Code calls undefined 'merge'")

    @pytest.mark.asyncio
    async def test_prompt_carries_reported_error(self, mock_generator, debug_request):
        await DebugPipeline(mock_generator).run(debug_request)
        prompt = mock_generator.generate_content.call_args.args[0]
        assert "REPORTED ERROR:\nIndexError: list index out of range" in prompt

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [
        None,
        "",
        "total nonsense",
        DEBUG_REPLY_MESSY_ISSUES,
        '{"code": "print(\'hijacked\')", "issues": []}',
    ])
    async def test_code_is_always_echoed(self, mock_generator, debug_request, reply):
        mock_generator.generate_content = AsyncMock(return_value=reply)
        result = await DebugPipeline(mock_generator).run(debug_request)
        assert result.code == debug_request.code

    @pytest.mark.asyncio
    async def test_transport_failure_falls_back(self, mock_generator, debug_request):
        mock_generator.generate_content = AsyncMock(side_effect=ProviderError("down"))
        result = await DebugPipeline(mock_generator).run(debug_request)
        assert result == fallback_debug(debug_request.code)
