import pytest
from unittest.mock import AsyncMock, Mock

from dsaanalyzer.config import Settings
from dsaanalyzer.core.models import AnalysisRequest, DebugRequest


@pytest.fixture
def test_settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        GEMINI_API_KEY="test-gemini-key",
        GROQ_API_KEY="test-groq-key",
        PROVIDER_MAX_ATTEMPTS=2,
        PROVIDER_TIMEOUT_SECONDS=5,
        MAX_CODE_LENGTH=1000,
    )


@pytest.fixture
def mock_generator():
    """Model collaborator returning nothing until a test says otherwise."""
    generator = Mock()
    generator.generate_content = AsyncMock(return_value=None)
    generator.is_available = Mock(return_value=True)
    generator.close = AsyncMock()
    return generator


@pytest.fixture
def analysis_request():
    return AnalysisRequest(code="function f(n){return n}", language="javascript")


@pytest.fixture
def debug_request():
    return DebugRequest(
        code="def first(arr):\n    return arr[0]\n",
        language="python",
        errorMessage="IndexError: list index out of range",
    )
