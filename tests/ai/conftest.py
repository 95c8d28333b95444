"""Shared fixtures for LLM client tests."""
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture
def mock_settings_helicone_enabled():
    """Mock settings with Helicone enabled."""
    with patch("program_ingestor_api.ai.client_factory.settings") as mock:
        mock.OPENAI_API_KEY = "sk-test-openai"
        mock.ANTHROPIC_API_KEY = "sk-test-anthropic"
        mock.HELICONE_ENABLED = True
        mock.HELICONE_API_KEY = "sk-test-helicone"
        mock.ENVIRONMENT = "staging"
        yield mock


@pytest.fixture
def mock_settings_helicone_disabled():
    """Mock settings with Helicone disabled."""
    with patch("program_ingestor_api.ai.client_factory.settings") as mock:
        mock.OPENAI_API_KEY = "sk-test-openai"
        mock.ANTHROPIC_API_KEY = "sk-test-anthropic"
        mock.HELICONE_ENABLED = False
        mock.HELICONE_API_KEY = None
        mock.ENVIRONMENT = "development"
        yield mock


@pytest.fixture
def mock_openai_client():
    mock_client = MagicMock()
    mock_client.chat.completions.create.return_value = MagicMock(
        choices=[MagicMock(message=MagicMock(content="Two day push/pull split."))]
    )
    return mock_client


@pytest.fixture
def mock_anthropic_client():
    mock_client = MagicMock()
    mock_client.messages.create.return_value = MagicMock(content=[MagicMock(text="Two day push/pull split.")])
    return mock_client


# Error simulation fixtures


@pytest.fixture
def rate_limit_error():
    return Exception("Error code: 429 - Rate limit reached for requests")


@pytest.fixture
def timeout_error():
    import httpx

    return httpx.ReadTimeout("Connection read timed out")


@pytest.fixture
def auth_error():
    return Exception("Error code: 401 - Invalid API key provided")
