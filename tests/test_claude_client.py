"""Tests for Claude client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from reads_bot.adapters.llm import ClaudeClient
from reads_bot.config import Settings
from reads_bot.core import SummaryError


@pytest.fixture
def mock_settings() -> Settings:
    """Create mock settings."""
    settings = Settings(anthropic_api_key="test-key")
    settings.claude.max_retries = 3
    settings.claude.initial_retry_delay = 0.01  # Faster for tests
    settings.claude.request_delay = 0.0
    return settings


def _ok_response(text: str) -> MagicMock:
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = {"content": [{"text": text}]}
    return response


def _mock_client(mock_client_class: MagicMock) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.__aenter__.return_value = mock_client
    mock_client_class.return_value = mock_client
    return mock_client


@pytest.mark.asyncio
async def test_generate_summary_success(mock_settings: Settings) -> None:
    """Test successful summary with the url in the prompt."""
    client = ClaudeClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _mock_client(mock_client_class)
        mock_client.post.return_value = _ok_response("  A page about markets.  ")

        result = await client.generate_summary("https://example.com/a")

        assert result == "A page about markets."
        payload = mock_client.post.call_args.kwargs["json"]
        assert payload["model"] == mock_settings.claude.model
        assert payload["system"] == "You are a helpful assistant."
        assert "https://example.com/a" in payload["messages"][0]["content"]
        assert mock_client.post.call_args.kwargs["headers"]["x-api-key"] == "test-key"


@pytest.mark.asyncio
async def test_generate_summary_retry_on_429(mock_settings: Settings) -> None:
    """Test retry logic on 429 error."""
    client = ClaudeClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_response_429 = MagicMock()
        mock_response_429.status_code = 429
        mock_response_429.headers = {"retry-after": "0"}

        mock_client = _mock_client(mock_client_class)
        mock_client.post.side_effect = [mock_response_429, _ok_response("After retry")]

        result = await client.generate_summary("https://example.com/a")

        assert result == "After retry"
        assert mock_client.post.call_count == 2


@pytest.mark.asyncio
async def test_generate_summary_retry_on_server_error(mock_settings: Settings) -> None:
    """Test 5xx responses are retried with backoff."""
    client = ClaudeClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_response_503 = MagicMock()
        mock_response_503.status_code = 503

        mock_client = _mock_client(mock_client_class)
        mock_client.post.side_effect = [mock_response_503, _ok_response("Recovered")]

        assert await client.generate_summary("https://example.com/a") == "Recovered"


@pytest.mark.asyncio
async def test_generate_summary_missing_key() -> None:
    """Test an unconfigured key fails without calling the API."""
    client = ClaudeClient(Settings())

    with patch("httpx.AsyncClient") as mock_client_class:
        with pytest.raises(SummaryError):
            await client.generate_summary("https://example.com/a")

        mock_client_class.assert_not_called()


@pytest.mark.asyncio
async def test_generate_summary_network_exhaustion(mock_settings: Settings) -> None:
    """Test repeated network errors end in SummaryError."""
    client = ClaudeClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _mock_client(mock_client_class)
        mock_client.post.side_effect = httpx.ConnectError("Connection failed")

        with pytest.raises(SummaryError):
            await client.generate_summary("https://example.com/a")

        assert mock_client.post.call_count == 3


@pytest.mark.asyncio
async def test_generate_summary_client_error_not_retried(mock_settings: Settings) -> None:
    """Test 4xx responses fail immediately."""
    client = ClaudeClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        mock_response = MagicMock()
        mock_response.status_code = 400
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Bad request", request=request, response=httpx.Response(400, request=request)
        )

        mock_client = _mock_client(mock_client_class)
        mock_client.post.return_value = mock_response

        with pytest.raises(SummaryError):
            await client.generate_summary("https://example.com/a")

        assert mock_client.post.call_count == 1


@pytest.mark.asyncio
async def test_generate_summary_empty_or_malformed(mock_settings: Settings) -> None:
    """Test blank text and odd bodies are not accepted as summaries."""
    client = ClaudeClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _mock_client(mock_client_class)
        mock_client.post.return_value = _ok_response("   ")

        with pytest.raises(SummaryError):
            await client.generate_summary("https://example.com/a")

        malformed = MagicMock()
        malformed.status_code = 200
        malformed.json.return_value = {"content": []}
        mock_client.post.return_value = malformed

        with pytest.raises(SummaryError):
            await client.generate_summary("https://example.com/a")
