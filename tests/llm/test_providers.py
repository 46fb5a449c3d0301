"""Tests for the summarizer providers.

These tests verify that:
1. Gemini is called over REST with the prompt and key, and its response is parsed
2. Missing or placeholder keys raise ConfigurationError
3. Upstream failures and malformed responses raise UpstreamError
4. LangChain-backed providers are created with the configured parameters
5. Health check reports configuration without calling upstream
"""

from unittest.mock import MagicMock, Mock, patch

import httpx
import langchain_anthropic
import langchain_openai
import pytest
from langchain_core.messages import AIMessage

from ai_search.config import Settings
from ai_search.consts import PLACEHOLDER_API_KEY
from ai_search.llm.providers import (
    ConfigurationError,
    UpstreamError,
    check_provider_health,
    extract_gemini_text,
    get_summarizer_llm,
    is_gemini_configured,
    summarize,
)
from ai_search.tools._http_utils import QuotaExceededError
from ai_search.types.search import Focus

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def gemini_settings() -> Settings:
    return Settings(summarizer_provider="gemini", gemini_api_key="AIza-test-key")


@pytest.fixture
def openai_settings() -> Settings:
    return Settings(
        summarizer_provider="openai",
        openai_api_key="sk-test-key-12345",
        openai_model="gpt-4o-mini",
    )


@pytest.fixture
def anthropic_settings() -> Settings:
    return Settings(
        summarizer_provider="anthropic",
        anthropic_api_key="sk-ant-test-key-12345",
        anthropic_model="claude-3-5-sonnet-20241022",
    )


@pytest.fixture
def local_settings() -> Settings:
    return Settings(
        summarizer_provider="local",
        local_llm_base_url="http://127.0.0.1:1234/v1",
        local_llm_model="local-model",
        local_llm_api_key="not-needed",
    )


def gemini_response(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


# =============================================================================
# Gemini
# =============================================================================


class TestGeminiConfiguration:
    def test_missing_key(self, sample_results):
        settings = Settings(summarizer_provider="gemini", gemini_api_key="")

        with pytest.raises(ConfigurationError, match="Gemini API key not configured"):
            summarize("q", sample_results, Focus.GENERAL, settings)

    def test_placeholder_key(self, sample_results):
        settings = Settings(summarizer_provider="gemini", gemini_api_key=PLACEHOLDER_API_KEY)

        with pytest.raises(ConfigurationError, match="placeholder"):
            summarize("q", sample_results, Focus.GENERAL, settings)

    def test_is_gemini_configured(self):
        assert is_gemini_configured(Settings(gemini_api_key="AIza-real"))
        assert not is_gemini_configured(Settings(gemini_api_key=""))
        assert not is_gemini_configured(Settings(gemini_api_key="your-key-here"))


class TestGeminiCall:
    @patch("httpx.Client")
    def test_request_shape(self, mock_client_cls: Mock, gemini_settings, sample_results):
        mock_response = Mock(status_code=200)
        mock_response.json.return_value = gemini_response("Rust is a systems language.")
        client = MagicMock()
        client.post.return_value = mock_response
        mock_client_cls.return_value.__enter__.return_value = client

        answer = summarize("what is rust", sample_results, Focus.TECHNICAL, gemini_settings)

        assert answer == "Rust is a systems language."
        mock_client_cls.assert_called_once_with(timeout=gemini_settings.summarizer_timeout)
        call = client.post.call_args
        assert call.args[0] == gemini_settings.gemini_endpoint
        assert call.kwargs["params"] == {"key": "AIza-test-key"}
        prompt = call.kwargs["json"]["contents"][0]["parts"][0]["text"]
        assert 'Query: "what is rust"' in prompt
        assert "Focus: technical" in prompt

    @patch("ai_search.llm.providers.post_json")
    def test_transport_error(self, mock_post: Mock, gemini_settings, sample_results):
        mock_post.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(UpstreamError, match="ReadTimeout"):
            summarize("q", sample_results, Focus.GENERAL, gemini_settings)

    @patch("ai_search.llm.providers.post_json")
    def test_quota_error(self, mock_post: Mock, gemini_settings, sample_results):
        mock_post.side_effect = QuotaExceededError("API quota exceeded")

        with pytest.raises(UpstreamError):
            summarize("q", sample_results, Focus.GENERAL, gemini_settings)

    @patch("ai_search.llm.providers.post_json")
    def test_error_does_not_leak_key(self, mock_post: Mock, gemini_settings, sample_results):
        mock_post.side_effect = httpx.ConnectError("https://host/?key=AIza-test-key")

        with pytest.raises(UpstreamError) as exc_info:
            summarize("q", sample_results, Focus.GENERAL, gemini_settings)

        assert "AIza-test-key" not in str(exc_info.value)


class TestExtractGeminiText:
    def test_valid(self):
        assert extract_gemini_text(gemini_response("hello")) == "hello"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": []}}]},
            None,
        ],
    )
    def test_bad_shape(self, payload):
        with pytest.raises(UpstreamError, match="Invalid response format"):
            extract_gemini_text(payload)

    def test_empty_text(self):
        with pytest.raises(UpstreamError, match="empty"):
            extract_gemini_text(gemini_response("   "))


# =============================================================================
# LangChain providers
# =============================================================================


def test_unknown_provider_raises_error(sample_results):
    settings = Settings(summarizer_provider="gemini")
    # Bypass Literal validation
    settings.summarizer_provider = "unknown_provider"

    with pytest.raises(ConfigurationError, match="unknown_provider"):
        summarize("q", sample_results, Focus.GENERAL, settings)


def test_openai_missing_api_key_raises_error():
    settings = Settings(summarizer_provider="openai", openai_api_key="")

    with pytest.raises(ConfigurationError, match="OpenAI API key is required"):
        get_summarizer_llm(settings)


def test_openai_creates_correct_llm(openai_settings: Settings):
    with patch.object(langchain_openai, "ChatOpenAI") as mock_chat_openai:
        mock_llm = MagicMock()
        mock_chat_openai.return_value = mock_llm

        result = get_summarizer_llm(openai_settings)

        assert result == mock_llm
        mock_chat_openai.assert_called_once_with(
            api_key="sk-test-key-12345",
            model="gpt-4o-mini",
            temperature=openai_settings.summarizer_temperature,
            max_tokens=openai_settings.summarizer_max_tokens,
            timeout=openai_settings.summarizer_timeout,
        )


def test_anthropic_missing_api_key_raises_error():
    settings = Settings(summarizer_provider="anthropic", anthropic_api_key="")

    with pytest.raises(ConfigurationError, match="Anthropic API key is required"):
        get_summarizer_llm(settings)


def test_anthropic_creates_correct_llm(anthropic_settings: Settings):
    with patch.object(langchain_anthropic, "ChatAnthropic") as mock_chat_anthropic:
        mock_llm = MagicMock()
        mock_chat_anthropic.return_value = mock_llm

        result = get_summarizer_llm(anthropic_settings)

        assert result == mock_llm
        mock_chat_anthropic.assert_called_once_with(
            api_key="sk-ant-test-key-12345",
            model="claude-3-5-sonnet-20241022",
            temperature=anthropic_settings.summarizer_temperature,
            max_tokens=anthropic_settings.summarizer_max_tokens,
            timeout=anthropic_settings.summarizer_timeout,
        )


def test_local_creates_openai_compatible_llm(local_settings: Settings):
    with patch.object(langchain_openai, "ChatOpenAI") as mock_chat_openai:
        get_summarizer_llm(local_settings)

        mock_chat_openai.assert_called_once_with(
            base_url="http://127.0.0.1:1234/v1",
            api_key="not-needed",
            model="local-model",
            temperature=local_settings.summarizer_temperature,
            max_tokens=local_settings.summarizer_max_tokens,
            timeout=local_settings.summarizer_timeout,
        )


class TestChatModelSummarize:
    def test_string_content(self, openai_settings, sample_results):
        mock_llm = MagicMock()
        mock_llm.invoke.return_value = AIMessage(content="An answer")

        with patch("ai_search.llm.providers.get_summarizer_llm", return_value=mock_llm):
            answer = summarize("q", sample_results, Focus.GENERAL, openai_settings)

        assert answer == "An answer"
        messages = mock_llm.invoke.call_args.args[0]
        assert 'Query: "q"' in messages[0].content

    def test_content_blocks_are_joined(self, anthropic_settings, sample_results):
        mock_llm = MagicMock()
        mock_llm.invoke.return_value = AIMessage(
            content=[{"type": "text", "text": "Part one. "}, {"type": "text", "text": "Part two."}]
        )

        with patch("ai_search.llm.providers.get_summarizer_llm", return_value=mock_llm):
            answer = summarize("q", sample_results, Focus.GENERAL, anthropic_settings)

        assert answer == "Part one. Part two."

    def test_invoke_failure(self, openai_settings, sample_results):
        mock_llm = MagicMock()
        mock_llm.invoke.side_effect = RuntimeError("rate limited")

        with patch("ai_search.llm.providers.get_summarizer_llm", return_value=mock_llm):
            with pytest.raises(UpstreamError, match="rate limited"):
                summarize("q", sample_results, Focus.GENERAL, openai_settings)

    def test_empty_answer(self, openai_settings, sample_results):
        mock_llm = MagicMock()
        mock_llm.invoke.return_value = AIMessage(content="")

        with patch("ai_search.llm.providers.get_summarizer_llm", return_value=mock_llm):
            with pytest.raises(UpstreamError, match="empty"):
                summarize("q", sample_results, Focus.GENERAL, openai_settings)


# =============================================================================
# Health Check
# =============================================================================


class TestHealthCheck:
    def test_gemini_healthy(self, gemini_settings):
        health = check_provider_health(gemini_settings)

        assert health["healthy"] is True
        assert health["provider"] == "gemini"
        assert health["model"] == "gemini-1.5-flash"

    def test_gemini_unconfigured(self):
        health = check_provider_health(Settings(summarizer_provider="gemini", gemini_api_key=""))

        assert health["healthy"] is False
        assert "error" in health

    def test_openai_missing_key(self):
        health = check_provider_health(Settings(summarizer_provider="openai", openai_api_key=""))

        assert health["healthy"] is False
        assert "OpenAI API key" in health["error"]

    def test_openai_healthy(self, openai_settings):
        with patch.object(langchain_openai, "ChatOpenAI"):
            health = check_provider_health(openai_settings)

        assert health == {"healthy": True, "provider": "openai", "model": "gpt-4o-mini"}
