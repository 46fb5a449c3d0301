"""Summarizer providers.

The default provider calls the Gemini generateContent REST endpoint directly
through the shared httpx helper. The openai, anthropic and local (LM Studio /
Ollama / vLLM) providers go through LangChain chat models.

Usage:
    from ai_search.llm.providers import summarize

    answer = summarize("what is rust", results, Focus.TECHNICAL)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from ai_search.config import settings as default_settings
from ai_search.consts import PLACEHOLDER_API_KEY, PLACEHOLDER_API_KEY_MARKER
from ai_search.llm.prompts import build_summary_prompt
from ai_search.tools._http_utils import QuotaExceededError, post_json
from ai_search.utils.logging import setup_logger

if TYPE_CHECKING:
    from ai_search.config import Settings
    from ai_search.types.search import Focus, SearchResult

logger = setup_logger(__name__)


class SummarizerError(Exception):
    """Base class for summarizer failures."""

    pass


class ConfigurationError(SummarizerError):
    """Raised when the configured provider is unknown or its API key is missing."""

    pass


class UpstreamError(SummarizerError):
    """Raised when the provider call fails or returns an unexpected shape."""

    pass


def is_gemini_configured(settings: Settings) -> bool:
    """True if a real (non-placeholder) Gemini key is present."""
    key = settings.gemini_api_key
    return bool(key) and key != PLACEHOLDER_API_KEY and PLACEHOLDER_API_KEY_MARKER not in key


def summarize(
    query: str,
    results: list[SearchResult],
    focus: Focus | str,
    settings: Settings | None = None,
) -> str:
    """Produce a natural-language answer for query from the search results.

    Args:
        query: The user's query
        results: Search results embedded in the prompt
        focus: Focus mode, controls the answer's tone
        settings: Settings override (defaults to the global settings)

    Returns:
        The generated answer text

    Raises:
        ConfigurationError: If the provider is unknown or not configured
        UpstreamError: If the provider call fails or its response is malformed
    """
    settings = settings or default_settings
    prompt = build_summary_prompt(query, results, focus, settings.summarizer_max_sources)

    match settings.summarizer_provider:
        case "gemini":
            return _summarize_with_gemini(settings, prompt)
        case "openai" | "anthropic" | "local":
            return _summarize_with_chat_model(get_summarizer_llm(settings), prompt)
        case provider:
            raise ConfigurationError(
                f"Unknown summarizer provider: '{provider}'. "
                f"Supported providers: gemini, openai, anthropic, local"
            )


# =============================================================================
# Gemini (REST)
# =============================================================================


def _summarize_with_gemini(settings: Settings, prompt: str) -> str:
    if not settings.gemini_api_key:
        raise ConfigurationError(
            "Gemini API key not configured. Set GEMINI_API_KEY in your .env file."
        )
    if not is_gemini_configured(settings):
        raise ConfigurationError(
            "Replace the placeholder Gemini API key with a real key in your .env file."
        )

    payload = {"contents": [{"parts": [{"text": prompt}]}]}
    logger.info("Calling Gemini generateContent", extra={"prompt_chars": len(prompt)})

    try:
        data = post_json(
            settings.gemini_endpoint,
            payload,
            params={"key": settings.gemini_api_key},
            timeout=settings.summarizer_timeout,
        )
    except (httpx.HTTPError, QuotaExceededError, ValueError) as e:
        raise UpstreamError(f"Gemini request failed: {type(e).__name__}") from e

    return extract_gemini_text(data)


def extract_gemini_text(data: Any) -> str:
    """Read candidates[0].content.parts[0].text from a generateContent response."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise UpstreamError("Invalid response format from Gemini API") from e

    if not isinstance(text, str) or not text.strip():
        raise UpstreamError("Gemini API returned an empty answer")
    return text


# =============================================================================
# LangChain chat models
# =============================================================================


def _summarize_with_chat_model(llm: BaseChatModel, prompt: str) -> str:
    try:
        response = llm.invoke([HumanMessage(content=prompt)])
    except Exception as e:
        raise UpstreamError(f"Summarizer call failed: {type(e).__name__}: {e}") from e

    content = response.content
    if isinstance(content, list):
        # Anthropic returns content blocks
        content = "".join(
            block.get("text", "") if isinstance(block, dict) else str(block) for block in content
        )
    if not content or not content.strip():
        raise UpstreamError("Summarizer returned an empty answer")
    return content


def get_summarizer_llm(settings: Settings) -> BaseChatModel:
    """Create the LangChain chat model for the configured non-Gemini provider.

    Raises:
        ConfigurationError: If the provider is unknown, its API key is missing,
            or its integration package is not installed.
    """
    kwargs = {
        "temperature": settings.summarizer_temperature,
        "max_tokens": settings.summarizer_max_tokens,
        "timeout": settings.summarizer_timeout,
    }

    match settings.summarizer_provider:
        case "openai":
            return _create_openai_llm(settings, **kwargs)
        case "anthropic":
            return _create_anthropic_llm(settings, **kwargs)
        case "local":
            return _create_local_llm(settings, **kwargs)
        case provider:
            raise ConfigurationError(
                f"Provider '{provider}' is not served by a LangChain chat model. "
                f"Supported providers: openai, anthropic, local"
            )


def _create_openai_llm(
    settings: Settings,
    temperature: float,
    max_tokens: int,
    timeout: int,
) -> BaseChatModel:
    """Create OpenAI ChatGPT instance."""
    if not settings.openai_api_key:
        raise ConfigurationError(
            "OpenAI API key is required when summarizer_provider='openai'. "
            "Set OPENAI_API_KEY in your .env file."
        )

    try:
        from langchain_openai import ChatOpenAI
    except ImportError as e:
        raise ConfigurationError(
            "langchain-openai package is required for OpenAI provider. "
            "Install it with: pip install 'ai-search[openai]'"
        ) from e

    return ChatOpenAI(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=timeout,
    )


def _create_anthropic_llm(
    settings: Settings,
    temperature: float,
    max_tokens: int,
    timeout: int,
) -> BaseChatModel:
    """Create Anthropic Claude instance."""
    if not settings.anthropic_api_key:
        raise ConfigurationError(
            "Anthropic API key is required when summarizer_provider='anthropic'. "
            "Set ANTHROPIC_API_KEY in your .env file."
        )

    try:
        from langchain_anthropic import ChatAnthropic
    except ImportError as e:
        raise ConfigurationError(
            "langchain-anthropic package is required for Anthropic provider. "
            "Install it with: pip install 'ai-search[anthropic]'"
        ) from e

    return ChatAnthropic(
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=timeout,
    )


def _create_local_llm(
    settings: Settings, temperature: float, max_tokens: int, timeout: int
) -> BaseChatModel:
    """Create local LLM instance (LM Studio / Ollama / vLLM).

    Uses the OpenAI-compatible API endpoint exposed by these servers.
    """
    try:
        from langchain_openai import ChatOpenAI
    except ImportError as e:
        raise ConfigurationError(
            "langchain-openai package is required for local provider. "
            "Install it with: pip install 'ai-search[openai]'"
        ) from e

    return ChatOpenAI(
        base_url=settings.local_llm_base_url,
        api_key=settings.local_llm_api_key,
        model=settings.local_llm_model,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=timeout,
    )


def check_provider_health(settings: Settings) -> dict[str, bool | str]:
    """Check if the configured summarizer provider can be used.

    Nothing is sent upstream; only configuration and installed packages are checked.

    Returns:
        Dict with 'healthy' (bool), 'provider' (str), 'model' (str) and optionally 'error' (str).
    """
    provider = settings.summarizer_provider

    if provider == "gemini":
        healthy = is_gemini_configured(settings)
        result: dict[str, bool | str] = {
            "healthy": healthy,
            "provider": provider,
            "model": _get_model_name(settings, provider),
        }
        if not healthy:
            result["error"] = "Gemini API key missing or placeholder"
        return result

    try:
        get_summarizer_llm(settings)
        return {
            "healthy": True,
            "provider": provider,
            "model": _get_model_name(settings, provider),
        }
    except ConfigurationError as e:
        return {
            "healthy": False,
            "provider": provider,
            "error": str(e),
        }


def _get_model_name(settings: Settings, provider: str) -> str:
    """Get the model name for the given provider."""
    model_map = {
        "gemini": settings.gemini_endpoint.rsplit("/", 1)[-1].split(":", 1)[0],
        "openai": settings.openai_model,
        "anthropic": settings.anthropic_model,
        "local": settings.local_llm_model,
    }
    return model_map.get(provider, "unknown")
