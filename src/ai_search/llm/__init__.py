"""LLM module for the summarizer.

This module provides the summarizer prompt and the provider layer (Gemini
REST plus LangChain chat models).
"""

from ai_search.llm.prompts import (
    SUMMARY_PROMPT_TEMPLATE,
    build_summary_prompt,
    format_results_for_prompt,
)
from ai_search.llm.providers import (
    ConfigurationError,
    SummarizerError,
    UpstreamError,
    check_provider_health,
    get_summarizer_llm,
    is_gemini_configured,
    summarize,
)

__all__ = [
    # Providers
    "summarize",
    "get_summarizer_llm",
    "check_provider_health",
    "is_gemini_configured",
    "SummarizerError",
    "ConfigurationError",
    "UpstreamError",
    # Prompts
    "SUMMARY_PROMPT_TEMPLATE",
    "build_summary_prompt",
    "format_results_for_prompt",
]
