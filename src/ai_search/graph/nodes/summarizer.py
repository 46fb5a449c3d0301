"""Summarizer Node: turns the sources into an AI answer.

Failures are recorded in summary_error and leave answer empty; the graph then
routes to the composer for a templated answer.
"""

import math
import time

from ai_search.config import settings
from ai_search.graph.state import SearchState
from ai_search.llm.providers import ConfigurationError, summarize
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Rough token estimate: one token per four characters, rounded up."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def summarizer_node(state: SearchState) -> dict:
    """Summarize state.sources for state.query with the configured provider."""
    start = time.perf_counter()
    run_metadata = dict(state.run_metadata)
    stages = [*state.stages, "summarizer"]

    try:
        answer = summarize(state.query, state.sources, state.focus, settings)
    except Exception as e:
        if isinstance(e, ConfigurationError):
            logger.warning(f"Summarizer not configured, using fallback answer: {e}")
        else:
            logger.error(
                "Summarizer failed, using fallback answer",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
        run_metadata["summarizer"] = {"provider": settings.summarizer_provider, "error": str(e)}
        return {"summary_error": str(e), "stages": stages, "run_metadata": run_metadata}

    latency_ms = (time.perf_counter() - start) * 1000
    tokens = estimate_tokens(answer)
    logger.info(
        "Summary generated",
        extra={"latency_ms": round(latency_ms, 1), "tokens_used_estimate": tokens},
    )

    run_metadata["summarizer"] = {
        "provider": settings.summarizer_provider,
        "latency_ms": latency_ms,
        "answer_chars": len(answer),
    }

    return {
        "answer": answer,
        "tokens_used_estimate": tokens,
        "mode": "ai",
        "stages": stages,
        "run_metadata": run_metadata,
    }
