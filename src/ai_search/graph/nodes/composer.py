"""Composer Node: templated answer used when no AI summary is available.

compose_fallback never fails. It lists the sources it was given, or a single
DuckDuckGo search link when there are none.
"""

from ai_search.consts import DEFAULT_FOCUS_DESCRIPTION, FOCUS_DESCRIPTIONS
from ai_search.graph.state import SearchState
from ai_search.types.graph import FallbackResponse, SearchMetadata
from ai_search.types.search import Focus, ResultType, SearchResult
from ai_search.utils.logging import setup_logger
from ai_search.utils.text import encode_component

logger = setup_logger(__name__)

# Reported in place of a measured time for templated answers
FALLBACK_PROCESSING_TIME_MS = 150

FALLBACK_ANSWER_TEMPLATE = """Here's what I found about "{query}" based on web search results:

**Search Results Summary:**
I've gathered information from {count} web sources to answer your question. Below you'll find relevant websites, articles, and resources that should help you understand this topic better.

**What You Can Do:**
1. **Click on any source below** - Each link will take you to the original content
2. **Explore related topics** - The search results include additional context and related information
3. **Get more specific** - Try refining your search with additional keywords for better results

**Note:** These are real search results from DuckDuckGo. AI-generated summaries are shown when the summarizer is configured and reachable.

**Focus Mode: {focus}** ({description})

**Found {count} relevant sources:**"""


def focus_description(focus: Focus | str) -> str:
    return FOCUS_DESCRIPTIONS.get(str(focus), DEFAULT_FOCUS_DESCRIPTION)


def search_results_link(query: str) -> SearchResult:
    return SearchResult(
        title=f"Search Results for: {query}",
        url=f"https://duckduckgo.com/?q={encode_component(query)}",
        snippet=f'View all search results on DuckDuckGo for "{query}"',
        domain="duckduckgo.com",
        type=ResultType.SEARCH_RESULTS,
    )


def compose_fallback(
    query: str,
    focus: Focus | str,
    results: list[SearchResult] | None = None,
) -> FallbackResponse:
    """Build the templated answer for query from the available results.

    Args:
        query: The user's query
        focus: Focus mode, named in the answer with its description
        results: Sources to present; empty or None yields one search link

    Returns:
        FallbackResponse with zero token usage and a constant processing time
    """
    sources = list(results) if results else [search_results_link(query)]
    answer = FALLBACK_ANSWER_TEMPLATE.format(
        query=query,
        count=len(sources),
        focus=str(focus),
        description=focus_description(focus),
    )
    return FallbackResponse(
        answer=answer,
        sources=sources,
        metadata=SearchMetadata(
            processing_time_ms=FALLBACK_PROCESSING_TIME_MS,
            tokens_used_estimate=0,
            source_count=len(sources),
        ),
    )


def composer_node(state: SearchState) -> dict:
    """Compose the fallback answer from whatever the searcher found."""
    response = compose_fallback(state.query, state.focus, state.sources)

    logger.info(
        "Composed fallback answer",
        extra={
            "source_count": response.metadata.source_count,
            "search_error": bool(state.search_error),
            "summary_error": bool(state.summary_error),
        },
    )

    run_metadata = dict(state.run_metadata)
    run_metadata["composer"] = response.metadata.model_dump()

    return {
        "answer": response.answer,
        "sources": response.sources,
        "tokens_used_estimate": 0,
        "mode": "fallback",
        "stages": [*state.stages, "composer"],
        "run_metadata": run_metadata,
    }
