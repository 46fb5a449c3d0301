"""Searcher Node: runs the web-search tier chain for the user query."""

import time

from ai_search.graph.state import SearchState
from ai_search.tools.web_search import web_search
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)


def searcher_node(state: SearchState) -> dict:
    """Fetch sources for the query.

    web_search already degrades to referral links on provider failure; any
    exception that still escapes is recorded and leaves sources empty so the
    graph routes to the composer.

    Args:
        state: Current SearchState with query and focus populated

    Returns:
        State delta with sources, search_error, stages and run_metadata
    """
    start = time.perf_counter()
    logger.info(f"Starting search for query: {state.query}", extra={"focus": state.focus.value})

    search_error = None
    try:
        sources = web_search(state.query, state.focus)
    except Exception as e:
        logger.error("Web search failed", extra={"error": str(e), "error_type": type(e).__name__})
        sources = []
        search_error = f"{type(e).__name__}: {e}"

    latency_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Search complete: {len(sources)} sources",
        extra={"latency_ms": round(latency_ms, 1)},
    )

    run_metadata = dict(state.run_metadata)
    run_metadata["searcher"] = {
        "latency_ms": latency_ms,
        "source_count": len(sources),
        "source_types": sorted({s.type.value for s in sources}),
    }

    return {
        "sources": sources,
        "search_error": search_error,
        "stages": [*state.stages, "searcher"],
        "run_metadata": run_metadata,
    }
