"""DuckDuckGo text search as an optional tier between instant answers and referral links."""

from pydantic import ValidationError

from ai_search.config import settings
from ai_search.tools.instant_answer import build_provider_query
from ai_search.types.search import Focus, ResultType, SearchResult
from ai_search.utils.logging import setup_logger
from ai_search.utils.text import extract_domain, truncate_snippet

logger = setup_logger(__name__)


def duckduckgo_search(
    query: str,
    focus: Focus | str = Focus.GENERAL,
    num_results: int | None = None,
) -> list[SearchResult]:
    """Search DuckDuckGo web results through the ddgs package.

    Only consulted when USE_DUCKDUCKGO_BACKUP is enabled. Unlike the Instant
    Answer API it returns real web pages, but it scrapes the public site and
    may be rate limited.

    Args:
        query: Search query string
        focus: Focus mode; its site filter is applied to the query
        num_results: Number of results to return. If None, uses settings.max_search_results

    Returns:
        List of SearchResult models; empty list on any error (graceful degradation)
    """
    if not query or not query.strip():
        raise ValueError("Search query cannot be empty")

    query = query.strip()
    num_results = num_results or settings.max_search_results

    try:
        from ddgs import DDGS
    except ImportError:
        logger.error("ddgs package not installed. Install with: pip install ddgs")
        return []

    try:
        logger.info(f"Using DuckDuckGo text search for query: {query}")

        with DDGS() as ddgs:
            ddg_results = list(ddgs.text(build_provider_query(query, focus), max_results=num_results))

        parsed_results = []
        for i, item in enumerate(ddg_results, start=1):
            try:
                url = item.get("href", "")
                parsed_results.append(
                    SearchResult(
                        title=item.get("title", ""),
                        url=url,
                        snippet=truncate_snippet(item.get("body", ""), settings.max_snippet_length),
                        domain=extract_domain(url),
                        type=ResultType.WEB_RESULT,
                    )
                )
            except ValidationError as e:
                logger.warning(
                    f"Failed to parse DuckDuckGo result at rank {i}",
                    extra={"error": str(e)},
                )
                continue

        logger.info(
            f"DuckDuckGo text search completed: {len(parsed_results)} valid results",
            extra={"query": query},
        )
        return parsed_results

    except Exception as e:
        logger.error(
            f"DuckDuckGo text search failed: {str(e)}",
            extra={"query": query},
        )
        return []
