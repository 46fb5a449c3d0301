"""Web-search client: a chain of search tiers evaluated in order.

    instant answer -> DuckDuckGo text search (optional) -> referral links

The first tier that yields a good result set wins. Provider failures inside
a tier are logged and treated as zero results; the final tier never fails,
so web_search always returns at least one result.
"""

from collections.abc import Callable
from typing import NamedTuple

from ai_search.config import Settings, settings
from ai_search.tools.duckduckgo_search import duckduckgo_search
from ai_search.tools.fallback_links import fallback_links
from ai_search.tools.instant_answer import instant_answer_search
from ai_search.types.search import Focus, SearchResult, is_good_result
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)


class SearchTier(NamedTuple):
    name: str
    search: Callable[[str, Focus], list[SearchResult]]


def search_tiers(config: Settings) -> list[SearchTier]:
    """Provider tiers enabled by config, in evaluation order."""
    tiers = [SearchTier("instant_answer", instant_answer_search)]
    if config.use_duckduckgo_backup:
        tiers.append(SearchTier("duckduckgo_text", duckduckgo_search))
    return tiers


def _attempt(tier: SearchTier, query: str, focus: Focus) -> list[SearchResult]:
    try:
        return tier.search(query, focus)
    except Exception as e:
        logger.warning(
            f"Search tier '{tier.name}' failed, trying next tier",
            extra={"error": str(e), "error_type": type(e).__name__},
        )
        return []


def web_search(
    query: str,
    focus: Focus | str = Focus.GENERAL,
    config: Settings | None = None,
) -> list[SearchResult]:
    """Search the web for query, degrading through the tier chain.

    Args:
        query: Raw user query
        focus: Focus mode (site filters and referral destinations)
        config: Settings override (defaults to the global settings)

    Returns:
        Non-empty list of normalized search results
    """
    config = config or settings
    focus = Focus(focus)

    for tier in search_tiers(config):
        results = _attempt(tier, query, focus)
        if is_good_result(results):
            logger.info(
                f"Search tier '{tier.name}' returned {len(results)} results",
                extra={"focus": focus.value},
            )
            return results
        logger.info(f"Search tier '{tier.name}' returned no usable results")

    logger.info("Using referral link fallback", extra={"focus": focus.value})
    return fallback_links(query, focus)
