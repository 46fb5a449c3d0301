"""Referral-link generator used when the search provider has nothing useful.

Two tiers:
1. Specific links derived from the query (keyword matches for technical
   queries, a paper search for academic ones, an article and a video search
   for general ones). When any are found, a primary DuckDuckGo link is
   prepended.
2. Curated links: the primary DuckDuckGo link plus two focus-specific
   destinations. Output depends only on (query, focus).
"""

import re
from collections.abc import Callable

from ai_search.consts import PROGRAMMING_KEYWORDS, WEB_DEVELOPMENT_KEYWORDS
from ai_search.types.search import Focus, ResultType, SearchResult
from ai_search.utils.logging import setup_logger
from ai_search.utils.text import encode_component

logger = setup_logger(__name__)

_WHITESPACE = re.compile(r"\s+")

LinkFinder = Callable[[str], SearchResult | None]


def _slug(query: str, sep: str) -> str:
    return _WHITESPACE.sub(sep, query)


def _match_keywords(query: str, keywords: tuple[str, ...]) -> list[str]:
    """Query words (in query order) that appear in the keyword table."""
    return [term for term in query.lower().split() if term in keywords]


def duckduckgo_url(query: str) -> str:
    return f"https://duckduckgo.com/?q={encode_component(query)}"


def primary_search_link(query: str) -> SearchResult:
    return SearchResult(
        title=f"DuckDuckGo: {query}",
        url=duckduckgo_url(query),
        snippet=f'View comprehensive search results for "{query}"',
        domain="duckduckgo.com",
        type=ResultType.PRIMARY_SEARCH,
    )


def generic_fallback_link(query: str) -> SearchResult:
    return SearchResult(
        title=f"Search results for: {query}",
        url=duckduckgo_url(query),
        snippet=f'View all search results on DuckDuckGo for "{query}"',
        domain="duckduckgo.com",
        type=ResultType.FALLBACK,
    )


# =============================================================================
# Specific Links
# =============================================================================


def find_stack_overflow_question(query: str) -> SearchResult | None:
    terms = _match_keywords(query, PROGRAMMING_KEYWORDS)
    if not terms:
        return None
    return SearchResult(
        title=f"Stack Overflow: {terms[0]}",
        url=f"https://stackoverflow.com/questions/tagged/{encode_component(terms[0])}",
        snippet=f'Find specific questions and answers about "{terms[0]}"',
        domain="stackoverflow.com",
        type=ResultType.SPECIFIC_QA,
    )


def find_github_repository(query: str) -> SearchResult:
    github_query = _slug(query.lower(), "-")
    return SearchResult(
        title=f"GitHub: {query}",
        url=(
            f"https://github.com/search?q={encode_component(github_query)}"
            "&type=repositories&s=stars&o=desc"
        ),
        snippet=f'Find popular repositories related to "{query}"',
        domain="github.com",
        type=ResultType.SPECIFIC_REPO,
    )


def find_mdn_documentation(query: str) -> SearchResult | None:
    terms = _match_keywords(query, WEB_DEVELOPMENT_KEYWORDS)
    if not terms:
        return None
    return SearchResult(
        title=f"MDN Docs: {terms[0]}",
        url=f"https://developer.mozilla.org/en-US/search?q={encode_component(terms[0])}",
        snippet=f'Find official documentation for "{terms[0]}"',
        domain="developer.mozilla.org",
        type=ResultType.SPECIFIC_DOCS,
    )


def find_arxiv_paper(query: str) -> SearchResult:
    return SearchResult(
        title=f"ArXiv: {query}",
        url=(
            f"https://arxiv.org/search/?query={encode_component(query)}"
            "&searchtype=all&source=header"
        ),
        snippet=f'Find latest research papers about "{query}"',
        domain="arxiv.org",
        type=ResultType.SPECIFIC_PAPER,
    )


def find_wikipedia_article(query: str) -> SearchResult:
    return SearchResult(
        title=f"Wikipedia: {query}",
        url=f"https://en.wikipedia.org/wiki/{encode_component(_slug(query, '_'))}",
        snippet=f'Read comprehensive information about "{query}"',
        domain="wikipedia.org",
        type=ResultType.SPECIFIC_ARTICLE,
    )


def find_youtube_video(query: str) -> SearchResult:
    return SearchResult(
        title=f"YouTube: {query}",
        url=f"https://www.youtube.com/results?search_query={encode_component(query + ' tutorial')}",
        snippet=f'Watch tutorials and videos about "{query}"',
        domain="youtube.com",
        type=ResultType.SPECIFIC_VIDEO,
    )


SPECIFIC_FINDERS: dict[Focus, tuple[LinkFinder, ...]] = {
    Focus.TECHNICAL: (find_stack_overflow_question, find_github_repository, find_mdn_documentation),
    Focus.ACADEMIC: (find_arxiv_paper,),
    Focus.GENERAL: (find_wikipedia_article, find_youtube_video),
    Focus.NEWS: (),
}


def find_specific_content(query: str, focus: Focus | str) -> list[SearchResult]:
    """Build query-specific links; prepend the primary search link when any are found."""
    try:
        finders = SPECIFIC_FINDERS.get(Focus(focus), ())
    except ValueError:
        finders = ()

    links = [link for link in (finder(query) for finder in finders) if link is not None]
    if links:
        links.insert(0, primary_search_link(query))
    return links


# =============================================================================
# Curated Links
# =============================================================================


def _curated_academic(query: str) -> list[SearchResult]:
    encoded = encode_component(query)
    return [
        SearchResult(
            title=f"Research Paper: {query}",
            url=f"https://arxiv.org/search/?query={encoded}&searchtype=all&source=header",
            snippet=f'Latest academic research papers and preprints about "{query}"',
            domain="arxiv.org",
            type=ResultType.ACADEMIC_PAPER,
        ),
        SearchResult(
            title=f"Academic Discussion: {query}",
            url=f"https://www.researchgate.net/search/publication?q={encoded}",
            snippet=f'Research publications and academic discussions about "{query}"',
            domain="researchgate.net",
            type=ResultType.ACADEMIC_DISCUSSION,
        ),
    ]


def _curated_news(query: str) -> list[SearchResult]:
    encoded = encode_component(query)
    return [
        SearchResult(
            title=f"Latest News: {query}",
            url=f"https://news.google.com/search?q={encoded}&hl=en-US&gl=US&ceid=US:en",
            snippet=f'Most recent news articles about "{query}"',
            domain="news.google.com",
            type=ResultType.LATEST_NEWS,
        ),
        SearchResult(
            title=f"Professional Coverage: {query}",
            url=f"https://www.reuters.com/search/news?blob={encoded}",
            snippet=f'Professional news coverage and analysis about "{query}"',
            domain="reuters.com",
            type=ResultType.PROFESSIONAL_NEWS,
        ),
    ]


def _curated_technical(query: str) -> list[SearchResult]:
    tag = encode_component(_slug(query.lower(), "-"))
    return [
        SearchResult(
            title=f"Code Examples: {query}",
            url=f"https://stackoverflow.com/questions/tagged/{tag}",
            snippet=f'Practical code examples and solutions for "{query}"',
            domain="stackoverflow.com",
            type=ResultType.CODE_EXAMPLES,
        ),
        SearchResult(
            title=f"Documentation: {query}",
            url=f"https://developer.mozilla.org/en-US/search?q={encode_component(query)}",
            snippet=f'Official web development documentation for "{query}"',
            domain="developer.mozilla.org",
            type=ResultType.OFFICIAL_DOCS,
        ),
    ]


def _curated_general(query: str) -> list[SearchResult]:
    return [
        SearchResult(
            title=f"Comprehensive Guide: {query}",
            url=f"https://en.wikipedia.org/wiki/{encode_component(_slug(query, '_'))}",
            snippet=f'In-depth information and comprehensive guide about "{query}"',
            domain="wikipedia.org",
            type=ResultType.COMPREHENSIVE_GUIDE,
        ),
        SearchResult(
            title=f"Video Tutorials: {query}",
            url=(
                "https://www.youtube.com/results?search_query="
                f"{encode_component(query + ' tutorial')}"
            ),
            snippet=f'Video tutorials and educational content about "{query}"',
            domain="youtube.com",
            type=ResultType.VIDEO_TUTORIALS,
        ),
    ]


CURATED_BUILDERS: dict[Focus, Callable[[str], list[SearchResult]]] = {
    Focus.ACADEMIC: _curated_academic,
    Focus.NEWS: _curated_news,
    Focus.TECHNICAL: _curated_technical,
    Focus.GENERAL: _curated_general,
}


def curated_referral_links(query: str, focus: Focus | str) -> list[SearchResult]:
    """Primary DuckDuckGo link followed by two focus-specific destinations."""
    try:
        builder = CURATED_BUILDERS[Focus(focus)]
    except (KeyError, ValueError):
        builder = _curated_general
    return [primary_search_link(query), *builder(query)]


def fallback_links(query: str, focus: Focus | str = Focus.GENERAL) -> list[SearchResult]:
    """Generate referral links for a query the provider could not answer.

    Never raises: any internal error degrades to a single generic DuckDuckGo link.

    Args:
        query: The user's query (without site filters)
        focus: Focus mode selecting the specific finders and curated destinations

    Returns:
        Specific links if any were found, otherwise the curated links
    """
    try:
        specific = find_specific_content(query, focus)
        if specific:
            logger.info(f"Found {len(specific)} specific content links", extra={"focus": str(focus)})
            return specific

        curated = curated_referral_links(query, focus)
        logger.info(f"Generated {len(curated)} curated referral links", extra={"focus": str(focus)})
        return curated

    except Exception as e:
        logger.error(f"Referral link generation failed: {e}", extra={"query": query})
        return [generic_fallback_link(query)]
