"""Summarizer prompt.

A single user-turn prompt that embeds the query, the focus mode and an
enumerated list of search results, followed by answering instructions whose
tone depends on the focus.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ai_search.types.search import Focus, SearchResult


# =============================================================================
# Prompt Template
# =============================================================================

SUMMARY_PROMPT_TEMPLATE = """You are an AI assistant helping with a search query. Please provide a comprehensive, well-structured answer based on the search results provided.

Query: "{query}"
Focus: {focus}

Search Results:
{results}

Instructions:
1. Provide a clear, comprehensive answer to the query
2. Use information from the search results
3. Structure your response with paragraphs and bullet points where appropriate
4. If the focus is "academic", use more formal language and cite sources
5. If the focus is "news", emphasize current information and timeliness
6. If the focus is "technical", include technical details and code examples if relevant
7. Keep your response under 1000 words
8. Always acknowledge the sources you used

Please provide your response:"""


# =============================================================================
# Prompt Builders
# =============================================================================


def format_results_for_prompt(results: list[SearchResult], max_sources: int = 10) -> str:
    """Format search results as a numbered list.

    Args:
        results: Search results to embed
        max_sources: Maximum number of results to include

    Returns:
        Numbered entries with title, URL and snippet, separated by blank lines
    """
    if not results:
        return "No search results available."

    entries = []
    for index, result in enumerate(results[:max_sources], start=1):
        entries.append(
            f"{index}. {result.title}\n   URL: {result.url}\n   Snippet: {result.snippet}"
        )
    return "\n\n".join(entries)


def build_summary_prompt(
    query: str,
    results: list[SearchResult],
    focus: Focus | str,
    max_sources: int = 10,
) -> str:
    """Build the complete summarizer prompt for a query."""
    return SUMMARY_PROMPT_TEMPLATE.format(
        query=query,
        focus=str(focus),
        results=format_results_for_prompt(results, max_sources),
    )
