"""DuckDuckGo Instant Answer API client.

The Instant Answer payload is a bag of optional fields (abstract, answer,
definition, related topics, results). Each field is an independent result
origin, so normalization is a table of per-origin extractors evaluated in
order of preference; an empty outcome yields a single placeholder record.
"""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ai_search.config import settings
from ai_search.consts import FOCUS_SITE_FILTERS
from ai_search.tools._http_utils import make_api_request
from ai_search.types.search import Focus, ResultType, SearchResult
from ai_search.utils.logging import setup_logger
from ai_search.utils.text import encode_component, extract_domain, truncate_snippet

logger = setup_logger(__name__)

MAX_RELATED_TOPICS = 3
MAX_WEB_RESULTS = 5


class RelatedTopic(BaseModel):
    """Entry of RelatedTopics / Results. Category groups carry no Text and are skipped."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    text: str = Field(default="", alias="Text")
    first_url: str = Field(default="", alias="FirstURL")
    title: str = Field(default="", alias="Title")

    @field_validator("text", "first_url", "title", mode="before")
    @classmethod
    def coerce_str(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""


class InstantAnswerResponse(BaseModel):
    """Subset of the DuckDuckGo Instant Answer response used for normalization."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    heading: str = Field(default="", alias="Heading")
    abstract: str = Field(default="", alias="Abstract")
    abstract_text: str = Field(default="", alias="AbstractText")
    abstract_url: str = Field(default="", alias="AbstractURL")
    abstract_source: str = Field(default="", alias="AbstractSource")
    answer: str = Field(default="", alias="Answer")
    answer_text: str = Field(default="", alias="AnswerText")
    answer_url: str = Field(default="", alias="AnswerURL")
    definition: str = Field(default="", alias="Definition")
    definition_text: str = Field(default="", alias="DefinitionText")
    definition_url: str = Field(default="", alias="DefinitionURL")
    related_topics: list[RelatedTopic] = Field(default_factory=list, alias="RelatedTopics")
    results: list[RelatedTopic] = Field(default_factory=list, alias="Results")

    @field_validator(
        "heading",
        "abstract",
        "abstract_text",
        "abstract_url",
        "abstract_source",
        "answer",
        "answer_text",
        "answer_url",
        "definition",
        "definition_text",
        "definition_url",
        mode="before",
    )
    @classmethod
    def coerce_str(cls, v: Any) -> str:
        # Calculator/conversion answers arrive as objects; they carry no usable text
        return v if isinstance(v, str) else ""

    @field_validator("related_topics", "results", mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> list:
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]


Extractor = Callable[[InstantAnswerResponse, int], list[SearchResult]]


def _result(title: str, url: str, snippet: str, kind: ResultType, max_length: int) -> SearchResult:
    return SearchResult(
        title=title,
        url=url,
        snippet=truncate_snippet(snippet, max_length),
        domain=extract_domain(url),
        type=kind,
    )


def _extract_abstract(data: InstantAnswerResponse, max_length: int) -> list[SearchResult]:
    if not (data.abstract and data.abstract_text):
        return []
    return [
        _result(
            data.heading or data.abstract_source or "DuckDuckGo Instant Answer",
            data.abstract_url or "#",
            data.abstract_text,
            ResultType.INSTANT_ANSWER,
            max_length,
        )
    ]


def _extract_answer(data: InstantAnswerResponse, max_length: int) -> list[SearchResult]:
    if not (data.answer and data.answer_text):
        return []
    return [
        _result(
            data.answer,
            data.answer_url or "#",
            data.answer_text,
            ResultType.ANSWER,
            max_length,
        )
    ]


def _extract_definition(data: InstantAnswerResponse, max_length: int) -> list[SearchResult]:
    if not (data.definition and data.definition_text):
        return []
    return [
        _result(
            data.definition,
            data.definition_url or "#",
            data.definition_text,
            ResultType.DEFINITION,
            max_length,
        )
    ]


def _extract_related_topics(data: InstantAnswerResponse, max_length: int) -> list[SearchResult]:
    results = []
    for topic in data.related_topics[:MAX_RELATED_TOPICS]:
        if not (topic.text and topic.first_url):
            continue
        title = topic.text.split(" - ")[0] or topic.text
        results.append(
            _result(title, topic.first_url, topic.text, ResultType.RELATED_TOPIC, max_length)
        )
    return results


def _extract_web_results(data: InstantAnswerResponse, max_length: int) -> list[SearchResult]:
    results = []
    for item in data.results[:MAX_WEB_RESULTS]:
        if not (item.title and item.first_url):
            continue
        results.append(
            _result(
                item.title,
                item.first_url,
                item.text or item.title,
                ResultType.WEB_RESULT,
                max_length,
            )
        )
    return results


# Evaluated in order of preference
ORIGIN_EXTRACTORS: tuple[Extractor, ...] = (
    _extract_abstract,
    _extract_answer,
    _extract_definition,
    _extract_related_topics,
    _extract_web_results,
)


def placeholder_result(query: str) -> SearchResult:
    """Link to the full DuckDuckGo results page when there is no instant answer."""
    return SearchResult(
        title=f"Search results for: {query}",
        url=f"https://duckduckgo.com/?q={encode_component(query)}",
        snippet="No instant answer available. Click to view full search results on DuckDuckGo.",
        domain="duckduckgo.com",
        type=ResultType.FALLBACK,
    )


def build_provider_query(query: str, focus: Focus | str) -> str:
    """Append the focus-specific site filter to the raw query."""
    site_filter = FOCUS_SITE_FILTERS.get(str(focus), "")
    if not site_filter:
        return query
    return f"{query} {site_filter}"


def parse_instant_answer(
    data: dict[str, Any],
    original_query: str,
    max_length: int | None = None,
) -> list[SearchResult]:
    """Normalize a raw Instant Answer payload into SearchResult records.

    Args:
        data: Parsed JSON from the Instant Answer endpoint
        original_query: The user's query (without site filters), used for the placeholder
        max_length: Snippet budget. If None, uses settings.max_snippet_length

    Returns:
        Normalized results; a single FALLBACK placeholder if nothing was usable
    """
    max_length = max_length or settings.max_snippet_length
    response = InstantAnswerResponse.model_validate(data if isinstance(data, dict) else {})

    results: list[SearchResult] = []
    for extractor in ORIGIN_EXTRACTORS:
        try:
            results.extend(extractor(response, max_length))
        except ValidationError as e:
            logger.warning(
                f"Skipping malformed instant-answer entry from {extractor.__name__}",
                extra={"error": str(e)},
            )

    if not results:
        results.append(placeholder_result(original_query))

    logger.info(
        f"Processed {len(results)} results from DuckDuckGo",
        extra={"origins": ",".join(sorted({r.type.value for r in results}))},
    )
    return results


def instant_answer_search(query: str, focus: Focus | str = Focus.GENERAL) -> list[SearchResult]:
    """Query the Instant Answer API and normalize the response.

    Raises:
        httpx.HTTPError, QuotaExceededError, ValueError: provider failures propagate;
        the web-search tier chain treats them as zero results.
    """
    params = {
        "q": build_provider_query(query, focus),
        "format": "json",
        "no_html": "1",
        "skip_disambig": "1",
        "no_redirect": "1",
        "t": settings.search_app_tag,
    }

    logger.info(f"Querying DuckDuckGo Instant Answer API: {query}", extra={"focus": str(focus)})
    data = make_api_request(settings.search_endpoint, params)
    return parse_instant_answer(data, query)
