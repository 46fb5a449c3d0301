"""Search-related Pydantic schemas."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from ai_search.consts import (
    MAX_SOURCE_DOMAIN_LENGTH,
    MAX_SOURCE_SNIPPET_LENGTH,
    MAX_SOURCE_TITLE_LENGTH,
)
from ai_search.utils.text import ELLIPSIS, truncate_snippet


class Focus(StrEnum):
    """Search focus mode. Selects site filters, fallback links and prompt tone."""

    GENERAL = "general"
    ACADEMIC = "academic"
    NEWS = "news"
    TECHNICAL = "technical"


class ResultType(StrEnum):
    """Origin of a search result."""

    # Instant-answer origins
    INSTANT_ANSWER = "instant_answer"
    ANSWER = "answer"
    DEFINITION = "definition"
    RELATED_TOPIC = "related_topic"
    WEB_RESULT = "web_result"

    # Placeholders
    FALLBACK = "fallback"
    SEARCH_RESULTS = "search_results"

    PRIMARY_SEARCH = "primary_search"

    # Specific links derived from the query
    SPECIFIC_QA = "specific_qa"
    SPECIFIC_REPO = "specific_repo"
    SPECIFIC_DOCS = "specific_docs"
    SPECIFIC_PAPER = "specific_paper"
    SPECIFIC_ARTICLE = "specific_article"
    SPECIFIC_VIDEO = "specific_video"

    # Curated referral links
    ACADEMIC_PAPER = "academic_paper"
    ACADEMIC_DISCUSSION = "academic_discussion"
    LATEST_NEWS = "latest_news"
    PROFESSIONAL_NEWS = "professional_news"
    CODE_EXAMPLES = "code_examples"
    OFFICIAL_DOCS = "official_docs"
    COMPREHENSIVE_GUIDE = "comprehensive_guide"
    VIDEO_TUTORIALS = "video_tutorials"


class SearchResult(BaseModel):
    """A normalized web source, from the provider or synthesized as a referral link."""

    title: str = Field(..., min_length=1, description="Title of the search result")
    url: str = Field(..., min_length=1, description="URL of the source")
    snippet: str = Field(default="", description="Snippet/preview text, truncated")
    domain: str = Field(default="unknown", description="Hostname without 'www.'")
    type: ResultType = Field(default=ResultType.WEB_RESULT, description="Result origin")

    @field_validator("title")
    @classmethod
    def clip_title(cls, v: str) -> str:
        return v.strip()[:MAX_SOURCE_TITLE_LENGTH]

    @field_validator("snippet")
    @classmethod
    def clip_snippet(cls, v: str) -> str:
        # Already-truncated text (budget plus ellipsis) is left as is
        if len(v) <= MAX_SOURCE_SNIPPET_LENGTH + len(ELLIPSIS):
            return v
        return truncate_snippet(v, MAX_SOURCE_SNIPPET_LENGTH)

    @field_validator("domain")
    @classmethod
    def clip_domain(cls, v: str) -> str:
        return v.strip()[:MAX_SOURCE_DOMAIN_LENGTH] or "unknown"


def is_good_result(results: list[SearchResult]) -> bool:
    """More than one result, or exactly one that is not a placeholder."""
    if len(results) > 1:
        return True
    return len(results) == 1 and results[0].type != ResultType.FALLBACK
