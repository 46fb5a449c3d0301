"""API request/response schemas for FastAPI endpoints.

JSON bodies use camelCase; attributes stay snake_case. Requests are accepted
in either casing.
"""

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ai_search.consts import (
    DEFAULT_COLLECTION_COLOR,
    MAX_CONVERSATION_ID_LENGTH,
    MAX_QUERY_LENGTH,
)
from ai_search.types.search import Focus, SearchResult

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Search
# =============================================================================


class SearchRequest(CamelModel):
    """Request schema for POST /api/search."""

    query: str = Field(..., min_length=1, max_length=MAX_QUERY_LENGTH)
    focus: Focus = Field(default=Focus.GENERAL)
    conversation_id: str | None = Field(default=None, max_length=MAX_CONVERSATION_ID_LENGTH)

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("conversation_id", mode="before")
    @classmethod
    def strip_conversation_id(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip() or None
        return v


class SearchMetadataOut(CamelModel):
    processing_time_ms: int
    tokens_used_estimate: int
    source_count: int


class SearchOut(CamelModel):
    """Full search record."""

    id: str
    query: str
    answer: str
    sources: list[SearchResult]
    focus: Focus
    conversation_id: str | None = None
    created_at: datetime
    metadata: SearchMetadataOut


class SearchDetailOut(SearchOut):
    updated_at: datetime
    is_bookmarked: bool


class SearchCreateResponse(CamelModel):
    """Response schema for POST /api/search."""

    search: SearchOut
    message: str


class SearchSummaryOut(CamelModel):
    """Compact view used by history and collection listings."""

    id: str
    query: str
    answer_preview: str
    sources_count: int
    sources: list[SearchResult]
    focus: Focus
    focus_label: str
    created_at: datetime
    is_bookmarked: bool
    metadata: SearchMetadataOut


class BookmarkResponse(CamelModel):
    is_bookmarked: bool
    message: str


class MessageResponse(CamelModel):
    message: str


# =============================================================================
# History
# =============================================================================


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class HistoryResponse(CamelModel):
    searches: list[SearchSummaryOut]
    pagination: Pagination


class ClearHistoryResponse(CamelModel):
    deleted_count: int
    message: str


# =============================================================================
# Collections
# =============================================================================


def _validate_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    cleaned = [t.strip() for t in tags if t and t.strip()]
    for tag in cleaned:
        if len(tag) > 50:
            raise ValueError("Tag cannot exceed 50 characters")
    return list(dict.fromkeys(cleaned))


def _validate_color(color: str | None) -> str | None:
    if color is not None and not HEX_COLOR.match(color):
        raise ValueError("Color must be a valid hex color")
    return color


class CollectionCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False
    color: str = DEFAULT_COLLECTION_COLOR

    @field_validator("name", "description", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: list[str]) -> list[str]:
        return _validate_tags(v)

    @field_validator("color")
    @classmethod
    def check_color(cls, v: str) -> str:
        return _validate_color(v)


class CollectionUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    tags: list[str] | None = None
    is_public: bool | None = None
    color: str | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: list[str] | None) -> list[str] | None:
        return _validate_tags(v)

    @field_validator("color")
    @classmethod
    def check_color(cls, v: str | None) -> str | None:
        return _validate_color(v)


class AddSearchRequest(CamelModel):
    search_id: str = Field(..., min_length=1)


class CollectionMetadataOut(CamelModel):
    total_searches: int
    last_updated: datetime


class CollectionOut(CamelModel):
    id: str
    name: str
    description: str | None = None
    searches_count: int
    tags: list[str]
    is_public: bool
    color: str
    created_at: datetime
    updated_at: datetime
    metadata: CollectionMetadataOut


class CollectionDetailOut(CollectionOut):
    searches: list[SearchSummaryOut]


class CollectionListResponse(CamelModel):
    collections: list[CollectionOut]
    pagination: Pagination


class CollectionResponse(CamelModel):
    collection: CollectionOut
    message: str | None = None


class CollectionDetailResponse(CamelModel):
    collection: CollectionDetailOut
    message: str | None = None


# =============================================================================
# Health
# =============================================================================


class HealthResponse(CamelModel):
    """Response schema for GET /api/health."""

    status: Literal["ok"] = "ok"
    version: str = "1.0.0"
    summarizer_provider: str
    summarizer_configured: bool
    gemini_configured: bool
    duckduckgo_backup: bool
    timestamp: datetime
