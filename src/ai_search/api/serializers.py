"""Map ORM rows to API response schemas."""

import math
from datetime import datetime, timezone

from ai_search.db.models import Collection, Search, User
from ai_search.types.api import (
    CollectionDetailOut,
    CollectionMetadataOut,
    CollectionOut,
    Pagination,
    SearchDetailOut,
    SearchMetadataOut,
    SearchOut,
    SearchSummaryOut,
)
from ai_search.types.auth import Preferences, UserOut
from ai_search.types.search import SearchResult


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps. SQLite drops the offset on the way back."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _metadata(search: Search) -> SearchMetadataOut:
    return SearchMetadataOut(
        processing_time_ms=search.processing_time_ms,
        tokens_used_estimate=search.tokens_used_estimate,
        source_count=search.source_count,
    )


def _sources(search: Search) -> list[SearchResult]:
    return [SearchResult.model_validate(s) for s in search.sources]


def search_out(search: Search) -> SearchOut:
    return SearchOut(
        id=search.id,
        query=search.query,
        answer=search.answer,
        sources=_sources(search),
        focus=search.focus,
        conversation_id=search.conversation_id,
        created_at=as_utc(search.created_at),
        metadata=_metadata(search),
    )


def search_detail_out(search: Search) -> SearchDetailOut:
    return SearchDetailOut(
        **search_out(search).model_dump(),
        updated_at=as_utc(search.updated_at),
        is_bookmarked=search.is_bookmarked,
    )


def search_summary_out(search: Search) -> SearchSummaryOut:
    return SearchSummaryOut(
        id=search.id,
        query=search.query,
        answer_preview=search.answer_preview,
        sources_count=search.source_count,
        sources=_sources(search),
        focus=search.focus,
        focus_label=search.focus_label,
        created_at=as_utc(search.created_at),
        is_bookmarked=search.is_bookmarked,
        metadata=_metadata(search),
    )


def collection_out(collection: Collection) -> CollectionOut:
    return CollectionOut(
        id=collection.id,
        name=collection.name,
        description=collection.description,
        searches_count=len(collection.searches),
        tags=collection.tags,
        is_public=collection.is_public,
        color=collection.color,
        created_at=as_utc(collection.created_at),
        updated_at=as_utc(collection.updated_at),
        metadata=CollectionMetadataOut(
            total_searches=collection.total_searches,
            last_updated=as_utc(collection.last_updated),
        ),
    )


def collection_detail_out(collection: Collection) -> CollectionDetailOut:
    return CollectionDetailOut(
        **collection_out(collection).model_dump(),
        searches=[search_summary_out(s) for s in collection.searches],
    )


def user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        preferences=Preferences.model_validate(user.preferences or {}),
        is_active=user.is_active,
        last_login=as_utc(user.last_login),
        created_at=as_utc(user.created_at),
    )


def pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit))
