"""SQLAlchemy models for users, searches and collections."""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from ai_search.consts import (
    DEFAULT_COLLECTION_COLOR,
    MAX_ANSWER_LENGTH,
    MAX_CONVERSATION_ID_LENGTH,
    MAX_QUERY_LENGTH,
)
from ai_search.types.search import Focus, SearchResult

ANSWER_PREVIEW_LENGTH = 200


def _uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


collection_searches = Table(
    "collection_searches",
    Base.metadata,
    Column("collection_id", ForeignKey("collections.id", ondelete="CASCADE"), primary_key=True),
    Column("search_id", ForeignKey("searches.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base, TimestampMixin):
    """Account owning searches and collections."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(100))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    preferences: Mapped[dict[str, Any]] = mapped_column(
        JSON, default=lambda: {"theme": "light", "searchFocus": Focus.GENERAL.value}
    )

    searches: Mapped[list["Search"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    collections: Mapped[list["Collection"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )


class Search(Base, TimestampMixin):
    """One answered query with its sources.

    source_count is derived from sources and never set by callers.
    """

    __tablename__ = "searches"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    query: Mapped[str] = mapped_column(String(MAX_QUERY_LENGTH))
    answer: Mapped[str] = mapped_column(Text)
    sources: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    focus: Mapped[str] = mapped_column(String(20), default=Focus.GENERAL.value, index=True)
    conversation_id: Mapped[str | None] = mapped_column(
        String(MAX_CONVERSATION_ID_LENGTH), nullable=True, index=True
    )
    processing_time_ms: Mapped[int] = mapped_column(Integer, default=0)
    tokens_used_estimate: Mapped[int] = mapped_column(Integer, default=0)
    source_count: Mapped[int] = mapped_column(Integer, default=0)
    is_bookmarked: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    user: Mapped[User] = relationship(back_populates="searches")
    collections: Mapped[list["Collection"]] = relationship(
        secondary=collection_searches, back_populates="searches"
    )

    def __init__(self, *, sources: list[SearchResult | dict[str, Any]] | None = None, **kwargs):
        kwargs.pop("source_count", None)
        if "answer" in kwargs:
            kwargs["answer"] = kwargs["answer"][:MAX_ANSWER_LENGTH]
        if "focus" in kwargs:
            kwargs["focus"] = Focus(kwargs["focus"]).value
        super().__init__(**kwargs)
        self.set_sources(sources or [])

    def set_sources(self, sources: list[SearchResult | dict[str, Any]]) -> None:
        normalized = [
            s.model_dump(mode="json") if isinstance(s, SearchResult) else dict(s) for s in sources
        ]
        self.sources = normalized
        self.source_count = len(normalized)

    def toggle_bookmark(self) -> bool:
        self.is_bookmarked = not self.is_bookmarked
        return self.is_bookmarked

    @property
    def answer_preview(self) -> str:
        if len(self.answer) > ANSWER_PREVIEW_LENGTH:
            return self.answer[:ANSWER_PREVIEW_LENGTH] + "..."
        return self.answer

    @property
    def focus_label(self) -> str:
        return self.focus.capitalize()


class Collection(Base, TimestampMixin):
    """Named, user-owned group of searches."""

    __tablename__ = "collections"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_collection_user_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False)
    color: Mapped[str] = mapped_column(String(7), default=DEFAULT_COLLECTION_COLOR)
    total_searches: Mapped[int] = mapped_column(Integer, default=0)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    user: Mapped[User] = relationship(back_populates="collections")
    searches: Mapped[list[Search]] = relationship(
        secondary=collection_searches,
        back_populates="collections",
        order_by=Search.created_at.desc(),
    )

    def _touch(self) -> None:
        self.total_searches = len(self.searches)
        self.last_updated = utcnow()

    def add_search(self, search: Search) -> bool:
        """Add search unless already present. Returns True if membership changed."""
        if any(s.id == search.id for s in self.searches):
            return False
        self.searches.append(search)
        self._touch()
        return True

    def remove_search(self, search_id: str) -> bool:
        """Remove the search with search_id. Returns True if membership changed."""
        remaining = [s for s in self.searches if s.id != search_id]
        if len(remaining) == len(self.searches):
            return False
        self.searches = remaining
        self._touch()
        return True

    def clear_searches(self) -> None:
        self.searches = []
        self._touch()
