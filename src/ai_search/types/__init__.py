"""Type definitions for ai-search.

This module re-exports all types from submodules for convenient imports.
"""

from ai_search.types.api import (
    AddSearchRequest,
    BookmarkResponse,
    CollectionCreate,
    CollectionDetailOut,
    CollectionOut,
    CollectionUpdate,
    HealthResponse,
    HistoryResponse,
    Pagination,
    SearchCreateResponse,
    SearchDetailOut,
    SearchOut,
    SearchRequest,
    SearchSummaryOut,
)
from ai_search.types.auth import (
    AuthResponse,
    LoginRequest,
    PasswordChange,
    Preferences,
    ProfileUpdate,
    RegisterRequest,
    UserOut,
)
from ai_search.types.graph import (
    FallbackResponse,
    GraphCompleteEvent,
    NodeEndEvent,
    NodeStartEvent,
    SearchMetadata,
    SearchOutcome,
    StreamEvent,
)
from ai_search.types.search import Focus, ResultType, SearchResult, is_good_result

__all__ = [
    # Search
    "Focus",
    "ResultType",
    "SearchResult",
    "is_good_result",
    # Graph
    "SearchMetadata",
    "SearchOutcome",
    "FallbackResponse",
    "NodeStartEvent",
    "NodeEndEvent",
    "GraphCompleteEvent",
    "StreamEvent",
    # API
    "SearchRequest",
    "SearchOut",
    "SearchDetailOut",
    "SearchSummaryOut",
    "SearchCreateResponse",
    "BookmarkResponse",
    "HistoryResponse",
    "Pagination",
    "CollectionCreate",
    "CollectionUpdate",
    "CollectionOut",
    "CollectionDetailOut",
    "AddSearchRequest",
    "HealthResponse",
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdate",
    "PasswordChange",
    "Preferences",
    "UserOut",
    "AuthResponse",
]
