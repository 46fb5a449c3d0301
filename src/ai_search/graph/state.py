"""Pydantic state definitions for LangGraph workflow."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ai_search.types.search import Focus, SearchResult


class SearchState(BaseModel):
    """Shared state for the search orchestration graph.

    Each node returns a partial update; LangGraph merges it into this state.
    """

    # Pydantic configuration - allow arbitrary types for LangGraph compatibility
    model_config = ConfigDict(arbitrary_types_allowed=True)

    # ------------------------
    # User input
    # ------------------------
    query: str = Field(
        default="",
        description="Original user query",
    )
    focus: Focus = Field(
        default=Focus.GENERAL,
        description="Focus mode selecting site filters, referral links and tone",
    )
    conversation_id: str | None = Field(
        default=None,
        description="Optional client-side conversation identifier",
    )

    # ------------------------
    # Search phase
    # ------------------------
    sources: list[SearchResult] = Field(
        default_factory=list,
        description="Normalized results from the web-search tier chain",
    )
    search_error: str | None = Field(
        default=None,
        description="Error absorbed by the searcher node",
    )

    # ------------------------
    # Answer phase
    # ------------------------
    answer: str = Field(
        default="",
        description="AI summary or templated fallback answer",
    )
    summary_error: str | None = Field(
        default=None,
        description="Error absorbed by the summarizer node",
    )
    mode: Literal["ai", "fallback"] | None = Field(
        default=None,
        description="Which node produced the answer",
    )
    tokens_used_estimate: int = Field(
        default=0,
        ge=0,
        description="Rough token count of the answer (chars / 4)",
    )

    # ------------------------
    # Metadata
    # ------------------------
    stages: list[str] = Field(
        default_factory=list,
        description="Node names in execution order",
    )
    run_metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Per-node runtime details (latency, provider, fallback metadata)",
    )
