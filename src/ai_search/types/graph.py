"""Graph execution types for runner and streaming."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field

from ai_search.types.search import Focus, SearchResult

AnswerMode = Literal["ai", "fallback"]

# =============================================================================
# Search Outcome
# =============================================================================


class SearchMetadata(BaseModel):
    """Timing and size figures attached to every answer."""

    processing_time_ms: int = Field(default=0, ge=0)
    tokens_used_estimate: int = Field(default=0, ge=0)
    source_count: int = Field(default=0, ge=0)


class FallbackResponse(BaseModel):
    """Templated answer produced when no AI summary is available."""

    answer: str
    sources: list[SearchResult]
    metadata: SearchMetadata


class SearchOutcome(BaseModel):
    """Structured result from one orchestrator run."""

    query: str
    focus: Focus
    conversation_id: str | None = None

    answer: str
    sources: list[SearchResult] = Field(default_factory=list)
    metadata: SearchMetadata = Field(default_factory=SearchMetadata)
    mode: AnswerMode

    # Node names in execution order
    stages: list[str] = Field(default_factory=list)

    # Absorbed failures, kept for logging and debugging
    search_error: str | None = None
    summary_error: str | None = None

    @computed_field
    @property
    def is_ai_answer(self) -> bool:
        return self.mode == "ai"


# =============================================================================
# Streaming Event Types
# =============================================================================


class NodeStartEvent(BaseModel):
    """Event emitted when a node starts execution."""

    model_config = {"frozen": True}

    node_name: str
    timestamp: float


class NodeEndEvent(BaseModel):
    """Event emitted when a node completes execution."""

    model_config = {"frozen": True}

    node_name: str
    timestamp: float
    duration_ms: float
    output_keys: list[str] = Field(default_factory=list)


class GraphCompleteEvent(BaseModel):
    """Event emitted when graph execution completes."""

    model_config = {"frozen": True}

    result: SearchOutcome
    total_duration_ms: float


# Type alias for streaming events
StreamEvent = NodeStartEvent | NodeEndEvent | GraphCompleteEvent
