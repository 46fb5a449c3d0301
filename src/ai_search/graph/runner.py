"""Graph execution utilities with streaming support."""

from __future__ import annotations

import time
from collections.abc import Iterator
from typing import Any

from ai_search.graph.graph import get_default_graph
from ai_search.graph.nodes.composer import FALLBACK_PROCESSING_TIME_MS, compose_fallback
from ai_search.graph.state import SearchState
from ai_search.types.graph import (
    GraphCompleteEvent,
    NodeEndEvent,
    NodeStartEvent,
    SearchMetadata,
    SearchOutcome,
    StreamEvent,
)
from ai_search.types.search import Focus
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)

# =============================================================================
# Sync Execution
# =============================================================================


def run_search(
    query: str,
    focus: Focus | str = Focus.GENERAL,
    conversation_id: str | None = None,
) -> SearchOutcome:
    """Execute the search graph synchronously.

    Args:
        query: User query.
        focus: Focus mode.
        conversation_id: Optional client conversation id, carried through to the outcome.

    Returns:
        SearchOutcome with answer, sources and metadata. Never reflects an
        upstream failure as an exception; see SearchOutcome.mode.

    Example:
        outcome = run_search("climate change", "news")
        print(outcome.answer)
        print(f"{outcome.metadata.source_count} sources ({outcome.mode})")
    """
    start_time = time.perf_counter()

    initial_state = SearchState(query=query, focus=Focus(focus), conversation_id=conversation_id)
    final_state = get_default_graph().invoke(initial_state)

    total_time = time.perf_counter() - start_time

    return _build_outcome(final_state, total_time)


# =============================================================================
# Streaming Execution
# =============================================================================


def stream_search(
    query: str,
    focus: Focus | str = Focus.GENERAL,
    conversation_id: str | None = None,
) -> Iterator[StreamEvent]:
    """Execute the search graph with streaming progress updates.

    Yields:
        StreamEvent instances (NodeStartEvent, NodeEndEvent, GraphCompleteEvent).

    Example:
        for event in stream_search("rust ownership", "technical"):
            if isinstance(event, NodeEndEvent):
                print(f"Completed {event.node_name} ({event.duration_ms:.0f}ms)")
            elif isinstance(event, GraphCompleteEvent):
                print(event.result.answer)
    """
    start_time = time.perf_counter()

    initial_state = SearchState(query=query, focus=Focus(focus), conversation_id=conversation_id)
    accumulated_state: dict[str, Any] = initial_state.model_dump()

    # Each update is emitted when its node finishes; the node started when the previous one ended
    previous_end = start_time

    for event in get_default_graph().stream(initial_state, stream_mode="updates"):
        for node_name, node_output in event.items():
            yield NodeStartEvent(node_name=node_name, timestamp=previous_end)

            current_time = time.perf_counter()
            output_keys = list(node_output.keys()) if isinstance(node_output, dict) else []
            yield NodeEndEvent(
                node_name=node_name,
                timestamp=current_time,
                duration_ms=(current_time - previous_end) * 1000,
                output_keys=output_keys,
            )
            previous_end = current_time

            if isinstance(node_output, dict):
                accumulated_state.update(node_output)

    total_time = time.perf_counter() - start_time
    result = _build_outcome(accumulated_state, total_time)

    yield GraphCompleteEvent(
        result=result,
        total_duration_ms=total_time * 1000,
    )


# =============================================================================
# Helper Functions
# =============================================================================


def _build_outcome(state: SearchState | dict, total_time: float) -> SearchOutcome:
    """Build SearchOutcome from final SearchState or dict."""
    # Handle dict returned by graph.invoke
    if isinstance(state, dict):
        state = SearchState.model_validate(state)

    answer = state.answer
    sources = state.sources
    mode = state.mode

    if not answer or mode is None:
        # Only reachable if a node misbehaves; the outcome still carries an answer
        logger.warning("Graph finished without an answer, composing fallback")
        fallback = compose_fallback(state.query, state.focus, sources)
        answer, sources, mode = fallback.answer, fallback.sources, "fallback"

    if mode == "fallback":
        processing_time_ms = FALLBACK_PROCESSING_TIME_MS
        tokens = 0
    else:
        processing_time_ms = round(total_time * 1000)
        tokens = state.tokens_used_estimate

    return SearchOutcome(
        query=state.query,
        focus=state.focus,
        conversation_id=state.conversation_id,
        answer=answer,
        sources=sources,
        metadata=SearchMetadata(
            processing_time_ms=processing_time_ms,
            tokens_used_estimate=tokens,
            source_count=len(sources),
        ),
        mode=mode,
        stages=state.stages,
        search_error=state.search_error,
        summary_error=state.summary_error,
    )
