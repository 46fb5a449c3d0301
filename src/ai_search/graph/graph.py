"""LangGraph workflow assembly for the search orchestrator."""

from __future__ import annotations

from typing import Literal

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from ai_search.graph.state import SearchState

# =============================================================================
# Node Imports (lazy to avoid circular imports)
# =============================================================================


def _get_searcher_node():
    from ai_search.graph.nodes.searcher import searcher_node

    return searcher_node


def _get_summarizer_node():
    from ai_search.graph.nodes.summarizer import summarizer_node

    return summarizer_node


def _get_composer_node():
    from ai_search.graph.nodes.composer import composer_node

    return composer_node


# =============================================================================
# Routing Functions
# =============================================================================


def _route_after_searcher(state: SearchState) -> Literal["summarizer", "composer"]:
    """Summarize when there are sources, otherwise go straight to the fallback answer."""
    if state.sources:
        return "summarizer"
    return "composer"


def _route_after_summarizer(state: SearchState) -> Literal["composer", "__end__"]:
    """Finish with the AI answer, or fall back to the composer on failure."""
    if state.answer and not state.summary_error:
        return END
    return "composer"


# =============================================================================
# Graph Builder
# =============================================================================


def build_graph() -> StateGraph:
    """Build the LangGraph state machine (not compiled).

    Returns:
        StateGraph ready for compilation.

    Graph Structure:
        START -> searcher -> [conditional]
                             |-- sources -> summarizer -> [conditional]
                             |                            |-- answer -> END
                             |                            +-- error -> composer -> END
                             +-- no sources -> composer -> END
    """
    graph = StateGraph(SearchState)

    # -----------------------------------------------------------------
    # Add Nodes
    # -----------------------------------------------------------------
    graph.add_node("searcher", _get_searcher_node())
    graph.add_node("summarizer", _get_summarizer_node())
    graph.add_node("composer", _get_composer_node())

    # -----------------------------------------------------------------
    # Set Entry Point
    # -----------------------------------------------------------------
    graph.set_entry_point("searcher")

    # -----------------------------------------------------------------
    # Add Edges
    # -----------------------------------------------------------------
    graph.add_conditional_edges(
        source="searcher",
        path=_route_after_searcher,
        path_map={
            "summarizer": "summarizer",
            "composer": "composer",
        },
    )
    graph.add_conditional_edges(
        source="summarizer",
        path=_route_after_summarizer,
        path_map={
            "composer": "composer",
            END: END,
        },
    )
    graph.add_edge("composer", END)

    return graph


# =============================================================================
# Compiled Graph Factory
# =============================================================================


def compile_graph() -> CompiledStateGraph:
    """Build and compile the graph.

    Returns:
        Compiled graph ready for invoke/stream.

    Example:
        graph = compile_graph()
        result = graph.invoke({"query": "rust ownership", "focus": "technical"})
    """
    return build_graph().compile()


# =============================================================================
# Default Compiled Instance
# =============================================================================

# Lazy singleton for simple use cases
_default_graph: CompiledStateGraph | None = None


def get_default_graph() -> CompiledStateGraph:
    """Get or create the default compiled graph.

    Returns:
        Cached compiled graph instance.
    """
    global _default_graph
    if _default_graph is None:
        _default_graph = compile_graph()
    return _default_graph
