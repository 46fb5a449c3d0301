#!/usr/bin/env python3
"""Command-line interface for AI Search.

Runs the search pipeline without persistence, or launches the API server.

Usage:
    # Single query
    ai-search "What is quantum computing?"

    # Focus mode and streaming progress
    ai-search --focus technical --stream "react hooks"

    # Interactive mode
    ai-search --interactive

    # JSON output
    ai-search --format json --focus news "climate change"

    # API server
    ai-search --serve --port 5000
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import TextIO

from ai_search.graph.runner import run_search, stream_search
from ai_search.types.graph import (
    GraphCompleteEvent,
    NodeEndEvent,
    NodeStartEvent,
    SearchOutcome,
)
from ai_search.types.search import Focus

# =============================================================================
# Output Formatting
# =============================================================================


class Colors:
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"
    CYAN = "\033[96m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RESET = "\033[0m"


def supports_color() -> bool:
    """Check if terminal supports colors."""
    return (
        hasattr(sys.stdout, "isatty")
        and sys.stdout.isatty()
        and os.environ.get("TERM") != "dumb"
        and os.environ.get("NO_COLOR") is None
    )


def colorize(text: str, color: str) -> str:
    """Apply color if supported."""
    if supports_color():
        return f"{color}{text}{Colors.RESET}"
    return text


# Node display names
NODE_DISPLAY = {
    "searcher": ("Searcher", "Searching the web..."),
    "summarizer": ("Summarizer", "Generating AI answer..."),
    "composer": ("Composer", "Composing answer from web results..."),
}


def format_result_pretty(result: SearchOutcome, file: TextIO = sys.stdout) -> None:
    """Format result for human-readable terminal output."""
    print(colorize("=" * 60, Colors.DIM), file=file)
    mode_color = Colors.GREEN if result.mode == "ai" else Colors.YELLOW
    print(
        colorize(
            f"Focus: {result.focus.upper()}  |  Answer: {result.mode.upper()}",
            mode_color + Colors.BOLD,
        ),
        file=file,
    )
    print(colorize("=" * 60, Colors.DIM), file=file)
    print(file=file)

    print(colorize("ANSWER:", Colors.BOLD), file=file)
    print(colorize("-" * 40, Colors.DIM), file=file)
    print(result.answer, file=file)
    print(file=file)

    if result.sources:
        print(colorize("SOURCES:", Colors.BOLD), file=file)
        print(colorize("-" * 40, Colors.DIM), file=file)
        for i, source in enumerate(result.sources, start=1):
            print(f"  [{i}] {source.title}", file=file)
            print(colorize(f"      {source.url}", Colors.DIM), file=file)
        print(file=file)

    meta = result.metadata
    print(colorize("METADATA:", Colors.DIM), file=file)
    print(colorize("-" * 40, Colors.DIM), file=file)
    print(colorize(f"  Processing time: {meta.processing_time_ms}ms", Colors.DIM), file=file)
    print(colorize(f"  Tokens (est.): {meta.tokens_used_estimate}", Colors.DIM), file=file)
    print(colorize(f"  Sources: {meta.source_count}", Colors.DIM), file=file)
    print(file=file)

    print(colorize("=" * 60, Colors.DIM), file=file)


def format_result_json(result: SearchOutcome, file: TextIO = sys.stdout) -> None:
    """Format result as JSON."""
    print(result.model_dump_json(indent=2), file=file)


# =============================================================================
# Execution Modes
# =============================================================================


def run_single_query(
    query: str,
    focus: Focus = Focus.GENERAL,
    output_format: str = "pretty",
    use_streaming: bool = False,
    debug: bool = False,
) -> int:
    """Run a single query and display the result.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    try:
        if use_streaming:
            return _run_with_streaming(query, focus, output_format)
        result = run_search(query, focus)
        _output_result(result, output_format)
        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if debug:
            import traceback

            traceback.print_exc()
        return 1


def _run_with_streaming(query: str, focus: Focus, output_format: str) -> int:
    """Run query with streaming progress display."""
    print(colorize("\nStarting search pipeline...\n", Colors.BOLD))

    result: SearchOutcome | None = None

    for event in stream_search(query, focus):
        if isinstance(event, NodeStartEvent):
            name, desc = NODE_DISPLAY.get(event.node_name, (event.node_name.title(), "Processing..."))
            print(f"  {colorize(name, Colors.CYAN)}: {colorize(desc, Colors.DIM)}")

        elif isinstance(event, NodeEndEvent):
            name, _ = NODE_DISPLAY.get(event.node_name, (event.node_name.title(), ""))
            duration = f"{event.duration_ms:.0f}ms"
            print(f"  {colorize('done', Colors.GREEN)} {name} ({colorize(duration, Colors.DIM)})")

        elif isinstance(event, GraphCompleteEvent):
            result = event.result
            print(
                f"\n{colorize('Pipeline complete', Colors.GREEN + Colors.BOLD)} "
                f"({event.total_duration_ms:.0f}ms total)\n"
            )

    if result:
        _output_result(result, output_format)
        return 0
    print("Error: No result produced", file=sys.stderr)
    return 1


def _output_result(result: SearchOutcome, output_format: str) -> None:
    """Output result in specified format."""
    if output_format == "json":
        format_result_json(result)
    else:
        format_result_pretty(result)


def run_interactive(focus: Focus = Focus.GENERAL) -> int:
    """Run in interactive REPL mode.

    Returns:
        Exit code (0 for normal exit).
    """
    print(colorize("\nAI Search Interactive Mode", Colors.CYAN + Colors.BOLD))
    print("Type a question to search.")
    print("Commands: 'quit' to exit, 'focus <mode>' to switch focus, 'help' for options")
    print(colorize("-" * 44, Colors.DIM))

    while True:
        try:
            query = input(colorize(f"\n[{focus.value}] > ", Colors.GREEN)).strip()

            if not query:
                continue

            if query.lower() in ("quit", "exit", "q"):
                print(colorize("\nGoodbye!", Colors.CYAN))
                break

            if query.lower() == "help":
                print("\nCommands:")
                print("  quit, exit, q  - Exit interactive mode")
                print("  focus <mode>   - Switch focus (general, academic, news, technical)")
                print("  help           - Show this help")
                continue

            if query.lower().startswith("focus "):
                try:
                    focus = Focus(query.split(maxsplit=1)[1].strip().lower())
                except ValueError:
                    print(colorize("Unknown focus mode.", Colors.YELLOW))
                continue

            _run_with_streaming(query, focus, "pretty")

        except KeyboardInterrupt:
            print(colorize("\n\nInterrupted. Type 'quit' to exit.", Colors.YELLOW))
        except EOFError:
            print(colorize("\nGoodbye!", Colors.CYAN))
            break

    return 0


def run_server(host: str, port: int, reload: bool = False) -> int:
    """Launch the REST API with uvicorn."""
    import uvicorn

    uvicorn.run("ai_search.api.server:app", host=host, port=port, reload=reload)
    return 0


# =============================================================================
# Main Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        prog="ai-search",
        description="AI Search: conversational web search with AI summaries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "What is quantum computing?"
  %(prog)s --focus technical --stream "react hooks"
  %(prog)s --format json --focus news "climate change" > result.json
  %(prog)s --interactive
  %(prog)s --serve --port 5000
        """,
    )

    parser.add_argument(
        "query",
        nargs="?",
        help="Question to search for",
    )

    parser.add_argument(
        "--focus",
        choices=[f.value for f in Focus],
        default=Focus.GENERAL.value,
        help="Focus mode (default: general)",
    )

    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Run in interactive mode (REPL)",
    )

    parser.add_argument(
        "-s",
        "--stream",
        action="store_true",
        help="Show streaming progress as pipeline executes",
    )

    parser.add_argument(
        "-f",
        "--format",
        choices=["pretty", "json"],
        default="pretty",
        help="Output format (default: pretty)",
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the REST API server",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Server host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=5000, help="Server port (default: 5000)")
    parser.add_argument("--reload", action="store_true", help="Reload the server on code changes")

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="ai-search 1.0.0",
    )

    args = parser.parse_args(argv)
    focus = Focus(args.focus)

    if args.serve:
        return run_server(args.host, args.port, reload=args.reload)
    if args.interactive:
        return run_interactive(focus)
    if args.query:
        return run_single_query(
            args.query,
            focus=focus,
            output_format=args.format,
            use_streaming=args.stream,
            debug=args.debug,
        )

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
