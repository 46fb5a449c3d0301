"""Root conftest for test suite - adds src to Python path and provides shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path for package imports
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from ai_search.config import settings  # noqa: E402
from ai_search.types.search import ResultType, SearchResult  # noqa: E402


@pytest.fixture
def no_summarizer(monkeypatch):
    """Run with Gemini unconfigured so every summary falls back to the composer."""
    monkeypatch.setattr(settings, "summarizer_provider", "gemini")
    monkeypatch.setattr(settings, "gemini_api_key", "")
    monkeypatch.setattr(settings, "use_duckduckgo_backup", False)


@pytest.fixture
def sample_results() -> list[SearchResult]:
    return [
        SearchResult(
            title="Rust (programming language)",
            url="https://en.wikipedia.org/wiki/Rust_(programming_language)",
            snippet="Rust is a general-purpose programming language emphasizing performance.",
            domain="en.wikipedia.org",
            type=ResultType.INSTANT_ANSWER,
        ),
        SearchResult(
            title="Rust Ownership",
            url="https://doc.rust-lang.org/book/ch04-01-what-is-ownership.html",
            snippet="Ownership is a set of rules that govern how a Rust program manages memory.",
            domain="doc.rust-lang.org",
            type=ResultType.RELATED_TOPIC,
        ),
    ]


def pytest_collection_modifyitems(items):
    """Mark every test under tests/unit with the unit marker."""
    unit_dir = Path(__file__).parent / "unit"
    for item in items:
        if unit_dir in item.path.parents:
            item.add_marker(pytest.mark.unit)
