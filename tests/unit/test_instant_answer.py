"""Tests for the DuckDuckGo Instant Answer client."""

from unittest.mock import MagicMock, Mock, patch

import httpx
import pytest

from ai_search.config import settings
from ai_search.tools._http_utils import QuotaExceededError
from ai_search.tools.instant_answer import (
    build_provider_query,
    instant_answer_search,
    parse_instant_answer,
    placeholder_result,
)
from ai_search.types.search import Focus, ResultType


def _mock_client(mock_client_cls: Mock, status_code: int = 200, payload: dict | None = None):
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload or {}
    if status_code >= 400:
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "error", request=Mock(), response=mock_response
        )
    client = MagicMock()
    client.get.return_value = mock_response
    mock_client_cls.return_value.__enter__.return_value = client
    return client


class TestParseInstantAnswer:
    def test_abstract_becomes_instant_answer(self):
        data = {
            "Heading": "Rust (programming language)",
            "Abstract": "Rust is a language.",
            "AbstractText": "Rust is a multi-paradigm, general-purpose programming language.",
            "AbstractURL": "https://en.wikipedia.org/wiki/Rust_(programming_language)",
            "AbstractSource": "Wikipedia",
        }

        results = parse_instant_answer(data, "rust")

        assert len(results) == 1
        assert results[0].type == ResultType.INSTANT_ANSWER
        assert results[0].title == "Rust (programming language)"
        assert results[0].domain == "en.wikipedia.org"

    def test_abstract_title_falls_back_to_source(self):
        data = {"Abstract": "x", "AbstractText": "Some text", "AbstractSource": "Wikipedia"}

        results = parse_instant_answer(data, "q")

        assert results[0].title == "Wikipedia"
        assert results[0].url == "#"
        assert results[0].domain == "unknown"

    def test_answer_and_definition(self):
        data = {
            "Answer": "42",
            "AnswerText": "The answer is 42",
            "Definition": "Meaning",
            "DefinitionText": "A definition of meaning",
            "DefinitionURL": "https://www.merriam-webster.com/dictionary/meaning",
        }

        results = parse_instant_answer(data, "q")

        assert [r.type for r in results] == [ResultType.ANSWER, ResultType.DEFINITION]
        assert results[1].domain == "merriam-webster.com"

    def test_related_topics_capped_at_three(self):
        data = {
            "RelatedTopics": [
                {"Text": f"Topic {i} - description", "FirstURL": f"https://duckduckgo.com/T{i}"}
                for i in range(5)
            ]
        }

        results = parse_instant_answer(data, "q")

        assert len(results) == 3
        assert results[0].title == "Topic 0"
        assert results[0].snippet == "Topic 0 - description"
        assert all(r.type == ResultType.RELATED_TOPIC for r in results)

    def test_category_groups_are_skipped(self):
        data = {
            "RelatedTopics": [
                {"Name": "Category", "Topics": [{"Text": "nested", "FirstURL": "https://x.com"}]},
                {"Text": "Only topic", "FirstURL": "https://y.com"},
            ]
        }

        results = parse_instant_answer(data, "q")

        assert len(results) == 1
        assert results[0].title == "Only topic"

    def test_web_results_use_title_as_snippet_fallback(self):
        data = {"Results": [{"Title": "Official site", "FirstURL": "https://www.rust-lang.org/"}]}

        results = parse_instant_answer(data, "q")

        assert results[0].type == ResultType.WEB_RESULT
        assert results[0].snippet == "Official site"
        assert results[0].domain == "rust-lang.org"

    def test_empty_payload_yields_placeholder(self):
        results = parse_instant_answer({}, "climate change")

        assert len(results) == 1
        assert results[0].type == ResultType.FALLBACK
        assert results[0].url == "https://duckduckgo.com/?q=climate%20change"
        assert results[0].title == "Search results for: climate change"

    def test_non_string_answer_is_ignored(self):
        data = {"Answer": {"from": "calculator"}, "AnswerText": "2"}

        results = parse_instant_answer(data, "1+1")

        assert results == [placeholder_result("1+1")]

    def test_long_snippet_is_truncated(self):
        data = {"Abstract": "x", "AbstractText": "word " * 200, "Heading": "H"}

        results = parse_instant_answer(data, "q", max_length=450)

        assert len(results[0].snippet) <= 453
        assert results[0].snippet.endswith("...")


class TestBuildProviderQuery:
    def test_general_has_no_filter(self):
        assert build_provider_query("rust", Focus.GENERAL) == "rust"

    def test_news_filter_appended(self):
        query = build_provider_query("climate change", Focus.NEWS)
        assert query.startswith("climate change site:news.yahoo.com")
        assert "site:reuters.com" in query


class TestInstantAnswerSearch:
    @patch("httpx.Client")
    def test_request_parameters(self, mock_client_cls: Mock):
        client = _mock_client(mock_client_cls, payload={})

        results = instant_answer_search("quantum computing", Focus.ACADEMIC)

        params = client.get.call_args.kwargs["params"]
        assert params["q"].startswith("quantum computing site:edu")
        assert params["format"] == "json"
        assert params["no_html"] == "1"
        assert params["skip_disambig"] == "1"
        assert params["no_redirect"] == "1"
        assert params["t"] == settings.search_app_tag
        assert client.get.call_args.args[0] == settings.search_endpoint
        # Placeholder uses the raw query, without site filters
        assert results[0].url == "https://duckduckgo.com/?q=quantum%20computing"

    @patch("httpx.Client")
    def test_timeout_from_settings(self, mock_client_cls: Mock):
        _mock_client(mock_client_cls)

        instant_answer_search("q")

        mock_client_cls.assert_called_once_with(timeout=settings.search_timeout)

    @patch("httpx.Client")
    def test_quota_error_propagates(self, mock_client_cls: Mock):
        _mock_client(mock_client_cls, status_code=429, payload={"error": {"message": "slow"}})

        with pytest.raises(QuotaExceededError, match="slow"):
            instant_answer_search("q")

    @patch("httpx.Client")
    def test_http_error_propagates(self, mock_client_cls: Mock):
        _mock_client(mock_client_cls, status_code=500)

        with pytest.raises(httpx.HTTPStatusError):
            instant_answer_search("q")
