"""Tests for the web-search tier chain."""

from unittest.mock import Mock, patch

import httpx

from ai_search.config import settings
from ai_search.tools.web_search import search_tiers, web_search
from ai_search.types.search import Focus, ResultType, SearchResult, is_good_result


def _result(kind: ResultType = ResultType.INSTANT_ANSWER, title: str = "Result") -> SearchResult:
    return SearchResult(title=title, url="https://example.com", snippet="s", type=kind)


class TestIsGoodResult:
    def test_empty_is_not_good(self):
        assert not is_good_result([])

    def test_single_placeholder_is_not_good(self):
        assert not is_good_result([_result(ResultType.FALLBACK)])

    def test_single_real_result_is_good(self):
        assert is_good_result([_result()])

    def test_two_results_are_good_even_if_placeholders(self):
        assert is_good_result([_result(ResultType.FALLBACK), _result(ResultType.FALLBACK)])


class TestSearchResultLimits:
    def test_long_snippet_truncated(self):
        result = SearchResult(title="t", url="https://x.org", snippet="word " * 200)

        assert len(result.snippet) <= 453
        assert result.snippet.endswith("...")

    def test_truncated_snippet_is_stable(self):
        snippet = "a" * 450 + "..."

        result = SearchResult(title="t", url="https://x.org", snippet=snippet)

        assert result.snippet == snippet


class TestSearchTiers:
    def test_backup_disabled(self, monkeypatch):
        monkeypatch.setattr(settings, "use_duckduckgo_backup", False)
        assert [tier.name for tier in search_tiers(settings)] == ["instant_answer"]

    def test_backup_enabled(self, monkeypatch):
        monkeypatch.setattr(settings, "use_duckduckgo_backup", True)
        assert [tier.name for tier in search_tiers(settings)] == [
            "instant_answer",
            "duckduckgo_text",
        ]


class TestWebSearch:
    @patch("ai_search.tools.web_search.fallback_links")
    @patch("ai_search.tools.web_search.instant_answer_search")
    def test_instant_answer_wins(self, mock_ia: Mock, mock_fallback: Mock, no_summarizer):
        mock_ia.return_value = [_result()]

        results = web_search("rust", Focus.GENERAL)

        assert results == [_result()]
        mock_ia.assert_called_once_with("rust", Focus.GENERAL)
        mock_fallback.assert_not_called()

    @patch("ai_search.tools.web_search.instant_answer_search")
    def test_placeholder_falls_through_to_referral_links(self, mock_ia: Mock, no_summarizer):
        mock_ia.return_value = [_result(ResultType.FALLBACK)]

        results = web_search("climate change", "news")

        assert len(results) == 3
        assert results[1].type == ResultType.LATEST_NEWS

    @patch("ai_search.tools.web_search.instant_answer_search")
    def test_provider_error_falls_through(self, mock_ia: Mock, no_summarizer):
        mock_ia.side_effect = httpx.ConnectError("unreachable")

        results = web_search("climate change", Focus.NEWS)

        assert [r.type for r in results] == [
            ResultType.PRIMARY_SEARCH,
            ResultType.LATEST_NEWS,
            ResultType.PROFESSIONAL_NEWS,
        ]

    @patch("ai_search.tools.web_search.duckduckgo_search")
    @patch("ai_search.tools.web_search.instant_answer_search")
    def test_duckduckgo_backup_consulted_when_enabled(
        self, mock_ia: Mock, mock_ddg: Mock, monkeypatch
    ):
        monkeypatch.setattr(settings, "use_duckduckgo_backup", True)
        mock_ia.return_value = [_result(ResultType.FALLBACK)]
        mock_ddg.return_value = [
            _result(ResultType.WEB_RESULT, "a"),
            _result(ResultType.WEB_RESULT, "b"),
        ]

        results = web_search("rust", Focus.TECHNICAL)

        assert [r.title for r in results] == ["a", "b"]
        mock_ddg.assert_called_once_with("rust", Focus.TECHNICAL)

    @patch("ai_search.tools.web_search.duckduckgo_search")
    @patch("ai_search.tools.web_search.instant_answer_search")
    def test_duckduckgo_backup_skipped_when_disabled(
        self, mock_ia: Mock, mock_ddg: Mock, no_summarizer
    ):
        mock_ia.return_value = []

        results = web_search("rust")

        mock_ddg.assert_not_called()
        assert results[0].type == ResultType.PRIMARY_SEARCH

    def test_config_override(self):
        config = settings.model_copy(update={"use_duckduckgo_backup": False})
        with patch(
            "ai_search.tools.web_search.instant_answer_search", side_effect=ValueError("bad json")
        ):
            results = web_search("q", Focus.GENERAL, config=config)

        assert results
