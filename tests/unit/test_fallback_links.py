"""Tests for the referral-link generator."""

from unittest.mock import patch

from ai_search.tools.fallback_links import (
    curated_referral_links,
    fallback_links,
    find_specific_content,
    primary_search_link,
)
from ai_search.types.search import Focus, ResultType


class TestNewsFocus:
    def test_climate_change_news_links(self):
        """News has no specific finders, so the curated set is used."""
        links = fallback_links("climate change", Focus.NEWS)

        assert [link.url for link in links] == [
            "https://duckduckgo.com/?q=climate%20change",
            "https://news.google.com/search?q=climate%20change&hl=en-US&gl=US&ceid=US:en",
            "https://www.reuters.com/search/news?blob=climate%20change",
        ]
        assert [link.type for link in links] == [
            ResultType.PRIMARY_SEARCH,
            ResultType.LATEST_NEWS,
            ResultType.PROFESSIONAL_NEWS,
        ]
        assert links[0].title == "DuckDuckGo: climate change"


class TestSpecificContent:
    def test_technical_keywords(self):
        links = fallback_links("react hooks", Focus.TECHNICAL)

        assert [link.type for link in links] == [
            ResultType.PRIMARY_SEARCH,
            ResultType.SPECIFIC_QA,
            ResultType.SPECIFIC_REPO,
            ResultType.SPECIFIC_DOCS,
        ]
        assert links[1].url == "https://stackoverflow.com/questions/tagged/react"
        assert links[2].url == (
            "https://github.com/search?q=react-hooks&type=repositories&s=stars&o=desc"
        )
        assert links[3].url == "https://developer.mozilla.org/en-US/search?q=react"

    def test_technical_without_keywords_still_has_github(self):
        links = find_specific_content("borrow checker", Focus.TECHNICAL)

        assert [link.type for link in links] == [
            ResultType.PRIMARY_SEARCH,
            ResultType.SPECIFIC_REPO,
        ]

    def test_first_matching_keyword_in_query_order(self):
        links = find_specific_content("Docker and Python deployment", Focus.TECHNICAL)

        qa = next(link for link in links if link.type == ResultType.SPECIFIC_QA)
        assert qa.title == "Stack Overflow: docker"

    def test_academic_links_to_arxiv(self):
        links = fallback_links("graph neural networks", Focus.ACADEMIC)

        assert links[1].domain == "arxiv.org"
        assert links[1].url.startswith(
            "https://arxiv.org/search/?query=graph%20neural%20networks"
        )

    def test_general_links_to_wikipedia_and_youtube(self):
        links = fallback_links("Ada Lovelace")

        assert links[1].url == "https://en.wikipedia.org/wiki/Ada_Lovelace"
        assert links[2].url == (
            "https://www.youtube.com/results?search_query=Ada%20Lovelace%20tutorial"
        )

    def test_news_has_no_specific_links(self):
        assert find_specific_content("election results", Focus.NEWS) == []


class TestCuratedLinks:
    def test_primary_plus_two_for_every_focus(self):
        for focus in Focus:
            links = curated_referral_links("some query", focus)
            assert len(links) == 3
            assert links[0] == primary_search_link("some query")

    def test_technical_tag_is_slugged(self):
        links = curated_referral_links("Async Await", Focus.TECHNICAL)

        assert links[1].url == "https://stackoverflow.com/questions/tagged/async-await"


class TestFallbackLinksContract:
    def test_deterministic(self):
        assert fallback_links("rust ownership", Focus.TECHNICAL) == fallback_links(
            "rust ownership", Focus.TECHNICAL
        )

    def test_unknown_focus_uses_general_curated(self):
        links = fallback_links("anything", "sports")

        assert len(links) == 3
        assert links[1].type == ResultType.COMPREHENSIVE_GUIDE

    def test_never_raises(self):
        with patch(
            "ai_search.tools.fallback_links.find_specific_content",
            side_effect=RuntimeError("boom"),
        ):
            links = fallback_links("climate change", Focus.NEWS)

        assert len(links) == 1
        assert links[0].type == ResultType.FALLBACK
        assert links[0].url == "https://duckduckgo.com/?q=climate%20change"

    def test_long_query_still_produces_links(self):
        query = "é" * 500

        links = fallback_links(query, Focus.NEWS)

        assert len(links) == 3
        assert all(link.url.startswith("https://") for link in links)

    def test_max_length_query_keeps_snippets_bounded(self):
        query = ("climate " * 62 + "python").strip()
        assert len(query) <= 500

        for focus in Focus:
            links = fallback_links(query, focus)

            assert links
            for link in links:
                assert len(link.snippet) <= 453, (focus, link.type)
                assert len(link.title) <= 200
