"""Tests for the command-line interface."""

from unittest.mock import patch

import pytest

from ai_search.cli import main
from ai_search.types.graph import GraphCompleteEvent, NodeEndEvent, NodeStartEvent, SearchOutcome
from ai_search.types.search import Focus


@pytest.fixture
def outcome(sample_results) -> SearchOutcome:
    return SearchOutcome(
        query="what is rust",
        focus=Focus.TECHNICAL,
        answer="Rust is fast.",
        sources=sample_results,
        mode="ai",
        stages=["searcher", "summarizer"],
    )


class TestCli:
    @patch("ai_search.cli.run_search")
    def test_single_query_json(self, mock_run, outcome, capsys):
        mock_run.return_value = outcome

        exit_code = main(["--focus", "technical", "--format", "json", "what is rust"])

        assert exit_code == 0
        mock_run.assert_called_once_with("what is rust", Focus.TECHNICAL)
        out = capsys.readouterr().out
        assert '"answer": "Rust is fast."' in out
        assert '"is_ai_answer": true' in out

    @patch("ai_search.cli.run_search")
    def test_single_query_pretty(self, mock_run, outcome, capsys):
        mock_run.return_value = outcome

        assert main(["what is rust"]) == 0

        out = capsys.readouterr().out
        assert "ANSWER:" in out
        assert "[1] Rust (programming language)" in out

    @patch("ai_search.cli.run_search", side_effect=RuntimeError("boom"))
    def test_error_exit_code(self, _mock_run, capsys):
        assert main(["what is rust"]) == 1
        assert "Error: boom" in capsys.readouterr().err

    @patch("ai_search.cli.stream_search")
    def test_streaming(self, mock_stream, outcome, capsys):
        mock_stream.return_value = iter(
            [
                NodeStartEvent(node_name="searcher", timestamp=0.0),
                NodeEndEvent(node_name="searcher", timestamp=0.1, duration_ms=100.0),
                GraphCompleteEvent(result=outcome, total_duration_ms=120.0),
            ]
        )

        assert main(["--stream", "what is rust"]) == 0

        out = capsys.readouterr().out
        assert "Searching the web..." in out
        assert "Pipeline complete" in out
        assert "Rust is fast." in out

    def test_invalid_focus(self):
        with pytest.raises(SystemExit):
            main(["--focus", "sports", "q"])

    @patch("ai_search.cli.run_server", return_value=0)
    def test_serve(self, mock_server):
        assert main(["--serve", "--port", "8080"]) == 0
        mock_server.assert_called_once_with("127.0.0.1", 8080, reload=False)

    def test_no_arguments_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: ai-search" in capsys.readouterr().out
