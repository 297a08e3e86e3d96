"""Unit tests for session_recall.context.formatter."""
from __future__ import annotations

import pytest

from session_recall.context.formatter import (
    BLOCK_CLOSE,
    BLOCK_INTRO,
    BLOCK_OPEN,
    ELLIPSIS,
    format_age,
    format_context,
    round_half_up,
    truncate_snippet,
)
from session_recall.models import ScoredResult


def _result(snippet: str = "some text", score: float = 0.6, age: float = 2.0) -> ScoredResult:
    return ScoredResult(
        path="/sessions/abc.jsonl",
        score=score,
        snippet=snippet,
        source="sessions",
        age_in_days=age,
        decay_factor=1.0,
        raw_score=score,
    )


class TestRoundHalfUp:
    def test_half_rounds_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1

    def test_below_half_rounds_down(self) -> None:
        assert round_half_up(2.49) == 2

    def test_returns_int(self) -> None:
        assert isinstance(round_half_up(3.7), int)


class TestTruncateSnippet:
    def test_short_snippet_unchanged(self) -> None:
        assert truncate_snippet("hello") == "hello"

    def test_whitespace_trimmed(self) -> None:
        assert truncate_snippet("  \n hello world \t\n") == "hello world"

    def test_exactly_500_chars_unchanged(self) -> None:
        text = "x" * 500
        assert truncate_snippet(text) == text

    def test_600_chars_cut_to_500_plus_ellipsis(self) -> None:
        text = "y" * 600
        result = truncate_snippet(text)
        assert result == "y" * 500 + ELLIPSIS
        assert len(result) == 500 + len(ELLIPSIS)

    def test_cut_ignores_word_boundaries(self) -> None:
        text = "word " * 200
        assert truncate_snippet(text) == text.strip()[:500] + ELLIPSIS

    def test_length_measured_after_trim(self) -> None:
        text = "   " + "z" * 500 + "   "
        assert truncate_snippet(text) == "z" * 500


class TestFormatAge:
    @pytest.mark.parametrize(
        ("days", "label"),
        [
            (0.0, "today"),
            (0.5, "today"),
            (1.0, "yesterday"),
            (1.5, "yesterday"),
            (2.0, "2d ago"),
            (6.9, "7d ago"),
            (7.0, "1w ago"),
            (10.5, "2w ago"),
            (29.9, "4w ago"),
            (30.0, "1mo ago"),
            (100.0, "3mo ago"),
            (364.0, "12mo ago"),
            (365.0, "1y ago"),
            (400.0, "1y ago"),
            (913.0, "3y ago"),
        ],
    )
    def test_labels(self, days: float, label: str) -> None:
        assert format_age(days) == label


class TestFormatContext:
    def test_empty_sequence_rejected(self) -> None:
        with pytest.raises(ValueError):
            format_context([])

    def test_single_result_exact_output(self) -> None:
        output = format_context([_result("  remember the deploy key  ", score=0.6, age=2.0)])
        assert output == (
            "<session-recall>\n"
            "The following excerpts from recent sessions may be relevant:\n"
            "\n"
            "[1] (60%, 2d ago)\n"
            "remember the deploy key\n"
            "</session-recall>"
        )

    def test_block_is_wrapped(self) -> None:
        output = format_context([_result()])
        assert output.startswith(f"{BLOCK_OPEN}\n{BLOCK_INTRO}\n\n")
        assert output.endswith(f"\n{BLOCK_CLOSE}")

    def test_one_header_per_item_in_rank_order(self) -> None:
        results = [
            _result("first", score=0.9, age=0.2),
            _result("second", score=0.75, age=12.0),
            _result("third", score=0.555, age=400.0),
        ]
        output = format_context(results)
        assert "[1] (90%, today)\nfirst" in output
        assert "[2] (75%, 2w ago)\nsecond" in output
        assert "[3] (56%, 1y ago)\nthird" in output
        assert output.index("[1]") < output.index("[2]") < output.index("[3]")
        assert output.count("%, ") == 3

    def test_items_separated_by_blank_line(self) -> None:
        output = format_context([_result("a"), _result("b")])
        assert "a\n\n[2]" in output

    def test_long_snippet_truncated(self) -> None:
        output = format_context([_result("q" * 600)])
        assert "q" * 500 + ELLIPSIS in output
        assert "q" * 501 not in output
