"""Tests for the :math[...] span scanner.

Tests cover:
- Literal prefix matching and rejection
- Word-boundary precondition
- Bracket nesting and escapes in the data region
- Line endings and end of text
- Sub-region offsets
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from mathinline.scanner import (
    OPEN_MARKER,
    ScanState,
    Span,
    has_opener,
    is_word_char,
    iter_spans,
    scan,
)

# =============================================================================
# Basic matching
# =============================================================================


class TestBasicScan:
    """Spans that match."""

    def test_simple_span(self) -> None:
        span = scan(":math[x]")
        assert span == Span(start=0, end=8, data_start=6, data_end=7, data="x")

    def test_span_with_spaces(self) -> None:
        span = scan(":math[E = mc^2]")
        assert span is not None
        assert span.data == "E = mc^2"

    def test_empty_data(self) -> None:
        span = scan(":math[]")
        assert span is not None
        assert span.data == ""
        assert span.end == 7

    def test_scan_mid_text(self) -> None:
        text = "The formula :math[x^2] is quadratic."
        span = scan(text, 12)
        assert span is not None
        assert span.data == "x^2"
        assert text[span.start : span.end] == ":math[x^2]"

    def test_trailing_text_not_consumed(self) -> None:
        span = scan(":math[x] test")
        assert span is not None
        assert span.end == 8

    def test_sub_regions(self) -> None:
        text = "a :math[y] b"
        span = scan(text, 2)
        assert span is not None
        start, end = span.open_marker
        assert text[start:end] == OPEN_MARKER
        start, end = span.close_marker
        assert text[start:end] == "]"
        assert text[span.data_start : span.data_end] == "y"


# =============================================================================
# Prefix rejection
# =============================================================================


class TestPrefixRejection:
    """Any deviation from ':math[' rejects."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "x",
            ": math[x]",
            ":Math[x]",
            ":mat[x]",
            ":math (x)",
            ":math",
            ":math x]",
            "math[x]",
            "::math[x]",
        ],
    )
    def test_rejects(self, text: str) -> None:
        assert scan(text) is None

    def test_double_colon_matches_second(self) -> None:
        # ':' is not a word character, so the second colon may open a span
        span = scan("::math[x]", 1)
        assert span is not None
        assert span.data == "x"


# =============================================================================
# Word-boundary precondition
# =============================================================================


class TestPrecondition:
    """The character before ':' must not be an ASCII word character."""

    @pytest.mark.parametrize("prev", ["o", "Z", "7", "_"])
    def test_rejects_after_word_char(self, prev: str) -> None:
        assert scan(f"{prev}:math[x]", 1) is None

    @pytest.mark.parametrize("prev", [" ", "(", "-", ".", "\t", "\n", "é", "*"])
    def test_accepts_after_non_word_char(self, prev: str) -> None:
        span = scan(f"{prev}:math[x]", 1)
        assert span is not None
        assert span.data == "x"

    def test_start_of_text(self) -> None:
        assert scan(":math[x]", 0) is not None

    def test_identifier(self) -> None:
        assert scan("foo:math[x]", 3) is None

    def test_is_word_char(self) -> None:
        assert all(is_word_char(c) for c in "azAZ09_")
        assert not any(is_word_char(c) for c in " :-é[]\\")


# =============================================================================
# Bracket nesting
# =============================================================================


class TestBrackets:
    """Unescaped brackets nest; the first ']' at depth 0 terminates."""

    def test_nested(self) -> None:
        span = scan(":math[f(x) = [a, b]]")
        assert span is not None
        assert span.data == "f(x) = [a, b]"

    def test_multiple_nested(self) -> None:
        span = scan(":math[[a][b][c]]")
        assert span is not None
        assert span.data == "[a][b][c]"

    def test_deep_nesting(self) -> None:
        span = scan(":math[[[[x]]]]")
        assert span is not None
        assert span.data == "[[[x]]]"

    def test_unbalanced_open_never_terminates(self) -> None:
        assert scan(":math[[x]") is None

    def test_first_close_at_depth_zero_wins(self) -> None:
        span = scan(":math[a]b]")
        assert span is not None
        assert span.data == "a"
        assert span.end == 8


# =============================================================================
# Escapes
# =============================================================================


class TestEscapes:
    """Backslash handling inside the data region."""

    def test_escaped_close(self) -> None:
        span = scan(r":math[a\]b]")
        assert span is not None
        assert span.data == r"a\]b"

    def test_escaped_backslash_before_close(self) -> None:
        span = scan(r":math[a\\]")
        assert span is not None
        assert span.data == "a\\\\"

    def test_escaped_open_does_not_nest(self) -> None:
        span = scan(r":math[\[]")
        assert span is not None
        assert span.data == r"\["

    def test_backslash_before_other_char(self) -> None:
        span = scan(r":math[\alpha]")
        assert span is not None
        assert span.data == r"\alpha"

    def test_backslash_then_unescaped_open_nests(self) -> None:
        # '\a' is literal; the following '[' still opens a level
        assert scan(r":math[\a[]") is None
        span = scan(r":math[\a[b]]")
        assert span is not None
        assert span.data == r"\a[b]"

    def test_three_backslashes_then_close(self) -> None:
        # '\\' is one escaped pair, then '\]' is another
        span = scan(":math[\\\\\\]]")
        assert span is not None
        assert span.data == "\\\\\\]"

    def test_trailing_backslash_at_end_of_text(self) -> None:
        assert scan(":math[a\\") is None


# =============================================================================
# Line endings and end of text
# =============================================================================


class TestLineEndings:
    """Spans never cross a line boundary."""

    @pytest.mark.parametrize("newline", ["\n", "\r", "\r\n"])
    def test_rejects_line_ending(self, newline: str) -> None:
        assert scan(f":math[x{newline}y]") is None

    def test_rejects_line_ending_after_backslash(self) -> None:
        assert scan(":math[x\\\ny]") is None

    def test_rejects_unterminated(self) -> None:
        assert scan(":math[x") is None

    @pytest.mark.parametrize(("text", "pos"), [("", 0), ("ab", 2), ("ab", 5), (":math[x]", 8)])
    def test_position_past_end(self, text: str, pos: int) -> None:
        assert scan(text, pos) is None
        assert not has_opener(text, pos)

    def test_span_before_newline(self) -> None:
        span = scan(":math[x]\nmore")
        assert span is not None
        assert span.data == "x"


# =============================================================================
# iter_spans / has_opener
# =============================================================================


class TestIterSpans:
    def test_multiple(self) -> None:
        spans = list(iter_spans(":math[a] and :math[b], then foo:math[c]"))
        assert [s.data for s in spans] == ["a", "b"]

    def test_resumes_after_rejected_candidate(self) -> None:
        spans = list(iter_spans(":math[x\n:math[y]"))
        assert [s.data for s in spans] == ["y"]

    def test_no_overlap(self) -> None:
        # The ':' inside the first span's data is never a candidate
        spans = list(iter_spans(" :math[ :math[x] ]"))
        assert [s.data for s in spans] == [" :math[x] "]

    def test_has_opener(self) -> None:
        assert has_opener(":math[x", 0)
        assert not has_opener("a:math[x", 1)
        assert not has_opener(":mat", 0)


def test_state_names() -> None:
    """Every literal of the opener has its own state."""
    assert len(ScanState) == len(OPEN_MARKER) + 2


# =============================================================================
# Properties
# =============================================================================


data_chars = st.characters(exclude_characters="\n\r")


class TestScannerProperties:
    @given(text=st.text(max_size=40), pos=st.integers(min_value=0, max_value=40))
    @settings(max_examples=200)
    def test_never_raises(self, text: str, pos: int) -> None:
        scan(text, pos)
        has_opener(text, pos)

    @given(data=st.text(alphabet=data_chars, max_size=30))
    @settings(max_examples=200)
    def test_balance_invariant(self, data: str) -> None:
        """Depth never goes negative and is zero at the terminator."""
        text = ":math[" + data + "]"
        span = scan(text)
        if span is None:
            return
        depth = 0
        i = 0
        raw = span.data
        while i < len(raw):
            char = raw[i]
            if char == "\\" and i + 1 < len(raw) and raw[i + 1] in "]\\[":
                i += 2
                continue
            if char == "[":
                depth += 1
            elif char == "]":
                depth -= 1
            assert depth >= 0
            i += 1
        assert depth == 0

    @given(
        before=st.text(alphabet=data_chars, max_size=10),
        after=st.text(alphabet=data_chars, max_size=10),
    )
    def test_line_break_always_rejects(self, before: str, after: str) -> None:
        assert scan(":math[" + before + "\n" + after + "]") is None or "]" in before

    @given(prev=st.sampled_from("abcXYZ019_"))
    def test_word_char_precondition(self, prev: str) -> None:
        assert scan(prev + ":math[x]", 1) is None
