"""Inline parser producing typed AST.

Walks the source once, handing every ``:`` to the span scanner. Accepted
spans become ``InlineMath`` nodes; everything else, including rejected
candidates, is plain text.

Running text supports CommonMark backslash escapes of ASCII punctuation,
so ``\\:math[x]`` is the literal text ``:math[x]``.

Thread Safety:
- Parser instances are single-use; create one per parse operation
- Configuration is read from ContextVar (thread-local)
- The resulting AST is immutable and safe to share

"""

from __future__ import annotations

from mathinline.config import ParseConfig, get_parse_config
from mathinline.errors import ParseError
from mathinline.escaping import ASCII_PUNCTUATION, decode, unescape_text
from mathinline.location import LineIndex
from mathinline.nodes import Document, Inline, InlineMath, Text
from mathinline.scanner import Span, has_opener, scan
from mathinline.utils.logger import get_logger

logger = get_logger(__name__)


class InlineParser:
    """Single-pass parser for text containing ``:math[...]`` spans.

    Usage:
        >>> doc = InlineParser("The formula :math[x^2] is quadratic.").parse()
        >>> [type(n).__name__ for n in doc.children]
        ['Text', 'InlineMath', 'Text']

    Configuration:
        Reads ``math_inline_enabled``, ``strict`` and ``text_transformer``
        from the active ParseConfig.

    """

    __slots__ = ("_source", "_source_file", "_lines", "_math_value")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: Text to parse
            source_file: Optional source file path for error messages

        """
        self._source = source
        self._source_file = source_file
        self._lines = LineIndex(source, source_file)
        # Decoded value of the span currently being built. Reset on every
        # scan attempt so a rejected candidate leaves nothing behind.
        self._math_value = ""

    def parse(self) -> Document:
        """Parse the source into a Document.

        Raises:
            ParseError: In strict mode, when a ``:math[`` opener is never
                terminated on its line.

        """
        config = get_parse_config()
        source = self._source
        text_len = len(source)
        children: list[Inline] = []
        text_start = 0
        pos = 0

        while pos < text_len:
            char = source[pos]

            # Escaped punctuation is always text, never a span opener
            if char == "\\":
                if pos + 1 < text_len and source[pos + 1] in ASCII_PUNCTUATION:
                    pos += 2
                else:
                    pos += 1
                continue

            if char == ":" and config.math_inline_enabled:
                span = self._try_parse_math(pos, config)
                if span is not None:
                    self._append_text(children, text_start, pos, config)
                    children.append(
                        InlineMath(
                            location=self._lines.location(span.start, span.end),
                            value=self._math_value,
                        )
                    )
                    pos = text_start = span.end
                    continue

            pos += 1

        self._append_text(children, text_start, text_len, config)
        return Document(
            location=self._lines.location(0, text_len),
            children=tuple(children),
        )

    def _try_parse_math(self, pos: int, config: ParseConfig) -> Span | None:
        self._math_value = ""
        span = scan(self._source, pos)
        if span is not None:
            self._math_value = decode(span.data)
            return span

        if has_opener(self._source, pos):
            lineno, col = self._lines.position(pos)
            if config.strict:
                raise ParseError(
                    "unterminated :math[ span",
                    lineno=lineno,
                    col_offset=col,
                    source_file=self._source_file,
                )
            logger.debug("unterminated :math[ span at %d:%d, kept as text", lineno, col)
        return None

    def _append_text(
        self, children: list[Inline], start: int, end: int, config: ParseConfig
    ) -> None:
        if start >= end:
            return
        content = unescape_text(self._source[start:end])
        if config.text_transformer is not None:
            content = config.text_transformer(content)
        if content:
            children.append(Text(location=self._lines.location(start, end), content=content))


def parse_span(text: str, *, source_file: str | None = None) -> InlineMath:
    """Parse text that must consist of exactly one ``:math[...]`` span.

    Args:
        text: Span text, e.g. ``":math[a\\\\]b]"``
        source_file: Optional source file path for error messages

    Returns:
        InlineMath node with the decoded value

    Raises:
        ParseError: If ``text`` is not a single complete span

    Example:
        >>> parse_span(":math[f(x) = [a, b]]").value
        'f(x) = [a, b]'

    """
    span = scan(text, 0)
    if span is None:
        raise ParseError("not a :math[...] span", lineno=1, col_offset=1, source_file=source_file)
    lines = LineIndex(text, source_file)
    if span.end != len(text):
        lineno, col = lines.position(span.end)
        raise ParseError(
            "unexpected text after :math[...] span",
            lineno=lineno,
            col_offset=col,
            source_file=source_file,
        )
    return InlineMath(
        location=lines.location(0, span.end),
        value=decode(span.data),
    )
