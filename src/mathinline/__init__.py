"""
mathinline: the ``:math[...]`` inline span syntax for Python

Recognizes ``:math[...]`` spans in free-form text, decodes them into
canonical values and encodes values back into spans that re-scan to the
same value. Zero runtime dependencies.

Quick Start:
    >>> from mathinline import parse, render, stringify
    >>> doc = parse("The formula :math[x^2] is quadratic.")
    >>> render(doc)
    'The formula <code class="language-math math-inline">x^2</code> is quadratic.'
    >>> stringify(doc)
    'The formula :math[x^2] is quadratic.'

Core triad:
    >>> from mathinline import scan, decode, encode
    >>> span = scan(":math[a\\\\]b]")
    >>> decode(span.data)
    'a]b'
    >>> encode("a]b")
    'a\\\\]b'

Installation:
    pip install mathinline
"""

from collections.abc import Callable

from mathinline.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from mathinline.errors import MathInlineError, ParseError, RenderError
from mathinline.escaping import (
    decode,
    encode,
    escape_text,
    to_span,
    unclosed_brackets,
    unescape_text,
)
from mathinline.location import SourceLocation
from mathinline.nodes import Document, HastData, HastText, Inline, InlineMath, Node, Text
from mathinline.parser import InlineParser, parse_span
from mathinline.renderers.html import HtmlRenderer
from mathinline.renderers.markdown import MarkdownRenderer
from mathinline.renderers.protocol import ASTRenderer
from mathinline.scanner import Span, iter_spans, scan
from mathinline.serialization import from_dict, from_json, to_dict, to_json, to_mdast

__version__ = "0.1.0"


def parse(source: str, *, source_file: str | None = None) -> Document:
    """Parse text into a typed AST using the active configuration.

    Args:
        source: Text to parse
        source_file: Optional source file path for error messages

    Returns:
        Document AST root node

    Example:
        >>> parse(":math[x]").children[0].value
        'x'
    """
    return InlineParser(source, source_file=source_file).parse()


def render(doc: Document) -> str:
    """Render an AST Document to HTML."""
    return HtmlRenderer().render(doc)


def stringify(doc: Document) -> str:
    """Serialize an AST Document back to ``:math[...]`` source text."""
    return MarkdownRenderer().render(doc)


class Markdown:
    """High-level processor combining parser, HTML renderer and serializer.

    Usage:
        >>> md = Markdown()
        >>> md("test(:math[x])")
        'test(<code class="language-math math-inline">x</code>)'

        >>> md = Markdown(strict=True)
        >>> md(":math[x")
        Traceback (most recent call last):
        ...
        mathinline.errors.ParseError: 1:1 unterminated :math[ span

    Thread Safety:
        Configuration is set per call through a ContextVar. Safe to use
        multiple Markdown instances concurrently from different threads.

    """

    __slots__ = ("_config", "_html", "_markdown")

    def __init__(
        self,
        *,
        math_inline: bool = True,
        strict: bool = False,
        text_transformer: Callable[[str], str] | None = None,
    ) -> None:
        """Initialize processor.

        Args:
            math_inline: Recognize ``:math[...]`` spans
            strict: Raise ParseError on unterminated spans
            text_transformer: Optional callback applied to plain text
        """
        self._config = ParseConfig(
            math_inline_enabled=math_inline,
            strict=strict,
            text_transformer=text_transformer,
        )
        self._html = HtmlRenderer()
        self._markdown = MarkdownRenderer()

    def __call__(self, source: str) -> str:
        """Parse and render to HTML in one call."""
        return self._html.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse text into AST under this instance's configuration."""
        with parse_config_context(self._config):
            return InlineParser(source, source_file=source_file).parse()

    def render(self, doc: Document) -> str:
        """Render AST to HTML."""
        return self._html.render(doc)

    def stringify(self, doc: Document) -> str:
        """Serialize AST back to source text."""
        return self._markdown.render(doc)


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core triad
    "scan",
    "iter_spans",
    "decode",
    "encode",
    "to_span",
    "unclosed_brackets",
    "escape_text",
    "unescape_text",
    "Span",
    # High-level API
    "parse",
    "parse_span",
    "render",
    "stringify",
    "Markdown",
    # Nodes
    "Node",
    "Document",
    "Inline",
    "Text",
    "InlineMath",
    "HastData",
    "HastText",
    # Parser and renderers
    "InlineParser",
    "HtmlRenderer",
    "MarkdownRenderer",
    "ASTRenderer",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "to_mdast",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "MathInlineError",
    "ParseError",
    "RenderError",
    # Location
    "SourceLocation",
]
