"""Markdown serializer: AST back to ``:math[...]`` source text.

Math nodes are written as ``:math[`` + ``encode(value)`` + ``]``. Text
nodes are escaped so they never re-trigger the grammar: a ``:`` followed
by ``math[`` is written ``\\:``. Runs of adjacent Text nodes are escaped
together.

Parsing the output yields an equal tree, ignoring source locations, as long
as every ``[`` in a math value can be closed (see ``unclosed_brackets``).

Thread Safety:
Stateless. Safe for concurrent use.
"""

from mathinline.errors import RenderError
from mathinline.escaping import escape_text, to_span, unclosed_brackets
from mathinline.nodes import Document, Inline, InlineMath, Text
from mathinline.scanner import LINE_ENDINGS, is_word_char
from mathinline.stringbuilder import StringBuilder
from mathinline.utils.logger import get_logger

logger = get_logger(__name__)


class MarkdownRenderer:
    """Serialize AST to text.

    Usage:
        >>> from mathinline import parse
        >>> MarkdownRenderer().render(parse(":math[a\\\\]b] and \\\\:math[x]"))
        ':math[a\\\\]b] and \\\\:math[x]'

    """

    __slots__ = ()

    def render(self, node: Document) -> str:
        """Serialize a Document.

        Raises:
            RenderError: If the tree has no textual form: a math value with
                a line ending, a math node directly after a word character,
                or an unknown node type.

        """
        sb = StringBuilder()
        # Adjacent Text nodes are escaped as one run, so a ':' ending one
        # node and 'math[' starting the next is still caught.
        text_run: list[str] = []
        for child in node.children:
            if isinstance(child, Text):
                text_run.append(child.content)
                continue
            self._flush_text(text_run, sb)
            self._render_inline(child, sb)
        self._flush_text(text_run, sb)
        return sb.build()

    def _flush_text(self, text_run: list[str], sb: StringBuilder) -> None:
        if text_run:
            sb.append(escape_text("".join(text_run)))
            text_run.clear()

    def _render_inline(self, inline: Inline, sb: StringBuilder) -> None:
        match inline:
            case InlineMath():
                if any(char in LINE_ENDINGS for char in inline.value):
                    raise RenderError(
                        f"inline math at {inline.location} contains a line ending"
                    )
                prev = sb.last_char()
                if prev is not None and is_word_char(prev):
                    raise RenderError(
                        f"inline math at {inline.location} directly follows "
                        f"word character {prev!r}"
                    )
                if unclosed_brackets(inline.value):
                    logger.warning(
                        "inline math at %s has an unclosed '['; it will reparse as '\\['",
                        inline.location,
                    )
                sb.append(to_span(inline.value))
            case _:
                raise RenderError(f"cannot serialize node type {type(inline).__name__}")
