"""HTML renderer using StringBuilder pattern.

Renders typed AST to HTML. Inline math is emitted from the node's
rendering metadata (``InlineMath.data``), so every span becomes::

    <code class="language-math math-inline">E = mc^2</code>

Math rendering itself (KaTeX, MathJax) is left to the client.

Thread Safety:
No per-render state lives on the instance. Multiple threads can share a
single HtmlRenderer and call render() concurrently.
"""

import html
from collections.abc import Callable

from mathinline.nodes import Document, HastData, Inline, InlineMath, Text
from mathinline.stringbuilder import StringBuilder
from mathinline.utils.logger import get_logger

logger = get_logger(__name__)


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    CommonMark-compliant: escapes <, >, &, " but NOT single quotes.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


class HtmlRenderer:
    """Render AST to HTML.

    Usage:
        >>> from mathinline import parse
        >>> HtmlRenderer().render(parse("Energy: :math[E = mc^2]"))
        'Energy: <code class="language-math math-inline">E = mc^2</code>'

    """

    __slots__ = ("_text_transformer",)

    def __init__(self, *, text_transformer: Callable[[str], str] | None = None) -> None:
        """Initialize renderer.

        Args:
            text_transformer: Optional callback to transform plain text nodes
        """
        self._text_transformer = text_transformer

    def render(self, node: Document) -> str:
        """Render document AST to HTML string."""
        sb = StringBuilder()
        for child in node.children:
            self._render_inline(child, sb)
        return sb.build()

    def _render_inline(self, inline: Inline, sb: StringBuilder) -> None:
        match inline:
            case Text():
                text = inline.content
                if self._text_transformer:
                    text = self._text_transformer(text)
                sb.append(html_escape(text))
            case InlineMath():
                self._render_element(inline.data, sb)
            case _:
                logger.warning("Unknown inline node type: %s", type(inline).__name__)

    def _render_element(self, data: HastData, sb: StringBuilder) -> None:
        sb.append(f"<{data.h_name}")
        if data.class_name:
            sb.append(f' class="{html_escape(" ".join(data.class_name))}"')
        sb.append(">")
        for child in data.children:
            sb.append(html_escape(child.value))
        sb.append(f"</{data.h_name}>")
