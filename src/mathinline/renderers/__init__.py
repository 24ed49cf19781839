"""mathinline renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- HtmlRenderer: Renders AST to HTML, math as ``<code class="language-math math-inline">``
- MarkdownRenderer: Serializes AST back to ``:math[...]`` source text

Thread Safety:
All renderers use a StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from mathinline.renderers.html import HtmlRenderer
from mathinline.renderers.markdown import MarkdownRenderer
from mathinline.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "HtmlRenderer", "MarkdownRenderer"]
