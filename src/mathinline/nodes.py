"""Typed AST nodes for mathinline.

All AST nodes are frozen dataclasses with slots, safe to share across
threads and usable in ``match`` statements.

Node Hierarchy:
Node (base)
├── Document
└── Inline
    ├── Text
    └── InlineMath

"""

from dataclasses import dataclass

from mathinline.location import SourceLocation

# Rendering metadata attached to every InlineMath node. Fixed contract with
# output renderers, not configurable.
MATH_INLINE_TAG = "code"
MATH_INLINE_CLASSES: tuple[str, ...] = ("language-math", "math-inline")


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes."""

    location: SourceLocation


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content, with text escapes already resolved."""

    content: str


@dataclass(frozen=True, slots=True)
class HastText:
    """Text child of a rendered element."""

    value: str


@dataclass(frozen=True, slots=True)
class HastData:
    """Element description handed to output renderers.

    Attributes:
        h_name: Element name
        class_name: Class list for the element
        children: Text children of the element

    """

    h_name: str
    class_name: tuple[str, ...]
    children: tuple[HastText, ...]


@dataclass(frozen=True, slots=True)
class InlineMath(Node):
    """Inline math expression.

    Markdown: :math[E = mc^2]
    HTML: <code class="language-math math-inline">E = mc^2</code>

    ``value`` is the decoded expression. It is opaque: the parser never
    looks inside it.

    """

    value: str

    @property
    def data(self) -> HastData:
        """Rendering metadata: a ``code`` element carrying the value as text."""
        return HastData(
            h_name=MATH_INLINE_TAG,
            class_name=MATH_INLINE_CLASSES,
            children=(HastText(self.value),),
        )


type Inline = Text | InlineMath


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node: the inline content of one parsed source."""

    children: tuple[Inline, ...]
