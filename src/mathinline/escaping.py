"""Decoding and encoding of ``:math[...]`` data regions.

``decode`` turns a scanned data region into the canonical value;
``encode`` turns a value back into a data region that scans and decodes to
the same value. For every value ``v`` without line endings whose ``[``
can all be closed by a later ``]``::

    decode(scan(to_span(v)).data) == v

Decoding only resolves ``\\]`` and ``\\\\``. A backslash before ``[`` or
before any other character is kept, so TeX macros such as ``\\alpha`` and
``\\[`` reach downstream consumers untouched. The flip side is that an
unclosable ``[``, which ``encode`` writes as ``\\[``, decodes to ``\\[``
(see ``unclosed_brackets``).

Also provides the escaping rules for running text next to spans, used by
the inline parser and the Markdown serializer.

Thread Safety:
    All functions are pure.

"""

from __future__ import annotations

import re

from mathinline.scanner import CLOSE_MARKER, ESCAPABLE, OPEN_MARKER

# CommonMark: ASCII punctuation characters
# https://spec.commonmark.org/0.31.2/#ascii-punctuation-character
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

_DATA_ESCAPE_RE = re.compile(r"\\([\]\\])")
_TEXT_ESCAPE_RE = re.compile(r"\\([!-/:-@\[-`{-~])")

# Text following a ``:`` that would re-trigger the grammar
_UNSAFE_AFTER_COLON = OPEN_MARKER[1:]


def decode(raw: str) -> str:
    """Decode a raw data region into its canonical value.

    Example:
        >>> decode(r"a\\]b")
        'a]b'
        >>> decode(r"\\alpha + \\[")
        '\\\\alpha + \\\\['

    """
    if "\\" not in raw:
        return raw
    return _DATA_ESCAPE_RE.sub(r"\1", raw)


def encode(value: str) -> str:
    """Encode a canonical value as a data region.

    A ``[`` is emitted literally only while enough ``]`` remain later in
    the value to close it; otherwise it is escaped. A ``]`` with no open
    literal ``[`` is escaped so it is not read as the terminator. A
    backslash is doubled when it precedes ``]``, ``\\`` or ``[``, or ends
    the value.

    Example:
        >>> encode("f(x) = [a, b]")
        'f(x) = [a, b]'
        >>> encode("a]b")
        'a\\\\]b'
        >>> encode("[")
        '\\\\['

    """
    remaining_close = value.count("]")
    bracket_depth = 0
    value_len = len(value)
    parts: list[str] = []
    append = parts.append

    for i, char in enumerate(value):
        if char == "[":
            if bracket_depth >= remaining_close:
                append("\\[")
            else:
                bracket_depth += 1
                append("[")
        elif char == "]":
            remaining_close -= 1
            if bracket_depth > 0:
                bracket_depth -= 1
                append("]")
            else:
                append("\\]")
        elif char == "\\":
            # The closing marker follows the last character
            if i + 1 >= value_len or value[i + 1] in ESCAPABLE:
                append("\\\\")
            else:
                append("\\")
        else:
            append(char)

    return "".join(parts)


def unclosed_brackets(value: str) -> int:
    """Count the ``[`` characters that ``encode`` has to escape.

    Those ``[`` have no later ``]`` to close them and are written as
    ``\\[``, which ``decode`` keeps as-is. A value with a non-zero count
    therefore comes back with a backslash before each such bracket.

    Example:
        >>> unclosed_brackets("f(x) = [a, b]")
        0
        >>> unclosed_brackets("[[x]")
        1

    """
    remaining_close = value.count("]")
    bracket_depth = 0
    escaped = 0
    for char in value:
        if char == "[":
            if bracket_depth >= remaining_close:
                escaped += 1
            else:
                bracket_depth += 1
        elif char == "]":
            remaining_close -= 1
            if bracket_depth > 0:
                bracket_depth -= 1
    return escaped


def to_span(value: str) -> str:
    """Wrap an encoded value in the ``:math[`` / ``]`` delimiters."""
    return OPEN_MARKER + encode(value) + CLOSE_MARKER


def escape_text(text: str) -> str:
    """Escape running text so it reparses as the same text.

    - ``:`` immediately followed by ``math[`` becomes ``\\:``
    - ``\\`` before ASCII punctuation, or at the end of the text, becomes
      ``\\\\`` so it is not read as a text escape

    Example:
        >>> escape_text("write :math[x] for math")
        'write \\\\:math[x] for math'

    """
    if ":" not in text and "\\" not in text:
        return text

    text_len = len(text)
    parts: list[str] = []
    append = parts.append

    for i, char in enumerate(text):
        if char == "\\":
            # End of text counts as punctuation: a span may follow
            if i + 1 >= text_len or text[i + 1] in ASCII_PUNCTUATION:
                append("\\\\")
            else:
                append("\\")
        elif char == ":" and text.startswith(_UNSAFE_AFTER_COLON, i + 1):
            append("\\:")
        else:
            append(char)

    return "".join(parts)


def unescape_text(text: str) -> str:
    """Resolve backslash escapes of ASCII punctuation in running text.

    Example:
        >>> unescape_text(r"\\:math[x] costs \\$5")
        ':math[x] costs $5'

    """
    if "\\" not in text:
        return text
    return _TEXT_ESCAPE_RE.sub(r"\1", text)
