"""Single-pass scanner for ``:math[...]`` spans.

The scanner is a finite-state machine driven one character at a time.
Five literal states match the ``:math[`` opener, ``DATA`` consumes the
data region while tracking bracket depth, and ``AFTER_BACKSLASH`` decides
whether the character following a backslash is escaped.

Grammar:
    ":math[" DATA "]"

    DATA is any run of characters without line endings. Inside DATA:
    - ``\\]``, ``\\\\`` and ``\\[`` are escaped pairs (bracket depth unchanged)
    - ``\\`` before any other character is a literal backslash
    - unescaped ``[`` opens a nested level, unescaped ``]`` closes one
    - an unescaped ``]`` at depth 0 terminates the span

Rejection is a normal result (``None``), never an exception. A rejected
scan has no side effects, so the caller may retry other interpretations
from the same position.

Thread Safety:
    ``scan`` is a pure function. All state is local to one call.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

OPEN_MARKER = ":math["
CLOSE_MARKER = "]"

LINE_ENDINGS = frozenset("\n\r")

# Characters a backslash escapes inside the data region
ESCAPABLE = frozenset("]\\[")

_WORD_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_")


class ScanState(Enum):
    """Scanner states.

    COLON through OPEN each expect one literal character of ``:math[``.
    DATA scans the data region. AFTER_BACKSLASH follows a consumed ``\\``.
    """

    COLON = auto()
    M = auto()
    A = auto()
    T = auto()
    H = auto()
    OPEN = auto()
    DATA = auto()
    AFTER_BACKSLASH = auto()


# Literal prefix states: expected character and the state that follows
_PREFIX_TRANSITIONS: dict[ScanState, tuple[str, ScanState]] = {
    ScanState.COLON: (":", ScanState.M),
    ScanState.M: ("m", ScanState.A),
    ScanState.A: ("a", ScanState.T),
    ScanState.T: ("t", ScanState.H),
    ScanState.H: ("h", ScanState.OPEN),
    ScanState.OPEN: ("[", ScanState.DATA),
}


@dataclass(frozen=True, slots=True)
class Span:
    """A recognized ``:math[...]`` span.

    Attributes:
        start: Offset of the ``:``
        end: Offset one past the terminating ``]``
        data_start: Offset of the first data character
        data_end: Offset of the terminating ``]``
        data: Raw data region, escapes intact

    """

    start: int
    end: int
    data_start: int
    data_end: int
    data: str

    @property
    def open_marker(self) -> tuple[int, int]:
        """``(start, end)`` of the ``:math[`` marker."""
        return self.start, self.data_start

    @property
    def close_marker(self) -> tuple[int, int]:
        """``(start, end)`` of the terminating ``]``."""
        return self.data_end, self.end


def is_word_char(char: str) -> bool:
    """Return True for ASCII letters, digits and underscore."""
    return char in _WORD_CHARS


def scan(text: str, pos: int = 0) -> Span | None:
    """Try to recognize a span starting at ``text[pos]``.

    The character before ``pos`` (if any) must not be an ASCII word
    character, so ``foo:math[x]`` never matches inside an identifier.

    Args:
        text: Text to scan
        pos: Offset of the candidate ``:``

    Returns:
        The recognized Span, or None if there is no match at ``pos``
        (including any ``pos`` at or past the end of ``text``).

    Example:
        >>> scan("see :math[f(x) = [a, b]] here", 4).data
        'f(x) = [a, b]'
        >>> scan("foo:math[x]", 3) is None
        True

    """
    text_len = len(text)
    if pos >= text_len:
        return None
    if pos > 0 and text[pos - 1] in _WORD_CHARS:
        return None

    state = ScanState.COLON
    depth = 0
    data_start = pos + len(OPEN_MARKER)
    i = pos

    while True:
        char = text[i] if i < text_len else None

        if state is ScanState.DATA:
            if char is None or char in LINE_ENDINGS:
                return None
            if char == "\\":
                state = ScanState.AFTER_BACKSLASH
            elif char == "[":
                depth += 1
            elif char == "]":
                if depth == 0:
                    return Span(
                        start=pos,
                        end=i + 1,
                        data_start=data_start,
                        data_end=i,
                        data=text[data_start:i],
                    )
                depth -= 1
            i += 1

        elif state is ScanState.AFTER_BACKSLASH:
            # Escaped pair: consume without touching depth.
            # Anything else is re-dispatched through DATA unconsumed.
            if char is not None and char in ESCAPABLE:
                i += 1
            state = ScanState.DATA

        else:
            expected, next_state = _PREFIX_TRANSITIONS[state]
            if char != expected:
                return None
            i += 1
            state = next_state


def iter_spans(text: str) -> Iterator[Span]:
    """Yield every non-overlapping span in ``text``, left to right.

    Example:
        >>> [s.data for s in iter_spans(":math[a] and :math[b]")]
        ['a', 'b']

    """
    pos = text.find(":")
    while pos != -1:
        span = scan(text, pos)
        if span is None:
            pos = text.find(":", pos + 1)
        else:
            yield span
            pos = text.find(":", span.end)


def has_opener(text: str, pos: int) -> bool:
    """Return True if a full ``:math[`` opener that passes the word-boundary
    check starts at ``pos``.

    Used by strict parsing to tell an unterminated span from ordinary text.
    """
    if pos >= len(text) or (pos > 0 and text[pos - 1] in _WORD_CHARS):
        return False
    return text.startswith(OPEN_MARKER, pos)
