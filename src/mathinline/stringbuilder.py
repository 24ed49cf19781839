"""StringBuilder for O(n) string accumulation.

Appends to a list and joins once at the end, instead of repeated string
concatenation. Used by the renderers.

Thread Safety:
StringBuilder instances are local to each render() call.

"""

from __future__ import annotations


class StringBuilder:
    """Append-only string accumulator.

    Usage:
        >>> sb = StringBuilder()
        >>> sb.append(":math[").append("x").append("]").build()
        ':math[x]'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string (empty strings are skipped) and return self."""
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

    def last_char(self) -> str | None:
        """Return the last character appended so far, or None if empty."""
        if not self._parts:
            return None
        return self._parts[-1][-1]

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
