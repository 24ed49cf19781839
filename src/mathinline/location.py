"""Source location tracking for nodes and error messages.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a node or error in the source text.

    ``lineno`` and ``col_offset`` are 1-indexed. ``offset`` and ``end_offset``
    are absolute 0-indexed offsets into the source string.

    Examples:
        >>> loc = SourceLocation(1, 7, offset=6, end_offset=14)
        >>> str(loc)
        '1:7'
        >>> str(SourceLocation(2, 1, source_file="notes.md"))
        'notes.md:2:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Placeholder for synthetic nodes."""
        return cls(lineno=0, col_offset=0)


class LineIndex:
    """Maps absolute offsets to 1-indexed (line, column) pairs.

    Built once per parse; lookups are O(log lines).
    """

    __slots__ = ("_starts", "_source_file")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        starts = [0]
        for i, char in enumerate(source):
            # LF, CR and CRLF each end one line
            if char == "\n" or (char == "\r" and source[i + 1 : i + 2] != "\n"):
                starts.append(i + 1)
        self._starts = starts
        self._source_file = source_file

    def position(self, offset: int) -> tuple[int, int]:
        line = bisect_right(self._starts, offset) - 1
        return line + 1, offset - self._starts[line] + 1

    def location(self, start: int, end: int) -> SourceLocation:
        """Build a SourceLocation covering ``source[start:end]``."""
        lineno, col = self.position(start)
        end_lineno, end_col = self.position(end)
        return SourceLocation(
            lineno=lineno,
            col_offset=col,
            offset=start,
            end_offset=end,
            end_lineno=end_lineno,
            end_col_offset=end_col,
            source_file=self._source_file,
        )
