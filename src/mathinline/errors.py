"""Exception classes for mathinline.

Scanning never raises: a candidate that does not match is reported as
``None``. Decoding and encoding are total. Exceptions are reserved for
strict parsing and for trees that cannot be serialized.
"""

from __future__ import annotations


class MathInlineError(Exception):
    """Base exception for all mathinline errors."""

    pass


class ParseError(MathInlineError):
    """Error during strict parsing.

    Raised when strict mode is enabled and a ``:math[`` opener is never
    terminated, or when ``parse_span`` is given text that is not exactly one
    span.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class RenderError(MathInlineError):
    """Error during rendering or serialization.

    Raised when a tree cannot be written back to text without changing its
    meaning, or when a serializer meets a node type it does not know.
    """

    pass
