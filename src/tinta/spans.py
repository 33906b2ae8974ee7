"""Span and SpanKind definitions for the tinta scanner.

The scanner produces a gap-free stream of Span objects that the segment
builder consumes. Each Span has a kind, its raw text, and a source location.

Thread Safety:
Span is frozen (immutable) and safe to share across threads.
SpanKind is an enum (inherently immutable).

Performance Note:
Span stores raw coordinates and lazily creates SourceLocation on demand,
so spans whose location is never read cost no extra allocation.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tinta.grammar.table import Style
    from tinta.location import SourceLocation


class SpanKind(Enum):
    """Lexical classification of a span of source text."""

    CODE = auto()
    LINE_COMMENT = auto()  # // ... up to (not including) the newline
    BLOCK_COMMENT = auto()  # /* ... */
    STRING_LITERAL = auto()  # "..." including delimiters

    @property
    def is_comment(self) -> bool:
        """True for line and block comments."""
        return self is SpanKind.LINE_COMMENT or self is SpanKind.BLOCK_COMMENT


@dataclass(frozen=True, slots=True)
class Span:
    """A classified, contiguous range of raw source text.

    Attributes:
        kind: The span kind (from SpanKind enum)
        value: The raw text, delimiters included
        _lineno: Start line number (1-indexed)
        _col: Start column (1-indexed)
        _start_offset: Absolute start position in source
        _end_offset: Absolute end position in source (exclusive)
        style: Grammar entry that opened the span (None for code)
        terminated: False when the construct ran into end of input
        _end_lineno: End line number
        _end_col: End column
        _source_file: Optional source file path

    """

    kind: SpanKind
    value: str
    _lineno: int
    _col: int
    _start_offset: int
    _end_offset: int
    style: Style | None = None
    terminated: bool = True
    _end_lineno: int | None = None
    _end_col: int | None = None
    _source_file: str | None = None
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        from tinta.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            end_lineno=self._end_lineno,
            end_col_offset=self._end_col,
            source_file=self._source_file,
        )
        # Idempotent write to the cache field of a frozen dataclass
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Span({self.kind.name}, {val!r}, {self._lineno}:{self._col})"

    @property
    def start(self) -> int:
        """Absolute start offset."""
        return self._start_offset

    @property
    def end(self) -> int:
        """Absolute end offset (exclusive)."""
        return self._end_offset

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col

    @property
    def is_documentation(self) -> bool:
        """True if this is a comment opened by a documentation-style marker."""
        if not self.kind.is_comment or self.style is None:
            return False
        return bool(getattr(self.style, "documentation", False))

    def is_blank(self) -> bool:
        """True for a code span made of whitespace only."""
        return self.kind is SpanKind.CODE and not self.value.strip()
