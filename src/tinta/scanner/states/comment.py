"""Line and block comment mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator

from tinta.diagnostics import Construct
from tinta.grammar.table import BlockCommentStyle, LineCommentStyle, Opener
from tinta.scanner.modes import ScanMode
from tinta.spans import Span, SpanKind


class CommentScannerMixin:
    """Mixin providing comment mode scanning logic.

    Comment bodies are scanned verbatim: string delimiters and further
    start markers inside a comment are inert text.

    """

    _source: str
    _source_len: int
    _pos: int
    _mode: ScanMode
    _opener: Opener | None

    def _save_location(self) -> None:
        """Save current location for O(1) span location creation."""
        raise NotImplementedError

    def _find_line_end(self) -> int:
        """Find end of current line."""
        raise NotImplementedError

    def _commit_to(self, end: int) -> None:
        """Commit position to end."""
        raise NotImplementedError

    def _make_span(self, kind: SpanKind, start: int, **kwargs: object) -> Span:
        """Create span with raw coordinates. Implemented by Scanner."""
        raise NotImplementedError

    def _report_unterminated(self, construct: Construct, delimiter: str, start: int) -> None:
        """Record an unterminated construct. Implemented by Scanner."""
        raise NotImplementedError

    def _end_mode(self) -> None:
        """Return to code mode. Implemented by Scanner."""
        raise NotImplementedError

    def _scan_line_comment(self) -> Iterator[Span]:
        """Scan a line comment up to, not including, the line break.

        A carriage return directly before the newline stays out of the
        comment, so CRLF line endings remain in the following code span.

        Yields:
            One LINE_COMMENT span.
        """
        self._save_location()
        assert self._opener is not None
        style: LineCommentStyle = self._opener.style  # type: ignore[assignment]

        start = self._pos
        self._commit_to(start + len(style.marker))
        line_end = self._find_line_end()
        if line_end > self._pos and self._source[line_end - 1] == "\r":
            line_end -= 1

        self._commit_to(line_end)
        self._end_mode()
        yield self._make_span(SpanKind.LINE_COMMENT, start, style=style)

    def _scan_block_comment(self) -> Iterator[Span]:
        """Scan a block comment up to and including its end marker.

        Block comments do not nest. Without an end marker the comment
        runs to end of input and is reported as unterminated.

        Yields:
            One BLOCK_COMMENT span.
        """
        self._save_location()
        assert self._opener is not None
        style: BlockCommentStyle = self._opener.style  # type: ignore[assignment]

        start = self._pos
        close = self._source.find(style.end, start + len(style.start))
        terminated = close != -1
        end = close + len(style.end) if terminated else self._source_len

        self._commit_to(end)
        self._end_mode()
        if not terminated:
            self._report_unterminated(Construct.BLOCK_COMMENT, style.end, start)
        yield self._make_span(SpanKind.BLOCK_COMMENT, start, style=style, terminated=terminated)
