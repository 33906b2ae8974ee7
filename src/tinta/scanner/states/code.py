"""Code mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator

from tinta.grammar.table import Opener
from tinta.scanner.modes import ScanMode
from tinta.spans import Span, SpanKind

_MODE_FOR_KIND = {
    SpanKind.LINE_COMMENT: ScanMode.LINE_COMMENT,
    SpanKind.BLOCK_COMMENT: ScanMode.BLOCK_COMMENT,
    SpanKind.STRING_LITERAL: ScanMode.STRING_LITERAL,
}


class CodeScannerMixin:
    """Mixin providing code mode scanning logic.

    Consumes code up to the next opener, emits it as one CODE span, and
    switches to the opener's mode.

    """

    _source: str
    _source_len: int
    _pos: int
    _mode: ScanMode
    _opener: Opener | None

    def _save_location(self) -> None:
        """Save current location for O(1) span location creation."""
        raise NotImplementedError

    def _commit_to(self, end: int) -> None:
        """Commit position to end."""
        raise NotImplementedError

    def _make_span(self, kind: SpanKind, start: int, **kwargs: object) -> Span:
        """Create span with raw coordinates. Implemented by Scanner."""
        raise NotImplementedError

    def _match_opener(self, pos: int) -> Opener | None:
        """Match an opener at pos. Implemented by OpenerClassifierMixin."""
        raise NotImplementedError

    def _scan_code(self) -> Iterator[Span]:
        """Scan code until the next opener or end of input.

        Yields:
            At most one CODE span. Nothing when an opener sits at the
            current position.
        """
        self._save_location()

        start = self._pos
        source_len = self._source_len
        pos = start
        opener: Opener | None = None

        while pos < source_len:
            opener = self._match_opener(pos)
            if opener is not None:
                break
            pos += 1

        if pos > start:
            self._commit_to(pos)
            yield self._make_span(SpanKind.CODE, start)

        if opener is not None:
            self._opener = opener
            self._mode = _MODE_FOR_KIND[opener.kind]
