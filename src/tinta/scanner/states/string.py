"""String literal mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator

from tinta.diagnostics import Construct
from tinta.grammar.table import Opener, StringDelimiter
from tinta.scanner.modes import ScanMode
from tinta.spans import Span, SpanKind


class StringScannerMixin:
    """Mixin providing string literal mode scanning logic.

    Comment markers inside a literal are inert text.

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

    def _report_unterminated(self, construct: Construct, delimiter: str, start: int) -> None:
        """Record an unterminated construct. Implemented by Scanner."""
        raise NotImplementedError

    def _end_mode(self) -> None:
        """Return to code mode. Implemented by Scanner."""
        raise NotImplementedError

    def _scan_string(self) -> Iterator[Span]:
        """Scan a string literal up to and including its close delimiter.

        An escape consumes itself and exactly one following character (a
        CRLF pair counts as one), so an escaped close delimiter does not end
        the literal and a line continuation does not end a single-line
        literal. When the escape is the close delimiter itself, a doubled
        close is the escape.

        A single-line literal that reaches a newline ends before it (before
        a preceding carriage return as well) and is reported as
        unterminated, as is any literal that reaches end of input.

        Yields:
            One STRING_LITERAL span.
        """
        self._save_location()
        assert self._opener is not None
        delim: StringDelimiter = self._opener.style  # type: ignore[assignment]

        source = self._source
        source_len = self._source_len
        start = self._pos
        close = delim.close
        escape = delim.escape
        doubled = escape == close
        body = start + len(delim.open)
        pos = body
        end = source_len
        terminated = False

        while pos < source_len:
            if doubled:
                if source.startswith(close, pos):
                    if source.startswith(close, pos + len(close)):
                        pos += 2 * len(close)
                        continue
                    end = pos + len(close)
                    terminated = True
                    break
            else:
                if escape and source.startswith(escape, pos):
                    pos += len(escape)
                    # An escaped CRLF is one line break
                    pos += 2 if source.startswith("\r\n", pos) else 1
                    continue
                if source.startswith(close, pos):
                    end = pos + len(close)
                    terminated = True
                    break

            if not delim.multiline and source[pos] == "\n":
                end = pos - 1 if pos > body and source[pos - 1] == "\r" else pos
                break
            pos += 1

        self._commit_to(end)
        self._end_mode()
        if not terminated:
            self._report_unterminated(Construct.STRING_LITERAL, close, start)
        yield self._make_span(SpanKind.STRING_LITERAL, start, style=delim, terminated=terminated)
