"""State-machine scanner with O(n) guaranteed performance.

Splits source text into a gap-free stream of CODE, LINE_COMMENT,
BLOCK_COMMENT and STRING_LITERAL spans using a Grammar's delimiter table.
One pass, constant-size lookahead for marker matching, no position rewinds.

No regex in the hot path.

Thread Safety:
Scanner instances are single-use. Create one per source string.
All state is instance-local; the Grammar is read-only.

"""

from __future__ import annotations

from collections.abc import Iterator

from tinta.diagnostics import Construct, UnterminatedConstruct
from tinta.errors import UnterminatedConstructError
from tinta.grammar.table import Grammar, Opener, Style
from tinta.location import SourceLocation
from tinta.scanner.classifiers import OpenerClassifierMixin
from tinta.scanner.modes import ScanMode
from tinta.scanner.states import (
    CodeScannerMixin,
    CommentScannerMixin,
    StringScannerMixin,
)
from tinta.spans import Span, SpanKind
from tinta.utils.logger import get_logger

logger = get_logger(__name__)

_CONSTRUCT_NAMES = {
    Construct.BLOCK_COMMENT: "block comment",
    Construct.STRING_LITERAL: "string literal",
}


class Scanner(
    # Classifiers (pure logic, no position mutation)
    OpenerClassifierMixin,
    # Scanners (mode-specific scanning logic)
    CodeScannerMixin,
    CommentScannerMixin,
    StringScannerMixin,
):
    """State-machine scanner over one source string.

    Usage:
            >>> scanner = Scanner('x = "//"; // note', grammar)
            >>> for span in scanner.scan():
            ...     print(span)
        Span(CODE, 'x = ', 1:1)
        Span(STRING_LITERAL, '"//"', 1:5)
        Span(CODE, '; ', 1:9)
        Span(LINE_COMMENT, '// note', 1:11)

    Thread Safety:
        Scanner instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_grammar",
        "_pos",
        "_lineno",
        "_col",
        "_mode",
        "_opener",  # Opener that switched us out of CODE mode
        "_source_file",
        "_strict",
        "_saved_lineno",
        "_saved_col",
        "_diagnostics",
    )

    def __init__(
        self,
        source: str,
        grammar: Grammar,
        *,
        source_file: str | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize scanner with source text.

        Args:
            source: Raw source text
            grammar: Comment grammar of the source's language
            source_file: Optional source file path for diagnostics
            strict: Raise UnterminatedConstructError instead of recovering
        """
        self._source = source
        self._source_len = len(source)
        self._grammar = grammar
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._mode = ScanMode.CODE
        self._opener: Opener | None = None
        self._source_file = source_file
        self._strict = strict
        self._saved_lineno: int = 1
        self._saved_col: int = 1
        self._diagnostics: list[UnterminatedConstruct] = []

    def scan(self) -> Iterator[Span]:
        """Scan source into a span stream.

        Yields:
            Span objects in source order, covering the whole input

        Raises:
            UnterminatedConstructError: In strict mode only.

        Complexity: O(n) where n = len(source)
        """
        source_len = self._source_len
        while self._pos < source_len:
            yield from self._dispatch_mode()

    @property
    def diagnostics(self) -> tuple[UnterminatedConstruct, ...]:
        """Diagnostics recorded so far (complete once scan() is exhausted)."""
        return tuple(self._diagnostics)

    def _dispatch_mode(self) -> Iterator[Span]:
        """Dispatch to the scanner for the current mode."""
        if self._mode == ScanMode.CODE:
            yield from self._scan_code()
        elif self._mode == ScanMode.LINE_COMMENT:
            yield from self._scan_line_comment()
        elif self._mode == ScanMode.BLOCK_COMMENT:
            yield from self._scan_block_comment()
        elif self._mode == ScanMode.STRING_LITERAL:
            yield from self._scan_string()

    def _end_mode(self) -> None:
        """Return to code mode after a construct closes."""
        self._mode = ScanMode.CODE
        self._opener = None

    # =========================================================================
    # Navigation helpers
    # =========================================================================

    def _find_line_end(self) -> int:
        """Find the end of the current line (position of \\n or EOF)."""
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _commit_to(self, end: int) -> None:
        """Commit position to end, updating line/column tracking.

        Uses str.count/rfind over the skipped segment instead of a
        character-by-character loop.

        Args:
            end: Position to commit to.
        """
        if end <= self._pos:
            return

        segment = self._source[self._pos : end]
        newline_count = segment.count("\n")

        if newline_count > 0:
            last_nl = segment.rfind("\n")
            self._lineno += newline_count
            self._col = len(segment) - last_nl
        else:
            self._col += len(segment)

        self._pos = end

    # =========================================================================
    # Location tracking
    # =========================================================================

    def _save_location(self) -> None:
        """Save current location for O(1) span location creation.

        Call this at the START of scanning a span, before any position changes.
        """
        self._saved_lineno = self._lineno
        self._saved_col = self._col

    def _make_span(
        self,
        kind: SpanKind,
        start: int,
        *,
        style: Style | None = None,
        terminated: bool = True,
    ) -> Span:
        """Create a Span from start to the current position.

        Args:
            kind: The span kind.
            start: Start position in source.
            style: Grammar entry that opened the span.
            terminated: False if the construct ran out of input.

        Returns:
            Span with raw coordinates for lazy location creation.
        """
        return Span(
            kind=kind,
            value=self._source[start : self._pos],
            _lineno=self._saved_lineno,
            _col=self._saved_col,
            _start_offset=start,
            _end_offset=self._pos,
            style=style,
            terminated=terminated,
            _end_lineno=self._lineno,
            _end_col=self._col,
            _source_file=self._source_file,
        )

    def _report_unterminated(self, construct: Construct, delimiter: str, start: int) -> None:
        """Record an unterminated construct that was closed implicitly.

        Raises:
            UnterminatedConstructError: In strict mode.
        """
        what = _CONSTRUCT_NAMES[construct]
        message = f"unterminated {what}: expected {delimiter!r}"
        if self._strict:
            raise UnterminatedConstructError(
                message,
                lineno=self._saved_lineno,
                col_offset=self._saved_col,
                source_file=self._source_file,
            )

        location = SourceLocation(
            lineno=self._saved_lineno,
            col_offset=self._saved_col,
            offset=start,
            end_offset=self._pos,
            end_lineno=self._lineno,
            end_col_offset=self._col,
            source_file=self._source_file,
        )
        self._diagnostics.append(
            UnterminatedConstruct(
                message=message,
                location=location,
                construct=construct,
                delimiter=delimiter,
            )
        )
        logger.warning("%s: %s", location, message)
