"""Segment builder: span stream to Document.

Consumes the scanner's spans, merges adjacent documentation comments,
normalizes them, and assembles the ordered Documentation/Code segments.

Rules, in source order:
1. Comments of the same documentation class separated only by whitespace
   holding at most ``merge_newlines`` newlines are merged. A blank line
   (with the default of 1) ends the run.
2. Code, string literals and incidental comments between documentation
   comments are copied verbatim into one Code segment.
3. Only documentation comments become Documentation segments.
4. No reordering.
5. Empty or whitespace-only input gives an empty Document.

Code text is always sliced straight from the source, so indentation,
blank lines and incidental comments are reproduced exactly. Segment
ranges are increasing and together cover the whole input.

Thread Safety:
SegmentBuilder instances are single-use. Configuration is read from the
current context (see tinta.config).
"""

from __future__ import annotations

from collections.abc import Iterator

from tinta.config import SegmentConfig, get_segment_config
from tinta.grammar.table import Grammar
from tinta.location import SourceLocation
from tinta.nodes import Code, Document, Documentation, Segment
from tinta.normalizer import NormalizedComment, normalize_comment
from tinta.scanner import Scanner
from tinta.spans import Span, SpanKind
from tinta.utils.logger import get_logger

logger = get_logger(__name__)


class SegmentBuilder:
    """Build the Document for one source string.

    Usage:
        >>> doc = SegmentBuilder("/** Hello */\\nint main(void){}", grammar).build()
        >>> [type(s).__name__ for s in doc]
        ['Documentation', 'Code']

    """

    __slots__ = ("_source", "_grammar", "_source_file")

    def __init__(
        self,
        source: str,
        grammar: Grammar,
        *,
        source_file: str | None = None,
    ) -> None:
        """Initialize builder.

        Args:
            source: Raw source text
            grammar: Comment grammar of the source's language
            source_file: Optional source file path for locations
        """
        self._source = source
        self._grammar = grammar
        self._source_file = source_file

    def build(self) -> Document:
        """Scan, merge and assemble the Document.

        Returns:
            Document with segments and diagnostics

        Raises:
            UnterminatedConstructError: In strict mode only.
        """
        config = get_segment_config()
        scanner = Scanner(
            self._source,
            self._grammar,
            source_file=self._source_file,
            strict=config.strict,
        )
        spans = list(scanner.scan())

        segments: tuple[Segment, ...] = ()
        if self._source.strip():
            segments = tuple(self._assemble(self._group(spans, config), config))

        logger.debug(
            "Segmented %s as %s: %d spans, %d segments",
            self._source_file or "<string>",
            self._grammar.name,
            len(spans),
            len(segments),
        )

        return Document(
            location=SourceLocation(
                lineno=1,
                col_offset=1,
                offset=0,
                end_offset=len(self._source),
                source_file=self._source_file,
            ),
            segments=segments,
            language=self._grammar.name,
            diagnostics=scanner.diagnostics,
            source_file=self._source_file,
        )

    def _group(
        self, spans: list[Span], config: SegmentConfig
    ) -> Iterator[Span | NormalizedComment]:
        """Merge comment runs into NormalizedComments; pass other spans through.

        A run holds comment spans plus the single whitespace code span between
        each pair. The scanner never emits two code spans in a row, so one
        whitespace span is the whole gap.
        """
        run: list[Span] = []
        gap: Span | None = None

        for span in spans:
            if span.kind.is_comment:
                if run and config.merge_adjacent and span.is_documentation == run[0].is_documentation:
                    if gap is not None:
                        run.append(gap)
                        gap = None
                    run.append(span)
                    continue
                if run:
                    yield self._normalize(run, config)
                if gap is not None:
                    yield gap
                    gap = None
                run = [span]
            elif run and gap is None and self._is_mergeable_gap(span, config):
                gap = span
            else:
                if run:
                    yield self._normalize(run, config)
                    run = []
                if gap is not None:
                    yield gap
                    gap = None
                yield span

        if run:
            yield self._normalize(run, config)
        if gap is not None:
            yield gap

    def _is_mergeable_gap(self, span: Span, config: SegmentConfig) -> bool:
        if not config.merge_adjacent or span.kind is not SpanKind.CODE:
            return False
        return span.is_blank() and span.value.count("\n") <= config.merge_newlines

    def _normalize(self, run: list[Span], config: SegmentConfig) -> NormalizedComment:
        return normalize_comment(run, strip_decoration=config.strip_decoration)

    def _assemble(
        self, items: Iterator[Span | NormalizedComment], config: SegmentConfig
    ) -> Iterator[Segment]:
        """Turn grouped items into Documentation and Code segments."""
        pending: list[SourceLocation] = []

        for item in items:
            if isinstance(item, NormalizedComment) and item.is_documentation:
                if pending:
                    yield self._code_segment(pending)
                    pending = []
                text = item.text
                if config.text_transformer is not None:
                    text = config.text_transformer(text)
                yield Documentation(location=item.location, text=text)
            else:
                pending.append(item.location)

        if pending:
            yield self._code_segment(pending)

    def _code_segment(self, locations: list[SourceLocation]) -> Code:
        """Create a Code segment covering contiguous source ranges."""
        location = locations[0].span_to(locations[-1])
        return Code(
            location=location,
            text=self._source[location.offset : location.end_offset],
            language=self._grammar.highlight_language,
        )
