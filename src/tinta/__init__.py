"""
tinta: literate-programming source segmenter for Python

Splits ordinary source files into an ordered Document of Documentation
(prose from doc comments) and Code (verbatim source) segments, driven by
a per-language comment grammar. O(n) single-pass scanning, typed
immutable output, and zero runtime dependencies.

Quick Start:
    >>> from tinta import load_bundled_grammars, segment
    >>> grammars = load_bundled_grammars()
    >>> doc = segment("/** Hello */\\nint main(void){return 0;}", "c", grammars)
    >>> [type(s).__name__ for s in doc]
    ['Documentation', 'Code']
    >>> doc.segments[0].text
    'Hello'

    >>> # Or use the Segmenter class to keep a table and config together
    >>> from tinta import Segmenter, SegmentConfig
    >>> seg = Segmenter(grammars, config=SegmentConfig(merge_adjacent=False))
    >>> doc = seg(source, "rust")

Installation:
    pip install tinta              # Core segmenter (zero deps)
    pip install tinta[syntax]      # + Syntax highlighting via Rosettes
    pip install tinta[markdown]    # + Prose rendering via Patitas
"""

from tinta.batch import BatchResult, SourceJob, jobs_from_paths, segment_many
from tinta.builder import SegmentBuilder
from tinta.config import (
    SegmentConfig,
    get_segment_config,
    reset_segment_config,
    segment_config_context,
    set_segment_config,
)
from tinta.diagnostics import Construct, Diagnostic, UnterminatedConstruct
from tinta.errors import (
    ConfigurationError,
    RenderError,
    TintaError,
    UnterminatedConstructError,
)
from tinta.grammar import (
    BlockCommentStyle,
    Grammar,
    GrammarTable,
    GrammarTableBuilder,
    LineCommentStyle,
    StringDelimiter,
    load_bundled_grammars,
    load_grammars,
)
from tinta.highlighting import set_highlighter
from tinta.location import SourceLocation
from tinta.nodes import Code, Document, Documentation, Section, Segment
from tinta.normalizer import NormalizedComment, normalize_comment
from tinta.prose import set_prose_renderer
from tinta.renderers import RenderedSegment, render_segments
from tinta.scanner import Scanner
from tinta.serialization import from_dict, from_json, to_dict, to_json
from tinta.spans import Span, SpanKind

__version__ = "0.1.0"


def segment(
    source: str,
    language: str | Grammar,
    grammars: GrammarTable | None = None,
    *,
    source_file: str | None = None,
    config: SegmentConfig | None = None,
) -> Document:
    """Segment source text into a Document.

    Args:
        source: Source text
        language: Language name or alias, or a Grammar
        grammars: Table to look ``language`` up in (not needed for a Grammar)
        source_file: Optional source file path for locations and diagnostics
        config: Configuration for this call (current context config if None)

    Returns:
        Document with segments and diagnostics

    Raises:
        ConfigurationError: If the language is unknown.
        UnterminatedConstructError: In strict mode only.

    Example:
        >>> doc = segment("int x = 10; // not documentation", "c", grammars)
        >>> len(doc), doc.code[0].text
        (1, 'int x = 10; // not documentation')
    """
    grammar = _resolve_grammar(language, grammars)
    if config is None:
        return SegmentBuilder(source, grammar, source_file=source_file).build()

    with segment_config_context(config):
        return SegmentBuilder(source, grammar, source_file=source_file).build()


def _resolve_grammar(language: str | Grammar, grammars: GrammarTable | None) -> Grammar:
    if isinstance(language, Grammar):
        return language
    if grammars is None:
        raise ConfigurationError(f"No grammar table given to look up {language!r}")
    return grammars.get(language)


class Segmenter:
    """High-level segmenter holding a grammar table and configuration.

    Usage:
        >>> seg = Segmenter(load_bundled_grammars())
        >>> doc = seg("/// Adds one.\\nfn inc(x: i32) -> i32 { x + 1 }", "rust")
        >>> doc.documentation[0].text
        'Adds one.'

        >>> # Render through the configured collaborators
        >>> html = [r.html for r in seg.render(doc)]

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Segmenter instances concurrently from different threads.

    """

    __slots__ = ("_grammars", "_config", "_highlight")

    def __init__(
        self,
        grammars: GrammarTable,
        *,
        config: SegmentConfig | None = None,
        highlight: bool = True,
    ) -> None:
        """Initialize segmenter.

        Args:
            grammars: Grammar table for language lookup
            config: Segmentation config (defaults if None)
            highlight: Highlight code when rendering
        """
        self._grammars = grammars
        self._config = config or SegmentConfig()
        self._highlight = highlight

    def __call__(
        self, source: str, language: str | Grammar, *, source_file: str | None = None
    ) -> Document:
        """Segment source text. Same as segment()."""
        return self.segment(source, language, source_file=source_file)

    def segment(
        self, source: str, language: str | Grammar, *, source_file: str | None = None
    ) -> Document:
        """Segment source text into a Document.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        grammar = _resolve_grammar(language, self._grammars)
        set_segment_config(self._config)
        try:
            return SegmentBuilder(source, grammar, source_file=source_file).build()
        finally:
            reset_segment_config()

    def segment_path(self, path: str) -> Document:
        """Read a UTF-8 file and segment it, choosing the grammar by extension.

        Raises:
            ConfigurationError: If no grammar claims the file's extension.
            OSError: If the file cannot be read.
        """
        grammar = self._grammars.for_path(path)
        with open(path, encoding="utf-8") as f:
            source = f.read()
        return self.segment(source, grammar, source_file=path)

    def segment_many(
        self, jobs: list[SourceJob], *, max_workers: int | None = None
    ) -> list[BatchResult]:
        """Segment many sources concurrently with this segmenter's config."""
        return segment_many(
            jobs, self._grammars, config=self._config, max_workers=max_workers
        )

    def render(self, document: Document) -> tuple[RenderedSegment, ...]:
        """Render a Document through the configured collaborators."""
        return render_segments(document, highlight=self._highlight)

    @property
    def grammars(self) -> GrammarTable:
        """The grammar table used for lookups."""
        return self._grammars

    @property
    def config(self) -> SegmentConfig:
        """The segmentation config."""
        return self._config


__all__ = [
    # Main API
    "segment",
    "Segmenter",
    "SegmentBuilder",
    "Scanner",
    # Grammar
    "BlockCommentStyle",
    "Grammar",
    "GrammarTable",
    "GrammarTableBuilder",
    "LineCommentStyle",
    "StringDelimiter",
    "load_bundled_grammars",
    "load_grammars",
    # Config
    "SegmentConfig",
    "get_segment_config",
    "reset_segment_config",
    "segment_config_context",
    "set_segment_config",
    # Document model
    "Code",
    "Document",
    "Documentation",
    "Section",
    "Segment",
    "SourceLocation",
    # Scanner output
    "Span",
    "SpanKind",
    "NormalizedComment",
    "normalize_comment",
    # Diagnostics and errors
    "Construct",
    "Diagnostic",
    "UnterminatedConstruct",
    "ConfigurationError",
    "RenderError",
    "TintaError",
    "UnterminatedConstructError",
    # Batch
    "BatchResult",
    "SourceJob",
    "jobs_from_paths",
    "segment_many",
    # Rendering boundary
    "RenderedSegment",
    "render_segments",
    "set_highlighter",
    "set_prose_renderer",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Version
    "__version__",
]
