"""Comment grammar table: per-language delimiter configuration.

A Grammar describes how one language spells comments and string literals.
The scanner needs nothing else about a language. A GrammarTable maps
language names, aliases and file extensions to grammars.

Ordering rules (checked when a Grammar is created):
- Openers are tried longest marker first; ties go string literal, then
  line comment, then block comment, then table order.
- Block comment styles are an ordered list. An earlier style whose start
  marker is a proper prefix of a later style's start marker would shadow
  it, so such a table is rejected.
- A marker may only serve one purpose within a grammar.
- A documentation block start that can also be read as a shorter start
  plus the end marker (``/**`` and ``/**/``) needs that shorter style in
  the table, so the empty comment has somewhere to go.

Thread Safety:
Grammar and GrammarTable are immutable after creation. Build them once
at startup and share them across every scan.

Example:
    >>> c = Grammar(
    ...     name="c",
    ...     line_comments=(LineCommentStyle("//"),),
    ...     block_comments=(
    ...         BlockCommentStyle("/**", "*/", documentation=True, continuation="*"),
    ...         BlockCommentStyle("/*", "*/", continuation="*"),
    ...     ),
    ...     strings=(StringDelimiter('"', '"'),),
    ... )
    >>> table = GrammarTableBuilder().register(c).build()
    >>> table.get("c").name
    'c'
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from os import PathLike
from pathlib import PurePath

from tinta.errors import ConfigurationError
from tinta.spans import SpanKind


@dataclass(frozen=True, slots=True)
class LineCommentStyle:
    """A line comment marker, e.g. ``//`` or ``///``.

    Attributes:
        marker: Text that opens the comment; it runs to end of line
        documentation: Comments with this marker are prose for rendering
    """

    marker: str
    documentation: bool = False


@dataclass(frozen=True, slots=True)
class BlockCommentStyle:
    """A block comment start/end pair, e.g. ``/**`` ... ``*/``.

    Attributes:
        start: Opening marker
        end: Closing marker
        documentation: Comments in this style are prose for rendering
        continuation: Decoration repeated at the start of interior lines
            (e.g. ``*``); stripped by the normalizer when present
    """

    start: str
    end: str
    documentation: bool = False
    continuation: str = ""


@dataclass(frozen=True, slots=True)
class StringDelimiter:
    """A string or character literal delimiter pair.

    Attributes:
        open: Opening delimiter
        close: Closing delimiter
        escape: Escape marker; consumes itself plus the next character.
            Empty for literals without escapes. When equal to ``close``,
            a doubled close delimiter is the escape (SQL ``'it''s'``).
        multiline: False if a newline ends the literal (unterminated)
    """

    open: str
    close: str
    escape: str = "\\"
    multiline: bool = True


CommentStyle = LineCommentStyle | BlockCommentStyle
Style = LineCommentStyle | BlockCommentStyle | StringDelimiter

_KIND_RANK = {
    SpanKind.STRING_LITERAL: 0,
    SpanKind.LINE_COMMENT: 1,
    SpanKind.BLOCK_COMMENT: 2,
}


@dataclass(frozen=True, slots=True)
class Opener:
    """A marker that switches the scanner out of code mode."""

    marker: str
    kind: SpanKind
    style: Style


@dataclass(frozen=True, slots=True)
class Grammar:
    """Comment and string-literal grammar for one language.

    Attributes:
        name: Canonical language identifier (lowercase)
        line_comments: Line comment markers
        block_comments: Block comment styles, most specific first
        strings: String and character literal delimiters
        extensions: File extensions (with leading dot) for path lookup
        aliases: Alternative identifiers accepted by GrammarTable.get
        highlight_language: Identifier handed to the syntax highlighter;
            defaults to ``name``
        openers: Compiled opener list in match priority order

    Raises:
        ConfigurationError: If the grammar is malformed.

    """

    name: str
    line_comments: tuple[LineCommentStyle, ...] = ()
    block_comments: tuple[BlockCommentStyle, ...] = ()
    strings: tuple[StringDelimiter, ...] = ()
    extensions: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()
    highlight_language: str = ""
    openers: tuple[Opener, ...] = field(init=False, repr=False, compare=False)
    _openers_by_char: dict[str, tuple[Opener, ...]] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        """Validate the grammar and compile the opener list."""
        if not self.name:
            raise ConfigurationError("grammar name must not be empty")
        if not self.highlight_language:
            object.__setattr__(self, "highlight_language", self.name)

        self._validate()
        openers = self._compile_openers()

        by_char: dict[str, list[Opener]] = {}
        for opener in openers:
            by_char.setdefault(opener.marker[0], []).append(opener)

        object.__setattr__(self, "openers", openers)
        object.__setattr__(
            self, "_openers_by_char", {k: tuple(v) for k, v in by_char.items()}
        )

    def _validate(self) -> None:
        for style in self.line_comments:
            if not style.marker:
                raise ConfigurationError("line comment marker must not be empty", self.name)

        for style in self.block_comments:
            if not style.start:
                raise ConfigurationError("block comment start marker must not be empty", self.name)
            if not style.end:
                raise ConfigurationError(
                    f"block comment {style.start!r} is missing its end marker", self.name
                )

        for delim in self.strings:
            if not delim.open or not delim.close:
                raise ConfigurationError(
                    "string delimiters need both an open and a close marker", self.name
                )

        for i, earlier in enumerate(self.block_comments):
            for later in self.block_comments[i + 1 :]:
                if later.start != earlier.start and later.start.startswith(earlier.start):
                    raise ConfigurationError(
                        f"block comment {later.start!r} is shadowed by {earlier.start!r}; "
                        "list the more specific style first",
                        self.name,
                    )

        for style in self.block_comments:
            if not (style.documentation and self._is_refinement(style)):
                continue
            plain = style.start[:-1]
            if not any(other.start == plain for other in self.block_comments):
                raise ConfigurationError(
                    f"documentation block comment {style.start!r} needs a plain {plain!r} "
                    f"style, or {plain + style.end!r} would open a documentation comment",
                    self.name,
                )

        seen: set[str] = set()
        markers = [s.marker for s in self.line_comments]
        markers += [s.start for s in self.block_comments]
        markers += [d.open for d in self.strings]
        for marker in markers:
            if marker in seen:
                raise ConfigurationError(f"marker {marker!r} is declared more than once", self.name)
            seen.add(marker)

    @staticmethod
    def _is_refinement(style: BlockCommentStyle) -> bool:
        """Check if the start marker's last char also begins the end marker.

        Such a start (``/**`` with ``*/``) can be read as a shorter start
        followed by the end marker, as in ``/**/``.
        """
        return len(style.start) > len(style.end) and style.start[-1] == style.end[0]

    def _compile_openers(self) -> tuple[Opener, ...]:
        openers = [Opener(d.open, SpanKind.STRING_LITERAL, d) for d in self.strings]
        openers += [Opener(s.marker, SpanKind.LINE_COMMENT, s) for s in self.line_comments]
        openers += [Opener(s.start, SpanKind.BLOCK_COMMENT, s) for s in self.block_comments]
        # sorted() is stable, so table order survives among equal keys
        return tuple(sorted(openers, key=lambda o: (-len(o.marker), _KIND_RANK[o.kind])))

    def openers_for(self, char: str) -> tuple[Opener, ...]:
        """Openers whose marker starts with ``char``, in priority order."""
        return self._openers_by_char.get(char, ())

    @property
    def documentation_markers(self) -> tuple[str, ...]:
        """Opening markers of every documentation-style comment."""
        markers = [s.marker for s in self.line_comments if s.documentation]
        markers += [s.start for s in self.block_comments if s.documentation]
        return tuple(markers)


class GrammarTable:
    """Immutable table of grammars keyed by name, alias and extension.

    Use GrammarTableBuilder, GrammarTable.from_dict or the loader
    functions to create instances.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_grammars", "_by_name", "_by_extension")

    def __init__(
        self,
        grammars: tuple[Grammar, ...],
        by_name: dict[str, Grammar],
        by_extension: dict[str, Grammar],
    ) -> None:
        """Initialize table with pre-built mappings."""
        self._grammars = grammars
        self._by_name = by_name
        self._by_extension = by_extension

    @classmethod
    def from_dict(cls, data: dict) -> GrammarTable:
        """Build a table from a ``{name: grammar-mapping}`` dict.

        See tinta.grammar.loader for the accepted shape.
        """
        from tinta.grammar.loader import table_from_dict

        return table_from_dict(data)

    def get(self, language: str) -> Grammar:
        """Get the grammar for a language name or alias (case-insensitive).

        Raises:
            ConfigurationError: If the language is unknown.
        """
        grammar = self._by_name.get(language.strip().lower())
        if grammar is None:
            raise ConfigurationError(f"Unknown language {language!r}")
        return grammar

    def for_path(self, path: str | PathLike[str]) -> Grammar:
        """Get the grammar registered for a file's extension.

        Raises:
            ConfigurationError: If no grammar claims the extension.
        """
        suffix = PurePath(path).suffix.lower()
        grammar = self._by_extension.get(suffix)
        if grammar is None:
            raise ConfigurationError(f"No grammar registered for {str(path)!r}")
        return grammar

    def names(self) -> tuple[str, ...]:
        """Canonical names of all grammars, in registration order."""
        return tuple(g.name for g in self._grammars)

    @property
    def grammars(self) -> tuple[Grammar, ...]:
        """All registered grammars."""
        return self._grammars

    def __contains__(self, language: str) -> bool:
        """Support 'name in table' syntax (names and aliases)."""
        return language.strip().lower() in self._by_name

    def __iter__(self) -> Iterator[Grammar]:
        return iter(self._grammars)

    def __len__(self) -> int:
        """Number of grammars."""
        return len(self._grammars)


class GrammarTableBuilder:
    """Mutable builder for GrammarTable.

    Example:
        >>> builder = GrammarTableBuilder()
        >>> builder.register(Grammar(name="shell", line_comments=(LineCommentStyle("#"),)))
        >>> table = builder.build()
    """

    __slots__ = ("_grammars", "_by_name", "_by_extension")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._grammars: list[Grammar] = []
        self._by_name: dict[str, Grammar] = {}
        self._by_extension: dict[str, Grammar] = {}

    def register(self, grammar: Grammar) -> GrammarTableBuilder:
        """Register a grammar under its name, aliases and extensions.

        Returns:
            Self for chaining

        Raises:
            ConfigurationError: If a name, alias or extension is already taken
        """
        for key in (grammar.name, *grammar.aliases):
            key = key.lower()
            if key in self._by_name:
                existing = self._by_name[key]
                raise ConfigurationError(
                    f"identifier {key!r} already registered by {existing.name!r}", grammar.name
                )
            self._by_name[key] = grammar

        for ext in grammar.extensions:
            ext = ext.lower() if ext.startswith(".") else f".{ext.lower()}"
            if ext in self._by_extension:
                existing = self._by_extension[ext]
                raise ConfigurationError(
                    f"extension {ext!r} already registered by {existing.name!r}", grammar.name
                )
            self._by_extension[ext] = grammar

        self._grammars.append(grammar)
        return self

    def register_all(self, grammars: list[Grammar]) -> GrammarTableBuilder:
        """Register multiple grammars."""
        for grammar in grammars:
            self.register(grammar)
        return self

    def build(self) -> GrammarTable:
        """Build immutable table from registered grammars."""
        return GrammarTable(
            grammars=tuple(self._grammars),
            by_name=dict(self._by_name),
            by_extension=dict(self._by_extension),
        )

    def __len__(self) -> int:
        """Number of registered grammars."""
        return len(self._grammars)
