"""Typed document model for tinta.

All nodes are frozen dataclasses with slots for:
- Immutability: safe sharing across threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: ``match segment: case Documentation(text=t): ...``

Node Hierarchy:
Node (base)
├── Segment
│   ├── Documentation   prose from a documentation-style comment
│   └── Code            verbatim code, incidental comments included
└── Document            ordered segments of one source file

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from tinta.diagnostics import Diagnostic
from tinta.location import SourceLocation


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all nodes.

    Every node records the source range it was built from.

    """

    location: SourceLocation


@dataclass(frozen=True, slots=True)
class Segment(Node):
    """Base class for the units of a Document."""


@dataclass(frozen=True, slots=True)
class Documentation(Segment):
    """Prose taken from a documentation comment, decoration stripped.

    The text is handed to a prose (markdown) renderer as-is; it is not
    guaranteed to be valid markdown.

    """

    text: str


@dataclass(frozen=True, slots=True)
class Code(Segment):
    """Verbatim source code.

    The text is an exact copy of the source range, indentation, blank lines
    and incidental comments included.

    """

    text: str
    language: str

    @property
    def is_blank(self) -> bool:
        """True if the code is whitespace only."""
        return not self.text.strip()


@dataclass(frozen=True, slots=True)
class Section:
    """A documentation segment paired with the code that follows it.

    Either side may be None: code before the first documentation comment
    has no prose, and a trailing comment has no code.

    """

    documentation: Documentation | None
    code: Code | None


@dataclass(frozen=True, slots=True)
class Document(Node):
    """The ordered segments of one source file.

    Attributes:
        segments: Segments in source order
        language: Grammar name the file was segmented with
        diagnostics: Recoverable problems found while segmenting
        source_file: Optional source file path

    """

    segments: tuple[Segment, ...]
    language: str = ""
    diagnostics: tuple[Diagnostic, ...] = ()
    source_file: str | None = None

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def documentation(self) -> tuple[Documentation, ...]:
        """Documentation segments only."""
        return tuple(s for s in self.segments if isinstance(s, Documentation))

    @property
    def code(self) -> tuple[Code, ...]:
        """Code segments only."""
        return tuple(s for s in self.segments if isinstance(s, Code))

    def code_text(self) -> str:
        """Concatenate all code, i.e. the source with documentation removed."""
        return "".join(s.text for s in self.segments if isinstance(s, Code))

    def sections(self) -> tuple[Section, ...]:
        """Pair each documentation segment with the code that follows it.

        Whitespace-only code is skipped, so two documentation segments
        separated by a blank line become two sections. This is the
        prose-beside-code layout used by literate programming renderers.
        """
        sections: list[Section] = []
        pending: Documentation | None = None

        for segment in self.segments:
            if isinstance(segment, Documentation):
                if pending is not None:
                    sections.append(Section(documentation=pending, code=None))
                pending = segment
            elif isinstance(segment, Code) and not segment.is_blank:
                sections.append(Section(documentation=pending, code=segment))
                pending = None

        if pending is not None:
            sections.append(Section(documentation=pending, code=None))
        return tuple(sections)
