"""Comment normalizer: raw comment spans to prose.

Strips comment delimiters and per-line decoration from one or more adjacent
comment spans of the same documentation class and joins them into a single
NormalizedComment.

Decoration stripping is cosmetic and best-effort. It applies to the lines
after the opener's own line. A line that does not start with the style's
continuation marker is kept verbatim, so deliberate indentation (an embedded
code sample, say) survives. Line breaks are never reflowed; the prose
renderer decides what blank lines mean.

Thread Safety:
All functions are pure. Safe to call from any thread.

Example:
    >>> spans = list(Scanner("/**\\n * Hello\\n * world\\n */", grammar).scan())
    >>> normalize_comment(spans).text
    'Hello\\nworld'

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from textwrap import dedent

from tinta.grammar.table import BlockCommentStyle, LineCommentStyle
from tinta.location import SourceLocation
from tinta.spans import Span, SpanKind


@dataclass(frozen=True, slots=True)
class NormalizedComment:
    """Prose derived from one or more adjacent comment spans.

    Attributes:
        text: Prose with delimiters and decoration removed
        is_documentation: True if the comments use a documentation-style marker
        indent: 0-based column of the first comment's opening marker; kept for
            diagnostics, never reproduced in the prose
        spans: The comment spans that were merged
        location: Source range from the first to the last span

    """

    text: str
    is_documentation: bool
    indent: int
    spans: tuple[Span, ...]
    location: SourceLocation


def normalize_comment(
    spans: Sequence[Span],
    *,
    strip_decoration: bool = True,
) -> NormalizedComment:
    """Normalize adjacent comment spans into one NormalizedComment.

    Code spans in ``spans`` (the whitespace between merged comments) only
    widen the location; they contribute no text.

    Args:
        spans: Comment spans in source order, optionally with the whitespace
            code spans between them
        strip_decoration: Strip each block comment line's continuation marker

    Returns:
        NormalizedComment

    Raises:
        ValueError: If no comment span is given, or if documentation and
            incidental comments are mixed
    """
    comments = tuple(s for s in spans if s.kind.is_comment)
    if not comments:
        raise ValueError("normalize_comment() needs at least one comment span")

    classes = {s.is_documentation for s in comments}
    if len(classes) > 1:
        raise ValueError("cannot merge documentation and incidental comments")

    pieces = [comment_body(s, strip_decoration=strip_decoration) for s in comments]
    text = _trim("\n".join(pieces))

    return NormalizedComment(
        text=text,
        is_documentation=classes.pop(),
        indent=comments[0].col - 1,
        spans=comments,
        location=spans[0].location.span_to(spans[-1].location),
    )


def comment_body(span: Span, *, strip_decoration: bool = True) -> str:
    """Return the text of a single comment span without its delimiters.

    Args:
        span: A LINE_COMMENT or BLOCK_COMMENT span
        strip_decoration: Strip block comment continuation markers

    Returns:
        Comment text. Leading and trailing blank lines are left in place
    """
    if span.kind is SpanKind.LINE_COMMENT:
        style = span.style
        assert isinstance(style, LineCommentStyle)
        body = span.value[len(style.marker) :]
        return body[1:] if body.startswith(" ") else body

    if span.kind is SpanKind.BLOCK_COMMENT:
        style = span.style
        assert isinstance(style, BlockCommentStyle)
        body = span.value[len(style.start) :]
        if span.terminated:
            body = body[: len(body) - len(style.end)]

        lines = [line.rstrip("\r") for line in body.split("\n")]
        # The opener's own line has no continuation marker
        first, rest = lines[0].lstrip(" \t"), lines[1:]
        if strip_decoration and style.continuation:
            rest = [strip_continuation(line, style.continuation) for line in rest]
        return "\n".join([first, *rest])

    raise ValueError(f"not a comment span: {span!r}")


def _trim(text: str) -> str:
    """Drop leading and trailing blank lines and the common indentation.

    Indentation that only some lines carry is kept, so an embedded code
    sample on the first content line keeps its leading spaces.
    """
    lines = text.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return dedent("\n".join(lines)).rstrip()


def strip_continuation(line: str, marker: str) -> str:
    """Strip leading whitespace, one continuation marker and one space.

    Lines without the marker come back unchanged.

    Example:
        >>> strip_continuation("   * - item", "*")
        '- item'
        >>> strip_continuation("    indented", "*")
        '    indented'
    """
    stripped = line.lstrip(" \t")
    if not stripped.startswith(marker):
        return line
    rest = stripped[len(marker) :]
    return rest[1:] if rest.startswith(" ") else rest
