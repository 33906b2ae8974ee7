"""Segment renderer: hands each segment to its collaborator.

Documentation goes to the prose renderer, Code to the highlighter. A
collaborator that raises never loses the segment: it is rendered as
escaped plain text instead and the failure is logged at DEBUG.

Thread Safety:
render_segments() keeps no state between calls. Collaborators are shared
module globals and must be thread-safe themselves.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from tinta.errors import RenderError
from tinta.nodes import Code, Document, Documentation, Segment
from tinta.utils.logger import get_logger

logger = get_logger(__name__)

SegmentKind = Literal["documentation", "code"]


@dataclass(frozen=True, slots=True)
class RenderedSegment:
    """One segment's rendered output.

    Attributes:
        kind: "documentation" or "code"
        html: Rendered markup
        segment: The segment it was rendered from
        highlighted: False if the escaped plain fallback was used
    """

    kind: SegmentKind
    html: str
    segment: Segment
    highlighted: bool = True


def render_segments(
    document: Document,
    *,
    highlight: bool = True,
) -> tuple[RenderedSegment, ...]:
    """Render every segment of a Document, in order.

    Args:
        document: Segmented document
        highlight: Pass code through the highlighter (plain blocks if False)

    Returns:
        Rendered segments in source order

    Raises:
        RenderError: For a segment type with no collaborator.
    """
    return tuple(render_segment(s, highlight=highlight) for s in document.segments)


def render_segment(segment: Segment, *, highlight: bool = True) -> RenderedSegment:
    """Render a single segment."""
    if isinstance(segment, Documentation):
        return _render_documentation(segment)
    if isinstance(segment, Code):
        return _render_code(segment, highlight=highlight)
    raise RenderError(f"No renderer for segment type {type(segment).__name__}")


def _render_documentation(segment: Documentation) -> RenderedSegment:
    from tinta.prose import get_prose_renderer, plain_prose, render_prose

    if get_prose_renderer() is not None:
        try:
            return RenderedSegment("documentation", render_prose(segment.text), segment)
        except Exception:
            logger.debug("Prose rendering failed at %s", segment.location, exc_info=True)
    return RenderedSegment(
        "documentation", plain_prose(segment.text), segment, highlighted=False
    )


def _render_code(segment: Code, *, highlight: bool) -> RenderedSegment:
    from tinta.highlighting import highlight as highlight_code
    from tinta.highlighting import plain_code, supports_language

    if highlight and supports_language(segment.language):
        try:
            return RenderedSegment(
                "code", highlight_code(segment.text, segment.language), segment
            )
        except Exception:
            logger.debug(
                "Syntax highlighting failed for language %r", segment.language, exc_info=True
            )
    return RenderedSegment(
        "code", plain_code(segment.text, segment.language), segment, highlighted=False
    )
