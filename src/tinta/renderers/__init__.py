"""tinta renderers.

The boundary between segmentation and output. tinta does not render
markdown or highlight code itself; it hands segments to collaborators.

Available:
- render_segments: Documentation to the prose renderer, Code to the highlighter
- Highlighter, ProseRenderer: collaborator protocols

Thread Safety:
render_segments() is stateless. Safe for concurrent use if the
configured collaborators are.

"""

from tinta.renderers.protocol import Highlighter, ProseRenderer
from tinta.renderers.segments import RenderedSegment, render_segment, render_segments

__all__ = [
    "Highlighter",
    "ProseRenderer",
    "RenderedSegment",
    "render_segment",
    "render_segments",
]
