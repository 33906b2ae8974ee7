"""Prose rendering injection for tinta.

Documentation segments are markdown-ish text. When tinta[markdown] is
installed, Patitas renders them automatically; otherwise each paragraph
is escaped and wrapped in ``<p>``.

Usage:
    from tinta.prose import set_prose_renderer

    def my_renderer(text: str) -> str:
        return f"<div class='prose'>{text}</div>"

    set_prose_renderer(my_renderer)
"""

from __future__ import annotations

from collections.abc import Callable
from html import escape

from tinta.renderers.protocol import ProseRenderer

SimpleProseRenderer = Callable[[str], str]

_prose_renderer: ProseRenderer | SimpleProseRenderer | None = None
_tried_patitas: bool = False


def set_prose_renderer(renderer: ProseRenderer | SimpleProseRenderer | None) -> None:
    """Set the global prose renderer.

    Args:
        renderer: A ProseRenderer implementation, or a function taking the
            documentation text and returning HTML. Pass None to clear.
    """
    global _prose_renderer
    _prose_renderer = renderer


def _try_import_patitas() -> bool:
    """Try to import and configure the Patitas markdown renderer."""
    global _prose_renderer, _tried_patitas

    if _tried_patitas:
        return _prose_renderer is not None

    _tried_patitas = True

    try:
        from patitas import Markdown  # type: ignore[import-not-found]

        class PatitasProseRenderer:
            """Patitas-based markdown renderer implementing ProseRenderer."""

            __slots__ = ("_md",)

            def __init__(self) -> None:
                self._md = Markdown(plugins=["table", "strikethrough"])

            def render(self, text: str) -> str:
                result: str = self._md(text)
                return result

        _prose_renderer = PatitasProseRenderer()
        return True
    except ImportError:
        return False


def plain_prose(text: str) -> str:
    """Escape text and wrap each blank-line separated paragraph in ``<p>``."""
    paragraphs = [p.strip() for p in text.split("\n\n")]
    return "".join(f"<p>{escape(p)}</p>\n" for p in paragraphs if p)


def render_prose(text: str) -> str:
    """Render documentation text using the configured prose renderer.

    Falls back to escaped paragraphs if no renderer is available.
    Automatically tries to use Patitas if installed.
    """
    if _prose_renderer is None:
        _try_import_patitas()

    if _prose_renderer is not None:
        if hasattr(_prose_renderer, "render") and callable(_prose_renderer.render):
            return _prose_renderer.render(text)
        elif callable(_prose_renderer):
            return _prose_renderer(text)

    return plain_prose(text)


def get_prose_renderer() -> ProseRenderer | SimpleProseRenderer | None:
    """Get the current prose renderer, loading Patitas if available."""
    if _prose_renderer is None:
        _try_import_patitas()
    return _prose_renderer
