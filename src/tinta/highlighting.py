"""Syntax highlighting injection for tinta.

Code segments carry the grammar's highlighter language id. When
tinta[syntax] is installed, Rosettes is used automatically.

Usage:
    # Automatic with tinta[syntax]
    from tinta.renderers import render_segments
    rendered = render_segments(doc)  # Highlighting enabled if rosettes is installed

    # Manual injection
    from tinta.highlighting import set_highlighter

    def my_highlighter(code: str, language: str) -> str:
        return f'<pre class="language-{language}"><code>{code}</code></pre>'

    set_highlighter(my_highlighter)
"""

from __future__ import annotations

from collections.abc import Callable
from html import escape

from tinta.renderers.protocol import Highlighter

# Support for simple callable-based highlighters
SimpleHighlighter = Callable[[str, str], str]

# Global highlighter
_highlighter: Highlighter | SimpleHighlighter | None = None
_tried_rosettes: bool = False


def set_highlighter(highlighter: Highlighter | SimpleHighlighter | None) -> None:
    """Set the global syntax highlighter.

    Args:
        highlighter: A Highlighter protocol implementation, or a simple
            function that takes (code, language) and returns HTML.
            Pass None to clear the highlighter.
    """
    global _highlighter
    _highlighter = highlighter


def _try_import_rosettes() -> bool:
    """Try to import and configure Rosettes highlighter."""
    global _highlighter, _tried_rosettes

    if _tried_rosettes:
        return _highlighter is not None

    _tried_rosettes = True

    try:
        import rosettes  # type: ignore[import-not-found]

        class RosettesHighlighter:
            """Rosettes-based syntax highlighter implementing Highlighter protocol."""

            def highlight(self, code: str, language: str) -> str:
                """Highlight code using Rosettes."""
                result: str = rosettes.highlight(code, language=language)
                return result

            def supports_language(self, language: str) -> bool:
                """Check if Rosettes supports the language."""
                try:
                    result: bool = rosettes.supports_language(language)
                    return result
                except Exception:
                    return False

        _highlighter = RosettesHighlighter()
        return True
    except ImportError:
        return False


def plain_code(code: str, language: str) -> str:
    """Escaped code block without highlighting."""
    lang_class = f' class="language-{escape(language)}"' if language else ""
    return f"<pre><code{lang_class}>{escape(code)}</code></pre>"


def highlight(code: str, language: str) -> str:
    """Highlight code using the configured highlighter.

    Falls back to a plain code block if no highlighter is available.
    Automatically tries to use Rosettes if installed.

    Args:
        code: Source code to highlight
        language: Highlighter language id

    Returns:
        HTML markup (highlighted if available, plain otherwise)
    """
    if _highlighter is None:
        _try_import_rosettes()

    if _highlighter is not None:
        # Full protocol or a simple callable
        if hasattr(_highlighter, "highlight") and callable(_highlighter.highlight):
            return _highlighter.highlight(code, language)
        elif callable(_highlighter):
            return _highlighter(code, language)

    return plain_code(code, language)


def supports_language(language: str) -> bool:
    """Check if the configured highlighter handles a grammar's highlight id.

    Simple callables are assumed to handle every language.
    """
    highlighter = get_highlighter()
    if highlighter is None or not language:
        return False
    check = getattr(highlighter, "supports_language", None)
    if callable(check):
        return bool(check(language))
    return True


def get_highlighter() -> Highlighter | SimpleHighlighter | None:
    """Get the current highlighter instance.

    Returns:
        The configured highlighter, or None if not set.
        Automatically tries to load Rosettes if not already configured.
    """
    if _highlighter is None:
        _try_import_rosettes()
    return _highlighter
