"""Collaborator protocols: the rendering boundary of tinta.

tinta produces Documents; turning prose into formatted text and code into
highlighted blocks is left to collaborators that satisfy these protocols.

Example:
    from tinta.renderers.protocol import ProseRenderer

    class Plain:
        def render(self, text: str) -> str:
            return f"<pre>{text}</pre>"

    set_prose_renderer(Plain())

"""

from typing import Protocol


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    Highlighters take code and a language identifier and return HTML markup
    with syntax highlighting applied.

    Thread Safety:
        Implementations must be thread-safe. The highlight() method
        may be called concurrently from multiple render threads.
    """

    def highlight(self, code: str, language: str) -> str:
        """Highlight code with syntax colors.

        Args:
            code: Source code of one Code segment
            language: The grammar's highlighter id (e.g., "c", "javascript")

        Returns:
            HTML markup with highlighting

        Contract:
            - MUST return valid HTML (never raise for bad input)
            - MUST escape HTML entities in code
            - SHOULD fall back to plain text for unknown languages
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if highlighter supports the given language.

        Contract:
            - MUST NOT raise exceptions
        """
        ...


class ProseRenderer(Protocol):
    """Protocol for prose (markdown) renderers.

    Documentation text is handed over unmodified. It is not guaranteed to
    be valid markdown, so implementations should render what they can.

    """

    def render(self, text: str) -> str:
        """Render documentation text to HTML.

        Args:
            text: Normalized documentation text.

        Returns:
            HTML string.

        """
        ...
