"""Exception classes for tinta.

Provides standardized exceptions for error handling throughout tinta.
Recoverable conditions (unterminated comments and strings) are not
exceptions; they are reported as diagnostics on the Document unless
strict mode is enabled.
"""

from __future__ import annotations


class TintaError(Exception):
    """Base exception for all tinta errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigurationError(TintaError):
    """Unknown language identifier or malformed grammar table.

    Fatal for the file being segmented: no partial Document is produced.
    """

    def __init__(self, message: str, language: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error description
            language: Language the error relates to (optional)
        """
        self.message = message
        self.language = language

        prefix = f"Grammar '{language}': " if language else ""
        super().__init__(f"{prefix}{message}")


class UnterminatedConstructError(TintaError):
    """A block comment or string literal never closes.

    Only raised in strict mode; by default the construct is closed at the
    end of input and reported as a diagnostic.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize error with optional location.

        Args:
            message: Error description
            lineno: Line number where the construct opened (1-indexed)
            col_offset: Column offset where the construct opened (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class RenderError(TintaError):
    """Error while handing segments to a rendering collaborator.

    Raised when a rendered segment cannot be produced at all, even
    through the plain-text fallback.
    """

    pass
