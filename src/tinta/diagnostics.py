"""Non-fatal diagnostics attached to a Document.

Diagnostics describe recoverable problems found while segmenting. They never
abort segmentation; the Document is still produced, with the offending
construct closed at end of input (or end of line for single-line strings).

Thread Safety:
Diagnostics are frozen (immutable) and safe to share across threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from tinta.location import SourceLocation


class Construct(Enum):
    """Lexical construct that a diagnostic refers to."""

    BLOCK_COMMENT = auto()
    STRING_LITERAL = auto()


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Base class for diagnostics.

    Attributes:
        message: Human-readable description
        location: Where the problem starts
    """

    message: str
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.location} {self.message}"


@dataclass(frozen=True, slots=True)
class UnterminatedConstruct(Diagnostic):
    """A block comment or string literal that never closes.

    Attributes:
        construct: What was left open
        delimiter: The end marker or close delimiter that was expected
    """

    construct: Construct = Construct.BLOCK_COMMENT
    delimiter: str = ""
