"""Mode-specific scanners for the tinta scanner.

Each scanner is a mixin that handles one ScanMode and returns the scanner
to CODE mode when its construct closes.
"""

from tinta.scanner.states.code import CodeScannerMixin
from tinta.scanner.states.comment import CommentScannerMixin
from tinta.scanner.states.string import StringScannerMixin

__all__ = [
    "CodeScannerMixin",
    "CommentScannerMixin",
    "StringScannerMixin",
]
