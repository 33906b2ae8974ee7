"""Modular state-machine scanner for tinta.

Classifies every character of a source file as code, line comment,
block comment or string literal, driven by a Grammar.

Architecture:
scanner/
├── __init__.py          # Re-exports Scanner, ScanMode
├── core.py              # Scanner class (mixin composition + navigation)
├── modes.py             # ScanMode enum
├── classifiers/         # Pure decision mixins
│   └── opener.py        # Which opener starts at a position
└── states/              # Mode-specific scanners
    ├── code.py          # CODE mode
    ├── comment.py       # LINE_COMMENT and BLOCK_COMMENT modes
    └── string.py        # STRING_LITERAL mode

Usage:
    >>> from tinta.scanner import Scanner
    >>> spans = list(Scanner("/** Hi */\\nint x;", grammar).scan())
    >>> [s.kind.name for s in spans]
    ['BLOCK_COMMENT', 'CODE']

"""

from tinta.scanner.core import Scanner
from tinta.scanner.modes import ScanMode

__all__ = ["Scanner", "ScanMode"]
