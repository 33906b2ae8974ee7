"""Scanner operating modes.

This module defines the finite state machine modes for the scanner.
"""

from __future__ import annotations

from enum import Enum, auto


class ScanMode(Enum):
    """Scanner operating modes.

    The scanner switches between modes based on the opener it just matched:
    - CODE: Plain code, scanning for the next opener
    - LINE_COMMENT: Inside a line comment, runs to end of line
    - BLOCK_COMMENT: Inside a block comment, runs to the remembered end marker
    - STRING_LITERAL: Inside a literal, runs to the remembered close delimiter

    """

    CODE = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()
    STRING_LITERAL = auto()
