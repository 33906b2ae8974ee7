"""Comment grammar tables for the tinta scanner.

A grammar is the only thing the scanner knows about a language: its
comment markers and string-literal delimiters.

Package layout:
grammar/
├── __init__.py      # Re-exports
├── table.py         # Grammar, styles, GrammarTable + builder
├── loader.py        # JSON loading, bundled table
└── bundled.json     # Grammar data for common languages
"""

from tinta.grammar.loader import (
    grammar_from_dict,
    load_bundled_grammars,
    load_grammars,
    loads_grammars,
    table_from_dict,
)
from tinta.grammar.table import (
    BlockCommentStyle,
    CommentStyle,
    Grammar,
    GrammarTable,
    GrammarTableBuilder,
    LineCommentStyle,
    Opener,
    StringDelimiter,
    Style,
)

__all__ = [
    "BlockCommentStyle",
    "CommentStyle",
    "Grammar",
    "GrammarTable",
    "GrammarTableBuilder",
    "LineCommentStyle",
    "Opener",
    "StringDelimiter",
    "Style",
    "grammar_from_dict",
    "load_bundled_grammars",
    "load_grammars",
    "loads_grammars",
    "table_from_dict",
]
