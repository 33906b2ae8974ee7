"""Load grammar tables from JSON-compatible data.

Grammar tables are configuration data, not code. The accepted shape:

    {
      "c": {
        "extensions": [".c", ".h"],
        "aliases": ["h"],
        "highlight": "c",
        "line_comments": ["//", {"marker": "///", "documentation": true}],
        "block_comments": [
          {"start": "/**", "end": "*/", "documentation": true, "continuation": "*"},
          {"start": "/*", "end": "*/", "continuation": "*"}
        ],
        "strings": [{"open": "\\"", "close": "\\"", "escape": "\\\\", "multiline": false}]
      }
    }

Unknown keys are rejected: a misspelled key in a grammar would otherwise
silently change how files are segmented.

A bundled table covering common languages ships with the package. The core
never consults it implicitly; call load_bundled_grammars() to use it.
"""

from __future__ import annotations

import json
from importlib.resources import files
from os import PathLike
from pathlib import Path
from typing import Any

from tinta.errors import ConfigurationError
from tinta.grammar.table import (
    BlockCommentStyle,
    Grammar,
    GrammarTable,
    GrammarTableBuilder,
    LineCommentStyle,
    StringDelimiter,
)

_GRAMMAR_KEYS = frozenset(
    {"extensions", "aliases", "highlight", "line_comments", "block_comments", "strings"}
)
_LINE_KEYS = frozenset({"marker", "documentation"})
_BLOCK_KEYS = frozenset({"start", "end", "documentation", "continuation"})
_STRING_KEYS = frozenset({"open", "close", "escape", "multiline"})

_BUNDLED: GrammarTable | None = None


def grammar_from_dict(name: str, data: dict[str, Any]) -> Grammar:
    """Build one Grammar from its mapping.

    Args:
        name: Canonical language name
        data: Grammar mapping (see module docstring)

    Returns:
        Validated Grammar

    Raises:
        ConfigurationError: If the mapping is malformed
    """
    if not isinstance(data, dict):
        raise ConfigurationError("grammar entry must be a mapping", name)
    _check_keys(data, _GRAMMAR_KEYS, name, "grammar")

    line_comments = tuple(_line_style(entry, name) for entry in _as_list(data, "line_comments", name))
    block_comments = tuple(
        _block_style(entry, name) for entry in _as_list(data, "block_comments", name)
    )
    strings = tuple(_string_delimiter(entry, name) for entry in _as_list(data, "strings", name))

    return Grammar(
        name=name.strip().lower(),
        line_comments=line_comments,
        block_comments=block_comments,
        strings=strings,
        extensions=tuple(str(e) for e in _as_list(data, "extensions", name)),
        aliases=tuple(str(a) for a in _as_list(data, "aliases", name)),
        highlight_language=str(data.get("highlight", "")),
    )


def table_from_dict(data: dict[str, Any]) -> GrammarTable:
    """Build a GrammarTable from a ``{name: grammar-mapping}`` dict.

    Raises:
        ConfigurationError: If any entry is malformed
    """
    if not isinstance(data, dict):
        raise ConfigurationError("grammar table must be a mapping of language names")

    builder = GrammarTableBuilder()
    for name, entry in data.items():
        builder.register(grammar_from_dict(name, entry))
    return builder.build()


def load_grammars(path: str | PathLike[str]) -> GrammarTable:
    """Load a grammar table from a JSON file.

    Raises:
        ConfigurationError: If the file is not valid JSON or is malformed
        OSError: If the file cannot be read
    """
    text = Path(path).read_text(encoding="utf-8")
    return loads_grammars(text, origin=str(path))


def loads_grammars(text: str, *, origin: str = "<string>") -> GrammarTable:
    """Load a grammar table from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{origin}: invalid grammar JSON: {e}") from e
    return table_from_dict(data)


def load_bundled_grammars() -> GrammarTable:
    """Get the bundled grammar table (cached singleton).

    Thread Safety:
        Returns a cached immutable table. Safe for concurrent access.
    """
    global _BUNDLED
    if _BUNDLED is None:
        text = files("tinta.grammar").joinpath("bundled.json").read_text(encoding="utf-8")
        _BUNDLED = loads_grammars(text, origin="bundled.json")
    return _BUNDLED


def _check_keys(entry: dict[str, Any], allowed: frozenset[str], name: str, what: str) -> None:
    unknown = sorted(set(entry) - allowed)
    if unknown:
        raise ConfigurationError(f"unknown {what} key(s): {', '.join(unknown)}", name)


def _as_list(data: dict[str, Any], key: str, name: str) -> list[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ConfigurationError(f"{key!r} must be a list", name)
    return value


def _line_style(entry: Any, name: str) -> LineCommentStyle:
    if isinstance(entry, str):
        return LineCommentStyle(marker=entry)
    if not isinstance(entry, dict):
        raise ConfigurationError("line comment entries must be strings or mappings", name)
    _check_keys(entry, _LINE_KEYS, name, "line comment")
    return LineCommentStyle(
        marker=str(entry.get("marker", "")),
        documentation=bool(entry.get("documentation", False)),
    )


def _block_style(entry: Any, name: str) -> BlockCommentStyle:
    if not isinstance(entry, dict):
        raise ConfigurationError("block comment entries must be mappings", name)
    _check_keys(entry, _BLOCK_KEYS, name, "block comment")
    if "end" not in entry:
        raise ConfigurationError(
            f"block comment {entry.get('start')!r} is missing its end marker", name
        )
    return BlockCommentStyle(
        start=str(entry.get("start", "")),
        end=str(entry["end"]),
        documentation=bool(entry.get("documentation", False)),
        continuation=str(entry.get("continuation", "")),
    )


def _string_delimiter(entry: Any, name: str) -> StringDelimiter:
    if not isinstance(entry, dict):
        raise ConfigurationError("string delimiter entries must be mappings", name)
    _check_keys(entry, _STRING_KEYS, name, "string delimiter")
    opening = str(entry.get("open", ""))
    return StringDelimiter(
        open=opening,
        close=str(entry.get("close", opening)),
        escape=str(entry.get("escape", "\\")),
        multiline=bool(entry.get("multiline", True)),
    )
