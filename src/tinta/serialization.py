"""Document serialization: JSON round-trip for tinta documents.

Converts Documents, segments and diagnostics to/from JSON-compatible dicts.
Useful for:
- Caching segmented files between documentation builds
- Handing Documents to renderers in another process
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from tinta.serialization import to_json, from_json

    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure, safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from tinta.diagnostics import Construct, Diagnostic, UnterminatedConstruct
from tinta.location import SourceLocation
from tinta.nodes import Code, Document, Documentation, Node

# Registry of type names to classes for deserialization
_TYPES: dict[str, type] = {
    "Document": Document,
    "Documentation": Documentation,
    "Code": Code,
    "Diagnostic": Diagnostic,
    "UnterminatedConstruct": UnterminatedConstruct,
}


def to_dict(node: Node | Diagnostic) -> dict[str, Any]:
    """Convert a node or diagnostic to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        node: A Document, segment or diagnostic.

    Returns:
        Dict with ``_type`` and all fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, (Node, Diagnostic)):
        return to_dict(value)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "offset": value.offset,
            "end_offset": value.end_offset,
            "end_lineno": value.end_lineno,
            "end_col_offset": value.end_col_offset,
            "source_file": value.source_file,
        }
    if isinstance(value, Construct):
        return value.name
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node | Diagnostic:
    """Reconstruct a node or diagnostic from a dict.

    Args:
        data: Dict with ``_type`` and fields (as produced by to_dict).

    Returns:
        Frozen dataclass instance.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    cls = _TYPES.get(type_name)
    if cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name], f.name)

    return cls(**kwargs)


def _deserialize_value(value: Any, field_name: str = "") -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                offset=value.get("offset", 0),
                end_offset=value.get("end_offset", 0),
                end_lineno=value.get("end_lineno"),
                end_col_offset=value.get("end_col_offset"),
                source_file=value.get("source_file"),
            )
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item, field_name) for item in value)
    if field_name == "construct" and isinstance(value, str):
        return Construct[value]
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    raw = json.loads(data)
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node
