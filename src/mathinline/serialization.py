"""AST serialization: JSON round-trip and mdast export.

``to_dict``/``from_dict`` convert typed nodes to JSON-compatible dicts with a
``_type`` discriminator. ``to_mdast`` exports the tree in the mdast shape
used by unified/remark tooling, with ``inlineMath`` nodes carrying their
``hName``/``hProperties``/``hChildren`` rendering data.

All JSON output is deterministic (sorted keys).

Example:
    from mathinline import parse
    from mathinline.serialization import to_json, from_json

    doc = parse("Area :math[\\pi r^2]")
    assert from_json(to_json(doc)) == doc

Thread Safety:
    All functions are pure.

"""

import json
from dataclasses import fields
from typing import Any

from mathinline.location import SourceLocation
from mathinline.nodes import Document, InlineMath, Node, Text

_NODE_TYPES: dict[str, type] = {
    "Document": Document,
    "Text": Text,
    "InlineMath": InlineMath,
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Args:
        node: Any mathinline AST node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            **{f.name: getattr(value, f.name) for f in fields(value)},
        }
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])
    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(**{k: v for k, v in value.items() if k != "_type"})
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document AST to a JSON string."""
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document AST from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node


def to_mdast(node: Node) -> dict[str, Any]:
    """Export a node in mdast shape.

    Example:
        >>> to_mdast(InlineMath(SourceLocation.unknown(), "x"))["data"]["hProperties"]
        {'className': ['language-math', 'math-inline']}

    Raises:
        ValueError: If the node type has no mdast equivalent.

    """
    match node:
        case Document():
            return {
                "type": "root",
                "children": [
                    {"type": "paragraph", "children": [to_mdast(child) for child in node.children]}
                ]
                if node.children
                else [],
            }
        case Text():
            return {"type": "text", "value": node.content}
        case InlineMath():
            data = node.data
            return {
                "type": "inlineMath",
                "value": node.value,
                "data": {
                    "hName": data.h_name,
                    "hProperties": {"className": list(data.class_name)},
                    "hChildren": [{"type": "text", "value": c.value} for c in data.children],
                },
            }
    msg = f"No mdast equivalent for {type(node).__name__}"
    raise ValueError(msg)
