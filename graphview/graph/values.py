"""
Classification of raw query values into node and relationship values.

Values arrive either as Neo4j driver entities (``neo4j.graph.Node`` and
``neo4j.graph.Relationship``) or as plain mappings shaped like the driver's
JSON form (``{"identity", "labels", "properties"}`` for nodes and
``{"identity", "type", "start", "end", "properties"}`` for relationships).
Each value is resolved once here; the rest of the package only deals with
``NodeValue`` and ``RelationshipValue``.
"""

from typing import Any, Dict, Mapping, Optional

from neo4j.graph import Node, Relationship
from neo4j.spatial import Point

from ..types import GraphValue, NodeValue, RelationshipValue


LABEL_CONTAINERS = (list, tuple, set, frozenset)


def to_identity(raw: Any) -> Optional[int]:
    """Convert a raw identity to an integer, or None when it is not one.

    Accepts ints, integral floats, numeric strings, and element ids such as
    ``"4:2d0b1c5e-...:17"`` whose trailing segment is the numeric id.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str):
        tail = raw.strip().rsplit(":", 1)[-1]
        try:
            return int(tail)
        except ValueError:
            return None
    return None


def to_json_value(value: Any) -> Any:
    """Convert a property value to a JSON-native form.

    Neo4j temporal values become ISO-8601 strings, points become
    ``{"srid", "coordinates"}`` and byte arrays become hex strings. Lists and
    maps are converted item by item.
    """
    if isinstance(value, Point):
        return {"srid": value.srid, "coordinates": list(value)}
    if callable(getattr(value, "iso_format", None)):
        return value.iso_format()
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    if isinstance(value, Mapping):
        return {str(key): to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_value(item) for item in value]
    return value


def _properties(raw: Any) -> Dict[str, Any]:
    if isinstance(raw, Mapping) or isinstance(raw, (Node, Relationship)):
        return {str(key): to_json_value(raw[key]) for key in raw.keys()}
    return {}


def _from_driver_node(node: Node) -> Optional[NodeValue]:
    identity = to_identity(node.element_id)
    if identity is None:
        return None
    return NodeValue(identity=identity, labels=sorted(node.labels), properties=_properties(node))


def _from_driver_relationship(rel: Relationship) -> Optional[RelationshipValue]:
    if rel.start_node is None or rel.end_node is None:
        return None
    identity = to_identity(rel.element_id)
    start = to_identity(rel.start_node.element_id)
    end = to_identity(rel.end_node.element_id)
    if identity is None or start is None or end is None:
        return None
    return RelationshipValue(
        identity=identity,
        type=rel.type,
        start=start,
        end=end,
        properties=_properties(rel),
    )


def _from_mapping(value: Mapping) -> Optional[GraphValue]:
    if "identity" not in value:
        return None
    identity = to_identity(value["identity"])
    if identity is None:
        return None

    if "labels" in value:
        labels = value["labels"]
        if not isinstance(labels, LABEL_CONTAINERS):
            return None
        return NodeValue(
            identity=identity,
            labels=[str(label) for label in labels],
            properties=_properties(value.get("properties")),
        )

    if all(key in value for key in ("type", "start", "end")):
        start = to_identity(value["start"])
        end = to_identity(value["end"])
        if start is None or end is None or value["type"] is None:
            return None
        return RelationshipValue(
            identity=identity,
            type=str(value["type"]),
            start=start,
            end=end,
            properties=_properties(value.get("properties")),
        )

    return None


def classify_value(value: Any) -> Optional[GraphValue]:
    """Resolve a raw query value to a node or relationship value.

    Returns None for scalars and for anything missing the fields its shape
    requires.
    """
    if isinstance(value, (NodeValue, RelationshipValue)):
        return value
    if isinstance(value, Node):
        return _from_driver_node(value)
    if isinstance(value, Relationship):
        return _from_driver_relationship(value)
    if isinstance(value, Mapping):
        return _from_mapping(value)
    return None
