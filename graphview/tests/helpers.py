"""
Builders for query values in the shape the Neo4j driver serialises them.
"""
from typing import Any, Dict

from graphview.types import GraphEdge


def node_row(identity: int, name: str = None, labels=("Person",), **props) -> Dict[str, Any]:
    """A node value in the driver's JSON shape."""
    properties = dict(props)
    if name is not None:
        properties["name"] = name
    return {"identity": identity, "labels": list(labels), "properties": properties}


def rel_row(identity: int, start: int, end: int, rel_type: str = "FRIEND_OF", **props) -> Dict[str, Any]:
    """A relationship value in the driver's JSON shape."""
    return {"identity": identity, "type": rel_type, "start": start, "end": end, "properties": dict(props)}


def edge(identity: int, from_id: int, to_id: int, rel_type: str = "FRIEND_OF") -> GraphEdge:
    return GraphEdge(id=identity, from_id=from_id, to_id=to_id, type=rel_type)
