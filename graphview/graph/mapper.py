from typing import Any, Dict, Iterable

from ..types import GraphNode, GraphEdge, GraphResult, NodeValue, RelationshipValue
from ..utils.logger import app_logger
from .values import classify_value


logger = app_logger.bind(component="mapper")


def _row_values(row: Any) -> Iterable[Any]:
    """Yield the column values of a record or mapping row."""
    values = getattr(row, "values", None)
    if not callable(values):
        return ()
    try:
        return list(values())
    except TypeError:
        return ()


def node_from_value(value: NodeValue) -> GraphNode:
    """Build a rendered node from a node value."""
    props = value.properties
    return GraphNode(
        id=value.identity,
        label=props.get("name") or f"Node {value.identity}",
        avatar_url=props.get("avatar_url") or None,
        props=props,
        labels=list(value.labels),
    )


def edge_from_value(value: RelationshipValue) -> GraphEdge:
    """Build a rendered edge from a relationship value."""
    return GraphEdge(
        id=value.identity,
        from_id=value.start,
        to_id=value.end,
        type=value.type,
        props=value.properties or {},
    )


def map_rows_to_graph(rows: Iterable[Any]) -> GraphResult:
    """Collapse query rows into distinct nodes and edges.

    Every column value of every row is classified once; node and edge ids are
    kept unique with the first occurrence winning, and first-seen order is
    preserved. Scalars and malformed values are skipped without error.
    """
    nodes: Dict[int, GraphNode] = {}
    edges: Dict[int, GraphEdge] = {}

    for row in rows or ():
        for raw in _row_values(row):
            value = classify_value(raw)
            if isinstance(value, NodeValue):
                if value.identity not in nodes:
                    nodes[value.identity] = node_from_value(value)
            elif isinstance(value, RelationshipValue):
                if value.identity not in edges:
                    edges[value.identity] = edge_from_value(value)

    result = GraphResult(nodes=list(nodes.values()), edges=list(edges.values()))
    logger.debug(f"Mapped {len(result.nodes)} nodes and {len(result.edges)} edges")
    return result

