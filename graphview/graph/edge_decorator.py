"""
Curvature assignment for parallel and opposite edges.

Edges sharing an unordered pair of endpoints are drawn as arcs instead of
overlapping straight lines. Edges running min -> max bow clockwise, edges
running max -> min bow counter-clockwise, and each further edge in the same
direction bows a little wider than the previous one.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..config import settings
from ..types import Curvature, CurveDirection, GraphEdge, RenderableEdge


VIS_CURVE_TYPES = {
    CurveDirection.CLOCKWISE: "curvedCW",
    CurveDirection.COUNTERCLOCKWISE: "curvedCCW",
}


@dataclass
class EdgeBucket:
    """Edges sharing an unordered endpoint pair, split by direction."""
    key: Tuple[int, int]
    forward: List[GraphEdge] = field(default_factory=list)
    reverse: List[GraphEdge] = field(default_factory=list)

    def add(self, edge: GraphEdge):
        # Self-loops have from == to == key[0] and land in forward.
        if edge.from_id == self.key[0] and edge.to_id == self.key[1]:
            self.forward.append(edge)
        else:
            self.reverse.append(edge)


def bucket_key(edge: GraphEdge) -> Tuple[int, int]:
    return (min(edge.from_id, edge.to_id), max(edge.from_id, edge.to_id))


def bucket_edges(edges: Iterable[GraphEdge]) -> List[EdgeBucket]:
    """Group edges by unordered endpoint pair, in first-seen order.

    Relationship type is not part of the key.
    """
    buckets: Dict[Tuple[int, int], EdgeBucket] = {}
    for edge in edges:
        key = bucket_key(edge)
        if key not in buckets:
            buckets[key] = EdgeBucket(key=key)
        buckets[key].add(edge)
    return list(buckets.values())


def decorate_edges(
    edges: Iterable[GraphEdge],
    base: Optional[float] = None,
    step: Optional[float] = None,
) -> List[RenderableEdge]:
    """Assign each edge a curvature so parallel and opposite edges stay apart.

    The i-th edge of a direction (counting from 0) gets ``base + i * step``.
    Output is grouped bucket by bucket, forward edges before reverse edges,
    with input order kept inside each direction.
    """
    if base is None:
        base = settings.edge_curvature_base
    if step is None:
        step = settings.edge_curvature_step

    decorated: List[RenderableEdge] = []
    for bucket in bucket_edges(edges):
        for index, edge in enumerate(bucket.forward):
            decorated.append(RenderableEdge(
                edge=edge,
                curvature=Curvature(CurveDirection.CLOCKWISE, base + index * step),
            ))
        for index, edge in enumerate(bucket.reverse):
            decorated.append(RenderableEdge(
                edge=edge,
                curvature=Curvature(CurveDirection.COUNTERCLOCKWISE, base + index * step),
            ))
    return decorated


def to_vis_edge(renderable: RenderableEdge) -> Dict[str, Any]:
    """Render a decorated edge in vis-network's edge format."""
    edge = renderable.edge
    return {
        "id": edge.id,
        "from": edge.from_id,
        "to": edge.to_id,
        "arrows": "to",
        "label": edge.type,
        "font": {"align": "horizontal"},
        "smooth": {
            "enabled": True,
            "type": VIS_CURVE_TYPES[renderable.curvature.direction],
            "roundness": renderable.curvature.amount,
        },
    }
