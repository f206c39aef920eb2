from typing import List, Dict, Any, Optional, Union
from dataclasses import dataclass, field
from enum import Enum


class CurveDirection(Enum):
    """Side an edge arc bows towards."""
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


class LoadStatus(Enum):
    """Outcome of a graph snapshot load."""
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class NodeValue:
    """A node-shaped value returned by a graph query."""
    identity: int
    labels: List[str]
    properties: Dict[str, Any]


@dataclass(frozen=True)
class RelationshipValue:
    """A relationship-shaped value returned by a graph query."""
    identity: int
    type: str
    start: int
    end: int
    properties: Dict[str, Any]


# Anything that is neither is a scalar and is dropped at the boundary.
GraphValue = Union[NodeValue, RelationshipValue]


@dataclass(frozen=True)
class GraphNode:
    """Represents a node in the rendered graph."""
    id: int
    label: str
    props: Dict[str, Any]
    labels: List[str]
    avatar_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "label": self.label,
            "avatar_url": self.avatar_url,
            "props": self.props,
            "labels": self.labels,
        }


@dataclass(frozen=True)
class GraphEdge:
    """Represents a directed relationship in the rendered graph."""
    id: int
    from_id: int
    to_id: int
    type: str
    props: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "from": self.from_id,
            "to": self.to_id,
            "type": self.type,
            "props": self.props,
        }


@dataclass(frozen=True)
class Curvature:
    """Rendering hint for how far and to which side an edge bows."""
    direction: CurveDirection
    amount: float

    def to_dict(self) -> Dict[str, Any]:
        return {"direction": self.direction.value, "amount": self.amount}


@dataclass(frozen=True)
class RenderableEdge:
    """An edge together with its curvature."""
    edge: GraphEdge
    curvature: Curvature

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = self.edge.to_dict()
        data["curvature"] = self.curvature.to_dict()
        return data


@dataclass
class GraphResult:
    """Represents a mapped graph query result."""
    nodes: List[GraphNode]
    edges: List[GraphEdge]
    metadata: Dict[str, Any] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


@dataclass
class GraphSnapshot:
    """Represents the bounded graph the UI renders after one load."""
    nodes: List[GraphNode]
    edges: List[RenderableEdge]
    status: LoadStatus
    message: str = ""
    step: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "message": self.message,
            "step": self.step,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
