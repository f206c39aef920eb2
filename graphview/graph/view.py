import html
import json
from typing import Any, Dict, List, Optional

from ..types import GraphNode, GraphSnapshot
from ..utils.logger import app_logger
from .edge_decorator import to_vis_edge


NODE_SIZE = 30


def vis_node(node: GraphNode) -> Dict[str, Any]:
    """Render a node in vis-network's node format."""
    data = {
        "id": node.id,
        "label": node.label,
        "shape": "circularImage" if node.avatar_url else "dot",
        "size": NODE_SIZE,
    }
    if node.avatar_url:
        data["image"] = node.avatar_url
    if node.labels is not None:
        props = html.escape(json.dumps(node.props, default=str, ensure_ascii=False), quote=False)
        data["title"] = f"Labels: {', '.join(node.labels)}<br>{props}"
    return data


def node_options(nodes: List[GraphNode]) -> List[Dict[str, Any]]:
    """Build select options for picking relationship endpoints."""
    options = [{"value": node.id, "text": f"{node.label} [{node.id}]"} for node in nodes]
    return sorted(options, key=lambda option: option["text"].casefold())


class GraphView:
    """Owns what the browser renders: the last snapshot and the physics flag."""

    def __init__(self, physics_enabled: bool = True):
        self.logger = app_logger.bind(component="graph_view")
        self.physics_enabled = physics_enabled
        self.snapshot: Optional[GraphSnapshot] = None

    def options(self) -> Dict[str, Any]:
        return {
            "interaction": {"hover": True, "tooltipDelay": 120},
            "physics": {"enabled": self.physics_enabled, "stabilization": True},
            "nodes": {"borderWidth": 1},
            "edges": {"smooth": {"type": "dynamic"}},
        }

    def toggle_physics(self) -> bool:
        self.physics_enabled = not self.physics_enabled
        self.logger.debug(f"Physics {'enabled' if self.physics_enabled else 'disabled'}")
        return self.physics_enabled

    def render(self, snapshot: GraphSnapshot) -> Dict[str, Any]:
        """Keep the snapshot and return the payload the browser draws."""
        self.snapshot = snapshot
        return self.payload(snapshot)

    def refresh(self, loader) -> Dict[str, Any]:
        """Reload the whole snapshot and render it."""
        return self.render(loader.load_snapshot())

    def payload(self, snapshot: Optional[GraphSnapshot] = None) -> Dict[str, Any]:
        if snapshot is None:
            snapshot = self.snapshot
        if snapshot is None:
            return {"status": None, "message": "", "step": None, "nodes": [], "edges": [], "options": self.options()}
        return {
            "status": snapshot.status.value,
            "message": snapshot.message,
            "step": snapshot.step,
            "nodes": [vis_node(node) for node in snapshot.nodes],
            "edges": [to_vis_edge(edge) for edge in snapshot.edges],
            "options": self.options(),
        }
