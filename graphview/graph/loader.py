from typing import Optional

from ..config import settings
from ..types import GraphResult, GraphSnapshot, LoadStatus
from ..utils.logger import app_logger
from .edge_decorator import decorate_edges
from .neo4j_client import GraphQueryError


RELATIONSHIPS_QUERY = "MATCH (n)-[r]->(m) RETURN n, r, m LIMIT $limit"
NODES_QUERY = "MATCH (n) RETURN n LIMIT $limit"

EMPTY_MESSAGE = "No data to render yet."
ERROR_MESSAGE = "Could not load the graph."


class GraphLoader:
    """Loads a bounded snapshot of the graph for rendering.

    The relationship query is tried first; when it returns nothing or fails,
    a node-only query is tried once. A failure of the second step yields an
    error snapshot. Nothing is retried.
    """

    def __init__(self, client, snapshot_limit: Optional[int] = None, fallback_limit: Optional[int] = None):
        self.logger = app_logger.bind(component="graph_loader")
        self.client = client
        self.snapshot_limit = snapshot_limit or settings.snapshot_limit
        self.fallback_limit = fallback_limit or settings.fallback_limit

    def _relationships(self) -> Optional[GraphResult]:
        try:
            result = self.client.run_query(RELATIONSHIPS_QUERY, {"limit": self.snapshot_limit})
        except GraphQueryError as e:
            self.logger.error(f"Error loading nodes with relationships: {e.message}")
            return None
        if result.is_empty():
            self.logger.info("No relationships found, falling back to nodes only")
            return None
        return result

    def load_snapshot(self) -> GraphSnapshot:
        """Load nodes with their relationships, degrading to nodes only."""
        result = self._relationships()
        if result is not None:
            return GraphSnapshot(
                nodes=result.nodes,
                edges=decorate_edges(result.edges),
                status=LoadStatus.OK,
                step="relationships",
            )

        try:
            result = self.client.run_query(NODES_QUERY, {"limit": self.fallback_limit})
        except GraphQueryError as e:
            self.logger.error(f"Error loading nodes only: {e.message}")
            return GraphSnapshot(nodes=[], edges=[], status=LoadStatus.ERROR, message=ERROR_MESSAGE)

        if not result.nodes:
            return GraphSnapshot(nodes=[], edges=[], status=LoadStatus.EMPTY, message=EMPTY_MESSAGE, step="nodes")
        return GraphSnapshot(nodes=result.nodes, edges=[], status=LoadStatus.OK, step="nodes")
