import re
from typing import List, Dict, Any, Optional
from neo4j import GraphDatabase
from neo4j.exceptions import Neo4jError, DriverError

from ..config import settings
from ..types import GraphNode, GraphResult
from ..utils.logger import app_logger
from .mapper import map_rows_to_graph


IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class GraphQueryError(Exception):
    """Raised when a graph query cannot be executed."""

    def __init__(self, message: str, query: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.query = query


def validate_identifier(value: str, kind: str) -> str:
    """Check a label or relationship type before it is written into Cypher."""
    if not isinstance(value, str) or not IDENTIFIER_PATTERN.match(value):
        raise ValueError(f"Invalid {kind}: {value!r}")
    return value


class Neo4jClient:
    """Neo4j client for reading and editing the property graph."""

    def __init__(self, driver=None, database: Optional[str] = None):
        self.logger = app_logger.bind(component="neo4j_client")
        self.database = database if database is not None else settings.neo4j_database
        self.driver = driver
        if self.driver is None:
            self._connect()

    def _connect(self):
        """Connect to Neo4j server."""
        try:
            self.driver = GraphDatabase.driver(
                settings.neo4j_uri,
                auth=(settings.neo4j_username, settings.neo4j_password),
            )
            self.logger.info(f"Connected to Neo4j at {settings.neo4j_uri}")
        except Exception as e:
            self.logger.error(f"Failed to connect to Neo4j: {e}")
            raise

    def _session(self):
        if self.database:
            return self.driver.session(database=self.database)
        return self.driver.session()

    def close(self):
        """Close connection to Neo4j."""
        if self.driver:
            self.driver.close()
            self.logger.info("Disconnected from Neo4j")

    def _run(self, query: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Run a query and return its records, wrapping driver failures."""
        try:
            with self._session() as session:
                result = session.run(query, params or {})
                return list(result)
        except (Neo4jError, DriverError) as e:
            message = getattr(e, "message", None) or str(e)
            self.logger.error(f"Query failed: {message}")
            raise GraphQueryError(message, query=query) from e

    def run_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> GraphResult:
        """Run an arbitrary Cypher query and map its rows to a graph."""
        records = self._run(query, params)
        result = map_rows_to_graph(records)
        result.metadata = {"query_type": "cypher", "rows": len(records)}
        return result

    def list_nodes(self, limit: Optional[int] = None) -> List[GraphNode]:
        """List nodes ordered by name, falling back to their id."""
        if limit is None:
            limit = settings.node_list_limit

        query = """
        MATCH (n)
        RETURN n
        ORDER BY coalesce(n.name, toString(id(n))) ASC
        LIMIT $limit
        """

        return self.run_query(query, {"limit": limit}).nodes

    def create_node(self, name: str, label: str = "Person", avatar_url: Optional[str] = None) -> GraphNode:
        """Create a node with a name and an optional avatar."""
        validate_identifier(label, "label")

        query = """
        CREATE (n:`%s` {name: $name, avatar_url: $avatar})
        RETURN n
        """ % label

        result = self.run_query(query, {"name": name, "avatar": avatar_url})
        if result.nodes:
            self.logger.info(f"Created {label} node {result.nodes[0].id}")
            return result.nodes[0]

        raise GraphQueryError(f"Failed to create node: {name}", query=query)

    def create_relationship(self, from_id: int, to_id: int, rel_type: str = "FRIEND_OF") -> GraphResult:
        """Create a relationship between two nodes unless one already exists."""
        validate_identifier(rel_type, "relationship type")

        query = """
        MATCH (a), (b)
        WHERE id(a) = $from AND id(b) = $to
        MERGE (a)-[r:`%s`]->(b)
        RETURN a, r, b
        """ % rel_type

        result = self.run_query(query, {"from": int(from_id), "to": int(to_id)})
        if result.edges:
            self.logger.info(f"Linked {from_id} -[{rel_type}]-> {to_id}")
        else:
            self.logger.warning(f"No relationship created: {from_id} or {to_id} not found")
        return result
