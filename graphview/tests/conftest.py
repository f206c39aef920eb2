import pytest
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import MagicMock
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from graphview.graph.neo4j_client import Neo4jClient
from graphview.tests.helpers import node_row, rel_row


@pytest.fixture
def neo4j_session() -> MagicMock:
    """Session whose run() returns whatever records a test assigns."""
    session = MagicMock()
    session.run.return_value = []
    return session


@pytest.fixture
def neo4j_driver(neo4j_session) -> MagicMock:
    """Driver whose session() context manager yields the mocked session."""
    driver = MagicMock()
    driver.session.return_value.__enter__.return_value = neo4j_session
    driver.session.return_value.__exit__.return_value = False
    return driver


@pytest.fixture
def neo4j_client(neo4j_driver) -> Neo4jClient:
    """Neo4j client backed by the mocked driver."""
    return Neo4jClient(driver=neo4j_driver, database="neo4j")


@pytest.fixture
def sample_rows() -> List[Dict[str, Any]]:
    """Rows as returned by MATCH (n)-[r]->(m) RETURN n, r, m."""
    return [
        {"n": node_row(1, "Ana"), "r": rel_row(10, 1, 2), "m": node_row(2, "Luis")},
        {"n": node_row(2, "Luis"), "r": rel_row(11, 2, 1, "WORKS_WITH"), "m": node_row(1, "Ana")},
        {"n": node_row(1, "Ana"), "r": rel_row(12, 1, 3), "m": node_row(3, avatar_url="/uploads/avatar_1.png")},
    ]
