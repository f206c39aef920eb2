"""
Graph module for mapping query results and preparing them for rendering.
"""

from .mapper import map_rows_to_graph
from .edge_decorator import decorate_edges
from .neo4j_client import Neo4jClient, GraphQueryError
from .loader import GraphLoader
from .view import GraphView

__all__ = [
    'map_rows_to_graph',
    'decorate_edges',
    'Neo4jClient',
    'GraphQueryError',
    'GraphLoader',
    'GraphView',
]
