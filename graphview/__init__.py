"""
Graph viewer: browse and edit a Neo4j property graph in the browser.
"""

__version__ = "1.0.0"
