#!/usr/bin/env python3
"""
Graph Viewer - HTTP Server Entry Point

Serves the browser UI for viewing and editing a Neo4j property graph,
together with the JSON API it talks to.
"""

import argparse
import sys

import uvicorn

from graphview.config import settings
from graphview.utils.logger import app_logger


def main():
    """Main entry point for the graph viewer server."""
    parser = argparse.ArgumentParser(description="Graph Viewer - HTTP Server")
    parser.add_argument("--host", default=settings.host, help="Host to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to bind")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")

    args = parser.parse_args()

    app_logger.info("Starting Graph Viewer")
    app_logger.info(f"Neo4j: {settings.neo4j_uri} (database: {settings.neo4j_database})")
    app_logger.info(f"Listening on http://{args.host}:{args.port}")

    try:
        uvicorn.run(
            "api_server:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=args.log_level.lower(),
        )
    except KeyboardInterrupt:
        app_logger.info("Shutting down...")
    except Exception as e:
        app_logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
