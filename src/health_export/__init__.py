"""
MCP Server for Apple Health Workout Exports

Provides tools to list workouts from an Apple Health export archive and to
turn a workout into a versioned, self-contained JSON document via the
Model Context Protocol (MCP).

Supports two transport modes:
- stdio: For single-user local usage (default)
- http: For HTTP server deployment
"""

import logging
import os

from fastmcp import FastMCP

from health_export import workouts

__version__ = "1.0.0"


def create_app() -> FastMCP:
    """Create and configure the MCP app with all tools registered."""
    app = FastMCP(f"Health Export v{__version__}")

    # Register workout export tools
    app = workouts.register_tools(app)

    return app


def main():
    """Initialize the MCP server and run with configured transport.

    Environment variables:
    - MCP_TRANSPORT: 'stdio' (default) or 'http'
    - MCP_HOST: Host to bind to (default: '0.0.0.0')
    - MCP_PORT: Port for HTTP transport (default: 8081)
    - HEALTH_EXPORT_DIR: Unpacked Apple Health export directory
    """
    logging.basicConfig(level=logging.INFO)
    app = create_app()

    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "http":
        host = os.environ.get("MCP_HOST", "0.0.0.0")
        port = int(os.environ.get("MCP_PORT", "8081"))
        app.run(transport="http", host=host, port=port)
    else:
        app.run()


if __name__ == "__main__":
    main()
