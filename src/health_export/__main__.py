"""
Entry point for running health_export as a module.

Usage:
    python -m health_export                            # Run with stdio transport
    python -m health_export --http                     # Run with HTTP transport
    python -m health_export --http --port 9000         # Run HTTP on custom port
    python -m health_export --export-dir ~/Downloads/apple_health_export
"""

import argparse
import logging
import os

from health_export import create_app
from health_export.provider_factory import HEALTH_EXPORT_DIR_ENV


def main():
    parser = argparse.ArgumentParser(
        description="Health Export MCP Server - Apple Health workouts as JSON export documents"
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Use http transport instead of stdio"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8081,
        help="Port for HTTP transport (default: 8081)"
    )
    parser.add_argument(
        "--export-dir",
        help=f"Unpacked Apple Health export directory (overrides {HEALTH_EXPORT_DIR_ENV})"
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    if args.export_dir:
        os.environ[HEALTH_EXPORT_DIR_ENV] = os.path.expanduser(args.export_dir)

    app = create_app()

    if args.http:
        print(f"Starting Health Export MCP server on http://{args.host}:{args.port}/mcp")
        app.run(transport="http", host=args.host, port=args.port)
    else:
        app.run()


if __name__ == "__main__":
    main()
