#!/usr/bin/env python3
"""
Entry point for the CHUK Variants MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http).
"""

import argparse
import asyncio
import logging
import os
from pathlib import Path

from chuk_mcp_variants.constants import STYLES_DIR_ENV

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Variants MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--styles-dir",
        type=Path,
        default=None,
        help="Project styles directory (default: ./styles)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.styles_dir is not None:
        os.environ[STYLES_DIR_ENV] = str(args.styles_dir.resolve())

    # Import after argument parsing to avoid issues
    from chuk_mcp_variants.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Variants MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Variants MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
