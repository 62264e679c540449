#!/usr/bin/env python3
"""
Entry point for the CHUK Tokens MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http), and a build mode
that writes the stylesheet and type declarations to disk and exits.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from chuk_mcp_tokens.constants import SuccessMessages
from chuk_mcp_tokens.errors import TokenError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build(css_path: Path | None, types_path: Path | None) -> int:
    """
    Write derived artifacts.

    Returns:
        Process exit code (1 if the token documents cannot be built)
    """
    from chuk_mcp_tokens.runtime import get_pipeline

    pipeline = get_pipeline()
    try:
        if css_path:
            css_path.parent.mkdir(parents=True, exist_ok=True)
            css_path.write_text(pipeline.stylesheet(), encoding="utf-8")
            logger.info(
                SuccessMessages.STYLESHEET_WRITTEN.format(
                    count=len(pipeline.variant_sets()), path=css_path
                )
            )
        if types_path:
            types_path.parent.mkdir(parents=True, exist_ok=True)
            types_path.write_text(pipeline.types_module(), encoding="utf-8")
            logger.info(SuccessMessages.TYPES_WRITTEN.format(path=types_path))
    except TokenError as e:
        logger.error(f"Token build failed: {e}")
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Tokens MCP Server")
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
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--emit-css",
        type=Path,
        metavar="PATH",
        help="Write the token stylesheet to PATH and exit",
    )
    parser.add_argument(
        "--emit-types",
        type=Path,
        metavar="PATH",
        help="Write TypeScript token declarations to PATH and exit",
    )

    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.emit_css or args.emit_types:
        sys.exit(build(args.emit_css, args.emit_types))

    # Import after argument parsing to avoid issues
    from chuk_mcp_tokens.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Tokens MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Tokens MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
