"""Guide MCP Server - markdown developer guide search exposed over MCP."""

import argparse
import dataclasses
import logging
import sys

from fastmcp import FastMCP

from guide_mcp import __version__
from guide_mcp.config import get_guide_config
from guide_mcp.docs.query import GuideSearch
from guide_mcp.tools import (
    browse_document,
    get_api_endpoint,
    get_code_sample,
    get_sdk_method,
    search_docs,
)

mcp = FastMCP(
    "Guide MCP Server",
    instructions=(
        "Developer guide MCP server. "
        "Provides tools for searching the markdown developer guide, "
        "browsing documents and sections, and extracting API endpoints, "
        "code samples and JS SDK method descriptions."
    ),
)

logger = logging.getLogger("guide-mcp.server")

# Register documentation tools
search_docs.register(mcp)
browse_document.register(mcp)

# Register extraction tools
get_api_endpoint.register(mcp)
get_code_sample.register(mcp)
get_sdk_method.register(mcp)


def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout carries the stdio transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def main():
    """Entry point for the Guide MCP server."""
    parser = argparse.ArgumentParser(
        prog="guide-mcp",
        description="Guide MCP Server - markdown developer guide search exposed over MCP",
    )
    parser.add_argument("--version", "-v", action="version", version=f"guide-mcp {__version__}")
    parser.add_argument(
        "--docs-path",
        default=None,
        help="Root directory of the guide (default: $GUIDE_MCP_DOCS_PATH or current directory)",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind when using http/sse transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind when using http/sse transport (default: 8000)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: $GUIDE_MCP_LOG_LEVEL or INFO)",
    )
    args = parser.parse_args()

    config = get_guide_config()
    if args.docs_path:
        config = dataclasses.replace(config, docs_path=args.docs_path)
    if args.log_level:
        config = dataclasses.replace(config, log_level=args.log_level)

    configure_logging(config.log_level)

    # Suppress noisy uvicorn shutdown messages (e.g. "Cancel N running task(s)")
    logging.getLogger("uvicorn.error").setLevel(logging.CRITICAL)

    indexer = GuideSearch.initialize(config)
    logger.info("Guide index ready: %d document(s)", indexer.get_index_size())

    run_kwargs: dict = {"transport": args.transport, "show_banner": False}
    if args.transport in ("http", "sse"):
        run_kwargs["host"] = args.host
        run_kwargs["port"] = args.port

    try:
        mcp.run(**run_kwargs)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
