"""Component MCP Server - design-to-component matching and React generation over MCP."""

import argparse
import asyncio
import logging
import os
import sys

from fastmcp import FastMCP

from component_mcp import __version__
from component_mcp.services import close_services
from component_mcp.tools import (
    analyze_figma_design,
    generate_implementation_guide,
    generate_react_from_figma,
    get_component_details,
    scan_repository,
)

mcp = FastMCP(
    "Component MCP Server",
    instructions=(
        "Matches Figma designs against a scanned React component library. "
        "Run scan_repository first to load the catalog, then analyze_figma_design "
        "or generate_implementation_guide to map design nodes onto library components, "
        "and generate_react_from_figma to produce component code with a completion provider."
    ),
)

logger = logging.getLogger("component-mcp.server")

# Register catalog tools
scan_repository.register(mcp)
get_component_details.register(mcp)

# Register design tools
analyze_figma_design.register(mcp)
generate_implementation_guide.register(mcp)
generate_react_from_figma.register(mcp)


def configure_logging() -> None:
    """Send component-mcp logs to stderr; stdout carries the stdio transport."""
    level = os.getenv("COMPONENT_MCP_LOG_LEVEL", "INFO").strip().upper()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("component-mcp")
    root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))


def main():
    """Entry point for the Component MCP server."""
    parser = argparse.ArgumentParser(
        prog="component-mcp",
        description="Component MCP Server - design-to-component matching over MCP",
    )
    parser.add_argument("--version", "-v", action="version", version=f"component-mcp {__version__}")
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
    args = parser.parse_args()

    configure_logging()

    run_kwargs: dict = {"transport": args.transport, "show_banner": False}
    if args.transport in ("http", "sse"):
        run_kwargs["host"] = args.host
        run_kwargs["port"] = args.port

    logging.getLogger("uvicorn.error").setLevel(logging.CRITICAL)

    logger.info("Starting component-mcp %s (%s)", __version__, args.transport)
    try:
        mcp.run(**run_kwargs)
    except KeyboardInterrupt:
        pass
    finally:
        try:
            asyncio.run(close_services())
        except Exception as exc:
            logger.debug("Service cleanup skipped: %s", exc)


if __name__ == "__main__":
    main()
