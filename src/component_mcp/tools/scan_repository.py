"""Component library scan tool."""

from typing import Any

from fastmcp import FastMCP

from component_mcp.formatting import build_exception_error, wrap_result
from component_mcp.pipeline import DesignPipeline
from component_mcp.services import get_services


def register(mcp: FastMCP) -> None:
    """Register scan_repository tool."""

    @mcp.tool()
    async def scan_repository() -> dict[str, Any]:
        """Scan the configured GitHub repository for React components and refresh the catalog.

        Reads .tsx/.jsx files under src/components, components and lib/components,
        extracts props, variants and visual patterns, then upserts each component
        by name into the catalog store.
        """
        try:
            pipeline = DesignPipeline(await get_services())
            result = await pipeline.scan_catalog()
        except Exception as exc:
            return build_exception_error("scan_repository", exc)
        return wrap_result("scan_repository", result)
