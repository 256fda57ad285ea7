"""Catalog lookup tool."""

from typing import Any

from fastmcp import FastMCP

from component_mcp.formatting import build_exception_error, wrap_result
from component_mcp.pipeline import DesignPipeline
from component_mcp.services import get_services
from component_mcp.utils import ComponentName


def register(mcp: FastMCP) -> None:
    """Register get_component_details tool."""

    @mcp.tool()
    async def get_component_details(component_name: ComponentName) -> dict[str, Any]:
        """Get props, variants, visual patterns and a usage example for one catalog component."""
        try:
            pipeline = DesignPipeline(await get_services())
            result = await pipeline.get_component_details(component_name)
        except Exception as exc:
            return build_exception_error("get_component_details", exc)
        return wrap_result("get_component_details", result)
