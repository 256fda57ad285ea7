"""Implementation guide tool."""

from typing import Any

from fastmcp import FastMCP

from component_mcp.formatting import build_exception_error, wrap_result
from component_mcp.pipeline import DesignPipeline
from component_mcp.services import get_services
from component_mcp.utils import DesignUrl


def register(mcp: FastMCP) -> None:
    """Register generate_implementation_guide tool."""

    @mcp.tool()
    async def generate_implementation_guide(design_url: DesignUrl) -> dict[str, Any]:
        """Build a usage guide for the catalog components matched in a Figma design.

        The guide has imports, per-component JSX snippets, a full composition,
        customization notes, design tokens and quick prompts. It is stored as a
        record when the store is reachable.
        """
        try:
            pipeline = DesignPipeline(await get_services())
            result = await pipeline.generate_guide(design_url)
        except Exception as exc:
            return build_exception_error("generate_implementation_guide", exc, design_url=design_url)
        return wrap_result("generate_implementation_guide", result)
