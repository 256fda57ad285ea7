"""Design-to-catalog matching tool."""

from typing import Any

from fastmcp import FastMCP

from component_mcp.formatting import build_exception_error, wrap_result
from component_mcp.pipeline import DesignPipeline
from component_mcp.services import get_services
from component_mcp.utils import DesignUrl


def register(mcp: FastMCP) -> None:
    """Register analyze_figma_design tool."""

    @mcp.tool()
    async def analyze_figma_design(design_url: DesignUrl) -> dict[str, Any]:
        """Match the nodes of a Figma design against the component catalog.

        Returns up to 10 matches above 50% confidence, each with the matched
        patterns and suggested props.
        """
        try:
            pipeline = DesignPipeline(await get_services())
            result = await pipeline.analyze_design(design_url)
        except Exception as exc:
            return build_exception_error("analyze_figma_design", exc, design_url=design_url)
        return wrap_result("analyze_figma_design", result)
