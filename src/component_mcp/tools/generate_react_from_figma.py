"""React code generation tool."""

from typing import Any

from fastmcp import FastMCP

from component_mcp.formatting import build_exception_error, wrap_result
from component_mcp.pipeline import DesignPipeline
from component_mcp.services import get_services
from component_mcp.utils import (
    DesignUrl,
    IncludeComments,
    IncludeTypeScript,
    OptionalComponentName,
    SplitStrategy,
)


def register(mcp: FastMCP) -> None:
    """Register generate_react_from_figma tool."""

    @mcp.tool()
    async def generate_react_from_figma(
        design_url: DesignUrl,
        component_name: OptionalComponentName = None,
        include_typescript: IncludeTypeScript = True,
        include_comments: IncludeComments = False,
        split_strategy: SplitStrategy = "auto",
    ) -> dict[str, Any]:
        """Generate a React component from a Figma design with the configured completion provider.

        The prompt carries the extracted layout tree (with Tailwind classes), the
        design tokens and the catalog, so the output reuses library components
        where it can. Requires ANTHROPIC_API_KEY or a custom provider.
        """
        try:
            pipeline = DesignPipeline(await get_services())
            result = await pipeline.generate_code(
                design_url,
                component_name=component_name,
                include_typescript=include_typescript,
                include_comments=include_comments,
                split_strategy=split_strategy,
            )
        except Exception as exc:
            return build_exception_error("generate_react_from_figma", exc, design_url=design_url)
        return wrap_result("generate_react_from_figma", result)
