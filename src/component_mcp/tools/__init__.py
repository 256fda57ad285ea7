"""Component MCP tool implementations."""

from . import (
    analyze_figma_design,
    generate_implementation_guide,
    generate_react_from_figma,
    get_component_details,
    scan_repository,
)

__all__ = [
    "scan_repository",
    "analyze_figma_design",
    "generate_implementation_guide",
    "get_component_details",
    "generate_react_from_figma",
]
