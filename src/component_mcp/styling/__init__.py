"""Utility-class styling for normalized design attributes."""

from component_mcp.styling.tailwind import (
    combine_classes,
    layout_to_classes,
    styles_to_classes,
)

__all__ = ["combine_classes", "layout_to_classes", "styles_to_classes"]
