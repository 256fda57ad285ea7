"""Design document extraction: references, colours, normalized trees and tokens."""

from component_mcp.design.colors import hex_to_rgba_approx, rgba_to_hex
from component_mcp.design.extractor import TreeExtractor, infer_role
from component_mcp.design.models import (
    Complexity,
    ComponentNode,
    DesignMetadata,
    DesignTokens,
    ExtractedDesign,
    LayoutInfo,
    NodeRole,
    Padding,
    StyleInfo,
)
from component_mcp.design.references import DesignReference, parse_design_url

__all__ = [
    "hex_to_rgba_approx",
    "rgba_to_hex",
    "TreeExtractor",
    "infer_role",
    "Complexity",
    "ComponentNode",
    "DesignMetadata",
    "DesignTokens",
    "ExtractedDesign",
    "LayoutInfo",
    "NodeRole",
    "Padding",
    "StyleInfo",
    "DesignReference",
    "parse_design_url",
]
