"""Design node to catalog component matching."""

from component_mcp.matching.matcher import (
    ComponentMatch,
    ComponentMatcher,
    calculate_confidence,
    filter_confident,
    sort_by_confidence,
    suggest_props,
)
from component_mcp.matching.patterns import detect_patterns, extract_keywords

__all__ = [
    "ComponentMatch",
    "ComponentMatcher",
    "calculate_confidence",
    "filter_confident",
    "sort_by_confidence",
    "suggest_props",
    "detect_patterns",
    "extract_keywords",
]
