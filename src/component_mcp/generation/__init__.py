"""Guide assembly and AI-assisted code generation."""

from component_mcp.generation.guide import (
    ComponentUsage,
    GuideBuilder,
    ImplementationGuide,
    QuickPrompt,
    dedupe_matches,
    format_guide_markdown,
)
from component_mcp.generation.react import (
    GeneratedComponent,
    GenerationOptions,
    ReactGenerator,
    parse_response,
    sanitize_component_name,
)

__all__ = [
    "ComponentUsage",
    "GuideBuilder",
    "ImplementationGuide",
    "QuickPrompt",
    "dedupe_matches",
    "format_guide_markdown",
    "GeneratedComponent",
    "GenerationOptions",
    "ReactGenerator",
    "parse_response",
    "sanitize_component_name",
]
