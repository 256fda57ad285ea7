"""Prompt text for catalog-aware component generation."""

from typing import List, Optional, Sequence

from component_mcp.catalog.models import CatalogComponent
from component_mcp.design.extractor import format_px
from component_mcp.design.models import ComponentNode, DesignMetadata, DesignTokens
from component_mcp.styling.tailwind import combine_classes, layout_to_classes, styles_to_classes


def describe_tree(root: ComponentNode) -> str:
    """One line per node, depth-first, indented two spaces per level.

    Each node line is followed by its utility classes and text content when
    it has any.
    """
    lines: List[str] = []
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        indent = "  " * depth
        lines.append(f"{indent}- {node.name} ({node.type}, role: {node.role.value})")

        classes = combine_classes(layout_to_classes(node.layout) + styles_to_classes(node.styles))
        if classes:
            lines.append(f"{indent}  Classes: {classes}")
        if node.content:
            lines.append(f'{indent}  Content: "{node.content}"')

        for child in reversed(node.children):
            stack.append((child, depth + 1))
    return "\n".join(lines)


def _px_list(values: Sequence[float]) -> str:
    return ", ".join(format_px(value) for value in values) + "px"


def describe_tokens(tokens: DesignTokens) -> str:
    if tokens.is_empty():
        return "No design tokens extracted."
    lines: List[str] = []
    if tokens.colors:
        lines.append("Colors:")
        lines.extend(f"  - {name}: {value}" for name, value in tokens.colors.items())
    if tokens.spacing:
        lines.append(f"Spacing: {_px_list(tokens.spacing)}")
    if tokens.font_sizes:
        lines.append(f"Font Sizes: {_px_list(tokens.font_sizes)}")
    if tokens.border_radii:
        lines.append(f"Border Radii: {_px_list(tokens.border_radii)}")
    if tokens.shadows:
        lines.append(f"Shadows: {'; '.join(tokens.shadows)}")
    return "\n".join(lines)


def describe_metadata(metadata: DesignMetadata) -> str:
    return "\n".join(
        [
            f"- Total Elements: {metadata.total_nodes}",
            f"- Has Interactive Elements: {str(metadata.has_interactive_elements).lower()}",
            f"- Has Images: {str(metadata.has_images).lower()}",
            f"- Has Text: {str(metadata.has_text).lower()}",
            f"- Complexity: {metadata.complexity.value}",
        ]
    )


def describe_catalog(catalog: Sequence[CatalogComponent]) -> str:
    """Enumerated library block instructing the model to reuse catalog components."""
    lines = [
        "## Component Library (MUST USE)",
        "The project already ships these components. Use them instead of raw HTML "
        "elements wherever one fits, imported from the listed paths:",
        "",
    ]
    for index, component in enumerate(catalog, start=1):
        entry = f"{index}. {component.name} (import from '{component.import_path}')"
        if component.description:
            entry += f": {component.description}"
        lines.append(entry)
        if component.props:
            lines.append(f"   Props: {', '.join(component.props)}")
        for axis, values in component.variants.items():
            lines.append(f"   {axis}: {' | '.join(values)}")
    lines.append("")
    lines.append("Only write custom markup for parts of the design no listed component covers.")
    return "\n".join(lines)


def build_generation_prompt(
    component_name: str,
    tree: ComponentNode,
    tokens: DesignTokens,
    metadata: DesignMetadata,
    *,
    include_typescript: bool = True,
    include_comments: bool = False,
    catalog: Optional[Sequence[CatalogComponent]] = None,
) -> str:
    language = "TypeScript" if include_typescript else "JavaScript"
    interfaces = "" if include_typescript else " (commented out)"
    comments = "Include helpful comments" if include_comments else "Do NOT include comments"
    fence = "tsx" if include_typescript else "jsx"

    sections = [
        "You are an expert React developer. Generate a clean, production-ready React "
        "component based on this Figma design.",
        f"## Component Name\n{component_name}",
        f"## Design Analysis\n{describe_tree(tree)}",
        f"## Design Tokens\n{describe_tokens(tokens)}",
        f"## Metadata\n{describe_metadata(metadata)}",
    ]
    if catalog:
        sections.append(describe_catalog(catalog))

    sections.append(
        "## Requirements\n"
        f"1. Use React with {language}\n"
        "2. Use Tailwind CSS for all styling (no inline styles)\n"
        "3. Use lucide-react for icons where appropriate\n"
        "4. Make the component responsive (mobile-first approach)\n"
        f"5. Include proper TypeScript interfaces for props{interfaces}\n"
        "6. Use semantic HTML elements\n"
        "7. Make interactive elements accessible (ARIA labels, keyboard navigation)\n"
        f"8. {comments}\n"
        "9. Use functional components with hooks\n"
        "10. Extract reusable parts into separate components if needed"
    )
    sections.append(
        "## Output Format\n"
        "Provide ONLY the code in this format:\n\n"
        f"```{fence}\n"
        "import React from 'react';\n\n"
        f"interface {component_name}Props {{\n"
        "  // props here\n"
        "}\n\n"
        f"export function {component_name}({{ ...props }}: {component_name}Props) {{\n"
        "  return (\n"
        "    // JSX here\n"
        "  );\n"
        "}\n"
        "```"
    )
    sections.append("Generate the component now. Be faithful to the design structure.")
    return "\n\n".join(sections)
