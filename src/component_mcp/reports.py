"""Human-readable ``display`` text for tool payloads."""

import json
from typing import Any, Dict, List, Sequence

from component_mcp.catalog.models import CatalogComponent
from component_mcp.design.models import ExtractedDesign
from component_mcp.formatting import format_percent
from component_mcp.generation.react import GeneratedComponent
from component_mcp.matching.matcher import ComponentMatch


def format_scan_summary(repo_url: str, components: Sequence[CatalogComponent]) -> str:
    by_category: Dict[str, List[str]] = {}
    for component in components:
        by_category.setdefault(component.category.value, []).append(component.name)

    lines = [
        "Repository scan complete",
        f"- repository: {repo_url}",
        f"- components stored: {len(components)}",
        "",
        "By category:",
    ]
    for category, names in sorted(by_category.items()):
        lines.append(f"- {category} ({len(names)}): {', '.join(names)}")
    lines.extend(["", "Next: analyze_figma_design(design_url=...) to match a design against the catalog"])
    return "\n".join(lines)


def format_analysis(matches: Sequence[ComponentMatch], total_confident: int) -> str:
    lines = ["# Figma Design Analysis", "", f"Found {total_confident} high-confidence matches:", ""]
    for match in matches:
        patterns = ", ".join(match.matched_patterns) or "none"
        lines.extend(
            [
                f"### {match.component_name} ({format_percent(match.confidence)} match)",
                f"- **Import**: `{match.component_path}`",
                f'- **Figma node**: "{match.figma_node_name}"',
                f"- **Matched patterns**: {patterns}",
                f"- **Suggested props**: {json.dumps(match.suggested_props, indent=2)}",
                "",
            ]
        )
    lines.append("Use the 'generate_implementation_guide' tool to get complete implementation code.")
    return "\n".join(lines)


def format_component_details(component: CatalogComponent) -> str:
    props = [
        f"  - **{name}** {'(required)' if spec.required else '(optional)'}: `{spec.declared_type}`"
        for name, spec in component.props.items()
    ]
    variants = [f"  - **{axis}**: {', '.join(values)}" for axis, values in component.variants.items()]

    return "\n".join(
        [
            f"# {component.name}",
            "",
            component.description or "No description available",
            "",
            "## Import",
            "```tsx",
            f"import {{ {component.name} }} from '{component.import_path}';",
            "```",
            "",
            "## Props",
            "\n".join(props) or "No props documented",
            "",
            "## Variants",
            "\n".join(variants) or "No variants available",
            "",
            "## Visual Patterns",
            ", ".join(component.visual_patterns) or "None",
            "",
            "## Usage Example",
            "```tsx",
            component.usage_example,
            "```",
            "",
            "## Repository",
            component.source_url or "No repository link available",
        ]
    )


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def format_generation(
    component: GeneratedComponent,
    design: ExtractedDesign,
    generation_time_ms: int,
) -> str:
    metadata = design.metadata
    tokens = design.design_tokens
    name = component.component_name
    return "\n".join(
        [
            "# Generated React Component",
            "",
            f"## Component: {name}",
            "",
            "### Generation Summary",
            f"- **Time:** {generation_time_ms}ms",
            f"- **Complexity:** {metadata.complexity.value}",
            f"- **Total Elements:** {metadata.total_nodes}",
            f"- **Interactive Elements:** {_yes_no(metadata.has_interactive_elements)}",
            f"- **Has Images:** {_yes_no(metadata.has_images)}",
            f"- **AI Model:** {component.ai_model}",
            "",
            "### Design Tokens Extracted",
            f"**Colors:** {len(tokens.colors)} unique colors",
            f"**Spacing:** {len(tokens.spacing)} values",
            f"**Font Sizes:** {len(tokens.font_sizes)} values",
            f"**Border Radii:** {len(tokens.border_radii)} values",
            "",
            "### Dependencies Required",
            "```json",
            json.dumps(component.dependencies, indent=2),
            "```",
            "",
            "### Generated Code",
            "",
            "```tsx",
            component.component_code,
            "```",
            "",
            "### Usage Example",
            "",
            "```tsx",
            f"import {{ {name} }} from './{name}';",
            "",
            "function App() {",
            "  return (",
            "    <div>",
            f"      <{name} />",
            "    </div>",
            "  );",
            "}",
            "```",
            "",
            "### Next Steps",
            "1. Copy the generated code to your project",
            f"2. Install dependencies: `npm install {' '.join(component.dependencies)}`",
            "3. Ensure your component library is installed and configured",
            "4. Review and customize the component as needed",
            "5. Test the component in your application",
        ]
    )


def format_warnings(warnings: Sequence[str]) -> str:
    if not warnings:
        return ""
    return "\n".join(["", "Warnings:"] + [f"- {warning}" for warning in warnings])


def design_summary(design: ExtractedDesign) -> Dict[str, Any]:
    tokens = design.design_tokens
    return {
        **design.metadata.to_dict(),
        "token_counts": {
            "colors": len(tokens.colors),
            "spacing": len(tokens.spacing),
            "font_sizes": len(tokens.font_sizes),
            "border_radii": len(tokens.border_radii),
            "shadows": len(tokens.shadows),
        },
    }
