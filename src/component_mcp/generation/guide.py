"""Implementation guide assembly from ranked component matches.

The guide is deterministic: the same matches and design node always produce
the same imports, snippets, full code, notes and prompts. Only matches above
``CONFIDENT_THRESHOLD`` are used, one per component name.
"""

import json
from typing import Any, Dict, Iterable, List, Mapping

from pydantic import BaseModel, ConfigDict, Field

from component_mcp.design.colors import rgba_to_hex
from component_mcp.design.extractor import format_px
from component_mcp.formatting import format_percent
from component_mcp.matching.matcher import ComponentMatch, filter_confident
from component_mcp.utils import CONFIDENT_THRESHOLD

DEFAULT_LIBRARY_NAME = "Design System"
CONTAINER_INDENT = "      "


class ComponentUsage(BaseModel):
    model_config = ConfigDict(frozen=True)

    component_name: str
    props: Dict[str, Any] = Field(default_factory=dict)
    code_snippet: str
    figma_reference: str


class QuickPrompt(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    category: str
    applies_to: str


class GuideTokens(BaseModel):
    """Root-level design tokens, rendered as CSS-ready strings."""

    model_config = ConfigDict(frozen=True)

    colors: Dict[str, str] = Field(default_factory=dict)
    spacing: Dict[str, str] = Field(default_factory=dict)
    typography: Dict[str, str] = Field(default_factory=dict)


class ImplementationGuide(BaseModel):
    model_config = ConfigDict(frozen=True)

    overview: str
    imports: List[str]
    component_usage: List[ComponentUsage]
    full_code: str
    customization_notes: List[str]
    design_tokens: GuideTokens
    quick_prompts: List[QuickPrompt]


def dedupe_matches(matches: Iterable[ComponentMatch]) -> List[ComponentMatch]:
    """Keep the highest-confidence match per component name.

    Ties keep the first match seen; each name keeps the position of its first
    appearance.
    """
    best: Dict[str, ComponentMatch] = {}
    for match in matches:
        existing = best.get(match.component_name)
        if existing is None or match.confidence > existing.confidence:
            best[match.component_name] = match
    return list(best.values())


def group_imports(matches: Iterable[ComponentMatch]) -> List[str]:
    """One import statement per path, names in discovery order."""
    by_path: Dict[str, List[str]] = {}
    for match in matches:
        names = by_path.setdefault(match.component_path, [])
        if match.component_name not in names:
            names.append(match.component_name)
    return [f"import {{ {', '.join(names)} }} from '{path}';" for path, names in by_path.items()]


def format_jsx_props(props: Mapping[str, Any]) -> str:
    """Render props as JSX attributes with a leading space, or "".

    ``True`` renders as a bare attribute, ``False`` and ``children`` are
    omitted, strings are quoted and everything else is JSON in braces.
    """
    attributes: List[str] = []
    for key, value in props.items():
        if key == "children":
            continue
        if isinstance(value, bool):
            if value:
                attributes.append(key)
        elif isinstance(value, str):
            attributes.append(f'{key}="{value}"')
        else:
            attributes.append(f"{key}={{{json.dumps(value)}}}")
    return " " + " ".join(attributes) if attributes else ""


def render_snippet(component_name: str, props: Mapping[str, Any]) -> str:
    attributes = format_jsx_props(props)
    children = props.get("children")
    if children:
        return f"<{component_name}{attributes}>{children}</{component_name}>"
    return f"<{component_name}{attributes} />"


class GuideBuilder:
    """Assembles an ``ImplementationGuide`` from matches and the design node.

    Usage:
        >>> builder = GuideBuilder(library_name="Lumiere")
        >>> guide = builder.build_guide(matches, design_node)
        >>> print(format_guide_markdown(guide))
    """

    def __init__(self, library_name: str = DEFAULT_LIBRARY_NAME, threshold: float = CONFIDENT_THRESHOLD):
        self.library_name = library_name
        self.threshold = threshold

    def build_guide(self, matches: Iterable[ComponentMatch], design_node: Mapping[str, Any]) -> ImplementationGuide:
        unique = dedupe_matches(filter_confident(matches, self.threshold))
        usage = [self.usage_for(match) for match in unique]
        imports = group_imports(unique)

        return ImplementationGuide(
            overview=self.overview(unique),
            imports=imports,
            component_usage=usage,
            full_code=self.full_code(imports, usage),
            customization_notes=self.customization_notes(unique),
            design_tokens=extract_guide_tokens(design_node),
            quick_prompts=quick_prompts(unique),
        )

    def overview(self, matches: List[ComponentMatch]) -> str:
        names = ", ".join(match.component_name for match in matches)
        return (
            f"This Figma design can be implemented using {len(matches)} existing "
            f"{self.library_name} components: {names}.\n\n"
            "Below is a step-by-step implementation guide with code examples."
        )

    def usage_for(self, match: ComponentMatch) -> ComponentUsage:
        return ComponentUsage(
            component_name=match.component_name,
            props=dict(match.suggested_props),
            code_snippet=render_snippet(match.component_name, match.suggested_props),
            figma_reference=(
                f'Figma node: "{match.figma_node_name}" ({format_percent(match.confidence)} match)'
            ),
        )

    def full_code(self, imports: List[str], usage: List[ComponentUsage]) -> str:
        lines = [f"// Implementation using {self.library_name} components", ""]
        lines.extend(imports)
        lines.extend(
            [
                "",
                "export default function DesignImplementation() {",
                "  return (",
                '    <div className="design-container">',
            ]
        )
        for item in usage:
            children = item.props.get("children")
            if children:
                attributes = format_jsx_props(item.props)
                lines.append(f"{CONTAINER_INDENT}<{item.component_name}{attributes}>")
                lines.append(f"{CONTAINER_INDENT}  {children}")
                lines.append(f"{CONTAINER_INDENT}</{item.component_name}>")
            else:
                lines.append(f"{CONTAINER_INDENT}{item.code_snippet}")
        lines.extend(["    </div>", "  );", "}"])
        return "\n".join(lines) + "\n"

    def customization_notes(self, matches: List[ComponentMatch]) -> List[str]:
        notes = ["## Matched Components"]
        for match in matches:
            patterns = ", ".join(match.matched_patterns) or "name keywords only"
            notes.append(
                f"- **{match.component_name}**: {format_percent(match.confidence)} match "
                f"(patterns: {patterns})"
            )

        notes.append("\n## Design Customization")
        notes.append("- Extract colors from Figma and add to your Tailwind config")
        notes.append("- Verify spacing matches your design system scale (8px grid)")
        notes.append("- Check typography scales (font-size, line-height, font-weight)")

        notes.append("\n## Responsive Considerations")
        notes.append("- Add breakpoint-specific classes (sm:, md:, lg:)")
        notes.append("- Test on mobile, tablet, and desktop viewports")
        notes.append("- Consider touch targets for mobile (min 44x44px)")

        notes.append("\n## Accessibility")
        notes.append("- Verify color contrast ratios (WCAG AA: 4.5:1 for text)")
        notes.append("- Add ARIA labels where needed")
        notes.append("- Test keyboard navigation")
        notes.append("- Ensure focus indicators are visible")
        return notes


def extract_guide_tokens(node: Mapping[str, Any]) -> GuideTokens:
    """Colours, spacing and typography of the root design node only."""
    colors: Dict[str, str] = {}
    fills = node.get("fills")
    if isinstance(fills, list):
        for index, fill in enumerate(fills, start=1):
            if isinstance(fill, Mapping) and fill.get("type") == "SOLID" and isinstance(fill.get("color"), Mapping):
                colors[f"color-{index}"] = rgba_to_hex(fill["color"])

    spacing: Dict[str, str] = {}
    for key, token in (("paddingLeft", "padding-x"), ("paddingTop", "padding-y"), ("itemSpacing", "gap")):
        value = node.get(key)
        if isinstance(value, (int, float)) and value:
            spacing[token] = f"{format_px(value)}px"

    typography: Dict[str, str] = {}
    style = node.get("style")
    if isinstance(style, Mapping):
        if style.get("fontSize"):
            typography["font-size"] = f"{format_px(style['fontSize'])}px"
        if style.get("fontWeight"):
            typography["font-weight"] = format_px(style["fontWeight"])
        if style.get("lineHeightPx"):
            typography["line-height"] = f"{format_px(style['lineHeightPx'])}px"

    return GuideTokens(colors=colors, spacing=spacing, typography=typography)


def quick_prompts(matches: List[ComponentMatch]) -> List[QuickPrompt]:
    prompts = [
        QuickPrompt(question="Do you want to customize the colors?", category="styling", applies_to="all"),
        QuickPrompt(
            question="Do you need to adjust spacing (padding, margins, gaps)?",
            category="styling",
            applies_to="all",
        ),
        QuickPrompt(
            question="Should this design be responsive? (mobile, tablet, desktop)",
            category="responsive",
            applies_to="all",
        ),
    ]

    names = [match.component_name.lower() for match in matches]
    if any("button" in name for name in names):
        prompts.append(
            QuickPrompt(
                question="What should happen when the button is clicked?",
                category="behavior",
                applies_to="Button",
            )
        )
    if any("nav" in name for name in names):
        prompts.append(
            QuickPrompt(
                question="Do you need a mobile menu for the navigation?",
                category="responsive",
                applies_to="Navigation",
            )
        )
    if any("form" in name or "input" in name for name in names):
        prompts.append(
            QuickPrompt(question="Do you need form validation?", category="behavior", applies_to="Form")
        )
    return prompts


def format_guide_markdown(guide: ImplementationGuide) -> str:
    lines = ["# Implementation Guide", "", "## Overview", "", guide.overview, ""]

    lines.extend(["## Components Used", ""])
    for usage in guide.component_usage:
        lines.extend([f"### {usage.component_name}", "", usage.figma_reference, ""])
        lines.extend(["```tsx", usage.code_snippet, "```", ""])

    lines.extend(["## Full Implementation", "", "```tsx", guide.full_code.rstrip("\n"), "```", ""])

    tokens = guide.design_tokens
    lines.extend(["## Design Tokens", ""])
    for title, values in (("Colors", tokens.colors), ("Spacing", tokens.spacing), ("Typography", tokens.typography)):
        if values:
            lines.extend([f"### {title}", ""])
            lines.extend(f"- **{name}**: `{value}`" for name, value in values.items())
            lines.append("")

    lines.extend(["## Customization Notes", "", "\n".join(guide.customization_notes), ""])

    lines.extend(["## Quick Customization Questions", ""])
    lines.extend(f"- **{prompt.category}**: {prompt.question}" for prompt in guide.quick_prompts)
    lines.append("")
    return "\n".join(lines) + "\n"
