"""Tree extractor: raw design document -> normalized component tree.

Converts the design tool's node graph into a ``ComponentNode`` tree with
inferred roles, normalized layout and style attributes, plus the deduplicated
design tokens and complexity metadata of the whole tree.

Absent optional fields are read as zero/empty, so extraction never fails on
well-formed input; only the traversal ceilings raise (``InputError``).
"""

import logging
from typing import Any, List, Mapping, Optional

from component_mcp.design.colors import rgba_to_hex
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
from component_mcp.design.traversal import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_NODES,
    children_of,
    walk,
)
from component_mcp.errors import InputError

logger = logging.getLogger("component-mcp.extractor")

# First matching rule wins; TEXT and image rules are checked before these.
ROLE_NAME_RULES: tuple[tuple[NodeRole, tuple[str, ...]], ...] = (
    (NodeRole.BUTTON, ("button", "btn", "cta", "action")),
    (NodeRole.INPUT, ("input", "field", "search", "textbox")),
    (NodeRole.CARD, ("card",)),
    (NodeRole.NAVIGATION, ("nav", "menu", "header", "footer")),
    (NodeRole.LIST, ("list", "grid")),
)

PRIMARY_ALIGN = {
    "MAX": "flex-end",
    "CENTER": "center",
    "SPACE_BETWEEN": "space-between",
}
COUNTER_ALIGN = {
    "CENTER": "center",
    "MAX": "flex-end",
}

COMPLEX_THRESHOLD = 20
MODERATE_THRESHOLD = 10

_PADDING_KEYS = ("paddingTop", "paddingRight", "paddingBottom", "paddingLeft")


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    return 0


def format_px(value: float) -> str:
    """Render a number the way CSS literals expect (``4`` not ``4.0``)."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _list(node: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    value = node.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def has_image_fill(node: Mapping[str, Any]) -> bool:
    return any(fill.get("type") == "IMAGE" for fill in _list(node, "fills"))


def primary_solid_fill(node: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    """The first fill when it is a coloured SOLID; later fills never take its place."""
    fills = _list(node, "fills")
    if not fills:
        return None
    fill = fills[0]
    if fill.get("type") == "SOLID" and isinstance(fill.get("color"), Mapping):
        return fill
    return None


def shadow_string(effect: Mapping[str, Any]) -> Optional[str]:
    """``"{x}px {y}px {radius}px {hex}"`` for a visible drop shadow, else None."""
    if effect.get("type") != "DROP_SHADOW" or effect.get("visible") is False:
        return None
    offset = effect.get("offset")
    color = effect.get("color")
    if not isinstance(offset, Mapping) or not isinstance(color, Mapping):
        return None
    x = format_px(_number(offset.get("x")))
    y = format_px(_number(offset.get("y")))
    radius = format_px(_number(effect.get("radius")))
    return f"{x}px {y}px {radius}px {rgba_to_hex(color)}"


def infer_role(node: Mapping[str, Any]) -> NodeRole:
    """Infer a node's role from its type, name, fills and children."""
    node_type = node.get("type")
    if node_type == "TEXT":
        return NodeRole.TEXT
    if node_type == "RECTANGLE" and has_image_fill(node):
        return NodeRole.IMAGE

    name = str(node.get("name") or "").lower()
    for role, needles in ROLE_NAME_RULES:
        if any(needle in name for needle in needles):
            return role

    # only an explicit NONE falls through to the children check
    if node.get("layoutMode") != "NONE":
        return NodeRole.CONTAINER
    if children_of(node):
        return NodeRole.CONTAINER
    return NodeRole.UNKNOWN


def extract_layout(node: Mapping[str, Any]) -> LayoutInfo:
    layout = LayoutInfo()

    layout_mode = node.get("layoutMode")
    if layout_mode in ("HORIZONTAL", "VERTICAL"):
        layout.display = "flex"
        layout.direction = "row" if layout_mode == "HORIZONTAL" else "column"
        layout.justify_content = PRIMARY_ALIGN.get(node.get("primaryAxisAlignItems"))
        layout.align_items = COUNTER_ALIGN.get(node.get("counterAxisAlignItems"))
        layout.gap = _number(node.get("itemSpacing"))
        layout.wrap = node.get("layoutWrap") == "WRAP"

    top, right, bottom, left = (_number(node.get(key)) for key in _PADDING_KEYS)
    if top or right or bottom or left:
        layout.padding = Padding(top=top, right=right, bottom=bottom, left=left)

    bbox = node.get("absoluteBoundingBox")
    if isinstance(bbox, Mapping):
        if "width" in bbox:
            layout.width = _number(bbox.get("width"))
        if "height" in bbox:
            layout.height = _number(bbox.get("height"))

    return layout


def extract_styles(node: Mapping[str, Any]) -> StyleInfo:
    styles = StyleInfo()

    fill = primary_solid_fill(node)
    if fill is not None:
        styles.background_color = rgba_to_hex(fill["color"])
        if node.get("type") == "TEXT":
            styles.color = styles.background_color

    text_style = node.get("style")
    if isinstance(text_style, Mapping):
        if text_style.get("fontSize"):
            styles.font_size = _number(text_style.get("fontSize"))
        if text_style.get("fontWeight"):
            styles.font_weight = _number(text_style.get("fontWeight"))
        if text_style.get("fontFamily"):
            styles.font_family = str(text_style["fontFamily"])

    if _number(node.get("cornerRadius")):
        styles.border_radius = _number(node.get("cornerRadius"))

    strokes = _list(node, "strokes")
    stroke_weight = _number(node.get("strokeWeight"))
    if strokes and stroke_weight:
        styles.border_width = stroke_weight
        stroke_color = strokes[0].get("color")
        if isinstance(stroke_color, Mapping):
            styles.border_color = rgba_to_hex(stroke_color)

    for effect in _list(node, "effects"):
        shadow = shadow_string(effect)
        if shadow is not None:
            styles.box_shadow = shadow
            break

    opacity = node.get("opacity")
    if isinstance(opacity, (int, float)) and not isinstance(opacity, bool) and opacity != 1:
        styles.opacity = opacity

    return styles


class _TokenCollector:
    """Accumulates raw token values; dedup and sort happen once in ``finish``."""

    def __init__(self) -> None:
        self.colors: List[str] = []
        self.spacing: List[float] = []
        self.font_sizes: List[float] = []
        self.border_radii: List[float] = []
        self.shadows: List[str] = []

    def collect(self, node: Mapping[str, Any]) -> None:
        for fill in _list(node, "fills"):
            if fill.get("type") == "SOLID" and isinstance(fill.get("color"), Mapping):
                self.colors.append(rgba_to_hex(fill["color"]))

        for key in ("itemSpacing",) + _PADDING_KEYS:
            value = _number(node.get(key))
            if value:
                self.spacing.append(value)

        text_style = node.get("style")
        if isinstance(text_style, Mapping) and _number(text_style.get("fontSize")):
            self.font_sizes.append(_number(text_style.get("fontSize")))

        if _number(node.get("cornerRadius")):
            self.border_radii.append(_number(node.get("cornerRadius")))

        for effect in _list(node, "effects"):
            shadow = shadow_string(effect)
            if shadow is not None:
                self.shadows.append(shadow)

    def finish(self) -> DesignTokens:
        return DesignTokens(
            colors={f"fill-{hex_value}": hex_value for hex_value in sorted(set(self.colors))},
            spacing=sorted(set(self.spacing)),
            font_sizes=sorted(set(self.font_sizes)),
            border_radii=sorted(set(self.border_radii)),
            shadows=sorted(set(self.shadows)),
        )


def classify_complexity(total_nodes: int) -> Complexity:
    if total_nodes > COMPLEX_THRESHOLD:
        return Complexity.COMPLEX
    if total_nodes > MODERATE_THRESHOLD:
        return Complexity.MODERATE
    return Complexity.SIMPLE


class TreeExtractor:
    """Builds component tree, design tokens and metadata in one bounded walk.

    Usage:
        >>> extractor = TreeExtractor()
        >>> design = extractor.extract({"id": "1:2", "name": "Primary Button", "type": "RECTANGLE"})
        >>> design.component_tree.role
        <NodeRole.BUTTON: 'button'>
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, max_nodes: int = DEFAULT_MAX_NODES):
        self.max_depth = max_depth
        self.max_nodes = max_nodes

    def build_node(self, node: Mapping[str, Any]) -> ComponentNode:
        content = node.get("characters")
        return ComponentNode(
            id=str(node.get("id") or ""),
            name=str(node.get("name") or ""),
            type=str(node.get("type") or ""),
            role=infer_role(node),
            layout=extract_layout(node),
            styles=extract_styles(node),
            content=content if isinstance(content, str) else None,
        )

    def extract(self, root: Mapping[str, Any]) -> ExtractedDesign:
        tokens = _TokenCollector()
        # parents[d] is the most recent node seen at depth d; pre-order makes it the parent of d + 1
        parents: List[ComponentNode] = []
        tree: Optional[ComponentNode] = None
        total = 0
        has_interactive = has_images = has_text = False

        for raw, depth in walk(root, max_depth=self.max_depth, max_nodes=self.max_nodes):
            component = self.build_node(raw)
            del parents[depth:]
            if parents:
                parents[-1].children.append(component)
            else:
                tree = component
            parents.append(component)

            tokens.collect(raw)
            total += 1
            name = component.name.lower()
            if component.type == "TEXT":
                has_text = True
            if has_image_fill(raw):
                has_images = True
            if "button" in name or "input" in name:
                has_interactive = True

        if tree is None:
            raise InputError("Design node could not be extracted", details={"node_id": root.get("id")})
        metadata = DesignMetadata(
            total_nodes=total,
            has_interactive_elements=has_interactive,
            has_images=has_images,
            has_text=has_text,
            complexity=classify_complexity(total),
        )
        logger.debug(
            "Extracted %d nodes from %r (complexity=%s)",
            total,
            tree.name,
            metadata.complexity.value,
        )
        return ExtractedDesign(
            node=dict(root),
            component_tree=tree,
            design_tokens=tokens.finish(),
            metadata=metadata,
        )
