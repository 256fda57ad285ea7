"""Normalized layout/style attributes -> Tailwind utility classes.

Every converter is a pure function: given the same ``LayoutInfo`` or
``StyleInfo`` it returns the same ordered class list. Values that do not land
on a scale step fall back to an arbitrary-value literal (``p-[300px]``,
``bg-[#123456]``) so the conversion never fails.
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from component_mcp.design.extractor import format_px
from component_mcp.design.models import LayoutInfo, StyleInfo

# Spacing units are px / 4; units 1..6 map directly, 7..64 snap to this scale.
SPACING_SCALE = (8, 10, 12, 16, 20, 24, 32, 40, 48, 56, 64)
SPACING_DIRECT_MAX = 6

SIZE_SCALE = {
    16: "4", 24: "6", 32: "8", 40: "10", 48: "12", 64: "16",
    80: "20", 96: "24", 128: "32", 160: "40", 192: "48", 256: "64",
    320: "80", 384: "96",
}

COLOR_NAMES = {
    "#000000": "black",
    "#ffffff": "white",
    "#f3f4f6": "gray-100",
    "#e5e7eb": "gray-200",
    "#d1d5db": "gray-300",
    "#9ca3af": "gray-400",
    "#6b7280": "gray-500",
    "#4b5563": "gray-600",
    "#374151": "gray-700",
    "#1f2937": "gray-800",
    "#111827": "gray-900",
    "#3b82f6": "blue-500",
    "#2563eb": "blue-600",
    "#1d4ed8": "blue-700",
    "#ef4444": "red-500",
    "#10b981": "green-500",
    "#f59e0b": "yellow-500",
}

# (inclusive upper bound, class) pairs; first bound >= value wins.
FONT_SIZE_STEPS: Sequence[Tuple[float, str]] = (
    (12, "text-xs"),
    (14, "text-sm"),
    (16, "text-base"),
    (18, "text-lg"),
    (20, "text-xl"),
    (24, "text-2xl"),
    (30, "text-3xl"),
    (36, "text-4xl"),
    (48, "text-5xl"),
    (60, "text-6xl"),
)
FONT_WEIGHT_STEPS: Sequence[Tuple[float, str]] = (
    (200, "font-extralight"),
    (300, "font-light"),
    (400, "font-normal"),
    (500, "font-medium"),
    (600, "font-semibold"),
    (700, "font-bold"),
    (800, "font-extrabold"),
)
RADIUS_STEPS: Sequence[Tuple[float, str]] = (
    (0, "rounded-none"),
    (2, "rounded-sm"),
    (4, "rounded"),
    (6, "rounded-md"),
    (8, "rounded-lg"),
    (12, "rounded-xl"),
    (16, "rounded-2xl"),
)
RADIUS_FULL = 9999
BORDER_WIDTH_STEPS: Sequence[Tuple[float, str]] = (
    (0, "border-0"),
    (1, "border"),
    (2, "border-2"),
    (4, "border-4"),
    (8, "border-8"),
)
OPACITY_STEPS: Sequence[Tuple[float, str]] = (
    (0, "opacity-0"),
    (5, "opacity-5"),
    (10, "opacity-10"),
    (25, "opacity-25"),
    (50, "opacity-50"),
    (75, "opacity-75"),
    (90, "opacity-90"),
    (95, "opacity-95"),
)

JUSTIFY_CLASSES = {
    "center": "justify-center",
    "flex-start": "justify-start",
    "flex-end": "justify-end",
    "space-between": "justify-between",
    "space-around": "justify-around",
}
ALIGN_CLASSES = {
    "center": "items-center",
    "flex-start": "items-start",
    "flex-end": "items-end",
    "stretch": "items-stretch",
}

SHADOW_CLASS = "shadow-lg"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _step(value: float, steps: Sequence[Tuple[float, str]]) -> Optional[str]:
    for bound, css_class in steps:
        if value <= bound:
            return css_class
    return None


def spacing_class(px: float, prefix: str) -> str:
    """Snap a px value to the spacing scale.

    Examples:
        >>> spacing_class(16, "p")
        'p-4'
        >>> spacing_class(36, "gap")
        'gap-8'
        >>> spacing_class(300, "p")
        'p-[300px]'
    """
    unit = _round_half_up(px / 4)
    if unit == 0:
        return f"{prefix}-0"
    if 0 < unit <= SPACING_DIRECT_MAX:
        return f"{prefix}-{unit}"
    if SPACING_DIRECT_MAX < unit <= SPACING_SCALE[-1]:
        # min() keeps the first (smaller) step on ties
        closest = min(SPACING_SCALE, key=lambda step: abs(step - unit))
        return f"{prefix}-{closest}"
    return f"{prefix}-[{format_px(px)}px]"


def size_class(value: Union[float, str], prefix: str) -> str:
    if value in ("auto", "full"):
        return f"{prefix}-{value}"
    if value == 0:
        return f"{prefix}-0"
    step = SIZE_SCALE.get(value) if float(value).is_integer() else None
    if step is not None:
        return f"{prefix}-{step}"
    return f"{prefix}-[{format_px(value)}px]"


def color_class(hex_value: str, prefix: str) -> str:
    name = COLOR_NAMES.get(hex_value.lower()[:7])
    if name is not None:
        return f"{prefix}-{name}"
    return f"{prefix}-[{hex_value}]"


def font_size_class(size: float) -> str:
    return _step(size, FONT_SIZE_STEPS) or f"text-[{format_px(size)}px]"


def font_weight_class(weight: float) -> str:
    return _step(weight, FONT_WEIGHT_STEPS) or "font-black"


def radius_class(radius: float) -> str:
    if radius >= RADIUS_FULL:
        return "rounded-full"
    return _step(radius, RADIUS_STEPS) or f"rounded-[{format_px(radius)}px]"


def border_width_class(width: float) -> str:
    return _step(width, BORDER_WIDTH_STEPS) or f"border-[{format_px(width)}px]"


def opacity_class(opacity: float) -> str:
    percent = _round_half_up(opacity * 100)
    return _step(percent, OPACITY_STEPS) or "opacity-100"


def layout_to_classes(layout: LayoutInfo) -> List[str]:
    """Flex container, padding and size classes, in that order."""
    classes: List[str] = []

    if layout.display == "flex":
        classes.append("flex")
        classes.append("flex-col" if layout.direction == "column" else "flex-row")
        if layout.justify_content in JUSTIFY_CLASSES:
            classes.append(JUSTIFY_CLASSES[layout.justify_content])
        if layout.align_items in ALIGN_CLASSES:
            classes.append(ALIGN_CLASSES[layout.align_items])
        if layout.gap is not None:
            classes.append(spacing_class(layout.gap, "gap"))
        if layout.wrap:
            classes.append("flex-wrap")

    padding = layout.padding
    if padding is not None:
        top, right, bottom, left = padding.top, padding.right, padding.bottom, padding.left
        if top == right == bottom == left:
            classes.append(spacing_class(top, "p"))
        elif top == bottom and left == right:
            classes.append(spacing_class(top, "py"))
            classes.append(spacing_class(left, "px"))
        else:
            classes.append(spacing_class(top, "pt"))
            classes.append(spacing_class(right, "pr"))
            classes.append(spacing_class(bottom, "pb"))
            classes.append(spacing_class(left, "pl"))

    if layout.width is not None:
        classes.append(size_class(layout.width, "w"))
    if layout.height is not None:
        classes.append(size_class(layout.height, "h"))

    return classes


def styles_to_classes(styles: StyleInfo) -> List[str]:
    """Colour, typography, border, shadow and opacity classes, in that order."""
    classes: List[str] = []

    if styles.background_color:
        classes.append(color_class(styles.background_color, "bg"))
    if styles.color:
        classes.append(color_class(styles.color, "text"))
    if styles.font_size:
        classes.append(font_size_class(styles.font_size))
    if styles.font_weight:
        classes.append(font_weight_class(styles.font_weight))
    if styles.border_radius:
        classes.append(radius_class(styles.border_radius))
    if styles.border_width:
        classes.append(border_width_class(styles.border_width))
        if styles.border_color:
            classes.append(color_class(styles.border_color, "border"))
    if styles.box_shadow:
        # geometry is not reproduced; any shadow is one elevation step
        classes.append(SHADOW_CLASS)
    if styles.opacity is not None and styles.opacity < 1:
        classes.append(opacity_class(styles.opacity))

    return classes


def combine_classes(classes: Iterable[str]) -> str:
    return " ".join(css_class for css_class in classes if css_class)
