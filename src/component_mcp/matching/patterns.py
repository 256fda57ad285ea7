"""Visual-pattern and keyword detection on raw design nodes.

Pattern tags are the shared vocabulary between design nodes and catalog
entries (``CatalogComponent.visual_patterns``); keyword tokens are compared
against ``CatalogComponent.figma_keywords``.
"""

import re
from typing import Any, List, Mapping

# Name substrings -> tags. Every rule that fires contributes its tags.
NAME_RULES: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("button", "btn", "cta", "action"), ("button", "clickable", "call-to-action")),
    (("hero", "banner"), ("hero", "large-header", "banner", "featured-section")),
    (("card",), ("card", "container", "bordered-section", "content-block")),
    (("nav", "menu", "header", "footer"), ("navigation", "horizontal-menu", "header")),
    (("input", "field"), ("input", "text-field", "form-control", "user-input")),
    (("modal", "dialog"), ("modal", "dialog", "overlay")),
    (("footer",), ("footer", "bottom-section")),
)

INTERACTIVE_NAME_HINTS = ("button", "click", "link", "cta")
SHADOW_EFFECTS = ("DROP_SHADOW", "INNER_SHADOW")

MIN_KEYWORD_LENGTH = 3
_KEYWORD_SEPARATORS = re.compile(r"[\s\-_/]+")


def _non_empty_list(node: Mapping[str, Any], key: str) -> bool:
    value = node.get(key)
    return isinstance(value, list) and len(value) > 0


def has_interactive_name(name: str) -> bool:
    lowered = name.lower()
    return any(hint in lowered for hint in INTERACTIVE_NAME_HINTS)


def has_shadow(node: Mapping[str, Any]) -> bool:
    effects = node.get("effects")
    if not isinstance(effects, list):
        return False
    return any(
        isinstance(effect, Mapping) and effect.get("type") in SHADOW_EFFECTS
        for effect in effects
    )


def detect_patterns(node: Mapping[str, Any]) -> List[str]:
    """Return the ordered, duplicate-free pattern tags of one node.

    Examples:
        >>> detect_patterns({"name": "Primary Button", "type": "RECTANGLE",
        ...                  "fills": [{"type": "SOLID"}]})
        ['clickable', 'interactive', 'button', 'call-to-action', 'colored-background']
    """
    node_type = node.get("type")
    name = str(node.get("name") or "")
    lowered = name.lower()
    tags: List[str] = []

    if node_type in ("FRAME", "COMPONENT"):
        tags.append("container")
    if node_type == "TEXT":
        tags.extend(("text", "typography"))
    if node_type == "RECTANGLE" and has_interactive_name(name):
        tags.extend(("clickable", "interactive"))

    layout_mode = node.get("layoutMode")
    if layout_mode == "HORIZONTAL":
        tags.extend(("horizontal-layout", "flex-layout"))
    elif layout_mode == "VERTICAL":
        tags.extend(("vertical-layout", "flex-layout"))

    for needles, rule_tags in NAME_RULES:
        if any(needle in lowered for needle in needles):
            tags.extend(rule_tags)

    if _non_empty_list(node, "fills"):
        tags.append("colored-background")
    if _non_empty_list(node, "strokes"):
        tags.append("bordered-section")
    if has_shadow(node):
        tags.extend(("elevated", "card-like"))

    return list(dict.fromkeys(tags))


def extract_keywords(node: Mapping[str, Any]) -> List[str]:
    """Split the lowercase node name into tokens of 3+ characters.

    Examples:
        >>> extract_keywords({"name": "Primary Button"})
        ['primary', 'button']
        >>> extract_keywords({"name": "nav/top-bar_v2"})
        ['nav', 'top', 'bar']
    """
    name = str(node.get("name") or "").lower()
    return [word for word in _KEYWORD_SEPARATORS.split(name) if len(word) >= MIN_KEYWORD_LENGTH]


def keyword_matches(keyword: str, candidates: List[str]) -> bool:
    """Substring match in either direction against any candidate keyword."""
    return any(candidate in keyword or keyword in candidate for candidate in candidates)
