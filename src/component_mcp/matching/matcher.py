"""Confidence-scored matching of design nodes against a component catalog.

Scoring for a (node, catalog entry) pair:

    0.6 * |node patterns & entry.visual_patterns| / |entry.visual_patterns|
  + 0.4 * |node keywords matched by substring| / |node keywords|

Each term is zero when its denominator is zero; the result is clamped to
[0, 1]. Per-node matches must score above ``MATCH_THRESHOLD``; analysis and
guide output additionally keep only matches above ``CONFIDENT_THRESHOLD``.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from pydantic import BaseModel, Field

from component_mcp.catalog.models import CatalogComponent
from component_mcp.design.traversal import DEFAULT_MAX_DEPTH, DEFAULT_MAX_NODES, walk
from component_mcp.matching.patterns import detect_patterns, extract_keywords, keyword_matches
from component_mcp.utils import CONFIDENT_THRESHOLD, MATCH_THRESHOLD

logger = logging.getLogger("component-mcp.matcher")

PATTERN_WEIGHT = 0.6
KEYWORD_WEIGHT = 0.4

LARGE_HINTS = ("large", "lg")
SMALL_HINTS = ("small", "sm")


class ComponentMatch(BaseModel):
    """One catalog entry matched against one design node."""

    component_name: str
    component_path: str
    confidence: float = Field(ge=0.0, le=1.0)
    matched_patterns: List[str] = Field(default_factory=list)
    suggested_props: Dict[str, Any] = Field(default_factory=dict)
    figma_node_id: str
    figma_node_name: str


def calculate_confidence(
    patterns: Sequence[str],
    keywords: Sequence[str],
    component: CatalogComponent,
) -> float:
    """Weighted pattern + keyword similarity in [0, 1].

    Examples:
        >>> button = CatalogComponent(
        ...     name="Button", import_path="@components/Button",
        ...     visual_patterns=["button", "clickable"], figma_keywords=["button", "btn"],
        ... )
        >>> calculate_confidence(["button", "clickable", "colored-background"],
        ...                      ["primary", "button"], button)
        0.8
    """
    score = 0.0

    entry_patterns = set(component.visual_patterns)
    if entry_patterns:
        shared = entry_patterns.intersection(patterns)
        score += PATTERN_WEIGHT * len(shared) / len(entry_patterns)

    if keywords:
        hits = sum(1 for keyword in keywords if keyword_matches(keyword, component.figma_keywords))
        score += KEYWORD_WEIGHT * hits / len(keywords)

    return round(min(max(score, 0.0), 1.0), 10)


def matched_patterns(patterns: Sequence[str], component: CatalogComponent) -> List[str]:
    """Node patterns also declared by the entry, in node-pattern order."""
    entry_patterns = set(component.visual_patterns)
    return [pattern for pattern in patterns if pattern in entry_patterns]


def suggest_props(node: Mapping[str, Any], component: CatalogComponent) -> Dict[str, Any]:
    """Derive prop values for a matched component from the node."""
    props: Dict[str, Any] = {}
    name = str(node.get("name") or "").lower()

    characters = node.get("characters")
    if characters and component.has_prop("children"):
        props["children"] = characters

    if component.has_variant_axis("variant"):
        for value in component.variant_values("variant"):
            if value.lower() in name:
                props["variant"] = value
                break

    if component.has_variant_axis("size"):
        if any(hint in name for hint in LARGE_HINTS):
            props["size"] = "large"
        elif any(hint in name for hint in SMALL_HINTS):
            props["size"] = "small"
        else:
            props["size"] = "medium"

    if component.has_prop("className"):
        props["className"] = ""

    return props


def sort_by_confidence(matches: Iterable[ComponentMatch]) -> List[ComponentMatch]:
    """Descending by confidence; ``sorted`` is stable so ties keep their order."""
    return sorted(matches, key=lambda match: match.confidence, reverse=True)


def filter_confident(
    matches: Iterable[ComponentMatch],
    threshold: float = CONFIDENT_THRESHOLD,
) -> List[ComponentMatch]:
    return [match for match in matches if match.confidence > threshold]


class ComponentMatcher:
    """Scores design nodes against a fixed catalog snapshot.

    Usage:
        >>> matcher = ComponentMatcher(catalog)
        >>> matches = matcher.match_tree(document_root)
        >>> [m.component_name for m in filter_confident(matches)]
        ['Button', 'Card']
    """

    def __init__(
        self,
        catalog: Sequence[CatalogComponent],
        *,
        threshold: float = MATCH_THRESHOLD,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_nodes: int = DEFAULT_MAX_NODES,
    ):
        self.catalog = list(catalog)
        self.threshold = threshold
        self.max_depth = max_depth
        self.max_nodes = max_nodes

    def match_node(self, node: Mapping[str, Any]) -> List[ComponentMatch]:
        patterns = detect_patterns(node)
        keywords = extract_keywords(node)

        matches: List[ComponentMatch] = []
        for component in self.catalog:
            confidence = calculate_confidence(patterns, keywords, component)
            if confidence <= self.threshold:
                continue
            matches.append(
                ComponentMatch(
                    component_name=component.name,
                    component_path=component.import_path,
                    confidence=confidence,
                    matched_patterns=matched_patterns(patterns, component),
                    suggested_props=suggest_props(node, component),
                    figma_node_id=str(node.get("id") or ""),
                    figma_node_name=str(node.get("name") or ""),
                )
            )
        return sort_by_confidence(matches)

    def match_tree(self, root: Mapping[str, Any]) -> List[ComponentMatch]:
        """Match every node in pre-order, then order the whole batch by confidence."""
        collected: List[ComponentMatch] = []
        visited = 0
        for node, _depth in walk(root, max_depth=self.max_depth, max_nodes=self.max_nodes):
            collected.extend(self.match_node(node))
            visited += 1

        logger.debug(
            "Matched %d nodes against %d components: %d candidates",
            visited,
            len(self.catalog),
            len(collected),
        )
        return sort_by_confidence(collected)
