"""Tests for pattern detection, confidence scoring and tree matching."""

import pytest
from pydantic import ValidationError

from component_mcp.catalog.models import CatalogComponent
from component_mcp.errors import InputError
from component_mcp.matching import (
    ComponentMatch,
    ComponentMatcher,
    calculate_confidence,
    detect_patterns,
    extract_keywords,
    filter_confident,
    sort_by_confidence,
    suggest_props,
)

from conftest import button_component, card_component, landing_frame, primary_button


def _match(name: str, confidence: float, node_id: str = "1:1") -> ComponentMatch:
    return ComponentMatch(
        component_name=name,
        component_path=f"@components/{name}",
        confidence=confidence,
        figma_node_id=node_id,
        figma_node_name=name,
    )


# ── Patterns and keywords ────────────────────────────────


class TestDetectPatterns:
    def test_primary_button(self):
        patterns = detect_patterns(primary_button())
        assert patterns == ["clickable", "interactive", "button", "call-to-action", "colored-background"]

    def test_card_frame_with_shadow(self):
        card = landing_frame()["children"][0]
        patterns = detect_patterns(card)
        assert patterns[0] == "container"
        assert {"card", "elevated", "card-like"} <= set(patterns)
        assert len(patterns) == len(set(patterns))

    def test_text_and_layout(self):
        assert detect_patterns({"type": "TEXT", "name": "Body"}) == ["text", "typography"]
        assert detect_patterns({"type": "FRAME", "name": "Row", "layoutMode": "HORIZONTAL"}) == [
            "container",
            "horizontal-layout",
            "flex-layout",
        ]

    def test_empty_fills_and_strokes_add_nothing(self):
        assert detect_patterns({"type": "VECTOR", "name": "x", "fills": [], "strokes": []}) == []


def test_extract_keywords_drops_short_tokens():
    assert extract_keywords({"name": "Primary Button"}) == ["primary", "button"]
    assert extract_keywords({"name": "Go / OK"}) == []
    assert extract_keywords({}) == []


# ── Confidence ───────────────────────────────────────────


class TestCalculateConfidence:
    def test_primary_button_against_button_entry(self):
        node = primary_button()
        confidence = calculate_confidence(detect_patterns(node), extract_keywords(node), button_component())
        assert confidence == pytest.approx(0.8)

    def test_empty_denominators_contribute_zero(self):
        bare = CatalogComponent(name="Bare", import_path="@components/Bare")
        assert calculate_confidence(["button"], ["button"], bare) == 0.0
        assert calculate_confidence([], [], button_component()) == 0.0

    def test_keyword_substring_either_direction(self):
        entry = CatalogComponent(name="Nav", import_path="@components/Nav", figma_keywords=["navbar"])
        assert calculate_confidence([], ["nav"], entry) == pytest.approx(0.4)

    def test_always_within_bounds(self):
        entry = CatalogComponent(
            name="All",
            import_path="@components/All",
            visual_patterns=["button"],
            figma_keywords=["primary", "button"],
        )
        assert calculate_confidence(["button"], ["primary", "button"], entry) == 1.0


def test_confidence_field_is_bounded():
    with pytest.raises(ValidationError):
        _match("Button", 1.2)


# ── Props ────────────────────────────────────────────────


class TestSuggestProps:
    def test_button_props(self):
        props = suggest_props(primary_button(characters="Buy now"), button_component())
        assert props == {"children": "Buy now", "variant": "primary", "size": "medium", "className": ""}

    def test_size_hints(self):
        assert suggest_props({"name": "Large CTA"}, button_component())["size"] == "large"
        assert suggest_props({"name": "small link"}, button_component())["size"] == "small"

    def test_no_declared_props(self):
        assert suggest_props(primary_button(characters="Buy"), card_component()) == {}


# ── Ordering and filtering ───────────────────────────────


def test_sort_by_confidence_is_stable():
    matches = [_match("A", 0.6), _match("B", 0.9), _match("C", 0.6)]
    assert [m.component_name for m in sort_by_confidence(matches)] == ["B", "A", "C"]


def test_filter_confident_is_strict():
    matches = [_match("A", 0.5), _match("B", 0.51)]
    assert [m.component_name for m in filter_confident(matches)] == ["B"]


# ── Matcher ──────────────────────────────────────────────


class TestComponentMatcher:
    def test_match_node(self):
        matcher = ComponentMatcher([button_component(), card_component()])
        matches = matcher.match_node(primary_button())

        assert len(matches) == 1
        match = matches[0]
        assert match.component_name == "Button"
        assert match.component_path == "@components/Button"
        assert match.confidence == pytest.approx(0.8)
        assert match.matched_patterns == ["clickable", "button"]
        assert match.figma_node_id == "1:2"
        assert match.figma_node_name == "Primary Button"

    def test_match_tree_orders_ties_by_traversal(self):
        matcher = ComponentMatcher([button_component(), card_component()])
        matches = matcher.match_tree(landing_frame())

        assert [(m.component_name, m.figma_node_id) for m in matches] == [
            ("Card", "4:39"),
            ("Button", "4:41"),
        ]
        assert all(m.confidence == pytest.approx(0.8) for m in matches)
        assert matches[1].suggested_props["children"] == "Buy now"

    def test_threshold_excludes_weak_matches(self):
        # Landing frame shares only "container" with Card: 0.6 * 1/3 = 0.2
        matcher = ComponentMatcher([card_component()])
        assert matcher.match_node(landing_frame()) == []

    def test_empty_catalog(self):
        assert ComponentMatcher([]).match_tree(landing_frame()) == []

    def test_depth_ceiling(self):
        with pytest.raises(InputError):
            ComponentMatcher([button_component()], max_depth=1).match_tree(landing_frame())
