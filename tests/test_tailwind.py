"""Tests for layout/style -> Tailwind class conversion."""

import pytest

from component_mcp.design.extractor import extract_layout, extract_styles
from component_mcp.design.models import LayoutInfo, Padding, StyleInfo
from component_mcp.styling import combine_classes, layout_to_classes, styles_to_classes
from component_mcp.styling.tailwind import (
    border_width_class,
    color_class,
    font_size_class,
    font_weight_class,
    opacity_class,
    radius_class,
    size_class,
    spacing_class,
)

from conftest import landing_frame


# ── Scale converters ─────────────────────────────────────


@pytest.mark.parametrize(
    "px, expected",
    [
        (0, "p-0"),
        (2, "p-1"),
        (16, "p-4"),
        (24, "p-6"),
        (32, "p-8"),
        (36, "p-8"),
        (44, "p-10"),
        (52, "p-12"),
        (256, "p-64"),
        (300, "p-[300px]"),
    ],
)
def test_spacing_class(px, expected):
    assert spacing_class(px, "p") == expected


def test_size_class():
    assert size_class(320, "w") == "w-80"
    assert size_class(48.0, "h") == "h-12"
    assert size_class(100, "w") == "w-[100px]"
    assert size_class("full", "w") == "w-full"
    assert size_class(0, "h") == "h-0"


def test_color_class():
    assert color_class("#3b82f6", "bg") == "bg-blue-500"
    assert color_class("#3B82F6CC", "bg") == "bg-blue-500"
    assert color_class("#123456", "text") == "text-[#123456]"


def test_typography_classes():
    assert font_size_class(15) == "text-base"
    assert font_size_class(24) == "text-2xl"
    assert font_size_class(72) == "text-[72px]"
    assert font_weight_class(400) == "font-normal"
    assert font_weight_class(650) == "font-bold"
    assert font_weight_class(900) == "font-black"


def test_shape_classes():
    assert radius_class(8) == "rounded-lg"
    assert radius_class(20) == "rounded-[20px]"
    assert radius_class(9999) == "rounded-full"
    assert border_width_class(1) == "border"
    assert border_width_class(3) == "border-4"
    assert opacity_class(0.5) == "opacity-50"
    assert opacity_class(0.97) == "opacity-100"


# ── Layout ───────────────────────────────────────────────


class TestLayoutToClasses:
    def test_uniform_padding_is_single_class(self):
        layout = LayoutInfo(padding=Padding(top=16, right=16, bottom=16, left=16))
        assert layout_to_classes(layout) == ["p-4"]

    def test_axis_padding(self):
        layout = LayoutInfo(padding=Padding(top=8, right=16, bottom=8, left=16))
        assert layout_to_classes(layout) == ["py-2", "px-4"]

    def test_per_side_padding(self):
        layout = LayoutInfo(padding=Padding(top=4, right=8, bottom=12, left=16))
        assert layout_to_classes(layout) == ["pt-1", "pr-2", "pb-3", "pl-4"]

    def test_flex_container(self):
        assert layout_to_classes(extract_layout(landing_frame())) == ["flex", "flex-col", "gap-6", "p-4"]

    def test_flex_alignment_and_wrap(self):
        layout = LayoutInfo(
            display="flex",
            direction="row",
            justify_content="space-between",
            align_items="center",
            gap=8,
            wrap=True,
            width=320,
        )
        assert layout_to_classes(layout) == [
            "flex",
            "flex-row",
            "justify-between",
            "items-center",
            "gap-2",
            "flex-wrap",
            "w-80",
        ]

    def test_block_without_attributes(self):
        assert layout_to_classes(LayoutInfo()) == []


# ── Styles ───────────────────────────────────────────────


class TestStylesToClasses:
    def test_text_node(self):
        title = landing_frame()["children"][0]["children"][0]
        assert styles_to_classes(extract_styles(title)) == [
            "bg-gray-900",
            "text-gray-900",
            "text-2xl",
            "font-bold",
        ]

    def test_border_shadow_opacity(self):
        styles = StyleInfo(
            border_radius=8,
            border_width=1,
            border_color="#e5e7eb",
            box_shadow="0px 4px 6px #0000001a",
            opacity=0.5,
        )
        assert styles_to_classes(styles) == [
            "rounded-lg",
            "border",
            "border-gray-200",
            "shadow-lg",
            "opacity-50",
        ]

    def test_full_opacity_adds_nothing(self):
        assert styles_to_classes(StyleInfo(opacity=1)) == []


def test_combine_classes_skips_empty():
    assert combine_classes(["flex", "", "p-4"]) == "flex p-4"
