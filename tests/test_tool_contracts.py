"""Contract tests for component-mcp tool response envelopes.

Each tool is called through the FastMCP tool manager with in-memory
collaborators installed via ``set_services``, and the JSON envelope it
returns is checked field by field.
"""

import json

import pytest

from component_mcp.errors import ProviderError
from component_mcp.server import mcp

from conftest import FakeProvider, FakeScanner, FakeStore

DESIGN_URL = "https://www.figma.com/design/ABC123/Landing?node-id=4-38"

REPLY = """```tsx
import React from 'react';

interface LandingProps {
  title?: string;
}

export function Landing({ title }: LandingProps) {
  return <div className="p-4">{title}</div>;
}
```"""


async def _call(name: str, args: dict) -> dict:
    result = await mcp._tool_manager.call_tool(name, args)
    assert len(result.content) > 0
    return json.loads(result.content[0].text)


# ── Registration ─────────────────────────────────────────


async def test_all_tools_registered():
    tools = await mcp._tool_manager.get_tools()
    assert set(tools) >= {
        "scan_repository",
        "analyze_figma_design",
        "generate_implementation_guide",
        "get_component_details",
        "generate_react_from_figma",
    }


# ── scan_repository ──────────────────────────────────────


async def test_scan_repository_success(make_services, store):
    make_services()
    parsed = await _call("scan_repository", {})

    assert parsed["ok"] is True
    data = parsed["data"]
    assert data["operation"] == "scan_repository"
    assert data["repository"] == "https://github.com/acme/ui"
    assert data["total"] == 1
    assert data["by_category"] == {"forms": 1}
    assert data["components"][0]["name"] == "Button"
    assert "display" in data
    assert "upsert_components" in store.calls


async def test_scan_repository_empty(make_services, store):
    make_services(scanner_factory=lambda: FakeScanner([]))
    parsed = await _call("scan_repository", {})

    assert parsed["ok"] is True
    assert parsed["data"]["status"] == "empty"
    assert parsed["data"]["reason"] == "scan_empty"
    assert "upsert_components" not in store.calls


# ── analyze_figma_design ─────────────────────────────────


async def test_analyze_success_fields(make_services):
    make_services()
    parsed = await _call("analyze_figma_design", {"design_url": DESIGN_URL})

    assert parsed["ok"] is True
    data = parsed["data"]
    assert data["operation"] == "analyze_figma_design"
    assert data["design"]["file_key"] == "ABC123"
    assert data["total_matches"] == 2
    match = data["matches"][0]
    for field in (
        "component_name",
        "component_path",
        "confidence",
        "matched_patterns",
        "suggested_props",
        "figma_node_id",
        "figma_node_name",
    ):
        assert field in match
    assert match["confidence"] == pytest.approx(0.8)
    assert "80% match" in data["display"]


async def test_analyze_empty_catalog_returns_guidance(make_services, design_source):
    make_services(store=FakeStore([]))
    parsed = await _call("analyze_figma_design", {"design_url": DESIGN_URL})

    assert parsed["ok"] is True
    data = parsed["data"]
    assert data["status"] == "empty"
    assert data["reason"] == "catalog_empty"
    assert any("scan_repository" in hint for hint in data["hints"])
    assert design_source.calls == []


async def test_analyze_invalid_url_fails_before_network(make_services, store, design_source):
    make_services()
    parsed = await _call("analyze_figma_design", {"design_url": "https://example.com/not-a-design"})

    assert parsed["ok"] is False
    error = parsed["error"]
    assert error["code"] == "invalid_input"
    assert error["details"]["operation"] == "analyze_figma_design"
    assert error["details"]["design_url"] == "https://example.com/not-a-design"
    assert store.calls == []
    assert design_source.calls == []


async def test_analyze_no_confident_matches(make_services, design_source):
    design_source.nodes["4-38"] = {"id": "4:38", "name": "Decoration", "type": "VECTOR"}
    make_services()
    parsed = await _call("analyze_figma_design", {"design_url": DESIGN_URL})

    data = parsed["data"]
    assert data["status"] == "empty"
    assert data["reason"] == "no_matches"
    assert len(data["hints"]) == 3


async def test_analyze_missing_node(make_services):
    make_services()
    url = "https://www.figma.com/design/ABC123/Landing?node-id=9-9"
    parsed = await _call("analyze_figma_design", {"design_url": url})

    assert parsed["ok"] is False
    assert parsed["error"]["code"] == "not_found"


# ── generate_implementation_guide ────────────────────────


async def test_guide_success_fields(make_services, store):
    make_services(library_name="Lumiere")
    parsed = await _call("generate_implementation_guide", {"design_url": DESIGN_URL})

    assert parsed["ok"] is True
    data = parsed["data"]
    assert data["operation"] == "generate_implementation_guide"
    assert data["guide_id"] == "store_guide-1"
    assert data["warnings"] == []
    guide = data["guide"]
    for field in (
        "overview",
        "imports",
        "component_usage",
        "full_code",
        "customization_notes",
        "design_tokens",
        "quick_prompts",
    ):
        assert field in guide
    assert "Lumiere" in guide["overview"]
    assert data["display"].startswith("# Implementation Guide")

    record = store.records["store_guide"][0]
    assert record["figma_node_id"] == "4-38"
    assert [c["name"] for c in record["detected_components"]] == ["Card", "Button"]


async def test_guide_store_failure_is_a_warning(make_services, store):
    store.fail_on.add("store_guide")
    make_services()
    parsed = await _call("generate_implementation_guide", {"design_url": DESIGN_URL})

    assert parsed["ok"] is True
    data = parsed["data"]
    assert len(data["warnings"]) == 1
    assert "store implementation guide" in data["warnings"][0]
    assert data["guide"]["full_code"]
    assert "Warnings:" in data["display"]


# ── get_component_details ────────────────────────────────


async def test_component_details_success(make_services):
    make_services()
    parsed = await _call("get_component_details", {"component_name": "Button"})

    assert parsed["ok"] is True
    data = parsed["data"]
    assert data["operation"] == "get_component_details"
    assert data["component"]["component_name"] == "Button"
    assert data["component"]["props"]["children"] == {"type": "React.ReactNode", "required": True}
    assert data["display"].startswith("# Button")


async def test_component_details_not_found_lists_available(make_services):
    make_services()
    parsed = await _call("get_component_details", {"component_name": "button"})

    assert parsed["ok"] is False
    error = parsed["error"]
    assert error["code"] == "not_found"
    assert error["details"]["available_components"] == ["Button", "Card"]


# ── generate_react_from_figma ────────────────────────────


async def test_generate_without_provider_is_configuration_error(make_services, store):
    make_services()
    parsed = await _call("generate_react_from_figma", {"design_url": DESIGN_URL})

    assert parsed["ok"] is False
    error = parsed["error"]
    assert error["code"] == "configuration_error"
    assert error["details"]["missing"] == ["ANTHROPIC_API_KEY"]
    assert "CUSTOM_AI_PROVIDER" in error["message"]
    assert store.calls == []


async def test_generate_success_fields(make_services, store):
    provider = FakeProvider(reply=REPLY)
    make_services(provider=provider)
    parsed = await _call(
        "generate_react_from_figma",
        {"design_url": DESIGN_URL, "component_name": "Landing", "split_strategy": "none"},
    )

    assert parsed["ok"] is True
    data = parsed["data"]
    assert data["operation"] == "generate_react_from_figma"
    assert data["design_id"] == "store_design-1"
    assert data["component_id"] == "store_generated_component-1"
    assert data["split_strategy"] == "none"
    assert data["warnings"] == []
    component = data["component"]
    assert component["component_name"] == "Landing"
    assert component["props_interface"].startswith("interface LandingProps")
    assert component["dependencies"] == ["react", "lucide-react"]
    assert data["design_summary"]["total_nodes"] == 4
    assert data["design_summary"]["token_counts"]["colors"] == 3
    assert "# Generated React Component" in data["display"]

    assert store.records["store_design"][0]["node_id"] == "4-38"
    history = store.records["store_history"][0]
    assert history["success"] is True
    assert history["generated_component_id"] == "store_generated_component-1"
    assert "## Component Library (MUST USE)" in provider.prompts[0]


async def test_generate_provider_failure_records_history(make_services, store):
    make_services(provider=FakeProvider(error=ProviderError("fake API error (500): down", service="fake")))
    parsed = await _call("generate_react_from_figma", {"design_url": DESIGN_URL})

    assert parsed["ok"] is False
    assert parsed["error"]["code"] == "provider_error"
    assert parsed["error"]["details"]["design_url"] == DESIGN_URL
    history = store.records["store_history"][0]
    assert history["success"] is False
    assert "down" in history["error_message"]
    assert "store_generated_component" not in store.records


async def test_generate_history_failure_is_a_warning(make_services, store):
    store.fail_on.add("store_history")
    make_services(provider=FakeProvider(reply=REPLY))
    parsed = await _call("generate_react_from_figma", {"design_url": DESIGN_URL})

    assert parsed["ok"] is True
    assert len(parsed["data"]["warnings"]) == 1
    assert "store generation history" in parsed["data"]["warnings"][0]


async def test_generate_without_store_config_fails_before_network(make_services, design_source, monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    provider = FakeProvider(reply=REPLY)
    make_services(store=None, provider=provider)
    parsed = await _call("generate_react_from_figma", {"design_url": DESIGN_URL})

    assert parsed["ok"] is False
    error = parsed["error"]
    assert error["code"] == "configuration_error"
    assert "SUPABASE_URL" in error["details"]["missing"]
    assert design_source.calls == []
    assert provider.prompts == []
