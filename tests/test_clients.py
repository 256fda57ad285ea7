"""Tests for the HTTP collaborators, driven through httpx.MockTransport."""

import json

import httpx
import pytest

from component_mcp.catalog.models import CatalogComponent
from component_mcp.config import CustomProviderConfig, HostedProviderConfig, NoProviderConfig
from component_mcp.errors import NotFoundError, ProviderError, UpstreamError
from component_mcp.integrations import FigmaClient, RecordStore
from component_mcp.providers import CustomProvider, HostedProvider, build_provider

from conftest import button_component


def _transport(handler, seen):
    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return httpx.MockTransport(_record)


# ── Figma ────────────────────────────────────────────────


class TestFigmaClient:
    async def test_fetch_node_accepts_colon_key(self):
        seen = []
        node = {"id": "4:38", "name": "Landing", "type": "FRAME"}
        transport = _transport(
            lambda request: httpx.Response(200, json={"nodes": {"4:38": {"document": node}}}), seen
        )
        client = FigmaClient("token-1", transport=transport)
        try:
            result = await client.fetch_node("ABC", "4:38")
        finally:
            await client.close()

        assert result == node
        assert seen[0].url.path == "/v1/files/ABC/nodes"
        assert seen[0].url.params["ids"] == "4-38"
        assert seen[0].headers["X-Figma-Token"] == "token-1"

    async def test_fetch_document(self):
        seen = []
        transport = _transport(
            lambda request: httpx.Response(200, json={"name": "File", "document": {"id": "0:0"}}), seen
        )
        client = FigmaClient("t", transport=transport)
        assert await client.fetch_document("ABC") == {"id": "0:0"}
        assert seen[0].url.path == "/v1/files/ABC"
        await client.close()

    async def test_missing_node_is_not_found(self):
        transport = _transport(lambda request: httpx.Response(200, json={"nodes": {}}), [])
        client = FigmaClient("t", transport=transport)
        with pytest.raises(NotFoundError):
            await client.fetch_node("ABC", "9-9")
        await client.close()

    @pytest.mark.parametrize(
        "status, error",
        [(403, UpstreamError), (404, NotFoundError), (429, UpstreamError), (500, UpstreamError)],
    )
    async def test_status_mapping(self, status, error):
        transport = _transport(lambda request: httpx.Response(status, text="nope"), [])
        client = FigmaClient("t", transport=transport)
        with pytest.raises(error):
            await client.fetch_document("ABC")
        await client.close()

    async def test_connection_error_is_upstream(self):
        def _fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = FigmaClient("t", transport=httpx.MockTransport(_fail))
        with pytest.raises(UpstreamError) as info:
            await client.fetch_document("ABC")
        assert info.value.details["service"] == "figma"
        await client.close()


# ── Record store ─────────────────────────────────────────


class TestRecordStore:
    async def test_list_components(self):
        seen = []
        rows = [button_component().to_record()]
        transport = _transport(lambda request: httpx.Response(200, json=rows), seen)
        store = RecordStore("https://db.example.com/", "anon", transport=transport)
        components = await store.list_components()
        await store.close()

        assert [c.name for c in components] == ["Button"]
        assert components[0].has_prop("children")
        assert seen[0].url.path == "/rest/v1/components"
        assert seen[0].url.params["order"] == "component_name.asc"
        assert seen[0].headers["apikey"] == "anon"
        assert seen[0].headers["Authorization"] == "Bearer anon"

    async def test_get_component_miss(self):
        seen = []
        transport = _transport(lambda request: httpx.Response(200, json=[]), seen)
        store = RecordStore("https://db.example.com", "anon", transport=transport)
        assert await store.get_component("Nope") is None
        assert seen[0].url.params["component_name"] == "eq.Nope"
        await store.close()

    async def test_upsert_components(self):
        seen = []
        transport = _transport(lambda request: httpx.Response(201), seen)
        store = RecordStore("https://db.example.com", "anon", transport=transport)
        count = await store.upsert_components([button_component(), CatalogComponent("Card", "@c/Card")])
        await store.close()

        assert count == 2
        request = seen[0]
        assert request.method == "POST"
        assert request.url.params["on_conflict"] == "component_name"
        assert "merge-duplicates" in request.headers["Prefer"]
        body = json.loads(request.content)
        assert [row["component_name"] for row in body] == ["Button", "Card"]

    async def test_insert_returns_id(self):
        seen = []
        transport = _transport(lambda request: httpx.Response(201, json=[{"id": 42}]), seen)
        store = RecordStore("https://db.example.com", "anon", transport=transport)
        assert await store.store_history({"success": True}) == "42"
        assert seen[0].url.path == "/rest/v1/generation_history"
        assert seen[0].headers["Prefer"] == "return=representation"
        await store.close()

    async def test_error_names_operation(self):
        transport = _transport(lambda request: httpx.Response(400, json={"message": "bad column"}), [])
        store = RecordStore("https://db.example.com", "anon", transport=transport)
        with pytest.raises(UpstreamError) as info:
            await store.store_guide({})
        assert "store implementation guide" in info.value.message
        assert "bad column" in info.value.message
        assert info.value.status_code == 400
        await store.close()


# ── Providers ────────────────────────────────────────────


HOSTED = HostedProviderConfig(
    api_key="sk-test",
    model="claude-test",
    api_url="https://llm.example.com/v1/messages",
    timeout_s=5,
)
CUSTOM = CustomProviderConfig(
    api_url="https://custom.example.com/chat",
    api_key="ck-test",
    provider_name="Local",
    model="local-1",
    timeout_s=5,
)


def test_build_provider_selects_by_config():
    assert build_provider(NoProviderConfig()) is None
    assert isinstance(build_provider(HOSTED), HostedProvider)
    assert isinstance(build_provider(CUSTOM), CustomProvider)


class TestHostedProvider:
    async def test_complete(self):
        seen = []
        reply = {"content": [{"type": "text", "text": "```tsx\ncode\n```"}], "usage": {"input_tokens": 3}}
        provider = HostedProvider(HOSTED, transport=_transport(lambda r: httpx.Response(200, json=reply), seen))
        text = await provider.complete("prompt", max_tokens=100)
        await provider.close()

        assert text == "```tsx\ncode\n```"
        assert seen[0].headers["x-api-key"] == "sk-test"
        assert seen[0].headers["anthropic-version"] == "2023-06-01"
        body = json.loads(seen[0].content)
        assert body["model"] == "claude-test"
        assert body["max_tokens"] == 100
        assert "temperature" not in body

    async def test_error_status(self):
        provider = HostedProvider(HOSTED, transport=_transport(lambda r: httpx.Response(529, text="overloaded"), []))
        with pytest.raises(ProviderError) as info:
            await provider.complete("prompt")
        assert info.value.status_code == 529
        await provider.close()


class TestCustomProvider:
    async def test_complete(self):
        seen = []
        reply = {"choices": [{"message": {"content": "hello"}}]}
        provider = CustomProvider(CUSTOM, transport=_transport(lambda r: httpx.Response(200, json=reply), seen))
        assert await provider.complete("prompt") == "hello"
        await provider.close()

        assert provider.name == "Local"
        assert seen[0].headers["Authorization"] == "Bearer ck-test"
        body = json.loads(seen[0].content)
        assert body["temperature"] == 0.7
        assert body["messages"] == [{"role": "user", "content": "prompt"}]

    async def test_malformed_reply(self):
        provider = CustomProvider(CUSTOM, transport=_transport(lambda r: httpx.Response(200, json={"choices": []}), []))
        with pytest.raises(ProviderError):
            await provider.complete("prompt")
        await provider.close()
