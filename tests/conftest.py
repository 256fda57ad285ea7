"""Shared fixtures: design nodes, catalog entries and in-memory collaborators."""

from typing import Any, Dict, List, Optional

import pytest

from component_mcp.catalog.models import CatalogComponent, ComponentCategory, PropSpec
from component_mcp.config import NoProviderConfig, TraversalConfig
from component_mcp.errors import NotFoundError, UpstreamError
from component_mcp.services import Services, set_services


# ── Design nodes ─────────────────────────────────────────


def solid(r: float, g: float, b: float, a: float = 1.0) -> Dict[str, Any]:
    return {"type": "SOLID", "color": {"r": r, "g": g, "b": b, "a": a}}


def primary_button(**overrides: Any) -> Dict[str, Any]:
    node = {
        "id": "1:2",
        "name": "Primary Button",
        "type": "RECTANGLE",
        "fills": [solid(0.231, 0.51, 0.965)],
    }
    node.update(overrides)
    return node


def landing_frame() -> Dict[str, Any]:
    return {
        "id": "4:38",
        "name": "Landing",
        "type": "FRAME",
        "layoutMode": "VERTICAL",
        "itemSpacing": 24,
        "paddingTop": 16,
        "paddingRight": 16,
        "paddingBottom": 16,
        "paddingLeft": 16,
        "fills": [solid(1, 1, 1)],
        "children": [
            {
                "id": "4:39",
                "name": "Product Card",
                "type": "FRAME",
                "cornerRadius": 8,
                "effects": [
                    {
                        "type": "DROP_SHADOW",
                        "visible": True,
                        "offset": {"x": 0, "y": 4},
                        "radius": 6,
                        "color": {"r": 0, "g": 0, "b": 0, "a": 0.1},
                    }
                ],
                "children": [
                    {
                        "id": "4:40",
                        "name": "Title",
                        "type": "TEXT",
                        "characters": "Hello",
                        "style": {"fontSize": 24, "fontWeight": 700},
                        "fills": [solid(0.067, 0.094, 0.153)],
                    },
                    primary_button(id="4:41", characters="Buy now"),
                ],
            },
        ],
    }


# ── Catalog entries ──────────────────────────────────────


def button_component() -> CatalogComponent:
    return CatalogComponent(
        name="Button",
        import_path="@components/Button",
        category=ComponentCategory.FORMS,
        description="Primary action button",
        props={
            "children": PropSpec("React.ReactNode", required=True),
            "variant": PropSpec("'primary' | 'secondary'"),
            "className": PropSpec("string"),
        },
        variants={"variant": ["primary", "secondary"], "size": ["small", "medium", "large"]},
        visual_patterns=["button", "clickable"],
        figma_keywords=["button", "btn"],
        usage_example="<Button>Click</Button>",
        source_url="https://github.com/acme/ui/blob/main/src/components/Button.tsx",
    )


def card_component() -> CatalogComponent:
    return CatalogComponent(
        name="Card",
        import_path="@components/Card",
        category=ComponentCategory.DISPLAY,
        visual_patterns=["card", "container", "elevated"],
        figma_keywords=["card"],
    )


# ── In-memory collaborators ──────────────────────────────


class FakeStore:
    """Record store double; set ``fail_on`` to a method name to make it raise."""

    def __init__(self, components: Optional[List[CatalogComponent]] = None):
        self.components = list(components or [])
        self.records: Dict[str, List[Dict[str, Any]]] = {}
        self.fail_on: set = set()
        self.calls: List[str] = []

    def _check(self, method: str) -> None:
        self.calls.append(method)
        if method in self.fail_on:
            raise UpstreamError(f"Failed to {method}: unavailable", service="store")

    def _save(self, method: str, record: Dict[str, Any]) -> str:
        self._check(method)
        rows = self.records.setdefault(method, [])
        rows.append(record)
        return f"{method}-{len(rows)}"

    async def list_components(self) -> List[CatalogComponent]:
        self._check("list_components")
        return list(self.components)

    async def get_component(self, name: str) -> Optional[CatalogComponent]:
        self._check("get_component")
        return next((c for c in self.components if c.name == name), None)

    async def upsert_components(self, components) -> int:
        self._check("upsert_components")
        by_name = {c.name: c for c in self.components}
        for component in components:
            by_name[component.name] = component
        self.components = list(by_name.values())
        return len(components)

    async def store_guide(self, record):
        return self._save("store_guide", record)

    async def store_design(self, record):
        return self._save("store_design", record)

    async def store_generated_component(self, record):
        return self._save("store_generated_component", record)

    async def store_history(self, record):
        return self._save("store_history", record)


class FakeDesignSource:
    def __init__(self, document: Dict[str, Any], nodes: Optional[Dict[str, Dict[str, Any]]] = None):
        self.document = document
        self.nodes = nodes or {}
        self.calls: List[tuple] = []

    async def fetch_document(self, file_key: str) -> Dict[str, Any]:
        self.calls.append(("document", file_key))
        return self.document

    async def fetch_node(self, file_key: str, node_id: str) -> Dict[str, Any]:
        self.calls.append(("node", file_key, node_id))
        if node_id not in self.nodes:
            raise NotFoundError(f"Node {node_id} not found in file")
        return self.nodes[node_id]


class FakeProvider:
    name = "fake"
    model = "fake-model-1"

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    async def complete(self, prompt: str, max_tokens: int = 4096, temperature: Optional[float] = None) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeScanner:
    def __init__(self, components: List[CatalogComponent]):
        self.components = components
        self.closed = False
        self.repo_url = "https://github.com/acme/ui"

    async def scan(self) -> List[CatalogComponent]:
        return list(self.components)

    async def close(self) -> None:
        self.closed = True


# ── Fixtures ─────────────────────────────────────────────


@pytest.fixture()
def store() -> FakeStore:
    return FakeStore([button_component(), card_component()])


@pytest.fixture()
def design_source() -> FakeDesignSource:
    frame = landing_frame()
    return FakeDesignSource(frame, nodes={"4-38": frame})


@pytest.fixture()
def make_services(store, design_source):
    """Build Services around the fakes and install them as the global instance."""
    created: List[Services] = []

    def _make(**overrides: Any) -> Services:
        kwargs: Dict[str, Any] = {
            "store": store,
            "design_source": design_source,
            "provider_config": NoProviderConfig(),
            "traversal": TraversalConfig(max_depth=64, max_nodes=5000),
            "scanner_factory": lambda: FakeScanner([button_component()]),
        }
        kwargs.update(overrides)
        services = Services(**kwargs)
        set_services(services)
        created.append(services)
        return services

    yield _make
    set_services(None)
