"""Catalog builder: scan a component repository into CatalogComponent records.

Source files are read through the code host's contents API and handed to a
pluggable ``ComponentSourceParser``. The bundled ``TsxPatternParser`` works on
plain text patterns only; it never builds a syntax tree.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from component_mcp.catalog.models import CatalogComponent, ComponentCategory, PropSpec
from component_mcp.errors import UpstreamError

logger = logging.getLogger("component-mcp.scanner")

GITHUB_API_BASE = "https://api.github.com"
COMPONENT_DIRECTORIES = ("src/components", "components", "lib/components")

# Checked in order; the first category with a keyword contained in the name wins.
CATEGORY_KEYWORDS: Dict[ComponentCategory, tuple[str, ...]] = {
    ComponentCategory.NAVIGATION: ("navbar", "nav", "menu", "sidebar", "breadcrumb", "tabs"),
    ComponentCategory.LAYOUT: ("container", "grid", "flex", "section", "hero", "footer", "header"),
    ComponentCategory.FORMS: ("input", "button", "form", "select", "checkbox", "radio", "textarea"),
    ComponentCategory.DISPLAY: ("card", "modal", "dialog", "tooltip", "popover", "badge", "avatar"),
    ComponentCategory.FEEDBACK: ("alert", "toast", "notification", "spinner", "loader", "progress"),
    ComponentCategory.TYPOGRAPHY: ("heading", "text", "paragraph", "title"),
}

NAME_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("button", ("button", "clickable", "call-to-action", "interactive")),
    ("hero", ("hero", "large-header", "banner", "featured-section")),
    ("card", ("card", "container", "bordered-section", "content-block")),
    ("nav", ("navigation", "horizontal-menu", "header")),
    ("input", ("input", "text-field", "form-control", "user-input")),
    ("modal", ("modal", "dialog", "overlay")),
    ("footer", ("footer", "bottom-section")),
)

_SOURCE_FILE = re.compile(r"\.(tsx|jsx)$")
_PROPS_BLOCK = (
    re.compile(r"interface\s+\w+Props\s*{([^}]+)}"),
    re.compile(r"type\s+\w+Props\s*=\s*{([^}]+)}"),
)
_PROP_LINE = re.compile(r"^\s*(\w+)(\?)?:\s*(.+?)\s*(;|,|$)")
_UNION_AXIS = r"{axis}\??:\s*((?:['\"]\w+['\"]\s*\|?\s*)+)"
_QUOTED = re.compile(r"['\"](\w+)['\"]")
_JSDOC_FIRST_LINE = re.compile(r"/\*\*\s*\n\s*\*\s*(.+?)\n")
_COMPONENT_COMMENT = re.compile(r"//\s*(.+?component.+)", re.IGNORECASE)
_EXAMPLE_BLOCK = re.compile(r"@example\s*\n\s*\*\s*```(?:tsx?|jsx?)?\n([\s\S]*?)```")


class ComponentSourceParser(ABC):
    """Turns one component source file into a catalog record."""

    @abstractmethod
    def parse(self, file_name: str, path: str, content: str) -> Optional[CatalogComponent]:
        """Return a record, or None when the file is not a component."""


class TsxPatternParser(ComponentSourceParser):
    """Static text-pattern extraction for React ``.tsx``/``.jsx`` sources."""

    def __init__(self, import_root: str = "@components", source_url_base: str = "") -> None:
        self.import_root = import_root.rstrip("/")
        self.source_url_base = source_url_base.rstrip("/")

    def parse(self, file_name: str, path: str, content: str) -> Optional[CatalogComponent]:
        if not _SOURCE_FILE.search(file_name):
            return None
        name = _SOURCE_FILE.sub("", file_name)
        if not name or not name[0].isupper():
            return None

        return CatalogComponent(
            name=name,
            import_path=self.import_path(path),
            category=categorize(name),
            description=extract_description(content),
            props=extract_props(content),
            variants=extract_variants(content),
            visual_patterns=detect_visual_patterns(name, content),
            figma_keywords=generate_keywords(name),
            usage_example=extract_usage_example(content, name, self.import_root),
            source_url=f"{self.source_url_base}/{path}" if self.source_url_base else path,
        )

    def import_path(self, path: str) -> str:
        match = re.search(r"components/(.+)\.(tsx|jsx)$", path)
        if not match:
            return path
        # Button/Button.tsx -> Button
        component_path = re.sub(r"/\w+$", "", match.group(1))
        return f"{self.import_root}/{component_path}"


def categorize(name: str) -> ComponentCategory:
    lowered = name.lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return category
    return ComponentCategory.OTHER


def extract_description(content: str) -> str:
    match = _JSDOC_FIRST_LINE.search(content)
    if match:
        return match.group(1).strip()
    match = _COMPONENT_COMMENT.search(content)
    return match.group(1).strip() if match else ""


def extract_props(content: str) -> Dict[str, PropSpec]:
    body = None
    for pattern in _PROPS_BLOCK:
        match = pattern.search(content)
        if match:
            body = match.group(1)
            break
    if body is None:
        return {}

    props: Dict[str, PropSpec] = {}
    for line in body.splitlines():
        match = _PROP_LINE.match(line)
        if match:
            prop_name, optional, prop_type = match.group(1), match.group(2), match.group(3)
            props[prop_name] = PropSpec(declared_type=prop_type.strip(), required=not optional)
    return props


def extract_variants(content: str) -> Dict[str, List[str]]:
    variants: Dict[str, List[str]] = {}
    for axis in ("variant", "size"):
        match = re.search(_UNION_AXIS.format(axis=axis), content)
        if not match:
            continue
        values = _QUOTED.findall(match.group(1))
        if len(values) >= 2:
            variants[axis] = list(dict.fromkeys(values))
    return variants


def detect_visual_patterns(name: str, content: str) -> List[str]:
    lowered = name.lower()
    patterns: List[str] = []
    for needle, tags in NAME_PATTERNS:
        if needle in lowered:
            patterns.extend(tags)
    if "grid" in content or "Grid" in content:
        patterns.append("grid-layout")
    if "flex" in content or "Flex" in content:
        patterns.append("flex-layout")
    return list(dict.fromkeys(patterns))


def generate_keywords(name: str) -> List[str]:
    """Keywords for fuzzy matching: plain, spaced and hyphenated lowercase forms."""
    spaced = re.sub(r"([A-Z])", r" \1", name).strip().lower()
    hyphenated = re.sub(r"([A-Z])", r"-\1", name).lower().lstrip("-")
    return list(dict.fromkeys([name.lower(), spaced, hyphenated]))


def extract_usage_example(content: str, name: str, import_root: str) -> str:
    match = _EXAMPLE_BLOCK.search(content)
    if match:
        lines = [re.sub(r"^\s*\*\s?", "", line) for line in match.group(1).splitlines()]
        return "\n".join(lines).strip()
    return f"import {{ {name} }} from '{import_root}';\n\n<{name} />"


class RepositoryScanner:
    """Lists component files in a GitHub repository and parses each one."""

    def __init__(
        self,
        owner: str,
        repo: str,
        token: Optional[str] = None,
        parser: Optional[ComponentSourceParser] = None,
        *,
        import_root: str = "@components",
        api_base: str = GITHUB_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout_s: float = 30.0,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.parser = parser or TsxPatternParser(
            import_root=import_root,
            source_url_base=f"https://github.com/{owner}/{repo}/blob/main",
        )
        headers = {"Accept": "application/vnd.github.v3+json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=api_base,
            headers=headers,
            timeout=timeout_s,
            transport=transport,
        )

    @property
    def repo_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"

    async def close(self) -> None:
        await self._client.aclose()

    async def scan(self) -> List[CatalogComponent]:
        components: List[CatalogComponent] = []
        for entry in await self._list_component_files():
            if entry.get("type") != "file":
                continue
            file_name = str(entry.get("name", ""))
            if not _SOURCE_FILE.search(file_name):
                continue
            path = str(entry.get("path", file_name))
            content = await self._fetch_file(path)
            if content is None:
                continue
            component = self.parser.parse(file_name, path, content)
            if component is not None:
                components.append(component)

        logger.info("Scanned %s: %d components", self.repo_url, len(components))
        return components

    async def _list_component_files(self) -> List[Dict[str, Any]]:
        for directory in COMPONENT_DIRECTORIES:
            url = f"/repos/{self.owner}/{self.repo}/contents/{directory}"
            try:
                resp = await self._client.get(url)
            except httpx.HTTPError as exc:
                raise UpstreamError(
                    f"Repository listing failed: {exc}", service="github"
                ) from exc
            if resp.status_code == 200:
                try:
                    listing = resp.json()
                except ValueError as exc:
                    raise UpstreamError(
                        "GitHub API returned invalid JSON for a directory listing", service="github"
                    ) from exc
                if isinstance(listing, list):
                    return listing
            logger.debug("Directory %s not found (HTTP %s), trying next", directory, resp.status_code)
        return []

    async def _fetch_file(self, path: str) -> Optional[str]:
        try:
            resp = await self._client.get(
                f"/repos/{self.owner}/{self.repo}/contents/{path}",
                headers={"Accept": "application/vnd.github.v3.raw"},
            )
        except httpx.HTTPError as exc:
            logger.warning("Failed to fetch %s: %s", path, exc)
            return None
        if resp.status_code != 200:
            logger.warning("Failed to fetch %s: HTTP %s", path, resp.status_code)
            return None
        return resp.text
