"""Figma REST API client (design source)."""

import logging
from typing import Any, Dict, Optional

import httpx

from component_mcp.design.references import normalize_node_id
from component_mcp.errors import NotFoundError, UpstreamError

logger = logging.getLogger("component-mcp.figma")

FIGMA_API_BASE = "https://api.figma.com/v1"


class FigmaClient:
    """Async read-only access to Figma files and nodes.

    Args:
        access_token: Figma personal access token
        api_base: API root including the version segment
        timeout_s: Per-request timeout in seconds
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
    """

    def __init__(
        self,
        access_token: str,
        api_base: str = FIGMA_API_BASE,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=api_base.rstrip("/"),
            headers={"X-Figma-Token": access_token},
            timeout=timeout_s,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        try:
            resp = await self._client.get(path, params=params)
        except httpx.TimeoutException as exc:
            raise UpstreamError(f"Figma API timeout: {path}", service="figma") from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Figma API connection error: {exc}", service="figma") from exc

        if resp.status_code == 403:
            raise UpstreamError(
                "Figma API returned 403 Forbidden. Check that FIGMA_ACCESS_TOKEN is valid "
                "and can read this file.",
                service="figma",
                status_code=403,
            )
        if resp.status_code == 404:
            raise NotFoundError(f"Figma resource not found: {path}", details={"service": "figma"})
        if resp.status_code == 429:
            raise UpstreamError(
                "Figma API rate limit exceeded. Retry later.", service="figma", status_code=429
            )
        if resp.status_code != 200:
            raise UpstreamError(
                f"Figma API error {resp.status_code}: {resp.text[:200]}",
                service="figma",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError("Figma API returned invalid JSON", service="figma") from exc
        if not isinstance(data, dict):
            raise UpstreamError("Figma API returned an unexpected payload", service="figma")
        return data

    async def fetch_document(self, file_key: str) -> Dict[str, Any]:
        """Root document node of a file.

        GET /files/:key
        """
        data = await self._get(f"/files/{file_key}")
        document = data.get("document")
        if not isinstance(document, dict):
            raise UpstreamError(
                f"Figma file {file_key} has no document node", service="figma"
            )
        logger.info("fetch_document: file=%s, name=%r", file_key, data.get("name"))
        return document

    async def fetch_node(self, file_key: str, node_id: str) -> Dict[str, Any]:
        """One node subtree of a file.

        GET /files/:key/nodes?ids=...

        Raises:
            NotFoundError: If the file does not contain the node
        """
        clean_id = normalize_node_id(node_id)
        data = await self._get(f"/files/{file_key}/nodes", params={"ids": clean_id})
        nodes = data.get("nodes") or {}

        # the API may key results by either separator
        entry = nodes.get(clean_id) or nodes.get(clean_id.replace("-", ":"))
        if not isinstance(entry, dict) or not isinstance(entry.get("document"), dict):
            raise NotFoundError(
                f"Node {node_id} not found in file",
                details={"file_key": file_key, "node_id": node_id},
            )
        logger.info("fetch_node: file=%s, node=%s", file_key, clean_id)
        return entry["document"]
