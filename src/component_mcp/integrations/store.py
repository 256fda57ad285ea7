"""Record store client over a PostgREST-style remote query API.

Tables:
    components              catalog records, upserted on ``component_name``
    implementation_guides   one row per generated guide
    figma_designs           raw design documents fetched for generation
    generated_components    generated code, linked to its design
    generation_history      one row per generation attempt
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from component_mcp.catalog.models import CatalogComponent
from component_mcp.errors import UpstreamError

logger = logging.getLogger("component-mcp.store")

COMPONENTS_TABLE = "components"
GUIDES_TABLE = "implementation_guides"
DESIGNS_TABLE = "figma_designs"
GENERATED_TABLE = "generated_components"
HISTORY_TABLE = "generation_history"


class RecordStore:
    """Catalog source plus the guide/design/history record stores."""

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout_s: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=f"{url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout_s,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        table: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> httpx.Response:
        headers = {"Prefer": prefer} if prefer else None
        try:
            resp = await self._client.request(method, f"/{table}", params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamError(
                f"Failed to {operation}: {exc}", service="store", details={"operation": operation}
            ) from exc

        if resp.status_code >= 300:
            message = resp.text[:200]
            try:
                body = resp.json()
                if isinstance(body, dict) and body.get("message"):
                    message = str(body["message"])
            except ValueError:
                pass
            raise UpstreamError(
                f"Failed to {operation}: {message}",
                service="store",
                status_code=resp.status_code,
                details={"operation": operation},
            )
        return resp

    def _rows(self, operation: str, resp: httpx.Response) -> List[Dict[str, Any]]:
        try:
            rows = resp.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Failed to {operation}: invalid JSON", service="store", details={"operation": operation}
            ) from exc
        if not isinstance(rows, list):
            raise UpstreamError(
                f"Failed to {operation}: expected a list of rows",
                service="store",
                details={"operation": operation},
            )
        return [row for row in rows if isinstance(row, dict)]

    async def _insert(self, operation: str, table: str, record: Dict[str, Any]) -> str:
        resp = await self._request(
            operation,
            "POST",
            table,
            params={"select": "id"},
            json=record,
            prefer="return=representation",
        )
        rows = self._rows(operation, resp)
        if not rows or rows[0].get("id") is None:
            raise UpstreamError(
                f"Failed to {operation}: no id returned", service="store", details={"operation": operation}
            )
        record_id = str(rows[0]["id"])
        logger.debug("%s: %s id=%s", operation, table, record_id)
        return record_id

    # ------------------------------------------------------------------
    # Catalog source
    # ------------------------------------------------------------------

    async def list_components(self) -> List[CatalogComponent]:
        resp = await self._request(
            "fetch components",
            "GET",
            COMPONENTS_TABLE,
            params={"select": "*", "order": "component_name.asc"},
        )
        return [CatalogComponent.from_record(row) for row in self._rows("fetch components", resp)]

    async def get_component(self, name: str) -> Optional[CatalogComponent]:
        resp = await self._request(
            "fetch component",
            "GET",
            COMPONENTS_TABLE,
            params={"select": "*", "component_name": f"eq.{name}", "limit": "1"},
        )
        rows = self._rows("fetch component", resp)
        return CatalogComponent.from_record(rows[0]) if rows else None

    async def upsert_components(self, components: Sequence[CatalogComponent]) -> int:
        if not components:
            return 0
        await self._request(
            "store components",
            "POST",
            COMPONENTS_TABLE,
            params={"on_conflict": "component_name"},
            json=[component.to_record() for component in components],
            prefer="resolution=merge-duplicates,return=minimal",
        )
        logger.info("Upserted %d components", len(components))
        return len(components)

    # ------------------------------------------------------------------
    # Guide / design / history records
    # ------------------------------------------------------------------

    async def store_guide(self, record: Dict[str, Any]) -> str:
        return await self._insert("store implementation guide", GUIDES_TABLE, record)

    async def store_design(self, record: Dict[str, Any]) -> str:
        return await self._insert("store figma design", DESIGNS_TABLE, record)

    async def store_generated_component(self, record: Dict[str, Any]) -> str:
        return await self._insert("store generated component", GENERATED_TABLE, record)

    async def store_history(self, record: Dict[str, Any]) -> str:
        return await self._insert("store generation history", HISTORY_TABLE, record)
