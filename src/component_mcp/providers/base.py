"""Completion provider interface shared by every model backend."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from component_mcp.errors import ProviderError

logger = logging.getLogger("component-mcp.providers")

DEFAULT_MAX_TOKENS = 4096


class CompletionProvider(ABC):
    """Single-prompt text completion.

    Implementations raise only ``ProviderError`` so callers can treat every
    backend as one failure domain.
    """

    name: str = "provider"
    model: str = ""

    def __init__(
        self,
        api_url: str,
        headers: Dict[str, str],
        timeout_s: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url = api_url
        self._client = httpx.AsyncClient(headers=headers, timeout=timeout_s, transport=transport)

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: Optional[float] = None,
    ) -> str:
        """Return the completion text for ``prompt``."""

    async def close(self) -> None:
        await self._client.aclose()

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = await self._client.post(self.api_url, json=payload)
        except httpx.HTTPError as exc:
            raise ProviderError(
                f"{self.name} request failed: {exc}", service=self.name
            ) from exc

        if resp.status_code != 200:
            raise ProviderError(
                f"{self.name} API error ({resp.status_code}): {resp.text[:200]}",
                service=self.name,
                status_code=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderError(f"{self.name} returned invalid JSON", service=self.name) from exc
        if not isinstance(data, dict):
            raise ProviderError(f"{self.name} returned an unexpected payload", service=self.name)
        return data
