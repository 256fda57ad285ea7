"""Hosted model provider (Anthropic messages API)."""

from typing import Any, Dict, Optional

import httpx

from component_mcp.config import HostedProviderConfig
from component_mcp.errors import ProviderError
from component_mcp.providers.base import DEFAULT_MAX_TOKENS, CompletionProvider, logger

API_VERSION = "2023-06-01"


class HostedProvider(CompletionProvider):
    name = "anthropic"

    def __init__(
        self,
        config: HostedProviderConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            config.api_url,
            headers={
                "x-api-key": config.api_key,
                "anthropic-version": API_VERSION,
                "content-type": "application/json",
            },
            timeout_s=config.timeout_s,
            transport=transport,
        )
        self.model = config.model

    async def complete(
        self,
        prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: Optional[float] = None,
    ) -> str:
        payload: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if temperature is not None:
            payload["temperature"] = temperature

        data = await self._post(payload)
        blocks = data.get("content")
        if not isinstance(blocks, list) or not blocks:
            raise ProviderError(f"{self.name} returned no content", service=self.name)

        first = blocks[0]
        text = first.get("text") if isinstance(first, dict) and first.get("type") == "text" else ""
        usage = data.get("usage") or {}
        logger.info(
            "[%s] Generated %d characters (%s input + %s output tokens)",
            self.name,
            len(text),
            usage.get("input_tokens", "?"),
            usage.get("output_tokens", "?"),
        )
        return text
