"""Caller-supplied OpenAI-compatible chat completions endpoint."""

from typing import Optional

import httpx

from component_mcp.config import CustomProviderConfig
from component_mcp.errors import ProviderError
from component_mcp.providers.base import DEFAULT_MAX_TOKENS, CompletionProvider, logger

DEFAULT_TEMPERATURE = 0.7


class CustomProvider(CompletionProvider):
    def __init__(
        self,
        config: CustomProviderConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            config.api_url,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {config.api_key}",
            },
            timeout_s=config.timeout_s,
            transport=transport,
        )
        self.name = config.provider_name
        self.model = config.model

    async def complete(
        self,
        prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: Optional[float] = None,
    ) -> str:
        data = await self._post(
            {
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                "max_tokens": max_tokens,
                "temperature": DEFAULT_TEMPERATURE if temperature is None else temperature,
            }
        )

        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise ProviderError(f"{self.name} returned no choices", service=self.name)
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise ProviderError(f"{self.name} returned a choice without content", service=self.name)

        logger.info("[%s] Generated %d characters", self.name, len(content))
        usage = data.get("usage")
        if isinstance(usage, dict):
            logger.debug(
                "[%s] Tokens: %s prompt + %s completion = %s total",
                self.name,
                usage.get("prompt_tokens"),
                usage.get("completion_tokens"),
                usage.get("total_tokens"),
            )
        return content
