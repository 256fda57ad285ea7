"""Completion providers and provider selection."""

from typing import Optional

import httpx

from component_mcp.config import (
    CustomProviderConfig,
    HostedProviderConfig,
    NoProviderConfig,
    ProviderConfig,
)
from component_mcp.providers.base import CompletionProvider
from component_mcp.providers.custom import CustomProvider
from component_mcp.providers.hosted import HostedProvider


def build_provider(
    config: ProviderConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[CompletionProvider]:
    """Instantiate the provider a config selects; ``None`` for NoProviderConfig."""
    if isinstance(config, CustomProviderConfig):
        return CustomProvider(config, transport=transport)
    if isinstance(config, HostedProviderConfig):
        return HostedProvider(config, transport=transport)
    if isinstance(config, NoProviderConfig):
        return None
    raise TypeError(f"Unknown provider config: {type(config).__name__}")


__all__ = [
    "CompletionProvider",
    "CustomProvider",
    "HostedProvider",
    "build_provider",
]
