"""Collaborator wiring for the tool layer.

Each collaborator is built lazily from its own config section, so a missing
credential only fails the tools that need it (``ConfigurationError`` raised
at first use, before any core logic runs).
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional

from component_mcp.catalog.scanner import RepositoryScanner
from component_mcp.config import (
    ProviderConfig,
    TraversalConfig,
    get_figma_config,
    get_provider_config,
    get_repository_config,
    get_store_config,
    get_traversal_config,
)
from component_mcp.integrations import FigmaClient, RecordStore
from component_mcp.providers import CompletionProvider, build_provider

logger = logging.getLogger("component-mcp.services")

ScannerFactory = Callable[[], RepositoryScanner]


def default_scanner() -> RepositoryScanner:
    config = get_repository_config()
    return RepositoryScanner(
        config.owner,
        config.name,
        token=config.token,
        import_root=config.import_root,
    )


class Services:
    """Holds the design source, record store, provider and scanner factory.

    Anything passed explicitly is used as-is; the rest is created from
    environment configuration on first access.
    """

    def __init__(
        self,
        *,
        store: Any = None,
        design_source: Any = None,
        provider: Optional[CompletionProvider] = None,
        provider_config: Optional[ProviderConfig] = None,
        scanner_factory: Optional[ScannerFactory] = None,
        traversal: Optional[TraversalConfig] = None,
        library_name: str = "Design System",
    ) -> None:
        self._store = store
        self._design_source = design_source
        self._provider = provider
        self._provider_config = provider_config
        self._provider_resolved = provider is not None
        self.scanner_factory = scanner_factory or default_scanner
        self.traversal = traversal or get_traversal_config()
        self.library_name = library_name

    @property
    def store(self) -> Any:
        if self._store is None:
            config = get_store_config()
            self._store = RecordStore(config.url, config.api_key, timeout_s=config.timeout_s)
        return self._store

    @property
    def design_source(self) -> Any:
        if self._design_source is None:
            config = get_figma_config()
            self._design_source = FigmaClient(
                config.access_token,
                api_base=config.api_base,
                timeout_s=config.timeout_s,
            )
        return self._design_source

    @property
    def provider(self) -> Optional[CompletionProvider]:
        """Configured completion provider, or None when generation is unavailable."""
        if not self._provider_resolved:
            config = self._provider_config or get_provider_config()
            self._provider = build_provider(config)
            self._provider_resolved = True
            logger.info("Completion provider: %s", config.kind)
        return self._provider

    async def close(self) -> None:
        closers: List[Any] = [self._store, self._design_source, self._provider]
        for collaborator in closers:
            close = getattr(collaborator, "close", None)
            if close is None:
                continue
            try:
                await close()
            except Exception as exc:
                logger.debug("Collaborator cleanup skipped: %s", exc)


_services: Optional[Services] = None
_services_lock = asyncio.Lock()


async def get_services() -> Services:
    """Return the global services instance with lazy initialization."""
    global _services
    async with _services_lock:
        if _services is None:
            _services = Services()
        return _services


def set_services(services: Optional[Services]) -> None:
    """Replace the global services instance (tests inject fakes here)."""
    global _services
    _services = services


async def close_services() -> None:
    """Close every collaborator the global services instance created."""
    global _services
    async with _services_lock:
        if _services is None:
            return
        services = _services
        _services = None
    await services.close()
