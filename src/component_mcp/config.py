"""Runtime configuration for Component MCP server."""

from dataclasses import dataclass
from typing import Literal, Union
import os

from component_mcp.errors import ConfigurationError


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def require(**values: str | None) -> None:
    """Raise ConfigurationError listing every variable whose value is empty."""
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigurationError(missing)


@dataclass(frozen=True)
class FigmaConfig:
    access_token: str
    api_base: str
    timeout_s: float


@dataclass(frozen=True)
class StoreConfig:
    url: str
    api_key: str
    timeout_s: float


@dataclass(frozen=True)
class RepositoryConfig:
    owner: str
    name: str
    token: str | None
    import_root: str


@dataclass(frozen=True)
class TraversalConfig:
    max_depth: int
    max_nodes: int


# Completion provider selection is a tagged union; pipeline code branches on `kind`.


@dataclass(frozen=True)
class NoProviderConfig:
    kind: Literal["none"] = "none"


@dataclass(frozen=True)
class HostedProviderConfig:
    api_key: str
    model: str
    api_url: str
    timeout_s: float
    kind: Literal["hosted"] = "hosted"


@dataclass(frozen=True)
class CustomProviderConfig:
    api_url: str
    api_key: str
    provider_name: str
    model: str
    timeout_s: float
    kind: Literal["custom"] = "custom"


ProviderConfig = Union[NoProviderConfig, HostedProviderConfig, CustomProviderConfig]


def get_figma_config() -> FigmaConfig:
    """Load design-file API config from environment variables."""
    token = _env_str("FIGMA_ACCESS_TOKEN")
    require(FIGMA_ACCESS_TOKEN=token)
    return FigmaConfig(
        access_token=token or "",
        api_base=os.getenv("COMPONENT_MCP_FIGMA_API", "https://api.figma.com/v1"),
        timeout_s=max(1.0, _env_float("COMPONENT_MCP_FIGMA_TIMEOUT_S", 30.0)),
    )


def get_store_config() -> StoreConfig:
    """Load record store config from environment variables."""
    url = _env_str("SUPABASE_URL")
    key = _env_str("SUPABASE_ANON_KEY")
    require(SUPABASE_URL=url, SUPABASE_ANON_KEY=key)
    return StoreConfig(
        url=(url or "").rstrip("/"),
        api_key=key or "",
        timeout_s=max(1.0, _env_float("COMPONENT_MCP_STORE_TIMEOUT_S", 15.0)),
    )


def get_repository_config() -> RepositoryConfig:
    """Load component repository config used by the catalog scan."""
    owner = _env_str("REPO_OWNER")
    name = _env_str("REPO_NAME")
    require(REPO_OWNER=owner, REPO_NAME=name)
    return RepositoryConfig(
        owner=owner or "",
        name=name or "",
        token=_env_str("GITHUB_TOKEN"),
        import_root=os.getenv("COMPONENT_MCP_IMPORT_ROOT", "@components"),
    )


def get_traversal_config() -> TraversalConfig:
    """Load tree-walk ceilings from environment variables."""
    return TraversalConfig(
        max_depth=max(1, _env_int("COMPONENT_MCP_MAX_DEPTH", 64)),
        max_nodes=max(1, _env_int("COMPONENT_MCP_MAX_NODES", 5000)),
    )


def get_provider_config() -> ProviderConfig:
    """Select the completion provider from environment variables.

    ``CUSTOM_AI_PROVIDER=true`` selects the OpenAI-compatible endpoint and
    requires ``CUSTOM_AI_URL`` and ``CUSTOM_AI_KEY``. Otherwise a present
    ``ANTHROPIC_API_KEY`` selects the hosted provider. With neither, code
    generation is unavailable.
    """
    timeout_s = max(1.0, _env_float("COMPONENT_MCP_PROVIDER_TIMEOUT_S", 120.0))
    if _env_bool("CUSTOM_AI_PROVIDER", False):
        url = _env_str("CUSTOM_AI_URL")
        key = _env_str("CUSTOM_AI_KEY")
        require(CUSTOM_AI_URL=url, CUSTOM_AI_KEY=key)
        return CustomProviderConfig(
            api_url=url or "",
            api_key=key or "",
            provider_name=_env_str("CUSTOM_AI_NAME") or "CustomAI",
            model=_env_str("CUSTOM_AI_MODEL") or "gpt-4",
            timeout_s=timeout_s,
        )

    api_key = _env_str("ANTHROPIC_API_KEY")
    if api_key:
        return HostedProviderConfig(
            api_key=api_key,
            model=_env_str("COMPONENT_MCP_HOSTED_MODEL") or "claude-3-5-sonnet-20241022",
            api_url=os.getenv("COMPONENT_MCP_HOSTED_URL", "https://api.anthropic.com/v1/messages"),
            timeout_s=timeout_s,
        )
    return NoProviderConfig()
