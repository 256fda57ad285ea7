"""Design-system component catalog: records and repository scanning."""

from component_mcp.catalog.models import (
    CatalogComponent,
    ComponentCategory,
    PropSpec,
    dedupe_by_name,
)
from component_mcp.catalog.scanner import (
    ComponentSourceParser,
    RepositoryScanner,
    TsxPatternParser,
)

__all__ = [
    "CatalogComponent",
    "ComponentCategory",
    "PropSpec",
    "dedupe_by_name",
    "ComponentSourceParser",
    "RepositoryScanner",
    "TsxPatternParser",
]
