"""Request orchestration: sequences collaborators for each external operation.

Each method runs as one request. Errors from the design source, record store
or provider propagate unchanged; the tool layer adds operation context. Empty
catalogs, empty scans and zero confident matches return ``EmptyResult``.

Secondary writes (guide record, generation history) never fail a request:
their errors are logged at WARNING and returned in the payload's
``warnings`` list next to the artifact.
"""

import logging
import time
from typing import Any, Awaitable, Dict, List, Optional, Tuple, Union

from component_mcp.catalog.models import dedupe_by_name
from component_mcp.contracts import EmptyResult
from component_mcp.design.extractor import TreeExtractor
from component_mcp.design.references import DesignReference, parse_design_url
from component_mcp.errors import ComponentMCPError, ConfigurationError, NotFoundError
from component_mcp.generation.guide import GuideBuilder, format_guide_markdown
from component_mcp.generation.react import GenerationOptions, ReactGenerator
from component_mcp.matching.matcher import ComponentMatch, ComponentMatcher, filter_confident
from component_mcp.reports import (
    design_summary,
    format_analysis,
    format_component_details,
    format_generation,
    format_scan_summary,
    format_warnings,
)
from component_mcp.services import Services
from component_mcp.utils import MAX_ANALYSIS_RESULTS

logger = logging.getLogger("component-mcp.pipeline")

Outcome = Union[Dict[str, Any], EmptyResult]

SCAN_TOOL_HINT = "Run the 'scan_repository' tool first to load the component library."
MATCHING_TIPS = [
    'Use descriptive names in Figma (e.g., "Hero Section", "Primary Button")',
    "Ensure the design uses patterns that match your component library",
    "Check that components were scanned successfully",
]
PROVIDER_HINT = (
    "Set ANTHROPIC_API_KEY, or CUSTOM_AI_PROVIDER=true with CUSTOM_AI_URL and CUSTOM_AI_KEY"
)


def _catalog_empty() -> EmptyResult:
    return EmptyResult(
        reason="catalog_empty",
        message="No components found in the catalog.",
        hints=[SCAN_TOOL_HINT],
    )


def _no_matches(candidates: int) -> EmptyResult:
    return EmptyResult(
        reason="no_matches",
        message="No matching components found for this Figma design.",
        hints=list(MATCHING_TIPS),
        summary={"candidate_matches": candidates},
    )


class DesignPipeline:
    """Catalog scan, design analysis, guide and code generation."""

    def __init__(self, services: Services):
        self.services = services

    @property
    def extractor(self) -> TreeExtractor:
        traversal = self.services.traversal
        return TreeExtractor(max_depth=traversal.max_depth, max_nodes=traversal.max_nodes)

    async def fetch_design(self, reference: DesignReference, source: Any = None) -> Dict[str, Any]:
        source = source or self.services.design_source
        if reference.node_id:
            return await source.fetch_node(reference.file_key, reference.node_id)
        return await source.fetch_document(reference.file_key)

    async def match_design(self, design_url: str) -> Union[EmptyResult, Tuple[DesignReference, Dict[str, Any], List[ComponentMatch]]]:
        """Shared front half of analysis and guide generation."""
        reference = parse_design_url(design_url)
        catalog = await self.services.store.list_components()
        if not catalog:
            return _catalog_empty()

        node = await self.fetch_design(reference)
        traversal = self.services.traversal
        matcher = ComponentMatcher(
            catalog, max_depth=traversal.max_depth, max_nodes=traversal.max_nodes
        )
        matches = matcher.match_tree(node)
        logger.info(
            "Matched %s against %d components: %d candidate matches",
            reference.file_key,
            len(catalog),
            len(matches),
        )
        return reference, node, matches

    async def _secondary(self, label: str, write: Awaitable[str], warnings: List[str]) -> Optional[str]:
        try:
            return await write
        except ComponentMCPError as exc:
            logger.warning("%s failed: %s", label, exc.message)
            warnings.append(f"{label} failed: {exc.message}")
            return None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def scan_catalog(self) -> Outcome:
        scanner = self.services.scanner_factory()
        try:
            components = dedupe_by_name(await scanner.scan())
        finally:
            await scanner.close()

        if not components:
            return EmptyResult(
                reason="scan_empty",
                message=f"No components found in {scanner.repo_url}.",
                hints=[
                    "Components are read from src/components, components or lib/components",
                    "Component files must be .tsx/.jsx and start with an uppercase letter",
                ],
                summary={"repository": scanner.repo_url},
            )

        stored = await self.services.store.upsert_components(components)
        by_category: Dict[str, int] = {}
        for component in components:
            by_category[component.category.value] = by_category.get(component.category.value, 0) + 1

        return {
            "repository": scanner.repo_url,
            "total": stored,
            "by_category": by_category,
            "components": [
                {
                    "name": component.name,
                    "category": component.category.value,
                    "import_path": component.import_path,
                }
                for component in components
            ],
            "display": format_scan_summary(scanner.repo_url, components),
        }

    async def analyze_design(self, design_url: str) -> Outcome:
        matched = await self.match_design(design_url)
        if isinstance(matched, EmptyResult):
            return matched
        reference, node, matches = matched

        confident = filter_confident(matches)
        if not confident:
            return _no_matches(len(matches))

        shown = confident[:MAX_ANALYSIS_RESULTS]
        return {
            "design": {
                "file_key": reference.file_key,
                "node_id": reference.node_id,
                "name": node.get("name"),
            },
            "total_matches": len(confident),
            "matches": [match.model_dump() for match in shown],
            "truncated": len(confident) > len(shown),
            "display": format_analysis(shown, len(confident)),
        }

    async def generate_guide(self, design_url: str) -> Outcome:
        matched = await self.match_design(design_url)
        if isinstance(matched, EmptyResult):
            return matched
        reference, node, matches = matched

        if not filter_confident(matches):
            return _no_matches(len(matches))

        guide = GuideBuilder(library_name=self.services.library_name).build_guide(matches, node)
        markdown = format_guide_markdown(guide)

        warnings: List[str] = []
        guide_id = await self._secondary(
            "store implementation guide",
            self.services.store.store_guide(
                {
                    "figma_url": reference.url,
                    "figma_node_id": reference.node_id,
                    "detected_components": [
                        {"name": match.component_name, "confidence": match.confidence}
                        for match in matches
                    ],
                    "implementation_code": guide.full_code,
                    "customization_notes": "\n".join(guide.customization_notes),
                    "metadata": {"design_tokens": guide.design_tokens.model_dump()},
                }
            ),
            warnings,
        )

        return {
            "guide_id": guide_id,
            "guide": guide.model_dump(),
            "warnings": warnings,
            "display": markdown + format_warnings(warnings),
        }

    async def get_component_details(self, component_name: str) -> Dict[str, Any]:
        store = self.services.store
        component = await store.get_component(component_name)
        if component is None:
            available = [entry.name for entry in await store.list_components()]
            raise NotFoundError(
                f"Component '{component_name}' not found",
                details={
                    "component_name": component_name,
                    "available_components": available,
                    "hint": "Component names are case-sensitive.",
                },
            )

        return {
            "component": component.to_record(),
            "display": format_component_details(component),
        }

    async def generate_code(
        self,
        design_url: str,
        component_name: Optional[str] = None,
        include_typescript: bool = True,
        include_comments: bool = False,
        split_strategy: str = "auto",
    ) -> Dict[str, Any]:
        started = time.monotonic()
        provider = self.services.provider
        if provider is None:
            raise ConfigurationError(["ANTHROPIC_API_KEY"], hint=PROVIDER_HINT)
        # resolve every collaborator before the first network call
        store = self.services.store
        design_source = self.services.design_source

        reference = parse_design_url(design_url)
        node = await self.fetch_design(reference, design_source)
        catalog = await store.list_components()

        # saved before the provider call; left orphaned if generation fails
        design_id = await store.store_design(
            {
                "figma_url": reference.url,
                "file_key": reference.file_key,
                "node_id": reference.node_id,
                "design_name": node.get("name"),
                "raw_data": node,
            }
        )

        warnings: List[str] = []
        try:
            design = self.extractor.extract(node)
            components = await ReactGenerator(provider).generate_many(
                design,
                split_strategy,
                GenerationOptions(
                    component_name=component_name,
                    include_typescript=include_typescript,
                    include_comments=include_comments,
                ),
                catalog,
            )
            component = components[0]
            component_id = await store.store_generated_component(
                {
                    "figma_design_id": design_id,
                    "component_name": component.component_name,
                    "component_code": component.component_code,
                    "props_interface": component.props_interface,
                    "imports": component.imports,
                    "dependencies": component.dependencies,
                    "ai_model": component.ai_model,
                    "generation_prompt": component.generation_prompt,
                    "metadata": {
                        "design_tokens": design.design_tokens.to_dict(),
                        "complexity": component.estimated_complexity,
                    },
                }
            )
        except Exception as exc:
            await self._record_failure(design_id, exc, started, warnings)
            raise

        elapsed_ms = _elapsed_ms(started)
        await self._secondary(
            "store generation history",
            store.store_history(
                {
                    "figma_design_id": design_id,
                    "generated_component_id": component_id,
                    "success": True,
                    "generation_time_ms": elapsed_ms,
                }
            ),
            warnings,
        )
        logger.info("Generated %s in %dms", component.component_name, elapsed_ms)

        return {
            "design_id": design_id,
            "component_id": component_id,
            "component": component.to_dict(),
            "split_strategy": split_strategy,
            "generation_time_ms": elapsed_ms,
            "design_summary": design_summary(design),
            "warnings": warnings,
            "display": format_generation(component, design, elapsed_ms) + format_warnings(warnings),
        }

    async def _record_failure(
        self,
        design_id: str,
        exc: Exception,
        started: float,
        warnings: List[str],
    ) -> None:
        message = exc.message if isinstance(exc, ComponentMCPError) else str(exc)
        await self._secondary(
            "store generation history",
            self.services.store.store_history(
                {
                    "figma_design_id": design_id,
                    "success": False,
                    "error_message": message,
                    "generation_time_ms": _elapsed_ms(started),
                }
            ),
            warnings,
        )


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
