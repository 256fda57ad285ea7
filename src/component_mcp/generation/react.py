"""AI-assisted React component generation from an extracted design."""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from component_mcp.catalog.models import CatalogComponent
from component_mcp.design.models import Complexity, ExtractedDesign
from component_mcp.errors import InputError
from component_mcp.generation.prompts import build_generation_prompt
from component_mcp.providers.base import DEFAULT_MAX_TOKENS, CompletionProvider

logger = logging.getLogger("component-mcp.generation")

DEPENDENCIES = ("react", "lucide-react")
SPLIT_STRATEGIES = ("auto", "none")

_CODE_BLOCK = re.compile(r"```(?:tsx|jsx|typescript|javascript)?\n([\s\S]+?)\n```")
_IMPORT_LINE = re.compile(r"^import .+;$", re.MULTILINE)
_NON_NAME_CHARS = re.compile(r"[^a-zA-Z0-9\s]")


@dataclass(frozen=True)
class GenerationOptions:
    component_name: Optional[str] = None
    include_typescript: bool = True
    include_comments: bool = False
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: Optional[float] = None


@dataclass
class ParsedCode:
    code: str
    props_interface: str
    imports: List[str] = field(default_factory=list)


@dataclass
class GeneratedComponent:
    component_name: str
    component_code: str
    props_interface: str
    imports: List[str]
    dependencies: List[str]
    ai_model: str
    generation_prompt: str
    estimated_complexity: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component_name": self.component_name,
            "component_code": self.component_code,
            "props_interface": self.props_interface,
            "imports": self.imports,
            "dependencies": self.dependencies,
            "metadata": {
                "ai_model": self.ai_model,
                "generation_prompt": self.generation_prompt,
                "estimated_complexity": self.estimated_complexity,
            },
        }


def sanitize_component_name(name: str) -> str:
    """Turn a design node name into a PascalCase component identifier.

    Examples:
        >>> sanitize_component_name("hero section / v2")
        'HeroSectionV2'
        >>> sanitize_component_name("404 page")
        'Component404Page'
        >>> sanitize_component_name("***")
        'Component'
    """
    words = _NON_NAME_CHARS.sub("", name or "").split()
    sanitized = "".join(word[:1].upper() + word[1:].lower() for word in words)
    if not sanitized:
        return "Component"
    if not ("A" <= sanitized[0] <= "Z"):
        sanitized = "Component" + sanitized
    return sanitized


def extract_block(code: str, header: re.Pattern) -> str:
    """Return ``header`` plus its brace-balanced body, or "" when absent."""
    match = header.search(code)
    if not match:
        return ""
    start = match.start()
    open_index = code.find("{", match.end() - 1)
    if open_index < 0:
        return ""
    depth = 0
    for index in range(open_index, len(code)):
        char = code[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return code[start:index + 1]
    return ""


def parse_response(text: str, component_name: str) -> ParsedCode:
    """Split a completion into code, import lines and the props interface.

    The first fenced code block is used when present, otherwise the raw text.
    Imports and props interface are best effort and may come back empty.
    """
    match = _CODE_BLOCK.search(text)
    code = match.group(1) if match else text

    imports = [line.strip() for line in _IMPORT_LINE.findall(code)]
    header = re.compile(rf"interface\s+{re.escape(component_name)}Props\s*{{")
    props_interface = extract_block(code, header)

    return ParsedCode(code=code.strip(), props_interface=props_interface.strip(), imports=imports)


class ReactGenerator:
    """Builds the generation prompt, calls the provider and parses the reply."""

    def __init__(self, provider: CompletionProvider):
        self.provider = provider

    def build_prompt(
        self,
        design: ExtractedDesign,
        component_name: str,
        options: GenerationOptions,
        catalog: Optional[Sequence[CatalogComponent]] = None,
    ) -> str:
        return build_generation_prompt(
            component_name,
            design.component_tree,
            design.design_tokens,
            design.metadata,
            include_typescript=options.include_typescript,
            include_comments=options.include_comments,
            catalog=catalog,
        )

    async def generate(
        self,
        design: ExtractedDesign,
        options: Optional[GenerationOptions] = None,
        catalog: Optional[Sequence[CatalogComponent]] = None,
    ) -> GeneratedComponent:
        options = options or GenerationOptions()
        component_name = options.component_name or sanitize_component_name(design.name)
        prompt = self.build_prompt(design, component_name, options, catalog)

        logger.info(
            "Generating %s via %s (%d catalog components in prompt)",
            component_name,
            self.provider.name,
            len(catalog or ()),
        )
        text = await self.provider.complete(
            prompt,
            max_tokens=options.max_tokens,
            temperature=options.temperature,
        )
        parsed = parse_response(text, component_name)

        return GeneratedComponent(
            component_name=component_name,
            component_code=parsed.code,
            props_interface=parsed.props_interface,
            imports=parsed.imports,
            dependencies=list(DEPENDENCIES),
            ai_model=self.provider.model,
            generation_prompt=prompt,
            estimated_complexity=design.metadata.complexity.value,
        )

    async def generate_many(
        self,
        design: ExtractedDesign,
        split_strategy: str = "auto",
        options: Optional[GenerationOptions] = None,
        catalog: Optional[Sequence[CatalogComponent]] = None,
    ) -> List[GeneratedComponent]:
        """Generate the components for a design.

        Both strategies currently return exactly one component; ``auto`` on a
        non-simple design is logged so callers can see splitting was skipped.
        """
        if split_strategy not in SPLIT_STRATEGIES:
            raise InputError(f"Unknown split strategy: {split_strategy!r}")
        if split_strategy == "auto" and design.metadata.complexity is not Complexity.SIMPLE:
            logger.debug(
                "Split strategy 'auto' on a %s design: generating a single component",
                design.metadata.complexity.value,
            )
        return [await self.generate(design, options, catalog)]
