"""Catalog model for design-system components.

A ``CatalogComponent`` is the normalized record of one reusable UI building
block: where to import it from, which props and variants it declares, and
which visual patterns and keywords it should be matched against.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional


class ComponentCategory(Enum):
    """Fixed set of catalog categories.

    Unknown values map to OTHER rather than failing, since records are
    produced by a static text scan.
    """

    NAVIGATION = "navigation"
    LAYOUT = "layout"
    FORMS = "forms"
    DISPLAY = "display"
    FEEDBACK = "feedback"
    TYPOGRAPHY = "typography"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ComponentCategory":
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class PropSpec:
    """Declared prop of a catalog component."""

    declared_type: str
    required: bool = False

    def to_record(self) -> Dict[str, Any]:
        return {"type": self.declared_type, "required": self.required}

    @classmethod
    def from_record(cls, raw: Any) -> "PropSpec":
        if isinstance(raw, Mapping):
            return cls(
                declared_type=str(raw.get("type") or raw.get("declared_type") or "unknown"),
                required=bool(raw.get("required", False)),
            )
        return cls(declared_type=str(raw) if raw is not None else "unknown")


@dataclass
class CatalogComponent:
    """Normalized record of a design-system component.

    Attributes:
        name: Unique component name within a catalog snapshot (upsert key)
        import_path: Module specifier used in import statements
            Examples: "@components/Button", "@elastic/eui/button"
        category: One of ComponentCategory
        description: One-line summary extracted from the source
        props: Prop name -> PropSpec, in declaration order
        variants: Variant axis -> ordered values, e.g. {"size": ["small", "large"]}
        visual_patterns: Pattern tags compared against detected node patterns
        figma_keywords: Lowercase tags compared against node-name keywords
        usage_example: Free-text snippet
        source_url: Link to the component source

    Usage:
        >>> button = CatalogComponent(
        ...     name="Button",
        ...     import_path="@components/Button",
        ...     visual_patterns=["button", "clickable"],
        ...     figma_keywords=["Button", "btn"],
        ... )
        >>> button.figma_keywords
        ['button', 'btn']
    """

    name: str
    import_path: str
    category: ComponentCategory = ComponentCategory.OTHER
    description: str = ""
    props: Dict[str, PropSpec] = field(default_factory=dict)
    variants: Dict[str, List[str]] = field(default_factory=dict)
    visual_patterns: List[str] = field(default_factory=list)
    figma_keywords: List[str] = field(default_factory=list)
    usage_example: str = ""
    source_url: str = ""

    def __post_init__(self):
        """Normalize loose inputs into the typed shape."""
        if not isinstance(self.category, ComponentCategory):
            self.category = ComponentCategory.parse(self.category)
        self.figma_keywords = _unique(k.strip().lower() for k in self.figma_keywords if k.strip())
        self.visual_patterns = _unique(self.visual_patterns)
        self.variants = {axis: list(values) for axis, values in self.variants.items()}

    def has_prop(self, name: str) -> bool:
        return name in self.props

    def variant_values(self, axis: str) -> List[str]:
        return self.variants.get(axis, [])

    def has_variant_axis(self, axis: str) -> bool:
        return bool(self.variants.get(axis))

    def to_record(self) -> Dict[str, Any]:
        """Convert to the record-store row shape."""
        return {
            "component_name": self.name,
            "component_path": self.import_path,
            "description": self.description,
            "category": self.category.value,
            "props": {name: spec.to_record() for name, spec in self.props.items()},
            "variants": self.variants,
            "visual_patterns": self.visual_patterns,
            "figma_keywords": self.figma_keywords,
            "usage_example": self.usage_example,
            "repo_url": self.source_url,
        }

    @classmethod
    def from_record(cls, row: Mapping[str, Any]) -> "CatalogComponent":
        """Build from a record-store row; absent fields become empty values."""
        raw_props = row.get("props") or {}
        raw_variants = row.get("variants") or {}
        return cls(
            name=str(row.get("component_name") or row.get("name") or ""),
            import_path=str(row.get("component_path") or row.get("import_path") or ""),
            category=ComponentCategory.parse(row.get("category")),
            description=str(row.get("description") or ""),
            props={str(k): PropSpec.from_record(v) for k, v in raw_props.items()},
            variants={
                str(axis): [str(v) for v in (values or [])]
                for axis, values in raw_variants.items()
            },
            visual_patterns=[str(p) for p in row.get("visual_patterns") or []],
            figma_keywords=[str(k) for k in row.get("figma_keywords") or []],
            usage_example=str(row.get("usage_example") or ""),
            source_url=str(row.get("repo_url") or row.get("source_url") or ""),
        )


def dedupe_by_name(components: Iterable[CatalogComponent]) -> List[CatalogComponent]:
    """Apply upsert-by-name semantics: the last record for a name wins, first position kept."""
    by_name: Dict[str, CatalogComponent] = {}
    for component in components:
        by_name[component.name] = component
    return list(by_name.values())


def _unique(values: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)
