"""Normalized design models produced by the tree extractor."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

Dimension = Union[float, Literal["auto", "full"]]


class NodeRole(Enum):
    """Inferred role of a design node."""

    CONTAINER = "container"
    BUTTON = "button"
    INPUT = "input"
    TEXT = "text"
    IMAGE = "image"
    CARD = "card"
    LIST = "list"
    NAVIGATION = "navigation"
    UNKNOWN = "unknown"


class Complexity(Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


@dataclass(frozen=True)
class Padding:
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0


@dataclass
class LayoutInfo:
    display: Literal["flex", "grid", "block"] = "block"
    direction: Optional[Literal["row", "column"]] = None
    justify_content: Optional[str] = None
    align_items: Optional[str] = None
    gap: Optional[float] = None
    padding: Optional[Padding] = None
    width: Optional[Dimension] = None
    height: Optional[Dimension] = None
    wrap: Optional[bool] = None


@dataclass
class StyleInfo:
    background_color: Optional[str] = None
    color: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[float] = None
    font_family: Optional[str] = None
    border_radius: Optional[float] = None
    border_width: Optional[float] = None
    border_color: Optional[str] = None
    box_shadow: Optional[str] = None
    opacity: Optional[float] = None


@dataclass
class ComponentNode:
    """One normalized node; the tree mirrors the source design tree 1:1."""

    id: str
    name: str
    type: str
    role: NodeRole
    layout: LayoutInfo
    styles: StyleInfo
    content: Optional[str] = None
    children: List["ComponentNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "role": self.role.value,
            "layout": _compact(asdict(self.layout)),
            "styles": _compact(asdict(self.styles)),
            "content": self.content,
            "children": [child.to_dict() for child in self.children],
        }

    def count(self) -> int:
        total = 0
        stack = [self]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.children)
        return total


@dataclass
class DesignTokens:
    """Deduplicated style primitives; numeric lists are strictly ascending."""

    colors: Dict[str, str] = field(default_factory=dict)
    spacing: List[float] = field(default_factory=list)
    font_sizes: List[float] = field(default_factory=list)
    border_radii: List[float] = field(default_factory=list)
    shadows: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def is_empty(self) -> bool:
        return not (self.colors or self.spacing or self.font_sizes or self.border_radii or self.shadows)


@dataclass(frozen=True)
class DesignMetadata:
    total_nodes: int
    has_interactive_elements: bool
    has_images: bool
    has_text: bool
    complexity: Complexity

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["complexity"] = self.complexity.value
        return data


@dataclass
class ExtractedDesign:
    node: Dict[str, Any]
    component_tree: ComponentNode
    design_tokens: DesignTokens
    metadata: DesignMetadata

    @property
    def name(self) -> str:
        return str(self.node.get("name") or "")


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
