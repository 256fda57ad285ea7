"""Validation models and utilities for Component MCP tools."""

from typing import Annotated, Literal, Optional

from pydantic import Field
from pydantic.functional_validators import AfterValidator


# Confidence thresholds
MATCH_THRESHOLD = 0.3
CONFIDENT_THRESHOLD = 0.5

# Analysis output
MAX_ANALYSIS_RESULTS = 10

# Component name constraints
COMPONENT_NAME_MAX_LENGTH = 120


def validate_non_empty_string(value: str) -> str:
    """Validate that a string is not empty after stripping whitespace."""
    stripped = value.strip()
    if not stripped:
        raise ValueError("Value cannot be empty or whitespace only")
    return stripped


def validate_component_name(value: str) -> str:
    """Validate a catalog component name."""
    stripped = validate_non_empty_string(value)
    if len(stripped) > COMPONENT_NAME_MAX_LENGTH:
        raise ValueError(f"component name is too long (max {COMPONENT_NAME_MAX_LENGTH} chars)")
    return stripped


def validate_optional_component_name(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return validate_component_name(value)


# Design file URL
DesignUrl = Annotated[
    str,
    AfterValidator(validate_non_empty_string),
    Field(
        ...,
        min_length=1,
        description=(
            "Full Figma URL with optional node-id parameter, e.g. "
            "'https://www.figma.com/design/ABC123/Design?node-id=4-38'."
        ),
    ),
]

ComponentName = Annotated[
    str,
    AfterValidator(validate_component_name),
    Field(..., min_length=1, description="Name of the component (e.g. 'Button', 'Hero', 'Card'). Case-sensitive."),
]

OptionalComponentName = Annotated[
    Optional[str],
    AfterValidator(validate_optional_component_name),
    Field(
        default=None,
        description="Custom component name (derived from the design node name when omitted)",
    ),
]

IncludeTypeScript = Annotated[
    bool,
    Field(default=True, description="Generate TypeScript code"),
]

IncludeComments = Annotated[
    bool,
    Field(default=False, description="Include code comments"),
]

SplitStrategy = Annotated[
    Literal["auto", "none"],
    Field(
        default="auto",
        description="Component splitting strategy. Both values currently produce one component.",
    ),
]
