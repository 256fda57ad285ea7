"""Colour encoding between design-tool RGBA floats and hex strings."""

from typing import Any, Dict, Mapping


def _channel(value: Any) -> int:
    try:
        scaled = round(float(value) * 255)
    except (TypeError, ValueError):
        return 0
    return min(255, max(0, scaled))


def rgba_to_hex(color: Mapping[str, Any]) -> str:
    """Convert ``{r, g, b, a}`` floats in [0, 1] to ``#rrggbb`` or ``#rrggbbaa``.

    Alpha is appended only when it is below 1. Missing channels count as 0,
    missing alpha as 1.

    Examples:
        >>> rgba_to_hex({"r": 1, "g": 0, "b": 0, "a": 1})
        '#ff0000'
        >>> rgba_to_hex({"r": 0, "g": 0, "b": 0, "a": 0.5})
        '#00000080'
    """
    r = _channel(color.get("r", 0))
    g = _channel(color.get("g", 0))
    b = _channel(color.get("b", 0))
    hex_value = f"#{r:02x}{g:02x}{b:02x}"

    alpha = color.get("a", 1)
    try:
        alpha = float(alpha)
    except (TypeError, ValueError):
        alpha = 1.0
    if alpha < 1:
        hex_value += f"{_channel(alpha):02x}"
    return hex_value


def hex_to_rgba_approx(hex_value: str) -> Dict[str, float]:
    """Inverse of rgba_to_hex, exact to within 1/255 per channel.

    Raises:
        ValueError: If the string is not 6 or 8 hex digits after '#'
    """
    digits = hex_value.lstrip("#")
    if len(digits) not in (6, 8):
        raise ValueError(f"Unsupported hex colour: {hex_value!r}")
    channels = [int(digits[i:i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    r, g, b = channels[:3]
    a = channels[3] if len(channels) == 4 else 1.0
    return {"r": r, "g": g, "b": b, "a": a}
