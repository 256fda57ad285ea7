"""Design reference parsing: URL -> (file key, optional node id)."""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote

from component_mcp.errors import InputError

_FILE_KEY = re.compile(r"/(?:file|design|proto)/([a-zA-Z0-9]+)")
_NODE_ID = re.compile(r"[?&#]node-id=([^&#]+)")


@dataclass(frozen=True)
class DesignReference:
    url: str
    file_key: str
    node_id: Optional[str] = None


def normalize_node_id(node_id: str) -> str:
    """Node ids are looked up hyphen-separated (``4:38`` -> ``4-38``)."""
    return node_id.replace(":", "-")


def parse_design_url(url: str) -> DesignReference:
    """Split a design URL into its file key and optional node id.

    Raises:
        InputError: If no file key segment can be found
    """
    text = (url or "").strip()
    match = _FILE_KEY.search(text)
    if not match:
        raise InputError(
            "Invalid Figma URL: could not extract file key",
            details={"design_url": text},
        )
    node_match = _NODE_ID.search(text)
    node_id = normalize_node_id(unquote(node_match.group(1))) if node_match else None
    return DesignReference(url=text, file_key=match.group(1), node_id=node_id or None)
