"""Bounded iterative traversal over raw design-node trees.

Design documents are caller-supplied and may be arbitrarily deep, so tree
walks run on an explicit stack with depth and node-count ceilings instead of
recursing.
"""

from typing import Any, Dict, Iterator, List, Mapping, Tuple

from component_mcp.errors import InputError

DEFAULT_MAX_DEPTH = 64
DEFAULT_MAX_NODES = 5000


def children_of(node: Mapping[str, Any]) -> List[Dict[str, Any]]:
    children = node.get("children")
    if not isinstance(children, list):
        return []
    return [child for child in children if isinstance(child, Mapping)]


def walk(
    root: Mapping[str, Any],
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_nodes: int = DEFAULT_MAX_NODES,
) -> Iterator[Tuple[Mapping[str, Any], int]]:
    """Yield ``(node, depth)`` pairs in pre-order (parent before children).

    Raises:
        InputError: When the tree is deeper than ``max_depth`` or holds more
            than ``max_nodes`` nodes
    """
    stack: List[Tuple[Mapping[str, Any], int]] = [(root, 0)]
    visited = 0
    while stack:
        node, depth = stack.pop()
        if depth > max_depth:
            raise InputError(
                f"Design tree exceeds maximum depth of {max_depth}",
                details={"max_depth": max_depth, "node_id": node.get("id")},
            )
        visited += 1
        if visited > max_nodes:
            raise InputError(
                f"Design tree exceeds maximum of {max_nodes} nodes",
                details={"max_nodes": max_nodes},
            )
        yield node, depth
        for child in reversed(children_of(node)):
            stack.append((child, depth + 1))
