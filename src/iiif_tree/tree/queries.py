"""Point queries over a resource tree that need no pre-built index.

Every function here is total: a missing node yields None or an empty list,
never an exception.  ``find_node_by_id`` and ``get_path_to_node`` search every
occurrence directly (first match in pre-order wins); the type finders go
through the deduplicating ``traverse`` and so report each unique id once.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping

from iiif_tree.tree.nodes import (
    Node,
    ResourceType,
    get_children,
    get_collection,
    node_id,
    node_type,
)
from iiif_tree.tree.traversal import TraversalContext, traverse, walk

__all__ = [
    "count_resources_by_type",
    "find_all_of_type",
    "find_canvas_parent",
    "find_collections_containing",
    "find_node_by_id",
    "find_parent",
    "flatten_tree",
    "get_all_canvases",
    "get_all_collections",
    "get_all_leaf_nodes",
    "get_all_manifests",
    "get_all_ranges",
    "get_path_to_node",
]


def find_node_by_id(root: Node, resource_id: str) -> Node | None:
    """Return the first node (pre-order) whose id equals ``resource_id``."""
    for occurrence in walk(root):
        if node_id(occurrence.node) == resource_id:
            return occurrence.node
    return None


def find_all_of_type(root: Node, resource_type: str) -> list[Node]:
    """Return every uniquely-identified node whose raw type matches, in traversal order."""

    def match(node: Node, _context: TraversalContext) -> Node | None:
        return node if node_type(node) == resource_type else None

    return traverse(root, match)


def flatten_tree(root: Node) -> list[Node]:
    """Return every visited node in traversal order."""
    return traverse(root, lambda node, _context: node)


def find_parent(root: Node, child_id: str) -> Node | None:
    """Return the first node in traversal order that lists ``child_id`` as a child."""
    for node in flatten_tree(root):
        if any(node_id(child) == child_id for child in get_children(node)):
            return node
    return None


def get_path_to_node(root: Node, target_id: str) -> list[Node]:
    """Return the ancestor nodes from ``root`` down to (excluding) ``target_id``.

    Empty when the target is the root itself or does not occur in the tree.
    """
    for occurrence in walk(root):
        if node_id(occurrence.node) == target_id:
            return list(occurrence.ancestors)
    return []


def get_all_canvases(root: Node) -> list[Node]:
    return find_all_of_type(root, ResourceType.CANVAS)


def get_all_manifests(root: Node) -> list[Node]:
    return find_all_of_type(root, ResourceType.MANIFEST)


def get_all_collections(root: Node) -> list[Node]:
    return find_all_of_type(root, ResourceType.COLLECTION)


def get_all_ranges(root: Node) -> list[Node]:
    return find_all_of_type(root, ResourceType.RANGE)


def get_all_leaf_nodes(root: Node) -> list[Node]:
    """Return visited nodes that have no children at all."""

    def leaf(node: Node, _context: TraversalContext) -> Node | None:
        return None if get_children(node) else node

    return traverse(root, leaf)


def find_collections_containing(root: Node, target_id: str) -> list[Node]:
    """Return the Collections whose ``items`` directly list ``target_id``."""
    return [
        node
        for node in get_all_collections(root)
        if any(
            isinstance(child, Mapping) and node_id(child) == target_id
            for child in get_collection(node, "items") or ()
        )
    ]


def find_canvas_parent(root: Node, canvas_id: str) -> Node | None:
    """Return the Manifest that owns the Canvas ``canvas_id``, if any."""
    for manifest in get_all_manifests(root):
        items = manifest.get("items")
        if isinstance(items, list) and any(
            isinstance(canvas, Mapping) and node_id(canvas) == canvas_id
            for canvas in items
        ):
            return manifest
    return None


def count_resources_by_type(root: Node) -> dict[str, int]:
    """Count every occurrence (not just unique ids) of each raw type."""
    counts: Counter[str] = Counter(node_type(o.node) or "" for o in walk(root))
    return dict(counts)
