"""Structural-sharing edits of resource trees.

No function here mutates its input.  Each returns a new parent mapping with a
new child list; every untouched child (and subtree) is the very same object
as before, so unrelated subtrees stay shareable with other readers.  When an
edit changes nothing, the original mapping is returned.

Removing a child only removes it from one parent.  Whether a referenced
resource (a Manifest listed by a Collection, say) should also be deleted
elsewhere is the caller's decision.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from iiif_tree.schema.containment import is_valid_child_type
from iiif_tree.schema.templates import create_language_map, generate_id
from iiif_tree.tree.nodes import (
    CHILD_COLLECTIONS,
    ChildCollection,
    Node,
    ResourceType,
    get_collection,
    node_id,
    node_type,
)
from iiif_tree.tree.traversal import walk

__all__ = [
    "ContainmentError",
    "add_canvas_to_manifest",
    "add_child",
    "add_manifest_to_collection",
    "add_range_to_manifest",
    "collection_contains_manifest",
    "create_nested_range",
    "create_range",
    "flatten_range_canvas_ids",
    "manifest_contains_canvas",
    "remove_canvas_from_manifest",
    "remove_child",
    "remove_manifest_from_collection",
    "reorder_children",
    "reorder_manifest_canvases",
    "replace_node",
]

_ITEMS = ChildCollection.ITEMS


class ContainmentError(ValueError):
    """Raised by a checked edit that would place a child where it may not go."""


# ---------------------------------------------------------------------------
# Generic edits
# ---------------------------------------------------------------------------


def add_child(
    parent: Node,
    child: Node,
    index: int | None = None,
    *,
    collection: str = _ITEMS,
    check_containment: bool = False,
) -> dict[str, Any]:
    """Return a copy of ``parent`` with ``child`` inserted into ``collection``.

    Args:
        parent: The node to extend.
        child: The node to insert.
        index: Insert position, as for ``list.insert``.  None appends.
        collection: "items", "annotations" or "structures".
        check_containment: Refuse placements the containment rules forbid.

    Raises:
        ContainmentError: Only when ``check_containment`` is set and the
            child type may not appear in ``parent``'s ``collection``.
    """
    if check_containment and not is_valid_child_type(
        node_type(parent), node_type(child), collection
    ):
        msg = (
            f"{node_type(child)} cannot be placed in {collection} "
            f"of {node_type(parent)}"
        )
        raise ContainmentError(msg)

    children = list(get_collection(parent, collection) or ())
    if index is None:
        children.append(child)
    else:
        children.insert(index, child)
    return {**parent, str(collection): children}


def remove_child(parent: Node, child_id: str, *, collection: str = _ITEMS) -> Node:
    """Return ``parent`` without the entries of ``collection`` whose id is ``child_id``."""
    children = get_collection(parent, collection)
    if not children:
        return parent
    kept = [c for c in children if node_id(c) != child_id]
    if len(kept) == len(children):
        return parent
    return {**parent, str(collection): kept}


def reorder_children(
    parent: Node, new_order: Iterable[str], *, collection: str = _ITEMS
) -> Node:
    """Return ``parent`` with ``collection`` rearranged to follow ``new_order``.

    Ids in ``new_order`` that match no child are ignored, and children whose
    id is not listed are dropped.
    """
    children = get_collection(parent, collection)
    if children is None:
        return parent
    by_id: dict[str, Any] = {}
    for child in children:
        cid = node_id(child)
        if cid is not None:
            by_id.setdefault(cid, child)
    reordered = [by_id[cid] for cid in new_order if cid in by_id]
    return {**parent, str(collection): reordered}


def _swap_child(parent: Node, old: Node, new: Node) -> Node:
    for collection in CHILD_COLLECTIONS:
        children = get_collection(parent, collection)
        if not children:
            continue
        for position, child in enumerate(children):
            if child is old:
                replaced = [*children[:position], new, *children[position + 1 :]]
                return {**parent, str(collection): replaced}
    return parent


def replace_node(root: Node, target_id: str, replacement: Node) -> Node:
    """Return a copy of ``root`` in which the first occurrence of ``target_id``
    is replaced by ``replacement``.

    Only the ancestors of that occurrence are copied (path copying).  When the
    id does not occur, ``root`` itself is returned.
    """
    for occurrence in walk(root):
        if node_id(occurrence.node) != target_id:
            continue
        chain = (*occurrence.ancestors, occurrence.node)
        updated = replacement
        for depth in range(len(chain) - 1, 0, -1):
            updated = _swap_child(chain[depth - 1], chain[depth], updated)
        return updated
    return root


# ---------------------------------------------------------------------------
# Collections and Manifests
# ---------------------------------------------------------------------------


def collection_contains_manifest(collection: Node, manifest_id: str) -> bool:
    items = get_collection(collection, _ITEMS) or ()
    return any(node_id(item) == manifest_id for item in items)


def add_manifest_to_collection(collection: Node, manifest: Node) -> Node:
    """Add a reference to ``manifest``; a Manifest already listed is not added twice."""
    manifest_id = node_id(manifest)
    if manifest_id is not None and collection_contains_manifest(collection, manifest_id):
        return collection
    return add_child(collection, manifest)


def remove_manifest_from_collection(collection: Node, manifest_id: str) -> Node:
    """Drop the reference only; the Manifest itself is untouched."""
    return remove_child(collection, manifest_id)


def manifest_contains_canvas(manifest: Node, canvas_id: str) -> bool:
    items = get_collection(manifest, _ITEMS) or ()
    return any(node_id(item) == canvas_id for item in items)


def add_canvas_to_manifest(
    manifest: Node, canvas: Node, index: int | None = None
) -> dict[str, Any]:
    return add_child(manifest, canvas, index)


def remove_canvas_from_manifest(manifest: Node, canvas_id: str) -> Node:
    return remove_child(manifest, canvas_id)


def reorder_manifest_canvases(manifest: Node, new_order: Iterable[str]) -> Node:
    return reorder_children(manifest, new_order)


def add_range_to_manifest(manifest: Node, range_node: Node) -> dict[str, Any]:
    return add_child(manifest, range_node, collection=ChildCollection.STRUCTURES)


# ---------------------------------------------------------------------------
# Ranges
# ---------------------------------------------------------------------------


def create_range(
    label: str,
    canvas_ids: Iterable[str],
    *,
    behavior: Sequence[str] | None = None,
    range_id: str | None = None,
    base_url: str | None = None,
) -> dict[str, Any]:
    """Build a Range whose items reference the given Canvases, in order."""
    range_node: dict[str, Any] = {
        "id": range_id or generate_id(ResourceType.RANGE, base_url),
        "type": str(ResourceType.RANGE),
        "label": create_language_map(label),
        "items": [{"id": cid, "type": str(ResourceType.CANVAS)} for cid in canvas_ids],
    }
    if behavior:
        range_node["behavior"] = list(behavior)
    return range_node


def create_nested_range(
    label: str,
    child_ranges: Iterable[Node],
    *,
    behavior: Sequence[str] | None = None,
    range_id: str | None = None,
    base_url: str | None = None,
) -> dict[str, Any]:
    """Build a Range whose items are the given sub-Ranges."""
    range_node: dict[str, Any] = {
        "id": range_id or generate_id(ResourceType.RANGE, base_url),
        "type": str(ResourceType.RANGE),
        "label": create_language_map(label),
        "items": list(child_ranges),
    }
    if behavior:
        range_node["behavior"] = list(behavior)
    return range_node


def flatten_range_canvas_ids(range_node: Node) -> list[str]:
    """Return every Canvas id a Range references, descending into sub-Ranges.

    Bare string entries are taken as Canvas ids.  A sub-Range that repeats an
    enclosing Range's id is not entered again.
    """
    ids: list[str] = []

    def collect(items: list[Any], enclosing: tuple[str, ...]) -> None:
        for item in items:
            if isinstance(item, str):
                ids.append(item)
                continue
            kind, iid = node_type(item), node_id(item)
            if kind == ResourceType.CANVAS and iid is not None:
                ids.append(iid)
            elif kind == ResourceType.RANGE and iid not in enclosing:
                collect(get_collection(item, _ITEMS) or [], (*enclosing, iid or ""))

    collect(get_collection(range_node, _ITEMS) or [], (node_id(range_node) or "",))
    return ids
