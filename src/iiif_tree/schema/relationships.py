"""Relationship classifier: ownership vs. reference between parent and child types.

Ownership means the child's lifecycle is bound to the parent (a Manifest's
Canvases).  Reference means the child is independent and may be listed by
several parents (a Manifest listed by two Collections, or a Canvas pointed at
by several Ranges).  Removing a referenced child from one parent must never
delete it; that decision belongs to the caller.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType

from iiif_tree.tree.nodes import Node, ResourceType, node_id, node_type
from iiif_tree.tree.queries import find_node_by_id
from iiif_tree.tree.traversal import walk

__all__ = [
    "RelationshipType",
    "build_reference_map",
    "can_have_multiple_parents",
    "get_referencing_collections",
    "get_relationship_type",
    "is_standalone_type",
]


class RelationshipType(StrEnum):
    REFERENCE = "reference"
    OWNERSHIP = "ownership"
    NONE = "none"


_T = ResourceType
_REF = RelationshipType.REFERENCE
_OWN = RelationshipType.OWNERSHIP

_RELATIONSHIPS: MappingProxyType[tuple[str, str], RelationshipType] = MappingProxyType(
    {
        (_T.COLLECTION, _T.MANIFEST): _REF,
        (_T.COLLECTION, _T.COLLECTION): _REF,
        (_T.MANIFEST, _T.CANVAS): _OWN,
        (_T.CANVAS, _T.ANNOTATION_PAGE): _OWN,
        (_T.ANNOTATION_PAGE, _T.ANNOTATION): _OWN,
        (_T.RANGE, _T.CANVAS): _REF,
        (_T.RANGE, _T.RANGE): _REF,
    }
)

_MULTI_PARENT = frozenset({_T.MANIFEST, _T.CANVAS})
_STANDALONE = frozenset({_T.MANIFEST, _T.COLLECTION})


def get_relationship_type(parent_type: str | None, child_type: str) -> RelationshipType:
    """Classify the edge ``parent_type -> child_type``.

    No parent means ``NONE``; pairs outside the table default to ownership.
    """
    if not parent_type:
        return RelationshipType.NONE
    return _RELATIONSHIPS.get((parent_type, child_type), _OWN)


def can_have_multiple_parents(resource_type: str) -> bool:
    return resource_type in _MULTI_PARENT


def is_standalone_type(resource_type: str) -> bool:
    """Manifests and Collections may exist without any parent."""
    return resource_type in _STANDALONE


def build_reference_map(root: Node) -> dict[str, list[str]]:
    """Map each Collection/Manifest id to the ids of the Collections listing it.

    Every position is inspected, so a Manifest listed by two Collections gets
    both.  Each referencing Collection id is recorded once per target.
    """
    refs: dict[str, list[str]] = {}
    for occurrence in walk(root):
        parent = occurrence.parent
        if node_type(parent) != _T.COLLECTION:
            continue
        if node_type(occurrence.node) not in _STANDALONE:
            continue
        target, referrer = node_id(occurrence.node), node_id(parent)
        if target is None or referrer is None:
            continue
        referrers = refs.setdefault(target, [])
        if referrer not in referrers:
            referrers.append(referrer)
    return refs


def get_referencing_collections(root: Node, target_id: str) -> list[Node]:
    """Return the Collection nodes that list ``target_id``."""
    collections: list[Node] = []
    for collection_id in build_reference_map(root).get(target_id, []):
        node = find_node_by_id(root, collection_id)
        if node is not None and node_type(node) == _T.COLLECTION:
            collections.append(node)
    return collections
