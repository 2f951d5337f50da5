"""Containment rules: which resource types may appear in which child collection.

``items`` has a per-parent allow-list.  ``annotations`` may only hold
AnnotationPages and only on types whose matrix row allows ``annotations``;
``structures`` may only hold Ranges and only on a Manifest.  Content types
(Image, Video, ...) are normalised to ContentResource before lookup.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from iiif_tree.schema.matrix import is_property_allowed
from iiif_tree.tree.nodes import ChildCollection, ResourceType, normalize_resource_type

__all__ = ["ITEMS_CONTAINMENT", "get_valid_child_types", "is_valid_child_type"]

_T = ResourceType

#: parent type -> types permitted in its ``items``.
ITEMS_CONTAINMENT: MappingProxyType[ResourceType, frozenset[ResourceType]] = (
    MappingProxyType(
        {
            _T.COLLECTION: frozenset({_T.COLLECTION, _T.MANIFEST}),
            _T.MANIFEST: frozenset({_T.CANVAS}),
            _T.CANVAS: frozenset({_T.ANNOTATION_PAGE}),
            _T.ANNOTATION_PAGE: frozenset({_T.ANNOTATION}),
            _T.RANGE: frozenset({_T.RANGE, _T.CANVAS, _T.SPECIFIC_RESOURCE}),
            _T.CHOICE: frozenset({_T.CONTENT_RESOURCE, _T.SPECIFIC_RESOURCE}),
        }
    )
)

_ANNOTATIONS_CHILDREN = frozenset({_T.ANNOTATION_PAGE})
_STRUCTURES_CHILDREN = frozenset({_T.RANGE})


def get_valid_child_types(
    parent_type: Any, collection: str = ChildCollection.ITEMS
) -> frozenset[ResourceType]:
    """Return the types ``parent_type`` may hold in ``collection``.

    Unknown parent types and unknown collections permit nothing.
    """
    parent = normalize_resource_type(parent_type)
    if parent is None:
        return frozenset()

    if collection == ChildCollection.ITEMS:
        return ITEMS_CONTAINMENT.get(parent, frozenset())
    if collection == ChildCollection.ANNOTATIONS:
        if is_property_allowed(parent, ChildCollection.ANNOTATIONS):
            return _ANNOTATIONS_CHILDREN
        return frozenset()
    if collection == ChildCollection.STRUCTURES:
        return _STRUCTURES_CHILDREN if parent is _T.MANIFEST else frozenset()
    return frozenset()


def is_valid_child_type(
    parent_type: Any, child_type: Any, collection: str = ChildCollection.ITEMS
) -> bool:
    """True when ``child_type`` may appear in ``parent_type``'s ``collection``."""
    child = normalize_resource_type(child_type)
    return child is not None and child in get_valid_child_types(parent_type, collection)
