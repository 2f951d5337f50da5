"""ResourceType StrEnum and the child resolver for IIIF resource trees.

A resource node is a plain JSON-shaped mapping::

    {"id": "https://example.org/manifest/1", "type": "Manifest",
     "items": [...], "annotations": [...], "structures": [...], ...}

The three child collections carry different meanings (primary containment,
annotation layer, navigational structure) but are concatenated in the fixed
order items -> annotations -> structures wherever generic "children" are needed.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any

# Type alias for a resource node (JSON object)
Node = Mapping[str, Any]


class ChildCollection(StrEnum):
    """The three child-bearing properties, declared in traversal order."""

    ITEMS = "items"
    ANNOTATIONS = "annotations"
    STRUCTURES = "structures"


#: Child collections in traversal order.
CHILD_COLLECTIONS: tuple[str, ...] = tuple(ChildCollection)


class ResourceType(StrEnum):
    """Closed set of resource types the rule tables are keyed by.

    Values are the exact IIIF ``type`` strings, so members compare equal to
    the raw strings found in documents (``ResourceType.CANVAS == "Canvas"``).
    """

    COLLECTION = "Collection"
    MANIFEST = "Manifest"
    CANVAS = "Canvas"
    RANGE = "Range"
    ANNOTATION_PAGE = "AnnotationPage"
    ANNOTATION_COLLECTION = "AnnotationCollection"
    ANNOTATION = "Annotation"
    CONTENT_RESOURCE = "ContentResource"
    AGENT = "Agent"
    SPECIFIC_RESOURCE = "SpecificResource"
    CHOICE = "Choice"
    TEXTUAL_BODY = "TextualBody"


class ContentType(StrEnum):
    """Concrete content resource types; all normalise to ContentResource."""

    DATASET = "Dataset"
    IMAGE = "Image"
    MODEL = "Model"
    SOUND = "Sound"
    TEXT = "Text"
    VIDEO = "Video"


_CONTENT_TYPES = frozenset(ContentType)
_RESOURCE_TYPES = frozenset(ResourceType)


def normalize_resource_type(resource_type: Any) -> ResourceType | None:
    """Map a raw ``type`` value onto the closed ResourceType enum.

    Content types (Image, Video, Sound, Text, Dataset, Model) collapse to
    ``ResourceType.CONTENT_RESOURCE``.  Unknown or non-string values return
    None so that callers can report them instead of guessing.
    """
    if not isinstance(resource_type, str):
        return None
    if resource_type in _CONTENT_TYPES:
        return ResourceType.CONTENT_RESOURCE
    if resource_type in _RESOURCE_TYPES:
        return ResourceType(resource_type)
    return None


def is_content_type(resource_type: Any) -> bool:
    """Return True for concrete content resource types such as "Image"."""
    return isinstance(resource_type, str) and resource_type in _CONTENT_TYPES


def node_id(node: Any) -> str | None:
    """Return the node's id when it is a non-empty string, else None."""
    if not isinstance(node, Mapping):
        return None
    value = node.get("id")
    if isinstance(value, str) and value:
        return value
    return None


def node_type(node: Any) -> str | None:
    """Return the node's raw ``type`` string, or None when absent/invalid."""
    if not isinstance(node, Mapping):
        return None
    value = node.get("type")
    return value if isinstance(value, str) else None


def get_collection(node: Any, collection: str) -> list[Any] | None:
    """Return ``node[collection]`` when it is a list, otherwise None."""
    if not isinstance(node, Mapping):
        return None
    value = node.get(collection)
    return value if isinstance(value, list) else None


def get_children(node: Any) -> Sequence[Node]:
    """Return the node's ordered children: items, then annotations, then structures.

    Absent (or non-list) collections are skipped and non-mapping entries are
    dropped.  When only ``items`` is populated and every entry is a mapping,
    the original list is returned as-is so the hot path does not allocate.

    Args:
        node: A resource node.  Non-mapping values have no children.

    Returns:
        A read-only view of the children.  Callers must not mutate it.
    """
    if not isinstance(node, Mapping):
        return ()

    items = get_collection(node, "items")
    annotations = get_collection(node, "annotations")
    structures = get_collection(node, "structures")

    if not annotations and not structures:
        if not items:
            return ()
        if all(isinstance(child, Mapping) for child in items):
            return items
        return [child for child in items if isinstance(child, Mapping)]

    children: list[Node] = []
    for group in (items, annotations, structures):
        if group:
            children.extend(child for child in group if isinstance(child, Mapping))
    return children
