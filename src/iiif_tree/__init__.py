"""iiif-tree - traversal, indexing and validation of IIIF Presentation 3.0 resource trees."""

from __future__ import annotations

from iiif_tree.api import is_valid_tree, validate_tree
from iiif_tree.mutations import ContainmentError
from iiif_tree.schema.containment import is_valid_child_type
from iiif_tree.schema.relationships import RelationshipType, get_relationship_type
from iiif_tree.tree.duplicates import DuplicateId, find_duplicate_ids, has_duplicate_ids
from iiif_tree.tree.index import TreeIndex, build_tree_index
from iiif_tree.tree.nodes import ResourceType, get_children
from iiif_tree.tree.queries import (
    find_all_of_type,
    find_node_by_id,
    find_parent,
    get_path_to_node,
)
from iiif_tree.tree.traversal import (
    SafeTraversalResult,
    TraversalContext,
    TraversalOptions,
    safe_traverse,
    traverse,
)
from iiif_tree.validation.issues import (
    IssueCategory,
    IssueLevel,
    ValidationIssue,
    ValidationReport,
)
from iiif_tree.validation.resource import validate_resource, validate_resource_full
from iiif_tree.validation.tree import TreeValidator, ValidationOptions

__version__: str = "0.1.0"
__all__: list[str] = [
    "ContainmentError",
    "DuplicateId",
    "IssueCategory",
    "IssueLevel",
    "RelationshipType",
    "ResourceType",
    "SafeTraversalResult",
    "TraversalContext",
    "TraversalOptions",
    "TreeIndex",
    "TreeValidator",
    "ValidationIssue",
    "ValidationOptions",
    "ValidationReport",
    "build_tree_index",
    "find_all_of_type",
    "find_duplicate_ids",
    "find_node_by_id",
    "find_parent",
    "get_children",
    "get_path_to_node",
    "get_relationship_type",
    "has_duplicate_ids",
    "is_valid_child_type",
    "is_valid_tree",
    "safe_traverse",
    "traverse",
    "validate_resource",
    "validate_resource_full",
    "validate_tree",
]
