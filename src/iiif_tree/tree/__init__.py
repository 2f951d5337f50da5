"""Tree subpackage: traversal, indexing, point queries and duplicate scanning.

Re-exports the public API for the tree module:
- ResourceType / ContentType / ChildCollection: closed enums of IIIF types
- get_children: ordered child resolver (items -> annotations -> structures)
- traverse / safe_traverse / walk: deduplicating and occurrence-level walks
- build_tree_index / get_tree_depth_stats: one-pass lookup tables and stats
- find_* / get_*: total point queries that need no index
- find_duplicate_ids / has_duplicate_ids: non-deduplicating integrity scan
"""

from iiif_tree.tree.nodes import (
    CHILD_COLLECTIONS,
    ChildCollection,
    ContentType,
    Node,
    ResourceType,
    get_children,
    normalize_resource_type,
)
from iiif_tree.tree.traversal import (
    Occurrence,
    SafeTraversalResult,
    TraversalContext,
    TraversalFault,
    TraversalOptions,
    safe_traverse,
    traverse,
    walk,
)
from iiif_tree.tree.index import (
    DepthStats,
    TreeIndex,
    build_tree_index,
    get_tree_depth_stats,
)
from iiif_tree.tree.queries import (
    count_resources_by_type,
    find_all_of_type,
    find_canvas_parent,
    find_collections_containing,
    find_node_by_id,
    find_parent,
    flatten_tree,
    get_all_canvases,
    get_all_collections,
    get_all_leaf_nodes,
    get_all_manifests,
    get_all_ranges,
    get_path_to_node,
)
from iiif_tree.tree.duplicates import DuplicateId, find_duplicate_ids, has_duplicate_ids

__all__ = [
    "CHILD_COLLECTIONS",
    "ChildCollection",
    "ContentType",
    "DepthStats",
    "DuplicateId",
    "Node",
    "Occurrence",
    "ResourceType",
    "SafeTraversalResult",
    "TraversalContext",
    "TraversalFault",
    "TraversalOptions",
    "TreeIndex",
    "build_tree_index",
    "count_resources_by_type",
    "find_all_of_type",
    "find_canvas_parent",
    "find_collections_containing",
    "find_duplicate_ids",
    "find_node_by_id",
    "find_parent",
    "flatten_tree",
    "get_all_canvases",
    "get_all_collections",
    "get_all_leaf_nodes",
    "get_all_manifests",
    "get_all_ranges",
    "get_children",
    "get_path_to_node",
    "get_tree_depth_stats",
    "has_duplicate_ids",
    "normalize_resource_type",
    "safe_traverse",
    "traverse",
    "walk",
]
