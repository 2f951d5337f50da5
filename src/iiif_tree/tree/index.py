"""TreeIndex: id/parent/depth/path/type lookup tables built in one traversal.

The index is a derived, disposable snapshot of a tree.  Nothing here caches
it: when the caller's tree reference changes, the caller rebuilds the index.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

import numpy as np

from iiif_tree.tree.nodes import Node, node_id, node_type
from iiif_tree.tree.traversal import TraversalContext, traverse

__all__ = ["DepthStats", "TreeIndex", "build_tree_index", "get_tree_depth_stats"]


@dataclass(frozen=True, slots=True)
class TreeIndex:
    """Lookup tables over the unique ids of a tree.

    Attributes:
        node_map:   id -> node (first visit in traversal order).
        parent_map: id -> parent node, or None for the root.
        depth_map:  id -> depth (root is 0).
        path_map:   id -> ancestor ids from the root down to (excluding) the node.
        type_map:   raw type string -> nodes of that type, in traversal order.
    """

    node_map: dict[str, Node] = field(default_factory=dict)
    parent_map: dict[str, Node | None] = field(default_factory=dict)
    depth_map: dict[str, int] = field(default_factory=dict)
    path_map: dict[str, list[str]] = field(default_factory=dict)
    type_map: dict[str, list[Node]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.node_map)

    def __contains__(self, resource_id: object) -> bool:
        return resource_id in self.node_map

    def get(self, resource_id: str) -> Node | None:
        return self.node_map.get(resource_id)

    def children_of(self, resource_id: str) -> list[Node]:
        """Indexed nodes whose recorded parent is ``resource_id``."""
        return [
            self.node_map[cid]
            for cid, parent in self.parent_map.items()
            if parent is not None and node_id(parent) == resource_id
        ]


@dataclass(frozen=True, slots=True)
class DepthStats:
    """Summary statistics from a single deduplicating pass.

    Attributes:
        total_nodes:     Number of visited nodes.
        max_depth:       Deepest visited level (root is 0).
        type_counts:     raw type string -> number of visited nodes.
        nodes_per_level: ``nodes_per_level[d]`` is the node count at depth d.
    """

    total_nodes: int
    max_depth: int
    type_counts: dict[str, int]
    nodes_per_level: list[int]


def build_tree_index(root: Node) -> TreeIndex:
    """Index every uniquely-identified node of ``root`` in one traversal.

    Nodes without an id are traversed but not indexed.  Cost is O(n) in the
    number of unique nodes.
    """
    index = TreeIndex()

    def record(node: Node, context: TraversalContext) -> None:
        nid = node_id(node)
        if nid is None:
            return
        index.node_map[nid] = node
        index.parent_map[nid] = context.parent
        index.depth_map[nid] = context.depth
        index.path_map[nid] = list(context.path)
        index.type_map.setdefault(node_type(node) or "", []).append(node)

    traverse(root, record)
    return index


def get_tree_depth_stats(root: Node) -> DepthStats:
    """Return node totals, maximum depth, per-type and per-level counts."""
    depths: list[int] = []
    types: Counter[str] = Counter()

    def tally(node: Node, context: TraversalContext) -> None:
        depths.append(context.depth)
        types[node_type(node) or ""] += 1

    traverse(root, tally)

    if not depths:
        return DepthStats(total_nodes=0, max_depth=0, type_counts={}, nodes_per_level=[])

    per_level = np.bincount(np.asarray(depths, dtype=np.int64))
    return DepthStats(
        total_nodes=len(depths),
        max_depth=int(per_level.size - 1),
        type_counts=dict(types),
        nodes_per_level=[int(n) for n in per_level],
    )
