"""Traversal engine: deduplicating pre-order walk plus a non-deduplicating walker.

Two walks with deliberately different visit policies live here:

- ``traverse`` visits each unique id exactly once.  A node whose id has
  already been visited is skipped together with its subtree, whether the
  repeat is a structural cycle or a legitimate second reference.  Nodes
  without an id are never deduplicated.
- ``walk`` yields every occurrence of every node.  It is the basis of point
  queries and the duplicate scanner, which must see repeated ids.

Both walks are iterative (explicit stack) and keep the same order: parent
before children, then items -> annotations -> structures, each in original
list order.  Neither walk descends into a node whose id already appears on its
own ancestor path, so cyclic graphs always terminate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from iiif_tree.tree.nodes import Node, get_children, node_id

__all__ = [
    "Occurrence",
    "SafeTraversalResult",
    "TraversalContext",
    "TraversalFault",
    "TraversalOptions",
    "safe_traverse",
    "traverse",
    "walk",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class TraversalOptions:
    """Immutable traversal parameters.

    Attributes:
        max_depth: Deepest level to visit (root is depth 0).  0 means unbounded.
        detect_cycles: When True, each id is visited at most once.  When False,
            every occurrence is visited (ancestor cycles are still cut).
    """

    max_depth: int = 0
    detect_cycles: bool = True

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            msg = f"max_depth must be >= 0, got {self.max_depth}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class TraversalContext:
    """Position information handed to a visitor alongside each node.

    Attributes:
        depth: Distance from the root (root is 0).
        parent: The node this one was reached from, or None for the root.
        path: Ancestor ids from the root down to (excluding) this node.
        visited: Ids visited so far in this traversal.  Live view; do not mutate.
    """

    depth: int
    parent: Node | None
    path: tuple[str, ...]
    visited: set[str]


@dataclass(frozen=True, slots=True)
class Occurrence:
    """One position of a node in the tree, as yielded by ``walk``.

    Attributes:
        node: The node at this position.
        parent: Its parent at this position, or None for the root.
        depth: Distance from the root.
        ancestors: Ancestor nodes from the root down to (excluding) ``node``.
        cyclic: True when ``node``'s id repeats an ancestor id; the walk does
            not descend into such an occurrence.
    """

    node: Node
    parent: Node | None
    depth: int
    ancestors: tuple[Node, ...]
    cyclic: bool = False

    @property
    def path(self) -> tuple[str, ...]:
        """Ancestor ids from the root down to (excluding) this occurrence."""
        return tuple(node_id(a) or "" for a in self.ancestors)


@dataclass(frozen=True, slots=True)
class TraversalFault:
    """An exception raised by a visitor during ``safe_traverse``."""

    node_id: str | None
    exception: Exception

    @property
    def message(self) -> str:
        return f"Error processing item {self.node_id}: {self.exception}"


@dataclass(frozen=True)
class SafeTraversalResult(Generic[T]):
    """Partial results and captured faults of a ``safe_traverse`` call."""

    results: list[T] = field(default_factory=list)
    faults: list[TraversalFault] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.faults

    @property
    def error(self) -> TraversalFault | None:
        """The first captured fault, if any."""
        return self.faults[0] if self.faults else None


class _AbortTraversal(Exception):
    """Internal signal used by ``safe_traverse`` to stop at the first fault."""


def traverse(
    root: Node,
    visitor: Callable[[Node, TraversalContext], T | None],
    options: TraversalOptions | None = None,
) -> list[T]:
    """Walk ``root`` in pre-order and call ``visitor`` for each visited node.

    Args:
        root:    Root resource node.
        visitor: Called as ``visitor(node, context)``.  Non-None return values
                 are accumulated in visit order.
        options: Traversal parameters.  Defaults to ``TraversalOptions()``.

    Returns:
        The accumulated non-None visitor results.
    """
    opts = options if options is not None else TraversalOptions()
    results: list[T] = []
    if not isinstance(root, Mapping):
        return results

    visited: set[str] = set()
    # Stack entries: (node, parent, depth, ancestor-id path, ancestor object ids)
    stack: list[tuple[Node, Node | None, int, tuple[str, ...], tuple[int, ...]]] = [
        (root, None, 0, (), ())
    ]

    while stack:
        node, parent, depth, path, lineage = stack.pop()

        if opts.max_depth > 0 and depth > opts.max_depth:
            continue

        nid = node_id(node)
        if nid is not None:
            if opts.detect_cycles and nid in visited:
                logger.debug("Skipping already-visited id %s at depth %d", nid, depth)
                continue
            visited.add(nid)

        context = TraversalContext(depth=depth, parent=parent, path=path, visited=visited)
        result = visitor(node, context)
        if result is not None:
            results.append(result)

        # Never re-enter a cycle, whether it is spelled by id or by object identity.
        if id(node) in lineage or (nid is not None and nid in path):
            logger.debug("Not descending into cyclic reference %s", nid)
            continue

        child_path = (*path, nid or "")
        child_lineage = (*lineage, id(node))
        for child in reversed(get_children(node)):
            stack.append((child, node, depth + 1, child_path, child_lineage))

    return results


def walk(root: Node) -> Iterator[Occurrence]:
    """Yield every occurrence of every node in pre-order, without deduplication.

    An occurrence whose id already appears among its ancestors is yielded with
    ``cyclic=True`` and its subtree is not entered.  Nodes revisited by object
    identity on the current branch are treated the same way.
    """
    if not isinstance(root, Mapping):
        return

    stack: list[tuple[Node, Node | None, int, tuple[Node, ...]]] = [(root, None, 0, ())]
    while stack:
        node, parent, depth, ancestors = stack.pop()
        nid = node_id(node)
        cyclic = any(a is node for a in ancestors) or (
            nid is not None and any(node_id(a) == nid for a in ancestors)
        )
        yield Occurrence(
            node=node, parent=parent, depth=depth, ancestors=ancestors, cyclic=cyclic
        )
        if cyclic:
            continue
        child_ancestors = (*ancestors, node)
        for child in reversed(get_children(node)):
            stack.append((child, node, depth + 1, child_ancestors))


def safe_traverse(
    root: Any,
    visitor: Callable[[Node, TraversalContext], T | None],
    options: TraversalOptions | None = None,
    *,
    continue_on_error: bool = False,
) -> SafeTraversalResult[T]:
    """Traverse like ``traverse`` but capture visitor exceptions instead of raising.

    Intended for partially-edited or externally supplied trees.

    Args:
        root:    Root node.  A non-mapping root yields one fault and no results.
        visitor: As for ``traverse``.
        options: As for ``traverse``.
        continue_on_error: When False (default) traversal stops at the first
            fault.  When True the failing node contributes no result and the
            walk carries on.

    Returns:
        A ``SafeTraversalResult`` with the results accumulated before (and,
        with ``continue_on_error``, after) any fault, plus the faults.
    """
    outcome: SafeTraversalResult[T] = SafeTraversalResult()
    if not isinstance(root, Mapping):
        fault = TraversalFault(node_id=None, exception=TypeError("Invalid root item"))
        outcome.faults.append(fault)
        logger.warning("safe_traverse: %s", fault.message)
        return outcome

    def guarded(node: Node, context: TraversalContext) -> None:
        try:
            result = visitor(node, context)
        except Exception as exc:
            fault = TraversalFault(node_id=node_id(node), exception=exc)
            outcome.faults.append(fault)
            logger.warning("safe_traverse: %s", fault.message)
            if not continue_on_error:
                raise _AbortTraversal from exc
            return
        if result is not None:
            outcome.results.append(result)

    try:
        traverse(root, guarded, options)
    except _AbortTraversal:
        logger.debug("safe_traverse stopped after %d result(s)", len(outcome.results))
    return outcome
