"""Duplicate/integrity scanner: reports every id that occurs at more than one position.

Unlike ``traverse``, the scan does not deduplicate: it must observe each
occurrence to count it and to record where it sits.  A repeated id may be a
legitimate cross-reference (a Manifest listed by two Collections) or a defect;
the scanner reports both and leaves the judgement to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass

from iiif_tree.tree.nodes import Node, node_id
from iiif_tree.tree.traversal import walk

__all__ = ["DuplicateId", "find_duplicate_ids", "has_duplicate_ids"]


@dataclass(frozen=True, slots=True)
class DuplicateId:
    """An id observed at more than one tree position.

    Attributes:
        id:          The repeated id.
        occurrences: Number of positions it was found at (always >= 2).
        paths:       For each occurrence, the ancestor ids from the root down
                     to (excluding) that occurrence, in traversal order.
    """

    id: str
    occurrences: int
    paths: tuple[tuple[str, ...], ...]


def find_duplicate_ids(root: Node) -> list[DuplicateId]:
    """Return every id that occurs more than once, ordered by first occurrence.

    Cyclic references count as an occurrence but are not descended into.
    """
    seen: dict[str, list[tuple[str, ...]]] = {}
    for occurrence in walk(root):
        nid = node_id(occurrence.node)
        if nid is None:
            continue
        seen.setdefault(nid, []).append(occurrence.path)

    return [
        DuplicateId(id=nid, occurrences=len(paths), paths=tuple(paths))
        for nid, paths in seen.items()
        if len(paths) > 1
    ]


def has_duplicate_ids(root: Node) -> bool:
    """Return True as soon as any id is seen a second time."""
    seen: set[str] = set()
    for occurrence in walk(root):
        nid = node_id(occurrence.node)
        if nid is None:
            continue
        if nid in seen:
            return True
        seen.add(nid)
    return False
