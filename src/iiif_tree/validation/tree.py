"""TreeValidator: whole-tree validation composed from per-node checks.

Architecture:
- ``validate()`` starts a wall-clock timer and runs one deduplicating
  traversal.  Each visited node gets ``validate_resource_full`` plus the
  checks that need tree context: child types in ``annotations`` and
  ``structures``, ``@context`` on a top-level root, painting content on
  Canvases, and rights URIs outside the known registry.
- The duplicate scanner contributes one INTEGRITY issue per repeated id.
  An id listed as an owned child more than once across the unique parents,
  or that repeats one of its own ancestors, is an ERROR.  Every other repeat
  is a WARNING: a parent listing the same reference twice, a reference
  shared between parents (a Manifest in two Collections, a Canvas listed by
  a Range) and the descendants of such a shared resource.
- ``max_depth`` bounds both passes: occurrences below the limit are neither
  validated nor counted as duplicates.
- The returned ``ValidationReport`` is a snapshot.  Nothing is cached.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from iiif_tree.schema.containment import is_valid_child_type
from iiif_tree.schema.matrix import is_property_allowed
from iiif_tree.schema.relationships import RelationshipType, get_relationship_type
from iiif_tree.schema.vocabulary import COMMON_RIGHTS_URIS, Motivation
from iiif_tree.tree.duplicates import DuplicateId, find_duplicate_ids
from iiif_tree.tree.nodes import (
    ChildCollection,
    Node,
    ResourceType,
    get_children,
    get_collection,
    node_id,
    node_type,
    normalize_resource_type,
)
from iiif_tree.tree.traversal import TraversalContext, TraversalOptions, traverse
from iiif_tree.validation.ids import is_valid_http_uri
from iiif_tree.validation.issues import (
    IssueCategory,
    IssueLevel,
    ValidationIssue,
    ValidationReport,
)
from iiif_tree.validation.resource import validate_resource, validate_resource_full

__all__ = ["TreeValidator", "ValidationOptions"]

logger = logging.getLogger(__name__)

_T = ResourceType
_TOP_LEVEL = frozenset({_T.COLLECTION, _T.MANIFEST})


@dataclass(frozen=True, slots=True)
class ValidationOptions:
    """Immutable whole-tree validation parameters.

    Attributes:
        include_warnings: Keep WARNING-level issues in the report.
        check_duplicates: Run the duplicate scanner and report repeated ids.
        require_root_context: A Collection or Manifest root must carry
            ``@context``.
        max_depth: Deepest level validated (root is 0).  0 means unbounded.
        known_rights_uris: Rights URIs accepted without a warning.  Defaults
            to the common Creative Commons and RightsStatements.org URIs.
    """

    include_warnings: bool = True
    check_duplicates: bool = True
    require_root_context: bool = True
    max_depth: int = 0
    known_rights_uris: frozenset[str] = field(
        default_factory=lambda: frozenset(COMMON_RIGHTS_URIS.values())
    )

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            msg = f"max_depth must be >= 0, got {self.max_depth}"
            raise ValueError(msg)
        if not isinstance(self.known_rights_uris, frozenset):
            object.__setattr__(self, "known_rights_uris", frozenset(self.known_rights_uris))


class TreeValidator:
    """Validate a resource tree and return a ``ValidationReport``.

    Example::

        from iiif_tree.validation import TreeValidator, ValidationOptions

        report = TreeValidator(ValidationOptions(include_warnings=False)).validate(doc)
        for issue in report.errors:
            print(issue.node_id, issue.message)
    """

    def __init__(self, options: ValidationOptions | None = None) -> None:
        self._options = options if options is not None else ValidationOptions()

    @property
    def options(self) -> ValidationOptions:
        return self._options

    def validate(self, root: Any) -> ValidationReport:
        """Validate every node reachable from ``root``.  Never raises."""
        start = time.perf_counter()

        if not isinstance(root, Mapping):
            return ValidationReport(
                issues=validate_resource(root),
                node_count=0,
                computation_time_ms=(time.perf_counter() - start) * 1000.0,
            )

        issues: list[ValidationIssue] = []
        node_count = 0

        def visit(node: Node, context: TraversalContext) -> None:
            nonlocal node_count
            node_count += 1
            issues.extend(self._check_node(node, context))

        traverse(root, visit, TraversalOptions(max_depth=self._options.max_depth))

        if self._options.check_duplicates:
            issues.extend(self._check_duplicates(root))

        if not self._options.include_warnings:
            issues = [i for i in issues if i.level is IssueLevel.ERROR]

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        report = ValidationReport(
            issues=issues, node_count=node_count, computation_time_ms=elapsed_ms
        )
        logger.debug(
            "Validated %d node(s): %d error(s), %d warning(s) in %.2f ms",
            node_count,
            report.error_count,
            report.warning_count,
            elapsed_ms,
        )
        return report

    # ------------------------------------------------------------------
    # Per-node checks
    # ------------------------------------------------------------------

    def _check_node(self, node: Node, context: TraversalContext) -> list[ValidationIssue]:
        result = validate_resource_full(node)
        issues = [*result.errors, *result.warnings]

        rtype = normalize_resource_type(node.get("type"))
        if rtype is None:
            return issues
        nid = node_id(node)

        if (
            context.depth == 0
            and self._options.require_root_context
            and rtype in _TOP_LEVEL
            and node.get("@context") is None
        ):
            issues.append(
                _error(
                    "Top-level resource must have @context property",
                    nid,
                    IssueCategory.PROPERTY,
                    "@context",
                )
            )

        for collection in (ChildCollection.ANNOTATIONS, ChildCollection.STRUCTURES):
            issues.extend(_check_collection_children(node, rtype, collection, nid))

        if rtype is _T.CANVAS and not _has_painting_content(node):
            issues.append(
                _warning('Canvas has no "painting" content. It will appear blank.', nid)
            )

        rights = node.get("rights")
        if (
            is_valid_http_uri(rights)
            and is_property_allowed(rtype, "rights")
            and rights not in self._options.known_rights_uris
        ):
            issues.append(
                _warning(
                    f"Rights URI is not from a known registry: {rights}", nid, "rights"
                )
            )
        return issues

    # ------------------------------------------------------------------
    # Integrity
    # ------------------------------------------------------------------

    def _check_duplicates(self, root: Node) -> list[ValidationIssue]:
        limit = self._options.max_depth
        duplicates = _within_depth(find_duplicate_ids(root), limit)
        if not duplicates:
            return []

        repeated = {dup.id for dup in duplicates}
        owned: Counter[str] = Counter()
        redundant: set[str] = set()

        # Child lists are read once per unique parent, so a shared subtree
        # does not count its own children twice.
        def tally(node: Node, context: TraversalContext) -> None:
            if limit and context.depth >= limit:
                return
            parent_type = node_type(node)
            listed: set[str] = set()
            for child in get_children(node):
                cid = node_id(child)
                if cid is None or cid not in repeated:
                    continue
                relationship = get_relationship_type(parent_type, node_type(child) or "")
                if relationship is RelationshipType.REFERENCE:
                    if cid in listed:
                        redundant.add(cid)
                    listed.add(cid)
                else:
                    owned[cid] += 1

        traverse(root, tally, TraversalOptions(max_depth=limit))

        issues: list[ValidationIssue] = []
        for dup in duplicates:
            cyclic = any(dup.id in path for path in dup.paths)
            if cyclic or owned[dup.id] > 1:
                issues.append(
                    _error(
                        f"Duplicate ID detected: {dup.id} appears at "
                        f"{dup.occurrences} positions. This will break most IIIF viewers.",
                        dup.id,
                        IssueCategory.INTEGRITY,
                        "id",
                    )
                )
            elif dup.id in redundant:
                issues.append(
                    _integrity_warning(
                        f"Resource {dup.id} is listed more than once by the same parent",
                        dup.id,
                    )
                )
            else:
                issues.append(
                    _integrity_warning(
                        f"Resource {dup.id} appears at {dup.occurrences} positions in the tree",
                        dup.id,
                    )
                )
        return issues


def _within_depth(duplicates: list[DuplicateId], limit: int) -> list[DuplicateId]:
    """Drop occurrences deeper than ``limit``; 0 keeps everything."""
    if not limit:
        return duplicates
    kept: list[DuplicateId] = []
    for dup in duplicates:
        paths = tuple(path for path in dup.paths if len(path) <= limit)
        if len(paths) > 1:
            kept.append(DuplicateId(id=dup.id, occurrences=len(paths), paths=paths))
    return kept


def _error(
    message: str, nid: str | None, category: IssueCategory, prop: str | None = None
) -> ValidationIssue:
    return ValidationIssue(message, IssueLevel.ERROR, category, nid, prop)


def _warning(message: str, nid: str | None, prop: str | None = None) -> ValidationIssue:
    return ValidationIssue(message, IssueLevel.WARNING, IssueCategory.CONVENTION, nid, prop)


def _integrity_warning(message: str, nid: str) -> ValidationIssue:
    return ValidationIssue(message, IssueLevel.WARNING, IssueCategory.INTEGRITY, nid, "id")


def _check_collection_children(
    node: Node, rtype: ResourceType, collection: str, nid: str | None
) -> list[ValidationIssue]:
    children = get_collection(node, collection)
    # Presence on a type that may not carry the collection is a NOT_ALLOWED error.
    if not children or not is_property_allowed(rtype, collection):
        return []
    issues: list[ValidationIssue] = []
    for index, child in enumerate(children):
        child_type = node_type(child)
        if child_type is not None and not is_valid_child_type(rtype, child_type, collection):
            issues.append(
                _error(
                    f"{collection} entry at index {index} has invalid type "
                    f"'{child_type}' for parent type '{rtype}'",
                    nid,
                    IssueCategory.STRUCTURAL,
                    collection,
                )
            )
    return issues


def _has_painting_content(canvas: Node) -> bool:
    for page in get_collection(canvas, "items") or ():
        for annotation in get_collection(page, "items") or ():
            if not isinstance(annotation, Mapping):
                continue
            motivation = annotation.get("motivation")
            values = motivation if isinstance(motivation, list) else [motivation]
            if Motivation.PAINTING in values:
                return True
    return False
