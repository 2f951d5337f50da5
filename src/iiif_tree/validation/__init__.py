"""validation subpackage: per-node and whole-tree conformance checks.

Re-exports the public API for the validation module:
- validate_resource / validate_resource_full: one node, errors (and warnings)
- TreeValidator / ValidationOptions: whole-tree validation
- ValidationIssue / ValidationResult / ValidationReport: result types
- is_valid_id and the other identifier helpers
"""

from __future__ import annotations

from iiif_tree.validation.ids import (
    IdCheck,
    convert_to_http_uri,
    get_uri_last_segment,
    has_fragment_identifier,
    is_valid_http_uri,
    is_valid_id,
    normalize_uri,
    remove_trailing_slash,
)
from iiif_tree.validation.issues import (
    NO_ID_KEY,
    IssueCategory,
    IssueLevel,
    ValidationIssue,
    ValidationReport,
    ValidationResult,
)
from iiif_tree.validation.resource import (
    check_conditional_requirements,
    validate_resource,
    validate_resource_full,
)
from iiif_tree.validation.tree import TreeValidator, ValidationOptions

__all__ = [
    "NO_ID_KEY",
    "IdCheck",
    "IssueCategory",
    "IssueLevel",
    "TreeValidator",
    "ValidationIssue",
    "ValidationOptions",
    "ValidationReport",
    "ValidationResult",
    "check_conditional_requirements",
    "convert_to_http_uri",
    "get_uri_last_segment",
    "has_fragment_identifier",
    "is_valid_http_uri",
    "is_valid_id",
    "normalize_uri",
    "remove_trailing_slash",
    "validate_resource",
    "validate_resource_full",
]
