"""Public API functions for iiif-tree.

This module provides the user-facing whole-tree entry points, validate_tree
and is_valid_tree.  Each call creates a fresh TreeValidator so that no state
survives between calls.
"""

from __future__ import annotations

from typing import Any

from iiif_tree.validation.issues import ValidationReport
from iiif_tree.validation.tree import TreeValidator, ValidationOptions

__all__ = ["is_valid_tree", "validate_tree"]


def validate_tree(root: Any, options: ValidationOptions | None = None) -> ValidationReport:
    """Validate a whole resource tree and return a ValidationReport.

    Creates a fresh ``TreeValidator`` per call.

    Args:
        root:    Root resource node (usually a Collection or Manifest).  Any
                 value is accepted; a non-mapping root yields a single error.
        options: Validation parameters.  Defaults to ``ValidationOptions()``
                 when None.

    Returns:
        A ``ValidationReport`` with every issue, the number of nodes validated
        and computation_time_ms populated.
    """
    return TreeValidator(options).validate(root)


def is_valid_tree(root: Any, options: ValidationOptions | None = None) -> bool:
    """Return True when validating ``root`` produces no ERROR-level issue.

    Warnings never make a tree invalid.

    Args:
        root:    Root resource node.
        options: Validation parameters.  Defaults to ``ValidationOptions()``.

    Returns:
        ``validate_tree(root, options).is_valid``.
    """
    return validate_tree(root, options).is_valid
