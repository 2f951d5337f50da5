"""Issue, result and report types produced by the validators.

This module provides the value types returned by ``validate_resource``,
``validate_resource_full`` and ``TreeValidator.validate``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

__all__ = [
    "NO_ID_KEY",
    "IssueCategory",
    "IssueLevel",
    "ValidationIssue",
    "ValidationReport",
    "ValidationResult",
]

#: Report key under which issues of nodes without an id are grouped.
NO_ID_KEY = "(no id)"


class IssueLevel(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class IssueCategory(StrEnum):
    """What kind of rule an issue violates.

    - STRUCTURAL: a child sits in a collection its parent may not hold.
    - PROPERTY:   a REQUIRED property is missing, a NOT_ALLOWED one is present,
                  or a property value is malformed.
    - INTEGRITY:  an id occurs at more than one position.
    - CONVENTION: soft recommendations (missing RECOMMENDED properties etc.).
    """

    STRUCTURAL = "structural"
    PROPERTY = "property"
    INTEGRITY = "integrity"
    CONVENTION = "convention"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single finding about one node.

    Attributes:
        message:  Human-readable description.
        level:    ERROR or WARNING.
        category: Which family of rule produced the issue.
        node_id:  Id of the offending node, or None when it has none.
        property_name: The property concerned, when the issue is about one.
    """

    message: str
    level: IssueLevel
    category: IssueCategory
    node_id: str | None = None
    property_name: str | None = None

    @property
    def is_error(self) -> bool:
        return self.level is IssueLevel.ERROR

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one node with ``validate_resource_full``."""

    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Outcome of validating a whole tree.

    Attributes:
        issues:              Every issue, in the order the nodes were visited.
        node_count:          Number of nodes validated.
        computation_time_ms: Wall-clock duration of the validation.
    """

    issues: list[ValidationIssue]
    node_count: int
    computation_time_ms: float

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level is IssueLevel.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level is IssueLevel.WARNING]

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.level is IssueLevel.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.level is IssueLevel.WARNING)

    @property
    def is_valid(self) -> bool:
        """True when no ERROR-level issue was found (warnings are allowed)."""
        return self.error_count == 0

    def issues_for(self, node_id: str) -> list[ValidationIssue]:
        """Issues attached to ``node_id``, in report order."""
        return [i for i in self.issues if i.node_id == node_id]

    def by_node(self) -> dict[str, list[ValidationIssue]]:
        """Group issues per node id; id-less nodes share ``NO_ID_KEY``."""
        grouped: dict[str, list[ValidationIssue]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.node_id or NO_ID_KEY, []).append(issue)
        return grouped
