"""Per-node conformance checks against the property matrix and vocabularies.

``validate_resource`` reports errors only and never raises.  It checks one
node in isolation: REQUIRED properties present, NOT_ALLOWED properties absent,
and the values of properties it can judge locally (behaviors, viewing
direction, ids, ``items``, language maps, ...).  Tree-level rules such as
``@context`` on the root and duplicate ids live in ``validation.tree``.

``validate_resource_full`` adds CONVENTION warnings on top.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from iiif_tree.schema.containment import is_valid_child_type
from iiif_tree.schema.matrix import (
    PropertyRequirement,
    get_property_requirement,
    get_resource_schema,
    is_property_allowed,
)
from iiif_tree.schema.vocabulary import (
    Motivation,
    TimeMode,
    ViewingDirection,
    find_behavior_conflicts,
    is_behavior_allowed,
)
from iiif_tree.tree.nodes import (
    ChildCollection,
    ContentType,
    ResourceType,
    is_content_type,
    node_id,
    normalize_resource_type,
)
from iiif_tree.validation.ids import has_fragment_identifier, is_valid_http_uri
from iiif_tree.validation.issues import (
    IssueCategory,
    IssueLevel,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "check_conditional_requirements",
    "validate_resource",
    "validate_resource_full",
]

_T = ResourceType

# Types whose ids must be HTTP(S) URIs.
_URI_IDENTIFIED = frozenset(
    {
        _T.COLLECTION,
        _T.MANIFEST,
        _T.CANVAS,
        _T.RANGE,
        _T.ANNOTATION_PAGE,
        _T.ANNOTATION_COLLECTION,
        _T.ANNOTATION,
    }
)
_TOP_LEVEL = frozenset({_T.COLLECTION, _T.MANIFEST})
_LANGUAGE_MAP_PROPERTIES = ("label", "summary", "requiredStatement")

_VIEWING_DIRECTIONS = frozenset(ViewingDirection)
_TIME_MODES = frozenset(TimeMode)
_MOTIVATIONS = frozenset(Motivation)

# Extra properties worth having on particular content types.
_CONTENT_RECOMMENDATIONS: dict[str, tuple[str, ...]] = {
    ContentType.IMAGE: ("height", "width", "service"),
    ContentType.VIDEO: ("height", "width", "duration"),
    ContentType.SOUND: ("duration",),
    ContentType.TEXT: ("language",),
}
_FORMAT_EXPECTED = frozenset(
    {
        ContentType.IMAGE,
        ContentType.VIDEO,
        ContentType.SOUND,
        ContentType.TEXT,
        ContentType.DATASET,
    }
)


def _present(node: Mapping[str, Any], prop: str) -> bool:
    return node.get(prop) is not None


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else [value]


class _Collector:
    """Accumulates issues for one node."""

    def __init__(self, node: Any) -> None:
        self.node_id = node_id(node)
        self.issues: list[ValidationIssue] = []

    def add(
        self,
        message: str,
        *,
        level: IssueLevel = IssueLevel.ERROR,
        category: IssueCategory = IssueCategory.PROPERTY,
        prop: str | None = None,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                message=message,
                level=level,
                category=category,
                node_id=self.node_id,
                property_name=prop,
            )
        )


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


def validate_resource(node: Any) -> list[ValidationIssue]:
    """Return the ERROR-level issues of a single node.

    A node whose type is missing or unknown produces exactly one error and
    no matrix checks; so does a non-mapping value.
    """
    out = _Collector(node)
    if not isinstance(node, Mapping):
        out.add(f"Resource must be an object, got {type(node).__name__}")
        return out.issues

    raw_type = node.get("type")
    rtype = normalize_resource_type(raw_type)
    schema = get_resource_schema(rtype) if rtype is not None else None
    if rtype is None or schema is None:
        out.add(f"Unknown resource type: {raw_type!r}", prop="type")
        return out.issues

    for prop in schema.required:
        if not _present(node, prop):
            out.add(f"Missing required field: {prop}", prop=prop)

    for prop in schema.not_allowed:
        if _present(node, prop):
            out.add(f"Field not allowed on {rtype}: {prop}", prop=prop)

    _check_vocabularies(node, rtype, out)

    conditional = check_conditional_requirements(node)
    out.issues.extend(conditional.errors)

    _check_id(node, rtype, out)
    _check_items(node, rtype, out)
    _check_descriptive(node, rtype, out)
    return out.issues


def _check_vocabularies(
    node: Mapping[str, Any], rtype: ResourceType, out: _Collector
) -> None:
    # Values are only judged where the property itself is allowed; presence
    # on other types is already a NOT_ALLOWED error.
    if _present(node, "behavior") and is_property_allowed(rtype, "behavior"):
        behaviors = _as_list(node["behavior"])
        for behavior in behaviors:
            if not is_behavior_allowed(rtype, behavior):
                out.add(f"Behavior not allowed on {rtype}: {behavior}", prop="behavior")
        for conflict in find_behavior_conflicts(behaviors):
            out.add(conflict, prop="behavior")

    direction = node.get("viewingDirection")
    if direction is not None and is_property_allowed(rtype, "viewingDirection"):
        if not isinstance(direction, str) or direction not in _VIEWING_DIRECTIONS:
            out.add(f"Invalid viewingDirection: {direction}", prop="viewingDirection")

    time_mode = node.get("timeMode")
    if time_mode is not None and is_property_allowed(rtype, "timeMode"):
        if not isinstance(time_mode, str) or time_mode not in _TIME_MODES:
            out.add(f"Invalid timeMode: {time_mode}", prop="timeMode")

    motivation = node.get("motivation")
    if motivation is not None and is_property_allowed(rtype, "motivation"):
        for value in _as_list(motivation):
            if not isinstance(value, str) or value not in _MOTIVATIONS:
                out.add(
                    f"Invalid motivation: {value}. Must be 'painting' or 'supplementing'",
                    prop="motivation",
                )


def _check_id(node: Mapping[str, Any], rtype: ResourceType, out: _Collector) -> None:
    rid = node.get("id")
    if not isinstance(rid, str) or not rid:
        return
    if rtype in _URI_IDENTIFIED and not is_valid_http_uri(rid):
        out.add("ID must be a valid HTTP(S) URI for IIIF resources", prop="id")
    if rtype is _T.CANVAS and has_fragment_identifier(rid):
        out.add("Canvas ID must not contain a fragment identifier", prop="id")


def _check_items(node: Mapping[str, Any], rtype: ResourceType, out: _Collector) -> None:
    if not _present(node, "items") or not is_property_allowed(rtype, "items"):
        return
    items = node["items"]
    if not isinstance(items, list):
        out.add("items must be an array", prop="items")
        return
    if not items:
        if get_property_requirement(rtype, "items") is PropertyRequirement.REQUIRED:
            out.add(f"{rtype} must have at least one item in 'items' array", prop="items")
        return
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            continue
        child_type = item.get("type")
        if isinstance(child_type, str) and not is_valid_child_type(
            rtype, child_type, ChildCollection.ITEMS
        ):
            out.add(
                f"Item at index {index} has invalid type '{child_type}' "
                f"for parent type '{rtype}'",
                category=IssueCategory.STRUCTURAL,
                prop="items",
            )


def _check_descriptive(
    node: Mapping[str, Any], rtype: ResourceType, out: _Collector
) -> None:
    metadata = node.get("metadata")
    if isinstance(metadata, list) and is_property_allowed(rtype, "metadata"):
        for index, entry in enumerate(metadata):
            if not (
                isinstance(entry, Mapping) and entry.get("label") and entry.get("value")
            ):
                out.add(
                    f"Metadata entry at index {index} must have both label and value",
                    prop="metadata",
                )

    for prop in _LANGUAGE_MAP_PROPERTIES:
        value = node.get(prop)
        if value and not isinstance(value, Mapping):
            out.add(f"{prop} must be a language map object", prop=prop)

    rights = node.get("rights")
    if rights is not None and is_property_allowed(rtype, "rights"):
        if not is_valid_http_uri(rights):
            out.add("rights must be an HTTP(S) URI", prop="rights")


# ---------------------------------------------------------------------------
# Conditional rules
# ---------------------------------------------------------------------------


def check_conditional_requirements(node: Any) -> ValidationResult:
    """Evaluate the property rules that depend on other properties.

    - A Canvas with width must have height, and vice versa (errors).
    - A Canvas with duration should also have both dimensions (warning).
    - A content resource of a concrete media type should have a format (warning).
    """
    out = _Collector(node)
    if not isinstance(node, Mapping):
        return ValidationResult(valid=True)

    raw_type = node.get("type")
    rtype = normalize_resource_type(raw_type)

    if rtype is _T.CANVAS:
        has_width, has_height = _present(node, "width"), _present(node, "height")
        if has_width and not has_height:
            out.add("Canvas must have height if width is present", prop="height")
        if has_height and not has_width:
            out.add("Canvas must have width if height is present", prop="width")
        if node.get("duration") and not (node.get("height") and node.get("width")):
            out.add(
                "Canvas with duration should also have height and width "
                "for proper rendering",
                level=IssueLevel.WARNING,
                category=IssueCategory.CONVENTION,
            )

    if is_content_type(raw_type) and raw_type in _FORMAT_EXPECTED and not _present(
        node, "format"
    ):
        out.add(
            "Content resource should have format property",
            level=IssueLevel.WARNING,
            category=IssueCategory.CONVENTION,
            prop="format",
        )

    errors = [i for i in out.issues if i.level is IssueLevel.ERROR]
    warnings = [i for i in out.issues if i.level is IssueLevel.WARNING]
    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


# ---------------------------------------------------------------------------
# Errors and warnings
# ---------------------------------------------------------------------------


def validate_resource_full(node: Any) -> ValidationResult:
    """Validate one node and also collect CONVENTION warnings.

    At most one warning is emitted per property; the first rule that
    notices a missing property wins.
    """
    errors = validate_resource(node)
    if not isinstance(node, Mapping):
        return ValidationResult(valid=False, errors=errors)
    raw_type = node.get("type")
    rtype = normalize_resource_type(raw_type)
    schema = get_resource_schema(rtype) if rtype is not None else None
    if rtype is None or schema is None:
        return ValidationResult(valid=False, errors=errors)

    out = _Collector(node)
    warned: set[str] = set()

    def warn(message: str, prop: str | None = None) -> None:
        if prop is not None:
            if prop in warned:
                return
            warned.add(prop)
        out.add(
            message,
            level=IssueLevel.WARNING,
            category=IssueCategory.CONVENTION,
            prop=prop,
        )

    for prop in schema.recommended:
        if not _present(node, prop):
            warn(f"Missing recommended field: {prop}", prop)

    for issue in check_conditional_requirements(node).warnings:
        warn(issue.message, issue.property_name)

    if is_content_type(raw_type):
        for prop in _CONTENT_RECOMMENDATIONS.get(raw_type, ()):
            if not _present(node, prop):
                warn(f"Content resource of type {raw_type} should have {prop} property", prop)

    items = node.get("items")
    if (
        isinstance(items, list)
        and not items
        and get_property_requirement(rtype, "items") is PropertyRequirement.RECOMMENDED
    ):
        warn(f"{rtype} has empty 'items' array (recommended to have items)", "items")

    if _present(node, "@context") and rtype not in _TOP_LEVEL:
        warn("@context should only be on top-level resources (Collection, Manifest)")

    return ValidationResult(valid=not errors, errors=errors, warnings=out.issues)
