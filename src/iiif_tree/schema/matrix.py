"""Property requirement matrix for IIIF Presentation API 3.0 resources.

``PROPERTY_MATRIX[property][resource_type]`` gives the normative requirement
level of a property on a resource type.  The table is data, not code: each row
lists only the types on which the property may appear; every other type is
filled in as ``NOT_ALLOWED`` when the module loads.

``@context`` is CONDITIONAL on Collection and Manifest because it is required
only on the top-level resource of a document; the tree validator enforces it
on the root.

See https://iiif.io/api/presentation/3.0/
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from cachetools import LRUCache, cached

from iiif_tree.schema.vocabulary import BEHAVIOR_VALIDITY, Behavior
from iiif_tree.tree.nodes import ResourceType, normalize_resource_type

__all__ = [
    "PROPERTY_MATRIX",
    "PropertyRequirement",
    "ResourceSchema",
    "get_allowed_properties",
    "get_property_requirement",
    "get_recommended_properties",
    "get_required_properties",
    "get_resource_schema",
    "is_property_allowed",
]


class PropertyRequirement(StrEnum):
    """Normative requirement level of a property on a resource type."""

    REQUIRED = "REQUIRED"
    RECOMMENDED = "RECOMMENDED"
    OPTIONAL = "OPTIONAL"
    NOT_ALLOWED = "NOT_ALLOWED"
    CONDITIONAL = "CONDITIONAL"


_T = ResourceType
REQ = PropertyRequirement.REQUIRED
REC = PropertyRequirement.RECOMMENDED
OPT = PropertyRequirement.OPTIONAL
COND = PropertyRequirement.CONDITIONAL

# The eight types that accept the common descriptive and linking properties.
_CORE = (
    _T.COLLECTION,
    _T.MANIFEST,
    _T.CANVAS,
    _T.RANGE,
    _T.ANNOTATION_PAGE,
    _T.ANNOTATION_COLLECTION,
    _T.ANNOTATION,
    _T.CONTENT_RESOURCE,
)


def _all(
    level: PropertyRequirement, *types: ResourceType
) -> dict[ResourceType, PropertyRequirement]:
    return dict.fromkeys(types, level)


_ROWS: dict[str, dict[ResourceType, PropertyRequirement]] = {
    # Descriptive properties
    "label": {
        _T.COLLECTION: REQ,
        _T.MANIFEST: REQ,
        _T.CANVAS: REC,
        _T.RANGE: REC,
        _T.ANNOTATION_PAGE: OPT,
        _T.ANNOTATION_COLLECTION: REC,
        _T.ANNOTATION: OPT,
        _T.CONTENT_RESOURCE: OPT,
        _T.AGENT: REQ,
        _T.SPECIFIC_RESOURCE: OPT,
        _T.CHOICE: OPT,
        _T.TEXTUAL_BODY: OPT,
    },
    "metadata": {
        **_all(OPT, *_CORE, _T.AGENT),
        _T.COLLECTION: REC,
        _T.MANIFEST: REC,
    },
    "summary": {
        **_all(OPT, *_CORE, _T.AGENT),
        _T.COLLECTION: REC,
        _T.MANIFEST: REC,
    },
    "requiredStatement": _all(OPT, *_CORE, _T.AGENT),
    "rights": _all(OPT, *_CORE, _T.AGENT),
    "provider": {**_all(OPT, *_CORE), _T.COLLECTION: REC, _T.MANIFEST: REC},
    "thumbnail": {**_all(OPT, *_CORE), _T.COLLECTION: REC, _T.MANIFEST: REC},
    "navDate": _all(OPT, _T.COLLECTION, _T.MANIFEST, _T.CANVAS, _T.RANGE),
    "placeholderCanvas": _all(OPT, _T.COLLECTION, _T.MANIFEST, _T.CANVAS, _T.RANGE),
    "accompanyingCanvas": _all(OPT, _T.COLLECTION, _T.MANIFEST, _T.CANVAS, _T.RANGE),
    # Technical properties
    "id": {**_all(REQ, *ResourceType), _T.TEXTUAL_BODY: OPT},
    "type": {**_all(REQ, *ResourceType), _T.TEXTUAL_BODY: OPT},
    "format": {_T.CONTENT_RESOURCE: REC, _T.TEXTUAL_BODY: OPT},
    "profile": {_T.CONTENT_RESOURCE: OPT},
    "height": {_T.CANVAS: COND, _T.CONTENT_RESOURCE: REC},
    "width": {_T.CANVAS: COND, _T.CONTENT_RESOURCE: REC},
    "duration": {_T.CANVAS: OPT, _T.CONTENT_RESOURCE: REC},
    "language": {_T.CONTENT_RESOURCE: REC, _T.TEXTUAL_BODY: OPT},
    "viewingDirection": _all(OPT, _T.COLLECTION, _T.MANIFEST, _T.RANGE),
    "behavior": _all(OPT, *_CORE, _T.SPECIFIC_RESOURCE, _T.CHOICE),
    "timeMode": {_T.ANNOTATION: OPT},
    "motivation": {_T.ANNOTATION: REQ},
    "purpose": _all(OPT, _T.SPECIFIC_RESOURCE, _T.TEXTUAL_BODY),
    # Linking properties (external)
    "homepage": {**_all(OPT, *_CORE), _T.AGENT: REC},
    "rendering": _all(OPT, *_CORE),
    "service": _all(OPT, *_CORE),
    "services": _all(OPT, _T.COLLECTION, _T.MANIFEST),
    "seeAlso": _all(OPT, *_CORE, _T.AGENT),
    "logo": {_T.AGENT: REC},
    # Linking properties (internal)
    "partOf": _all(OPT, *_CORE),
    "start": _all(OPT, _T.MANIFEST, _T.RANGE),
    "supplementary": {_T.RANGE: OPT},
    "body": {_T.ANNOTATION: REQ},
    "target": {_T.ANNOTATION: REQ},
    "source": {_T.SPECIFIC_RESOURCE: REQ},
    "selector": {_T.SPECIFIC_RESOURCE: OPT},
    # Structural properties
    "items": {
        _T.COLLECTION: REQ,
        _T.MANIFEST: REQ,
        _T.CANVAS: REC,
        _T.RANGE: REQ,
        _T.ANNOTATION_PAGE: REC,
        _T.CHOICE: OPT,
    },
    "structures": {_T.MANIFEST: OPT},
    "annotations": _all(
        OPT, _T.COLLECTION, _T.MANIFEST, _T.CANVAS, _T.RANGE, _T.CONTENT_RESOURCE
    ),
    "first": {_T.ANNOTATION_PAGE: OPT, _T.ANNOTATION_COLLECTION: REC},
    "last": {_T.ANNOTATION_PAGE: OPT, _T.ANNOTATION_COLLECTION: REC},
    "next": {_T.ANNOTATION_PAGE: OPT},
    "prev": {_T.ANNOTATION_PAGE: OPT},
    # JSON-LD context (top-level resources only)
    "@context": _all(COND, _T.COLLECTION, _T.MANIFEST),
    # TextualBody value
    "value": {_T.TEXTUAL_BODY: REQ},
}


def _complete(
    row: dict[ResourceType, PropertyRequirement],
) -> MappingProxyType[ResourceType, PropertyRequirement]:
    full = dict.fromkeys(ResourceType, PropertyRequirement.NOT_ALLOWED)
    full.update(row)
    return MappingProxyType(full)


#: property -> resource type -> requirement level (read-only).
PROPERTY_MATRIX: MappingProxyType[
    str, MappingProxyType[ResourceType, PropertyRequirement]
] = MappingProxyType({prop: _complete(row) for prop, row in _ROWS.items()})


@dataclass(frozen=True, slots=True)
class ResourceSchema:
    """Per-type view of the matrix, grouped by requirement level.

    Properties appear in matrix order.  CONDITIONAL properties are listed
    under ``conditional`` (and count as allowed).
    """

    resource_type: ResourceType
    required: tuple[str, ...]
    recommended: tuple[str, ...]
    optional: tuple[str, ...]
    conditional: tuple[str, ...]
    not_allowed: tuple[str, ...]
    behavior_allowed: frozenset[Behavior]

    @property
    def allowed(self) -> tuple[str, ...]:
        return tuple(
            prop
            for prop, row in PROPERTY_MATRIX.items()
            if row[self.resource_type] != PropertyRequirement.NOT_ALLOWED
        )


def get_resource_schema(resource_type: str) -> ResourceSchema | None:
    """Return the grouped schema row for ``resource_type``, or None if unknown.

    Content types such as "Image" resolve to the ContentResource schema and
    share its memoised row.
    """
    rtype = normalize_resource_type(resource_type)
    if rtype is None:
        return None
    return _schema_for(rtype)


@cached(cache=LRUCache(maxsize=64))
def _schema_for(rtype: ResourceType) -> ResourceSchema:
    grouped: dict[PropertyRequirement, list[str]] = {
        level: [] for level in PropertyRequirement
    }
    for prop, row in PROPERTY_MATRIX.items():
        grouped[row[rtype]].append(prop)

    return ResourceSchema(
        resource_type=rtype,
        required=tuple(grouped[PropertyRequirement.REQUIRED]),
        recommended=tuple(grouped[PropertyRequirement.RECOMMENDED]),
        optional=tuple(grouped[PropertyRequirement.OPTIONAL]),
        conditional=tuple(grouped[PropertyRequirement.CONDITIONAL]),
        not_allowed=tuple(grouped[PropertyRequirement.NOT_ALLOWED]),
        behavior_allowed=BEHAVIOR_VALIDITY.get(rtype, frozenset()),
    )


def get_property_requirement(resource_type: Any, prop: str) -> PropertyRequirement:
    """Return the requirement of ``prop`` on ``resource_type``.

    Unknown types and properties outside the matrix are NOT_ALLOWED.
    """
    rtype = normalize_resource_type(resource_type)
    row = PROPERTY_MATRIX.get(prop)
    if rtype is None or row is None:
        return PropertyRequirement.NOT_ALLOWED
    return row[rtype]


def is_property_allowed(resource_type: Any, prop: str) -> bool:
    return get_property_requirement(resource_type, prop) != PropertyRequirement.NOT_ALLOWED


def get_required_properties(resource_type: str) -> list[str]:
    schema = get_resource_schema(resource_type)
    return list(schema.required) if schema else []


def get_recommended_properties(resource_type: str) -> list[str]:
    schema = get_resource_schema(resource_type)
    return list(schema.recommended) if schema else []


def get_allowed_properties(resource_type: str) -> list[str]:
    schema = get_resource_schema(resource_type)
    return list(schema.allowed) if schema else []
