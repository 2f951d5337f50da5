"""Closed vocabularies of IIIF Presentation 3.0: behaviors, viewing directions,
time modes, motivations, and the registry of common rights URIs.

Behavior validity is a per-type allow-list.  Within a disjoint set at most one
value may be present on a single resource (``paged`` and ``continuous`` cannot
both apply, for instance).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from iiif_tree.tree.nodes import ResourceType, normalize_resource_type

__all__ = [
    "BEHAVIOR_VALIDITY",
    "COMMON_RIGHTS_URIS",
    "DEFAULT_MOTIVATION",
    "DEFAULT_TIME_MODE",
    "DEFAULT_VIEWING_DIRECTION",
    "DISJOINT_SETS",
    "PRESENTATION_CONTEXT",
    "Behavior",
    "DisjointSet",
    "Motivation",
    "TimeMode",
    "ViewingDirection",
    "find_behavior_conflicts",
    "get_allowed_behaviors",
    "get_rights_display_name",
    "is_behavior_allowed",
    "is_valid_rights_uri",
]

PRESENTATION_CONTEXT = "http://iiif.io/api/presentation/3/context.json"


class Behavior(StrEnum):
    AUTO_ADVANCE = "auto-advance"
    NO_AUTO_ADVANCE = "no-auto-advance"
    REPEAT = "repeat"
    NO_REPEAT = "no-repeat"
    UNORDERED = "unordered"
    INDIVIDUALS = "individuals"
    CONTINUOUS = "continuous"
    PAGED = "paged"
    FACING_PAGES = "facing-pages"
    NON_PAGED = "non-paged"
    MULTI_PART = "multi-part"
    TOGETHER = "together"
    SEQUENCE = "sequence"
    THUMBNAIL_NAV = "thumbnail-nav"
    NO_NAV = "no-nav"
    HIDDEN = "hidden"


class ViewingDirection(StrEnum):
    LEFT_TO_RIGHT = "left-to-right"
    RIGHT_TO_LEFT = "right-to-left"
    TOP_TO_BOTTOM = "top-to-bottom"
    BOTTOM_TO_TOP = "bottom-to-top"


class TimeMode(StrEnum):
    TRIM = "trim"
    SCALE = "scale"
    LOOP = "loop"


class Motivation(StrEnum):
    PAINTING = "painting"
    SUPPLEMENTING = "supplementing"


DEFAULT_VIEWING_DIRECTION = ViewingDirection.LEFT_TO_RIGHT
DEFAULT_TIME_MODE = TimeMode.TRIM
DEFAULT_MOTIVATION = Motivation.PAINTING

_B = Behavior
_TEMPORAL = (_B.AUTO_ADVANCE, _B.NO_AUTO_ADVANCE, _B.REPEAT, _B.NO_REPEAT)
_LAYOUT = (_B.UNORDERED, _B.INDIVIDUALS, _B.CONTINUOUS, _B.PAGED)
_HIDDEN_ONLY = frozenset({_B.HIDDEN})

#: resource type -> behaviors permitted on it.  Types absent here allow none.
BEHAVIOR_VALIDITY: MappingProxyType[ResourceType, frozenset[Behavior]] = MappingProxyType(
    {
        ResourceType.COLLECTION: frozenset(
            {*_TEMPORAL, *_LAYOUT, _B.MULTI_PART, _B.TOGETHER}
        ),
        ResourceType.MANIFEST: frozenset({*_TEMPORAL, *_LAYOUT}),
        ResourceType.CANVAS: frozenset({*_TEMPORAL, _B.FACING_PAGES, _B.NON_PAGED}),
        ResourceType.RANGE: frozenset(
            {
                _B.AUTO_ADVANCE,
                _B.NO_AUTO_ADVANCE,
                *_LAYOUT,
                _B.SEQUENCE,
                _B.THUMBNAIL_NAV,
                _B.NO_NAV,
            }
        ),
        ResourceType.ANNOTATION_PAGE: _HIDDEN_ONLY,
        ResourceType.ANNOTATION_COLLECTION: _HIDDEN_ONLY,
        ResourceType.ANNOTATION: _HIDDEN_ONLY,
        ResourceType.SPECIFIC_RESOURCE: _HIDDEN_ONLY,
        ResourceType.CHOICE: _HIDDEN_ONLY,
    }
)


@dataclass(frozen=True, slots=True)
class DisjointSet:
    """Behaviors of which at most one may appear on a resource."""

    name: str
    values: frozenset[Behavior]
    default: Behavior | None = None


DISJOINT_SETS: tuple[DisjointSet, ...] = (
    DisjointSet(
        "temporal_advance",
        frozenset({_B.AUTO_ADVANCE, _B.NO_AUTO_ADVANCE}),
        _B.NO_AUTO_ADVANCE,
    ),
    DisjointSet("temporal_repeat", frozenset({_B.REPEAT, _B.NO_REPEAT}), _B.NO_REPEAT),
    DisjointSet("layout", frozenset(_LAYOUT), _B.INDIVIDUALS),
    DisjointSet("canvas_paging", frozenset({_B.FACING_PAGES, _B.NON_PAGED})),
    DisjointSet("collection_presentation", frozenset({_B.MULTI_PART, _B.TOGETHER})),
    DisjointSet(
        "range_navigation", frozenset({_B.SEQUENCE, _B.THUMBNAIL_NAV, _B.NO_NAV})
    ),
)


def get_allowed_behaviors(resource_type: Any) -> frozenset[Behavior]:
    rtype = normalize_resource_type(resource_type)
    if rtype is None:
        return frozenset()
    return BEHAVIOR_VALIDITY.get(rtype, frozenset())


def is_behavior_allowed(resource_type: Any, behavior: Any) -> bool:
    return isinstance(behavior, str) and behavior in get_allowed_behaviors(resource_type)


def find_behavior_conflicts(behaviors: Iterable[str]) -> list[str]:
    """Return one message per disjoint set that has more than one member present.

    Values are reported in the order given.
    """
    present = [b for b in behaviors if isinstance(b, str)]
    conflicts: list[str] = []
    for disjoint in DISJOINT_SETS:
        matching = [b for b in present if b in disjoint.values]
        if len(matching) > 1:
            conflicts.append(
                f"Conflicting behaviors from {disjoint.name} set: {', '.join(matching)}"
            )
    return conflicts


#: Display name -> URI for the commonly used Creative Commons licenses and
#: RightsStatements.org statements.
COMMON_RIGHTS_URIS: MappingProxyType[str, str] = MappingProxyType(
    {
        "CC BY 4.0": "http://creativecommons.org/licenses/by/4.0/",
        "CC BY-SA 4.0": "http://creativecommons.org/licenses/by-sa/4.0/",
        "CC BY-NC 4.0": "http://creativecommons.org/licenses/by-nc/4.0/",
        "CC BY-ND 4.0": "http://creativecommons.org/licenses/by-nd/4.0/",
        "CC BY-NC-SA 4.0": "http://creativecommons.org/licenses/by-nc-sa/4.0/",
        "CC BY-NC-ND 4.0": "http://creativecommons.org/licenses/by-nc-nd/4.0/",
        "CC0 1.0": "http://creativecommons.org/publicdomain/zero/1.0/",
        "Public Domain Mark": "http://creativecommons.org/publicdomain/mark/1.0/",
        "In Copyright": "http://rightsstatements.org/vocab/InC/1.0/",
        "In Copyright - Educational Use Permitted": (
            "http://rightsstatements.org/vocab/InC-EDU/1.0/"
        ),
        "In Copyright - EU Orphan Work": "http://rightsstatements.org/vocab/InC-OW-EU/1.0/",
        "No Copyright - Non-Commercial Use Only": (
            "http://rightsstatements.org/vocab/NoC-NC/1.0/"
        ),
        "No Copyright - Other Known Legal Restrictions": (
            "http://rightsstatements.org/vocab/NoC-OKLR/1.0/"
        ),
        "No Copyright - United States": "http://rightsstatements.org/vocab/NoC-US/1.0/",
        "Copyright Not Evaluated": "http://rightsstatements.org/vocab/CNE/1.0/",
        "Copyright Undetermined": "http://rightsstatements.org/vocab/UND/1.0/",
    }
)

_RIGHTS_BY_URI = {uri: name for name, uri in COMMON_RIGHTS_URIS.items()}


def is_valid_rights_uri(uri: Any) -> bool:
    """True when ``uri`` is one of the registered rights URIs."""
    return isinstance(uri, str) and uri in _RIGHTS_BY_URI


def get_rights_display_name(uri: str) -> str:
    """Return the display name of a registered rights URI, else the URI itself."""
    return _RIGHTS_BY_URI.get(uri, uri)
