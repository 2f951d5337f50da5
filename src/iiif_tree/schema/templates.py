"""Minimum viable resource templates and small builders for common values.

Every builder returns a fresh dict, so callers may mutate the result freely.
"""

from __future__ import annotations

import uuid
from typing import Any

from iiif_tree.schema.vocabulary import PRESENTATION_CONTEXT, Motivation
from iiif_tree.tree.nodes import ResourceType

__all__ = [
    "DEFAULT_BASE_URL",
    "LanguageMap",
    "create_language_map",
    "create_metadata_entry",
    "generate_default_label",
    "generate_id",
    "get_minimum_template",
    "needs_context",
]

# Type alias for a IIIF language map: {"en": ["Title"], "none": ["..."]}
LanguageMap = dict[str, list[str]]

DEFAULT_BASE_URL = "https://example.org/iiif"

_T = ResourceType
_TOP_LEVEL = frozenset({_T.COLLECTION, _T.MANIFEST})


def create_language_map(value: str, language: str = "none") -> LanguageMap:
    return {language: [value]}


def create_metadata_entry(
    label: str, value: str, label_lang: str = "none", value_lang: str = "none"
) -> dict[str, LanguageMap]:
    return {
        "label": create_language_map(label, label_lang),
        "value": create_language_map(value, value_lang),
    }


def needs_context(resource_type: str) -> bool:
    """Only top-level resources (Collection, Manifest) carry ``@context``."""
    return resource_type in _TOP_LEVEL


def generate_default_label(resource_type: str, index: int | None = None) -> LanguageMap:
    """Return ``{"none": ["Untitled <Type>"]}``, numbered from 1 when ``index`` is given."""
    label = f"Untitled {resource_type}"
    if index is not None:
        label = f"{label} {index + 1}"
    return create_language_map(label)


def generate_id(resource_type: str, base_url: str | None = None) -> str:
    """Mint a new HTTP(S) id of the form ``<base>/<type>/<uuid4>``."""
    base = (base_url or DEFAULT_BASE_URL).rstrip("/")
    return f"{base}/{resource_type.lower()}/{uuid.uuid4()}"


def get_minimum_template(
    resource_type: str, resource_id: str, label: LanguageMap | None = None
) -> dict[str, Any]:
    """Return the smallest resource of ``resource_type`` that carries every
    REQUIRED property.

    Unknown types get only ``id`` and ``type``.
    """
    base: dict[str, Any] = {"id": resource_id, "type": resource_type}

    def titled(name: str) -> LanguageMap:
        if label is not None:
            return dict(label)
        return create_language_map(f"Untitled {name}")

    if resource_type in _TOP_LEVEL:
        return {
            "@context": PRESENTATION_CONTEXT,
            **base,
            "label": titled(resource_type),
            "items": [],
        }
    if resource_type == _T.CANVAS:
        return {
            **base,
            "label": titled("Canvas"),
            "height": 1000,
            "width": 800,
            "items": [],
        }
    if resource_type == _T.RANGE:
        return {**base, "label": titled("Range"), "items": []}
    if resource_type in (_T.ANNOTATION_PAGE, _T.CHOICE):
        return {**base, "items": []}
    if resource_type == _T.ANNOTATION:
        return {
            **base,
            "motivation": str(Motivation.PAINTING),
            "body": {"id": "", "type": str(_T.CONTENT_RESOURCE)},
            "target": "",
        }
    if resource_type == _T.ANNOTATION_COLLECTION:
        return {**base, "label": titled("Annotation Collection")}
    if resource_type == _T.AGENT:
        return {**base, "label": titled("Agent")}
    if resource_type == _T.SPECIFIC_RESOURCE:
        return {**base, "source": ""}
    if resource_type == _T.TEXTUAL_BODY:
        return {**base, "value": "", "language": "none"}
    if resource_type == _T.CONTENT_RESOURCE:
        return {**base, "label": titled("Content Resource")}
    return base
