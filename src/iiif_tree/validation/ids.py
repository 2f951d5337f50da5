"""Identifier and URI helpers.

IIIF structural resources are identified by HTTP(S) URIs, and a Canvas id may
not carry a fragment.  These helpers check and repair such ids.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlsplit

from iiif_tree.schema.templates import DEFAULT_BASE_URL
from iiif_tree.tree.nodes import ResourceType

__all__ = [
    "IdCheck",
    "convert_to_http_uri",
    "get_uri_last_segment",
    "has_fragment_identifier",
    "is_valid_http_uri",
    "is_valid_id",
    "normalize_uri",
    "remove_trailing_slash",
]

_SCHEME = re.compile(r"^(https?)://", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class IdCheck:
    valid: bool
    error: str | None = None


def is_valid_http_uri(uri: Any) -> bool:
    return isinstance(uri, str) and uri.startswith(("http://", "https://"))


def has_fragment_identifier(uri: str) -> bool:
    return "#" in uri


def is_valid_id(resource_id: Any, resource_type: str) -> IdCheck:
    """Check that ``resource_id`` is usable as the id of a ``resource_type``."""
    if not resource_id:
        return IdCheck(False, "ID is required")
    if not is_valid_http_uri(resource_id):
        return IdCheck(False, "ID must be a valid HTTP(S) URI")
    if resource_type == ResourceType.CANVAS and has_fragment_identifier(resource_id):
        return IdCheck(False, "Canvas ID must not contain a fragment identifier")
    return IdCheck(True)


def convert_to_http_uri(
    resource_id: str, resource_type: str, base_url: str | None = None
) -> str:
    """Return ``resource_id`` unchanged if it is HTTP(S), else wrap it in one.

    The old identifier is kept, percent-encoded, as the last path segment:
    ``convert_to_http_uri("page 1", "Canvas")`` gives
    ``"<base>/canvas/page%201"``.
    """
    if is_valid_http_uri(resource_id):
        return resource_id
    base = (base_url or DEFAULT_BASE_URL).rstrip("/")
    kind = (resource_type or "resource").lower()
    return f"{base}/{kind}/{quote(resource_id or 'item', safe='')}"


def remove_trailing_slash(uri: str) -> str:
    return uri[:-1] if uri.endswith("/") else uri


def normalize_uri(uri: str) -> str:
    """Drop one trailing slash and lowercase the HTTP(S) scheme."""
    if not uri:
        return uri
    normalized = remove_trailing_slash(uri)
    return _SCHEME.sub(lambda m: f"{m.group(1).lower()}://", normalized, count=1)


def get_uri_last_segment(uri: str) -> str:
    """Return the last non-empty path segment (or URN component) of ``uri``."""
    if not uri:
        return ""
    if uri.startswith("urn:"):
        return uri.rsplit(":", 1)[-1]
    path = urlsplit(uri).path if _SCHEME.match(uri) else uri
    parts = [p for p in path.split("/") if p]
    return parts[-1] if parts else ""
