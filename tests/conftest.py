"""Shared sample trees for the test suite.

All builders are deterministic and return fresh dicts on every call, so a
test may mutate what it receives without affecting other tests.

The sample Manifest is deliberately complete: it validates with no errors
and no warnings, so tests can introduce one defect at a time.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

BASE = "https://example.org/iiif"
CONTEXT = "http://iiif.io/api/presentation/3/context.json"


def language_map(text: str) -> dict[str, list[str]]:
    return {"en": [text]}


def make_canvas(manifest_id: str, index: int) -> dict[str, Any]:
    """A Canvas with one AnnotationPage holding one painting Annotation."""
    canvas_id = f"{manifest_id}/canvas/{index}"
    page_id = f"{canvas_id}/page/1"
    return {
        "id": canvas_id,
        "type": "Canvas",
        "label": language_map(f"Page {index}"),
        "height": 1000,
        "width": 800,
        "items": [
            {
                "id": page_id,
                "type": "AnnotationPage",
                "items": [
                    {
                        "id": f"{page_id}/annotation/1",
                        "type": "Annotation",
                        "motivation": "painting",
                        "body": {
                            "id": f"{BASE}/image/{index}/full/max/0/default.jpg",
                            "type": "Image",
                            "format": "image/jpeg",
                            "height": 1000,
                            "width": 800,
                        },
                        "target": canvas_id,
                    }
                ],
            }
        ],
    }


def make_manifest(name: str = "m1", canvases: int = 3) -> dict[str, Any]:
    """A complete Manifest with ``canvases`` Canvases."""
    manifest_id = f"{BASE}/manifest/{name}"
    return {
        "@context": CONTEXT,
        "id": manifest_id,
        "type": "Manifest",
        "label": language_map(f"Manifest {name}"),
        "summary": language_map("A sample manifest"),
        "metadata": [{"label": language_map("Date"), "value": language_map("1890")}],
        "provider": [
            {"id": f"{BASE}/agent/1", "type": "Agent", "label": language_map("Library")}
        ],
        "thumbnail": [
            {"id": f"{BASE}/thumb/{name}.jpg", "type": "Image", "format": "image/jpeg"}
        ],
        "items": [make_canvas(manifest_id, i) for i in range(1, canvases + 1)],
    }


def make_collection(name: str, items: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "@context": CONTEXT,
        "id": f"{BASE}/collection/{name}",
        "type": "Collection",
        "label": language_map(f"Collection {name}"),
        "summary": language_map("A sample collection"),
        "metadata": [{"label": language_map("Owner"), "value": language_map("Library")}],
        "provider": [
            {"id": f"{BASE}/agent/1", "type": "Agent", "label": language_map("Library")}
        ],
        "thumbnail": [
            {"id": f"{BASE}/thumb/{name}.jpg", "type": "Image", "format": "image/jpeg"}
        ],
        "items": items,
    }


def manifest_stub(name: str) -> dict[str, Any]:
    """A Manifest reference as a Collection lists it: id, type and label only."""
    return {
        "id": f"{BASE}/manifest/{name}",
        "type": "Manifest",
        "label": language_map(f"Manifest {name}"),
    }


@pytest.fixture
def manifest() -> dict[str, Any]:
    """Manifest m1 with three Canvases (10 nodes, depth 3)."""
    return make_manifest("m1", 3)


@pytest.fixture
def collection() -> dict[str, Any]:
    """Collection root -> [m1 (2 canvases), sub-collection -> [m2 (1 canvas)]]."""
    return make_collection(
        "root",
        [
            make_manifest("m1", 2),
            make_collection("sub", [make_manifest("m2", 1)]),
        ],
    )


@pytest.fixture
def build_manifest() -> Callable[..., dict[str, Any]]:
    return make_manifest


@pytest.fixture
def build_collection() -> Callable[..., dict[str, Any]]:
    return make_collection


@pytest.fixture
def build_stub() -> Callable[[str], dict[str, Any]]:
    return manifest_stub
