"""Deterministic tree generators for performance benchmarks.

All generators produce fixed, reproducible trees. No random values.
Three tiers, counted in nodes visited by ``traverse``:
- small:  one Manifest with 25 Canvases (~76 nodes)
- medium: one Collection of 10 Manifests x 50 Canvases (~1.5k nodes)
- large:  one Collection of 10 sub-Collections x 10 Manifests x 50 Canvases
  (~15k nodes)

Every Manifest also carries a Range over its Canvases so that the duplicate
scanner sees the usual reference repeats.
"""

from __future__ import annotations

from typing import Any

import pytest

BASE = "https://bench.example.org/iiif"
CONTEXT = "http://iiif.io/api/presentation/3/context.json"


def _label(text: str) -> dict[str, list[str]]:
    return {"en": [text]}


def _canvas(manifest_id: str, index: int) -> dict[str, Any]:
    canvas_id = f"{manifest_id}/canvas/{index}"
    page_id = f"{canvas_id}/page/1"
    return {
        "id": canvas_id,
        "type": "Canvas",
        "label": _label(f"p. {index}"),
        "height": 1200,
        "width": 900,
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
                            "id": f"{canvas_id}/full.jpg",
                            "type": "Image",
                            "format": "image/jpeg",
                        },
                        "target": canvas_id,
                    }
                ],
            }
        ],
    }


def generate_manifest(name: str, canvases: int) -> dict[str, Any]:
    """Generate a Manifest with ``canvases`` Canvases and one Range over them."""
    manifest_id = f"{BASE}/manifest/{name}"
    items = [_canvas(manifest_id, i) for i in range(1, canvases + 1)]
    return {
        "@context": CONTEXT,
        "id": manifest_id,
        "type": "Manifest",
        "label": _label(name),
        "items": items,
        "structures": [
            {
                "id": f"{manifest_id}/range/1",
                "type": "Range",
                "label": _label("All pages"),
                "items": [{"id": c["id"], "type": "Canvas"} for c in items],
            }
        ],
    }


def generate_collection(
    name: str, manifests: int, canvases: int, sub_collections: int = 0
) -> dict[str, Any]:
    """Generate a Collection of Manifests, optionally nested one level deeper."""
    if sub_collections:
        items = [
            generate_collection(f"{name}-{i}", manifests, canvases)
            for i in range(sub_collections)
        ]
    else:
        items = [generate_manifest(f"{name}-m{i}", canvases) for i in range(manifests)]
    return {
        "@context": CONTEXT,
        "id": f"{BASE}/collection/{name}",
        "type": "Collection",
        "label": _label(name),
        "items": items,
    }


# --- Fixtures for each size tier ---


@pytest.fixture
def tree_small() -> dict[str, Any]:
    """One Manifest with 25 Canvases."""
    return generate_manifest("small", 25)


@pytest.fixture
def tree_medium() -> dict[str, Any]:
    """One Collection of 10 Manifests x 50 Canvases."""
    return generate_collection("medium", manifests=10, canvases=50)


@pytest.fixture
def tree_large() -> dict[str, Any]:
    """10 sub-Collections x 10 Manifests x 50 Canvases."""
    return generate_collection("large", manifests=10, canvases=50, sub_collections=10)
