"""Tests for TreeValidator and ValidationOptions.

Verifies:
- Complete sample trees validate with no issues and correct node counts
- Tree-context checks: root @context, annotations/structures child types,
  painting content on Canvases, rights registry
- Duplicate policy: every repeated id gets one INTEGRITY issue; owned
  repeats and cycles are errors, reference repeats are warnings
- Options: include_warnings, check_duplicates, require_root_context, max_depth
"""

from __future__ import annotations

import logging
from typing import Any

import pytest

from iiif_tree.tree.duplicates import find_duplicate_ids
from iiif_tree.validation.issues import IssueCategory, IssueLevel
from iiif_tree.validation.tree import TreeValidator, ValidationOptions

LICENSE = "https://example.org/licenses/house"


def messages(issues: list[Any]) -> list[str]:
    return [i.message for i in issues]


def validate(root: Any, **options: Any) -> Any:
    return TreeValidator(ValidationOptions(**options)).validate(root)


# ---------------------------------------------------------------------------
# ValidationOptions
# ---------------------------------------------------------------------------


class TestValidationOptions:
    """ValidationOptions defaults and construction checks."""

    def test_defaults(self) -> None:
        """Every check is on and the common rights URIs are known."""
        opts = ValidationOptions()
        assert opts.include_warnings is True
        assert opts.check_duplicates is True
        assert opts.require_root_context is True
        assert opts.max_depth == 0
        assert "http://creativecommons.org/licenses/by/4.0/" in opts.known_rights_uris

    def test_negative_max_depth(self) -> None:
        """A negative max_depth raises ValueError."""
        with pytest.raises(ValueError, match="max_depth"):
            ValidationOptions(max_depth=-2)

    def test_rights_coerced_to_frozenset(self) -> None:
        """known_rights_uris given as a list is stored as a frozenset."""
        opts = ValidationOptions(known_rights_uris=[LICENSE])  # type: ignore[arg-type]
        assert opts.known_rights_uris == frozenset({LICENSE})

    def test_frozen(self) -> None:
        """Options cannot be reassigned after construction."""
        opts = ValidationOptions()
        with pytest.raises(AttributeError):
            opts.max_depth = 3  # type: ignore[misc]

    def test_validator_exposes_options(self) -> None:
        """TreeValidator keeps the options it was given, or the defaults."""
        opts = ValidationOptions(include_warnings=False)
        assert TreeValidator(opts).options is opts
        assert TreeValidator().options == ValidationOptions()


# ---------------------------------------------------------------------------
# Clean trees
# ---------------------------------------------------------------------------


class TestCleanTrees:
    """Complete sample trees produce empty reports."""

    def test_manifest(self, manifest: dict[str, Any]) -> None:
        """The sample Manifest has no issues and 10 nodes."""
        report = validate(manifest)
        assert report.issues == []
        assert report.is_valid
        assert report.node_count == 10
        assert report.computation_time_ms >= 0.0

    def test_collection(self, collection: dict[str, Any]) -> None:
        """The sample Collection has no issues and 13 nodes."""
        report = validate(collection)
        assert report.issues == []
        assert report.node_count == 13

    def test_debug_summary_logged(
        self, manifest: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        """A DEBUG summary line is logged for every validation."""
        with caplog.at_level(logging.DEBUG, logger="iiif_tree.validation.tree"):
            validate(manifest)
        assert any("Validated 10 node(s)" in r.getMessage() for r in caplog.records)

    def test_non_mapping_root(self) -> None:
        """A non-mapping root yields one error and zero nodes."""
        report = validate(["not", "a", "node"])
        assert report.node_count == 0
        assert report.error_count == 1
        assert report.errors[0].message == "Resource must be an object, got list"


# ---------------------------------------------------------------------------
# Tree-context checks
# ---------------------------------------------------------------------------


class TestRootContext:
    """@context is required on a top-level Collection or Manifest."""

    def test_root_without_context(self, manifest: dict[str, Any]) -> None:
        """A root Manifest without @context gets one PROPERTY error."""
        del manifest["@context"]
        report = validate(manifest)
        assert messages(report.errors) == ["Top-level resource must have @context property"]
        assert report.errors[0].node_id == manifest["id"]
        assert report.errors[0].property_name == "@context"

    def test_can_be_disabled(self, manifest: dict[str, Any]) -> None:
        """require_root_context=False skips the check."""
        del manifest["@context"]
        assert validate(manifest, require_root_context=False).issues == []

    def test_nested_manifest_needs_no_context(self, collection: dict[str, Any]) -> None:
        """Only the root needs @context."""
        del collection["items"][0]["@context"]
        assert validate(collection).issues == []


class TestChildCollections:
    """annotations and structures hold only their allowed child types."""

    def test_annotations_must_hold_pages(self, manifest: dict[str, Any]) -> None:
        """An Annotation directly under Canvas.annotations is a STRUCTURAL error."""
        canvas = manifest["items"][0]
        canvas["annotations"] = [
            {
                "id": f"{canvas['id']}/comment/1",
                "type": "Annotation",
                "motivation": "supplementing",
                "body": {"type": "TextualBody", "value": "Note"},
                "target": canvas["id"],
            }
        ]
        report = validate(manifest)
        assert messages(report.errors) == [
            "annotations entry at index 0 has invalid type 'Annotation' "
            "for parent type 'Canvas'"
        ]
        assert report.errors[0].category is IssueCategory.STRUCTURAL
        assert report.errors[0].node_id == canvas["id"]

    def test_structures_must_hold_ranges(self, manifest: dict[str, Any]) -> None:
        """A Canvas under Manifest.structures is an error."""
        manifest["structures"] = [
            {"id": f"{manifest['id']}/canvas/99", "type": "Canvas", "items": []}
        ]
        report = validate(manifest, include_warnings=False)
        assert messages(report.errors) == [
            "structures entry at index 0 has invalid type 'Canvas' for parent type 'Manifest'"
        ]

    def test_unknown_child_type(self, manifest: dict[str, Any]) -> None:
        """An unknown child type is reported on the parent and on the child."""
        page = manifest["items"][0]["items"][0]
        page["items"].append({"id": f"{page['id']}/x", "type": "Sequence"})
        report = validate(manifest)
        assert messages(report.errors) == [
            "Item at index 1 has invalid type 'Sequence' for parent type 'AnnotationPage'",
            "Unknown resource type: 'Sequence'",
        ]


class TestCanvasContent:
    """Canvases without painting annotations are flagged."""

    def test_canvas_without_painting(self, manifest: dict[str, Any]) -> None:
        """A Canvas with only supplementing content gets a warning."""
        annotation = manifest["items"][1]["items"][0]["items"][0]
        annotation["motivation"] = "supplementing"
        report = validate(manifest)
        assert report.is_valid
        assert messages(report.warnings) == [
            'Canvas has no "painting" content. It will appear blank.'
        ]
        assert report.warnings[0].node_id == manifest["items"][1]["id"]

    def test_painting_in_list(self, manifest: dict[str, Any]) -> None:
        """A motivation list containing painting counts as painting."""
        annotation = manifest["items"][0]["items"][0]["items"][0]
        annotation["motivation"] = ["supplementing", "painting"]
        assert validate(manifest).issues == []


class TestRights:
    """Rights URIs outside the known registry get a warning."""

    def test_unknown_registry(self, manifest: dict[str, Any]) -> None:
        """An unregistered rights URI is a warning, not an error."""
        manifest["rights"] = LICENSE
        report = validate(manifest)
        assert report.is_valid
        assert messages(report.warnings) == [
            f"Rights URI is not from a known registry: {LICENSE}"
        ]

    def test_known_registry(self, manifest: dict[str, Any]) -> None:
        """A RightsStatements.org URI is accepted."""
        manifest["rights"] = "http://rightsstatements.org/vocab/InC/1.0/"
        assert validate(manifest).issues == []

    def test_custom_registry(self, manifest: dict[str, Any]) -> None:
        """known_rights_uris replaces the default registry."""
        manifest["rights"] = LICENSE
        assert validate(manifest, known_rights_uris=frozenset({LICENSE})).issues == []


# ---------------------------------------------------------------------------
# Duplicate ids
# ---------------------------------------------------------------------------


def integrity_ids(report: Any) -> list[str]:
    return [i.node_id for i in report.issues if i.category is IssueCategory.INTEGRITY]


class TestDuplicates:
    """Every repeated id is reported; the level depends on how it repeats."""

    def test_canvas_listed_twice(self, manifest: dict[str, Any]) -> None:
        """An owned Canvas listed twice is an error; its descendants are warnings."""
        canvas = manifest["items"][0]
        manifest["items"].append(canvas)
        report = validate(manifest)
        assert messages(report.errors) == [
            f"Duplicate ID detected: {canvas['id']} appears at 2 positions. "
            "This will break most IIIF viewers."
        ]
        assert report.errors[0].category is IssueCategory.INTEGRITY
        page = canvas["items"][0]
        assert [i.node_id for i in report.warnings] == [page["id"], page["items"][0]["id"]]

    def test_canvas_owned_by_two_manifests(
        self, build_manifest: Any, build_collection: Any
    ) -> None:
        """A Canvas owned by two Manifests is an error."""
        m1 = build_manifest("m1", 1)
        m2 = build_manifest("m2", 1)
        m2["items"] = [dict(m1["items"][0])]
        root = build_collection("root", [m1, m2])
        report = validate(root)
        assert [i.node_id for i in report.errors] == [m1["items"][0]["id"]]

    def test_manifest_in_two_collections(
        self, build_manifest: Any, build_collection: Any
    ) -> None:
        """A shared Manifest and its subtree are reported as warnings."""
        shared = build_manifest("shared", 2)
        root = build_collection(
            "root",
            [build_collection("a", [shared]), build_collection("b", [shared])],
        )
        report = validate(root)
        assert report.is_valid
        assert integrity_ids(report) == [d.id for d in find_duplicate_ids(root)]
        assert len(report.warnings) == 7
        assert report.warnings[0].message == (
            f"Resource {shared['id']} appears at 2 positions in the tree"
        )

    def test_range_references_canvas(self, manifest: dict[str, Any]) -> None:
        """A Canvas listed by a Range is a warning."""
        canvas_id = manifest["items"][0]["id"]
        manifest["structures"] = [
            {
                "id": f"{manifest['id']}/range/1",
                "type": "Range",
                "label": {"en": ["Chapter 1"]},
                "items": [{"id": canvas_id, "type": "Canvas"}],
            }
        ]
        report = validate(manifest)
        assert report.is_valid
        assert messages(report.issues) == [
            f"Resource {canvas_id} appears at 2 positions in the tree"
        ]
        assert report.issues[0].level is IssueLevel.WARNING
        assert report.issues[0].category is IssueCategory.INTEGRITY

    def test_report_agrees_with_scanner(
        self, build_manifest: Any, build_collection: Any
    ) -> None:
        """The report names exactly the ids the duplicate scanner finds."""
        m = build_manifest("m", 1)
        root = build_collection("root", [build_collection("a", [m]), m])
        root["items"].append(root["items"][0])
        assert integrity_ids(validate(root)) == [d.id for d in find_duplicate_ids(root)]

    def test_same_reference_twice_is_warning(
        self, build_manifest: Any, build_collection: Any
    ) -> None:
        """A parent listing the same Manifest twice gets a redundancy warning."""
        m = build_manifest("twice", 1)
        root = build_collection("root", [m, m])
        report = validate(root)
        assert report.is_valid
        assert report.warnings[0].message == (
            f"Resource {m['id']} is listed more than once by the same parent"
        )
        assert report.warnings[0].category is IssueCategory.INTEGRITY
        assert integrity_ids(report) == [d.id for d in find_duplicate_ids(root)]

    def test_cycle_is_error(self, build_collection: Any, build_manifest: Any) -> None:
        """A node listing its own ancestor is an error on that ancestor."""
        root = build_collection("loop", [build_manifest("m1", 1)])
        root["items"].append(root)
        report = validate(root)
        assert [i.node_id for i in report.errors] == [root["id"]]
        assert report.errors[0].category is IssueCategory.INTEGRITY

    def test_can_be_disabled(self, manifest: dict[str, Any]) -> None:
        """check_duplicates=False skips the scan."""
        manifest["items"].append(manifest["items"][0])
        assert validate(manifest, check_duplicates=False).issues == []


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class TestOptions:
    """include_warnings and max_depth shape the report."""

    def test_include_warnings_false(self, manifest: dict[str, Any]) -> None:
        """Warnings are dropped when include_warnings is False."""
        del manifest["summary"]
        assert validate(manifest).warning_count == 1
        report = validate(manifest, include_warnings=False)
        assert report.issues == []

    def test_errors_kept_without_warnings(self, manifest: dict[str, Any]) -> None:
        """Errors survive include_warnings=False."""
        del manifest["summary"], manifest["label"]
        report = validate(manifest, include_warnings=False)
        assert messages(report.issues) == ["Missing required field: label"]
        assert all(i.level is IssueLevel.ERROR for i in report.issues)

    def test_max_depth(self, manifest: dict[str, Any]) -> None:
        """Nodes below max_depth are not validated."""
        del manifest["items"][0]["items"][0]["items"][0]["target"]
        assert validate(manifest).error_count == 1
        report = validate(manifest, max_depth=2)
        assert report.issues == []
        assert report.node_count == 7

    def test_max_depth_bounds_duplicates(self, manifest: dict[str, Any]) -> None:
        """Repeats below max_depth are not reported."""
        page = manifest["items"][0]["items"][0]
        page["items"].append(page["items"][0])
        assert integrity_ids(validate(manifest)) == [page["items"][0]["id"]]
        assert validate(manifest, max_depth=2).issues == []

    def test_max_depth_keeps_shallow_duplicates(self, manifest: dict[str, Any]) -> None:
        """Repeats within max_depth are still reported; deeper descendants are not."""
        canvas = manifest["items"][0]
        manifest["items"].append(canvas)
        report = validate(manifest, max_depth=1)
        assert integrity_ids(report) == [canvas["id"]]
        assert report.errors[0].message == (
            f"Duplicate ID detected: {canvas['id']} appears at 2 positions. "
            "This will break most IIIF viewers."
        )
