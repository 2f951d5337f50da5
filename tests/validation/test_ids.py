"""Tests for id validation and URI repair helpers."""

from __future__ import annotations

import pytest

from iiif_tree.schema.templates import DEFAULT_BASE_URL
from iiif_tree.validation.ids import (
    convert_to_http_uri,
    get_uri_last_segment,
    has_fragment_identifier,
    is_valid_http_uri,
    is_valid_id,
    normalize_uri,
    remove_trailing_slash,
)


class TestIsValidId:
    def test_valid(self) -> None:
        check = is_valid_id("https://example.org/canvas/1", "Canvas")
        assert check.valid
        assert check.error is None

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing(self, value: object) -> None:
        assert is_valid_id(value, "Manifest").error == "ID is required"

    def test_not_http(self) -> None:
        check = is_valid_id("urn:uuid:1234", "Manifest")
        assert not check.valid
        assert check.error == "ID must be a valid HTTP(S) URI"

    def test_canvas_fragment(self) -> None:
        check = is_valid_id("https://example.org/canvas/1#xywh=0,0,10,10", "Canvas")
        assert check.error == "Canvas ID must not contain a fragment identifier"

    def test_fragment_allowed_elsewhere(self) -> None:
        assert is_valid_id("https://example.org/range/1#part", "Range").valid


class TestUriHelpers:
    def test_is_valid_http_uri(self) -> None:
        assert is_valid_http_uri("http://a")
        assert is_valid_http_uri("https://a")
        assert not is_valid_http_uri("ftp://a")
        assert not is_valid_http_uri(42)

    def test_has_fragment(self) -> None:
        assert has_fragment_identifier("https://a/b#c")
        assert not has_fragment_identifier("https://a/b")

    def test_convert_leaves_http_unchanged(self) -> None:
        assert convert_to_http_uri("https://a/b", "Canvas") == "https://a/b"

    def test_convert_wraps_and_encodes(self) -> None:
        assert (
            convert_to_http_uri("page 1", "Canvas")
            == f"{DEFAULT_BASE_URL}/canvas/page%201"
        )

    def test_convert_custom_base_and_empty_id(self) -> None:
        assert convert_to_http_uri("", "Range", "https://x.test/") == "https://x.test/range/item"

    def test_remove_trailing_slash(self) -> None:
        assert remove_trailing_slash("https://a/b/") == "https://a/b"
        assert remove_trailing_slash("https://a/b") == "https://a/b"

    def test_normalize_uri(self) -> None:
        assert normalize_uri("HTTPS://Example.org/A/") == "https://Example.org/A"
        assert normalize_uri("") == ""

    @pytest.mark.parametrize(
        ("uri", "expected"),
        [
            ("https://example.org/iiif/manifest/42", "42"),
            ("https://example.org/iiif/manifest/42/", "42"),
            ("urn:uuid:abc-123", "abc-123"),
            ("plain/relative/path", "path"),
            ("https://example.org", ""),
            ("", ""),
        ],
    )
    def test_last_segment(self, uri: str, expected: str) -> None:
        assert get_uri_last_segment(uri) == expected
