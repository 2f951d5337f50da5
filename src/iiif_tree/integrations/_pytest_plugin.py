"""pytest plugin for iiif-tree.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from iiif_tree import ValidationOptions, validate_tree
from iiif_tree.validation.issues import NO_ID_KEY


@pytest.fixture(scope="session")
def assert_iiif_valid() -> Any:
    """Fixture that returns a callable IIIF tree validity asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to validate_tree() which creates a fresh TreeValidator per call).

    Usage in tests::

        def test_export(assert_iiif_valid):
            assert_iiif_valid(build_manifest())

        def test_broken(assert_iiif_valid):
            with pytest.raises(AssertionError, match=r"Missing required field"):
                assert_iiif_valid({"type": "Manifest"})

    Returns:
        A callable ``_assert(root, options=None, allow_warnings=True) -> None``
        that raises ``AssertionError`` when the tree has ERROR-level issues.
    """

    def _assert(
        root: Any,
        options: ValidationOptions | None = None,
        allow_warnings: bool = True,
    ) -> None:
        """Assert that a resource tree validates without errors.

        Args:
            root:           The resource tree produced by the code under test.
            options:        Optional ValidationOptions.
            allow_warnings: When False, WARNING-level issues fail the
                            assertion too.

        Raises:
            AssertionError: Listing every offending issue as
                ``[level] node_id: message``.
        """
        report = validate_tree(root, options)
        failing = report.issues if not allow_warnings else report.errors
        if failing:
            lines = "\n".join(
                f"  [{issue.level}] {issue.node_id or NO_ID_KEY}: {issue.message}"
                for issue in failing
            )
            raise AssertionError(
                f"IIIF tree not valid: {report.error_count} error(s), "
                f"{report.warning_count} warning(s)\n{lines}"
            )

    return _assert
