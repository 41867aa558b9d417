"""Unit tests for the error hierarchy."""

import pytest

from .lib import (
    ExportError,
    ExportWarning,
    InputError,
    StructuralError,
    WarningCategory,
)


class TestErrors:
    """Tests for exception classes."""

    @pytest.mark.unit
    def test_hierarchy(self):
        """Both fatal errors derive from ExportError."""
        assert issubclass(InputError, ExportError)
        assert issubclass(StructuralError, ExportError)

    @pytest.mark.unit
    def test_structural_error_carries_path(self):
        """Cycle path is kept on the exception."""
        err = StructuralError("cycle", path=["a", "b", "a"])
        assert err.path == ["a", "b", "a"]
        assert str(err) == "cycle"

    @pytest.mark.unit
    def test_structural_error_default_path(self):
        """Path defaults to an empty list."""
        assert StructuralError("cycle").path == []


class TestExportWarning:
    """Tests for ExportWarning."""

    @pytest.mark.unit
    def test_str(self):
        """String form names the category and node."""
        warning = ExportWarning(
            WarningCategory.LOSSY_STYLE, "card", "inner shadow dropped"
        )
        assert str(warning) == "[lossy_style] card: inner shadow dropped"

    @pytest.mark.unit
    def test_category_values(self):
        """Category values are stable strings."""
        assert {c.value for c in WarningCategory} == {
            "unsupported_kind",
            "missing_child",
            "duplicate_parent",
            "lossy_style",
            "dropped_children",
        }
