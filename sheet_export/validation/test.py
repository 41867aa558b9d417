"""Unit tests for validation module."""

import pytest

from sheet_export.schema import Component, ComponentTree, load_tree
from sheet_export.validation import ValidationError, is_valid, validate_tree


def _tree(*components, roots=None):
    return load_tree({"components": list(components), "rootIds": roots or ["root"]})


class TestValidateTree:
    """Tests for validate_tree function."""

    @pytest.mark.unit
    def test_valid_tree(self, nested_tree):
        """Well-formed tree passes validation."""
        assert validate_tree(nested_tree) == []

    @pytest.mark.unit
    def test_missing_child(self):
        """Dangling child ids are reported against the parent."""
        tree = _tree({"id": "root", "type": "container", "childIds": ["ghost"]})
        errors = validate_tree(tree)
        assert len(errors) == 1
        assert errors[0].error_type == "missing_child"
        assert errors[0].node_id == "root"
        assert "ghost" in errors[0].message

    @pytest.mark.unit
    def test_unknown_root(self):
        """Root ids must exist."""
        tree = _tree({"id": "root", "type": "container"}, roots=["root", "gone"])
        errors = validate_tree(tree)
        assert [(e.node_id, e.error_type) for e in errors] == [
            ("gone", "unknown_root")
        ]

    @pytest.mark.unit
    def test_multiple_parents(self):
        """A child listed by two parents is reported once."""
        tree = _tree(
            {"id": "root", "type": "container", "childIds": ["left", "right"]},
            {"id": "left", "type": "container", "childIds": ["shared"]},
            {"id": "right", "type": "container", "childIds": ["shared"]},
            {"id": "shared", "type": "text"},
        )
        errors = validate_tree(tree)
        assert len(errors) == 1
        assert errors[0].error_type == "multiple_parents"
        assert errors[0].node_id == "shared"
        assert "left, right" in errors[0].message

    @pytest.mark.unit
    def test_cycle_reported_once(self, cyclic_tree):
        """A cycle is reported once however many members it has."""
        errors = [e for e in validate_tree(cyclic_tree) if e.error_type == "cycle"]
        assert len(errors) == 1
        assert errors[0].node_id == "a"
        assert "a -> b -> a" in errors[0].message

    @pytest.mark.unit
    def test_unreachable_cycle(self):
        """Cycles outside every root subtree are still found."""
        tree = _tree(
            {"id": "root", "type": "container"},
            {"id": "x", "type": "container", "childIds": ["y"]},
            {"id": "y", "type": "container", "childIds": ["x"]},
        )
        errors = validate_tree(tree)
        assert {e.error_type for e in errors} == {"cycle"}

    @pytest.mark.unit
    def test_id_mismatch(self):
        """Keys must match the component they hold."""
        component = Component.model_validate({"id": "real", "type": "text"})
        tree = ComponentTree(components={"alias": component}, root_ids=["alias"])
        errors = validate_tree(tree)
        assert [(e.node_id, e.error_type) for e in errors] == [
            ("alias", "id_mismatch")
        ]

    @pytest.mark.unit
    def test_collects_every_error(self):
        """Validation does not stop at the first problem."""
        tree = _tree(
            {"id": "root", "type": "container", "childIds": ["ghost", "a"]},
            {"id": "a", "type": "container", "childIds": ["b"]},
            {"id": "b", "type": "container", "childIds": ["a"]},
            roots=["root", "nope"],
        )
        error_types = {e.error_type for e in validate_tree(tree)}
        assert error_types == {
            "unknown_root",
            "missing_child",
            "multiple_parents",
            "cycle",
        }


class TestIsValid:
    """Tests for is_valid convenience function."""

    @pytest.mark.unit
    def test_valid_returns_true(self, sample_tree):
        """Valid tree returns True."""
        assert is_valid(sample_tree) is True

    @pytest.mark.unit
    def test_invalid_returns_false(self, cyclic_tree):
        """Invalid tree returns False."""
        assert is_valid(cyclic_tree) is False


class TestValidationError:
    """Tests for ValidationError dataclass."""

    @pytest.mark.unit
    def test_fields(self):
        """ValidationError stores all fields."""
        err = ValidationError(node_id="x", message="msg", error_type="cycle")
        assert err.node_id == "x"
        assert err.message == "msg"
        assert err.error_type == "cycle"
