"""Unit tests for the tree walker."""

import sys

import pytest

from sheet_export.schema import Component, ComponentTree

from . import InputError, StructuralError, WarningCategory
from .lib import find_cycle, walk


def _tree(*components, root_ids=None):
    return ComponentTree.from_components(
        [Component.model_validate(c) for c in components], root_ids
    )


class TestWalkOrder:
    """Tests for traversal order and structure."""

    @pytest.mark.unit
    def test_preorder(self, nested_tree):
        """Nodes appear in pre-order with children in childIds order."""
        result = walk("root", nested_tree)
        assert [n.id for n in result] == ["root", "card", "title", "body", "cta"]
        assert [n.depth for n in result] == [0, 1, 2, 2, 1]

    @pytest.mark.unit
    def test_parent_and_children(self, nested_tree):
        """Parent ids and emitted children are recorded."""
        result = walk("root", nested_tree)
        card = result.node("card")
        assert card.parent_id == "root"
        assert [c.id for c in result.children(card)] == ["title", "body"]
        assert result.root.is_root

    @pytest.mark.unit
    def test_subtree_root(self, nested_tree):
        """Walking from an inner node exports only its subtree."""
        result = walk("card", nested_tree)
        assert [n.id for n in result] == ["card", "title", "body"]
        assert result.root.geometry.x == 0

    @pytest.mark.unit
    def test_reiterable(self, nested_tree):
        """A walk can be iterated more than once."""
        result = walk("root", nested_tree)
        assert list(result) == list(result)
        assert len(result) == 5

    @pytest.mark.unit
    def test_pure(self, nested_tree):
        """Walking twice gives equal results and leaves the snapshot intact."""
        before = nested_tree.model_dump()
        assert walk("root", nested_tree) == walk("root", nested_tree)
        assert nested_tree.model_dump() == before

    @pytest.mark.unit
    def test_deep_tree_is_iterative(self):
        """Chains deeper than the recursion limit are walked."""
        depth = sys.getrecursionlimit() + 50
        components = [
            {"id": f"n{i}", "type": "container", "childIds": [f"n{i + 1}"]}
            for i in range(depth)
        ]
        components.append({"id": f"n{depth}", "type": "text"})
        result = walk("n0", _tree(*components))
        assert len(result) == depth + 1
        assert result[-1].depth == depth


class TestWalkFailures:
    """Tests for the failure policy."""

    @pytest.mark.unit
    def test_unknown_root(self, sample_tree):
        """Unknown root ids raise InputError."""
        with pytest.raises(InputError):
            walk("nope", sample_tree)

    @pytest.mark.unit
    def test_cycle(self, cyclic_tree):
        """Cycles raise StructuralError with the path."""
        with pytest.raises(StructuralError) as exc_info:
            walk("a", cyclic_tree)
        assert exc_info.value.path == ["a", "b", "a"]

    @pytest.mark.unit
    def test_missing_child_warns(self):
        """Missing children are skipped with a warning."""
        tree = _tree(
            {"id": "root", "type": "container", "childIds": ["ghost", "t"]},
            {"id": "t", "type": "text"},
        )
        result = walk("root", tree)
        assert [n.id for n in result] == ["root", "t"]
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.category == WarningCategory.MISSING_CHILD
        assert warning.node_id == "root"
        assert warning.value == "ghost"

    @pytest.mark.unit
    def test_duplicate_parent_warns(self):
        """A child listed under two parents is emitted once."""
        tree = _tree(
            {"id": "root", "type": "container", "childIds": ["a", "b"]},
            {"id": "a", "type": "container", "childIds": ["shared"]},
            {"id": "b", "type": "container", "childIds": ["shared"]},
            {"id": "shared", "type": "text"},
        )
        result = walk("root", tree)
        assert [n.id for n in result].count("shared") == 1
        assert result.node("shared").parent_id == "a"
        assert [w.category for w in result.warnings] == [
            WarningCategory.DUPLICATE_PARENT
        ]

    @pytest.mark.unit
    def test_hidden_children_omitted(self):
        """Hidden children are left out silently."""
        tree = _tree(
            {"id": "root", "type": "container", "childIds": ["t"]},
            {"id": "t", "type": "text", "visible": False},
        )
        result = walk("root", tree)
        assert [n.id for n in result] == ["root"]
        assert result.root.child_ids == ()
        assert result.warnings == ()


class TestGeometry:
    """Tests for geometry resolution."""

    @pytest.mark.unit
    def test_root_at_origin(self, sample_tree):
        """The export root sits at the origin."""
        root = walk("root", sample_tree).root
        assert (root.geometry.x, root.geometry.y) == (0, 0)
        assert root.geometry.numeric_width == 300

    @pytest.mark.unit
    def test_absolute_composes(self, nested_tree):
        """Absolute offsets compose along the ancestry."""
        result = walk("root", nested_tree)
        title = result.node("title").geometry
        assert (title.x, title.y) == (12, 12)
        assert (title.absolute_x, title.absolute_y) == (32, 32)

    @pytest.mark.unit
    def test_fixed_relative_to_root(self):
        """Fixed nodes use coordinates relative to the export root."""
        tree = _tree(
            {
                "id": "root",
                "type": "container",
                "childIds": ["box"],
            },
            {
                "id": "box",
                "type": "container",
                "position": {"x": 50, "y": 40},
                "childIds": ["pinned"],
            },
            {
                "id": "pinned",
                "type": "button",
                "position": {"type": "fixed", "x": 10, "y": 5},
            },
        )
        pinned = walk("root", tree).node("pinned").geometry
        assert (pinned.absolute_x, pinned.absolute_y) == (10, 5)
        assert (pinned.x, pinned.y) == (-40, -35)
        assert not pinned.in_flow

    @pytest.mark.unit
    def test_flow_offsets_column(self):
        """Relative children of a flex column stack after padding and gap."""
        tree = _tree(
            {
                "id": "root",
                "type": "container",
                "flexLayout": {"enabled": True, "gap": 10, "padding": 20},
                "childIds": ["a", "b", "abs"],
            },
            {"id": "a", "type": "text", "position": {"type": "flex", "height": 30}},
            {"id": "b", "type": "text", "position": {"type": "relative", "height": 40}},
            {"id": "abs", "type": "text", "position": {"x": 5, "y": 6}},
        )
        result = walk("root", tree)
        a, b, absolute = (result.node(i).geometry for i in ("a", "b", "abs"))
        assert (a.x, a.y, a.in_flow) == (20, 20, True)
        assert (b.x, b.y, b.in_flow) == (20, 60, True)
        assert (absolute.x, absolute.y, absolute.in_flow) == (5, 6, False)

    @pytest.mark.unit
    def test_flow_offsets_row(self):
        """Row direction stacks along x."""
        tree = _tree(
            {
                "id": "root",
                "type": "container",
                "flexLayout": {
                    "enabled": True,
                    "direction": "row",
                    "gap": 4,
                    "padding": 0,
                },
                "childIds": ["a", "b"],
            },
            {"id": "a", "type": "badge", "position": {"type": "flex", "width": 50}},
            {"id": "b", "type": "badge", "position": {"type": "flex", "width": 50}},
        )
        result = walk("root", tree)
        assert result.node("b").geometry.x == 54

    @pytest.mark.unit
    def test_relative_outside_flex_uses_declared(self):
        """Relative nodes outside a flex parent keep their declared offset."""
        tree = _tree(
            {"id": "root", "type": "container", "childIds": ["a"]},
            {"id": "a", "type": "text", "position": {"type": "flex", "x": 7, "y": 9}},
        )
        geometry = walk("root", tree).node("a").geometry
        assert (geometry.x, geometry.y, geometry.in_flow) == (7, 9, False)


class TestFindCycle:
    """Tests for find_cycle."""

    @pytest.mark.unit
    def test_acyclic(self, nested_tree):
        """Trees have no cycle."""
        assert find_cycle("root", nested_tree) is None

    @pytest.mark.unit
    def test_self_loop(self):
        """A node listing itself is a cycle."""
        tree = _tree(
            {"id": "a", "type": "container", "childIds": ["a"]}, root_ids=["a"]
        )
        assert find_cycle("a", tree) == ["a", "a"]

    @pytest.mark.unit
    def test_diamond_is_not_a_cycle(self):
        """Shared descendants are not cycles."""
        tree = _tree(
            {"id": "r", "type": "container", "childIds": ["a", "b"]},
            {"id": "a", "type": "container", "childIds": ["c"]},
            {"id": "b", "type": "container", "childIds": ["c"]},
            {"id": "c", "type": "text"},
        )
        assert find_cycle("r", tree) is None
