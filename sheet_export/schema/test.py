"""Unit tests for the Schema module."""

import pytest
from pydantic import ValidationError

from sheet_export.core.errors import InputError
from sheet_export.schema import (
    KIND_REGISTRY,
    Component,
    ComponentCategory,
    ComponentKind,
    ComponentTree,
    FlexDirection,
    GradientType,
    PositionMode,
    get_kind_meta,
    get_kinds_by_category,
    load_tree,
)


class TestKindRegistry:
    """Tests for KIND_REGISTRY completeness."""

    @pytest.mark.unit
    def test_all_kinds_registered(self):
        """Every ComponentKind has metadata in registry."""
        for kind in ComponentKind:
            assert kind in KIND_REGISTRY, f"Missing metadata for {kind}"

    @pytest.mark.unit
    def test_registry_has_20_entries(self):
        """Registry contains exactly the 20 editor kinds."""
        assert len(KIND_REGISTRY) == 20

    @pytest.mark.unit
    def test_all_entries_have_descriptions(self):
        """Every kind has a non-empty description."""
        for kind, meta in KIND_REGISTRY.items():
            assert meta.description, f"{kind} missing description"

    @pytest.mark.unit
    def test_only_layout_kinds_hold_children(self):
        """Containers and shapes are the nesting kinds."""
        nesting = {k for k, m in KIND_REGISTRY.items() if m.can_have_children}
        assert nesting == {ComponentKind.CONTAINER, ComponentKind.SHAPE}

    @pytest.mark.unit
    def test_meta_to_dict(self):
        """KindMeta converts to dictionary correctly."""
        d = get_kind_meta(ComponentKind.IMAGE).to_dict()
        assert d["kind"] == "image"
        assert d["category"] == "media"
        assert d["html_tag"] == "img"

    @pytest.mark.unit
    def test_kinds_by_category(self):
        """Progress category lists the progress widgets."""
        kinds = get_kinds_by_category(ComponentCategory.PROGRESS)
        assert ComponentKind.PROGRESSBAR in kinds
        assert ComponentKind.STEPPER in kinds
        assert ComponentKind.TEXT not in kinds


class TestComponentModel:
    """Tests for Component parsing."""

    @pytest.mark.unit
    def test_editor_keys(self):
        """Editor JSON keys (type, position, childIds) are accepted."""
        c = Component.model_validate(
            {
                "id": "root",
                "type": "container",
                "position": {"type": "absolute", "x": 0, "y": 0, "width": 300},
                "childIds": ["a"],
                "flexLayout": {"enabled": True, "direction": "row", "gap": 8},
            }
        )
        assert c.kind == ComponentKind.CONTAINER
        assert c.geometry.width == 300
        assert c.child_ids == ["a"]
        assert c.flex_layout.direction == FlexDirection.ROW
        assert c.is_flex_container

    @pytest.mark.unit
    def test_snake_case_names(self):
        """Python field names are accepted too."""
        c = Component(id="t", kind="text", child_ids=[])
        assert c.kind == ComponentKind.TEXT
        assert c.visible is True

    @pytest.mark.unit
    def test_legacy_flex_mode_is_relative(self):
        """The editor's 'flex' position type means relative."""
        c = Component.model_validate(
            {"id": "t", "type": "text", "position": {"type": "flex"}}
        )
        assert c.geometry.mode == PositionMode.RELATIVE

    @pytest.mark.unit
    def test_padding_number_expands(self):
        """A single padding number applies to all sides."""
        c = Component.model_validate(
            {"id": "c", "type": "container", "flexLayout": {"padding": 8}}
        )
        padding = c.flex_layout.padding
        assert (padding.top, padding.right, padding.bottom, padding.left) == (
            8,
            8,
            8,
            8,
        )
        assert padding.is_uniform

    @pytest.mark.unit
    def test_conic_gradient_is_angular(self):
        """'conic' is accepted as angular."""
        c = Component.model_validate(
            {
                "id": "c",
                "type": "shape",
                "effects": {
                    "gradient": {
                        "type": "conic",
                        "stops": [
                            {"position": 0, "color": "#000"},
                            {"position": 100, "color": "#fff"},
                        ],
                    }
                },
            }
        )
        assert c.effects.gradient.type == GradientType.ANGULAR

    @pytest.mark.unit
    def test_null_child_ids(self):
        """Null childIds parse as an empty list."""
        c = Component.model_validate({"id": "t", "type": "text", "childIds": None})
        assert c.child_ids == []

    @pytest.mark.unit
    def test_components_are_frozen(self):
        """Components cannot be mutated after validation."""
        c = Component(id="t", kind="text")
        with pytest.raises(ValidationError):
            c.id = "other"


class TestLoadTree:
    """Tests for load_tree."""

    @pytest.mark.unit
    def test_flat_list_roots(self):
        """Unreferenced components become roots in list order."""
        tree = load_tree(
            [
                {"id": "a", "type": "container", "childIds": ["b"]},
                {"id": "b", "type": "text"},
                {"id": "c", "type": "text"},
            ]
        )
        assert tree.root_ids == ["a", "c"]
        assert len(tree) == 3
        assert "b" in tree

    @pytest.mark.unit
    def test_components_with_root_ids(self):
        """Explicit rootIds are kept."""
        tree = load_tree(
            {
                "components": [{"id": "a", "type": "text"}],
                "rootIds": ["a"],
            }
        )
        assert tree.root_ids == ["a"]

    @pytest.mark.unit
    def test_components_mapping(self):
        """Components keyed by id take the key as id."""
        tree = load_tree({"components": {"a": {"type": "text"}}})
        assert tree.get("a").kind == ComponentKind.TEXT

    @pytest.mark.unit
    def test_tree_passthrough(self, sample_tree):
        """A ComponentTree is returned unchanged."""
        assert load_tree(sample_tree) is sample_tree

    @pytest.mark.unit
    def test_unknown_kind_is_input_error(self):
        """Unknown kinds raise InputError."""
        with pytest.raises(InputError):
            load_tree([{"id": "a", "type": "hologram"}])

    @pytest.mark.unit
    def test_wrong_shape_is_input_error(self):
        """Scalars are not snapshots."""
        with pytest.raises(InputError):
            load_tree("not a tree")

    @pytest.mark.unit
    def test_single_gradient_stop_is_input_error(self):
        """Gradients need at least two stops."""
        with pytest.raises(InputError):
            load_tree(
                [
                    {
                        "id": "a",
                        "type": "shape",
                        "effects": {
                            "gradient": {"stops": [{"position": 0, "color": "#000"}]}
                        },
                    }
                ]
            )

    @pytest.mark.unit
    def test_parents_of(self):
        """parents_of lists every referencing component."""
        tree = ComponentTree.from_components(
            [
                Component(id="a", kind="container", child_ids=["c"]),
                Component(id="b", kind="container", child_ids=["c"]),
                Component(id="c", kind="text"),
            ]
        )
        assert tree.parents_of("c") == ["a", "b"]
