"""Unit tests for the export entry points."""

import pytest

from sheet_export.core.errors import (
    ExportError,
    InputError,
    StructuralError,
    WarningCategory,
)
from sheet_export.schema import Component

from .lib import (
    ExportFormat,
    export_component,
    generate_flutter_code,
    generate_react_code,
    generate_svg,
)

SNAPSHOT = [
    {
        "id": "root",
        "type": "container",
        "position": {"x": 0, "y": 0, "width": 300, "height": 200},
        "style": {"backgroundColor": "#FFFFFF"},
        "childIds": ["hello"],
    },
    {
        "id": "hello",
        "type": "text",
        "position": {"x": 10, "y": 10, "width": 120, "height": 24},
        "style": {"color": "#111827", "fontSize": 16},
        "content": {"text": "Hello"},
    },
]


class TestGenerateSvg:
    """End-to-end SVG export."""

    @pytest.mark.unit
    def test_end_to_end(self, sample_tree):
        """Text child is placed by its translate group."""
        svg = generate_svg("root", sample_tree)
        assert 'width="300" height="200" viewBox="0 0 300 200"' in svg
        translate = svg.index('<g transform="translate(10,10)">')
        assert svg.index('<text fill="#111827">Hello</text>') > translate

    @pytest.mark.unit
    def test_raw_snapshot(self, sample_tree):
        """Raw snapshots give the same document as loaded trees."""
        assert generate_svg("root", SNAPSHOT) == generate_svg("root", sample_tree)

    @pytest.mark.unit
    def test_component_target(self, sample_tree):
        """A Component target overrides its copy in the snapshot."""
        edited = sample_tree.components["hello"].model_copy(
            update={"content": {"text": "Edited"}}
        )
        svg = generate_svg(edited, sample_tree)
        assert ">Edited</text>" in svg
        assert "#FFFFFF" not in svg

    @pytest.mark.unit
    def test_lone_component(self):
        """A Component can be exported without a snapshot."""
        component = Component.model_validate(
            {"id": "solo", "type": "shape", "position": {"width": 40, "height": 40}}
        )
        assert generate_svg(component).startswith("<svg ")


class TestGenerateCode:
    """React and Flutter entry points."""

    @pytest.mark.unit
    def test_react_default_dialect(self, sample_tree):
        """Without a dialect, tailwind is used."""
        code = generate_react_code("root", sample_tree)
        assert "bg-[#FFFFFF]" in code

    @pytest.mark.unit
    def test_react_dialect_from_environment(self, sample_tree, monkeypatch):
        """The default dialect comes from configuration."""
        monkeypatch.setenv("SHEET_EXPORT_REACT_DIALECT", "css-modules")
        code = generate_react_code("root", sample_tree)
        assert "/* ---------- Component.module.css ---------- */" in code

    @pytest.mark.unit
    def test_styled_components(self):
        """Styled output spells out the declarations."""
        root = {
            "id": "root",
            "type": "container",
            "style": {"backgroundColor": "#112233", "borderRadius": 12},
        }
        code = generate_react_code("root", [root], "styled-components")
        assert "background-color: #112233;" in code
        assert "border-radius: 12px;" in code

    @pytest.mark.unit
    def test_flutter_colors(self):
        """Colors map to ARGB literals including alpha."""
        components = [
            {
                "id": "root",
                "type": "container",
                "style": {"backgroundColor": "#FF0000"},
                "childIds": ["half"],
            },
            {
                "id": "half",
                "type": "shape",
                "style": {"backgroundColor": "rgba(255,0,0,0.5)"},
            },
        ]
        code = generate_flutter_code("root", components)
        assert "Color(0xFFFF0000)" in code
        assert "Color(0x80FF0000)" in code

    @pytest.mark.unit
    def test_flutter_theme_from_environment(self, sample_tree, monkeypatch):
        """The default theme comes from configuration."""
        monkeypatch.setenv("SHEET_EXPORT_FLUTTER_THEME", "cupertino")
        code = generate_flutter_code("root", sample_tree)
        assert code.startswith("import 'package:flutter/cupertino.dart';")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "generate", [generate_svg, generate_react_code, generate_flutter_code]
    )
    def test_idempotent(self, nested_tree, generate):
        """Unchanged input gives byte-identical output."""
        assert generate("root", nested_tree) == generate("root", nested_tree)


class TestExportComponent:
    """Tests for the full result API."""

    @pytest.mark.unit
    def test_result_metadata(self, sample_tree):
        """Results record the provider and option used."""
        result = export_component("root", sample_tree, ExportFormat.FLUTTER)
        assert result.provider == "flutter"
        assert result.option == "material"
        assert not result.has_warnings

    @pytest.mark.unit
    def test_format_by_name(self, sample_tree):
        """Formats can be given by name."""
        result = export_component("root", sample_tree, "react", "css-modules")
        assert result.option == "css-modules"

    @pytest.mark.unit
    def test_warnings_returned(self, all_kinds_tree):
        """Unsupported kinds come back as warnings, not errors."""
        result = export_component("root", all_kinds_tree, "svg")
        assert result.has_warnings
        assert WarningCategory.UNSUPPORTED_KIND in {w.category for w in result.warnings}

    @pytest.mark.unit
    def test_unknown_format(self, sample_tree):
        """Unknown formats raise InputError."""
        with pytest.raises(InputError, match="Unknown export format 'pdf'"):
            export_component("root", sample_tree, "pdf")

    @pytest.mark.unit
    def test_bad_target_type(self, sample_tree):
        """Targets must be ids or Components."""
        with pytest.raises(InputError):
            export_component(42, sample_tree)


class TestFailures:
    """Fatal input errors from every entry point."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "generate", [generate_svg, generate_react_code, generate_flutter_code]
    )
    def test_cycle(self, cyclic_tree, generate):
        """A cycle reachable from the root aborts the export."""
        with pytest.raises(StructuralError) as info:
            generate("a", cyclic_tree)
        assert info.value.path == ["a", "b", "a"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "generate", [generate_svg, generate_react_code, generate_flutter_code]
    )
    def test_unknown_target(self, sample_tree, generate):
        """Unknown ids raise InputError."""
        with pytest.raises(InputError, match="missing"):
            generate("missing", sample_tree)

    @pytest.mark.unit
    def test_malformed_snapshot(self):
        """Snapshots that fail validation raise InputError."""
        with pytest.raises(InputError):
            generate_svg("root", [{"id": "root", "type": "hologram"}])

    @pytest.mark.unit
    def test_common_base(self, cyclic_tree):
        """Both fatal errors derive from ExportError."""
        with pytest.raises(ExportError):
            generate_svg("a", cyclic_tree)
        with pytest.raises(ExportError):
            generate_svg("nope", cyclic_tree)
