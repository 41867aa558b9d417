"""Tests for output module."""

import pytest

from sheet_export.core.errors import InputError, WarningCategory
from sheet_export.export import ExportFormat
from sheet_export.output import ExportOutput, OutputGenerator, format_component_tree
from sheet_export.schema import load_tree
from sheet_export.walker import walk


class TestFormatComponentTree:
    """Tests for format_component_tree function."""

    @pytest.mark.unit
    def test_single_node(self, sample_tree):
        """A lone node prints without connectors."""
        result = format_component_tree(walk("hello", sample_tree))
        assert result == "hello [text, 120x24]"

    @pytest.mark.unit
    def test_nested_tree(self, nested_tree):
        """Children are drawn with box connectors in childIds order."""
        result = format_component_tree(walk("root", nested_tree))
        assert result.splitlines() == [
            "welcome sheet [container, 375x600]",
            "├── card [container, 335x200]",
            "│   ├── title [text, 300x28]",
            "│   └── body [text, 300x40]",
            "└── cta [button, 335x48]",
        ]

    @pytest.mark.unit
    def test_flex_and_fixed_markers(self):
        """Flex direction and fixed positioning are shown."""
        tree = load_tree(
            [
                {
                    "id": "row",
                    "type": "container",
                    "flexLayout": {"enabled": True, "direction": "row"},
                    "childIds": ["pinned"],
                },
                {
                    "id": "pinned",
                    "type": "badge",
                    "position": {"type": "fixed", "x": 4, "y": 4},
                },
            ]
        )
        lines = format_component_tree(walk("row", tree)).splitlines()
        assert lines == ["row [container, flex row]", "└── pinned [badge, fixed]"]

    @pytest.mark.unit
    def test_hidden_children_omitted(self):
        """Only emitted children appear in the tree."""
        tree = load_tree(
            [
                {"id": "root", "type": "container", "childIds": ["shown", "gone"]},
                {"id": "shown", "type": "divider"},
                {"id": "gone", "type": "divider", "visible": False},
            ]
        )
        result = format_component_tree(walk("root", tree))
        assert "shown" in result
        assert "gone" not in result


class TestOutputGenerator:
    """Tests for OutputGenerator class."""

    @pytest.mark.unit
    def test_generate_svg(self, sample_tree):
        """Default format is SVG."""
        output = OutputGenerator().generate("root", sample_tree)
        assert isinstance(output, ExportOutput)
        assert output.provider == "svg"
        assert output.code.startswith("<svg ")
        assert output.text_tree.splitlines()[0] == "root [container, 300x200]"

    @pytest.mark.unit
    def test_format_override(self, sample_tree):
        """Format and option can be overridden per call."""
        gen = OutputGenerator(default_format=ExportFormat.REACT)
        output = gen.generate("root", sample_tree, "flutter", "cupertino")
        assert output.provider == "flutter"
        assert output.option == "cupertino"
        assert output.root_id == "root"

    @pytest.mark.unit
    def test_warnings_carried(self, all_kinds_tree):
        """Export warnings are carried into the output."""
        output = OutputGenerator().generate("root", all_kinds_tree)
        categories = {w.category for w in output.warnings}
        assert WarningCategory.UNSUPPORTED_KIND in categories

    @pytest.mark.unit
    def test_unknown_target(self, sample_tree):
        """Unknown targets raise InputError."""
        with pytest.raises(InputError):
            OutputGenerator().generate("missing", sample_tree)
