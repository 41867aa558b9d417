"""Unit tests for the Flutter provider."""

import pytest

from sheet_export.core.errors import InputError, WarningCategory
from sheet_export.schema import load_tree
from sheet_export.walker import walk

from .lib import (
    BLUR_IMPORT,
    CUPERTINO_IMPORT,
    MATERIAL_IMPORT,
    FlutterProvider,
    flutter_color,
    font_weight,
    gradient_alignment,
)


@pytest.fixture
def provider():
    """Create a FlutterProvider instance."""
    return FlutterProvider()


def _export(components, option=None, root="root"):
    return FlutterProvider().export(walk(root, load_tree(components)), option)


def _root(**extra):
    component = {
        "id": "root",
        "type": "container",
        "position": {"width": 300, "height": 200},
    }
    component.update(extra)
    return component


def _with_child(child, **root_extra):
    return [_root(childIds=[child["id"]], **root_extra), child]


class TestFlutterProvider:
    """Tests for provider metadata."""

    @pytest.mark.unit
    def test_provider_name(self, provider):
        """Provider has correct name."""
        assert provider.name == "flutter"

    @pytest.mark.unit
    def test_file_extension(self, provider):
        """Generated source is Dart."""
        assert provider.file_extension == ".dart"

    @pytest.mark.unit
    def test_default_theme(self, provider):
        """Material is the default theme."""
        assert provider.default_option == "material"

    @pytest.mark.unit
    def test_unknown_theme(self, sample_tree):
        """Themes outside the closed set raise InputError."""
        with pytest.raises(InputError, match="Unknown flutter option 'fluent'"):
            FlutterProvider().export(walk("root", sample_tree), "fluent")


class TestWidgetShell:
    """Tests for the generated StatelessWidget."""

    @pytest.mark.unit
    def test_shell(self, sample_tree):
        """Output is one StatelessWidget with a const constructor."""
        code = FlutterProvider().export(walk("root", sample_tree)).code
        assert code.startswith(
            "import 'package:flutter/material.dart';\n"
            "\n"
            "class CustomWidget extends StatelessWidget {\n"
            "  const CustomWidget({super.key});\n"
            "\n"
            "  @override\n"
            "  Widget build(BuildContext context) {\n"
            "    return Container(\n"
        )
        assert code.endswith("    );\n  }\n}\n")

    @pytest.mark.unit
    def test_name_from_root(self, nested_tree):
        """The root's name becomes the widget class name."""
        code = FlutterProvider().export(walk("root", nested_tree)).code
        assert "class WelcomeSheet extends StatelessWidget {" in code
        assert "const WelcomeSheet({super.key});" in code

    @pytest.mark.unit
    def test_name_from_environment(self, sample_tree, monkeypatch):
        """Unnamed roots use the configured default name."""
        monkeypatch.setenv("SHEET_EXPORT_FLUTTER_WIDGET_NAME", "PromoSheet")
        code = FlutterProvider().export(walk("root", sample_tree)).code
        assert "class PromoSheet extends StatelessWidget {" in code

    @pytest.mark.unit
    @pytest.mark.parametrize("theme", ["material", "cupertino"])
    def test_idempotent(self, nested_tree, theme):
        """Same input gives byte-identical output for both themes."""
        first = FlutterProvider().export(walk("root", nested_tree), theme).code
        second = FlutterProvider().export(walk("root", nested_tree), theme).code
        assert first == second


class TestImports:
    """Tests for theme-dependent imports."""

    @pytest.mark.unit
    def test_cupertino_only(self, nested_tree):
        """Cupertino output without material-only widgets skips material."""
        code = FlutterProvider().export(walk("root", nested_tree), "cupertino").code
        assert code.startswith(CUPERTINO_IMPORT + "\n\nclass")
        assert MATERIAL_IMPORT not in code
        assert "CupertinoButton(" in code
        assert "ElevatedButton" not in code

    @pytest.mark.unit
    def test_cupertino_with_material_widgets(self, all_kinds_tree):
        """Progress indicators pull in the material library."""
        code = FlutterProvider().export(walk("root", all_kinds_tree), "cupertino").code
        assert code.startswith(CUPERTINO_IMPORT + "\n" + MATERIAL_IMPORT + "\n\n")
        assert "CupertinoTextField(placeholder: 'Email')" in code

    @pytest.mark.unit
    def test_blur_import(self):
        """Blur filters need dart:ui."""
        child = {"id": "c", "type": "container", "effects": {"blur": {"amount": 4}}}
        code = _export(_with_child(child)).code
        assert code.startswith(BLUR_IMPORT + "\n\n" + MATERIAL_IMPORT + "\n\n")


class TestLayout:
    """Tests for Stack and flex layout."""

    @pytest.mark.unit
    def test_sample_tree(self, sample_tree):
        """Absolute children are Positioned inside a Stack."""
        code = FlutterProvider().export(walk("root", sample_tree)).code
        assert "width: 300" in code
        assert "height: 200" in code
        assert "decoration: BoxDecoration(color: Color(0xFFFFFFFF))" in code
        assert "Stack(" in code
        assert "Positioned(" in code
        assert "left: 10" in code
        assert "top: 10" in code
        assert "'Hello'" in code
        assert "TextStyle(color: Color(0xFF111827), fontSize: 16)" in code

    @pytest.mark.unit
    def test_flex_column(self, all_kinds_tree):
        """Flex containers become a padded Column with SizedBox gaps."""
        code = FlutterProvider().export(walk("root", all_kinds_tree)).code
        assert "padding: const EdgeInsets.all(16)" in code
        assert "Column(" in code
        assert "crossAxisAlignment: CrossAxisAlignment.start" in code
        assert code.count("const SizedBox(height: 8)") == 19
        assert "Positioned(" not in code

    @pytest.mark.unit
    def test_row_and_fill(self):
        """Row direction and fill sizing map to Row and Expanded."""
        child = {
            "id": "c",
            "type": "container",
            "position": {"type": "flex"},
            "flexChild": {"sizingMode": "fill"},
        }
        code = _export(
            _with_child(child, flexLayout={"enabled": True, "direction": "row"})
        ).code
        assert "Row(" in code
        assert "Expanded(" in code

    @pytest.mark.unit
    def test_wrap(self):
        """Wrapping flex containers use Wrap with spacing."""
        child = {"id": "c", "type": "spacer", "position": {"type": "flex"}}
        layout = {"enabled": True, "direction": "row", "flexWrap": "wrap"}
        code = _export(_with_child(child, flexLayout=layout)).code
        assert "Wrap(" in code
        assert "spacing: 12" in code

    @pytest.mark.unit
    def test_fill_child_in_wrap(self):
        """Fill children of a Wrap are not wrapped in Expanded."""
        child = {
            "id": "c",
            "type": "spacer",
            "position": {"type": "flex", "width": 40, "height": 40},
            "flexChild": {"sizingMode": "fill"},
        }
        layout = {"enabled": True, "direction": "row", "flexWrap": "wrap"}
        result = _export(_with_child(child, flexLayout=layout))
        assert "Wrap(" in result.code
        assert "Expanded(" not in result.code
        assert [(w.category, w.node_id) for w in result.warnings] == [
            (WarningCategory.LOSSY_STYLE, "c")
        ]

    @pytest.mark.unit
    def test_reversed_column(self):
        """column-reverse lays children out bottom-up."""
        child = {"id": "c", "type": "spacer", "position": {"type": "flex"}}
        layout = {"enabled": True, "direction": "column-reverse"}
        code = _export(_with_child(child, flexLayout=layout)).code
        assert "verticalDirection: VerticalDirection.up" in code

    @pytest.mark.unit
    def test_dropped_children(self):
        """Children of leaf widgets are dropped with a warning."""
        image = {
            "id": "img",
            "type": "image",
            "content": {"url": "https://example.com/a.png"},
            "childIds": ["t"],
        }
        text = {"id": "t", "type": "text", "content": {"text": "Inside"}}
        result = _export([_root(childIds=["img"]), image, text])
        assert "Inside" not in result.code
        assert [(w.category, w.node_id, w.value) for w in result.warnings] == [
            (WarningCategory.DROPPED_CHILDREN, "img", "t")
        ]


class TestDecoration:
    """Tests for BoxDecoration and color mapping."""

    @pytest.mark.unit
    def test_radius_and_shadow(self, nested_tree):
        """Radii and shadows land in BoxDecoration."""
        code = FlutterProvider().export(walk("root", nested_tree)).code
        assert "borderRadius: BorderRadius.circular(24)" in code
        assert "BoxShadow(" in code
        assert "Color(0x1A000000)" in code
        assert "offset: Offset(0, 4)" in code
        assert "blurRadius: 12" in code

    @pytest.mark.unit
    def test_shadow_order(self):
        """The first shadow is emitted last so it paints on top."""
        shadows = [
            {"blur": 1, "color": "#000000"},
            {"blur": 2, "color": "#000000"},
        ]
        code = _export([_root(effects={"shadows": shadows})]).code
        assert code.index("blurRadius: 2") < code.index("blurRadius: 1")

    @pytest.mark.unit
    def test_inner_shadow_is_lossy(self):
        """Inner shadows are skipped with a warning."""
        effects = {"shadows": [{"type": "inner-shadow"}]}
        result = _export([_root(effects=effects)])
        assert "BoxShadow" not in result.code
        assert [w.category for w in result.warnings] == [WarningCategory.LOSSY_STYLE]

    @pytest.mark.unit
    def test_malformed_color(self):
        """Unparseable colors become black with a warning."""
        result = _export([_root(style={"backgroundColor": "nope"})])
        assert "BoxDecoration(color: Color(0xFF000000))" in result.code
        assert [(w.category, w.value) for w in result.warnings] == [
            (WarningCategory.LOSSY_STYLE, "nope")
        ]

    @pytest.mark.unit
    def test_per_corner_radius(self):
        """Per-corner radii collapse to the first value."""
        result = _export([_root(style={"borderRadius": "8px 4px"})])
        assert "BorderRadius.circular(8)" in result.code
        assert [w.category for w in result.warnings] == [WarningCategory.LOSSY_STYLE]

    @pytest.mark.unit
    def test_border(self):
        """Borders become Border.all."""
        style = {"borderWidth": 2, "borderColor": "#D1D5DB"}
        code = _export([_root(style=style)]).code
        assert "Border.all(color: Color(0xFFD1D5DB), width: 2)" in code

    @pytest.mark.unit
    def test_circle(self):
        """Circle shapes use BoxShape.circle instead of a radius."""
        shape = {
            "id": "dot",
            "type": "shape",
            "style": {"backgroundColor": "#10B981", "borderRadius": 4},
            "content": {"shapeType": "circle"},
        }
        code = _export(_with_child(shape)).code
        assert "shape: BoxShape.circle" in code
        assert "BorderRadius" not in code

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kind,widget",
        [
            ("linear", "LinearGradient("),
            ("radial", "RadialGradient("),
            ("angular", "SweepGradient("),
        ],
    )
    def test_gradients(self, kind, widget):
        """Every gradient type has a Flutter counterpart."""
        gradient = {
            "type": kind,
            "angle": 90,
            "stops": [
                {"position": 0, "color": "#6366F1"},
                {"position": 100, "color": "#EC4899"},
            ],
        }
        result = _export([_root(effects={"gradient": gradient})])
        assert widget in result.code
        assert "colors: [Color(0xFF6366F1), Color(0xFFEC4899)]" in result.code
        assert "stops: [0, 1]" in result.code
        assert result.warnings == []

    @pytest.mark.unit
    def test_linear_alignment(self, all_kinds_tree):
        """Linear gradients carry begin and end alignments."""
        code = FlutterProvider().export(walk("root", all_kinds_tree)).code
        assert "begin: Alignment(-1, 0)" in code
        assert "end: Alignment(1, 0)" in code


class TestEffects:
    """Tests for wrapper widgets."""

    @pytest.mark.unit
    def test_wrapper_order(self):
        """Rotation wraps opacity, which wraps the blur."""
        child = {
            "id": "c",
            "type": "container",
            "position": {"x": 0, "y": 0, "rotation": 30},
            "effects": {"opacity": 50, "blur": {"amount": 4}},
        }
        code = _export(_with_child(child)).code
        assert "angle: 0.5236" in code
        assert "opacity: 0.5" in code
        assert "ImageFilter.blur(sigmaX: 4, sigmaY: 4)" in code
        assert (
            code.index("Transform.rotate(")
            < code.index("Opacity(")
            < code.index("ImageFiltered(")
        )

    @pytest.mark.unit
    def test_style_opacity(self):
        """Opacity from the style map also produces an Opacity wrapper."""
        child = {
            "id": "c",
            "type": "shape",
            "position": {"width": 40, "height": 40},
            "style": {"backgroundColor": "#FF0000", "opacity": 0.5},
        }
        code = _export(_with_child(child)).code
        assert "Opacity(" in code
        assert "opacity: 0.5" in code

    @pytest.mark.unit
    def test_style_opacity_wrapper_order(self):
        """Wrapper order holds when opacity comes from the style map."""
        child = {
            "id": "c",
            "type": "container",
            "position": {"x": 0, "y": 0, "rotation": 30},
            "style": {"opacity": 0.5},
            "effects": {"blur": {"amount": 4}},
        }
        code = _export(_with_child(child)).code
        assert "angle: 0.5236" in code
        assert "opacity: 0.5" in code
        assert "ImageFilter.blur(sigmaX: 4, sigmaY: 4)" in code
        assert (
            code.index("Transform.rotate(")
            < code.index("Opacity(")
            < code.index("ImageFiltered(")
        )

    @pytest.mark.unit
    def test_background_blur(self):
        """Background blur uses a clipped BackdropFilter."""
        child = {
            "id": "c",
            "type": "container",
            "effects": {"blur": {"amount": 8, "type": "background"}},
        }
        code = _export(_with_child(child)).code
        assert "ClipRect(" in code
        assert "BackdropFilter(" in code


class TestKindMapping:
    """Tests for per-kind widgets."""

    @pytest.fixture
    def result(self, all_kinds_tree):
        return FlutterProvider().export(walk("root", all_kinds_tree))

    @pytest.mark.unit
    def test_unsupported_kinds(self, result):
        """Unsupported kinds become commented placeholders with warnings."""
        assert {w.category for w in result.warnings} == {
            WarningCategory.UNSUPPORTED_KIND
        }
        assert {w.value for w in result.warnings} == {
            "richtext",
            "stepper",
            "countdown",
            "carousel",
            "video",
            "rating",
        }
        assert "// richtext 'richtext' is not supported in Flutter" in result.code

    @pytest.mark.unit
    def test_progress(self, result):
        """Progress indicators show value/max."""
        assert "LinearProgressIndicator(" in result.code
        assert "value: 0.3" in result.code
        assert "CircularProgressIndicator(" in result.code
        assert "value: 0.75" in result.code

    @pytest.mark.unit
    def test_media_and_inputs(self, result):
        """Images, inputs and dividers use their material widgets."""
        code = result.code
        assert "Image.network(" in code
        assert "'https://example.com/a.png'" in code
        assert "fit: BoxFit.cover" in code
        assert "ClipRRect(" in code
        assert "TextField(" in code
        assert "hintText: 'Email'" in code
        assert "Divider(" in code

    @pytest.mark.unit
    def test_text_widgets(self, result):
        """Lists, badges, links and button groups render their text."""
        code = result.code
        assert "'• One'" in code
        assert "'more'" in code
        assert "'NEW'" in code
        assert "'Yes'" in code
        assert "'No'" in code
        assert "decoration: TextDecoration.underline" in code

    @pytest.mark.unit
    def test_spacer(self, result):
        """Spacers are empty SizedBoxes."""
        assert "SizedBox(width: 200, height: 40)" in result.code

    @pytest.mark.unit
    def test_buttons(self, nested_tree):
        """Material buttons carry their colors through styleFrom."""
        code = FlutterProvider().export(walk("root", nested_tree)).code
        assert "ElevatedButton(" in code
        assert "onPressed: () {}" in code
        assert "backgroundColor: Color(0xFF6366F1)" in code
        assert "foregroundColor: Color(0xFFFFFFFF)" in code
        assert "BorderRadius.circular(8)" in code

    @pytest.mark.unit
    def test_string_escaping(self):
        """Text is emitted as an escaped Dart string."""
        text = {"id": "t", "type": "text", "content": {"text": "It's $5\nnow"}}
        code = _export(_with_child(text)).code
        assert "'It\\'s \\$5\\nnow'" in code


class TestHelpers:
    """Tests for color, weight and alignment helpers."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("#FF0000", "Color(0xFFFF0000)"),
            ("rgba(255,0,0,0.5)", "Color(0x80FF0000)"),
            ("#00FF0080", "Color(0x8000FF00)"),
            ("white", "Color(0xFFFFFFFF)"),
            ("nope", None),
        ],
    )
    def test_flutter_color(self, value, expected):
        """CSS colors map to ARGB literals."""
        assert flutter_color(value) == expected

    @pytest.mark.unit
    def test_font_weight(self):
        """Numeric and keyword weights map to FontWeight constants."""
        assert font_weight(700).code == "FontWeight.w700"
        assert font_weight("bold").code == "FontWeight.w700"
        assert font_weight("normal").code == "FontWeight.w400"
        assert font_weight(None) is None

    @pytest.mark.unit
    def test_gradient_alignment(self):
        """CSS angles map to begin/end alignments."""
        begin, end = gradient_alignment(180)
        assert (begin.code, end.code) == ("Alignment(0, -1)", "Alignment(0, 1)")
