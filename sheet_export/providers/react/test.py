"""Unit tests for the React provider."""

import pytest

from sheet_export.core.errors import InputError, WarningCategory
from sheet_export.schema import load_tree
from sheet_export.walker import walk

from .lib import ReactProvider, css_class, js_object
from .tailwind import to_tailwind


@pytest.fixture
def provider():
    """Create a ReactProvider instance."""
    return ReactProvider()


def _export(components, option=None, root="root"):
    return ReactProvider().export(walk(root, load_tree(components)), option)


def _root(**extra):
    component = {"id": "root", "type": "container"}
    component.update(extra)
    return component


STYLED_ROOT = _root(style={"backgroundColor": "#112233", "borderRadius": 12})


class TestReactProvider:
    """Tests for provider metadata."""

    @pytest.mark.unit
    def test_provider_name(self, provider):
        """Provider has correct name."""
        assert provider.name == "react"

    @pytest.mark.unit
    def test_default_dialect(self, provider):
        """Tailwind is the default dialect."""
        assert provider.default_option == "tailwind"

    @pytest.mark.unit
    def test_unknown_dialect(self, sample_tree):
        """Dialects outside the closed set raise InputError."""
        with pytest.raises(InputError, match="Unknown react option 'emotion'"):
            ReactProvider().export(walk("root", sample_tree), "emotion")


class TestComponentShell:
    """Tests for the generated component wrapper."""

    @pytest.mark.unit
    def test_shell(self, sample_tree):
        """Output is one exported functional component."""
        code = ReactProvider().export(walk("root", sample_tree)).code
        assert code.startswith("import React from 'react';\n\n")
        assert "export const Component = () => {\n  return (\n" in code
        assert code.endswith("  );\n};\n\nexport default Component;\n")

    @pytest.mark.unit
    def test_name_from_root(self, nested_tree):
        """The root's name becomes the PascalCase component name."""
        code = ReactProvider().export(walk("root", nested_tree)).code
        assert "export const WelcomeSheet = () => {" in code
        assert "export default WelcomeSheet;" in code

    @pytest.mark.unit
    def test_name_from_environment(self, sample_tree, monkeypatch):
        """Unnamed roots use the configured default name."""
        monkeypatch.setenv("SHEET_EXPORT_REACT_COMPONENT_NAME", "BottomSheet")
        code = ReactProvider().export(walk("root", sample_tree)).code
        assert "export const BottomSheet = () => {" in code

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "dialect", ["tailwind", "styled-components", "css-modules"]
    )
    def test_idempotent(self, nested_tree, dialect):
        """Same input gives byte-identical output in every dialect."""
        first = ReactProvider().export(walk("root", nested_tree), dialect).code
        second = ReactProvider().export(walk("root", nested_tree), dialect).code
        assert first == second


class TestTailwind:
    """Tests for the tailwind dialect."""

    @pytest.mark.unit
    def test_sample_tree(self, sample_tree):
        """Positioning, size and style become utility classes."""
        code = ReactProvider().export(walk("root", sample_tree)).code
        assert '<div className="relative w-[300px] h-[200px] bg-[#FFFFFF]">' in code
        assert (
            '<p className="absolute left-[10px] top-[10px] w-[120px] h-[24px] '
            'text-[#111827] text-[16px]">Hello</p>'
        ) in code

    @pytest.mark.unit
    def test_color_and_radius(self):
        """Hex colors and radii use arbitrary values."""
        code = _export([STYLED_ROOT]).code
        assert "bg-[#112233]" in code
        assert "rounded-[12px]" in code

    @pytest.mark.unit
    def test_shadow_goes_inline(self, nested_tree):
        """Shadows have no clean utility and stay in the style object."""
        code = ReactProvider().export(walk("root", nested_tree)).code
        assert 'style={{ boxShadow: "0px 4px 12px 0px rgba(0, 0, 0, 0.1)" }}' in code

    @pytest.mark.unit
    def test_flex_container(self, all_kinds_tree):
        """Flex layout maps to flex utilities; in-flow children drop offsets."""
        code = ReactProvider().export(walk("root", all_kinds_tree)).code
        assert "flex flex-col gap-[8px] p-[16px] items-start justify-start" in code
        assert '<p className="w-[200px] h-[40px]">Title</p>' in code

    @pytest.mark.unit
    def test_fill_sizing(self):
        """Fill children grow and shrink."""
        child = {
            "id": "c",
            "type": "container",
            "position": {"type": "flex"},
            "flexChild": {"sizingMode": "fill"},
        }
        root = _root(flexLayout={"enabled": True, "direction": "row"}, childIds=["c"])
        code = _export([root, child]).code
        assert '<div className="grow shrink" />' in code

    @pytest.mark.unit
    def test_rotation(self):
        """Rotation becomes a rotate utility."""
        child = {
            "id": "c",
            "type": "shape",
            "position": {"x": 0, "y": 0, "rotation": 45},
        }
        code = _export([_root(childIds=["c"]), child]).code
        assert "rotate-[45deg]" in code

    @pytest.mark.unit
    def test_fixed_uses_root_coordinates(self):
        """Fixed components are placed in export-root coordinates."""
        parent = {
            "id": "p",
            "type": "container",
            "position": {"x": 20, "y": 20},
            "childIds": ["f"],
        }
        fixed = {
            "id": "f",
            "type": "container",
            "position": {"type": "fixed", "x": 5, "y": 5},
        }
        code = _export([_root(childIds=["p"]), parent, fixed]).code
        assert '<div className="fixed left-[5px] top-[5px]" />' in code

    @pytest.mark.unit
    def test_text_escaping(self):
        """Markup-significant text becomes a string expression."""
        text = {"id": "t", "type": "text", "content": {"text": "a < b"}}
        code = _export([_root(childIds=["t"]), text]).code
        assert '{"a < b"}' in code

    @pytest.mark.unit
    def test_multiline_text(self, nested_tree):
        """Newlines become <br /> elements."""
        code = ReactProvider().export(walk("root", nested_tree)).code
        assert "Line one" in code
        assert "<br />" in code


class TestKindMapping:
    """Tests for per-kind JSX."""

    @pytest.fixture
    def code(self, all_kinds_tree):
        return ReactProvider().export(walk("root", all_kinds_tree)).code

    @pytest.mark.unit
    def test_all_kinds_without_warnings(self, all_kinds_tree):
        """Every kind has an HTML mapping."""
        result = ReactProvider().export(walk("root", all_kinds_tree))
        assert result.warnings == []

    @pytest.mark.unit
    def test_richtext(self, code):
        """Rich text is the one verbatim-markup escape hatch."""
        assert 'dangerouslySetInnerHTML={{ __html: "<b>Bold</b>" }}' in code

    @pytest.mark.unit
    def test_media(self, code):
        """Images and videos keep their sources."""
        assert 'src="https://example.com/a.png" alt="Hero"' in code
        assert 'src="https://example.com/v.mp4" controls />' in code
        assert 'alt="Slide 1"' in code

    @pytest.mark.unit
    def test_progress(self, code):
        """Progress indicators render a static percentage."""
        assert 'width: "30%"' in code
        assert 'strokeDasharray="75 100"' in code
        assert "<span>75%</span>" in code

    @pytest.mark.unit
    def test_lists_and_steps(self, code):
        """Lists, steppers and button groups expand their items."""
        assert "<li>One</li>" in code
        assert "<small>more</small>" in code
        assert "<li>✓ Cart</li>" in code
        assert '<li aria-current="step">Pay</li>' in code
        assert '<button type="button">Yes</button>' in code

    @pytest.mark.unit
    def test_static_widgets(self, code):
        """Countdowns, ratings, inputs and links are static."""
        assert 'dateTime="2030-01-01T00:00:00Z">2030-01-01T00:00:00Z</time>' in code
        assert code.count("★") == 5
        assert 'placeholder="Email"' in code
        assert 'href="https://example.com/terms"' in code
        assert "<hr " in code

    @pytest.mark.unit
    def test_gradient_inline(self, code):
        """Gradients stay inline next to the background class."""
        assert "bg-[#6366F1]" in code
        assert 'background: "linear-gradient(90deg, #6366F1 0%, #EC4899 100%)"' in code

    @pytest.mark.unit
    def test_void_children_dropped(self):
        """Children of void elements are dropped with a warning."""
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


class TestStyledComponents:
    """Tests for the styled-components dialect."""

    @pytest.mark.unit
    def test_literal_declarations(self):
        """Single instances keep every declaration literal."""
        code = _export([STYLED_ROOT], "styled-components").code
        assert "import styled from 'styled-components';" in code
        assert "const StyledContainer = styled.div`" in code
        assert "  background-color: #112233;" in code
        assert "  border-radius: 12px;" in code
        assert "<StyledContainer />" in code

    @pytest.mark.unit
    def test_flex_shorthand_without_px(self):
        """A numeric flex shorthand stays a grow factor."""
        root = {"id": "root", "type": "container", "style": {"flex": 1}}
        code = _export([root], "styled-components").code
        assert "  flex: 1;" in code
        assert "1px" not in code

    @pytest.mark.unit
    def test_varying_declarations(self):
        """Declarations differing between instances become transient props."""
        texts = [
            {
                "id": component_id,
                "type": "text",
                "style": {"color": color, "fontSize": 14},
                "content": {"text": component_id.upper()},
            }
            for component_id, color in (("a", "#111111"), ("b", "#222222"))
        ]
        code = _export([_root(childIds=["a", "b"]), *texts], "styled-components").code
        assert "  font-size: 14px;" in code
        assert "  ${(p) => p.$color && `color: ${p.$color};`}" in code
        assert '<StyledText $color="#111111">A</StyledText>' in code
        assert '<StyledText $color="#222222">B</StyledText>' in code

    @pytest.mark.unit
    def test_polymorphic_tag(self):
        """Instances needing another tag use the as prop."""
        lists = [
            {"id": "u", "type": "list", "content": {"items": ["x"]}},
            {
                "id": "o",
                "type": "list",
                "content": {"items": ["y"], "type": "numbered"},
            },
        ]
        code = _export([_root(childIds=["u", "o"]), *lists], "styled-components").code
        assert "const StyledList = styled.ul`" in code
        assert 'as="ol"' in code

    @pytest.mark.unit
    def test_compound_kind_names(self, all_kinds_tree):
        """Compound kinds get readable component names."""
        code = ReactProvider().export(
            walk("root", all_kinds_tree), "styled-components"
        ).code
        assert "const StyledProgressBar = styled.div`" in code
        assert "const StyledButtonGroup = styled.div`" in code


class TestCssModules:
    """Tests for the css-modules dialect."""

    @pytest.mark.unit
    def test_blocks(self, sample_tree):
        """CSS and JSX blocks are each preceded by a file delimiter."""
        code = ReactProvider().export(walk("root", sample_tree), "css-modules").code
        css = code.index("/* ---------- Component.module.css ---------- */")
        jsx = code.index("/* ---------- Component.jsx ---------- */")
        assert css < jsx
        assert (
            ".root {\n"
            "  position: relative;\n"
            "  width: 300px;\n"
            "  height: 200px;\n"
            "  background-color: #FFFFFF;\n"
            "}"
        ) in code
        assert "import styles from './Component.module.css';" in code
        assert "<div className={styles['root']}>" in code
        assert "<p className={styles['hello']}>Hello</p>" in code

    @pytest.mark.unit
    def test_class_names(self):
        """Class names are sanitized ids that start with a letter."""
        assert css_class("card") == "card"
        assert css_class("hero image").startswith("hero-image-")
        assert css_class("1st") == "c-1st"


class TestHelpers:
    """Tests for tailwind mapping and inline style objects."""

    @pytest.mark.unit
    def test_to_tailwind(self):
        """Mappable declarations become classes."""
        assert to_tailwind({"backgroundColor": "#112233", "borderRadius": "12px"}) == (
            ["bg-[#112233]", "rounded-[12px]"],
            {},
        )

    @pytest.mark.unit
    def test_to_tailwind_leftovers(self):
        """Translucent colors, shadows and four-value paddings stay inline."""
        declarations = {
            "backgroundColor": "rgba(0, 0, 0, 0.5)",
            "boxShadow": "0px 1px 2px 0px #000",
            "padding": "1px 2px 3px 4px",
        }
        classes, leftovers = to_tailwind(declarations)
        assert classes == []
        assert leftovers == declarations

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "prop,value,expected",
        [
            ("fontWeight", 700, "font-bold"),
            ("width", "100%", "w-full"),
            ("padding", "8px 16px", "py-[8px] px-[16px]"),
            ("textAlign", "center", "text-center"),
            ("justifyContent", "space-between", "justify-between"),
            ("borderWidth", "1px", "border"),
            ("opacity", 0.5, "opacity-[0.5]"),
        ],
    )
    def test_utilities(self, prop, value, expected):
        """Individual properties map to their utilities."""
        assert to_tailwind({prop: value}) == ([expected], {})

    @pytest.mark.unit
    def test_js_object(self):
        """Unitless numbers stay numeric, the rest become strings."""
        assert (
            js_object({"opacity": 0.5, "boxShadow": "0px 4px 8px 0px #000"})
            == '{ opacity: 0.5, boxShadow: "0px 4px 8px 0px #000" }'
        )
