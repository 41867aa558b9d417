"""Unit tests for style resolution and color parsing."""

import pytest

from sheet_export.schema import Component, FlexChild, FlexLayout

from .color import RGBA, alpha_byte, parse_color, to_argb_hex, to_hex
from .lib import (
    flex_container_declarations,
    format_number,
    kebab_case,
    px,
    resolve,
    resolve_flex_item,
)


def _component(style=None, effects=None, kind="container"):
    return Component.model_validate(
        {"id": "c", "type": kind, "style": style or {}, "effects": effects}
    )


def _stops():
    return [{"position": 0, "color": "#000000"}, {"position": 100, "color": "#FFFFFF"}]


class TestFormatting:
    """Tests for number and name helpers."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [(10, "10"), (10.0, "10"), (0.5, "0.5"), (-2.5, "-2.5"), (1 / 3, "0.3333")],
    )
    def test_format_number(self, value, expected):
        """Numbers format without trailing zeros."""
        assert format_number(value) == expected

    @pytest.mark.unit
    def test_px(self):
        """Numbers gain px, strings pass through."""
        assert px(12) == "12px"
        assert px("100%") == "100%"

    @pytest.mark.unit
    def test_kebab_case(self):
        """camelCase converts to CSS names."""
        assert kebab_case("backgroundColor") == "background-color"
        assert kebab_case("WebkitBackdropFilter") == "-webkit-backdrop-filter"


class TestResolve:
    """Tests for resolve()."""

    @pytest.mark.unit
    def test_base_style(self):
        """Numeric dimensions gain px, colors pass through."""
        style = resolve(_component({"backgroundColor": "#112233", "borderRadius": 12}))
        assert style.css_declarations() == [
            ("background-color", "#112233"),
            ("border-radius", "12px"),
        ]
        assert style.radius() == 12

    @pytest.mark.unit
    def test_unitless_stay_bare(self):
        """Unitless properties never gain px."""
        style = resolve(_component({"fontWeight": 700, "lineHeight": 1.5}))
        assert dict(style.css_declarations()) == {
            "font-weight": "700",
            "line-height": "1.5",
        }

    @pytest.mark.unit
    def test_flex_shorthand_unitless(self):
        """flex and aspectRatio numbers are not lengths."""
        style = resolve(_component({"flex": 1, "aspectRatio": 1.5}))
        assert dict(style.css_declarations()) == {
            "flex": "1",
            "aspect-ratio": "1.5",
        }

    @pytest.mark.unit
    def test_none_values_dropped(self):
        """None values are not declarations."""
        style = resolve(_component({"color": None, "fontSize": 14}))
        assert "color" not in style.declarations

    @pytest.mark.unit
    def test_no_effects(self):
        """Missing effects mean no shadow, no gradient, opacity 1."""
        style = resolve(_component({"backgroundColor": "#fff"}))
        assert style.shadows == ()
        assert style.gradient is None
        assert style.opacity == 1.0

    @pytest.mark.unit
    def test_button_aliases(self):
        """textColor and padding pairs normalize to CSS."""
        style = resolve(
            _component(
                {
                    "textColor": "#FFFFFF",
                    "paddingVertical": 14,
                    "paddingHorizontal": 24,
                },
                kind="button",
            )
        )
        assert style.get("color") == "#FFFFFF"
        assert style.get("padding") == "14px 24px"
        assert "textColor" not in style.declarations
        assert style.get("textColor") == "#FFFFFF"

    @pytest.mark.unit
    def test_shadows_join_in_order(self):
        """Enabled shadows join in order; inner shadows are inset."""
        style = resolve(
            _component(
                effects={
                    "shadows": [
                        {"x": 0, "y": 4, "blur": 8, "spread": 0, "color": "red"},
                        {"enabled": False, "color": "blue"},
                        {
                            "type": "inner-shadow",
                            "x": 1,
                            "y": 2,
                            "blur": 3,
                            "spread": 4,
                            "color": "#000",
                        },
                    ]
                }
            )
        )
        assert style.get("boxShadow") == (
            "0px 4px 8px 0px red, inset 1px 2px 3px 4px #000"
        )
        assert len(style.shadows) == 2

    @pytest.mark.unit
    def test_all_disabled_shadows(self):
        """Disabled shadows produce no declaration."""
        style = resolve(_component(effects={"shadows": [{"enabled": False}]}))
        assert "boxShadow" not in style.declarations

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "gradient_type,expected",
        [
            ("linear", "linear-gradient(90deg, #000000 0%, #FFFFFF 100%)"),
            ("radial", "radial-gradient(circle, #000000 0%, #FFFFFF 100%)"),
            ("angular", "conic-gradient(from 90deg, #000000 0%, #FFFFFF 100%)"),
        ],
    )
    def test_gradient(self, gradient_type, expected):
        """Gradients become background; backgroundColor stays underneath."""
        style = resolve(
            _component(
                {"backgroundColor": "#123456"},
                {"gradient": {"type": gradient_type, "angle": 90, "stops": _stops()}},
            )
        )
        assert style.get("background") == expected
        assert style.get("backgroundColor") == "#123456"

    @pytest.mark.unit
    def test_disabled_gradient(self):
        """Disabled gradients are ignored."""
        style = resolve(
            _component(effects={"gradient": {"enabled": False, "stops": _stops()}})
        )
        assert style.gradient is None
        assert "background" not in style.declarations

    @pytest.mark.unit
    def test_blur(self):
        """Layer blur is a filter, background blur a backdrop filter."""
        layer = resolve(_component(effects={"blur": {"amount": 4, "type": "layer"}}))
        back = resolve(
            _component(effects={"blur": {"amount": 6, "type": "background"}})
        )
        assert layer.get("filter") == "blur(4px)"
        assert back.get("backdropFilter") == "blur(6px)"

    @pytest.mark.unit
    def test_zero_blur(self):
        """Zero blur yields nothing."""
        style = resolve(_component(effects={"blur": {"amount": 0}}))
        assert style.blur is None
        assert "filter" not in style.declarations

    @pytest.mark.unit
    def test_opacity(self):
        """Opacity converts to a fraction and is declared only below 1."""
        assert resolve(_component(effects={"opacity": 50})).get("opacity") == 0.5
        opaque = resolve(_component(effects={"opacity": 100}))
        assert "opacity" not in opaque.declarations

    @pytest.mark.unit
    def test_style_opacity(self):
        """A numeric style opacity feeds the structured opacity."""
        style = resolve(_component(style={"opacity": 0.5}))
        assert style.opacity == 0.5
        assert style.get("opacity") == 0.5

    @pytest.mark.unit
    def test_style_and_effects_opacity_multiply(self):
        """Style and effects opacity combine multiplicatively."""
        style = resolve(_component(style={"opacity": "0.5"}, effects={"opacity": 80}))
        assert style.opacity == pytest.approx(0.4)
        assert style.get("opacity") == pytest.approx(0.4)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "position,expected",
        [
            ("inside", {"border": "2px dashed #FF0000"}),
            (
                "center",
                {"outline": "2px dashed #FF0000", "outlineOffset": "-1px"},
            ),
            (
                "outside",
                {"outline": "2px dashed #FF0000", "outlineOffset": "0px"},
            ),
        ],
    )
    def test_stroke(self, position, expected):
        """Stroke position picks border or outline."""
        style = resolve(
            _component(
                effects={
                    "stroke": {
                        "width": 2,
                        "color": "#FF0000",
                        "position": position,
                        "style": "dashed",
                    }
                }
            )
        )
        for prop, value in expected.items():
            assert style.get(prop) == value
        assert style.border_width() == 2
        assert style.border_color() == "#FF0000"

    @pytest.mark.unit
    def test_blend_mode(self):
        """Non-normal blend modes map to mixBlendMode."""
        style = resolve(_component(effects={"blendMode": "multiply"}))
        assert style.get("mixBlendMode") == "multiply"
        assert "mixBlendMode" not in resolve(_component(effects={})).declarations

    @pytest.mark.unit
    def test_malformed_color_passes_through(self):
        """Unparseable colors are kept verbatim."""
        style = resolve(_component({"backgroundColor": "not-a-color"}))
        assert style.background_color == "not-a-color"

    @pytest.mark.unit
    def test_border_from_shorthand(self):
        """Border shorthand yields width and color."""
        style = resolve(_component({"border": "3px solid #00FF00"}))
        assert style.border_width() == 3
        assert style.border_color() == "#00FF00"


class TestFlexDeclarations:
    """Tests for flex container and item declarations."""

    @pytest.mark.unit
    def test_container(self):
        """Enabled flex layout yields container declarations."""
        decls = flex_container_declarations(
            FlexLayout(enabled=True, direction="row", gap=8, padding=4)
        )
        assert decls["display"] == "flex"
        assert decls["flexDirection"] == "row"
        assert decls["gap"] == "8px"
        assert decls["padding"] == "4px"
        assert "flexWrap" not in decls

    @pytest.mark.unit
    def test_disabled_container(self):
        """Disabled flex layout yields nothing."""
        assert flex_container_declarations(FlexLayout(enabled=False)) == {}

    @pytest.mark.unit
    def test_fill_item(self):
        """Fill sizing grows."""
        decls = resolve_flex_item(FlexChild(sizing_mode="fill"))
        assert decls["flexGrow"] == 1

    @pytest.mark.unit
    def test_explicit_grow_wins(self):
        """Explicit flexGrow overrides the sizing mode."""
        decls = resolve_flex_item(FlexChild(sizing_mode="fill", flex_grow=3))
        assert decls["flexGrow"] == 3


class TestColor:
    """Tests for color parsing."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("#FF0000", RGBA(255, 0, 0, 1.0)),
            ("#f00", RGBA(255, 0, 0, 1.0)),
            ("#FF000080", RGBA(255, 0, 0, 128 / 255)),
            ("rgb(0, 128, 255)", RGBA(0, 128, 255, 1.0)),
            ("rgba(255,0,0,0.5)", RGBA(255, 0, 0, 0.5)),
            ("rgb(255 0 0 / 50%)", RGBA(255, 0, 0, 0.5)),
            ("white", RGBA(255, 255, 255, 1.0)),
        ],
    )
    def test_parse(self, text, expected):
        """Supported syntaxes parse to channels."""
        assert parse_color(text) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["#12", "hsl(0, 100%, 50%)", "", "rgb(1,2)", None])
    def test_unparseable(self, text):
        """Anything else is None."""
        assert parse_color(text) is None

    @pytest.mark.unit
    def test_hex_output(self):
        """Hex formatting is upper-case."""
        assert to_hex(RGBA(17, 34, 51)) == "#112233"
        assert to_argb_hex(RGBA(255, 0, 0, 0.5)) == "0x80FF0000"
        assert alpha_byte(1.0) == 255
