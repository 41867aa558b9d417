"""Unit tests for the SVG provider."""

import xml.etree.ElementTree as ET

import pytest

from sheet_export.core.errors import WarningCategory
from sheet_export.schema import load_tree
from sheet_export.walker import walk

from .lib import SvgProvider, def_id, gradient_vector


@pytest.fixture
def provider():
    """Create an SvgProvider instance."""
    return SvgProvider()


def _export(components, root="root"):
    return SvgProvider().export(walk(root, load_tree(components)))


def _box(component_id="root", **extra):
    component = {
        "id": component_id,
        "type": "container",
        "position": {"width": 100, "height": 50},
    }
    component.update(extra)
    return component


class TestSvgProvider:
    """Tests for provider metadata."""

    @pytest.mark.unit
    def test_provider_name(self, provider):
        """Provider has correct name."""
        assert provider.name == "svg"

    @pytest.mark.unit
    def test_file_extension(self, provider):
        """Provider has correct file extension."""
        assert provider.file_extension == ".svg"

    @pytest.mark.unit
    def test_single_option(self, provider):
        """SVG exposes exactly one option."""
        assert provider.default_option == "default"


class TestDocument:
    """Tests for canvas sizing and placement."""

    @pytest.mark.unit
    def test_end_to_end(self, sample_tree):
        """Text child lands inside translate(10,10) on a 300x200 canvas."""
        code = SvgProvider().export(walk("root", sample_tree)).code
        assert code.startswith(
            '<svg xmlns="http://www.w3.org/2000/svg" width="300" height="200" '
            'viewBox="0 0 300 200">'
        )
        assert '<rect width="300" height="200" fill="#FFFFFF" />' in code
        group = code.index('<g transform="translate(10,10)">')
        text = code.index('<text fill="#111827">Hello</text>')
        assert group < text
        assert code.rstrip().endswith("</svg>")

    @pytest.mark.unit
    def test_font_attributes_on_inner_group(self, sample_tree):
        """Fonts go on the inner group, not on the transform group."""
        code = SvgProvider().export(walk("root", sample_tree)).code
        assert '<g font-size="16" dominant-baseline="hanging">' in code

    @pytest.mark.unit
    def test_fallback_size(self):
        """Roots without numeric dimensions use the 200x100 fallback."""
        code = _export([{"id": "root", "type": "container"}]).code
        assert 'width="200" height="100" viewBox="0 0 200 100"' in code

    @pytest.mark.unit
    def test_fallback_size_from_environment(self, monkeypatch):
        """The fallback canvas size is configurable."""
        monkeypatch.setenv("SHEET_EXPORT_SVG_WIDTH", "375")
        code = _export([{"id": "root", "type": "container"}]).code
        assert 'width="375" height="100"' in code

    @pytest.mark.unit
    def test_nested_translation(self, nested_tree):
        """Each level translates relative to its parent."""
        code = SvgProvider().export(walk("root", nested_tree)).code
        card = code.index('<g transform="translate(20,20)">')
        title = code.index('<g transform="translate(12,12)">')
        cta = code.index('<g transform="translate(20,520)">')
        assert card < title < cta

    @pytest.mark.unit
    def test_flow_children_are_stacked(self, all_kinds_tree):
        """In-flow children stack after the padding with the gap."""
        code = SvgProvider().export(walk("root", all_kinds_tree)).code
        assert '<g transform="translate(16,16)">' in code
        assert '<g transform="translate(16,64)">' in code

    @pytest.mark.unit
    def test_rotation(self):
        """Rotation turns around the node's center."""
        child = {
            "id": "c",
            "type": "shape",
            "position": {"x": 0, "y": 0, "width": 100, "height": 50, "rotation": 45},
        }
        code = _export([_box(childIds=["c"]), child]).code
        assert 'transform="translate(0,0) rotate(45 50 25)"' in code

    @pytest.mark.unit
    def test_hidden_child_omitted(self):
        """Hidden components are not painted."""
        hidden = {
            "id": "ghost",
            "type": "text",
            "visible": False,
            "content": {"text": "Boo"},
        }
        code = _export([_box(childIds=["ghost"]), hidden]).code
        assert "Boo" not in code

    @pytest.mark.unit
    def test_idempotent(self, nested_tree):
        """Same input gives byte-identical output."""
        first = SvgProvider().export(walk("root", nested_tree)).code
        second = SvgProvider().export(walk("root", nested_tree)).code
        assert first == second


class TestText:
    """Tests for text rendering."""

    @pytest.mark.unit
    def test_multiline(self, nested_tree):
        """Newlines become tspans advancing by the line height."""
        code = SvgProvider().export(walk("root", nested_tree)).code
        assert '<tspan x="0">Line one</tspan>' in code
        assert '<tspan x="0" dy="1.2em">Line two</tspan>' in code

    @pytest.mark.unit
    def test_escaping(self):
        """Text content is XML-escaped."""
        text = {"id": "t", "type": "text", "content": {"text": "a < b & c"}}
        code = _export([_box(childIds=["t"]), text]).code
        assert "a &lt; b &amp; c" in code

    @pytest.mark.unit
    def test_centered_text(self):
        """textAlign center anchors the text at the middle of its box."""
        text = {
            "id": "t",
            "type": "text",
            "position": {"width": 120, "height": 20},
            "style": {"textAlign": "center"},
            "content": {"text": "Mid"},
        }
        code = _export([_box(childIds=["t"]), text]).code
        assert '<text x="60" text-anchor="middle" fill="#000000">Mid</text>' in code

    @pytest.mark.unit
    def test_button_label_centered(self, nested_tree):
        """Button labels are centered over the button surface."""
        code = SvgProvider().export(walk("root", nested_tree)).code
        assert 'fill="#6366F1"' in code
        assert (
            '<text x="167.5" y="24" fill="#FFFFFF" text-anchor="middle" '
            'dominant-baseline="central">Get started</text>'
        ) in code

    @pytest.mark.unit
    def test_link(self, all_kinds_tree):
        """Links wrap their text in an anchor."""
        code = SvgProvider().export(walk("root", all_kinds_tree)).code
        assert '<a href="https://example.com/terms">' in code
        assert "Terms</text>" in code


class TestEffects:
    """Tests for fills, strokes, shadows and filters."""

    @pytest.mark.unit
    def test_shadow_filter(self, nested_tree):
        """Drop shadows become an feDropShadow filter referenced by the rect."""
        code = SvgProvider().export(walk("root", nested_tree)).code
        assert '<filter id="shadow-card"' in code
        assert 'stdDeviation="6"' in code
        assert 'flood-color="#000000" flood-opacity="0.1"' in code
        assert 'filter="url(#shadow-card)"' in code

    @pytest.mark.unit
    def test_multiple_shadows_merge_first_on_top(self):
        """Several shadows merge so that the first entry paints last."""
        shadows = [
            {"x": 0, "y": 1, "blur": 2, "color": "#000000"},
            {"x": 0, "y": 8, "blur": 16, "color": "#000000"},
        ]
        code = _export([_box(effects={"shadows": shadows})]).code
        first = code.index('<feMergeNode in="shadow1" />')
        second = code.index('<feMergeNode in="shadow0" />')
        assert first < second

    @pytest.mark.unit
    def test_inner_shadow_is_lossy(self):
        """Inner shadows are skipped with a warning."""
        shadows = [{"type": "inner-shadow", "color": "#000000"}]
        result = _export(
            [_box(style={"backgroundColor": "#FFFFFF"}, effects={"shadows": shadows})]
        )
        assert "feDropShadow" not in result.code
        assert [w.category for w in result.warnings] == [WarningCategory.LOSSY_STYLE]

    @pytest.mark.unit
    def test_linear_gradient(self, all_kinds_tree):
        """Linear gradients become a paint server referenced by the fill."""
        code = SvgProvider().export(walk("root", all_kinds_tree)).code
        assert (
            '<linearGradient id="grad-shape" x1="0" y1="0.5" x2="1" y2="0.5">'
        ) in code
        assert '<stop offset="0%" stop-color="#6366F1" />' in code
        assert 'fill="url(#grad-shape)"' in code

    @pytest.mark.unit
    def test_radial_gradient(self):
        """Radial gradients become a radialGradient."""
        gradient = {
            "type": "radial",
            "stops": [
                {"position": 0, "color": "#FFFFFF"},
                {"position": 100, "color": "#000000"},
            ],
        }
        code = _export([_box(effects={"gradient": gradient})]).code
        assert '<radialGradient id="grad-root"' in code

    @pytest.mark.unit
    def test_angular_gradient_degrades(self):
        """Angular gradients render as linear with a warning."""
        gradient = {
            "type": "conic",
            "stops": [
                {"position": 0, "color": "#FFFFFF"},
                {"position": 100, "color": "#000000"},
            ],
        }
        result = _export([_box(effects={"gradient": gradient})])
        assert "<linearGradient" in result.code
        assert result.warnings[0].category == WarningCategory.LOSSY_STYLE

    @pytest.mark.unit
    def test_translucent_fill(self):
        """rgba fills split into a hex paint and fill-opacity."""
        code = _export([_box(style={"backgroundColor": "rgba(255, 0, 0, 0.5)"})]).code
        assert 'fill="#FF0000" fill-opacity="0.5"' in code

    @pytest.mark.unit
    def test_radius_and_border(self):
        """Radius and border map to rx/ry and stroke attributes."""
        style = {
            "backgroundColor": "#FFFFFF",
            "borderRadius": 12,
            "borderWidth": 2,
            "borderColor": "#E5E7EB",
        }
        code = _export([_box(style=style)]).code
        assert 'rx="12" ry="12"' in code
        assert 'stroke="#E5E7EB" stroke-width="2"' in code

    @pytest.mark.unit
    def test_opacity_and_layer_blur(self):
        """Opacity and layer blur go on the inner presentation group."""
        child = _box(
            "c",
            style={"backgroundColor": "#000000"},
            effects={"opacity": 50, "blur": {"amount": 4}},
        )
        code = _export([_box(childIds=["c"]), child]).code
        assert '<g opacity="0.5" filter="url(#blur-c)">' in code
        assert '<feGaussianBlur stdDeviation="4" />' in code

    @pytest.mark.unit
    def test_style_opacity(self):
        """Opacity from the style map is honoured like effects opacity."""
        child = _box("c", style={"backgroundColor": "#FF0000", "opacity": 0.5})
        code = _export([_box(childIds=["c"]), child]).code
        assert '<g opacity="0.5">' in code

    @pytest.mark.unit
    def test_background_blur_is_lossy(self):
        """Background blur has no SVG equivalent."""
        result = _export(
            [_box(effects={"blur": {"amount": 10, "type": "background"}})]
        )
        assert "feGaussianBlur" not in result.code
        assert result.warnings[0].category == WarningCategory.LOSSY_STYLE


class TestKinds:
    """Tests for kind-specific rendering."""

    @pytest.mark.unit
    def test_unsupported_kinds_warn(self, all_kinds_tree):
        """Unsupported kinds become dashed placeholders with warnings."""
        result = SvgProvider().export(walk("root", all_kinds_tree))
        unsupported = {
            w.node_id
            for w in result.warnings
            if w.category == WarningCategory.UNSUPPORTED_KIND
        }
        assert unsupported == {
            "video",
            "carousel",
            "rating",
            "richtext",
            "buttongroup",
            "progresscircle",
            "stepper",
            "countdown",
        }
        assert "<!-- rating 'rating' has no SVG equivalent -->" in result.code
        assert 'stroke-dasharray="4 4"' in result.code

    @pytest.mark.unit
    def test_image(self, all_kinds_tree):
        """Images honour object-fit and are clipped to their radius."""
        code = SvgProvider().export(walk("root", all_kinds_tree)).code
        assert 'href="https://example.com/a.png"' in code
        assert 'preserveAspectRatio="xMidYMid slice"' in code
        assert 'clip-path="url(#clip-image)"' in code

    @pytest.mark.unit
    def test_progressbar(self, all_kinds_tree):
        """Progress bars draw a track and a proportional fill."""
        code = SvgProvider().export(walk("root", all_kinds_tree)).code
        assert '<rect width="60" height="40" rx="20" ry="20" fill="#10B981" />' in code

    @pytest.mark.unit
    def test_divider_and_list(self, all_kinds_tree):
        """Dividers draw a line and lists draw bulleted lines."""
        code = SvgProvider().export(walk("root", all_kinds_tree)).code
        assert '<line x1="0" y1="20" x2="200" y2="20" stroke="#E5E7EB"' in code
        assert "• One" in code
        assert "more" in code

    @pytest.mark.unit
    def test_circle_shape(self):
        """Circle shapes render as an ellipse."""
        shape = {
            "id": "dot",
            "type": "shape",
            "position": {"width": 40, "height": 40},
            "content": {"shapeType": "circle"},
        }
        code = _export([_box(childIds=["dot"]), shape]).code
        assert '<ellipse cx="20" cy="20" rx="20" ry="20" fill="#6366F1" />' in code


class TestWellFormed:
    """Documents parse as XML whatever the ids and text contain."""

    @pytest.mark.unit
    def test_all_kinds_parse(self, all_kinds_tree):
        """Every kind, placeholders included, yields well-formed XML."""
        code = SvgProvider().export(walk("root", all_kinds_tree)).code
        assert ET.fromstring(code).tag.endswith("svg")

    @pytest.mark.unit
    @pytest.mark.parametrize("component_id", ["promo---1", "a--", "--x--"])
    def test_dashed_ids_in_placeholder_comments(self, component_id):
        """Runs of dashes in ids cannot break the placeholder comment."""
        stepper = {"id": component_id, "type": "stepper"}
        result = _export([_box(childIds=[component_id]), stepper])
        ET.fromstring(result.code)
        assert result.warnings[0].node_id == component_id

    @pytest.mark.unit
    def test_markup_in_text(self):
        """Text content with markup characters is escaped."""
        text = "<b>Tom & \"Jerry\"</b> --> 'ok'"
        label = {"id": "label", "type": "text", "content": {"text": text}}
        link = {
            "id": "link",
            "type": "link",
            "content": {"text": "a<b", "href": 'https://x.test/?a=1&b="2"'},
        }
        root = _box(childIds=["label", "link"])
        document = ET.fromstring(_export([root, label, link]).code)
        texts = "".join(document.itertext())
        assert text in texts
        assert "a<b" in texts
    """Tests for id and gradient helpers."""

    @pytest.mark.unit
    def test_def_id_plain(self):
        """Safe ids are used as-is."""
        assert def_id("grad", "card") == "grad-card"

    @pytest.mark.unit
    def test_def_id_sanitized(self):
        """Sanitized ids gain a checksum so they cannot collide."""
        sanitized = def_id("grad", "a b")
        assert sanitized.startswith("grad-a-b-")
        assert len(sanitized) == len("grad-a-b-") + 8
        assert sanitized != def_id("grad", "a-b")

    @pytest.mark.unit
    def test_gradient_vector(self):
        """0deg runs bottom to top, 180deg top to bottom."""
        assert gradient_vector(0) == (0.5, 1.0, 0.5, 0.0)
        assert gradient_vector(180) == (0.5, 0.0, 0.5, 1.0)
