"""Unit tests for the IR serializers."""

import pytest

from .lib import (
    Call,
    Comment,
    DartComment,
    DartList,
    Element,
    Expression,
    Raw,
    Text,
    dart_string,
    render_dart,
    render_markup,
)


class TestRenderMarkup:
    """Tests for XML and JSX serialization."""

    @pytest.mark.unit
    def test_inline_text(self):
        """A single text child stays on the element's line."""
        node = Element("text", {"fill": "#111827"}, [Text("Hello")])
        assert render_markup(node) == '<text fill="#111827">Hello</text>'

    @pytest.mark.unit
    def test_self_closing(self):
        """Childless elements self-close; None attributes are skipped."""
        node = Element("rect", {"width": 10.0, "height": 5, "rx": None})
        assert render_markup(node) == '<rect width="10" height="5" />'

    @pytest.mark.unit
    def test_nested_indentation(self):
        """Children are indented two spaces per level."""
        node = Element("g", {}, [Element("rect"), Element("g", {}, [Element("line")])])
        assert render_markup(node) == (
            "<g>\n  <rect />\n  <g>\n    <line />\n  </g>\n</g>"
        )

    @pytest.mark.unit
    def test_xml_escaping(self):
        """Text and attributes are entity-escaped in XML."""
        node = Element("text", {"data-x": 'a"b'}, [Text("1 < 2 & 3")])
        assert render_markup(node) == (
            '<text data-x="a&quot;b">1 &lt; 2 &amp; 3</text>'
        )

    @pytest.mark.unit
    def test_xml_comment(self):
        """Comments cannot be closed early."""
        assert render_markup(Comment("a -- b")) == "<!-- a - - b -->"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["promo---1", "a----b", "-", "--"])
    def test_xml_comment_dash_runs(self, value):
        """No run of dashes survives inside an XML comment."""
        body = render_markup(Comment(value))[len("<!-- ") : -len(" -->")]
        assert "--" not in body
        assert body.replace(" ", "") == value

    @pytest.mark.unit
    def test_jsx_unsafe_text(self):
        """JSX text with braces or angle brackets becomes a string expression."""
        node = Element("p", {}, [Text("{a} < b")])
        assert render_markup(node, "jsx") == '<p>{"{a} < b"}</p>'

    @pytest.mark.unit
    def test_jsx_plain_text(self):
        """Plain JSX text is emitted as is."""
        node = Element("p", {}, [Text("Hello")])
        assert render_markup(node, "jsx") == "<p>Hello</p>"

    @pytest.mark.unit
    def test_jsx_expression_attr(self):
        """Expressions render in braces; True renders a bare attribute."""
        node = Element(
            "input", {"style": Expression("{ width: 10 }"), "disabled": True}
        )
        assert render_markup(node, "jsx") == "<input style={{ width: 10 }} disabled />"

    @pytest.mark.unit
    def test_jsx_comment(self):
        """JSX comments use block comments in braces."""
        assert render_markup(Comment("note"), "jsx") == "{/* note */}"


class TestRenderDart:
    """Tests for Dart serialization."""

    @pytest.mark.unit
    def test_short_call_inline(self):
        """Short calls stay on one line."""
        call = Call("EdgeInsets.all", [16])
        assert render_dart(call) == "EdgeInsets.all(16)"

    @pytest.mark.unit
    def test_const_and_kwargs(self):
        """const prefix and named arguments."""
        call = Call("SizedBox", kwargs={"height": 12, "width": None}, const=True)
        assert render_dart(call) == "const SizedBox(height: 12)"

    @pytest.mark.unit
    def test_long_call_breaks(self):
        """Calls that do not fit break with trailing commas."""
        call = Call(
            "Container",
            kwargs={
                "width": 335,
                "height": 200,
                "child": Call(
                    "Text", [dart_string("A fairly long piece of text that wraps")]
                ),
            },
        )
        assert render_dart(call) == (
            "Container(\n"
            "  width: 335,\n"
            "  height: 200,\n"
            "  child: Text('A fairly long piece of text that wraps'),\n"
            ")"
        )

    @pytest.mark.unit
    def test_nested_breaks_indent(self):
        """Nested broken calls indent relative to their line."""
        inner = Call("Column", kwargs={"children": DartList([DartComment("x")])})
        text = render_dart(Call("Padding", kwargs={"child": inner}))
        assert text == (
            "Padding(\n"
            "  child: Column(\n"
            "    children: [\n"
            "      // x\n"
            "    ],\n"
            "  ),\n"
            ")"
        )

    @pytest.mark.unit
    def test_typed_list(self):
        """Typed lists carry the type prefix."""
        assert render_dart(DartList([Raw("a"), Raw("b")], "Widget")) == "<Widget>[a, b]"

    @pytest.mark.unit
    def test_call_comment(self):
        """A call comment precedes the call on its own line."""
        text = render_dart(DartList([Call("Container", comment="placeholder")]))
        assert text == "[\n  // placeholder\n  Container(),\n]"

    @pytest.mark.unit
    def test_multiline_comments_stay_comments(self):
        """Newlines in comment text cannot leak code onto the next line."""
        text = render_dart(
            DartList([DartComment("a\nb"), Call("Container", comment="x\ny")])
        )
        assert text == "[\n  // a b\n  // x y\n  Container(),\n]"

    @pytest.mark.unit
    def test_scalars(self):
        """Scalars map to Dart literals."""
        assert render_dart(Call("f", [True, None, 1.5, 2.0])) == "f(true, null, 1.5, 2)"

    @pytest.mark.unit
    def test_dart_string_escaping(self):
        """Quotes, dollars, backslashes and newlines are escaped."""
        assert dart_string("it's $5\\\n").code == "'it\\'s \\$5\\\\\\n'"
