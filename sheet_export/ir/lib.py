"""Intermediate representation for generated source.

Backends build small trees instead of concatenating strings while they
walk, then serialize in one final pass:

- Markup (SVG and JSX): Element, Text, Comment, Expression
- Dart (Flutter): Call, DartList, Raw, with DartComment for list entries

The serializers own indentation and escaping, so a backend never has to
think about either.
"""

import html
import json
import re
from dataclasses import dataclass, field
from typing import Any, Literal, Union

from sheet_export.style import format_number

INDENT = "  "
MAX_LINE = 80

Dialect = Literal["xml", "jsx"]

# =============================================================================
# Markup
# =============================================================================


@dataclass
class Text:
    """Character data. Escaped by the serializer."""

    value: str


@dataclass
class Comment:
    """``<!-- -->`` in XML, ``{/* */}`` in JSX."""

    value: str


@dataclass
class Expression:
    """A JSX expression, emitted inside braces.

    As an attribute value it renders ``name={code}``, as a child ``{code}``.
    """

    code: str


MarkupNode = Union["Element", Text, Comment, Expression]


@dataclass
class Element:
    """A markup element.

    Attributes:
        tag: Element name (``rect``, ``div``, ``StyledButton``).
        attrs: Ordered attributes. ``None`` values are skipped, ``True``
            renders a bare attribute in JSX.
        children: Child nodes in document order.
    """

    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: list[MarkupNode] = field(default_factory=list)

    def append(self, *nodes: MarkupNode) -> "Element":
        self.children.extend(nodes)
        return self


_JSX_UNSAFE = frozenset('{}<>&"')


def _attr_text(name: str, value: Any, dialect: Dialect) -> str | None:
    if value is None or value is False:
        return None
    if isinstance(value, Expression):
        return f"{name}={{{value.code}}}"
    if value is True:
        return name if dialect == "jsx" else f'{name}="{name}"'
    if isinstance(value, (int, float)):
        value = format_number(value)
    text = str(value)
    if dialect == "jsx" and any(ch in _JSX_UNSAFE for ch in text):
        return f"{name}={{{json.dumps(text)}}}"
    return f'{name}="{html.escape(text, quote=True)}"'


def _text(value: str, dialect: Dialect) -> str:
    if dialect == "jsx":
        if any(ch in _JSX_UNSAFE for ch in value) or value != value.strip():
            return "{" + json.dumps(value) + "}"
        return value
    return html.escape(value, quote=False)


def _comment(value: str, dialect: Dialect) -> str:
    if dialect == "jsx":
        return "{/* " + value.replace("*/", "* /") + " */}"
    # XML comments may not contain "--" anywhere
    return "<!-- " + re.sub(r"-(?=-)", "- ", value) + " -->"


def _open_tag(element: Element, dialect: Dialect) -> str:
    parts = [element.tag]
    for name, value in element.attrs.items():
        text = _attr_text(name, value, dialect)
        if text is not None:
            parts.append(text)
    return " ".join(parts)


def _render_markup(node: MarkupNode, dialect: Dialect, level: int) -> list[str]:
    pad = INDENT * level
    if isinstance(node, Text):
        return [pad + _text(node.value, dialect)]
    if isinstance(node, Comment):
        return [pad + _comment(node.value, dialect)]
    if isinstance(node, Expression):
        return [pad + "{" + node.code + "}"]

    opening = _open_tag(node, dialect)
    if not node.children:
        return [f"{pad}<{opening} />"]

    if len(node.children) == 1 and isinstance(node.children[0], (Text, Expression)):
        child = _render_markup(node.children[0], dialect, 0)[0]
        return [f"{pad}<{opening}>{child}</{node.tag}>"]

    lines = [f"{pad}<{opening}>"]
    for child in node.children:
        lines.extend(_render_markup(child, dialect, level + 1))
    lines.append(f"{pad}</{node.tag}>")
    return lines


def render_markup(node: MarkupNode, dialect: Dialect = "xml", level: int = 0) -> str:
    """Serialize a markup tree.

    Args:
        node: Root of the tree.
        dialect: ``"xml"`` escapes with entities; ``"jsx"`` wraps unsafe
            text in expression containers.
        level: Starting indentation level.

    Returns:
        Indented source, one element per line, no trailing newline.

    Example:
        >>> render_markup(Element("text", {"fill": "#111827"}, [Text("Hello")]))
        '<text fill="#111827">Hello</text>'
    """
    return "\n".join(_render_markup(node, dialect, level))


# =============================================================================
# Dart
# =============================================================================


@dataclass
class Raw:
    """Dart source emitted verbatim (identifiers, enum values, closures)."""

    code: str


@dataclass
class DartComment:
    """``// text`` line inside a list."""

    value: str


@dataclass
class Call:
    """A constructor or function call.

    Attributes:
        name: Callee, e.g. ``Container`` or ``BorderRadius.circular``.
        args: Positional arguments.
        kwargs: Named arguments in emission order. ``None`` values are skipped.
        const: Prefix with ``const``.
        comment: Line comment placed before the call.
    """

    name: str
    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)
    const: bool = False
    comment: str | None = None


@dataclass
class DartList:
    """A list literal, optionally typed (``<Widget>[...]``)."""

    items: list[Any] = field(default_factory=list)
    type_name: str | None = None


def _line_comment(value: str) -> str:
    return "// " + " ".join(value.splitlines())


def dart_string(value: str) -> Raw:
    """Single-quoted Dart string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("$", "\\$")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return Raw(f"'{escaped}'")


def _scalar(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, Raw):
        return value.code
    if isinstance(value, str):
        return value
    raise TypeError(f"Cannot render {type(value).__name__} as Dart")


def _is_comment(part: str) -> bool:
    return part.startswith("// ") and "\n" not in part


def _breaks(part: str) -> bool:
    return "\n" in part or _is_comment(part)


def _wrap(opening: str, parts: list[str], closing: str, level: int) -> str:
    one_line = f"{opening}{', '.join(parts)}{closing}"
    fits = len(one_line) + len(INDENT) * level <= MAX_LINE
    if not parts or (fits and not any(_breaks(p) for p in parts)):
        return one_line
    pad = INDENT * (level + 1)
    body = ""
    for part in parts:
        if _is_comment(part):
            body += f"{pad}{part}\n"
        else:
            body += f"{pad}{part},\n"
    return f"{opening}\n{body}{INDENT * level}{closing}"


def render_dart(value: Any, level: int = 0) -> str:
    """Serialize a Dart expression tree.

    Calls and lists stay on one line while they fit, otherwise they break
    one argument per line with trailing commas, as ``dart format`` does.

    Args:
        value: Call, DartList, Raw, DartComment or a scalar.
        level: Indentation level of the line the expression starts on.

    Returns:
        Dart source without a trailing newline.
    """
    if isinstance(value, DartComment):
        return _line_comment(value.value)

    if isinstance(value, DartList):
        parts = [render_dart(item, level + 1) for item in value.items]
        prefix = f"<{value.type_name}>" if value.type_name else ""
        return _wrap(f"{prefix}[", parts, "]", level)

    if isinstance(value, Call):
        parts = [render_dart(arg, level + 1) for arg in value.args]
        parts.extend(
            f"{key}: {render_dart(arg, level + 1)}"
            for key, arg in value.kwargs.items()
            if arg is not None
        )
        opening = ("const " if value.const else "") + value.name + "("
        text = _wrap(opening, parts, ")", level)
        if value.comment:
            text = f"{_line_comment(value.comment)}\n{INDENT * level}{text}"
        return text

    return _scalar(value)


__all__ = [
    # Markup
    "Comment",
    "Element",
    "Expression",
    "MarkupNode",
    "Text",
    "render_markup",
    # Dart
    "Call",
    "DartComment",
    "DartList",
    "Raw",
    "dart_string",
    "render_dart",
]
