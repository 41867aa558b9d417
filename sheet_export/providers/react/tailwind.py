"""Tailwind utility mapping for CSS declarations.

Each supported property has a converter from CSS text to one or more
utility classes. A converter returns None when the value has no clean
utility; the declaration then stays in the inline ``style`` object.
"""

from collections.abc import Callable
from typing import Any

from sheet_export.style import format_value, normalize_hex, parse_color

_KEYWORD_COLORS = {"white", "black", "transparent", "current", "inherit"}

_FONT_WEIGHTS = {
    "100": "font-thin",
    "200": "font-extralight",
    "300": "font-light",
    "400": "font-normal",
    "normal": "font-normal",
    "500": "font-medium",
    "600": "font-semibold",
    "700": "font-bold",
    "bold": "font-bold",
    "800": "font-extrabold",
    "900": "font-black",
}

_FLEX_DIRECTIONS = {
    "row": "flex-row",
    "column": "flex-col",
    "row-reverse": "flex-row-reverse",
    "column-reverse": "flex-col-reverse",
}

_FLEX_WRAPS = {
    "wrap": "flex-wrap",
    "wrap-reverse": "flex-wrap-reverse",
    "nowrap": "flex-nowrap",
}

_ALIGN = {
    "flex-start": "start",
    "start": "start",
    "flex-end": "end",
    "end": "end",
    "center": "center",
    "stretch": "stretch",
    "baseline": "baseline",
}

_JUSTIFY = {
    "flex-start": "justify-start",
    "start": "justify-start",
    "flex-end": "justify-end",
    "end": "justify-end",
    "center": "justify-center",
    "space-between": "justify-between",
    "space-around": "justify-around",
    "space-evenly": "justify-evenly",
}

_DISPLAYS = {
    "flex": "flex",
    "inline-flex": "inline-flex",
    "block": "block",
    "inline-block": "inline-block",
    "inline": "inline",
    "grid": "grid",
    "none": "hidden",
}

_KEYWORDS: dict[str, dict[str, str]] = {
    "position": {v: v for v in ("absolute", "relative", "fixed", "sticky", "static")},
    "textAlign": {v: f"text-{v}" for v in ("left", "center", "right", "justify")},
    "fontStyle": {"italic": "italic", "normal": "not-italic"},
    "textDecoration": {
        "underline": "underline",
        "line-through": "line-through",
        "none": "no-underline",
    },
    "textTransform": {
        "uppercase": "uppercase",
        "lowercase": "lowercase",
        "capitalize": "capitalize",
        "none": "normal-case",
    },
    "objectFit": {v: f"object-{v}" for v in ("cover", "contain", "fill", "none")},
    "overflow": {v: f"overflow-{v}" for v in ("hidden", "auto", "scroll", "visible")},
    "borderStyle": {v: f"border-{v}" for v in ("solid", "dashed", "dotted", "none")},
    "cursor": {"pointer": "cursor-pointer", "default": "cursor-default"},
}

# Properties rendered as "<prefix>-[value]"
_ARBITRARY = {
    "width": "w",
    "height": "h",
    "minWidth": "min-w",
    "maxWidth": "max-w",
    "minHeight": "min-h",
    "maxHeight": "max-h",
    "gap": "gap",
    "left": "left",
    "top": "top",
    "right": "right",
    "bottom": "bottom",
    "margin": "m",
    "fontSize": "text",
    "lineHeight": "leading",
    "letterSpacing": "tracking",
    "zIndex": "z",
    "opacity": "opacity",
}

_SIZE_KEYWORDS = {"100%": "full", "auto": "auto"}


def _arbitrary(prefix: str, text: str) -> str | None:
    if not text or any(ch.isspace() for ch in text):
        return None
    if text in _SIZE_KEYWORDS and prefix in ("w", "h", "min-w", "max-w"):
        return f"{prefix}-{_SIZE_KEYWORDS[text]}"
    return f"{prefix}-[{text}]"


def _color(prefix: str) -> Callable[[str], str | None]:
    def convert(text: str) -> str | None:
        if text in _KEYWORD_COLORS:
            return f"{prefix}-{text}"
        hex_color = normalize_hex(text)
        if hex_color is None:
            # Translucent colors keep their alpha inline
            return None if parse_color(text) else _arbitrary(prefix, text)
        return f"{prefix}-[{hex_color}]"

    return convert


def _radius(text: str) -> str | None:
    if text == "50%" or text == "9999px":
        return "rounded-full"
    if text in ("0", "0px"):
        return "rounded-none"
    return _arbitrary("rounded", text)


def _border_width(text: str) -> str | None:
    if text == "1px":
        return "border"
    if text in ("0", "0px"):
        return "border-0"
    return _arbitrary("border", text)


def _padding(text: str) -> str | None:
    parts = text.split()
    if len(parts) == 1:
        return _arbitrary("p", parts[0])
    if len(parts) == 2:
        return f"py-[{parts[0]}] px-[{parts[1]}]"
    return None


def _grow(text: str) -> str | None:
    return {"0": "grow-0", "1": "grow"}.get(text, f"grow-[{text}]")


def _shrink(text: str) -> str | None:
    return {"0": "shrink-0", "1": "shrink"}.get(text, f"shrink-[{text}]")


def _rotate(text: str) -> str | None:
    if text.startswith("rotate(") and text.endswith(")") and text.count("(") == 1:
        return _arbitrary("rotate", text[len("rotate(") : -1])
    return None


def _lookup(table: dict[str, str], prefix: str = "") -> Callable[[str], str | None]:
    def convert(text: str) -> str | None:
        value = table.get(text)
        return f"{prefix}{value}" if value else None

    return convert


CONVERTERS: dict[str, Callable[[str], str | None]] = {
    "backgroundColor": _color("bg"),
    "color": _color("text"),
    "borderColor": _color("border"),
    "borderRadius": _radius,
    "borderWidth": _border_width,
    "padding": _padding,
    "fontWeight": _lookup(_FONT_WEIGHTS),
    "display": _lookup(_DISPLAYS),
    "flexDirection": _lookup(_FLEX_DIRECTIONS),
    "flexWrap": _lookup(_FLEX_WRAPS),
    "alignItems": _lookup(_ALIGN, "items-"),
    "alignSelf": _lookup({**_ALIGN, "auto": "auto"}, "self-"),
    "justifyContent": _lookup(_JUSTIFY),
    "flexGrow": _grow,
    "flexShrink": _shrink,
    "transform": _rotate,
}
CONVERTERS.update({prop: _lookup(table) for prop, table in _KEYWORDS.items()})
CONVERTERS.update(
    {
        prop: (lambda text, prefix=prefix: _arbitrary(prefix, text))
        for prop, prefix in _ARBITRARY.items()
    }
)


def to_tailwind(declarations: dict[str, Any]) -> tuple[list[str], dict[str, Any]]:
    """Split declarations into utility classes and inline leftovers.

    Args:
        declarations: camelCase property to value, as resolved for a node.

    Returns:
        Tuple of (class list in declaration order, leftover declarations).

    Example:
        >>> to_tailwind({"backgroundColor": "#112233", "borderRadius": "12px"})
        (['bg-[#112233]', 'rounded-[12px]'], {})
    """
    classes: list[str] = []
    leftovers: dict[str, Any] = {}
    for prop, value in declarations.items():
        converter = CONVERTERS.get(prop)
        utility = converter(format_value(prop, value)) if converter else None
        if utility:
            classes.append(utility)
        else:
            leftovers[prop] = value
    return classes, leftovers


__all__ = ["CONVERTERS", "to_tailwind"]
