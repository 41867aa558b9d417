"""Style resolution: merge a component's style map with its layer effects.

Every backend consumes the same CanonicalStyle so that shadows, gradients,
blur, stroke and opacity are interpreted exactly once.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from sheet_export.schema import (
    Blur,
    BlurType,
    Component,
    FlexChild,
    FlexLayout,
    Gradient,
    GradientType,
    Shadow,
    SizingMode,
    Stroke,
    StrokePosition,
)

from .color import parse_color, to_hex

# Properties that stay bare numbers instead of gaining "px".
UNITLESS = frozenset(
    {
        "opacity",
        "fontWeight",
        "lineHeight",
        "zIndex",
        "flex",
        "flexGrow",
        "flexShrink",
        "order",
        "aspectRatio",
    }
)

# Editor-only style keys that are not CSS properties. They stay reachable
# through CanonicalStyle.get() but never reach a declaration list.
EDITOR_ONLY = frozenset(
    {"textColor", "paddingVertical", "paddingHorizontal", "size", "strokeWidth"}
)

_NUMBER_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(px)?\s*$")
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def format_number(value: float) -> str:
    """Format a number without a trailing ``.0`` or float noise.

    Example:
        >>> format_number(10.0), format_number(0.5), format_number(1 / 3)
        ('10', '0.5', '0.3333')
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    number = float(value)
    if number.is_integer():
        return str(int(number))
    text = f"{number:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def px(value: Any) -> str:
    """Append ``px`` to numbers; strings pass through unchanged."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{format_number(value)}px"
    return str(value)


def to_number(value: Any) -> float | None:
    """Read a number from a number or a ``"12"``/``"12px"`` string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _NUMBER_RE.match(value)
        if match:
            return float(match.group(1))
    return None


def kebab_case(prop: str) -> str:
    """camelCase property name to CSS kebab-case.

    ``WebkitBackdropFilter`` becomes ``-webkit-backdrop-filter``.
    """
    text = _CAMEL_RE.sub("-", prop).lower()
    if prop[:1].isupper():
        text = "-" + text
    return text


def format_value(prop: str, value: Any) -> str:
    """Render a declaration value as CSS text."""
    if prop in UNITLESS:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return format_number(value)
        return str(value)
    return px(value)


@dataclass(frozen=True)
class CanonicalStyle:
    """Backend-neutral style of one component.

    Attributes:
        declarations: Ordered camelCase CSS declarations. Values are numbers
            for unitless properties and CSS text otherwise.
        extras: Editor-only style keys (textColor, size, strokeWidth, ...).
        shadows: Enabled shadows in declaration order, first paints on top.
        gradient: Enabled gradient, if any.
        blur: Enabled non-zero blur, if any.
        stroke: Enabled stroke, if any.
        opacity: Fractional opacity 0..1.
        blend_mode: CSS mix-blend-mode, None when normal.
    """

    declarations: dict[str, Any] = field(default_factory=dict)
    extras: dict[str, Any] = field(default_factory=dict)
    shadows: tuple[Shadow, ...] = ()
    gradient: Gradient | None = None
    blur: Blur | None = None
    stroke: Stroke | None = None
    opacity: float = 1.0
    blend_mode: str | None = None

    def get(self, prop: str, default: Any = None) -> Any:
        """Look up a declaration, falling back to editor-only keys."""
        if prop in self.declarations:
            return self.declarations[prop]
        return self.extras.get(prop, default)

    def number(self, prop: str, default: float | None = None) -> float | None:
        """Numeric value of a property, or default when not numeric."""
        value = to_number(self.get(prop))
        return default if value is None else value

    def css_declarations(self) -> list[tuple[str, str]]:
        """Declarations as ``(kebab-case-name, css-text)`` pairs."""
        return [
            (kebab_case(prop), format_value(prop, value))
            for prop, value in self.declarations.items()
        ]

    def border_width(self) -> float:
        """Border width from borderWidth, the border shorthand, or the stroke."""
        width = self.number("borderWidth")
        if width is None and isinstance(self.get("border"), str):
            width = to_number(self.get("border").split()[0])
        if width is None and self.stroke is not None:
            width = self.stroke.width
        return width or 0

    def border_color(self) -> str | None:
        """Border color from borderColor, the border shorthand, or the stroke."""
        color = self.get("borderColor")
        if color is None and isinstance(self.get("border"), str):
            for token in reversed(self.get("border").split()):
                if parse_color(token) is not None:
                    color = token
                    break
        if color is None and self.stroke is not None:
            color = self.stroke.color
        return color

    def radius(self) -> float:
        """Uniform corner radius in pixels, 0 when absent or not numeric."""
        return self.number("borderRadius", 0) or 0

    @property
    def background_color(self) -> str | None:
        return self.get("backgroundColor")

    @property
    def text_color(self) -> str | None:
        return self.get("color")


def shadow_css(shadows: tuple[Shadow, ...] | list[Shadow]) -> str:
    """Composite box-shadow text, first entry on top."""
    parts = []
    for shadow in shadows:
        inset = "inset " if shadow.inset else ""
        parts.append(
            f"{inset}{px(shadow.x)} {px(shadow.y)} {px(shadow.blur)} "
            f"{px(shadow.spread)} {shadow.color}"
        )
    return ", ".join(parts)


def gradient_css(gradient: Gradient) -> str:
    """CSS gradient function for an enabled gradient."""
    stops = ", ".join(
        f"{stop.color} {format_number(stop.position)}%" for stop in gradient.stops
    )
    angle = format_number(gradient.angle)
    if gradient.type == GradientType.RADIAL:
        return f"radial-gradient(circle, {stops})"
    if gradient.type == GradientType.ANGULAR:
        return f"conic-gradient(from {angle}deg, {stops})"
    return f"linear-gradient({angle}deg, {stops})"


def stroke_declarations(stroke: Stroke) -> dict[str, str]:
    """Border or outline declarations for an enabled stroke."""
    line = f"{px(stroke.width)} {stroke.style.value} {stroke.color}"
    if stroke.position == StrokePosition.INSIDE:
        return {"border": line}
    if stroke.position == StrokePosition.CENTER:
        return {"outline": line, "outlineOffset": px(-stroke.width / 2)}
    return {"outline": line, "outlineOffset": "0px"}


def _base_declarations(
    style: dict[str, Any],
) -> tuple[dict[str, Any], dict[str, Any]]:
    declarations: dict[str, Any] = {}
    extras: dict[str, Any] = {}

    for prop, value in style.items():
        if value is None:
            continue
        if prop in EDITOR_ONLY:
            extras[prop] = value
            continue
        declarations[prop] = value if prop in UNITLESS else px(value)

    if "textColor" in extras and "color" not in declarations:
        declarations["color"] = extras["textColor"]

    if "padding" not in declarations and (
        "paddingVertical" in extras or "paddingHorizontal" in extras
    ):
        vertical = extras.get("paddingVertical", 0)
        horizontal = extras.get("paddingHorizontal", 0)
        declarations["padding"] = f"{px(vertical)} {px(horizontal)}"

    return declarations, extras


def resolve(component: Component) -> CanonicalStyle:
    """Merge a component's style map with its effects.

    Args:
        component: Component to resolve.

    Returns:
        CanonicalStyle with effects folded into the declaration map.

    Example:
        >>> style = resolve(Component(id="c", kind="shape",
        ...                           style={"borderRadius": 12}))
        >>> style.get("borderRadius")
        '12px'
    """
    declarations, extras = _base_declarations(component.style)
    effects = component.effects

    # A numeric style opacity multiplies with the effects opacity
    style_opacity = to_number(declarations.get("opacity"))
    if style_opacity is None:
        style_opacity = 1.0
    style_opacity = min(max(style_opacity, 0.0), 1.0)

    if effects is None:
        return CanonicalStyle(
            declarations=declarations, extras=extras, opacity=style_opacity
        )

    shadows = tuple(s for s in effects.shadows if s.enabled)
    if shadows:
        declarations["boxShadow"] = shadow_css(shadows)

    gradient = effects.gradient
    if gradient is not None and not gradient.enabled:
        gradient = None
    if gradient is not None:
        declarations["background"] = gradient_css(gradient)

    blur = effects.blur
    if blur is not None and (not blur.enabled or blur.amount <= 0):
        blur = None
    if blur is not None:
        key = "filter" if blur.type == BlurType.LAYER else "backdropFilter"
        declarations[key] = f"blur({px(blur.amount)})"

    stroke = effects.stroke
    if stroke is not None and not stroke.enabled:
        stroke = None
    if stroke is not None:
        declarations.update(stroke_declarations(stroke))

    opacity = style_opacity * effects.opacity / 100
    if opacity < 1:
        declarations["opacity"] = opacity

    blend_mode = effects.blend_mode.value
    if blend_mode == "normal":
        blend_mode = None
    if blend_mode:
        declarations["mixBlendMode"] = blend_mode

    return CanonicalStyle(
        declarations=declarations,
        extras=extras,
        shadows=shadows,
        gradient=gradient,
        blur=blur,
        stroke=stroke,
        opacity=opacity,
        blend_mode=blend_mode,
    )


def flex_container_declarations(flex_layout: FlexLayout | None) -> dict[str, Any]:
    """Declarations turning a component into a flex container."""
    if flex_layout is None or not flex_layout.enabled:
        return {}

    padding = flex_layout.padding
    if padding.is_uniform:
        padding_text = px(padding.top)
    else:
        padding_text = " ".join(
            px(v) for v in (padding.top, padding.right, padding.bottom, padding.left)
        )

    declarations: dict[str, Any] = {
        "display": "flex",
        "flexDirection": flex_layout.direction.value,
        "gap": px(flex_layout.gap),
        "padding": padding_text,
        "alignItems": flex_layout.align_items,
        "justifyContent": flex_layout.justify_content,
    }
    if flex_layout.wrap != "nowrap":
        declarations["flexWrap"] = flex_layout.wrap
    return declarations


def resolve_flex_item(flex_child: FlexChild | None) -> dict[str, Any]:
    """Flex-item declarations for an in-flow child.

    The sizing mode sets grow/shrink first; explicitly provided flexGrow and
    flexShrink values win over it.
    """
    if flex_child is None:
        return {}

    declarations: dict[str, Any] = {}
    if flex_child.sizing_mode == SizingMode.HUG:
        declarations.update(flexGrow=0, flexShrink=1)
    elif flex_child.sizing_mode == SizingMode.FILL:
        declarations.update(flexGrow=1, flexShrink=1)
    else:
        declarations.update(flexGrow=0, flexShrink=0)

    explicit = flex_child.model_fields_set
    if "flex_grow" in explicit:
        declarations["flexGrow"] = flex_child.flex_grow
    if "flex_shrink" in explicit:
        declarations["flexShrink"] = flex_child.flex_shrink

    for attr, prop in (
        ("min_width", "minWidth"),
        ("max_width", "maxWidth"),
        ("min_height", "minHeight"),
        ("max_height", "maxHeight"),
    ):
        value = getattr(flex_child, attr)
        if value is not None:
            declarations[prop] = px(value)

    if flex_child.align_self != "auto":
        declarations["alignSelf"] = flex_child.align_self
    return declarations


def normalize_hex(value: str) -> str | None:
    """Upper-case ``#RRGGBB`` for an opaque color, None otherwise."""
    color = parse_color(value)
    if color is None or color.a < 1:
        return None
    return to_hex(color)
