"""SVG provider: static vector snapshot of a component subtree.

The export root paints at the origin of an ``<svg>`` canvas sized to the
root. Every descendant is placed by an outer ``<g transform>`` holding only
its translation (and rotation), with presentation attributes such as
opacity, blur and fonts on an inner group. Paint servers and filters are
collected into ``<defs>`` with ids derived from the component id.

Example output:
    ```svg
    <svg xmlns="http://www.w3.org/2000/svg" width="300" height="200" ...>
      <rect width="300" height="200" fill="#FFFFFF" />
      <g transform="translate(10,10)">
        <g font-size="16" dominant-baseline="hanging">
          <text fill="#111827">Hello</text>
        </g>
      </g>
    </svg>
    ```
"""

import math
from collections.abc import Mapping

from sheet_export.config import get_svg_fallback_size
from sheet_export.ir import Comment, Element, MarkupNode, Text, render_markup
from sheet_export.providers.content import (
    is_numbered,
    list_items,
    progress,
    text_of,
)
from sheet_export.providers.lib import (
    ExportProvider,
    RenderContext,
    Renderer,
    register_provider,
    safe_id,
)
from sheet_export.schema import (
    BlurType,
    ComponentKind,
    GradientType,
    StrokePosition,
    StrokeStyle,
)
from sheet_export.style import format_number, parse_color, to_hex, to_number
from sheet_export.walker import Walk, WalkNode

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
LINE_HEIGHT = "1.2em"

_DASHES = {StrokeStyle.DASHED: "6 4", StrokeStyle.DOTTED: "1 3"}

_ASPECT = {
    "cover": "xMidYMid slice",
    "contain": "xMidYMid meet",
    "fill": "none",
}

# Kinds laid out from their top edge like block text
_FLOW_TEXT = frozenset({ComponentKind.TEXT, ComponentKind.LINK, ComponentKind.LIST})


def def_id(prefix: str, component_id: str) -> str:
    """Deterministic ``<defs>`` id for a component.

    The component id is made XML-safe with safe_id.

    Example:
        >>> def_id("grad", "card")
        'grad-card'
    """
    return f"{prefix}-{safe_id(component_id)}"


def gradient_vector(angle: float) -> tuple[float, float, float, float]:
    """Bounding-box ``x1, y1, x2, y2`` for a CSS gradient angle.

    CSS angles start at "to top" and turn clockwise.
    """
    radians = math.radians(angle)
    dx = math.sin(radians) / 2
    dy = -math.cos(radians) / 2
    return (
        round(0.5 - dx, 4),
        round(0.5 - dy, 4),
        round(0.5 + dx, 4),
        round(0.5 + dy, 4),
    )


def _paint(color: object) -> tuple[str | None, str | None]:
    """SVG paint and opacity attribute values for a CSS color."""
    if color is None:
        return None, None
    parsed = parse_color(color)
    if parsed is None:
        return str(color), None
    if parsed.a == 0:
        return "none", None
    opacity = format_number(parsed.a) if parsed.a < 1 else None
    return to_hex(parsed), opacity


class SvgContext(RenderContext):
    """Render context collecting ``<defs>`` entries."""

    def __init__(self, walk: Walk, option: str, provider: str):
        super().__init__(walk, option, provider)
        self.defs: list[Element] = []
        fallback_width, fallback_height = get_svg_fallback_size()
        geometry = walk.root.geometry
        self.canvas = (
            geometry.numeric_width or fallback_width,
            geometry.numeric_height or fallback_height,
        )

    def add_def(self, element: Element) -> str:
        """Register a paint server or filter and return its ``url(#id)``."""
        self.defs.append(element)
        return f"url(#{element.attrs['id']})"

    def size(self, node: WalkNode) -> tuple[float | None, float | None]:
        """Numeric size of a node; the root always fills the canvas."""
        if node.is_root:
            return self.canvas
        return node.geometry.numeric_width, node.geometry.numeric_height


@register_provider
class SvgProvider(ExportProvider):
    """Serializes a walk to a standalone SVG document.

    SVG features used:
        - ``<rect>``/``<ellipse>`` surfaces with fill, stroke and corner radii
        - ``<text>`` with ``<tspan>`` lines for multi-line content
        - ``<linearGradient>``/``<radialGradient>`` paint servers
        - ``<filter>`` with ``feDropShadow`` and ``feGaussianBlur``
        - ``<clipPath>`` for rounded images
    """

    @property
    def name(self) -> str:
        """Provider identifier."""
        return "svg"

    @property
    def file_extension(self) -> str:
        return ".svg"

    @property
    def options(self) -> tuple[str, ...]:
        """SVG has a single output flavour."""
        return ("default",)

    @property
    def supported_kinds(self) -> frozenset[ComponentKind]:
        """Kinds with a faithful vector rendering.

        Everything else (progresscircle, stepper, countdown, richtext,
        buttongroup, carousel, rating, video) becomes a dashed outline.
        """
        return frozenset(
            {
                ComponentKind.TEXT,
                ComponentKind.IMAGE,
                ComponentKind.BUTTON,
                ComponentKind.INPUT,
                ComponentKind.SHAPE,
                ComponentKind.CONTAINER,
                ComponentKind.DIVIDER,
                ComponentKind.SPACER,
                ComponentKind.BADGE,
                ComponentKind.LIST,
                ComponentKind.LINK,
                ComponentKind.PROGRESSBAR,
            }
        )

    @property
    def renderers(self) -> Mapping[ComponentKind, Renderer]:
        table: dict[ComponentKind, Renderer] = {
            ComponentKind.TEXT: self._render_text,
            ComponentKind.IMAGE: self._render_image,
            ComponentKind.BUTTON: self._render_button,
            ComponentKind.INPUT: self._render_input,
            ComponentKind.SHAPE: self._render_shape,
            ComponentKind.CONTAINER: self._render_container,
            ComponentKind.DIVIDER: self._render_divider,
            ComponentKind.SPACER: self._render_spacer,
            ComponentKind.BADGE: self._render_badge,
            ComponentKind.LIST: self._render_list,
            ComponentKind.LINK: self._render_link,
            ComponentKind.PROGRESSBAR: self._render_progressbar,
        }
        for kind in ComponentKind:
            table.setdefault(kind, self._render_placeholder)
        return table

    def create_context(self, walk: Walk, option: str) -> SvgContext:
        return SvgContext(walk, option, self.name)

    # =========================================================================
    # Document assembly
    # =========================================================================

    def emit(self, walk: Walk, context: SvgContext) -> str:
        """Paint every node in pre-order, then nest groups bottom-up."""
        painted: dict[str, tuple[list[MarkupNode], dict]] = {}
        for node in walk:
            painted[node.id] = (
                list(self.render(node, context)),
                self._presentation(node, context),
            )

        built: dict[str, list[MarkupNode]] = {}
        for node in reversed(walk.nodes):
            content, presentation = painted[node.id]
            for child in context.children(node):
                content.extend(built.pop(child.id))
            if content and presentation:
                content = [Element("g", presentation, content)]
            transform = self._transform(node, context)
            if content and transform:
                content = [Element("g", {"transform": transform}, content)]
            built[node.id] = content

        width, height = context.canvas
        document = Element(
            "svg",
            {
                "xmlns": SVG_NAMESPACE,
                "width": width,
                "height": height,
                "viewBox": f"0 0 {format_number(width)} {format_number(height)}",
            },
        )
        if context.defs:
            document.append(Element("defs", {}, list(context.defs)))
        document.children.extend(built[walk.root.id])
        return render_markup(document, "xml") + "\n"

    def _transform(self, node: WalkNode, context: SvgContext) -> str | None:
        geometry = node.geometry
        parts = []
        if not node.is_root:
            parts.append(
                f"translate({format_number(geometry.x)},{format_number(geometry.y)})"
            )
        if geometry.rotation:
            width, height = context.size(node)
            parts.append(
                f"rotate({format_number(geometry.rotation)} "
                f"{format_number((width or 0) / 2)} {format_number((height or 0) / 2)})"
            )
        return " ".join(parts) or None

    def _presentation(self, node: WalkNode, context: SvgContext) -> dict:
        """Attributes for the inner group: opacity, blur, blend and fonts."""
        style = node.style
        attrs: dict = {}
        if style.opacity < 1:
            attrs["opacity"] = style.opacity

        blur = style.blur
        if blur is not None:
            if blur.type == BlurType.LAYER:
                blur_filter = Element(
                    "filter",
                    {"id": def_id("blur", node.id)},
                    [Element("feGaussianBlur", {"stdDeviation": blur.amount})],
                )
                attrs["filter"] = context.add_def(blur_filter)
            else:
                context.lossy(
                    node, "background blur has no SVG equivalent", blur.amount
                )

        if style.blend_mode:
            attrs["style"] = f"mix-blend-mode: {style.blend_mode}"

        font_size = style.number("fontSize")
        if font_size is not None:
            attrs["font-size"] = font_size
        if style.get("fontFamily"):
            attrs["font-family"] = style.get("fontFamily")
        if style.get("fontWeight") is not None:
            attrs["font-weight"] = style.get("fontWeight")
        if style.get("fontStyle"):
            attrs["font-style"] = style.get("fontStyle")
        if node.kind in _FLOW_TEXT:
            attrs["dominant-baseline"] = "hanging"
        return attrs

    # =========================================================================
    # Shared paint helpers
    # =========================================================================

    def _radius(self, node: WalkNode, context: SvgContext) -> float:
        raw = node.style.get("borderRadius")
        if raw is None:
            return 0
        value = to_number(raw)
        if value is None:
            tokens = str(raw).split()
            value = to_number(tokens[0]) if tokens else None
            context.lossy(
                node, "per-corner border radius collapsed to the first value", raw
            )
        return value or 0

    def _gradient(self, node: WalkNode, context: SvgContext) -> str:
        gradient = node.style.gradient
        gradient_id = def_id("grad", node.id)
        if gradient.type == GradientType.RADIAL:
            element = Element(
                "radialGradient",
                {"id": gradient_id, "cx": "50%", "cy": "50%", "r": "50%"},
            )
        else:
            if gradient.type == GradientType.ANGULAR:
                context.lossy(
                    node, "angular gradient rendered as linear", gradient.angle
                )
            x1, y1, x2, y2 = gradient_vector(gradient.angle)
            element = Element(
                "linearGradient",
                {"id": gradient_id, "x1": x1, "y1": y1, "x2": x2, "y2": y2},
            )
        for stop in gradient.stops:
            color, opacity = _paint(stop.color)
            element.append(
                Element(
                    "stop",
                    {
                        "offset": f"{format_number(stop.position)}%",
                        "stop-color": color,
                        "stop-opacity": opacity,
                    },
                )
            )
        return context.add_def(element)

    def _shadow_filter(self, node: WalkNode, context: SvgContext) -> str | None:
        drops = []
        for shadow in node.style.shadows:
            if shadow.inset:
                context.lossy(node, "inner shadows are not rendered", shadow.color)
                continue
            if shadow.spread:
                context.lossy(node, "shadow spread is ignored in SVG", shadow.spread)
            drops.append(shadow)
        if not drops:
            return None

        element = Element(
            "filter",
            {
                "id": def_id("shadow", node.id),
                "x": "-50%",
                "y": "-50%",
                "width": "200%",
                "height": "200%",
            },
        )
        for index, shadow in enumerate(drops):
            color, opacity = _paint(shadow.color)
            element.append(
                Element(
                    "feDropShadow",
                    {
                        "in": "SourceGraphic",
                        "dx": shadow.x,
                        "dy": shadow.y,
                        "stdDeviation": shadow.blur / 2,
                        "flood-color": color,
                        "flood-opacity": opacity,
                        "result": f"shadow{index}" if len(drops) > 1 else None,
                    },
                )
            )
        if len(drops) > 1:
            # Later merge nodes paint on top
            merge = Element("feMerge")
            for index in reversed(range(len(drops))):
                merge.append(Element("feMergeNode", {"in": f"shadow{index}"}))
            element.append(merge)
        return context.add_def(element)

    def _surface(
        self,
        node: WalkNode,
        context: SvgContext,
        default_fill: str | None = None,
        default_stroke: str | None = None,
    ) -> dict | None:
        """Fill, stroke and filter attributes, or None when nothing paints."""
        style = node.style
        attrs: dict = {}
        if style.gradient is not None:
            attrs["fill"] = self._gradient(node, context)
        else:
            fill, opacity = _paint(style.background_color or default_fill)
            attrs["fill"] = fill or "none"
            attrs["fill-opacity"] = opacity

        stroke_color = style.border_color() or default_stroke
        stroke_width = style.border_width() or (1 if default_stroke else 0)
        if stroke_color and stroke_width:
            stroke, opacity = _paint(stroke_color)
            attrs["stroke"] = stroke
            attrs["stroke-opacity"] = opacity
            attrs["stroke-width"] = stroke_width
            if style.stroke is not None:
                attrs["stroke-dasharray"] = _DASHES.get(style.stroke.style)
                if style.stroke.position != StrokePosition.CENTER:
                    context.lossy(
                        node,
                        "SVG strokes are centered on the edge",
                        style.stroke.position.value,
                    )

        if style.shadows:
            attrs["filter"] = self._shadow_filter(node, context)

        paints = attrs["fill"] != "none" or "stroke" in attrs
        if not paints and not attrs.get("filter"):
            return None
        return attrs

    def _box(
        self,
        node: WalkNode,
        context: SvgContext,
        default_fill: str | None = None,
        default_stroke: str | None = None,
    ) -> list[MarkupNode]:
        surface = self._surface(node, context, default_fill, default_stroke)
        if surface is None:
            return []
        width, height = context.size(node)
        if width is None or height is None:
            context.lossy(node, "surface needs a numeric width and height")
            return []
        attrs: dict = {"width": width, "height": height}
        radius = self._radius(node, context)
        if radius:
            attrs["rx"] = radius
            attrs["ry"] = radius
        attrs.update(surface)
        return [Element("rect", attrs)]

    def _label(
        self, node: WalkNode, context: SvgContext, text: str, color: str
    ) -> Element:
        """Text centered in the node's box."""
        width, height = context.size(node)
        fill, opacity = _paint(color)
        attrs = {
            "x": (width or 0) / 2,
            "y": (height or 0) / 2,
            "fill": fill,
            "fill-opacity": opacity,
            "text-anchor": "middle",
            "dominant-baseline": "central",
        }
        return Element("text", attrs, [Text(text)])

    def _lines(self, node: WalkNode, attrs: dict, lines: list[str]) -> Element:
        element = Element("text", attrs)
        if len(lines) == 1:
            return element.append(Text(lines[0]))
        line_height = node.style.number("lineHeight")
        if line_height is None:
            step = LINE_HEIGHT
        elif line_height <= 4:
            step = f"{format_number(line_height)}em"
        else:
            step = line_height
        x = attrs.get("x", 0)
        for index, line in enumerate(lines):
            element.append(
                Element(
                    "tspan",
                    {"x": x, "dy": step if index else None},
                    [Text(line)],
                )
            )
        return element

    # =========================================================================
    # Renderers
    # =========================================================================

    def _render_container(
        self, node: WalkNode, context: SvgContext
    ) -> list[MarkupNode]:
        return self._box(node, context)

    def _render_shape(self, node: WalkNode, context: SvgContext) -> list[MarkupNode]:
        if node.content.get("shapeType") != "circle":
            return self._box(node, context, default_fill="#6366F1")
        surface = self._surface(node, context, default_fill="#6366F1")
        width, height = context.size(node)
        if surface is None or width is None or height is None:
            return []
        attrs = {
            "cx": width / 2,
            "cy": height / 2,
            "rx": width / 2,
            "ry": height / 2,
        }
        attrs.update(surface)
        return [Element("ellipse", attrs)]

    def _render_text(self, node: WalkNode, context: SvgContext) -> list[MarkupNode]:
        style = node.style
        fill, opacity = _paint(style.text_color or "#000000")
        attrs: dict = {"fill": fill, "fill-opacity": opacity}

        width, _ = context.size(node)
        align = style.get("textAlign")
        if width and align == "center":
            attrs = {"x": width / 2, "text-anchor": "middle", **attrs}
        elif width and align in ("right", "end"):
            attrs = {"x": width, "text-anchor": "end", **attrs}
        if style.get("textDecoration"):
            attrs["text-decoration"] = style.get("textDecoration")

        return [self._lines(node, attrs, text_of(node).split("\n"))]

    def _render_link(self, node: WalkNode, context: SvgContext) -> list[MarkupNode]:
        fill, opacity = _paint(node.style.text_color or "#2563EB")
        text = self._lines(
            node,
            {"fill": fill, "fill-opacity": opacity, "text-decoration": "underline"},
            text_of(node).split("\n"),
        )
        href = node.content.get("href") or node.content.get("url")
        if not href:
            return [text]
        return [Element("a", {"href": href}, [text])]

    def _render_button(self, node: WalkNode, context: SvgContext) -> list[MarkupNode]:
        color = node.style.text_color or "#FFFFFF"
        return [
            *self._box(node, context, default_fill="#6366F1"),
            self._label(node, context, text_of(node), color),
        ]

    def _render_badge(self, node: WalkNode, context: SvgContext) -> list[MarkupNode]:
        color = node.style.text_color or "#FFFFFF"
        return [
            *self._box(node, context, default_fill="#EF4444"),
            self._label(node, context, text_of(node), color),
        ]

    def _render_input(self, node: WalkNode, context: SvgContext) -> list[MarkupNode]:
        nodes = self._box(
            node, context, default_fill="#FFFFFF", default_stroke="#D1D5DB"
        )
        value = node.content.get("value")
        text = str(value) if value else str(node.content.get("placeholder") or "")
        if text:
            _, height = context.size(node)
            color = node.style.text_color if value else "#9CA3AF"
            fill, opacity = _paint(color or "#111827")
            nodes.append(
                Element(
                    "text",
                    {
                        "x": 12,
                        "y": (height or 0) / 2,
                        "fill": fill,
                        "fill-opacity": opacity,
                        "dominant-baseline": "central",
                    },
                    [Text(text)],
                )
            )
        return nodes

    def _render_list(self, node: WalkNode, context: SvgContext) -> list[MarkupNode]:
        numbered = is_numbered(node.content)
        lines = []
        for index, item in enumerate(list_items(node.content), start=1):
            marker = f"{index}." if numbered else "•"
            lines.append(f"{marker} {item.text}")
            if item.subtext:
                lines.append(f"   {item.subtext}")
        if not lines:
            return []
        fill, opacity = _paint(node.style.text_color or "#111827")
        return [self._lines(node, {"fill": fill, "fill-opacity": opacity}, lines)]

    def _render_image(self, node: WalkNode, context: SvgContext) -> list[MarkupNode]:
        width, height = context.size(node)
        url = node.content.get("url") or node.content.get("src")
        if width is None or height is None:
            context.lossy(node, "image needs a numeric width and height")
            return []
        if not url:
            placeholder = {"width": width, "height": height, "fill": "#E5E7EB"}
            return [Element("rect", placeholder)]

        fit = node.style.get("objectFit") or node.content.get("objectFit")
        attrs: dict = {
            "href": url,
            "width": width,
            "height": height,
            "preserveAspectRatio": _ASPECT.get(fit, "none"),
        }
        radius = self._radius(node, context)
        if radius:
            clip = Element(
                "clipPath",
                {"id": def_id("clip", node.id)},
                [
                    Element(
                        "rect",
                        {"width": width, "height": height, "rx": radius, "ry": radius},
                    )
                ],
            )
            attrs["clip-path"] = context.add_def(clip)
        return [Element("image", attrs)]

    def _render_divider(self, node: WalkNode, context: SvgContext) -> list[MarkupNode]:
        style = node.style
        width, height = context.size(node)
        color = (
            style.border_color()
            or style.get("color")
            or style.background_color
            or "#E5E7EB"
        )
        stroke, opacity = _paint(color)
        y = (height or 0) / 2
        return [
            Element(
                "line",
                {
                    "x1": 0,
                    "y1": y,
                    "x2": width or 0,
                    "y2": y,
                    "stroke": stroke,
                    "stroke-opacity": opacity,
                    "stroke-width": style.border_width() or 1,
                },
            )
        ]

    def _render_spacer(self, node: WalkNode, context: SvgContext) -> list[MarkupNode]:
        return []

    def _render_progressbar(
        self, node: WalkNode, context: SvgContext
    ) -> list[MarkupNode]:
        width, height = context.size(node)
        if width is None or height is None:
            context.lossy(node, "progress bar needs a numeric width and height")
            return []
        _, _, fraction = progress(node.content)
        radius = self._radius(node, context) or height / 2
        track, track_opacity = _paint(node.style.background_color or "#E5E7EB")
        fill, fill_opacity = _paint(node.style.text_color or "#10B981")
        return [
            Element(
                "rect",
                {
                    "width": width,
                    "height": height,
                    "rx": radius,
                    "ry": radius,
                    "fill": track,
                    "fill-opacity": track_opacity,
                },
            ),
            Element(
                "rect",
                {
                    "width": round(width * fraction, 4),
                    "height": height,
                    "rx": radius,
                    "ry": radius,
                    "fill": fill,
                    "fill-opacity": fill_opacity,
                },
            ),
        ]

    def _render_placeholder(
        self, node: WalkNode, context: SvgContext
    ) -> list[MarkupNode]:
        nodes: list[MarkupNode] = [
            Comment(f"{node.kind.value} '{node.id}' has no SVG equivalent")
        ]
        width, height = context.size(node)
        if width and height:
            nodes.append(
                Element(
                    "rect",
                    {
                        "width": width,
                        "height": height,
                        "fill": "none",
                        "stroke": "#9CA3AF",
                        "stroke-width": 1,
                        "stroke-dasharray": "4 4",
                    },
                )
            )
        return nodes


__all__ = ["SvgContext", "SvgProvider", "def_id", "gradient_vector"]
