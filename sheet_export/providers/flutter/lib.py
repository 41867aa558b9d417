"""Flutter provider: one StatelessWidget per export.

The widget tree mirrors the component tree. Flex containers become
``Column``/``Row``/``Wrap`` with ``SizedBox`` gaps, everything else is a
``Stack`` of ``Positioned`` children. Decoration (colors, gradients,
borders, radii, shadows) lives in a ``BoxDecoration``; opacity, rotation
and blur are wrapper widgets around the component.

Example output (material):
    ```dart
    import 'package:flutter/material.dart';

    class CustomWidget extends StatelessWidget {
      const CustomWidget({super.key});

      @override
      Widget build(BuildContext context) {
        return Container(
          width: 300,
          height: 200,
          decoration: BoxDecoration(color: Color(0xFFFFFFFF)),
          ...
        );
      }
    }
    ```
"""

import math
from collections.abc import Mapping
from typing import Any

from sheet_export.config import EnvVar, get_environment
from sheet_export.core.errors import WarningCategory
from sheet_export.ir import Call, DartList, Raw, dart_string, render_dart
from sheet_export.providers.content import (
    button_labels,
    is_numbered,
    is_vertical_group,
    list_items,
    progress,
    text_of,
)
from sheet_export.providers.lib import (
    ExportProvider,
    RenderContext,
    Renderer,
    class_name,
    register_provider,
)
from sheet_export.schema import (
    BlurType,
    ComponentKind,
    FlexDirection,
    FlexLayout,
    GradientType,
    SizingMode,
    StrokeStyle,
    get_kind_meta,
)
from sheet_export.style import parse_color, to_argb_hex, to_number
from sheet_export.walker import Walk, WalkNode

MATERIAL_IMPORT = "import 'package:flutter/material.dart';"
CUPERTINO_IMPORT = "import 'package:flutter/cupertino.dart';"
BLUR_IMPORT = "import 'dart:ui' show ImageFilter;"

FALLBACK_COLOR = "Color(0xFF000000)"

_MAIN_AXIS = {
    "flex-start": "MainAxisAlignment.start",
    "start": "MainAxisAlignment.start",
    "center": "MainAxisAlignment.center",
    "flex-end": "MainAxisAlignment.end",
    "end": "MainAxisAlignment.end",
    "space-between": "MainAxisAlignment.spaceBetween",
    "space-around": "MainAxisAlignment.spaceAround",
    "space-evenly": "MainAxisAlignment.spaceEvenly",
}

_CROSS_AXIS = {
    "flex-start": "CrossAxisAlignment.start",
    "start": "CrossAxisAlignment.start",
    "center": "CrossAxisAlignment.center",
    "flex-end": "CrossAxisAlignment.end",
    "end": "CrossAxisAlignment.end",
    "stretch": "CrossAxisAlignment.stretch",
}

_TEXT_ALIGN = {
    "left": "TextAlign.left",
    "center": "TextAlign.center",
    "right": "TextAlign.right",
    "justify": "TextAlign.justify",
}

_BOX_FIT = {
    "cover": "BoxFit.cover",
    "contain": "BoxFit.contain",
    "fill": "BoxFit.fill",
    "none": "BoxFit.none",
}

_DECORATIONS = {
    "underline": "TextDecoration.underline",
    "line-through": "TextDecoration.lineThrough",
}

_FONT_WEIGHT_NAMES = {"normal": 400, "bold": 700}


def flutter_color(value: Any) -> str | None:
    """``Color(0xAARRGGBB)`` literal for a CSS color.

    Example:
        >>> flutter_color("#FF0000")
        'Color(0xFFFF0000)'
        >>> flutter_color("rgba(255, 0, 0, 0.5)")
        'Color(0x80FF0000)'
    """
    parsed = parse_color(value)
    if parsed is None:
        return None
    return f"Color({to_argb_hex(parsed)})"


def gradient_alignment(angle: float) -> tuple[Raw, Raw]:
    """``begin`` and ``end`` Alignments for a CSS gradient angle.

    Example:
        >>> [a.code for a in gradient_alignment(90)]
        ['Alignment(-1, 0)', 'Alignment(1, 0)']
    """
    radians = math.radians(angle)
    dx = round(math.sin(radians), 4)
    dy = round(-math.cos(radians), 4)
    begin = render_dart(Call("Alignment", [-dx, -dy]))
    end = render_dart(Call("Alignment", [dx, dy]))
    return Raw(begin), Raw(end)


def font_weight(value: Any) -> Raw | None:
    """``FontWeight.wN`` for a CSS font weight."""
    weight = _FONT_WEIGHT_NAMES.get(str(value), to_number(value))
    if weight is None:
        return None
    weight = max(100, min(900, int(round(weight / 100)) * 100))
    return Raw(f"FontWeight.w{weight}")


class FlutterContext(RenderContext):
    """Render context tracking imports and laid-out children."""

    def __init__(self, walk: Walk, option: str, provider: str):
        super().__init__(walk, option, provider)
        self.needs_material = option == "material"
        self.needs_blur = False
        self.layouts: dict[str, Call | None] = {}

    @property
    def cupertino(self) -> bool:
        return self.option == "cupertino"

    def material(self, widget: Call) -> Call:
        """Mark ``widget`` as coming from the material library."""
        self.needs_material = True
        return widget


@register_provider
class FlutterProvider(ExportProvider):
    """Generates a Flutter StatelessWidget for the material or cupertino theme.

    Widgets used:
        - ``Container`` + ``BoxDecoration`` for boxes, shapes and badges
        - ``Column``/``Row``/``Wrap`` for flex layout, ``Stack`` otherwise
        - ``ElevatedButton``/``CupertinoButton`` and ``TextField``/
          ``CupertinoTextField`` depending on the theme
        - ``Opacity``, ``Transform.rotate``, ``ImageFiltered`` and
          ``BackdropFilter`` for effects
    """

    @property
    def name(self) -> str:
        """Provider identifier."""
        return "flutter"

    @property
    def file_extension(self) -> str:
        return ".dart"

    @property
    def options(self) -> tuple[str, ...]:
        """Widget themes, material first."""
        return ("material", "cupertino")

    @property
    def supported_kinds(self) -> frozenset[ComponentKind]:
        """Kinds with a widget mapping.

        richtext, stepper, countdown, carousel, video and rating become
        placeholder containers.
        """
        return frozenset(
            {
                ComponentKind.CONTAINER,
                ComponentKind.SHAPE,
                ComponentKind.TEXT,
                ComponentKind.BUTTON,
                ComponentKind.IMAGE,
                ComponentKind.BADGE,
                ComponentKind.PROGRESSBAR,
                ComponentKind.PROGRESSCIRCLE,
                ComponentKind.LINK,
                ComponentKind.INPUT,
                ComponentKind.LIST,
                ComponentKind.BUTTONGROUP,
                ComponentKind.DIVIDER,
                ComponentKind.SPACER,
            }
        )

    @property
    def renderers(self) -> Mapping[ComponentKind, Renderer]:
        table: dict[ComponentKind, Renderer] = {
            ComponentKind.CONTAINER: self._render_container,
            ComponentKind.SHAPE: self._render_container,
            ComponentKind.TEXT: self._render_text,
            ComponentKind.BUTTON: self._render_button,
            ComponentKind.IMAGE: self._render_image,
            ComponentKind.BADGE: self._render_badge,
            ComponentKind.PROGRESSBAR: self._render_progressbar,
            ComponentKind.PROGRESSCIRCLE: self._render_progresscircle,
            ComponentKind.LINK: self._render_link,
            ComponentKind.INPUT: self._render_input,
            ComponentKind.LIST: self._render_list,
            ComponentKind.BUTTONGROUP: self._render_buttongroup,
            ComponentKind.DIVIDER: self._render_divider,
            ComponentKind.SPACER: self._render_spacer,
        }
        for kind in ComponentKind:
            table.setdefault(kind, self._render_placeholder)
        return table

    def create_context(self, walk: Walk, option: str) -> FlutterContext:
        return FlutterContext(walk, option, self.name)

    # =========================================================================
    # Source assembly
    # =========================================================================

    def emit(self, walk: Walk, context: FlutterContext) -> str:
        """Build widgets bottom-up and wrap the root in a StatelessWidget."""
        built: dict[str, Call] = {}
        for node in reversed(walk.nodes):
            children = [
                (child, built.pop(child.id))
                for child in context.children(node)
                if child.id in built
            ]
            if children and not get_kind_meta(node.kind).can_have_children:
                context.warn(
                    WarningCategory.DROPPED_CHILDREN,
                    node,
                    f"{node.kind.value} widgets cannot contain children; "
                    f"dropped {len(children)}",
                    ", ".join(child.id for child, _ in children),
                )
                children = []
            context.layouts[node.id] = self._layout(node, children, context)
            body = self.render(node, context)
            built[node.id] = _hoist_comment(self._effects(node, body, context), body)

        name = class_name(
            walk.root.component.name,
            get_environment(EnvVar.SHEET_EXPORT_FLUTTER_WIDGET_NAME),
        )
        widget = render_dart(built[walk.root.id], level=2)
        return (
            f"{self._imports(context)}\n"
            "\n"
            f"class {name} extends StatelessWidget {{\n"
            f"  const {name}({{super.key}});\n"
            "\n"
            "  @override\n"
            "  Widget build(BuildContext context) {\n"
            f"    return {widget};\n"
            "  }\n"
            "}\n"
        )

    def _imports(self, context: FlutterContext) -> str:
        packages = []
        if context.cupertino:
            packages.append(CUPERTINO_IMPORT)
        if context.needs_material:
            packages.append(MATERIAL_IMPORT)
        if context.needs_blur:
            return BLUR_IMPORT + "\n\n" + "\n".join(packages)
        return "\n".join(packages)

    def _effects(self, node: WalkNode, widget: Call, context: FlutterContext) -> Call:
        """Wrap a widget in blur, opacity and rotation, innermost first."""
        style = node.style
        blur = style.blur
        if blur is not None:
            context.needs_blur = True
            image_filter = Call(
                "ImageFilter.blur",
                kwargs={"sigmaX": blur.amount, "sigmaY": blur.amount},
            )
            if blur.type == BlurType.LAYER:
                widget = Call(
                    "ImageFiltered",
                    kwargs={"imageFilter": image_filter, "child": widget},
                )
            else:
                backdrop = Call(
                    "BackdropFilter", kwargs={"filter": image_filter, "child": widget}
                )
                widget = Call("ClipRect", kwargs={"child": backdrop})

        if style.blend_mode:
            context.lossy(
                node, "blend modes are not exported to Flutter", style.blend_mode
            )

        if style.opacity < 1:
            widget = Call(
                "Opacity", kwargs={"opacity": round(style.opacity, 4), "child": widget}
            )

        rotation = node.geometry.rotation
        if rotation:
            widget = Call(
                "Transform.rotate",
                kwargs={"angle": round(math.radians(rotation), 4), "child": widget},
            )
        return widget

    # =========================================================================
    # Layout
    # =========================================================================

    def _layout(
        self,
        node: WalkNode,
        children: list[tuple[WalkNode, Call]],
        context: FlutterContext,
    ) -> Call | None:
        """Child widget of a container: flex flow, a Stack, or both."""
        if not children:
            return None

        flex_layout = node.component.flex_layout
        wraps = flex_layout is not None and flex_layout.wraps
        flow = [
            self._flex_item(child, widget, wraps, context)
            for child, widget in children
            if child.geometry.in_flow
        ]
        placed = [
            Call(
                "Positioned",
                kwargs={
                    "left": child.geometry.x,
                    "top": child.geometry.y,
                    "child": widget,
                },
            )
            for child, widget in children
            if not child.geometry.in_flow
        ]
        for positioned in placed:
            _hoist_comment(positioned, positioned.kwargs["child"])

        if not flow:
            return Call("Stack", kwargs={"children": DartList(placed)})
        layout = self._flex(flex_layout, flow)
        if not placed:
            return layout
        return Call("Stack", kwargs={"children": DartList([layout, *placed])})

    def _flex_item(
        self, node: WalkNode, widget: Call, wraps: bool, context: FlutterContext
    ) -> Call:
        flex_child = node.component.flex_child
        if flex_child is not None and flex_child.sizing_mode == SizingMode.FILL:
            # Expanded is only valid inside a Row, Column or Flex
            if wraps:
                context.lossy(node, "fill sizing is ignored inside a Wrap", "fill")
                return widget
            return _hoist_comment(Call("Expanded", kwargs={"child": widget}), widget)
        return widget

    def _flex(self, flex_layout: FlexLayout, items: list[Call]) -> Call:
        direction = flex_layout.direction
        gap = flex_layout.gap

        if flex_layout.wraps:
            return Call(
                "Wrap",
                kwargs={
                    "direction": None if direction.is_row else Raw("Axis.vertical"),
                    "spacing": gap,
                    "runSpacing": gap,
                    "children": DartList(items),
                },
            )

        children: list[Any] = []
        axis = "width" if direction.is_row else "height"
        for index, item in enumerate(items):
            if index and gap:
                children.append(Call("SizedBox", kwargs={axis: gap}, const=True))
            children.append(item)

        main = _MAIN_AXIS.get(flex_layout.justify_content, "MainAxisAlignment.start")
        cross = _CROSS_AXIS.get(flex_layout.align_items, "CrossAxisAlignment.start")
        kwargs: dict[str, Any] = {
            "mainAxisAlignment": None if main.endswith(".start") else Raw(main),
            "crossAxisAlignment": None if cross.endswith(".center") else Raw(cross),
        }
        if direction == FlexDirection.COLUMN_REVERSE:
            kwargs["verticalDirection"] = Raw("VerticalDirection.up")
        elif direction == FlexDirection.ROW_REVERSE:
            kwargs["textDirection"] = Raw("TextDirection.rtl")
        kwargs["children"] = DartList(children)
        return Call("Row" if direction.is_row else "Column", kwargs=kwargs)

    # =========================================================================
    # Style helpers
    # =========================================================================

    def _color(
        self, value: Any, node: WalkNode, context: FlutterContext
    ) -> Raw | None:
        if value is None:
            return None
        color = flutter_color(value)
        if color is None:
            context.lossy(node, "unrecognized color exported as black", value)
            return Raw(FALLBACK_COLOR)
        return Raw(color)

    def _dimension(self, value: Any, node: WalkNode, context: FlutterContext) -> Any:
        number = to_number(value)
        if number is not None:
            return number
        if value == "100%":
            return Raw("double.infinity")
        if isinstance(value, str) and value not in ("auto", "fit-content"):
            context.lossy(node, "relative size not exported to Flutter", value)
        return None

    def _size(self, node: WalkNode, context: FlutterContext) -> tuple[Any, Any]:
        geometry = node.geometry
        return (
            self._dimension(geometry.width, node, context),
            self._dimension(geometry.height, node, context),
        )

    def _sized(self, node: WalkNode, widget: Call, context: FlutterContext) -> Call:
        """Constrain a widget to the component's size, when it has one."""
        width, height = self._size(node, context)
        if width is None and height is None:
            return widget
        return Call(
            "SizedBox", kwargs={"width": width, "height": height, "child": widget}
        )

    def _border_radius(
        self, node: WalkNode, context: FlutterContext, default: float = 0
    ) -> Call | None:
        raw = node.style.get("borderRadius")
        radius = to_number(raw)
        if raw is not None and radius is None:
            tokens = str(raw).split()
            radius = to_number(tokens[0]) if tokens else None
            context.lossy(
                node, "per-corner border radius collapsed to the first value", raw
            )
        if radius is None:
            radius = default
        if not radius:
            return None
        return Call("BorderRadius.circular", [radius])

    def _edge_insets(self, node: WalkNode, context: FlutterContext) -> Call | None:
        """Container padding from the flex layout or the padding declaration."""
        flex_layout = node.component.flex_layout
        if flex_layout is not None and flex_layout.enabled:
            padding = flex_layout.padding
            if padding.is_uniform:
                return Call("EdgeInsets.all", [padding.top], const=True)
            return Call(
                "EdgeInsets.fromLTRB",
                [padding.left, padding.top, padding.right, padding.bottom],
                const=True,
            )

        raw = node.style.get("padding")
        if raw is None:
            return None
        values = [to_number(token) for token in str(raw).split()]
        if not values or None in values or len(values) > 4:
            context.lossy(node, "padding not exported to Flutter", raw)
            return None
        if len(values) == 1:
            return Call("EdgeInsets.all", values, const=True)
        if len(values) == 2:
            vertical, horizontal = values
            return Call(
                "EdgeInsets.symmetric",
                kwargs={"vertical": vertical, "horizontal": horizontal},
                const=True,
            )
        top, right, bottom = values[:3]
        left = values[3] if len(values) == 4 else right
        return Call("EdgeInsets.fromLTRB", [left, top, right, bottom], const=True)

    def _gradient(self, node: WalkNode, context: FlutterContext) -> Call:
        gradient = node.style.gradient
        kwargs: dict[str, Any] = {}
        if gradient.type == GradientType.RADIAL:
            name = "RadialGradient"
        elif gradient.type == GradientType.ANGULAR:
            name = "SweepGradient"
        else:
            name = "LinearGradient"
            kwargs["begin"], kwargs["end"] = gradient_alignment(gradient.angle)
        kwargs["colors"] = DartList(
            [self._color(stop.color, node, context) for stop in gradient.stops]
        )
        kwargs["stops"] = DartList(
            [round(stop.position / 100, 4) for stop in gradient.stops]
        )
        return Call(name, kwargs=kwargs)

    def _shadows(self, node: WalkNode, context: FlutterContext) -> DartList | None:
        """BoxShadow list; reversed because Flutter paints the last on top."""
        shadows = []
        for shadow in node.style.shadows:
            if shadow.inset:
                context.lossy(node, "inner shadows are not exported to Flutter")
                continue
            shadows.append(
                Call(
                    "BoxShadow",
                    kwargs={
                        "color": self._color(shadow.color, node, context),
                        "offset": Call("Offset", [shadow.x, shadow.y]),
                        "blurRadius": shadow.blur,
                        "spreadRadius": shadow.spread or None,
                    },
                )
            )
        if not shadows:
            return None
        return DartList(list(reversed(shadows)))

    def _decoration(
        self,
        node: WalkNode,
        context: FlutterContext,
        color: str | None = None,
        radius: float = 0,
    ) -> Call | None:
        """BoxDecoration for a box-like component, or None when plain."""
        style = node.style
        circle = (
            node.kind == ComponentKind.SHAPE
            and node.content.get("shapeType") == "circle"
        )
        kwargs: dict[str, Any] = {}
        if style.gradient is not None:
            kwargs["gradient"] = self._gradient(node, context)
        else:
            kwargs["color"] = self._color(
                style.background_color or color, node, context
            )

        border_width = style.border_width()
        if border_width:
            if style.stroke is not None and style.stroke.style != StrokeStyle.SOLID:
                context.lossy(
                    node,
                    "dashed and dotted strokes export as solid",
                    style.stroke.style.value,
                )
            kwargs["border"] = Call(
                "Border.all",
                kwargs={
                    "color": self._color(style.border_color(), node, context),
                    "width": border_width,
                },
            )

        if circle:
            kwargs["shape"] = Raw("BoxShape.circle")
        else:
            kwargs["borderRadius"] = self._border_radius(node, context, radius)
        kwargs["boxShadow"] = self._shadows(node, context)

        if all(value is None for value in kwargs.values()):
            return None
        return Call("BoxDecoration", kwargs=kwargs)

    def _text_style(
        self,
        node: WalkNode,
        context: FlutterContext,
        color: str | None = None,
        include_color: bool = True,
        decoration: str | None = None,
        font_size: float | None = None,
    ) -> Call | None:
        style = node.style
        size = style.number("fontSize", font_size)
        kwargs: dict[str, Any] = {
            "color": (
                self._color(style.text_color or color, node, context)
                if include_color
                else None
            ),
            "fontSize": size,
            "fontWeight": font_weight(style.get("fontWeight")),
            "fontStyle": (
                Raw("FontStyle.italic") if style.get("fontStyle") == "italic" else None
            ),
            "fontFamily": (
                dart_string(str(style.get("fontFamily")))
                if style.get("fontFamily")
                else None
            ),
            "letterSpacing": style.number("letterSpacing"),
            "height": _line_height(style.get("lineHeight"), size),
        }
        text_decoration = decoration or _DECORATIONS.get(style.get("textDecoration"))
        kwargs["decoration"] = Raw(text_decoration) if text_decoration else None
        if all(value is None for value in kwargs.values()):
            return None
        return Call("TextStyle", kwargs=kwargs)

    def _text(
        self,
        text: str,
        node: WalkNode,
        context: FlutterContext,
        **style_options: Any,
    ) -> Call:
        align = _TEXT_ALIGN.get(node.style.get("textAlign"))
        return Call(
            "Text",
            [dart_string(text)],
            {
                "style": self._text_style(node, context, **style_options),
                "textAlign": Raw(align) if align else None,
            },
        )

    def _button(
        self,
        label: str,
        context: FlutterContext,
        style: Call | None = None,
        label_style: Call | None = None,
        color: Raw | None = None,
        radius: Call | None = None,
    ) -> Call:
        """ElevatedButton or CupertinoButton for the selected theme."""
        text = Call("Text", [dart_string(label)], {"style": label_style})
        if context.cupertino:
            return Call(
                "CupertinoButton",
                kwargs={
                    "onPressed": Raw("() {}"),
                    "color": color,
                    "borderRadius": radius,
                    "child": text,
                },
            )
        return context.material(
            Call(
                "ElevatedButton",
                kwargs={"onPressed": Raw("() {}"), "style": style, "child": text},
            )
        )

    # =========================================================================
    # Renderers
    # =========================================================================

    def _render_container(self, node: WalkNode, context: FlutterContext) -> Call:
        width, height = self._size(node, context)
        return Call(
            "Container",
            kwargs={
                "width": width,
                "height": height,
                "padding": self._edge_insets(node, context),
                "decoration": self._decoration(node, context),
                "child": context.layouts.get(node.id),
            },
        )

    def _render_text(self, node: WalkNode, context: FlutterContext) -> Call:
        return self._sized(node, self._text(text_of(node), node, context), context)

    def _render_link(self, node: WalkNode, context: FlutterContext) -> Call:
        text = self._text(
            text_of(node),
            node,
            context,
            color="#2563EB",
            decoration="TextDecoration.underline",
        )
        return self._sized(node, text, context)

    def _render_button(self, node: WalkNode, context: FlutterContext) -> Call:
        style = node.style
        background = self._color(style.background_color, node, context)
        foreground = self._color(style.text_color, node, context)
        radius = self._border_radius(node, context)
        label_style = self._text_style(
            node, context, include_color=context.cupertino
        )

        button_style = None
        if not context.cupertino:
            shape = None
            if radius is not None:
                shape = Call("RoundedRectangleBorder", kwargs={"borderRadius": radius})
            styled = {
                "backgroundColor": background,
                "foregroundColor": foreground,
                "shape": shape,
            }
            if any(value is not None for value in styled.values()):
                button_style = Call("ElevatedButton.styleFrom", kwargs=styled)

        button = self._button(
            text_of(node),
            context,
            style=button_style,
            label_style=label_style,
            color=background,
            radius=radius,
        )
        return self._sized(node, button, context)

    def _render_badge(self, node: WalkNode, context: FlutterContext) -> Call:
        width, height = self._size(node, context)
        padding = self._edge_insets(node, context) or Call(
            "EdgeInsets.symmetric",
            kwargs={"vertical": 4, "horizontal": 8},
            const=True,
        )
        return Call(
            "Container",
            kwargs={
                "width": width,
                "height": height,
                "padding": padding,
                "alignment": Raw("Alignment.center"),
                "decoration": self._decoration(
                    node, context, color="#EF4444", radius=12
                ),
                "child": self._text(
                    text_of(node), node, context, color="#FFFFFF", font_size=12
                ),
            },
        )

    def _render_image(self, node: WalkNode, context: FlutterContext) -> Call:
        width, height = self._size(node, context)
        url = node.content.get("url") or node.content.get("src")
        if not url:
            return Call(
                "Container",
                kwargs={
                    "width": width,
                    "height": height,
                    "color": Raw("Color(0xFFE5E7EB)"),
                },
            )
        fit = _BOX_FIT.get(node.style.get("objectFit"), "BoxFit.cover")
        image = Call(
            "Image.network",
            [dart_string(str(url))],
            {"width": width, "height": height, "fit": Raw(fit)},
        )
        radius = self._border_radius(node, context)
        if radius is None:
            return image
        return Call("ClipRRect", kwargs={"borderRadius": radius, "child": image})

    def _render_input(self, node: WalkNode, context: FlutterContext) -> Call:
        content = node.content
        placeholder = content.get("placeholder")
        hint = dart_string(str(placeholder)) if placeholder else None
        if context.cupertino:
            field = Call("CupertinoTextField", kwargs={"placeholder": hint})
        else:
            label = content.get("label")
            decoration = Call(
                "InputDecoration",
                kwargs={
                    "hintText": hint,
                    "labelText": dart_string(str(label)) if label else None,
                    "border": Call("OutlineInputBorder", const=True),
                },
            )
            field = context.material(
                Call("TextField", kwargs={"decoration": decoration})
            )
        return self._sized(node, field, context)

    def _render_list(self, node: WalkNode, context: FlutterContext) -> Call:
        numbered = is_numbered(node.content)
        children = []
        for index, item in enumerate(list_items(node.content), start=1):
            marker = f"{index}. " if numbered else "• "
            children.append(self._text(marker + item.text, node, context))
            if item.subtext:
                subtext = Call(
                    "Text",
                    [dart_string(item.subtext)],
                    {
                        "style": Call(
                            "TextStyle",
                            kwargs={
                                "fontSize": 12,
                                "color": Raw("Color(0xFF6B7280)"),
                            },
                        )
                    },
                )
                children.append(
                    Call(
                        "Padding",
                        kwargs={
                            "padding": Call(
                                "EdgeInsets.only", kwargs={"left": 16}, const=True
                            ),
                            "child": subtext,
                        },
                    )
                )
        column = Call(
            "Column",
            kwargs={
                "crossAxisAlignment": Raw("CrossAxisAlignment.start"),
                "children": DartList(children),
            },
        )
        return self._sized(node, column, context)

    def _render_buttongroup(self, node: WalkNode, context: FlutterContext) -> Call:
        vertical = is_vertical_group(node.content)
        axis = "height" if vertical else "width"
        children: list[Any] = []
        for index, label in enumerate(button_labels(node.content)):
            if index:
                children.append(Call("SizedBox", kwargs={axis: 12}, const=True))
            children.append(self._button(label, context))
        group = Call(
            "Column" if vertical else "Row",
            kwargs={"children": DartList(children)},
        )
        return self._sized(node, group, context)

    def _render_progressbar(self, node: WalkNode, context: FlutterContext) -> Call:
        _, _, fraction = progress(node.content)
        style = node.style
        indicator = context.material(
            Call(
                "LinearProgressIndicator",
                kwargs={
                    "value": round(fraction, 4),
                    "minHeight": node.geometry.numeric_height,
                    "color": self._color(style.text_color, node, context),
                    "backgroundColor": self._color(
                        style.background_color, node, context
                    ),
                },
            )
        )
        width = self._dimension(node.geometry.width, node, context)
        if width is None:
            return indicator
        return Call("SizedBox", kwargs={"width": width, "child": indicator})

    def _render_progresscircle(
        self, node: WalkNode, context: FlutterContext
    ) -> Call:
        _, _, fraction = progress(node.content)
        style = node.style
        size = style.number("size", 120)
        indicator = context.material(
            Call(
                "CircularProgressIndicator",
                kwargs={
                    "value": round(fraction, 4),
                    "strokeWidth": style.number("strokeWidth"),
                    "color": self._color(style.text_color, node, context),
                    "backgroundColor": self._color(
                        style.background_color, node, context
                    ),
                },
            )
        )
        return Call(
            "SizedBox", kwargs={"width": size, "height": size, "child": indicator}
        )

    def _render_divider(self, node: WalkNode, context: FlutterContext) -> Call:
        style = node.style
        color = self._color(
            style.text_color or style.background_color or "#E5E7EB", node, context
        )
        thickness = style.border_width() or 1
        if context.cupertino:
            width = self._dimension(node.geometry.width, node, context)
            return Call(
                "Container",
                kwargs={"width": width, "height": thickness, "color": color},
            )
        return context.material(
            Call(
                "Divider",
                kwargs={
                    "height": node.geometry.numeric_height,
                    "thickness": thickness,
                    "color": color,
                },
            )
        )

    def _render_spacer(self, node: WalkNode, context: FlutterContext) -> Call:
        width, height = self._size(node, context)
        return Call("SizedBox", kwargs={"width": width, "height": height})

    def _render_placeholder(self, node: WalkNode, context: FlutterContext) -> Call:
        width, height = self._size(node, context)
        border = Call("Border.all", kwargs={"color": Raw("Color(0xFF9CA3AF)")})
        return Call(
            "Container",
            kwargs={
                "width": width,
                "height": height,
                "decoration": Call("BoxDecoration", kwargs={"border": border}),
            },
            comment=f"{node.kind.value} '{node.id}' is not supported in Flutter",
        )


def _hoist_comment(outer: Call, inner: Call) -> Call:
    """Move a leading comment from a wrapped widget to its wrapper."""
    if outer is not inner and inner.comment:
        outer.comment, inner.comment = inner.comment, None
    return outer


def _line_height(value: Any, font_size: float | None) -> float | None:
    """TextStyle.height multiplier for a CSS line height."""
    number = to_number(value)
    if number is None:
        return None
    if number <= 4:
        return number
    if font_size:
        return round(number / font_size, 4)
    return None


__all__ = [
    "FlutterContext",
    "FlutterProvider",
    "flutter_color",
    "font_weight",
    "gradient_alignment",
]
