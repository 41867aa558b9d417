"""React provider: one self-contained functional component per export.

The JSX mirrors the component tree. Styling is attached per dialect:

- tailwind: utility classes, with an inline ``style`` object for anything
  that has no clean utility (shadows, gradients, filters)
- styled-components: one ``Styled<Kind>`` per kind; declarations that
  differ between instances become transient props
- css-modules: one rule per component, referenced through ``styles``

Example output (tailwind):
    ```jsx
    import React from 'react';

    export const Component = () => {
      return (
        <div className="relative w-[300px] h-[200px] bg-[#FFFFFF]">
          <p className="absolute left-[10px] top-[10px] w-[120px] ...">Hello</p>
        </div>
      );
    };

    export default Component;
    ```
"""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sheet_export.config import EnvVar, get_environment
from sheet_export.core.errors import WarningCategory
from sheet_export.ir import Element, Expression, MarkupNode, Text, render_markup
from sheet_export.providers.content import (
    button_labels,
    current_step,
    image_urls,
    is_numbered,
    is_vertical_group,
    list_items,
    percent_label,
    progress,
    rating,
    steps,
    text_of,
)
from sheet_export.providers.lib import (
    ExportProvider,
    RenderContext,
    Renderer,
    class_name,
    register_provider,
    safe_id,
)
from sheet_export.schema import ComponentKind, PositionMode, get_kind_meta
from sheet_export.style import (
    UNITLESS,
    flex_container_declarations,
    format_number,
    format_value,
    kebab_case,
    px,
    resolve_flex_item,
)
from sheet_export.walker import Walk, WalkNode

from .tailwind import to_tailwind

# Elements that cannot hold child components
VOID_TAGS = frozenset({"img", "input", "hr", "video"})

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_KIND_NAMES = {
    ComponentKind.RICHTEXT: "RichText",
    ComponentKind.BUTTONGROUP: "ButtonGroup",
    ComponentKind.PROGRESSBAR: "ProgressBar",
    ComponentKind.PROGRESSCIRCLE: "ProgressCircle",
}


def js_object(declarations: Mapping[str, Any]) -> str:
    """JavaScript object literal for an inline ``style`` prop.

    Unitless numbers stay numbers; everything else becomes a string.

    Example:
        >>> js_object({"opacity": 0.5, "boxShadow": "0px 4px 8px 0px #000"})
        '{ opacity: 0.5, boxShadow: "0px 4px 8px 0px #000" }'
    """
    parts = []
    for prop, value in declarations.items():
        key = prop if _IDENTIFIER.match(prop) else json.dumps(prop)
        if (
            prop in UNITLESS
            and isinstance(value, (int, float))
            and not isinstance(value, bool)
        ):
            text = format_number(value)
        else:
            text = json.dumps(format_value(prop, value))
        parts.append(f"{key}: {text}")
    return "{ " + ", ".join(parts) + " }"


def _style(declarations: Mapping[str, Any]) -> Expression:
    return Expression(js_object(declarations))


def _template(text: str) -> str:
    """Escape text for a tagged template literal."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def _transient(prop: str) -> str:
    return "$" + re.sub(r"[^A-Za-z0-9_]", "_", prop)


def css_class(component_id: str) -> str:
    """CSS-module class name for a component id."""
    name = safe_id(component_id)
    return name if name[0].isalpha() or name[0] == "_" else f"c-{name}"


@dataclass
class StyledDefinition:
    """One ``const Styled<Kind> = styled.<tag>`` definition.

    Attributes:
        name: Component name, e.g. ``StyledButton``.
        tag: HTML tag of the first instance.
        shared: Declarations identical across every instance.
        varying: Properties that differ and are passed as transient props.
    """

    name: str
    tag: str
    shared: list[tuple[str, Any]] = field(default_factory=list)
    varying: list[str] = field(default_factory=list)

    def source(self) -> str:
        lines = [f"const {self.name} = styled.{self.tag}`"]
        for prop, value in self.shared:
            text = _template(format_value(prop, value))
            lines.append(f"  {kebab_case(prop)}: {text};")
        for prop in self.varying:
            name = _transient(prop)
            lines.append(
                "  ${(p) => p."
                + name
                + " && `"
                + kebab_case(prop)
                + ": ${p."
                + name
                + "};`}"
            )
        lines.append("`;")
        return "\n".join(lines)


class ReactContext(RenderContext):
    """Render context holding resolved declarations per component."""

    def __init__(self, walk: Walk, option: str, provider: str):
        super().__init__(walk, option, provider)
        self.declarations: dict[str, dict[str, Any]] = {}
        self.styled: dict[ComponentKind, StyledDefinition] = {}


@register_provider
class ReactProvider(ExportProvider):
    """Generates a React functional component in a selectable dialect."""

    @property
    def name(self) -> str:
        """Provider identifier."""
        return "react"

    @property
    def file_extension(self) -> str:
        return ".jsx"

    @property
    def options(self) -> tuple[str, ...]:
        """Styling dialects, tailwind first."""
        return ("tailwind", "styled-components", "css-modules")

    @property
    def supported_kinds(self) -> frozenset[ComponentKind]:
        """Every kind has an HTML rendering."""
        return frozenset(ComponentKind)

    @property
    def renderers(self) -> Mapping[ComponentKind, Renderer]:
        return {
            ComponentKind.TEXT: self._render_text,
            ComponentKind.IMAGE: self._render_image,
            ComponentKind.VIDEO: self._render_video,
            ComponentKind.BUTTON: self._render_button,
            ComponentKind.INPUT: self._render_input,
            ComponentKind.SHAPE: self._render_box,
            ComponentKind.CONTAINER: self._render_box,
            ComponentKind.CAROUSEL: self._render_carousel,
            ComponentKind.RATING: self._render_rating,
            ComponentKind.DIVIDER: self._render_divider,
            ComponentKind.SPACER: self._render_box,
            ComponentKind.BADGE: self._render_badge,
            ComponentKind.RICHTEXT: self._render_richtext,
            ComponentKind.BUTTONGROUP: self._render_buttongroup,
            ComponentKind.PROGRESSBAR: self._render_progressbar,
            ComponentKind.PROGRESSCIRCLE: self._render_progresscircle,
            ComponentKind.STEPPER: self._render_stepper,
            ComponentKind.LIST: self._render_list,
            ComponentKind.COUNTDOWN: self._render_countdown,
            ComponentKind.LINK: self._render_link,
        }

    def create_context(self, walk: Walk, option: str) -> ReactContext:
        return ReactContext(walk, option, self.name)

    # =========================================================================
    # Source assembly
    # =========================================================================

    def emit(self, walk: Walk, context: ReactContext) -> str:
        """Resolve declarations, build JSX bottom-up and wrap it per dialect."""
        nodes = self._emitted_nodes(walk, context)
        for node in nodes:
            context.declarations[node.id] = self.declarations(node)
        if context.option == "styled-components":
            context.styled = self._styled_definitions(nodes, context)

        built: dict[str, Element] = {}
        for node in reversed(nodes):
            element = self.render(node, context)
            self._attach_style(element, node, context)
            for child in context.children(node):
                if child.id in built:
                    element.append(built.pop(child.id))
            built[node.id] = element

        name = class_name(
            walk.root.component.name,
            get_environment(EnvVar.SHEET_EXPORT_REACT_COMPONENT_NAME),
        )
        jsx = render_markup(built[walk.root.id], "jsx", level=2)
        component = (
            f"export const {name} = () => {{\n"
            "  return (\n"
            f"{jsx}\n"
            "  );\n"
            "};\n"
            "\n"
            f"export default {name};\n"
        )

        if context.option == "styled-components":
            definitions = "\n\n".join(d.source() for d in context.styled.values())
            return (
                "import React from 'react';\n"
                "import styled from 'styled-components';\n"
                "\n"
                f"{definitions}\n"
                "\n"
                f"{component}"
            )

        if context.option == "css-modules":
            rules = []
            for node in nodes:
                declarations = context.declarations[node.id]
                if not declarations:
                    continue
                body = "".join(
                    f"  {kebab_case(prop)}: {format_value(prop, value)};\n"
                    for prop, value in declarations.items()
                )
                rules.append(f".{css_class(node.id)} {{\n{body}}}")
            return (
                f"/* ---------- {name}.module.css ---------- */\n"
                + "\n\n".join(rules)
                + "\n\n"
                f"/* ---------- {name}.jsx ---------- */\n"
                "import React from 'react';\n"
                f"import styles from './{name}.module.css';\n"
                "\n"
                f"{component}"
            )

        return f"import React from 'react';\n\n{component}"

    def _emitted_nodes(self, walk: Walk, context: ReactContext) -> list[WalkNode]:
        """Walk order minus subtrees hanging off void elements."""
        dropped: set[str] = set()
        nodes = []
        for node in walk:
            if node.id in dropped:
                dropped.update(node.child_ids)
                continue
            nodes.append(node)
            tag = self._tag(node)
            if node.child_ids and tag in VOID_TAGS:
                context.warn(
                    WarningCategory.DROPPED_CHILDREN,
                    node,
                    f"<{tag}> cannot contain children; "
                    f"dropped {len(node.child_ids)}",
                    ", ".join(node.child_ids),
                )
                dropped.update(node.child_ids)
        return nodes

    def _tag(self, node: WalkNode) -> str:
        if node.kind == ComponentKind.LIST and is_numbered(node.content):
            return "ol"
        return get_kind_meta(node.kind).html_tag

    # =========================================================================
    # Declarations
    # =========================================================================

    def declarations(self, node: WalkNode) -> dict[str, Any]:
        """All CSS declarations of a node, camelCase, in emission order.

        Positioning comes first, then flex container properties, then the
        resolved style. Kind defaults only fill gaps.
        """
        declarations = self._positioning(node)
        declarations.update(flex_container_declarations(node.component.flex_layout))
        declarations.update(node.style.declarations)
        for prop, value in self._kind_declarations(node).items():
            declarations.setdefault(prop, value)
        return declarations

    def _positioning(self, node: WalkNode) -> dict[str, Any]:
        geometry = node.geometry
        declarations: dict[str, Any] = {}
        if node.is_root:
            declarations["position"] = "relative"
        elif geometry.in_flow:
            if geometry.mode == PositionMode.STICKY:
                declarations["position"] = "sticky"
        else:
            mode = geometry.mode
            if mode == PositionMode.FIXED:
                x, y = geometry.absolute_x, geometry.absolute_y
            else:
                x, y = geometry.x, geometry.y
            # Outside a flex parent, relative components are placed by x/y
            declarations["position"] = (
                "absolute" if mode == PositionMode.RELATIVE else mode.value
            )
            declarations["left"] = px(x)
            declarations["top"] = px(y)

        if geometry.width is not None:
            declarations["width"] = px(geometry.width)
        if geometry.height is not None:
            declarations["height"] = px(geometry.height)
        if geometry.in_flow:
            declarations.update(resolve_flex_item(node.component.flex_child))
        if geometry.rotation:
            declarations["transform"] = f"rotate({format_number(geometry.rotation)}deg)"
        z_index = node.component.geometry.z_index
        if z_index is not None:
            declarations["zIndex"] = z_index
        return declarations

    def _kind_declarations(self, node: WalkNode) -> dict[str, Any]:
        kind = node.kind
        style = node.style
        if kind == ComponentKind.SHAPE and node.content.get("shapeType") == "circle":
            return {"borderRadius": "50%"}
        if kind == ComponentKind.DIVIDER:
            color = style.get("color") or style.background_color or "#E5E7EB"
            return {"border": "none", "borderTop": f"1px solid {color}"}
        if kind == ComponentKind.BUTTONGROUP:
            vertical = is_vertical_group(node.content)
            return {
                "display": "flex",
                "flexDirection": "column" if vertical else "row",
                "gap": "12px",
            }
        if kind == ComponentKind.CAROUSEL:
            return {"display": "flex", "overflow": "hidden"}
        if kind == ComponentKind.RATING:
            return {"display": "flex", "gap": "4px"}
        if kind == ComponentKind.PROGRESSBAR:
            return {"overflow": "hidden", "backgroundColor": "#E5E7EB"}
        if kind == ComponentKind.PROGRESSCIRCLE:
            return {
                "display": "flex",
                "flexDirection": "column",
                "alignItems": "center",
            }
        return {}

    def _styled_definitions(
        self, nodes: list[WalkNode], context: ReactContext
    ) -> dict[ComponentKind, StyledDefinition]:
        """Split each kind's declarations into shared and varying."""
        by_kind: dict[ComponentKind, list[WalkNode]] = {}
        for node in nodes:
            by_kind.setdefault(node.kind, []).append(node)

        definitions = {}
        for kind, members in by_kind.items():
            first, *others = [context.declarations[m.id] for m in members]
            shared = [
                (prop, value)
                for prop, value in first.items()
                if all(prop in other and other[prop] == value for other in others)
            ]
            shared_props = {prop for prop, _ in shared}
            varying: list[str] = []
            for declarations in [first, *others]:
                for prop in declarations:
                    if prop not in shared_props and prop not in varying:
                        varying.append(prop)
            name = _KIND_NAMES.get(kind, kind.value.capitalize())
            definitions[kind] = StyledDefinition(
                name=f"Styled{name}",
                tag=self._tag(members[0]),
                shared=shared,
                varying=varying,
            )
        return definitions

    def _attach_style(
        self, element: Element, node: WalkNode, context: ReactContext
    ) -> None:
        declarations = context.declarations[node.id]
        attrs: dict[str, Any] = {}

        if context.option == "tailwind":
            classes, leftovers = to_tailwind(declarations)
            attrs["className"] = " ".join(classes) or None
            attrs.update(element.attrs)
            attrs["style"] = _style(leftovers) if leftovers else None

        elif context.option == "styled-components":
            definition = context.styled[node.kind]
            attrs["as"] = element.tag if element.tag != definition.tag else None
            for prop in definition.varying:
                if prop in declarations:
                    attrs[_transient(prop)] = format_value(prop, declarations[prop])
            attrs.update(element.attrs)
            element.tag = definition.name

        else:
            if declarations:
                attrs["className"] = Expression(f"styles['{css_class(node.id)}']")
            attrs.update(element.attrs)

        element.attrs = attrs

    # =========================================================================
    # Renderers
    # =========================================================================

    def _lines(self, text: str) -> list[MarkupNode]:
        nodes: list[MarkupNode] = []
        for index, line in enumerate(text.split("\n")):
            if index:
                nodes.append(Element("br"))
            if line:
                nodes.append(Text(line))
        return nodes

    def _render_box(self, node: WalkNode, context: ReactContext) -> Element:
        return Element("div")

    def _render_text(self, node: WalkNode, context: ReactContext) -> Element:
        return Element(self._tag(node), {}, self._lines(text_of(node)))

    def _render_button(self, node: WalkNode, context: ReactContext) -> Element:
        return Element("button", {"type": "button"}, self._lines(text_of(node)))

    def _render_badge(self, node: WalkNode, context: ReactContext) -> Element:
        return Element("span", {}, self._lines(text_of(node)))

    def _render_link(self, node: WalkNode, context: ReactContext) -> Element:
        content = node.content
        external = bool(content.get("external"))
        attrs = {
            "href": content.get("href") or content.get("url") or "#",
            "target": "_blank" if external else None,
            "rel": "noopener noreferrer" if external else None,
        }
        return Element("a", attrs, self._lines(text_of(node)))

    def _render_image(self, node: WalkNode, context: ReactContext) -> Element:
        content = node.content
        return Element(
            "img",
            {
                "src": content.get("url") or content.get("src") or "",
                "alt": content.get("alt") or "",
            },
        )

    def _render_video(self, node: WalkNode, context: ReactContext) -> Element:
        content = node.content
        return Element(
            "video",
            {
                "src": content.get("url") or "",
                "poster": content.get("thumbnail"),
                "controls": content.get("showControls", True) is not False,
            },
        )

    def _render_input(self, node: WalkNode, context: ReactContext) -> Element:
        content = node.content
        return Element(
            "input",
            {
                "type": content.get("inputType") or "text",
                "placeholder": content.get("placeholder"),
                "defaultValue": content.get("value"),
                "aria-label": content.get("label"),
            },
        )

    def _render_divider(self, node: WalkNode, context: ReactContext) -> Element:
        return Element("hr")

    def _render_richtext(self, node: WalkNode, context: ReactContext) -> Element:
        markup = str(node.content.get("html") or "")
        inner = Expression(f"{{ __html: {json.dumps(markup)} }}")
        return Element("div", {"dangerouslySetInnerHTML": inner})

    def _render_buttongroup(self, node: WalkNode, context: ReactContext) -> Element:
        buttons = [
            Element("button", {"type": "button"}, [Text(label)])
            for label in button_labels(node.content)
        ]
        return Element("div", {}, buttons)

    def _render_carousel(self, node: WalkNode, context: ReactContext) -> Element:
        slide = {
            "width": "100%",
            "height": "100%",
            "objectFit": "cover",
            "flexShrink": 0,
        }
        images = [
            Element(
                "img",
                {"src": url, "alt": f"Slide {index}", "style": _style(slide)},
            )
            for index, url in enumerate(image_urls(node.content), start=1)
        ]
        return Element("div", {}, images)

    def _render_rating(self, node: WalkNode, context: ReactContext) -> Element:
        filled, total = rating(node.content)
        on = node.style.get("starColor") or "#FBBF24"
        off = node.style.get("emptyStarColor") or "#D1D5DB"
        stars = [
            Element(
                "span",
                {"style": _style({"color": on if index < filled else off})},
                [Text("★")],
            )
            for index in range(total)
        ]
        return Element("div", {}, stars)

    def _render_progressbar(self, node: WalkNode, context: ReactContext) -> Element:
        _, _, fraction = progress(node.content)
        fill = {
            "width": f"{format_number(round(fraction * 100, 2))}%",
            "height": "100%",
            "backgroundColor": node.style.text_color or "#10B981",
            "borderRadius": "inherit",
        }
        return Element("div", {}, [Element("div", {"style": _style(fill)})])

    def _render_progresscircle(
        self, node: WalkNode, context: ReactContext
    ) -> Element:
        _, _, fraction = progress(node.content)
        size = node.style.number("size", 120)
        percent = format_number(round(fraction * 100, 2))
        track = node.style.background_color or "#E5E7EB"
        ring = {"cx": 18, "cy": 18, "r": 15.9155, "fill": "none", "strokeWidth": 3}
        svg = Element(
            "svg",
            {"width": size, "height": size, "viewBox": "0 0 36 36"},
            [
                Element("circle", {**ring, "stroke": track}),
                Element(
                    "circle",
                    {
                        **ring,
                        "stroke": node.style.text_color or "#3B82F6",
                        "strokeDasharray": f"{percent} 100",
                        "transform": "rotate(-90 18 18)",
                    },
                ),
            ],
        )
        label = Element("span", {}, [Text(percent_label(node.content))])
        return Element("div", {}, [svg, label])

    def _render_stepper(self, node: WalkNode, context: ReactContext) -> Element:
        current = current_step(node.content)
        items = []
        for index, step in enumerate(steps(node.content)):
            label = f"✓ {step.label}" if step.completed else step.label
            attrs = {"aria-current": "step" if index == current else None}
            items.append(Element("li", attrs, [Text(label)]))
        return Element("ol", {}, items)

    def _render_list(self, node: WalkNode, context: ReactContext) -> Element:
        items = []
        for item in list_items(node.content):
            children: list[MarkupNode] = [Text(item.text)]
            if item.subtext:
                children.append(Element("br"))
                children.append(Element("small", {}, [Text(item.subtext)]))
            items.append(Element("li", {}, children))
        return Element(self._tag(node), {}, items)

    def _render_countdown(self, node: WalkNode, context: ReactContext) -> Element:
        target = node.content.get("targetDate")
        if not target:
            return Element("time", {}, [Text("00:00:00")])
        return Element("time", {"dateTime": str(target)}, [Text(str(target))])


__all__ = [
    "ReactContext",
    "ReactProvider",
    "StyledDefinition",
    "VOID_TAGS",
    "css_class",
    "js_object",
]
