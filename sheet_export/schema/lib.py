"""Authoritative data model for bottom-sheet component trees.

This module is the single source of truth for the shape of an editor
snapshot. It provides:
- The closed set of component kinds with per-kind metadata
- Pydantic models for geometry, flex layout, effects and components
- ComponentTree, an id-indexed snapshot with ordered roots
- Snapshot loading from the editor's several JSON layouts

JSON keys are camelCase (``flexLayout``, ``childIds``); Python attributes
are snake_case. Unknown keys (interactions, animations, states) are ignored.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from sheet_export.core.errors import InputError

# === ENUMS ===


class ComponentKind(str, Enum):
    """Closed set of component kinds produced by the editor."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    BUTTON = "button"
    INPUT = "input"
    SHAPE = "shape"
    CONTAINER = "container"
    CAROUSEL = "carousel"
    RATING = "rating"
    DIVIDER = "divider"
    SPACER = "spacer"
    BADGE = "badge"
    RICHTEXT = "richtext"
    BUTTONGROUP = "buttongroup"
    PROGRESSBAR = "progressbar"
    PROGRESSCIRCLE = "progresscircle"
    STEPPER = "stepper"
    LIST = "list"
    COUNTDOWN = "countdown"
    LINK = "link"


class ComponentCategory(str, Enum):
    """High-level component groupings."""

    LAYOUT = "layout"
    CONTENT = "content"
    MEDIA = "media"
    CONTROL = "control"
    PROGRESS = "progress"


class PositionMode(str, Enum):
    """How a component is placed relative to its parent.

    - ABSOLUTE: declared x, y relative to the parent origin
    - RELATIVE: flows inside a flex parent (the editor calls this "flex")
    - FIXED: declared x, y relative to the export root
    - STICKY: flows like relative, pinned when scrolled
    """

    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    FIXED = "fixed"
    STICKY = "sticky"


class FlexDirection(str, Enum):
    """Main axis of a flex container."""

    ROW = "row"
    COLUMN = "column"
    ROW_REVERSE = "row-reverse"
    COLUMN_REVERSE = "column-reverse"

    @property
    def is_row(self) -> bool:
        return self in (FlexDirection.ROW, FlexDirection.ROW_REVERSE)

    @property
    def is_reversed(self) -> bool:
        return self in (FlexDirection.ROW_REVERSE, FlexDirection.COLUMN_REVERSE)


class SizingMode(str, Enum):
    """Flex-item sizing along the parent's main axis."""

    HUG = "hug"
    FILL = "fill"
    FIXED = "fixed"


class ShadowType(str, Enum):
    DROP = "drop-shadow"
    INNER = "inner-shadow"


class GradientType(str, Enum):
    LINEAR = "linear"
    RADIAL = "radial"
    ANGULAR = "angular"


class BlurType(str, Enum):
    LAYER = "layer"
    BACKGROUND = "background"


class StrokePosition(str, Enum):
    INSIDE = "inside"
    CENTER = "center"
    OUTSIDE = "outside"


class StrokeStyle(str, Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"


class BlendMode(str, Enum):
    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    DARKEN = "darken"
    LIGHTEN = "lighten"


# === KIND METADATA ===


@dataclass(frozen=True)
class KindMeta:
    """Metadata for a component kind.

    Attributes:
        kind: The component kind.
        category: High-level grouping.
        description: Human-readable description.
        can_have_children: Whether the editor allows nesting under this kind.
        html_tag: Closest HTML element, used by markup backends.
    """

    kind: ComponentKind
    category: ComponentCategory
    description: str
    can_have_children: bool = False
    html_tag: str = "div"

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to a plain dictionary."""
        return {
            "kind": self.kind.value,
            "category": self.category.value,
            "description": self.description,
            "can_have_children": self.can_have_children,
            "html_tag": self.html_tag,
        }


def _meta(
    kind: ComponentKind,
    category: ComponentCategory,
    description: str,
    *,
    children: bool = False,
    tag: str = "div",
) -> tuple[ComponentKind, KindMeta]:
    return kind, KindMeta(kind, category, description, children, tag)


KIND_REGISTRY: dict[ComponentKind, KindMeta] = dict(
    [
        # === LAYOUT ===
        _meta(
            ComponentKind.CONTAINER,
            ComponentCategory.LAYOUT,
            "Generic box that groups children, optionally as a flex container",
            children=True,
        ),
        _meta(
            ComponentKind.SHAPE,
            ComponentCategory.LAYOUT,
            "Decorative rectangle, circle or rounded block",
            children=True,
        ),
        _meta(
            ComponentKind.DIVIDER,
            ComponentCategory.LAYOUT,
            "Horizontal rule separating content",
            tag="hr",
        ),
        _meta(
            ComponentKind.SPACER,
            ComponentCategory.LAYOUT,
            "Invisible fixed-size gap between siblings",
        ),
        # === CONTENT ===
        _meta(
            ComponentKind.TEXT,
            ComponentCategory.CONTENT,
            "Static text, possibly spanning several lines",
            tag="p",
        ),
        _meta(
            ComponentKind.RICHTEXT,
            ComponentCategory.CONTENT,
            "Pre-authored HTML fragment rendered verbatim",
        ),
        _meta(
            ComponentKind.BADGE,
            ComponentCategory.CONTENT,
            "Small pill-shaped label",
            tag="span",
        ),
        _meta(
            ComponentKind.LIST,
            ComponentCategory.CONTENT,
            "Bulleted or numbered list of items",
            tag="ul",
        ),
        _meta(
            ComponentKind.LINK,
            ComponentCategory.CONTENT,
            "Text hyperlink",
            tag="a",
        ),
        _meta(
            ComponentKind.COUNTDOWN,
            ComponentCategory.CONTENT,
            "Timer counting down to a target date",
            tag="time",
        ),
        # === MEDIA ===
        _meta(
            ComponentKind.IMAGE,
            ComponentCategory.MEDIA,
            "Remote image scaled into its box",
            tag="img",
        ),
        _meta(
            ComponentKind.VIDEO,
            ComponentCategory.MEDIA,
            "Embedded video player",
            tag="video",
        ),
        _meta(
            ComponentKind.CAROUSEL,
            ComponentCategory.MEDIA,
            "Horizontally swiping set of images",
        ),
        # === CONTROLS ===
        _meta(
            ComponentKind.BUTTON,
            ComponentCategory.CONTROL,
            "Clickable call-to-action with a text label",
            tag="button",
        ),
        _meta(
            ComponentKind.BUTTONGROUP,
            ComponentCategory.CONTROL,
            "Row or column of related buttons",
        ),
        _meta(
            ComponentKind.INPUT,
            ComponentCategory.CONTROL,
            "Single-line text entry field",
            tag="input",
        ),
        _meta(
            ComponentKind.RATING,
            ComponentCategory.CONTROL,
            "Star rating selector",
        ),
        # === PROGRESS ===
        _meta(
            ComponentKind.PROGRESSBAR,
            ComponentCategory.PROGRESS,
            "Horizontal bar filled in proportion to value/max",
        ),
        _meta(
            ComponentKind.PROGRESSCIRCLE,
            ComponentCategory.PROGRESS,
            "Circular ring filled in proportion to value/max",
        ),
        _meta(
            ComponentKind.STEPPER,
            ComponentCategory.PROGRESS,
            "Ordered sequence of steps with a current step",
            tag="ol",
        ),
    ]
)


def get_kind_meta(kind: ComponentKind) -> KindMeta:
    """Get metadata for a component kind.

    Raises:
        KeyError: If kind not found in registry.
    """
    return KIND_REGISTRY[kind]


def get_kinds_by_category(category: ComponentCategory) -> list[ComponentKind]:
    """Get all component kinds in a category, in registry order."""
    return [meta.kind for meta in KIND_REGISTRY.values() if meta.category == category]


# === MODELS ===

_MODEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "frozen": True,
}


class Geometry(BaseModel):
    """Placement and size of a component.

    ``width``/``height`` are numbers (pixels) or CSS strings such as "100%".
    """

    x: float = 0
    y: float = 0
    width: float | str | None = None
    height: float | str | None = None
    mode: PositionMode = Field(
        default=PositionMode.ABSOLUTE,
        validation_alias=AliasChoices("mode", "type"),
    )
    rotation: float = 0
    z_index: int | None = None

    model_config = _MODEL_CONFIG

    @field_validator("mode", mode="before")
    @classmethod
    def _legacy_flex_mode(cls, value: Any) -> Any:
        if value == "flex":
            return PositionMode.RELATIVE
        return value

    @field_validator("x", "y", "rotation", mode="before")
    @classmethod
    def _none_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class Padding(BaseModel):
    """Inner spacing of a flex container. A bare number means all sides."""

    top: float = 16
    right: float = 16
    bottom: float = 16
    left: float = 16

    model_config = _MODEL_CONFIG

    @classmethod
    def uniform(cls, value: float) -> "Padding":
        return cls(top=value, right=value, bottom=value, left=value)

    @property
    def is_uniform(self) -> bool:
        return self.top == self.right == self.bottom == self.left


class FlexLayout(BaseModel):
    """Auto-layout settings turning a component into a flex container."""

    enabled: bool = False
    direction: FlexDirection = FlexDirection.COLUMN
    gap: float = 12
    padding: Padding = Field(default_factory=Padding)
    align_items: str = "flex-start"
    justify_content: str = "flex-start"
    wrap: str = Field(
        default="nowrap", validation_alias=AliasChoices("flexWrap", "wrap")
    )

    model_config = _MODEL_CONFIG

    @field_validator("padding", mode="before")
    @classmethod
    def _uniform_padding(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return Padding.uniform(value)
        return value

    @property
    def wraps(self) -> bool:
        return self.wrap in ("wrap", "wrap-reverse")


class FlexChild(BaseModel):
    """Flex-item sizing of a component inside a flex parent."""

    sizing_mode: SizingMode = SizingMode.FIXED
    flex_grow: float = 0
    flex_shrink: float = 1
    align_self: str = "auto"
    min_width: float | None = None
    max_width: float | None = None
    min_height: float | None = None
    max_height: float | None = None

    model_config = _MODEL_CONFIG


class Shadow(BaseModel):
    """One drop or inner shadow."""

    id: str | None = None
    enabled: bool = True
    type: ShadowType = ShadowType.DROP
    x: float = 0
    y: float = 4
    blur: float = 8
    spread: float = 0
    color: str = "rgba(0, 0, 0, 0.2)"

    model_config = _MODEL_CONFIG

    @property
    def inset(self) -> bool:
        return self.type == ShadowType.INNER


class GradientStop(BaseModel):
    position: float = Field(ge=0, le=100)
    color: str

    model_config = _MODEL_CONFIG


class Gradient(BaseModel):
    """Linear, radial or angular fill. ``conic`` is accepted for angular."""

    id: str | None = None
    enabled: bool = True
    type: GradientType = GradientType.LINEAR
    angle: float = 0
    stops: list[GradientStop] = Field(min_length=2)

    model_config = _MODEL_CONFIG

    @field_validator("type", mode="before")
    @classmethod
    def _conic_is_angular(cls, value: Any) -> Any:
        if value == "conic":
            return GradientType.ANGULAR
        return value


class Blur(BaseModel):
    enabled: bool = True
    amount: float = 0
    type: BlurType = BlurType.LAYER

    model_config = _MODEL_CONFIG


class Stroke(BaseModel):
    enabled: bool = True
    width: float = 1
    color: str = "#000000"
    position: StrokePosition = StrokePosition.CENTER
    style: StrokeStyle = StrokeStyle.SOLID

    model_config = _MODEL_CONFIG


class Effects(BaseModel):
    """Layer effects applied on top of the base style."""

    shadows: list[Shadow] = Field(default_factory=list)
    gradient: Gradient | None = None
    blur: Blur | None = None
    stroke: Stroke | None = None
    opacity: float = Field(default=100, ge=0, le=100)
    blend_mode: BlendMode = BlendMode.NORMAL

    model_config = _MODEL_CONFIG


class Component(BaseModel):
    """A single node of the editor's component tree.

    Example:
        >>> Component.model_validate(
        ...     {"id": "title", "type": "text", "content": {"text": "Hi"}}
        ... )
    """

    id: str
    kind: ComponentKind = Field(validation_alias=AliasChoices("kind", "type"))
    name: str | None = None
    style: dict[str, Any] = Field(default_factory=dict)
    content: dict[str, Any] = Field(default_factory=dict)
    geometry: Geometry = Field(
        default_factory=Geometry,
        validation_alias=AliasChoices("geometry", "position"),
    )
    effects: Effects | None = None
    flex_layout: FlexLayout | None = None
    flex_child: FlexChild | None = None
    visible: bool = True
    child_ids: list[str] = Field(default_factory=list)

    model_config = _MODEL_CONFIG

    @field_validator("style", "content", "child_ids", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "child_ids" else {}
        return value

    @property
    def meta(self) -> KindMeta:
        return KIND_REGISTRY[self.kind]

    @property
    def is_flex_container(self) -> bool:
        return self.flex_layout is not None and self.flex_layout.enabled


class ComponentTree(BaseModel):
    """Snapshot of the editor: components by id plus ordered root ids."""

    components: dict[str, Component] = Field(default_factory=dict)
    root_ids: list[str] = Field(default_factory=list)

    model_config = _MODEL_CONFIG

    def __contains__(self, component_id: object) -> bool:
        return component_id in self.components

    def __len__(self) -> int:
        return len(self.components)

    def get(self, component_id: str) -> Component | None:
        return self.components.get(component_id)

    def parents_of(self, component_id: str) -> list[str]:
        """Ids of every component that lists ``component_id`` as a child."""
        return [
            c.id for c in self.components.values() if component_id in c.child_ids
        ]

    @classmethod
    def from_components(
        cls,
        components: list[Component],
        root_ids: list[str] | None = None,
    ) -> "ComponentTree":
        """Build a tree from a flat list.

        Args:
            components: Components in editor order.
            root_ids: Explicit roots. When omitted, every component that no
                other component references as a child is a root, in list order.

        Returns:
            ComponentTree indexed by id.
        """
        by_id = {c.id: c for c in components}
        if root_ids is None:
            referenced = {cid for c in components for cid in c.child_ids}
            root_ids = [c.id for c in components if c.id not in referenced]
        return cls(components=by_id, root_ids=list(root_ids))


# === LOADING ===


def _parse_components(raw: Any) -> list[Component]:
    if isinstance(raw, dict):
        items = []
        for key, value in raw.items():
            if isinstance(value, dict) and "id" not in value:
                value = {**value, "id": key}
            items.append(value)
        raw = items
    if not isinstance(raw, list):
        raise InputError(
            f"components must be a list or an object, got {type(raw).__name__}"
        )
    return [
        c if isinstance(c, Component) else Component.model_validate(c) for c in raw
    ]


def load_tree(data: Any) -> ComponentTree:
    """Load a snapshot in any of the editor's layouts.

    Accepts a ComponentTree (returned unchanged), a flat list of components,
    ``{"components": [...], "rootIds": [...]}``, or
    ``{"components": {id: {...}}}``.

    Args:
        data: Parsed JSON snapshot.

    Returns:
        Validated ComponentTree.

    Raises:
        InputError: If the snapshot is malformed.
    """
    if isinstance(data, ComponentTree):
        return data

    try:
        if isinstance(data, list):
            return ComponentTree.from_components(_parse_components(data))

        if isinstance(data, dict) and "components" in data:
            root_ids = data.get("rootIds", data.get("root_ids"))
            if root_ids is not None and not isinstance(root_ids, list):
                raise InputError("rootIds must be a list of component ids")
            return ComponentTree.from_components(
                _parse_components(data["components"]), root_ids
            )
    except ValidationError as e:
        raise InputError(f"Malformed snapshot: {e}") from e

    raise InputError(
        "Snapshot must be a component list or an object with 'components'"
    )


__all__ = [
    # Enums
    "BlendMode",
    "BlurType",
    "ComponentCategory",
    "ComponentKind",
    "FlexDirection",
    "GradientType",
    "PositionMode",
    "ShadowType",
    "SizingMode",
    "StrokePosition",
    "StrokeStyle",
    # Metadata
    "KIND_REGISTRY",
    "KindMeta",
    "get_kind_meta",
    "get_kinds_by_category",
    # Models
    "Blur",
    "Component",
    "ComponentTree",
    "Effects",
    "FlexChild",
    "FlexLayout",
    "Geometry",
    "Gradient",
    "GradientStop",
    "Padding",
    "Shadow",
    "Stroke",
    # Loading
    "load_tree",
]
