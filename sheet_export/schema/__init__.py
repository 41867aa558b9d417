"""Schema module - authoritative data model for component tree snapshots.

This module provides:
- The closed ComponentKind set with per-kind metadata
- Pydantic models for components, geometry, flex layout and effects
- ComponentTree and snapshot loading

Example usage:
    >>> from sheet_export.schema import load_tree
    >>> tree = load_tree([{"id": "root", "type": "container"}])
    >>> tree.root_ids
    ['root']
"""

from .lib import (
    KIND_REGISTRY,
    BlendMode,
    Blur,
    BlurType,
    Component,
    ComponentCategory,
    ComponentKind,
    ComponentTree,
    Effects,
    FlexChild,
    FlexDirection,
    FlexLayout,
    Geometry,
    Gradient,
    GradientStop,
    GradientType,
    KindMeta,
    Padding,
    PositionMode,
    Shadow,
    ShadowType,
    SizingMode,
    Stroke,
    StrokePosition,
    StrokeStyle,
    get_kind_meta,
    get_kinds_by_category,
    load_tree,
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
