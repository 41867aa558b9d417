"""React export backend (tailwind, styled-components, css-modules)."""

from .lib import (
    VOID_TAGS,
    ReactContext,
    ReactProvider,
    StyledDefinition,
    css_class,
    js_object,
)
from .tailwind import to_tailwind

__all__ = [
    "ReactContext",
    "ReactProvider",
    "StyledDefinition",
    "VOID_TAGS",
    "css_class",
    "js_object",
    "to_tailwind",
]
