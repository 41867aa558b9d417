"""Style resolution shared by every export backend.

Example:
    >>> from sheet_export.style import resolve
    >>> resolve(component).css_declarations()
    [('background-color', '#112233'), ('border-radius', '12px')]
"""

from .color import RGBA, alpha_byte, parse_color, to_argb_hex, to_hex
from .lib import (
    UNITLESS,
    CanonicalStyle,
    flex_container_declarations,
    format_number,
    format_value,
    gradient_css,
    kebab_case,
    normalize_hex,
    px,
    resolve,
    resolve_flex_item,
    shadow_css,
    stroke_declarations,
    to_number,
)

__all__ = [
    # Resolution
    "CanonicalStyle",
    "resolve",
    "resolve_flex_item",
    "flex_container_declarations",
    # CSS helpers
    "UNITLESS",
    "format_number",
    "format_value",
    "gradient_css",
    "kebab_case",
    "px",
    "shadow_css",
    "stroke_declarations",
    "to_number",
    # Colors
    "RGBA",
    "alpha_byte",
    "normalize_hex",
    "parse_color",
    "to_argb_hex",
    "to_hex",
]
