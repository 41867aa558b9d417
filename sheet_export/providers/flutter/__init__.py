"""Flutter export backend."""

from .lib import (
    FlutterContext,
    FlutterProvider,
    flutter_color,
    font_weight,
    gradient_alignment,
)

__all__ = [
    "FlutterContext",
    "FlutterProvider",
    "flutter_color",
    "font_weight",
    "gradient_alignment",
]
