"""SVG export backend."""

from .lib import SvgContext, SvgProvider, def_id, gradient_vector

__all__ = ["SvgContext", "SvgProvider", "def_id", "gradient_vector"]
