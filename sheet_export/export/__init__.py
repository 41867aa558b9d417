"""Export a component subtree as SVG, React or Flutter source.

Example usage:
    >>> from sheet_export.export import generate_react_code
    >>> code = generate_react_code("root", snapshot, dialect="css-modules")
"""

from .lib import (
    ExportFormat,
    export_component,
    generate_flutter_code,
    generate_react_code,
    generate_svg,
)

__all__ = [
    "ExportFormat",
    "export_component",
    "generate_flutter_code",
    "generate_react_code",
    "generate_svg",
]
