"""Tree walker - pre-order traversal with resolved styles and geometry.

Example usage:
    >>> from sheet_export.walker import walk
    >>> result = walk("root", tree)
    >>> for node in result:
    ...     print("  " * node.depth + node.id)
"""

from sheet_export.core.errors import (
    ExportError,
    ExportWarning,
    InputError,
    StructuralError,
    WarningCategory,
)

from .lib import NodeGeometry, Walk, WalkNode, find_cycle, walk

__all__ = [
    # Traversal
    "NodeGeometry",
    "Walk",
    "WalkNode",
    "find_cycle",
    "walk",
    # Errors
    "ExportError",
    "ExportWarning",
    "InputError",
    "StructuralError",
    "WarningCategory",
]
