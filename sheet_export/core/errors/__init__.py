"""Export errors and warnings."""

from .lib import (
    ExportError,
    ExportWarning,
    InputError,
    StructuralError,
    WarningCategory,
)

__all__ = [
    "ExportError",
    "ExportWarning",
    "InputError",
    "StructuralError",
    "WarningCategory",
]
