"""Core utilities shared across sheet-export modules."""

from .errors import (
    ExportError,
    ExportWarning,
    InputError,
    StructuralError,
    WarningCategory,
)
from .log import get_logger, setup_logging

__all__ = [
    "ExportError",
    "ExportWarning",
    "InputError",
    "StructuralError",
    "WarningCategory",
    "get_logger",
    "setup_logging",
]
