"""Snapshot validation utilities."""

from sheet_export.validation.lib import ValidationError, is_valid, validate_tree

__all__ = [
    "ValidationError",
    "validate_tree",
    "is_valid",
]
