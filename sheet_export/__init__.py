"""sheet-export: SVG, React and Flutter export for bottom-sheet editors."""

from sheet_export.core import (
    ExportError,
    ExportWarning,
    InputError,
    StructuralError,
    WarningCategory,
)
from sheet_export.export import (
    ExportFormat,
    export_component,
    generate_flutter_code,
    generate_react_code,
    generate_svg,
)
from sheet_export.providers import ExportResult, get_provider, list_providers
from sheet_export.schema import Component, ComponentKind, ComponentTree, load_tree
from sheet_export.validation import ValidationError, is_valid, validate_tree

__all__ = [
    # Export
    "ExportFormat",
    "export_component",
    "generate_svg",
    "generate_react_code",
    "generate_flutter_code",
    # Schema
    "Component",
    "ComponentKind",
    "ComponentTree",
    "load_tree",
    # Providers
    "ExportResult",
    "get_provider",
    "list_providers",
    # Errors
    "ExportError",
    "ExportWarning",
    "InputError",
    "StructuralError",
    "WarningCategory",
    # Validation
    "ValidationError",
    "validate_tree",
    "is_valid",
]
