"""Output generation for export review."""

from sheet_export.output.lib import (
    ExportOutput,
    OutputGenerator,
    format_component_tree,
)

__all__ = [
    "ExportOutput",
    "OutputGenerator",
    "format_component_tree",
]
