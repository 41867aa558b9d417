"""Export provider abstraction and registry."""

from sheet_export.providers.lib import (
    ExportProvider,
    ExportResult,
    RenderContext,
    Renderer,
    class_name,
    get_provider,
    list_providers,
    register_provider,
    safe_id,
)

__all__ = [
    "ExportProvider",
    "ExportResult",
    "RenderContext",
    "Renderer",
    "class_name",
    "get_provider",
    "list_providers",
    "register_provider",
    "safe_id",
]
