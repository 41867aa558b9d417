"""Export entry points.

Each call loads the snapshot, walks the target's subtree and hands the walk
to one provider. Nothing is cached between calls, so the same input always
produces the same string.
"""

from enum import Enum
from typing import Any

from sheet_export.config import get_default_dialect, get_default_theme
from sheet_export.core import get_logger
from sheet_export.core.errors import InputError
from sheet_export.providers import ExportResult, get_provider
from sheet_export.schema import Component, ComponentTree, load_tree
from sheet_export.walker import walk

logger = get_logger("export")


class ExportFormat(str, Enum):
    """Output formats, one per provider."""

    SVG = "svg"
    REACT = "react"
    FLUTTER = "flutter"


def _resolve_target(
    target: str | Component, tree: Any
) -> tuple[str, ComponentTree]:
    """Normalize the export target and snapshot.

    A Component target replaces any component with the same id, so an
    editor can export its current copy without rebuilding the snapshot.
    """
    if tree is None:
        tree = ComponentTree()
    tree = load_tree(tree)

    if isinstance(target, Component):
        components = {**tree.components, target.id: target}
        return target.id, ComponentTree(components=components, root_ids=tree.root_ids)
    if isinstance(target, str):
        return target, tree
    raise InputError(
        f"Export target must be a component id or Component, "
        f"got {type(target).__name__}"
    )


def _default_option(export_format: ExportFormat) -> str | None:
    if export_format == ExportFormat.REACT:
        return get_default_dialect()
    if export_format == ExportFormat.FLUTTER:
        return get_default_theme()
    return None


def export_component(
    target: str | Component,
    tree: Any = None,
    format: ExportFormat | str = ExportFormat.SVG,
    option: str | None = None,
) -> ExportResult:
    """Export a component subtree.

    Args:
        target: Component id, or the Component itself.
        tree: ComponentTree or raw snapshot (list or ``{"components": ...}``).
        format: Output format.
        option: Dialect (react) or theme (flutter); from config when None.

    Returns:
        ExportResult with code and warnings.

    Raises:
        InputError: If the target, snapshot, format or option is invalid.
        StructuralError: If a cycle is reachable from the target.

    Example:
        >>> result = export_component("root", snapshot, "react", "tailwind")
        >>> print(result.code)
    """
    try:
        export_format = ExportFormat(format)
    except ValueError:
        available = ", ".join(f.value for f in ExportFormat)
        raise InputError(
            f"Unknown export format '{format}'. Available: {available}"
        ) from None

    root_id, component_tree = _resolve_target(target, tree)
    subtree = walk(root_id, component_tree)
    logger.debug(
        "Exporting '%s' as %s (%d components)",
        root_id,
        export_format.value,
        len(subtree),
    )

    provider = get_provider(export_format.value)
    return provider.export(subtree, option or _default_option(export_format))


def generate_svg(target: str | Component, tree: Any = None) -> str:
    """SVG document for a component subtree.

    Raises:
        InputError: If the target is unknown.
        StructuralError: If the subtree contains a cycle.
    """
    return export_component(target, tree, ExportFormat.SVG).code


def generate_react_code(
    target: str | Component, tree: Any = None, dialect: str | None = None
) -> str:
    """React component source in ``dialect`` (config default when None)."""
    return export_component(target, tree, ExportFormat.REACT, dialect).code


def generate_flutter_code(
    target: str | Component, tree: Any = None, theme: str | None = None
) -> str:
    """Flutter widget source in ``theme`` (config default when None)."""
    return export_component(target, tree, ExportFormat.FLUTTER, theme).code


__all__ = [
    "ExportFormat",
    "export_component",
    "generate_flutter_code",
    "generate_react_code",
    "generate_svg",
]
