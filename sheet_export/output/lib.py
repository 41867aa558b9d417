"""Output formatting for export review.

Generates human-readable text representations of walked component trees
for command-line feedback.
"""

from dataclasses import dataclass, field

from sheet_export.core.errors import ExportWarning
from sheet_export.export import ExportFormat, export_component
from sheet_export.schema import PositionMode, load_tree
from sheet_export.style import format_number
from sheet_export.walker import Walk, WalkNode, walk


@dataclass
class ExportOutput:
    """Complete output for user feedback.

    Attributes:
        text_tree: Human-readable tree representation.
        code: Generated source.
        root_id: Exported component id.
        provider: Export provider used.
        option: Dialect or theme used.
        warnings: Warnings collected while walking and emitting.
    """

    text_tree: str
    code: str
    root_id: str
    provider: str
    option: str = ""
    warnings: list[ExportWarning] = field(default_factory=list)


def format_component_tree(result: Walk) -> str:
    """Format a walk as a human-readable tree.

    Example output:
        welcome sheet [container, 375x600]
        ├── card [container, 335x200]
        │   ├── title [text, 300x28]
        │   └── body [text, 300x40]
        └── cta [button, 335x48]

    Args:
        result: Walk to format.

    Returns:
        Formatted tree string.
    """
    lines: list[str] = []
    _format_node(result, result.root, lines, "", is_last=True, is_root=True)
    return "\n".join(lines)


def _describe(node: WalkNode) -> str:
    component = node.component
    attrs = [node.kind.value]
    if component.is_flex_container:
        attrs.append(f"flex {component.flex_layout.direction.value}")
    if node.geometry.mode in (PositionMode.FIXED, PositionMode.STICKY):
        attrs.append(node.geometry.mode.value)

    width = node.geometry.numeric_width
    height = node.geometry.numeric_height
    if width is not None and height is not None:
        attrs.append(f"{format_number(width)}x{format_number(height)}")

    label = component.name or node.id
    return f"{label} [{', '.join(attrs)}]"


def _format_node(
    result: Walk,
    node: WalkNode,
    lines: list[str],
    prefix: str,
    is_last: bool,
    is_root: bool = False,
) -> None:
    """Recursively format a node and its children."""
    if is_root:
        connector = ""
        child_prefix = ""
    else:
        connector = "└── " if is_last else "├── "
        child_prefix = prefix + ("    " if is_last else "│   ")

    lines.append(f"{prefix}{connector}{_describe(node)}")

    children = result.children(node)
    for i, child in enumerate(children):
        _format_node(result, child, lines, child_prefix, i == len(children) - 1)


class OutputGenerator:
    """Generates complete output for user feedback.

    Produces both the text tree and the generated source for one target.
    """

    def __init__(self, default_format: ExportFormat | str = ExportFormat.SVG):
        """Initialize generator.

        Args:
            default_format: Format used when ``generate`` is given none.
        """
        self._default_format = ExportFormat(default_format)

    def generate(
        self,
        target: str,
        tree,
        format: ExportFormat | str | None = None,
        option: str | None = None,
    ) -> ExportOutput:
        """Generate output for one export target.

        Args:
            target: Component id.
            tree: ComponentTree or raw snapshot.
            format: Export format override.
            option: Dialect or theme override.

        Returns:
            ExportOutput with text tree and generated code.

        Raises:
            InputError: If the target or snapshot is invalid.
            StructuralError: If the subtree contains a cycle.
        """
        export_format = format or self._default_format
        component_tree = load_tree(tree)
        result = export_component(target, component_tree, export_format, option)

        return ExportOutput(
            text_tree=format_component_tree(walk(target, component_tree)),
            code=result.code,
            root_id=target,
            provider=result.provider,
            option=result.option,
            warnings=result.warnings,
        )


__all__ = [
    "ExportOutput",
    "OutputGenerator",
    "format_component_tree",
]
