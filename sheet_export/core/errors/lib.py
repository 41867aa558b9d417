"""Exception hierarchy and non-fatal warnings shared by every exporter."""

from dataclasses import dataclass
from enum import Enum


class ExportError(Exception):
    """Base class for fatal export failures."""


class InputError(ExportError):
    """Malformed snapshot, unknown target, or unknown dialect/theme."""


class StructuralError(ExportError):
    """The component tree is not a tree.

    Attributes:
        path: Component ids forming the cycle, first id repeated at the end.
    """

    def __init__(self, message: str, path: list[str] | None = None):
        super().__init__(message)
        self.path = list(path or [])


class WarningCategory(str, Enum):
    """Kinds of non-fatal issues collected while exporting."""

    UNSUPPORTED_KIND = "unsupported_kind"
    MISSING_CHILD = "missing_child"
    DUPLICATE_PARENT = "duplicate_parent"
    LOSSY_STYLE = "lossy_style"
    DROPPED_CHILDREN = "dropped_children"


@dataclass(frozen=True)
class ExportWarning:
    """Warning emitted when part of a component cannot be represented.

    Attributes:
        category: What went wrong.
        node_id: ID of the component where the issue occurred.
        message: Human-readable explanation.
        value: The offending value, if any.
    """

    category: WarningCategory
    node_id: str
    message: str
    value: str | None = None

    def __str__(self) -> str:
        return f"[{self.category.value}] {self.node_id}: {self.message}"
