"""Snapshot validation and static analysis.

This module checks a whole ComponentTree for structural issues before
export. Unlike the walker, which stops at the first cycle it meets, it
reports every problem it finds and never raises.
"""

from dataclasses import dataclass

from sheet_export.schema import ComponentTree
from sheet_export.walker import find_cycle


@dataclass
class ValidationError:
    """Represents a validation error in a component tree.

    Attributes:
        node_id: ID of the component with the error.
        message: Human-readable error description.
        error_type: Category of the error (missing_child, cycle,
            multiple_parents, unknown_root, id_mismatch).
    """

    node_id: str
    message: str
    error_type: str


def validate_tree(tree: ComponentTree) -> list[ValidationError]:
    """Validate a ComponentTree for structural issues.

    Performs the following checks:
        - Every key matches its component's id
        - Every root id exists
        - Every child id exists
        - No component is claimed by more than one parent
        - No cycles (each distinct cycle is reported once)

    Args:
        tree: The snapshot to validate.

    Returns:
        list[ValidationError]: List of validation errors (empty if valid).

    Example:
        >>> errors = validate_tree(load_tree(snapshot))
        >>> for e in errors:
        ...     print(f"{e.node_id}: {e.message}")
    """
    errors: list[ValidationError] = []

    for key, component in tree.components.items():
        if key != component.id:
            errors.append(
                ValidationError(
                    node_id=key,
                    message=f"Key '{key}' holds component '{component.id}'",
                    error_type="id_mismatch",
                )
            )

    for root_id in tree.root_ids:
        if root_id not in tree:
            errors.append(
                ValidationError(
                    node_id=root_id,
                    message=f"Root '{root_id}' does not exist",
                    error_type="unknown_root",
                )
            )

    errors.extend(_check_children(tree))
    errors.extend(_detect_cycles(tree))
    return errors


def is_valid(tree: ComponentTree) -> bool:
    """Check if a component tree is valid.

    Convenience function that returns True if no validation errors exist.

    Example:
        >>> if is_valid(tree):
        ...     code = generate_svg(tree.root_ids[0], tree)
    """
    return not validate_tree(tree)


def _check_children(tree: ComponentTree) -> list[ValidationError]:
    """Report missing children and children with several parents."""
    errors: list[ValidationError] = []
    parents: dict[str, list[str]] = {}

    for key, component in tree.components.items():
        for child_id in component.child_ids:
            if child_id not in tree:
                errors.append(
                    ValidationError(
                        node_id=key,
                        message=f"Child '{child_id}' does not exist",
                        error_type="missing_child",
                    )
                )
                continue
            claimed_by = parents.setdefault(child_id, [])
            if key not in claimed_by:
                claimed_by.append(key)

    for child_id, claimed_by in parents.items():
        if len(claimed_by) > 1:
            errors.append(
                ValidationError(
                    node_id=child_id,
                    message=(
                        f"Component '{child_id}' has multiple parents: "
                        f"{', '.join(claimed_by)}"
                    ),
                    error_type="multiple_parents",
                )
            )
    return errors


def _detect_cycles(tree: ComponentTree) -> list[ValidationError]:
    """Detect cycles anywhere in the snapshot, not only under the roots."""
    errors: list[ValidationError] = []
    seen: set[frozenset[str]] = set()

    for component_id in tree.components:
        cycle = find_cycle(component_id, tree)
        if cycle is None:
            continue
        members = frozenset(cycle)
        if members in seen:
            continue
        seen.add(members)
        errors.append(
            ValidationError(
                node_id=cycle[0],
                message=f"Cycle detected: {' -> '.join(cycle)}",
                error_type="cycle",
            )
        )
    return errors


__all__ = [
    "ValidationError",
    "is_valid",
    "validate_tree",
]
