"""Tree walker: flatten a component subtree into a pre-order sequence.

The walk resolves styles and geometry once so that every backend sees
the same structure. It never mutates the snapshot and never recurses, so
arbitrarily deep trees are safe.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from sheet_export.core import get_logger
from sheet_export.core.errors import (
    ExportWarning,
    InputError,
    StructuralError,
    WarningCategory,
)
from sheet_export.schema import (
    Component,
    ComponentKind,
    ComponentTree,
    PositionMode,
)
from sheet_export.style import CanonicalStyle, resolve, to_number

logger = get_logger("walker")


@dataclass(frozen=True)
class NodeGeometry:
    """Resolved placement of a node.

    Attributes:
        x: Offset from the parent origin.
        y: Offset from the parent origin.
        absolute_x: Offset from the export root.
        absolute_y: Offset from the export root.
        width: Declared width (number in pixels or CSS string).
        height: Declared height (number in pixels or CSS string).
        mode: Declared position mode.
        in_flow: True when laid out by a flex parent.
        rotation: Rotation in degrees.
    """

    x: float = 0
    y: float = 0
    absolute_x: float = 0
    absolute_y: float = 0
    width: float | str | None = None
    height: float | str | None = None
    mode: PositionMode = PositionMode.ABSOLUTE
    in_flow: bool = False
    rotation: float = 0

    @property
    def numeric_width(self) -> float | None:
        return to_number(self.width)

    @property
    def numeric_height(self) -> float | None:
        return to_number(self.height)


@dataclass(frozen=True)
class WalkNode:
    """One visited component with everything a backend needs.

    ``child_ids`` lists only the children that are emitted: missing,
    hidden and already-claimed ids are filtered out.
    """

    component: Component
    depth: int
    style: CanonicalStyle
    geometry: NodeGeometry
    parent_id: str | None = None
    child_ids: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.component.id

    @property
    def kind(self) -> ComponentKind:
        return self.component.kind

    @property
    def content(self) -> dict:
        return self.component.content

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass(frozen=True)
class Walk:
    """Immutable, re-iterable pre-order walk of one subtree."""

    nodes: tuple[WalkNode, ...]
    warnings: tuple[ExportWarning, ...] = ()
    _index: dict[str, WalkNode] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self._index.update((n.id, n) for n in self.nodes)

    def __iter__(self) -> Iterator[WalkNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> WalkNode:
        return self.nodes[index]

    @property
    def root(self) -> WalkNode:
        return self.nodes[0]

    def node(self, component_id: str) -> WalkNode:
        """Look up a visited node by id.

        Raises:
            KeyError: If the component was not part of the walk.
        """
        return self._index[component_id]

    def children(self, node: WalkNode) -> list[WalkNode]:
        """Emitted children of ``node`` in childIds order."""
        return [self._index[cid] for cid in node.child_ids]


def find_cycle(root_id: str, tree: ComponentTree) -> list[str] | None:
    """Find a cycle reachable from ``root_id``.

    Uses an iterative three-colour depth-first search. Missing child ids
    are ignored; they cannot close a cycle.

    Args:
        root_id: Component to start from.
        tree: Snapshot to search.

    Returns:
        The cycle as a list of ids with the first id repeated at the end,
        or None when the subtree is acyclic.
    """
    if root_id not in tree:
        return None

    on_path: set[str] = set()
    done: set[str] = set()
    path: list[str] = []
    # Each frame is (component id, iterator over its child ids)
    stack: list[tuple[str, Iterator[str]]] = []

    def _enter(component_id: str) -> None:
        on_path.add(component_id)
        path.append(component_id)
        stack.append((component_id, iter(tree.components[component_id].child_ids)))

    _enter(root_id)
    while stack:
        current, children = stack[-1]
        for child_id in children:
            if child_id not in tree:
                continue
            if child_id in on_path:
                start = path.index(child_id)
                return path[start:] + [child_id]
            if child_id not in done:
                _enter(child_id)
                break
        else:
            stack.pop()
            path.pop()
            on_path.discard(current)
            done.add(current)

    return None


def _root_geometry(component: Component) -> NodeGeometry:
    declared = component.geometry
    return NodeGeometry(
        width=declared.width,
        height=declared.height,
        mode=declared.mode,
        rotation=declared.rotation,
    )


def _child_geometries(
    parent: Component,
    parent_geometry: NodeGeometry,
    children: list[Component],
) -> list[NodeGeometry]:
    """Place each emitted child relative to its parent.

    In-flow children of a flex parent get an advisory offset that stacks
    them along the main axis after the padding, separated by the gap.
    """
    flex = parent.flex_layout if parent.is_flex_container else None
    flowing = [
        c
        for c in children
        if flex is not None
        and c.geometry.mode in (PositionMode.RELATIVE, PositionMode.STICKY)
    ]

    flow_offsets: dict[str, tuple[float, float]] = {}
    if flex is not None and flowing:
        is_row = flex.direction.is_row
        padding = flex.padding
        cursor = padding.left if is_row else padding.top
        cross = padding.top if is_row else padding.left
        ordered = reversed(flowing) if flex.direction.is_reversed else flowing
        for child in ordered:
            if is_row:
                flow_offsets[child.id] = (cursor, cross)
                extent = to_number(child.geometry.width)
            else:
                flow_offsets[child.id] = (cross, cursor)
                extent = to_number(child.geometry.height)
            cursor += (extent or 0) + flex.gap

    geometries = []
    for child in children:
        declared = child.geometry
        in_flow = child.id in flow_offsets
        if in_flow:
            x, y = flow_offsets[child.id]
        elif declared.mode == PositionMode.FIXED:
            x = declared.x - parent_geometry.absolute_x
            y = declared.y - parent_geometry.absolute_y
        else:
            x, y = declared.x, declared.y

        geometries.append(
            NodeGeometry(
                x=x,
                y=y,
                absolute_x=parent_geometry.absolute_x + x,
                absolute_y=parent_geometry.absolute_y + y,
                width=declared.width,
                height=declared.height,
                mode=declared.mode,
                in_flow=in_flow,
                rotation=declared.rotation,
            )
        )
    return geometries


def walk(root_id: str, tree: ComponentTree) -> Walk:
    """Walk the subtree under ``root_id`` in pre-order.

    Children are visited in childIds order. Missing and multiply-claimed
    children are skipped with a warning, hidden children are omitted.

    Args:
        root_id: Component to export.
        tree: Validated snapshot.

    Returns:
        Walk whose first node is the root.

    Raises:
        InputError: If ``root_id`` is not in the tree.
        StructuralError: If a cycle is reachable from the root.

    Example:
        >>> result = walk("root", tree)
        >>> [node.id for node in result]
        ['root', 'title', 'cta']
    """
    root = tree.get(root_id)
    if root is None:
        raise InputError(f"Unknown component id: {root_id!r}")

    cycle = find_cycle(root_id, tree)
    if cycle is not None:
        raise StructuralError(
            f"Cycle detected in component tree: {' -> '.join(cycle)}", path=cycle
        )

    nodes: list[WalkNode] = []
    warnings: list[ExportWarning] = []
    claimed: set[str] = {root_id}
    stack: list[tuple[str, int, str | None, NodeGeometry]] = [
        (root_id, 0, None, _root_geometry(root))
    ]

    while stack:
        component_id, depth, parent_id, geometry = stack.pop()
        component = tree.components[component_id]

        children: list[Component] = []
        for child_id in component.child_ids:
            child = tree.get(child_id)
            if child is None:
                warnings.append(
                    ExportWarning(
                        WarningCategory.MISSING_CHILD,
                        component_id,
                        f"Child '{child_id}' does not exist",
                        child_id,
                    )
                )
                continue
            if child_id in claimed:
                warnings.append(
                    ExportWarning(
                        WarningCategory.DUPLICATE_PARENT,
                        component_id,
                        f"Child '{child_id}' already belongs to another parent",
                        child_id,
                    )
                )
                continue
            claimed.add(child_id)
            if child.visible:
                children.append(child)

        nodes.append(
            WalkNode(
                component=component,
                depth=depth,
                style=resolve(component),
                geometry=geometry,
                parent_id=parent_id,
                child_ids=tuple(c.id for c in children),
            )
        )

        placed = _child_geometries(component, geometry, children)
        for child, child_geometry in reversed(list(zip(children, placed))):
            stack.append((child.id, depth + 1, component_id, child_geometry))

    for warning in warnings:
        logger.warning(str(warning))
    logger.debug(
        "Walked %d components under %r (max depth %d)",
        len(nodes),
        root_id,
        max(n.depth for n in nodes),
    )
    return Walk(nodes=tuple(nodes), warnings=tuple(warnings))


__all__ = [
    "NodeGeometry",
    "Walk",
    "WalkNode",
    "find_cycle",
    "walk",
]
