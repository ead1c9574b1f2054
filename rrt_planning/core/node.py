"""
Node types for the RRT* tree store.

Nodes live in an append-only arena and refer to their parent by index,
so rewiring only ever touches the ``parent`` and ``cost`` fields.
"""

from typing import NamedTuple, Optional, Tuple

Point = Tuple[float, ...]


class NodeRecord(NamedTuple):
    """Read-only copy of a node, handed out for rendering or logging."""

    point: Point
    parent: Optional[int]
    cost: float


class Node:
    """
    Represents a node in the search tree.

    Attributes:
        point (Point): Configuration-space coordinates
        parent (Optional[int]): Index of the parent node (None for root)
        cost (float): Accumulated path length from the root
    """

    __slots__ = ('point', 'parent', 'cost')

    def __init__(self, point: Point, parent: Optional[int] = None, cost: float = 0.0):
        """
        Initialize a node.

        Args:
            point: Coordinates of the node
            parent: Index of the parent node in the tree, None for the root
            cost: Cost from root to this node
        """
        self.point = tuple(float(c) for c in point)
        self.parent = parent
        self.cost = cost

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def to_record(self) -> NodeRecord:
        return NodeRecord(self.point, self.parent, self.cost)

    def __repr__(self) -> str:
        """String representation of the node."""
        coords = ', '.join(f"{c:.2f}" for c in self.point)
        return f"Node(({coords}), parent={self.parent}, cost={self.cost:.2f})"
