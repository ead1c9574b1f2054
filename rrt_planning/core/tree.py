"""
Append-only tree store for RRT*.

The tree is an arena: nodes are appended to a list and addressed by their
index for the lifetime of the tree. Parent links are indices, so rewiring a
node is a field assignment and never restructures the list.
"""

import logging
from collections import deque
from typing import Dict, List, Optional, Sequence

from .exceptions import InvariantViolationError
from .node import Node, NodeRecord, Point
from ..utils.geometry import distance

logger = logging.getLogger(__name__)


class Tree:
    """
    Ordered collection of nodes with parent links and accumulated cost.

    The root (index 0) is created with the tree and is the only node
    without a parent. Nodes are never removed.

    Attributes:
        nodes (List[Node]): All nodes, indexed by insertion order
    """

    def __init__(self, root: Sequence[float]):
        """
        Initialize the tree with a single root node of cost 0.

        Args:
            root: Coordinates of the start configuration
        """
        self.nodes: List[Node] = [Node(root)]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    @property
    def root(self) -> Node:
        return self.nodes[0]

    @property
    def newest_index(self) -> int:
        return len(self.nodes) - 1

    def add_node(self, point: Sequence[float], parent_index: int) -> int:
        """
        Append a node connected to ``parent_index``.

        Args:
            point: Coordinates of the new node
            parent_index: Index of an existing node

        Returns:
            Index of the new node

        Raises:
            IndexError: If ``parent_index`` does not refer to a node
        """
        if not 0 <= parent_index < len(self.nodes):
            raise IndexError(f"Parent index {parent_index} out of range for tree of {len(self.nodes)} nodes")
        parent = self.nodes[parent_index]
        node = Node(point, parent_index)
        node.cost = parent.cost + distance(node.point, parent.point)
        self.nodes.append(node)
        logger.debug("Added node %d at %s (parent=%d, cost=%.3f)",
                     self.newest_index, node.point, parent_index, node.cost)
        return self.newest_index

    def nearest(self, point: Sequence[float]) -> int:
        """
        Find the node closest to ``point`` by linear scan.

        Ties go to the lowest index.

        Raises:
            InvariantViolationError: If the tree has no nodes
        """
        if not self.nodes:
            raise InvariantViolationError("Nearest-node query on an empty tree")
        distances = [distance(node.point, point) for node in self.nodes]
        return distances.index(min(distances))

    def near(self, node_index: int, search_radius: float) -> List[int]:
        """
        Indices of all other nodes strictly within ``search_radius`` of a node.

        Args:
            node_index: Node whose neighbourhood is queried (excluded from the result)
            search_radius: Open radius of the neighbourhood

        Returns:
            Neighbour indices in ascending order
        """
        center = self.nodes[node_index].point
        return [i for i, node in enumerate(self.nodes)
                if i != node_index and distance(node.point, center) < search_radius]

    def rewire(self, new_index: int, search_radius: float,
               propagate_costs: bool = False) -> List[int]:
        """
        Re-parent neighbours of ``new_index`` whose cost drops by going through it.

        Only strict improvements are applied. By default just the re-parented
        neighbour's cost is updated and its descendants keep their old cost;
        with ``propagate_costs`` the change is pushed down the whole subtree.

        Args:
            new_index: Index of the freshly inserted node
            search_radius: Neighbourhood radius
            propagate_costs: Update descendant costs of every rewired node

        Returns:
            Indices of the rewired neighbours
        """
        new_node = self.nodes[new_index]
        rewired = []
        for neighbor_index in self.near(new_index, search_radius):
            neighbor = self.nodes[neighbor_index]
            if neighbor.is_root:
                continue
            new_cost = new_node.cost + distance(new_node.point, neighbor.point)
            if new_cost < neighbor.cost:
                logger.debug("Rewired node %d: parent %d -> %d, cost %.3f -> %.3f",
                             neighbor_index, neighbor.parent, new_index, neighbor.cost, new_cost)
                neighbor.parent = new_index
                neighbor.cost = new_cost
                rewired.append(neighbor_index)

        if propagate_costs and rewired:
            self._propagate_costs(rewired)
        return rewired

    def children(self) -> Dict[int, List[int]]:
        """Map each node index to the indices of its direct children."""
        result: Dict[int, List[int]] = {i: [] for i in range(len(self.nodes))}
        for i, node in enumerate(self.nodes):
            if node.parent is not None:
                result[node.parent].append(i)
        return result

    def _propagate_costs(self, sources: List[int]) -> None:
        children = self.children()
        queue = deque(sources)
        while queue:
            index = queue.popleft()
            parent = self.nodes[index]
            for child_index in children[index]:
                child = self.nodes[child_index]
                child.cost = parent.cost + distance(child.point, parent.point)
                queue.append(child_index)

    def trace_path(self, index: Optional[int] = None) -> List[Point]:
        """
        Walk parent links from a node back to the root.

        Args:
            index: Node to trace from (default: newest node)

        Returns:
            Points ordered from the root to the node
        """
        if index is None:
            index = self.newest_index
        path = []
        current: Optional[int] = index
        while current is not None:
            node = self.nodes[current]
            path.append(node.point)
            current = node.parent
        return path[::-1]

    def snapshot(self) -> List[NodeRecord]:
        """Immutable copies of all nodes, in index order."""
        return [node.to_record() for node in self.nodes]

    def stale_nodes(self) -> List[int]:
        """
        Indices of non-root nodes whose cost disagrees with their parent chain.

        Exact comparison: costs are always computed with the same expression,
        so any difference means a rewire left the node behind.
        """
        stale = []
        for i, node in enumerate(self.nodes):
            if node.parent is None:
                continue
            parent = self.nodes[node.parent]
            if node.cost != parent.cost + distance(node.point, parent.point):
                stale.append(i)
        return stale

    def check_invariants(self, allow_stale: bool = False) -> None:
        """
        Verify the structural invariants of the tree.

        Checks that the root is the only parentless node, that every parent
        index refers to an existing node, that no node is its own ancestor,
        and (unless ``allow_stale``) that every cost equals its parent's cost
        plus the edge length.

        Raises:
            InvariantViolationError: On the first violation found
        """
        if not self.nodes:
            raise InvariantViolationError("Tree has no root")
        if self.root.parent is not None or self.root.cost != 0.0:
            raise InvariantViolationError(f"Malformed root: {self.root!r}")

        for i, node in enumerate(self.nodes[1:], start=1):
            if node.parent is None:
                raise InvariantViolationError(f"Node {i} has no parent but is not the root")
            if not 0 <= node.parent < len(self.nodes):
                raise InvariantViolationError(f"Node {i} has dangling parent {node.parent}")

        for i in range(len(self.nodes)):
            seen = set()
            current: Optional[int] = i
            while current is not None:
                if current in seen:
                    raise InvariantViolationError(f"Cycle through node {i}")
                seen.add(current)
                current = self.nodes[current].parent

        if not allow_stale:
            stale = self.stale_nodes()
            if stale:
                raise InvariantViolationError(f"Stale costs at nodes {stale}")

    def __repr__(self) -> str:
        return f"Tree(nodes={len(self.nodes)}, root={self.root.point})"
