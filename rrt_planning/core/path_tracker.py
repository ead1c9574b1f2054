"""
Best-path tracking for RRT*.

The tracker watches the newest node of the tree only. A path is recorded
when that node lies strictly within the goal threshold and is strictly
cheaper than the best path seen so far.
"""

import logging
import math
from enum import Enum
from typing import List, Sequence, Tuple

from .node import Point
from .tree import Tree
from ..utils.geometry import distance

logger = logging.getLogger(__name__)


class TrackerState(Enum):
    SEARCHING = "searching"
    PATH_FOUND = "path_found"


class PathTracker:
    """
    Detects goal arrival and caches the best known path.

    The cached path is a snapshot taken when it was found. Later rewiring
    may lower the true cost of its nodes; ``best_cost`` is not corrected
    until another qualifying node is inserted.

    Attributes:
        goal (Point): Goal configuration
        goal_threshold (float): Open radius around the goal that counts as arrival
        best_cost (float): Cost of the cached path, ``inf`` while searching
        state (TrackerState): SEARCHING until the first qualifying node, then PATH_FOUND
    """

    def __init__(self, goal: Sequence[float], goal_threshold: float):
        self.goal: Point = tuple(float(c) for c in goal)
        self.goal_threshold = goal_threshold
        self.best_cost = math.inf
        self.state = TrackerState.SEARCHING
        self._path: Tuple[Point, ...] = ()

    @property
    def path(self) -> List[Point]:
        return list(self._path)

    def update(self, tree: Tree) -> bool:
        """
        Check the newest node of ``tree`` against the goal.

        Args:
            tree: Tree whose last inserted node is inspected

        Returns:
            True if the cached path was replaced by a cheaper one
        """
        index = tree.newest_index
        node = tree[index]
        if distance(node.point, self.goal) < self.goal_threshold and node.cost < self.best_cost:
            self.best_cost = node.cost
            self._path = tuple(tree.trace_path(index))
            self.state = TrackerState.PATH_FOUND
            logger.info("New best path with cost: %.3f (%d waypoints)", self.best_cost, len(self._path))
            return True
        return False

    def __repr__(self) -> str:
        return f"PathTracker(state={self.state.value}, best_cost={self.best_cost:.3f})"
