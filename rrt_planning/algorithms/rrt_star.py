"""
RRT* (Rapidly-exploring Random Tree Star) algorithm implementation.

RRT* is a sampling-based path planning algorithm that builds a tree by
randomly sampling the space and rewires nearby nodes through each new
node whenever that shortens their path from the root.

Each call to ``step`` performs one iteration:
sample -> nearest -> steer -> collision check -> insert -> rewire -> path update.
"""

import logging
import math
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from ..core.exceptions import ConfigurationError
from ..core.node import NodeRecord, Point
from ..core.path_tracker import PathTracker, TrackerState
from ..core.tree import Tree
from ..utils.collision import CollisionPredicate, always_free
from ..utils.config_loader import get_section
from ..utils.geometry import distance, steer
from ..utils.sampling import Bounds, UniformSampler

logger = logging.getLogger(__name__)


class StepOutcome(NamedTuple):
    """Result of a single planning iteration."""

    node_added: bool
    path_improved: bool


class RunSummary(NamedTuple):
    """Result of a bounded planning run."""

    iterations: int
    nodes_added: int
    improvements: int
    stopped: bool


def _check_positive(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(value) or value <= 0.0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {value}")
    return value


class RRTStarPlanner:
    """
    Incremental RRT* planner.

    Owns the tree store and the best-path tracker. Sampling and collision
    checking are injected: the sampler at construction, the collision
    predicate per step.

    Attributes:
        tree (Tree): Tree of explored configurations rooted at the start
        tracker (PathTracker): Best path to the goal found so far
        step_size (float): Length of every new tree edge
        goal_threshold (float): Distance below which a node reaches the goal
        search_radius (float): Neighbourhood radius used for rewiring
        propagate_costs (bool): Push rewired cost changes to descendants
        sampler: Object with a ``sample(bounds)`` method
        iterations (int): Number of ``step`` calls so far
        rejected (int): Samples refused by the collision predicate
    """

    name = 'RRT*'

    def __init__(self,
                 start: Sequence[float],
                 goal: Sequence[float],
                 step_size: float,
                 goal_threshold: float,
                 search_radius: float,
                 sampler: Optional[Any] = None,
                 seed: Optional[int] = None,
                 propagate_costs: bool = False):
        """
        Initialize the planner with a tree holding only the start.

        Args:
            start: Start configuration (root of the tree)
            goal: Goal configuration
            step_size: Edge length used when steering, must be > 0
            goal_threshold: Goal arrival radius, must be > 0
            search_radius: Rewiring neighbourhood radius, must be > 0
            sampler: Object with ``sample(bounds)``; defaults to a
                ``UniformSampler`` seeded with ``seed``
            seed: Seed for the default sampler
            propagate_costs: Cascade cost updates to descendants on rewire

        Raises:
            ConfigurationError: If any size parameter is not strictly positive,
                or start and goal differ in dimension
        """
        self.step_size = _check_positive('step_size', step_size)
        self.goal_threshold = _check_positive('goal_threshold', goal_threshold)
        self.search_radius = _check_positive('search_radius', search_radius)
        if len(start) == 0 or len(start) != len(goal):
            raise ConfigurationError(
                f"start and goal must share a non-zero dimension, got {len(start)} and {len(goal)}")

        self.tree = Tree(start)
        self.tracker = PathTracker(goal, self.goal_threshold)
        self.sampler = sampler if sampler is not None else UniformSampler.from_seed(seed)
        self.propagate_costs = bool(propagate_costs)
        self.iterations = 0
        self.rejected = 0

    @classmethod
    def from_config(cls,
                    config: Dict[str, Any],
                    start: Optional[Sequence[float]] = None,
                    goal: Optional[Sequence[float]] = None,
                    **kwargs) -> "RRTStarPlanner":
        """
        Build a planner from the ``algorithm`` section of a YAML config.

        Args:
            config: Algorithm config with ``parameters`` and ``workspace`` sections
            start: Overrides ``workspace.start``
            goal: Overrides ``workspace.goal``
            **kwargs: Passed to the constructor (e.g. ``sampler``)

        Raises:
            ConfigurationError: If start or goal is missing, or a section is not a mapping
        """
        params = get_section(config, 'parameters')
        workspace = get_section(config, 'workspace')
        start = start if start is not None else workspace.get('start')
        goal = goal if goal is not None else workspace.get('goal')
        if start is None or goal is None:
            raise ConfigurationError("Both start and goal must be given in the workspace config or as arguments")

        kwargs.setdefault('seed', params.get('random_seed', None))
        kwargs.setdefault('propagate_costs', params.get('propagate_costs', False))
        return cls(
            start,
            goal,
            step_size=params.get('step_size', 10.0),
            goal_threshold=params.get('goal_threshold', 10.0),
            search_radius=params.get('search_radius', 15.0),
            **kwargs
        )

    @property
    def start(self) -> Point:
        return self.tree.root.point

    @property
    def goal(self) -> Point:
        return self.tracker.goal

    @property
    def best_cost(self) -> float:
        """Cost of the best path found, ``inf`` if none."""
        return self.tracker.best_cost

    @property
    def state(self) -> TrackerState:
        return self.tracker.state

    def best_path(self) -> List[Point]:
        """Best path from start to goal region, empty if none found yet."""
        return self.tracker.path

    def nodes(self) -> List[NodeRecord]:
        """Read-only snapshot of every tree node, for rendering or logging."""
        return self.tree.snapshot()

    def __len__(self) -> int:
        return len(self.tree)

    def step(self,
             bounds: Bounds,
             is_free: CollisionPredicate = always_free) -> StepOutcome:
        """
        Run one RRT* iteration.

        Args:
            bounds: Sampling region, one ``(low, high)`` pair per dimension
            is_free: Collision predicate for the steered point

        Returns:
            Whether a node was inserted and whether the best path improved
        """
        self.iterations += 1

        rand_point = self.sampler.sample(bounds)
        nearest_index = self.tree.nearest(rand_point)
        new_point = steer(self.tree[nearest_index].point, rand_point, self.step_size)

        if not is_free(new_point):
            self.rejected += 1
            return StepOutcome(node_added=False, path_improved=False)

        new_index = self.tree.add_node(new_point, nearest_index)
        self.tree.rewire(new_index, self.search_radius, propagate_costs=self.propagate_costs)
        improved = self.tracker.update(self.tree)
        return StepOutcome(node_added=True, path_improved=improved)

    def run(self,
            bounds: Bounds,
            max_iterations: int,
            is_free: CollisionPredicate = always_free,
            should_stop: Optional[Callable[[], bool]] = None) -> RunSummary:
        """
        Step the planner until the iteration budget is spent or a stop is requested.

        Args:
            bounds: Sampling region
            max_iterations: Maximum number of iterations for this run
            is_free: Collision predicate
            should_stop: Checked before every sample; returning True ends the run

        Returns:
            Summary of the run
        """
        iterations = nodes_added = improvements = 0
        stopped = False
        for _ in range(max_iterations):
            if should_stop is not None and should_stop():
                stopped = True
                break
            outcome = self.step(bounds, is_free)
            iterations += 1
            nodes_added += outcome.node_added
            improvements += outcome.path_improved

        if self.state is TrackerState.SEARCHING:
            logger.warning("No path to goal %s after %d iterations (%d nodes)",
                           self.goal, self.iterations, len(self.tree))
        return RunSummary(iterations, nodes_added, improvements, stopped)

    def get_path_length(self) -> float:
        """Euclidean length of the cached best path, 0.0 if none."""
        path = self.best_path()
        return sum(distance(a, b) for a, b in zip(path, path[1:]))

    def get_metrics(self) -> Dict[str, Any]:
        """Get RRT* performance metrics."""
        return {
            'algorithm': self.name,
            'state': self.state.value,
            'iterations': self.iterations,
            'tree_size': len(self.tree),
            'rejected_samples': self.rejected,
            'best_cost': self.best_cost,
            'path_waypoints': len(self.tracker.path),
            'path_length': self.get_path_length(),
        }

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(start={self.start}, goal={self.goal}, "
                f"step_size={self.step_size}, goal_threshold={self.goal_threshold}, "
                f"search_radius={self.search_radius})")


def create(start: Sequence[float],
           goal: Sequence[float],
           step_size: float,
           goal_threshold: float,
           search_radius: float,
           **kwargs) -> RRTStarPlanner:
    """
    Create an RRT* planner.

    Example:
        >>> planner = create((0.0, 0.0), (100.0, 0.0), 10.0, 10.0, 15.0, seed=1)
        >>> outcome = planner.step([(0.0, 400.0), (0.0, 400.0)])
        >>> outcome.node_added
        True
    """
    return RRTStarPlanner(start, goal, step_size, goal_threshold, search_radius, **kwargs)
