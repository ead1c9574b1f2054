"""
RRT Planning - incremental RRT* motion planner

Grows a tree of sampled configurations from a start point and keeps
refining the cheapest path to a goal region as the tree grows.

Modules:
    core.tree: Append-only tree store, nearest/near queries, rewiring
    core.path_tracker: Goal detection and best-path cache
    algorithms.rrt_star: Planner facade (create, step, run)
    utils.geometry: Distance metric and steering
    utils.sampling: Uniform sampler with injected randomness
    utils.config_loader: YAML configuration management
"""

from .algorithms.rrt_star import RRTStarPlanner, RunSummary, StepOutcome, create
from .core.exceptions import ConfigurationError, InvariantViolationError
from .core.node import Node, NodeRecord
from .core.path_tracker import PathTracker, TrackerState
from .core.tree import Tree
from .utils.collision import always_free
from .utils.geometry import distance, steer
from .utils.sampling import UniformSampler

__version__ = "1.0.0"

__all__ = [
    'RRTStarPlanner', 'RunSummary', 'StepOutcome', 'create',
    'ConfigurationError', 'InvariantViolationError',
    'Node', 'NodeRecord', 'PathTracker', 'TrackerState', 'Tree',
    'always_free', 'distance', 'steer', 'UniformSampler',
]
