"""
Collision predicates.

The planner treats collision checking as an injected ``Point -> bool``
callable. Obstacle models live outside this package; this module only
provides the permissive predicate used for obstacle-free planning.
"""

from typing import Callable, Sequence

CollisionPredicate = Callable[[Sequence[float]], bool]


def always_free(point: Sequence[float]) -> bool:
    """Collision predicate that accepts every configuration."""
    return True
