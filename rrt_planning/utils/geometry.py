"""
Geometric utility functions for the RRT* planner.

Points are plain tuples of floats of any fixed dimension. All operations
are exact floating-point arithmetic with no tolerance fudging.
"""

import math
from typing import Sequence, Tuple


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Euclidean distance between two points.

    Args:
        a: First point (x, y, ...)
        b: Second point, same dimension as ``a``

    Returns:
        Non-negative distance, zero iff the points are equal

    Raises:
        ValueError: If the points have different dimensions

    Example:
        >>> distance((0.0, 0.0), (3.0, 4.0))
        5.0
    """
    if len(a) != len(b):
        raise ValueError(f"Dimension mismatch: {len(a)} vs {len(b)}")
    return math.hypot(*(ai - bi for ai, bi in zip(a, b)))


def steer(from_point: Sequence[float],
          to_point: Sequence[float],
          step_size: float) -> Tuple[float, ...]:
    """
    Move exactly ``step_size`` from ``from_point`` toward ``to_point``.

    The step is taken even when the target is closer than ``step_size``,
    so every tree edge has the same length.

    Args:
        from_point: Starting point
        to_point: Point giving the direction of travel
        step_size: Length of the step

    Returns:
        New point at distance ``step_size`` from ``from_point``

    Note:
        When both points coincide the direction is undefined. The step is
        then taken along the first coordinate axis, which in the plane is
        a bearing of 0 radians.

    Example:
        >>> steer((0.0, 0.0), (100.0, 0.0), 10.0)
        (10.0, 0.0)
        >>> steer((5.0, 5.0), (5.0, 5.0), 1.0)
        (6.0, 5.0)
    """
    norm = distance(from_point, to_point)
    if norm == 0.0:
        direction = [0.0] * len(from_point)
        direction[0] = 1.0
    else:
        direction = [(t - f) / norm for f, t in zip(from_point, to_point)]
    return tuple(f + step_size * d for f, d in zip(from_point, direction))
