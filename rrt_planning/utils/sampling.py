"""
Configuration-space samplers.

Randomness is injected as a ``numpy.random.Generator`` so that planners can
be seeded independently of each other and of any global random state.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

Bounds = Sequence[Tuple[float, float]]


def validate_bounds(bounds: Bounds) -> None:
    """
    Check that every axis of ``bounds`` is a non-empty interval.

    Raises:
        ValueError: If ``bounds`` is empty or any axis has ``high <= low``
    """
    if len(bounds) == 0:
        raise ValueError("Bounds must have at least one axis")
    for axis, (low, high) in enumerate(bounds):
        if not high > low:
            raise ValueError(f"Empty sampling interval on axis {axis}: [{low}, {high})")


class UniformSampler:
    """
    Draws points uniformly from an axis-aligned box.

    Attributes:
        rng (np.random.Generator): Source of randomness
    """

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    @classmethod
    def from_seed(cls, seed: Optional[int] = None) -> "UniformSampler":
        """
        Build a sampler over a fresh generator.

        Args:
            seed: Seed for ``numpy.random.default_rng`` (None for OS entropy)
        """
        return cls(np.random.default_rng(seed))

    def sample(self, bounds: Bounds) -> Tuple[float, ...]:
        """
        Sample one point from ``[low_0, high_0) x [low_1, high_1) x ...``.

        Args:
            bounds: One ``(low, high)`` pair per dimension

        Returns:
            Sampled point

        Example:
            >>> sampler = UniformSampler.from_seed(0)
            >>> x, y = sampler.sample([(0.0, 400.0), (0.0, 400.0)])
        """
        validate_bounds(bounds)
        low = np.array([b[0] for b in bounds], dtype=float)
        high = np.array([b[1] for b in bounds], dtype=float)
        values = self.rng.uniform(low, high)
        # uniform() may round up to high
        values = np.minimum(values, np.nextafter(high, low))
        return tuple(float(v) for v in values)
