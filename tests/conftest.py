import pytest

from rrt_planning.core.tree import Tree


class FixedSampler:
    """Sampler that always returns the same point."""

    def __init__(self, point):
        self.point = tuple(point)
        self.calls = 0

    def sample(self, bounds):
        self.calls += 1
        return self.point


class SequenceSampler:
    """Sampler that replays a fixed list of points."""

    def __init__(self, points):
        self.points = list(points)

    def sample(self, bounds):
        return self.points.pop(0)


@pytest.fixture
def fixed_sampler():
    return FixedSampler


@pytest.fixture
def sequence_sampler():
    return SequenceSampler


@pytest.fixture
def bounds():
    return [(0.0, 400.0), (0.0, 400.0)]


@pytest.fixture
def stale_tree():
    """
    Tree where inserting node 4 rewires node 2 but not its child 3.

        0 (0,0) -> 1 (0,10) -> 2 (10,10) -> 3 (10,20)
        0 (0,0) -> 4 (10,3)
    """
    tree = Tree((0.0, 0.0))
    tree.add_node((0.0, 10.0), 0)
    tree.add_node((10.0, 10.0), 1)
    tree.add_node((10.0, 20.0), 2)
    tree.add_node((10.0, 3.0), 0)
    return tree
