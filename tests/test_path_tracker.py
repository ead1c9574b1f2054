import math

from rrt_planning.core.path_tracker import PathTracker, TrackerState
from rrt_planning.core.tree import Tree


def test_starts_searching_with_infinite_cost():
    tracker = PathTracker((100.0, 0.0), 10.0)
    assert tracker.state is TrackerState.SEARCHING
    assert tracker.best_cost == math.inf
    assert tracker.path == []


def test_threshold_is_strict():
    tree = Tree((0.0, 0.0))
    tree.add_node((90.0, 0.0), 0)
    tracker = PathTracker((100.0, 0.0), 10.0)
    assert tracker.update(tree) is False
    assert tracker.state is TrackerState.SEARCHING


def test_records_path_on_arrival_and_only_replaces_on_improvement():
    tree = Tree((0.0, 0.0))
    tracker = PathTracker((20.0, 0.0), 5.0)

    a = tree.add_node((10.0, 0.0), 0)
    tree.add_node((19.0, 5.0), a)
    assert tracker.update(tree) is False

    tree.add_node((20.0, 1.0), a)
    assert tracker.update(tree) is True
    assert tracker.state is TrackerState.PATH_FOUND
    assert tracker.path == [(0.0, 0.0), (10.0, 0.0), (20.0, 1.0)]
    first_cost = tracker.best_cost

    # more expensive arrival is ignored
    detour = tree.add_node((0.0, 10.0), 0)
    tree.add_node((18.0, 2.0), tree.add_node((10.0, 10.0), detour))
    assert tracker.update(tree) is False
    assert tracker.best_cost == first_cost

    tree.add_node((19.0, 0.0), a)
    assert tracker.update(tree) is True
    assert tracker.best_cost == 19.0
    assert tracker.path[-1] == (19.0, 0.0)


def test_only_newest_node_is_inspected():
    tree = Tree((0.0, 0.0))
    tracker = PathTracker((5.0, 0.0), 2.0)
    tree.add_node((5.0, 0.0), 0)
    tree.add_node((-10.0, 0.0), 0)
    assert tracker.update(tree) is False
    assert tracker.state is TrackerState.SEARCHING
