import math

import pytest

from rrt_planning import create
from rrt_planning.algorithms.rrt_star import RRTStarPlanner, StepOutcome
from rrt_planning.core.exceptions import ConfigurationError
from rrt_planning.core.node import NodeRecord
from rrt_planning.core.path_tracker import TrackerState


@pytest.fixture
def straight_planner(fixed_sampler):
    return create((0.0, 0.0), (100.0, 0.0), 10.0, 10.0, 15.0,
                  sampler=fixed_sampler((100.0, 0.0)))


@pytest.mark.parametrize("field", ["step_size", "goal_threshold", "search_radius"])
@pytest.mark.parametrize("value", [0.0, -1.0, math.inf, math.nan, "abc"])
def test_invalid_parameters_raise_configuration_error(field, value):
    params = {"step_size": 10.0, "goal_threshold": 10.0, "search_radius": 15.0}
    params[field] = value
    with pytest.raises(ConfigurationError):
        create((0.0, 0.0), (1.0, 1.0), **params)


def test_start_goal_dimension_mismatch():
    with pytest.raises(ConfigurationError):
        create((0.0, 0.0), (1.0, 1.0, 1.0), 1.0, 1.0, 1.0)


def test_identical_create_calls_share_root():
    a = create((3.0, 4.0), (100.0, 0.0), 10.0, 10.0, 15.0)
    b = create((3.0, 4.0), (100.0, 0.0), 10.0, 10.0, 15.0)
    assert a.nodes() == b.nodes() == [NodeRecord((3.0, 4.0), None, 0.0)]


def test_fresh_planner_has_no_path(straight_planner):
    planner = straight_planner
    assert planner.best_path() == []
    assert planner.best_cost == math.inf
    assert planner.state is TrackerState.SEARCHING


def test_first_step_steers_from_root(straight_planner, bounds):
    planner = straight_planner
    outcome = planner.step(bounds)
    assert outcome == StepOutcome(node_added=True, path_improved=False)
    assert planner.nodes()[1] == NodeRecord((10.0, 0.0), 0, 10.0)


def test_straight_line_reaches_goal(straight_planner, bounds):
    planner = straight_planner
    outcomes = [planner.step(bounds) for _ in range(9)]
    # node 9 sits at (90, 0), exactly on the threshold, which is not inside it
    assert not any(o.path_improved for o in outcomes)
    assert planner.best_cost == math.inf

    outcome = planner.step(bounds)
    assert outcome.path_improved
    assert planner.best_cost == pytest.approx(100.0)
    path = planner.best_path()
    assert path[0] == (0.0, 0.0)
    assert path[-1] == pytest.approx((100.0, 0.0))
    assert len(path) == 11
    assert planner.state is TrackerState.PATH_FOUND


def test_steps_past_sample_use_zero_bearing(straight_planner, bounds):
    planner = straight_planner
    for _ in range(11):
        planner.step(bounds)
    # nearest node coincides with the sample, step continues along +x
    assert planner.nodes()[-1].point == pytest.approx((110.0, 0.0))


def test_best_path_is_idempotent(bounds):
    planner = create((0.0, 0.0), (60.0, 60.0), 5.0, 10.0, 12.0, seed=11)
    planner.run(bounds, 500)
    assert planner.best_path() == planner.best_path()
    assert planner.best_path() is not planner.best_path()


def test_best_cost_never_increases():
    planner = create((10.0, 10.0), (90.0, 90.0), 5.0, 8.0, 12.0, seed=5)
    bounds = [(0.0, 100.0), (0.0, 100.0)]
    costs = []
    for _ in range(1500):
        planner.step(bounds)
        costs.append(planner.best_cost)
    assert math.isfinite(costs[-1])
    assert all(later <= earlier for earlier, later in zip(costs, costs[1:]))


def test_improvements_match_cost_drops():
    planner = create((10.0, 10.0), (90.0, 90.0), 5.0, 8.0, 12.0, seed=5)
    bounds = [(0.0, 100.0), (0.0, 100.0)]
    previous = planner.best_cost
    for _ in range(1000):
        outcome = planner.step(bounds)
        assert outcome.path_improved == (planner.best_cost < previous)
        previous = planner.best_cost


def test_newest_and_rewired_nodes_have_exact_costs():
    planner = create((50.0, 50.0), (95.0, 95.0), 4.0, 5.0, 10.0, seed=3)
    bounds = [(0.0, 100.0), (0.0, 100.0)]
    rewired_total = 0
    for _ in range(400):
        parents = [record.parent for record in planner.nodes()]
        planner.step(bounds)
        rewired = [i for i, parent in enumerate(parents) if planner.tree[i].parent != parent]
        rewired_total += len(rewired)
        stale = planner.tree.stale_nodes()
        assert len(planner) - 1 not in stale
        assert not set(rewired) & set(stale)
        assert all(planner.tree[i].parent == len(planner) - 1 for i in rewired)
    assert rewired_total > 0
    planner.tree.check_invariants(allow_stale=True)


def test_cost_invariant_holds_everywhere_with_propagation():
    planner = create((50.0, 50.0), (95.0, 95.0), 4.0, 5.0, 10.0, seed=3, propagate_costs=True)
    bounds = [(0.0, 100.0), (0.0, 100.0)]
    for _ in range(400):
        planner.step(bounds)
    planner.tree.check_invariants()


def test_cached_path_is_a_snapshot(sequence_sampler):
    samples = [(0.0, 10.0), (10.0, 10.0), (1.0, 1.0)]
    planner = create((0.0, 0.0), (10.0, 10.0), 10.0, 1.0, 15.0,
                     sampler=sequence_sampler(samples))
    bounds = [(0.0, 20.0), (0.0, 20.0)]
    planner.step(bounds)
    assert planner.step(bounds).path_improved
    assert planner.best_cost == 20.0
    cached = planner.best_path()

    # node 3 lands on the diagonal and gives the goal node a shorter route
    outcome = planner.step(bounds)
    assert outcome == StepOutcome(node_added=True, path_improved=False)
    assert planner.tree[2].parent == 3
    assert planner.tree[2].cost < 20.0
    assert planner.best_cost == 20.0
    assert planner.best_path() == cached


def test_collision_predicate_gates_insertion(straight_planner, bounds):
    planner = straight_planner
    outcome = planner.step(bounds, is_free=lambda point: False)
    assert outcome == StepOutcome(node_added=False, path_improved=False)
    assert len(planner) == 1
    assert planner.get_metrics()['rejected_samples'] == 1


def test_collision_predicate_receives_steered_point(straight_planner, bounds):
    planner = straight_planner
    seen = []

    def is_free(point):
        seen.append(point)
        return point[0] < 25.0

    for _ in range(4):
        planner.step(bounds, is_free)
    assert seen[:3] == [(10.0, 0.0), (20.0, 0.0), (30.0, 0.0)]
    assert len(planner) == 3


def test_run_honours_stop_signal(bounds):
    planner = create((0.0, 0.0), (300.0, 300.0), 10.0, 10.0, 15.0, seed=0)
    checks = []

    def should_stop():
        checks.append(True)
        return len(checks) > 3

    summary = planner.run(bounds, 100, should_stop=should_stop)
    assert summary.iterations == 3
    assert summary.stopped
    assert planner.iterations == 3


def test_run_summary_counts(straight_planner, bounds):
    planner = straight_planner
    summary = planner.run(bounds, 12)
    assert summary.iterations == 12
    assert summary.nodes_added == 12
    assert summary.improvements == 1
    assert not summary.stopped


def test_seeded_planners_grow_identical_trees(bounds):
    a = create((200.0, 200.0), (20.0, 20.0), 10.0, 10.0, 15.0, seed=99)
    b = create((200.0, 200.0), (20.0, 20.0), 10.0, 10.0, 15.0, seed=99)
    a.run(bounds, 200)
    b.run(bounds, 200)
    assert a.nodes() == b.nodes()
    assert a.best_path() == b.best_path()


def test_three_dimensional_planning():
    planner = create((0.0, 0.0, 0.0), (9.0, 9.0, 9.0), 1.5, 2.0, 3.0, seed=2)
    planner.run([(0.0, 10.0)] * 3, 1500)
    assert all(len(record.point) == 3 for record in planner.nodes())
    assert planner.state is TrackerState.PATH_FOUND


def test_from_config_defaults_and_overrides():
    config = {
        'parameters': {'step_size': 5.0, 'random_seed': 4},
        'workspace': {'start': [1.0, 2.0], 'goal': [30.0, 40.0]},
    }
    planner = RRTStarPlanner.from_config(config)
    assert planner.step_size == 5.0
    assert planner.goal_threshold == 10.0
    assert planner.search_radius == 15.0
    assert planner.start == (1.0, 2.0)
    assert planner.goal == (30.0, 40.0)

    planner = RRTStarPlanner.from_config(config, start=(0.0, 0.0))
    assert planner.start == (0.0, 0.0)


def test_from_config_requires_start_and_goal():
    with pytest.raises(ConfigurationError):
        RRTStarPlanner.from_config({'parameters': {}})


def test_metrics_report_path(straight_planner, bounds):
    planner = straight_planner
    planner.run(bounds, 10)
    metrics = planner.get_metrics()
    assert metrics['algorithm'] == 'RRT*'
    assert metrics['state'] == 'path_found'
    assert metrics['tree_size'] == 11
    assert metrics['path_waypoints'] == 11
    assert metrics['path_length'] == pytest.approx(metrics['best_cost'])
