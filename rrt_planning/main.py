"""
Main entry point for the RRT* planner.

This CLI runs the planner for a fixed iteration budget using parameters
from a YAML configuration file and reports the best path found.
"""

import argparse
import logging
import sys

from .algorithms.rrt_star import RRTStarPlanner
from .core.exceptions import ConfigurationError
from .utils.config_loader import get_section, get_workspace_bounds, load_algorithm_config, merge_configs

logger = logging.getLogger(__name__)


def run_planner(config_dir: str = 'configs',
                iterations=None,
                seed=None,
                start=None,
                goal=None,
                propagate_costs: bool = False) -> RRTStarPlanner:
    """
    Run the RRT* planner with a configuration directory.

    Args:
        config_dir: Directory containing ``rrt_star.yaml``
        iterations: Overrides ``parameters.max_iterations``
        seed: Overrides ``parameters.random_seed``
        start: Overrides ``workspace.start``
        goal: Overrides ``workspace.goal``
        propagate_costs: Enable cascading cost updates

    Returns:
        The planner after the run
    """
    overrides = {'parameters': {}}
    if seed is not None:
        overrides['parameters']['random_seed'] = seed
    if propagate_costs:
        overrides['parameters']['propagate_costs'] = True
    if iterations is not None:
        overrides['parameters']['max_iterations'] = iterations

    config = merge_configs(load_algorithm_config('rrt_star', config_dir), overrides)
    bounds = get_workspace_bounds(config)
    max_iterations = int(get_section(config, 'parameters').get('max_iterations', 5000))

    planner = RRTStarPlanner.from_config(config, start=start, goal=goal)

    print(f"\n{'='*60}")
    print(f"Running {planner.name} Path Planning Algorithm")
    print(f"{'='*60}\n")
    print(f"Workspace bounds: {bounds}")
    print(f"Start: {planner.start}")
    print(f"Goal: {planner.goal}")
    print(f"Planner: {planner}")

    print("\nPlanning path...")
    summary = planner.run(bounds, max_iterations)
    logger.debug("Run summary: %s", summary)

    print("\n" + "="*60)
    print("Results:")
    print("="*60)
    for key, value in planner.get_metrics().items():
        print(f"  {key}: {value}")
    print("="*60 + "\n")

    path = planner.best_path()
    if not path:
        print("No path found!")
    else:
        print(f"Path found with {len(path)} waypoints:")
        for point in path:
            print("  " + ", ".join(f"{c:.2f}" for c in point))

    return planner


def main(argv=None) -> int:
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(
        description='RRT* Path Planner',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with the default configuration
  rrt-plan

  # Reproducible run with a custom budget
  rrt-plan --seed 7 --iterations 2000

  # Override start and goal
  rrt-plan --start 10 10 --goal 390 390 --propagate-costs
        """
    )

    parser.add_argument(
        '--config-dir', '-c',
        type=str,
        default='configs',
        help='Directory containing YAML configuration files (default: configs)'
    )

    parser.add_argument(
        '--iterations', '-n',
        type=int,
        default=None,
        help='Iteration budget (default: from config)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for reproducible runs'
    )

    parser.add_argument(
        '--start',
        type=float,
        nargs='+',
        default=None,
        help='Start configuration coordinates'
    )

    parser.add_argument(
        '--goal',
        type=float,
        nargs='+',
        default=None,
        help='Goal configuration coordinates'
    )

    parser.add_argument(
        '--propagate-costs',
        action='store_true',
        help='Cascade rewired costs to descendant nodes'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        run_planner(
            config_dir=args.config_dir,
            iterations=args.iterations,
            seed=args.seed,
            start=args.start,
            goal=args.goal,
            propagate_costs=args.propagate_costs
        )
    except (ConfigurationError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
