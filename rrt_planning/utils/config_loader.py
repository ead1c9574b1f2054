"""
YAML configuration file loader for the RRT* planner.

This module provides utilities to load YAML configuration files and to
extract validated workspace parameters from them.
"""

import yaml
from typing import Any, Dict, List, Tuple
from pathlib import Path

from ..core.exceptions import ConfigurationError

DEFAULT_BOUNDS = [[0.0, 400.0], [0.0, 400.0]]


def get_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """
    Return a mapping section of a config, treating an empty section as ``{}``.

    A key with no value (or with every entry commented out) loads as None.

    Raises:
        ConfigurationError: If the section is present but not a mapping

    Example:
        >>> get_section({'parameters': None}, 'parameters')
        {}
    """
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{name}' section must be a mapping, got {type(section).__name__}")
    return section


def load_yaml_config(filepath: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filepath: Path to YAML file

    Returns:
        Dictionary containing configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If file is not valid YAML

    Example:
        >>> config = load_yaml_config('configs/rrt_star.yaml')
        >>> print(config['algorithm']['parameters']['step_size'])
        10.0
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, 'r') as f:
        try:
            config = yaml.safe_load(f)
            return config if config is not None else {}
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML file {filepath}: {e}")


def load_algorithm_config(algorithm_name: str = 'rrt_star', config_dir: str = 'configs') -> Dict[str, Any]:
    """
    Load algorithm-specific configuration from YAML file.

    Args:
        algorithm_name: Name of the config file without extension (default: 'rrt_star')
        config_dir: Directory containing config files (default: 'configs')

    Returns:
        Dictionary with the ``algorithm`` section

    Raises:
        FileNotFoundError: If algorithm config file doesn't exist
        ConfigurationError: If the ``algorithm`` section or its ``parameters``/``workspace``
            sections are not mappings
    """
    config_path = Path(config_dir) / f'{algorithm_name}.yaml'
    config = load_yaml_config(str(config_path))
    section = get_section(config, 'algorithm')
    for name in ('parameters', 'workspace'):
        get_section(section, name)
    return section


def get_workspace_bounds(config: Dict[str, Any]) -> List[Tuple[float, float]]:
    """
    Extract the sampling bounds from an algorithm config.

    Args:
        config: Algorithm config dictionary

    Returns:
        One ``(low, high)`` pair per dimension

    Raises:
        ConfigurationError: If an axis is not a pair of numbers with low < high

    Example:
        >>> get_workspace_bounds({'workspace': {'bounds': [[0, 10], [0, 5]]}})
        [(0.0, 10.0), (0.0, 5.0)]
    """
    raw = get_section(config, 'workspace').get('bounds')
    if raw is None:
        raw = DEFAULT_BOUNDS
    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError(f"Workspace bounds must be a list of [low, high] pairs, got {raw!r}")
    bounds = []
    for axis in raw:
        try:
            low, high = (float(v) for v in axis)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid bounds axis {axis!r}, expected [low, high]") from None
        if not high > low:
            raise ConfigurationError(f"Invalid bounds axis {axis!r}, low must be below high")
        bounds.append((low, high))
    if not bounds:
        raise ConfigurationError("Workspace bounds must have at least one axis")
    return bounds


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge multiple configuration dictionaries.

    Later dictionaries override earlier ones for conflicting keys.
    Nested dictionaries are merged recursively.

    Example:
        >>> merge_configs({'parameters': {'a': 1, 'b': 2}}, {'parameters': {'b': 3}})
        {'parameters': {'a': 1, 'b': 3}}
    """
    merged: Dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = merge_configs(merged[key], value)
            else:
                merged[key] = value
    return merged
