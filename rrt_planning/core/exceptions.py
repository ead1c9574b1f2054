"""
Exception types raised by the RRT* planning engine.
"""


class ConfigurationError(ValueError):
    """Raised when planner parameters are invalid (non-positive sizes, bad config sections)."""


class InvariantViolationError(RuntimeError):
    """Raised when the tree store is found in a state construction should make impossible."""
