"""
Shared Utilities for RL Algorithms.

Contains common infrastructure used by multiple algorithms:
- Parameter: scalar hyperparameters with episodic decay schedules
- LinearFunctionApproximator: linear value function over projected features
"""

from algorithms.shared.parameter import (
    ExponentialDecay,
    LinearDecay,
    Parameter,
    PolynomialDecay,
    as_parameter,
    parameter_from_config,
)
from algorithms.shared.linear import LinearFunctionApproximator

__all__ = [
    'ExponentialDecay',
    'LinearDecay',
    'Parameter',
    'PolynomialDecay',
    'as_parameter',
    'parameter_from_config',
    'LinearFunctionApproximator',
]
