"""
Eligibility Traces for TD(lambda).

An eligibility trace is a decaying dense memory of recently active features.
The TD error at each step is propagated back to those features in proportion
to their trace.

Per-step protocol (backward view), always in this order:
1. decay(lambda * gamma)
2. update(expanded projection of the current state)
3. get() for the weight update

The trace is reset to zero with decay(0.0) when an episode terminates.
"""

from typing import Union

import torch
from torch import Tensor

from algorithms.shared.parameter import Parameter, as_parameter
from params.dense import DenseBuffer


class Trace:
    """Accumulating eligibility trace over a fixed-size feature space.

    The dimension is fixed at construction; updates with a differently
    shaped buffer raise BufferShapeError.

    Attributes:
        lambda_: Trace decay parameter (0 = TD(0), 1 = Monte Carlo)
        dim: Feature dimension
    """

    def __init__(self, lambda_: Union[Parameter, float], dim: int):
        """Initialize a zero trace.

        Args:
            lambda_: Trace decay parameter, a float or a Parameter
            dim: Feature dimension, must equal the weight dimension
        """
        if dim <= 0:
            raise ValueError("dim must be positive")

        self.lambda_ = as_parameter(lambda_)
        self.dim = dim
        self._values = torch.zeros(dim, dtype=torch.float64)

    def decay(self, rate: float) -> None:
        """Multiply the whole trace by rate in [0, 1]."""
        rate = float(rate)
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"Trace decay rate must be in [0, 1], got {rate}")
        self._values.mul_(rate)

    def update(self, expanded: DenseBuffer) -> None:
        """Add an expanded projection onto the (already decayed) trace."""
        expanded.addto(self._values)

    def get(self) -> Tensor:
        """Copy of the current trace content."""
        return self._values.clone()

    def reset(self) -> None:
        """Reset all traces to zero (called at episode end)."""
        self.decay(0.0)

    def norm(self) -> float:
        return float(self._values.norm())
