"""
Linear Function Approximator.

Value estimate as the dot product of a (dense or sparse) projection with a
learned weight buffer theta. Theta is mutated in exactly one place,
update_phi(), so any TD error is always computed against a consistent
snapshot of the weights.
"""

from typing import Any, Optional

import torch

from params.buffer import check_shape
from params.dense import DenseBuffer
from projectors.base import Projection, Projector


class LinearFunctionApproximator:
    """Linear value function over a projector's feature space.

    Args:
        projector: Feature projector (may be shared between approximators)
        theta: Optional initial weights; zeros of size projector.dim otherwise
    """

    def __init__(self, projector: Projector, theta: Optional[DenseBuffer] = None):
        self.projector = projector

        if theta is None:
            theta = DenseBuffer.zeros(projector.dim)
        else:
            check_shape(torch.Size((projector.dim,)), theta.raw_dim())
            theta = theta.clone()
        self._theta = theta

    @property
    def dim(self) -> int:
        return self.projector.dim

    def evaluate(self, state: Any) -> Optional[float]:
        """Estimate the value of a raw state.

        Returns:
            The value estimate, or None if the projector cannot represent
            the state.
        """
        phi = self.projector.project(state)
        if phi is None:
            return None
        return self.evaluate_phi(phi)

    def evaluate_phi(self, phi: Projection) -> float:
        """Estimate the value of an already-projected state."""
        return phi.dot(self._theta.array)

    def update_phi(self, phi: Projection, delta: float) -> None:
        """theta += delta * phi."""
        phi.scaled_addto(delta, self._theta.array)

    def weights(self) -> DenseBuffer:
        """Copy of theta for inspection or serialization."""
        return self._theta.clone()
