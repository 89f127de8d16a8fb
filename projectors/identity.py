"""
Identity Projector (Pass-Through).

Uses a state that is already a feature vector as its own dense projection.
Useful when the domain emits engineered features directly.
"""

from typing import Any, Dict, Optional

import torch

from projectors.base import Dense, Projector


class IdentityProjector(Projector):
    """Pass-through projector for 1-D real-valued states.

    Input: sequence or tensor of length dim
    Output: Dense projection, converted to float64

    No learnable parameters. Any state whose flattened size differs from
    dim, or which contains non-finite values, is not representable.
    """

    def __init__(self, dim: int, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        if dim <= 0:
            raise ValueError("dim must be positive")
        self._dim = dim

    @property
    def dim(self) -> int:
        return self._dim

    def project(self, state: Any) -> Optional[Dense]:
        try:
            values = torch.as_tensor(state, dtype=torch.float64).reshape(-1)
        except (TypeError, ValueError, RuntimeError):
            return None

        if values.shape[0] != self._dim or not torch.isfinite(values).all():
            return None

        return Dense(values)
