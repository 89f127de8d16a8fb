"""
Tabular Projector.

Maps an integer state to a single active cell, i.e. the one-hot encoding of
the state index expressed as a sparse projection. Linear TD(lambda) over this
projector reduces to classic tabular TD(lambda).
"""

from typing import Any, Dict, Optional

import torch

from projectors.base import Projector, Sparse


class TabularProjector(Projector):
    """One active feature per discrete state.

    Input: integer state in [0, n_states), or a 0-d / single-element tensor
    Output: Sparse projection of dimension n_states with one active index

    States outside the range (including terminal sentinels) are not
    representable and yield None.
    """

    def __init__(self, n_states: int, config: Optional[Dict[str, Any]] = None):
        """Initialize tabular projector.

        Args:
            n_states: Number of discrete states
            config: Optional configuration (not used, kept for interface compliance)
        """
        super().__init__(config)
        if n_states <= 0:
            raise ValueError("n_states must be positive")
        self.n_states = n_states

    @property
    def dim(self) -> int:
        return self.n_states

    def project(self, state: Any) -> Optional[Sparse]:
        if isinstance(state, torch.Tensor):
            if state.numel() != 1:
                return None
            state = state.item()

        if isinstance(state, bool) or not isinstance(state, int):
            return None
        if not 0 <= state < self.n_states:
            return None

        return Sparse(self.n_states, [state])
