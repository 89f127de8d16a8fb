"""
Bounded Random Walk Domain.

The classic prediction benchmark: a chain of n non-terminal states with a
terminal state beyond each end. Episodes start in the centre. Stepping off
the right end yields reward 1, off the left end reward 0, every other step
reward 0. Under the uniform random policy the undiscounted value of state i
is (i + 1) / (n + 1).
"""

from typing import List, Optional

import torch

from domains.base import (
    Domain,
    EpisodeFinishedError,
    Full,
    Observation,
    Terminal,
    Transition,
)


class RandomWalk(Domain):
    """Random walk over n_states non-terminal states.

    States are integers 0..n_states-1. The terminal states are -1 (left)
    and n_states (right), which a tabular projector will not represent.

    Actions:
    - 0: left
    - 1: right

    Args:
        n_states: Number of non-terminal states (>= 1)
        seed: Optional seed for the action sampler used by sample_action()
    """

    LEFT = 0
    RIGHT = 1

    REWARD_STEP = 0.0
    REWARD_LEFT = 0.0
    REWARD_RIGHT = 1.0

    def __init__(self, n_states: int = 5, seed: Optional[int] = None):
        if n_states <= 0:
            raise ValueError("n_states must be positive")

        self.n_states = n_states
        self.generator = torch.Generator()
        if seed is not None:
            self.generator.manual_seed(seed)

        self._position = self.start_state

    @property
    def start_state(self) -> int:
        return self.n_states // 2

    @property
    def n_actions(self) -> int:
        return 2

    def _is_terminal_position(self, position: int) -> bool:
        return position < 0 or position >= self.n_states

    def emit(self) -> Observation:
        if self._is_terminal_position(self._position):
            return Terminal(self._position)
        return Full(self._position, (self.LEFT, self.RIGHT))

    def reset(self) -> Observation:
        self._position = self.start_state
        return self.emit()

    def step(self, action: int) -> Transition:
        """Move one state left or right.

        Raises:
            EpisodeFinishedError: If the walk has already terminated
            ValueError: If action is not LEFT or RIGHT
        """
        if self._is_terminal_position(self._position):
            raise EpisodeFinishedError("Cannot step a finished episode; call reset()")
        if action not in (self.LEFT, self.RIGHT):
            raise ValueError(f"Invalid action {action}; must be 0 (left) or 1 (right)")

        from_ = self.emit()
        self._position += 1 if action == self.RIGHT else -1
        to = self.emit()

        return Transition(from_=from_, action=action, reward=self.reward(from_, to), to=to)

    def reward(self, from_: Observation, to: Observation) -> float:
        if not to.is_terminal():
            return self.REWARD_STEP
        if to.state >= self.n_states:
            return self.REWARD_RIGHT
        return self.REWARD_LEFT

    def sample_action(self) -> int:
        """Uniformly random action drawn from this domain's generator."""
        return int(torch.randint(self.n_actions, (1,), generator=self.generator).item())

    def true_values(self) -> List[float]:
        """Undiscounted state values under the uniform random policy."""
        return [(i + 1) / (self.n_states + 1) for i in range(self.n_states)]
