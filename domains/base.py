"""
Domain Interface.

Domains emit observations and, when stepped with an action, transitions.
Learners only consume these types; they never reach into a domain.

Observation variants:
- Full(state, actions): fully observed, non-terminal
- Partial(state, actions): partially observed, non-terminal
- Terminal(state): episode has ended; never bootstrapped from
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Tuple


class EpisodeFinishedError(Exception):
    """Raised when a domain is stepped after reaching a terminal state.

    Callers must reset() the domain before starting a new episode.
    """
    pass


@dataclass(frozen=True)
class Observation:
    """Base observation carrying the raw state."""
    state: Any

    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True)
class Full(Observation):
    """Fully observed state with the actions available from it."""
    actions: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Partial(Observation):
    """Partially observed state with the actions available from it."""
    actions: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Terminal(Observation):

    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class Transition:
    """Result of stepping a domain with an action.

    Attributes:
        from_: Observation before the action
        action: Action taken
        reward: Scalar reward received
        to: Observation after the action
    """
    from_: Observation
    action: Any
    reward: float
    to: Observation

    def is_terminal(self) -> bool:
        return self.to.is_terminal()


class Domain(ABC):
    """Abstract base class for episodic domains."""

    @property
    @abstractmethod
    def n_actions(self) -> int:
        """Number of discrete actions accepted by step()."""
        pass

    @abstractmethod
    def emit(self) -> Observation:
        """Observation of the current state."""
        pass

    @abstractmethod
    def step(self, action: int) -> Transition:
        """Apply an action and return the resulting transition."""
        pass

    @abstractmethod
    def reward(self, from_: Observation, to: Observation) -> float:
        """Reward for moving between two observations."""
        pass

    @abstractmethod
    def reset(self) -> Observation:
        """Start a new episode and return its first observation."""
        pass

    def is_terminal(self) -> bool:
        return self.emit().is_terminal()
