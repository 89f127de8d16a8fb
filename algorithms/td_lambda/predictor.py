"""
TD(lambda) Predictor.

Learns a linear state-value function online from observed transitions using
accumulating eligibility traces.

TD(lambda) update rule (backward view):
- delta = r + gamma * V(s') - V(s)      (non-terminal)
- delta = r - V(s)                      (terminal, no bootstrap)
- e <- lambda * gamma * e + phi(s)
- theta += alpha * delta * e

At the terminal transition the trace is reset and the alpha/gamma schedules
step exactly once, so annealing is per episode rather than per step.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from algorithms.shared.linear import LinearFunctionApproximator
from algorithms.shared.parameter import Parameter, as_parameter
from algorithms.td_lambda.eligibility_traces import Trace
from domains.base import Transition
from params.dense import DenseBuffer
from projectors.base import Dense, Projection


class UnrepresentableStateError(Exception):
    """Raised when an update needs the value of a state the projector rejects.

    Treating such a state as value 0 would silently corrupt the TD error.
    """
    pass


class Predictor(ABC):
    """State-value predictor interface."""

    @abstractmethod
    def predict_v(self, state: Any) -> Optional[float]:
        pass


class Algorithm(ABC):
    """Online learner fed one transition at a time."""

    @abstractmethod
    def handle_sample(self, t: Transition) -> None:
        pass

    @abstractmethod
    def handle_terminal(self, t: Transition) -> None:
        pass

    def handle(self, t: Transition) -> None:
        """Route a transition to the terminal or non-terminal update."""
        if t.to.is_terminal():
            self.handle_terminal(t)
        else:
            self.handle_sample(t)


class TDLambda(Predictor, Algorithm):
    """TD(lambda) with a linear function approximator.

    Each instance exclusively owns its trace and weights; run one instance
    per worker for concurrent rollouts. The projector may be shared.

    Args:
        trace: Eligibility trace, sized to the projector dimension
        fa_theta: Linear function approximator holding the weights
        alpha: Learning rate, a float or a scheduled Parameter
        gamma: Discount factor, a float or a scheduled Parameter
    """

    def __init__(
        self,
        trace: Trace,
        fa_theta: LinearFunctionApproximator,
        alpha: Union[Parameter, float],
        gamma: Union[Parameter, float],
    ):
        if trace.dim != fa_theta.dim:
            raise ValueError(
                f"Trace dimension {trace.dim} does not match weight dimension {fa_theta.dim}"
            )

        self.trace = trace
        self.fa_theta = fa_theta

        self.alpha = as_parameter(alpha)
        self.gamma = as_parameter(gamma)

        self.last_td_error: Optional[float] = None

    def _project(self, state: Any) -> Projection:
        phi = self.fa_theta.projector.project(state)
        if phi is None:
            raise UnrepresentableStateError(f"Projector cannot represent state {state!r}")
        return phi

    def _update_v(self, phi_s: Projection, td_error: float) -> None:
        decay_rate = self.trace.lambda_.value() * self.gamma.value()

        self.trace.decay(decay_rate)
        self.trace.update(phi_s.expanded(self.fa_theta.dim))

        self.fa_theta.update_phi(Dense(self.trace.get()), self.alpha * td_error)
        self.last_td_error = td_error

    def handle_sample(self, t: Transition) -> None:
        """Bootstrapped update for a non-terminal transition.

        A transition whose `to` observation is terminal is handed to
        handle_terminal() instead; its target is never bootstrapped.
        """
        if t.to.is_terminal():
            self.handle_terminal(t)
            return

        phi_s = self._project(t.from_.state)

        v = self.fa_theta.evaluate_phi(phi_s)
        nv = self.fa_theta.evaluate_phi(self._project(t.to.state))

        td_error = t.reward + self.gamma * nv - v

        self._update_v(phi_s, td_error)

    def handle_terminal(self, t: Transition) -> None:
        """Reward-only update, then reset the trace and step the schedules."""
        phi_s = self._project(t.from_.state)
        td_error = t.reward - self.fa_theta.evaluate_phi(phi_s)

        self._update_v(phi_s, td_error)

        self.trace.decay(0.0)

        self.alpha = self.alpha.step()
        self.gamma = self.gamma.step()

    def predict_v(self, state: Any) -> Optional[float]:
        """Value estimate, or None if the state cannot be represented."""
        return self.fa_theta.evaluate(state)

    def weights(self) -> DenseBuffer:
        return self.fa_theta.weights()
