"""
Scheduled Parameters.

A Parameter is a scalar hyperparameter (learning rate, discount factor,
trace decay) with an optional decay schedule and a step counter. It is an
immutable value object: step() returns the next Parameter, so every learner
keeps its own independent schedule.

Schedules are closed-form in the step count:
- ExponentialDecay: initial * rate^n, floored
- PolynomialDecay: initial / (n + 1)^exponent, floored
- LinearDecay: linear interpolation from initial to end over a number of steps
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class ExponentialDecay:
    """value(n) = max(floor, initial * rate^n)."""
    rate: float
    floor: float = 0.0

    def __post_init__(self):
        if not 0.0 < self.rate <= 1.0:
            raise ValueError("rate must be in (0, 1]")

    def value(self, initial: float, count: int) -> float:
        return max(self.floor, initial * self.rate ** count)


@dataclass(frozen=True)
class PolynomialDecay:
    """value(n) = max(floor, initial / (n + 1)^exponent)."""
    exponent: float
    floor: float = 0.0

    def __post_init__(self):
        if self.exponent < 0.0:
            raise ValueError("exponent must be non-negative")

    def value(self, initial: float, count: int) -> float:
        return max(self.floor, initial / (count + 1) ** self.exponent)


@dataclass(frozen=True)
class LinearDecay:
    """Linear interpolation from initial to end, held at end afterwards."""
    end: float
    steps: int

    def __post_init__(self):
        if self.steps <= 0:
            raise ValueError("steps must be positive")

    def value(self, initial: float, count: int) -> float:
        if count >= self.steps:
            return self.end
        fraction = count / self.steps
        return initial + fraction * (self.end - initial)


Schedule = Union[ExponentialDecay, PolynomialDecay, LinearDecay]

SCHEDULES = {
    "exponential": ExponentialDecay,
    "polynomial": PolynomialDecay,
    "linear": LinearDecay,
}


@dataclass(frozen=True)
class Parameter:
    """Scalar hyperparameter with an optional decay schedule.

    Attributes:
        initial: Value at step 0
        schedule: Decay schedule, or None for a fixed value
        count: Number of times the parameter has been stepped
    """
    initial: float
    schedule: Optional[Schedule] = None
    count: int = 0

    def value(self) -> float:
        if self.schedule is None:
            return self.initial
        return self.schedule.value(self.initial, self.count)

    def step(self) -> "Parameter":
        """Return the parameter advanced by one schedule step."""
        return replace(self, count=self.count + 1)

    def __float__(self) -> float:
        return self.value()

    def __mul__(self, other: Union["Parameter", float]) -> float:
        return self.value() * float(other)

    __rmul__ = __mul__


def as_parameter(value: Union[Parameter, float, int]) -> Parameter:
    """Wrap a plain number into a fixed Parameter; pass Parameters through."""
    if isinstance(value, Parameter):
        return value
    return Parameter(float(value))


def parameter_from_config(raw: Union[float, int, Dict[str, Any]]) -> Parameter:
    """Build a Parameter from a YAML value.

    Accepts either a bare number or a mapping such as:
        {value: 0.1, schedule: {type: exponential, rate: 0.99, floor: 0.01}}

    Raises:
        ValueError: If the mapping is malformed or names an unknown schedule
    """
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return Parameter(float(raw))

    if not isinstance(raw, dict) or "value" not in raw:
        raise ValueError(f"Invalid parameter specification: {raw!r}")

    schedule_spec = raw.get("schedule")
    if schedule_spec is None:
        return Parameter(float(raw["value"]))

    schedule_spec = dict(schedule_spec)
    kind = schedule_spec.pop("type", None)
    if kind not in SCHEDULES:
        raise ValueError(
            f"Invalid schedule type '{kind}'. "
            f"Must be one of: {sorted(SCHEDULES)}"
        )

    return Parameter(float(raw["value"]), SCHEDULES[kind](**schedule_spec))
