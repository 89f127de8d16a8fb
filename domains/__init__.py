"""Domains module: observation/transition types and episodic environments."""

from domains.base import (
    Domain,
    EpisodeFinishedError,
    Full,
    Observation,
    Partial,
    Terminal,
    Transition,
)
from domains.random_walk import RandomWalk

__all__ = [
    "Domain",
    "EpisodeFinishedError",
    "Full",
    "Observation",
    "Partial",
    "Terminal",
    "Transition",
    "RandomWalk",
]
