"""
Feature Projectors Module.

Projectors turn raw domain states into the features consumed by linear
function approximators. Each projector returns either a Dense or a Sparse
projection, or None for states it cannot represent.

All projectors implement the interface:
- dim -> int
- project(state) -> Optional[Projection]

Available projectors:
- TabularProjector: one active cell per integer state
- IdentityProjector: pass-through for states that already are feature vectors
"""

from projectors.base import Dense, Projection, Projector, Sparse
from projectors.tabular import TabularProjector
from projectors.identity import IdentityProjector

__all__ = [
    "Dense",
    "Projection",
    "Projector",
    "Sparse",
    "TabularProjector",
    "IdentityProjector",
]
