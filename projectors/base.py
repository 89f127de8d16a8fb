"""
Base Projector Interface.

A projector maps a raw state to its feature representation, a Projection:
- Dense(values): a full feature vector
- Sparse(dim, indices, activations): a handful of active cells in a
  possibly huge feature space

All concrete projectors MUST inherit from Projector and implement:
- dim: size of the feature space
- project(state) -> Optional[Projection]

project() returns None when the state cannot be represented. Callers must
treat that as an explicit absence, never as a zero feature vector.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Union

import torch
from torch import Tensor

from params.buffer import BufferShapeError, check_shape
from params.dense import DenseBuffer
from params.tile import TileBuffer


class Dense:
    """Dense projection: one float64 activation per feature.

    Args:
        values: 1-D feature vector
    """

    def __init__(self, values: Union[Tensor, Sequence[float]]):
        self.values = torch.as_tensor(values, dtype=torch.float64)
        if self.values.dim() != 1:
            raise BufferShapeError(
                f"Dense projection must be 1-D, got shape {tuple(self.values.shape)}"
            )

    @property
    def dim(self) -> int:
        return self.values.shape[0]

    def dot(self, weights: Tensor) -> float:
        check_shape(self.values.shape, weights.shape)
        return float(torch.dot(self.values, weights.to(torch.float64)))

    def addto(self, target: Tensor) -> None:
        check_shape(self.values.shape, target.shape)
        target.add_(self.values)

    def scaled_addto(self, alpha: float, target: Tensor) -> None:
        check_shape(self.values.shape, target.shape)
        target.add_(self.values, alpha=alpha)

    def expanded(self, dim: int) -> DenseBuffer:
        """Return a dense buffer copy of the projection."""
        check_shape(torch.Size((dim,)), self.values.shape)
        return DenseBuffer(self.values)

    def __repr__(self) -> str:
        return f"Dense(dim={self.dim})"


class Sparse:
    """Sparse projection: a set of active feature indices.

    Args:
        dim: Size of the feature space
        indices: Active feature indices (no duplicates expected)
        activations: Optional activation per index (defaults to 1.0 each)
    """

    def __init__(
        self,
        dim: int,
        indices: Union[Tensor, Sequence[int]],
        activations: Optional[Union[Tensor, Sequence[float]]] = None,
    ):
        self._dim = int(dim)
        indices = torch.as_tensor(indices).reshape(-1)
        if indices.numel() and (indices.is_floating_point() or indices.is_complex()
                                or indices.dtype == torch.bool):
            raise BufferShapeError(
                f"Sparse indices must be integers, got dtype {indices.dtype}"
            )
        self.indices = indices.to(torch.long)

        if activations is None:
            self.activations = torch.ones(self.indices.shape[0], dtype=torch.float64)
        else:
            self.activations = torch.as_tensor(activations, dtype=torch.float64).reshape(-1)
            if self.activations.shape != self.indices.shape:
                raise BufferShapeError(
                    f"{self.indices.numel()} indices but {self.activations.numel()} activations"
                )

        if self.indices.numel() and (
            self.indices.min() < 0 or self.indices.max() >= self._dim
        ):
            raise BufferShapeError(
                f"Sparse indices out of range for feature dimension {self._dim}"
            )

    @property
    def dim(self) -> int:
        return self._dim

    def tiles(self) -> List[TileBuffer]:
        """One single-cell tile buffer per active index."""
        return [
            TileBuffer(self._dim, (int(i), float(a)))
            for i, a in zip(self.indices.tolist(), self.activations.tolist())
        ]

    def dot(self, weights: Tensor) -> float:
        check_shape(torch.Size((self._dim,)), weights.shape)
        if not self.indices.numel():
            return 0.0
        active = weights.to(torch.float64)[self.indices]
        return float(torch.dot(active, self.activations))

    def addto(self, target: Tensor) -> None:
        for tile in self.tiles():
            tile.addto(target)

    def scaled_addto(self, alpha: float, target: Tensor) -> None:
        for tile in self.tiles():
            tile.scaled_addto(alpha, target)

    def expanded(self, dim: int) -> DenseBuffer:
        """Materialize as a dense buffer of the requested dimension."""
        if dim != self._dim:
            raise BufferShapeError(
                f"Cannot expand sparse projection of dimension {self._dim} to {dim}"
            )
        out = DenseBuffer.zeros(dim)
        self.addto(out.array)
        return out

    def __repr__(self) -> str:
        return f"Sparse(dim={self._dim}, indices={self.indices.tolist()})"


Projection = Union[Dense, Sparse]


class Projector(ABC):
    """Abstract base class for feature projectors.

    Projectors must be stateless with respect to projection so that a single
    instance can be shared by several predictors.

    Attributes:
        config: Projector-specific configuration
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = config or {}

    @property
    @abstractmethod
    def dim(self) -> int:
        """Size of the feature space produced by project()."""
        pass

    @abstractmethod
    def project(self, state: Any) -> Optional[Projection]:
        """Map a raw state to its projection.

        Args:
            state: Raw state as emitted by a domain

        Returns:
            A Dense or Sparse projection of size dim, or None if the state
            cannot be represented by this projector.
        """
        pass

    def project_expanded(self, state: Any) -> Optional[DenseBuffer]:
        """Project a state straight into a dense buffer of size dim."""
        phi = self.project(state)
        if phi is None:
            return None
        return phi.expanded(self.dim)
