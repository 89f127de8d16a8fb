"""
Tile Buffer.

Sparse backing for the buffer algebra: a fixed shape with at most one active
cell. This is the natural buffer for a single tile activation in a very large
feature space; it never materializes the dense array.
"""

import operator
from typing import Optional, Sequence, Tuple, Union

import torch
from torch import Tensor

from params.buffer import (
    BinaryFn,
    BufferIndexError,
    BufferShapeError,
    IncompatibleBufferError,
    UnaryFn,
    as_size,
    check_shape,
)


Index = Union[int, Tuple[int, ...]]


def _normalize_index(index: Index, dim: torch.Size) -> Tuple[int, ...]:
    """Turn an integer or tuple into a full-rank index, checking bounds.

    Scalars and tuple entries must support operator.index (ints, numpy
    integers, integer 0-d tensors); floats and bools are rejected.
    """
    if isinstance(index, Tensor) and index.dim() > 0:
        index = tuple(index.tolist())
    parts = index if isinstance(index, (tuple, list)) else (index,)

    if any(isinstance(i, bool) for i in parts):
        raise BufferShapeError(f"Active index {index!r} is not an integer index")
    try:
        idx = tuple(operator.index(i) for i in parts)
    except TypeError as err:
        raise BufferShapeError(f"Active index {index!r} is not an integer index") from err

    if len(idx) != len(dim) or any(not 0 <= i < d for i, d in zip(idx, dim)):
        raise BufferShapeError(
            f"Active index {idx} lies outside buffer shape {tuple(dim)}"
        )
    return idx


class TileBuffer:
    """Buffer with a shape and at most one active (index, value) cell.

    Attributes:
        dim: Shape of the (virtual) dense array
        active: None, or (index tuple, activation value)
    """

    def __init__(
        self,
        dim: Union[int, Sequence[int], torch.Size],
        active: Optional[Tuple[Index, float]] = None,
    ):
        self.dim = as_size(dim)

        if active is None:
            self.active: Optional[Tuple[Tuple[int, ...], float]] = None
        else:
            index, value = active
            self.active = (_normalize_index(index, self.dim), float(value))

    @classmethod
    def zeros(cls, shape: Union[int, Sequence[int], torch.Size]) -> "TileBuffer":
        """Create a tile buffer with no active cell."""
        return cls(shape, None)

    def raw_dim(self) -> torch.Size:
        return self.dim

    def addto(self, target: Tensor) -> None:
        """Add the active value at its index; no-op when nothing is active."""
        check_shape(self.dim, target.shape)

        if self.active is not None:
            idx, activation = self.active
            target[idx] += activation

    def scaled_addto(self, alpha: float, target: Tensor) -> None:
        check_shape(self.dim, target.shape)

        if self.active is not None:
            idx, activation = self.active
            target[idx] += alpha * activation

    def clone(self) -> "TileBuffer":
        return TileBuffer(self.dim, self.active)

    def map(self, f: UnaryFn) -> "TileBuffer":
        return self.clone().map_into(f)

    def map_into(self, f: UnaryFn) -> "TileBuffer":
        self.map_inplace(f)
        return self

    def map_inplace(self, f: UnaryFn) -> None:
        if self.active is not None:
            idx, x = self.active
            self.active = (idx, float(f(x)))

    def merge(self, other: "TileBuffer", f: BinaryFn) -> "TileBuffer":
        return self.clone().merge_into(other, f)

    def merge_into(self, other: "TileBuffer", f: BinaryFn) -> "TileBuffer":
        self.merge_inplace(other, f)
        return self

    def merge_inplace(self, other: "TileBuffer", f: BinaryFn) -> None:
        """Combine the active cells of two tile buffers with f.

        Both buffers must share a shape and have the same active index.
        Several coexisting active cells belong in a sparse projection, not
        in a merged tile.

        Raises:
            IncompatibleBufferError: If other is not a TileBuffer
            BufferShapeError: If the shapes differ
            BufferIndexError: If either buffer is empty or the indices differ
        """
        if not isinstance(other, TileBuffer):
            raise IncompatibleBufferError(
                f"Cannot merge TileBuffer with {type(other).__name__}"
            )
        check_shape(self.dim, other.dim)

        if self.active is None or other.active is None or self.active[0] != other.active[0]:
            raise BufferIndexError(
                f"Incompatible buffer indices: {self.active} vs {other.active}"
            )

        idx, x = self.active
        self.active = (idx, float(f(x, other.active[1])))

    def to_dense(self) -> Tensor:
        """Materialize as a dense float64 tensor (for inspection only)."""
        out = torch.zeros(self.dim, dtype=torch.float64)
        self.addto(out)
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileBuffer):
            return NotImplemented
        return self.dim == other.dim and self.active == other.active

    __hash__ = None

    def __repr__(self) -> str:
        return f"TileBuffer(dim={tuple(self.dim)}, active={self.active})"
