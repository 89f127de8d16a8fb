"""
Dense Buffer.

Full-array backing for the buffer algebra. Used for weight vectors and
eligibility traces, and for any projection that has to be materialized.

Unary and binary functions passed to map/merge are applied to whole tensors,
so they must act elementwise (operator.add, torch.maximum, lambda x: 2 * x).
"""

from typing import Sequence, Union

import torch
from torch import Tensor

from params.buffer import (
    BinaryFn,
    IncompatibleBufferError,
    UnaryFn,
    as_size,
    check_shape,
)


class DenseBuffer:
    """Additive accumulator backed by a float64 tensor.

    The constructor copies its input, so a buffer never aliases a tensor
    owned by someone else.

    Attributes:
        array: The underlying tensor. Only the owner of the buffer should
               mutate it, and only through the buffer operations.
    """

    def __init__(self, array: Union[Tensor, Sequence[float]]):
        self.array = torch.as_tensor(array, dtype=torch.float64).clone()

    @classmethod
    def zeros(cls, shape: Union[int, Sequence[int], torch.Size]) -> "DenseBuffer":
        """Create an all-zero buffer of the given shape."""
        return cls(torch.zeros(as_size(shape), dtype=torch.float64))

    def raw_dim(self) -> torch.Size:
        return self.array.shape

    def addto(self, target: Tensor) -> None:
        """Add the buffer content elementwise into target."""
        check_shape(self.raw_dim(), target.shape)
        target.add_(self.array)

    def scaled_addto(self, alpha: float, target: Tensor) -> None:
        """Add alpha times the buffer content elementwise into target."""
        check_shape(self.raw_dim(), target.shape)
        target.add_(self.array, alpha=alpha)

    def clone(self) -> "DenseBuffer":
        return DenseBuffer(self.array)

    def map(self, f: UnaryFn) -> "DenseBuffer":
        return self.clone().map_into(f)

    def map_into(self, f: UnaryFn) -> "DenseBuffer":
        self.map_inplace(f)
        return self

    def map_inplace(self, f: UnaryFn) -> None:
        self.array.copy_(self._conform(f(self.array)))

    def merge(self, other: "DenseBuffer", f: BinaryFn) -> "DenseBuffer":
        return self.clone().merge_into(other, f)

    def merge_into(self, other: "DenseBuffer", f: BinaryFn) -> "DenseBuffer":
        self.merge_inplace(other, f)
        return self

    def merge_inplace(self, other: "DenseBuffer", f: BinaryFn) -> None:
        """Combine other into this buffer elementwise with f.

        Raises:
            IncompatibleBufferError: If other is not a DenseBuffer
            BufferShapeError: If the shapes differ
        """
        if not isinstance(other, DenseBuffer):
            raise IncompatibleBufferError(
                f"Cannot merge DenseBuffer with {type(other).__name__}"
            )
        check_shape(self.raw_dim(), other.raw_dim())

        self.array.copy_(self._conform(f(self.array, other.array)))

    def _conform(self, result) -> Tensor:
        """Bring the output of a user function back to this buffer's shape.

        Scalar results broadcast; anything else must already match.
        """
        result = torch.as_tensor(result, dtype=torch.float64)
        if result.dim() == 0:
            return result.expand(self.raw_dim())
        check_shape(self.raw_dim(), result.shape)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DenseBuffer):
            return NotImplemented
        return self.raw_dim() == other.raw_dim() and torch.equal(self.array, other.array)

    __hash__ = None

    def __repr__(self) -> str:
        return f"DenseBuffer(shape={tuple(self.raw_dim())})"
