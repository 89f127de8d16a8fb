"""
Buffer Capability Interface.

A buffer is a fixed-shape additive accumulator. Two backings exist:
- DenseBuffer: a full float64 tensor
- TileBuffer: a shape plus at most one active (index, value) cell

Both expose the same algebra:
- raw_dim() -> torch.Size
- addto(target) / scaled_addto(alpha, target)
- zeros(shape)
- map / map_into / map_inplace
- merge / merge_into / merge_inplace

Shape and index mismatches are programming errors and raise immediately.
"""

from typing import Any, Callable, Protocol, Sequence, Type, TypeVar, Union, runtime_checkable

import torch
from torch import Tensor


B = TypeVar("B", bound="Buffer")

UnaryFn = Callable[[Any], Any]
BinaryFn = Callable[[Any, Any], Any]


class IncompatibleBufferError(Exception):
    """Base class for buffer algebra misuse."""
    pass


class BufferShapeError(IncompatibleBufferError):
    """Raised when two buffers (or a buffer and a target) differ in shape."""
    pass


class BufferIndexError(IncompatibleBufferError):
    """Raised when two tile buffers are merged with different active cells."""
    pass


@runtime_checkable
class Buffer(Protocol):
    """Capability interface shared by DenseBuffer and TileBuffer."""

    @classmethod
    def zeros(cls: Type[B], shape: Union[int, Sequence[int], torch.Size]) -> B: ...

    def raw_dim(self) -> torch.Size: ...

    def addto(self, target: Tensor) -> None: ...

    def scaled_addto(self, alpha: float, target: Tensor) -> None: ...

    def map(self: B, f: UnaryFn) -> B: ...

    def map_into(self: B, f: UnaryFn) -> B: ...

    def map_inplace(self, f: UnaryFn) -> None: ...

    def merge(self: B, other: B, f: BinaryFn) -> B: ...

    def merge_into(self: B, other: B, f: BinaryFn) -> B: ...

    def merge_inplace(self: B, other: B, f: BinaryFn) -> None: ...


def as_size(shape: Union[int, Sequence[int], torch.Size]) -> torch.Size:
    """Normalize an int or sequence of ints into a torch.Size."""
    if isinstance(shape, int):
        return torch.Size((shape,))
    return torch.Size(shape)


def check_shape(expected: torch.Size, actual: torch.Size) -> None:
    """Raise BufferShapeError unless the two shapes are identical."""
    if expected != actual:
        raise BufferShapeError(
            f"Incompatible buffer shapes: {tuple(expected)} vs {tuple(actual)}"
        )
