"""
Buffer Algebra Module.

Generic additive accumulators over a fixed shape. Weight vectors, eligibility
traces and feature activations all flow through the same operations whether
they are dense arrays or a single active tile in a huge feature space.

Available buffers:
- DenseBuffer: full float64 tensor
- TileBuffer: at most one active (index, value) cell
"""

from params.buffer import (
    Buffer,
    BufferIndexError,
    BufferShapeError,
    IncompatibleBufferError,
)
from params.dense import DenseBuffer
from params.tile import TileBuffer

__all__ = [
    "Buffer",
    "BufferIndexError",
    "BufferShapeError",
    "IncompatibleBufferError",
    "DenseBuffer",
    "TileBuffer",
]
