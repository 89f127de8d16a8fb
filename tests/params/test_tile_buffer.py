"""
Tests for TileBuffer.

A tile buffer has at most one active cell. addto must touch exactly that
cell, and merges require identical shapes and identical active indices.
"""

import operator

import pytest
import torch

from params.buffer import (
    Buffer,
    BufferIndexError,
    BufferShapeError,
    IncompatibleBufferError,
)
from params.dense import DenseBuffer
from params.tile import TileBuffer


class TestTileBufferAddto:
    """addto and scaled_addto semantics."""

    def test_empty_tile_leaves_target_unchanged(self):
        target = torch.arange(5, dtype=torch.float64)
        TileBuffer.zeros(5).addto(target)
        assert target.tolist() == [0.0, 1.0, 2.0, 3.0, 4.0]

    def test_active_tile_adds_only_at_index(self, zeros64):
        target = zeros64(6)
        TileBuffer(6, (3, 2.5)).addto(target)

        expected = zeros64(6)
        expected[3] = 2.5
        assert torch.equal(target, expected)

    def test_scaled_addto(self, zeros64):
        target = torch.ones(4, dtype=torch.float64)
        TileBuffer(4, (1, 2.0)).scaled_addto(0.25, target)
        assert target.tolist() == [1.0, 1.5, 1.0, 1.0]

    def test_multi_dimensional_index(self, zeros64):
        target = zeros64(3, 4)
        TileBuffer((3, 4), ((2, 1), 1.0)).addto(target)
        assert target[2, 1] == 1.0
        assert target.sum() == 1.0

    def test_addto_shape_mismatch_raises(self, zeros64):
        with pytest.raises(BufferShapeError):
            TileBuffer(5, (0, 1.0)).addto(zeros64(4))

    def test_empty_tile_still_checks_shape(self, zeros64):
        with pytest.raises(BufferShapeError):
            TileBuffer.zeros(5).addto(zeros64(4))

    def test_index_out_of_range_rejected(self):
        with pytest.raises(BufferShapeError):
            TileBuffer(5, (5, 1.0))

    def test_zero_dim_tensor_index_accepted(self):
        tile = TileBuffer(5, (torch.tensor(2), 1.0))
        assert tile.active == ((2,), 1.0)

    def test_tensor_multi_index_accepted(self):
        tile = TileBuffer((3, 4), (torch.tensor([2, 1]), 1.0))
        assert tile.active == ((2, 1), 1.0)

    @pytest.mark.parametrize("index", [1.5, torch.tensor(1.0), True, (1, 0.5)])
    def test_non_integer_index_rejected(self, index):
        with pytest.raises(BufferShapeError):
            TileBuffer((5, 5) if isinstance(index, tuple) else 5, (index, 1.0))

    def test_huge_feature_space_is_not_materialized(self):
        tile = TileBuffer(10_000_000, (9_999_999, 1.0))
        assert tile.raw_dim() == torch.Size([10_000_000])
        assert tile.active == ((9_999_999,), 1.0)

    def test_satisfies_buffer_protocol(self):
        assert isinstance(TileBuffer.zeros(3), Buffer)


class TestTileBufferMap:

    def test_map_transforms_active_value(self):
        tile = TileBuffer(4, (2, 3.0))
        assert tile.map(lambda x: x * 2).active == ((2,), 6.0)
        assert tile.active == ((2,), 3.0)

    def test_map_on_empty_tile(self):
        assert TileBuffer.zeros(4).map(lambda x: x + 1) == TileBuffer.zeros(4)

    def test_map_inplace(self):
        tile = TileBuffer(4, (0, -1.0))
        tile.map_inplace(abs)
        assert tile.active == ((0,), 1.0)

    @pytest.mark.parametrize("tile", [
        TileBuffer(8, (3, 1.5)),
        TileBuffer.zeros(8),
    ])
    @pytest.mark.parametrize("f", [lambda x: 2 * x, lambda x: -x, lambda x: x ** 2])
    def test_map_equals_clone_map_into(self, tile, f):
        assert tile.map(f) == tile.clone().map_into(f)


class TestTileBufferMerge:

    def test_merge_same_index(self):
        a = TileBuffer(5, (1, 2.0))
        b = TileBuffer(5, (1, 3.0))
        merged = a.merge(b, operator.add)

        assert merged.active == ((1,), 5.0)
        assert merged.raw_dim() == a.raw_dim()
        assert a.active == ((1,), 2.0)

    def test_merge_inplace(self):
        a = TileBuffer(5, (1, 2.0))
        a.merge_inplace(TileBuffer(5, (1, 3.0)), operator.mul)
        assert a.active == ((1,), 6.0)

    def test_merge_into_returns_self(self):
        a = TileBuffer(5, (1, 2.0))
        assert a.merge_into(TileBuffer(5, (1, 3.0)), operator.add) is a

    def test_merge_different_index_raises(self):
        with pytest.raises(BufferIndexError):
            TileBuffer(5, (1, 1.0)).merge(TileBuffer(5, (2, 1.0)), operator.add)

    def test_merge_with_empty_tile_raises(self):
        with pytest.raises(BufferIndexError):
            TileBuffer(5, (1, 1.0)).merge(TileBuffer.zeros(5), operator.add)

    def test_merge_shape_mismatch_raises(self):
        with pytest.raises(BufferShapeError):
            TileBuffer(5, (1, 1.0)).merge(TileBuffer(6, (1, 1.0)), operator.add)

    def test_merge_with_dense_raises(self):
        with pytest.raises(IncompatibleBufferError):
            TileBuffer(3, (1, 1.0)).merge(DenseBuffer.zeros(3), operator.add)

    def test_failed_merge_keeps_value(self):
        a = TileBuffer(5, (1, 1.0))
        with pytest.raises(BufferIndexError):
            a.merge_inplace(TileBuffer(5, (4, 1.0)), operator.add)
        assert a.active == ((1,), 1.0)


class TestTileBufferDense:

    def test_to_dense(self):
        dense = TileBuffer(4, (2, 0.5)).to_dense()
        assert dense.tolist() == [0.0, 0.0, 0.5, 0.0]
