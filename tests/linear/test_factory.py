"""
Tests for NDArrayFactory.

Validates:
    - Variant lookup and the four module constants
    - Every constructor, across all variants
    - Shape arguments as ints, tuples or Shapes
    - wrap() adopts dense buffers; from_array() copies
    - Seeded random construction is reproducible
"""

import numpy as np
import pytest

from pyndarray.core.exceptions import DimensionMismatchError, InvalidArgumentError
from pyndarray.linear import (
    DENSE_DOUBLE,
    DENSE_FLOAT,
    SPARSE_DOUBLE,
    SPARSE_FLOAT,
    NDArrayFactory,
    Precision,
    Shape,
    StorageKind,
)


# ═══════════════════════════════════════════════════════════════════════
# Variants
# ═══════════════════════════════════════════════════════════════════════


class TestVariants:

    @pytest.mark.parametrize("storage, precision, expected", [
        (StorageKind.DENSE, Precision.DOUBLE, DENSE_DOUBLE),
        (StorageKind.DENSE, Precision.FLOAT, DENSE_FLOAT),
        (StorageKind.SPARSE, Precision.DOUBLE, SPARSE_DOUBLE),
        (StorageKind.SPARSE, Precision.FLOAT, SPARSE_FLOAT),
    ])
    def test_for_variant(self, storage, precision, expected):
        assert NDArrayFactory.for_variant(storage, precision) is expected

    def test_for_variant_by_value(self):
        assert NDArrayFactory.for_variant('sparse', 'float') is SPARSE_FLOAT

    def test_unknown_variant(self):
        with pytest.raises(ValueError):
            NDArrayFactory.for_variant('banded', 'double')

    def test_created_arrays_match(self, factory):
        a = factory.zeros(2, 2)
        assert a.storage_kind is factory.storage
        assert a.precision is factory.precision


# ═══════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════


class TestConstructors:

    def test_shape_forms(self, factory):
        assert factory.zeros(2, 3).shape == Shape(2, 3)
        assert factory.zeros((2, 3)).shape == Shape(2, 3)
        assert factory.zeros(Shape(2, 3)).shape == Shape(2, 3)

    @pytest.mark.parametrize("rows, cols", [(0, 3), (3, -1)])
    def test_non_positive_dimensions(self, factory, rows, cols):
        with pytest.raises(InvalidArgumentError):
            factory.zeros(rows, cols)

    def test_zeros_ones(self, factory):
        assert factory.zeros(3, 3).sum() == 0.0
        assert factory.ones(3, 3).sum() == 9.0

    def test_from_array(self, factory):
        a = factory.from_array([1, 2, 3, 4, 5, 6], 2, 3)
        assert a.get((1, 0)) == 2.0
        assert a.get((0, 1)) == 3.0

    def test_from_array_wrong_length(self, factory):
        with pytest.raises(DimensionMismatchError):
            factory.from_array([1, 2, 3], 2, 2)

    def test_from_array_roundtrip(self, factory, m1):
        assert factory.from_array(m1.to_array(), m1.shape) == m1

    def test_from_array_copies(self, factory):
        values = np.array([1.0, 2.0], dtype=factory.dtype)
        a = factory.from_array(values, 1, 2)
        values[0] = 99.0
        assert a.get(0) == 1.0

    def test_from_2d_array(self, factory):
        a = factory.from_2d_array([[1, 2, 3], [4, 5, 6]])
        assert a.shape == Shape(2, 3)
        assert a.get((1, 2)) == 6.0
        np.testing.assert_array_equal(a.to_array(), [1, 4, 2, 5, 3, 6])

    def test_from_2d_array_rejects_1d(self, factory):
        with pytest.raises(DimensionMismatchError):
            factory.from_2d_array([1, 2, 3])

    def test_from_2d_array_rejects_empty(self, factory):
        with pytest.raises(InvalidArgumentError):
            factory.from_2d_array(np.zeros((0, 3)))

    def test_non_numeric(self, factory):
        with pytest.raises(InvalidArgumentError):
            factory.from_array(["a", "b"], 1, 2)

    def test_scalar(self, factory):
        s = factory.scalar(3.5)
        assert s.is_scalar
        assert s.get(0) == 3.5

    def test_eye(self, factory):
        eye = factory.eye(3)
        np.testing.assert_array_equal(eye.to_2d_array(), np.eye(3))
        with pytest.raises(InvalidArgumentError):
            factory.eye(0)

    def test_vectors(self, factory):
        row = factory.row_vector([1, 2, 3])
        column = factory.column_vector([1, 2, 3])
        assert row.shape == Shape(1, 3)
        assert column.shape == Shape(3, 1)
        assert row.T == column

    def test_empty_vector_rejected(self, factory):
        with pytest.raises(InvalidArgumentError):
            factory.row_vector([])


# ═══════════════════════════════════════════════════════════════════════
# wrap
# ═══════════════════════════════════════════════════════════════════════


class TestWrap:

    def test_dense_adopts_buffer(self):
        buffer = np.arange(6, dtype=np.float64)
        a = DENSE_DOUBLE.wrap(buffer, 2, 3)
        buffer[0] = 42.0
        assert a.get(0) == 42.0
        a.set(1, -1.0)
        assert buffer[1] == -1.0

    def test_dense_float_adopts_float32_buffer(self):
        buffer = np.ones(4, dtype=np.float32)
        a = DENSE_FLOAT.wrap(buffer, (2, 2))
        buffer[3] = 5.0
        assert a.get(3) == 5.0

    def test_dtype_mismatch_copies(self):
        buffer = np.arange(4, dtype=np.float64)
        a = DENSE_FLOAT.wrap(buffer, 2, 2)
        buffer[0] = 42.0
        assert a.get(0) == 0.0

    def test_sparse_builds_own_storage(self):
        buffer = np.array([0.0, 1.0, 0.0, 2.0])
        a = SPARSE_DOUBLE.wrap(buffer, 2, 2)
        assert a.size() == 2
        buffer[0] = 42.0
        assert a.get(0) == 0.0

    def test_wrong_length(self):
        with pytest.raises(DimensionMismatchError):
            DENSE_DOUBLE.wrap(np.zeros(5), 2, 2)


# ═══════════════════════════════════════════════════════════════════════
# Random construction
# ═══════════════════════════════════════════════════════════════════════


class TestRandom:

    def test_rand_range(self, factory):
        a = factory.rand(20, 20, rng=0)
        values = a.to_array()
        assert values.min() >= 0.0
        assert values.max() < 1.0

    def test_seed_reproducible(self, factory):
        assert factory.rand(5, 5, rng=7) == factory.rand(5, 5, rng=7)
        assert factory.randn(5, 5, rng=7) == factory.randn(5, 5, rng=7)

    def test_generator_accepted(self, factory, rng):
        a = factory.randn(50, 50, rng=rng)
        assert abs(a.mean()) < 0.1

    def test_storage_kinds_agree(self):
        assert DENSE_DOUBLE.rand(4, 4, rng=3) == SPARSE_DOUBLE.rand(4, 4, rng=3)
